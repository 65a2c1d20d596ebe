from .repository import DjangoVariantRepository
from .templates import TemplateAxisProvider
from .variant_engine import VariantEngineService

__all__ = [
    'DjangoVariantRepository',
    'TemplateAxisProvider',
    'VariantEngineService',
]
