from .serializers import (
    ProductSerializer,
    ProductListSerializer,
    VariantSerializer,
    VariantListSerializer,
    PriceHistorySerializer,
    VariantTemplateSerializer,
    GenerateVariantsSerializer,
    MatrixViewSerializer,
)

__all__ = [
    'ProductSerializer',
    'ProductListSerializer',
    'VariantSerializer',
    'VariantListSerializer',
    'PriceHistorySerializer',
    'VariantTemplateSerializer',
    'GenerateVariantsSerializer',
    'MatrixViewSerializer',
]
