"""
Service exposing variant generation and the variant matrix to views,
admin actions and scripts.
Every matrix is rebuilt from the current Variant rows; nothing is cached.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from apps.variants.conf import get_setting
from apps.variants.engine import (
    Axis,
    GenerationOptions,
    GenerationResult,
    ParentItem,
    PriceAdjustment,
    PricingConfig,
    SkuConfig,
    VariantRecord,
    bulk_adjust_inventory,
    bulk_adjust_price,
    generate,
    preview,
    reconstruct,
    update_cell,
)
from apps.variants.engine.matrix import MatrixView
from apps.variants.models import PriceHistory, Product

from .repository import DjangoVariantRepository
from .templates import TemplateAxisProvider


logger = logging.getLogger(__name__)


class VariantEngineService:
    """
    Django-facing entry points of the variant engine.
    """

    @staticmethod
    def parent_item(product: Product) -> ParentItem:
        return ParentItem(
            id=product.pk,
            sku=product.sku,
            name=product.name,
            base_price=product.price,
            fields=product.get_inheritable_fields(),
        )

    @staticmethod
    def default_options(**overrides) -> GenerationOptions:
        """GenerationOptions with the project's configured defaults."""
        values = {
            'max_combinations': get_setting('MAX_COMBINATIONS'),
            'initial_status': get_setting('DEFAULT_STATUS'),
        }
        values.update(overrides)
        return GenerationOptions(**values)

    @staticmethod
    def default_sku_config(**overrides) -> SkuConfig:
        values = {
            'pattern': get_setting('DEFAULT_SKU_PATTERN'),
            'name_pattern': get_setting('DEFAULT_NAME_PATTERN'),
        }
        values.update(overrides)
        return SkuConfig(**values)

    @staticmethod
    def generate_variants(
        product: Product,
        axes: Sequence[Axis],
        pricing: Optional[PricingConfig] = None,
        sku: Optional[SkuConfig] = None,
        options: Optional[GenerationOptions] = None,
        template_ids: Iterable = (),
    ) -> GenerationResult:
        """
        Create the variants for every combination of `axes` that does not
        exist yet.

        Raises ValidationError / CombinatorialExplosionWarning before any
        variant is written. Individual create failures are reported in the
        result instead of raised. `template_ids` are the templates the axes
        came from; their usage is counted once something was created.
        """
        result = generate(
            DjangoVariantRepository(),
            VariantEngineService.parent_item(product),
            axes,
            pricing or PricingConfig(),
            sku or VariantEngineService.default_sku_config(),
            options or VariantEngineService.default_options(),
        )
        if result.created_count or result.skipped_count:
            product.remember_axes([axis.name for axis in axes])
        if result.created_count:
            TemplateAxisProvider().record_usage(template_ids)
        return result

    @staticmethod
    def preview_variants(product, axes, pricing=None, sku=None, options=None) -> Dict:
        return preview(
            VariantEngineService.parent_item(product),
            axes,
            pricing or PricingConfig(),
            sku or VariantEngineService.default_sku_config(),
            options or VariantEngineService.default_options(),
        )

    @staticmethod
    def get_matrix(product: Product) -> MatrixView:
        """Matrix (or flat list) of the product's current variants."""
        variants = DjangoVariantRepository().list_by_parent(product.pk)
        return reconstruct(variants, axis_order=product.variant_axes)

    @staticmethod
    def update_cell(variant_id, field: str, value, user=None) -> VariantRecord:
        repository = DjangoVariantRepository(source=PriceHistory.SOURCE_MATRIX, user=user)
        return update_cell(repository, variant_id, field, value)

    @staticmethod
    def bulk_adjust_price(
        variant_ids: Iterable,
        adjustment: PriceAdjustment,
        user=None,
    ) -> List[VariantRecord]:
        repository = DjangoVariantRepository(source=PriceHistory.SOURCE_BULK, user=user)
        return bulk_adjust_price(repository, variant_ids, adjustment)

    @staticmethod
    def bulk_adjust_inventory(variant_ids: Iterable, operation: str, value) -> List[VariantRecord]:
        return bulk_adjust_inventory(DjangoVariantRepository(), variant_ids, operation, value)

    @staticmethod
    def axes_from_templates(selections: Iterable[Dict]) -> List[Axis]:
        """
        Build axes from variant templates.

        selections: [{'template_id': 1, 'values': ['S', 'M'], 'with_pricing': True}]
        `values` restricts the template to a subset; omitted means all values.
        """
        provider = TemplateAxisProvider()
        return [
            provider.get_axis(
                selection['template_id'],
                selection.get('values'),
                selection.get('with_pricing', True),
            )
            for selection in selections
        ]
