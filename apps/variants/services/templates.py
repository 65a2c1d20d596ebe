from typing import Iterable, List

from django.db.models import F

from apps.variants.engine import AxisCatalogProvider, AxisTemplate, ValidationError
from apps.variants.engine.axes import ADJUSTMENT_FIXED, ADJUSTMENT_PERCENTAGE
from apps.variants.models import VariantTemplate


class TemplateAxisProvider(AxisCatalogProvider):
    """Axis catalog backed by VariantTemplate rows."""

    @staticmethod
    def to_template(template: VariantTemplate) -> AxisTemplate:
        pricing = template.suggested_pricing
        adjustment_type = ADJUSTMENT_FIXED
        if pricing.get('strategy') == ADJUSTMENT_PERCENTAGE:
            adjustment_type = ADJUSTMENT_PERCENTAGE
        return AxisTemplate(
            id=template.pk,
            name=template.name,
            axis_name=template.axis_name,
            values=list(template.values or []),
            suggested_adjustments=dict(pricing.get('adjustments') or {}),
            adjustment_type=adjustment_type,
        )

    def list_templates(self) -> List[AxisTemplate]:
        return [
            self.to_template(t)
            for t in VariantTemplate.objects.filter(is_active=True)
        ]

    def get_template(self, template_id) -> AxisTemplate:
        try:
            template = VariantTemplate.objects.get(pk=template_id, is_active=True)
        except VariantTemplate.DoesNotExist:
            raise ValidationError(f"Variant template {template_id} not found")
        return self.to_template(template)

    def record_usage(self, template_ids: Iterable) -> None:
        """Count one use for each template that fed a persisted generation."""
        ids = set(template_ids)
        if ids:
            VariantTemplate.objects.filter(pk__in=ids).update(usage_count=F('usage_count') + 1)
