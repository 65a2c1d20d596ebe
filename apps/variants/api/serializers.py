from rest_framework import serializers

from apps.variants.conf import get_setting
from apps.variants.engine import (
    Axis,
    AxisValue,
    PriceAdjustment,
    PricingConfig,
    custom_sku_map,
)
from apps.variants.engine.axes import AXIS_ADJUSTMENT_TYPES
from apps.variants.engine.identifiers import SKU_CUSTOM, SKU_STRATEGIES
from apps.variants.engine.matrix import LAYOUT_GROUPED, LAYOUT_LINEAR, MATRIX
from apps.variants.engine.mutations import CELL_FIELDS, INVENTORY_OPERATIONS
from apps.variants.engine.pricing import (
    PERCENTAGE_INCREMENTAL,
    PERCENTAGE_MODES,
    PRICE_ADJUSTMENT_TYPES,
    PRICING_FIXED,
    PRICING_STRATEGIES,
)
from apps.variants.models import Product, Variant, PriceHistory, VariantTemplate
from apps.variants.services import VariantEngineService


# =============================================================================
# Model Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Base product serializer."""
    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'price', 'description', 'brand',
            'manufacturer', 'meta_title', 'meta_description', 'is_active',
            'variant_axes', 'created_at', 'updated_at'
        ]
        read_only_fields = ['variant_axes']


class ProductListSerializer(serializers.ModelSerializer):
    """Product list with counts."""
    variant_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'slug', 'sku', 'price', 'is_active', 'variant_count']


class VariantSerializer(serializers.ModelSerializer):
    """Base variant serializer."""
    class Meta:
        model = Variant
        fields = [
            'id', 'product', 'sku', 'name', 'price', 'cost_price',
            'stock_quantity', 'track_inventory', 'low_stock_threshold',
            'status', 'description', 'brand', 'manufacturer',
            'meta_title', 'meta_description', 'attributes', 'axis_values',
            'created_at', 'updated_at'
        ]


class VariantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for variant lists."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    is_in_stock = serializers.BooleanField(read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'sku', 'name', 'product', 'product_name', 'price',
            'stock_quantity', 'status', 'is_in_stock', 'is_low_stock',
            'axis_values'
        ]


class PriceHistorySerializer(serializers.ModelSerializer):
    variant_sku = serializers.CharField(source='variant.sku', read_only=True)
    changed_by_username = serializers.CharField(
        source='changed_by.username', read_only=True, default=None
    )
    price_difference = serializers.DecimalField(
        max_digits=10, decimal_places=2, read_only=True
    )
    percentage_change = serializers.FloatField(read_only=True)

    class Meta:
        model = PriceHistory
        fields = [
            'id', 'variant', 'variant_sku', 'change_type', 'source',
            'old_price', 'new_price', 'price_difference', 'percentage_change',
            'changed_by', 'changed_by_username', 'changed_at'
        ]


class VariantTemplateSerializer(serializers.ModelSerializer):
    values = serializers.ListField(
        child=serializers.CharField(max_length=100), allow_empty=False
    )

    class Meta:
        model = VariantTemplate
        fields = [
            'id', 'name', 'description', 'axis_name', 'values', 'metadata',
            'is_global', 'is_active', 'usage_count', 'display_order',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['usage_count']

    def validate_values(self, values):
        if len(set(values)) != len(values):
            raise serializers.ValidationError('Template values must be unique.')
        return values


# =============================================================================
# Generation Request Serializers
# =============================================================================

class AxisValueSerializer(serializers.Serializer):
    value = serializers.CharField(max_length=100)
    price_adjustment = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    adjustment_type = serializers.ChoiceField(
        choices=AXIS_ADJUSTMENT_TYPES, default='fixed'
    )


class AxisSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    values = AxisValueSerializer(many=True)


class TemplateSelectionSerializer(serializers.Serializer):
    template_id = serializers.IntegerField()
    values = serializers.ListField(child=serializers.CharField(), required=False)
    with_pricing = serializers.BooleanField(default=True)


class PricingConfigSerializer(serializers.Serializer):
    strategy = serializers.ChoiceField(choices=PRICING_STRATEGIES, default=PRICING_FIXED)
    base_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    percentage = serializers.DecimalField(max_digits=7, decimal_places=2, default=0)
    percentage_mode = serializers.ChoiceField(
        choices=PERCENTAGE_MODES, default=PERCENTAGE_INCREMENTAL
    )
    custom_prices = serializers.DictField(
        child=serializers.DecimalField(max_digits=10, decimal_places=2), required=False
    )


class SkuConfigSerializer(serializers.Serializer):
    strategy = serializers.ChoiceField(choices=SKU_STRATEGIES, default='pattern')
    pattern = serializers.CharField(required=False)
    name_pattern = serializers.CharField(required=False)
    custom_skus = serializers.DictField(child=serializers.CharField(), required=False)

    def validate(self, data):
        if data.get('strategy') == SKU_CUSTOM and not data.get('custom_skus'):
            raise serializers.ValidationError(
                {'custom_skus': 'Required for the custom SKU strategy.'}
            )
        return data


class GenerateVariantsSerializer(serializers.Serializer):
    """
    Payload for generating variants of a product.

    Expected payload:
    {
        "axes": [
            {"name": "Size", "values": [{"value": "S"}, {"value": "L", "price_adjustment": 20}]},
            {"name": "Color", "values": [{"value": "Red", "price_adjustment": 10,
                                          "adjustment_type": "percentage"}]}
        ],
        "templates": [{"template_id": 3, "values": ["128GB", "256GB"]}],
        "pricing": {"strategy": "axis_based"},
        "sku": {"strategy": "pattern", "pattern": "{parent}-{axes}"},
        "skip_existing": true,
        "inherit_fields": ["description", "brand"]
    }
    """
    axes = AxisSerializer(many=True, required=False)
    templates = TemplateSelectionSerializer(many=True, required=False)
    pricing = PricingConfigSerializer(required=False)
    sku = SkuConfigSerializer(required=False)

    skip_existing = serializers.BooleanField(default=True)
    inherit_fields = serializers.ListField(
        child=serializers.ChoiceField(choices=Product.INHERITABLE_FIELDS), required=False
    )
    default_attributes = serializers.DictField(required=False)
    initial_status = serializers.ChoiceField(choices=Variant.STATUS_CHOICES, required=False)
    default_quantity = serializers.IntegerField(min_value=0, default=0)
    custom_quantities = serializers.DictField(
        child=serializers.IntegerField(min_value=0), required=False
    )
    track_inventory = serializers.BooleanField(default=True)
    low_stock_threshold = serializers.IntegerField(min_value=0, required=False)
    confirm_large = serializers.BooleanField(default=False)
    preview = serializers.BooleanField(default=False)

    def validate(self, data):
        if not data.get('axes') and not data.get('templates'):
            raise serializers.ValidationError('Provide at least one axis or template.')
        return data

    def build_axes(self):
        """Axes in payload order: explicit axes first, then template axes."""
        axes = [
            Axis(item['name'], tuple(
                AxisValue(v['value'], v.get('price_adjustment'), v['adjustment_type'])
                for v in item['values']
            ))
            for item in self.validated_data.get('axes', [])
        ]
        templates = self.validated_data.get('templates')
        if templates:
            axes.extend(VariantEngineService.axes_from_templates(templates))
        return axes

    def template_ids(self):
        return [t['template_id'] for t in self.validated_data.get('templates') or []]

    def build_pricing(self):
        data = dict(self.validated_data.get('pricing') or {})
        return PricingConfig(**data)

    def build_sku(self):
        data = dict(self.validated_data.get('sku') or {})
        custom_skus = data.pop('custom_skus', None)
        if data.get('strategy') == SKU_CUSTOM:
            # Combinations missing from the map fall back to the SKU pattern
            pattern = data.get('pattern') or get_setting('DEFAULT_SKU_PATTERN')
            data['custom'] = custom_sku_map(custom_skus, pattern)
        return VariantEngineService.default_sku_config(**data)

    def build_options(self):
        data = self.validated_data
        overrides = {
            'skip_existing': data['skip_existing'],
            'inherit_fields': tuple(data.get('inherit_fields') or ()),
            'default_attributes': data.get('default_attributes') or {},
            'default_quantity': data['default_quantity'],
            'custom_quantities': data.get('custom_quantities') or {},
            'track_inventory': data['track_inventory'],
            'low_stock_threshold': data.get('low_stock_threshold'),
            'confirm_large': data['confirm_large'],
        }
        if data.get('initial_status'):
            overrides['initial_status'] = data['initial_status']
        return VariantEngineService.default_options(**overrides)


class UpdateCellSerializer(serializers.Serializer):
    field = serializers.ChoiceField(choices=CELL_FIELDS)
    # Validated by the engine according to `field`
    value = serializers.JSONField()


class BulkPriceAdjustmentSerializer(serializers.Serializer):
    variant_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    type = serializers.ChoiceField(choices=PRICE_ADJUSTMENT_TYPES)
    value = serializers.DecimalField(max_digits=10, decimal_places=2)

    def build_adjustment(self):
        return PriceAdjustment(self.validated_data['type'], self.validated_data['value'])


class BulkInventoryAdjustmentSerializer(serializers.Serializer):
    variant_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    operation = serializers.ChoiceField(choices=INVENTORY_OPERATIONS)
    value = serializers.IntegerField()


# =============================================================================
# Engine Result Serializers
# =============================================================================

class VariantRecordSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    sku = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    status = serializers.CharField()
    axis_values = serializers.DictField(allow_null=True)


class CombinationOutcomeSerializer(serializers.Serializer):
    combination = serializers.SerializerMethodField()
    status = serializers.CharField()
    variant_id = serializers.SerializerMethodField()
    reason = serializers.CharField()

    def get_combination(self, obj):
        return obj.combination.as_dict()

    def get_variant_id(self, obj):
        return obj.variant.id if obj.variant else None


class GenerationResultSerializer(serializers.Serializer):
    created_count = serializers.IntegerField()
    skipped_count = serializers.IntegerField()
    failed_count = serializers.IntegerField()
    created = VariantRecordSerializer(many=True)
    skipped = serializers.SerializerMethodField()
    failed = CombinationOutcomeSerializer(many=True)
    outcomes = CombinationOutcomeSerializer(many=True)

    def get_skipped(self, obj):
        return [c.as_dict() for c in obj.skipped]


class GeneratedRequestSerializer(serializers.Serializer):
    combination = serializers.SerializerMethodField()
    sku = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()

    def get_combination(self, obj):
        return obj.combination.as_dict()


class MatrixCellSerializer(serializers.Serializer):
    combination = serializers.DictField()
    variant_id = serializers.IntegerField(allow_null=True)
    sku = serializers.CharField(allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    quantity = serializers.IntegerField(allow_null=True)
    status = serializers.CharField(allow_null=True)
    is_missing = serializers.BooleanField()


class MatrixSummarySerializer(serializers.Serializer):
    total_combinations = serializers.IntegerField()
    created_count = serializers.IntegerField()
    missing_count = serializers.IntegerField()


class MatrixStatisticsSerializer(serializers.Serializer):
    average_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    total_stock = serializers.IntegerField()
    out_of_stock = serializers.IntegerField()


class MatrixViewSerializer(serializers.Serializer):
    """Serializes either a Matrix or a FlatList; `kind` tells them apart."""
    kind = serializers.CharField()
    axes = serializers.ListField(child=serializers.CharField())
    axis_values = serializers.SerializerMethodField()
    cells = MatrixCellSerializer(many=True)
    layout = serializers.SerializerMethodField()
    summary = MatrixSummarySerializer()
    statistics = MatrixStatisticsSerializer()
    unplaced = serializers.SerializerMethodField()

    def get_axis_values(self, obj):
        if obj.kind != MATRIX:
            return {obj.axis: [c.combination[obj.axis] for c in obj.cells]}
        return {axis: list(values) for axis, values in obj.axis_values.items()}

    def get_unplaced(self, obj):
        return [v.id for v in getattr(obj, 'unplaced', ())]

    def get_layout(self, obj):
        if obj.kind != MATRIX:
            return {
                'kind': LAYOUT_LINEAR,
                'axis': obj.axis,
                'cells': [c.variant_id for c in obj.cells],
            }
        layout = obj.layout
        if layout.kind == LAYOUT_LINEAR:
            return {
                'kind': layout.kind,
                'axis': layout.axis,
                'cells': [c.variant_id for c in layout.cells],
            }
        if layout.kind == LAYOUT_GROUPED:
            return {
                'kind': layout.kind,
                'group_axes': list(layout.group_axes),
                'groups': [
                    {'label': dict(g.label), 'title': g.title, 'table': self._table(g.table)}
                    for g in layout.groups
                ],
            }
        return self._table(layout)

    def _table(self, table):
        return {
            'kind': table.kind,
            'row_axis': table.row_axis,
            'column_axis': table.column_axis,
            'row_values': list(table.row_values),
            'column_values': list(table.column_values),
            'rows': [
                [cell.variant_id for cell in row]
                for row in table.rows
            ],
        }
