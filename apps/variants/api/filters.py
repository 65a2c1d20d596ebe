from django.db import models as db_models
from django_filters import rest_framework as filters
from apps.variants.models import Variant, PriceHistory


class VariantFilter(filters.FilterSet):
    """Filter for variants with support for axis values."""

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')

    # Price filters
    min_price = filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='price', lookup_expr='lte')

    # Stock filters
    in_stock = filters.BooleanFilter(method='filter_in_stock')
    low_stock = filters.BooleanFilter(method='filter_low_stock')

    # Axis filters
    axis = filters.CharFilter(method='filter_by_axis')
    has_axis_values = filters.BooleanFilter(field_name='axis_values', lookup_expr='isnull', exclude=True)

    class Meta:
        model = Variant
        fields = ['product', 'product_id', 'status', 'sku']

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(
                db_models.Q(stock_quantity__gt=0) | db_models.Q(track_inventory=False)
            )
        elif value is False:
            return queryset.filter(stock_quantity__lte=0, track_inventory=True)
        return queryset

    def filter_low_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(
                stock_quantity__gt=0,
                stock_quantity__lte=db_models.F('low_stock_threshold'),
                track_inventory=True
            )
        return queryset

    def filter_by_axis(self, queryset, name, value):
        """
        Filter by axis value in format: axis_name:value
        Example: ?axis=Color:Red
        """
        if ':' not in value:
            return queryset

        axis_name, axis_value = value.split(':', 1)
        if not axis_name or '__' in axis_name:
            return queryset.none()
        return queryset.filter(**{f'axis_values__{axis_name}': axis_value})


class PriceHistoryFilter(filters.FilterSet):
    product = filters.CharFilter(field_name='variant__product__slug')

    class Meta:
        model = PriceHistory
        fields = ['variant', 'change_type', 'source', 'product']
