from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget, JSONWidget
from simple_history.admin import SimpleHistoryAdmin

from .engine import PriceAdjustment, VariantEngineError
from .engine.mutations import INVENTORY_SET
from .engine.pricing import ADJUSTMENT_PERCENTAGE
from .models import Product, Variant, PriceHistory, VariantTemplate
from .services import VariantEngineService


# =============================================================================
# Import/Export Resources
# =============================================================================

class VariantResource(resources.ModelResource):
    """Resource for importing/exporting variants, matched by SKU."""

    product_sku = fields.Field(
        column_name='product_sku',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'sku')
    )
    axis_values = fields.Field(
        column_name='axis_values',
        attribute='axis_values',
        widget=JSONWidget()
    )

    class Meta:
        model = Variant
        import_id_fields = ['sku']
        fields = (
            'sku', 'product_sku', 'name', 'axis_values', 'cost_price', 'price',
            'stock_quantity', 'track_inventory', 'status'
        )
        export_order = fields


class VariantTemplateResource(resources.ModelResource):
    values = fields.Field(column_name='values', attribute='values', widget=JSONWidget())

    class Meta:
        model = VariantTemplate
        import_id_fields = ['name']
        fields = ('name', 'axis_name', 'values', 'description', 'is_global', 'is_active')


# =============================================================================
# Inlines
# =============================================================================

class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ['sku', 'name', 'axis_values', 'price', 'stock_quantity', 'status']
    readonly_fields = ['sku', 'name', 'axis_values']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = ['name', 'sku', 'price', 'variant_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'slug', 'sku', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'variant_axes', 'matrix_summary', 'created_at', 'updated_at']
    inlines = [VariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'sku', 'price', 'is_active')
        }),
        ('Conteúdo herdável', {
            'fields': ('description', 'brand', 'manufacturer', 'meta_title', 'meta_description'),
            'classes': ('collapse',)
        }),
        ('Informações', {
            'fields': ('variant_count', 'variant_axes', 'matrix_summary', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def matrix_summary(self, obj):
        if not obj.pk:
            return '-'
        summary = VariantEngineService.get_matrix(obj).summary
        return (
            f'{summary.created_count} de {summary.total_combinations} combinações '
            f'({summary.missing_count} faltando)'
        )
    matrix_summary.short_description = 'Matriz'


@admin.register(Variant)
class VariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VariantResource
    list_display = [
        'sku', 'name', 'product', 'price', 'cost_price',
        'stock_quantity', 'stock_status', 'status'
    ]
    list_filter = ['product', 'status', 'track_inventory']
    list_editable = ['price', 'stock_quantity']
    search_fields = ['sku', 'name', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = [
        'axis_signature', 'created_at', 'updated_at',
        'is_in_stock', 'is_low_stock', 'profit_margin'
    ]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'sku', 'name', 'status', 'axis_values', 'axis_signature')
        }),
        ('Preços', {
            'fields': ('cost_price', 'price', 'profit_margin')
        }),
        ('Estoque', {
            'fields': (
                'stock_quantity', 'track_inventory',
                'low_stock_threshold', 'is_in_stock', 'is_low_stock'
            )
        }),
        ('Conteúdo', {
            'fields': (
                'description', 'brand', 'manufacturer',
                'meta_title', 'meta_description', 'attributes'
            ),
            'classes': ('collapse',)
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = [
        'publish_variants', 'archive_variants',
        'increase_price_10', 'mark_out_of_stock'
    ]

    def stock_status(self, obj):
        if not obj.track_inventory:
            return format_html('<span style="color: blue;">Não rastreado</span>')
        if obj.stock_quantity <= 0:
            return format_html('<span style="color: red;">Sem estoque</span>')
        if obj.is_low_stock:
            return format_html('<span style="color: orange;">Estoque baixo</span>')
        return format_html('<span style="color: green;">Em estoque</span>')
    stock_status.short_description = 'Status Estoque'

    @admin.action(description='Publicar variantes selecionadas')
    def publish_variants(self, request, queryset):
        count = queryset.update(status=Variant.STATUS_PUBLISHED)
        self.message_user(request, f'{count} variantes publicadas.')

    @admin.action(description='Arquivar variantes selecionadas')
    def archive_variants(self, request, queryset):
        count = queryset.update(status=Variant.STATUS_ARCHIVED)
        self.message_user(request, f'{count} variantes arquivadas.')

    @admin.action(description='Aumentar preço em 10%')
    def increase_price_10(self, request, queryset):
        ids = list(queryset.values_list('pk', flat=True))
        try:
            records = VariantEngineService.bulk_adjust_price(
                ids, PriceAdjustment(ADJUSTMENT_PERCENTAGE, 10), user=request.user
            )
        except VariantEngineError as e:
            self.message_user(request, str(e), level='error')
            return
        self.message_user(request, f'{len(records)} preços atualizados.')

    @admin.action(description='Marcar como sem estoque')
    def mark_out_of_stock(self, request, queryset):
        ids = list(queryset.values_list('pk', flat=True))
        try:
            records = VariantEngineService.bulk_adjust_inventory(ids, INVENTORY_SET, 0)
        except VariantEngineError as e:
            self.message_user(request, str(e), level='error')
            return
        self.message_user(request, f'{len(records)} variantes atualizadas.')


@admin.register(VariantTemplate)
class VariantTemplateAdmin(ImportExportModelAdmin):
    resource_class = VariantTemplateResource
    list_display = ['name', 'axis_name', 'value_count', 'usage_count', 'is_global', 'is_active', 'display_order']
    list_filter = ['axis_name', 'is_global', 'is_active']
    list_editable = ['is_active', 'display_order']
    search_fields = ['name', 'axis_name', 'description']
    readonly_fields = ['usage_count', 'created_at', 'updated_at']

    def value_count(self, obj):
        return len(obj.values or [])
    value_count.short_description = 'Valores'


@admin.register(PriceHistory)
class PriceHistoryAdmin(admin.ModelAdmin):
    list_display = [
        'variant', 'change_type', 'source', 'old_price', 'new_price',
        'price_diff_display', 'changed_by', 'changed_at'
    ]
    list_filter = ['change_type', 'source', 'changed_at', 'variant__product']
    search_fields = ['variant__sku', 'variant__name']
    readonly_fields = [
        'variant', 'change_type', 'source', 'old_price', 'new_price',
        'changed_by', 'changed_at', 'price_difference', 'percentage_change'
    ]
    date_hierarchy = 'changed_at'

    def price_diff_display(self, obj):
        diff = obj.price_difference
        if diff is None:
            return '-'
        if diff > 0:
            return format_html('<span style="color: green;">+R$ {}</span>', f'{diff:.2f}')
        elif diff < 0:
            return format_html('<span style="color: red;">R$ {}</span>', f'{diff:.2f}')
        return 'R$ 0.00'
    price_diff_display.short_description = 'Diferença'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Variant Engine Admin'
admin.site.site_title = 'Variantes'
admin.site.index_title = 'Painel de Administração'
