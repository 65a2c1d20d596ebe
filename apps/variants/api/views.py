import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.variants.engine import (
    CombinatorialExplosionWarning,
    ConflictError,
    PersistenceError,
    ValidationError,
    VariantNotFoundError,
)
from apps.variants.models import Product, Variant, PriceHistory, VariantTemplate
from apps.variants.services import VariantEngineService
from .serializers import (
    ProductSerializer,
    ProductListSerializer,
    VariantSerializer,
    VariantListSerializer,
    VariantRecordSerializer,
    PriceHistorySerializer,
    VariantTemplateSerializer,
    GenerateVariantsSerializer,
    GenerationResultSerializer,
    GeneratedRequestSerializer,
    MatrixViewSerializer,
    UpdateCellSerializer,
    BulkPriceAdjustmentSerializer,
    BulkInventoryAdjustmentSerializer,
)
from .filters import VariantFilter, PriceHistoryFilter


logger = logging.getLogger(__name__)


def engine_error_response(exc):
    """Map a variant engine exception to an API error response."""
    if isinstance(exc, CombinatorialExplosionWarning):
        return Response(
            {
                'error': str(exc),
                'requires_confirmation': True,
                'count': exc.count,
                'limit': exc.limit,
            },
            status=status.HTTP_400_BAD_REQUEST
        )
    if isinstance(exc, VariantNotFoundError):
        return Response(
            {'error': str(exc), 'variant_ids': list(exc.variant_ids)},
            status=status.HTTP_404_NOT_FOUND
        )
    if isinstance(exc, ValidationError):
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, ConflictError):
        return Response({'error': str(exc)}, status=status.HTTP_409_CONFLICT)
    logger.error("Variant engine failure: %s", exc)
    return Response({'error': str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


ENGINE_ERRORS = (
    CombinatorialExplosionWarning,
    ValidationError,
    ConflictError,
    PersistenceError,
)


class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: List all products
    retrieve: Get product detail
    generate_variants: Generate variants from axes
    matrix: Current variant matrix of the product
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name', 'sku', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        return ProductSerializer

    @action(detail=True, methods=['post'], url_path='generate-variants')
    def generate_variants(self, request, slug=None):
        """
        Generate one variant per combination of the given axes.

        With "preview": true nothing is written; the planned SKUs, names
        and prices are returned instead. See GenerateVariantsSerializer
        for the payload.
        """
        product = self.get_object()
        serializer = GenerateVariantsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            axes = serializer.build_axes()
            pricing = serializer.build_pricing()
            sku = serializer.build_sku()
            options = serializer.build_options()

            if serializer.validated_data['preview']:
                planned = VariantEngineService.preview_variants(
                    product, axes, pricing, sku, options
                )
                return Response({
                    'total': planned['total'],
                    'price_range': planned['price_range'],
                    'variants': GeneratedRequestSerializer(planned['requests'], many=True).data,
                })

            result = VariantEngineService.generate_variants(
                product, axes, pricing, sku, options,
                template_ids=serializer.template_ids(),
            )
        except ENGINE_ERRORS as e:
            return engine_error_response(e)

        response_status = status.HTTP_201_CREATED if result.created_count else status.HTTP_200_OK
        return Response(GenerationResultSerializer(result).data, status=response_status)

    @action(detail=True, methods=['get'])
    def matrix(self, request, slug=None):
        """Variant matrix of the product, rebuilt from its variants."""
        product = self.get_object()
        view = VariantEngineService.get_matrix(product)
        return Response(MatrixViewSerializer(view).data)


class VariantViewSet(viewsets.ModelViewSet):
    """
    API endpoint for variants.

    Supports filtering by product, axis values, price range, stock status.
    """
    queryset = Variant.objects.select_related('product')
    filterset_class = VariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'name', 'product__name']
    ordering_fields = ['sku', 'price', 'stock_quantity', 'created_at']
    ordering = ['sku']

    def get_serializer_class(self):
        if self.action == 'list':
            return VariantListSerializer
        return VariantSerializer

    @action(detail=True, methods=['get'])
    def price_history(self, request, pk=None):
        """Get price history for a variant."""
        variant = self.get_object()
        history = PriceHistory.objects.filter(variant=variant).select_related('changed_by')
        serializer = PriceHistorySerializer(history, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'], url_path='update-cell')
    def update_cell(self, request, pk=None):
        """
        Edit one matrix cell.

        Expected payload:
        {"field": "price", "value": "129.90"}
        """
        variant = self.get_object()
        serializer = UpdateCellSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            record = VariantEngineService.update_cell(
                variant.pk,
                serializer.validated_data['field'],
                serializer.validated_data['value'],
                user=_user_or_none(request),
            )
        except ENGINE_ERRORS as e:
            return engine_error_response(e)

        return Response(VariantRecordSerializer(record).data)

    @action(detail=False, methods=['post'], url_path='bulk-adjust-price')
    def bulk_adjust_price(self, request):
        """
        Adjust the price of several variants at once.

        Expected payload:
        {
            "variant_ids": [1, 2, 3],
            "type": "percentage",
            "value": 10
        }
        type is one of fixed (add), percentage or absolute (set).
        Nothing is changed if any resulting price would be negative.
        """
        serializer = BulkPriceAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            records = VariantEngineService.bulk_adjust_price(
                serializer.validated_data['variant_ids'],
                serializer.build_adjustment(),
                user=_user_or_none(request),
            )
        except ENGINE_ERRORS as e:
            return engine_error_response(e)

        return Response({
            'updated': len(records),
            'variants': VariantRecordSerializer(records, many=True).data,
        })

    @action(detail=False, methods=['post'], url_path='bulk-adjust-inventory')
    def bulk_adjust_inventory(self, request):
        """
        Adjust stock quantities of several variants at once.

        Expected payload:
        {
            "variant_ids": [1, 2],
            "operation": "decrement",
            "value": 5
        }
        Quantities never drop below zero.
        """
        serializer = BulkInventoryAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            records = VariantEngineService.bulk_adjust_inventory(
                serializer.validated_data['variant_ids'],
                serializer.validated_data['operation'],
                serializer.validated_data['value'],
            )
        except ENGINE_ERRORS as e:
            return engine_error_response(e)

        return Response({
            'updated': len(records),
            'variants': VariantRecordSerializer(records, many=True).data,
        })


class VariantTemplateViewSet(viewsets.ModelViewSet):
    """
    API endpoint for reusable axis templates (sizes, colors, storage...).
    """
    queryset = VariantTemplate.objects.all()
    serializer_class = VariantTemplateSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['axis_name', 'is_global', 'is_active']
    search_fields = ['name', 'axis_name']
    ordering_fields = ['name', 'usage_count', 'display_order']


class PriceHistoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for price history (read-only).
    """
    queryset = PriceHistory.objects.select_related('variant', 'changed_by')
    serializer_class = PriceHistorySerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = PriceHistoryFilter
    ordering = ['-changed_at']


def _user_or_none(request):
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return user
    return None
