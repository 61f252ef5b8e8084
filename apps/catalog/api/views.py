import logging

from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.catalog.exceptions import EmptyVariantFamily, UnknownVariantOption
from apps.catalog.models import Product, Variant
from apps.catalog.services.variant_navigation import VariantNavigationService
from .serializers import (
    ProductListSerializer,
    ProductDetailSerializer,
    VariantListSerializer,
    VariantDetailSerializer,
    VariantSelectionSerializer,
    SelectOptionSerializer,
)
from .filters import VariantFilter

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for products.

    list: List active products
    retrieve: Get product detail with variants
    variant_selection: Read or change the variant selection of a product page
    """
    queryset = Product.objects.filter(is_active=True)
    lookup_field = 'slug'
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        return ProductDetailSerializer

    @action(detail=True, methods=['get', 'post'], url_path='variant-selection')
    def variant_selection(self, request, slug=None):
        """
        GET: selection for a freshly loaded page.

        Query params named after a group seed the selection
        (e.g., ?size=M&color=Black). They are read only here, on load.

        POST: apply one option click to the selection held by the page.
        See SelectOptionSerializer for the payload.
        """
        product = self.get_object()

        try:
            if request.method == 'POST':
                payload = SelectOptionSerializer(data=request.data)
                payload.is_valid(raise_exception=True)
                data = VariantNavigationService.apply_selection(
                    product,
                    payload.validated_data['selection'],
                    payload.validated_data['group_key'],
                    payload.validated_data['option_id'],
                    query=payload.validated_data['query_string'],
                )
            else:
                data = VariantNavigationService.get_initial_selection(
                    product, query=request.query_params
                )
        except EmptyVariantFamily as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except UnknownVariantOption as e:
            logger.info("Rejected selection on %s: %s", product.slug, e)
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        serializer = VariantSelectionSerializer(data, context={'request': request})
        return Response(serializer.data)


class VariantViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for variants.

    Supports filtering by product, attribute values and stock status.
    """
    queryset = Variant.objects.select_related('product')
    filterset_class = VariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'name', 'product__name']
    ordering_fields = ['sku', 'sell_price', 'stock_quantity', 'created_at']
    ordering = ['sku']

    def get_serializer_class(self):
        if self.action == 'list':
            return VariantListSerializer
        return VariantDetailSerializer
