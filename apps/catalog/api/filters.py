from django.db.models import Q
from django_filters import rest_framework as filters
from apps.catalog.models import Variant
from apps.catalog.services.variant_options import VariantKind


class VariantFilter(filters.FilterSet):
    """Filter for variants by product, stock and attribute values."""

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')

    # Stock filters
    in_stock = filters.BooleanFilter(method='filter_in_stock')

    # Attribute filters
    color = filters.CharFilter(field_name='color', lookup_expr='iexact')
    size = filters.CharFilter(method='filter_by_list_attribute')
    capacity = filters.CharFilter(method='filter_by_list_attribute')
    scent = filters.CharFilter(method='filter_by_list_attribute')

    class Meta:
        model = Variant
        fields = ['product', 'product_id', 'is_active', 'sku']

    def filter_in_stock(self, queryset, name, value):
        """Same rule as Variant.is_in_stock: inactive variants are never in stock."""
        available = Q(track_inventory=False) | Q(stock_quantity__gt=0) | Q(allow_backorder=True)
        if value is True:
            return queryset.filter(Q(is_active=True) & available)
        elif value is False:
            return queryset.filter(Q(is_active=False) | ~available)
        return queryset

    def filter_by_list_attribute(self, queryset, name, value):
        """
        Keep variants whose attribute list holds the value.
        Example: ?size=M matches a variant with sizes ["S", "M"]
        """
        matching = [
            variant.pk for variant in queryset
            if value in variant.to_snapshot().values_for(VariantKind(name))
        ]
        return queryset.filter(pk__in=matching)
