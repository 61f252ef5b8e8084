from rest_framework import serializers
from apps.catalog.models import Product, Variant
from apps.catalog.services.variant_options import GROUP_ORDER


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for variant lists and the resolved variant."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    attributes = serializers.SerializerMethodField()
    is_in_stock = serializers.BooleanField(read_only=True)
    is_on_sale = serializers.BooleanField(read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'sku', 'name', 'product', 'product_name',
            'sell_price', 'compare_at_price', 'stock_quantity',
            'is_active', 'is_in_stock', 'is_on_sale', 'discount_percentage',
            'image_url', 'attributes'
        ]

    def get_attributes(self, obj):
        return obj.get_options_dict()


class VariantDetailSerializer(serializers.ModelSerializer):
    """Full variant serializer with all attribute fields."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_slug = serializers.CharField(source='product.slug', read_only=True)
    is_in_stock = serializers.BooleanField(read_only=True)
    is_on_sale = serializers.BooleanField(read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'product', 'product_name', 'product_slug',
            'sku', 'name', 'sell_price', 'compare_at_price',
            'stock_quantity', 'track_inventory', 'allow_backorder',
            'color', 'colors', 'sizes', 'capacities', 'scents',
            'image_url', 'display_order', 'is_default', 'is_active',
            'is_in_stock', 'is_on_sale', 'discount_percentage',
            'created_at', 'updated_at'
        ]


# =============================================================================
# Product Serializers
# =============================================================================

class ProductListSerializer(serializers.ModelSerializer):
    """Product list with counts."""
    variant_count = serializers.IntegerField(read_only=True)
    active_variant_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'is_active',
            'variant_count', 'active_variant_count'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product detail with variants."""
    variants = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'is_active',
            'variants', 'created_at', 'updated_at'
        ]

    def get_variants(self, obj):
        return VariantListSerializer(obj.active_variants(), many=True).data


# =============================================================================
# Variant Selection Serializers
# =============================================================================

class VariantOptionStateSerializer(serializers.Serializer):
    id = serializers.CharField()
    value = serializers.CharField()
    is_selected = serializers.BooleanField()
    is_available = serializers.BooleanField()


class VariantGroupStateSerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
    selected_option_id = serializers.CharField(allow_null=True)
    selected_value = serializers.CharField(allow_null=True)
    options = VariantOptionStateSerializer(many=True)


class VariantSelectionSerializer(serializers.Serializer):
    """Everything a product page needs to draw selectors and the chosen SKU."""
    product = serializers.DictField()
    groups = VariantGroupStateSerializer(many=True)
    selection = serializers.DictField(child=serializers.CharField())
    selected_values = serializers.DictField(child=serializers.CharField())
    variant = VariantListSerializer()
    is_exact_match = serializers.BooleanField()
    query_string = serializers.CharField(allow_blank=True)
    url = serializers.CharField()


class SelectOptionSerializer(serializers.Serializer):
    """
    Payload for one option click.

    Expected payload:
    {
        "selection": {"size": "size-m", "color": "color-white"},
        "group_key": "color",
        "option_id": "color-black",
        "query_string": "utm_source=mail&size=M&color=White"
    }
    """
    selection = serializers.DictField(
        child=serializers.CharField(), required=False, default=dict
    )
    group_key = serializers.ChoiceField(choices=[kind.value for kind in GROUP_ORDER])
    option_id = serializers.CharField()
    query_string = serializers.CharField(required=False, allow_blank=True, default='')
