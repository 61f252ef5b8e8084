from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget, SimpleArrayWidget
from adminsortable2.admin import SortableAdminBase, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import Product, Variant


# =============================================================================
# Import/Export Resources
# =============================================================================

class VariantResource(resources.ModelResource):
    """
    Resource for importing/exporting variants.

    List attributes are written as '|' separated cells, e.g. "S|M|L".
    """

    product_slug = fields.Field(
        column_name='product',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'slug')
    )
    colors = fields.Field(
        column_name='colors',
        attribute='colors',
        widget=SimpleArrayWidget(separator='|')
    )
    sizes = fields.Field(
        column_name='sizes',
        attribute='sizes',
        widget=SimpleArrayWidget(separator='|')
    )
    capacities = fields.Field(
        column_name='capacities',
        attribute='capacities',
        widget=SimpleArrayWidget(separator='|')
    )
    scents = fields.Field(
        column_name='scents',
        attribute='scents',
        widget=SimpleArrayWidget(separator='|')
    )

    class Meta:
        model = Variant
        import_id_fields = ['sku']
        fields = (
            'sku', 'product_slug', 'name', 'sell_price', 'compare_at_price',
            'stock_quantity', 'track_inventory', 'allow_backorder',
            'color', 'colors', 'sizes', 'capacities', 'scents',
            'image_url', 'display_order', 'is_default', 'is_active'
        )
        export_order = fields


# =============================================================================
# Inlines
# =============================================================================

class VariantInline(SortableInlineAdminMixin, admin.TabularInline):
    model = Variant
    extra = 0
    fields = ['sku', 'name', 'color', 'sell_price', 'stock_quantity', 'is_default', 'is_active', 'display_order']
    readonly_fields = ['sku', 'name']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Product)
class ProductAdmin(SortableAdminBase, SimpleHistoryAdmin):
    list_display = ['name', 'slug', 'variant_count', 'active_variant_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'slug', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'active_variant_count', 'created_at', 'updated_at']
    inlines = [VariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'description', 'is_active')
        }),
        ('Informações', {
            'fields': ('variant_count', 'active_variant_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Variant)
class VariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VariantResource
    list_display = [
        'sku', 'name', 'product', 'color', 'sell_price',
        'stock_quantity', 'stock_status', 'is_default', 'is_active'
    ]
    list_filter = ['product', 'is_active', 'track_inventory']
    list_editable = ['sell_price', 'stock_quantity', 'is_active']
    search_fields = ['sku', 'name', 'product__name', 'color']
    autocomplete_fields = ['product']
    readonly_fields = [
        'created_at', 'updated_at', 'is_on_sale', 'discount_percentage', 'is_in_stock'
    ]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'sku', 'name', 'display_order', 'is_default', 'is_active')
        }),
        ('Atributos', {
            'fields': ('color', 'colors', 'sizes', 'capacities', 'scents', 'image_url')
        }),
        ('Preços', {
            'fields': ('sell_price', 'compare_at_price')
        }),
        ('Estoque', {
            'fields': (
                'stock_quantity', 'track_inventory', 'allow_backorder', 'is_in_stock'
            )
        }),
        ('Informações', {
            'fields': ('is_on_sale', 'discount_percentage', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['activate_variants', 'deactivate_variants']

    STOCK_BADGES = {
        'untracked': ('blue', 'Não rastreado'),
        'backorder': ('orange', 'Sob encomenda'),
        'inactive': ('gray', 'Inativo'),
        'out': ('red', 'Sem estoque'),
        'in': ('green', 'Em estoque'),
    }

    @admin.display(description='Status Estoque')
    def stock_status(self, obj):
        if not obj.is_active:
            state = 'inactive'
        elif not obj.track_inventory:
            state = 'untracked'
        elif obj.stock_quantity > 0:
            state = 'in'
        elif obj.allow_backorder:
            state = 'backorder'
        else:
            state = 'out'
        color, label = self.STOCK_BADGES[state]
        return format_html('<span style="color: {};">{}</span>', color, label)

    def _set_active(self, request, queryset, is_active):
        count = queryset.update(is_active=is_active)
        verb = 'ativadas' if is_active else 'desativadas'
        self.message_user(request, f'{count} variantes {verb}.')

    @admin.action(description='Ativar variantes selecionadas')
    def activate_variants(self, request, queryset):
        self._set_active(request, queryset, True)

    @admin.action(description='Desativar variantes selecionadas')
    def deactivate_variants(self, request, queryset):
        self._set_active(request, queryset, False)


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Storefront Admin'
admin.site.site_title = 'Storefront'
admin.site.index_title = 'Painel de Administração'
