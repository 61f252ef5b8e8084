from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
from simple_history.models import HistoricalRecords

from apps.catalog.services.variant_options import VariantSnapshot


def _clean_list(values):
    """Strip blanks from a JSON list attribute, keeping order."""
    return tuple(str(v).strip() for v in (values or []) if str(v).strip())


class Variant(models.Model):
    """
    Individual SKU with its own price, stock and attribute values.

    Attribute fields follow the storefront catalog: a variant has at most one
    own `color`, may list other `colors` it stands in for, and may expose
    several sizes, capacities or scents at once (multi-size packs, bundles).
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome',
        help_text='Nome personalizado (gerado automaticamente se vazio)'
    )

    # Pricing
    sell_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de venda'
    )
    compare_at_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço comparativo',
        help_text='Preço "de" para mostrar desconto'
    )

    # Inventory
    stock_quantity = models.IntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    track_inventory = models.BooleanField(
        default=True,
        verbose_name='Rastrear estoque'
    )
    allow_backorder = models.BooleanField(
        default=False,
        verbose_name='Permitir compra sem estoque'
    )

    # Attributes
    color = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Cor',
        help_text='Cor própria desta variante'
    )
    colors = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Cores',
        help_text='Cores que esta variante representa (usado apenas na busca aproximada)'
    )
    sizes = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Tamanhos'
    )
    capacities = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Capacidades'
    )
    scents = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Fragrâncias'
    )

    image_url = models.URLField(
        blank=True,
        verbose_name='Imagem'
    )

    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    # Status
    is_default = models.BooleanField(
        default=False,
        verbose_name='Variante padrão'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['display_order', 'id']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self._generate_name()
        super().save(*args, **kwargs)

    def _generate_name(self):
        """Generate variant name from product name and attribute values."""
        parts = [
            value for value in (
                (self.color or '').strip(),
                ' / '.join(_clean_list(self.sizes)),
                ' / '.join(_clean_list(self.capacities)),
                ' / '.join(_clean_list(self.scents)),
            )
            if value
        ]
        if not parts:
            return f"{self.product.name} - {self.sku}"
        return f"{self.product.name} - {' / '.join(parts)}"

    def get_options_dict(self):
        """Return dict of {group_key: [values]} for the attributes this variant exposes."""
        snapshot = self.to_snapshot()
        options = {
            'size': list(snapshot.sizes),
            'color': [snapshot.color] if snapshot.color else [],
            'capacity': list(snapshot.capacities),
            'scent': list(snapshot.scents),
        }
        return {key: values for key, values in options.items() if values}

    def to_snapshot(self):
        """Detached, read-only record used by the variant resolution services."""
        return VariantSnapshot(
            id=self.sku,
            in_stock=self.is_in_stock,
            sizes=_clean_list(self.sizes),
            color=(self.color or '').strip() or None,
            colors=_clean_list(self.colors),
            capacities=_clean_list(self.capacities),
            scents=_clean_list(self.scents),
        )

    @property
    def is_on_sale(self):
        return bool(self.compare_at_price and self.compare_at_price > self.sell_price)

    @property
    def discount_percentage(self):
        if not self.is_on_sale:
            return 0
        return int(((self.compare_at_price - self.sell_price) / self.compare_at_price) * 100)

    @property
    def is_in_stock(self):
        if not self.is_active:
            return False
        if not self.track_inventory:
            return True
        return self.stock_quantity > 0 or self.allow_backorder
