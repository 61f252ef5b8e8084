from django.db import models
from django.utils.text import slugify
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """
    Base product, the family that groups its sellable variants.
    Example: "Pure Cube Speaker" with one variant per color.
    """
    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

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
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def active_variant_count(self):
        return self.variants.filter(is_active=True).count()

    def active_variants(self):
        return self.variants.filter(is_active=True).order_by('display_order', 'id')

    @property
    def base_variant(self):
        """
        Variant shown when nothing else applies: the one flagged as default,
        otherwise the first in display order. Inactive variants count too, so
        a product whose variants are all disabled still has something to show.
        """
        return (
            self.variants.filter(is_default=True).order_by('display_order', 'id').first()
            or self.variants.order_by('display_order', 'id').first()
        )
