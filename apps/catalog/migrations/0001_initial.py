# Generated manually

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import simple_history.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Variant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sku', models.CharField(max_length=100, unique=True, verbose_name='SKU')),
                ('name', models.CharField(blank=True, help_text='Nome personalizado (gerado automaticamente se vazio)', max_length=255, verbose_name='Nome')),
                ('sell_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))], verbose_name='Preço de venda')),
                ('compare_at_price', models.DecimalField(blank=True, decimal_places=2, help_text='Preço "de" para mostrar desconto', max_digits=10, null=True, validators=[MinValueValidator(Decimal('0.00'))], verbose_name='Preço comparativo')),
                ('stock_quantity', models.IntegerField(default=0, verbose_name='Quantidade em estoque')),
                ('track_inventory', models.BooleanField(default=True, verbose_name='Rastrear estoque')),
                ('allow_backorder', models.BooleanField(default=False, verbose_name='Permitir compra sem estoque')),
                ('color', models.CharField(blank=True, help_text='Cor própria desta variante', max_length=100, verbose_name='Cor')),
                ('colors', models.JSONField(blank=True, default=list, help_text='Cores que esta variante representa (usado apenas na busca aproximada)', verbose_name='Cores')),
                ('sizes', models.JSONField(blank=True, default=list, verbose_name='Tamanhos')),
                ('capacities', models.JSONField(blank=True, default=list, verbose_name='Capacidades')),
                ('scents', models.JSONField(blank=True, default=list, verbose_name='Fragrâncias')),
                ('image_url', models.URLField(blank=True, verbose_name='Imagem')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
                ('is_default', models.BooleanField(default=False, verbose_name='Variante padrão')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Variante',
                'verbose_name_plural': 'Variantes',
                'ordering': ['display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical Produto',
                'verbose_name_plural': 'historical Produtos',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='HistoricalVariant',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('sku', models.CharField(db_index=True, max_length=100, verbose_name='SKU')),
                ('name', models.CharField(blank=True, help_text='Nome personalizado (gerado automaticamente se vazio)', max_length=255, verbose_name='Nome')),
                ('sell_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))], verbose_name='Preço de venda')),
                ('compare_at_price', models.DecimalField(blank=True, decimal_places=2, help_text='Preço "de" para mostrar desconto', max_digits=10, null=True, validators=[MinValueValidator(Decimal('0.00'))], verbose_name='Preço comparativo')),
                ('stock_quantity', models.IntegerField(default=0, verbose_name='Quantidade em estoque')),
                ('track_inventory', models.BooleanField(default=True, verbose_name='Rastrear estoque')),
                ('allow_backorder', models.BooleanField(default=False, verbose_name='Permitir compra sem estoque')),
                ('color', models.CharField(blank=True, help_text='Cor própria desta variante', max_length=100, verbose_name='Cor')),
                ('colors', models.JSONField(blank=True, default=list, help_text='Cores que esta variante representa (usado apenas na busca aproximada)', verbose_name='Cores')),
                ('sizes', models.JSONField(blank=True, default=list, verbose_name='Tamanhos')),
                ('capacities', models.JSONField(blank=True, default=list, verbose_name='Capacidades')),
                ('scents', models.JSONField(blank=True, default=list, verbose_name='Fragrâncias')),
                ('image_url', models.URLField(blank=True, verbose_name='Imagem')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
                ('is_default', models.BooleanField(default=False, verbose_name='Variante padrão')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('product', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'historical Variante',
                'verbose_name_plural': 'historical Variantes',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
