# Generated manually

from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import simple_history.models


HISTORY_TYPE_CHOICES = [('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')]
STATUS_CHOICES = [('draft', 'Rascunho'), ('published', 'Publicado'), ('archived', 'Arquivado')]


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
                ('sku', models.CharField(max_length=100, unique=True, verbose_name='SKU')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço base')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('brand', models.CharField(blank=True, max_length=100, verbose_name='Marca')),
                ('manufacturer', models.CharField(blank=True, max_length=100, verbose_name='Fabricante')),
                ('meta_title', models.CharField(blank=True, max_length=255, verbose_name='Título SEO')),
                ('meta_description', models.TextField(blank=True, max_length=500, verbose_name='Descrição SEO')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('variant_axes', models.JSONField(blank=True, default=list, help_text='Ordem dos eixos usada na geração de variantes', verbose_name='Eixos de variação')),
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
            name='VariantTemplate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('axis_name', models.CharField(max_length=100, verbose_name='Eixo')),
                ('values', models.JSONField(default=list, verbose_name='Valores')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('is_global', models.BooleanField(default=False, verbose_name='Global')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('usage_count', models.PositiveIntegerField(default=0, verbose_name='Vezes usado')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Modelo de Variação',
                'verbose_name_plural': 'Modelos de Variação',
                'ordering': ['-usage_count', 'display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, verbose_name='Slug')),
                ('sku', models.CharField(db_index=True, max_length=100, verbose_name='SKU')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço base')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('brand', models.CharField(blank=True, max_length=100, verbose_name='Marca')),
                ('manufacturer', models.CharField(blank=True, max_length=100, verbose_name='Fabricante')),
                ('meta_title', models.CharField(blank=True, max_length=255, verbose_name='Título SEO')),
                ('meta_description', models.TextField(blank=True, max_length=500, verbose_name='Descrição SEO')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('variant_axes', models.JSONField(blank=True, default=list, help_text='Ordem dos eixos usada na geração de variantes', verbose_name='Eixos de variação')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
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
            name='Variant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sku', models.CharField(max_length=100, unique=True, verbose_name='SKU')),
                ('name', models.CharField(blank=True, max_length=255, verbose_name='Nome')),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de venda')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de custo')),
                ('stock_quantity', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Quantidade em estoque')),
                ('track_inventory', models.BooleanField(default=True, verbose_name='Rastrear estoque')),
                ('low_stock_threshold', models.PositiveIntegerField(default=5, verbose_name='Limite de estoque baixo')),
                ('status', models.CharField(choices=STATUS_CHOICES, default='draft', max_length=20, verbose_name='Status')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('brand', models.CharField(blank=True, max_length=100, verbose_name='Marca')),
                ('manufacturer', models.CharField(blank=True, max_length=100, verbose_name='Fabricante')),
                ('meta_title', models.CharField(blank=True, max_length=255, verbose_name='Título SEO')),
                ('meta_description', models.TextField(blank=True, max_length=500, verbose_name='Descrição SEO')),
                ('attributes', models.JSONField(blank=True, default=dict, help_text='Atributos livres (herdados ou padrão da geração)', verbose_name='Atributos')),
                ('axis_values', models.JSONField(blank=True, null=True, verbose_name='Valores dos eixos')),
                ('axis_signature', models.CharField(blank=True, editable=False, max_length=500, null=True, verbose_name='Assinatura dos eixos')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='variants.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Variante',
                'verbose_name_plural': 'Variantes',
                'ordering': ['product', 'id'],
                'constraints': [
                    models.UniqueConstraint(fields=('product', 'axis_signature'), name='unique_variant_axis_signature'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HistoricalVariant',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('sku', models.CharField(db_index=True, max_length=100, verbose_name='SKU')),
                ('name', models.CharField(blank=True, max_length=255, verbose_name='Nome')),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de venda')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de custo')),
                ('stock_quantity', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Quantidade em estoque')),
                ('track_inventory', models.BooleanField(default=True, verbose_name='Rastrear estoque')),
                ('low_stock_threshold', models.PositiveIntegerField(default=5, verbose_name='Limite de estoque baixo')),
                ('status', models.CharField(choices=STATUS_CHOICES, default='draft', max_length=20, verbose_name='Status')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('brand', models.CharField(blank=True, max_length=100, verbose_name='Marca')),
                ('manufacturer', models.CharField(blank=True, max_length=100, verbose_name='Fabricante')),
                ('meta_title', models.CharField(blank=True, max_length=255, verbose_name='Título SEO')),
                ('meta_description', models.TextField(blank=True, max_length=500, verbose_name='Descrição SEO')),
                ('attributes', models.JSONField(blank=True, default=dict, help_text='Atributos livres (herdados ou padrão da geração)', verbose_name='Atributos')),
                ('axis_values', models.JSONField(blank=True, null=True, verbose_name='Valores dos eixos')),
                ('axis_signature', models.CharField(blank=True, editable=False, max_length=500, null=True, verbose_name='Assinatura dos eixos')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('product', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='variants.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'historical Variante',
                'verbose_name_plural': 'historical Variantes',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='PriceHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('change_type', models.CharField(choices=[('cost', 'Preço de Custo'), ('price', 'Preço de Venda')], max_length=10, verbose_name='Tipo de alteração')),
                ('source', models.CharField(choices=[('manual', 'Manual'), ('matrix', 'Edição na matriz'), ('bulk', 'Ajuste em massa')], default='manual', max_length=10, verbose_name='Origem')),
                ('old_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Preço anterior')),
                ('new_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Novo preço')),
                ('changed_at', models.DateTimeField(auto_now_add=True, verbose_name='Alterado em')),
                ('changed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL, verbose_name='Alterado por')),
                ('variant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='price_history', to='variants.variant', verbose_name='Variante')),
            ],
            options={
                'verbose_name': 'Histórico de Preço',
                'verbose_name_plural': 'Histórico de Preços',
                'ordering': ['-changed_at', '-id'],
            },
        ),
    ]
