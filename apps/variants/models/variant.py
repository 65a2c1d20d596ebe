from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
from simple_history.models import HistoricalRecords

from apps.variants.engine import axis_signature


class Variant(models.Model):
    """
    Individual SKU with its own price and stock.
    Each variant is one combination of axis values of its product, stored in
    `axis_values`. Legacy variants may have no axis values at all.
    """
    STATUS_DRAFT = 'draft'
    STATUS_PUBLISHED = 'published'
    STATUS_ARCHIVED = 'archived'
    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Rascunho'),
        (STATUS_PUBLISHED, 'Publicado'),
        (STATUS_ARCHIVED, 'Arquivado'),
    ]

    product = models.ForeignKey(
        'variants.Product',
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
        verbose_name='Nome'
    )

    # Pricing
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de venda'
    )
    cost_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de custo'
    )

    # Inventory
    stock_quantity = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        verbose_name='Quantidade em estoque'
    )
    track_inventory = models.BooleanField(
        default=True,
        verbose_name='Rastrear estoque'
    )
    low_stock_threshold = models.PositiveIntegerField(
        default=5,
        verbose_name='Limite de estoque baixo'
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        verbose_name='Status'
    )

    # Fields inherited from the product on generation
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    brand = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Marca'
    )
    manufacturer = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Fabricante'
    )
    meta_title = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Título SEO'
    )
    meta_description = models.TextField(
        max_length=500,
        blank=True,
        verbose_name='Descrição SEO'
    )
    attributes = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='Atributos',
        help_text='Atributos livres (herdados ou padrão da geração)'
    )

    # Combination of axis values, e.g. {"Size": "M", "Color": "Blue"}
    axis_values = models.JSONField(
        null=True,
        blank=True,
        verbose_name='Valores dos eixos'
    )
    # Order-independent identity of axis_values, see engine.axis_signature
    axis_signature = models.CharField(
        max_length=500,
        null=True,
        blank=True,
        editable=False,
        verbose_name='Assinatura dos eixos'
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
        ordering = ['product', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'axis_signature'],
                name='unique_variant_axis_signature',
            ),
        ]
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        self.axis_signature = axis_signature(self.axis_values) if self.axis_values else None
        if not self.name:
            self.name = self._generate_name()
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'axis_values' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'axis_signature'}
        super().save(*args, **kwargs)

    def _generate_name(self):
        """Generate variant name from product name and axis values."""
        if not self.axis_values:
            return f"{self.product.name} - {self.sku}"
        return f"{self.product.name} - {' '.join(str(v) for v in self.axis_values.values())}"

    def get_axis_value(self, axis_name):
        return (self.axis_values or {}).get(axis_name)

    @property
    def is_in_stock(self):
        if not self.track_inventory:
            return True
        return self.stock_quantity > 0

    @property
    def is_low_stock(self):
        if not self.track_inventory:
            return False
        return 0 < self.stock_quantity <= self.low_stock_threshold

    @property
    def profit_margin(self):
        if not self.cost_price or self.cost_price == 0:
            return None
        return ((self.price - self.cost_price) / self.cost_price) * 100
