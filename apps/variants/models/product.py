from django.db import models
from django.core.validators import MinValueValidator
from django.utils.text import slugify
from decimal import Decimal
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """
    Parent item that variants are generated from.
    Example: "Camiseta Básica" (SKU CAM) spawns CAM-P-AZUL, CAM-M-AZUL, ...
    """
    # Parent fields a generation run may copy onto its variants
    INHERITABLE_FIELDS = [
        'description',
        'brand',
        'manufacturer',
        'meta_title',
        'meta_description',
    ]

    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço base'
    )
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
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

    # Axis names in declaration order, as last used for generation.
    # Only an ordering hint for the matrix; values are always read from variants.
    variant_axes = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Eixos de variação',
        help_text='Ordem dos eixos usada na geração de variantes'
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

    def get_inheritable_fields(self):
        """Return dict of {field_name: value} for fields variants may inherit."""
        return {
            field: getattr(self, field)
            for field in self.INHERITABLE_FIELDS
        }

    def remember_axes(self, axis_names):
        """Merge newly generated axis names into `variant_axes`, keeping order."""
        axes = list(self.variant_axes or [])
        for name in axis_names:
            if name not in axes:
                axes.append(name)
        if axes != self.variant_axes:
            self.variant_axes = axes
            self.save(update_fields=['variant_axes', 'updated_at'])
