from django.db import models


class VariantTemplate(models.Model):
    """
    Reusable axis definition, e.g. "Clothing Sizes" -> Size: XS, S, M, L.
    Templates feed the generation wizard; they are never consulted when the
    matrix is rebuilt.

    `metadata` may carry suggested pricing:
        {"suggested_pricing": {"strategy": "percentage",
                               "adjustments": {"512GB": 25, "1TB": 50}}}
    """
    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    axis_name = models.CharField(
        max_length=100,
        verbose_name='Eixo'
    )
    values = models.JSONField(
        default=list,
        verbose_name='Valores'
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='Metadados'
    )
    is_global = models.BooleanField(
        default=False,
        verbose_name='Global'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    usage_count = models.PositiveIntegerField(
        default=0,
        verbose_name='Vezes usado'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    class Meta:
        ordering = ['-usage_count', 'display_order', 'name']
        verbose_name = 'Modelo de Variação'
        verbose_name_plural = 'Modelos de Variação'

    def __str__(self):
        return f"{self.name} ({self.axis_name})"

    @property
    def suggested_pricing(self):
        return (self.metadata or {}).get('suggested_pricing') or {}
