"""
Django signals for the variants app.
Handles automatic creation of price history records.
"""

from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import Variant, PriceHistory


@receiver(pre_save, sender=Variant)
def track_price_changes(sender, instance, **kwargs):
    """
    Create PriceHistory records when variant prices change.

    Callers may tag the change by setting `_price_change_source` and
    `_changed_by` on the instance before saving.
    """
    if not instance.pk:
        # New variant, no history to track
        return

    try:
        old_instance = Variant.objects.only('price', 'cost_price').get(pk=instance.pk)
    except Variant.DoesNotExist:
        return

    source = getattr(instance, '_price_change_source', PriceHistory.SOURCE_MANUAL)
    changed_by = getattr(instance, '_changed_by', None)

    for field, change_type in (('price', 'price'), ('cost_price', 'cost')):
        old_value = getattr(old_instance, field)
        new_value = getattr(instance, field)
        if old_value != new_value:
            PriceHistory.objects.create(
                variant=instance,
                change_type=change_type,
                source=source,
                old_price=old_value,
                new_price=new_value,
                changed_by=changed_by,
            )
