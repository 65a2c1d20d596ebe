"""
Engine settings, read from the VARIANT_ENGINE dict in Django settings:

    VARIANT_ENGINE = {
        'MAX_COMBINATIONS': 300,
        'DEFAULT_SKU_PATTERN': '{parent}-{axes}',
        'DEFAULT_NAME_PATTERN': '{parent} - {values}',
        'DEFAULT_STATUS': 'draft',
    }
"""

from django.conf import settings

from apps.variants.engine.generation import DEFAULT_MAX_COMBINATIONS
from apps.variants.engine.identifiers import DEFAULT_NAME_PATTERN, DEFAULT_SKU_PATTERN


DEFAULTS = {
    'MAX_COMBINATIONS': DEFAULT_MAX_COMBINATIONS,
    'DEFAULT_SKU_PATTERN': DEFAULT_SKU_PATTERN,
    'DEFAULT_NAME_PATTERN': DEFAULT_NAME_PATTERN,
    'DEFAULT_STATUS': 'draft',
}


def get_setting(name):
    overrides = getattr(settings, 'VARIANT_ENGINE', None) or {}
    return overrides.get(name, DEFAULTS[name])
