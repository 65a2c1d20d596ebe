"""Tests for SKU and name derivation."""

import pytest

from apps.variants.engine import Axis, Combination, SkuConfig, ValidationError, custom_sku_map
from apps.variants.engine.identifiers import (
    SKU_CUSTOM,
    SKU_SEQUENTIAL,
    derive_name,
    derive_sku,
    sequential_sku,
)


@pytest.fixture
def combination(size_color_axes):
    return Combination.from_mapping(size_color_axes, {'Size': 'M', 'Color': 'Blue'}, ordinal=2)


class TestPatternSku:

    def test_default_pattern(self, parent, combination):
        """Should render {parent}-{axes} with upper-cased values."""
        assert derive_sku(SkuConfig(), parent, combination, 4) == 'SHIRT-M-BLUE'

    def test_axis_placeholders(self, parent, combination):
        config = SkuConfig(pattern='{parent}/{Color}/{Size}')
        assert derive_sku(config, parent, combination, 4) == 'SHIRT/BLUE/M'

    def test_whitespace_becomes_dash(self, parent):
        axes = [Axis.from_values('Color', ['Navy Blue'])]
        combination = Combination.from_mapping(axes, {'Color': 'Navy Blue'})
        assert derive_sku(SkuConfig(), parent, combination, 1) == 'SHIRT-NAVY-BLUE'

    def test_blank_pattern_rejected(self):
        with pytest.raises(ValidationError):
            SkuConfig(pattern='  ')

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError):
            SkuConfig(strategy='random')


class TestSequentialSku:

    def test_one_based(self, parent, combination):
        config = SkuConfig(strategy=SKU_SEQUENTIAL)
        assert derive_sku(config, parent, combination, 4) == 'SHIRT-3'

    def test_zero_padded_to_total_width(self):
        assert sequential_sku('P1', 0, 12) == 'P1-01'
        assert sequential_sku('P1', 11, 12) == 'P1-12'
        assert sequential_sku('P1', 4, 150) == 'P1-005'


class TestCustomSku:

    def test_requires_callable(self):
        with pytest.raises(ValidationError):
            SkuConfig(strategy=SKU_CUSTOM)

    def test_map_with_pattern_fallback(self, parent, size_color_axes):
        config = SkuConfig(strategy=SKU_CUSTOM, custom=custom_sku_map({'M-Blue': 'TEE-42'}))
        named = Combination.from_mapping(size_color_axes, {'Size': 'M', 'Color': 'Blue'})
        other = Combination.from_mapping(size_color_axes, {'Size': 'S', 'Color': 'Red'})
        assert derive_sku(config, parent, named, 4) == 'TEE-42'
        assert derive_sku(config, parent, other, 4) == 'SHIRT-S-RED'

    def test_empty_result_rejected(self, parent, combination):
        config = SkuConfig(strategy=SKU_CUSTOM, custom=lambda p, c: '')
        with pytest.raises(ValidationError):
            derive_sku(config, parent, combination, 4)


class TestVariantName:

    def test_default_name(self, parent, combination):
        assert derive_name(SkuConfig(), parent, combination) == 'Shirt - M Blue'

    def test_custom_name_pattern(self, parent, combination):
        config = SkuConfig(name_pattern='{parent} ({axes})')
        assert derive_name(config, parent, combination) == 'Shirt (M / Blue)'

    def test_axis_placeholders(self, parent, combination):
        config = SkuConfig(name_pattern='{Color} {parent}, size {Size}')
        assert derive_name(config, parent, combination) == 'Blue Shirt, size M'
