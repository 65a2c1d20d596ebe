"""Tests for axes, combinations and the combination generator."""

from decimal import Decimal

import pytest

from apps.variants.engine import (
    Axis,
    AxisValue,
    Combination,
    ValidationError,
    axis_signature,
    count_combinations,
    iter_combinations,
    validate_axes,
)


class TestAxis:
    """Test axis construction."""

    def test_coerces_plain_strings(self):
        """Should accept plain strings as values."""
        axis = Axis('Size', ('S', 'M'))
        assert axis.values == (AxisValue('S'), AxisValue('M'))
        assert axis.value_names == ['S', 'M']

    def test_rejects_duplicate_values(self):
        """Should reject two equal values on one axis."""
        with pytest.raises(ValidationError):
            Axis.from_values('Size', ['S', 'M', 'S'])

    def test_values_are_case_sensitive(self):
        """Should treat 'red' and 'Red' as different values."""
        axis = Axis.from_values('Color', ['red', 'Red'])
        assert len(axis) == 2

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            Axis.from_values('  ', ['S'])

    def test_rejects_unknown_adjustment_type(self):
        with pytest.raises(ValidationError):
            AxisValue('L', Decimal('5'), 'absolute')

    def test_adjustment_converted_to_decimal(self):
        assert AxisValue('L', 2.5).price_adjustment == Decimal('2.5')


class TestValidateAxes:

    def test_requires_an_axis(self):
        with pytest.raises(ValidationError):
            validate_axes([])

    def test_rejects_empty_axis(self):
        with pytest.raises(ValidationError):
            validate_axes([Axis('Size', ())])

    def test_rejects_duplicate_axis_names(self):
        with pytest.raises(ValidationError):
            validate_axes([Axis.from_values('Size', ['S']), Axis.from_values('Size', ['M'])])


class TestCombinationCount:
    """The generator yields the full Cartesian product."""

    @pytest.mark.parametrize('sizes', [(1,), (3,), (2, 3), (2, 1, 4), (3, 3, 2, 2)])
    def test_yields_product_of_axis_sizes(self, sizes):
        """Should yield n1 x ... x nk unique combinations covering every value."""
        axes = [
            Axis.from_values(f'A{i}', [f'v{j}' for j in range(n)])
            for i, n in enumerate(sizes)
        ]
        combinations = list(iter_combinations(axes))

        expected = 1
        for n in sizes:
            expected *= n
        assert len(combinations) == expected == count_combinations(axes)
        assert len({c.signature for c in combinations}) == expected
        for axis in axes:
            assert {c[axis.name] for c in combinations} == set(axis.value_names)

    def test_empty_axis_list_yields_nothing(self):
        assert list(iter_combinations([])) == []
        assert count_combinations([]) == 0

    def test_axis_without_values_yields_nothing(self):
        axes = [Axis.from_values('Size', ['S']), Axis('Color', ())]
        assert list(iter_combinations(axes)) == []


class TestCombinationOrder:

    def test_first_axis_varies_slowest(self, size_color_axes):
        """Should enumerate like an odometer, last axis fastest."""
        keys = [c.key for c in iter_combinations(size_color_axes)]
        assert keys == ['S-Red', 'S-Blue', 'M-Red', 'M-Blue']

    def test_ordinals_follow_enumeration(self, size_color_axes):
        assert [c.ordinal for c in iter_combinations(size_color_axes)] == [0, 1, 2, 3]

    def test_enumerations_are_independent(self, size_color_axes):
        """Should not share state between two generators over the same axes."""
        first = iter_combinations(size_color_axes)
        second = iter_combinations(size_color_axes)
        next(first)
        next(first)
        assert next(second).key == 'S-Red'
        assert next(first).key == 'M-Red'


class TestCombination:

    def test_mapping_protocol(self, size_color_axes):
        combination = Combination.from_mapping(size_color_axes, {'Color': 'Blue', 'Size': 'M'})
        assert dict(combination) == {'Size': 'M', 'Color': 'Blue'}
        assert list(combination) == ['Size', 'Color']
        assert combination.key == 'M-Blue'

    def test_missing_axis_rejected(self, size_color_axes):
        """Should refuse a mapping that leaves an axis out."""
        with pytest.raises(ValidationError):
            Combination.from_mapping(size_color_axes, {'Size': 'M'})

    def test_unknown_axis_rejected(self, size_color_axes):
        with pytest.raises(ValidationError):
            Combination.from_mapping(size_color_axes, {'Size': 'M', 'Color': 'Red', 'Fit': 'Slim'})

    def test_undeclared_value_rejected(self, size_color_axes):
        with pytest.raises(ValidationError):
            Combination.from_mapping(size_color_axes, {'Size': 'XL', 'Color': 'Red'})

    def test_wrong_choice_count_rejected(self, size_color_axes):
        with pytest.raises(ValidationError):
            Combination(tuple(size_color_axes), (AxisValue('S'),))

    def test_signature_is_order_independent(self):
        assert axis_signature({'Size': 'M', 'Color': 'Blue'}) == \
            axis_signature({'Color': 'Blue', 'Size': 'M'})

    def test_signature_distinguishes_values(self):
        assert axis_signature({'Size': 'M'}) != axis_signature({'Size': 'L'})
