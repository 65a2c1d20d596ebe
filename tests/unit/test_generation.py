"""Tests for the generation orchestrator."""

from decimal import Decimal

import pytest

from apps.variants.engine import (
    Axis,
    AxisValue,
    CombinatorialExplosionWarning,
    GenerationOptions,
    ParentItem,
    PricingConfig,
    SkuConfig,
    ValidationError,
    generate,
    preview,
)
from apps.variants.engine.generation import OUTCOME_FAILED, OUTCOME_SKIPPED
from apps.variants.engine.identifiers import SKU_SEQUENTIAL
from apps.variants.engine.pricing import PRICING_AXIS_BASED, PRICING_CUSTOM


class TestGenerate:

    def test_sequential_scenario(self, repository, size_color_axes):
        """Should create P1-1..P1-4 in odometer order at the fixed base price."""
        parent = ParentItem(id=7, sku='P1', name='Product 1', base_price=Decimal('50'))
        result = generate(repository, parent, size_color_axes, sku=SkuConfig(strategy=SKU_SEQUENTIAL))

        assert result.created_count == 4
        assert [(v.sku, v.axis_values, v.price) for v in result.created] == [
            ('P1-1', {'Size': 'S', 'Color': 'Red'}, Decimal('50.00')),
            ('P1-2', {'Size': 'S', 'Color': 'Blue'}, Decimal('50.00')),
            ('P1-3', {'Size': 'M', 'Color': 'Red'}, Decimal('50.00')),
            ('P1-4', {'Size': 'M', 'Color': 'Blue'}, Decimal('50.00')),
        ]

    def test_second_run_skips_everything(self, repository, parent, size_color_axes):
        """Should be idempotent with skip_existing."""
        generate(repository, parent, size_color_axes)
        second = generate(repository, parent, size_color_axes)

        assert second.created_count == 0
        assert second.skipped_count == 4
        assert len(repository.list_by_parent(parent.id)) == 4

    def test_new_axis_value_creates_only_new_combinations(self, repository, parent, size_color_axes):
        generate(repository, parent, size_color_axes)
        extended = [size_color_axes[0], Axis.from_values('Color', ['Red', 'Blue', 'Green'])]
        result = generate(repository, parent, extended)

        assert result.created_count == 2
        assert result.skipped_count == 4
        assert {v.axis_values['Color'] for v in result.created} == {'Green'}

    def test_axis_order_does_not_matter_for_existence(self, repository, parent, size_color_axes):
        generate(repository, parent, size_color_axes)
        swapped = [size_color_axes[1], size_color_axes[0]]
        result = generate(repository, parent, swapped, sku=SkuConfig(pattern='{parent}-{axes}-X'))
        assert result.created_count == 0
        assert result.skipped_count == 4

    def test_concurrent_create_is_skipped_not_failed(self, repository, parent, size_color_axes):
        """Should treat a conflict on create as already created by another run."""
        generate(repository, parent, size_color_axes[:1])
        repository.race_signatures.add('[["Size","S"]]')

        result = generate(repository, parent, size_color_axes[:1])

        outcome = result.outcomes[0]
        assert outcome.status == OUTCOME_SKIPPED
        assert outcome.error is not None
        assert result.failed_count == 0

    def test_conflict_without_existence_check(self, repository, parent, size_color_axes):
        generate(repository, parent, size_color_axes)
        result = generate(
            repository, parent, size_color_axes,
            options=GenerationOptions(skip_existing=False),
        )
        assert result.skipped_count == 4
        assert repository.create_calls == 8

    def test_persistence_failure_is_reported_per_combination(self, repository, parent, size_color_axes):
        """Should record failures and keep going."""
        repository.fail_skus.add('SHIRT-S-BLUE')
        result = generate(repository, parent, size_color_axes)

        assert result.created_count == 3
        assert result.failed_count == 1
        failed = result.failed[0]
        assert failed.status == OUTCOME_FAILED
        assert dict(failed.combination) == {'Size': 'S', 'Color': 'Blue'}
        assert 'Storage unavailable' in failed.reason
        assert result.is_partial_failure
        assert not result.is_total_failure

    def test_total_failure(self, repository, parent):
        repository.fail_skus.update({'SHIRT-S', 'SHIRT-M'})
        result = generate(repository, parent, [Axis.from_values('Size', ['S', 'M'])])
        assert result.is_total_failure


class TestGenerateValidation:
    """Validation errors abort before the repository is called."""

    def test_empty_axis_aborts(self, repository, parent):
        with pytest.raises(ValidationError):
            generate(repository, parent, [Axis.from_values('Size', ['S']), Axis('Color', ())])
        assert repository.create_calls == 0

    def test_negative_price_aborts_whole_request(self, repository, parent):
        axes = [Axis('Size', (AxisValue('S'), AxisValue('XS', Decimal('-200'))))]
        with pytest.raises(ValidationError):
            generate(repository, parent, axes, PricingConfig(strategy=PRICING_AXIS_BASED))
        assert repository.create_calls == 0

    def test_duplicate_sku_in_run_aborts(self, repository, parent, size_color_axes):
        """Should refuse a SKU pattern that maps two combinations to one SKU."""
        with pytest.raises(ValidationError):
            generate(repository, parent, size_color_axes, sku=SkuConfig(pattern='{parent}-{Size}'))
        assert repository.create_calls == 0

    def test_ambiguous_combination_keys_abort(self, repository, parent):
        """Should refuse hyphenated values that give two combinations the same key."""
        axes = [
            Axis.from_values('Size', ['X', 'X-L']),
            Axis.from_values('Fit', ['L-Slim', 'Slim']),
        ]
        pricing = PricingConfig(strategy=PRICING_CUSTOM, custom_prices={'X-L-Slim': Decimal('99')})

        with pytest.raises(ValidationError, match='X-L-Slim'):
            generate(repository, parent, axes, pricing, SkuConfig(strategy=SKU_SEQUENTIAL))
        with pytest.raises(ValidationError):
            preview(parent, axes, pricing, SkuConfig(strategy=SKU_SEQUENTIAL))
        assert repository.create_calls == 0

    def test_hyphenated_values_with_distinct_keys(self, repository, parent):
        axes = [Axis.from_values('Size', ['X-L', 'XX-L']), Axis.from_values('Color', ['Red'])]
        result = generate(repository, parent, axes, sku=SkuConfig(strategy=SKU_SEQUENTIAL))
        assert result.created_count == 2


class TestCombinationLimit:

    def test_refuses_above_limit(self, repository, parent):
        axes = [
            Axis.from_values('A', [str(i) for i in range(10)]),
            Axis.from_values('B', [str(i) for i in range(10)]),
        ]
        with pytest.raises(CombinatorialExplosionWarning) as excinfo:
            generate(repository, parent, axes, options=GenerationOptions(max_combinations=50))

        assert excinfo.value.count == 100
        assert excinfo.value.limit == 50
        assert repository.create_calls == 0

    def test_confirmation_lifts_limit(self, repository, parent):
        axes = [Axis.from_values('A', [str(i) for i in range(6)])]
        result = generate(
            repository, parent, axes,
            options=GenerationOptions(max_combinations=5, confirm_large=True),
        )
        assert result.created_count == 6

    def test_at_limit_is_allowed(self, repository, parent):
        axes = [Axis.from_values('A', ['1', '2', '3'])]
        result = generate(repository, parent, axes, options=GenerationOptions(max_combinations=3))
        assert result.created_count == 3

    def test_default_limit(self):
        assert GenerationOptions().max_combinations == 300


class TestGenerationOptions:

    def test_inherited_fields_and_quantities(self, parent, size_color_axes):
        options = GenerationOptions(
            inherit_fields=('brand', 'meta_title'),
            default_quantity=3,
            custom_quantities={'M-Blue': 9},
            default_attributes={'material': 'cotton'},
            initial_status='published',
        )
        requests = preview(parent, size_color_axes, PricingConfig(), SkuConfig(), options)['requests']

        assert requests[0].inherited_fields == {'brand': 'Acme'}
        assert requests[0].attributes == {'material': 'cotton'}
        assert requests[0].status == 'published'
        assert [r.quantity for r in requests] == [3, 3, 3, 9]

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            GenerationOptions(default_quantity=-1)


class TestPreview:

    def test_preview_does_not_persist(self, repository, parent, priced_axes):
        planned = preview(parent, priced_axes, PricingConfig(strategy=PRICING_AXIS_BASED), SkuConfig())

        assert planned['total'] == 4
        assert planned['price_range'] == {'min': Decimal('100.00'), 'max': Decimal('132.00')}
        assert [r.sku for r in planned['requests']] == [
            'SHIRT-M-BLUE', 'SHIRT-M-RED', 'SHIRT-L-BLUE', 'SHIRT-L-RED'
        ]
        assert repository.create_calls == 0
