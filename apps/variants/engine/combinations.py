from functools import reduce
from typing import Iterator, Sequence

from .axes import Axis, Combination


def count_combinations(axes: Sequence[Axis]) -> int:
    """Size of the Cartesian product, without enumerating it."""
    if not axes:
        return 0
    return reduce(lambda total, axis: total * len(axis), axes, 1)


def iter_combinations(axes: Sequence[Axis]) -> Iterator[Combination]:
    """
    Lazily enumerate the Cartesian product of the axes' values.

    The first axis varies slowest. Only one index per axis is held at a time
    (an odometer), so calling this twice with the same axes yields the same
    sequence and concurrent enumerations never share state.

    An empty axis list, or any axis without values, yields nothing.
    """
    axes = tuple(axes)
    if not axes or any(len(axis) == 0 for axis in axes):
        return

    indexes = [0] * len(axes)
    ordinal = 0
    while True:
        yield Combination(
            axes,
            tuple(axis.values[i] for axis, i in zip(axes, indexes)),
            ordinal,
        )
        ordinal += 1

        # Advance the odometer from the last (fastest) axis
        position = len(axes) - 1
        while position >= 0:
            indexes[position] += 1
            if indexes[position] < len(axes[position]):
                break
            indexes[position] = 0
            position -= 1
        if position < 0:
            return
