"""Shared fixtures for bodytrace tests."""

import pytest

from bodytrace.domain import Mask, MaskSpec


def block_values(width: int, height: int, x0: int, y0: int, size: int, value: float = 1) -> list[float]:
    """Flat row-major data with a filled size x size block at (x0, y0)."""
    data = [0.0] * (width * height)
    for y in range(y0, y0 + size):
        for x in range(x0, x0 + size):
            data[y * width + x] = value
    return data


@pytest.fixture
def block_spec() -> MaskSpec:
    """20x20 mask with a filled 10x10 block surrounded by background."""
    return MaskSpec(width=20, height=20, data=block_values(20, 20, 5, 5, 10))


@pytest.fixture
def block_mask(block_spec: MaskSpec) -> Mask:
    """Binary version of block_spec."""
    return Mask(
        width=block_spec.width,
        height=block_spec.height,
        cells=bytes(int(v) for v in block_spec.data),
    )


@pytest.fixture
def empty_spec() -> MaskSpec:
    """All-background 16x16 mask."""
    return MaskSpec(width=16, height=16, data=[0] * 256)
