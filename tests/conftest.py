"""Shared builders for serialized Hack Man fields."""

from typing import Dict, Tuple

import pytest


def build_field(width: int, height: int, cells: Dict[Tuple[int, int], str] = None, default: str = ".") -> str:
    """Row-major, comma-separated field with ``cells`` overriding ``default``."""
    cells = cells or {}
    descriptors = []
    for y in range(height):
        for x in range(width):
            descriptors.append(cells.get((x, y), default))
    return ",".join(descriptors)


@pytest.fixture
def make_field():
    return build_field
