"""Page slicing for filtered record lists."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, items_per_page: int) -> list[T]:
    """Return one page of ``items``. Pages past the end are empty."""
    start_index = (page - 1) * items_per_page
    if start_index < 0:
        return []
    return list(items[start_index : start_index + items_per_page])
