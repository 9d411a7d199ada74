from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from comparators import COMPARATORS, Comparator, ComparatorName
from sort_errors import ComparatorAlreadyAssignedError


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclass
class ColumnSortState:
    """Sort bookkeeping for one header column of one table."""

    comparator: Optional[ComparatorName] = None
    direction: SortDirection = SortDirection.ASCENDING
    is_sorted: bool = False
    # ascending (key, row) pairs from the first sort; rows are shared references
    cached_order: List[Tuple[str, Any]] = field(default_factory=list)

    def assign_comparator(self, name: ComparatorName) -> None:
        if self.comparator is not None and self.comparator != name:
            raise ComparatorAlreadyAssignedError(
                f"Comparator already set to {self.comparator.value!r}"
            )
        self.comparator = name

    @property
    def compare(self) -> Optional[Comparator]:
        if self.comparator is None:
            return None
        return COMPARATORS[self.comparator]

    def ordered_rows(self) -> List[Any]:
        if self.direction is SortDirection.DESCENDING:
            return [row for _, row in reversed(self.cached_order)]
        return [row for _, row in self.cached_order]

    def reset(self) -> None:
        """Forget the cached order so the next sort rescans the rows.

        The comparator is kept.
        """
        self.direction = SortDirection.ASCENDING
        self.is_sorted = False
        self.cached_order = []
