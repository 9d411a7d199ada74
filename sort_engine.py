from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Callable, Dict, Hashable, List, Optional

from loguru import logger

from column_sort_state import ColumnSortState, SortDirection
from comparators import Comparator, ComparatorName, comparator_by_name, lookup_name
from row_reorder import RowContainer, apply_row_order
from sort_errors import ColumnIndexError, DuplicateTableError, UnknownTableError
from text_normalizer import get_cell_text
from type_classifier import classify


@dataclass
class TableSortState:
    table_id: Hashable
    container: RowContainer
    columns: List[ColumnSortState]
    # column whose header currently carries the direction indicator
    indicator_column: Optional[int] = None

    @property
    def headers(self) -> List[str]:
        return self.container.headers

    def column(self, column_index: int) -> ColumnSortState:
        if not 0 <= column_index < len(self.columns):
            raise ColumnIndexError(self.table_id, column_index, len(self.columns))
        return self.columns[column_index]


@dataclass
class SortResult:
    table_id: Hashable
    column_index: int
    direction: SortDirection
    rows: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class DirectionChange:
    table_id: Hashable
    column_index: int
    direction: SortDirection


class SortContext:
    """Tables prepared for sorting in one session.

    Owned by the calling application and handed to ``SortEngine``; separate
    contexts never share state.
    """

    def __init__(self):
        self._tables: Dict[Hashable, TableSortState] = {}

    def prepare_table(self, table_id: Hashable, container: RowContainer) -> TableSortState:
        if table_id in self._tables:
            raise DuplicateTableError(table_id)
        columns = []
        has_rows = bool(container.rows())
        for idx in range(container.column_count):
            state = ColumnSortState()
            override = container.overrides.get(idx)
            if has_rows or lookup_name(override) is not None:
                sample = get_cell_text(container.first_cell(idx)) if has_rows else ""
                state.assign_comparator(classify(sample, override))
            columns.append(state)
        table = TableSortState(table_id=table_id, container=container, columns=columns)
        self._tables[table_id] = table
        logger.debug(
            "Prepared table {!r}: {}",
            table_id,
            [c.comparator.value if c.comparator else None for c in columns],
        )
        return table

    def table(self, table_id: Hashable) -> TableSortState:
        try:
            return self._tables[table_id]
        except KeyError:
            raise UnknownTableError(table_id) from None

    def table_ids(self) -> List[Hashable]:
        return list(self._tables.keys())

    def discard_table(self, table_id: Hashable) -> None:
        if self._tables.pop(table_id, None) is None:
            raise UnknownTableError(table_id)

    def reset_column(self, table_id: Hashable, column_index: int) -> None:
        table = self.table(table_id)
        table.column(column_index).reset()
        if table.indicator_column == column_index:
            table.indicator_column = None

    def reset_table(self, table_id: Hashable) -> None:
        table = self.table(table_id)
        for state in table.columns:
            state.reset()
        table.indicator_column = None

    def __contains__(self, table_id) -> bool:
        return table_id in self._tables

    def __len__(self) -> int:
        return len(self._tables)


DirectionListener = Callable[[DirectionChange], None]


class SortEngine:
    def __init__(self, context: SortContext, listeners: Optional[List[DirectionListener]] = None):
        self.context = context
        self._listeners: List[DirectionListener] = list(listeners or [])

    # ----- collaborator helpers -----
    @staticmethod
    def classify(sample: str, override=None) -> ComparatorName:
        return classify(sample, override)

    @staticmethod
    def comparator_by_name(name) -> Comparator:
        return comparator_by_name(name)

    def add_listener(self, listener: DirectionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: DirectionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def direction(self, table_id: Hashable, column_index: int) -> Optional[SortDirection]:
        """Current direction of a column, or None if it was never sorted."""
        state = self.context.table(table_id).column(column_index)
        return state.direction if state.is_sorted else None

    # ----- sorting -----
    def sort(self, table_id: Hashable, column_index: int) -> SortResult:
        table = self.context.table(table_id)
        state = table.column(column_index)

        if state.is_sorted:
            state.direction = state.direction.flipped()
            logger.debug(
                "Toggled table {!r} column {} to {}",
                table_id,
                column_index,
                state.direction.value,
            )
        else:
            self._build_cache(table, column_index, state)

        ordered = state.ordered_rows()
        apply_row_order(table.container, ordered)
        table.indicator_column = column_index

        change = DirectionChange(table_id, column_index, state.direction)
        for listener in list(self._listeners):
            listener(change)

        return SortResult(
            table_id=table_id,
            column_index=column_index,
            direction=state.direction,
            rows=ordered,
        )

    def _build_cache(self, table: TableSortState, column_index: int, state: ColumnSortState):
        pairs = [
            (get_cell_text(cell), row) for row, cell in table.container.cells(column_index)
        ]
        # a column of a table prepared without rows is classified on first use
        if state.comparator is None and pairs:
            state.assign_comparator(
                classify(pairs[0][0], table.container.overrides.get(column_index))
            )
        if pairs:
            # sorted() is stable, so equal keys keep their original relative order
            state.cached_order = sorted(pairs, key=cmp_to_key(state.compare))
        else:
            state.cached_order = []
        state.is_sorted = True
        state.direction = SortDirection.ASCENDING
        logger.debug(
            "Sorted table {!r} column {} ({}) over {} rows",
            table.table_id,
            column_index,
            state.comparator.value if state.comparator else "unclassified",
            len(pairs),
        )
