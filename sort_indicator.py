from typing import Dict, List, Optional

from column_sort_state import SortDirection
from sort_engine import TableSortState


def indicator_for(direction: Optional[SortDirection], arrows: Dict[str, str]) -> str:
    if direction is None:
        return ""
    return arrows.get(direction.value, "")


def decorate_headers(table: TableSortState, arrows: Dict[str, str]) -> List[str]:
    """Header labels with the arrow glyph appended to the indicator column.

    Only one header per table carries the arrow at a time: the column sorted
    most recently.
    """
    headers = list(table.headers)
    col = table.indicator_column
    if col is None:
        return headers
    state = table.columns[col]
    if not state.is_sorted:
        return headers
    glyph = indicator_for(state.direction, arrows)
    if glyph:
        headers[col] = f"{headers[col]} {glyph}"
    return headers
