from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import pandas as pd
from loguru import logger

from sort_errors import TableStructureError


class RowContainer:
    """Row collection of one table as seen by the sort engine.

    Rows are opaque references; the engine only reads cells through
    ``cells`` and ``first_cell`` and commits orders through ``replace_rows``.
    """

    headers: List[str]
    overrides: Dict[int, str]

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def rows(self) -> List[Any]:
        raise NotImplementedError

    def cells(self, column_index: int) -> Iterator[Tuple[Any, Any]]:
        raise NotImplementedError

    def first_cell(self, column_index: int):
        for _, cell in self.cells(column_index):
            return cell
        return None

    def replace_rows(self, ordered: Sequence[Any]) -> None:
        raise NotImplementedError


def _normalize_overrides(overrides, headers: List[str]) -> Dict[int, str]:
    """Accept overrides keyed by column index or header name."""
    resolved: Dict[int, str] = {}
    for key, name in (overrides or {}).items():
        if name is None:
            continue
        if isinstance(key, int) and not isinstance(key, bool):
            resolved[key] = name
        elif key in headers:
            resolved[headers.index(key)] = name
        else:
            logger.warning("Override for unknown column {!r} ignored", key)
    return resolved


class ListRowContainer(RowContainer):
    """Rows held as sequences of cells in a plain list, reordered in place."""

    def __init__(
        self,
        rows: List[Sequence[Any]],
        headers: Optional[Iterable[Any]] = None,
        overrides: Optional[Dict[Any, str]] = None,
    ):
        self._rows = rows
        if headers is None:
            width = len(rows[0]) if rows else 0
            headers = [str(i) for i in range(width)]
        self.headers = [str(h) for h in headers]
        if not self.headers:
            raise TableStructureError("Table has no header columns")
        self.overrides = _normalize_overrides(overrides, self.headers)

    def rows(self) -> List[Any]:
        return list(self._rows)

    def cells(self, column_index: int):
        for row in self._rows:
            cell = row[column_index] if column_index < len(row) else None
            yield row, cell

    def replace_rows(self, ordered: Sequence[Any]) -> None:
        # rows are usually unhashable lists, so membership goes by identity
        placed = {id(row) for row in ordered}
        leading = [row for row in self._rows if id(row) not in placed]
        self._rows[:] = leading + list(ordered)


class DataFrameRowContainer(RowContainer):
    """Rows of a DataFrame, referenced by their (unique) index labels."""

    def __init__(self, df: pd.DataFrame, overrides: Optional[Dict[Any, str]] = None):
        if df.shape[1] == 0:
            raise TableStructureError("Table has no header columns")
        if not df.index.is_unique:
            raise TableStructureError("DataFrame index must be unique to sort rows")
        self.df = df
        self.headers = [str(col) for col in df.columns]
        self.overrides = _normalize_overrides(overrides, self.headers)

    def rows(self) -> List[Any]:
        return list(self.df.index)

    def cells(self, column_index: int):
        return zip(self.df.index, self.df.iloc[:, column_index])

    def first_cell(self, column_index: int):
        if len(self.df) == 0:
            return None
        return self.df.iat[0, column_index]

    def replace_rows(self, ordered: Sequence[Any]) -> None:
        present = set(self.df.index)
        labels = [label for label in ordered if label in present]
        placed = set(labels)
        leading = [label for label in self.df.index if label not in placed]
        self.df = self.df.loc[leading + labels]


def apply_row_order(container: RowContainer, ordered: Sequence[Any]) -> None:
    """Commit ``ordered`` to the container in a single update."""
    logger.debug("Applying order of {} rows", len(ordered))
    container.replace_rows(ordered)
