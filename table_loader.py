import os
from typing import Dict, Optional, Union

import pandas as pd
from loguru import logger

from row_reorder import DataFrameRowContainer
from sort_engine import SortContext

SUPPORTED_EXTENSIONS = {".csv", ".tsv", ".parquet", ".xlsx", ".h5"}


class UnsupportedFileTypeError(ValueError):
    pass


class MissingEngineError(RuntimeError):
    pass


class TableLoader:
    """Reads every table of a file into DataFrames keyed by table name."""

    DEFAULT_TABLE_NAME = "Sheet1"

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileTypeError(
                "Unsupported file type (use .csv, .tsv, .parquet, .xlsx, or .h5)"
            )

    @property
    def _sep(self) -> str:
        return "\t" if self.ext == ".tsv" else ","

    def load(self) -> Dict[str, pd.DataFrame]:
        if not os.path.exists(self.path):
            raise FileNotFoundError(self.path)
        if os.path.getsize(self.path) == 0:
            return {}

        if self.ext in {".csv", ".tsv"}:
            try:
                # cells as displayed text; "N/A" stays "N/A"
                df = pd.read_csv(
                    self.path, sep=self._sep, dtype=str, keep_default_na=False
                )
            except pd.errors.EmptyDataError:
                return {}
            return self._single(df)
        elif self.ext == ".parquet":
            self._ensure_parquet_engine()
            return self._single(pd.read_parquet(self.path))
        elif self.ext == ".xlsx":
            return self._load_excel()
        return self._load_hdf()

    def save(self, tables: Dict[str, pd.DataFrame]) -> None:
        if not tables:
            return
        if self.ext in {".csv", ".tsv"}:
            df = next(iter(tables.values()))
            df.to_csv(self.path, sep=self._sep, index=False)
        elif self.ext == ".parquet":
            self._ensure_parquet_engine()
            next(iter(tables.values())).to_parquet(self.path)
        elif self.ext == ".xlsx":
            self._ensure_excel_engine()
            with pd.ExcelWriter(self.path) as writer:
                for name, df in tables.items():
                    df.to_excel(writer, index=False, sheet_name=name)
        else:
            self._ensure_hdf_engine()
            with pd.HDFStore(self.path, mode="w") as store:
                for name, df in tables.items():
                    store.put(name, df)

    def _single(self, df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
        cleaned = self._clean(self.DEFAULT_TABLE_NAME, df)
        return {self.DEFAULT_TABLE_NAME: cleaned} if cleaned is not None else {}

    def _clean(self, name: str, df) -> Optional[pd.DataFrame]:
        if not isinstance(df, pd.DataFrame) or df.shape[1] == 0:
            logger.warning("Skipping table {!r}: no columns", name)
            return None
        if not df.index.is_unique:
            logger.warning("Table {!r} has a non-unique index; renumbering rows", name)
            df = df.reset_index(drop=True)
        return df

    def _load_excel(self) -> Dict[str, pd.DataFrame]:
        self._ensure_excel_engine()
        sheets = pd.read_excel(
            self.path, sheet_name=None, dtype=str, keep_default_na=False
        )
        tables = {}
        for name, df in (sheets or {}).items():
            cleaned = self._clean(str(name), df)
            if cleaned is not None:
                tables[str(name)] = cleaned
        return tables

    def _load_hdf(self) -> Dict[str, pd.DataFrame]:
        self._ensure_hdf_engine()
        tables = {}
        with pd.HDFStore(self.path, mode="r") as store:
            for key in store.keys():
                name = key.lstrip("/") or self.DEFAULT_TABLE_NAME
                cleaned = self._clean(name, store.get(key))
                if cleaned is not None:
                    tables[name] = cleaned
        return tables

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        raise MissingEngineError(
            "Parquet support requires pyarrow. Install via: pip install pyarrow"
        )

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        raise MissingEngineError(
            "XLSX support requires openpyxl. Install via: pip install openpyxl"
        )

    def _ensure_hdf_engine(self):
        try:
            import tables  # type: ignore  # noqa: F401

            return
        except ImportError:
            pass
        raise MissingEngineError(
            "HDF5 support requires tables. Install via: pip install tables"
        )


def build_context(
    tables: Dict[str, pd.DataFrame], overrides: Optional[Dict[Union[str, int], str]] = None
) -> SortContext:
    """Register every loaded table in a fresh context, keyed by table name.

    ``overrides`` maps a header name or column index to a comparator name and
    applies to every table that has such a column.
    """
    context = SortContext()
    for name, df in tables.items():
        headers = [str(col) for col in df.columns]
        table_overrides = {
            col: comparator
            for col, comparator in (overrides or {}).items()
            if col in headers or (isinstance(col, int) and 0 <= col < len(headers))
        }
        context.prepare_table(name, DataFrameRowContainer(df, overrides=table_overrides))
    return context
