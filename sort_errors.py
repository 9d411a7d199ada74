class SortError(Exception):
    """Base class for precondition violations raised by the sort engine."""


class UnknownTableError(SortError, KeyError):
    def __init__(self, table_id):
        super().__init__(f"Unknown table: {table_id!r}")
        self.table_id = table_id

    def __str__(self):
        return self.args[0]


class DuplicateTableError(SortError, ValueError):
    def __init__(self, table_id):
        super().__init__(f"Table id already registered: {table_id!r}")
        self.table_id = table_id


class ColumnIndexError(SortError, IndexError):
    def __init__(self, table_id, column_index: int, column_count: int):
        super().__init__(
            f"Column {column_index} out of range for table {table_id!r} "
            f"({column_count} columns)"
        )
        self.table_id = table_id
        self.column_index = column_index
        self.column_count = column_count


class TableStructureError(SortError, ValueError):
    pass


class UnknownComparatorError(SortError, KeyError):
    def __init__(self, name):
        super().__init__(f"Unknown comparator: {name!r}")
        self.name = name

    def __str__(self):
        return self.args[0]


class ComparatorAlreadyAssignedError(SortError, ValueError):
    pass
