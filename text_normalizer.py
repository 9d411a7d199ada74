import pandas as pd


def get_cell_text(cell) -> str:
    """Visible text of a cell with surrounding whitespace removed."""
    if cell is None:
        return ""
    text = getattr(cell, "text_content", None)
    if text is None:
        if pd.api.types.is_scalar(cell) and pd.isna(cell):
            return ""
        text = cell
    return str(text).strip()
