#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/renderers/table.py
"""Box-drawn table layout.

While the text renderer walks a ``<table>``, cell text is collected into a
:class:`TableState`. When the table closes, :func:`render_table` turns the
collected header and rows into bordered grid lines::

    ┌────────────┬────────────┐
    │ A          │ B          │
    ├────────────┼────────────┤
    │ 1          │ 22         │
    └────────────┴────────────┘

Column widths come from each column's natural width (its widest cell, at
least ten columns). When the natural widths do not fit, every column is shrunk
in proportion to its natural width and floored. The floor rounding can leave
the grid a few columns narrower than the available width; that imprecision is
intentional and no remainder is redistributed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from inkreflow.constants import (
    BOX_BOTTOM_JOIN,
    BOX_BOTTOM_LEFT,
    BOX_BOTTOM_RIGHT,
    BOX_CROSS,
    BOX_HORIZONTAL,
    BOX_LEFT_JOIN,
    BOX_RIGHT_JOIN,
    BOX_TOP_JOIN,
    BOX_TOP_LEFT,
    BOX_TOP_RIGHT,
    BOX_VERTICAL,
    TABLE_MIN_COLUMN_WIDTH,
)
from inkreflow.utils.text import display_width, pad_to_width


@dataclass
class TableState:
    """Accumulated content of the table currently being read.

    Attributes
    ----------
    in_table : bool
        A ``<table>`` is open
    in_head : bool
        Inside ``<thead>``; rows read here become the header
    in_row : bool
        A ``<tr>`` is open; text is collected only while this is set
    headers : list of str
        Header cells
    rows : list of list of str
        Body rows
    current_row : list of str
        Cells of the open row
    current_cell : str
        Text of the open cell
    row_has_data_cell : bool
        The open row contains at least one ``<td>``
    depth : int
        Nesting depth of ``<table>`` elements (inner tables are flattened)

    """

    in_table: bool = False
    in_head: bool = False
    in_row: bool = False
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    current_row: list[str] = field(default_factory=list)
    current_cell: str = ""
    row_has_data_cell: bool = False
    depth: int = 0

    def start_row(self) -> None:
        """Begin collecting a new row."""
        self.in_row = True
        self.current_row = []
        self.current_cell = ""
        self.row_has_data_cell = False

    def add_text(self, text: str) -> None:
        """Append text to the open cell."""
        self.current_cell += text

    def finish_cell(self) -> None:
        """Close the open cell, normalizing its whitespace."""
        if self.in_row:
            self.current_row.append(" ".join(self.current_cell.split()))
        self.current_cell = ""

    def finish_row(self) -> None:
        """Close the open row and file it as header or body row.

        A row read inside ``<thead>``, or a leading row made only of ``<th>``
        cells, becomes the header.
        """
        if self.in_row and self.current_cell.strip():
            # Cell text without a closing </td>
            self.finish_cell()
        if self.in_row and self.current_row:
            header_like = not self.row_has_data_cell and not self.headers and not self.rows
            if self.in_head or header_like:
                self.headers = self.current_row
            else:
                self.rows.append(self.current_row)
        self.current_row = []
        self.current_cell = ""
        self.in_row = False

    @property
    def has_content(self) -> bool:
        """Whether any header or body cells were collected."""
        return bool(self.headers or self.rows)


def calculate_column_widths(
    headers: list[str], rows: list[list[str]], max_width: int, indent_width: int = 0
) -> list[int]:
    """Compute the content width of every column.

    Parameters
    ----------
    headers : list of str
        Header cells (may be empty)
    rows : list of list of str
        Body rows; rows may have differing lengths
    max_width : int
        Total width available to the table
    indent_width : int, default 0
        Display width of the indent placed before every table line

    Returns
    -------
    list of int
        One width per column, each at least ten; empty if there are no columns

    """
    num_cols = max([len(headers)] + [len(row) for row in rows])
    if num_cols == 0:
        return []

    borders_width = 2 + (num_cols - 1)
    padding_width = num_cols * 2
    available = max_width - indent_width - borders_width - padding_width
    if available < num_cols * TABLE_MIN_COLUMN_WIDTH:
        available = num_cols * TABLE_MIN_COLUMN_WIDTH

    natural_widths = []
    for col in range(num_cols):
        width = display_width(headers[col]) if col < len(headers) else 0
        for row in rows:
            if col < len(row):
                width = max(width, display_width(row[col]))
        natural_widths.append(max(width, TABLE_MIN_COLUMN_WIDTH))

    total_natural = sum(natural_widths)
    if total_natural <= available:
        return natural_widths

    return [max(int(width / total_natural * available), TABLE_MIN_COLUMN_WIDTH) for width in natural_widths]


def wrap_cell_text(text: str, width: int) -> list[str]:
    """Greedy word-wrap ``text`` to ``width`` columns.

    Newlines are treated as spaces. A word wider than the column stays whole
    on its own line.

    Examples
    --------
        >>> wrap_cell_text("alpha beta gamma", 10)
        ['alpha beta', 'gamma']

    """
    text = text.replace("\r", " ").replace("\n", " ")
    if display_width(text) <= width:
        return [text]

    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = word if not current else f"{current} {word}"
        if display_width(candidate) <= width:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)

    return lines or [""]


def pad_cell(text: str, width: int) -> str:
    """Blank-pad one wrapped cell line to the column width."""
    return pad_to_width(text, width)


def render_row(cells: list[str], col_widths: list[int], indent: str = "") -> list[str]:
    """Render one table row, possibly several lines tall."""
    wrapped = [
        wrap_cell_text(cells[col], width) if col < len(cells) else [""] for col, width in enumerate(col_widths)
    ]
    height = max(len(cell_lines) for cell_lines in wrapped)

    lines = []
    for line_idx in range(height):
        parts = [indent, BOX_VERTICAL]
        for col, width in enumerate(col_widths):
            cell_line = wrapped[col][line_idx] if line_idx < len(wrapped[col]) else ""
            parts.append(f" {pad_cell(cell_line, width)} {BOX_VERTICAL}")
        lines.append("".join(parts))
    return lines


def render_border(col_widths: list[int], indent: str, left: str, middle: str, right: str) -> str:
    """Render a horizontal border spanning every column and its padding."""
    segments = [BOX_HORIZONTAL * (width + 2) for width in col_widths]
    return f"{indent}{left}{middle.join(segments)}{right}"


def render_table(table: TableState, max_width: int, indent: str = "") -> list[str]:
    """Render the collected table as bordered grid lines.

    Parameters
    ----------
    table : TableState
        Collected headers and rows
    max_width : int
        Width available to the table, including the indent
    indent : str, default ""
        Prefix placed before every line

    Returns
    -------
    list of str
        Top border, header lines and header separator (when there is a
        header), body rows separated by row separators, bottom border. Empty
        when the table has no columns.

    """
    col_widths = calculate_column_widths(table.headers, table.rows, max_width, display_width(indent))
    if not col_widths:
        return []

    lines = [render_border(col_widths, indent, BOX_TOP_LEFT, BOX_TOP_JOIN, BOX_TOP_RIGHT)]

    if table.headers:
        lines.extend(render_row(table.headers, col_widths, indent))
        lines.append(render_border(col_widths, indent, BOX_LEFT_JOIN, BOX_CROSS, BOX_RIGHT_JOIN))

    for row_idx, row in enumerate(table.rows):
        lines.extend(render_row(row, col_widths, indent))
        if row_idx < len(table.rows) - 1:
            lines.append(render_border(col_widths, indent, BOX_LEFT_JOIN, BOX_CROSS, BOX_RIGHT_JOIN))

    lines.append(render_border(col_widths, indent, BOX_BOTTOM_LEFT, BOX_BOTTOM_JOIN, BOX_BOTTOM_RIGHT))
    return lines


__all__ = [
    "TableState",
    "calculate_column_widths",
    "wrap_cell_text",
    "pad_cell",
    "render_row",
    "render_border",
    "render_table",
]
