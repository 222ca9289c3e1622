"""Grid table parsing ('+---+' borders with '|' delimited rows)"""

import re
from typing import Optional

from rstpub.core.extract.inline import render_inline
from rstpub.core.models import TableBlock


BORDER_RE = re.compile(r'^\+(?:[-=]+\+)+$')


def is_border(line: str) -> bool:
    return BORDER_RE.match(line.strip()) is not None


def is_table_start(lines: list[str], i: int) -> bool:
    """A grid table opens with a border line directly followed by a '|' row."""
    return (
        is_border(lines[i])
        and i + 1 < len(lines)
        and lines[i + 1].strip().startswith("|")
    )


def _columns(border: str) -> list[tuple[int, int]]:
    """(start, end) slice bounds of each cell between '+' joints."""
    joints = [i for i, c in enumerate(border) if c == "+"]
    return [(a + 1, b) for a, b in zip(joints, joints[1:])]


def _cells(row_lines: list[str], columns: list[tuple[int, int]]) -> list[str]:
    cells = []
    for start, end in columns:
        parts = [line[start:end].strip() for line in row_lines]
        cells.append(render_inline(" ".join(p for p in parts if p)))
    return cells


def parse_table(lines: list[str], start: int) -> tuple[Optional[TableBlock], int]:
    """Parse a grid table at lines[start]. Returns (table, next_index).

    Returns (None, next_index) when the grid has no usable rows so the caller
    can fall back to prose.
    """
    end = start
    while end < len(lines) and lines[end].strip()[:1] in ("+", "|"):
        end += 1

    grid = [line.strip() for line in lines[start:end]]
    columns = _columns(grid[0])
    header: list[str] = []
    rows: list[list[str]] = []
    current: list[str] = []

    for line in grid[1:]:
        if not is_border(line):
            current.append(line)
            continue
        if current:
            cells = _cells(current, columns)
            if "=" in line and not header and not rows:
                header = cells
            else:
                rows.append(cells)
            current = []
    if current:
        rows.append(_cells(current, columns))

    if not columns or not (header or rows):
        return None, end
    return TableBlock(header=header, rows=rows), end
