"""Nested list construction from bullet and numbered lines by indentation"""

import re

from rstpub.core.extract.inline import render_inline
from rstpub.core.models import ListBlock, ListItem


LIST_ITEM_RE = re.compile(r'^(\d+\.|\*|-)\s+(.*)$')
MAX_NESTING = 32              # deeper items stay at the deepest level


def indent_of(line: str) -> int:
    """Column of the first non-whitespace character."""
    return len(line) - len(line.lstrip())


def match_item(line: str):
    """Return the list-marker match for line (leading whitespace ignored), else None."""
    return LIST_ITEM_RE.match(line.strip())


def is_list_item(line: str) -> bool:
    return match_item(line) is not None


def is_ordered(m) -> bool:
    return m.group(1)[0].isdigit()


def _next_nonblank(lines: list[str], i: int) -> int:
    while i < len(lines) and not lines[i].strip():
        i += 1
    return i


def _item(parts: list[str], children: list[ListBlock]) -> ListItem:
    nested = None
    if children:
        # several deeper runs under one item merge into a single child list
        nested = ListBlock(
            ordered=children[0].ordered,
            items=[item for child in children for item in child.items],
        )
    return ListItem(text=render_inline("\n".join(parts)), children=nested)


def _continues(lines: list[str], j: int, column: int, ordered: bool) -> bool:
    """True when the item at lines[j], after blank lines, still belongs to this list."""
    if j >= len(lines):
        return False
    m = match_item(lines[j])
    if m is None:
        return False
    # a sibling with the other marker kind starts a new list
    return indent_of(lines[j]) != column or is_ordered(m) == ordered


def build_list(lines: list[str], start: int, depth: int = 0) -> tuple[ListBlock, int]:
    """Parse the list whose first item is lines[start]. Returns (list, next_index).

    The first item fixes this level's indentation column. Deeper items are
    parsed recursively into a child list of the preceding item; a shallower
    item ends this level. Each recursive call consumes at least one line.
    Below MAX_NESTING levels, deeper items are kept as siblings.
    """
    column = indent_of(lines[start])
    ordered = is_ordered(match_item(lines[start]))
    pending: list[tuple[list[str], list[ListBlock]]] = []
    i = start

    while i < len(lines):
        line = lines[i]
        if not line.strip():
            j = _next_nonblank(lines, i)
            if _continues(lines, j, column, ordered):
                i = j
                continue
            break

        m = match_item(line)
        col = indent_of(line)
        if m is None:
            if pending and col > column:
                pending[-1][0].append(line.strip())
                i += 1
                continue
            break
        if col > column and pending and depth < MAX_NESTING:
            child, i = build_list(lines, i, depth + 1)
            pending[-1][1].append(child)
            continue
        if col < column:
            break
        pending.append(([m.group(2).strip()], []))
        i += 1

    return ListBlock(ordered=ordered, items=[_item(p, c) for p, c in pending]), i
