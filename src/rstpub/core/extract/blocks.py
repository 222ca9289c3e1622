"""Line-based body parsing into ordered content blocks"""

from typing import Optional

from rstpub.core.extract.directives import extract_directive, match_directive
from rstpub.core.extract.inline import render_inline
from rstpub.core.extract.lists import build_list, is_list_item
from rstpub.core.extract.tables import is_table_start, parse_table
from rstpub.core.models import HeadingBlock, ParagraphBlock, SnippetRef
from rstpub.core.utils.slug import slugify


HEADING_LEVELS: dict[str, int] = {'=': 2, '-': 3, '~': 4}


def underline_level(line: str) -> Optional[int]:
    """Heading level for a line made solely of one repeated '=', '-' or '~', else None."""
    stripped = line.strip()
    if not stripped or stripped[0] not in HEADING_LEVELS:
        return None
    if stripped != stripped[0] * len(stripped):
        return None
    return HEADING_LEVELS[stripped[0]]


def _opens_math(text: str) -> bool:
    """True when text leaves a '$$' display span open (odd number of delimiters)."""
    return text.count("$$") % 2 == 1


class _BlockParser:
    """Single-pass scanner; directives, headings, lists, and tables take priority over prose."""

    def __init__(self, lines: list[str], title: Optional[str]):
        self.lines = lines
        self.title = title
        self.blocks: list = []
        self.snippet_refs: list[str] = []
        self.paragraph: list[str] = []
        self.in_math = False
        self.seen_heading = False

    def flush(self) -> None:
        if self.paragraph:
            self.blocks.append(ParagraphBlock(text=render_inline("\n".join(self.paragraph))))
        self.paragraph = []
        self.in_math = False

    def heading(self, text: str, level: int) -> None:
        # the first heading repeating the document title is already displayed as the title
        first = not self.seen_heading
        self.seen_heading = True
        if first and self.title and text == self.title:
            return
        self.blocks.append(HeadingBlock(level=level, text=render_inline(text), anchor=slugify(text)))

    def prose(self, line: str) -> None:
        if self.in_math:
            self.paragraph.append(line)
            if _opens_math(line):
                self.in_math = False
            return
        text = line.strip()
        if _opens_math(text):
            # keep trailing characters that now sit inside the open span
            text = line.lstrip()
            self.in_math = True
        self.paragraph.append(text)

    def run(self) -> None:
        lines = self.lines
        i = 0
        while i < len(lines):
            line = lines[i]

            if match_directive(line):
                self.flush()
                block, i = extract_directive(lines, i)
                if isinstance(block, SnippetRef):
                    self.snippet_refs.append(block.snippet_id)
                if block is not None:
                    self.blocks.append(block)
                continue

            if not line.strip():
                self.flush()
                i += 1
                continue

            if self.in_math:
                self.prose(line)
                i += 1
                continue

            level = underline_level(line)
            if (level is not None and i + 2 < len(lines)
                    and lines[i + 1].strip() and lines[i + 2].strip() == line.strip()):
                # overlined title: same adornment above and below
                self.flush()
                self.heading(lines[i + 1].strip(), level)
                i += 3
                continue

            level = underline_level(lines[i + 1]) if i + 1 < len(lines) else None
            if level is not None:
                self.flush()
                self.heading(line.strip(), level)
                i += 2
                continue

            if is_list_item(line):
                self.flush()
                block, i = build_list(lines, i)
                self.blocks.append(block)
                continue

            if is_table_start(lines, i):
                self.flush()
                block, end = parse_table(lines, i)
                if block is None:
                    for raw in lines[i:end]:
                        self.prose(raw)
                else:
                    self.blocks.append(block)
                i = end
                continue

            self.prose(line)
            i += 1
        self.flush()


def parse_blocks(lines: list[str], title: Optional[str] = None) -> tuple[list, list[str]]:
    """Parse body lines into (content_blocks, snippet_refs). Never raises on malformed markup.

    title, when given, suppresses the first heading if its text equals it.
    """
    parser = _BlockParser(lines, title)
    parser.run()
    return parser.blocks, parser.snippet_refs
