"""File discovery, front-matter extraction, and document parsing"""

import re
from pathlib import Path
from typing import Any, Optional

from rstpub.core.extract.blocks import parse_blocks
from rstpub.core.extract.directives import INDENT, match_directive
from rstpub.core.models import FrontMatter, ParsedDoc


DELIMITER = "---"
FIELD_RE = re.compile(r'^\.\.\s+([\w-]+)::\s*(.*)$')
RST_EXTENSIONS = {'.rst'}


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _split_tags(value: str) -> list[str]:
    """'[a, "b"]' or 'a, b' -> ['a', 'b']; empty entries dropped."""
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        value = value[1:-1]
    tags = (_unquote(t.strip()).strip() for t in re.split(r'[,\n]', value))
    return [t for t in tags if t]


def _field_data(fields: dict[str, str]) -> dict[str, Any]:
    data: dict[str, Any] = dict(fields)
    if "tags" in data:
        data["tags"] = _split_tags(data["tags"])
    return data


def _delimited_block(lines: list[str]) -> Optional[tuple[dict[str, str], int]]:
    """Read a '---' bounded key: value block. Returns (fields, body_start) or None."""
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start >= len(lines) or lines[start].strip() != DELIMITER:
        return None

    fields: dict[str, str] = {}
    for i in range(start + 1, len(lines)):
        line = lines[i]
        if line.strip() == DELIMITER:
            return fields, i + 1
        key, sep, value = line.partition(":")
        if sep and key.strip():
            fields[key.strip()] = _unquote(value.strip())
    return None  # unterminated: not front matter


def _is_title_underline(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and stripped == "=" * len(stripped)


def _field_header(lines: list[str]) -> tuple[dict[str, str], int]:
    """Read the leading underlined title and '.. key:: value' fields.

    Collection stops at the first non-indented, non-blank line that is
    neither a field nor the title. Returns (fields, body_start).
    """
    fields: dict[str, str] = {}
    last_key: Optional[str] = None
    i = 0
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        if last_key and line.startswith(INDENT):
            fields[last_key] += "\n" + line.strip()
            i += 1
            continue

        m = FIELD_RE.match(line)
        if m and not match_directive(line):
            last_key = m.group(1).replace("-", "_")
            fields[last_key] = m.group(2).strip()
            i += 1
            continue

        if "title" not in fields:
            # optional overline, then title, then '=' underline
            offset = 1 if _is_title_underline(line) else 0
            if (i + offset + 1 < len(lines)
                    and lines[i + offset].strip()
                    and _is_title_underline(lines[i + offset + 1])):
                fields["title"] = lines[i + offset].strip()
                last_key = None
                i += offset + 2
                continue
        break
    return fields, i


def extract_frontmatter(
    text: str,
    model: type[FrontMatter] = FrontMatter,
    ) -> tuple[FrontMatter, list[str]]:
    """Return (front_matter, body_lines). Tries the '---' block, then the RST header form."""
    lines = text.lstrip("\ufeff").splitlines()
    delimited = _delimited_block(lines)
    if delimited is not None:
        fields, body_start = delimited
    else:
        fields, body_start = _field_header(lines)
    return model.model_validate(_field_data(fields)), lines[body_start:]


def parse_document(
    text: str,
    model: type[FrontMatter] = FrontMatter,
    title: Optional[str] = None,
    ) -> ParsedDoc:
    """Parse raw markup into front matter, content blocks, and snippet references.

    title suppresses a first heading that repeats it; defaults to the
    front-matter title. Malformed markup degrades to paragraphs, never raises.
    """
    frontmatter, body = extract_frontmatter(text, model)
    blocks, refs = parse_blocks(body, frontmatter.title if title is None else title)
    return ParsedDoc(frontmatter=frontmatter, content=blocks, snippet_refs=refs)


def discover_files(path: Path) -> list[Path]:
    """Return sorted .rst files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in RST_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in RST_EXTENSIONS)


def parse_file(
    path: Path,
    model: type[FrontMatter] = FrontMatter,
    title: Optional[str] = None,
    ) -> ParsedDoc:
    """Read and parse a single document. I/O and decoding errors propagate."""
    return parse_document(path.read_text(encoding='utf-8'), model, title)
