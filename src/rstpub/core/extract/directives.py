"""Directive capture: snippet-card, code-block, and toctree bodies"""

import re
from typing import Optional

from rstpub.core.extract.inline import render_inline
from rstpub.core.models import CodeBlock, ParagraphBlock, SnippetRef, TocTree


DIRECTIVE_RE = re.compile(r'^\.\. (snippet-card|code-block|toctree)::(.*)$')
OPTION_RE = re.compile(r'^:[\w-]+:')
INDENT = "   "                  # directive bodies are indented by exactly three spaces
DEFAULT_LANGUAGE = "text"


def match_directive(line: str) -> Optional[tuple[str, str]]:
    """Return (name, argument) if line opens a recognized directive, else None."""
    m = DIRECTIVE_RE.match(line)
    if not m:
        return None
    return m.group(1), m.group(2).strip()


def capture_body(lines: list[str], start: int) -> tuple[list[str], int]:
    """Collect blank or indented lines from start, stripping one indent level.

    Returns (body_lines, next_index) where next_index is the first line that
    is neither blank nor indented, i.e. the line that closes the directive.
    """
    body: list[str] = []
    i = start
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            body.append("")
        elif line.startswith(INDENT):
            body.append(line[len(INDENT):])
        else:
            break
        i += 1
    return body, i


def _code_block(language: str, body: list[str]) -> CodeBlock:
    lines = list(body)
    while lines and not lines[0].strip():
        lines.pop(0)
    # leading ':option:' lines belong to the directive, not the code
    while lines and OPTION_RE.match(lines[0]):
        lines.pop(0)
    while lines and not lines[0].strip():
        lines.pop(0)
    text = "\n".join(lines).rstrip()
    return CodeBlock(language=language or DEFAULT_LANGUAGE, body=f"{text}\n" if text else "")


def toc_label(entry: str) -> str:
    """'getting-started' -> 'Getting Started'."""
    return " ".join(word[:1].upper() + word[1:] for word in entry.split("-"))


def _toctree(body: list[str]) -> Optional[TocTree]:
    entries = []
    for line in body:
        entry = line.strip()
        if not entry or entry.startswith(":"):
            continue
        if any(c in entry for c in " \"'"):
            continue
        entries.append(toc_label(entry))
    return TocTree(entries=entries) if entries else None


def extract_directive(lines: list[str], start: int):
    """Parse the directive opened at lines[start].

    Returns (block, next_index). block is None when the directive yields no
    content (an empty toctree). A snippet-card without an id degrades to a
    paragraph holding the raw directive line.
    """
    name, arg = match_directive(lines[start])
    body, end = capture_body(lines, start + 1)

    if name == "snippet-card":
        # indented lines under a snippet-card are options, not content
        if not arg:
            return ParagraphBlock(text=render_inline(lines[start].strip())), end
        return SnippetRef(snippet_id=arg), end
    if name == "code-block":
        return _code_block(arg, body), end
    return _toctree(body), end
