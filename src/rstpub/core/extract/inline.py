"""Inline emphasis transforms for prose, with math spans passed through untouched"""

import re

from markdown_it import MarkdownIt


# Display math first so '$$x$$' is never read as two inline spans.
MATH_RE = re.compile(r'\$\$.+?\$\$|\$[^$\n]+?\$', re.DOTALL)
_PLACEHOLDER_RE = re.compile('\ue000(\\d+)\ue001')
# '_' is not an emphasis marker in this dialect; hide it from the renderer.
_UNDERSCORE = '\ue002'


def _make_renderer() -> MarkdownIt:
    """Inline-only renderer: **strong**, *emphasis*, `code`, backslash escapes, nothing else."""
    return MarkdownIt("zero").enable(["emphasis", "backticks", "escape"])


_renderer = _make_renderer()


def protect_math(text: str) -> tuple[str, list[str]]:
    """Replace each $/$$ span with an opaque placeholder. Returns (text, spans)."""
    spans: list[str] = []

    def _stash(match: re.Match) -> str:
        spans.append(match.group(0))
        return f"\ue000{len(spans) - 1}\ue001"

    return MATH_RE.sub(_stash, text), spans


def restore_math(text: str, spans: list[str]) -> str:
    """Put stashed math spans back in place of their placeholders."""
    return _PLACEHOLDER_RE.sub(lambda m: spans[int(m.group(1))], text)


def render_inline(text: str) -> str:
    """Convert inline emphasis to markup; call once per logical unit of prose."""
    protected, spans = protect_math(text)
    rendered = _renderer.renderInline(protected.replace('_', _UNDERSCORE))
    return restore_math(rendered.replace(_UNDERSCORE, '_'), spans)
