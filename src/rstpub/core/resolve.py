"""Snippet resolution: replace snippet-ref placeholders with embedded snippet content.

Matching is permissive to tolerate inconsistently authored
references. Rules are tried in order across the whole snippet set, so an
exact match anywhere always beats a fuzzy match earlier in the corpus:

1. the snippet document's identifier
2. its explicit ``snippet_id`` front-matter field
3. its title, exactly as stored
4. the slug of its title, edge hyphens included
5. substring match either way between the lowercased title and the
   reference with hyphens read as spaces (only when ``fuzzy`` is enabled)

Rule 5 can match several snippets; the first in corpus order wins and the
ambiguity is logged.
"""

import logging
from typing import Callable, Iterable, Optional, Sequence

from rstpub.core.models import Document, EmbeddedSnippet, SnippetRef
from rstpub.core.utils.slug import slugify


logger = logging.getLogger(__name__)

Rule = Callable[[str, Document], bool]


def _by_id(ref: str, doc: Document) -> bool:
    return doc.id == ref


def _by_snippet_id(ref: str, doc: Document) -> bool:
    snippet_id = getattr(doc.frontmatter, "snippet_id", "")
    return bool(snippet_id) and snippet_id == ref


def _by_title(ref: str, doc: Document) -> bool:
    return bool(doc.title) and doc.title == ref


def _by_title_slug(ref: str, doc: Document) -> bool:
    return bool(doc.title) and slugify(doc.title, trim=False) == ref


def _by_substring(ref: str, doc: Document) -> bool:
    title = doc.title.lower()
    term = ref.lower().replace("-", " ")
    # an empty title is a substring of everything
    return bool(title) and (term in title or title in term)


EXACT_RULES: tuple[Rule, ...] = (_by_id, _by_snippet_id, _by_title, _by_title_slug)


def find_snippet(
    snippet_id: str,
    snippets: Sequence[Document],
    fuzzy: bool = True,
    ) -> Optional[Document]:
    """Return the snippet a reference points at, or None if no rule matches."""
    ref = snippet_id.strip()
    if not ref:
        return None
    for rule in EXACT_RULES:
        for doc in snippets:
            if rule(ref, doc):
                return doc
    if not fuzzy:
        return None

    matches = [doc for doc in snippets if _by_substring(ref, doc)]
    if len(matches) > 1:
        logger.warning(
            "Ambiguous snippet reference %r matches %s; using %r",
            ref, [d.id for d in matches], matches[0].id,
        )
    return matches[0] if matches else None


def embed(snippet: Document) -> EmbeddedSnippet:
    """Embed a snippet under its canonical identifier."""
    return EmbeddedSnippet(
        snippet_id=snippet.id,
        title=snippet.title or snippet.id,
        body=list(snippet.content),
    )


def resolve_snippets(
    blocks: Iterable,
    snippets: Sequence[Document],
    fuzzy: bool = True,
    ) -> list:
    """Return blocks with each resolvable SnippetRef replaced by an EmbeddedSnippet.

    Non-reference blocks pass through unchanged; unmatched references are kept
    as SnippetRef so consumers can show a diagnostic.
    """
    resolved = []
    for block in blocks:
        if not isinstance(block, SnippetRef):
            resolved.append(block)
            continue
        snippet = find_snippet(block.snippet_id, snippets, fuzzy)
        if snippet is None:
            logger.info("Unresolved snippet reference: %s", block.snippet_id)
            resolved.append(block)
        else:
            resolved.append(embed(snippet))
    return resolved
