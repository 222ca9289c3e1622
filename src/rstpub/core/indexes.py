"""Derived indices over a compiled corpus: tags, search documents, recent content"""

import html
import re
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from rstpub.core.models import (
    BOOK_INDEX,
    Book,
    CategoryEnum,
    Document,
    EmbeddedSnippet,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    SearchDocument,
    TableBlock,
    TagEntry,
    TagRef,
    TocTree,
)


TAG_RE = re.compile(r'<[^>]*>')


def build_tag_index(corpus: Mapping[CategoryEnum, Sequence[Document]]) -> list[TagEntry]:
    """Aggregate tags across all documents, sorted by count desc then name.

    A tag repeated within one document's front matter counts once.
    """
    entries: dict[str, TagEntry] = {}
    for category, docs in corpus.items():
        for doc in docs:
            for tag in dict.fromkeys(doc.frontmatter.tags):
                entry = entries.setdefault(tag, TagEntry(name=tag))
                entry.count += 1
                entry.items.append(TagRef(id=doc.id, title=doc.title, category=category))
    return sorted(entries.values(), key=lambda e: (-e.count, e.name))


def _list_text(block: ListBlock) -> Iterator[str]:
    for item in block.items:
        yield item.text
        if item.children is not None:
            yield from _list_text(item.children)


def block_text(blocks: Iterable) -> Iterator[str]:
    """Yield the prose payload of each block in reading order; code and unresolved refs carry none."""
    for block in blocks:
        if isinstance(block, (HeadingBlock, ParagraphBlock)):
            yield block.text
        elif isinstance(block, ListBlock):
            yield from _list_text(block)
        elif isinstance(block, TableBlock):
            yield from block.header
            for row in block.rows:
                yield from row
        elif isinstance(block, EmbeddedSnippet):
            yield block.title
            yield from block_text(block.body)
        elif isinstance(block, TocTree):
            yield from block.entries


def strip_markup(text: str) -> str:
    """Remove inline tags and decode entities, leaving plain text."""
    return html.unescape(TAG_RE.sub('', text))


def flatten(doc: Document) -> str:
    """Plain text of a document, book sections included, joined by single spaces."""
    parts = list(block_text(doc.content))
    if isinstance(doc, Book):
        for section in doc.sections:
            # the index section repeats the book's own content
            if section.id != BOOK_INDEX:
                parts.extend(block_text(section.content))
    return strip_markup(" ".join(p for p in parts if p))


def document_url(category: CategoryEnum, doc_id: str) -> str:
    return f"/{category.dirname}/{doc_id}"


def build_search_index(corpus: Mapping[CategoryEnum, Sequence[Document]]) -> list[SearchDocument]:
    """One flat SearchDocument per compiled document."""
    return [
        SearchDocument(
            id=doc.id,
            category=category,
            title=doc.title or "Untitled",
            content=flatten(doc),
            tags=list(doc.frontmatter.tags),
            date=doc.frontmatter.date,
            url=document_url(category, doc.id),
        )
        for category, docs in corpus.items()
        for doc in docs
    ]


def search(
    documents: Iterable[SearchDocument],
    query: str,
    category: Optional[CategoryEnum] = None,
    ) -> list[SearchDocument]:
    """Case-insensitive substring match over title, content, and tags."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        d for d in documents
        if (category is None or d.category == category)
        and (
            needle in d.title.lower()
            or needle in d.content.lower()
            or any(needle in t.lower() for t in d.tags)
        )
    ]


def build_recent(
    corpus: Mapping[CategoryEnum, Sequence[Document]],
    limit: int = 5,
    ) -> dict[str, list[dict]]:
    """Most recent documents per category by date (newest first, ties by id)."""
    recent = {}
    for category, docs in corpus.items():
        by_id = sorted(docs, key=lambda d: d.id)
        newest = sorted(by_id, key=lambda d: d.frontmatter.date, reverse=True)[:limit]
        recent[category.dirname] = [
            {
                "id": d.id,
                "title": d.title or "Untitled",
                "date": d.frontmatter.date,
                "tags": list(d.frontmatter.tags),
                "category": category.value,
            }
            for d in newest
        ]
    return recent
