"""Corpus compilation: parse each category, resolve snippets, and write all indices"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from rstpub.core.export import (
    write_category_index,
    write_recent,
    write_search_index,
    write_tag_index,
)
from rstpub.core.indexes import build_recent, build_search_index, build_tag_index
from rstpub.core.models import (
    BOOK_INDEX,
    FRONTMATTER_MODELS,
    Book,
    CategoryEnum,
    Document,
    Section,
)
from rstpub.core.parse import discover_files, parse_file
from rstpub.core.resolve import resolve_snippets


logger = logging.getLogger(__name__)

Corpus = dict[CategoryEnum, list[Document]]

INDEX_TITLE = "Introduction"
READ_ERRORS = (OSError, UnicodeDecodeError, ValueError)


def document_id(path: Path, root: Path) -> str:
    """'guides/intro.rst' under root -> 'guides-intro'."""
    return "-".join(path.relative_to(root).with_suffix("").parts)


def compile_document(
    path: Path,
    root: Path,
    category: CategoryEnum,
    snippets: Optional[Sequence[Document]] = None,
    fuzzy: bool = True,
    ) -> Document:
    """Parse one file; articles also get their snippet references resolved."""
    parsed = parse_file(path, FRONTMATTER_MODELS[category])
    content = parsed.content
    if category == CategoryEnum.article and snippets is not None:
        content = resolve_snippets(content, snippets, fuzzy)
    return Document(
        id=document_id(path, root),
        category=category,
        frontmatter=parsed.frontmatter,
        content=content,
        snippet_refs=parsed.snippet_refs,
    )


def compile_category(
    content_dir: Path,
    category: CategoryEnum,
    snippets: Optional[Sequence[Document]] = None,
    fuzzy: bool = True,
    ) -> list[Document]:
    """Compile every document of a flat category; unreadable files are logged and skipped."""
    root = content_dir / category.dirname
    if not root.is_dir():
        logger.info("No %s directory under %s, skipping", category.dirname, content_dir)
        return []

    docs = []
    for path in discover_files(root):
        try:
            doc = compile_document(path, root, category, snippets, fuzzy)
        except READ_ERRORS as e:
            logger.warning("Skipping %s: %s", path, e)
            continue
        logger.debug("Compiled %s -> %s", path, doc.id)
        docs.append(doc)
    logger.info("Compiled %d %s document(s)", len(docs), category.value)
    return docs


def compile_book(book_dir: Path) -> Book:
    """Compile one book folder: the index document plus its sibling section files.

    Sections are the synthetic 'index' section followed by every other file in
    sorted directory order. A section that cannot be read is logged and skipped.
    """
    parsed = parse_file(book_dir / f"{BOOK_INDEX}.rst", FRONTMATTER_MODELS[CategoryEnum.book])
    sections = [Section(
        id=BOOK_INDEX,
        title=parsed.frontmatter.title or INDEX_TITLE,
        content=parsed.content,
    )]

    for path in sorted(book_dir.iterdir()):
        if not path.is_file() or path.suffix != ".rst" or path.stem == BOOK_INDEX:
            continue
        try:
            section = parse_file(path)
        except READ_ERRORS as e:
            logger.warning("Skipping section %s: %s", path, e)
            continue
        sections.append(Section(
            id=path.stem,
            title=section.frontmatter.title or path.stem,
            content=section.content,
        ))

    return Book(
        id=book_dir.name,
        frontmatter=parsed.frontmatter,
        content=parsed.content,
        snippet_refs=parsed.snippet_refs,
        sections=sections,
    )


def compile_books(content_dir: Path) -> list[Book]:
    """Compile every books/<book-id>/ folder that has an index file."""
    root = content_dir / CategoryEnum.book.dirname
    if not root.is_dir():
        logger.info("No %s directory under %s, skipping", root.name, content_dir)
        return []

    books = []
    for book_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        if not (book_dir / f"{BOOK_INDEX}.rst").is_file():
            logger.warning("Skipping book %s: no %s.rst", book_dir.name, BOOK_INDEX)
            continue
        try:
            book = compile_book(book_dir)
        except READ_ERRORS as e:
            logger.warning("Skipping book %s: %s", book_dir.name, e)
            continue
        logger.debug("Compiled book %s with %d section(s)", book.id, len(book.sections))
        books.append(book)
    logger.info("Compiled %d book(s)", len(books))
    return books


def compile_corpus(content_dir: Path, fuzzy: bool = True) -> Corpus:
    """Compile all categories. Snippets are compiled first so articles can embed them."""
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")

    snippets = compile_category(content_dir, CategoryEnum.snippet)
    return {
        CategoryEnum.article: compile_category(content_dir, CategoryEnum.article, snippets, fuzzy),
        CategoryEnum.snippet: snippets,
        CategoryEnum.project: compile_category(content_dir, CategoryEnum.project),
        CategoryEnum.book:    compile_books(content_dir),
    }


def run_compile(
    content_dir: Path,
    output_dir: Path,
    chunk_size: int = 1000,
    recent_limit: int = 5,
    fuzzy: bool = True,
    ) -> list[tuple[str, Path]]:
    """Compile the corpus and write every JSON artifact. Returns (artifact, path) pairs."""
    corpus = compile_corpus(content_dir, fuzzy)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for category, docs in corpus.items():
        paths = write_category_index(docs, category, output_dir, chunk_size)
        written.extend((category.dirname, p) for p in paths)
    written.append(("tags", write_tag_index(build_tag_index(corpus), output_dir)))
    written.append(("search", write_search_index(build_search_index(corpus), output_dir)))
    written.append(("recent", write_recent(build_recent(corpus, recent_limit), output_dir)))
    return written
