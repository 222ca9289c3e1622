"""Unit tests for core/indexes.py"""

import pytest

from rstpub.core.indexes import (
    build_recent,
    build_search_index,
    build_tag_index,
    document_url,
    flatten,
    search,
    strip_markup,
)
from rstpub.core.models import (
    BOOK_INDEX,
    ArticleFrontMatter,
    Book,
    BookFrontMatter,
    CategoryEnum,
    CodeBlock,
    Document,
    EmbeddedSnippet,
    HeadingBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    Section,
    SnippetRef,
    TableBlock,
)


def _article(doc_id: str, title: str = "", date: str = "", tags: list = None, content: list = None) -> Document:
    return Document(
        id=doc_id,
        category=CategoryEnum.article,
        frontmatter=ArticleFrontMatter(title=title, date=date, tags=tags or []),
        content=content or [],
    )


@pytest.fixture(name="corpus")
def corpus_fixture():
    return {
        CategoryEnum.article: [
            _article("a1", "First", "2024-01-01", ["x", "y"], [ParagraphBlock(text="Alpha **raw**")]),
            _article("a2", "Second", "2024-02-01", ["x"], [ParagraphBlock(text="Beta")]),
        ],
        CategoryEnum.project: [],
    }


# --- tags ---

def test_tag_counts_and_order(corpus):
    """Tags are sorted by count descending; each entry lists its documents."""
    entries = build_tag_index(corpus)
    assert [(e.name, e.count) for e in entries] == [("x", 2), ("y", 1)]
    assert [ref.id for ref in entries[0].items] == ["a1", "a2"]
    assert entries[0].items[0].title == "First"
    assert entries[0].items[0].category == CategoryEnum.article


def test_tag_ties_broken_by_name():
    corpus = {CategoryEnum.article: [_article("a", tags=["zeta", "alpha", "mid"])]}
    assert [e.name for e in build_tag_index(corpus)] == ["alpha", "mid", "zeta"]


def test_duplicate_tag_in_one_document_counts_once():
    corpus = {CategoryEnum.article: [_article("a", tags=["x", "x"])]}
    entries = build_tag_index(corpus)
    assert entries[0].count == 1
    assert len(entries[0].items) == 1


def test_tag_index_empty():
    assert build_tag_index({}) == []


# --- flattening ---

def test_strip_markup():
    assert strip_markup("<strong>a</strong> &amp; <em>b</em>") == "a & b"


def test_flatten_excludes_code_and_unresolved_refs():
    doc = _article("d", content=[
        HeadingBlock(level=2, text="Head", anchor="head"),
        CodeBlock(language="py", body="secret_code()\n"),
        SnippetRef(snippet_id="missing-ref"),
        ListBlock(items=[ListItem(text="one", children=ListBlock(items=[ListItem(text="<em>two</em>")]))]),
        TableBlock(header=["h"], rows=[["cell"]]),
        EmbeddedSnippet(snippet_id="s", title="Snip", body=[ParagraphBlock(text="inside")]),
    ])
    text = flatten(doc)
    assert text == "Head one two h cell Snip inside"
    assert "secret_code" not in text
    assert "missing-ref" not in text


def test_flatten_book_skips_index_section():
    content = [ParagraphBlock(text="Welcome")]
    book = Book(
        id="guide",
        frontmatter=BookFrontMatter(title="Guide"),
        content=content,
        sections=[
            Section(id=BOOK_INDEX, title="Guide", content=content),
            Section(id="setup", title="Setup", content=[ParagraphBlock(text="Install")]),
        ],
    )
    assert flatten(book) == "Welcome Install"


# --- search index ---

def test_build_search_index(corpus):
    docs = build_search_index(corpus)
    assert [d.id for d in docs] == ["a1", "a2"]
    first = docs[0]
    assert first.title == "First"
    assert first.content == "Alpha **raw**"
    assert first.tags == ["x", "y"]
    assert first.date == "2024-01-01"
    assert first.url == "/articles/a1"


def test_search_index_untitled_fallback():
    docs = build_search_index({CategoryEnum.article: [_article("nameless")]})
    assert docs[0].title == "Untitled"


def test_document_url():
    assert document_url(CategoryEnum.book, "guide") == "/books/guide"


@pytest.mark.parametrize("query,expected", [
    ("first", ["a1"]),          # title, case-insensitive
    ("BETA", ["a2"]),           # content
    ("y", ["a1"]),              # tag
    ("x", ["a1", "a2"]),
    ("zzz", []),
    ("   ", []),
])
def test_search(corpus, query, expected):
    docs = build_search_index(corpus)
    assert [d.id for d in search(docs, query)] == expected


def test_search_category_filter(corpus):
    docs = build_search_index(corpus)
    assert search(docs, "x", CategoryEnum.project) == []
    assert len(search(docs, "x", CategoryEnum.article)) == 2


# --- recent ---

def test_build_recent_newest_first_with_limit():
    docs = [
        _article("old", "Old", "2023-01-01"),
        _article("new", "New", "2024-06-01"),
        _article("mid", "Mid", "2024-01-01"),
    ]
    recent = build_recent({CategoryEnum.article: docs}, limit=2)
    assert [r["id"] for r in recent["articles"]] == ["new", "mid"]
    assert recent["articles"][0] == {
        "id": "new", "title": "New", "date": "2024-06-01", "tags": [], "category": "article",
    }


def test_build_recent_ties_by_id():
    docs = [_article("b", date="2024-01-01"), _article("a", date="2024-01-01")]
    recent = build_recent({CategoryEnum.article: docs})
    assert [r["id"] for r in recent["articles"]] == ["a", "b"]


def test_build_recent_empty_category():
    assert build_recent({CategoryEnum.book: []}) == {"books": []}
