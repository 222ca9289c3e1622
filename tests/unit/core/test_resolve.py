"""Unit tests for core/resolve.py"""

import logging

import pytest

from rstpub.core.models import EmbeddedSnippet, ParagraphBlock, SnippetRef
from rstpub.core.resolve import embed, find_snippet, resolve_snippets


@pytest.mark.parametrize("ref,expected", [
    ("euler", "euler"),                         # document identifier
    ("psi", "wf-intro"),                        # snippet_id field
    ("The Wave Function", "wf-intro"),          # exact title
    ("euler-s-identity", "euler"),              # slug of title
    ("Euler", "euler"),                         # title contains reference
    ("the-wave-function-in-depth", "wf-intro"), # reference contains title
])
def test_find_snippet_rules(snippets, ref, expected):
    assert find_snippet(ref, snippets).id == expected


def test_exact_rule_beats_earlier_fuzzy_match(make_snippet):
    """An identifier match later in the corpus wins over a substring match earlier."""
    corpus = [make_snippet("basics", title="Wave Basics"), make_snippet("wave")]
    assert find_snippet("wave", corpus).id == "wave"


def test_ambiguous_substring_takes_first_and_logs(snippets, caplog):
    with caplog.at_level(logging.WARNING, logger="rstpub.core.resolve"):
        found = find_snippet("wave-function", snippets)
    assert found.id == "wf-intro"
    assert "Ambiguous snippet reference" in caplog.text


def test_find_snippet_deterministic(snippets):
    assert find_snippet("wave-function", snippets) is find_snippet("wave-function", snippets)


def test_strict_mode_disables_substring(snippets):
    assert find_snippet("wave-function", snippets, fuzzy=False) is None
    assert find_snippet("psi", snippets, fuzzy=False).id == "wf-intro"


def test_empty_titles_never_match(make_snippet):
    corpus = [make_snippet("untitled-one"), make_snippet("untitled-two")]
    assert find_snippet("anything", corpus) is None


@pytest.mark.parametrize("ref", ["", "   ", "nothing-like-it"])
def test_find_snippet_no_match(snippets, ref):
    assert find_snippet(ref, snippets) is None


def test_embed_uses_canonical_id_and_title(snippets):
    embedded = embed(snippets[1])
    assert embedded.snippet_id == "wf-intro"
    assert embedded.title == "The Wave Function"
    assert embedded.body == [ParagraphBlock(text="body")]


def test_embed_untitled_falls_back_to_id(make_snippet):
    assert embed(make_snippet("bare")).title == "bare"


def test_resolve_snippets_replaces_and_keeps_unresolved(snippets, caplog):
    blocks = [
        ParagraphBlock(text="before"),
        SnippetRef(snippet_id="psi"),
        SnippetRef(snippet_id="nope"),
    ]
    with caplog.at_level(logging.INFO, logger="rstpub.core.resolve"):
        resolved = resolve_snippets(blocks, snippets)

    assert resolved[0] == ParagraphBlock(text="before")
    assert resolved[1] == EmbeddedSnippet(
        snippet_id="wf-intro",
        title="The Wave Function",
        body=[ParagraphBlock(text="body")],
    )
    assert resolved[2] == SnippetRef(snippet_id="nope")
    assert "Unresolved snippet reference: nope" in caplog.text


def test_resolve_snippets_empty_corpus():
    blocks = [SnippetRef(snippet_id="euler")]
    assert resolve_snippets(blocks, []) == blocks


def test_title_slug_keeps_edge_hyphens(make_snippet):
    """The title slug used for matching is not trimmed at the edges."""
    corpus = [make_snippet("news", title="What's new?")]
    assert find_snippet("what-s-new-", corpus, fuzzy=False).id == "news"
    assert find_snippet("what-s-new", corpus, fuzzy=False) is None
