"""Shared fixtures for core unit tests"""

import pytest

from rstpub.core.models import CategoryEnum, Document, ParagraphBlock, SnippetFrontMatter


SAMPLE_RST = """\
---
title: Sample
date: 2024-05-05
tags: [a, b]
---

Sample
======

Intro paragraph with **bold** text.

Details
-------

- one
- two

.. code-block:: python

   print("hello")

Footer paragraph.
"""


def make_snippet(doc_id: str, title: str = "", snippet_id: str = "", text: str = "body") -> Document:
    return Document(
        id=doc_id,
        category=CategoryEnum.snippet,
        frontmatter=SnippetFrontMatter(title=title, snippet_id=snippet_id),
        content=[ParagraphBlock(text=text)],
    )


@pytest.fixture(name="sample_lines")
def sample_lines_fixture():
    return SAMPLE_RST.splitlines()


@pytest.fixture(name="snippets")
def snippets_fixture():
    return [
        make_snippet("euler", title="Euler's Identity", text="e^{i pi} + 1 = 0"),
        make_snippet("wf-intro", title="The Wave Function", snippet_id="psi"),
        make_snippet("wave-function-advanced", title="Wave Function Collapse"),
    ]


@pytest.fixture(name="make_snippet")
def make_snippet_fixture():
    """Factory for ad-hoc snippet documents."""
    return make_snippet
