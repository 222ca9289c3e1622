"""Root test configuration: a small on-disk content tree shared by pipeline and CLI tests"""

from pathlib import Path

import pytest


ARTICLE = """\
---
title: "Quantum Basics"
date: 2024-03-01
tags: [physics, "quantum"]
author: Ada
---

Quantum Basics
==============

An introduction with $E = mc^2$ inline.

.. snippet-card:: wave-function
   :collapsed: true

Closing remarks.
"""

MISSING_REF_ARTICLE = """\
---
title: Loose Ends
date: 2024-01-10
tags: physics
---

.. snippet-card:: does-not-exist
"""

SNIPPET = """\
---
title: The Wave Function
date: 2023-12-01
tags: [physics]
snippet_id: psi
---

The state of a system is $\\psi(x)$.
"""

PROJECT = """\
Peta
====

.. date:: 2024-02-02
.. tags:: tools, web
.. github_url:: https://example.com/peta

A static content site.
"""

BOOK_INDEX = """\
---
title: Field Guide
date: 2024-04-01
tags: [guide]
---

Welcome to the guide.

.. toctree::
   :maxdepth: 2

   getting-started
"""

BOOK_SECTION = """\
---
title: Getting Started
---

Install it first.
"""


def write_content_tree(root: Path) -> Path:
    """Lay out articles/, snippets/, projects/, and books/ under root."""
    files = {
        "articles/quantum-basics.rst": ARTICLE,
        "articles/loose-ends.rst": MISSING_REF_ARTICLE,
        "snippets/wave-function-intro.rst": SNIPPET,
        "projects/peta.rst": PROJECT,
        "books/field-guide/index.rst": BOOK_INDEX,
        "books/field-guide/getting-started.rst": BOOK_SECTION,
    }
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    return write_content_tree(tmp_path / "_content")
