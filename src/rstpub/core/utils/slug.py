"""Slug generation for snippet matching and heading anchors"""

import re


_NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str, trim: bool = True) -> str:
    """Lowercase text and collapse each run of non-alphanumerics into one hyphen.

    trim=False keeps hyphens produced at either edge ('What's new?' -> 'what-s-new-').
    """
    slug = _NON_ALNUM_RE.sub('-', text.lower())
    return slug.strip('-') if trim else slug
