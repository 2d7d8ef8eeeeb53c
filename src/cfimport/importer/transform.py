"""
Text transforms applied to each record before it is written.
"""

from __future__ import annotations

import re
from html.entities import codepoint2name

from slugify import slugify

MORE_TAG_RE = re.compile(r"<!-- *more *-->")
MORE_ANCHOR = "more"


def clean_entities(text: str) -> str:
    """Encode non-ASCII characters as HTML entities.

    Characters with an HTML entity name use it (``é`` -> ``&eacute;``), the
    rest get a numeric reference. Markup characters are left alone so tags
    in the content keep working.
    """
    if not text:
        return ""
    out = []
    for char in text:
        codepoint = ord(char)
        if codepoint < 128:
            out.append(char)
        elif codepoint in codepoint2name:
            out.append(f"&{codepoint2name[codepoint]};")
        else:
            out.append(f"&#{codepoint};")
    return "".join(out)


def sluggify(title: str) -> str:
    """Convert a title to a URL-friendly ASCII slug.

    Transliterates to ASCII, lowercases, and collapses every run of
    non-alphanumeric characters into a single hyphen.
    """
    return slugify(title or "", lowercase=True, separator="-")


def apply_more_tag(
    content: str,
    excerpt: str,
    post_id: str,
    more_excerpt: bool = True,
    more_anchor: bool = True,
) -> tuple[str, str, str | None]:
    """Handle a ``<!-- more -->`` marker in the content.

    Args:
        content: Post body
        excerpt: Existing excerpt (may be empty)
        post_id: Entry id, used in the second anchor id
        more_excerpt: Use the text before the marker as excerpt when the post
            has none
        more_anchor: Replace the first marker with ``more`` anchors

    Returns:
        Tuple of (content, excerpt, more_anchor) where more_anchor is the
        anchor name when anchors were inserted, otherwise None
    """
    match = MORE_TAG_RE.search(content)
    if not match:
        return content, excerpt, None

    if more_excerpt and not excerpt:
        excerpt = content[: match.start()]

    anchor = None
    if more_anchor:
        replacement = f'<a id="{MORE_ANCHOR}"></a><a id="{MORE_ANCHOR}-{post_id}"></a>'
        content = MORE_TAG_RE.sub(replacement, content, count=1)
        anchor = MORE_ANCHOR

    return content, excerpt, anchor
