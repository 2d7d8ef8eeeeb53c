"""
Paragraph auto-formatting.

Port of WordPress's ``wpautop``: blank-line separated blocks become
``<p>`` paragraphs and single newlines become ``<br />``. Block-level
elements are not wrapped and ``<pre>`` contents are left untouched.
"""

from __future__ import annotations

import re

ALLBLOCKS = (
    r"(?:table|thead|tfoot|caption|col|colgroup|tbody|tr|td|th|div|dl|dd|dt|ul|ol|li|pre"
    r"|select|option|form|map|area|blockquote|address|math|style|p|h[1-6]|hr|fieldset"
    r"|legend|section|article|aside|hgroup|header|footer|nav|figure|figcaption|details"
    r"|menu|summary)\b"
)


def _protect_pre(text: str) -> tuple[str, dict[str, str]]:
    """Swap ``<pre>...</pre>`` blocks for placeholders."""
    pre_tags: dict[str, str] = {}
    if "<pre" not in text:
        return text, pre_tags

    parts = text.split("</pre>")
    last = parts.pop()
    out = []
    for i, part in enumerate(parts):
        start = part.find("<pre")
        if start == -1:
            out.append(part + "</pre>")
            continue
        name = f"<pre wp-pre-tag-{i}></pre>"
        pre_tags[name] = part[start:] + "</pre>"
        out.append(part[:start] + name)
    out.append(last)
    return "".join(out), pre_tags


def wpautop(text: str, br: bool = True) -> str:
    """Wrap paragraphs of text in ``<p>`` tags.

    Args:
        text: HTML or plain text body
        br: Convert remaining single newlines to ``<br />``

    Returns:
        Formatted HTML
    """
    if not text or not text.strip():
        return ""

    text = text + "\n"
    text, pre_tags = _protect_pre(text)

    text = re.sub(r"<br />\s*<br />", "\n\n", text)
    text = re.sub(r"(<" + ALLBLOCKS + r"[^>]*>)", r"\n\1", text)
    text = re.sub(r"(</" + ALLBLOCKS + r">)", r"\1\n\n", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"\s*<param([^>]*)>\s*", r"<param\1>", text)
    text = re.sub(r"\s*</embed>\s*", "</embed>", text)
    text = re.sub(r"\n\n+", "\n\n", text)

    blocks = re.split(r"\n\s*\n", text)
    text = "".join(f"<p>{block.strip(chr(10))}</p>\n" for block in blocks if block.strip())

    text = re.sub(r"<p>\s*</p>", "", text)
    text = re.sub(r"<p>([^<]+)</(div|address|form)>", r"<p>\1</p></\2>", text)
    text = re.sub(r"<p>\s*(</?" + ALLBLOCKS + r"[^>]*>)\s*</p>", r"\1", text)
    text = re.sub(r"<p>(<li.+?)</p>", r"\1", text)
    text = re.sub(r"<p><blockquote([^>]*)>", r"<blockquote\1><p>", text, flags=re.IGNORECASE)
    text = text.replace("</blockquote></p>", "</p></blockquote>")
    text = re.sub(r"<p>\s*(</?" + ALLBLOCKS + r"[^>]*>)", r"\1", text)
    text = re.sub(r"(</?" + ALLBLOCKS + r"[^>]*>)\s*</p>", r"\1", text)

    if br:
        text = re.sub(
            r"<(script|style).*?</\1>",
            lambda m: m.group(0).replace("\n", "<WPPreserveNewline />"),
            text,
            flags=re.DOTALL,
        )
        text = re.sub(r"(?<!<br />)\s*\n", "<br />\n", text)
        text = text.replace("<WPPreserveNewline />", "\n")

    text = re.sub(r"(</?" + ALLBLOCKS + r"[^>]*>)\s*<br />", r"\1", text)
    text = re.sub(
        r"<br />(\s*</?(?:p|li|div|dl|dd|dt|th|pre|td|ul|ol)[^>]*>)", r"\1", text
    )
    text = re.sub(r"\n</p>$", "</p>", text)

    for name, original in pre_tags.items():
        text = text.replace(name, original)

    return text
