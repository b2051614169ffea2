"""Whitespace normalization and rendering of selected nodes."""

from __future__ import annotations

import copy
import re

from bs4 import Tag

from content_extractor.utils.constants import SENTENCE_END_CHARS

_WHITESPACE_RE = re.compile(r"\s+")
_MULTIPLE_SPACES_RE = re.compile(r"\s{2,}")

# Markup whose whitespace is significant
_PRESERVE_RE = re.compile(
    r"<(pre|code|textarea)\b[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL
)

_BLOCK_BREAK = "\u2029"

_TEXT_BLOCK_TAGS = [
    "p", "div", "br", "hr", "h1", "h2", "h3", "h4", "h5", "h6",
    "li", "tr", "blockquote", "pre", "table", "section", "article",
    "figure", "figcaption", "ul", "ol", "dl", "dt", "dd",
]


def normalize_spaces(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def has_sentence_end(text: str) -> bool:
    return text.strip().endswith(SENTENCE_END_CHARS)


def normalize_html_spaces(html: str) -> str:
    """Collapse whitespace in serialized markup, leaving pre/code/textarea intact."""
    preserved: list[str] = []

    def _stash(match: re.Match) -> str:
        preserved.append(match.group(0))
        return f"\x00{len(preserved) - 1}\x00"

    result = _PRESERVE_RE.sub(_stash, html)
    result = _MULTIPLE_SPACES_RE.sub(" ", result)
    result = re.sub(r"\x00(\d+)\x00", lambda m: preserved[int(m.group(1))], result)
    return result.strip()


def node_text(node: Tag) -> str:
    """Normalized text of a node, as used by every length check."""
    return normalize_spaces(node.get_text())


def node_to_text(node: Tag) -> str:
    """Render a node as plain text, one whitespace-normalized block per paragraph.

    Blocks are separated by a blank line. The node itself is not modified.
    """
    fragment = copy.copy(node)

    for tag in fragment.find_all(["script", "style", "noscript"]):
        tag.decompose()

    for tag in fragment.find_all(_TEXT_BLOCK_TAGS):
        tag.insert_before(_BLOCK_BREAK)
        tag.insert_after(_BLOCK_BREAK)

    blocks = (normalize_spaces(chunk) for chunk in fragment.get_text().split(_BLOCK_BREAK))
    return "\n\n".join(block for block in blocks if block)


def node_to_html(node: Tag) -> str:
    """Inner HTML of a node with whitespace collapsed outside preformatted blocks."""
    return normalize_html_spaces(node.decode_contents())
