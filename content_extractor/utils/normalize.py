"""Structural rewriting that runs before scoring.

Each pass first collects the nodes it will touch and only then mutates the
tree, so no pass modifies the sequence it is iterating over.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, NavigableString, Tag

from content_extractor.utils.constants import (
    BLOCK_LEVEL_TAGS,
    CANDIDATES_BLACKLIST,
    CANDIDATES_WHITELIST,
    DIV_TO_P_BLOCK_TAGS,
    SPAN_KEEP_ANCESTOR_TAGS,
    STRIP_EXEMPT_TAGS,
)
from content_extractor.utils.dom import convert_node_to, get_class_id_string

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Unlikely candidates
# ---------------------------------------------------------------------------

def is_unlikely_candidate(tag: Tag) -> bool:
    """Blacklisted by class/id and not rescued by the whitelist."""
    if tag.name in STRIP_EXEMPT_TAGS:
        return False

    class_id = get_class_id_string(tag)
    if not class_id.strip():
        return False

    if CANDIDATES_WHITELIST.search(class_id):
        return False
    return bool(CANDIDATES_BLACKLIST.search(class_id))


def strip_unlikely_candidates(doc: BeautifulSoup) -> BeautifulSoup:
    to_remove = [tag for tag in doc.find_all(True) if is_unlikely_candidate(tag)]

    for tag in to_remove:
        # Descendants of an already removed node go with it
        if not tag.decomposed:
            tag.decompose()

    if to_remove:
        logger.debug("stripped %d unlikely candidates", len(to_remove))
    return doc


# ---------------------------------------------------------------------------
# Line breaks
# ---------------------------------------------------------------------------

def _is_blank_text(node) -> bool:
    return isinstance(node, NavigableString) and not node.strip()


def _next_is_br(br: Tag) -> bool:
    sibling = br.next_sibling
    if _is_blank_text(sibling):
        sibling = sibling.next_sibling
    return isinstance(sibling, Tag) and sibling.name == "br"


def _is_block(node) -> bool:
    return isinstance(node, Tag) and node.name in BLOCK_LEVEL_TAGS


def paragraphize(doc: BeautifulSoup, br: Tag) -> None:
    """Replace ``br`` with a paragraph holding the inline run that follows it.

    The run stops at the next block-level sibling. If it holds nothing but
    whitespace the break is simply dropped.
    """
    run = []
    sibling = br.next_sibling
    while sibling is not None and not _is_block(sibling):
        run.append(sibling)
        sibling = sibling.next_sibling

    if all(_is_blank_text(node) for node in run):
        br.decompose()
        return

    paragraph = doc.new_tag("p")
    br.replace_with(paragraph)
    for node in run:
        paragraph.append(node.extract())


def brs_to_ps(doc: BeautifulSoup) -> BeautifulSoup:
    """Turn runs of two or more ``br`` into a paragraph boundary."""
    collapsing = False

    for br in doc.find_all("br"):
        if br.parent is None:
            continue

        if _next_is_br(br):
            collapsing = True
            br.decompose()
        elif collapsing:
            collapsing = False
            paragraphize(doc, br)

    return doc


# ---------------------------------------------------------------------------
# Paragraph promotion
# ---------------------------------------------------------------------------

def convert_divs(doc: BeautifulSoup) -> BeautifulSoup:
    """Promote divs without block-level descendants to paragraphs."""
    convertible = [div for div in doc.find_all("div") if div.find(DIV_TO_P_BLOCK_TAGS) is None]
    for div in convertible:
        convert_node_to(div, "p")
    return doc


def convert_spans(doc: BeautifulSoup) -> BeautifulSoup:
    """Promote spans that are not nested in a paragraph-like container."""
    convertible = [
        span for span in doc.find_all("span")
        if not any(parent.name in SPAN_KEEP_ANCESTOR_TAGS for parent in span.parents)
    ]
    for span in convertible:
        convert_node_to(span, "p")
    return doc


def convert_to_paragraphs(doc: BeautifulSoup) -> BeautifulSoup:
    doc = brs_to_ps(doc)
    doc = convert_divs(doc)
    doc = convert_spans(doc)
    return doc


def normalize(doc: BeautifulSoup, strip_unlikely: bool = True) -> BeautifulSoup:
    """Prepare a document for scoring. Mutates and returns ``doc``."""
    if strip_unlikely:
        doc = strip_unlikely_candidates(doc)
    return convert_to_paragraphs(doc)
