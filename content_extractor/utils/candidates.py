"""Score propagation and top candidate selection."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from content_extractor.utils.constants import (
    HNEWS_BONUS,
    HNEWS_CONTENT_SELECTORS,
    HTML_OR_BODY_TAGS,
    NON_TOP_CANDIDATE_TAGS,
    PARAGRAPH_TAGS,
)
from content_extractor.utils.dom import convert_node_to, element_parent
from content_extractor.utils.normalize import normalize
from content_extractor.utils.scoring import (
    ScoreTable,
    add_score,
    get_or_init_score,
    score_node,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Propagation
# ---------------------------------------------------------------------------

def _add_score_to(node: Optional[Tag], amount: int, scores: ScoreTable) -> None:
    if node is None:
        return
    # Scores are never kept on inline elements
    if node.name == "span":
        convert_node_to(node, "div")
    add_score(node, amount, scores)


def score_hnews(doc: BeautifulSoup, scores: ScoreTable) -> None:
    """Boost containers of hNews-style content blocks."""
    for container_selector, content_selector in HNEWS_CONTENT_SELECTORS:
        containers = {id(tag) for tag in doc.select(container_selector)}
        if not containers:
            continue

        for content in doc.select(f"{container_selector} {content_selector}"):
            container = next(
                (parent for parent in content.parents if id(parent) in containers),
                None,
            )
            if container is not None:
                add_score(container, HNEWS_BONUS, scores)


def score_paragraphs(doc: BeautifulSoup, scores: ScoreTable, weight_nodes: bool) -> None:
    """Score every paragraph-like node and push its raw score up two levels."""
    for paragraph in doc.find_all(PARAGRAPH_TAGS):
        score = get_or_init_score(paragraph, scores, weight_nodes)
        scores.set(paragraph, score)

        raw_score = score_node(paragraph)
        parent = element_parent(paragraph)
        _add_score_to(parent, raw_score, scores)

        if parent is not None:
            _add_score_to(element_parent(parent), int(raw_score / 2), scores)


def score_content(
    doc: BeautifulSoup,
    weight_nodes: bool = True,
    scores: Optional[ScoreTable] = None,
) -> ScoreTable:
    """Score a normalized document.

    The paragraph pass deliberately runs twice: ancestors initialized during
    the first pass only receive their full share of descendant scores on the
    second one.
    """
    if scores is None:
        scores = ScoreTable()

    score_hnews(doc, scores)
    score_paragraphs(doc, scores, weight_nodes)
    score_paragraphs(doc, scores, weight_nodes)
    return scores


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def is_candidate_tag(tag: Tag) -> bool:
    return tag.name not in HTML_OR_BODY_TAGS and tag.name not in NON_TOP_CANDIDATE_TAGS


def find_top_candidate(doc: BeautifulSoup, scores: ScoreTable) -> Optional[Tag]:
    """Highest positive score wins; ties go to the first node in document order."""
    candidate: Optional[Tag] = None
    top_score = 0

    for tag in doc.find_all(True):
        if tag not in scores or not is_candidate_tag(tag):
            continue

        score = scores.get(tag)
        if score > top_score:
            top_score = score
            candidate = tag

    if candidate is not None:
        logger.debug("top candidate <%s> scored %d", candidate.name, top_score)
    return candidate


def extract_best_node(
    doc: BeautifulSoup,
    strip_unlikely_candidates: bool = True,
    weight_nodes: bool = True,
    scores: Optional[ScoreTable] = None,
) -> Optional[Tag]:
    """Normalize, score and return the node most likely to hold the article.

    ``doc`` is mutated. Pass a ``ScoreTable`` to keep the scores around; it is
    cleared first.
    """
    if scores is None:
        scores = ScoreTable()
    scores.clear()

    normalize(doc, strip_unlikely=strip_unlikely_candidates)
    score_content(doc, weight_nodes=weight_nodes, scores=scores)

    return find_top_candidate(doc, scores)
