"""Lexical scorers, class/id weighting and the per-attempt score table.

The text scorers are pure functions of a string. Node scores live in a
``ScoreTable`` keyed by node identity rather than on the tree, so clearing
the table is all a fresh extraction attempt needs.
"""

from __future__ import annotations

from typing import Iterator, Optional

from bs4 import Tag

from content_extractor.utils.constants import (
    BAD_TAGS,
    CHILD_CONTENT_TAGS,
    CLASS_WEIGHT,
    IDEAL_PARAGRAPH_BONUS,
    IDEAL_PARAGRAPH_RANGE,
    LENGTH_CHUNK,
    NEGATIVE_SCORE_RE,
    PARAGRAPH_SCORE_TAGS,
    PHOTO_HINT_WEIGHT,
    PHOTO_HINTS_RE,
    POSITIVE_SCORE_RE,
    READABILITY_ASSET_RE,
    SENTENCE_END_BONUS,
    SHORT_PARAGRAPH_LENGTH,
    SHORT_PARAGRAPH_PENALTY,
)
from content_extractor.utils.dom import element_parent, get_class_string, get_id_string
from content_extractor.utils.text import has_sentence_end, node_text, normalize_spaces


# ---------------------------------------------------------------------------
# Score storage
# ---------------------------------------------------------------------------

class ScoreTable:
    """Content scores for one extraction attempt, keyed by node identity."""

    def __init__(self) -> None:
        self._scores: dict[int, int] = {}
        # Holding the node keeps its id() from being reused while scored
        self._nodes: dict[int, Tag] = {}

    def get(self, node: Tag) -> int:
        return self._scores.get(id(node), 0)

    def set(self, node: Tag, score: int) -> None:
        key = id(node)
        self._scores[key] = score
        self._nodes[key] = node

    def add(self, node: Tag, amount: int) -> int:
        score = self.get(node) + amount
        self.set(node, score)
        return score

    def clear(self) -> None:
        self._scores.clear()
        self._nodes.clear()

    def __contains__(self, node: Tag) -> bool:
        return id(node) in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._nodes.values())


# ---------------------------------------------------------------------------
# Lexical scorers
# ---------------------------------------------------------------------------

def score_commas(text: str) -> int:
    return text.count(",")


def score_length(text: str, base_points: int = 1) -> int:
    """One ``base_points`` per full 50-character chunk."""
    if base_points == 0:
        base_points = 1
    return (len(text) // LENGTH_CHUNK) * base_points


def score_paragraph(text: str) -> int:
    """Score a paragraph's text on commas, length and how it ends."""
    text = normalize_spaces(text)
    if not text:
        return 0

    score = score_commas(text) + score_length(text)

    if len(text) < SHORT_PARAGRAPH_LENGTH:
        score -= SHORT_PARAGRAPH_PENALTY

    low, high = IDEAL_PARAGRAPH_RANGE
    if low <= len(text) <= high:
        score += IDEAL_PARAGRAPH_BONUS

    if has_sentence_end(text):
        score += SENTENCE_END_BONUS

    return score


def get_weight(node: Tag) -> int:
    """Weight a node by its id and class names.

    The id is checked first; class names only count toward the positive and
    negative families when the id contributed nothing. Photo hints and the
    readability asset class are always checked against the class names.
    """
    node_id = get_id_string(node)
    classes = get_class_string(node)
    score = 0

    if node_id:
        if POSITIVE_SCORE_RE.search(node_id):
            score += CLASS_WEIGHT
        if NEGATIVE_SCORE_RE.search(node_id):
            score -= CLASS_WEIGHT

    if classes:
        if score == 0:
            if POSITIVE_SCORE_RE.search(classes):
                score += CLASS_WEIGHT
            if NEGATIVE_SCORE_RE.search(classes):
                score -= CLASS_WEIGHT

        if PHOTO_HINTS_RE.search(classes):
            score += PHOTO_HINT_WEIGHT

        if READABILITY_ASSET_RE.search(classes):
            score += CLASS_WEIGHT

    return score


def score_node(node: Tag) -> int:
    """Base score of a node from its tag, and its text for paragraph-like tags."""
    tag_name = (node.name or "").lower()

    if tag_name in PARAGRAPH_SCORE_TAGS:
        return score_paragraph(node_text(node))
    if tag_name == "div":
        return 5
    if tag_name in CHILD_CONTENT_TAGS:
        return 3
    if tag_name in BAD_TAGS:
        return -3
    if tag_name == "th":
        return -5
    return 0


# ---------------------------------------------------------------------------
# Score accumulation
# ---------------------------------------------------------------------------

def get_or_init_score(node: Tag, scores: ScoreTable, weight_nodes: bool = True) -> int:
    """Return the node's score, initializing it on first use.

    A zero score counts as unscored. Initializing hands a quarter of the new
    score to the parent.
    """
    score = scores.get(node)
    if score:
        return score

    score = score_node(node)
    if weight_nodes:
        score += get_weight(node)

    add_to_parent(node, score, scores)
    return score


def add_score(node: Tag, amount: int, scores: ScoreTable) -> int:
    score = get_or_init_score(node, scores, weight_nodes=True) + amount
    scores.set(node, score)
    return score


def add_to_parent(node: Tag, score: int, scores: ScoreTable) -> None:
    parent: Optional[Tag] = element_parent(node)
    if parent is not None:
        add_score(parent, int(score * 0.25), scores)
