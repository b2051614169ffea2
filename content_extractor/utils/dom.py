"""Tree helpers shared by normalization, scoring and cleaning."""

from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup, Tag

from content_extractor.utils.constants import COMMENT_HINTS, MIN_SUFFICIENT_LENGTH
from content_extractor.utils.text import node_text, normalize_spaces


def get_class_string(tag: Tag) -> str:
    classes = tag.get("class")
    if not classes:
        return ""
    if isinstance(classes, list):
        return " ".join(classes)
    return str(classes)


def get_id_string(tag: Tag) -> str:
    return str(tag.get("id") or "")


def get_class_id_string(tag: Tag) -> str:
    """Get combined class + id string for pattern matching."""
    parts = [get_class_string(tag), get_id_string(tag)]
    return " ".join(part for part in parts if part)


def is_element(node) -> bool:
    """True for element nodes, False for text, comments and the document itself."""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def element_parent(node: Tag) -> Optional[Tag]:
    """Parent element, or None at the top of the tree."""
    parent = node.parent
    return parent if is_element(parent) else None


def convert_node_to(node: Tag, tag_name: str) -> Tag:
    """Change a node's tag in place; attributes, children and identity are kept."""
    node.name = tag_name
    return node


def within_comment(node: Tag) -> bool:
    """True if the node or any ancestor looks like a comment section."""
    current: Optional[Tag] = node
    while current is not None:
        class_id = get_class_id_string(current).lower()
        if any(hint in class_id for hint in COMMENT_HINTS):
            return True
        current = element_parent(current)
    return False


def _is_good_node(node: Tag, max_children: int) -> bool:
    if len(node.find_all(True, recursive=False)) > max_children:
        return False
    return not within_comment(node)


def extract_from_selectors(
    root: Tag,
    selectors: list[str],
    max_children: int = 1,
    text_only: bool = True,
) -> Optional[str]:
    """Return the content of the first selector matching exactly one usable node.

    A node is usable when it has at most ``max_children`` child elements and is
    not inside a comment block. Text or inner HTML is whitespace-normalized;
    empty results fall through to the next selector.
    """
    for selector in selectors:
        nodes = root.select(selector)
        if len(nodes) != 1:
            continue

        node = nodes[0]
        if not _is_good_node(node, max_children):
            continue

        content = node.get_text() if text_only else node.decode_contents()
        content = normalize_spaces(content)
        if content:
            return content

    return None


def link_density(node: Tag) -> float:
    """Fraction of the node's normalized text that sits inside links."""
    total = len(node_text(node))
    if total == 0:
        return 0.0
    link_length = sum(len(node_text(link)) for link in node.find_all("a"))
    return link_length / total


def node_is_sufficient(node: Optional[Tag]) -> bool:
    """Decide whether a node holds enough text to be returned as the article."""
    if node is None:
        return False
    return len(node_text(node)) >= MIN_SUFFICIENT_LENGTH
