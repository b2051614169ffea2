"""Cleaning pass applied to the selected article node.

Everything here works inside the selected subtree only; the rest of the
document is left as scoring found it.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import Tag

from content_extractor.utils.constants import (
    CLEAN_CONDITIONALLY_TAGS,
    HEADER_TAGS,
    HTML_OR_BODY_TAGS,
    KEEP_CLASS,
    KEEP_SELECTORS,
    MIN_IMAGE_DIMENSION,
    SPACER_RE,
    SRCSET_CANDIDATE_RE,
    STRIP_OUTPUT_TAGS,
    WHITELIST_ATTRS,
)
from content_extractor.utils.dom import convert_node_to, link_density
from content_extractor.utils.scoring import (
    ScoreTable,
    get_or_init_score,
    get_weight,
    score_commas,
)
from content_extractor.utils.text import node_text, normalize_spaces

logger = logging.getLogger(__name__)


def _remove(tag: Tag) -> None:
    if not tag.decomposed:
        tag.decompose()


def _has_keep_class(tag: Tag) -> bool:
    return KEEP_CLASS in (tag.get("class") or [])


# ---------------------------------------------------------------------------
# Individual passes
# ---------------------------------------------------------------------------

def rewrite_top_level(node: Tag) -> Tag:
    """A selected html/body becomes a div so it can be embedded elsewhere."""
    if node.name in HTML_OR_BODY_TAGS:
        convert_node_to(node, "div")
    return node


def _dimension(value, default: int = 20) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clean_images(node: Tag) -> Tag:
    """Drop tracking pixels, spacer images and images without a source."""
    for img in node.find_all("img"):
        height = _dimension(img.get("height"))
        width = _dimension(img.get("width"))
        if height < MIN_IMAGE_DIMENSION or width < MIN_IMAGE_DIMENSION:
            img.decompose()
            continue

        if img.has_attr("height"):
            del img["height"]

        src = img.get("src")
        if not src or SPACER_RE.search(src):
            img.decompose()
    return node


def _document_base(node: Tag, url: str) -> str:
    """The document's ``<base href>`` resolved against ``url``, else ``url``."""
    root = node
    while root.parent is not None:
        root = root.parent

    base = root.find("base", href=True)
    href = base["href"].strip() if base is not None else ""
    if not href:
        return url
    return _absolute_url(url, href) if url else href


def _absolute_url(base: str, value: str) -> str:
    """Resolve ``value`` against ``base``; unparseable URLs are left as they are."""
    value = value.strip()
    if not value:
        return value
    try:
        return urljoin(base, value)
    except ValueError:
        logger.debug("could not resolve %r against %s", value, base)
        return value


def _absolute_srcset(base: str, srcset: str) -> str:
    candidates: list[str] = []
    for candidate in SRCSET_CANDIDATE_RE.findall(srcset):
        parts = candidate.strip().rstrip(",").split()
        if not parts:
            continue
        parts[0] = _absolute_url(base, parts[0])
        joined = " ".join(parts)
        if joined not in candidates:
            candidates.append(joined)
    return ", ".join(candidates)


def make_links_absolute(node: Tag, url: str) -> Tag:
    """Resolve href, src and srcset against the document base or ``url``."""
    base = _document_base(node, url)
    if not base:
        return node

    for attr in ("href", "src"):
        for tag in node.find_all(attrs={attr: True}):
            tag[attr] = _absolute_url(base, tag[attr])

    for tag in node.find_all(attrs={"srcset": True}):
        tag["srcset"] = _absolute_srcset(base, tag["srcset"])
    return node


def mark_to_keep(node: Tag) -> Tag:
    """Flag embedded videos so the junk-tag pass leaves them alone."""
    for selector in KEEP_SELECTORS:
        for tag in node.select(selector):
            tag["class"] = list(tag.get("class") or []) + [KEEP_CLASS]
    return node


def strip_junk_tags(node: Tag) -> Tag:
    for tag in node.find_all(STRIP_OUTPUT_TAGS):
        if not _has_keep_class(tag):
            _remove(tag)
    return node


def clean_h_ones(node: Tag) -> Tag:
    """Fewer than three h1s are titles and go; more are section headings."""
    h_ones = node.find_all("h1")
    for h_one in h_ones:
        if len(h_ones) < 3:
            h_one.decompose()
        else:
            convert_node_to(h_one, "h2")
    return node


def clean_headers(node: Tag, title: str = "") -> Tag:
    has_paragraphs = node.find("p") is not None
    normalized_title = normalize_spaces(title)

    for header in node.find_all(HEADER_TAGS):
        if header.decomposed:
            continue

        if has_paragraphs and header.find_previous_sibling("p") is None:
            header.decompose()
            continue

        text = node_text(header)
        if normalized_title and text == normalized_title:
            header.decompose()
            continue

        if get_weight(header) < 0 or len(text) < 3:
            header.decompose()
    return node


def remove_unless_content(tag: Tag, weight: int) -> bool:
    """Remove a conditionally cleaned node that does not look like content.

    Returns True when the node was removed.
    """
    if "entry-content-asset" in (tag.get("class") or []):
        return False

    content = node_text(tag)
    if score_commas(content) >= 10:
        return False

    p_count = len(tag.find_all("p"))
    input_count = len(tag.find_all("input"))
    if input_count > p_count / 3:
        tag.decompose()
        return True

    content_length = len(content)
    img_count = len(tag.find_all("img"))
    if content_length < 25 and img_count == 0:
        tag.decompose()
        return True

    density = link_density(tag)
    if weight < 25 and density > 0.2 and content_length > 75:
        tag.decompose()
        return True

    if weight >= 25 and density > 0.5:
        # A list introduced by "...:" is part of the article
        if tag.name in ("ol", "ul"):
            previous = tag.find_previous_sibling()
            if previous is not None and node_text(previous).endswith(":"):
                return False
        tag.decompose()
        return True

    if tag.find("script") is not None and content_length < 150:
        tag.decompose()
        return True

    return False


def clean_tags(node: Tag, scores: ScoreTable) -> Tag:
    """Conditionally remove lists, tables, divs and forms that read as boilerplate."""
    removed = 0
    for tag in node.find_all(CLEAN_CONDITIONALLY_TAGS):
        if tag.decomposed:
            continue
        if _has_keep_class(tag) or tag.find(class_=KEEP_CLASS) is not None:
            continue

        weight = scores.get(tag)
        if not weight:
            weight = get_or_init_score(tag, scores, weight_nodes=True)
            scores.set(tag, weight)

        if weight < 0:
            tag.decompose()
            removed += 1
        elif remove_unless_content(tag, weight):
            removed += 1

    if removed:
        logger.debug("conditionally removed %d nodes", removed)
    return node


def remove_empty(node: Tag) -> Tag:
    for paragraph in node.find_all("p"):
        if paragraph.decomposed:
            continue
        if paragraph.find(["img", "iframe"]) is None and not paragraph.get_text().strip():
            paragraph.decompose()
    return node


def clean_attributes(node: Tag) -> Tag:
    """Keep only whitelisted attributes and drop the internal keep marker."""
    for tag in [node, *node.find_all(True)]:
        tag.attrs = {
            name: value for name, value in tag.attrs.items()
            if name.lower() in WHITELIST_ATTRS
        }
        classes = [cls for cls in (tag.get("class") or []) if cls != KEEP_CLASS]
        if classes:
            tag["class"] = classes
        elif "class" in tag.attrs:
            del tag["class"]
    return node


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def clean_content(
    node: Optional[Tag],
    scores: ScoreTable,
    title: str = "",
    url: str = "",
    clean_conditionally: bool = True,
) -> Optional[Tag]:
    """Run the cleaning passes over the selected node. Mutates and returns it."""
    if node is None:
        return None

    rewrite_top_level(node)
    clean_images(node)
    make_links_absolute(node, url)
    mark_to_keep(node)
    strip_junk_tags(node)
    clean_h_ones(node)
    clean_headers(node, title)
    if clean_conditionally:
        clean_tags(node, scores)
    remove_empty(node)
    clean_attributes(node)
    return node
