"""Heuristic tables for content scoring and cleaning.

Every value here is module-level and immutable, so the tables can be read
from any number of extraction threads at once.
"""

from __future__ import annotations

import re


# ---------------------------------------------------------------------------
# Unlikely candidates (stripped before scoring)
# ---------------------------------------------------------------------------

_UNLIKELY_CANDIDATES_BLACKLIST = (
    "ad-break", "ad-banner", "adbox", "advert", "addthis", "agegate", "aux",
    "blogger-labels", "combx", "comment", "conversation", "disqus",
    "entry-unrelated", "extra", "foot", "header", "hidden", "loader",
    "login",  # can hit 'blogindex'
    "menu", "meta", "nav", "outbrain", "pager", "pagination",
    "predicta",  # readwriteweb inline ad box
    "presence_control_external",  # lifehacker.com
    "popup", "printfriendly", "related", "remove", "remark", "rss", "share",
    "shoutbox", "sidebar", "sociable", "sponsor", "taboola", "tools",
)

_UNLIKELY_CANDIDATES_WHITELIST = (
    "and", "article", "body", "blogindex", "column", "content",
    "entry-content-asset",
    "format",  # misuse of form
    "hfeed", "hentry", "hatom", "main", "page", "posts", "shadow",
)

CANDIDATES_BLACKLIST = re.compile(
    "|".join(_UNLIKELY_CANDIDATES_BLACKLIST), re.IGNORECASE
)
CANDIDATES_WHITELIST = re.compile(
    "|".join(_UNLIKELY_CANDIDATES_WHITELIST), re.IGNORECASE
)

# Never removed by the unlikely-candidate pass
STRIP_EXEMPT_TAGS = frozenset({"html", "body", "a"})


# ---------------------------------------------------------------------------
# Class/id weighting
# ---------------------------------------------------------------------------

POSITIVE_SCORE_RE = re.compile(
    r"article|articlecontent|instapaper_body|blog|body|content|"
    r"entry-content-asset|entry|hentry|main|Normal|page|pagination|"
    r"permalink|post|story|text|[-_]copy|\Bcopy",
    re.IGNORECASE,
)

NEGATIVE_SCORE_RE = re.compile(
    r"adbox|advert|author|bio|bookmark|bottom|byline|clear|com-|combx|"
    r"comment|comment\B|contact|copy|credit|crumb|date|deck|excerpt|"
    r"featured|foot|footer|footnote|graf|head|info|infotext|"
    r"instapaper_ignore|jump|linebreak|link|masthead|media|meta|modal|"
    r"outbrain|promo|pr_|related|respond|roundcontent|scroll|secondary|"
    r"share|shopping|shoutbox|side|sidebar|sponsor|stamp|sub|summary|"
    r"tags|tools|widget",
    re.IGNORECASE,
)

PHOTO_HINTS_RE = re.compile(r"figure|photo|image|caption", re.IGNORECASE)

READABILITY_ASSET_RE = re.compile(r"entry-content-asset", re.IGNORECASE)

CLASS_WEIGHT = 25
PHOTO_HINT_WEIGHT = 10


# ---------------------------------------------------------------------------
# hNews microformat pairs: (container selector, content selector)
# ---------------------------------------------------------------------------

HNEWS_CONTENT_SELECTORS: tuple[tuple[str, str], ...] = (
    (".hentry", ".entry-content"),
    (".entry", ".entry-content"),
    (".entry", ".entry_content"),
    (".post", ".postbody"),
    (".post", ".post_body"),
    (".post", ".post-body"),
)

HNEWS_BONUS = 80


# ---------------------------------------------------------------------------
# Tag sets
# ---------------------------------------------------------------------------

# Nodes whose own text is scored and propagated upward
PARAGRAPH_TAGS = ("p", "pre", "li")

# score_node() buckets
PARAGRAPH_SCORE_TAGS = frozenset({"p", "li", "span", "pre"})
CHILD_CONTENT_TAGS = frozenset({"td", "blockquote", "ol", "ul", "dl"})
BAD_TAGS = frozenset({"address", "form"})

# A div holding any of these is not converted to a paragraph
DIV_TO_P_BLOCK_TAGS = ("a", "blockquote", "dl", "div", "img", "p", "pre", "table")

# A span under any of these is left alone
SPAN_KEEP_ANCESTOR_TAGS = frozenset({"p", "div", "li", "figcaption"})

NON_TOP_CANDIDATE_TAGS = frozenset({
    "br", "b", "i", "label", "hr", "area", "base", "basefont", "input",
    "img", "link", "meta",
})

HTML_OR_BODY_TAGS = frozenset({"html", "body"})

BLOCK_LEVEL_TAGS = frozenset({
    "article", "aside", "blockquote", "body", "br", "button", "canvas",
    "caption", "col", "colgroup", "dd", "div", "dl", "dt", "embed",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
    "h4", "h5", "h6", "header", "hgroup", "hr", "li", "map", "object", "ol",
    "output", "p", "pre", "progress", "section", "table", "tbody",
    "textarea", "tfoot", "th", "thead", "tr", "ul", "video",
})


# ---------------------------------------------------------------------------
# Lexical scoring
# ---------------------------------------------------------------------------

LENGTH_CHUNK = 50
SHORT_PARAGRAPH_LENGTH = 20
SHORT_PARAGRAPH_PENALTY = 10
IDEAL_PARAGRAPH_RANGE = (50, 200)
IDEAL_PARAGRAPH_BONUS = 5
SENTENCE_END_CHARS = (".", "!", "?", ":", ";")
SENTENCE_END_BONUS = 1


# ---------------------------------------------------------------------------
# Sufficiency
# ---------------------------------------------------------------------------

MIN_SUFFICIENT_LENGTH = 100


# ---------------------------------------------------------------------------
# Comment detection (used when picking nodes by selector)
# ---------------------------------------------------------------------------

COMMENT_HINTS = ("comment", "disqus", "respond")


# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------

SPACER_RE = re.compile(r"transparent|spacer|blank", re.IGNORECASE)

# One srcset candidate: a URL plus an optional width/density descriptor.
# A comma belongs to the URL unless it follows a descriptor.
SRCSET_CANDIDATE_RE = re.compile(r"(?:\s*)(\S+(?:\s*[\d.]+[wx])?)(?:\s*,\s*)?")

KEEP_CLASS = "content-extractor-keep"

KEEP_SELECTORS = (
    'iframe[src^="https://www.youtube.com"]',
    'iframe[src^="https://www.youtube-nocookie.com"]',
    'iframe[src^="http://www.youtube.com"]',
    'iframe[src^="https://player.vimeo"]',
    'iframe[src^="http://player.vimeo"]',
    'iframe[src^="https://www.redditmedia.com"]',
)

STRIP_OUTPUT_TAGS = (
    "title", "script", "noscript", "link", "style", "hr", "embed", "iframe",
    "object",
)

WHITELIST_ATTRS = frozenset({
    "src", "srcset", "sizes", "type", "href", "class", "id", "alt",
    "xlink:href", "width", "height",
})

CLEAN_CONDITIONALLY_TAGS = ("ul", "ol", "table", "div", "button", "form")

HEADER_TAGS = ("h2", "h3", "h4", "h5", "h6")

MIN_IMAGE_DIMENSION = 10
