"""Shared fixtures for content extractor tests."""
from typing import Callable

import pytest
from bs4 import BeautifulSoup


LOREM = (
    "Lorem ipsum dolor sit amet, consectetuer adipiscing elit. Aenean commodo "
    "ligula eget dolor. Aenean massa. Cum sociis natoque penatibus et magnis dis "
    "parturient montes, nascetur ridiculus mus. Donec quam felis, ultricies nec, "
    "pellentesque eu, pretium quis, sem. Nulla consequat massa quis enim. Donec "
    "pede justo, fringilla vel, aliquet nec, vulputate eget, arcu. In enim justo, "
    "rhoncus ut, imperdiet a, venenatis vitae, justo. Nullam dictum felis eu pede "
    "mollis pretium. Integer tincidunt. Cras dapibus. Vivamus elementum semper "
    "nisi. Aenean vulputate eleifend tellus. Aenean leo ligula, porttitor eu."
)

# 50 characters, ends a sentence
SHORT_TEXT = "The quick brown fox jumps over the lazy dog today."


@pytest.fixture
def lorem() -> str:
    """A long paragraph with plenty of commas."""
    return LOREM


@pytest.fixture
def short_text() -> str:
    return SHORT_TEXT


@pytest.fixture
def parse() -> Callable[..., BeautifulSoup]:
    """Parse markup the way the extractor does."""
    def _parse(html: str, parser: str = "lxml") -> BeautifulSoup:
        return BeautifulSoup(html, parser)
    return _parse


@pytest.fixture
def hnews_html() -> str:
    """hNews article: .hentry container around .entry-content."""
    return (
        "<html><body>"
        f'<div class="hentry"><p class="entry-content">{LOREM}</p></div>'
        "</body></html>"
    )


@pytest.fixture
def sidebar_article_html() -> str:
    """Negative-hint sidebar next to a positive-hint article body."""
    return (
        "<html><body>"
        '<div class="sidebar advertisement"><ul>'
        '<li><a href="/home">Home</a></li>'
        '<li><a href="/deals">Deals</a></li>'
        '<li><a href="/shop">Shop now</a></li>'
        "</ul></div>"
        f'<div class="article-body"><p>{LOREM}</p></div>'
        "</body></html>"
    )


@pytest.fixture
def short_paragraph_html() -> str:
    return f"<html><body><p>{SHORT_TEXT}</p></body></html>"


@pytest.fixture
def related_only_html() -> str:
    """The real content sits in a blacklisted container."""
    return (
        "<html><body>"
        "<p>Short teaser paragraph here.</p>"
        f'<div class="related-story"><p>{LOREM}</p></div>'
        "</body></html>"
    )
