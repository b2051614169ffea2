"""Tests for the structural passes that run before scoring."""
from content_extractor.utils.normalize import (
    brs_to_ps,
    convert_divs,
    convert_spans,
    is_unlikely_candidate,
    normalize,
    strip_unlikely_candidates,
)


class TestStripUnlikelyCandidates:
    """Blacklist/whitelist removal."""

    def test_blacklisted_node_is_removed(self, parse):
        # Given a sidebar next to the content
        doc = parse('<body><div class="sidebar">Links</div><div id="story">Text</div></body>')

        # When
        strip_unlikely_candidates(doc)

        # Then
        assert doc.find(class_="sidebar") is None
        assert doc.find(id="story") is not None

    def test_whitelist_rescues_blacklisted_node(self, parse):
        doc = parse('<body><div class="content sidebar">Keep me</div></body>')

        strip_unlikely_candidates(doc)

        assert doc.find(class_="sidebar") is not None

    def test_id_is_checked_too(self, parse):
        doc = parse('<body><div id="disqus_thread">Comments</div></body>')

        strip_unlikely_candidates(doc)

        assert doc.find(id="disqus_thread") is None

    def test_html_body_and_links_are_exempt(self, parse):
        doc = parse(
            '<html class="comment"><body class="sidebar">'
            '<p><a class="share" href="/s">Share</a></p>'
            "</body></html>"
        )

        strip_unlikely_candidates(doc)

        assert doc.html is not None
        assert doc.body is not None
        assert doc.find("a", class_="share") is not None

    def test_nodes_without_class_or_id_are_kept(self, parse):
        div = parse("<div>plain</div>").div
        assert is_unlikely_candidate(div) is False

    def test_nested_blacklisted_nodes(self, parse):
        # The inner node goes away with its removed ancestor
        doc = parse(
            '<body><div class="footer"><div class="share">x</div></div>'
            "<p>Body text</p></body>"
        )

        strip_unlikely_candidates(doc)

        assert doc.find("div") is None
        assert doc.p.get_text() == "Body text"


class TestBrsToPs:
    """Runs of line breaks become paragraph boundaries."""

    def test_br_run_followed_by_inline_text_makes_one_paragraph(self, parse):
        # Given a double break followed by inline content and then a block
        doc = parse("<div>Intro text<br><br>Inline run <b>bold</b><p>Block</p></div>")

        # When
        brs_to_ps(doc)

        # Then the inline run is wrapped in exactly one new paragraph
        paragraphs = doc.find_all("p")
        assert len(paragraphs) == 2
        assert paragraphs[0].get_text() == "Inline run bold"
        assert paragraphs[1].get_text() == "Block"
        assert doc.find("br") is None

    def test_br_run_followed_by_block_makes_no_paragraph(self, parse):
        doc = parse("<div>Intro<br><br>\n<p>Block</p></div>")

        brs_to_ps(doc)

        assert len(doc.find_all("p")) == 1
        assert doc.find("br") is None

    def test_trailing_br_run_is_dropped(self, parse):
        doc = parse("<div>Intro<br><br><br></div>")

        brs_to_ps(doc)

        assert doc.find("br") is None
        assert doc.find("p") is None
        assert doc.div.get_text() == "Intro"

    def test_single_br_is_untouched(self, parse):
        doc = parse("<p>Line one<br>Line two</p>")

        brs_to_ps(doc)

        assert len(doc.find_all("br")) == 1
        assert len(doc.find_all("p")) == 1

    def test_whitespace_between_brs_still_counts_as_a_run(self, parse):
        doc = parse("<div>Intro<br>\n  <br>Second part</div>")

        brs_to_ps(doc)

        assert doc.find("br") is None
        assert doc.p.get_text() == "Second part"


class TestParagraphPromotion:
    """div and span conversion."""

    def test_div_without_blocks_becomes_paragraph(self, parse):
        doc = parse("<body><div>Just <b>inline</b> text</div></body>")

        convert_divs(doc)

        assert doc.find("div") is None
        assert doc.p.get_text() == "Just inline text"

    def test_div_with_block_descendant_stays(self, parse):
        doc = parse("<body><div><p>Para</p></div><div><a href='#'>link</a></div></body>")

        convert_divs(doc)

        assert len(doc.find_all("div")) == 2

    def test_conversion_keeps_attributes_and_identity(self, parse):
        doc = parse('<body><div class="lead">Text</div></body>')
        div = doc.div

        convert_divs(doc)

        assert div.name == "p"
        assert div["class"] == ["lead"]
        assert doc.p is div

    def test_loose_span_becomes_paragraph(self, parse):
        doc = parse("<body><span>Alone</span><p><span>inner</span></p></body>")

        convert_spans(doc)

        assert [tag.name for tag in doc.body.find_all(True, recursive=False)] == ["p", "p"]
        assert doc.find("span").get_text() == "inner"

    def test_span_in_list_item_stays(self, parse):
        doc = parse("<ul><li><span>item</span></li></ul>")

        convert_spans(doc)

        assert doc.find("span") is not None


class TestNormalize:
    """The composed pass."""

    MIXED = (
        "<html><body>"
        '<div class="sidebar">Links</div>'
        "<div>Intro<br><br>Run <b>bold</b><p>Block</p></div>"
        "<span>Loose</span>"
        "<div><span>inner</span></div>"
        "<div><div>Nested</div></div>"
        "</body></html>"
    )

    def test_normalize_is_idempotent(self, parse):
        # Given a document normalized once
        doc = normalize(parse(self.MIXED))
        once = str(doc)

        # When it is normalized again
        twice = str(normalize(doc))

        # Then nothing changes
        assert once == twice

    def test_strip_can_be_disabled(self, parse):
        doc = normalize(parse(self.MIXED), strip_unlikely=False)

        assert doc.find(class_="sidebar") is not None
