"""Generic article content extraction.

Runs the scoring pipeline under progressively more permissive options:

1. Parse a fresh copy of the document
2. Normalize it, score it and pick the top candidate
3. Clean the candidate
4. Stop at the first candidate with enough text
5. Otherwise return the highest-scoring candidate seen in any attempt,
   falling back to the document body when nothing was ever scored
"""

from __future__ import annotations

import copy
import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from content_extractor.models import ExtractionAttempt, ExtractionResult
from content_extractor.schemas import ExtractorOptions, ExtractorParams, OutputFormat
from content_extractor.utils.candidates import extract_best_node
from content_extractor.utils.clean import clean_content
from content_extractor.utils.dom import node_is_sufficient
from content_extractor.utils.scoring import ScoreTable
from content_extractor.utils.text import node_text, node_to_html, node_to_text

logger = logging.getLogger(__name__)

# Strictest first; each step relaxes one more option
DEFAULT_CASCADE: tuple[ExtractorOptions, ...] = (
    ExtractorOptions(),
    ExtractorOptions(strip_unlikely_candidates=False),
    ExtractorOptions(strip_unlikely_candidates=False, weight_nodes=False),
    ExtractorOptions(
        strip_unlikely_candidates=False,
        weight_nodes=False,
        clean_conditionally=False,
    ),
)

MAX_ATTEMPTS = 5


def render_node(node: Tag, output_format: OutputFormat = "text") -> str:
    if output_format == "html":
        return node_to_html(node)
    return node_to_text(node)


class GenericContentExtractor:
    """Site-agnostic content extractor with a cascade of option sets."""

    def __init__(self, cascade: tuple[ExtractorOptions, ...] = DEFAULT_CASCADE):
        self.cascade = cascade

    def attempt_plan(self, options: Optional[ExtractorOptions] = None) -> list[ExtractorOptions]:
        """Caller options first, then the cascade, without repeats."""
        plan: list[ExtractorOptions] = []
        for candidate in ([options] if options is not None else []) + list(self.cascade):
            if candidate not in plan:
                plan.append(candidate)
        return plan[:MAX_ATTEMPTS]

    def extract(self, params: ExtractorParams, options: Optional[ExtractorOptions] = None) -> str:
        """Extract the article content of a document as a string.

        Never raises for a parseable document; an empty document gives "".
        """
        return self.extract_result(params, options).content

    def extract_result(
        self,
        params: ExtractorParams,
        options: Optional[ExtractorOptions] = None,
    ) -> ExtractionResult:
        result = ExtractionResult()

        best_node: Optional[Tag] = None
        best_score = 0
        best_options: Optional[ExtractorOptions] = None
        last_doc: Optional[BeautifulSoup] = None

        for attempt_options in self.attempt_plan(options):
            doc = self._fresh_document(params)
            if doc is None:
                return result
            last_doc = doc

            scores = ScoreTable()
            candidate = extract_best_node(
                doc,
                strip_unlikely_candidates=attempt_options.strip_unlikely_candidates,
                weight_nodes=attempt_options.weight_nodes,
                scores=scores,
            )
            # Cleaning may touch descendant scores, so read the candidate's first
            score = scores.get(candidate) if candidate is not None else 0
            node = clean_content(
                candidate,
                scores,
                title=params.title,
                url=params.url,
                clean_conditionally=attempt_options.clean_conditionally,
            )
            sufficient = node_is_sufficient(node)

            attempt = ExtractionAttempt(
                options=attempt_options.label(),
                found_candidate=node is not None,
                candidate_tag=node.name if node is not None else "",
                score=score,
                sufficient=sufficient,
                text_length=len(node_text(node)) if node is not None else 0,
            )
            result.attempts.append(attempt)
            logger.debug(
                "attempt %d [%s]: candidate=%s score=%d sufficient=%s",
                len(result.attempts), attempt.options, attempt.candidate_tag or "-",
                score, sufficient,
            )

            if sufficient:
                result.content = render_node(node, params.output_format)
                result.options = attempt.options
                result.score = score
                result.sufficient = True
                return result

            if node is not None and (best_node is None or score > best_score):
                best_node, best_score, best_options = node, score, attempt_options

        result.fallback = True

        if best_node is not None:
            logger.info(
                "no sufficient candidate after %d attempts, using best seen [%s] score=%d",
                len(result.attempts), best_options.label(), best_score,
            )
            result.content = render_node(best_node, params.output_format)
            result.options = best_options.label()
            result.score = best_score
            return result

        if last_doc is not None:
            body = last_doc.body or last_doc.find("html")
            if body is not None:
                logger.info("no candidate found, falling back to document body")
                body = clean_content(
                    body,
                    ScoreTable(),
                    title=params.title,
                    url=params.url,
                    clean_conditionally=False,
                )
                result.content = render_node(body, params.output_format)

        return result

    @staticmethod
    def _fresh_document(params: ExtractorParams) -> Optional[BeautifulSoup]:
        """A private copy of the document that an attempt may mutate freely."""
        if params.html:
            return BeautifulSoup(params.html, params.parser)
        if params.tree is not None:
            return copy.copy(params.tree)
        return None


def extract_content(
    html: str,
    url: str = "",
    title: str = "",
    options: Optional[ExtractorOptions] = None,
    output_format: OutputFormat = "text",
) -> str:
    """Extract the main content of raw HTML with the default cascade."""
    params = ExtractorParams(html=html, url=url, title=title, output_format=output_format)
    return GenericContentExtractor().extract(params, options)
