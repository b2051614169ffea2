"""Pydantic schemas for extraction input validation."""

from typing import Literal, Optional

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field


OutputFormat = Literal["text", "html"]


class ExtractorOptions(BaseModel):
    """One strictness level of the extraction cascade."""

    model_config = ConfigDict(frozen=True)

    strip_unlikely_candidates: bool = Field(
        default=True,
        description="Remove nodes whose class/id marks them as comments, ads, navigation etc."
    )
    weight_nodes: bool = Field(
        default=True,
        description="Use class and id hints when scoring paragraphs"
    )
    clean_conditionally: bool = Field(
        default=True,
        description="Remove lists, tables and divs that look like boilerplate from the result"
    )

    def label(self) -> str:
        flags = [
            ("strip", self.strip_unlikely_candidates),
            ("weight", self.weight_nodes),
            ("clean", self.clean_conditionally),
        ]
        return ",".join(f"{name}={'on' if value else 'off'}" for name, value in flags)


class ExtractorParams(BaseModel):
    """Document handed to the extractor.

    ``html`` is preferred when present: every attempt reparses it. Otherwise
    each attempt works on a copy of ``tree``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tree: Optional[BeautifulSoup] = Field(default=None, description="Parsed document")
    html: str = Field(default="", description="Raw markup of the document")
    title: str = Field(default="", description="Article title; matching headers are dropped")
    url: str = Field(default="", description="Document URL used to absolutize links")
    output_format: OutputFormat = Field(default="text", description="Rendering of the result")
    parser: str = Field(default="lxml", description="BeautifulSoup parser used for html")
