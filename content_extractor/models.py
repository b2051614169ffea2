from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


@dataclass
class ExtractionAttempt:
    options: str
    found_candidate: bool = False
    candidate_tag: str = ""
    score: int = 0
    sufficient: bool = False
    text_length: int = 0

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class ExtractionResult:
    content: str = ""
    options: str = ""
    score: int = 0
    sufficient: bool = False
    fallback: bool = False
    attempts: list[ExtractionAttempt] = field(default_factory=list)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class ExtractionRecord:
    source: str
    extracted_at: str
    url: str = ""
    title: str = ""
    output_format: str = "text"
    result: ExtractionResult = field(default_factory=ExtractionResult)
    status: str = "ok"
    error_msg: str = ""

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)
