from __future__ import annotations

import json
from collections.abc import Iterable
from typing import TextIO

from .models import ExtractionRecord


def write_one_record(fh: TextIO, record: ExtractionRecord, need_comma: bool) -> None:
    if need_comma:
        fh.write(",\n")
    blob = json.dumps(record.to_dict(), ensure_ascii=False, indent=2)
    fh.write(blob)
    fh.flush()


def write_records(records: Iterable[ExtractionRecord], fh: TextIO) -> int:
    count = 0
    fh.write("[\n")
    for record in records:
        write_one_record(fh, record, need_comma=count > 0)
        count += 1
    fh.write("\n]\n")
    return count
