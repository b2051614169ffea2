from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import time
from datetime import datetime, timezone

from .config import DEFAULT_CONFIG_PATH, Config, load_config
from .extractor import GenericContentExtractor
from .models import ExtractionRecord, ExtractionResult
from .schemas import ExtractorParams
from .writer import write_records

logger = logging.getLogger(__name__)


def extract_file(
    extractor: GenericContentExtractor,
    config: Config,
    path: pathlib.Path,
    url: str = "",
    title: str = "",
) -> ExtractionRecord:
    record = ExtractionRecord(
        source=str(path),
        extracted_at=datetime.now(timezone.utc).isoformat(),
        url=url,
        title=title,
        output_format=config.output_format,
    )

    try:
        html = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("could not read %s: %s", path, e)
        record.status = "error"
        record.error_msg = str(e)
        record.result = ExtractionResult()
        return record

    params = ExtractorParams(
        html=html,
        url=url,
        title=title,
        output_format=config.output_format,
        parser=config.parser,
    )
    record.result = extractor.extract_result(params, config.options)
    return record


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.format:
        config = Config(
            output_format=args.format,
            log_level=config.log_level,
            parser=config.parser,
            options=config.options,
        )

    logging.getLogger().setLevel((args.log_level or config.log_level).upper())
    logger.debug("config = %s", config)

    extractor = GenericContentExtractor()
    t0 = time.monotonic()
    records = [
        extract_file(extractor, config, pathlib.Path(p), url=args.url, title=args.title)
        for p in args.paths
    ]

    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            count = write_records(records, fh)
        logger.info("wrote %d records to %s", count, pathlib.Path(args.output).resolve())
    else:
        for record in records:
            if len(records) > 1:
                print(f"==> {record.source} <==")
            print(record.result.content)

    failed = sum(1 for record in records if record.status != "ok")
    insufficient = sum(1 for record in records if not record.result.sufficient)
    logger.info(
        "extracted %d documents (%d unreadable, %d below sufficiency) in %.2f s",
        len(records), failed, insufficient, time.monotonic() - t0,
    )
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract the main article content from local HTML files")
    parser.add_argument("paths", nargs="+", help="HTML files to extract")
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help="path to config.yaml (default: content_extractor/config.yaml)",
    )
    parser.add_argument("--url", default="", help="document URL, used to absolutize links")
    parser.add_argument("--title", default="", help="article title, headers matching it are dropped")
    parser.add_argument("--format", choices=["text", "html"], help="override output_format from the config")
    parser.add_argument("--output", help="write a JSON array of extraction records to this file")
    parser.add_argument("--log-level", help="override log_level from the config")
    return parser


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    args = build_parser().parse_args()
    try:
        sys.exit(run(args))
    except ValueError:
        logger.exception("Invalid configuration")
        sys.exit(2)


if __name__ == "__main__":
    main()
