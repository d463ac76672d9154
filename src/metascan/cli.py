"""metascan — Command-line entry point.

Scores ExifTool JSON output (``exiftool -j -G1 *.jpg > meta.json``):

    metascan score meta.json
    metascan score meta.json --format csv --output report.csv
    metascan score meta.json --config weights.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from metascan.config import get_settings
from metascan.core.engine import AlterationScorer
from metascan.exceptions import MetascanError
from metascan.logging_setup import configure_logging
from metascan.reporting.export import FileRecord, build_csv_row, build_json_report, write_csv
from metascan.scoring_config import load_validation_config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 2


def load_exiftool_json(path: Path) -> list[dict[str, Any]]:
    """Read ExifTool JSON: a list of per-file objects or a single object."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise MetascanError(f"Cannot read {path}: {exc}") from exc
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise MetascanError(f"{path} must contain a JSON object or a list of objects")
    return data


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="metascan", description="Metadata alteration scoring")
    sub = p.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score ExifTool JSON output")
    score.add_argument("path", type=Path)
    score.add_argument("--format", choices=("json", "csv"), default="json")
    score.add_argument("--output", type=Path, default=None)
    score.add_argument("--config", default=settings.scoring_config_path, help="JSON weight/threshold overrides")
    score.add_argument("--log-level", default=settings.log_level)
    score.add_argument("--no-bom", action="store_true", help="Omit the UTF-8 BOM in CSV output")
    return p.parse_args(argv)


def run_score(args: argparse.Namespace) -> int:
    config = load_validation_config(args.config)
    scorer = AlterationScorer(config)

    records = [FileRecord.from_exiftool(entry) for entry in load_exiftool_json(args.path)]
    scored = [(record, scorer.score(record.metadata)) for record in records]
    logger.info("Scored %d file(s) from %s", len(scored), args.path)

    out = args.output.open("w", encoding="utf-8", newline="") if args.output else sys.stdout
    try:
        if args.format == "csv":
            bom = get_settings().csv_bom and not args.no_bom
            write_csv((build_csv_row(r, s) for r, s in scored), out, bom=bom)
        else:
            reports = [build_json_report(r, s) for r, s in scored]
            json.dump(reports, out, ensure_ascii=False, indent=2)
            out.write("\n")
    finally:
        if out is not sys.stdout:
            out.close()
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level, settings.log_json)
    try:
        return run_score(args)
    except MetascanError as exc:
        logger.error("%s", exc)
        return EXIT_BAD_INPUT
