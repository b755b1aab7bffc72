#!/usr/bin/env python3
"""
Log Assistant - command-line entry point.

Analyzes one vehicle datalog and prints the response JSON.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="log-assistant",
        description="Summarize a vehicle datalog (RPM, boost, IAT, lambda, timing).",
    )
    parser.add_argument("file", type=Path, help="Datalog file (CSV/TSV/TXT export)")
    parser.add_argument("--note", default=None, help="Free-text note to attach")
    parser.add_argument("--sample", action="store_true", help="Include a downsampled row sample")
    parser.add_argument("--sample-cap", type=int, default=None, help="Maximum sample size")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    from log_assistant.config.settings import get_settings
    from log_assistant.config.logging_config import setup_logging
    from log_assistant.services.analysis_service import AnalysisService

    args = build_parser().parse_args(argv)

    settings = get_settings()
    logger = setup_logging(
        settings.log_level,
        log_to_file=settings.log_to_file,
        structured=settings.log_structured,
        log_dir=settings.log_dir,
    )

    is_valid, errors = settings.validate()
    if not is_valid:
        logger.error(f"Configuration errors: {errors}")
        return 2

    if args.sample_cap is not None:
        if args.sample_cap < 1:
            logger.error("--sample-cap must be at least 1")
            return 2
        settings = replace(settings, analysis=replace(settings.analysis, sample_cap=args.sample_cap))

    try:
        data = args.file.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 2

    service = AnalysisService(settings)
    response = service.analyze_upload(
        data,
        note=args.note,
        filename=args.file.name,
        include_sample=True if args.sample else None,
    )

    print(json.dumps(response.to_dict(), indent=args.indent or None, ensure_ascii=False))
    return 0 if response.ok else 1


if __name__ == "__main__":
    sys.exit(main())
