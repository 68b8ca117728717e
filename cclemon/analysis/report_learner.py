from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Mapping

from cclemon.analysis.aggregation import Aggregate, aggregate_reports
from cclemon.analysis.weight_suggestion import suggest_weights
from cclemon.core import config
from cclemon.core.report_validation import ReportLoadError, Side, load_reports

logger = logging.getLogger(__name__)


def format_output(aggregate: Aggregate, suggestion: Mapping[str, Any]) -> str:
    return "\n".join(
        [
            config.STATS_HEADER,
            json.dumps(aggregate.to_dict(), indent=config.JSON_INDENT, ensure_ascii=False),
            "",
            config.WEIGHTS_HEADER,
            json.dumps(dict(suggestion), indent=config.JSON_INDENT, ensure_ascii=False),
        ]
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=config.PROGRAM_NAME,
        usage="%(prog)s [--] REPORT [REPORT ...]",
        description=(
            "Aggregate CC Lemon match reports and suggest CPU action weights "
            "(charge/gun/guard) from the left side's play."
        ),
    )
    parser.add_argument(
        "reports",
        nargs="*",
        metavar="REPORT",
        help="Path to a match report JSON file. Put -- before paths that start with a dash.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.WARNING, format=config.LOG_FORMAT, stream=sys.stderr)
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.reports:
        parser.print_usage(sys.stderr)
        return config.EXIT_USAGE

    try:
        reports = load_reports(args.reports)
    except ReportLoadError as exc:
        logger.debug("Aborting run on %s", exc.source)
        print(f"error: {exc}", file=sys.stderr)
        return config.EXIT_LOAD_ERROR

    aggregate = aggregate_reports(reports)
    suggestion = suggest_weights(aggregate, Side.LEFT)
    print(format_output(aggregate, suggestion))
    return config.EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
