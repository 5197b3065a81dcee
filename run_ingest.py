#!/usr/bin/env python3
"""
Ingestion entry point: one sub-command per pipeline step.

    python run_ingest.py discover-competitions --from 2020 --to 2025
    python run_ingest.py discover-matches --from 2025 --to 2025
    python run_ingest.py scrape-overview --from 2025 --to 2025 --sleep 250
    python run_ingest.py scrape-report --limit 20 --dry --debug

Exit code 0 when the run completes (even with failed units), 1 on an
unexpected error.
"""

import argparse
import logging
import sys

from configurations import ConfigFactory
from exceptions import ConfigurationError
from logger import setup_logger
from pipelines.orchestrators import (
    CompetitionOrchestrator,
    MatchOrchestrator,
    PlayerOrchestrator,
)

logger = logging.getLogger("run_ingest")

# ***> sub-command -> (orchestrator class, method name) <***
COMMANDS = {
    "discover-competitions": (CompetitionOrchestrator, "discover_competitions"),
    "discover-matches": (MatchOrchestrator, "discover_matches"),
    "scrape-overview": (MatchOrchestrator, "scrape_overview"),
    "scrape-report": (MatchOrchestrator, "scrape_report"),
    "scrape-events": (MatchOrchestrator, "scrape_events"),
    "backfill-minutes": (MatchOrchestrator, "backfill_minutes"),
    "repair-lineups": (MatchOrchestrator, "repair_lineups"),
    "fetch-standings": (CompetitionOrchestrator, "fetch_standings"),
    "compute-standings": (CompetitionOrchestrator, "compute_standings"),
    "scrape-players": (PlayerOrchestrator, "scrape_players"),
}

CRAWLER_COMMANDS = ("discover-competitions", "discover-matches")


def build_parser() -> argparse.ArgumentParser:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--environment", default=None, help="Environment (development/testing/production)"
    )
    shared.add_argument("--from", dest="season_from", type=int, help="First season year")
    shared.add_argument("--to", dest="season_to", type=int, help="Last season year")
    shared.add_argument(
        "--sleep", type=int, default=None, help="Milliseconds to wait between units"
    )
    shared.add_argument("--limit", type=int, default=0, help="Process at most N units (0 = all)")
    shared.add_argument("--retries", type=int, default=None, help="Attempts per unit on fetch errors")
    shared.add_argument("--dry", action="store_true", help="Parse and report, write nothing")
    shared.add_argument("--debug", action="store_true", help="Log parsed samples")
    shared.add_argument(
        "--replace", action="store_true", help="Delete a unit's stored rows before writing"
    )

    crawler = argparse.ArgumentParser(add_help=False)
    crawler.add_argument("--max-pages", type=int, default=None, help="Listing page cap")
    crawler.add_argument("--page-size", type=int, default=None, help="Listing page size")

    parser = argparse.ArgumentParser(description="ksi.is match data ingestion")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command in COMMANDS:
        parents = [shared, crawler] if command in CRAWLER_COMMANDS else [shared]
        sub = subparsers.add_parser(command, parents=parents)
        if command == "discover-competitions":
            sub.add_argument("--category", default=None, help="Listing category (Adults)")

    return parser


def config_from_args(args: argparse.Namespace):
    """
    Build the run configuration from CLI flags; unset flags keep the
    environment's defaults.
    """
    overrides = {
        "season_from": args.season_from,
        "season_to": args.season_to,
        "limit": args.limit,
        "max_retries": args.retries,
        "dry_run": args.dry,
        "debug": args.debug,
        "replace": args.replace,
    }
    if args.sleep is not None:
        overrides["request_delay"] = max(0, args.sleep) / 1000.0
    if args.debug:
        overrides["log_level"] = "DEBUG"

    max_pages = getattr(args, "max_pages", None)
    page_size = getattr(args, "page_size", None)
    if args.command == "discover-competitions":
        overrides["competition_max_pages"] = max_pages
        overrides["competition_page_size"] = page_size
    else:
        overrides["max_pages"] = max_pages
        overrides["page_size"] = page_size

    return ConfigFactory.custom(environment=args.environment, **overrides)


def run(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    setup_logger(log_file=config.log_file, level=config.log_level)
    logger.info("%s | %s", args.command, config.get_summary()["scraping"])

    orchestrator_class, method_name = COMMANDS[args.command]
    with orchestrator_class(config) as orchestrator:
        logger.info("Database: %s", orchestrator.get_database_info())
        method = getattr(orchestrator, method_name)
        if args.command == "discover-competitions":
            method(category=args.category)
        else:
            method()
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 1
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except Exception:
        logger.exception("Run failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
