"""Main CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    from philanthropy_scraper.connectors.registry import ConnectorRegistry

    parser = argparse.ArgumentParser(
        prog="philanthropy-scraper",
        description="Collect and normalize philanthropic contribution records",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sources
    subparsers.add_parser("sources", help="List available sources")

    # scrape
    scrape_parser = subparsers.add_parser("scrape", help="Collect and normalize from a source")
    scrape_parser.add_argument(
        "--source",
        required=True,
        choices=ConnectorRegistry.available_sources(),
        help="Source to collect from",
    )
    scrape_parser.add_argument(
        "--all",
        action="store_true",
        help="Fetch every record the source offers (slow); default is recent records only",
    )
    scrape_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of recent records to fetch (default: source-specific)",
    )
    scrape_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write normalized JSON to file (default: stdout)",
    )

    # normalize
    normalize_parser = subparsers.add_parser(
        "normalize", help="Normalize raw records from a JSON file"
    )
    normalize_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON array of raw records",
    )
    source_group = normalize_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument(
        "--source",
        choices=ConnectorRegistry.available_sources(),
        help="Use the identifiers and parse rules of a registered source",
    )
    source_group.add_argument(
        "--source-config",
        type=Path,
        help="Path to source config YAML",
    )
    normalize_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write normalized JSON to file (default: stdout)",
    )

    # validate
    validate_parser = subparsers.add_parser(
        "validate", help="Check normalized contributions against the output contract"
    )
    validate_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON array of contributions, or a {records: [...]} batch",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "sources":
        for source_id in ConnectorRegistry.available_sources():
            print(source_id)
    elif args.command == "scrape":
        _run_scrape(args)
    elif args.command == "normalize":
        _run_normalize(args)
    elif args.command == "validate":
        _run_validate(args)
    else:
        parser.print_help()


def _write_batch(batch, output: Path | None) -> None:
    """Write a NormalizationBatch as JSON to file or stdout."""
    text = json.dumps(batch.model_dump(mode="json"), indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        print(
            f"Wrote {len(batch.records)} contributions to {output} ({len(batch.errors)} failed)",
            file=sys.stderr,
        )
    else:
        print(text)


def _run_scrape(args: argparse.Namespace) -> None:
    """Run scrape command."""
    from philanthropy_scraper.errors import ReferenceFetchError
    from philanthropy_scraper.pipeline import run_source

    try:
        batch = asyncio.run(run_source(args.source, recent=not args.all, limit=args.limit))
    except ReferenceFetchError as e:
        raise SystemExit(f"Could not load cause list: {e}")
    _write_batch(batch, args.output)


def _run_normalize(args: argparse.Namespace) -> None:
    """Run normalize command."""
    from philanthropy_scraper.config import load_source_config
    from philanthropy_scraper.connectors.registry import ConnectorRegistry
    from philanthropy_scraper.errors import ReferenceFetchError
    from philanthropy_scraper.pipeline import normalize_records

    if args.source_config:
        try:
            config = load_source_config(args.source_config)
        except ValueError as e:
            raise SystemExit(f"Invalid source config: {e}")
    else:
        config = ConnectorRegistry.source_config(args.source)

    data = json.loads(args.input.read_text())
    if not isinstance(data, list):
        raise SystemExit("--input must contain a JSON array of raw records")

    try:
        batch = asyncio.run(normalize_records(data, config))
    except ReferenceFetchError as e:
        raise SystemExit(f"Could not load cause list: {e}")
    _write_batch(batch, args.output)


def _run_validate(args: argparse.Namespace) -> None:
    """Run validate command. Exits 1 if any contribution is invalid."""
    from philanthropy_scraper.validation import find_contribution_problems

    data = json.loads(args.input.read_text())
    if isinstance(data, dict):
        data = data.get("records") or []

    invalid = 0
    for i, contribution in enumerate(data):
        problems = find_contribution_problems(contribution) if isinstance(contribution, dict) else ["not an object"]
        if problems:
            invalid += 1
            label = contribution.get("title") if isinstance(contribution, dict) else repr(contribution)
            print(f"[{i}] {label}:")
            for problem in problems:
                print(f"  - {problem}")
    print(f"{len(data) - invalid}/{len(data)} contributions valid")
    if invalid:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
