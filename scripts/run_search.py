"""
CLI script to query the legal dictionaries.

Usage:
    python scripts/run_search.py exact lien
    python scripts/run_search.py search "security interest" --limit 5
    python scripts/run_search.py search lien --source bld
    python scripts/run_search.py search lien --no-index
    python scripts/run_search.py stats --json
    python scripts/run_search.py --config path/to/config.json stats
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from lexdex.core import get_config, ConfigurationError, LoadError
from lexdex.core.config_loader import reload_config
from lexdex.dictionary import DictionaryService
from lexdex.search import SearchScope
from lexdex.utils import format_text, truncate_text

DEFINITION_WIDTH = 160


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Look up and search the USC and BLD legal dictionaries"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    exact = subparsers.add_parser("exact", help="Exact headword lookup")
    exact.add_argument("word", help="Headword to look up (case-insensitive)")
    exact.add_argument("--json", action="store_true", help="Print JSON output")

    search = subparsers.add_parser("search", help="Ranked full-text search")
    search.add_argument("query", help="Free-text query")
    search.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    search.add_argument(
        "--source",
        choices=[scope.value for scope in SearchScope],
        default=SearchScope.BOTH.value,
        help="Dictionary to search"
    )
    search.add_argument(
        "--no-index",
        action="store_true",
        help="Use the linear scan instead of the full-text index (only with --source both)"
    )
    search.add_argument("--json", action="store_true", help="Print JSON output")

    stats = subparsers.add_parser("stats", help="Dictionary statistics")
    stats.add_argument("--json", action="store_true", help="Print JSON output")

    args = parser.parse_args(argv)

    if args.command == "search" and args.no_index and args.source != SearchScope.BOTH.value:
        parser.error("--no-index only applies to --source both; scoped searches use the index")

    return args


def run_search(service: DictionaryService, args) -> list:
    """Dispatch to combined or scoped search like the web API does."""
    if args.source == SearchScope.BOTH.value:
        return service.search(args.query, args.limit, use_index=not args.no_index)
    return service.search_scoped(args.source, args.query, args.limit)


def print_definition(word: str, source: str, definition: str) -> None:
    print(f"{word} [{source}]")
    print(f"    {truncate_text(format_text(definition), DEFINITION_WIDTH)}")


def main(argv=None):
    """Main entry point for the search CLI."""
    args = parse_args(argv)

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    service = DictionaryService()

    try:
        service.load()
    except LoadError as e:
        print(f"Failed to load dictionaries ({e.corpus or 'index'}): {e.message}")
        sys.exit(1)

    with service:
        if args.command == "exact":
            match = service.exact_match(args.word)
            if args.json:
                print(json.dumps({"word": args.word, "match": match.to_dict()}, indent=2))
            elif not match.found:
                print(f"No entry for '{args.word}'")
            else:
                for entry in (match.usc, match.bld):
                    if entry is not None:
                        print_definition(entry.title, entry.source, entry.body)

        elif args.command == "search":
            results = run_search(service, args)
            if args.json:
                print(json.dumps({
                    "results": [r.to_dict() for r in results],
                    "query": args.query,
                    "source": args.source,
                    "indexed": not args.no_index,
                    "count": len(results)
                }, indent=2))
            else:
                print(f"{len(results)} result(s) for '{args.query}'")
                for result in results:
                    print_definition(result.word, result.source, result.definition)

        else:
            stats = service.stats()
            if args.json:
                print(json.dumps(stats.to_dict(), indent=2))
            else:
                print("=" * 40)
                print(f"USC entries:       {stats.usc_count:,}")
                print(f"BLD entries:       {stats.bld_count:,}")
                print(f"Total entries:     {stats.total_count:,}")
                print(f"Loaded:            {stats.loaded}")
                print(f"Degraded searches: {stats.degraded_searches:,}")
                print("=" * 40)

    sys.exit(0)


if __name__ == "__main__":
    main()
