"""
Command line front-end: find the candidates most similar to a target string.

    ngram-find hello HELL world --override finder=flat_case
    ngram-find helo --population-file words.txt --max-results 5 --scores
"""

import argparse
import logging
from pathlib import Path

from hydra.errors import ConfigCompositionException, OverrideParseException

from ngram_finder.config import ConfigManager
from ngram_finder.core.errors import InvalidParameterError

logger = logging.getLogger(__name__)


def read_population(path: Path) -> list[str]:
    """Read one candidate per line, dropping the trailing newline only."""
    with open(path, encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngram-find",
        description="Fuzzy string lookup using character n-gram Jaccard similarity"
    )
    parser.add_argument(
        "target",
        type=str,
        help="String to look for"
    )
    parser.add_argument(
        "candidates",
        nargs="*",
        default=[],
        help="Candidate strings to search"
    )
    parser.add_argument(
        "--population-file",
        type=Path,
        default=None,
        help="File with one candidate per line (added after positional candidates)"
    )
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help="Return at most this many matches, best first (default: from config, 0 = all)"
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Hydra config override, e.g. finder=flat_case or finder.threshold=0.5"
    )
    parser.add_argument(
        "--scores",
        action="store_true",
        help="Print the similarity score next to each match"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = ConfigManager()
    try:
        cfg = config.load(overrides=args.override)
    except (ConfigCompositionException, OverrideParseException) as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if args.debug else cfg.logging.level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    population = list(args.candidates)
    if args.population_file is not None:
        population.extend(read_population(args.population_file))

    try:
        finder = config.build_finder()
    except InvalidParameterError as e:
        parser.error(str(e))

    max_results = args.max_results if args.max_results is not None else cfg.max_results
    logger.info(f"Searching {len(population)} candidates for {args.target!r} with {finder!r}")

    if max_results > 0:
        matches = finder.find_top_n(args.target, population, max_results)
    else:
        matches = finder.find(args.target, population)

    for match in matches:
        if args.scores:
            print(f"{match.score:.4f}\t{match.string}")
        else:
            print(match.string)
    return 0
