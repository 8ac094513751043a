"""
Command line entry point: generate shuffled tests from a master pool.

Examples:
    testmaker-shuffle pool.json -n 10 -k 3 2 --seed 7 --output tests.json
    testmaker-shuffle pool.json -k 3 2 --max-capacity
    testmaker-shuffle --store projects.json --project-id p1 -n 5 -k 3 2

Exit codes: 0 success, 1 request rejected or shortfall, 2 input/store error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from testmaker_toolkit import __version__
from testmaker_toolkit.core.models import GeneratedTest, MasterPool
from testmaker_toolkit.core.schemas import ValidationError
from testmaker_toolkit.core.utils import load_pool_json, save_tests_json
from testmaker_toolkit.shuffler import ShuffleConfig, generate_tests, validate_pool_request
from testmaker_toolkit.store import Project, ProjectStore, StoreError

logger = logging.getLogger("testmaker_toolkit.cli")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testmaker-shuffle",
        description="Generate distinct shuffled tests from a master question pool",
    )
    parser.add_argument("pool", type=Path, nargs="?", help="Master pool JSON (or a project document)")
    parser.add_argument("-n", "--count", type=int, default=1, help="Number of tests to generate (default 1)")
    parser.add_argument(
        "-k", "--section-counts", type=int, nargs="+", metavar="K",
        help="Questions to draw per section, in section order (default: all)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    parser.add_argument("--output", type=Path, help="Write generated tests to this JSON file")
    parser.add_argument("--strict", action="store_true", help="Validate the pool against the full JSON Schema")
    parser.add_argument("--store", type=Path, help="Project store JSON file to append tests to")
    parser.add_argument("--project-id", help="Project in --store (its master pool is used when POOL is omitted)")
    parser.add_argument("--max-capacity", action="store_true", help="Print the achievable maximum and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_pool(args: argparse.Namespace, project: Optional[Project]) -> MasterPool:
    if args.pool is not None:
        return load_pool_json(args.pool, strict=args.strict)
    if project is not None:
        return project.master_pool
    raise ValueError("POOL is required unless --store and --project-id are given")


def _print_tests(tests: Sequence[GeneratedTest]) -> None:
    for test in tests:
        print(f"{test.name}\t{test.question_count} questions\t{test.id}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if (args.store is None) != (args.project_id is None):
        parser.error("--store and --project-id must be used together")

    store = ProjectStore(args.store) if args.store else None

    try:
        project = store.get_project(args.project_id) if store else None
        pool = _resolve_pool(args, project)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError, ValueError, StoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    section_counts: List[int] = args.section_counts or list(pool.section_sizes)
    try:
        config = ShuffleConfig(
            requested_count=args.count,
            section_counts=section_counts,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    if project is not None:
        config = config.with_existing(project.test_names, project.test_count)

    if args.max_capacity:
        outcome = validate_pool_request(pool, config)
        if outcome.error is not None and outcome.capacity == 0:
            print(f"Error: {outcome.error.message}", file=sys.stderr)
            return EXIT_REJECTED
        print(outcome.capacity)
        return EXIT_OK

    result = generate_tests(pool, config)

    if result.shortfall:
        # Partial batch: list it, but do not write or store it
        print(f"Generated {len(result.tests)} of {result.requested_count} tests:")
        _print_tests(result.tests)

    if not result.ok:
        print(f"Error: {result.error.message}", file=sys.stderr)
        if result.error.capacity is not None:
            print(f"Maximum achievable: {result.error.capacity}", file=sys.stderr)
        return EXIT_REJECTED

    print(f"Capacity: {result.capacity}")
    _print_tests(result.tests)

    if args.output:
        save_tests_json(result.tests, args.output)
        print(f"Wrote {len(result.tests)} tests to {args.output}")

    if store is not None:
        try:
            updated = store.add_tests(args.project_id, result.tests)
        except StoreError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_INPUT_ERROR
        print(f"Project {updated.name!r}: {updated.test_count} tests, {updated.total_questions} questions")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
