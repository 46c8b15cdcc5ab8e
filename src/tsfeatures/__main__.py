"""CLI entry point — ``python -m tsfeatures``."""

from __future__ import annotations

import argparse

from dotenv import load_dotenv

load_dotenv()

from tsfeatures.engine import PipelineEngine
from tsfeatures.registry import list_registered
from tsfeatures.transformers.statifier import statifier_demo


def _print_modules() -> None:
    """Print all registered transformers."""
    modules = list_registered()
    for category, entries in modules.items():
        print(f"\n{category.upper()}")
        print("-" * len(category))
        if not entries:
            print("  (none)")
        for key, class_name in entries.items():
            print(f"  {key:30s} {class_name}")
    print()


def _print_demo(seed: int) -> None:
    reduced, full = statifier_demo(seed)
    print("processmissing=false")
    print(reduced.to_string(index=False))
    print("\nprocessmissing=true")
    print(full.to_string(index=False))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="tsfeatures",
        description="Fit and run a configuration-driven feature pipeline.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to the run YAML config file.",
    )
    parser.add_argument(
        "-l", "--list-modules",
        action="store_true",
        default=False,
        help="List all registered transformers, then exit.",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        default=False,
        help="Print Statifier features for a generated gappy sequence, then exit.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=123,
        help="Seed for the --demo sequence generator (default: 123).",
    )

    args = parser.parse_args(argv)

    if args.list_modules:
        _print_modules()
        return

    if args.demo:
        _print_demo(args.seed)
        return

    if args.config is None:
        parser.error("the following argument is required: -c/--config")

    engine = PipelineEngine(args.config)
    result = engine.run()
    if engine.config.output.file_path is None:
        print(result.to_string(index=False))


if __name__ == "__main__":
    main()
