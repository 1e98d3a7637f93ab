"""
Main entry point for generating Tetrad puzzles.

Usage:
    python -m src.main
    python -m src.main config.yaml --date 2025-09-25 --output results/puzzle.json --verbose
    python -m src.main --level 12345 --themed worlds/food.txt --reveal
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .engine import GeneratorConfig, PuzzleGenerator
from .lexicon import FALLBACK_FOUR_LETTER_WORDS, load_words, render_square


def load_config(config_path: str) -> GeneratorConfig:
    """Load generator configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GeneratorConfig(**data)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Generate a Tetrad word-square puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  version: TETRAD_v1
  size: 4
  max_retries: 50
  dictionary_path: words4.txt
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used if omitted)"
    )
    parser.add_argument(
        "--date",
        help="UTC day to generate, as YYYY-MM-DD (default: today)"
    )
    parser.add_argument(
        "--level",
        type=int,
        help="Generate the puzzle for this level seed instead of a daily"
    )
    parser.add_argument(
        "--themed",
        help="Themed word list for --level"
    )
    parser.add_argument(
        "--words",
        help="Word list file (overrides dictionary_path; built-in list if neither is set)"
    )
    parser.add_argument(
        "--version",
        help="Seed version tag (overrides the config)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the puzzle identity and generation report as JSON"
    )
    parser.add_argument(
        "--reveal",
        action="store_true",
        help="Print the solution square"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else GeneratorConfig()
        if args.version:
            config.version = args.version

        words_path = args.words or config.dictionary_path
        words = load_words(words_path, config.size) if words_path else FALLBACK_FOUR_LETTER_WORDS
        themed = load_words(args.themed, config.size) if args.themed else []
    except Exception as e:
        print(f"Error loading inputs: {e}", file=sys.stderr)
        sys.exit(1)

    generator = PuzzleGenerator.create(words, config=config)

    if args.verbose:
        print(f"Dictionary: {words_path or '(built-in)'} ({len(generator.dictionary)} words)")
        print()

    try:
        if args.level is not None:
            session = generator.generate_level(args.level, themed, verbose=args.verbose)
        else:
            session = generator.generate_daily(args.date, verbose=args.verbose)
    except ValueError as e:
        print(f"Error during generation: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        # The solution stays in memory; only the identity is written out
        data = {
            "identity": session.identity.model_dump(),
            "is_fallback": session.is_fallback,
            "themed_index": session.themed_index,
            "report": generator.report.model_dump() if generator.report else None,
        }
        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2)
        if args.verbose:
            print(f"Puzzle saved to: {output_path}")

    # Print summary
    print()
    print("=== Puzzle Summary ===")
    print(f"Key: {session.identity.day_key}")
    print(f"Bag: {session.identity.bag.upper()}")
    if session.is_fallback:
        print("Fallback bag (no solution available)")
    if generator.report:
        print(f"Outcome: {generator.report.outcome} after {generator.report.attempts} attempt(s)")
    if session.themed_word:
        print(f"Themed word: {session.themed_word} (row {session.themed_index})")
    if args.reveal and session.solution:
        print("\nSolution:")
        print(render_square(session.solution))

    return 0


if __name__ == "__main__":
    sys.exit(main())
