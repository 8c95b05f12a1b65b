"""Command-line interface for the transliteration engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config import Config
from .evaluation import evaluate, read_gold_pairs
from .pipeline import TransliterationPipeline
from .safety import run_scenarios
from .transliterator import Transliterator


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="singlish",
        description="Transliterate romanized Sinhala (Singlish) to Sinhala script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a sentence
  singlish convert "mama gedhara yanavaa"

  # Convert stdin, showing per-word decisions
  echo "Zoom meeting eka cancel" | singlish convert --trace

  # Convert a file of JSON records
  singlish batch --input chats.jsonl --input-format jsonl --output out.csv --output-format csv

  # Run the built-in fail-safe scenarios
  singlish check
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    convert_parser = subparsers.add_parser("convert", help="Convert text or stdin")
    convert_parser.add_argument("text", nargs="?", help="Text to convert (stdin if omitted)")
    convert_parser.add_argument(
        "--trace", action="store_true", help="Print per-word decisions as JSON"
    )
    setup_engine_arguments(convert_parser)

    batch_parser = subparsers.add_parser("batch", help="Convert a file")
    setup_batch_parser(batch_parser)
    setup_engine_arguments(batch_parser)

    check_parser = subparsers.add_parser("check", help="Run the built-in fail-safe scenarios")
    setup_engine_arguments(check_parser)

    evaluate_parser = subparsers.add_parser("evaluate", help="Score against gold pairs")
    evaluate_parser.add_argument(
        "--gold",
        type=Path,
        required=True,
        help="Tab-separated file of romanized<TAB>expected lines",
    )
    evaluate_parser.add_argument(
        "--show-mismatches", type=int, default=0, help="Print this many mismatching pairs"
    )
    setup_engine_arguments(evaluate_parser)

    return parser


def setup_engine_arguments(parser: argparse.ArgumentParser) -> None:
    """Setup arguments shared by every command."""
    parser.add_argument("--config", type=Path, help="Path to YAML configuration file")
    parser.add_argument(
        "--threshold",
        type=float,
        help="Confidence threshold for transliterating a word (default: 0.7)",
    )
    parser.add_argument(
        "--max-expansion",
        type=float,
        help="Maximum output length as a multiple of input length (default: 3.0)",
    )
    parser.add_argument(
        "--allow",
        action="append",
        default=[],
        metavar="WORD",
        help="Extra word to always leave unchanged (repeatable)",
    )
    parser.add_argument("--rules", type=Path, help="YAML romanization rule table")
    parser.add_argument(
        "--mapper", choices=["index", "trie"], help="Rule lookup engine (default: index)"
    )
    parser.add_argument("--normalize", action="store_true", help="Normalize input first")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")


def setup_batch_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for batch command."""
    parser.add_argument("--input", type=Path, help="Input file")
    parser.add_argument("--output", type=Path, help="Output file")
    parser.add_argument("--input-format", choices=["txt", "jsonl"], help="Input format")
    parser.add_argument(
        "--output-format", choices=["txt", "jsonl", "json", "csv"], help="Output format"
    )
    parser.add_argument("--text-field", help="JSONL field holding the text (default: text)")
    parser.add_argument("--trace", action="store_true", help="Include per-word decisions")
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of parallel workers (default: 1)",
    )


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    if getattr(args, "config", None):
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    engine = config.engine.model_dump()
    if getattr(args, "threshold", None) is not None:
        engine["confidence_threshold"] = args.threshold
    if getattr(args, "max_expansion", None) is not None:
        engine["max_output_expansion_factor"] = args.max_expansion
    if getattr(args, "allow", None):
        engine["foreign_word_allow_list"] = set(engine["foreign_word_allow_list"]) | set(args.allow)
    if getattr(args, "rules", None):
        engine["rules_file"] = args.rules
    if getattr(args, "mapper", None):
        engine["mapper"] = args.mapper
    if getattr(args, "normalize", False):
        engine["normalize_input"] = True
    # re-validate so command-line values get the same checks as YAML ones
    config.engine = type(config.engine)(**engine)

    if getattr(args, "input", None):
        config.input.input_file = args.input
    if getattr(args, "input_format", None):
        config.input.format = args.input_format
    if getattr(args, "text_field", None):
        config.input.text_field = args.text_field
    if getattr(args, "output", None):
        config.output.output_path = args.output
    if getattr(args, "output_format", None):
        config.output.format = args.output_format
    if getattr(args, "trace", False):
        config.output.include_trace = True
    if getattr(args, "workers", None) is not None:
        config.workers = max(1, args.workers)

    return config


def handle_convert(args: argparse.Namespace, config: Config) -> int:
    """Handle convert command."""
    text = args.text if args.text is not None else sys.stdin.read()
    engine = Transliterator(config.engine)
    result = engine.convert(text)

    if args.trace:
        trace = [outcome.to_dict() for outcome in result.outcomes if outcome.token.is_word]
        print(json.dumps(trace, ensure_ascii=False, indent=2))
    print(result.output_text)
    return 0


def handle_batch(config: Config) -> int:
    """Handle batch command."""
    if not config.input.input_file:
        print("Error: Input file is required (use --input or --config)", file=sys.stderr)
        return 1

    try:
        pipeline = TransliterationPipeline(config)
        count = pipeline.run()
        print(f"\nConverted {count} records -> {config.output.output_path}")
        return 0
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Batch conversion failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def handle_check(config: Config) -> int:
    """Handle check command."""
    engine = Transliterator(config.engine)
    failures = 0
    for scenario, output, violations in run_scenarios(engine):
        status = "PASS" if not violations else "FAIL"
        print(f"[{status}] {scenario.name}: {output!r}")
        if scenario.deviation:
            print(f"       note: {scenario.deviation}")
        for violation in violations:
            print(f"       - {violation}")
        failures += bool(violations)

    print(f"\n{failures} scenario(s) failed")
    return 1 if failures else 0


def handle_evaluate(args: argparse.Namespace, config: Config) -> int:
    """Handle evaluate command."""
    try:
        pairs = read_gold_pairs(args.gold)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = evaluate(Transliterator(config.engine), pairs)
    print(json.dumps(report.to_dict(), indent=2))
    for source, expected, output in report.mismatches[: args.show_mismatches]:
        print(f"{source}\texpected={expected}\tgot={output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    try:
        config = build_config(args)
    except (ValidationError, FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "convert":
            return handle_convert(args, config)
        if args.command == "batch":
            return handle_batch(config)
        if args.command == "check":
            return handle_check(config)
        return handle_evaluate(args, config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        # rule tables are loaded when the engine is built
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
