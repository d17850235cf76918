"""CLI interface for fuzzy-censor.

Usage:
    # Compare two strings
    fuzzy-censor similarity "flaw" "lawn"          # 0.5
    fuzzy-censor distance kitten sitting           # 3

    # Censor values (argument, or one value per line on stdin)
    fuzzy-censor censor 1234567890                 # 1234******
    cat phones.txt | fuzzy-censor censor-phone

    # Phone checks
    fuzzy-censor valid-phone 123-456-789           # true
    fuzzy-censor same-phone 0038763111222 063111222

    # Rank candidates (JSON output)
    fuzzy-censor --fold-diacritics rank Cacak Čačak Kraljevo

Policies come from --config (YAML) or $FUZZY_CENSOR_CONFIG, falling back
to the compiled-in defaults.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from typing import Callable, Iterable, Sequence

from .config import create_toolkit, load_config, load_from_yaml
from .log import configure_logging
from .toolkit import Toolkit

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = os.environ.get("FUZZY_CENSOR_CONFIG", "")


def _build_toolkit(args: argparse.Namespace) -> Toolkit:
    config = load_from_yaml(args.config) if args.config else load_config({})
    if args.fold_diacritics:
        config["fold_diacritics"] = True
    return create_toolkit(config)


def _values(args: argparse.Namespace) -> Iterable[str]:
    """Positional values, or stdin lines when none were given."""
    if args.values:
        return args.values
    return (line.rstrip("\r\n") for line in sys.stdin)


def _emit_lines(results: Iterable[str]) -> None:
    for result in results:
        sys.stdout.write(result)
        sys.stdout.write("\n")


def _emit_bool(value: bool) -> None:
    sys.stdout.write("true\n" if value else "false\n")


def cmd_transliterate(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Fold diacritics to ASCII."""
    _emit_lines(toolkit.transliterate(v) for v in _values(args))


def cmd_distance(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Print the edit distance between two strings."""
    sys.stdout.write(f"{toolkit.edit_distance(args.source, args.target)}\n")


def cmd_similarity(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Print the similarity ratio between two strings."""
    sys.stdout.write(f"{toolkit.similarity(args.source, args.target)}\n")


def cmd_censor(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Censor text values."""
    spaced = True if args.spaced else None
    _emit_lines(toolkit.censor_text(v, spaced) for v in _values(args))


def cmd_censor_phone(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Censor phone numbers."""
    _emit_lines(toolkit.censor_phone(v) for v in _values(args))


def cmd_valid_phone(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Check a phone number's shape."""
    _emit_bool(toolkit.is_valid_phone_number(args.phone))


def cmd_same_phone(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Compare two phone numbers by their trailing digits."""
    _emit_bool(toolkit.same_phone_numbers(args.first, args.second))


def cmd_rank(args: argparse.Namespace, toolkit: Toolkit) -> None:
    """Rank candidates by similarity to the query, as JSON."""
    ranked = toolkit.rank(
        args.query, args.candidates, threshold=args.threshold, limit=args.limit,
    )
    output = [{"candidate": c, "score": s} for c, s in ranked]
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzy-censor",
        description="Fuzzy string matching and censoring",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--fold-diacritics", action="store_true",
                        help="Transliterate before comparing")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("transliterate", help="Fold diacritics (args or stdin)")
    p.add_argument("values", nargs="*")

    p = sub.add_parser("distance", help="Edit distance between two strings")
    p.add_argument("source")
    p.add_argument("target")

    p = sub.add_parser("similarity", help="Similarity ratio between two strings")
    p.add_argument("source")
    p.add_argument("target")

    p = sub.add_parser("censor", help="Censor text (args or stdin)")
    p.add_argument("values", nargs="*")
    p.add_argument("--spaced", action="store_true", help="Start the filler with '* '")

    p = sub.add_parser("censor-phone", help="Censor phone numbers (args or stdin)")
    p.add_argument("values", nargs="*")

    p = sub.add_parser("valid-phone", help="Check phone number shape")
    p.add_argument("phone")

    p = sub.add_parser("same-phone", help="Compare two phone numbers")
    p.add_argument("first")
    p.add_argument("second")

    p = sub.add_parser("rank", help="Rank candidates by similarity (JSON)")
    p.add_argument("query")
    p.add_argument("candidates", nargs="+")
    p.add_argument("--threshold", type=float, default=0.0)
    p.add_argument("--limit", type=_non_negative_int, default=None)

    return parser


COMMANDS: dict[str, Callable[[argparse.Namespace, Toolkit], None]] = {
    "transliterate": cmd_transliterate,
    "distance": cmd_distance,
    "similarity": cmd_similarity,
    "censor": cmd_censor,
    "censor-phone": cmd_censor_phone,
    "valid-phone": cmd_valid_phone,
    "same-phone": cmd_same_phone,
    "rank": cmd_rank,
}


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        toolkit = _build_toolkit(args)
    except (OSError, ValueError) as e:
        parser.error(f"invalid config: {e}")

    logger.debug("running command", extra={"extra_data": {"command": args.command}})
    COMMANDS[args.command](args, toolkit)


if __name__ == "__main__":
    main()
