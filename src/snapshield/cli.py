"""CLI for snapshield — scrub text from stdin, keep consistency across calls.

Usage:
    # Scrub text (stdin: text, stdout: JSON with scrubbed text + substitutions)
    echo 'Email jane@acme.com about the $1,200 invoice' | \
        python -m snapshield.cli --seed 7 scrub

    # Only replace some types, black bars instead of fake values
    echo 'Jane Doe, 555-123-4567' | \
        python -m snapshield.cli --types phone --mode blackout scrub

    # Dump / clear the persisted mapper state
    python -m snapshield.cli dump
    python -m snapshield.cli clear

Mapper state is exported to a JSON file after every scrub and imported
before the next one, so repeated calls replace the same value the same way.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .config import load_config, load_from_yaml
from .exceptions import ConfigurationError, SnapShieldError
from .mapper import ConsistencyMapper
from .pipeline import Pipeline, PipelineConfig


DEFAULT_STATE = os.environ.get(
    "SNAPSHIELD_STATE",
    str(Path.home() / ".snapshield" / "state.json"),
)


def _load_state(path: str) -> ConsistencyMapper:
    mapper = ConsistencyMapper()
    state = Path(path).expanduser()
    if state.exists():
        mapper.import_data(json.loads(state.read_text(encoding="utf-8")))
    return mapper


def _save_state(path: str, mapper: ConsistencyMapper) -> None:
    state = Path(path).expanduser()
    state.parent.mkdir(parents=True, exist_ok=True)
    state.write_text(json.dumps(mapper.export(), ensure_ascii=False), encoding="utf-8")


def _build_config(args: argparse.Namespace) -> PipelineConfig:
    data = load_from_yaml(args.config) if args.config else {}
    if "snapshield" in data:
        data = data["snapshield"] or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{args.config}: 'snapshield' must be a mapping")
        data = dict(data)
    if args.mode:
        data["redaction_mode"] = args.mode
    if args.variance is not None:
        data["magnitude_variance"] = args.variance
    if args.seed is not None:
        data["seed"] = args.seed
    if args.types:
        data["enabled_types"] = [t.strip() for t in args.types.split(",") if t.strip()]
    if args.presidio:
        data["use_presidio"] = True
    return load_config(data)


def cmd_scrub(args: argparse.Namespace) -> None:
    """Scrub PII from plain text on stdin."""
    mapper = _load_state(args.state)
    pipeline = Pipeline(_build_config(args))

    text = sys.stdin.read()
    result = pipeline.scrub(text, mapper)

    output = {
        "text": result.apply(),
        "substitutions": result.to_dicts(),
        "mapper_size": mapper.size,
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")
    _save_state(args.state, mapper)


def cmd_dump(args: argparse.Namespace) -> None:
    """Dump mapper state as JSON."""
    mapper = _load_state(args.state)
    json.dump(mapper.export(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_clear(args: argparse.Namespace) -> None:
    """Clear the persisted mapper state."""
    _save_state(args.state, ConsistencyMapper())
    sys.stderr.write(f"Cleared state in {args.state}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="snapshield",
        description="Replace PII in text with consistent, plausible fakes",
    )
    parser.add_argument("--state", default=DEFAULT_STATE, help="JSON mapper state path")
    parser.add_argument("--config", default="", help="YAML config file")
    parser.add_argument("--mode", choices=("random", "blackout"), help="Redaction mode")
    parser.add_argument("--variance", type=float, help="Magnitude variance percent (0-100)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--types", default="", help="Comma-separated entity types to replace")
    parser.add_argument("--presidio", action="store_true", help="Enable the Presidio NER layer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("scrub", help="Scrub plain text (stdin)")
    sub.add_parser("dump", help="Dump mapper state")
    sub.add_parser("clear", help="Clear mapper state")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "scrub": cmd_scrub,
        "dump": cmd_dump,
        "clear": cmd_clear,
    }
    try:
        cmds[args.command](args)
    except SnapShieldError as e:
        sys.stderr.write(f"snapshield: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
