"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

import argparse
import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.crypto.hashing import Hasher, get_hasher
from core.merkle.merkle_tree import split_words


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def resolve_hasher(args: Namespace) -> Hasher:
    """Hasher from --hasher, falling back to the loaded CLI config."""
    name = getattr(args, "hasher", None)
    if name is None and getattr(args, "cli_config", None) is not None:
        name = args.cli_config.hash_algorithm
    return get_hasher(name)


def read_leaves(args: Namespace) -> list[str]:
    """
    Leaf blocks from the positional text or --file, split on whitespace.

    Raises:
        ValueError: If neither or both sources are given
    """
    text = getattr(args, "text", None)
    file_path = getattr(args, "file", None)
    if (text is None) == (file_path is None):
        raise ValueError("Provide either TEXT or --file, not both")
    if file_path is not None:
        text = Path(file_path).read_text(encoding="utf-8")
    return split_words(text)


def parse_indices(value: str) -> list[int]:
    """argparse type for "0,1,6" style index lists."""
    parts = [p for p in value.replace(" ", ",").split(",") if p]
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid index list: {value!r}")


def load_json_file(path: Path) -> Any:
    """Load and parse a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json_file(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
