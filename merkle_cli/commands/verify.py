"""
CLI Verify Commands

Verify proof bundles written by `merkle prove` / `merkle multiprove` (or
returned by the file server) offline.

Usage:
    merkle verify proof.json [--word right?] [--root 4373588283528574023] [--json]
    merkle verify-multi multi.json [--words "Here's an for"] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.crypto.hashing import HashValue, from_hex
from core.merkle.merkle_tree import split_words, validate_proof
from core.merkle.multiproof import validate_compact_multiproof
from core.schemas.errors import ErrorCodes
from core.schemas.proof import MultiProofBundle, ProofBundle
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    load_json_file,
    print_error,
    print_json,
    resolve_hasher,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    bundle_path: str = ""
    root: int = 0
    leaves: list[str] = field(default_factory=list)
    ok: bool = False
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.error_code is None:
            del d["error_code"]
        return d


def parse_root(value: str) -> HashValue:
    """Parse a root given as a decimal integer or 0x-prefixed hex."""
    if value.lower().startswith("0x"):
        return from_hex(value.lower())
    root = int(value)
    if root < 0 or root >= 2 ** 64:
        raise ValueError(f"Root out of 64-bit range: {value}")
    return root


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"bundle: {summary.bundle_path}")
    print(f"root: {summary.root}")
    print(f"leaves: {', '.join(repr(leaf) for leaf in summary.leaves)}")
    print(f"ok: {str(summary.ok).lower()}")
    if summary.error_code:
        print(f"  ✗ {summary.error_code}")


def _report(summary: VerifySummary, output_json: bool) -> int:
    if output_json:
        print_json(summary.to_dict())
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED


def _load_bundle(path: Path, model: type) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Bundle not found: {path}")
    return model.model_validate(load_json_file(path))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    bundle_path = Path(args.bundle_path)
    try:
        bundle: ProofBundle = _load_bundle(bundle_path, ProofBundle)
        root = parse_root(args.root) if args.root is not None else bundle.root
    except (OSError, ValueError, ValidationError, json.JSONDecodeError) as e:
        print_error(f"Error loading bundle: {e}")
        return EXIT_RUNTIME_ERROR

    word = args.word if args.word is not None else bundle.leaf
    if word is None:
        print_error("Bundle carries no leaf; pass --word")
        return EXIT_RUNTIME_ERROR

    ok = validate_proof(root, word, bundle.to_proof(), resolve_hasher(args))
    summary = VerifySummary(
        bundle_path=str(bundle_path),
        root=root,
        leaves=[word],
        ok=ok,
        error_code=None if ok else ErrorCodes.MERKLE_PROOF_INVALID,
    )
    return _report(summary, args.json)


def verify_multi_cmd(args: Namespace) -> int:
    """
    Execute the verify-multi command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    bundle_path = Path(args.bundle_path)
    try:
        bundle: MultiProofBundle = _load_bundle(bundle_path, MultiProofBundle)
        root = parse_root(args.root) if args.root is not None else bundle.root
    except (OSError, ValueError, ValidationError, json.JSONDecodeError) as e:
        print_error(f"Error loading bundle: {e}")
        return EXIT_RUNTIME_ERROR

    words = split_words(args.words) if args.words is not None else list(bundle.leaves)

    ok = validate_compact_multiproof(root, words, bundle.to_proof(), resolve_hasher(args))
    summary = VerifySummary(
        bundle_path=str(bundle_path),
        root=root,
        leaves=words,
        ok=ok,
        error_code=None if ok else ErrorCodes.ROOT_MISMATCH,
    )
    return _report(summary, args.json)
