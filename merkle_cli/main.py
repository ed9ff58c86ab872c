"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli root "You trust me, right?" [--json]
    python -m merkle_cli prove "You trust me, right?" --index 1 [--out proof.json]
    python -m merkle_cli verify proof.json [--word right?] [--root N]
    python -m merkle_cli multiprove --file words.txt --indices 0,1,6 [--out multi.json]
    python -m merkle_cli verify-multi multi.json [--words "Here's an for"]
    python -m merkle_cli compare --length 1000 --num-proofs 50 [--target-ratio 2.0]
    python -m merkle_cli sample --words 1000 [--out words.txt]
    python -m merkle_cli serve [--host 0.0.0.0] [--port 8000]
    python -m merkle_cli client upload data/file1.txt data/file2.txt
    python -m merkle_cli client verify file1.txt file2.txt [--multi]
    python -m merkle_cli config --init

Environment Variables:
    MERKLE_HASH_ALGORITHM       Hasher name: siphash13 (default), sha256
    MERKLE_HOST                 Bind host for serve (default: 0.0.0.0)
    MERKLE_PORT                 Bind port for serve (default: 8000)
    MERKLE_SERVER_URL           File server URL for client commands
    MERKLE_ROOT_FILE            Where the client keeps the trusted root
    MERKLE_LOG_LEVEL            Log level (default: WARNING)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.crypto.hashing import available_hashers
from merkle_cli.commands import client, compare, serve, tree, verify
from merkle_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, parse_indices
from merkle_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "text",
        type=str,
        nargs="?",
        default=None,
        help="Whitespace-separated leaf blocks",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read leaf blocks from a file instead",
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Merkle CLI - Compute roots, generate and verify proofs, and run the file server.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--hasher",
        type=str,
        default=None,
        choices=available_hashers(),
        help="Hash primitive (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a sentence",
        description="Pad the leaf blocks to a power of two and fold them into a root.",
    )
    _add_input_arguments(root_parser)
    _add_json_argument(root_parser)
    root_parser.set_defaults(func=tree.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate a single-leaf proof",
        description="Generate the side-tagged sibling path for one leaf.",
    )
    _add_input_arguments(prove_parser)
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Leaf position to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof bundle to this JSON file",
    )
    _add_json_argument(prove_parser)
    prove_parser.set_defaults(func=tree.prove_cmd)

    # --- multiprove command ---
    multiprove_parser = subparsers.add_parser(
        "multiprove",
        help="Generate a compact multiproof",
        description="Generate one proof covering several leaves, sharing internal hashes.",
    )
    _add_input_arguments(multiprove_parser)
    multiprove_parser.add_argument(
        "--indices",
        type=parse_indices,
        required=True,
        help="Comma-separated leaf positions, e.g. 0,1,6",
    )
    multiprove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the multiproof bundle to this JSON file",
    )
    _add_json_argument(multiprove_parser)
    multiprove_parser.set_defaults(func=tree.multiprove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a single-leaf proof bundle",
        description="Fold the leaf hash with each tagged sibling and compare to the root.",
    )
    verify_parser.add_argument(
        "bundle_path",
        type=str,
        help="Path to a proof bundle JSON file",
    )
    verify_parser.add_argument(
        "--word",
        type=str,
        default=None,
        help="Leaf content to verify (default: the bundle's leaf)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root, decimal or 0x-hex (default: the bundle's root)",
    )
    _add_json_argument(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- verify-multi command ---
    verify_multi_parser = subparsers.add_parser(
        "verify-multi",
        help="Verify a compact multiproof bundle",
        description="Rebuild the root from the leaves and the supplied hashes.",
    )
    verify_multi_parser.add_argument(
        "bundle_path",
        type=str,
        help="Path to a multiproof bundle JSON file",
    )
    verify_multi_parser.add_argument(
        "--words",
        type=str,
        default=None,
        help="Whitespace-separated leaf contents in index order (default: the bundle's leaves)",
    )
    verify_multi_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root, decimal or 0x-hex (default: the bundle's root)",
    )
    _add_json_argument(verify_multi_parser)
    verify_multi_parser.set_defaults(func=verify.verify_multi_cmd)

    # --- compare command ---
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare compact and individual proof sizes",
        description="Prove random indices of a random sentence both ways and report sizes.",
    )
    compare_parser.add_argument(
        "--length",
        type=int,
        default=1000,
        help="Number of random words (default: 1000)",
    )
    compare_parser.add_argument(
        "--num-proofs", "-n",
        type=int,
        default=10,
        help="Number of distinct indices to prove (default: 10)",
    )
    compare_parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="RNG seed for words and indices (default: 0)",
    )
    compare_parser.add_argument(
        "--target-ratio",
        type=float,
        default=None,
        help="Also report the smallest proof count reaching this size ratio",
    )
    _add_json_argument(compare_parser)
    compare_parser.set_defaults(func=compare.compare_cmd)

    # --- sample command ---
    sample_parser = subparsers.add_parser(
        "sample",
        help="Generate sample data",
        description="Generate random words, or the sample files used by the client demo.",
    )
    sample_group = sample_parser.add_mutually_exclusive_group(required=True)
    sample_group.add_argument(
        "--words",
        type=int,
        default=None,
        help="Generate this many random words",
    )
    sample_group.add_argument(
        "--files",
        type=str,
        default=None,
        help="Write the demo sample files into this directory",
    )
    sample_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed for random words",
    )
    sample_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write random words to this file instead of stdout",
    )
    _add_json_argument(sample_parser)
    sample_parser.set_defaults(func=compare.sample_cmd)

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the Merkle file server",
        description="Serve uploads, downloads and proofs over HTTP.",
    )
    serve_parser.add_argument("--host", type=str, default=None, help="Bind host (overrides config)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (overrides config)")
    serve_parser.set_defaults(func=serve.serve_cmd)

    # --- client command ---
    client_parser = subparsers.add_parser(
        "client",
        help="Talk to a running file server",
        description="Upload files and verify them against a locally stored root.",
    )
    client_parser.add_argument(
        "--server",
        type=str,
        default=None,
        help="File server URL (overrides config)",
    )
    client_parser.add_argument(
        "--root-file",
        type=str,
        default=None,
        help="Trusted root file (overrides config)",
    )
    client_subparsers = client_parser.add_subparsers(dest="client_action", help="Client action")

    # client upload
    client_upload = client_subparsers.add_parser(
        "upload",
        help="Upload files and store the root locally",
    )
    client_upload.add_argument("paths", nargs="+", type=str, help="Files to upload")
    _add_json_argument(client_upload)
    client_upload.set_defaults(func=client.client_upload_cmd)

    # client verify
    client_verify = client_subparsers.add_parser(
        "verify",
        help="Download files and verify their proofs",
    )
    client_verify.add_argument("filenames", nargs="+", type=str, help="Stored filenames to verify")
    client_verify.add_argument(
        "--multi",
        action="store_true",
        default=False,
        help="Verify all files with one compact multiproof",
    )
    _add_json_argument(client_verify)
    client_verify.set_defaults(func=client.client_verify_cmd)

    client_parser.set_defaults(func=lambda args: client_parser.print_help() or EXIT_SUCCESS)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config_path = Path(args.path)
        config = load_config(config_path if config_path.exists() else None)
        print(json.dumps(config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: merkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
