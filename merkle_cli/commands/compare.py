"""
CLI Compare and Sample Commands

Usage:
    merkle compare --length 2023 --num-proofs 500 --seed 12345678 [--target-ratio 2.0]
    merkle sample --words 1000 --seed 7 --out words.txt
    merkle sample --files data
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from core.merkle.size_report import compare_proof_sizes, find_breakpoint, string_of_random_words
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
    resolve_hasher,
)


logger = logging.getLogger(__name__)


SAMPLE_FILES: dict[str, str] = {
    "file1.txt": (
        "This is the content of file1.\n"
        "It has multiple lines.\n"
        "Each line contains some text.\n"
    ),
    "file2.txt": (
        "File2 contains different content.\n"
        "It also has multiple lines.\n"
        "Here's some more text.\n"
    ),
    "file3.txt": (
        "The third file, file3, has its own content.\n"
        "It might be similar or different from the others.\n"
        "Here are a few more lines of text.\n"
    ),
}


def write_sample_files(directory: Path) -> list[Path]:
    """Write the demo files used by `merkle client` into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for name, content in SAMPLE_FILES.items():
        path = directory / name
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written


def compare_cmd(args: Namespace) -> int:
    """Execute the compare command."""
    if args.length < 1 or args.num_proofs < 1:
        print_error("--length and --num-proofs must be positive")
        return EXIT_RUNTIME_ERROR

    hasher = resolve_hasher(args)
    sentence = string_of_random_words(args.length, seed=args.seed)

    try:
        comparison = compare_proof_sizes(sentence, args.length, args.num_proofs, args.seed, hasher)
    except ValueError as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    breakpoint_ = None
    if args.target_ratio is not None:
        breakpoint_ = find_breakpoint(sentence, args.length, args.target_ratio, args.seed, hasher)

    if args.json:
        data = comparison.to_dict()
        del data["indices"]
        data["length"] = args.length
        data["num_proofs"] = args.num_proofs
        if args.target_ratio is not None:
            data["target_ratio"] = args.target_ratio
            data["breakpoint"] = breakpoint_
        print_json(data)
    else:
        print(f"leaves: {args.length}")
        print(f"proofs: {args.num_proofs}")
        print(f"compact: {comparison.compact_size} bytes ({comparison.compact_hashes} hashes)")
        print(f"individual: {comparison.individual_size} bytes ({comparison.individual_hashes} hashes)")
        print(f"ratio: {comparison.ratio:.2f}")
        if args.target_ratio is not None:
            if breakpoint_ is None:
                print(f"breakpoint: ratio {args.target_ratio} not reached")
            else:
                print(f"breakpoint: {breakpoint_} proofs reach ratio {args.target_ratio}")
    return EXIT_SUCCESS


def sample_cmd(args: Namespace) -> int:
    """Execute the sample command."""
    if args.files is not None:
        written = write_sample_files(Path(args.files))
        logger.info(f"Wrote {len(written)} sample files to {args.files}")
        if args.json:
            print_json({"files": [str(p) for p in written]})
        else:
            for path in written:
                print(path)
        return EXIT_SUCCESS

    if args.words < 0:
        print_error("--words must not be negative")
        return EXIT_RUNTIME_ERROR

    sentence = string_of_random_words(args.words, seed=args.seed)
    if args.out:
        Path(args.out).write_text(sentence + "\n", encoding="utf-8")
        logger.info(f"Wrote {args.words} words to {args.out}")

    if args.json:
        data = {"words": args.words}
        if args.out:
            data["out"] = args.out
        else:
            data["sentence"] = sentence
        print_json(data)
    elif not args.out:
        print(sentence)
    return EXIT_SUCCESS
