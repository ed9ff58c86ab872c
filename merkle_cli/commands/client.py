"""
CLI Client Commands

Upload files to a running file server, keep the root locally, and later
verify downloaded files against that root.

Usage:
    merkle client upload data/file1.txt data/file2.txt data/file3.txt
    merkle client verify file1.txt file2.txt file3.txt [--multi]

The trusted root is computed locally from the uploaded contents (never
taken from the server) and stored as 8 little-endian bytes.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.crypto.hashing import Hasher, HashValue, from_le_bytes, to_le_bytes
from core.http.client import HttpClient, HttpError
from core.merkle.merkle_tree import root_of, validate_proof
from core.merkle.multiproof import validate_compact_multiproof
from core.schemas.proof import MultiProofBundle, ProofBundle
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_error,
    print_json,
    resolve_hasher,
)


logger = logging.getLogger(__name__)


@dataclass
class UploadSummary:
    """Summary of an upload for CLI output."""
    files: list[str] = field(default_factory=list)
    local_root: int = 0
    server_root: int | None = None
    root_file: str = ""

    @property
    def roots_match(self) -> bool:
        return self.server_root == self.local_root

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["roots_match"] = self.roots_match
        return d


@dataclass
class FileCheck:
    """Verification outcome for one file."""
    filename: str
    ok: bool
    message: str = ""


@dataclass
class ClientVerifySummary:
    """Summary of client-side verification for CLI output."""
    root: int = 0
    mode: str = "single"
    checks: list[FileCheck] = field(default_factory=list)

    @property
    def all_ok(self) -> bool:
        return bool(self.checks) and all(c.ok for c in self.checks)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ok"] = self.all_ok
        return d


def _make_client(args: Namespace) -> HttpClient:
    config = args.cli_config
    return HttpClient(args.server or config.server_url, timeout=config.timeout)


def _root_file(args: Namespace) -> Path:
    return Path(args.root_file or args.cli_config.root_file)


def file_leaf(content: str, hasher: Hasher) -> str:
    """Leaf block the server commits for a file with this content."""
    return str(hasher.hash_word(content))


def local_root(files: dict[str, str], hasher: Hasher) -> HashValue:
    """Root over ``files`` using the server's leaf order (sorted filenames)."""
    return root_of([file_leaf(files[name], hasher) for name in sorted(files)], hasher)


def write_root(path: Path, root: HashValue) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(to_le_bytes(root))


def read_root(path: Path) -> HashValue:
    """
    Load a stored root.

    Raises:
        FileNotFoundError: If no root has been stored yet
        ValueError: If the file holds fewer than 8 bytes
    """
    return from_le_bytes(path.read_bytes())


def client_upload_cmd(args: Namespace) -> int:
    """Execute the client upload command."""
    hasher = resolve_hasher(args)

    files: dict[str, str] = {}
    for raw in args.paths:
        path = Path(raw)
        if not path.is_file():
            print_error(f"File not found: {path}")
            return EXIT_RUNTIME_ERROR
        files[path.name] = path.read_text(encoding="utf-8")

    http = _make_client(args)
    try:
        response = http.post("/upload", json=files)
        response.raise_for_status()
    except HttpError as e:
        print_error(f"Upload failed: {e}")
        return EXIT_RUNTIME_ERROR
    finally:
        http.close()

    summary = UploadSummary(
        files=sorted(files),
        local_root=local_root(files, hasher),
        server_root=response.json().get("root"),
        root_file=str(_root_file(args)),
    )
    write_root(Path(summary.root_file), summary.local_root)

    if not summary.roots_match:
        logger.warning(
            f"Server root {summary.server_root} differs from local root {summary.local_root}; "
            "the server holds other files or uses another hasher"
        )

    if args.json:
        print_json(summary.to_dict())
    else:
        for name in summary.files:
            print(f"uploaded: {name}")
        print(f"root: {summary.local_root}")
        print(f"root_file: {summary.root_file}")
        if not summary.roots_match:
            print(f"warning: server root is {summary.server_root}")
    return EXIT_SUCCESS


def _download(http: HttpClient, filename: str) -> str:
    response = http.get(f"/download/{filename}")
    response.raise_for_status()
    return response.json()


def _verify_single(
    http: HttpClient,
    filenames: list[str],
    root: HashValue,
    hasher: Hasher,
) -> list[FileCheck]:
    checks = []
    for name in filenames:
        try:
            content = _download(http, name)
            response = http.get(f"/proof/{name}")
            response.raise_for_status()
            bundle = ProofBundle.model_validate(response.json())
        except (HttpError, ValueError) as e:
            checks.append(FileCheck(filename=name, ok=False, message=str(e)))
            continue

        ok = validate_proof(root, file_leaf(content, hasher), bundle.to_proof(), hasher)
        checks.append(FileCheck(
            filename=name,
            ok=ok,
            message="verified" if ok else "proof does not match stored root",
        ))
    return checks


def _verify_multi(
    http: HttpClient,
    filenames: list[str],
    root: HashValue,
    hasher: Hasher,
) -> list[FileCheck]:
    try:
        leaves = [file_leaf(_download(http, name), hasher) for name in filenames]
        response = http.post("/multiproof", json={"filenames": filenames})
        response.raise_for_status()
        bundle = MultiProofBundle.model_validate(response.json())
    except (HttpError, ValueError) as e:
        return [FileCheck(filename=name, ok=False, message=str(e)) for name in filenames]

    ok = validate_compact_multiproof(root, leaves, bundle.to_proof(), hasher)
    message = "verified" if ok else "multiproof does not match stored root"
    return [FileCheck(filename=name, ok=ok, message=message) for name in filenames]


def client_verify_cmd(args: Namespace) -> int:
    """Execute the client verify command."""
    hasher = resolve_hasher(args)
    root_path = _root_file(args)
    try:
        root = read_root(root_path)
    except (OSError, ValueError) as e:
        print_error(f"Cannot read stored root from {root_path}: {e}")
        return EXIT_RUNTIME_ERROR

    http = _make_client(args)
    try:
        if args.multi:
            checks = _verify_multi(http, args.filenames, root, hasher)
        else:
            checks = _verify_single(http, args.filenames, root, hasher)
    finally:
        http.close()

    summary = ClientVerifySummary(
        root=root,
        mode="multi" if args.multi else "single",
        checks=checks,
    )

    if args.json:
        print_json(summary.to_dict())
    else:
        print(f"root: {summary.root}")
        for check in summary.checks:
            status = "✓" if check.ok else "✗"
            print(f"  {status} {check.filename}: {check.message}")

    if summary.all_ok:
        logger.info("All files verified")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
