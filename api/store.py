"""
File Store

In-memory file table behind the API, plus the Merkle root over it.

Each stored file contributes one leaf: the decimal string of its content
hash. Leaves are ordered by filename so that root computation and proof
generation always agree on positions, whatever order uploads arrive in.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import DEFAULT_HASHER, Hasher, HashValue
from core.merkle.merkle_tree import MerkleProof, generate_proof, root_of
from core.merkle.multiproof import CompactMerkleMultiProof, generate_compact_multiproof


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """A stored file and the hash of its content."""
    content: str
    content_hash: HashValue

    @property
    def leaf(self) -> str:
        """Leaf block committed for this file."""
        return str(self.content_hash)


class FileStore:
    """
    Thread-safe file table.

    All reads that derive positions (proofs) take the same lock as writes,
    so a proof is always generated against the root it reports.
    """

    def __init__(self, hasher: Hasher | None = None) -> None:
        self.hasher = hasher or DEFAULT_HASHER
        self._files: dict[str, StoredFile] = {}
        self._root: HashValue | None = None
        self._lock = threading.Lock()

    def _ordered_names(self) -> list[str]:
        return sorted(self._files)

    def _leaves(self) -> list[str]:
        return [self._files[name].leaf for name in self._ordered_names()]

    def upload(self, files: dict[str, str]) -> HashValue:
        """
        Store (or replace) files and recompute the root over all files.

        Returns:
            The new root
        """
        with self._lock:
            for name, content in files.items():
                self._files[name] = StoredFile(
                    content=content,
                    content_hash=self.hasher.hash_word(content),
                )
            self._root = root_of(self._leaves(), self.hasher)
            logger.info(
                "Stored %d file(s); %d total, root=%d",
                len(files),
                len(self._files),
                self._root,
            )
            return self._root

    def get(self, name: str) -> StoredFile | None:
        with self._lock:
            return self._files.get(name)

    @property
    def root(self) -> HashValue | None:
        with self._lock:
            return self._root

    def filenames(self) -> list[str]:
        with self._lock:
            return self._ordered_names()

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._files

    def prove(self, name: str) -> tuple[HashValue, int, str, MerkleProof]:
        """
        Single-leaf proof for a stored file.

        Returns:
            (root, index, leaf, proof)

        Raises:
            KeyError: If the file is not stored
        """
        with self._lock:
            names = self._ordered_names()
            if name not in self._files:
                raise KeyError(name)
            index = names.index(name)
            root, proof = generate_proof(self._leaves(), index, self.hasher)
            return root, index, self._files[name].leaf, proof

    def prove_many(
        self,
        names: Sequence[str],
    ) -> tuple[HashValue, list[str], CompactMerkleMultiProof]:
        """
        Compact multiproof for several stored files.

        Returns:
            (root, leaves in request order, proof)

        Raises:
            KeyError: If any file is not stored
            DuplicateLeafIndexException: If a file is named twice
        """
        with self._lock:
            ordered = self._ordered_names()
            positions = {name: i for i, name in enumerate(ordered)}
            missing = [name for name in names if name not in positions]
            if missing:
                raise KeyError(missing[0])
            indices = [positions[name] for name in names]
            root, proof = generate_compact_multiproof(self._leaves(), indices, self.hasher)
            return root, [self._files[name].leaf for name in names], proof

    def clear(self) -> None:
        with self._lock:
            self._files.clear()
            self._root = None
