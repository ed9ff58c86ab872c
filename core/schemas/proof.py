"""
Module 01 - Schemas
File: proof.py

Purpose: Wire schemas for Merkle proofs exchanged between the file server,
the CLI client and proof files on disk.

Encoding rules:
- Hashes are JSON integers in [0, 2**64)
- A sibling node is an object with exactly one key, "Left" or "Right",
  holding the sibling hash: {"Left": 4099928055547683737}
- The side tag is required on every sibling node
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from core.crypto.hashing import HASH_MAX, HashValue
from core.merkle.merkle_tree import MerkleProof, Side, SiblingNode
from core.merkle.multiproof import CompactMerkleMultiProof


HashInt = Annotated[int, Field(ge=0, le=HASH_MAX)]
LeafIndex = Annotated[int, Field(ge=0)]


class SiblingNodeWire(BaseModel):
    """
    Wire form of a side-tagged sibling hash.

    Serializes to a single-key object, {"Left": h} or {"Right": h}.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    Left: HashInt | None = None
    Right: HashInt | None = None

    @model_validator(mode="after")
    def _exactly_one_side(self) -> "SiblingNodeWire":
        if (self.Left is None) == (self.Right is None):
            raise ValueError("Sibling node must carry exactly one of 'Left' or 'Right'")
        return self

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, int]:
        if self.Left is not None:
            return {Side.LEFT.value: self.Left}
        return {Side.RIGHT.value: self.Right}

    @classmethod
    def from_node(cls, node: SiblingNode) -> "SiblingNodeWire":
        if node.side is Side.LEFT:
            return cls(Left=node.hash)
        return cls(Right=node.hash)

    def to_node(self) -> SiblingNode:
        if self.Left is not None:
            return SiblingNode.left(self.Left)
        return SiblingNode.right(self.Right)


class ProofBundle(BaseModel):
    """
    A root together with a single-leaf proof.

    ``index`` and ``leaf`` are informational; verification only needs the
    root, the leaf content and the sibling path.
    """

    model_config = ConfigDict(extra="forbid")

    root: HashInt = Field(..., description="Merkle root the proof is against")
    proof: list[SiblingNodeWire] = Field(
        default_factory=list,
        description="Sibling path from leaf to root",
    )
    index: LeafIndex | None = Field(default=None, description="Leaf position")
    leaf: str | None = Field(default=None, description="Leaf content")

    @classmethod
    def from_proof(
        cls,
        root: HashValue,
        proof: MerkleProof,
        index: int | None = None,
        leaf: str | None = None,
    ) -> "ProofBundle":
        return cls(
            root=root,
            proof=[SiblingNodeWire.from_node(node) for node in proof],
            index=index,
            leaf=leaf,
        )

    def to_proof(self) -> MerkleProof:
        return [node.to_node() for node in self.proof]


class MultiProofBundle(BaseModel):
    """A root together with a compact multiproof and, optionally, the leaves."""

    model_config = ConfigDict(extra="forbid")

    root: HashInt = Field(..., description="Merkle root the proof is against")
    leaf_indices: list[LeafIndex] = Field(
        default_factory=list,
        description="Leaf positions covered, in request order",
    )
    hashes: list[HashInt] = Field(
        default_factory=list,
        description="Extra hashes, lowest layer first",
    )
    leaves: list[str] = Field(
        default_factory=list,
        description="Leaf contents in leaf_indices order",
    )

    @classmethod
    def from_proof(
        cls,
        root: HashValue,
        proof: CompactMerkleMultiProof,
        leaves: list[str] | None = None,
    ) -> "MultiProofBundle":
        return cls(
            root=root,
            leaf_indices=list(proof.leaf_indices),
            hashes=list(proof.hashes),
            leaves=leaves or [],
        )

    def to_proof(self) -> CompactMerkleMultiProof:
        return CompactMerkleMultiProof(
            leaf_indices=list(self.leaf_indices),
            hashes=list(self.hashes),
        )


def proof_to_wire(proof: MerkleProof) -> list[dict[str, Any]]:
    """Encode a sibling path as a JSON-ready list."""
    return [SiblingNodeWire.from_node(node).model_dump() for node in proof]


def proof_from_wire(data: list[dict[str, Any]]) -> MerkleProof:
    """
    Decode a sibling path from its JSON form.

    Raises:
        pydantic.ValidationError: If any node is malformed
    """
    return [SiblingNodeWire.model_validate(item).to_node() for item in data]


__all__ = [
    "HashInt",
    "SiblingNodeWire",
    "ProofBundle",
    "MultiProofBundle",
    "proof_to_wire",
    "proof_from_wire",
]
