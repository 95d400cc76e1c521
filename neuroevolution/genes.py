"""Gene primitives (nodes and connections) for genomes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

WEIGHT_TOLERANCE = 1e-6


class NodeType(str, Enum):
    """Enumeration of supported node roles."""

    INPUT = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"

    @classmethod
    def coerce(cls, value: NodeType | str) -> NodeType:
        """Coerce a string or NodeType into a NodeType instance."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            msg = f"Unsupported node type value: {value!r}"
            raise TypeError(msg)
        try:
            return cls(value.lower())
        except ValueError as error:
            valid = ", ".join(member.value for member in cls)
            msg = f"Invalid node type {value!r}. Expected one of: {valid}"
            raise ValueError(msg) from error


@dataclass(frozen=True, slots=True)
class NodeGene:
    """A vertex of the encoded network, identified by a stable id."""

    id: int
    type: NodeType

    def __post_init__(self) -> None:
        if self.id < 0:
            msg = "Node id must be non-negative."
            raise ValueError(msg)
        object.__setattr__(self, "type", NodeType.coerce(self.type))

    @property
    def is_input(self) -> bool:
        return self.type is NodeType.INPUT

    @property
    def is_output(self) -> bool:
        return self.type is NodeType.OUTPUT

    @property
    def is_hidden(self) -> bool:
        return self.type is NodeType.HIDDEN

    def copy(self) -> NodeGene:
        """Return an independent node with the same id and role."""
        return NodeGene(id=self.id, type=self.type)


@dataclass(frozen=True, slots=True, eq=False)
class ConnectionGene:
    """A weighted, enableable edge between two node genes.

    Two connections compare equal when their innovation numbers match and
    their weights differ by less than ``WEIGHT_TOLERANCE``. Endpoints are not
    part of equality; the innovation number identifies the connection.
    """

    innovation: int
    input_id: int
    output_id: int
    weight: float
    enabled: bool = True

    def __post_init__(self) -> None:
        for field_name, value in (
            ("innovation", self.innovation),
            ("input_id", self.input_id),
            ("output_id", self.output_id),
        ):
            if value < 0:
                msg = f"{field_name} must be non-negative."
                raise ValueError(msg)
        try:
            weight = float(self.weight)
        except (TypeError, ValueError) as error:
            msg = f"weight must be convertible to float, got {self.weight!r}"
            raise ValueError(msg) from error
        if not math.isfinite(weight):
            msg = "weight must be a finite number."
            raise ValueError(msg)
        object.__setattr__(self, "weight", weight)
        object.__setattr__(self, "enabled", bool(self.enabled))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectionGene):
            return NotImplemented
        return (
            self.innovation == other.innovation
            and abs(self.weight - other.weight) < WEIGHT_TOLERANCE
        )

    def __hash__(self) -> int:
        return hash(self.innovation)

    @property
    def endpoints(self) -> frozenset[int]:
        """Return the unordered pair of node ids this connection joins."""
        return frozenset((self.input_id, self.output_id))

    def with_weight(self, weight: float) -> ConnectionGene:
        """Return a copy carrying ``weight`` instead of the current weight."""
        return ConnectionGene(
            innovation=self.innovation,
            input_id=self.input_id,
            output_id=self.output_id,
            weight=weight,
            enabled=self.enabled,
        )

    def disable(self) -> ConnectionGene:
        """Return a copy with the `enabled` flag cleared."""
        return ConnectionGene(
            innovation=self.innovation,
            input_id=self.input_id,
            output_id=self.output_id,
            weight=self.weight,
            enabled=False,
        )

    def copy(self) -> ConnectionGene:
        return self.with_weight(self.weight)


Gene = NodeGene | ConnectionGene


__all__ = ["WEIGHT_TOLERANCE", "NodeType", "NodeGene", "ConnectionGene", "Gene"]
