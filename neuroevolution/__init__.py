"""NEAT-style genome encoding of feed-forward networks."""

from __future__ import annotations

from .config import (
    GraphvizConfig,
    load_genome,
    load_graphviz_config,
    load_mutation_config,
)
from .errors import ArgumentError, StateError
from .evaluator import evaluate_all, evaluate_or_discard
from .genes import ConnectionGene, Gene, NodeGene, NodeType
from .genome import Genome
from .mutation import (
    ConnectionWeightMutator,
    Mutator,
    MutatorChain,
    WeightMutationConfig,
)
from .reporters import EventLogger

__all__ = [
    "ArgumentError",
    "StateError",
    "ConnectionGene",
    "Gene",
    "NodeGene",
    "NodeType",
    "Genome",
    "Mutator",
    "MutatorChain",
    "ConnectionWeightMutator",
    "WeightMutationConfig",
    "GraphvizConfig",
    "load_genome",
    "load_graphviz_config",
    "load_mutation_config",
    "evaluate_all",
    "evaluate_or_discard",
    "EventLogger",
]
