"""Mutation operators producing offspring genomes."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from random import Random
from typing import Protocol

from .genes import ConnectionGene
from .genome import Genome


class Mutator(Protocol):
    """Anything that derives a new genome from an existing one."""

    def mutate(self, genome: Genome) -> Genome: ...


@dataclass(frozen=True, slots=True)
class WeightMutationConfig:
    """Configuration for weight mutation behaviour."""

    mutate_rate: float = 0.25
    perturb_step: float = 0.1

    def __post_init__(self) -> None:
        if not 0.0 <= self.mutate_rate <= 1.0:
            msg = "mutate_rate must be in [0, 1]."
            raise ValueError(msg)
        if not math.isfinite(self.perturb_step) or self.perturb_step <= 0.0:
            msg = "perturb_step must be a positive finite number."
            raise ValueError(msg)


class ConnectionWeightMutator:
    """Perturb the weights of every enabled connection, some of the time.

    One draw decides whether the genome is touched at all. When it is, each
    enabled connection moves by a uniform step in
    ``[-perturb_step, perturb_step]``; disabled connections pass through and
    consume no randomness.
    """

    def __init__(
        self,
        rng: Random,
        config: WeightMutationConfig | None = None,
    ) -> None:
        self._rng = rng
        self._config = WeightMutationConfig() if config is None else config

    @property
    def config(self) -> WeightMutationConfig:
        return self._config

    def mutate(self, genome: Genome) -> Genome:
        result = genome.copy()
        if self._rng.random() < self._config.mutate_rate:
            result = self.mutate_connection_weights(result)
        return result

    def mutate_connection_weights(self, genome: Genome) -> Genome:
        """Return ``genome`` with every enabled connection perturbed."""
        return Genome(
            self.mutate_connection_weight(gene)
            if isinstance(gene, ConnectionGene)
            else gene
            for gene in genome.genes
        )

    def mutate_connection_weight(self, connection: ConnectionGene) -> ConnectionGene:
        if not connection.enabled:
            return connection

        # TODO: occasionally replace the weight with a fresh random value.
        delta = self._rng.uniform(-1.0, 1.0) * self._config.perturb_step
        return connection.with_weight(connection.weight + delta)


class MutatorChain:
    """Apply several mutators one after another."""

    def __init__(self, mutators: Iterable[Mutator]) -> None:
        self._mutators = tuple(mutators)
        if not self._mutators:
            msg = "MutatorChain requires at least one mutator."
            raise ValueError(msg)

    def mutate(self, genome: Genome) -> Genome:
        for mutator in self._mutators:
            genome = mutator.mutate(genome)
        return genome


__all__ = [
    "ConnectionWeightMutator",
    "Mutator",
    "MutatorChain",
    "WeightMutationConfig",
]
