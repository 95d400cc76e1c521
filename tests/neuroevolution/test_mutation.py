from __future__ import annotations

from collections.abc import Iterable
from random import Random

import pytest
from neuroevolution.genes import ConnectionGene, NodeGene, NodeType
from neuroevolution.genome import Genome
from neuroevolution.mutation import (
    ConnectionWeightMutator,
    MutatorChain,
    WeightMutationConfig,
)


class ScriptedRandom(Random):
    """Random source replaying a fixed list of ``random()`` draws."""

    def __init__(self, draws: Iterable[float]) -> None:
        super().__init__(0)
        self._draws = iter(draws)

    def random(self) -> float:
        return next(self._draws)


def _wide_genome() -> Genome:
    nodes = [
        NodeGene(0, NodeType.INPUT),
        *(NodeGene(i, NodeType.OUTPUT) for i in range(1, 51)),
    ]
    connections = [
        ConnectionGene(
            innovation=i,
            input_id=0,
            output_id=i,
            weight=0.0,
            enabled=i % 5 != 0,
        )
        for i in range(1, 51)
    ]
    return Genome([*nodes, *connections])


def test_weight_mutation_config_defaults_and_validation() -> None:
    config = WeightMutationConfig()
    assert config.mutate_rate == pytest.approx(0.25)
    assert config.perturb_step == pytest.approx(0.1)

    with pytest.raises(ValueError):
        WeightMutationConfig(mutate_rate=1.5)

    with pytest.raises(ValueError):
        WeightMutationConfig(perturb_step=0.0)

    with pytest.raises(ValueError):
        WeightMutationConfig(perturb_step=float("nan"))

    with pytest.raises(ValueError):
        WeightMutationConfig(perturb_step=float("inf"))


def test_mutate_perturbs_within_step() -> None:
    genome = _wide_genome()
    mutator = ConnectionWeightMutator(
        Random(0),
        WeightMutationConfig(mutate_rate=1.0, perturb_step=0.1),
    )

    mutated = mutator.mutate(genome)

    assert len(mutated) == len(genome)
    before = list(genome.get_connections())
    after = list(mutated.get_connections())
    assert [conn.innovation for conn in after] == [conn.innovation for conn in before]
    changed = 0
    for original, updated in zip(before, after, strict=True):
        assert updated.enabled == original.enabled
        assert (updated.input_id, updated.output_id) == (
            original.input_id,
            original.output_id,
        )
        if original.enabled:
            assert abs(updated.weight - original.weight) <= 0.1
            changed += updated.weight != original.weight
        else:
            assert updated.weight == original.weight
    assert changed > 0
    # The input genome is left untouched.
    assert all(conn.weight == 0.0 for conn in genome.get_connections())


def test_mutate_respects_rate() -> None:
    genome = _wide_genome()
    mutator = ConnectionWeightMutator(Random(1), WeightMutationConfig(mutate_rate=0.0))

    mutated = mutator.mutate(genome)

    assert mutated == genome
    assert mutated is not genome


def test_mutate_gate_uses_single_draw() -> None:
    genome = Genome(
        [
            NodeGene(1, NodeType.INPUT),
            NodeGene(2, NodeType.OUTPUT),
            ConnectionGene(0, 1, 2, 0.5),
        ]
    )

    skipped = ConnectionWeightMutator(ScriptedRandom([0.3])).mutate(genome)
    assert [conn.weight for conn in skipped.get_connections()] == [0.5]

    perturbed = ConnectionWeightMutator(ScriptedRandom([0.2, 1.0])).mutate(genome)
    assert [conn.weight for conn in perturbed.get_connections()] == pytest.approx([0.6])

    lowered = ConnectionWeightMutator(ScriptedRandom([0.2, 0.0])).mutate(genome)
    assert [conn.weight for conn in lowered.get_connections()] == pytest.approx([0.4])


def test_disabled_connections_consume_no_draws() -> None:
    mutator = ConnectionWeightMutator(ScriptedRandom([]))
    connection = ConnectionGene(3, 1, 2, 0.8, enabled=False)

    assert mutator.mutate_connection_weight(connection) is connection


def test_mutate_connection_weights_preserves_gene_order() -> None:
    genome = Genome(
        [
            NodeGene(1, NodeType.INPUT),
            NodeGene(2, NodeType.OUTPUT),
            ConnectionGene(0, 1, 2, 0.5),
            NodeGene(3, NodeType.HIDDEN),
            ConnectionGene(1, 1, 3, 0.25, enabled=False),
        ]
    )
    mutator = ConnectionWeightMutator(ScriptedRandom([0.75]))

    mutated = mutator.mutate_connection_weights(genome)

    assert [type(gene) for gene in mutated.genes] == [type(gene) for gene in genome.genes]
    weights = [conn.weight for conn in mutated.get_connections()]
    assert weights == pytest.approx([0.55, 0.25])


def test_mutator_chain_applies_in_order() -> None:
    genome = Genome(
        [
            NodeGene(1, NodeType.INPUT),
            NodeGene(2, NodeType.OUTPUT),
            ConnectionGene(0, 1, 2, 0.0),
        ]
    )
    first = ConnectionWeightMutator(ScriptedRandom([0.0, 1.0]))
    second = ConnectionWeightMutator(ScriptedRandom([0.0, 1.0]))

    mutated = MutatorChain([first, second]).mutate(genome)

    assert [conn.weight for conn in mutated.get_connections()] == pytest.approx([0.2])

    with pytest.raises(ValueError):
        MutatorChain([])
