"""Driver-side helpers that evaluate genomes and discard broken candidates."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import ArgumentError, StateError
from .genome import Genome
from .reporters import EventLogger


def evaluate_or_discard(
    genome: Genome,
    inputs: Sequence[float],
    logger: EventLogger | None = None,
) -> list[float] | None:
    """Evaluate ``genome``, returning ``None`` when it cannot be evaluated.

    Input-size mismatches and cyclic topologies mark the candidate as unusable;
    the failure is written to ``logger`` when one is given. Any other exception
    propagates.
    """
    try:
        return genome.evaluate(inputs)
    except (ArgumentError, StateError) as error:
        if logger is not None:
            logger.log_rejection(genome, error)
        return None


def evaluate_all(
    genomes: Mapping[int, Genome],
    inputs: Sequence[float],
    logger: EventLogger | None = None,
) -> dict[int, list[float]]:
    """Evaluate every genome on the same inputs, keyed like ``genomes``.

    Genomes that fail to evaluate are left out of the result.
    """
    results: dict[int, list[float]] = {}
    for genome_id, genome in genomes.items():
        outputs = evaluate_or_discard(genome, inputs, logger)
        if outputs is not None:
            results[genome_id] = outputs
    return results


__all__ = ["evaluate_all", "evaluate_or_discard"]
