"""YAML configuration loading for mutation, rendering and seed genomes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .genes import ConnectionGene, Gene, NodeGene
from .genome import Genome
from .mutation import WeightMutationConfig


@dataclass(frozen=True, slots=True)
class GraphvizConfig:
    """Rendering options for :meth:`Genome.to_graphviz`."""

    include_disabled: bool = False

    def render(self, genome: Genome) -> str:
        return genome.to_graphviz(include_disabled=self.include_disabled)


def _load_yaml(path: Path) -> Mapping[str, Any]:
    with Path(path).open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        msg = f"Expected mapping in YAML file: {path}"
        raise ValueError(msg)
    return data


def load_mutation_config(path: Path) -> WeightMutationConfig:
    data = _load_yaml(path)
    return WeightMutationConfig(
        mutate_rate=float(data.get("mutate_rate", 0.25)),
        perturb_step=float(data.get("perturb_step", data.get("step", 0.1))),
    )


def load_graphviz_config(path: Path) -> GraphvizConfig:
    data = _load_yaml(path)
    return GraphvizConfig(include_disabled=bool(data.get("include_disabled", False)))


def _sequence(data: Mapping[str, Any], key: str, path: Path) -> Sequence[Any]:
    value = data.get(key) or []
    if not isinstance(value, Sequence) or isinstance(value, str):
        msg = f"Expected a list under {key!r} in {path}"
        raise ValueError(msg)
    return value


def load_genome(path: Path) -> Genome:
    """Build a genome from a YAML document of nodes and connections.

    Node entries need ``id`` and ``type``; connection entries need ``input``,
    ``output`` and ``innovation`` and may set ``weight`` and ``enabled``.
    """
    data = _load_yaml(path)
    genes: list[Gene] = []
    try:
        for entry in _sequence(data, "nodes", path):
            genes.append(NodeGene(id=int(entry["id"]), type=entry["type"]))
        for entry in _sequence(data, "connections", path):
            genes.append(
                ConnectionGene(
                    innovation=int(entry["innovation"]),
                    input_id=int(entry["input"]),
                    output_id=int(entry["output"]),
                    weight=entry.get("weight", 0.0),
                    enabled=bool(entry.get("enabled", True)),
                )
            )
    except KeyError as error:
        msg = f"Missing gene field {error.args[0]!r} in {path}"
        raise ValueError(msg) from error
    return Genome(genes)


__all__ = [
    "GraphvizConfig",
    "load_genome",
    "load_graphviz_config",
    "load_mutation_config",
]
