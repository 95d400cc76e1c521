"""Immutable genome representation and feed-forward evaluation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal

from .errors import ArgumentError, StateError
from .genes import WEIGHT_TOLERANCE, ConnectionGene, Gene, NodeGene

NodeRef = NodeGene | int

# Wide enough to quantize any finite float to two decimal places.
_LABEL_CONTEXT = Context(prec=400)


def _node_id(node: NodeRef) -> int:
    if isinstance(node, NodeGene):
        return node.id
    if isinstance(node, int) and not isinstance(node, bool):
        return node
    msg = f"Expected a NodeGene or integer node id, got {node!r}"
    raise ArgumentError(msg)


def _split_genes(
    genes: Iterable[Gene],
) -> tuple[list[NodeGene], list[ConnectionGene]]:
    nodes: list[NodeGene] = []
    connections: list[ConnectionGene] = []
    for gene in genes:
        match gene:
            case NodeGene():
                nodes.append(gene)
            case ConnectionGene():
                connections.append(gene)
            case _:
                msg = f"Unsupported gene: {gene!r}"
                raise ArgumentError(msg)
    return nodes, connections


@dataclass(frozen=True, slots=True, eq=False)
class Genome:
    """Ordered, immutable collection of node and connection genes.

    Every operation that changes a genome returns a new instance. Construction
    rejects connections that reference unknown nodes and connections that join
    an already connected pair of nodes, in either direction. Cycles are
    accepted here and only rejected by :meth:`evaluate`.
    """

    genes: tuple[Gene, ...] = ()
    _nodes: dict[int, NodeGene] = field(
        init=False,
        default_factory=dict,
        repr=False,
        compare=False,
    )

    def __post_init__(self) -> None:
        genes = tuple(self.genes)
        nodes, connections = _split_genes(genes)

        index: dict[int, NodeGene] = {}
        for node in nodes:
            if node.id in index:
                msg = f"Duplicate node gene id {node.id}."
                raise ArgumentError(msg)
            index[node.id] = node

        for connection in connections:
            if connection.input_id not in index or connection.output_id not in index:
                msg = f"Connection gene references unknown node gene: {connection!r}"
                raise ArgumentError(msg)

        seen: dict[frozenset[int], ConnectionGene] = {}
        for connection in connections:
            pair = connection.endpoints
            if pair in seen:
                msg = (
                    f"Duplicate connection genes between nodes {sorted(pair)}: "
                    f"{seen[pair]!r} and {connection!r}"
                )
                raise ArgumentError(msg)
            seen[pair] = connection

        # TODO: reject cyclic connection genes once structural mutations exist.
        object.__setattr__(self, "genes", genes)
        object.__setattr__(self, "_nodes", index)

    def get_genes(self) -> Iterator[Gene]:
        return iter(self.genes)

    def add_gene(self, gene: Gene) -> Genome:
        """Return a new genome with ``gene`` appended."""
        return self.add_genes((gene,))

    def add_genes(self, genes: Iterable[Gene]) -> Genome:
        """Return a new genome with ``genes`` appended, re-validated."""
        return Genome((*self.genes, *genes))

    def disable_gene(self, connection: ConnectionGene) -> Genome:
        """Return a new genome with the matching connection disabled."""
        if connection not in self.genes:
            msg = f"Unknown gene: {connection!r}"
            raise ArgumentError(msg)
        return Genome(
            gene.disable()
            if isinstance(gene, ConnectionGene) and gene == connection
            else gene
            for gene in self.genes
        )

    def get_node(self, node_id: int) -> NodeGene:
        try:
            return self._nodes[node_id]
        except KeyError as error:
            msg = f"Unknown node id {node_id}."
            raise ArgumentError(msg) from error

    def get_nodes(self) -> Iterator[NodeGene]:
        return (gene for gene in self.genes if isinstance(gene, NodeGene))

    def get_inputs(self) -> Iterator[NodeGene]:
        return (node for node in self.get_nodes() if node.is_input)

    def get_outputs(self) -> Iterator[NodeGene]:
        return (node for node in self.get_nodes() if node.is_output)

    def get_connections(self) -> Iterator[ConnectionGene]:
        return (gene for gene in self.genes if isinstance(gene, ConnectionGene))

    def get_enabled_connections(self) -> Iterator[ConnectionGene]:
        return (conn for conn in self.get_connections() if conn.enabled)

    def get_connections_to(self, node: NodeRef) -> Iterator[ConnectionGene]:
        node_id = _node_id(node)
        return (conn for conn in self.get_connections() if conn.output_id == node_id)

    def get_enabled_connections_to(self, node: NodeRef) -> Iterator[ConnectionGene]:
        node_id = _node_id(node)
        return (
            conn
            for conn in self.get_enabled_connections()
            if conn.output_id == node_id
        )

    def connects(self, first: NodeRef, second: NodeRef) -> bool:
        """Return whether any connection joins the two nodes, in either direction."""
        pair = frozenset((_node_id(first), _node_id(second)))
        return any(conn.endpoints == pair for conn in self.get_connections())

    def evaluate(self, inputs: Sequence[float]) -> list[float]:
        """Run a forward pass and return one value per output node.

        Inputs are assigned positionally to the input nodes in insertion order
        and outputs are produced in the insertion order of the output nodes.

        Raises:
            ArgumentError: If the number of inputs does not match the number
                of input nodes.
            StateError: If the enabled connections feeding an output form a
                cycle.
        """
        input_ids = [node.id for node in self.get_inputs()]
        if len(inputs) != len(input_ids):
            msg = f"Expected {len(input_ids)} inputs but received {len(inputs)}."
            raise ArgumentError(msg)

        values: dict[int, float] = {
            node_id: float(value)
            for node_id, value in zip(input_ids, inputs, strict=True)
        }
        return [
            self._evaluate_node(node.id, values, frozenset())
            for node in self.get_outputs()
        ]

    def _evaluate_node(
        self,
        node_id: int,
        values: dict[int, float],
        path: frozenset[int],
    ) -> float:
        if node_id in values:
            return values[node_id]
        if node_id in path:
            msg = f"Cyclic connection through node {node_id}: {self!r}"
            raise StateError(msg)

        next_path = path | {node_id}
        total = 0.0
        for connection in self.get_enabled_connections_to(node_id):
            source = self._evaluate_node(connection.input_id, values, next_path)
            total += source * connection.weight
        values[node_id] = total
        return total

    def copy(self) -> Genome:
        """Return an isomorphic genome built from fresh gene instances.

        Ids, roles, weights, enabled flags, innovation numbers and gene order
        are preserved.
        """
        nodes: dict[int, NodeGene] = {}
        genes: list[Gene] = []
        for gene in self.genes:
            match gene:
                case NodeGene():
                    if gene.id in nodes:
                        msg = f"Duplicate key {gene.id} while copying genome."
                        raise StateError(msg)
                    nodes[gene.id] = gene.copy()
                    genes.append(nodes[gene.id])
                case ConnectionGene():
                    genes.append(gene.copy())

        for gene in genes:
            if isinstance(gene, ConnectionGene) and not (
                gene.input_id in nodes and gene.output_id in nodes
            ):
                msg = f"Copied connection lost its nodes: {gene!r}"
                raise StateError(msg)

        return Genome(genes)

    def to_graphviz(self, *, include_disabled: bool = False) -> str:
        """Render the genome as a Graphviz ``digraph`` declaration."""
        connections = (
            self.get_connections()
            if include_disabled
            else self.get_enabled_connections()
        )
        edges = " ".join(_graphviz_edge(conn) for conn in connections)
        return (
            "digraph Fittest { rankdir=LR; "
            f"{{ rank=same; {_graphviz_nodes(self.get_inputs())} }} "
            f"{edges} "
            f"{{ rank=same; {_graphviz_nodes(self.get_outputs())} }}"
            "}"
        )

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[Gene]:
        return iter(self.genes)

    def __eq__(self, other: object) -> bool:
        """Compare roles, endpoints, enabled flags, innovations and weights.

        Genes are compared position by position; weights match within
        ``WEIGHT_TOLERANCE``.
        """
        if not isinstance(other, Genome):
            return NotImplemented
        if len(self.genes) != len(other.genes):
            return False
        return all(
            _same_gene(mine, theirs)
            for mine, theirs in zip(self.genes, other.genes, strict=True)
        )

    def __hash__(self) -> int:
        return hash(tuple(_structure_key(gene) for gene in self.genes))


def _structure_key(gene: Gene) -> tuple[object, ...]:
    match gene:
        case NodeGene():
            return ("node", gene.id, gene.type)
        case ConnectionGene():
            return (
                "connection",
                gene.innovation,
                gene.input_id,
                gene.output_id,
                gene.enabled,
            )
    msg = f"Unsupported gene: {gene!r}"
    raise ArgumentError(msg)


def _same_gene(first: Gene, second: Gene) -> bool:
    if _structure_key(first) != _structure_key(second):
        return False
    if isinstance(first, ConnectionGene) and isinstance(second, ConnectionGene):
        return abs(first.weight - second.weight) < WEIGHT_TOLERANCE
    return True


def _format_weight(weight: float) -> str:
    # Half-up rounding on the shortest decimal form, like Java's %.2f.
    rounded = Decimal(repr(weight)).quantize(
        Decimal("0.01"),
        rounding=ROUND_HALF_UP,
        context=_LABEL_CONTEXT,
    )
    return str(rounded)


def _graphviz_nodes(nodes: Iterable[NodeGene]) -> str:
    return " ".join(f"{node.id};" for node in nodes)


def _graphviz_edge(connection: ConnectionGene) -> str:
    if connection.enabled:
        style = f"[label={_format_weight(connection.weight)}]"
    else:
        style = '[style="dashed"]'
    return f"{connection.input_id} -> {connection.output_id} {style};"


__all__ = ["Genome", "NodeRef"]
