"""
Genome Module

This module implements the Genome class, a SET (Set Encoded Topology) genome.

Classes:
    Genome: Complete genome representing a neural network structure
"""

import logging
import math
from typing import Iterable, Iterator, TYPE_CHECKING

from setgenome.activations                  import Activation
from setgenome.genotype.connection_gene     import ConnectionGene, ResolutionConnectionGene
from setgenome.genotype.gene                import GeneSet, GenomeInvariantError
from setgenome.genotype.node_gene           import NodeGene
if TYPE_CHECKING:
    from setgenome.genotype.id_generator import IdGenerator
    from setgenome.mutations             import Mutation, MutationError
    from setgenome.parameters            import Structure
    from setgenome.rng                   import GenomeRng

logger = logging.getLogger(__name__)

class Genome:
    """
    A genome representing a neural network as five sets of genes.

    Nodes are split by role into input, hidden and output node sets; connections
    are split into feed-forward connections, which must form an acyclic graph at
    all times, and recurrent connections, which are exempt from that requirement
    and represent signals delayed by one time step.

    A genome created by 'Genome(structure, id_gen)' contains only input and output
    nodes (their number never changes) and no connections. 'init()' connects a share
    of the inputs to every output; mutations and crossover then grow and recombine
    the structure. Two genomes can only be meaningfully recombined or compared when
    they descend from the same structure and the same IdGenerator.

    Public Attributes:
        inputs:            Input node genes
        hidden:            Hidden node genes
        outputs:           Output node genes
        feed_forward:      Feed-forward connection genes (acyclic)
        recurrent:         Recurrent connection genes
        weight_resolution: Number of bits encoding new connection weights (None for plain weights)

    Public Properties (sorted views used by network evaluators):
        input_nodes, hidden_nodes, output_nodes, feed_forward_edges, recurrent_edges

    Public Methods:
        init(structure, rng):                   Connect a share of inputs to all outputs
        new_connection(input, output, w, rng):  Connection gene in the weight encoding of this genome
        nodes() / connections():                Iterate over all node / connection genes
        contains(node_id):                      Whether any node set holds 'node_id'
        would_form_cycle(start, end):           Whether start -> end would close a feed-forward cycle
        has_cycle() / assert_acyclic():         Check the feed-forward graph for cycles
        has_alternative_input(node, ex):        Whether 'node' is reached by a connection not from 'ex'
        has_alternative_output(node, ex):       Whether 'node' reaches a node other than 'ex'
        cross_in(other, rng):                   Create offspring rooted at this genome
        mutate_with(mutations, rng, id_gen):    Apply a list of mutations
        copy():                                 Independent copy of this genome
        to_dict():                              Convert genome to a dictionary

    Class/Static Methods:
        from_genes(inputs, outputs, ...):       Assemble a genome from its genes
        from_dict(genome_dict):                 Create a genome from a dictionary description
        compatibility_distance(a, b, ...):      Distance between two genomes
    """

    def __init__(self, structure: 'Structure | None' = None, id_gen: 'IdGenerator | None' = None):
        """
        Initialize a minimal Genome.

        A minimal genome has 'number_of_inputs' input nodes (linear activation) and
        'number_of_outputs' output nodes (using the structure's output activation),
        each identified by a fresh identity from 'id_gen'. It has no hidden nodes and
        no connections. Without a structure, an empty genome is created.

        Parameters:
            structure: Describes the input/output layers
            id_gen:    Source of node identities (required with a structure)
        """
        self.inputs      : GeneSet[NodeGene]       = GeneSet()
        self.hidden      : GeneSet[NodeGene]       = GeneSet()
        self.outputs     : GeneSet[NodeGene]       = GeneSet()
        self.feed_forward: GeneSet[ConnectionGene] = GeneSet()
        self.recurrent   : GeneSet[ConnectionGene] = GeneSet()

        self.weight_resolution: int | None = None

        if structure is None:
            return
        if id_gen is None:
            raise ValueError("an IdGenerator is required to create the nodes of a genome")

        self.weight_resolution = structure.weight_resolution

        for _ in range(structure.number_of_inputs):
            self.inputs.add_new(NodeGene(id_gen.next_id(), Activation.LINEAR))

        for _ in range(structure.number_of_outputs):
            self.outputs.add_new(NodeGene(id_gen.next_id(), structure.outputs_activation))

    @classmethod
    def from_genes(cls,
                   inputs           : Iterable[NodeGene]       = (),
                   outputs          : Iterable[NodeGene]       = (),
                   hidden           : Iterable[NodeGene]       = (),
                   feed_forward     : Iterable[ConnectionGene] = (),
                   recurrent        : Iterable[ConnectionGene] = (),
                   weight_resolution: int | None               = None) -> 'Genome':
        """
        Assemble a genome directly from its genes (no validation beyond duplicate checks).
        """
        genome = cls()
        genome.inputs            = GeneSet(inputs)
        genome.outputs           = GeneSet(outputs)
        genome.hidden            = GeneSet(hidden)
        genome.feed_forward      = GeneSet(feed_forward)
        genome.recurrent         = GeneSet(recurrent)
        genome.weight_resolution = weight_resolution
        return genome

    def init(self, structure: 'Structure', rng: 'GenomeRng') -> None:
        """
        Connect ceil(percent_of_connected_inputs * number_of_inputs) distinct,
        randomly selected input nodes to every output node. Weights are sampled
        from the weight perturbation distribution.

        Raises:
            GenomeInvariantError: if a connection to be created already exists
        """
        num_connected = math.ceil(structure.percent_of_connected_inputs * len(self.inputs))

        for i, input_node in enumerate(self.inputs.iterate_with_random_offset(rng)):
            if i == num_connected:
                break
            for output_node in self.outputs:
                self.feed_forward.add_new(self.new_connection(input_node.id,
                                                              output_node.id,
                                                              rng.weight_perturbation(),
                                                              rng))

    def new_connection(self, input: int, output: int, weight: float, rng: 'GenomeRng') -> ConnectionGene:
        """
        Create a connection gene with the weight encoding of this genome: a plain
        ConnectionGene, or a ResolutionConnectionGene of 'weight_resolution' bits
        (its weight then rounds to the nearest representable value in [-1, 1]).
        """
        if self.weight_resolution is None:
            return ConnectionGene(input, output, weight)
        return ResolutionConnectionGene.from_weight(input, output, weight, rng, self.weight_resolution)

    def nodes(self) -> Iterator[NodeGene]:
        yield from self.inputs
        yield from self.hidden
        yield from self.outputs

    def connections(self) -> Iterator[ConnectionGene]:
        yield from self.feed_forward
        yield from self.recurrent

    def contains(self, node_id: int) -> bool:
        return node_id in self.inputs or node_id in self.hidden or node_id in self.outputs

    @property
    def input_nodes(self) -> list[NodeGene]:
        return self.inputs.as_sorted_list()

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return self.hidden.as_sorted_list()

    @property
    def output_nodes(self) -> list[NodeGene]:
        return self.outputs.as_sorted_list()

    @property
    def feed_forward_edges(self) -> list[ConnectionGene]:
        return self.feed_forward.as_sorted_list()

    @property
    def recurrent_edges(self) -> list[ConnectionGene]:
        return self.recurrent.as_sorted_list()

    def is_empty(self) -> bool:
        return not self.feed_forward and not self.recurrent

    def would_form_cycle(self, start: int, end: int) -> bool:
        """
        Check if adding a feed-forward connection start -> end would create a cycle.

        Walks the feed-forward graph from 'end' and reports whether 'start' can be
        reached. Recurrent connections never take part. A connection from a node
        to itself is a cycle.

        Parameters:
            start: ID of the proposed source node
            end:   ID of the proposed destination node

        Returns:
            whether adding the connection would create a feed-forward cycle
        """
        if start == end:
            return True

        # adjacency of the feed-forward graph, indexed by node ID
        successors: dict[int, list[int]] = {}
        for conn in self.feed_forward:
            successors.setdefault(conn.input, []).append(conn.output)

        visited = {end}
        stack   = [end]
        while stack:
            current = stack.pop()
            for successor in successors.get(current, ()):
                if successor == start:
                    return True   # found path 'end' -> 'start'
                if successor not in visited:
                    visited.add(successor)
                    stack.append(successor)

        return False

    def has_cycle(self) -> bool:
        """Whether the feed-forward graph contains a cycle (it never should)."""
        successors: dict[int, list[int]] = {}
        in_degree : dict[int, int]       = {}
        for conn in self.feed_forward:
            successors.setdefault(conn.input, []).append(conn.output)
            in_degree.setdefault(conn.input, 0)
            in_degree[conn.output] = in_degree.get(conn.output, 0) + 1

        # peel off nodes without incoming connections; nodes on a cycle are never peeled
        ready      = [node for node, degree in in_degree.items() if degree == 0]
        num_peeled = 0
        while ready:
            node = ready.pop()
            num_peeled += 1
            for successor in successors.get(node, ()):
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    ready.append(successor)

        return num_peeled < len(in_degree)

    def has_alternative_input(self, node: int, exclude: int) -> bool:
        """
        Whether some connection (feed-forward or recurrent) ends at 'node'
        without starting at 'exclude'.
        """
        return any(conn.input != exclude for conn in self.connections() if conn.output == node)

    def has_alternative_output(self, node: int, exclude: int) -> bool:
        """
        Whether some connection (feed-forward or recurrent) starts at 'node'
        without ending at 'exclude'.
        """
        return any(conn.output != exclude for conn in self.connections() if conn.input == node)

    def cross_in(self, other: 'Genome', rng: 'GenomeRng') -> 'Genome':
        """
        Create an offspring by recombining this genome with 'other'.

        Hidden nodes, feed-forward and recurrent connections are recombined as
        gene sets: matching genes come from either parent with equal probability,
        genes only present in this genome are kept, genes only present in 'other'
        are dropped. Input and output nodes are copied from this genome. Pass the
        fitter parent as 'self'.

        The offspring has exactly the connections of this genome, so it is
        cycle-free whenever this genome is.

        Parameters:
            other: the other (less fit) parent
            rng:   source of the gene inheritance coin flips

        Returns:
            the offspring genome

        Raises:
            GenomeInvariantError: if the feed-forward connections of the offspring form a cycle
        """
        offspring = Genome()
        offspring.feed_forward = self.feed_forward.cross_in(other.feed_forward, rng)
        offspring.recurrent    = self.recurrent.cross_in(other.recurrent, rng)
        offspring.hidden       = self.hidden.cross_in(other.hidden, rng)

        # identical in both parents, as they descend from the same structure
        offspring.inputs            = self.inputs.copy()
        offspring.outputs           = self.outputs.copy()
        offspring.weight_resolution = self.weight_resolution

        offspring.assert_acyclic()
        return offspring

    def mutate_with(self,
                    mutations: Iterable['Mutation'],
                    rng      : 'GenomeRng',
                    id_gen   : 'IdGenerator') -> list['MutationError']:
        """
        Apply every mutation of the list, in order, each with its own chance.

        A mutation listed several times is applied several times. A mutation
        which turns out to be impossible leaves the genome unchanged; its error is
        logged and collected, and the remaining mutations still run.

        Returns:
            the errors of the mutations which could not be applied
        """
        from setgenome.mutations import MutationError

        errors = []
        for mutation in mutations:
            try:
                mutation.mutate(self, rng, id_gen)
            except MutationError as error:
                logger.debug("%s not applied: %s", type(mutation).__name__, error)
                errors.append(error)
        return errors

    @staticmethod
    def compatibility_distance(genome_0          : 'Genome',
                               genome_1          : 'Genome',
                               factor_connections: float,
                               factor_weights    : float,
                               factor_activations: float,
                               weight_cap        : float = 1.0) -> tuple[float, float, float, float]:
        """
        See 'CompatibilityDistance.compatibility_distance()'.
        """
        from setgenome.genotype.compatibility_distance import CompatibilityDistance

        return CompatibilityDistance.compatibility_distance(genome_0, genome_1,
                                                            factor_connections,
                                                            factor_weights,
                                                            factor_activations,
                                                            weight_cap)

    def copy(self) -> 'Genome':
        duplicate = Genome()
        duplicate.inputs            = self.inputs.copy()
        duplicate.hidden            = self.hidden.copy()
        duplicate.outputs           = self.outputs.copy()
        duplicate.feed_forward      = self.feed_forward.copy()
        duplicate.recurrent         = self.recurrent.copy()
        duplicate.weight_resolution = self.weight_resolution
        return duplicate

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation (a structural snapshot
        of its five gene sets). This is the inverse operation of from_dict().
        Bit-encoded connections also store their bits.

        Returns:
            Dictionary with the following structure:
            {
                "inputs":            [{"id": 0, "activation": "linear"}],
                "hidden":            [{"id": 2, "activation": "tanh"}],
                "outputs":           [{"id": 1, "activation": "tanh"}],
                "feed_forward":      [{"from": 0, "to": 2, "weight": 1.0},
                                      {"from": 2, "to": 1, "weight": 0.4}],
                "recurrent":         [{"from": 1, "to": 2, "weight": -0.1}],
                "weight_resolution": None
            }

            With a weight resolution, connections look like
                {"from": 0, "to": 2, "weight": 0.5, "bits": "1011"}
        """
        def nodes_to_list(genes: GeneSet[NodeGene]) -> list[dict]:
            return [{"id": node.id, "activation": node.activation.value} for node in genes.as_sorted_list()]

        def conn_to_dict(conn: ConnectionGene) -> dict:
            conn_dict = {"from": conn.input, "to": conn.output, "weight": conn.weight}
            if isinstance(conn, ResolutionConnectionGene):
                conn_dict["bits"] = "".join("1" if bit else "0" for bit in conn.bits)
            return conn_dict

        def conns_to_list(genes: GeneSet[ConnectionGene]) -> list[dict]:
            return [conn_to_dict(conn) for conn in genes.as_sorted_list()]

        return {
            "inputs"           : nodes_to_list(self.inputs),
            "hidden"           : nodes_to_list(self.hidden),
            "outputs"          : nodes_to_list(self.outputs),
            "feed_forward"     : conns_to_list(self.feed_forward),
            "recurrent"        : conns_to_list(self.recurrent),
            "weight_resolution": self.weight_resolution
        }

    @classmethod
    def from_dict(cls, genome_dict: dict) -> 'Genome':
        """
        Create a Genome from a dictionary description (see to_dict() for the format).
        Missing sections are treated as empty; node activations default to linear.

        Raises:
            ValueError: If the structure is invalid (duplicate node IDs, connections
                        referencing non-existent nodes, feed-forward cycles, malformed bits)
            KeyError:   If required fields are missing from the dictionary
        """
        genome = cls()
        genome.weight_resolution = genome_dict.get("weight_resolution")

        seen_ids = set()
        for section in ("inputs", "hidden", "outputs"):
            genes = getattr(genome, section)
            for node_data in genome_dict.get(section, []):
                node_id = node_data["id"]
                if node_id in seen_ids:
                    raise ValueError(f"Duplicate node ID {node_id}")
                seen_ids.add(node_id)
                activation = Activation.parse(node_data.get("activation", Activation.LINEAR))
                genes.add_new(NodeGene(node_id, activation))

        for section in ("feed_forward", "recurrent"):
            genes = getattr(genome, section)
            for conn_data in genome_dict.get(section, []):
                node_in  = conn_data["from"]
                node_out = conn_data["to"]

                # Validate that nodes exist
                if not genome.contains(node_in):
                    raise ValueError(f"Connection references non-existent source node: {node_in}")
                if not genome.contains(node_out):
                    raise ValueError(f"Connection references non-existent destination node: {node_out}")
                if (node_in, node_out) in genes:
                    raise ValueError(f"Duplicate {section} connection from {node_in} to {node_out}")

                # Validate that connection wouldn't create a cycle
                if section == "feed_forward" and genome.would_form_cycle(node_in, node_out):
                    raise ValueError(f"Connection from {node_in} to {node_out} would create a cycle")

                if "bits" in conn_data:
                    bits = conn_data["bits"]
                    if not bits or set(bits) - {"0", "1"}:
                        raise ValueError(f"Invalid weight bits '{bits}' of connection from {node_in} to {node_out}")
                    genes.add_new(ResolutionConnectionGene(node_in, node_out, bits=[bit == "1" for bit in bits]))
                else:
                    genes.add_new(ConnectionGene(node_in, node_out, float(conn_data["weight"])))

        return genome

    def __len__(self):
        return len(self.feed_forward) + len(self.recurrent)

    def __eq__(self, other):
        """Structural equality: same genes with the same weights and activations."""
        if not isinstance(other, Genome):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __str__(self):
        node_genes_str  = ''.join(str(node) for node in self.input_nodes)
        node_genes_str += ''.join(str(node) for node in self.hidden_nodes)
        node_genes_str += ''.join(str(node) for node in self.output_nodes)
        ff_genes_str    = ''.join(str(conn) for conn in self.feed_forward_edges)
        rec_genes_str   = ''.join(str(conn) for conn in self.recurrent_edges)
        return f"Nodes: {node_genes_str}\nFeed-forward: {ff_genes_str}\nRecurrent: {rec_genes_str}"

    def __repr__(self):
        return (f"Genome(inputs={len(self.inputs)}, hidden={len(self.hidden)}, outputs={len(self.outputs)}, "
                f"feed_forward={len(self.feed_forward)}, recurrent={len(self.recurrent)})")

    def assert_acyclic(self) -> None:
        """
        Raises:
            GenomeInvariantError: if the feed-forward graph contains a cycle
        """
        if self.has_cycle():
            raise GenomeInvariantError("the feed-forward connections of the genome form a cycle")
