"""
Unroll Module

Transforms a genome with recurrent connections into an equivalent purely
feed-forward genome, for evaluators which only support feed-forward networks.

A recurrent connection 's -> t' delivers the value node 's' had at the
previous time step. Unrolling makes this delay explicit: the value of 's' is
exported through a synthetic output node, and read back at the next step
through a synthetic input node, which feeds 't' in place of the recurrent
connection. The caller copies the synthetic outputs into the synthetic
inputs between two evaluations (starting from zero).

Functions:
    unroll(genome): Recurrent-free version of 'genome' and its synthetic node mapping
"""

from setgenome.activations              import Activation
from setgenome.genotype.connection_gene import ConnectionGene
from setgenome.genotype.gene            import GeneSet
from setgenome.genotype.genome          import Genome
from setgenome.genotype.node_gene       import NodeGene

def unroll(genome: Genome) -> tuple[Genome, dict[int, tuple[int, int]]]:
    """
    Replace the recurrent connections of 'genome' by synthetic nodes.

    For every distinct source node 's' of a recurrent connection (in ascending
    ID order) a synthetic linear input node and a synthetic linear output node
    are added, with IDs above every ID of the genome, together with the
    connection 's -> synthetic output' (weight 1.0). Every recurrent connection
    's -> t' becomes the feed-forward connection 'synthetic input -> t', with
    the same weight.

    The genome passed in is not modified.

    Returns:
        (unrolled genome, mapping from each recurrent source ID to the IDs of
         its (synthetic input, synthetic output) nodes)
    """
    unrolled = genome.copy()
    unrolled.recurrent = GeneSet()

    sources = sorted({conn.input for conn in genome.recurrent})
    next_id = max((node.id for node in genome.nodes()), default=-1) + 1

    synthetic_nodes: dict[int, tuple[int, int]] = {}
    for source in sources:
        synthetic_input, synthetic_output = next_id, next_id + 1
        next_id += 2

        unrolled.inputs.add_new(NodeGene(synthetic_input, Activation.LINEAR))
        unrolled.outputs.add_new(NodeGene(synthetic_output, Activation.LINEAR))
        unrolled.feed_forward.add_new(ConnectionGene(source, synthetic_output, 1.0))
        synthetic_nodes[source] = (synthetic_input, synthetic_output)

    for conn in genome.recurrent.as_sorted_list():
        synthetic_input, _ = synthetic_nodes[conn.input]
        unrolled.feed_forward.add_new(conn.with_endpoints(synthetic_input, conn.output))

    return unrolled, synthetic_nodes
