"""
Mutation Operators Module

This module implements the mutation operators of a SET genome. Each
operator modifies the genome in place. An operator which finds no legal
way to apply itself raises a MutationError subclass before touching the
genome, so every operator either fully applies or leaves the genome unchanged.

Structural operators:
    add_connection:              Add a cycle-safe feed-forward connection
    add_recurrent_connection:    Add a recurrent connection
    add_node:                    Split a feed-forward connection with a new hidden node
    duplicate_node:              Duplicate a hidden node together with its connections
    remove_node:                 Remove a hidden node without leaving dangling neighbors
    remove_connection:           Remove a feed-forward connection without leaving dangling nodes
    remove_recurrent_connection: Remove a random recurrent connection

Parametric operators:
    change_weights:     Perturb the weights of a share of the connections
    change_weight_bits: Flip and duplicate the bits of bit-encoded connection weights
    change_activation:  Change the activation function of a hidden node
"""

import math
from typing import Sequence, TYPE_CHECKING

from setgenome.activations              import Activation
from setgenome.genotype.connection_gene import ResolutionConnectionGene
from setgenome.genotype.node_gene       import NodeGene
from setgenome.mutations.error          import (CouldNotAddFeedForwardConnectionError,
                                                CouldNotAddRecurrentConnectionError,
                                                CouldNotAddNodeError,
                                                CouldNotDuplicateNodeError,
                                                CouldNotRemoveFeedForwardConnectionError,
                                                CouldNotRemoveNodeError,
                                                CouldNotRemoveRecurrentConnectionError)
if TYPE_CHECKING:
    from setgenome.genotype.genome       import Genome
    from setgenome.genotype.id_generator import IdGenerator
    from setgenome.rng                   import GenomeRng

def add_connection(genome: 'Genome', rng: 'GenomeRng') -> None:
    """
    Add a new feed-forward connection between two existing nodes.

    The connection starts at an input or hidden node and ends at a hidden or
    output node. We cannot add a connection:
     + from a node to itself
     + between two nodes already connected by a feed-forward connection
     + which would create a cycle in the feed-forward graph

    Candidate pairs are scanned in random order, so every legal pair can be picked.
    The weight of the new connection is drawn from the weight perturbation distribution.

    Raises:
        CouldNotAddFeedForwardConnectionError: if no legal pair of nodes exists
    """
    start_nodes = list(genome.inputs) + list(genome.hidden)
    end_nodes   = list(genome.hidden) + list(genome.outputs)
    rng.shuffle(start_nodes)
    rng.shuffle(end_nodes)

    for start_node in start_nodes:
        for end_node in end_nodes:

            # Carry out quick checks first
            if start_node.id == end_node.id:
                continue
            if (start_node.id, end_node.id) in genome.feed_forward:
                continue

            # Carry out expensive check last
            if genome.would_form_cycle(start_node.id, end_node.id):
                continue

            genome.feed_forward.add_new(genome.new_connection(start_node.id, end_node.id, rng.weight_perturbation(), rng))
            return

    raise CouldNotAddFeedForwardConnectionError("no feed-forward connection possible")

def add_recurrent_connection(genome: 'Genome', rng: 'GenomeRng') -> None:
    """
    Add a new recurrent connection, starting at any node and ending at a hidden
    or output node. Cycles (including self-loops) are allowed.

    Raises:
        CouldNotAddRecurrentConnectionError: if every such pair is already connected
    """
    start_nodes = list(genome.nodes())
    end_nodes   = list(genome.hidden) + list(genome.outputs)
    rng.shuffle(start_nodes)
    rng.shuffle(end_nodes)

    for start_node in start_nodes:
        for end_node in end_nodes:
            if (start_node.id, end_node.id) not in genome.recurrent:
                genome.recurrent.add_new(genome.new_connection(start_node.id, end_node.id, rng.weight_perturbation(), rng))
                return

    raise CouldNotAddRecurrentConnectionError("no recurrent connection possible")

def add_node(genome         : 'Genome',
             rng            : 'GenomeRng',
             id_gen         : 'IdGenerator',
             activation_pool: Sequence[Activation]) -> None:
    """
    Add a new hidden node by splitting a random feed-forward connection.

    The new node gets the first identity cached for the split connection which
    is not in use by the genome yet, so genomes splitting the same connection
    end up with the same node. The connection 'a -> b' (weight w) is replaced by
    'a -> new' (weight 1.0) and 'new -> b' (weight w); the original connection is
    kept but its weight is set to 0.0.
    The new connections use the weight encoding of the split connection.

    Parameters:
        activation_pool: activation functions the new node picks from uniformly

    Raises:
        CouldNotAddNodeError: if the genome has no feed-forward connection
    """
    if not activation_pool:
        raise ValueError("the activation pool of a new node cannot be empty")

    split_conn = genome.feed_forward.random(rng)
    if split_conn is None:
        raise CouldNotAddNodeError("no feed-forward connection to split")

    node_id  = next(id for id in id_gen.cached_ids(split_conn.key()) if not genome.contains(id))
    new_node = NodeGene(node_id, rng.choice(list(activation_pool)))

    genome.feed_forward.add_new(split_conn.with_endpoints(split_conn.input, new_node.id).with_weight(1.0))
    genome.feed_forward.add_new(split_conn.with_endpoints(new_node.id, split_conn.output))
    genome.hidden.add_new(new_node)

    # The split connection stays, but no longer carries any signal
    genome.feed_forward.replace(split_conn.with_weight(0.0))

def duplicate_node(genome: 'Genome', rng: 'GenomeRng', id_gen: 'IdGenerator') -> None:
    """
    Duplicate a random hidden node.

    The duplicate gets the same activation and a copy of every incoming and
    outgoing connection (feed-forward and recurrent) of the original. Outgoing
    weights are halved on both nodes, so the combined signal they deliver is
    unchanged. A recurrent self-loop is copied as a self-loop of the duplicate.

    Raises:
        CouldNotDuplicateNodeError: if the genome has no hidden node
    """
    node = genome.hidden.random(rng)
    if node is None:
        raise CouldNotDuplicateNodeError("no hidden node to duplicate")

    node_id  = next(id for id in id_gen.cached_ids((node.id, node.id)) if not genome.contains(id))
    new_node = NodeGene(node_id, node.activation)

    for conn_set in (genome.feed_forward, genome.recurrent):
        new_conns = []
        for conn in conn_set:
            if conn.input == node.id and conn.output == node.id:
                new_conns.append(conn.with_endpoints(new_node.id, new_node.id))
            elif conn.input == node.id:
                halved = conn.with_weight(conn.weight / 2.0)
                conn_set.replace(halved)
                new_conns.append(halved.with_endpoints(new_node.id, conn.output))
            elif conn.output == node.id:
                new_conns.append(conn.with_endpoints(conn.input, new_node.id))

        for conn in new_conns:
            conn_set.add_new(conn)

    genome.hidden.add_new(new_node)

def remove_node(genome: 'Genome', rng: 'GenomeRng') -> None:
    """
    Remove a hidden node together with all its connections.

    A node can only be removed if doing so leaves none of its neighbors
    dangling: every node feeding into it must have another outgoing connection
    and every node it feeds into must have another incoming connection.

    Raises:
        CouldNotRemoveNodeError: if no hidden node can be removed
    """
    for candidate in genome.hidden.iterate_shuffled(rng):
        sources = [conn.input  for conn in genome.connections() if conn.output == candidate.id]
        targets = [conn.output for conn in genome.connections() if conn.input  == candidate.id]

        if all(genome.has_alternative_output(source, candidate.id) for source in sources) and \
           all(genome.has_alternative_input(target, candidate.id) for target in targets):

            genome.feed_forward.retain(lambda conn: candidate.id not in (conn.input, conn.output))
            genome.recurrent.retain(lambda conn: candidate.id not in (conn.input, conn.output))
            genome.hidden.remove(candidate)
            return

    raise CouldNotRemoveNodeError("no removable hidden node")

def remove_connection(genome: 'Genome', rng: 'GenomeRng') -> None:
    """
    Remove a feed-forward connection whose source keeps another outgoing
    connection and whose destination keeps another incoming connection.

    Raises:
        CouldNotRemoveFeedForwardConnectionError: if no connection can be removed
    """
    for candidate in genome.feed_forward.iterate_shuffled(rng):
        if genome.has_alternative_input(candidate.output, candidate.input) and \
           genome.has_alternative_output(candidate.input, candidate.output):
            genome.feed_forward.remove(candidate)
            return

    raise CouldNotRemoveFeedForwardConnectionError("no removable feed-forward connection")

def remove_recurrent_connection(genome: 'Genome', rng: 'GenomeRng') -> None:
    """
    Remove a random recurrent connection.

    Raises:
        CouldNotRemoveRecurrentConnectionError: if the genome has no recurrent connection
    """
    conn = genome.recurrent.random(rng)
    if conn is None:
        raise CouldNotRemoveRecurrentConnectionError("no recurrent connection to remove")
    genome.recurrent.remove(conn)

def change_weights(genome            : 'Genome',
                   rng               : 'GenomeRng',
                   percent_perturbed : float,
                   standard_deviation: float | None = None) -> None:
    """
    Perturb the weights of ceil(percent_perturbed * N) randomly selected
    connections, separately for the N feed-forward and the N recurrent connections.
    Perturbed weights always stay within the weight cap of 'rng'.

    Parameters:
        percent_perturbed:  share of connections to perturb, in [0, 1]
        standard_deviation: of the perturbation (None uses the rng's default)

    Raises:
        ValueError: if the standard deviation is negative or not finite (genome unchanged)
    """
    conn_sets = (genome.feed_forward, genome.recurrent)

    # all new weights are computed before the genome is touched
    perturbed = []
    for conn_set in conn_sets:
        conns         = conn_set.iterate_shuffled(rng)
        num_perturbed = math.ceil(percent_perturbed * len(conns))
        perturbed.append([conn.with_weight(rng.weight_perturbation(conn.weight, standard_deviation))
                          for conn in conns[:num_perturbed]])

    for conn_set, conns in zip(conn_sets, perturbed):
        for conn in conns:
            conn_set.replace(conn)

def change_weight_bits(genome          : 'Genome',
                       rng             : 'GenomeRng',
                       mutation_rate   : float,
                       duplication_rate: float) -> None:
    """
    Mutate every bit-encoded connection (feed-forward and recurrent): first its
    resolution, which grows by one duplicated bit and shrinks by one bit, each
    with probability 'duplication_rate', then its weight, by flipping every bit
    with probability 'mutation_rate'. Connections with plain weights are left alone.

    Parameters:
        mutation_rate:    probability of flipping each bit
        duplication_rate: probability of growing, and of shrinking, the bit vector
    """
    for conn_set in (genome.feed_forward, genome.recurrent):
        for conn in conn_set.as_sorted_list():
            if isinstance(conn, ResolutionConnectionGene):
                conn_set.replace(conn.mutate_resolution(duplication_rate, rng).mutate_weight(mutation_rate, rng))

def change_activation(genome: 'Genome', rng: 'GenomeRng', activation_pool: Sequence[Activation]) -> None:
    """
    Give a random hidden node a different activation function, chosen uniformly
    from the pool. Nothing changes if the genome has no hidden nodes or the pool
    offers no activation other than the node's current one.
    """
    node = genome.hidden.random(rng)
    if node is None:
        return

    possible_activations = [activation for activation in activation_pool if activation != node.activation]
    activation = rng.choice(possible_activations)
    if activation is not None:
        genome.hidden.replace(node.with_activation(activation))
