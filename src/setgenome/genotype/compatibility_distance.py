"""
Compatibility Distance Module

This module implements the compatibility distance between two genomes,
the measure of genomic divergence used by speciation.

Classes:
    CompatibilityDistance: Weighted structural/parametric distance between genomes
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from setgenome.genotype.genome import Genome

class CompatibilityDistance:
    """
    Distance between two genomes, made up of three contributions:

        connection term: share of connections unique to either genome
        weight term:     mean weight difference of matching connections,
                         relative to the widest possible difference (2 * weight_cap)
        activation term: share of matching hidden nodes whose activation differs

    Each term is scaled by its factor, and the total is the sum of the terms
    divided by the sum of the factors, so for non-negative factors every
    term lies in [0, factor] and the total in [0, 1].

    Connections are compared across both the feed-forward and the recurrent set.

    Public Methods:
        between(genome_0, genome_1): Total distance using the stored factors
    """

    def __init__(self,
                 factor_connections: float,
                 factor_weights    : float,
                 factor_activations: float,
                 weight_cap        : float = 1.0):
        self.factor_connections = factor_connections
        self.factor_weights     = factor_weights
        self.factor_activations = factor_activations
        self.weight_cap         = weight_cap

    def between(self, genome_0: 'Genome', genome_1: 'Genome') -> float:
        total, _, _, _ = self.compatibility_distance(genome_0, genome_1,
                                                     self.factor_connections,
                                                     self.factor_weights,
                                                     self.factor_activations,
                                                     self.weight_cap)
        return total

    @staticmethod
    def compatibility_distance(genome_0          : 'Genome',
                               genome_1          : 'Genome',
                               factor_connections: float,
                               factor_weights    : float,
                               factor_activations: float,
                               weight_cap        : float = 1.0) -> tuple[float, float, float, float]:
        """
        Calculate the compatibility distance between two genomes.

        Parameters:
            genome_0:           first genome
            genome_1:           second genome
            factor_connections: weight of the unique connections term
            factor_weights:     weight of the matching connection weights term
            factor_activations: weight of the hidden node activations term
            weight_cap:         bound of connection weights

        Returns:
            (total, connection term, weight term, activation term)
        """
        num_matching = 0
        num_unique   = 0
        weight_diff  = 0.0
        for set_0, set_1 in ((genome_0.feed_forward, genome_1.feed_forward),
                             (genome_0.recurrent,    genome_1.recurrent)):
            for conn_0, conn_1 in set_0.matching(set_1):
                num_matching += 1
                weight_diff  += abs(conn_0.weight - conn_1.weight)
            num_unique += sum(1 for _ in set_0.unique(set_1))

        num_hidden_matching  = 0
        num_activation_diffs = 0
        for node_0, node_1 in genome_0.hidden.matching(genome_1.hidden):
            num_hidden_matching += 1
            if node_0.activation != node_1.activation:
                num_activation_diffs += 1

        num_connections = num_matching + num_unique
        connection_term = factor_connections * num_unique / num_connections if num_connections > 0 else 0.0

        weight_term = 0.0
        if num_matching > 0:
            weight_term = factor_weights * weight_diff / (num_matching * 2.0 * weight_cap)

        activation_term = 0.0
        if num_hidden_matching > 0:
            activation_term = factor_activations * num_activation_diffs / num_hidden_matching

        factor_sum = factor_connections + factor_weights + factor_activations
        total = (connection_term + weight_term + activation_term) / factor_sum if factor_sum != 0 else 0.0

        return total, connection_term, weight_term, activation_term

    def __repr__(self):
        return (f"CompatibilityDistance(factor_connections={self.factor_connections}, "
                f"factor_weights={self.factor_weights}, factor_activations={self.factor_activations}, "
                f"weight_cap={self.weight_cap})")
