"""
Phenotype Package

This package provides the transformations a network evaluator needs to
consume a genome. The read-only graph view itself (input_nodes, hidden_nodes,
output_nodes, feed_forward_edges, recurrent_edges) is part of the Genome.

Modules:
    unroll: Recurrent to feed-forward transformation
"""

from setgenome.phenotype.unroll import unroll

__all__ = ['unroll']
