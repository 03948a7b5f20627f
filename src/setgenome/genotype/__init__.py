"""
SET Genotype Package

This package implements the genotype representation of the SET (Set Encoded
Topology) encoding. A genome is made up of sets of genes, deduplicated by
identity, rather than of aligned gene sequences.

The genotype consists of two types of genes:
- Node genes:       Encode individual neurons (identity and activation function)
- Connection genes: Encode weighted connections between neurons

Modules:
    gene:                   Gene base class, GeneSet container and GenomeInvariantError
    node_gene:              NodeGene class
    connection_gene:        ConnectionGene and ResolutionConnectionGene classes
    genome:                 Genome class
    id_generator:           IdGenerator class
    compatibility_distance: CompatibilityDistance class

Exported Classes:
    Gene:                     Base class for identity-comparable genes
    GeneSet:                  Identity-deduplicated collection of genes
    GenomeInvariantError:     Raised when an internal genome invariant is violated
    NodeGene:                 Gene encoding a single network node
    ConnectionGene:           Gene encoding a weighted connection between nodes
    ResolutionConnectionGene: Connection gene with a bit-encoded weight
    Genome:                   Complete genome representing a neural network
    IdGenerator:              Generator and cache of node identities
    CompatibilityDistance:    Distance between two genomes
"""

from setgenome.genotype.compatibility_distance import CompatibilityDistance
from setgenome.genotype.connection_gene        import ConnectionGene, ResolutionConnectionGene
from setgenome.genotype.gene                   import Gene, GeneSet, GenomeInvariantError
from setgenome.genotype.genome                 import Genome
from setgenome.genotype.id_generator           import IdGenerator
from setgenome.genotype.node_gene              import NodeGene

__all__ = ['CompatibilityDistance',
           'ConnectionGene',
           'Gene',
           'GeneSet',
           'Genome',
           'GenomeInvariantError',
           'IdGenerator',
           'NodeGene',
           'ResolutionConnectionGene']
