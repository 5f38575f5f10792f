"""
Genotype Package

This package implements the genetic encoding evolved by the genetic algorithm:
a fixed-length vector of real-valued genes, one per network weight.

Modules:
    genome:  Genome class and the fitness-based ordering helpers
    storage: Saving and restoring single genomes

Exported Classes:
    Genome:      Fixed-length gene vector plus evaluation and fitness
    GenomeStore: Directory of genomes keyed by name

Exported Functions:
    by_fitness, fitness_key, fitness_equal: Fitness-based comparison
    genome_to_bytes, genome_from_bytes:     Opaque serialization
"""

from evodrive.genotype.genome  import Genome, by_fitness, fitness_key, fitness_equal
from evodrive.genotype.storage import GenomeStore, genome_to_bytes, genome_from_bytes

__all__ = ['Genome',
           'GenomeStore',
           'by_fitness',
           'fitness_key',
           'fitness_equal',
           'genome_to_bytes',
           'genome_from_bytes']
