"""
Pool Package

This package contains the population-level side of the genetic algorithm:
the stateless operators (fitness, selection, crossover, mutation) and the
Genetics engine that applies them generation after generation.

Modules:
    operators: Fitness normalization, selection, crossover and mutation
    genetics:  The Genetics engine

Exported Classes:
    Genetics: Generational genetic algorithm over fixed-length genomes
"""

from evodrive.pool.operators import (calculate_fitness_all,
                                     get_top_k,
                                     pick_distinct_indices,
                                     crossover,
                                     recombine,
                                     mutate,
                                     mutate_all_except_best)
from evodrive.pool.genetics  import Genetics

__all__ = ['Genetics',
           'calculate_fitness_all',
           'get_top_k',
           'pick_distinct_indices',
           'crossover',
           'recombine',
           'mutate',
           'mutate_all_except_best']
