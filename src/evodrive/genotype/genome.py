"""
Genome Module

This module implements the Genome class, a single member of the population
evolved by the genetic algorithm, together with the fitness-based ordering
used during selection.

Classes:
    Genome: Fixed-length vector of real-valued genes plus evaluation and fitness

Functions:
    by_fitness(a, b):   Comparator ordering best fitness first
    fitness_key(x):     Sort key equivalent to 'by_fitness'
    fitness_equal(a, b): Whether two genomes (or agents) have the same fitness
"""

import math
import numpy as np
from typing import Iterable, Iterator

from evodrive.exceptions import ConfigurationError

class Genome:
    """
    A genome: an ordered, fixed-length vector of real-valued genes.

    Each gene becomes one weight of a feedforward network (see Agent). Besides
    its genes, a genome carries two scalars:
    - evaluation: raw performance, accumulated by the simulation during a round
    - fitness:    evaluation divided by the population's average evaluation;
                  written only by 'calculate_fitness'

    Generic equality ('==') is identity. Use 'same_genes' to compare gene
    content, and 'fitness_equal' / 'by_fitness' to compare fitness.

    Public Attributes:
        evaluation: Raw performance score of the current round

    Public Properties:
        fitness:    Normalized score, read-only
        gene_count: Number of genes (fixed)
        values:     Copy of the gene vector

    Public Methods:
        calculate_fitness(average_evaluation): Normalize evaluation into fitness
        reset_eval_and_fitness():             Zero both scores
        copy():                               Independent copy with the same genes and scores
        same_genes(other):                    Gene-content equality

    Class Methods:
        random(gene_count, min_value, max_value, rng): Genome with uniformly random genes
    """

    def __init__(self, values: Iterable[float]):
        """
        Create a genome holding a copy of the given gene values.

        Parameters:
            values: The gene values, in order
        """
        self._values = np.array(list(values), dtype=np.float64)
        self.evaluation: float = 0.0
        self._fitness  : float = 0.0

    @classmethod
    def random(cls,
               gene_count: int,
               min_value : float,
               max_value : float,
               rng       : np.random.Generator) -> 'Genome':
        """
        Create a genome whose genes are drawn independently and uniformly from [min_value, max_value].

        Parameters:
            gene_count: Number of genes
            min_value:  Lower bound of the gene values
            max_value:  Upper bound of the gene values
            rng:        Random number generator

        Returns:
            The new genome
        """
        if min_value > max_value:
            raise ConfigurationError(f"min value {min_value} is bigger than max value {max_value}")
        if gene_count < 1:
            raise ConfigurationError(f"gene count must be positive, got {gene_count}")
        return cls(rng.uniform(min_value, max_value, size=gene_count))

    @property
    def fitness(self) -> float:
        return self._fitness

    @property
    def gene_count(self) -> int:
        return len(self._values)

    @property
    def values(self) -> np.ndarray:
        return self._values.copy()

    def calculate_fitness(self, average_evaluation: float):
        """
        Set fitness to evaluation / average_evaluation.

        A zero average (an all-zero round) or any non-finite quotient gives a
        fitness of 0.0 instead of raising, so one degenerate round cannot stop
        a long training run.

        Parameters:
            average_evaluation: Mean evaluation of the whole population
        """
        if average_evaluation == 0:
            self._fitness = 0.0
            return
        fitness = self.evaluation / average_evaluation
        self._fitness = float(fitness) if math.isfinite(fitness) else 0.0

    def reset_eval_and_fitness(self):
        self.evaluation = 0.0
        self._fitness   = 0.0

    def copy(self) -> 'Genome':
        clone = Genome(self._values)
        clone.evaluation = self.evaluation
        clone._fitness   = self._fitness
        return clone

    def same_genes(self, other: 'Genome') -> bool:
        return bool(np.array_equal(self._values, other._values))

    def _check_index(self, index: int):
        if not 0 <= index < len(self._values):
            raise IndexError(f"gene index {index} out of range [0, {len(self._values)})")

    def __getitem__(self, index: int) -> float:
        self._check_index(index)
        return float(self._values[index])

    def __setitem__(self, index: int, value: float):
        self._check_index(index)
        self._values[index] = value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        for value in self._values:
            yield float(value)

    def __str__(self):
        genes = ", ".join(f"{v:+.4f}" for v in self._values)
        return f"evaluation={self.evaluation:.4f}, fitness={self._fitness:.4f}, genes=[{genes}]"

    def __repr__(self):
        return f"Genome({self._values.tolist()!r})"


def fitness_key(item) -> float:
    """
    Sort key giving best-first order under an ascending sort.

    Works for anything exposing a 'fitness' attribute (genomes and agents).
    NaN fitness sorts last.
    """
    fitness = item.fitness
    if math.isnan(fitness):
        return math.inf
    return -fitness

def by_fitness(a, b) -> int:
    """
    Compare two genomes (or agents) by fitness, descending.

    Returns a negative number when 'a' is fitter than 'b', a positive number
    when 'b' is fitter, and 0 when both are equally fit. Use it with
    'functools.cmp_to_key' to sort best-first.
    """
    key_a, key_b = fitness_key(a), fitness_key(b)
    return (key_a > key_b) - (key_a < key_b)

def fitness_equal(a, b) -> bool:
    return a.fitness == b.fitness
