"""
Genetic Operators Module

This module implements the steps that turn a scored generation into the next
one: fitness normalization, elite selection, crossover, recombination and
mutation. All functions are stateless; randomness comes from the explicit
'rng' argument.

Functions:
    calculate_fitness_all(population):                  Normalize evaluations into fitness
    get_top_k(population, k):                           The k fittest genomes, best first
    pick_distinct_indices(pool_size, rng, max_attempts): Two different random indices
    crossover(parent1, parent2, swap_probability, rng): Two children by per-gene swapping
    recombine(elites, population_size, swap_probability, rng): Breed a new generation
    mutate(genome, mutation_probability, mutation_amount, rng): Perturb genes in place
    mutate_all_except_best(population, config, rng):    Mutate a new generation
"""

from functools import cmp_to_key
from typing    import Sequence, TYPE_CHECKING

import numpy as np
from loguru import logger

from evodrive.exceptions      import SelectionError
from evodrive.genotype.genome import Genome, by_fitness

if TYPE_CHECKING:
    from evodrive.run.config import Config

ELITE_POOL_SIZE   = 4    # genomes allowed to breed
ELITE_CARRY_OVER  = 2    # best genomes copied verbatim into the next generation
MAX_PICK_ATTEMPTS = 100  # retries when drawing two distinct elite indices

def calculate_fitness_all(population: Sequence[Genome]) -> float:
    """
    Set the fitness of every genome to its evaluation divided by the average evaluation.

    Parameters:
        population: The genomes of the current generation

    Returns:
        The average evaluation
    """
    average_evaluation = float(np.mean([genome.evaluation for genome in population]))
    if average_evaluation == 0:
        logger.warning("[Genetics] Average evaluation is 0; all fitness values set to 0")

    for genome in population:
        genome.calculate_fitness(average_evaluation)
    return average_evaluation

def get_top_k(population: Sequence[Genome], k: int = ELITE_POOL_SIZE) -> list[Genome]:
    """
    Return the k genomes with the highest fitness, best first.

    Parameters:
        population: Genomes whose fitness has been calculated
        k:          Number of genomes to return

    Returns:
        List of k genomes sorted by descending fitness
    """
    if len(population) < k:
        raise SelectionError(f"The population has a size of {len(population)}, less than {k}")
    return sorted(population, key=cmp_to_key(by_fitness))[:k]

def pick_distinct_indices(pool_size   : int,
                          rng         : np.random.Generator,
                          max_attempts: int = MAX_PICK_ATTEMPTS) -> tuple[int, int]:
    """
    Draw two different indices in [0, pool_size).

    The second index is redrawn while it equals the first, at most 'max_attempts' times.

    Returns:
        The pair (index1, index2), index1 != index2
    """
    if pool_size < 2:
        raise SelectionError(f"Need at least two genomes to pick two distinct ones, got {pool_size}")

    index1 = int(rng.integers(pool_size))
    index2 = int(rng.integers(pool_size))
    attempts = 0
    while index1 == index2:
        if attempts >= max_attempts:
            raise SelectionError(f"Could not draw two distinct indices in {max_attempts} attempts")
        index2 = int(rng.integers(pool_size))
        attempts += 1
    return index1, index2

def crossover(parent1         : Genome,
              parent2         : Genome,
              swap_probability: float,
              rng             : np.random.Generator) -> tuple[Genome, Genome]:
    """
    Create two children from two parents of equal length.

    For each gene independently, with probability 'swap_probability' the first
    child takes the second parent's value and vice versa; otherwise each child
    keeps its own parent's value.

    Returns:
        The two children (child of parent1, child of parent2)
    """
    genes1, genes2 = parent1.values, parent2.values
    swap = rng.random(len(genes1)) < swap_probability
    return Genome(np.where(swap, genes2, genes1)), Genome(np.where(swap, genes1, genes2))

def recombine(elites          : Sequence[Genome],
              population_size : int,
              swap_probability: float,
              rng             : np.random.Generator) -> list[Genome]:
    """
    Breed a new generation of 'population_size' genomes from the elites.

    The best ELITE_CARRY_OVER elites are copied unchanged; the rest are children
    of crossovers between two distinct, randomly chosen elites. If the size is
    odd, the second child of the last crossover is dropped.

    Parameters:
        elites:           Breeding pool, best first
        population_size:  Size of the new generation
        swap_probability: Per-gene swap probability of the crossover
        rng:              Random number generator

    Returns:
        List of new genomes
    """
    if len(elites) < 2:
        raise SelectionError("The breeding pool has to have at least two genomes")

    offspring = [elite.copy() for elite in elites[:ELITE_CARRY_OVER]]
    while len(offspring) < population_size:
        index1, index2 = pick_distinct_indices(len(elites), rng)
        child1, child2 = crossover(elites[index1], elites[index2], swap_probability, rng)
        offspring.append(child1)
        if len(offspring) < population_size:
            offspring.append(child2)
    return offspring

def mutate(genome              : Genome,
           mutation_probability: float,
           mutation_amount     : float,
           rng                 : np.random.Generator):
    """
    Perturb genes in place.

    Each gene, with probability 'mutation_probability', is shifted by a value
    drawn uniformly from [-mutation_amount, +mutation_amount].
    """
    for i in range(genome.gene_count):
        if rng.random() < mutation_probability:
            genome[i] += rng.uniform(-mutation_amount, mutation_amount)

def mutate_all_except_best(population: Sequence[Genome], config: 'Config', rng: np.random.Generator) -> int:
    """
    Try to mutate every genome of a new generation except the first (best) one.

    Each genome is mutated with probability 'config.mutation_round_probability',
    clamped to [0, 1].

    Returns:
        Number of genomes mutated
    """
    round_probability = min(max(config.mutation_round_probability, 0.0), 1.0)
    mutated = 0
    for genome in population[1:]:
        if rng.random() < round_probability:
            mutate(genome, config.mutation_probability, config.mutation_amount, rng)
            mutated += 1
    return mutated
