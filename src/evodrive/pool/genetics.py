"""
Genetics Module

This module implements the Genetics class, the engine that owns the current
generation of genomes and breeds the next one.

Classes:
    Genetics: Generational genetic algorithm driven by an external evaluation callback
"""

from typing import Callable, Iterable, TYPE_CHECKING

import numpy as np
from loguru import logger

from evodrive.exceptions      import ConfigurationError, WeightCountError
from evodrive.genotype.genome import Genome
from evodrive.pool.operators  import (ELITE_POOL_SIZE,
                                      calculate_fitness_all,
                                      get_top_k,
                                      mutate_all_except_best,
                                      recombine)
from evodrive.run.config      import Config

if TYPE_CHECKING:
    EvaluationMethod   = Callable[[list[Genome]], None]
    GenerationListener = Callable[[int, list[Genome]], None]

class Genetics:
    """
    A generational genetic algorithm over fixed-length genomes.

    The engine does not evaluate genomes itself. 'start' hands the population
    to the evaluation method, which drives the simulation and accumulates each
    genome's 'evaluation'. Once every genome has been evaluated, the caller
    invokes 'advance_generation', which:

    Step 1: Fitness
    - Average the evaluations and normalize each genome's evaluation by it

    Step 2: Selection
    - Sort by fitness and keep the best four genomes as the breeding pool

    Step 3: Recombination
    - Copy the two best genomes unchanged
    - Fill the generation with crossover children of distinct random pairs

    Step 4: Mutation
    - Mutate every new genome except the first (the best one is preserved as-is)

    Step 5: Replacement
    - Replace the population, increment the generation counter, clear all
      scores, notify the generation listeners and start evaluating again

    While a round is being evaluated, the evaluation method is the only writer
    of the genomes' 'evaluation' field; between rounds the engine owns them.

    Public Properties:
        population:      The genomes of the current generation (list copy)
        population_size: Number of genomes per generation
        gene_count:      Number of genes per genome
        generation:      Generation counter, starting at 1
        best_genome:     Copy of the fittest genome of the last scored round

    Public Methods:
        start():                         Evaluate the first generation
        advance_generation():            Breed the next generation and evaluate it
        add_generation_listener(cb):     Subscribe to generation changes
        remove_generation_listener(cb):  Unsubscribe from them
    """

    def __init__(self,
                 gene_count       : int,
                 population_size  : int,
                 evaluation_method: 'EvaluationMethod | None' = None,
                 preloaded_genomes: Iterable[Genome] | None = None,
                 config           : Config | None = None,
                 rng              : np.random.Generator | None = None):
        """
        Create the first generation.

        Preloaded genomes (e.g. restored from a GenomeStore) take the first
        slots in order; the remaining slots get random genomes. Preloaded
        genomes beyond 'population_size' are ignored.

        Parameters:
            gene_count:        Genes per genome; must equal the network weight count
            population_size:   Genomes per generation, at least 4
            evaluation_method: Called with the population at the start of each round
            preloaded_genomes: Optional genomes to seed the first generation
            config:            Tunable parameters (defaults if None)
            rng:               Random number generator (seeded from 'config.seed' if None)
        """
        if population_size < ELITE_POOL_SIZE:
            raise ConfigurationError(f"population_size must be at least {ELITE_POOL_SIZE}, got {population_size}")
        if gene_count < 1:
            raise ConfigurationError(f"gene_count must be positive, got {gene_count}")

        self._config            = config if config is not None else Config()
        self._rng               = rng if rng is not None else np.random.default_rng(self._config.seed)
        self._gene_count        = gene_count
        self._population_size   = population_size
        self._evaluation_method = evaluation_method
        self._generation        = 1
        self._started           = False
        self._best_genome: Genome | None = None
        self._generation_listeners: list['GenerationListener'] = []

        self._population: list[Genome] = []
        for genome in list(preloaded_genomes or [])[:population_size]:
            if genome.gene_count != gene_count:
                raise WeightCountError(f"Preloaded genome has {genome.gene_count} genes, expected {gene_count}")
            genome.reset_eval_and_fitness()
            self._population.append(genome)
        num_preloaded = len(self._population)

        while len(self._population) < population_size:
            genome = Genome.random(gene_count, self._config.value_min, self._config.value_max, self._rng)
            self._population.append(genome)

        logger.debug("[Genetics] Initial population: {} preloaded, {} random",
                     num_preloaded, population_size - num_preloaded)

    @property
    def population(self) -> list[Genome]:
        return list(self._population)

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def gene_count(self) -> int:
        return self._gene_count

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def best_genome(self) -> Genome | None:
        return self._best_genome

    def add_generation_listener(self, listener: 'GenerationListener'):
        self._generation_listeners.append(listener)

    def remove_generation_listener(self, listener: 'GenerationListener'):
        self._generation_listeners.remove(listener)

    def start(self):
        """
        Hand the first generation to the evaluation method.
        """
        if self._evaluation_method is None:
            raise ConfigurationError("No evaluation method was given to Genetics")
        self._started = True
        logger.info("[Genetics] Start: generation {}, {} genomes of {} genes",
                    self._generation, self._population_size, self._gene_count)
        self._evaluation_method(self.population)

    def advance_generation(self):
        """
        Score the evaluated generation, breed the next one and hand it to the evaluation method.

        Must be called exactly once per round, after every genome of the
        current generation has been evaluated.
        """
        if not self._started:
            raise RuntimeError("advance_generation() called before start()")

        average_evaluation = calculate_fitness_all(self._population)
        elites = get_top_k(self._population, ELITE_POOL_SIZE)
        self._best_genome = elites[0].copy()

        logger.debug("[Genetics] Generation {}: average evaluation {:.4f}, best evaluation {:.4f}",
                     self._generation, average_evaluation, self._best_genome.evaluation)

        if self._config.evolution_enabled:
            offspring = recombine(elites, self._population_size, self._config.swap_probability, self._rng)
            mutated   = mutate_all_except_best(offspring, self._config, self._rng)
            logger.debug("[Genetics] Bred {} genomes, mutated {}", len(offspring), mutated)
            self._population = offspring

        for genome in self._population:
            genome.reset_eval_and_fitness()

        self._generation += 1
        logger.info("[Genetics] Generation {} (previous best fitness {:.4f})",
                    self._generation, self._best_genome.fitness)

        for listener in list(self._generation_listeners):
            listener(self._generation, self.population)

        self._evaluation_method(self.population)

    def __str__(self):
        return '\n'.join(str(genome) for genome in self._population)
