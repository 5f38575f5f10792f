"""
evodrive - Neuroevolution of small feedforward networks for simulated agents.

This package trains populations of fixed-topology feedforward neural networks
with a generational genetic algorithm. Every genome is a flat vector holding
one gene per network weight; agents built from the genomes are evaluated by
an external simulation, and the best genomes breed the next generation.

Main components:
- genotype:    Genomes and their persistence
- phenotype:   Layers, networks and agents
- pool:        Genetic operators and the Genetics engine
- run:         Configuration and trial execution
- activations: Activation functions for the network layers

Example:
    >>> from evodrive import Config, Trial
    >>> config = Config("config.ini")
    >>> class MyTrial(Trial):
    ...     def _evaluate(self, agent):
    ...         # Drive the simulation with agent.evaluate(sensor_inputs)
    ...         pass
    >>> trial = MyTrial(config)
    >>> trial.run()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evodrive.run.config import Config
from evodrive.run.trial import Trial
from evodrive.genotype.genome import Genome
from evodrive.genotype.storage import GenomeStore
from evodrive.phenotype.layer import Layer
from evodrive.phenotype.network import Network
from evodrive.phenotype.agent import Agent
from evodrive.pool.genetics import Genetics

__all__ = [
    "Config",
    "Trial",
    "Genome",
    "GenomeStore",
    "Layer",
    "Network",
    "Agent",
    "Genetics",
]
