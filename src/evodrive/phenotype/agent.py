"""
Agent Module

This module implements the Agent class: the runtime binding of one genome to
one network instance, plus the liveness state the simulation drives.

Classes:
    Agent: A genome expressed as a network, alive until the simulation kills it
"""

from itertools import count
from typing    import Callable, Sequence

import numpy as np

from evodrive.exceptions        import WeightCountError
from evodrive.genotype.genome   import Genome
from evodrive.phenotype.network import Network

class Agent:
    """
    A genome bound to the network it parameterizes.

    On construction the genes are copied into the network weights, layer by
    layer, and within a layer row by row (input node, then output column). The
    genome is shared, not copied: the simulation accumulates the agent's score
    straight into 'genome.evaluation'.

    An agent starts alive. 'kill' moves it to dead and notifies the died
    listeners exactly once per alive-to-dead transition; 'resurrect' brings it
    back for a new round and clears its genome's scores.

    Agents order like their genomes (fitness, best first): use
    'evodrive.genotype.fitness_key' or 'by_fitness'.

    Public Attributes:
        ID:      Unique identifier
        genome:  The Genome powering this agent
        network: The Network built from the genome

    Public Properties:
        alive:      Whether the agent is still running in this round
        evaluation: Read/write access to the genome's evaluation
        fitness:    The genome's fitness

    Public Methods:
        evaluate(inputs):          Forward pass through the network
        kill():                    Mark the agent dead
        resurrect():               Mark the agent alive and reset its genome's scores
        add_died_listener(cb):     Subscribe to the died notification
        remove_died_listener(cb):  Unsubscribe from it
    """

    _id_generator = count(0)

    def __init__(self, topology: Sequence[int], genome: Genome, activation=None):
        """
        Build the network and load the genome into it.

        Parameters:
            topology:   Layer sizes of the network
            genome:     Genome with exactly one gene per network weight
            activation: Activation of the network (None means softsign)
        """
        self.ID     : int     = next(Agent._id_generator)
        self.genome : Genome  = genome
        self.network: Network = Network(topology, activation)
        self._alive : bool    = True
        self._died_listeners: list[Callable[['Agent'], None]] = []

        if self.network.total_weight_count != genome.gene_count:
            raise WeightCountError(f"Weight count mismatch: network has {self.network.total_weight_count} "
                                   f"weights, genome has {genome.gene_count} genes")

        genes = iter(genome)
        for layer in self.network.layers:
            rows, cols = layer.weights.shape
            for i in range(rows):
                for j in range(cols):
                    layer.weights[i, j] = next(genes)

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def evaluation(self) -> float:
        return self.genome.evaluation

    @evaluation.setter
    def evaluation(self, value: float):
        self.genome.evaluation = value

    @property
    def fitness(self) -> float:
        return self.genome.fitness

    def evaluate(self, inputs, activation=None) -> np.ndarray:
        return self.network.evaluate(inputs, activation)

    def add_died_listener(self, listener: Callable[['Agent'], None]):
        self._died_listeners.append(listener)

    def remove_died_listener(self, listener: Callable[['Agent'], None]):
        self._died_listeners.remove(listener)

    def kill(self):
        if not self._alive:
            return
        self._alive = False
        for listener in list(self._died_listeners):
            listener(self)

    def resurrect(self):
        self._alive = True
        self.genome.reset_eval_and_fitness()

    def __str__(self):
        state = "alive" if self._alive else "dead"
        return f"ID={self.ID}, {state}, evaluation={self.evaluation:.4f}, fitness={self.fitness:.4f}"

    def __repr__(self):
        return f"Agent(topology={list(self.network.topology)}, genome={self.genome!r})"
