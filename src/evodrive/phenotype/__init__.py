"""
Phenotype Package

This package turns genomes into executable networks. A Network is a stack of
fully connected Layers; an Agent binds one genome to one Network, loading the
genes into the weights, and tracks whether it is still alive in the current
round.

Modules:
    layer:   Layer class
    network: Network class
    agent:   Agent class

Exported Classes:
    Layer:   Fully connected layer with bias
    Network: Feedforward network built from a topology
    Agent:   Genome plus network plus liveness
"""

from evodrive.phenotype.layer   import Layer
from evodrive.phenotype.network import Network
from evodrive.phenotype.agent   import Agent

__all__ = ['Layer',
           'Network',
           'Agent']
