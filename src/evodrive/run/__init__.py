"""
Run Package

This package implements configuration and trial execution.

A trial represents a complete training run, breeding the population through
generations until the maximum number of generations is reached.

Modules:
    config: Configuration management (INI files)
    trial:  Abstract base class for training runs

Exported Classes:
    Config: Configuration parameters of the genetic algorithm and the network
    Trial:  Abstract base class for training runs with joblib parallelization
"""

from evodrive.run.config import Config
from evodrive.run.trial  import Trial

__all__ = ['Config','Trial']
