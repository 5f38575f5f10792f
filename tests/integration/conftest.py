"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np
from evodrive.run.config import Config


@pytest.fixture(autouse=True)
def reset_agent_ids():
    """Reset the Agent ID generator so IDs start from 0 in each test."""
    from itertools import count
    from evodrive.phenotype.agent import Agent

    Agent._id_generator = count(0)
    yield
    Agent._id_generator = count(0)


@pytest.fixture
def lane_config():
    """Configuration for the lane-keeping problem."""
    config = Config()
    config.topology = [2, 4, 1]
    config.population_size = 20
    config.max_number_generations = 30
    config.seed = 42
    return config


@pytest.fixture
def start_positions():
    """Lateral start offsets of the simulated car."""
    return np.array([-0.8, -0.3, 0.4, 0.9])
