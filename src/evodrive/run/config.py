import configparser
import os

from loguru import logger

from evodrive.activations import activations
from evodrive.exceptions  import ConfigurationError, TopologyError

class Config:

    @staticmethod
    def _parse_topology(raw_topology):
        """
        Parse a topology from a comma-separated string to a list of ints.

        Parameters:
            raw_topology: Either "5,4,3,2" style string or already a list

        Returns:
            List of layer sizes
        """
        if isinstance(raw_topology, (list, tuple)):
            return list(raw_topology)
        try:
            return [int(size.strip()) for size in raw_topology.split(',')]
        except ValueError:
            raise TopologyError(f"Invalid topology '{raw_topology}'") from None

    @staticmethod
    def _clamp_round_probability(value):
        """
        Clamp the per-genome mutation probability into [0, 1].

        Values above 1 have been used to mean "always mutate";
        they are accepted as 1.0, with a warning.
        """
        if value > 1.0:
            logger.warning("[Config] mutation_round_probability={} clamped to 1.0 (always mutate)", value)
            return 1.0
        if value < 0.0:
            logger.warning("[Config] mutation_round_probability={} clamped to 0.0 (never mutate)", value)
            return 0.0
        return value

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Keys absent from the file keep their default value.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the defaults.
        """

        # [POPULATION]

        # The number of genomes (agents) in each generation. At least 4.
        self.population_size = 42

        # The range from which the genes of random genomes are drawn uniformly.
        self.value_min = -1.0
        self.value_max =  1.0

        # [MUTATION]

        # The probability that mutation perturbs a given gene.
        self.mutation_probability = 0.3

        # A mutated gene is shifted by a value drawn uniformly from
        # [-mutation_amount, +mutation_amount].
        self.mutation_amount = 2.0

        # The probability that a genome of the new generation (other
        # than the best one) goes through mutation at all.
        self.mutation_round_probability = 1.0

        # [CROSSOVER]

        # The probability that crossover swaps a given gene between the two children.
        self.swap_probability = 0.6

        # [NETWORK]

        # Number of nodes in each layer, input first, output last.
        self.topology = [5, 4, 3, 2]

        # The activation applied to every layer's output.
        # For the list of all available choices, see the 'activations' module.
        self.activation = 'softsign'

        # [RUN]

        # Seed of the random number generator; None for a fresh seed each run.
        self.seed = None

        # The number of generations after which to stop a Trial.
        self.max_number_generations = 100

        # If False, generations are scored but not bred: the same genomes
        # are evaluated again (useful to replay preloaded genomes).
        self.evolution_enabled = True

        if config_file is None:
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Helper function to safely parse values, falling back to the current default.
        # Only keys marked 'nullable' accept 'none'.
        def get_value(section, key, value_type, default, nullable=False):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    if nullable:
                        return None
                    raise ConfigurationError(f"[{section}] {key} must not be 'none'")
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default

        self.population_size = get_value('POPULATION', 'population_size', int, self.population_size)
        self.value_min       = get_value('POPULATION', 'value_min', float, self.value_min)
        self.value_max       = get_value('POPULATION', 'value_max', float, self.value_max)

        self.mutation_probability       = get_value('MUTATION', 'mutation_probability', float, self.mutation_probability)
        self.mutation_amount            = get_value('MUTATION', 'mutation_amount', float, self.mutation_amount)
        self.mutation_round_probability = get_value('MUTATION', 'mutation_round_probability', float,
                                                    self.mutation_round_probability)
        self.mutation_round_probability = self._clamp_round_probability(self.mutation_round_probability)

        self.swap_probability = get_value('CROSSOVER', 'swap_probability', float, self.swap_probability)

        self.topology   = self._parse_topology(get_value('NETWORK', 'topology', str, self.topology))
        self.activation = get_value('NETWORK', 'activation', str, self.activation)

        self.seed                   = get_value('RUN', 'seed', int, self.seed, nullable=True)
        self.max_number_generations = get_value('RUN', 'max_number_generations', int, self.max_number_generations)
        self.evolution_enabled      = get_value('RUN', 'evolution_enabled', bool, self.evolution_enabled)

        self.validate()

    def validate(self):
        """
        Check the configuration, raising ConfigurationError on the first problem found.

        'mutation_round_probability' is clamped into [0, 1] rather than rejected.
        """
        if self.population_size < 4:
            raise ConfigurationError(f"population_size must be at least 4, got {self.population_size}")

        if self.value_min > self.value_max:
            raise ConfigurationError(f"value_min ({self.value_min}) is bigger than value_max ({self.value_max})")

        self.mutation_round_probability = self._clamp_round_probability(self.mutation_round_probability)

        for name in ('mutation_probability', 'swap_probability'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")

        if self.mutation_amount < 0.0:
            raise ConfigurationError(f"mutation_amount must not be negative, got {self.mutation_amount}")

        if len(self.topology) < 2 or any(size < 1 for size in self.topology):
            raise TopologyError(f"Invalid topology {self.topology}")

        if self.activation not in activations:
            raise ConfigurationError(f"Invalid activation function '{self.activation}'")

    def __repr__(self):
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"Config({fields})"
