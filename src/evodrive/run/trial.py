"""
Trial Module

This module defines the abstract base class for training runs, with built-in
support for CPU-based parallelization using joblib.

A trial couples a Genetics engine to a simulation: every round it turns the
population into Agents, lets the subclass evaluate each Agent, and advances
the generation once the last Agent has died.
"""

from abc        import ABC, abstractmethod
from joblib     import Parallel, delayed
from statistics import mean
from typing     import Iterable, TYPE_CHECKING

from loguru import logger

from evodrive.genotype.genome   import Genome
from evodrive.genotype.storage  import DEFAULT_NAME, GenomeStore
from evodrive.phenotype.agent   import Agent
from evodrive.phenotype.network import Network
from evodrive.run.config        import Config
if TYPE_CHECKING:
    from evodrive.pool import Genetics

class Trial(ABC):
    """
    Abstract base class for implementing a training run.

    Each round:
    - the Genetics engine hands its population to the trial
    - one Agent is created per genome, and the trial listens for its death
    - every Agent is evaluated by '_evaluate'; the result is stored as the
      genome's evaluation and the Agent is killed
    - when the last Agent dies the round is over: progress is reported, the
      termination condition is checked and the next generation is bred

    Subclasses must implement:
    - _evaluate(agent): Drive the simulation for one Agent and return its evaluation

    Subclasses can override:
    - _reset():           Reset trial-specific state (call super()._reset())
    - _report_progress(): Report after each round
    - _final_report():    Report at the end of the run
    - _terminate():       Custom termination logic (default: max generations)

    Public Methods:
        run(num_jobs, preloaded_genomes): Execute a complete trial
        export_best(store, name):         Save the best genome found so far

    Parallelization of the evaluation of agents:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
        """
        self._config         : Config            = config
        self._suppress_output: bool              = suppress_output
        self._genetics       : 'Genetics | None' = None
        self._agents         : list[Agent]       = []
        self._alive_count    : int               = 0
        self._round_finished : bool              = False
        self.best_genome     : Genome | None     = None

    @property
    def generation(self) -> int:
        return self._genetics.generation if self._genetics is not None else 0

    @property
    def agents(self) -> list[Agent]:
        return list(self._agents)

    @property
    def alive_count(self) -> int:
        return self._alive_count

    def run(self, num_jobs: int = 1, preloaded_genomes: Iterable[Genome] | None = None):
        """
        Run the trial.

        Resets the trial state and runs the genetic algorithm
        until the terminate condition is met.

        Parameters:
            num_jobs:          Number of parallel processes for the evaluation of agents
                               1 = serial (no parallelization)
                              -1 = use all available CPU cores
                              >1 = use specified number of processes
            preloaded_genomes: Optional genomes seeding the first generation
        """
        # Import here to avoid circular import
        from evodrive.pool import Genetics

        self._reset()

        gene_count = Network(self._config.topology).total_weight_count
        self._genetics = Genetics(gene_count,
                                  self._config.population_size,
                                  self._start_round,
                                  preloaded_genomes,
                                  self._config)

        # Creates the agents of the first generation
        self._genetics.start()

        while True:
            self._evaluate_all(num_jobs)

            if not self._suppress_output:
                self._report_progress()

            if self._terminate():
                break

            # Breeds the next generation, which creates a fresh set of agents
            self._genetics.advance_generation()

        if not self._suppress_output:
            self._final_report()

    def export_best(self, store: GenomeStore, name: str = DEFAULT_NAME):
        """
        Save the best genome found so far.

        Returns:
            Path of the saved genome
        """
        if self.best_genome is None:
            raise RuntimeError("No genome has been evaluated yet")
        return store.save(self.best_genome, name)

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._genetics       = None
        self._agents         = []
        self._alive_count    = 0
        self._round_finished = False
        self.best_genome     = None

    def _start_round(self, population: list[Genome]):
        """
        Evaluation method handed to Genetics: create one living Agent per genome.
        """
        self._agents = [Agent(self._config.topology, genome, self._config.activation) for genome in population]
        for agent in self._agents:
            agent.add_died_listener(self._on_agent_died)
        self._alive_count    = len(self._agents)
        self._round_finished = False
        logger.debug("[Trial] Round of generation {} started with {} agents", self.generation, self._alive_count)

    def _on_agent_died(self, agent: Agent):
        self._alive_count -= 1
        if self._alive_count == 0:
            self._round_finished = True
            logger.debug("[Trial] No agents left in generation {}", self.generation)

    @abstractmethod
    def _evaluate(self, agent: Agent) -> float:
        """
        Drive the simulation for one agent and return its evaluation.

        Use 'agent.evaluate(inputs)' to obtain the network's control outputs
        at every simulation step. Higher values are better. When running in
        parallel, this is executed in a worker process: return the evaluation
        rather than storing it on the agent.

        Parameters:
            agent: The Agent to evaluate

        Returns:
            float: The agent's evaluation
        """
        pass

    def _evaluate_all(self, num_jobs: int):
        """
        Evaluate all agents of the current round and kill them.

        The evaluations are written back here, in this process: each
        genome's evaluation has exactly one writer.
        """
        agents    = self._agents
        serialize = num_jobs == 1

        if serialize:
            evaluations = [self._evaluate(agent) for agent in agents]
        else:
            evaluations = Parallel(num_jobs)(delayed(self._evaluate)(agent) for agent in agents)

        for agent, evaluation in zip(agents, evaluations):
            agent.evaluation = float(evaluation)
            agent.kill()

        if not self._round_finished:
            raise RuntimeError(f"{self._alive_count} agents still alive at the end of the round")

        best = max(agents, key=lambda agent: agent.evaluation)
        if self.best_genome is None or best.evaluation > self.best_genome.evaluation:
            self.best_genome = best.genome.copy()

    def _report_progress(self):
        """
        Report trial progress after each round.
        """
        evaluations = [agent.evaluation for agent in self._agents]
        logger.info("[Trial] Generation {}: best evaluation {:.4f}, mean evaluation {:.4f}",
                    self.generation, max(evaluations), mean(evaluations))

    def _final_report(self):
        """
        Produce final report at the end of the trial.
        """
        logger.info("[Trial] Finished after {} generations, best evaluation {:.4f}",
                    self.generation, self.best_genome.evaluation)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial once
        'max_number_generations' generations have been evaluated.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        return self.generation >= self._config.max_number_generations
