"""
Unit tests for the Trial base class.
"""

import pytest
import numpy as np
from joblib import parallel_config

from evodrive.genotype.genome import Genome
from evodrive.genotype.storage import GenomeStore
from evodrive.phenotype.agent import Agent
from evodrive.run.config import Config
from evodrive.run.trial import Trial


# ============================================================================
# Helper Trial Classes
# ============================================================================

class TrialConstantInput(Trial):
    """Scores an agent by its network's output for a constant input and records every round."""

    def __init__(self, config, suppress_output=False):
        super().__init__(config, suppress_output)
        self.num_evaluations = 0
        self.rounds = []

    def _reset(self):
        super()._reset()
        self.num_evaluations = 0
        self.rounds = []

    def _evaluate(self, agent: Agent) -> float:
        self.num_evaluations += 1
        outputs = agent.evaluate(np.ones(self._config.topology[0]))
        return float(outputs[0]) + 1.0

    def _report_progress(self):
        self.rounds.append({'generation': self.generation,
                            'agents': self.agents,
                            'alive': self.alive_count,
                            'best': max(agent.evaluation for agent in self.agents)})

    def _final_report(self):
        pass


class TrialSelfKilling(TrialConstantInput):
    """Kills each agent during its own evaluation, like a crashing car."""

    def _evaluate(self, agent: Agent) -> float:
        evaluation = super()._evaluate(agent)
        agent.kill()
        return evaluation


@pytest.fixture
def config():
    config = Config()
    config.topology = [2, 2, 1]
    config.population_size = 6
    config.max_number_generations = 4
    config.seed = 0
    return config


GENE_COUNT = (2 + 1) * 2 + (2 + 1) * 1


# ============================================================================
# Test Run
# ============================================================================

class TestTrialRun:
    """Test Trial.run."""

    def test_runs_max_number_generations(self, config):
        """Test that exactly max_number_generations rounds are evaluated."""
        trial = TrialConstantInput(config)
        trial.run()
        assert trial.generation == 4
        assert [r['generation'] for r in trial.rounds] == [1, 2, 3, 4]
        assert trial.num_evaluations == 4 * 6

    def test_one_agent_per_genome(self, config):
        """Test that every round has population_size agents."""
        trial = TrialConstantInput(config)
        trial.run()
        assert len(trial.rounds) == 4
        assert all(len(r['agents']) == 6 for r in trial.rounds)

    def test_all_agents_dead_after_round(self, config):
        """Test that a round ends with every agent dead."""
        trial = TrialConstantInput(config)
        trial.run()
        assert len(trial.rounds) == 4
        assert all(r['alive'] == 0 for r in trial.rounds)
        assert not any(agent.alive for agent in trial.agents)

    def test_self_killing_agents_counted_once(self, config):
        """Test that agents killed during evaluation are not counted twice."""
        trial = TrialSelfKilling(config)
        trial.run()
        assert len(trial.rounds) == 4
        assert all(r['alive'] == 0 for r in trial.rounds)
        assert trial.generation == 4

    def test_evaluations_written_to_genomes(self, config):
        """Test that each agent's evaluation lands on its genome."""
        trial = TrialConstantInput(config)
        trial.run()
        for agent in trial.agents:
            expected = float(agent.evaluate(np.ones(2))[0]) + 1.0
            assert agent.genome.evaluation == pytest.approx(expected)

    def test_best_round_evaluation_does_not_regress(self, config):
        """Test elitism through the trial: the best evaluation never drops."""
        config.max_number_generations = 10
        trial = TrialConstantInput(config)
        trial.run()
        bests = [r['best'] for r in trial.rounds]
        assert len(bests) == 10
        assert all(later >= earlier for earlier, later in zip(bests, bests[1:]))

    def test_best_genome_tracked(self, config):
        """Test that the best genome of the run is kept."""
        trial = TrialConstantInput(config)
        trial.run()
        assert trial.best_genome.evaluation == pytest.approx(max(r['best'] for r in trial.rounds))

    def test_preloaded_genomes(self, config):
        """Test that preloaded genomes drive the first round's agents."""
        preloaded = [Genome([0.5] * GENE_COUNT), Genome([-0.5] * GENE_COUNT)]
        trial = TrialConstantInput(config)
        trial.run(preloaded_genomes=preloaded)

        first_round = trial.rounds[0]['agents']
        assert first_round[0].genome is preloaded[0]
        assert first_round[1].genome is preloaded[1]

    def test_run_resets_state(self, config):
        """Test that a second run starts over."""
        trial = TrialConstantInput(config)
        trial.run()
        trial.run()
        assert trial.num_evaluations == 4 * 6
        assert len(trial.rounds) == 4

    def test_parallel_evaluation(self, config):
        """Test that num_jobs > 1 evaluates through joblib and writes results back here."""
        trial = TrialConstantInput(config)
        with parallel_config(backend='threading'):
            trial.run(num_jobs=2)
        assert trial.generation == 4
        assert all(agent.genome.evaluation > 0.0 for agent in trial.agents)

    def test_config_activation_used(self, config):
        """Test that the agents use the activation named in the config."""
        config.activation = 'relu'
        trial = TrialConstantInput(config)
        trial.run()
        assert all(agent.network.activation == 'relu' for agent in trial.agents)

    def test_reports_enabled(self, config):
        """Test that the default reports run without error."""
        class TrialDefaultReports(Trial):
            def _evaluate(self, agent):
                return 1.0

        trial = TrialDefaultReports(config, suppress_output=False)
        trial.run()
        assert trial.generation == 4


# ============================================================================
# Test Export
# ============================================================================

class TestTrialExport:
    """Test Trial.export_best."""

    def test_export_best(self, config, tmp_path):
        """Test that the best genome is saved and loads back identical."""
        trial = TrialConstantInput(config)
        trial.run()
        store = GenomeStore(tmp_path)

        path = trial.export_best(store, "winner")

        assert path == store.last_saved_to
        assert store.load("winner").same_genes(trial.best_genome)

    def test_export_before_run_fails(self, config, tmp_path):
        """Test that there is nothing to export before a run."""
        with pytest.raises(RuntimeError):
            TrialConstantInput(config).export_best(GenomeStore(tmp_path))
