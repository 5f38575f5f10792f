"""
Lane Keeping Problem Implementation

This module implements a toy driving task as a Trial. A point car drives
along a winding road; its network reads five sensors and controls steering
and throttle. It is a stand-in for a full physics simulation with raycast
sensors and checkpoints, and shows how a host wires a simulation into the
genetic algorithm.

The Lane Keeping Problem:
    The road centre follows y = A * sin(k * x). The car has a position, a
    heading and a speed.

    Sensors (5 inputs, all roughly in [-1, 1]):
        - Lateral offset from the road centre (normalized by the half width)
        - Heading error relative to the road direction
        - Current speed (normalized by the maximum speed)
        - Road curvature 1 and 2 units ahead

    Controls (2 outputs of the softsign network, in (-1, 1)):
        - Steering rate
        - Throttle

    Termination:
        - The car leaves the road (|offset| > half width), or
        - The time limit is reached

Evaluation:
    Distance travelled along the road, accumulated step by step (the
    simulation counterpart of passing checkpoints).

Classes:
    Trial_LaneKeeping: Trial for the lane keeping task

Usage:
    python examples/trial_lane_keeping.py --config examples/config_lane_keeping.ini
"""

import argparse
import math
import numpy as np
from pathlib import Path

from evodrive.genotype import GenomeStore
from evodrive.phenotype import Agent
from evodrive.run import Config, Trial

class Trial_LaneKeeping(Trial):
    """
    Trial for the lane keeping task.

    Each agent drives once; the distance it covers before leaving the road
    or running out of time is its evaluation.
    """

    ROAD_AMPLITUDE  = 2.0
    ROAD_FREQUENCY  = 0.25
    ROAD_HALF_WIDTH = 1.0
    MAX_SPEED       = 1.5
    DT              = 0.1
    MAX_STEPS       = 400

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters (topology must be [5, ..., 2])
            suppress_output: Whether to suppress output during training
        """
        if config.topology[0] != 5 or config.topology[-1] != 2:
            raise ValueError("The lane keeping task needs 5 network inputs and 2 outputs")
        super().__init__(config, suppress_output)

    def _road_y(self, x: float) -> float:
        return self.ROAD_AMPLITUDE * math.sin(self.ROAD_FREQUENCY * x)

    def _road_heading(self, x: float) -> float:
        slope = self.ROAD_AMPLITUDE * self.ROAD_FREQUENCY * math.cos(self.ROAD_FREQUENCY * x)
        return math.atan(slope)

    def _sensors(self, x: float, y: float, heading: float, speed: float) -> np.ndarray:
        offset  = (y - self._road_y(x)) / self.ROAD_HALF_WIDTH
        error   = math.atan2(math.sin(heading - self._road_heading(x)), math.cos(heading - self._road_heading(x)))
        ahead_1 = self._road_heading(x + 1.0) - self._road_heading(x)
        ahead_2 = self._road_heading(x + 2.0) - self._road_heading(x)
        return np.array([offset, error / math.pi, speed / self.MAX_SPEED, ahead_1, ahead_2])

    def _evaluate(self, agent: Agent) -> float:
        """
        Drive the car until it leaves the road or time runs out.

        Returns:
            Distance travelled along the road
        """
        x, y, heading, speed = 0.0, 0.0, self._road_heading(0.0), 0.5
        distance = 0.0

        for _ in range(self.MAX_STEPS):
            steering, throttle = agent.evaluate(self._sensors(x, y, heading, speed))

            heading += steering * self.DT * 2.0
            speed    = min(self.MAX_SPEED, max(0.0, speed + throttle * self.DT))

            new_x = x + speed * math.cos(heading) * self.DT
            y    += speed * math.sin(heading) * self.DT

            # Only forward progress along the road counts
            distance += max(0.0, new_x - x)
            x = new_x

            if abs(y - self._road_y(x)) > self.ROAD_HALF_WIDTH:
                break

        return distance

    def _final_report(self):
        super()._final_report()
        print(f"Best genome ({self.best_genome.gene_count} genes): evaluation {self.best_genome.evaluation:.3f}")


def main():
    parser = argparse.ArgumentParser(description='Evolve lane keeping drivers')
    parser.add_argument('--config', type=str, default=str(Path(__file__).parent / 'config_lane_keeping.ini'),
                        help='Path to the INI configuration file')
    parser.add_argument('--jobs', type=int, default=1,
                        help='Number of parallel processes (-1 = all cores)')
    parser.add_argument('--save-dir', type=str, default=None,
                        help='Directory where the best genome is exported')
    parser.add_argument('--load', type=str, nargs='*', default=[],
                        help='Names of saved genomes to preload (requires --save-dir)')
    args = parser.parse_args()

    config = Config(args.config)
    trial  = Trial_LaneKeeping(config)

    preloaded = None
    store     = GenomeStore(args.save_dir) if args.save_dir else None
    if args.load:
        if store is None:
            parser.error('--load requires --save-dir')
        preloaded = store.load_many(args.load)

    trial.run(num_jobs=args.jobs, preloaded_genomes=preloaded)

    if store is not None:
        path = trial.export_best(store, 'lane_keeper')
        print(f"Best genome saved to {path}")


if __name__ == '__main__':
    main()
