"""
Genome Storage Module

This module saves single genomes to disk and restores them, so that a trained
genome can be exported after a run and preloaded into a later one. The
on-disk format is an opaque pickled blob; only the gene sequence round-trips
(evaluation and fitness are reset whenever a genome is reused anyway).

Classes:
    GenomeStore: Directory of genomes keyed by caller-chosen names

Functions:
    genome_to_bytes(genome): Serialize a genome's genes
    genome_from_bytes(blob): Restore a genome from 'genome_to_bytes' output
"""

import os
import pickle
from collections import deque
from pathlib     import Path

from evodrive.genotype.genome import Genome

DEFAULT_NAME = "genome"
SUFFIX       = ".genome"

def genome_to_bytes(genome: Genome) -> bytes:
    return pickle.dumps({"values": genome.values.tolist()})

def genome_from_bytes(blob: bytes) -> Genome:
    data = pickle.loads(blob)
    return Genome(data["values"])

class GenomeStore:
    """
    A directory holding one file per saved genome.

    Public Attributes:
        directory:     Where the genome files live
        last_saved_to: Path of the most recently saved genome (None until the first save)

    Public Methods:
        save(genome, name): Save a genome under a name
        load(name):         Load the genome saved under a name
        load_many(names):   Load several genomes into a queue, ready for preloading
        names():            Names of all stored genomes
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory     = Path(directory)
        self.last_saved_to: Path | None = None

    def _path(self, name: str) -> Path:
        if not name or os.sep in name or (os.altsep and os.altsep in name) or name in (".", ".."):
            raise ValueError(f"Invalid genome name '{name}'")
        return self.directory / f"{name}{SUFFIX}"

    def save(self, genome: Genome, name: str = DEFAULT_NAME) -> Path:
        path = self._path(name)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(genome_to_bytes(genome))
        self.last_saved_to = path
        return path

    def load(self, name: str = DEFAULT_NAME) -> Genome:
        path = self._path(name)
        if not path.exists():
            raise FileNotFoundError(f"No genome named '{name}' in '{self.directory}'")
        return genome_from_bytes(path.read_bytes())

    def load_many(self, names) -> deque:
        return deque(self.load(name) for name in names)

    def names(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(path.stem for path in self.directory.glob(f"*{SUFFIX}"))
