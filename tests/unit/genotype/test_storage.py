"""
Unit tests for genome persistence (GenomeStore and the byte helpers).
"""

import pytest
from collections import deque

from evodrive.genotype.genome import Genome
from evodrive.genotype.storage import GenomeStore, genome_to_bytes, genome_from_bytes


class TestBytes:
    """Test serialization to an opaque blob."""

    def test_round_trip_reproduces_genes(self):
        """Test that the exact gene sequence survives."""
        genome = Genome([0.1, -2.5, 1e-12, 3.0])
        restored = genome_from_bytes(genome_to_bytes(genome))
        assert restored.same_genes(genome)

    def test_scores_are_not_stored(self):
        """Test that evaluation and fitness start fresh after restoring."""
        genome = Genome([1.0])
        genome.evaluation = 5.0
        genome.calculate_fitness(2.0)

        restored = genome_from_bytes(genome_to_bytes(genome))
        assert restored.evaluation == 0.0
        assert restored.fitness == 0.0

    def test_blob_is_bytes(self):
        """Test that the serialized form is bytes."""
        assert isinstance(genome_to_bytes(Genome([1.0])), bytes)


class TestGenomeStore:
    """Test saving and loading genomes by name."""

    def test_save_and_load(self, tmp_path):
        """Test that a saved genome loads back identical."""
        store = GenomeStore(tmp_path)
        genome = Genome([1.0, 2.0, 3.0])
        store.save(genome, "best")
        assert store.load("best").same_genes(genome)

    def test_default_name(self, tmp_path):
        """Test that save/load without a name use the same default."""
        store = GenomeStore(tmp_path)
        store.save(Genome([4.0]))
        assert list(store.load()) == [4.0]

    def test_last_saved_to(self, tmp_path):
        """Test that the path of the last save is recorded."""
        store = GenomeStore(tmp_path)
        assert store.last_saved_to is None
        path = store.save(Genome([1.0]), "car")
        assert store.last_saved_to == path
        assert path.exists()

    def test_save_creates_directory(self, tmp_path):
        """Test that a missing directory is created on save."""
        store = GenomeStore(tmp_path / "nested" / "genomes")
        store.save(Genome([1.0]), "a")
        assert store.names() == ["a"]

    def test_names(self, tmp_path):
        """Test that stored names are listed in sorted order."""
        store = GenomeStore(tmp_path)
        store.save(Genome([1.0]), "zeta")
        store.save(Genome([2.0]), "alpha")
        assert store.names() == ["alpha", "zeta"]

    def test_names_of_missing_directory(self, tmp_path):
        """Test that a store without a directory is empty."""
        assert GenomeStore(tmp_path / "missing").names() == []

    def test_save_overwrites(self, tmp_path):
        """Test that saving under an existing name replaces the genome."""
        store = GenomeStore(tmp_path)
        store.save(Genome([1.0]), "car")
        store.save(Genome([2.0]), "car")
        assert list(store.load("car")) == [2.0]

    def test_load_missing_fails(self, tmp_path):
        """Test that loading an unknown name raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            GenomeStore(tmp_path).load("nothing")

    @pytest.mark.parametrize("name", ["", "a/b", ".", ".."])
    def test_invalid_names_fail(self, tmp_path, name):
        """Test that empty names and path-like names are rejected."""
        with pytest.raises(ValueError):
            GenomeStore(tmp_path).save(Genome([1.0]), name)

    def test_load_many_returns_queue(self, tmp_path):
        """Test that several genomes load into a deque in the given order."""
        store = GenomeStore(tmp_path)
        store.save(Genome([1.0]), "first")
        store.save(Genome([2.0]), "second")

        queue = store.load_many(["second", "first"])
        assert isinstance(queue, deque)
        assert [list(genome) for genome in queue] == [[2.0], [1.0]]
