"""
Tests for data models, fitness evaluation and the population container.
"""

import itertools
import unittest

import numpy as np

from coin_ga.data_models import (
    Chromosome,
    calculate_amount,
    calculate_total_coins,
    gene_bounds,
)
from coin_ga.fitness import FitnessEvaluator, InvalidAmount, MIN_FITNESS, validate_amount
from coin_ga.population import Population


DENOMS = (100, 50, 25, 10, 5, 1)


class TestChromosome(unittest.TestCase):
    """Test Chromosome derived quantities and immutability."""

    def test_represented_amount_and_coin_count(self):
        """Amount and count follow the gene vector."""
        chrom = Chromosome((0, 1, 0, 1, 1, 2), DENOMS)

        self.assertEqual(chrom.represented_amount, 67)
        self.assertEqual(chrom.coin_count, 5)
        self.assertEqual(chrom.as_dict(), {100: 0, 50: 1, 25: 0, 10: 1, 5: 1, 1: 2})

    def test_derived_quantities_are_pure(self):
        """Equal gene vectors always give equal amounts and counts."""
        a = Chromosome([3, 0, 2, 0, 0, 4], DENOMS)
        b = Chromosome((3, 0, 2, 0, 0, 4), DENOMS, fitness=12.0)

        self.assertEqual(a.represented_amount, b.represented_amount)
        self.assertEqual(a.coin_count, b.coin_count)
        self.assertEqual(calculate_amount(a.genes, DENOMS), 354)
        self.assertEqual(calculate_total_coins(a.genes), 9)

    def test_with_genes_clears_fitness(self):
        """A chromosome built from new genes is unscored; the source is untouched."""
        scored = Chromosome((1, 0, 0, 0, 0, 0), DENOMS, fitness=9999.0)
        child = scored.with_genes((0, 2, 0, 0, 0, 0))

        self.assertFalse(child.is_scored)
        self.assertEqual(scored.genes, (1, 0, 0, 0, 0, 0))
        self.assertEqual(scored.fitness, 9999.0)

    def test_frozen(self):
        """Genes cannot be reassigned."""
        chrom = Chromosome((1, 0, 0, 0, 0, 0), DENOMS)
        with self.assertRaises(Exception):
            chrom.genes = (2, 0, 0, 0, 0, 0)

    def test_invalid_gene_vectors(self):
        """Length mismatches and negative genes are rejected."""
        with self.assertRaises(ValueError):
            Chromosome((1, 2), DENOMS)
        with self.assertRaises(ValueError):
            Chromosome((1, 0, 0, 0, 0, -1), DENOMS)

    def test_gene_bounds(self):
        """Bounds are ceil(target / d * multiplier), at least 10."""
        bounds = gene_bounds(67, DENOMS, 1.5)
        self.assertEqual(bounds, (10, 10, 10, 11, 21, 101))


class TestFitnessEvaluator(unittest.TestCase):
    """Test fitness scoring."""

    def setUp(self):
        self.evaluator = FitnessEvaluator(41, (25, 10, 5, 1))

    def test_exact_match_penalized_by_coin_count(self):
        """Exact matches score base minus coin count."""
        self.assertEqual(self.evaluator.score_genes((1, 1, 1, 1)), 9996.0)
        self.assertEqual(self.evaluator.score_genes((0, 0, 0, 41)), 9959.0)

    def test_undershoot_and_overshoot(self):
        """Overshoot scores below an undershoot of the same distance."""
        under = self.evaluator.score_genes((1, 1, 1, 0))   # 40
        over = self.evaluator.score_genes((1, 1, 1, 2))    # 42
        two_under = self.evaluator.score_genes((1, 1, 0, 4))  # 39

        self.assertEqual(under, 9000.0)
        self.assertEqual(over, 8500.0)
        self.assertLess(over, under)
        self.assertGreater(over, two_under)

    def test_floor(self):
        """Scores never drop below the floor."""
        self.assertEqual(self.evaluator.score_genes((0, 0, 0, 0)), MIN_FITNESS)
        self.assertEqual(self.evaluator.score_genes((10, 10, 10, 10)), MIN_FITNESS)

    def test_monotone_in_distance_for_equal_coin_count(self):
        """Closer to the target never scores lower at equal coin count."""
        evaluator = FitnessEvaluator(23, (10, 5, 1))
        chromosomes = [
            Chromosome(genes, evaluator.denominations)
            for genes in itertools.product(range(5), range(5), range(8))
        ]
        for a, b in itertools.combinations(chromosomes, 2):
            if a.coin_count != b.coin_count:
                continue
            dist_a = abs(a.represented_amount - 23)
            dist_b = abs(b.represented_amount - 23)
            if dist_a < dist_b:
                self.assertGreaterEqual(evaluator.score(a), evaluator.score(b))
            elif dist_b < dist_a:
                self.assertGreaterEqual(evaluator.score(b), evaluator.score(a))

    def test_fewer_coins_win_among_exact_matches(self):
        """Among exact matches, fewer coins never score lower."""
        evaluator = FitnessEvaluator(30, (25, 10, 5, 1))
        exact = [
            genes for genes in itertools.product(range(3), range(4), range(7), range(31))
            if calculate_amount(genes, evaluator.denominations) == 30
        ]
        exact.sort(key=sum)
        scores = [evaluator.score_genes(genes) for genes in exact]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_scored_returns_new_chromosome(self):
        """scored() attaches fitness without touching the input."""
        chrom = Chromosome((1, 1, 1, 1), (25, 10, 5, 1))
        scored = self.evaluator.scored(chrom)

        self.assertIsNone(chrom.fitness)
        self.assertEqual(scored.fitness, 9996.0)
        self.assertTrue(self.evaluator.is_exact(scored))

    def test_invalid_amounts(self):
        """Targets outside (0, max_amount) raise InvalidAmount."""
        for amount in (0, -5, 10_000, 25_000):
            with self.assertRaises(InvalidAmount):
                FitnessEvaluator(amount)

        with self.assertRaises(InvalidAmount):
            validate_amount(1.5)
        with self.assertRaises(InvalidAmount):
            validate_amount(True)

        self.assertEqual(validate_amount(9_999), 9_999)
        self.assertEqual(validate_amount(50, max_amount=51), 50)

    def test_numpy_integer_amount(self):
        """Numpy integers are accepted and stored as plain ints."""
        amount = validate_amount(np.int64(41))

        self.assertEqual(amount, 41)
        self.assertIs(type(amount), int)
        self.assertIs(type(FitnessEvaluator(np.int32(67)).target), int)

    def test_invalid_amount_is_value_error(self):
        """InvalidAmount can be caught as ValueError."""
        with self.assertRaises(ValueError):
            FitnessEvaluator(0)


class TestPopulation(unittest.TestCase):
    """Test the fixed-size population container."""

    def setUp(self):
        self.evaluator = FitnessEvaluator(41, (25, 10, 5, 1))
        self.population = Population([
            self.evaluator.new_chromosome(genes)
            for genes in [(0, 0, 0, 0), (1, 1, 1, 1), (1, 1, 1, 0), (0, 0, 0, 41)]
        ])

    def test_statistics(self):
        """Best, worst and mean reflect the members."""
        stats = self.population.statistics()

        self.assertEqual(stats.best_fitness, 9996.0)
        self.assertEqual(stats.worst_fitness, 1.0)
        self.assertAlmostEqual(stats.mean_fitness, (1.0 + 9996.0 + 9000.0 + 9959.0) / 4)
        self.assertGreater(stats.diversity, 0.0)
        self.assertEqual(self.population.best().genes, (1, 1, 1, 1))
        self.assertEqual(self.population.worst().genes, (0, 0, 0, 0))

    def test_sort_best_first(self):
        """Sorting orders by descending fitness and keeps the size."""
        self.population.sort()
        values = list(self.population.fitness_values())

        self.assertEqual(values, sorted(values, reverse=True))
        self.assertEqual(len(self.population), 4)

    def test_replace_requires_scored(self):
        """Unscored chromosomes cannot enter the population."""
        with self.assertRaises(ValueError):
            self.population.replace(0, Chromosome((0, 0, 0, 1), (25, 10, 5, 1)))

        self.population.replace(0, self.evaluator.new_chromosome((0, 0, 0, 1)))
        self.assertEqual(self.population[0].genes, (0, 0, 0, 1))
        self.assertEqual(len(self.population), 4)

    def test_diversity_of_uniform_population(self):
        """Identical fitness gives zero diversity."""
        uniform = Population([self.evaluator.new_chromosome((0, 0, 0, 0))] * 5)
        self.assertEqual(uniform.diversity(), 0.0)

    def test_empty_population_rejected(self):
        with self.assertRaises(ValueError):
            Population([])


if __name__ == '__main__':
    unittest.main()
