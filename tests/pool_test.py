#!/usr/bin/env python

#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Testing cdr3tk.src.pool (aggregators and pooling)
'''

import itertools
import unittest

from cdr3tk.lib.clone import Clonotype
from cdr3tk.lib.metadata import MetadataTable
from cdr3tk.lib.sample import Sample
from cdr3tk.src.pool.aggregator import ClonotypeAggregator
import cdr3tk.src.pool.pool as libpool


def make_clone(freq, nt='TGTGCCAGC', aa='CAS', v='TRBV1', count=1):
    return Clonotype(count, freq, nt, aa, v, '', 'TRBJ1')


class TestAggregator(unittest.TestCase):
    def test_sum(self):
        clones = [make_clone(0.1, count=10), make_clone(0.2, count=20),
                  make_clone(0.05, count=5)]
        for perm in itertools.permutations(clones):
            agg = ClonotypeAggregator(perm[0], 's0', 'sum', 'aa')
            for i, clone in enumerate(perm[1:]):
                self.assertFalse(agg.combine(clone, 's%d' % (i + 1)))
            self.assertAlmostEqual(agg.get_freq(), 0.35)
            self.assertEqual(agg.get_count(), 35)
            self.assertEqual(agg.incidence, 3)

    def test_max(self):
        first = make_clone(0.1)
        agg = ClonotypeAggregator(first, 's0', 'max', 'aa')
        self.assertEqual(agg.get_max_freq(), 0.1)
        higher = make_clone(0.3)
        self.assertTrue(agg.combine(higher, 's1'))
        self.assertIs(agg.clonotype, higher)
        self.assertFalse(agg.combine(make_clone(0.2), 's2'))
        # a tie keeps the current representative
        self.assertFalse(agg.combine(make_clone(0.3), 's3'))
        self.assertIs(agg.clonotype, higher)
        top = make_clone(0.5)
        self.assertTrue(agg.combine(top, 's4'))
        self.assertEqual(agg.get_max_freq(), 0.5)
        self.assertIs(agg.clonotype, top)

    def test_mean(self):
        agg = ClonotypeAggregator(make_clone(0.1), 's0', 'mean')
        agg.combine(make_clone(0.3), 's1')
        self.assertAlmostEqual(agg.get_mean_freq(), 0.2)
        agg = ClonotypeAggregator(make_clone(0.1), 's0', 'mean')
        agg.combine(make_clone(0.3), 's1', weight=3.0)
        self.assertAlmostEqual(agg.get_mean_freq(), 0.25)
        agg = ClonotypeAggregator(make_clone(0.1), 's0', 'mean', weight=0.0)
        self.assertEqual(agg.get_mean_freq(), 0.0)

    def test_count(self):
        agg = ClonotypeAggregator(make_clone(0.9), 's0', 'count')
        agg.combine(make_clone(0.0), 's0')
        agg.combine(make_clone(0.4), 's1')
        self.assertEqual(agg.get_tally(), 3)
        self.assertEqual(agg.get_value(), 3)
        # repeated sample ids count once
        self.assertEqual(agg.incidence, 2)

    def test_wrong_getter(self):
        agg = ClonotypeAggregator(make_clone(0.1), 's0', 'count')
        self.assertRaises(ValueError, agg.get_freq)
        self.assertRaises(ValueError, agg.get_max_freq)
        self.assertRaises(ValueError, agg.get_mean_freq)
        self.assertRaises(ValueError, ClonotypeAggregator, make_clone(0.1),
                          's0', 'median')

    def test_key_mismatch(self):
        agg = ClonotypeAggregator(make_clone(0.1), 's0', 'sum', 'aa')
        self.assertRaises(AssertionError, agg.combine,
                          make_clone(0.1, aa='CAT'), 's1')


class TestPool(unittest.TestCase):
    def setUp(self):
        table = MetadataTable()
        self.samples = [
            Sample(table.create_row('s1'),
                   [make_clone(0.5, count=50),
                    make_clone(0.5, nt='TGTGCAAGT', aa='CAS', v='TRBV2',
                               count=50)]),
            Sample(table.create_row('s2'),
                   [make_clone(0.2, count=2),
                    make_clone(0.8, nt='TGTTTT', aa='CF', count=8)]),
            Sample(table.create_row('s3'),
                   [make_clone(1.0, nt='TGTTTT', aa='CF', count=4)]),
        ]

    def test_pool_aa(self):
        pool = libpool.pool_samples(self.samples, 'aa', 'sum')
        self.assertEqual(len(pool), 2)
        self.assertEqual(pool.numsample, 3)
        cas = pool.get(make_clone(0.0))
        self.assertAlmostEqual(cas.get_freq(), 1.2)
        self.assertEqual(cas.get_count(), 102)
        self.assertEqual(cas.incidence, 2)
        cf = pool.get(make_clone(0.0, nt='TGTTTT', aa='CF'))
        self.assertAlmostEqual(cf.get_freq(), 1.8)
        self.assertIsNone(pool.get(make_clone(0.0, aa='CQQ')))
        # first-seen order
        self.assertEqual([agg.clonotype.cdr3aa for agg in pool], ['CAS', 'CF'])
        self.assertEqual([agg.clonotype.cdr3aa for agg in pool.top(1)],
                         ['CF'])

    def test_pool_ntV(self):
        pool = libpool.pool_samples(self.samples, 'ntV', 'max')
        self.assertEqual(len(pool), 3)
        self.assertEqual(len(pool.filter_by_incidence(2)), 2)
        self.assertEqual(len(pool.filter_by_incidence(3)), 0)
        cf = pool.get(make_clone(0.0, nt='TGTTTT', aa='CF'))
        self.assertEqual(cf.get_max_freq(), 1.0)
        self.assertIs(cf.clonotype, self.samples[2][0])

    def test_pool_sum_over_samples(self):
        freqs = [0.1, 0.2, 0.05]
        counts = [10, 20, 5]
        for perm in itertools.permutations(range(3)):
            samples = []
            for i in perm:
                # same CDR3 aa, different nucleotide sequence per sample
                clone = make_clone(freqs[i], nt='TGTGC%s' % 'ACG'[i],
                                   count=counts[i])
                samples.append(Sample(MetadataTable().create_row('s%d' % i),
                                      [clone]))
            pool = libpool.pool_samples(samples, 'aa', 'sum')
            self.assertEqual(len(pool), 1)
            agg = pool.get(make_clone(0.0))
            self.assertAlmostEqual(agg.get_freq(), 0.35)
            self.assertEqual(agg.get_count(), 35)
            self.assertEqual(agg.incidence, 3)
            self.assertEqual(agg.sample_ids, [0, 1, 2])

    def test_incidence_many_samples(self):
        samples = [Sample(MetadataTable().create_row('s%d' % i),
                          [make_clone(0.01), make_clone(0.02)])
                   for i in range(200)]
        pool = libpool.pool_samples(samples, 'aa', 'count')
        agg = pool.get(make_clone(0.0))
        self.assertEqual(agg.get_tally(), 400)
        self.assertEqual(agg.incidence, 200)
        self.assertEqual(agg.sample_ids, list(range(200)))

    def test_bad_arguments(self):
        self.assertRaises(ValueError, libpool.pool_samples, self.samples,
                          'cdr3', 'sum')
        self.assertRaises(ValueError, libpool.pool_samples, self.samples,
                          'aa', 'min')


if __name__ == '__main__':
    unittest.main()
