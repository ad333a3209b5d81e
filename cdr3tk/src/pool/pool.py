#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Pool clonotypes of several samples: clonotypes sharing an identity key
are merged into one ClonotypeAggregator.
'''

import time
import logging
from optparse import OptionGroup

from cdr3tk.lib.clonekey import ClonotypeKey
import cdr3tk.lib.clonekey as clonekey
from cdr3tk.src.pool.aggregator import ClonotypeAggregator
import cdr3tk.src.pool.aggregator as libagg

logger = logging.getLogger(__name__)


def add_pool_options(parser):
    group = OptionGroup(parser, "Pooling options")
    group.add_option('--intersect_type', dest='keytype', default='aa',
                     help=('Clonotype identity used for matching [%s]. ' %
                           "|".join(clonekey.get_keytypes()) +
                           'Default=%default'))
    group.add_option('--policy', dest='policy', default='sum',
                     help=('How matched clonotypes are combined [%s]. ' %
                           "|".join(libagg.POLICIES) + 'Default=%default'))
    group.add_option('--min_incidence', dest='min_incidence', default=1,
                     type='int',
                     help=('Only output clonotypes found in at least this ' +
                           'many samples. Default=%default'))
    parser.add_option_group(group)

def check_pool_options(parser, options):
    if options.keytype not in clonekey.KEY_FIELDS:
        parser.error("Unrecognized --intersect_type %s" % options.keytype)
    if options.policy not in libagg.POLICIES:
        parser.error("Unrecognized --policy %s" % options.policy)
    if options.min_incidence < 1:
        parser.error("--min_incidence must be >= 1, got %d" %
                     options.min_incidence)


class ClonotypePool():
    '''Aggregators of one pooling run, in first-seen order
    '''
    def __init__(self, keytype, policy, numsample=0):
        self.keytype = keytype
        self.policy = policy
        self.numsample = numsample
        self.key2agg = {}
        self.aggregators = []

    def __len__(self):
        return len(self.aggregators)

    def __iter__(self):
        return iter(self.aggregators)

    def add(self, clonotype, sample_id, weight=1.0):
        key = ClonotypeKey(clonotype, self.keytype)
        agg = self.key2agg.get(key)
        if agg is None:
            agg = ClonotypeAggregator(clonotype, sample_id, self.policy,
                                      self.keytype, weight)
            self.key2agg[key] = agg
            self.aggregators.append(agg)
            return agg
        agg.combine(clonotype, sample_id, weight)
        return agg

    def get(self, clonotype):
        # aggregator matching "clonotype", None if absent
        return self.key2agg.get(ClonotypeKey(clonotype, self.keytype))

    def filter_by_incidence(self, min_incidence):
        return [agg for agg in self.aggregators
                if agg.incidence >= min_incidence]

    def top(self, n):
        # n aggregators with the largest aggregate values, ties by first seen
        return sorted(self.aggregators, key=lambda agg: agg.get_value(),
                      reverse=True)[:n]


def pool_samples(samples, keytype='aa', policy='sum'):
    clonekey.check_keytype(keytype)
    libagg.check_policy(policy)
    starttime = time.time()
    pool = ClonotypePool(keytype, policy)
    for sample_index, sample in enumerate(samples):
        for clonotype in sample:
            pool.add(clonotype, sample_index)
        pool.numsample += 1
    logger.info("Pooled %d sample(s) into %d clonotypes (%s, %s) in %.4f s" %
                (pool.numsample, len(pool), keytype, policy,
                 time.time() - starttime))
    return pool
