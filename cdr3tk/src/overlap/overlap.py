#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Overlap between pairs of samples of a collection:
    numshare: number of clonotype identities found in both samples
    freq:     sqrt(freq1 * freq2), freq1 (freq2) being the total frequency
              of the shared clonotypes in sample 1 (2)
'''

import math
import time
import logging
from optparse import OptionGroup

from cdr3tk.lib.clonekey import ClonotypeKey
import cdr3tk.lib.clonekey as clonekey

logger = logging.getLogger(__name__)

OVERLAP_ATTRS = ('numshare', 'freq')


def add_overlap_options(parser):
    group = OptionGroup(parser, "Overlap options")
    group.add_option('--overlap', dest='overlap_attr', default='numshare',
                     help=('Overlap measure [%s]. ' % "|".join(OVERLAP_ATTRS)
                           + 'Default=%default'))
    parser.add_option_group(group)

def check_overlap_options(parser, options):
    if options.overlap_attr not in OVERLAP_ATTRS:
        parser.error("Unrecognized --overlap %s" % options.overlap_attr)


class PairOverlap():
    '''Overlap stats of a pair of samples
    '''
    def __init__(self, name1, name2, i, j):
        self.name1 = name1
        self.name2 = name2
        self.i = i
        self.j = j
        self.numshare = 0
        self.freq1 = 0.0
        self.freq2 = 0.0

    @property
    def freq(self):
        return math.sqrt(self.freq1 * self.freq2)

    def __getitem__(self, attr):
        return getattr(self, attr)

def sample_key2freq(sample, keytype):
    key2freq = {}
    for clonotype in sample:
        key = ClonotypeKey(clonotype, keytype)
        key2freq[key] = key2freq.get(key, 0.0) + clonotype.freq
    return key2freq

def key2freq_overlap(key2freq1, key2freq2, stat):
    for key, freq1 in key2freq1.items():
        if key in key2freq2:
            stat.numshare += 1
            stat.freq1 += freq1
            stat.freq2 += key2freq2[key]
    return stat

def pair_overlap(pair, keytype='aa'):
    # pair: SamplePair
    name1, name2 = pair.get_names()
    stat = PairOverlap(name1, name2, pair.i, pair.j)
    return key2freq_overlap(sample_key2freq(pair.sample1, keytype),
                            sample_key2freq(pair.sample2, keytype), stat)

def overlap_matrix(collection, keytype='aa', attr='numshare'):
    # rows/cols = samples in collection order; diagonal = self overlap
    clonekey.check_keytype(keytype)
    if attr not in OVERLAP_ATTRS:
        raise ValueError("Unknown overlap measure %s" % attr)
    starttime = time.time()
    names = collection.sample_ids()
    key2freqs = [sample_key2freq(sample, keytype) for sample in collection]
    n = len(names)
    rows = [[0.0] * n for i in range(n)]
    for i in range(n):
        stat = PairOverlap(names[i], names[i], i, i)
        key2freq_overlap(key2freqs[i], key2freqs[i], stat)
        rows[i][i] = stat[attr]
    for pair in collection.list_pairs():
        name1, name2 = pair.get_names()
        stat = PairOverlap(name1, name2, pair.i, pair.j)
        key2freq_overlap(key2freqs[pair.i], key2freqs[pair.j], stat)
        rows[pair.i][pair.j] = stat[attr]
        rows[pair.j][pair.i] = stat[attr]
    logger.info("Overlap (%s, %s) of %d sample pairs done in %.4f s" %
                (keytype, attr, n * (n - 1) // 2, time.time() - starttime))
    return names, rows
