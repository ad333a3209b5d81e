#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Track clonotypes over ordered samples (time points):
1/ Match clonotypes across samples by CDR3 nucleotide sequence + V segment
2/ Keep clonotypes present in >= 2 samples
3/ Per clonotype: frequency at each time point, peak time point,
   representative instance and the geometric mean frequency
'''

import time
import logging
from optparse import OptionGroup

import numpy as np
from scipy.stats import gmean

from cdr3tk.lib.clonekey import ClonotypeKey

logger = logging.getLogger(__name__)

TIMECOURSE_KEYTYPE = 'ntV'


def add_timecourse_options(parser):
    group = OptionGroup(parser, "Clone-tracking options")
    group.add_option('--track_minfreq', dest='track_minfreq', default=0.0,
                     type='float',
                     help=('Clones with peak freqs >= track_minfreq are ' +
                           'tracked. Default=%default'))
    parser.add_option_group(group)

def check_timecourse_options(parser, options):
    if options.track_minfreq > 1.0 or options.track_minfreq < 0.0:
        parser.error("--track_minfreq is the proportion, not %, should be " +
                     "within [0, 1]")


class DynamicClonotype():
    '''One clonotype traced over all samples of a collection.
    instances[i] is the clonotype observed in sample i, or None.
    '''
    JITTER = 1e-7

    def __init__(self, instances):
        self.instances = list(instances)
        self._clonotype = None
        self._frequencies = None
        self._peak = None
        self._mutations = None
        self._mean_frequency = None

    def __len__(self):
        return len(self.instances)

    def __getitem__(self, index):
        return self.instances[index]

    @staticmethod
    def present(clonotype):
        return clonotype is not None and clonotype.freq > 0

    @staticmethod
    def frequency(clonotype):
        if DynamicClonotype.present(clonotype):
            return clonotype.freq
        return 0.0

    @property
    def clonotype(self):
        # representative: first instance with the maximum frequency
        if self._clonotype is None:
            best = None
            for instance in self.instances:
                if instance is None:
                    continue
                if best is None or self.frequency(instance) > self.frequency(best):
                    best = instance
            self._clonotype = best
        return self._clonotype

    @property
    def frequencies(self):
        if self._frequencies is None:
            self._frequencies = np.array([self.frequency(c)
                                          for c in self.instances],
                                         dtype=float)
        return self._frequencies

    @property
    def peak(self):
        # index of the max frequency time point, -1 if never present
        if self._peak is None:
            peak = -1
            maxfreq = 0.0
            for i, freq in enumerate(self.frequencies):
                if freq > maxfreq:
                    maxfreq = freq
                    peak = i
            self._peak = peak
        return self._peak

    @property
    def mutations(self):
        if self._mutations is None:
            self._mutations = [c.mutations if self.present(c) else frozenset()
                               for c in self.instances]
        return self._mutations

    @property
    def mean_frequency(self):
        # geometric mean of (freq + JITTER) over all time points
        if self._mean_frequency is None:
            self._mean_frequency = float(gmean(self.frequencies + self.JITTER))
        return self._mean_frequency

    def getstr(self):
        c = self.clonotype
        return "\t".join([c.cdr3aa, c.cdr3nt, c.v, c.d, c.j, str(c.in_frame),
                          str(c.is_complete), str(c.no_stop)])


class TimeCourse():
    def __init__(self, sample_ids, clonotypes):
        self.sample_ids = list(sample_ids)
        self.clonotypes = list(clonotypes)

    def __len__(self):
        return len(self.clonotypes)

    def __iter__(self):
        return iter(self.clonotypes)

    def __getitem__(self, index):
        return self.clonotypes[index]

    def top(self, minfreq):
        # clonotypes reaching minfreq at some time point
        return TimeCourse(self.sample_ids,
                          [dc for dc in self.clonotypes
                           if dc.peak >= 0 and dc.frequencies[dc.peak] >= minfreq])

    def sort_by_mean_frequency(self):
        return TimeCourse(self.sample_ids,
                          sorted(self.clonotypes,
                                 key=lambda dc: dc.mean_frequency,
                                 reverse=True))


def as_time_course(collection):
    starttime = time.time()
    n = collection.size()
    key2instances = {}
    keys = []  # first-seen order
    for sample_index, sample in enumerate(collection):
        for clonotype in sample:
            key = ClonotypeKey(clonotype, TIMECOURSE_KEYTYPE)
            instances = key2instances.get(key)
            if instances is None:
                instances = [None] * n
                key2instances[key] = instances
                keys.append(key)
            instances[sample_index] = clonotype

    clonotypes = []
    for key in keys:
        instances = key2instances[key]
        numpresent = len([c for c in instances if c is not None])
        if numpresent >= 2:
            clonotypes.append(DynamicClonotype(instances))
    logger.info("Time course of %d samples: %d of %d clonotypes recur in " %
                (n, len(clonotypes), len(keys)) +
                "2 or more samples (%.4f s)" % (time.time() - starttime))
    return TimeCourse(collection.sample_ids(), clonotypes)
