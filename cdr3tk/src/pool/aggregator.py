#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Combine repeated observations of one clonotype identity.
Policies:
    sum:   running frequency and count totals
    max:   maximum frequency; the representative clonotype follows it
    mean:  weighted mean frequency, computed on read
    count: number of observations only
Frequencies are never renormalized here.
'''

from cdr3tk.lib.clonekey import ClonotypeKey

POLICIES = ('sum', 'max', 'mean', 'count')


def check_policy(policy):
    if policy not in POLICIES:
        raise ValueError("Unknown aggregation policy %s. Choose one from: %s"
                         % (policy, ", ".join(POLICIES)))


class ClonotypeAggregator():
    def __init__(self, clonotype, sample_id, policy='sum', keytype=None,
                 weight=1.0):
        check_policy(policy)
        self.policy = policy
        self.clonotype = clonotype  # representative clonotype
        self.key = None
        if keytype is not None:
            self.key = ClonotypeKey(clonotype, keytype)
        self.sample_ids = [sample_id]  # distinct, in first-seen order
        self._sample_idset = set([sample_id])

        # policy state
        self.freq = 0.0
        self.count = 0
        self.maxfreq = 0.0
        self.weighted_freq = 0.0
        self.total_weight = 0.0
        self.tally = 0
        if policy == 'max':
            self.maxfreq = clonotype.freq
        else:
            self._update(clonotype, weight)

    def _update(self, clonotype, weight):
        if self.policy == 'sum':
            self.freq += clonotype.freq
            self.count += clonotype.count
            return False
        elif self.policy == 'max':
            if clonotype.freq > self.maxfreq:
                self.maxfreq = clonotype.freq
                self.clonotype = clonotype
                return True
            return False
        elif self.policy == 'mean':
            self.weighted_freq += clonotype.freq * weight
            self.total_weight += weight
            return False
        else:
            self.tally += 1
            return False

    def combine(self, other, sample_id, weight=1.0):
        '''Add one more observation, return True if the representative
        clonotype changed
        '''
        if self.key is not None:
            assert self.key.equals(other), ("%s does not match %s" %
                                            (other, self.key))
        if sample_id not in self._sample_idset:
            self._sample_idset.add(sample_id)
            self.sample_ids.append(sample_id)
        return self._update(other, weight)

    @property
    def incidence(self):
        # number of distinct samples contributing
        return len(self.sample_ids)

    def _check_getter(self, policy):
        if self.policy != policy:
            raise ValueError("%s aggregator does not keep %s state" %
                             (self.policy, policy))

    def get_freq(self):
        self._check_getter('sum')
        return self.freq

    def get_count(self):
        self._check_getter('sum')
        return self.count

    def get_max_freq(self):
        self._check_getter('max')
        return self.maxfreq

    def get_mean_freq(self):
        self._check_getter('mean')
        if self.total_weight == 0:
            return 0.0
        return self.weighted_freq / self.total_weight

    def get_tally(self):
        self._check_getter('count')
        return self.tally

    def get_value(self):
        # the policy's main aggregate
        if self.policy == 'sum':
            return self.get_freq()
        elif self.policy == 'max':
            return self.get_max_freq()
        elif self.policy == 'mean':
            return self.get_mean_freq()
        return self.get_tally()
