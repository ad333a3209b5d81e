#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Object represents a TCR repertoire sample, and the connections a sample
collection uses to reach its samples
'''

import time
import logging
import threading

import cdr3tk.src.inputs.inputcommon as inputcommon

logger = logging.getLogger(__name__)


class Sample():
    '''Represents a sample: ordered clonotypes plus one metadata row
    '''
    def __init__(self, metadata, clones=None):
        self.metadata = metadata
        self.clones = []
        self.size = 0  # total sequence (read) count
        self.numclone = 0
        if clones is not None:
            self.addclones(clones)

    @property
    def name(self):
        return self.metadata.sample_id

    def __iter__(self):
        return iter(self.clones)

    def __len__(self):
        return self.numclone

    def __getitem__(self, index):
        return self.clones[index]

    def addclone(self, clone):
        if clone is not None:
            clone.sample = self
            self.clones.append(clone)
            self.size = self.size + clone.count
            self.numclone = self.numclone + 1

    def addclones(self, clones):
        for clone in clones:
            self.addclone(clone)

#======= Connections =============
class DummySampleConnection():
    '''Holds an in-memory sample
    '''
    def __init__(self, sample):
        self.sample = sample
        self.metadata = sample.metadata

    def get_sample(self):
        return self.sample

# SampleStreamConnection states
NOT_LOADED = 'not_loaded'
LOADING = 'loading'
CACHED = 'cached'
UNCACHED = 'uncached'

class SampleStreamConnection():
    '''Decodes a sample from its source file on request.
    lazy=False: decode now and keep the sample.
    lazy=True, store=True: decode on first request, then keep it.
    lazy=True, store=False: decode on every request, never keep it.
    '''
    def __init__(self, path, metadata, software="vdjtools", lazy=True,
                 store=False):
        self.path = path
        self.metadata = metadata
        self.software = software
        self.lazy = lazy
        self.store = store
        self.state = NOT_LOADED
        self._sample = None
        self._lock = threading.Lock()
        if not lazy:
            self.store = True
            self.get_sample()

    def load(self):
        starttime = time.time()
        clones = inputcommon.read_clonotypes(self.path, self.software)
        sample = Sample(self.metadata, clones)
        logger.info("Loaded sample %s (%d clonotypes) from %s in %.4f s" %
                    (sample.name, sample.numclone, self.path,
                     time.time() - starttime))
        return sample

    def get_sample(self):
        with self._lock:
            if self.state == CACHED:
                return self._sample
            previous = self.state
            self.state = LOADING
            try:
                sample = self.load()
            except Exception:
                self.state = previous
                raise
            if self.store:
                self._sample = sample
                self.state = CACHED
            else:
                self.state = UNCACHED
            return sample
