#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Collections of samples and their metadata.
A collection can be built from:
    1/ a list of in-memory samples sharing one metadata table
    2/ a list of sample files (sample id = file base name)
    3/ a metadata file: header line, then one line per sample with
       file path, sample id and optional metadata entries (tab-separated).
       Lines starting with '#' are skipped.
Samples are always ordered as in the metadata table.
'''

import os
import numbers
import logging

from cdr3tk.lib.common import ConfigurationError
from cdr3tk.lib.common import MissingResourceError
import cdr3tk.lib.common as libcommon
from cdr3tk.lib.metadata import MetadataTable
from cdr3tk.lib.sample import DummySampleConnection
from cdr3tk.lib.sample import SampleStreamConnection
import cdr3tk.src.inputs.inputcommon as inputcommon
import cdr3tk.src.timecourse.timecourse as timecourse

logger = logging.getLogger(__name__)


class SamplePair():
    '''Two samples of a collection with their indices, i < j for pairs
    made by SampleCollection.list_pairs
    '''
    def __init__(self, conn1, conn2, i, j):
        self.conn1 = conn1
        self.conn2 = conn2
        self.i = i
        self.j = j

    @property
    def sample1(self):
        return self.conn1.get_sample()

    @property
    def sample2(self):
        return self.conn2.get_sample()

    def get_names(self):
        return self.conn1.metadata.sample_id, self.conn2.metadata.sample_id

    def __repr__(self):
        return "SamplePair(%s[%d], %s[%d])" % (self.conn1.metadata.sample_id,
                                               self.i,
                                               self.conn2.metadata.sample_id,
                                               self.j)


class SampleCollection():
    def __init__(self, metadata_table, id2conn, software=None, store=True,
                 lazy=False, strict=True):
        ids = set(metadata_table.sample_iterator())
        assert ids == set(id2conn.keys())
        self.metadata_table = metadata_table
        self.id2conn = id2conn
        self.software = software
        self.store = store
        self.lazy = lazy
        self.strict = strict

    def size(self):
        return len(self.id2conn)

    def __len__(self):
        return self.size()

    def sample_ids(self):
        return list(self.metadata_table.sample_iterator())

    def get_connection(self, key):
        if isinstance(key, numbers.Integral):
            if key < 0 or key >= self.metadata_table.sample_count:
                raise IndexError("Sample index %d out of range [0, %d)" %
                                 (key, self.metadata_table.sample_count))
            key = self.metadata_table.get_row(key).sample_id
        if key not in self.id2conn:
            raise KeyError("Unknown sample %s" % key)
        return self.id2conn[key]

    def get_sample(self, key):
        # key is either a sample index or a sample id
        return self.get_connection(key).get_sample()

    def __getitem__(self, key):
        return self.get_sample(key)

    def get_pair(self, i, j):
        return SamplePair(self.get_connection(i), self.get_connection(j),
                          i, j)

    def list_pairs(self):
        pairs = []
        n = self.size()
        for i in range(n):
            for j in range(i + 1, n):
                pairs.append(self.get_pair(i, j))
        return pairs

    def __iter__(self):
        for sample_id in self.metadata_table.sample_iterator():
            yield self.id2conn[sample_id].get_sample()

    def as_time_course(self):
        return timecourse.as_time_course(self)

    def __str__(self):
        return ("samples=%s\nmetadata=%s" %
                (",".join(self.sample_ids()),
                 ",".join(self.metadata_table.columns)))

#======= Construction =============
def collection_from_samples(samples):
    if not samples:
        raise ConfigurationError("Cannot build a collection from zero samples")
    table = samples[0].metadata.parent
    id2conn = {}
    for sample in samples:
        if sample.metadata.parent is not table:
            raise ConfigurationError(("Only samples coming from same " +
                                      "metadata table are allowed, sample " +
                                      "%s is not" % sample.name))
        id2conn[sample.name] = DummySampleConnection(sample)
    if set(id2conn.keys()) != set(table.sample_iterator()):
        raise ConfigurationError(("Samples %s do not match the rows of " %
                                  ",".join(id2conn.keys())) +
                                 "their metadata table")
    return SampleCollection(table, id2conn)

def missing_file(file, strict):
    if strict:
        raise MissingResourceError("Missing sample file %s" % file)
    logger.warning("File %s not found, skipping" % file)

def collection_from_files(files, software="vdjtools", store=False, lazy=True,
                          strict=True):
    inputcommon.get_parsefunc(software)
    table = MetadataTable()
    id2conn = {}
    for file in files:
        if not os.path.exists(file):
            missing_file(file, strict)
            continue
        sample_id = libcommon.get_sample_name(file)
        metadata = table.create_row(sample_id)
        id2conn[sample_id] = SampleStreamConnection(file, metadata, software,
                                                    lazy, store)
    logger.info("%d sample(s) prepared" % len(id2conn))
    return SampleCollection(table, id2conn, software, store, lazy, strict)

def read_metadata_header(line, metafile):
    items = line.rstrip('\n').lstrip('#').split('\t')
    if len(items) < 2:
        raise ConfigurationError(("Metadata file %s: header must have file " %
                                  metafile) + "name and sample id columns")
    return items[2:]

def collection_from_metadata(metafile, software="vdjtools", store=False,
                             lazy=True, strict=True):
    inputcommon.get_parsefunc(software)
    if not os.path.exists(metafile):
        raise MissingResourceError("Missing metadata file %s" % metafile)
    metadir = os.path.dirname(os.path.abspath(metafile))
    id2conn = {}
    with libcommon.open_text(metafile) as f:
        headerline = f.readline()
        if not headerline.strip():
            raise ConfigurationError("Metadata file %s has no header" %
                                     metafile)
        table = MetadataTable(read_metadata_header(headerline, metafile))
        for line in f:
            line = line.rstrip('\n')
            if not line.strip() or line.startswith('#'):
                continue
            items = line.split('\t')
            if len(items) < 2:
                raise ConfigurationError(("Metadata file %s: line has no " %
                                          metafile) +
                                         ("sample id:\n%s" % line))
            file, sample_id = items[0], items[1]
            if not os.path.exists(file) and not os.path.isabs(file):
                relfile = os.path.join(metadir, file)
                if os.path.exists(relfile):
                    file = relfile
            if not os.path.exists(file):
                missing_file(file, strict)
                continue
            metadata = table.create_row(sample_id, items[2:])
            id2conn[sample_id] = SampleStreamConnection(file, metadata,
                                                        software, lazy, store)
    logger.info("%d sample(s) prepared" % len(id2conn))
    return SampleCollection(table, id2conn, software, store, lazy, strict)
