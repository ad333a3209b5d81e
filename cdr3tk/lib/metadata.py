#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Sample metadata: one table per sample collection, one row per sample.
Row order (insertion or file order) is the canonical sample order.
'''

from cdr3tk.lib.common import ConfigurationError

SAMPLE_ID_COLUMN = 'sample.id'


class SampleMetadata():
    '''One row of a MetadataTable
    '''
    def __init__(self, sample_id, entries, parent):
        self.sample_id = sample_id
        self.entries = entries
        self.parent = parent

    def __getitem__(self, column):
        index = self.parent.get_column_index(column)
        return self.entries[index]

    def getstr(self):
        return "\t".join(self.entries)

    def __str__(self):
        return self.getstr()


class MetadataTable():
    def __init__(self, columns=None):
        if columns is None:
            columns = []
        self.columns = list(columns)
        self.rows = []
        self.id2row = {}

    @property
    def sample_count(self):
        return len(self.rows)

    def __len__(self):
        return len(self.rows)

    def create_row(self, sample_id, entries=None):
        if sample_id in self.id2row:
            raise ConfigurationError("Duplicate sample id %s" % sample_id)
        if entries is None:
            entries = []
        entries = list(entries)
        if len(entries) > len(self.columns):
            raise ConfigurationError(("Sample %s has %d metadata entries, " %
                                      (sample_id, len(entries))) +
                                     ("header has %d metadata columns" %
                                      len(self.columns)))
        entries.extend([''] * (len(self.columns) - len(entries)))
        row = SampleMetadata(sample_id, entries, self)
        self.rows.append(row)
        self.id2row[sample_id] = row
        return row

    def get_row(self, index):
        return self.rows[index]

    def get_row_by_id(self, sample_id):
        return self.id2row[sample_id]

    def has_sample(self, sample_id):
        return sample_id in self.id2row

    def get_column_index(self, column):
        if column not in self.columns:
            raise KeyError("Unknown metadata column %s" % column)
        return self.columns.index(column)

    def get_column(self, column):
        # values of one column, in canonical order
        index = self.get_column_index(column)
        return [row.entries[index] for row in self.rows]

    def sample_iterator(self):
        for row in self.rows:
            yield row.sample_id

    def column_header(self):
        return "\t".join(self.columns)
