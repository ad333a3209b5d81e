#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Object represents a unique clonotype and related functions
'''


class Clonotype():
    def __init__(self, count, freq, cdr3nt, cdr3aa='', v='', d='', j='',
                 in_frame=None, is_complete=True, no_stop=None,
                 mutations=None, sample=None, lastvpos=-1, firstdpos=-1,
                 lastdpos=-1, firstjpos=-1):

        # Basic information
        self.count = count  # Read count
        self.freq = freq  # Read count/Total read count of the sample
        self.cdr3nt = cdr3nt if cdr3nt is not None else ''
        self.cdr3aa = cdr3aa if cdr3aa is not None else ''
        self.v = v if v is not None else ''
        self.d = d if d is not None else ''
        self.j = j if j is not None else ''

        # Frame and completeness flags
        if in_frame is None:
            in_frame = len(self.cdr3nt) % 3 == 0
        if no_stop is None:
            no_stop = '*' not in self.cdr3aa
        self.in_frame = in_frame
        self.is_complete = is_complete
        self.no_stop = no_stop

        # Segment boundaries, 0-based positions within cdr3nt, -1 if unknown
        self.lastvpos = lastvpos  # last position of V segment
        self.firstdpos = firstdpos  # first position of D segment
        self.lastdpos = lastdpos  # last position of D segment
        self.firstjpos = firstjpos  # first position of J segment

        # Hypermutations, e.g. {"S12:A>G"}
        if mutations is None:
            mutations = frozenset()
        self.mutations = frozenset(mutations)
        self.sample = sample  # Sample obj the clonotype was read from

    def __getitem__(self, attr):
        if attr not in self.__dict__:
            raise KeyError("Clonotype does not have attribute %s" % attr)
        return self.__dict__[attr]

    def __repr__(self):
        return "Clonotype(%s, %s, %s, %d, %g)" % (self.v, self.cdr3aa,
                                                  self.j, self.count,
                                                  self.freq)

    def get_sorted_items(self):
        items = ['count', 'freq', 'cdr3nt', 'cdr3aa', 'v', 'd', 'j',
                 'in_frame', 'is_complete', 'no_stop']
        return items

    def getstr(self):
        vals = []
        for field in self.get_sorted_items():
            val = self[field]
            if val is None:
                vals.append('')
            else:
                vals.append(str(val))
        return "\t".join(vals)

    def get_vseqj(self, nuc=False):
        if nuc:
            seq = self.cdr3nt
        else:
            seq = self.cdr3aa
        return "%s_%s_%s" % (self.v, seq, self.j)

#======= Read and write functions ==========
def clone_columns():
    cols = ['count', 'freq', 'cdr3nt', 'cdr3aa', 'v', 'd', 'j']
    return cols
