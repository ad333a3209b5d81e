#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Clonotype identity keys.
A key wraps one clonotype and defines equality and hash from a fixed
subset of its fields, so that clonotypes observed in different samples
can be matched through a dict:
    aa:   CDR3 amino acid sequence
    nt:   CDR3 nucleotide sequence
    ntV:  CDR3 nucleotide sequence + V segment
    aaV:  CDR3 amino acid sequence + V segment
    aaVJ: CDR3 amino acid sequence + V and J segments
    ntVJ: CDR3 nucleotide sequence + V and J segments
'''

KEY_FIELDS = {
    'aa': ('cdr3aa',),
    'nt': ('cdr3nt',),
    'ntV': ('cdr3nt', 'v'),
    'aaV': ('cdr3aa', 'v'),
    'aaVJ': ('cdr3aa', 'v', 'j'),
    'ntVJ': ('cdr3nt', 'v', 'j'),
}


def get_keytypes():
    return sorted(KEY_FIELDS.keys())

def check_keytype(keytype):
    if keytype not in KEY_FIELDS:
        raise ValueError("Unknown clonotype key type %s. Choose one from: %s"
                         % (keytype, ", ".join(get_keytypes())))

def key_values(clonotype, keytype):
    # absent fields compare as empty strings
    vals = []
    for field in KEY_FIELDS[keytype]:
        val = getattr(clonotype, field, None)
        if val is None:
            val = ''
        vals.append(val)
    return tuple(vals)


class ClonotypeKey():
    '''Equality/hash view of a clonotype under one key type
    '''
    __slots__ = ('clonotype', 'keytype', '_vals')

    def __init__(self, clonotype, keytype='aa'):
        check_keytype(keytype)
        self.clonotype = clonotype
        self.keytype = keytype
        self._vals = key_values(clonotype, keytype)

    def equals(self, other):
        # compare against a bare clonotype
        return self._vals == key_values(other, self.keytype)

    def __eq__(self, other):
        if not isinstance(other, ClonotypeKey) or other.keytype != self.keytype:
            return NotImplemented
        return self._vals == other._vals

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._vals)

    def __repr__(self):
        return "ClonotypeKey(%s: %s)" % (self.keytype, self.getstr())

    def getstr(self):
        return "_".join(self._vals)
