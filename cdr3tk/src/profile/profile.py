#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Amino acid property profiles of CDR3 sequences.
Each CDR3 is first cut into segments (full CDR3, V/D/J germline parts,
V-D, D-J or V-J junctions) using the segment boundaries of the clonotype.
Each segment is split into a fixed number of bins proportionally to its
length (residue i of an L-long sequence goes to bin int(i / L * nbins)).
For every bin, residues are counted per property of each property group,
e.g. group "charge": positive, negative, neutral.
Counts are not normalized; divide by the bin total downstream.
'''

import time
import logging
from optparse import OptionGroup

logger = logging.getLogger(__name__)


class AminoAcidPropertyGroup():
    '''Named partition (possibly partial) of the amino acids
    '''
    def __init__(self, name, property2residues):
        self.name = name
        self.properties = list(property2residues.keys())
        self.aa2property = {}
        for prop, residues in property2residues.items():
            for aa in residues:
                self.aa2property[aa] = prop

    def get_property(self, aa):
        return self.aa2property.get(aa.upper())

BASIC_PROPERTY_GROUPS = [
    AminoAcidPropertyGroup('hydropathy', {'hydrophobic': 'AVILMFWC',
                                          'neutral': 'GHPSTY',
                                          'hydrophilic': 'RNDQEK'}),
    AminoAcidPropertyGroup('charge', {'positive': 'RHK',
                                      'negative': 'DE',
                                      'neutral': 'AVILMFWCGPSTYNQ'}),
    AminoAcidPropertyGroup('polarity', {'polar': 'RNDQEHKSTY',
                                        'nonpolar': 'AVILMFWCGP'}),
    AminoAcidPropertyGroup('volume', {'small': 'AGSCDPNT',
                                      'medium': 'QEHV',
                                      'large': 'RILKMFWY'}),
]

def get_group_names():
    return [group.name for group in BASIC_PROPERTY_GROUPS]

def get_property_groups(names=None):
    if names is None:
        return list(BASIC_PROPERTY_GROUPS)
    name2group = dict((group.name, group) for group in BASIC_PROPERTY_GROUPS)
    groups = []
    for name in names:
        if name not in name2group:
            raise ValueError("Unknown amino acid property group %s. " % name +
                             "Allowed values: %s" % ", ".join(get_group_names()))
        groups.append(name2group[name])
    return groups

#======== CDR3 segments =========
def known(pos):
    return pos is not None and pos >= 0

def has_d(clonotype):
    return (known(clonotype.firstdpos) and known(clonotype.lastdpos) and
            clonotype.lastdpos >= clonotype.firstdpos)

def full_range(clonotype):
    return 0, 3 * len(clonotype.cdr3aa)

def vgerm_range(clonotype):
    if not known(clonotype.lastvpos):
        return None
    return 0, clonotype.lastvpos + 1

def dgerm_range(clonotype):
    if not has_d(clonotype):
        return None
    return clonotype.firstdpos, clonotype.lastdpos + 1

def jgerm_range(clonotype):
    if not known(clonotype.firstjpos):
        return None
    return clonotype.firstjpos, len(clonotype.cdr3nt)

def vd_range(clonotype):
    if not (known(clonotype.lastvpos) and has_d(clonotype)):
        return None
    return clonotype.lastvpos + 1, clonotype.firstdpos

def dj_range(clonotype):
    if not (has_d(clonotype) and known(clonotype.firstjpos)):
        return None
    return clonotype.lastdpos + 1, clonotype.firstjpos

def vj_range(clonotype):
    # only for clonotypes without an identified D segment
    if (has_d(clonotype) or not known(clonotype.lastvpos) or
            not known(clonotype.firstjpos)):
        return None
    return clonotype.lastvpos + 1, clonotype.firstjpos


class Cdr3Segment():
    '''Part of a CDR3 delimited by segment boundaries.
    rangefunc(clonotype) returns the [start, end) nucleotide range of the
    segment, or None when the boundaries it needs are unknown. The amino
    acid sequence of a segment holds every codon overlapping that range.
    '''
    def __init__(self, name, rangefunc):
        self.name = name
        self.rangefunc = rangefunc

    def get_range(self, clonotype):
        return self.rangefunc(clonotype)

    def get_sequence(self, clonotype):
        ntrange = self.get_range(clonotype)
        if ntrange is None:
            return ''
        start, end = ntrange
        if end <= start:
            return ''
        return clonotype.cdr3aa[start // 3: (end + 2) // 3]

FULL_CDR3 = 'CDR3-full'
CDR3_SEGMENTS = [Cdr3Segment(FULL_CDR3, full_range),
                 Cdr3Segment('V-germ', vgerm_range),
                 Cdr3Segment('D-germ', dgerm_range),
                 Cdr3Segment('J-germ', jgerm_range),
                 Cdr3Segment('VD-junc', vd_range),
                 Cdr3Segment('DJ-junc', dj_range),
                 Cdr3Segment('VJ-junc', vj_range)]
DEFAULT_SEGMENT_BINS = ("CDR3-full:9,V-germ:3,D-germ:1,J-germ:3,VD-junc:1," +
                        "DJ-junc:1,VJ-junc:3")

def get_segment_names():
    return [segment.name for segment in CDR3_SEGMENTS]

def parse_segment_bins(text):
    '''"segment1:nbins1,segment2:nbins2,..." -> [(Cdr3Segment, nbins)]
    '''
    name2segment = dict((segment.name, segment) for segment in CDR3_SEGMENTS)
    segment_bins = []
    names = []
    for item in text.split(','):
        item = item.strip()
        if not item:
            continue
        fields = item.split(':')
        if len(fields) != 2 or fields[0] not in name2segment:
            raise ValueError("Unknown segment binning %s. " % item +
                             "Allowed segments: %s" %
                             ", ".join(get_segment_names()))
        if fields[0] in names:
            raise ValueError("Segment %s is binned twice" % fields[0])
        nbins = int(fields[1])
        if nbins < 1:
            raise ValueError("Number of bins must be >= 1, got %s" % item)
        names.append(fields[0])
        segment_bins.append((name2segment[fields[0]], nbins))
    if not segment_bins:
        raise ValueError("No segment binning in '%s'" % text)
    return segment_bins

def add_profile_options(parser):
    group = OptionGroup(parser, "CDR3 amino acid profile options")
    group.add_option('--segment_bins', dest='segment_bins',
                     default=DEFAULT_SEGMENT_BINS,
                     help=('Comma-separated segment:nbins list. Allowed ' +
                           'segments: %s. ' % ",".join(get_segment_names()) +
                           'Default=%default'))
    group.add_option('--group_list', dest='group_list',
                     default=",".join(get_group_names()),
                     help=('Comma-separated list of amino acid property ' +
                           'groups. Default=%default'))
    group.add_option('--unweighted', dest='weighted', action='store_false',
                     default=True,
                     help=('Count each clonotype once instead of weighting ' +
                           'by read count.'))
    parser.add_option_group(group)

def check_profile_options(parser, options):
    try:
        options.segment2nbins = parse_segment_bins(options.segment_bins)
    except ValueError as e:
        parser.error("Bad --segment_bins: %s" % e)
    options.group_names = [g for g in options.group_list.split(',') if g]
    for name in options.group_names:
        if name not in get_group_names():
            parser.error("Unknown --group_list entry %s" % name)


class AminoAcidProfileBin():
    def __init__(self, index, groups):
        self.index = index
        self.groups = groups
        self.total = 0
        self.counts = {}
        for group in groups:
            self.counts[group.name] = dict((p, 0) for p in group.properties)

    def update(self, aa, weight):
        self.total += weight
        for group in self.groups:
            prop = group.get_property(aa)
            if prop is not None:
                self.counts[group.name][prop] += weight

    @property
    def summary(self):
        # {group: {property: count}}
        return self.counts


class AminoAcidProfileBuilder():
    def __init__(self, nbins, groups=None):
        if nbins < 1:
            raise ValueError("Number of bins must be >= 1, got %d" % nbins)
        if groups is None:
            groups = BASIC_PROPERTY_GROUPS
        self.nbins = nbins
        self.groups = list(groups)
        self.bins = [AminoAcidProfileBin(i, self.groups) for i in range(nbins)]

    def update(self, sequence, weight=1):
        n = len(sequence)
        for i in range(n):
            binindex = int((i / float(n)) * self.nbins)
            self.bins[binindex].update(sequence[i], weight)

    def get_total(self):
        return sum([b.total for b in self.bins])


def profile_sample(sample, segment_bins=None, groups=None, weighted=True):
    '''One profile per CDR3 segment: [(segment name, AminoAcidProfileBuilder)]
    in the order of segment_bins
    '''
    starttime = time.time()
    if segment_bins is None:
        segment_bins = parse_segment_bins(DEFAULT_SEGMENT_BINS)
    profiles = [(segment, AminoAcidProfileBuilder(nbins, groups))
                for segment, nbins in segment_bins]
    for clonotype in sample:
        weight = clonotype.count if weighted else 1
        for segment, builder in profiles:
            builder.update(segment.get_sequence(clonotype), weight)
    logger.info("Profiled sample %s (%d segments) in %.4f s" %
                (sample.name, len(profiles), time.time() - starttime))
    return [(segment.name, builder) for segment, builder in profiles]
