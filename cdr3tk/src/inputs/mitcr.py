#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Parse MiTCR output file (mitcr.milaboratory.com)
'''

import logging

from cdr3tk.lib.clone import Clonotype

logger = logging.getLogger(__name__)


def mitcr_columns():
    cols = ["Read count", "Percentage", "CDR3 nucleotide sequence",
            "CDR3 nucleotide quality", "Min quality",
            "CDR3 amino acid sequence", "V alleles", "V segments",
            "J alleles", "J segments", "D alleles", "D segments",
            "Last V nucleotide position", "First D nucleotide position",
            "Last D nucleotide position", "First J nucleotide position",
            "VD insertions", "DJ insertions", "Total insertions"]
    return cols

# segment boundary columns -> Clonotype attributes
MITCR_POSITION_COLS = [("Last V nucleotide position", "lastvpos"),
                       ("First D nucleotide position", "firstdpos"),
                       ("Last D nucleotide position", "lastdpos"),
                       ("First J nucleotide position", "firstjpos")]

def first_segment(segments):
    # "TRBD1, TRBD2" -> "TRBD1"
    return segments.split(', ')[0].strip()

def mitcr_parseline(line, index2col):
    items = line.rstrip('\n').split('\t')
    if len(items) != len(index2col):
        logger.warning(("Inconsistent number of columns between the " +
                        "following line and the header line, skipped it:" +
                        "\nLine:\n%s" % line))
        return None

    col2val = {}
    valid_cols = mitcr_columns()
    for i, col in index2col.items():
        col = col.strip()
        if col in valid_cols:
            col2val[col] = items[i].strip()

    # Return None if line does not have minimum required fields.
    required_cols = ["Read count", "Percentage", "CDR3 nucleotide sequence",
                     "V segments", "J segments"]
    for c in required_cols:
        if c not in col2val or not col2val[c]:
            return None

    count = int(col2val['Read count'])
    freq = float(col2val['Percentage'])/100.0
    nuc = col2val['CDR3 nucleotide sequence']
    v = first_segment(col2val['V segments'])
    j = first_segment(col2val['J segments'])
    d = ''
    if col2val.get('D segments'):
        d = first_segment(col2val['D segments'])
    aa = col2val.get('CDR3 amino acid sequence', '')

    positions = {}
    for col, attr in MITCR_POSITION_COLS:
        if col2val.get(col):
            positions[attr] = int(col2val[col])
    return Clonotype(count, freq, nuc, aa, v, d, j, **positions)
