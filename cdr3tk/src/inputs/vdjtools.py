#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Parse plain clonotype tables (the VDJtools layout):
count  freq  cdr3nt  cdr3aa  v  d  j  [VEnd  DStart  DEnd  JStart]
Other extra columns are ignored.
'''

import logging

from cdr3tk.lib.clone import Clonotype
import cdr3tk.lib.clone as libclone

logger = logging.getLogger(__name__)

# optional segment boundary columns -> Clonotype attributes
VDJTOOLS_POSITION_COLS = [('VEnd', 'lastvpos'), ('DStart', 'firstdpos'),
                          ('DEnd', 'lastdpos'), ('JStart', 'firstjpos')]


def vdjtools_parseline(line, index2col):
    items = line.rstrip('\n').split('\t')
    if len(items) != len(index2col):
        logger.warning(("Inconsistent number of columns between the " +
                        "following line and the header line, skipped it:" +
                        "\nLine:\n%s" % line))
        return None

    col2val = {}
    valid_cols = (libclone.clone_columns() +
                  [col for col, attr in VDJTOOLS_POSITION_COLS])
    for i, col in index2col.items():
        col = col.strip()
        if col in valid_cols:
            col2val[col] = items[i].strip()

    # Return None if line does not have minimum required fields.
    required_cols = ['count', 'freq', 'cdr3nt']
    for c in required_cols:
        if c not in col2val or not col2val[c]:
            return None

    count = int(float(col2val['count']))
    freq = float(col2val['freq'])
    cdr3nt = col2val['cdr3nt']
    positions = {}
    for col, attr in VDJTOOLS_POSITION_COLS:
        if col2val.get(col):
            positions[attr] = int(col2val[col])
    return Clonotype(count, freq, cdr3nt, col2val.get('cdr3aa', ''),
                     col2val.get('v', ''), col2val.get('d', ''),
                     col2val.get('j', ''), **positions)
