#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Common functions to decode clonotype tables into Clonotype objs
'''

import time
import logging

import cdr3tk.lib.common as libcommon
import cdr3tk.src.inputs.mitcr as mitcr
import cdr3tk.src.inputs.vdjtools as vdjtools

logger = logging.getLogger(__name__)


class FormatError(Exception):
    pass

FORMAT2FUNC = {"vdjtools": vdjtools.vdjtools_parseline,
               "mitcr": mitcr.mitcr_parseline}

def get_formats():
    return sorted(FORMAT2FUNC.keys())

def get_parsefunc(software):
    if software not in FORMAT2FUNC:
        raise libcommon.InputError(("Format %s is not recognized. " % software)
                                   + ("Please choose one of these: %s" %
                                      ", ".join(get_formats())))
    return FORMAT2FUNC[software]

def read_clone_file(file, parsefunc=vdjtools.vdjtools_parseline):
    clones = []
    with libcommon.open_text(file) as f:
        headerline = f.readline().lstrip('#')
        index2col = libcommon.get_index2item(headerline)
        for line in f:
            if not line.strip():
                continue
            clone = parsefunc(line, index2col)
            if clone is not None:
                clones.append(clone)

    if not clones:
        raise FormatError(("File %s has zero clone. Please check the header " %
                           file) + "line for appropriate column names.")
    return clones

def read_clonotypes(file, software="vdjtools"):
    starttime = time.time()
    clones = read_clone_file(file, get_parsefunc(software))
    logger.debug("Read %d clonotypes from %s in %.4f s" %
                 (len(clones), file, time.time() - starttime))
    return clones
