#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Common functions
'''

import os
import gzip
import logging
from optparse import OptionParser


class InputError(Exception):
    pass

class ConfigurationError(InputError):
    '''Samples or metadata that cannot form one consistent collection'''
    pass

class MissingResourceError(InputError, FileNotFoundError):
    '''A referenced sample file does not exist'''
    pass

def open_text(file):
    # gzip-aware text open, selected by file extension
    if file.endswith('.gz'):
        return gzip.open(file, 'rt')
    return open(file, 'r')

def get_sample_name(file):
    # base file name without directory, ".gz" and one more extension
    name = os.path.basename(file.rstrip('/'))
    if name.endswith('.gz'):
        name = name[:-3]
    return os.path.splitext(name)[0]

def get_index2item(line):
    items = line.rstrip("\n").split("\t")
    index2item = {}
    for i, item in enumerate(items):
        index2item[i] = item
    return index2item

def check_options_file(file):
    if not os.path.exists(file):
        raise InputError("File %s does not exists." % file)

def init_options(usage=None):
    if usage is None:
        usage = "%prog [options]"
    parser = OptionParser(usage=usage)
    return parser

def add_logging_options(parser):
    parser.add_option('--logLevel', dest='loglevel', default='INFO',
                      help=('Logging level [DEBUG|INFO|WARNING|ERROR]. ' +
                            'Default=%default'))

def set_logging_from_options(options):
    level = getattr(logging, options.loglevel.upper(), None)
    if not isinstance(level, int):
        raise InputError("Unknown logging level %s" % options.loglevel)
    logging.basicConfig(level=level,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
