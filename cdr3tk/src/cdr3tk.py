#!/usr/bin/env python

#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
CDR3 ToolKit main driver
Inputs:
    1/ Clonotype table files, or a metadata file listing them
    2/ Analysis to perform: pool, timecourse, profile, overlap
    3/ Output prefix
Outputs:
    pool:       <prefix>.pool.txt
    timecourse: <prefix>.timecourse.txt (+ <prefix>.timecourse.<fmt> plot)
    profile:    <prefix>.cdr3aa.profile.txt
    overlap:    <prefix>.overlap.txt
'''

import os
import sys
import time
import logging

import cdr3tk.lib.common as libcommon
import cdr3tk.lib.drawcommon as drawcommon
import cdr3tk.lib.tabcommon as tabcommon
import cdr3tk.lib.samplecollection as libcollection
import cdr3tk.src.inputs.inputcommon as inputcommon
import cdr3tk.src.pool.pool as libpool
import cdr3tk.src.timecourse.timecourse as timecourse
import cdr3tk.src.timecourse.timecourse_plot as tcplot
import cdr3tk.src.profile.profile as profile
import cdr3tk.src.overlap.overlap as overlap

logger = logging.getLogger(__name__)

ANALYSES = ('pool', 'timecourse', 'profile', 'overlap')


def add_options(parser):
    parser.add_option('-m', '--metadata', dest='metadata',
                      help=('Metadata file. First and second columns ' +
                            'should contain file name and sample id. ' +
                            'Header is mandatory and names the metadata ' +
                            'columns.'))
    parser.add_option('-S', '--software', dest='software', default='vdjtools',
                      help=('Input format [%s]. ' %
                            "|".join(inputcommon.get_formats()) +
                            'Default=%default'))
    parser.add_option('--not_strict', dest='strict', action='store_false',
                      default=True,
                      help='Skip missing sample files instead of failing.')
    parser.add_option('--store', dest='store', action='store_true',
                      default=False,
                      help='Keep decoded samples in memory. Default=%default')
    libcommon.add_logging_options(parser)
    libpool.add_pool_options(parser)
    timecourse.add_timecourse_options(parser)
    profile.add_profile_options(parser)
    overlap.add_overlap_options(parser)
    drawcommon.add_plot_options(parser)

def check_options(parser, args, options):
    if len(args) < 1 or args[0] not in ANALYSES:
        parser.error("First argument must be one of: %s" % ", ".join(ANALYSES))
    options.analysis = args[0]
    args = args[1:]
    if options.metadata:
        if len(args) != 1:
            parser.error("Only output prefix should be provided with -m")
        libcommon.check_options_file(options.metadata)
    elif len(args) < 2:
        parser.error("At least 1 sample file and an output prefix should " +
                     "be provided if not using -m")
    options.samplefiles = args[:-1]
    options.outprefix = args[-1]
    if options.software not in inputcommon.get_formats():
        parser.error("Unrecognized --software %s" % options.software)
    libpool.check_pool_options(parser, options)
    timecourse.check_timecourse_options(parser, options)
    profile.check_profile_options(parser, options)
    overlap.check_overlap_options(parser, options)
    drawcommon.check_plot_options(parser, options)

def load_collection(options):
    if options.metadata:
        return libcollection.collection_from_metadata(options.metadata,
                       options.software, options.store, True, options.strict)
    return libcollection.collection_from_files(options.samplefiles,
                       options.software, options.store, True, options.strict)

def run_pool(collection, options):
    pool = libpool.pool_samples(collection, options.keytype, options.policy)
    aggs = pool.filter_by_incidence(options.min_incidence)
    outfile = "%s.pool.txt" % options.outprefix
    tabcommon.write_pool(pool, outfile, aggs)
    return outfile

def run_timecourse(collection, options):
    tc = collection.as_time_course()
    if options.track_minfreq > 0:
        tc = tc.top(options.track_minfreq)
    tc = tc.sort_by_mean_frequency()
    outfile = "%s.timecourse.txt" % options.outprefix
    tabcommon.write_time_course(tc, outfile)
    if options.makeplots:
        tcplot.draw_time_course(tc, "%s.timecourse" % options.outprefix,
                                options.plotformat, options.dpi,
                                logscale=options.logscale)
    return outfile

def run_profile(collection, options):
    groups = profile.get_property_groups(options.group_names)
    sample2profiles = []
    for i, sample in enumerate(collection):
        profiles = profile.profile_sample(sample, options.segment2nbins,
                                          groups, options.weighted)
        sample2profiles.append((sample.name, profiles))
        logger.info("%d sample(s) processed" % (i + 1))
    outfile = "%s.cdr3aa.profile.txt" % options.outprefix
    tabcommon.write_profiles(sample2profiles, collection.metadata_table,
                             outfile)
    return outfile

def run_overlap(collection, options):
    names, rows = overlap.overlap_matrix(collection, options.keytype,
                                         options.overlap_attr)
    outfile = "%s.overlap.txt" % options.outprefix
    tabcommon.matrix_table(names, rows, outfile)
    return outfile

ANALYSIS2FUNC = {'pool': run_pool, 'timecourse': run_timecourse,
                 'profile': run_profile, 'overlap': run_overlap}

def main(argv=None):
    usage = ("%prog <" + "|".join(ANALYSES) + "> [options] " +
             "[sample1 sample2 ... if -m is not specified] output_prefix")
    parser = libcommon.init_options(usage)
    add_options(parser)
    options, args = parser.parse_args(argv)
    check_options(parser, args, options)
    libcommon.set_logging_from_options(options)

    starttime = time.time()
    outdir = os.path.dirname(options.outprefix)
    if outdir and not os.path.exists(outdir):
        os.makedirs(outdir)
    collection = load_collection(options)
    logger.info("%d sample(s) prepared" % collection.size())
    outfile = ANALYSIS2FUNC[options.analysis](collection, options)
    logger.info("Wrote %s, done in %.4f s" % (outfile, time.time() - starttime))
    return 0


if __name__ == "__main__":
    sys.exit(main())
