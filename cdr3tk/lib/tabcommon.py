#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Common functions to make text tables (tab-separated)
'''

from cdr3tk.lib.clone import Clonotype
from cdr3tk.lib.metadata import SAMPLE_ID_COLUMN


def write_pool(pool, outfile, aggs=None):
    # one row per aggregated clonotype: representative fields + aggregates
    if aggs is None:
        aggs = pool.aggregators
    columns = Clonotype(0, 0.0, '').get_sorted_items()
    with open(outfile, 'w') as f:
        f.write("#%s\tincidence\t%s\n" % ("\t".join(columns), pool.policy))
        for agg in aggs:
            f.write("%s\t%d\t%s\n" % (agg.clonotype.getstr(), agg.incidence,
                                      repr(agg.get_value())))

def write_time_course(timecourse, outfile):
    with open(outfile, 'w') as f:
        f.write("#cdr3aa\tcdr3nt\tv\td\tj\tin_frame\tis_complete\tno_stop" +
                "\tpeak\tmean_frequency\t%s\n" %
                "\t".join(timecourse.sample_ids))
        for dc in timecourse:
            freqs = "\t".join(["%.4e" % freq for freq in dc.frequencies])
            f.write("%s\t%d\t%.4e\t%s\n" % (dc.getstr(), dc.peak,
                                            dc.mean_frequency, freqs))

def write_profiles(sample2profiles, table, outfile):
    # sample2profiles: list of (sample id, [(segment, AminoAcidProfileBuilder)])
    header = [SAMPLE_ID_COLUMN] + table.columns + ['cdr3.segment', 'bin',
                                                   'property.group', 'property',
                                                   'count', 'total']
    with open(outfile, 'w') as f:
        f.write("#%s\n" % "\t".join(header))
        for sample_id, profiles in sample2profiles:
            metadata = table.get_row_by_id(sample_id)
            for segment, builder in profiles:
                prefix = [sample_id] + metadata.entries + [segment]
                for b in builder.bins:
                    for group, prop2count in b.summary.items():
                        for prop, count in prop2count.items():
                            items = prefix + [str(b.index), group, prop,
                                              str(count), str(b.total)]
                            f.write("%s\n" % "\t".join(items))

def matrix_table(names, rows, outfile):
    # Print matrix to tab-separated file
    assert len(names) == len(rows)
    with open(outfile, 'w') as f:
        f.write("Samples\t%s\n" % "\t".join(names))
        for i, name in enumerate(names):
            row = rows[i]
            assert len(names) == len(row)
            f.write("%s\t%s\n" % (name, "\t".join(["%.3f" % r for r in row])))
