#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Draw clone frequencies over different samples (time points)
xaxis: samples in collection order
yaxis: clone size (frequency)
one line per tracked clonotype, labelled V_CDR3aa_J
'''

import cdr3tk.lib.drawcommon as drawcommon


def draw_time_course(timecourse, outbase, plotformat='pdf', dpi=300,
                     maxlegend=10, logscale=False):
    fig, axes = drawcommon.get_axes(dpi=dpi)
    xdata = drawcommon.set_sample_xticks(axes, timecourse.sample_ids)
    colors = drawcommon.get_colors(len(timecourse))
    lines = []
    names = []
    for i, dc in enumerate(timecourse):
        line, = axes.plot(xdata, dc.frequencies, linestyle='-', marker='o',
                          markersize=3, color=colors[i])
        lines.append(line)
        names.append(dc.clonotype.get_vseqj())

    drawcommon.style_axes(axes)
    drawcommon.set_freq_yaxis(axes, logscale)
    axes.set_title("Clonotype time course (%d clonotypes)" % len(timecourse),
                   size='xx-large', weight='bold')
    if 0 < len(lines) <= maxlegend:
        drawcommon.set_legend(axes, lines, names)
    return drawcommon.write_image(fig, outbase, plotformat, dpi)
