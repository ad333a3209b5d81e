#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Common functions for plotting using Matplotlib (Agg backend, files only)
'''

import colorsys
from optparse import OptionGroup

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

PLOT_FORMATS = ('pdf', 'png', 'eps', 'all')


def get_colors(n):
    # fixed palette for a few lines, evenly spaced hues beyond that
    palette = ["#377EB8", "#E31A1C", "#4DAF4A", "#984EA3", "#FF7F00",
               "#1B9E77", "#A65628", "#CE1256"]
    if n <= len(palette):
        return palette[:n]
    return [colorsys.hsv_to_rgb(i * 1.0 / n, 0.5, 0.5) for i in range(n)]

def add_plot_options(parser):
    group = OptionGroup(parser, "Plot options")
    group.add_option('--makeplots', dest='makeplots', action='store_true',
                     default=False,
                     help='Also draw plots of the results. Default=%default')
    group.add_option('--plotformat', dest='plotformat', default='pdf',
                     help=('Plot output format [%s]. ' % "|".join(PLOT_FORMATS)
                           + 'Default=%default'))
    group.add_option('--dpi', dest='dpi', default=300, type='int',
                     help='Dots per inch. Default=%default')
    group.add_option('--logscale', dest='logscale', action='store_true',
                     default=False,
                     help='Draw frequencies on a log scale. Default=%default')
    parser.add_option_group(group)

def check_plot_options(parser, options):
    if options.dpi < 72:
        parser.error('dpi must >= than screen res, 72. Got: %d' % options.dpi)
    if options.plotformat not in PLOT_FORMATS:
        parser.error('Unrecognized plot format: %s.' % options.plotformat +
                     ' Choose one from: %s.' % " ".join(PLOT_FORMATS))

def get_outfiles(outbase, plotformat):
    if plotformat == 'all':
        return ["%s.%s" % (outbase, fmt) for fmt in PLOT_FORMATS[:-1]]
    return ["%s.%s" % (outbase, plotformat)]

def get_axes(width=10.0, height=8.0, dpi=300):
    fig = plt.figure(figsize=(width, height), dpi=dpi, facecolor='w')
    # right margin holds the legend
    axes = fig.add_axes([0.1, 0.2, 0.65, 0.7])
    return fig, axes

def write_image(fig, outbase, plotformat='pdf', dpi=300):
    outfiles = get_outfiles(outbase, plotformat)
    for outfile in outfiles:
        if outfile.endswith('.pdf'):
            with PdfPages(outfile) as pdf:
                pdf.savefig(fig)
        else:
            fig.savefig(outfile, dpi=dpi)
    plt.close(fig)
    return outfiles

def style_axes(axes):
    for loc, spine in axes.spines.items():
        if loc in ('left', 'bottom'):
            spine.set_position(('outward', 10))
        else:
            spine.set_color('none')
    axes.xaxis.set_ticks_position('bottom')
    axes.yaxis.set_ticks_position('left')
    axes.grid(visible=True, color='#3F3F3F', linestyle='-', linewidth=0.05)

def set_sample_xticks(axes, sample_ids, size='xx-small', rotation=75):
    # one tick per sample, in collection order
    positions = list(range(len(sample_ids)))
    axes.set_xticks(positions)
    axes.set_xticklabels(sample_ids, fontsize=size, fontweight='bold',
                         rotation=rotation)
    axes.set_xlim(-0.5, len(sample_ids) - 0.5)
    return positions

def set_freq_yaxis(axes, logscale=False, label="Clone size (frequency)"):
    if logscale:
        # symlog keeps absent (zero) time points on the plot
        axes.set_yscale('symlog', linthresh=1e-6)
    for ticklabel in axes.get_yticklabels():
        ticklabel.set_fontsize('xx-small')
    axes.set_ylabel(label, size='x-large', weight='bold')

def set_legend(axes, lines, names):
    return axes.legend(lines, names, numpoints=1, loc='upper left',
                       bbox_to_anchor=(1.02, 1.0), frameon=False,
                       fontsize='x-small')
