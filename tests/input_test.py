#!/usr/bin/env python

#Copyright (C) 2013 by Ngan Nguyen
#
#Released under the MIT license, see LICENSE.txt

'''
Testing cdr3tk.src.inputs functions
'''

import os
import gzip
import shutil
import tempfile
import unittest

from cdr3tk.lib.common import InputError
import cdr3tk.lib.common as libcommon
import cdr3tk.src.inputs.inputcommon as inputcommon
import cdr3tk.src.inputs.mitcr as mitcr
import cdr3tk.src.inputs.vdjtools as vdjtools

VDJTOOLS_HEADER = "count\tfreq\tcdr3nt\tcdr3aa\tv\td\tj\n"


class TestMitcrParseline(unittest.TestCase):
    '''Testing MiTCR parsing function
    '''
    def setUp(self):
        self.index2col = dict(enumerate(mitcr.mitcr_columns()))
        self.productive = ("11763\t0.13098233971004164\tTGTGCCAGCAGCTTAGGGGAA"
                           + "AACATTCAGTACTTC\tJJJJJJJJJJJJJJJJJJJJJJJJJJJJJJ"
                           + "JJJJJJ\t41\tCASSLGENIQYF\tTRBV13*01\tTRBV13\t"
                           + "TRBJ2-4*01\tTRBJ2-4\t"
                           + "TRBD1*01, TRBD2*02, TRBD2*01\tTRBD1, TRBD2\t16"
                           + "\t-1\t-1\t19\t-1\t-1\t2")

    def test_parse_productive_clone(self):
        clone = mitcr.mitcr_parseline(self.productive, self.index2col)
        self.assertTrue(clone is not None)
        self.assertEqual(clone.count, 11763)
        self.assertEqual("%.3f" % (clone.freq * 100), "0.131")
        self.assertEqual(clone.v, "TRBV13")
        self.assertEqual(clone.j, "TRBJ2-4")
        self.assertEqual(clone.d, "TRBD1")
        nuc = "TGTGCCAGCAGCTTAGGGGAAAACATTCAGTACTTC"
        self.assertEqual(clone.cdr3nt, nuc)
        self.assertEqual(clone.cdr3aa, "CASSLGENIQYF")
        self.assertTrue(clone.in_frame)
        self.assertTrue(clone.no_stop)

    def test_segment_positions(self):
        clone = mitcr.mitcr_parseline(self.productive, self.index2col)
        self.assertEqual(clone.lastvpos, 16)
        self.assertEqual(clone.firstdpos, -1)
        self.assertEqual(clone.lastdpos, -1)
        self.assertEqual(clone.firstjpos, 19)
        line = self.productive.replace("\t16\t-1\t-1\t19\t", "\t5\t7\t8\t10\t")
        clone = mitcr.mitcr_parseline(line, self.index2col)
        self.assertEqual((clone.lastvpos, clone.firstdpos, clone.lastdpos,
                          clone.firstjpos), (5, 7, 8, 10))

    def test_parse_short_line(self):
        self.assertTrue(mitcr.mitcr_parseline("11763\t0.13",
                                              self.index2col) is None)


class TestVdjtoolsParseline(unittest.TestCase):
    def setUp(self):
        self.index2col = libcommon.get_index2item(VDJTOOLS_HEADER)

    def test_parse_clone(self):
        line = "120\t0.012\tTGTGCCAGCAGC\tCASS\tTRBV5-1\t.\tTRBJ2-7\n"
        clone = vdjtools.vdjtools_parseline(line, self.index2col)
        self.assertEqual(clone.count, 120)
        self.assertEqual(clone.freq, 0.012)
        self.assertEqual(clone.cdr3nt, "TGTGCCAGCAGC")
        self.assertEqual(clone.cdr3aa, "CASS")
        self.assertEqual(clone.v, "TRBV5-1")
        self.assertEqual(clone.j, "TRBJ2-7")

    def test_float_count(self):
        line = "3.0\t0.5\tTGT\tC\tTRBV1\t\tTRBJ1\n"
        clone = vdjtools.vdjtools_parseline(line, self.index2col)
        self.assertEqual(clone.count, 3)
        self.assertEqual(clone.d, '')

    def test_segment_positions(self):
        index2col = libcommon.get_index2item(VDJTOOLS_HEADER.rstrip("\n") +
                                             "\tVEnd\tDStart\tDEnd\tJStart\n")
        line = "5\t0.5\tTGTGCCAGC\tCAS\tTRBV1\t\tTRBJ1\t3\t-1\t-1\t6\n"
        clone = vdjtools.vdjtools_parseline(line, index2col)
        self.assertEqual(clone.lastvpos, 3)
        self.assertEqual(clone.firstdpos, -1)
        self.assertEqual(clone.lastdpos, -1)
        self.assertEqual(clone.firstjpos, 6)
        # no position columns
        line = "5\t0.5\tTGTGCCAGC\tCAS\tTRBV1\t\tTRBJ1\n"
        clone = vdjtools.vdjtools_parseline(line, self.index2col)
        self.assertEqual(clone.lastvpos, -1)
        self.assertEqual(clone.firstjpos, -1)

    def test_skipped_lines(self):
        with self.assertLogs('cdr3tk.src.inputs.vdjtools', level='WARNING'):
            clone = vdjtools.vdjtools_parseline("1\t0.1\tTGT\n",
                                                self.index2col)
        self.assertTrue(clone is None)
        # missing required nucleotide sequence
        line = "1\t0.1\t\tC\tTRBV1\t\tTRBJ1\n"
        self.assertTrue(vdjtools.vdjtools_parseline(line, self.index2col)
                        is None)


class TestReadClonotypes(unittest.TestCase):
    def setUp(self):
        self.outdir = tempfile.mkdtemp()
        self.rows = ["100\t0.5\tTGTGCC\tCA\tTRBV1\t\tTRBJ1\n",
                     "\n",
                     "60\t0.3\tTGTTTT\tCF\tTRBV2\tTRBD1\tTRBJ2\n",
                     "40\t0.2\tTGTAAA\tCK\tTRBV3\t\tTRBJ1\n"]

    def tearDown(self):
        shutil.rmtree(self.outdir)

    def test_plain_and_gzip(self):
        plain = os.path.join(self.outdir, "s1.txt")
        with open(plain, 'w') as f:
            f.write("#" + VDJTOOLS_HEADER)
            f.writelines(self.rows)
        zipped = os.path.join(self.outdir, "s2.txt.gz")
        with gzip.open(zipped, 'wt') as f:
            f.write(VDJTOOLS_HEADER)
            f.writelines(self.rows)
        for file in [plain, zipped]:
            clones = inputcommon.read_clonotypes(file)
            self.assertEqual(len(clones), 3)
            self.assertEqual([c.cdr3aa for c in clones], ['CA', 'CF', 'CK'])
            self.assertEqual(clones[1].d, 'TRBD1')
        self.assertEqual(libcommon.get_sample_name(zipped), 's2')

    def test_wrong_format(self):
        empty = os.path.join(self.outdir, "empty.txt")
        with open(empty, 'w') as f:
            f.write(VDJTOOLS_HEADER)
        self.assertRaises(inputcommon.FormatError,
                          inputcommon.read_clonotypes, empty)
        wrongheader = os.path.join(self.outdir, "wrong.txt")
        with open(wrongheader, 'w') as f:
            f.write("a\tb\tc\td\te\tf\tg\n")
            f.writelines(self.rows)
        self.assertRaises(inputcommon.FormatError,
                          inputcommon.read_clonotypes, wrongheader)
        self.assertRaises(InputError, inputcommon.read_clonotypes, empty,
                          "adaptive")


if __name__ == '__main__':
    unittest.main()
