#!/usr/bin/env python
"""Test suite for :py:mod:`bioattr.readers.paf`"""
import re
from io import StringIO

import pytest

from bioattr.readers.paf import PAF_Reader, PAF_Writer
from bioattr.records.paf import PafRecord
from bioattr.test.common import PAF_LINES, PAF_TEXT, sup_file
from bioattr.test.unit.readers.test_common import AbstractTestRecordReader
from bioattr.util.io.filters import NameDateWriter


@pytest.mark.unit
class TestPAF(AbstractTestRecordReader):

    reader_class = PAF_Reader
    writer_class = PAF_Writer
    lines        = PAF_LINES
    bad_line     = "read9\t100\t0\t100\t+\tchr1"

    def test_records_typed(self):
        records = list(PAF_Reader(StringIO(PAF_TEXT)))
        self.assertTrue(all(isinstance(X,PafRecord) for X in records))
        self.assertEqual(records[0].get_nm(),35)
        self.assertEqual(records[1].get_alignment_type(),"S")

    def test_reject_duplicate_tags(self):
        line = PAF_LINES[2] + "\tNM:i:1\tNM:i:2\n"
        reader = PAF_Reader(StringIO(PAF_TEXT + line))
        with sup_file:
            records = list(reader)
        self.assertEqual(len(records),3)
        self.assertEqual(reader.rejected,[line])

    def test_name_date_printer(self):
        log = StringIO()
        reader = PAF_Reader(StringIO(PAF_TEXT + self.bad_line + "\n"),printer=NameDateWriter("bioattr",stream=log))
        with sup_file:
            records = list(reader)
        self.assertEqual(len(records),len(PAF_LINES))
        pat = re.compile(r"^bioattr \[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\]: Rejected 1 of 4 lines in .*\.\n$")
        self.assertIsNotNone(pat.match(log.getvalue()),log.getvalue())

    def test_tags_decoded_lazily(self):
        # a badly typed tag does not reject the line; it fails on access
        line = PAF_LINES[2] + "\tNM:i:many"
        records = list(PAF_Reader(StringIO(line + "\n")))
        self.assertEqual(len(records),1)
        self.assertEqual(records[0].tags["NM"].raw,"many")
