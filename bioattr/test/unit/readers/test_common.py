#!/usr/bin/env python
"""Tests shared by all readers and writers in :py:mod:`bioattr.readers`

Subclasses of |AbstractTestRecordReader| set `reader_class`, `writer_class`,
`lines` and `bad_line`, and inherit every test.
"""
import os
import tempfile
import unittest
import warnings
from io import StringIO

import pysam
import pytest

from bioattr.readers.common import RecordReader, RecordWriter
from bioattr.records.paf import PafRecord
from bioattr.util.services.decorators import skip_if_abstract, catch_warnings
from bioattr.util.services.exceptions import MalformedFileError, FileFormatWarning, MalformedRecordError
from bioattr.test.common import PAF_LINES, PAF_TEXT


#===============================================================================
# INDEX: reusable test suite
#===============================================================================

class AbstractTestRecordReader(unittest.TestCase):
    """Tests for readers and writers of one file format"""

    reader_class = None
    writer_class = None
    lines        = []
    bad_line     = None

    def get_reader(self,text,**kwargs):
        return self.reader_class(StringIO(text),**kwargs)

    def get_text(self):
        return "\n".join(self.lines) + "\n"

    def get_writer(self,stream):
        return self.writer_class(stream)

    @skip_if_abstract
    def test_read_all_records(self):
        records = list(self.get_reader(self.get_text()))
        self.assertEqual(len(records),len(self.lines))
        for line, record in zip(self.lines,records):
            self.assertEqual(str(record),line)

    @skip_if_abstract
    def test_skip_blank_and_comment_lines(self):
        text = "\n\n# a comment\n" + self.get_text() + "   \n"
        reader = self.get_reader(text)
        records = list(reader)
        self.assertEqual(len(records),len(self.lines))
        self.assertIn("# a comment",reader.comments)
        self.assertEqual(reader.rejected,[])

    @skip_if_abstract
    def test_counter_counts_all_lines(self):
        reader = self.get_reader(self.get_text() + "\n")
        list(reader)
        self.assertEqual(reader.counter,self.header_line_count() + len(self.lines) + 1)

    @skip_if_abstract
    def test_reject_malformed_line(self):
        text = self.get_text() + self.bad_line + "\n"
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            reader = self.get_reader(text)
            records = list(reader)

        self.assertEqual(len(records),len(self.lines))
        self.assertEqual(reader.rejected,[self.bad_line + "\n"])
        messages = [str(X.message) for X in caught if issubclass(X.category,FileFormatWarning)]
        self.assertEqual(len(messages),1)
        self.assertIn("Rejecting line %s" % reader.counter,messages[0])

    @skip_if_abstract
    @catch_warnings("ignore")
    def test_printer_reports_rejections(self):
        printer = StringIO()
        text = self.get_text() + self.bad_line + "\n"
        reader = self.get_reader(text,printer=printer)
        list(reader)
        self.assertIn("Rejected 1 of %s lines" % reader.counter,printer.getvalue())

    @skip_if_abstract
    def test_strict_raises_with_line_number(self):
        text = self.get_text() + self.bad_line + "\n"
        reader = self.get_reader(text,strict=True)
        with self.assertRaises(MalformedFileError) as cm:
            list(reader)
        self.assertEqual(cm.exception.line_num,self.header_line_count() + len(self.lines) + 1)

    @skip_if_abstract
    def test_read_multiple_streams(self):
        reader = self.reader_class(StringIO(self.get_text()),StringIO("\n".join(self.data_lines()) + "\n"))
        self.assertEqual(len(list(reader)),len(self.lines) + len(self.data_lines()))

    @skip_if_abstract
    def test_writer_round_trip(self):
        stream = StringIO()
        writer = self.get_writer(stream)
        for record in self.get_reader(self.get_text()):
            writer.write(record)

        self.assertEqual(stream.getvalue(),self.expected_written_text())
        self.assertEqual(writer.counter,len(self.lines))

    def header_line_count(self):
        return 0

    def data_lines(self):
        return self.lines

    def expected_written_text(self):
        return self.get_text()



#===============================================================================
# INDEX: base classes
#===============================================================================

class _LineReader(RecordReader):
    """Minimal reader returning stripped lines, rejecting lines containing 'bad'"""

    def _parse(self,line):
        if "bad" in line:
            raise MalformedRecordError("found bad")
        elif "skip" in line:
            return None
        return line.strip()


class _LineWriter(RecordWriter):
    def format(self,record):
        return record.upper()


@pytest.mark.unit
class TestRecordReader(unittest.TestCase):

    def test_parse_none_skips_without_rejecting(self):
        reader = _LineReader(StringIO("a\nskip\nb\n"))
        self.assertEqual(list(reader),["a","b"])
        self.assertEqual(reader.rejected,[])
        self.assertEqual(reader.counter,3)

    def test_many_consecutive_skipped_lines(self):
        text = "skip\n" * 5000 + "a\n"
        self.assertEqual(list(_LineReader(StringIO(text))),["a"])

    def test_filename(self):
        reader = _LineReader(StringIO("a\n"))
        self.assertEqual(reader.filename,"<StringIO>")

    def test_strict_error_message(self):
        reader = _LineReader(StringIO("a\nbad\n"),strict=True)
        with self.assertRaises(MalformedFileError) as cm:
            list(reader)
        self.assertEqual(str(cm.exception),"Error opening file '<StringIO>' at line 2: found bad")

    def test_non_attribute_errors_propagate(self):
        class _BrokenReader(RecordReader):
            def _parse(self,line):
                raise KeyError(line)

        self.assertRaises(KeyError,list,_BrokenReader(StringIO("a\n")))

    def test_read_from_filename(self):
        fd, fn = tempfile.mkstemp(suffix=".txt")
        with os.fdopen(fd,"w") as fout:
            fout.write("a\nb\n")
        reader = _LineReader(fn)
        self.assertEqual(list(reader),["a","b"])
        self.assertEqual(reader.filename,fn)
        reader.close()
        os.remove(fn)

    def test_writer(self):
        stream = StringIO()
        writer = _LineWriter(stream)
        writer.write("a")
        writer.write("b")
        self.assertEqual(stream.getvalue(),"A\nB\n")
        self.assertEqual(writer.counter,2)

    def test_writer_to_filename(self):
        fd, fn = tempfile.mkstemp(suffix=".gz")
        os.close(fd)
        writer = _LineWriter(fn)
        writer.write("a")
        writer.close()
        reader = _LineReader(fn)
        self.assertEqual(list(reader),["A"])
        reader.close()
        os.remove(fn)


@pytest.mark.unit
class TestTabix(unittest.TestCase):

    def setUp(self):
        fd, self.plain = tempfile.mkstemp(suffix=".paf")
        with os.fdopen(fd,"w") as fout:
            fout.write(PAF_TEXT)
        self.compressed = self.plain + ".gz"
        pysam.tabix_compress(self.plain,self.compressed,force=True)

    def tearDown(self):
        for fn in (self.plain,self.compressed):
            if os.path.exists(fn):
                os.remove(fn)

    def test_read_tabix(self):
        from bioattr.readers.paf import PAF_Reader
        reader = PAF_Reader(self.compressed,tabix=True)
        records = list(reader)
        self.assertEqual(records,[PafRecord.from_paf(X) for X in PAF_LINES])
        reader.close()
