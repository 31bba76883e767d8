#!/usr/bin/env python
"""Test suite for :py:mod:`bioattr.readers.vcf`"""
import unittest
import warnings
from io import StringIO

import pytest

from bioattr.readers.vcf import VCF_Reader, VCF_Writer
from bioattr.records.vcf import VcfHeader, VcfRecord
from bioattr.attributes.types import TypeCode
from bioattr.test.common import VCF_HEADER_LINES, VCF_RECORD_LINES, VCF_TEXT, sup_data
from bioattr.test.unit.readers.test_common import AbstractTestRecordReader
from bioattr.util.services.decorators import catch_warnings
from bioattr.util.services.exceptions import MalformedFileError, DataWarning

HEADER_TEXT = "\n".join(VCF_HEADER_LINES) + "\n"


@pytest.mark.unit
class TestVCF(AbstractTestRecordReader):

    reader_class = VCF_Reader
    writer_class = VCF_Writer
    lines        = VCF_RECORD_LINES
    bad_line     = "20\t14370\trs1\tG\tA\tnot_a_number\tPASS\t.\tGT\t0/1\t0/1"

    def get_text(self):
        return VCF_TEXT

    def get_writer(self,stream):
        return VCF_Writer(stream,header=VcfHeader.from_lines(VCF_HEADER_LINES))

    def header_line_count(self):
        return len(VCF_HEADER_LINES)

    def test_skip_blank_and_comment_lines(self):
        # header lines must lead the file; blanks and comments may follow
        text = HEADER_TEXT + "\n# a comment\n" + "\n".join(VCF_RECORD_LINES) + "\n   \n"
        reader = VCF_Reader(StringIO(text))
        self.assertEqual(len(list(reader)),len(VCF_RECORD_LINES))
        self.assertEqual(reader.comments,["# a comment"])
        self.assertEqual(reader.rejected,[])

    def test_header(self):
        reader = VCF_Reader(StringIO(VCF_TEXT))
        self.assertEqual(reader.header,VcfHeader.from_lines(VCF_HEADER_LINES))
        self.assertEqual(reader.metadata["fileformat"],"VCFv4.3")
        self.assertEqual(reader.counter,len(VCF_HEADER_LINES))

    def test_header_only_file(self):
        reader = VCF_Reader(StringIO(HEADER_TEXT))
        self.assertEqual(list(reader),[])
        self.assertEqual(reader.header.samples,("NA00001","NA00002"))

    def test_line_numbers(self):
        records = list(VCF_Reader(StringIO(VCF_TEXT)))
        expected = [len(VCF_HEADER_LINES) + X + 1 for X in range(len(VCF_RECORD_LINES))]
        self.assertEqual([X.line_number for X in records],expected)

    def test_attributes_typed_by_header(self):
        records = list(VCF_Reader(StringIO(VCF_TEXT)))
        self.assertIs(records[0].info["AF"].type_code,TypeCode.FLOAT)
        self.assertEqual(records[0].get_info_integer("DP"),14)
        self.assertEqual(records[0].genotypes["NA00002"].get_ad(),[4,4])
        self.assertEqual(records[0].genotypes["NA00001"].get_pl(),[0,10,100])

    @catch_warnings("ignore")
    def test_header_argument_overrides_stream(self):
        header = VcfHeader(['##INFO=<ID=DP,Number=1,Type=String,Description="d">'],
                           samples=("A","B"))
        records = list(VCF_Reader(StringIO(VCF_TEXT),header=header))
        self.assertIs(records[0].info["DP"].type_code,TypeCode.STRING)
        self.assertEqual(list(records[0].genotypes),["A","B"])

    def test_malformed_header_is_fatal(self):
        text = '##fileformat=VCFv4.3\n##INFO=<ID=DP,Type=Integer,Description="d">\n' + VCF_RECORD_LINES[2] + "\n"
        with self.assertRaises(MalformedFileError):
            VCF_Reader(StringIO(text))

    def test_undeclared_keys_warn_once_per_key(self):
        line1 = "20\t10\t.\tA\tG\t.\t.\tXREADER1=1\tGT:XREADER2\t0/1:3\t0/0:4"
        line2 = "20\t11\t.\tA\tG\t.\t.\tXREADER1=2\tGT:XREADER2\t0/1:3\t0/0:4"
        text  = HEADER_TEXT + line1 + "\n" + line2 + "\n"
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            records = list(VCF_Reader(StringIO(text)))

        self.assertEqual(len(records),2)
        messages = sorted(str(X.message) for X in caught if issubclass(X.category,DataWarning))
        self.assertEqual(len(messages),2)
        self.assertTrue(messages[0].startswith("FORMAT key 'XREADER2' is not declared"))
        self.assertTrue(messages[1].startswith("INFO key 'XREADER1' is not declared"))

    def test_undeclared_keys_untyped(self):
        line = "20\t12\t.\tA\tG\t.\t.\tXREADER3=abc\tGT\t0/1\t0/0"
        with sup_data:
            record = list(VCF_Reader(StringIO(HEADER_TEXT + line + "\n")))[0]
        self.assertIsNone(record.info["XREADER3"].type_code)
        self.assertEqual(record.get_info_string("XREADER3"),"abc")

    def test_printer_reports_header(self):
        printer = StringIO()
        VCF_Reader(StringIO(VCF_TEXT),printer=printer)
        self.assertEqual(printer.getvalue(),"Read VCF header: 5 INFO and 5 FORMAT declarations, 2 samples.")


@pytest.mark.unit
class TestVCFWriter(unittest.TestCase):

    def test_default_header(self):
        stream = StringIO()
        writer = VCF_Writer(stream)
        writer.write(VcfRecord.builder().with_chrom("1").with_pos(5).with_ref("A").with_alt("T").build())
        self.assertEqual(stream.getvalue(),
                         "##fileformat=VCFv4.3\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n1\t5\t.\tA\tT\t.\t.\t.\n")

    def test_default_header_names_samples_of_first_record(self):
        stream = StringIO()
        writer = VCF_Writer(stream)
        writer.write(VcfRecord.from_vcf("1\t10\t.\tA\tG\t30\t.\tDP=1\tGT:AD\t0/1:3,4",samples=["s1"]))
        self.assertEqual(stream.getvalue(),
                         "##fileformat=VCFv4.3\n"
                         "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\ts1\n"
                         "1\t10\t.\tA\tG\t30\t.\tDP=1\tGT:AD\t0/1:3,4\n")
        again = list(VCF_Reader(StringIO(stream.getvalue())))
        self.assertEqual(again[0].genotypes["s1"].get_field_integers("AD","R"),[3,4])

    def test_default_header_written_on_close(self):
        stream = StringIO()
        writer = VCF_Writer(stream)
        writer.flush()
        self.assertEqual(stream.getvalue(),"")
        stream.close = lambda: None
        writer.close()
        self.assertEqual(stream.getvalue(),"##fileformat=VCFv4.3\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n")

    def test_genotypes_outside_header_warn(self):
        header = VcfHeader(["##fileformat=VCFv4.3"])
        stream = StringIO()
        writer = VCF_Writer(stream,header=header)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            writer.write(VcfRecord.from_vcf("1\t10\t.\tA\tG\t30\t.\tDP=1\tGT\t0/1",samples=["s9"]))
        last = stream.getvalue().rstrip("\n").split("\n")[-1]
        self.assertEqual(last,"1\t10\t.\tA\tG\t30\t.\tDP=1")
        messages = [str(X.message) for X in caught if issubclass(X.category,DataWarning)]
        self.assertEqual(messages,["Dropping genotypes of samples not in VCF header at record 1: s9"])

    def test_samples_follow_header(self):
        header = VcfHeader(["##fileformat=VCFv4.3"],samples=("NA00002","NA00003"))
        stream = StringIO()
        writer = VCF_Writer(stream,header=header)
        writer.write(VcfRecord.from_vcf(VCF_RECORD_LINES[2],header=VcfHeader.from_lines(VCF_HEADER_LINES)))
        last = stream.getvalue().rstrip("\n").split("\n")[-1]
        self.assertEqual(last,"20\t1110696\trs6040355;rs6040356\tA\t.\t.\t.\t.\tGT\t0/0\t.")

    def test_read_written_file(self):
        stream = StringIO()
        writer = VCF_Writer(stream,header=VcfHeader.from_lines(VCF_HEADER_LINES))
        originals = list(VCF_Reader(StringIO(VCF_TEXT)))
        for record in originals:
            writer.write(record)

        again = list(VCF_Reader(StringIO(stream.getvalue())))
        self.assertEqual([X.replace(line_number=None) for X in again],
                         [X.replace(line_number=None) for X in originals])
