#!/usr/bin/env python
"""Test suite for :py:mod:`bioattr.records.paf`"""
import unittest
import pytest
from bioattr.attributes.collection import AttributeSetBuilder
from bioattr.records.paf import PafRecord, PAF_RESERVED_TAGS
from bioattr.test.common import PAF_LINES
from bioattr.util.services.exceptions import MalformedRecordError, MalformedTokenError,\
                                             DuplicateKeyError, WrongCardinalityError


@pytest.mark.unit
class TestPafRecord(unittest.TestCase):

    def test_columns(self):
        record = PafRecord.from_paf(PAF_LINES[0])
        self.assertEqual(record.query_name,"read1")
        self.assertEqual(record.query_length,1000)
        self.assertEqual(record.query_start,10)
        self.assertEqual(record.query_end,990)
        self.assertEqual(record.strand,"+")
        self.assertEqual(record.target_name,"chr1")
        self.assertEqual(record.target_length,50000)
        self.assertEqual(record.target_start,1200)
        self.assertEqual(record.target_end,2180)
        self.assertEqual(record.matches,950)
        self.assertEqual(record.alignment_block_length,985)
        self.assertEqual(record.mapping_quality,60)
        self.assertEqual(len(record.tags),6)

    def test_round_trip(self):
        for line in PAF_LINES:
            self.assertEqual(PafRecord.from_paf(line + "\n").as_paf(),line)
            self.assertEqual(str(PafRecord.from_paf(line)),line)

    def test_reserved_accessors(self):
        record = PafRecord.from_paf(PAF_LINES[0])
        self.assertEqual(record.get_tp(),"P")
        self.assertEqual(record.get_alignment_type(),"P")
        self.assertEqual(record.get_nm(),35)
        self.assertEqual(record.get_mismatches_and_gaps(),35)
        self.assertEqual(record.get_cm(),85)
        self.assertAlmostEqual(record.get_divergence(),0.0123,places=6)
        self.assertEqual(record.get_cigar(),"980M")
        self.assertFalse(record.contains_as())
        self.assertIsNone(record.get_alignment_score_opt())

    def test_array_and_hex_tags(self):
        record = PafRecord.from_paf(PAF_LINES[1])
        self.assertEqual(record.get_field_integers("ZB"),[1,2])
        self.assertRaises(WrongCardinalityError,record.get_field_integers,"ZB",3)
        self.assertEqual(record.get_field_byte_array("ZH"),b"\x01\x02\x03")
        self.assertEqual(record.get_field_bytes("ZH"),[1,2,3])

    def test_no_tags(self):
        record = PafRecord.from_paf(PAF_LINES[2])
        self.assertEqual(len(record.tags),0)
        self.assertEqual(record.mapping_quality,255)

    def test_empty_tag_columns_skipped(self):
        record = PafRecord.from_paf(PAF_LINES[2] + "\t\tNM:i:1\t")
        self.assertEqual(list(record.tags),["NM"])

    def test_malformed(self):
        fields = PAF_LINES[2].split("\t")
        self.assertRaises(MalformedRecordError,PafRecord.from_paf,"\t".join(fields[:11]))
        bad_int = fields[:]
        bad_int[1] = "long"
        self.assertRaises(MalformedRecordError,PafRecord.from_paf,"\t".join(bad_int))
        bad_strand = fields[:]
        bad_strand[4] = "*"
        self.assertRaises(MalformedRecordError,PafRecord.from_paf,"\t".join(bad_strand))
        self.assertRaises(MalformedTokenError,PafRecord.from_paf,PAF_LINES[2] + "\tNM3")
        self.assertRaises(DuplicateKeyError,PafRecord.from_paf,PAF_LINES[2] + "\tNM:i:1\tNM:i:2")

    def test_equality_and_hash(self):
        a = PafRecord.from_paf(PAF_LINES[0])
        b = PafRecord.from_paf(PAF_LINES[0])
        c = PafRecord.from_paf(PAF_LINES[1])
        self.assertEqual(a,b)
        self.assertEqual(hash(a),hash(b))
        self.assertNotEqual(a,c)
        self.assertEqual(len({a,b,c}),2)

    def test_immutable(self):
        record = PafRecord.from_paf(PAF_LINES[0])
        with self.assertRaises(AttributeError):
            record.query_name = "other"
        with self.assertRaises(AttributeError):
            del record.strand

    def test_replace_tags(self):
        record = PafRecord.from_paf(PAF_LINES[2])
        tags = record.tags.to_builder().put("NM","i",4).put("tp","A","S").build()
        derived = record.replace(tags=tags)
        self.assertEqual(derived.as_paf(),PAF_LINES[2] + "\tNM:i:4\ttp:A:S")
        self.assertEqual(derived.get_nm(),4)
        self.assertEqual(len(record.tags),0)

    def test_construct_directly(self):
        tags = AttributeSetBuilder().put("tp","A","P").build()
        record = PafRecord("q",100,0,100,"+","t",200,10,110,95,100,60,tags)
        self.assertEqual(record.as_paf(),"q\t100\t0\t100\t+\tt\t200\t10\t110\t95\t100\t60\ttp:A:P")

    def test_reserved_table(self):
        keys = [X.key for X in PAF_RESERVED_TAGS]
        for key in ("tp","NM","AS","cg","cs","dv","de"):
            self.assertIn(key,keys)
