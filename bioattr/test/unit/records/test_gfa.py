#!/usr/bin/env python
"""Test suite for :py:mod:`bioattr.records.gfa`, :py:mod:`bioattr.records.gfa1`,
and :py:mod:`bioattr.records.gfa2`
"""
import unittest
import pytest
from bioattr.records import gfa1, gfa2
from bioattr.records.gfa import Orientation, Reference, Position, Alignment
from bioattr.test.common import GFA1_LINES, GFA2_LINES
from bioattr.util.services.exceptions import MalformedRecordError, DuplicateKeyError,\
                                             WrongTypeError


@pytest.mark.unit
class TestBuildingBlocks(unittest.TestCase):

    def test_reference(self):
        ref = Reference.parse("11+")
        self.assertEqual(ref.id,"11")
        self.assertIs(ref.orientation,Orientation.FORWARD)
        self.assertEqual(str(ref),"11+")
        self.assertEqual(Reference.parse_split("chr-1","-"),Reference("chr-1",Orientation.REVERSE))
        self.assertEqual(Reference.parse("chr-1-").as_split(),"chr-1\t-")

    def test_reference_malformed(self):
        for text in ("+","11","11*"):
            self.assertRaises(MalformedRecordError,Reference.parse,text)

    def test_position(self):
        self.assertEqual(Position.parse("42"),Position(42,False))
        self.assertEqual(Position.parse("55$"),Position(55,True))
        self.assertEqual(str(Position(55,True)),"55$")
        self.assertRaises(MalformedRecordError,Position.parse,"x$")

    def test_alignment(self):
        self.assertIsNone(Alignment.parse("*"))
        cigar = Alignment.parse("10M2I3D")
        self.assertTrue(cigar.has_cigar)
        self.assertFalse(cigar.has_trace)
        trace = Alignment.parse("4,2,6")
        self.assertEqual(trace.trace,(4,2,6))
        self.assertEqual(str(trace),"4,2,6")
        self.assertRaises(MalformedRecordError,Alignment.parse,"10Q")


@pytest.mark.unit
class TestGFA1(unittest.TestCase):

    def test_round_trip(self):
        for line in GFA1_LINES:
            record = gfa1.parse_gfa1(line + "\n")
            self.assertEqual(record.as_gfa(),line)
            self.assertEqual(str(record),line)

    def test_dispatch_types(self):
        expected = [gfa1.Header,gfa1.Segment,gfa1.Segment,gfa1.Link,gfa1.Containment,gfa1.Path,gfa1.Traversal]
        for line, cls in zip(GFA1_LINES,expected):
            self.assertIsInstance(gfa1.parse_gfa1(line),cls)

    def test_header(self):
        header = gfa1.Header.from_gfa1(GFA1_LINES[0])
        self.assertEqual(header.get_version(),"1.0")
        self.assertEqual(header.get_vn(),"1.0")

    def test_segment(self):
        segment = gfa1.parse_gfa1(GFA1_LINES[1])
        self.assertEqual(segment.id,"11")
        self.assertEqual(segment.sequence,"ACCTT")
        self.assertEqual(segment.get_length(),5)
        self.assertEqual(segment.get_ln(),5)
        self.assertEqual(segment.get_read_count(),12)
        self.assertIsNone(segment.get_kmer_count_opt())
        self.assertIsNone(gfa1.parse_gfa1(GFA1_LINES[2]).sequence)

    def test_link(self):
        link = gfa1.parse_gfa1(GFA1_LINES[3])
        self.assertEqual(link.source,Reference("11",Orientation.FORWARD))
        self.assertEqual(link.target,Reference("12",Orientation.REVERSE))
        self.assertEqual(link.overlap,"4M")
        self.assertEqual(link.get_mapping_quality(),60)
        self.assertEqual(link.get_mq(),60)
        self.assertEqual(link.get_mismatch_count(),0)
        self.assertEqual(link.get_identifier(),"link1")

    def test_containment(self):
        containment = gfa1.parse_gfa1(GFA1_LINES[4])
        self.assertEqual(containment.position,2)
        self.assertEqual(containment.get_rc(),4)

    def test_path(self):
        path = gfa1.parse_gfa1(GFA1_LINES[5])
        self.assertEqual(path.name,"path1")
        self.assertEqual([str(X) for X in path.segments],["11+","12-"])
        self.assertEqual(path.overlaps,("4M",))
        self.assertEqual(path.get_field_byte_array("SH"),b"\xab\xcd")

    def test_traversal(self):
        traversal = gfa1.parse_gfa1(GFA1_LINES[6])
        self.assertEqual(traversal.ordinal,0)
        self.assertIsNone(traversal.overlap)

    def test_tag_type_checked_on_access(self):
        segment = gfa1.parse_gfa1("S\t1\t*\tLN:Z:five")
        self.assertRaises(WrongTypeError,segment.get_length)

    def test_malformed(self):
        tests = ["X\t1\t2",
                 "S\t1",
                 "L\t1\t+\t2\t-",
                 "L\t1\t?\t2\t-\t*",
                 "C\t1\t+\t2\t-\tpos\t*",
                 "T\tp\tfirst\t1\t+\t2\t-\t*",
                 ]
        for line in tests:
            self.assertRaises(MalformedRecordError,gfa1.parse_gfa1,line)
        self.assertRaises(DuplicateKeyError,gfa1.parse_gfa1,"S\t1\t*\tLN:i:1\tLN:i:2")

    def test_wrong_record_type_for_class(self):
        self.assertRaises(MalformedRecordError,gfa1.Segment.from_gfa1,GFA1_LINES[3])

    def test_equality(self):
        self.assertEqual(gfa1.parse_gfa1(GFA1_LINES[3]),gfa1.parse_gfa1(GFA1_LINES[3]))
        self.assertNotEqual(gfa1.parse_gfa1(GFA1_LINES[1]),gfa1.parse_gfa1(GFA1_LINES[2]))
        self.assertNotEqual(gfa1.Header(),gfa2.Header())


@pytest.mark.unit
class TestGFA2(unittest.TestCase):

    def test_round_trip(self):
        for line in GFA2_LINES:
            record = gfa2.parse_gfa2(line + "\n")
            self.assertEqual(record.as_gfa(),line)

    def test_dispatch_types(self):
        expected = [gfa2.Header,gfa2.Segment,gfa2.Segment,gfa2.Fragment,gfa2.Edge,gfa2.Edge,
                    gfa2.Gap,gfa2.Gap,gfa2.Path,gfa2.Set]
        for line, cls in zip(GFA2_LINES,expected):
            self.assertIsInstance(gfa2.parse_gfa2(line),cls)

    def test_header(self):
        header = gfa2.parse_gfa2(GFA2_LINES[0])
        self.assertEqual(header.get_version(),"2.0")
        self.assertEqual(header.get_trace_spacing(),100)

    def test_segment(self):
        segment = gfa2.parse_gfa2(GFA2_LINES[1])
        self.assertEqual(segment.length,100)
        self.assertEqual(segment.sequence,"ACGT")
        self.assertEqual(segment.get_field_integer("RC"),3)

    def test_fragment(self):
        fragment = gfa2.parse_gfa2(GFA2_LINES[3])
        self.assertEqual(fragment.segment_id,"s1")
        self.assertEqual(fragment.external,Reference("read7",Orientation.FORWARD))
        self.assertEqual(fragment.fragment_end,Position(55,True))
        self.assertIsNone(fragment.alignment)
        self.assertEqual(fragment.get_field_string("id"),"frag1")

    def test_edge(self):
        edge = gfa2.parse_gfa2(GFA2_LINES[4])
        self.assertEqual(edge.id,"e1")
        self.assertTrue(edge.source_end.terminal)
        self.assertEqual(edge.alignment.cigar,"90M")
        anonymous = gfa2.parse_gfa2(GFA2_LINES[5])
        self.assertIsNone(anonymous.id)
        self.assertEqual(anonymous.alignment.trace,(4,2,6))

    def test_gap(self):
        gap = gfa2.parse_gfa2(GFA2_LINES[6])
        self.assertEqual(gap.distance,500)
        self.assertEqual(gap.variance,50)
        self.assertIsNone(gfa2.parse_gfa2(GFA2_LINES[7]).variance)

    def test_groups(self):
        path = gfa2.parse_gfa2(GFA2_LINES[8])
        self.assertEqual([str(X) for X in path.references],["s1+","e1+","s2-"])
        group = gfa2.parse_gfa2(GFA2_LINES[9])
        self.assertEqual(group.ids,("s1","s2","e1"))

    def test_group_tags_start_after_members(self):
        path = gfa2.parse_gfa2("O\tp1\ts1+ s2-\tRC:i:5")
        self.assertEqual(path.get_field_integer("RC"),5)
        self.assertEqual(len(path.references),2)

    def test_malformed(self):
        tests = ["S\ts1\tlong\t*",
                 "E\te1\ts1+\ts2-\t10\t100$\t0",
                 "G\tg1\ts1+\ts2+\tfar\t*",
                 "L\t1\t+\t2\t-\t*",
                 ]
        for line in tests:
            self.assertRaises(MalformedRecordError,gfa2.parse_gfa2,line)

    def test_replace(self):
        segment = gfa2.parse_gfa2(GFA2_LINES[2])
        self.assertEqual(segment.replace(sequence="ACGT").as_gfa(),"S\ts2\t200\tACGT")
