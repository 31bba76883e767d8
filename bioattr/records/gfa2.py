#!/usr/bin/env python
"""Record types for `GFA2`_ assembly graphs.

    ===================   ========   ===================================================
    **Class**             **Line**   **Mandatory columns**
    -------------------   --------   ---------------------------------------------------
    |gfa2.Header|         ``H``      none
    |gfa2.Segment|        ``S``      id, length, sequence or ``*``
    |Fragment|            ``F``      segment, external ref, 4 positions, alignment
    |Edge|                ``E``      id or ``*``, 2 refs, 4 positions, alignment
    |Gap|                 ``G``      id or ``*``, 2 refs, distance, variance or ``*``
    |gfa2.Path|           ``O``      id or ``*``, space-separated oriented refs
    |Set|                 ``U``      id or ``*``, space-separated ids
    ===================   ========   ===================================================

Positions may end with ``$`` to mark the end of a sequence (|Position|).
Alignments are CIGAR strings or comma-separated traces (|Alignment|).
Optional tags follow the mandatory columns.
"""
from bioattr.attributes.accessors import ReservedKey, reserved_accessors
from bioattr.attributes.collection import AttributeSet
from bioattr.records.common import split_line, parse_int, optional_column, format_optional
from bioattr.records.gfa import GfaRecord, Reference, Position, Alignment, HEADER_TAGS,\
                                format_alignment
from bioattr.util.services.exceptions import MalformedRecordError

GFA2_RESERVED_TAGS = {
    "H" : HEADER_TAGS + (ReservedKey("TS","1","i","trace_spacing","Trace spacing"),),
    "S" : (),
    "F" : (),
    "E" : (),
    "G" : (),
    "O" : (),
    "U" : (),
}
"""Reserved tags of GFA2 records, keyed by record type letter"""



#===============================================================================
# INDEX: records
#===============================================================================

@reserved_accessors(GFA2_RESERVED_TAGS["H"])
class Header(GfaRecord):
    """GFA2 header line

    Attributes
    ----------
    tags : |AttributeSet|
    """
    record_type = "H"
    _fields = ("tags",)

    def __init__(self,tags=None):
        self._init_fields(tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,1,"H")
        return Header(GfaRecord._tags(items,1))


@reserved_accessors(GFA2_RESERVED_TAGS["S"])
class Segment(GfaRecord):
    """GFA2 segment

    Attributes
    ----------
    id : str

    length : int
        Declared segment length

    sequence : str or None
        Sequence, or `None` if written as ``*``

    tags : |AttributeSet|
    """
    record_type = "S"
    _fields = ("id","length","sequence","tags")

    def __init__(self,id,length,sequence=None,tags=None):
        self._init_fields(id=id,length=length,sequence=sequence,
                          tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,4,"S")
        return Segment(items[1],parse_int(items[2],"length"),optional_column(items[3]),GfaRecord._tags(items,4))

    def _columns(self):
        return [self.id,self.length,format_optional(self.sequence)]


@reserved_accessors(GFA2_RESERVED_TAGS["F"])
class Fragment(GfaRecord):
    """GFA2 fragment: part of an external sequence aligned to a segment

    Attributes
    ----------
    segment_id : str

    external : |Reference|
        Oriented external sequence

    segment_start, segment_end : |Position|
        Aligned interval on the segment

    fragment_start, fragment_end : |Position|
        Aligned interval on the fragment

    alignment : |Alignment| or None

    tags : |AttributeSet|
    """
    record_type = "F"
    _fields = ("segment_id","external","segment_start","segment_end",
               "fragment_start","fragment_end","alignment","tags")

    def __init__(self,segment_id,external,segment_start,segment_end,fragment_start,fragment_end,
                 alignment=None,tags=None):
        self._init_fields(segment_id=segment_id,external=external,
                          segment_start=segment_start,segment_end=segment_end,
                          fragment_start=fragment_start,fragment_end=fragment_end,
                          alignment=alignment,tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,8,"F")
        return Fragment(items[1],
                        Reference.parse(items[2]),
                        Position.parse(items[3]),
                        Position.parse(items[4]),
                        Position.parse(items[5]),
                        Position.parse(items[6]),
                        Alignment.parse(items[7]),
                        GfaRecord._tags(items,8))

    def _columns(self):
        return [self.segment_id,self.external,self.segment_start,self.segment_end,
                self.fragment_start,self.fragment_end,format_alignment(self.alignment)]


@reserved_accessors(GFA2_RESERVED_TAGS["E"])
class Edge(GfaRecord):
    """GFA2 edge between two oriented segments

    Attributes
    ----------
    id : str or None
        Edge id, or `None` if written as ``*``

    source, target : |Reference|

    source_start, source_end, target_start, target_end : |Position|

    alignment : |Alignment| or None

    tags : |AttributeSet|
    """
    record_type = "E"
    _fields = ("id","source","target","source_start","source_end",
               "target_start","target_end","alignment","tags")

    def __init__(self,id,source,target,source_start,source_end,target_start,target_end,
                 alignment=None,tags=None):
        self._init_fields(id=id,source=source,target=target,
                          source_start=source_start,source_end=source_end,
                          target_start=target_start,target_end=target_end,
                          alignment=alignment,tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,9,"E")
        return Edge(optional_column(items[1]),
                    Reference.parse(items[2]),
                    Reference.parse(items[3]),
                    Position.parse(items[4]),
                    Position.parse(items[5]),
                    Position.parse(items[6]),
                    Position.parse(items[7]),
                    Alignment.parse(items[8]),
                    GfaRecord._tags(items,9))

    def _columns(self):
        return [format_optional(self.id),self.source,self.target,
                self.source_start,self.source_end,self.target_start,self.target_end,
                format_alignment(self.alignment)]


@reserved_accessors(GFA2_RESERVED_TAGS["G"])
class Gap(GfaRecord):
    """GFA2 gap of estimated size between two oriented segments

    Attributes
    ----------
    id : str or None

    source, target : |Reference|

    distance : int
        Estimated gap size

    variance : int or None
        Variance of `distance`, or `None` if written as ``*``

    tags : |AttributeSet|
    """
    record_type = "G"
    _fields = ("id","source","target","distance","variance","tags")

    def __init__(self,id,source,target,distance,variance=None,tags=None):
        self._init_fields(id=id,source=source,target=target,distance=distance,
                          variance=variance,tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,6,"G")
        variance = optional_column(items[5])
        return Gap(optional_column(items[1]),
                   Reference.parse(items[2]),
                   Reference.parse(items[3]),
                   parse_int(items[4],"distance"),
                   None if variance is None else parse_int(variance,"variance"),
                   GfaRecord._tags(items,6))

    def _columns(self):
        return [format_optional(self.id),self.source,self.target,self.distance,format_optional(self.variance)]


@reserved_accessors(GFA2_RESERVED_TAGS["O"])
class Path(GfaRecord):
    """GFA2 ordered group (``O`` line) of oriented references

    Attributes
    ----------
    id : str or None

    references : tuple
        |Reference| objects, in order

    tags : |AttributeSet|
    """
    record_type = "O"
    _fields = ("id","references","tags")

    def __init__(self,id,references,tags=None):
        self._init_fields(id=id,references=tuple(references),
                          tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,3,"O")
        references = [Reference.parse(X) for X in items[2].split(" ") if X != ""]
        return Path(optional_column(items[1]),references,GfaRecord._tags(items,3))

    def _columns(self):
        return [format_optional(self.id)," ".join(str(X) for X in self.references)]


@reserved_accessors(GFA2_RESERVED_TAGS["U"])
class Set(GfaRecord):
    """GFA2 unordered group (``U`` line) of identifiers

    Attributes
    ----------
    id : str or None

    ids : tuple
        Identifiers of group members

    tags : |AttributeSet|
    """
    record_type = "U"
    _fields = ("id","ids","tags")

    def __init__(self,id,ids,tags=None):
        self._init_fields(id=id,ids=tuple(ids),tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa2(line):
        items = split_line(line,3,"U")
        return Set(optional_column(items[1]),[X for X in items[2].split(" ") if X != ""],GfaRecord._tags(items,3))

    def _columns(self):
        return [format_optional(self.id)," ".join(self.ids)]



#===============================================================================
# INDEX: dispatch
#===============================================================================

GFA2_RECORD_TYPES = { X.record_type : X for X in (Header,Segment,Fragment,Edge,Gap,Path,Set) }

def parse_gfa2(line):
    """Parse a GFA2 line into the record type named by its first column

    Raises
    ------
    MalformedRecordError
        If the record type is unknown, or the line is malformed
    """
    record_type = line.split("\t",1)[0].strip()
    try:
        cls = GFA2_RECORD_TYPES[record_type]
    except KeyError:
        raise MalformedRecordError("unknown GFA2 record type '%s'" % record_type)
    return cls.from_gfa2(line)
