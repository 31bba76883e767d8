#!/usr/bin/env python
"""Record types for `GFA1`_ assembly graphs.

    ===================   ============   =============================================
    **Class**             **Line**       **Mandatory columns**
    -------------------   ------------   ---------------------------------------------
    |gfa1.Header|         ``H``          none
    |gfa1.Segment|        ``S``          name, sequence or ``*``
    |Link|                ``L``          from, orient, to, orient, overlap or ``*``
    |Containment|         ``C``          container, orient, contained, orient,
                                         position, overlap or ``*``
    |gfa1.Path|           ``P``          name, ``seg+,seg-,...``, overlaps or ``*``
    |Traversal|           ``T``          path name, ordinal, from, orient, to,
                                         orient, overlap or ``*``
    ===================   ============   =============================================

Optional ``KEY:TYPE:VALUE`` tags follow the mandatory columns. Each class has
a ``from_gfa1`` constructor and an ``as_gfa`` method reproducing the line.
Reserved tags listed in :data:`GFA1_RESERVED_TAGS` have named accessors, e.g.
:meth:`Link.get_mq` and its alias :meth:`Link.get_mapping_quality`.
"""
from bioattr.attributes.accessors import ReservedKey, reserved_accessors
from bioattr.attributes.collection import AttributeSet
from bioattr.records.common import split_line, parse_int, optional_column, format_optional
from bioattr.records.gfa import GfaRecord, Reference, HEADER_TAGS
from bioattr.util.services.exceptions import MalformedRecordError

_READ_COUNT     = ReservedKey("RC","1","i","read_count","Read count")
_FRAGMENT_COUNT = ReservedKey("FC","1","i","fragment_count","Fragment count")
_KMER_COUNT     = ReservedKey("KC","1","i","kmer_count","k-mer count")
_MISMATCHES     = ReservedKey("NM","1","i","mismatch_count","Number of mismatches/gaps")
_EDGE_ID        = ReservedKey("ID","1","Z","identifier","Edge identifier")

GFA1_RESERVED_TAGS = {
    "H" : HEADER_TAGS,
    "S" : (ReservedKey("LN","1","i","length","Segment length"),
           _READ_COUNT,
           _FRAGMENT_COUNT,
           _KMER_COUNT,
           ReservedKey("SH","1","H","sha256","SHA-256 checksum of the segment sequence"),
           ReservedKey("UR","1","Z","uri","URI or local file-system path of the segment sequence"),
           ),
    "L" : (ReservedKey("MQ","1","i","mapping_quality","Mapping quality"),
           _MISMATCHES,
           _READ_COUNT,
           _FRAGMENT_COUNT,
           _KMER_COUNT,
           _EDGE_ID,
           ),
    "C" : (_READ_COUNT,
           _MISMATCHES,
           _EDGE_ID,
           ),
    "P" : (),
    "T" : (),
}
"""Reserved tags of GFA1 records, keyed by record type letter"""



#===============================================================================
# INDEX: records
#===============================================================================

@reserved_accessors(GFA1_RESERVED_TAGS["H"])
class Header(GfaRecord):
    """GFA1 header line

    Attributes
    ----------
    tags : |AttributeSet|
    """
    record_type = "H"
    _fields = ("tags",)

    def __init__(self,tags=None):
        self._init_fields(tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa1(line):
        items = split_line(line,1,"H")
        return Header(GfaRecord._tags(items,1))


@reserved_accessors(GFA1_RESERVED_TAGS["S"])
class Segment(GfaRecord):
    """GFA1 segment

    Attributes
    ----------
    id : str
        Segment name

    sequence : str or None
        Sequence, or `None` if written as ``*``

    tags : |AttributeSet|
    """
    record_type = "S"
    _fields = ("id","sequence","tags")

    def __init__(self,id,sequence=None,tags=None):
        self._init_fields(id=id,sequence=sequence,tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa1(line):
        items = split_line(line,3,"S")
        return Segment(items[1],optional_column(items[2]),GfaRecord._tags(items,3))

    def _columns(self):
        return [self.id,format_optional(self.sequence)]


@reserved_accessors(GFA1_RESERVED_TAGS["L"])
class Link(GfaRecord):
    """GFA1 link between the ends of two segments

    Attributes
    ----------
    source : |Reference|

    target : |Reference|

    overlap : str or None
        CIGAR string of the overlap, or `None` if written as ``*``

    tags : |AttributeSet|
    """
    record_type = "L"
    _fields = ("source","target","overlap","tags")

    def __init__(self,source,target,overlap=None,tags=None):
        self._init_fields(source=source,target=target,overlap=overlap,
                          tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa1(line):
        items = split_line(line,6,"L")
        return Link(Reference.parse_split(items[1],items[2]),
                    Reference.parse_split(items[3],items[4]),
                    optional_column(items[5]),
                    GfaRecord._tags(items,6))

    def _columns(self):
        return [self.source.as_split(),self.target.as_split(),format_optional(self.overlap)]


@reserved_accessors(GFA1_RESERVED_TAGS["C"])
class Containment(GfaRecord):
    """GFA1 containment of one segment in another

    Attributes
    ----------
    container : |Reference|

    contained : |Reference|

    position : int
        Leftmost position of `contained` in `container`

    overlap : str or None
        CIGAR string, or `None` if written as ``*``

    tags : |AttributeSet|
    """
    record_type = "C"
    _fields = ("container","contained","position","overlap","tags")

    def __init__(self,container,contained,position,overlap=None,tags=None):
        self._init_fields(container=container,contained=contained,position=position,
                          overlap=overlap,tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa1(line):
        items = split_line(line,7,"C")
        return Containment(Reference.parse_split(items[1],items[2]),
                           Reference.parse_split(items[3],items[4]),
                           parse_int(items[5],"position"),
                           optional_column(items[6]),
                           GfaRecord._tags(items,7))

    def _columns(self):
        return [self.container.as_split(),self.contained.as_split(),self.position,format_optional(self.overlap)]


@reserved_accessors(GFA1_RESERVED_TAGS["P"])
class Path(GfaRecord):
    """GFA1 path through oriented segments

    Attributes
    ----------
    name : str

    segments : tuple
        |Reference| objects, in path order

    overlaps : tuple or None
        CIGAR strings between consecutive segments, or `None` if written as ``*``

    tags : |AttributeSet|
    """
    record_type = "P"
    _fields = ("name","segments","overlaps","tags")

    def __init__(self,name,segments,overlaps=None,tags=None):
        self._init_fields(name=name,segments=tuple(segments),
                          overlaps=None if overlaps is None else tuple(overlaps),
                          tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa1(line):
        items = split_line(line,4,"P")
        segments = [Reference.parse(X) for X in items[2].split(",")]
        overlaps = optional_column(items[3])
        if overlaps is not None:
            overlaps = overlaps.split(",")
        return Path(items[1],segments,overlaps,GfaRecord._tags(items,4))

    def _columns(self):
        overlaps = "*" if self.overlaps is None else ",".join(self.overlaps)
        return [self.name,",".join(str(X) for X in self.segments),overlaps]


@reserved_accessors(GFA1_RESERVED_TAGS["T"])
class Traversal(GfaRecord):
    """GFA1 traversal: one step of a path, from one segment to the next

    Attributes
    ----------
    path_name : str

    ordinal : int
        Index of this step in the path

    source : |Reference|

    target : |Reference|

    overlap : str or None

    tags : |AttributeSet|
    """
    record_type = "T"
    _fields = ("path_name","ordinal","source","target","overlap","tags")

    def __init__(self,path_name,ordinal,source,target,overlap=None,tags=None):
        self._init_fields(path_name=path_name,ordinal=ordinal,source=source,target=target,
                          overlap=overlap,tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_gfa1(line):
        items = split_line(line,8,"T")
        return Traversal(items[1],
                         parse_int(items[2],"ordinal"),
                         Reference.parse_split(items[3],items[4]),
                         Reference.parse_split(items[5],items[6]),
                         optional_column(items[7]),
                         GfaRecord._tags(items,8))

    def _columns(self):
        return [self.path_name,self.ordinal,self.source.as_split(),self.target.as_split(),format_optional(self.overlap)]



#===============================================================================
# INDEX: dispatch
#===============================================================================

GFA1_RECORD_TYPES = { X.record_type : X for X in (Header,Segment,Link,Containment,Path,Traversal) }

def parse_gfa1(line):
    """Parse a GFA1 line into the record type named by its first column

    Parameters
    ----------
    line : str

    Returns
    -------
    |GfaRecord|

    Raises
    ------
    MalformedRecordError
        If the record type is unknown, or the line is malformed

    AttributeValueError
        If a tag is malformed or duplicated
    """
    record_type = line.split("\t",1)[0].strip()
    try:
        cls = GFA1_RECORD_TYPES[record_type]
    except KeyError:
        raise MalformedRecordError("unknown GFA1 record type '%s'" % record_type)
    return cls.from_gfa1(line)
