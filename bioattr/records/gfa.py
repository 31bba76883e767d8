#!/usr/bin/env python
"""Building blocks shared by `GFA1`_ and `GFA2`_ records

Classes
-------
|Orientation|
    Strand of a segment reference, ``+`` or ``-``

|Reference|
    Segment identifier plus orientation

|Position|
    GFA2 position, optionally marked ``$`` as the end of its segment

|Alignment|
    GFA2 alignment, either a CIGAR string or a trace of integers

|GfaRecord|
    Base class for all GFA records, which carry a tab-joined ``tags`` set
"""
import re
from collections import namedtuple
from enum import Enum

from bioattr.attributes.accessors import TagAccessors, ReservedKey
from bioattr.attributes.collection import AttributeSet
from bioattr.records.common import Record, NONE_MARKER, parse_int
from bioattr.util.services.exceptions import MalformedRecordError

_CIGAR_PAT = re.compile(r"^(?:[0-9]+[MDIP])+$")


class Orientation(Enum):
    """Orientation of a segment reference"""
    FORWARD = "+"
    REVERSE = "-"

    @classmethod
    def parse(cls,text):
        try:
            return cls(text)
        except ValueError:
            raise MalformedRecordError("orientation must be + or -, found '%s'" % text)

    def __str__(self):
        return self.value


class Reference(namedtuple("Reference",["id","orientation"])):
    """Oriented reference to a segment, e.g. ``'11+'``

    Attributes
    ----------
    id : str
        Segment identifier

    orientation : |Orientation|
    """
    __slots__ = ()

    @staticmethod
    def parse(text):
        """Parse a reference written as one token, e.g. ``'11+'``"""
        if len(text) < 2:
            raise MalformedRecordError("reference '%s' must have an identifier and an orientation" % text)
        return Reference(text[:-1],Orientation.parse(text[-1]))

    @staticmethod
    def parse_split(id_text,orientation_text):
        """Parse a reference written as two columns, as in GFA1 ``L`` and ``C`` lines"""
        return Reference(id_text,Orientation.parse(orientation_text))

    def as_split(self):
        """Format as two tab-separated columns"""
        return "%s\t%s" % (self.id,self.orientation)

    def __str__(self):
        return "%s%s" % (self.id,self.orientation)


class Position(namedtuple("Position",["position","terminal"])):
    """GFA2 position in a segment or read

    Attributes
    ----------
    position : int

    terminal : bool
        `True` if written with a trailing ``$``, marking the end of the sequence
    """
    __slots__ = ()

    @staticmethod
    def parse(text):
        terminal = text.endswith("$")
        value = text[:-1] if terminal else text
        return Position(parse_int(value,"position"),terminal)

    def __str__(self):
        return "%s$" % self.position if self.terminal else str(self.position)


class Alignment(namedtuple("Alignment",["cigar","trace"])):
    """GFA2 alignment: either a CIGAR string (operations ``M D I P``) or a
    trace of comma-separated integers. Exactly one of `cigar` and `trace`
    is set.
    """
    __slots__ = ()

    @staticmethod
    def parse(text):
        """Parse an alignment column

        Returns
        -------
        |Alignment| or None
            `None` for ``*``
        """
        if text == NONE_MARKER:
            return None
        if _CIGAR_PAT.match(text):
            return Alignment(text,None)
        return Alignment(None,tuple(parse_int(X,"trace") for X in text.split(",")))

    @property
    def has_cigar(self):
        return self.cigar is not None

    @property
    def has_trace(self):
        return self.trace is not None

    def __str__(self):
        if self.has_cigar:
            return self.cigar
        return ",".join(str(X) for X in self.trace)


def format_alignment(alignment):
    return NONE_MARKER if alignment is None else str(alignment)



#===============================================================================
# INDEX: records
#===============================================================================

class GfaRecord(Record,TagAccessors):
    """Base class for GFA records. Subclasses define `record_type`, the
    letter starting their lines, and :meth:`_columns`, the text of their
    mandatory columns after it.
    """

    record_type = None

    @staticmethod
    def _tags(items,start):
        return AttributeSet.from_tags(items[start:])

    def _columns(self):
        return []

    def as_gfa(self):
        """Format this record as a GFA line, without line terminator

        Returns
        -------
        str
        """
        ltmp = [self.record_type] + [str(X) for X in self._columns()]
        if len(self.tags) > 0:
            ltmp.append(self.tags.serialize())
        return "\t".join(ltmp)

    def __str__(self):
        return self.as_gfa()


HEADER_TAGS = (ReservedKey("VN","1","Z","version","Version number"),)
