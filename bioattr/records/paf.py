#!/usr/bin/env python
"""Record type for `PAF`_ pairwise alignments, as written by minimap2 and others.

A PAF line has twelve mandatory tab-separated columns:

    ======   ==========================   =========================================
    **#**    **Attribute**                **Meaning**
    ------   --------------------------   -----------------------------------------
    1        `query_name`                 Query sequence name
    2        `query_length`               Query sequence length
    3        `query_start`                Query start, 0-based
    4        `query_end`                  Query end, half-open
    5        `strand`                     ``+`` if query and target on same strand
    6        `target_name`                Target sequence name
    7        `target_length`              Target sequence length
    8        `target_start`               Target start on original strand, 0-based
    9        `target_end`                 Target end, half-open
    10       `matches`                    Number of residue matches
    11       `alignment_block_length`     Alignment block length
    12       `mapping_quality`            Mapping quality, 0-255, 255 if missing
    ======   ==========================   =========================================

followed by optional ``KEY:TYPE:VALUE`` tags. Tags in
:data:`PAF_RESERVED_TAGS` have named accessors, e.g. :meth:`PafRecord.get_nm`
and :meth:`PafRecord.get_mismatches_and_gaps`.
"""
from bioattr.attributes.accessors import TagAccessors, ReservedKey, reserved_accessors
from bioattr.attributes.collection import AttributeSet
from bioattr.records.common import Record, split_line, parse_int
from bioattr.util.services.exceptions import MalformedRecordError

PAF_RESERVED_TAGS = (
    ReservedKey("tp","1","A","alignment_type","Type of alignment: P/primary, S/secondary, I/inversion"),
    ReservedKey("cm","1","i","chaining_minimizers","Number of minimizers on the chain"),
    ReservedKey("s1","1","i","chaining_score","Chaining score"),
    ReservedKey("s2","1","i","secondary_chaining_score","Best secondary chaining score"),
    ReservedKey("NM","1","i","mismatches_and_gaps","Total number of mismatches and gaps in the alignment"),
    ReservedKey("MD","1","Z","mismatch_positions","String to regenerate the reference sequence"),
    ReservedKey("AS","1","i","alignment_score","DP alignment score"),
    ReservedKey("ms","1","i","max_segment_score","DP score of the max scoring segment"),
    ReservedKey("nn","1","i","ambiguous_bases","Number of ambiguous bases in the alignment"),
    ReservedKey("ts","1","A","transcript_strand","Transcript strand"),
    ReservedKey("cg","1","Z","cigar","CIGAR string"),
    ReservedKey("cs","1","Z","difference_string","Difference string"),
    ReservedKey("dv","1","f","divergence","Approximate per-base sequence divergence"),
    ReservedKey("de","1","f","gap_compressed_divergence","Gap-compressed per-base sequence divergence"),
    ReservedKey("rl","1","i","repeat_length","Length of query regions harboring repetitive seeds"),
)
"""Reserved PAF tags"""

_INT_COLUMNS = (1,2,3,6,7,8,9,10,11)


@reserved_accessors(PAF_RESERVED_TAGS)
class PafRecord(Record,TagAccessors):
    """One alignment of a `PAF`_ file

    Attributes
    ----------
    query_name : str

    query_length, query_start, query_end : int

    strand : str
        ``+`` or ``-``

    target_name : str

    target_length, target_start, target_end : int

    matches : int

    alignment_block_length : int

    mapping_quality : int

    tags : |AttributeSet|
    """
    _fields = ("query_name","query_length","query_start","query_end","strand",
               "target_name","target_length","target_start","target_end",
               "matches","alignment_block_length","mapping_quality","tags")

    def __init__(self,query_name,query_length,query_start,query_end,strand,
                 target_name,target_length,target_start,target_end,
                 matches,alignment_block_length,mapping_quality,tags=None):
        self._init_fields(query_name=query_name,query_length=query_length,
                          query_start=query_start,query_end=query_end,strand=strand,
                          target_name=target_name,target_length=target_length,
                          target_start=target_start,target_end=target_end,
                          matches=matches,alignment_block_length=alignment_block_length,
                          mapping_quality=mapping_quality,
                          tags=AttributeSet() if tags is None else tags)

    @staticmethod
    def from_paf(line):
        """Create a |PafRecord| from a line of a `PAF`_ file

        Parameters
        ----------
        line : str
            Line of PAF text. Empty tag columns are skipped

        Returns
        -------
        |PafRecord|

        Raises
        ------
        MalformedRecordError
            If `line` has fewer than twelve columns or a malformed numeric column

        AttributeValueError
            If a tag is malformed or duplicated
        """
        items = split_line(line,12)
        values = list(items[:12])
        for i in _INT_COLUMNS:
            values[i] = parse_int(items[i],str(i+1))
        if items[4] not in ("+","-"):
            raise MalformedRecordError("strand must be + or -, found '%s'" % items[4])
        values.append(AttributeSet.from_tags(items[12:]))
        return PafRecord(*values)

    def as_paf(self):
        """Format this record as a `PAF`_ line, without line terminator

        Returns
        -------
        str
        """
        ltmp = [str(getattr(self,X)) for X in self._fields[:-1]]
        if len(self.tags) > 0:
            ltmp.append(self.tags.serialize())
        return "\t".join(ltmp)

    def __str__(self):
        return self.as_paf()
