#!/usr/bin/env python
"""Read and write `GFA1`_ and `GFA2`_ assembly graphs

|GFA1_Reader|, |GFA2_Reader|
    Read GFA files line-by-line, converting each line into the record type
    named by its first column

|GFA1_Writer|, |GFA2_Writer|
    Write GFA records, one per line

Lines of record types a reader does not know are skipped with a
|DataWarning|, issued once per record type. The version reported by the
header's ``VN`` tag is stored in ``reader.metadata["version"]``.
"""
from bioattr.readers.common import RecordReader, RecordWriter
from bioattr.records.gfa1 import GFA1_RECORD_TYPES, parse_gfa1
from bioattr.records.gfa2 import GFA2_RECORD_TYPES, parse_gfa2
from bioattr.util.services.exceptions import DataWarning, warn_onceperfamily


class _GFA_Reader(RecordReader):
    """Base class for GFA readers. Subclasses set `record_types` and `parse_line`"""

    record_types = {}
    format_name  = "GFA"

    @staticmethod
    def parse_line(line):
        raise NotImplementedError()

    def _parse(self,line):
        record_type = line.split("\t",1)[0].strip()
        if record_type not in self.record_types:
            warn_onceperfamily("Skipping %s line(s) of unknown record type '%s', first seen at line %s." % (self.format_name,record_type,self.counter),
                               pattern="Skipping %s line\\(s\\) of unknown record type '%s'" % (self.format_name,record_type),
                               category=DataWarning)
            return None

        record = self.parse_line(line)
        if record_type == "H" and record.contains_version():
            self.metadata["version"] = record.get_field("VN").raw
        return record


class GFA1_Reader(_GFA_Reader):
    """
    GFA1_Reader(*streams, strict=False, tabix=False, printer=None)

    Read `GFA1`_ files into |gfa1.Header|, |gfa1.Segment|, |Link|,
    |Containment|, |gfa1.Path| and |Traversal| records


    Parameters
    ----------
    *streams : str or file-like
        One or more filenames or open filehandles of input data.

    strict : bool, optional
        Raise |MalformedFileError| on the first malformed line, instead of
        rejecting it with a warning (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|

    tabix : bool, optional
        `streams` point to `tabix`_-compressed files (Default: `False`)


    Attributes
    ----------
    counter : int
        Cumulative line number counter over all streams

    rejected : list
        Lines that did not parse properly

    metadata : dict
        ``version`` from the header's ``VN`` tag, if any
    """
    record_types = GFA1_RECORD_TYPES
    format_name  = "GFA1"
    parse_line   = staticmethod(parse_gfa1)


class GFA2_Reader(_GFA_Reader):
    """
    GFA2_Reader(*streams, strict=False, tabix=False, printer=None)

    Read `GFA2`_ files into |gfa2.Header|, |gfa2.Segment|, |Fragment|,
    |Edge|, |Gap|, |gfa2.Path| and |Set| records. Parameters and attributes
    are as for |GFA1_Reader|
    """
    record_types = GFA2_RECORD_TYPES
    format_name  = "GFA2"
    parse_line   = staticmethod(parse_gfa2)


class GFA1_Writer(RecordWriter):
    """
    GFA1_Writer(stream)

    Write `GFA1`_ records to `stream`, one per line
    """

    def format(self,record):
        return record.as_gfa()


class GFA2_Writer(GFA1_Writer):
    """
    GFA2_Writer(stream)

    Write `GFA2`_ records to `stream`, one per line
    """
