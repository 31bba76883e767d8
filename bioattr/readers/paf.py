#!/usr/bin/env python
"""Read and write `PAF`_ files, as made by minimap2 and other aligners

|PAF_Reader|
    Read a `PAF`_ file line-by-line, converting each line into a |PafRecord|

|PAF_Writer|
    Write |PafRecord| objects as lines of a `PAF`_ file


Examples
--------
Keep primary alignments with few mismatches::

    >>> with open("alignments.paf") as fh:
    >>>     for record in PAF_Reader(fh):
    >>>         if record.get_alignment_type_opt() == "P" and record.get_nm() < 5:
    >>>             pass # do something
"""
from bioattr.readers.common import RecordReader, RecordWriter
from bioattr.records.paf import PafRecord


class PAF_Reader(RecordReader):
    """
    PAF_Reader(*streams, strict=False, tabix=False, printer=None)

    Read `PAF`_ files into |PafRecord| objects


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
        `streams` point to `tabix`_-compressed files or are open
        :class:`~pysam.tabix_file_iterator` (Default: `False`)


    Attributes
    ----------
    counter : int
        Cumulative line number counter over all streams

    rejected : list
        A list of lines from `PAF`_ file that did not parse properly

    metadata : dict
        Various attributes gleaned from the stream, if any
    """

    def _parse(self,line):
        """Parse a `PAF`_ line into a |PafRecord|"""
        return PafRecord.from_paf(line)


class PAF_Writer(RecordWriter):
    """
    PAF_Writer(stream)

    Write |PafRecord| objects to `stream`, one per line

    Examples
    --------
        >>> writer = PAF_Writer(open("out.paf","w"))
        >>> for record in records:
        >>>     writer.write(record)
        >>> writer.close()
    """

    def format(self,record):
        return record.as_paf()
