#!/usr/bin/env python
"""Constants, functions, and classes used by multiple readers in this subpackage


Functions & classes
-------------------
|RecordReader|
    Base class for readers that parse one record from each data line of one or
    more streams, skipping blank lines and comments, and rejecting malformed lines

|RecordWriter|
    Base class for writers that format one record per line
"""
import itertools
from abc import abstractmethod

import pysam

from bioattr.util.io.filters import AbstractReader, AbstractWriter
from bioattr.util.io.openers import NullWriter, multiopen, opener
from bioattr.util.services.exceptions import AttributeValueError, MalformedFileError,\
                                             FileFormatWarning, warn


#===============================================================================
# INDEX: helper functions
#===============================================================================

def _stream_name(stream):
    return getattr(stream,"name","<%s>" % stream.__class__.__name__)

def _tabix_iteradaptor(stream):
    """Open `stream` as an iterator over a `tabix`_ file, returning raw strings from tabix data.

    Parameters
    ----------
    stream : open file-like, :class:`pysam.tabix_file_iterator`

    Returns
    -------
    generator
        Generator of tab-delimited string records in `tabix`_ file
    """
    if not isinstance(stream,(pysam.tabix_generic_iterator,
                              pysam.tabix_file_iterator)
                      ):
        stream = pysam.tabix_file_iterator(stream,pysam.asTuple())

    return (str(X) for X in stream)



#===============================================================================
# INDEX: classes
#===============================================================================

class RecordReader(AbstractReader):
    """
    RecordReader(*streams, strict=False, tabix=False, printer=None, **kwargs)

    Abstract base class for readers that yield one record per data line.

    Readers built by subclassing |RecordReader| are responsible for
    overloading :meth:`~RecordReader._parse`. Blank lines and lines beginning
    with ``#`` are skipped before `_parse` sees them. When `_parse` raises an
    |AttributeValueError|, the line is rejected: it is stored in `rejected`
    and reported with a |FileFormatWarning|. In strict mode, a
    |MalformedFileError| carrying the line number is raised instead.


    Parameters
    ----------
    *streams : str or file-like
        One or more filenames or open filehandles of input data.

    strict : bool, optional
        Raise |MalformedFileError| on the first malformed line, instead of
        rejecting it (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|

    tabix : boolean, optional
        `streams` point to `tabix`_-compressed files or are open
        :class:`~pysam.tabix_file_iterator` (Default: `False`)

    **kwargs
        Other keyword arguments used by specific parsers


    Attributes
    ----------
    stream : iterator
        Lines from all input streams, in order

    metadata : dict
        Various attributes gleaned from the stream, if any

    counter : int
        Cumulative line number counter over all streams

    printer : file-like
        Logger implementing a ``write()`` method.

    rejected : list
        Lines that could not be parsed

    comments : list
        Comment lines skipped so far
    """

    def __init__(self,*streams,**kwargs):
        self.tabix = kwargs.get("tabix",False)
        if self.tabix == True:
            streams = list(multiopen(streams,fn=open,kwargs=dict(mode="rb")))
            self.stream = itertools.chain.from_iterable((_tabix_iteradaptor(X) for X in streams))
        else:
            streams = list(multiopen(streams,fn=opener,kwargs=dict(mode="r")))
            self.stream = itertools.chain.from_iterable(streams)

        self.filename = ", ".join(_stream_name(X) for X in streams)
        self.strict   = kwargs.get("strict",False)
        self.printer  = kwargs.get("printer",NullWriter())
        self.counter  = 0

        self.metadata = {}
        self.rejected = []
        self.comments = []
        self._reported = False

    @abstractmethod
    def _parse(self,line):
        """Parse a record from a data line. This must be implemented in subclass.

        Parameters
        ----------
        line : str
            Line of input, neither blank nor a comment

        Returns
        -------
        object or None
            Record, or `None` to skip the line without rejecting it

        Raises
        ------
        AttributeValueError
            If `line` is malformed
        """

    def _reject(self,line,message):
        """Reject `line`, or raise |MalformedFileError| in strict mode"""
        if self.strict == True:
            raise MalformedFileError(self.filename,message,self.counter)

        self.rejected.append(line)
        warn("Rejecting line %s: %s (%s)" % (self.counter,line.rstrip("\r\n"),message),FileFormatWarning)

    def filter(self,line):
        """Parse `line` into a record

        Returns
        -------
        object or None
            Record, or `None` if `line` is blank, a comment, or rejected
        """
        self.counter += 1
        ltmp = line.strip()
        if ltmp == "":
            return None
        elif ltmp.startswith("#"):
            self.comments.append(line.rstrip("\r\n"))
            return None

        try:
            return self._parse(line)
        except AttributeValueError as e:
            self._reject(line,str(e))
            return None

    def __next__(self):
        while True:
            try:
                line = next(self.stream)
            except StopIteration:
                if self._reported == False and len(self.rejected) > 0:
                    self.printer.write("Rejected %s of %s lines in %s." % (len(self.rejected),self.counter,self.filename))
                self._reported = True
                raise

            record = self.filter(line)
            if record is not None:
                return record


class RecordWriter(AbstractWriter):
    """
    RecordWriter(stream)

    Abstract base class for writers that format each record as one line of text.
    Subclasses override :meth:`format`.

    Parameters
    ----------
    stream : str or file-like
        Filename or stream open for writing. Filenames ending in ``.gz`` or
        ``.bz2`` are compressed accordingly

    Attributes
    ----------
    counter : int
        Number of records written
    """

    line_terminator = "\n"

    def __init__(self,stream):
        if isinstance(stream,str):
            stream = opener(stream,mode="w")
        AbstractWriter.__init__(self,stream)
        self.counter = 0

    @abstractmethod
    def format(self,record):
        """Format `record` as one line of text, without line terminator"""

    def filter(self,record):
        self.counter += 1
        return self.format(record) + self.line_terminator
