#!/usr/bin/env python
"""Stream filters, analagous to Unix-style pipes, that sit between a file
and the code consuming or producing it.

A reader wraps an input stream and converts each unit of input (usually a
line) into something else, for example a record. A writer wraps an output
stream and converts each object it is given into text before writing it.

    :class:`AbstractReader`
        Base class for readers. Subclass this and override
        :py:meth:`~AbstractReader.filter`. |RecordReader| is built on it.

    :class:`AbstractWriter`
        Base class for writers. Subclass this and override
        :py:meth:`~AbstractWriter.filter`. |RecordWriter| is built on it.

    :class:`ColorWriter`
        Write text, colored via :func:`termcolor.colored` if the stream is
        a terminal

    :class:`NameDateWriter`
        Prefix each message with a program name and timestamp. Suitable as the
        `printer` of a reader

    :func:`colored`
        Colorize text if and only if :obj:`sys.stderr` supports color


Examples
--------
Report reader progress to stderr, with name and date::

    >>> printer = NameDateWriter("bioattr")
    >>> reader = VCF_Reader("calls.vcf",printer=printer)
"""
import sys
import datetime
from abc import abstractmethod
from io import IOBase

import termcolor

# color only when stderr is a terminal
if hasattr(sys.stderr,"isatty") and sys.stderr.isatty():
    colored = termcolor.colored
else:
    colored = lambda x, **kwargs: str(x)



#===============================================================================
# INDEX: readers
#===============================================================================

class AbstractReader(IOBase):
    """Abstract base class for readers that convert units of an input stream,
    one at a time, via :meth:`filter`

    Parameters
    ----------
    stream : iterable
        Input data, usually an open file or an iterator of lines
    """

    def __init__(self,stream):
        self.stream = stream

    def isatty(self):
        return hasattr(self.stream,"isatty") and self.stream.isatty()

    def writable(self):
        return False

    def seekable(self):
        return False

    def readable(self):
        return True

    def fileno(self):
        raise IOError()

    def __next__(self):
        return self.filter(next(self.stream))

    def __iter__(self):
        return self

    def readlines(self):
        """Return all remaining units of data, converted

        Returns
        -------
        list
        """
        return list(self)

    def close(self):
        """Close the underlying stream, if it can be closed"""
        try:
            self.stream.close()
        except AttributeError:
            pass

    @abstractmethod
    def filter(self,data):
        """Convert one unit of input. Override in subclasses

        Parameters
        ----------
        data : object
            Unit of input, usually a line of text

        Returns
        -------
        object
        """
        pass



#===============================================================================
# INDEX: writers
#===============================================================================

class AbstractWriter(IOBase):
    """Abstract base class for writers that convert each object given to
    :meth:`write` via :meth:`filter`, then write the result to `stream`

    Parameters
    ----------
    stream : file-like, open for writing
        Output stream
    """

    def __init__(self,stream):
        self.stream = stream

    def isatty(self):
        return hasattr(self.stream,"isatty") and self.stream.isatty()

    def writable(self):
        return True

    def seekable(self):
        return False

    def readable(self):
        return False

    def fileno(self):
        raise IOError()

    def write(self,data):
        """Convert `data` with :meth:`filter`, and write it to `self.stream`"""
        self.stream.write(self.filter(data))

    def flush(self):
        """Flush `self.stream`"""
        self.stream.flush()

    def close(self):
        """Flush and close `self.stream`"""
        try:
            self.flush()
            self.stream.close()
        except (AttributeError,ValueError):
            pass

    @abstractmethod
    def filter(self,data):
        """Convert one object to the text to write. Override in subclasses

        Parameters
        ----------
        data : object

        Returns
        -------
        str
        """
        pass


class ColorWriter(AbstractWriter):
    """Writer whose :meth:`color` colors text only if `stream` is a terminal

    Parameters
    ----------
    stream : file-like
        Stream to write to (Default: :obj:`sys.stderr`)
    """
    def __init__(self,stream=None):
        stream = sys.stderr if stream is None else stream
        AbstractWriter.__init__(self,stream=stream)
        if hasattr(self.stream,"isatty") and self.stream.isatty():
            self.color = termcolor.colored

    def color(self,text,**kwargs):
        """Return `text`, colored per `kwargs` if `stream` supports ANSI color.
        See :func:`termcolor.colored`
        """
        return text

    def filter(self,data):
        return data


class NameDateWriter(ColorWriter):
    """Prefix each message with a program name, date, and time

    Parameters
    ----------
    name : str
        Name to prefix

    line_delimiter : str, optional
        Appended to each message (Default: `'\\n'`)

    stream : file-like, optional
        Stream to write to (Default: :obj:`sys.stderr`)
    """

    def __init__(self,name,line_delimiter="\n",stream=None):
        ColorWriter.__init__(self,stream=stream)
        self.name = name
        self.delimiter = line_delimiter
        self.fmtstr = "%s %s%s %s%s: {2}%s" % (self.color(name,color="blue",attrs=["bold"]),
                                               self.color("[",color="blue",attrs=["bold"]),
                                               self.color("{0}",color="green"),
                                               self.color("{1}",color="green",attrs=["bold"]),
                                               self.color("]",color="blue",attrs=["bold"]),
                                               self.delimiter
                                              )

    def filter(self,line):
        now = datetime.datetime.now()
        return self.fmtstr.format(now.strftime("%Y-%m-%d"),now.strftime("%H:%M:%S"),line.strip(self.delimiter))
