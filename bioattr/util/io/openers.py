#!/usr/bin/env python
"""Helpers that turn filenames into open streams for readers and writers.

:py:func:`opener`
    Open a plain, gzipped or bzipped text file, chosen by file extension

:py:func:`multiopen`
    Accept a filename, an open stream, or a list of either, and yield open
    streams

:py:class:`NullWriter`
    Writer that discards everything. Default `printer` of the readers
"""
import os
from collections.abc import Iterable
from bioattr.util.io.filters import AbstractWriter

class NullWriter(AbstractWriter):
    """Writer bound to :obj:`os.devnull`"""

    def __init__(self):
        self.stream = open(os.devnull,"w")

    def filter(self,stream):
        return stream

    def __repr__(self):
        # shown as the default value in reader docs
        return "NullWriter()"

    def __str__(self):
        return self.__repr__()


def multiopen(inp,fn=None,args=None,kwargs=None):
    """Yield open streams from `inp`

    A string or a single stream is treated as a list of one. Strings are
    passed through `fn`; anything else is yielded as given.

    Parameters
    ----------
    inp : str, file-like, or list of either
        Filename(s) or stream(s)

    fn : callable, optional
        Opens a filename. If `None`, filenames are yielded unchanged

    args : tuple, optional
        Extra positional arguments for `fn`

    kwargs : dict, optional
        Extra keyword arguments for `fn`

    Yields
    ------
    object
        Open stream, or the result of `fn`
    """
    if fn is None:
        fn = lambda x, **z: x

    args = () if args is None else args
    kwargs = {} if kwargs is None else kwargs

    if isinstance(inp,str) or not isinstance(inp,Iterable) or hasattr(inp,"readline"):
        items = [inp]
    else:
        items = inp

    for item in items:
        if isinstance(item,str):
            yield fn(item,*args,**kwargs)
        else:
            yield item


def opener(filename,mode="r",**kwargs):
    """Open `filename`, decompressing on the fly when its name ends
    in ``.gz`` (gzip) or ``.bz2`` (bzip2)

    Compressed files open in text mode unless `mode` contains ``'b'``.

    Parameters
    ----------
    filename : str

    mode : str, optional
        As for :func:`open` (Default: `'r'`)

    **kwargs
        Passed to :func:`open`, :func:`gzip.open` or :func:`bz2.open`

    Returns
    -------
    file-like
    """
    if filename.endswith(".gz"):
        import gzip
        call_func = gzip.open
    elif filename.endswith(".bz2"):
        import bz2
        call_func = bz2.open
    else:
        return open(filename,mode,**kwargs)

    if "b" not in mode and "t" not in mode:
        mode += "t"

    return call_func(filename,mode,**kwargs)
