#!/usr/bin/env python
"""Codec for ``B`` array attributes, written on the wire as
``KEY:B:<subtype>,v1,v2,...``

The subtype letter names a numeric width:

    ===========   ====================   ==========================
    **Subtype**   **Width**              **numpy dtype**
    -----------   --------------------   --------------------------
    ``c``         signed 8-bit           :obj:`numpy.int8`
    ``C``         unsigned 8-bit         :obj:`numpy.uint8`
    ``s``         signed 16-bit          :obj:`numpy.int16`
    ``S``         unsigned 16-bit        :obj:`numpy.uint16`
    ``i``         signed 32-bit          :obj:`numpy.int32`
    ``I``         unsigned 32-bit        :obj:`numpy.uint32`
    ``f``         single-precision       :obj:`numpy.float32`
    ===========   ====================   ==========================

Width is metadata. Integer elements decode to :class:`int` and float
elements to :class:`float` with no range check against the subtype, and
encoding writes whatever values it is given. The subtype letter is kept on
the decoded |ArrayValue| so the array re-encodes under the same subtype.
"""
from collections import OrderedDict, namedtuple
import numpy

from bioattr.attributes.codec import decode_integer, decode_float, encode_float
from bioattr.util.services.exceptions import MalformedTokenError, WrongTypeError

SUBTYPES = OrderedDict([("c",numpy.int8),
                        ("C",numpy.uint8),
                        ("s",numpy.int16),
                        ("S",numpy.uint16),
                        ("i",numpy.int32),
                        ("I",numpy.uint32),
                        ("f",numpy.float32),
                        ])
"""Array subtype letters, mapped to the numpy dtype of matching width"""

INTEGER_SUBTYPES = "cCsSiI"
FLOAT_SUBTYPES   = "f"


class ArrayValue(namedtuple("ArrayValue",["subtype","values"])):
    """Decoded ``B`` array: a subtype letter and a tuple of numbers

    Attributes
    ----------
    subtype : str
        One of ``c C s S i I f``

    values : tuple
        :class:`int` elements for integer subtypes, :class:`float` for ``f``
    """
    __slots__ = ()

    @property
    def is_integer(self):
        return self.subtype in INTEGER_SUBTYPES

    @property
    def is_float(self):
        return self.subtype in FLOAT_SUBTYPES

    def as_numpy(self):
        """Return the elements as a :class:`numpy.ndarray` of the subtype's width.
        Values outside that width are cast by numpy.
        """
        return numpy.array(self.values,dtype=SUBTYPES[self.subtype])

    def __str__(self):
        return encode_array(self.subtype,self.values)


def check_subtype(subtype):
    """Raise |MalformedTokenError| unless `subtype` is a known array subtype"""
    if subtype not in SUBTYPES:
        raise MalformedTokenError("unknown Type=B subtype '%s', expected one of %s" % (subtype,"".join(SUBTYPES)))
    return subtype

def decode_array(text):
    """Decode the value of a ``B`` attribute

    Parameters
    ----------
    text : str
        ``<subtype>,v1,v2,...``, e.g. ``'i,1,2'``

    Returns
    -------
    |ArrayValue|

    Raises
    ------
    MalformedTokenError
        If the subtype is missing or unknown

    NotNumericError
        If an element is not a number
    """
    items = text.split(",")
    subtype = check_subtype(items[0])
    elements = items[1:]
    fn = decode_float if subtype in FLOAT_SUBTYPES else decode_integer
    return ArrayValue(subtype,tuple(fn(X) for X in elements))

def encode_array(subtype,values):
    """Encode a ``B`` array value

    Parameters
    ----------
    subtype : str
        One of ``c C s S i I f``

    values : iterable
        Numbers to write

    Returns
    -------
    str
        ``<subtype>,v1,v2,...``

    Raises
    ------
    MalformedTokenError
        If `subtype` is unknown

    WrongTypeError
        If an integer subtype is given a non-integral value
    """
    check_subtype(subtype)
    ltmp = [subtype]
    for value in values:
        if subtype in FLOAT_SUBTYPES:
            ltmp.append(encode_float(value))
        elif isinstance(value,(int,numpy.integer)) and not isinstance(value,bool):
            ltmp.append(str(int(value)))
        else:
            raise WrongTypeError("Type=B subtype %s takes integers, found %s" % (subtype,value))
    return ",".join(ltmp)
