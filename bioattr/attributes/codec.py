#!/usr/bin/env python
"""Scalar codec: convert the text of a single attribute value to a typed
Python value, and back.

Decoding is strict: text that does not fit the requested type raises a
subclass of |AttributeValueError| naming what went wrong. Floats follow
IEEE single precision, so decoding goes through :class:`numpy.float32`
and encoding emits the shortest text that reads back to the same
single-precision value.

Functions
---------
:func:`decode`
    Decode text according to a |TypeCode|

:func:`encode`
    Encode a Python value according to a |TypeCode|

:func:`decode_character`, :func:`decode_flag`, :func:`decode_integer`,
:func:`decode_float`, :func:`decode_hex`
    Per-type decoders used by :func:`decode` and by the array codec

:func:`encode_float`, :func:`encode_hex`
    Per-type encoders needing more than :func:`str`
"""
import re
import binascii
import numpy

from bioattr.attributes.types import TypeCode
from bioattr.util.services.exceptions import WrongTypeError, NotNumericError,\
                                             WrongLengthError, MalformedTokenError

MISSING = "."
"""Text marking a missing value in VCF attributes"""

_INTEGER_PAT = re.compile(r"^[-+]?[0-9]+$")
_FLOAT_PAT   = re.compile(r"^[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?$")
_SPECIAL_FLOAT_PAT = re.compile(r"^[-+]?(?:nan|inf|infinity)$",re.I)
_HEX_PAT = re.compile(r"^[0-9A-Fa-f]*$")



#===============================================================================
# INDEX: decoders
#===============================================================================

def decode_character(text):
    """Decode a Character value

    Raises
    ------
    WrongLengthError
        If `text` is not exactly one character long
    """
    if len(text) != 1:
        raise WrongLengthError("Type=Character value '%s' not one character" % text)
    return text

def decode_flag(text=None):
    """Decode a Flag value. Presence of a flag means `True`, so empty
    or absent text decodes to `True`.

    Parameters
    ----------
    text : str or None, optional
        ``'true'`` or ``'false'``, case-insensitive

    Returns
    -------
    bool

    Raises
    ------
    WrongTypeError
        If `text` is neither empty, ``'true'`` nor ``'false'``
    """
    if text is None or text == "":
        return True
    ltext = text.lower()
    if ltext == "true":
        return True
    elif ltext == "false":
        return False
    raise WrongTypeError("Type=Flag value '%s' not true or false" % text)

def decode_integer(text):
    """Decode an Integer value to :class:`int`

    Raises
    ------
    NotNumericError
        If `text` is not a run of digits with optional sign
    """
    if _INTEGER_PAT.match(text) is None:
        raise NotNumericError("Type=Integer value '%s' not a number" % text)
    return int(text)

def decode_float(text):
    """Decode a Float value at single precision, widened to :class:`float`

    Parameters
    ----------
    text : str
        Decimal or exponent notation, or ``NaN``, ``Inf``, ``Infinity``
        with optional sign

    Returns
    -------
    float

    Raises
    ------
    NotNumericError
        If `text` is not a number
    """
    if _FLOAT_PAT.match(text) is None and _SPECIAL_FLOAT_PAT.match(text) is None:
        raise NotNumericError("Type=Float value '%s' not a number" % text)
    with numpy.errstate(over="ignore"):
        return float(numpy.float32(text))

def decode_hex(text):
    """Decode a byte-array (``H``) value

    Parameters
    ----------
    text : str
        Even-length hex string, upper or lower case

    Returns
    -------
    bytes

    Raises
    ------
    MalformedTokenError
        If `text` has odd length or non-hex digits
    """
    if len(text) % 2 != 0:
        raise MalformedTokenError("Type=H value '%s' has odd length %s" % (text,len(text)))
    if _HEX_PAT.match(text) is None:
        raise MalformedTokenError("could not decode hex value '%s'" % text)
    return binascii.unhexlify(text)

_DECODERS = {
    TypeCode.CHARACTER  : decode_character,
    TypeCode.FLAG       : decode_flag,
    TypeCode.INTEGER    : decode_integer,
    TypeCode.FLOAT      : decode_float,
    TypeCode.STRING     : lambda x: x,
    TypeCode.BYTE_ARRAY : decode_hex,
}

def decode(type_code,text):
    """Decode `text` according to `type_code`

    Parameters
    ----------
    type_code : |TypeCode| or str
        Type of value

    text : str
        Raw attribute text

    Returns
    -------
    object
        :class:`str`, :class:`int`, :class:`float`, :class:`bool`,
        :class:`bytes`, or |ArrayValue| for ``B`` arrays

    Raises
    ------
    AttributeValueError
        Subclass describing why `text` is not a valid `type_code` value
    """
    type_code = TypeCode.parse(type_code)
    if type_code is TypeCode.ARRAY:
        from bioattr.attributes.arrays import decode_array
        return decode_array(text)
    return _DECODERS[type_code](text)

def decode_vcf(type_code,text):
    """Decode one element of a VCF attribute, mapping :data:`MISSING` to `None`.
    An undeclared type (`None`) leaves the text undecoded.
    """
    if text == MISSING:
        return None
    if type_code is None:
        return text
    return decode(type_code,text)



#===============================================================================
# INDEX: encoders
#===============================================================================

def encode_float(value):
    """Format `value` as the shortest text that decodes to the same
    single-precision value

    Parameters
    ----------
    value : float

    Returns
    -------
    str
    """
    f32 = numpy.float32(value)
    if numpy.isnan(f32):
        return "NaN"
    if numpy.isinf(f32):
        return "Inf" if f32 > 0 else "-Inf"
    magnitude = abs(f32)
    if magnitude != 0 and (magnitude >= 1e16 or magnitude < 1e-4):
        return numpy.format_float_scientific(f32,unique=True,trim="-")
    return numpy.format_float_positional(f32,unique=True,trim="-")

def encode_hex(value):
    """Format :class:`bytes` as an upper-case hex string"""
    return binascii.hexlify(bytes(value)).decode("ascii").upper()

def encode(value,type_code):
    """Encode `value` as attribute text according to `type_code`

    Parameters
    ----------
    value : object
        Python value matching `type_code`. Arrays take an |ArrayValue|
        or a ``(subtype, values)`` pair

    type_code : |TypeCode| or str
        Type of value

    Returns
    -------
    str

    Raises
    ------
    WrongTypeError
        If `value` cannot be represented as `type_code`
    """
    type_code = TypeCode.parse(type_code)
    if type_code is TypeCode.ARRAY:
        from bioattr.attributes.arrays import encode_array
        subtype, values = value
        return encode_array(subtype,values)
    elif type_code is TypeCode.BYTE_ARRAY:
        if not isinstance(value,(bytes,bytearray)):
            raise WrongTypeError("Type=H value must be bytes, found %s" % type(value).__name__)
        return encode_hex(value)
    elif type_code is TypeCode.FLAG:
        if not isinstance(value,bool):
            raise WrongTypeError("Type=Flag value must be bool, found %s" % type(value).__name__)
        return "true" if value else "false"
    elif type_code is TypeCode.INTEGER:
        if isinstance(value,bool) or not isinstance(value,(int,numpy.integer)):
            raise WrongTypeError("Type=Integer value must be int, found %s" % type(value).__name__)
        return str(int(value))
    elif type_code is TypeCode.FLOAT:
        if isinstance(value,bool) or not isinstance(value,(int,float,numpy.number)):
            raise WrongTypeError("Type=Float value must be a number, found %s" % type(value).__name__)
        return encode_float(value)
    elif type_code is TypeCode.CHARACTER:
        return decode_character(str(value))
    return str(value)
