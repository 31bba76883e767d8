#!/usr/bin/env python
"""Constants, functions, and classes used by record types in this subpackage

Functions & classes
-------------------
|Record|
    Base class for immutable records. Equality and hashing are structural
    over all fields, including attribute sets

:func:`split_line`
    Split a record line into tab-separated columns, checking its type letter
    and column count

:func:`parse_int`
    Parse an integer column, raising |MalformedRecordError| on failure
"""
from bioattr.util.services.exceptions import MalformedRecordError

NONE_MARKER = "*"
"""Text for an absent optional column in GFA and PAF lines"""


#===============================================================================
# INDEX: helper functions
#===============================================================================

def split_line(line,min_columns,record_type=None):
    """Split a line on tabs, after removing its line terminator

    Parameters
    ----------
    line : str
        Line of text

    min_columns : int
        Number of mandatory columns

    record_type : str or None, optional
        If given, required text of the first column

    Returns
    -------
    list
        Columns of `line`

    Raises
    ------
    MalformedRecordError
        If `line` has too few columns or starts with the wrong record type
    """
    items = line.rstrip("\r\n").split("\t")
    if record_type is not None and items[0] != record_type:
        raise MalformedRecordError("line must start with %s, found '%s'" % (record_type,items[0]))
    if len(items) < min_columns:
        raise MalformedRecordError("line must have at least %s columns, found %s" % (min_columns,len(items)))
    return items

def parse_int(text,name):
    """Parse `text` as the integer column `name`

    Raises
    ------
    MalformedRecordError
        If `text` is not an integer
    """
    try:
        return int(text)
    except ValueError:
        raise MalformedRecordError("column %s must be an integer, found '%s'" % (name,text))

def optional_column(text):
    """Return `None` for :data:`NONE_MARKER`, otherwise `text`"""
    return None if text == NONE_MARKER else text

def format_optional(value):
    """Return :data:`NONE_MARKER` for `None`, otherwise ``str(value)``"""
    return NONE_MARKER if value is None else str(value)



#===============================================================================
# INDEX: classes
#===============================================================================

class Record(object):
    """Base class for immutable records

    Subclasses list their field names in `_fields` and set them once with
    :meth:`_init_fields`. Afterwards, setting or deleting an attribute raises
    :class:`AttributeError`.

    Equality and hashing are structural over all fields. |AttributeSet|
    fields compare as mappings, so two records whose attributes differ only
    in order are equal, though their lines differ.
    """

    _fields = ()

    def _init_fields(self,**values):
        for name in self._fields:
            object.__setattr__(self,name,values[name])

    def __setattr__(self,name,value):
        raise AttributeError("%s objects are immutable" % self.__class__.__name__)

    def __delattr__(self,name):
        raise AttributeError("%s objects are immutable" % self.__class__.__name__)

    def _key(self):
        return tuple(getattr(self,X) for X in self._fields)

    def replace(self,**changes):
        """Return a copy of this record with the fields named in `changes` replaced

        Examples
        --------
        Derive a record with one more tag::

            >>> tags = record.tags.to_builder().put("RC","i",12).build()
            >>> record.replace(tags=tags)
        """
        values = dict(zip(self._fields,self._key()))
        values.update(changes)
        return self.__class__(**values)

    def __eq__(self,other):
        return type(self) is type(other) and self._key() == other._key()

    def __ne__(self,other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.__class__.__name__,) + self._key())

    def __repr__(self):
        fields = " ".join("%s=%r" % (X,getattr(self,X)) for X in self._fields)
        return "<%s %s>" % (self.__class__.__name__,fields)
