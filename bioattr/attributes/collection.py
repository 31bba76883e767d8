#!/usr/bin/env python
"""Ordered, key-unique collections of typed attributes, and their wire dialects.

An |Attribute| is a triple of key, |TypeCode| and raw text. Attributes keep
the text they were parsed from, so serializing a parsed attribute reproduces
its input byte for byte. Text is decoded only when asked for, via
:meth:`Attribute.decode` or the typed getters in
:mod:`bioattr.attributes.accessors`. Parsing checks key syntax and type codes
and nothing else.

Three wire dialects are supported:

    ==============   =====================================   =============
    **Dialect**      **Token**                               **Joined by**
    --------------   -------------------------------------   -------------
    :data:`TAGS`     ``KEY:TYPE:VALUE`` (GFA, PAF)           tab
    :data:`INFO`     ``KEY=v1,v2`` or bare ``KEY`` (Flag)    ``;``
    :data:`FORMAT`   ``v1,v2``, aligned to ``FORMAT`` keys   ``:``
    ==============   =====================================   =============

For :data:`TAGS`, an attribute's raw value is one string. For the VCF
dialects it is a tuple of strings, empty for a bare flag.

Classes
-------
|Attribute|
    One typed key/value(s) entry

|AttributeSet|
    Immutable ordered mapping of keys to |Attribute|

|AttributeSetBuilder|
    Accumulates attributes, rejecting duplicate keys, and builds an |AttributeSet|
"""
import re
from collections import OrderedDict, namedtuple
from collections.abc import Mapping

from bioattr.attributes.types import TypeCode
from bioattr.attributes import codec
from bioattr.attributes.arrays import ArrayValue
from bioattr.util.services.exceptions import MalformedTokenError, DuplicateKeyError

TAGS   = "tags"
INFO   = "info"
FORMAT = "format"
DIALECTS = (TAGS,INFO,FORMAT)

TAG_KEY_PAT = re.compile(r"^[A-Za-z][A-Za-z0-9]$")
VCF_KEY_PAT = re.compile(r"^(?:[A-Za-z_][0-9A-Za-z_.]*|1000G)$")

_DELIMITERS = { TAGS : "\t", INFO : ";", FORMAT : ":" }


def check_key(key,dialect=TAGS):
    """Raise |MalformedTokenError| unless `key` is legal in `dialect`

    Returns
    -------
    str
        `key`
    """
    pat = TAG_KEY_PAT if dialect == TAGS else VCF_KEY_PAT
    if not isinstance(key,str) or pat.match(key) is None:
        raise MalformedTokenError("illegal %s key '%s'" % (dialect,key))
    return key



#===============================================================================
# INDEX: Attribute
#===============================================================================

class Attribute(namedtuple("Attribute",["key","type_code","raw"])):
    """A typed attribute

    Attributes
    ----------
    key : str
        Attribute key

    type_code : |TypeCode| or None
        How `raw` is decoded. `None` only for VCF attributes whose type
        is declared nowhere

    raw : str or tuple
        Raw text: one string for GFA/PAF tags; a tuple of strings for VCF
        attributes (empty for a bare flag)
    """
    __slots__ = ()

    @property
    def is_vcf(self):
        return isinstance(self.raw,tuple)

    @property
    def values(self):
        """Raw text as a tuple of strings"""
        return self.raw if self.is_vcf else (self.raw,)

    @property
    def is_missing(self):
        """`True` if this VCF attribute's only value is the missing marker ``.``"""
        return self.is_vcf and self.raw == (codec.MISSING,)

    def decode(self):
        """Decode the raw text

        Returns
        -------
        object
            For tags, one decoded value. For VCF attributes, `True` for a bare
            flag, otherwise a list with `None` in place of each ``.``

        Raises
        ------
        AttributeValueError
            If the text does not fit `type_code`
        """
        if not self.is_vcf:
            return codec.decode(self.type_code,self.raw)
        if len(self.raw) == 0:
            return codec.decode_flag()
        return [codec.decode_vcf(self.type_code,X) for X in self.raw]

    def as_tag(self):
        """Format as a ``KEY:TYPE:VALUE`` tag"""
        return "%s:%s:%s" % (self.key,self.type_code.letter,self.raw)

    def as_info(self):
        """Format as a ``KEY=v1,v2`` INFO entry, or bare ``KEY`` for a flag"""
        if len(self.raw) == 0:
            return self.key
        return "%s=%s" % (self.key,",".join(self.raw))

    def as_format_value(self):
        """Format as one value of a sample column"""
        if len(self.raw) == 0:
            return codec.MISSING
        return ",".join(self.raw)


def parse_tag(token):
    """Parse a GFA/PAF ``KEY:TYPE:VALUE`` token into an |Attribute|.
    The token is split on its first two colons; the value may contain more.

    Raises
    ------
    MalformedTokenError
        If `token` has fewer than three parts, an illegal key, or an unknown type code
    """
    items = token.split(":",2)
    if len(items) < 3:
        raise MalformedTokenError("could not split tag '%s' into key:type:value" % token)
    key, letter, raw = items
    return Attribute(check_key(key,TAGS),TypeCode.parse_tag(letter),raw)

def parse_info_entry(token,type_for=None):
    """Parse one VCF INFO entry into an |Attribute|

    Parameters
    ----------
    token : str
        ``KEY=v1,v2`` or bare ``KEY``

    type_for : callable or None, optional
        Function mapping a key to its |TypeCode|, or `None` if undeclared

    Returns
    -------
    |Attribute|
        Bare keys are typed ``FLAG``
    """
    if "=" in token:
        key, value = token.split("=",1)
        check_key(key,INFO)
        type_code = None if type_for is None else type_for(key)
        return Attribute(key,type_code,tuple(value.split(",")))
    return Attribute(check_key(token,INFO),TypeCode.FLAG,())



#===============================================================================
# INDEX: AttributeSet
#===============================================================================

class AttributeSet(Mapping):
    """Immutable, ordered mapping of keys to |Attribute| objects, with no
    duplicate keys. Iteration follows insertion order. Two sets holding the
    same attributes compare equal, and hash alike, whatever their order;
    :meth:`serialize` follows the order, so equal sets may differ as text.

    Parameters
    ----------
    attributes : iterable, optional
        |Attribute| objects

    dialect : str, optional
        :data:`TAGS` (default), :data:`INFO` or :data:`FORMAT`

    Raises
    ------
    DuplicateKeyError
        If two attributes share a key
    """

    def __init__(self,attributes=(),dialect=TAGS):
        if dialect not in DIALECTS:
            raise ValueError("unknown attribute dialect '%s'" % dialect)
        self.dialect = dialect
        self._attributes = OrderedDict()
        for attribute in attributes:
            if attribute.key in self._attributes:
                raise DuplicateKeyError(attribute.key)
            self._attributes[attribute.key] = attribute

    @staticmethod
    def from_tags(tokens):
        """Parse GFA/PAF tag tokens into an |AttributeSet|

        Parameters
        ----------
        tokens : iterable
            ``KEY:TYPE:VALUE`` strings. Empty strings are skipped

        Returns
        -------
        |AttributeSet|
        """
        return AttributeSet((parse_tag(X) for X in tokens if X != ""),dialect=TAGS)

    @staticmethod
    def from_info(text,type_for=None):
        """Parse a VCF INFO column into an |AttributeSet|

        Parameters
        ----------
        text : str
            ``;``-separated entries, or ``.`` for none

        type_for : callable or None, optional
            Function mapping a key to its |TypeCode|, or `None` if undeclared

        Returns
        -------
        |AttributeSet|
        """
        if text == codec.MISSING or text == "":
            return AttributeSet(dialect=INFO)
        tokens = [X for X in text.split(";") if X != ""]
        return AttributeSet((parse_info_entry(X,type_for) for X in tokens),dialect=INFO)

    @staticmethod
    def from_format(keys,text,type_for=None):
        """Parse one VCF sample column into an |AttributeSet|

        Parameters
        ----------
        keys : sequence
            Keys from the ``FORMAT`` column

        text : str
            ``:``-separated values aligned to `keys`. Trailing values may be
            dropped; keys without values are absent from the result

        type_for : callable or None, optional
            Function mapping a key to its |TypeCode|, or `None` if undeclared

        Returns
        -------
        |AttributeSet|

        Raises
        ------
        MalformedTokenError
            If there are more values than keys
        """
        values = text.split(":")
        if len(values) > len(keys):
            raise MalformedTokenError("sample column '%s' has %s values for %s FORMAT keys" % (text,len(values),len(keys)))
        attributes = []
        for key, value in zip(keys,values):
            check_key(key,FORMAT)
            type_code = None if type_for is None else type_for(key)
            attributes.append(Attribute(key,type_code,tuple(value.split(","))))
        return AttributeSet(attributes,dialect=FORMAT)

    def __getitem__(self,key):
        return self._attributes[key]

    def __iter__(self):
        return iter(self._attributes)

    def __len__(self):
        return len(self._attributes)

    def __contains__(self,key):
        return key in self._attributes

    def __hash__(self):
        return hash(frozenset(self._attributes.values()))

    def __repr__(self):
        return "<%s dialect=%s %s>" % (self.__class__.__name__,self.dialect,list(self._attributes.values()))

    def serialize(self,keys=None):
        """Format the attributes in this set's dialect

        Parameters
        ----------
        keys : sequence or None, optional
            :data:`FORMAT` only: keys of the ``FORMAT`` column to align to.
            Keys absent here are written as ``.``, except at the end, where
            they are dropped. If `None`, this set's own keys are used

        Returns
        -------
        str
        """
        if self.dialect == TAGS:
            return "\t".join(X.as_tag() for X in self._attributes.values())
        elif self.dialect == INFO:
            if len(self._attributes) == 0:
                return codec.MISSING
            return ";".join(X.as_info() for X in self._attributes.values())

        keys = list(self._attributes) if keys is None else list(keys)
        while len(keys) > 0 and keys[-1] not in self._attributes:
            keys.pop()
        if len(keys) == 0:
            return codec.MISSING
        return ":".join(self._attributes[K].as_format_value() if K in self._attributes else codec.MISSING for K in keys)

    def validate(self):
        """Decode every attribute, raising the first decoding error found.
        Parsing never calls this.

        Returns
        -------
        |AttributeSet|
            self
        """
        for attribute in self._attributes.values():
            attribute.decode()
        return self

    def to_builder(self):
        """Return an |AttributeSetBuilder| holding these attributes, for
        deriving a modified set
        """
        builder = AttributeSetBuilder(dialect=self.dialect)
        for attribute in self._attributes.values():
            builder.put_attribute(attribute)
        return builder



#===============================================================================
# INDEX: AttributeSetBuilder
#===============================================================================

class AttributeSetBuilder(object):
    """Accumulate attributes and build an immutable |AttributeSet|

    Keys may be put only once. :meth:`build` consumes the builder; calling any
    other method afterwards raises :class:`RuntimeError` until :meth:`reset`.
    :meth:`remove` and :meth:`replace` rebuild the pending attributes and cost
    time proportional to their number.

    Parameters
    ----------
    dialect : str, optional
        :data:`TAGS` (default), :data:`INFO` or :data:`FORMAT`

    Examples
    --------
    Build tags for a PAF record::

        >>> tags = AttributeSetBuilder().put("NM","i",3).put("tp","A","P").build()
        >>> tags.serialize()
        'NM:i:3\\ttp:A:P'
    """

    def __init__(self,dialect=TAGS):
        if dialect not in DIALECTS:
            raise ValueError("unknown attribute dialect '%s'" % dialect)
        self.dialect = dialect
        self.reset()

    def _check_open(self):
        if self._consumed:
            raise RuntimeError("builder already built; call reset() before reuse")

    def _encode(self,key,type_code,value):
        check_key(key,self.dialect)
        if self.dialect == TAGS:
            type_code = TypeCode.parse_tag(type_code.value if isinstance(type_code,TypeCode) else type_code)
            if type_code is TypeCode.ARRAY and not isinstance(value,ArrayValue):
                value = ArrayValue(*value)
            return Attribute(key,type_code,codec.encode(value,type_code))

        type_code = None if type_code is None else TypeCode.parse(type_code)
        if type_code is TypeCode.FLAG and isinstance(value,bool):
            return Attribute(key,type_code,()) if value else None

        values = value if isinstance(value,(list,tuple)) else [value]
        if len(values) == 0:
            if type_code is TypeCode.FLAG:
                return Attribute(key,type_code,())
            # a bare key would read back as a flag
            values = [None]
        ltmp = []
        for item in values:
            if item is None:
                ltmp.append(codec.MISSING)
            elif type_code is None:
                ltmp.append(str(item))
            else:
                ltmp.append(codec.encode(item,type_code))
        return Attribute(key,type_code,tuple(ltmp))

    def put(self,key,type_code,value):
        """Encode `value` and add it under `key`

        Parameters
        ----------
        key : str
            Attribute key

        type_code : |TypeCode|, str, or None
            Type of value. `None` is allowed for undeclared VCF attributes,
            whose values are then written with :func:`str`

        value : object
            Value to encode. VCF dialects take a single value or a list,
            with `None` written as ``.``; an empty list is written as a
            single ``.``. A VCF ``FLAG`` takes a bool, and `False` adds nothing

        Returns
        -------
        |AttributeSetBuilder|
            self

        Raises
        ------
        DuplicateKeyError
            If `key` was already put
        """
        self._check_open()
        if key in self._pending:
            raise DuplicateKeyError(key)
        attribute = self._encode(key,type_code,value)
        if attribute is not None:
            self._pending[key] = attribute
        return self

    def put_attribute(self,attribute):
        """Add an already-built |Attribute|

        Raises
        ------
        DuplicateKeyError
            If its key was already put
        """
        self._check_open()
        if attribute.key in self._pending:
            raise DuplicateKeyError(attribute.key)
        self._pending[attribute.key] = attribute
        return self

    def remove(self,key):
        """Remove `key` if present

        Returns
        -------
        |AttributeSetBuilder|
            self
        """
        self._check_open()
        self._pending = OrderedDict((K,V) for K,V in self._pending.items() if K != key)
        return self

    def replace(self,key,type_code,value):
        """Remove `key` if present, then :meth:`put` the new value at the end

        Returns
        -------
        |AttributeSetBuilder|
            self
        """
        return self.remove(key).put(key,type_code,value)

    def build(self):
        """Return the |AttributeSet| and consume this builder

        Returns
        -------
        |AttributeSet|
        """
        self._check_open()
        self._consumed = True
        return AttributeSet(self._pending.values(),dialect=self.dialect)

    def reset(self):
        """Discard pending attributes and make this builder usable again

        Returns
        -------
        |AttributeSetBuilder|
            self
        """
        self._pending = OrderedDict()
        self._consumed = False
        return self

    def __len__(self):
        return len(self._pending)

    def __contains__(self,key):
        return key in self._pending
