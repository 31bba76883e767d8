#!/usr/bin/env python
"""Typed getters for the attributes of records.

Records mix in one of three accessor classes:

    |TagAccessors|
        For GFA and PAF records, over the record's ``tags``:
        ``contains_field``, ``get_field``, ``get_field_integer``,
        ``get_field_floats`` and so on

    |InfoAccessors|
        For VCF records, over the record's ``info``:
        ``contains_info``, ``get_info_flag``, ``get_info_integers`` and so on

    |GenotypeAccessors|
        For VCF genotypes, over the genotype's ``fields``:
        ``contains_field``, ``get_field_integer``, ``get_field_floats`` and so on

Every getter has an ``_opt`` twin returning `None` when the key is absent.
Each failure has its own exception, and ``_opt`` getters convert only the
first of them:

    ============================   ===========================================
    **Failure**                    **Exception**
    ----------------------------   -------------------------------------------
    key absent                     |MissingAttributeError|
    declared type differs          |WrongTypeError|
    count differs from `number`    |WrongCardinalityError|
    text does not decode           |NotNumericError|, |WrongLengthError|,
                                   |WrongTypeError|, |MalformedTokenError|
    ============================   ===========================================

List getters on VCF attributes take a `number`: an integer, or ``'A'``,
``'R'``, ``'G'`` (genotypes only) or ``'.'``. ``A``, ``R`` and ``G`` are
resolved against the owning record on every call. A value list that is just
``.`` is missing as a whole, and list getters return `None` for it without
checking its count.

Reserved keys
-------------
:func:`reserved_accessors` adds, for each |ReservedKey| in a table,
``contains_<key>``, ``get_<key>`` and ``get_<key>_opt`` methods to a record
class, plus the same three under the key's friendly name, e.g.
``get_mq`` and ``get_mapping_quality``.
"""
import functools
import itertools
from collections import OrderedDict, namedtuple

from bioattr.attributes.types import TypeCode
from bioattr.attributes.cardinality import Number
from bioattr.attributes import codec
from bioattr.util.services.exceptions import MissingAttributeError, WrongTypeError,\
                                             WrongCardinalityError


#===============================================================================
# INDEX: helper functions
#===============================================================================

def _type_name(type_code):
    if type_code is None:
        return None
    return type_code.vcf_name or type_code.letter

def _optional(getter):
    """Wrap `getter` so that it returns `None` when its key is absent"""
    @functools.wraps(getter)
    def new_func(self,key,*args,**kwargs):
        if key not in self._attributes():
            return None
        return getter(self,key,*args,**kwargs)

    new_func.__doc__ = "Same as the getter without ``_opt``, but return `None` if `key` is absent"
    return new_func

def _require(attributes,key,type_code=None):
    try:
        return attributes[key]
    except KeyError:
        raise MissingAttributeError(key,_type_name(type_code))

def _check_type(attribute,type_code):
    """Raise |WrongTypeError| if `attribute` is declared with a type other than `type_code`.
    Undeclared VCF attributes pass.
    """
    if attribute.type_code is not None and attribute.type_code is not type_code:
        raise WrongTypeError("Type=%s value requested for key %s, which is Type=%s" % (_type_name(type_code),
                                                                                       attribute.key,
                                                                                       _type_name(attribute.type_code)))



#===============================================================================
# INDEX: GFA and PAF tags
#===============================================================================

class TagAccessors(object):
    """Typed getters over the ``tags`` |AttributeSet| of GFA and PAF records"""

    def _attributes(self):
        return self.tags

    def _scalar(self,key,type_code):
        attribute = _require(self.tags,key,type_code)
        _check_type(attribute,type_code)
        return codec.decode(type_code,attribute.raw)

    def _array(self,key,length,integer):
        attribute = _require(self.tags,key,TypeCode.ARRAY)
        _check_type(attribute,TypeCode.ARRAY)
        array = codec.decode(TypeCode.ARRAY,attribute.raw)
        if array.is_integer != integer:
            raise WrongTypeError("Type=B %s values requested for key %s, which has subtype %s" % ("integer" if integer else "float",
                                                                                                 key,array.subtype))
        if length is not None and len(array.values) != length:
            raise WrongCardinalityError(key,length,len(array.values),"B")
        return list(array.values)

    def contains_field(self,key):
        """Return `True` if this record has a tag for `key`"""
        return key in self.tags

    def get_field(self,key):
        """Return the |Attribute| for `key`

        Raises
        ------
        MissingAttributeError
            If `key` is absent
        """
        return _require(self.tags,key)

    def get_field_character(self,key):
        """Return the ``A`` tag value for `key` as a one-character :class:`str`"""
        return self._scalar(key,TypeCode.CHARACTER)

    def get_field_integer(self,key):
        """Return the ``i`` tag value for `key` as an :class:`int`"""
        return self._scalar(key,TypeCode.INTEGER)

    def get_field_float(self,key):
        """Return the ``f`` tag value for `key` as a :class:`float`"""
        return self._scalar(key,TypeCode.FLOAT)

    def get_field_string(self,key):
        """Return the ``Z`` tag value for `key`"""
        return self._scalar(key,TypeCode.STRING)

    def get_field_byte_array(self,key):
        """Return the ``H`` tag value for `key` decoded to :class:`bytes`"""
        return self._scalar(key,TypeCode.BYTE_ARRAY)

    def get_field_bytes(self,key):
        """Return the ``H`` tag value for `key` as a list of byte values"""
        return list(self._scalar(key,TypeCode.BYTE_ARRAY))

    def get_field_array(self,key):
        """Return the ``B`` tag value for `key` as an |ArrayValue|"""
        return self._scalar(key,TypeCode.ARRAY)

    def get_field_integers(self,key,length=None):
        """Return the ``B`` tag value for `key`, with subtype one of ``cCsSiI``,
        as a list of :class:`int`

        Parameters
        ----------
        key : str
            Tag key

        length : int or None, optional
            If given, the number of values required

        Returns
        -------
        list

        Raises
        ------
        MissingAttributeError
            If `key` is absent

        WrongTypeError
            If the tag is not ``B``, or its subtype is ``f``

        WrongCardinalityError
            If `length` is given and differs from the number of values
        """
        return self._array(key,length,True)

    def get_field_floats(self,key,length=None):
        """Return the ``B`` tag value for `key`, with subtype ``f``, as a list
        of :class:`float`. Parameters and exceptions are as for
        :meth:`get_field_integers`
        """
        return self._array(key,length,False)

    get_field_opt           = _optional(get_field)
    get_field_character_opt = _optional(get_field_character)
    get_field_integer_opt   = _optional(get_field_integer)
    get_field_float_opt     = _optional(get_field_float)
    get_field_string_opt    = _optional(get_field_string)
    get_field_byte_array_opt = _optional(get_field_byte_array)
    get_field_bytes_opt     = _optional(get_field_bytes)
    get_field_array_opt     = _optional(get_field_array)
    get_field_integers_opt  = _optional(get_field_integers)
    get_field_floats_opt    = _optional(get_field_floats)



#===============================================================================
# INDEX: VCF attributes
#===============================================================================

class _VcfAccessors(object):
    """Getters shared by VCF INFO and genotype fields. Subclasses name the
    |AttributeSet| they read and expose these under public names
    """

    _container = None

    def _attributes(self):
        return getattr(self,self._container)

    def _expected_count(self,number):
        """Resolve `number` to a count against the owning record. Override in records"""
        return Number(number).resolve()

    def _contains(self,key):
        return key in self._attributes()

    def _get(self,key):
        return _require(self._attributes(),key)

    def _get_flag(self,key):
        attribute = _require(self._attributes(),key,TypeCode.FLAG)
        _check_type(attribute,TypeCode.FLAG)
        if len(attribute.raw) == 0:
            return True
        if len(attribute.raw) != 1:
            raise WrongCardinalityError(key,1,len(attribute.raw),"Flag")
        return codec.decode_flag(attribute.raw[0])

    def _get_scalar(self,key,type_code):
        attribute = _require(self._attributes(),key,type_code)
        _check_type(attribute,type_code)
        if len(attribute.raw) != 1:
            raise WrongCardinalityError(key,1,len(attribute.raw),_type_name(type_code))
        return codec.decode_vcf(type_code,attribute.raw[0])

    def _get_list(self,key,type_code,number):
        attribute = _require(self._attributes(),key,type_code)
        _check_type(attribute,type_code)
        if attribute.is_missing:
            return None
        if number is not None:
            expected = self._expected_count(number)
            if expected is not None and len(attribute.raw) != expected:
                raise WrongCardinalityError(key,expected,len(attribute.raw),_type_name(type_code))
        return [codec.decode_vcf(type_code,X) for X in attribute.raw]

    def _get_character(self,key):
        return self._get_scalar(key,TypeCode.CHARACTER)

    def _get_integer(self,key):
        return self._get_scalar(key,TypeCode.INTEGER)

    def _get_float(self,key):
        return self._get_scalar(key,TypeCode.FLOAT)

    def _get_string(self,key):
        return self._get_scalar(key,TypeCode.STRING)

    def _get_characters(self,key,number=None):
        return self._get_list(key,TypeCode.CHARACTER,number)

    def _get_integers(self,key,number=None):
        return self._get_list(key,TypeCode.INTEGER,number)

    def _get_floats(self,key,number=None):
        return self._get_list(key,TypeCode.FLOAT,number)

    def _get_strings(self,key,number=None):
        return self._get_list(key,TypeCode.STRING,number)


class InfoAccessors(_VcfAccessors):
    """Typed getters over the ``info`` |AttributeSet| of VCF records.

    Scalar getters (``get_info_integer``) require exactly one value. List
    getters (``get_info_integers``) take an optional `number`: an integer,
    ``'A'``, ``'R'`` or ``'.'``. ``.`` elements decode to `None`.
    """

    _container = "info"

    contains_info         = _VcfAccessors._contains
    get_info              = _VcfAccessors._get
    get_info_flag         = _VcfAccessors._get_flag
    get_info_character    = _VcfAccessors._get_character
    get_info_integer      = _VcfAccessors._get_integer
    get_info_float        = _VcfAccessors._get_float
    get_info_string       = _VcfAccessors._get_string
    get_info_characters   = _VcfAccessors._get_characters
    get_info_integers     = _VcfAccessors._get_integers
    get_info_floats       = _VcfAccessors._get_floats
    get_info_strings      = _VcfAccessors._get_strings

    get_info_opt            = _optional(_VcfAccessors._get)
    get_info_flag_opt       = _optional(_VcfAccessors._get_flag)
    get_info_character_opt  = _optional(_VcfAccessors._get_character)
    get_info_integer_opt    = _optional(_VcfAccessors._get_integer)
    get_info_float_opt      = _optional(_VcfAccessors._get_float)
    get_info_string_opt     = _optional(_VcfAccessors._get_string)
    get_info_characters_opt = _optional(_VcfAccessors._get_characters)
    get_info_integers_opt   = _optional(_VcfAccessors._get_integers)
    get_info_floats_opt     = _optional(_VcfAccessors._get_floats)
    get_info_strings_opt    = _optional(_VcfAccessors._get_strings)


class GenotypeAccessors(_VcfAccessors):
    """Typed getters over the ``fields`` |AttributeSet| of VCF genotypes.
    As |InfoAccessors|, except that `number` may also be ``'G'``
    """

    _container = "fields"

    contains_field         = _VcfAccessors._contains
    get_field              = _VcfAccessors._get
    get_field_flag         = _VcfAccessors._get_flag
    get_field_character    = _VcfAccessors._get_character
    get_field_integer      = _VcfAccessors._get_integer
    get_field_float        = _VcfAccessors._get_float
    get_field_string       = _VcfAccessors._get_string
    get_field_characters   = _VcfAccessors._get_characters
    get_field_integers     = _VcfAccessors._get_integers
    get_field_floats       = _VcfAccessors._get_floats
    get_field_strings      = _VcfAccessors._get_strings

    get_field_opt            = _optional(_VcfAccessors._get)
    get_field_flag_opt       = _optional(_VcfAccessors._get_flag)
    get_field_character_opt  = _optional(_VcfAccessors._get_character)
    get_field_integer_opt    = _optional(_VcfAccessors._get_integer)
    get_field_float_opt      = _optional(_VcfAccessors._get_float)
    get_field_string_opt     = _optional(_VcfAccessors._get_string)
    get_field_characters_opt = _optional(_VcfAccessors._get_characters)
    get_field_integers_opt   = _optional(_VcfAccessors._get_integers)
    get_field_floats_opt     = _optional(_VcfAccessors._get_floats)
    get_field_strings_opt    = _optional(_VcfAccessors._get_strings)



#===============================================================================
# INDEX: reserved keys
#===============================================================================

class ReservedKey(namedtuple("ReservedKey",["key","number","type_code","name","description"])):
    """A well-known attribute key with a fixed ``Number=`` and ``Type=``

    Attributes
    ----------
    key : str
        Attribute key, e.g. ``'MQ'``

    number : |Number|
        Declared cardinality. Tags always have ``1``

    type_code : |TypeCode|
        Declared type

    name : str
        Friendly name used for alias methods, e.g. ``'mapping_quality'``

    description : str
        Text for header declarations and docstrings
    """
    __slots__ = ()

    def __new__(cls,key,number,type_code,name,description=""):
        return super(ReservedKey,cls).__new__(cls,key,Number(number),TypeCode.parse(type_code),name,description)

    @property
    def method_suffix(self):
        return self.key.lower()


_SCALAR_GETTERS = {
    TypeCode.CHARACTER  : "character",
    TypeCode.INTEGER    : "integer",
    TypeCode.FLOAT      : "float",
    TypeCode.STRING     : "string",
    TypeCode.BYTE_ARRAY : "byte_array",
}

_LIST_GETTERS = {
    TypeCode.CHARACTER  : "characters",
    TypeCode.INTEGER    : "integers",
    TypeCode.FLOAT      : "floats",
    TypeCode.STRING     : "strings",
}

def _getter_for(cls,reserved):
    """Return the name of the generic getter on `cls` serving `reserved`,
    and the extra arguments it takes
    """
    prefix = "get_info_" if issubclass(cls,InfoAccessors) else "get_field_"
    if reserved.type_code is TypeCode.FLAG:
        return prefix + "flag", ()
    elif reserved.number == 1 or issubclass(cls,TagAccessors):
        return prefix + _SCALAR_GETTERS[reserved.type_code], ()
    return prefix + _LIST_GETTERS[reserved.type_code], (reserved.number.value,)

def _make_reserved_methods(cls,reserved):
    getter_name, args = _getter_for(cls,reserved)
    key = reserved.key
    summary = "%s (``%s``, Number=%s, Type=%s)" % (reserved.description or reserved.name,
                                                   key,reserved.number,_type_name(reserved.type_code))

    def contains(self):
        return key in self._attributes()

    def get(self):
        return getattr(self,getter_name)(key,*args)

    def get_opt(self):
        return getattr(self,getter_name + "_opt")(key,*args)

    contains.__doc__ = "Return `True` if this record has %s" % summary
    get.__doc__      = "Return %s. Raises |MissingAttributeError| if absent" % summary
    get_opt.__doc__  = "Return %s, or `None` if absent" % summary
    return contains, get, get_opt

def reserved_accessors(*tables):
    """Class decorator adding named methods for reserved keys

    For each |ReservedKey| ``K`` in `tables`, adds to the decorated class
    ``contains_k``, ``get_k`` and ``get_k_opt`` (key lower-cased), and the same
    three under ``K.name``. Existing attributes of the class are not replaced.

    Parameters
    ----------
    tables : one or more iterables of |ReservedKey|

    Returns
    -------
    function
        Class decorator
    """
    def decorator(cls):
        reserved_keys = OrderedDict(getattr(cls,"reserved_keys",{}))
        for reserved in itertools.chain(*tables):
            reserved_keys[reserved.key] = reserved
            contains, get, get_opt = _make_reserved_methods(cls,reserved)
            for suffix in (reserved.method_suffix,reserved.name):
                for fmt, func in (("contains_%s",contains),("get_%s",get),("get_%s_opt",get_opt)):
                    name = fmt % suffix
                    if name not in cls.__dict__:
                        setattr(cls,name,func)
        cls.reserved_keys = reserved_keys
        return cls

    return decorator
