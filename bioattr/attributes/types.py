#!/usr/bin/env python
"""Type codes declaring how the text of an attribute is decoded.

GFA and PAF tags carry a one-letter type code on the wire (``NM:i:3``).
VCF attributes carry none; their codes come from ``Type=`` in
``##INFO`` / ``##FORMAT`` header declarations, which spell them as words
(``Integer``, ``Flag``). Both spellings map onto the same closed set of
:class:`TypeCode` members, and anything else is rejected.

    ================   ==========   ==============   ======================
    **Member**         **Letter**   **VCF name**     **Decodes to**
    ----------------   ----------   --------------   ----------------------
    ``CHARACTER``      ``A``        ``Character``    :class:`str`, length 1
    ``INTEGER``        ``i``        ``Integer``      :class:`int`
    ``FLOAT``          ``f``        ``Float``        :class:`float`
    ``STRING``         ``Z``        ``String``       :class:`str`
    ``BYTE_ARRAY``     ``H``                         :class:`bytes`
    ``ARRAY``          ``B``                         |ArrayValue|
    ``FLAG``                        ``Flag``         :class:`bool`
    ================   ==========   ==============   ======================
"""
from enum import Enum
from bioattr.util.services.exceptions import MalformedTokenError


class TypeCode(Enum):
    """Closed set of attribute type codes"""

    CHARACTER  = "A"
    INTEGER    = "i"
    FLOAT      = "f"
    STRING     = "Z"
    BYTE_ARRAY = "H"
    ARRAY      = "B"
    FLAG       = "Flag"

    @property
    def letter(self):
        """Code used in GFA/PAF tags, or `None` for codes only VCF uses"""
        return None if self is TypeCode.FLAG else self.value

    @property
    def vcf_name(self):
        """Name used in VCF ``Type=`` declarations, or `None` for codes VCF lacks"""
        return _VCF_NAMES.get(self)

    @classmethod
    def parse(cls,code):
        """Return the |TypeCode| spelled by `code`

        Parameters
        ----------
        code : str or |TypeCode|
            A tag letter (e.g. ``'i'``) or a VCF type name (e.g. ``'Integer'``)

        Returns
        -------
        |TypeCode|

        Raises
        ------
        MalformedTokenError
            If `code` names no type
        """
        if isinstance(code,TypeCode):
            return code
        try:
            return _BY_SPELLING[code]
        except (KeyError,TypeError):
            raise MalformedTokenError("unknown type code '%s'" % code)

    @classmethod
    def parse_tag(cls,letter):
        """Return the |TypeCode| for a GFA/PAF tag letter, rejecting VCF-only names

        Raises
        ------
        MalformedTokenError
            If `letter` is not one of ``A i f Z H B``
        """
        code = cls.parse(letter)
        if code.letter != letter:
            raise MalformedTokenError("unknown tag type code '%s'" % letter)
        return code

    def __str__(self):
        return self.value


_VCF_NAMES = {
    TypeCode.CHARACTER : "Character",
    TypeCode.INTEGER   : "Integer",
    TypeCode.FLOAT     : "Float",
    TypeCode.STRING    : "String",
    TypeCode.FLAG      : "Flag",
}

_BY_SPELLING = { X.value : X for X in TypeCode }
_BY_SPELLING.update({ V : K for K,V in _VCF_NAMES.items() })
