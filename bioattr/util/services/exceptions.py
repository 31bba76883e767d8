#!/usr/bin/env python
"""Exceptions and warnings raised by bioattr, a `"onceperfamily"` warnings
filter action, and a more legible warning format.

Contents:

.. contents::
   :local:

The `onceperfamily` action
--------------------------
`onceperfamily` shows only the first warning of each family, a family being
all messages matched by one regular expression. Readers use it so that a
problem repeated on many lines, such as an undeclared VCF key, is reported
once, naming the first line on which it appears. Python's own `once` action
would instead repeat the warning for every distinct line number.

Create the filter with :func:`filterwarnings`, a superset of
:func:`warnings.filterwarnings`, and issue warnings through :func:`warn` or
:func:`warn_explicit`, which consult it before handing over to :mod:`warnings`.
:func:`warn_onceperfamily` does both in one call.


Exception types
---------------
|AttributeValueError|
    Base class for every failure of the typed-attribute engine. Subclasses
    distinguish the failure modes callers need to tell apart:

    =============================   ==============================================
    **Exception**                   **Raised when**
    -----------------------------   ----------------------------------------------
    |MissingAttributeError|         a required key is absent
    |WrongCardinalityError|         the number of values does not match `Number=`
    |WrongTypeError|                the declared type or text does not fit the
                                    requested type
    |NotNumericError|               Integer/Float text is not a number
    |WrongLengthError|              Character text is not exactly one character
    |MalformedTokenError|           a token cannot be split into its parts,
                                    has an unknown type code, or bad hex
    |MalformedRecordError|          a record line has too few or invalid columns
    |DuplicateKeyError|             the same key is put twice into one set
    |InvalidGenotypeError|          a genotype has no alleles to count
    |OverflowRiskError|             a genotype count exceeds 32-bit range
    =============================   ==============================================

|MalformedFileError|
    Raised when a file cannot be parsed as expected, and
    execution must halt


Warning types
-------------
|ArgumentWarning|
    Warning for arguments that are nonsensical, but recoverable

|FileFormatWarning|
    Warning for slightly malformed but usable files

|DataWarning|
    Warning raised when:

      - data has unexpected attributes
      - data has nonsensical, but recoverable values for attributes


See also
--------
:mod:`warnings`
    Warnings module
"""
import re
import warnings
import inspect
import linecache
import textwrap
from bioattr.util.io.filters import colored

_wrapper = textwrap.TextWrapper(break_long_words=False,width=77)



#===============================================================================
# INDEX: attribute engine exceptions
#===============================================================================

class AttributeValueError(ValueError):
    """Base class for errors raised while parsing, validating, or decoding
    typed attributes and the records that own them
    """


class MissingAttributeError(AttributeValueError):
    """A required attribute key is absent from a record"""

    def __init__(self,key,type_name=None):
        self.key = key
        self.type_name = type_name
        if type_name is None:
            msg = "value missing for key %s" % key
        else:
            msg = "Type=%s value missing for key %s" % (type_name,key)
        AttributeValueError.__init__(self,msg)


class WrongCardinalityError(AttributeValueError):
    """The number of values stored for a key does not match the number
    required by its `Number=` declaration
    """

    def __init__(self,key,expected,found,type_name=None):
        self.key      = key
        self.expected = expected
        self.found    = found
        type_str = "" if type_name is None else " Type=%s" % type_name
        AttributeValueError.__init__(self,"expected %s%s values for key %s, found %s" % (expected,type_str,key,found))


class WrongTypeError(AttributeValueError):
    """Stored text or declared type code cannot be read as the requested type"""


class NotNumericError(WrongTypeError):
    """Text for an Integer or Float attribute is not a number"""


class WrongLengthError(WrongTypeError):
    """Text for a Character attribute is not exactly one character long"""


class MalformedTokenError(AttributeValueError):
    """A token could not be split into its parts, used an unknown
    type code, or carried an invalid hex string
    """


class MalformedRecordError(MalformedTokenError):
    """A record line has too few columns, or a column that cannot be parsed"""


class DuplicateKeyError(AttributeValueError):
    """A key was put twice into the same attribute collection"""

    def __init__(self,key):
        self.key = key
        AttributeValueError.__init__(self,"duplicate attribute key %s" % key)


class InvalidGenotypeError(AttributeValueError):
    """A genotype has no alleles from which to count a ploidy, or is not
    bound to a record from which allele counts can be taken
    """


class OverflowRiskError(AttributeValueError,OverflowError):
    """A genotype cardinality computation left the signed 32-bit range"""



#===============================================================================
# INDEX: file-level exceptions and warnings
#===============================================================================

class MalformedFileError(Exception):
    """Exception class for when files cannot be parsed as they should be
    """

    def __init__(self,filename,message,line_num=None):
        """Create a |MalformedFileError|

        Parameters
        ----------
        filename : str
            Name of file causing problem

        message : str
            Message explaining how the file is malformed.

        line_num : int or None, optional
            Number of line causing problems
        """
        self.filename = filename
        self.msg      = message
        self.line_num = line_num
        Exception.__init__(self,filename,message,line_num)

    def __str__(self):
        if self.line_num is None:
            return "Error opening file '%s': %s" % (self.filename, self.msg)
        else:
            return "Error opening file '%s' at line %s: %s" % (self.filename, self.line_num, self.msg)


class ArgumentWarning(Warning):
    """Warning for nonsensical but recoverable combinations of arguments"""
    pass


class FileFormatWarning(Warning):
    """Warning for slightly malformed but usable files"""
    pass


class DataWarning(Warning):
    """Warning for unexpected attributes of data.
    Raised when:

      - data has unexpected attributes, such as keys that are not
        declared in a file header
      - data has nonsensical, but recoverable values
    """



#===============================================================================
# INDEX: extensions to Python warnings
#===============================================================================

pl_once_registry = {}
"""Families of `onceperfamily` warnings already issued in this process"""

pl_filters       = []
"""`onceperfamily` filters, as tuples of (action, message regex, category, module regex, line)"""

def filterwarnings(action,message="",category=Warning,module="",lineno=0,append=0):
    """Add a warnings filter. Accepts every action of :func:`warnings.filterwarnings`,
    plus `'onceperfamily'`, which shows only the first warning whose message
    matches the regex `message`. Other actions are passed to :mod:`warnings`.

    Parameters
    ----------
    action : str
        "error", "ignore", "always", "default", "module", "once", or "onceperfamily"

    message : str, optional
        Regex matched, case-insensitively, against the start of warning
        messages (Default: `""`, match any message)

    category : Warning or subclass, optional
        (Default: :class:`Warning`)

    module : str, optional
        Regex matched against the issuing module (Default: `""`, any module)

    lineno : int, optional
        Line number the warning must come from, or 0 for any line (Default: 0)

    append : int, optional
        If 1, add the filter to the end of the list, instead of the front (Default: 0)
    """
    tup = (action,re.compile(message,re.I),category,re.compile(module),lineno)
    if action == "onceperfamily":
        if tup in pl_filters:
            return
        elif append == 1:
            pl_filters.append(tup)
        else:
            pl_filters.insert(0,tup)
    else:
        warnings.filterwarnings(action,message=message,
                                category=category,module=module,
                                lineno=lineno,append=append)

def warn_onceperfamily(message,pattern=None,category=None,stacklevel=1):
    """Issue a warning, first adding a `onceperfamily` filter for its family

    Parameters
    ----------
    message : str
        Text of the warning

    pattern : str or None, optional
        Regex describing the family, e.g. ``"INFO key 'XY' is not declared"``
        for messages that go on to name a line number. If `None`, the
        family is `message` itself

    category : :class:`Warning` or subclass, optional
        (Default: :class:`UserWarning`)

    stacklevel : int, optional
        Frames above the caller to which the warning is attributed
    """
    if category is None:
        category = UserWarning

    if pattern is None:
        pattern = re.escape(message)

    filterwarnings("onceperfamily",message=pattern,category=category)
    warn(message,category=category,stacklevel=stacklevel+1)

def warn(message,category=None,stacklevel=1):
    """Issue a warning, honoring `onceperfamily` filters. Otherwise as :func:`warnings.warn`"""
    if category is None:
        category = UserWarning

    stack = inspect.stack()
    frame_info = stack[min(stacklevel,len(stack)-1)]
    filename, lineno = frame_info[1], frame_info[2]
    warn_explicit(message,category,filename,lineno,module=filename)

def warn_explicit(message,category,filename,lineno,module=None,registry=None,module_globals=None):
    """Issue a warning from an explicit source location, honoring `onceperfamily`
    filters. Arguments are as for :func:`warnings.warn_explicit`

    The first `onceperfamily` filter matching the warning decides: if its
    family was already seen, the warning is dropped; otherwise the family is
    recorded in :data:`pl_once_registry` and the warning passes on to
    :mod:`warnings`.
    """
    if module is None:
        frame = inspect.currentframe()
        if frame is None:
            module = __name__
        else:
            try:
                module = inspect.getmodule(frame.f_back.f_code).__name__
            finally:
                del frame

    for _, pat, filter_category, mod, filter_line in pl_filters:
        if pat.match(message) and issubclass(category,filter_category) and\
           (module is None or mod.match(module)) and\
           (filter_line == 0 or filter_line == lineno):

            tup = (pat.pattern,filter_category,mod.pattern,filter_line)
            if tup in pl_once_registry:
                return

            pl_once_registry[tup] = 1
            break

    warnings.warn_explicit(message,category,filename,lineno,
                           module=module,registry=registry,
                           module_globals=module_globals)


def formatwarning(message,category,filename,lineno,file=None,line=None):
    """Format a warning as a boxed, colored block showing the message and
    the source lines around `lineno`. Installed as :func:`warnings.formatwarning`
    when this module is imported

    Parameters
    ----------
    message : str or Warning

    category : type
        Class of the warning

    filename : str
        File from which the warning was issued

    lineno : int
        Line in `filename` from which the warning was issued

    file : file-like, optional
        Unused. Present for compatibility with :func:`warnings.formatwarning`

    line : str, optional
        Source text to show. If `None`, lines ``lineno-2`` to ``lineno+2``
        of `filename` are shown

    Returns
    -------
    str
    """
    sep     = colored("-"*75,color="cyan")
    message = str(message)
    if not "\n" in message:
        message = _wrapper.fill(message)

    message = colored(message,color="white",attrs=["bold"])
    name    = colored(category.__name__,color="cyan",attrs=["bold"])

    if line is None:
        numwidth = len(str(lineno+3))
        fmtstr   = "{0: >%ss} {1}" % (numwidth)
        lines    = []
        for x in range(max(0,lineno-2),lineno+3):
            tmpline = linecache.getline(filename,x).strip("\n")
            if tmpline:
                attrs = ["bold"] if x == lineno else []
                lines.append(fmtstr.format(colored(x,color="green",attrs=attrs),
                                           colored(tmpline,attrs=attrs)
                                           ))
        line = "\n".join(lines)

    location = "in %s, line %s:" % (colored(filename,color="cyan"),lineno)

    return "\n".join([sep,name,message,location,"",line,"",sep,""])


warnings.formatwarning = formatwarning
