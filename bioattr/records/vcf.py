#!/usr/bin/env python
"""Record types for `VCF`_ variant call files.

Classes
-------
|VcfHeader|
    Meta-information lines and sample names. Parses ``##INFO`` and
    ``##FORMAT`` declarations, which type the attributes of records

|InfoDeclaration|, |FormatDeclaration|
    One ``##INFO=<...>`` or ``##FORMAT=<...>`` declaration

|VcfRecord|
    One data line: site columns, ``INFO`` attributes, and genotypes keyed
    by sample name

|VcfGenotype|
    The ``FORMAT`` fields of one sample at one site

|VcfRecordBuilder|, |VcfGenotypeBuilder|
    Assemble records and genotypes programmatically


Attribute types
---------------
VCF attribute text carries no type code. When a record is parsed, each
attribute is typed from the header's declaration for its key, else from
:data:`RESERVED_INFO` or :data:`RESERVED_FORMAT`, else left undeclared
(`None`). A bare ``INFO`` key is a ``Flag``.


Cardinality
-----------
List getters check counts for ``Number=A``, ``R`` and ``G`` against the site's
alternate alleles and, for ``G``, the ploidy of the genotype's ``GT``. A
genotype learns the number of alternate alleles from the |VcfRecord| that owns
it. Reserved keys have named accessors, e.g. :meth:`VcfGenotype.get_ad`
(``Number=R``) and :meth:`VcfRecord.get_db` (``Flag``).
"""
import types
from collections import OrderedDict

from bioattr.attributes.accessors import InfoAccessors, GenotypeAccessors, ReservedKey,\
                                         reserved_accessors
from bioattr.attributes.cardinality import Number, number_a, number_r, number_g, ploidy
from bioattr.attributes.collection import Attribute, AttributeSet, AttributeSetBuilder,\
                                          INFO, FORMAT, check_key
from bioattr.attributes.types import TypeCode
from bioattr.records.common import Record, split_line, parse_int
from bioattr.util.services.exceptions import MalformedRecordError, MissingAttributeError,\
                                             WrongCardinalityError, InvalidGenotypeError

MISSING = "."

COLUMNS = ("CHROM","POS","ID","REF","ALT","QUAL","FILTER","INFO")
"""Mandatory columns of a VCF data line"""



#===============================================================================
# INDEX: reserved keys
#===============================================================================

RESERVED_INFO = (
    ReservedKey("AA","1","String","ancestral_allele","Ancestral allele"),
    ReservedKey("AC","A","Integer","allele_counts","Allele count in genotypes, for each ALT allele"),
    ReservedKey("AD","R","Integer","allele_depths","Total read depth for each allele"),
    ReservedKey("ADF","R","Integer","forward_allele_depths","Read depth for each allele on the forward strand"),
    ReservedKey("ADR","R","Integer","reverse_allele_depths","Read depth for each allele on the reverse strand"),
    ReservedKey("AF","A","Float","allele_frequencies","Allele frequency for each ALT allele"),
    ReservedKey("AN","1","Integer","total_allele_count","Total number of alleles in called genotypes"),
    ReservedKey("BQ","1","Float","base_quality","RMS base quality"),
    ReservedKey("CIGAR","A","String","cigar","Cigar string describing how to align an alternate allele to the reference allele"),
    ReservedKey("DB","0","Flag","dbsnp_member","dbSNP membership"),
    ReservedKey("DP","1","Integer","combined_depth","Combined depth across samples"),
    ReservedKey("END","1","Integer","end","End position on CHROM"),
    ReservedKey("H2","0","Flag","hapmap2_member","HapMap2 membership"),
    ReservedKey("H3","0","Flag","hapmap3_member","HapMap3 membership"),
    ReservedKey("MQ","1","Integer","mapping_quality","RMS mapping quality"),
    ReservedKey("MQ0","1","Integer","mapq0_reads","Number of MAPQ == 0 reads"),
    ReservedKey("NS","1","Integer","samples_with_data","Number of samples with data"),
    ReservedKey("SB","4","Integer","strand_bias","Strand bias"),
    ReservedKey("SOMATIC","0","Flag","somatic","Somatic mutation"),
    ReservedKey("VALIDATED","0","Flag","validated","Validated by follow-up experiment"),
    ReservedKey("1000G","0","Flag","thousand_genomes_member","1000 Genomes membership"),
)
"""Reserved ``INFO`` keys of VCF 4.3"""

RESERVED_FORMAT = (
    ReservedKey("AD","R","Integer","allele_depths","Read depth for each allele"),
    ReservedKey("ADF","R","Integer","forward_allele_depths","Read depth for each allele on the forward strand"),
    ReservedKey("ADR","R","Integer","reverse_allele_depths","Read depth for each allele on the reverse strand"),
    ReservedKey("DP","1","Integer","read_depth","Read depth"),
    ReservedKey("EC","A","Integer","expected_alt_counts","Expected alternate allele counts"),
    ReservedKey("FT","1","String","filter","Filter indicating if this genotype was called"),
    ReservedKey("GL","G","Float","genotype_likelihoods","Genotype likelihoods"),
    ReservedKey("GP","G","Float","genotype_posteriors","Genotype posterior probabilities"),
    ReservedKey("GQ","1","Integer","genotype_quality","Conditional genotype quality"),
    ReservedKey("GT","1","String","genotype","Genotype"),
    ReservedKey("HQ","2","Integer","haplotype_qualities","Haplotype quality"),
    ReservedKey("MQ","1","Integer","mapping_quality","RMS mapping quality"),
    ReservedKey("PL","G","Integer","phred_likelihoods","Phred-scaled genotype likelihoods rounded to the closest integer"),
    ReservedKey("PQ","1","Integer","phasing_quality","Phasing quality"),
    ReservedKey("PS","1","Integer","phase_set","Phase set"),
)
"""Reserved ``FORMAT`` keys of VCF 4.3"""

_RESERVED_INFO_TYPES   = { X.key : X.type_code for X in RESERVED_INFO }
_RESERVED_FORMAT_TYPES = { X.key : X.type_code for X in RESERVED_FORMAT }

def reserved_info_type(key):
    """Return the |TypeCode| of reserved ``INFO`` key `key`, or `None`"""
    return _RESERVED_INFO_TYPES.get(key)

def reserved_format_type(key):
    """Return the |TypeCode| of reserved ``FORMAT`` key `key`, or `None`"""
    return _RESERVED_FORMAT_TYPES.get(key)



#===============================================================================
# INDEX: header
#===============================================================================

def _parse_entries(text):
    """Split the inside of ``<...>`` in a structured meta line into an
    ordered dictionary, honoring double quotes and backslash escapes

    Parameters
    ----------
    text : str
        e.g. ``'ID=DP,Number=1,Type=Integer,Description="Depth, total"'``

    Returns
    -------
    OrderedDict
    """
    entries = OrderedDict()
    key = []
    value = []
    current = key
    quoted = False
    escaped = False
    for char in text:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\" and quoted:
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == "=" and current is key and not quoted:
            current = value
        elif char == "," and not quoted:
            entries["".join(key).strip()] = "".join(value)
            key, value = [], []
            current = key
        else:
            current.append(char)
    if quoted:
        raise MalformedRecordError("unterminated quote in '%s'" % text)
    if len(key) > 0:
        entries["".join(key).strip()] = "".join(value)
    return entries

def _quote(text):
    return '"%s"' % text.replace("\\","\\\\").replace('"','\\"')


class _Declaration(object):
    """Base class for ``##INFO`` and ``##FORMAT`` declarations"""

    prefix = None

    def __init__(self,id,number,type_code,description="",source=None,version=None,extra=None):
        self.id          = check_key(id,INFO)
        self.number      = Number(number)
        self.type_code   = TypeCode.parse(type_code)
        self.description = description
        self.source      = source
        self.version     = version
        self.extra       = OrderedDict() if extra is None else OrderedDict(extra)

    @classmethod
    def from_vcf(cls,line):
        """Parse a declaration line, e.g. ``##INFO=<ID=DP,Number=1,Type=Integer,Description="Depth">``

        Raises
        ------
        MalformedRecordError
            If the line is not a declaration, or lacks ``ID``, ``Number`` or ``Type``
        """
        line = line.rstrip("\r\n")
        if not line.startswith(cls.prefix + "<") or not line.endswith(">"):
            raise MalformedRecordError("declaration must look like %s<...>, found '%s'" % (cls.prefix,line))
        entries = _parse_entries(line[len(cls.prefix)+1:-1])
        try:
            id_     = entries.pop("ID")
            number  = entries.pop("Number")
            type_   = entries.pop("Type")
        except KeyError as e:
            raise MalformedRecordError("declaration '%s' lacks required key %s" % (line,e))
        try:
            number = Number(number)
        except ValueError as e:
            raise MalformedRecordError(str(e))
        return cls(id_,number,type_,
                   description=entries.pop("Description",""),
                   source=entries.pop("Source",None),
                   version=entries.pop("Version",None),
                   extra=entries)

    def as_reserved_key(self):
        """Return this declaration as a |ReservedKey|"""
        return ReservedKey(self.id,self.number,self.type_code,self.id.lower(),self.description)

    def as_vcf(self):
        """Format as a meta-information line, without line terminator"""
        ltmp = ["ID=%s" % self.id,
                "Number=%s" % self.number,
                "Type=%s" % self.type_code.vcf_name,
                "Description=%s" % _quote(self.description)]
        if self.source is not None:
            ltmp.append("Source=%s" % _quote(self.source))
        if self.version is not None:
            ltmp.append("Version=%s" % _quote(self.version))
        for k, v in self.extra.items():
            ltmp.append("%s=%s" % (k,_quote(v)))
        return "%s<%s>" % (self.prefix,",".join(ltmp))

    def __eq__(self,other):
        return type(self) is type(other) and self.as_vcf() == other.as_vcf()

    def __hash__(self):
        return hash(self.as_vcf())

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__,self.as_vcf())


class InfoDeclaration(_Declaration):
    """An ``##INFO=<ID=...,Number=...,Type=...,Description=...>`` declaration

    Attributes
    ----------
    id : str
        Key being declared

    number : |Number|

    type_code : |TypeCode|

    description : str

    source, version : str or None

    extra : OrderedDict
        Any other entries
    """
    prefix = "##INFO="


class FormatDeclaration(_Declaration):
    """A ``##FORMAT=<ID=...,Number=...,Type=...,Description=...>`` declaration.
    Attributes are as for |InfoDeclaration|
    """
    prefix = "##FORMAT="


class VcfHeader(object):
    """Header of a `VCF`_ file

    Parameters
    ----------
    meta_lines : iterable, optional
        ``##`` meta-information lines, in file order

    samples : iterable, optional
        Sample names, from the ``#CHROM`` line

    Attributes
    ----------
    meta_lines : tuple
        Meta-information lines, without line terminators

    samples : tuple
        Sample names

    info : OrderedDict
        |InfoDeclaration| objects keyed by ``ID``

    format : OrderedDict
        |FormatDeclaration| objects keyed by ``ID``

    Raises
    ------
    MalformedRecordError
        If an ``##INFO`` or ``##FORMAT`` line cannot be parsed
    """

    def __init__(self,meta_lines=(),samples=()):
        self.meta_lines = tuple(X.rstrip("\r\n") for X in meta_lines)
        self.samples    = tuple(samples)
        self.info       = OrderedDict()
        self.format     = OrderedDict()
        for line in self.meta_lines:
            if line.startswith(InfoDeclaration.prefix):
                declaration = InfoDeclaration.from_vcf(line)
                self.info[declaration.id] = declaration
            elif line.startswith(FormatDeclaration.prefix):
                declaration = FormatDeclaration.from_vcf(line)
                self.format[declaration.id] = declaration

    @staticmethod
    def from_lines(lines):
        """Create a |VcfHeader| from header lines: ``##`` lines followed by the
        ``#CHROM`` column header line

        Raises
        ------
        MalformedRecordError
            If a line is neither a meta line nor the column header
        """
        meta_lines = []
        samples = ()
        for line in lines:
            line = line.rstrip("\r\n")
            if line.startswith("##"):
                meta_lines.append(line)
            elif line.startswith("#CHROM"):
                samples = VcfHeader.parse_samples(line)
            else:
                raise MalformedRecordError("expected a VCF header line, found '%s'" % line)
        return VcfHeader(meta_lines,samples)

    @staticmethod
    def parse_samples(line):
        """Return the sample names of a ``#CHROM`` column header line"""
        items = line.rstrip("\r\n").split("\t")
        if [X.lstrip("#") for X in items[:8]] != list(COLUMNS):
            raise MalformedRecordError("malformed VCF column header '%s'" % line.rstrip("\r\n"))
        return tuple(items[9:])

    @property
    def fileformat(self):
        """Version given by ``##fileformat=``, or `None`"""
        for line in self.meta_lines:
            if line.startswith("##fileformat="):
                return line[len("##fileformat="):]
        return None

    def info_type(self,key):
        """Return the |TypeCode| of ``INFO`` key `key`: declared, else reserved, else `None`"""
        if key in self.info:
            return self.info[key].type_code
        return reserved_info_type(key)

    def format_type(self,key):
        """Return the |TypeCode| of ``FORMAT`` key `key`: declared, else reserved, else `None`"""
        if key in self.format:
            return self.format[key].type_code
        return reserved_format_type(key)

    def column_header(self):
        """Format the ``#CHROM`` column header line, without line terminator"""
        ltmp = ["#" + "\t".join(COLUMNS)]
        if len(self.samples) > 0:
            ltmp.append("FORMAT")
            ltmp.extend(self.samples)
        return "\t".join(ltmp)

    def as_vcf(self):
        """Format the full header, each line ending with ``'\\n'``"""
        return "".join("%s\n" % X for X in self.meta_lines + (self.column_header(),))

    def __eq__(self,other):
        return isinstance(other,VcfHeader) and self.meta_lines == other.meta_lines and self.samples == other.samples

    def __hash__(self):
        return hash((self.meta_lines,self.samples))

    def __repr__(self):
        return "<VcfHeader fileformat=%s info=%s format=%s samples=%s>" % (self.fileformat,
                                                                         list(self.info),
                                                                         list(self.format),
                                                                         list(self.samples))



#===============================================================================
# INDEX: genotypes
#===============================================================================

def _put_values(builder,key,type_code,values):
    """Put `values` under `key`. Strings are kept as raw text, other values
    are encoded according to `type_code`
    """
    if len(values) > 0 and all(isinstance(X,str) for X in values):
        type_code = None if type_code is None else TypeCode.parse(type_code)
        builder.put_attribute(Attribute(check_key(key,builder.dialect),type_code,tuple(values)))
    elif len(values) == 0:
        type_code = TypeCode.FLAG if type_code is None else TypeCode.parse(type_code)
        builder.put(key,type_code,True if type_code is TypeCode.FLAG else [])
    else:
        builder.put(key,type_code,list(values))
    return builder


@reserved_accessors(RESERVED_FORMAT)
class VcfGenotype(Record,GenotypeAccessors):
    """Genotype fields of one sample at one site

    Parameters
    ----------
    fields : |AttributeSet|
        ``FORMAT`` dialect fields. Must hold exactly one ``GT`` value

    alt_count : int or None, optional
        Number of alternate alleles at the site. Set by the owning |VcfRecord|

    Attributes
    ----------
    fields : |AttributeSet|

    alt_count : int or None

    Raises
    ------
    MissingAttributeError
        If there is no ``GT`` field

    WrongCardinalityError
        If ``GT`` has more than one value
    """
    _fields = ("fields","alt_count")

    def __init__(self,fields,alt_count=None):
        if "GT" not in fields:
            raise MissingAttributeError("GT","String")
        if len(fields["GT"].raw) != 1:
            raise WrongCardinalityError("GT",1,len(fields["GT"].raw),"String")
        self._init_fields(fields=fields,alt_count=alt_count)

    @staticmethod
    def builder():
        """Return a new |VcfGenotypeBuilder|"""
        return VcfGenotypeBuilder()

    @property
    def gt(self):
        """Text of the ``GT`` field"""
        return self.fields["GT"].raw[0]

    def bind(self,alt_count):
        """Return this genotype bound to a site with `alt_count` alternate alleles"""
        if alt_count == self.alt_count:
            return self
        return VcfGenotype(self.fields,alt_count)

    def _require_alt_count(self):
        if self.alt_count is None:
            raise InvalidGenotypeError("genotype is not bound to a record; alternate allele count unknown")
        return self.alt_count

    def ploidy(self):
        """Number of alleles in ``GT``

        Raises
        ------
        InvalidGenotypeError
            If ``GT`` is empty or a bare ``.``
        """
        return ploidy(self.gt)

    def number_a(self):
        return number_a(self._require_alt_count())

    def number_r(self):
        return number_r(self._require_alt_count())

    def number_g(self):
        """Number of possible genotypes at this site for this genotype's ploidy

        Raises
        ------
        InvalidGenotypeError
            If ``GT`` has no alleles, or the genotype is unbound

        OverflowRiskError
            If the count exceeds the signed 32-bit range
        """
        return number_g(self._require_alt_count(),self.ploidy())

    def _expected_count(self,number):
        number = Number(number)
        if number.is_fixed or number.value == Number.UNBOUNDED:
            return number.resolve()
        alt_count = self._require_alt_count()
        return number.resolve(alt_count=alt_count,
                              ploidy=self.ploidy() if number.value == Number.G else None)

    def as_vcf(self,keys=None):
        """Format as a sample column aligned to `keys`, the ``FORMAT`` keys

        Parameters
        ----------
        keys : sequence or None, optional
            ``FORMAT`` keys. If `None`, the genotype's own keys

        Returns
        -------
        str
        """
        return self.fields.serialize(keys)

    def __str__(self):
        return self.as_vcf()


class VcfGenotypeBuilder(object):
    """Assemble a |VcfGenotype| field by field

    Examples
    --------
        >>> genotype = VcfGenotype.builder().with_field("GT","0/1").with_field("AD",10,12).build()
    """

    def __init__(self):
        self._fields = AttributeSetBuilder(dialect=FORMAT)

    def with_field(self,key,*values,**kwargs):
        """Add field `key`

        Parameters
        ----------
        key : str

        values : one or more values
            Strings are kept as text; other values are encoded by type

        type_code : |TypeCode|, str, or None, optional
            Keyword only. Defaults to the reserved type of `key`, if any

        Returns
        -------
        |VcfGenotypeBuilder|
            self
        """
        type_code = kwargs.get("type_code",reserved_format_type(key))
        _put_values(self._fields,key,type_code,values)
        return self

    def with_fields(self,fields):
        """Add every |Attribute| of an |AttributeSet|"""
        for attribute in fields.values():
            self._fields.put_attribute(attribute)
        return self

    def reset(self):
        self._fields.reset()
        return self

    def build(self):
        """Return the |VcfGenotype|, consuming this builder"""
        return VcfGenotype(self._fields.build())



#===============================================================================
# INDEX: records
#===============================================================================

def _split_or_empty(text,sep):
    return () if text == MISSING else tuple(text.split(sep))

def _join_or_missing(values,sep):
    return MISSING if len(values) == 0 else sep.join(values)

def parse_qual(text):
    """Parse the text of a QUAL column to a float, or `None` for `.`

    Raises
    ------
    MalformedRecordError
        If `text` is neither a number nor `.`
    """
    if text == MISSING:
        return None
    try:
        return float(text)
    except ValueError:
        raise MalformedRecordError("QUAL must be a number or '.', found '%s'" % text)

def format_qual(qual):
    """Format a QUAL value, as an integer if it is integral"""
    if qual is None:
        return MISSING
    if float(qual).is_integer():
        return str(int(qual))
    return repr(float(qual))


@reserved_accessors(RESERVED_INFO)
class VcfRecord(Record,InfoAccessors):
    """One data line of a `VCF`_ file

    Attributes
    ----------
    chrom : str

    pos : int
        1-based position

    id : tuple
        Identifiers, empty if written as ``.``

    ref : str
        Reference allele

    alt : tuple
        Alternate alleles, empty if written as ``.``

    qual : float or None

    qual_text : str or None
        Text QUAL was parsed from, written back verbatim by :meth:`as_vcf`.
        `None` for records whose QUAL was given as a number

    filter : tuple
        Filters, empty if written as ``.``

    info : |AttributeSet|
        ``INFO`` dialect attributes

    format : tuple
        ``FORMAT`` keys

    genotypes : mapping
        Read-only ordered mapping of sample names to |VcfGenotype|, each bound
        to this record's alternate allele count

    line_number : int or None
        Line of the source file, if read from one
    """
    _fields = ("chrom","pos","id","ref","alt","qual","qual_text","filter","info","format","genotypes","line_number")

    def __init__(self,chrom,pos,ref,alt=(),id=(),qual=None,qual_text=None,filter=(),info=None,format=(),
                 genotypes=None,line_number=None):
        alt = tuple(alt)
        if isinstance(qual,str):
            qual_text = qual
            qual = parse_qual(qual)
        elif qual_text is not None and parse_qual(qual_text) != qual:
            # text no longer describes the value
            qual_text = None
        genotypes = OrderedDict() if genotypes is None else genotypes
        bound = OrderedDict((K,V.bind(len(alt))) for K,V in genotypes.items())
        self._init_fields(chrom=chrom,pos=pos,id=tuple(id),ref=ref,alt=alt,qual=qual,qual_text=qual_text,
                          filter=tuple(filter),
                          info=AttributeSet(dialect=INFO) if info is None else info,
                          format=tuple(format),
                          genotypes=types.MappingProxyType(bound),
                          line_number=line_number)

    def _key(self):
        key = list(Record._key(self))
        key[self._fields.index("genotypes")] = tuple(self.genotypes.items())
        return tuple(key)

    def replace(self,**changes):
        changes.setdefault("genotypes",OrderedDict(self.genotypes))
        return Record.replace(self,**changes)

    @staticmethod
    def builder():
        """Return a new |VcfRecordBuilder|"""
        return VcfRecordBuilder()

    @staticmethod
    def from_vcf(line,header=None,samples=None,line_number=None):
        """Create a |VcfRecord| from a data line of a `VCF`_ file

        Parameters
        ----------
        line : str
            Tab-separated data line

        header : |VcfHeader| or None, optional
            Header whose declarations type the attributes, and whose samples
            name the genotype columns

        samples : sequence or None, optional
            Sample names, overriding those of `header`. If neither is given,
            genotype columns are named by their 0-based index

        line_number : int or None, optional

        Returns
        -------
        |VcfRecord|

        Raises
        ------
        MalformedRecordError
            If a column is missing or malformed, or the number of sample columns
            differs from the number of sample names

        AttributeValueError
            If an attribute is malformed or duplicated, or a genotype lacks ``GT``
        """
        items = split_line(line,8)
        if samples is None and header is not None:
            samples = header.samples
        info_type   = reserved_info_type if header is None else header.info_type
        format_type = reserved_format_type if header is None else header.format_type

        format_ = ()
        genotypes = OrderedDict()
        if len(items) > 8:
            format_ = tuple(items[8].split(":"))
            columns = items[9:]
            if samples is None:
                samples = [str(X) for X in range(len(columns))]
            if len(columns) != len(samples):
                raise MalformedRecordError("found %s sample columns for %s samples" % (len(columns),len(samples)))
            for sample, column in zip(samples,columns):
                fields = AttributeSet.from_format(format_,column,format_type)
                genotypes[sample] = VcfGenotype(fields)

        return VcfRecord(items[0],
                         parse_int(items[1],"POS"),
                         items[3],
                         alt=_split_or_empty(items[4],","),
                         id=_split_or_empty(items[2],";"),
                         qual=items[5],
                         filter=_split_or_empty(items[6],";"),
                         info=AttributeSet.from_info(items[7],info_type),
                         format=format_,
                         genotypes=genotypes,
                         line_number=line_number)

    def number_a(self):
        return number_a(len(self.alt))

    def number_r(self):
        return number_r(len(self.alt))

    def _expected_count(self,number):
        number = Number(number)
        if number.value == Number.G:
            raise ValueError("Number=G applies only to genotype fields")
        return number.resolve(alt_count=len(self.alt))

    def as_vcf(self,samples=None):
        """Format as a `VCF`_ data line, without line terminator

        Parameters
        ----------
        samples : sequence or None, optional
            Order of sample columns. If `None`, the order of :attr:`genotypes`.
            Samples without a genotype are written as ``.``

        Returns
        -------
        str
        """
        ltmp = [self.chrom,
                str(self.pos),
                _join_or_missing(self.id,";"),
                self.ref,
                _join_or_missing(self.alt,","),
                format_qual(self.qual) if self.qual_text is None else self.qual_text,
                _join_or_missing(self.filter,";"),
                self.info.serialize()]
        samples = list(self.genotypes) if samples is None else samples
        if len(self.format) > 0 or len(samples) > 0:
            ltmp.append(_join_or_missing(self.format,":"))
            for sample in samples:
                genotype = self.genotypes.get(sample)
                ltmp.append(MISSING if genotype is None else genotype.as_vcf(self.format))
        return "\t".join(ltmp)

    def __str__(self):
        return self.as_vcf()


class VcfRecordBuilder(object):
    """Assemble a |VcfRecord|. :meth:`build` consumes the builder; call
    :meth:`reset` before reusing it.

    Examples
    --------
        >>> record = (VcfRecord.builder()
        ...              .with_chrom("1").with_pos(100).with_ref("A").with_alt("G")
        ...              .with_info("DP",14)
        ...              .with_genotype("NA12878","GT","0/1")
        ...              .with_genotype("NA12878","AD",6,8)
        ...              .build())
    """

    def __init__(self):
        self.reset()

    def _check_open(self):
        if self._consumed:
            raise RuntimeError("builder already built; call reset() before reuse")

    def reset(self):
        """Discard all configuration"""
        self._line_number = None
        self._chrom       = None
        self._pos         = None
        self._id          = ()
        self._ref         = None
        self._alt         = ()
        self._qual        = None
        self._filter      = ()
        self._info        = AttributeSetBuilder(dialect=INFO)
        self._format      = None
        self._genotypes   = OrderedDict()
        self._consumed    = False
        return self

    def with_line_number(self,line_number):
        self._check_open()
        self._line_number = line_number
        return self

    def with_chrom(self,chrom):
        self._check_open()
        self._chrom = chrom
        return self

    def with_pos(self,pos):
        self._check_open()
        self._pos = pos
        return self

    def with_id(self,*ids):
        self._check_open()
        self._id = tuple(ids)
        return self

    def with_ref(self,ref):
        self._check_open()
        self._ref = ref
        return self

    def with_alt(self,*alt):
        self._check_open()
        self._alt = tuple(alt)
        return self

    def with_qual(self,qual):
        self._check_open()
        self._qual = qual
        return self

    def with_filter(self,*filters):
        self._check_open()
        self._filter = tuple(filters)
        return self

    def with_info(self,key,*values,**kwargs):
        """Add ``INFO`` attribute `key`. With no values, add a flag, or a single
        missing value ``.`` if `key` has a type other than ``Flag``

        Parameters
        ----------
        key : str

        values : zero or more values
            Strings are kept as text; other values are encoded by type

        type_code : |TypeCode|, str, or None, optional
            Keyword only. Defaults to the reserved type of `key`, if any

        Raises
        ------
        DuplicateKeyError
            If `key` was already added
        """
        self._check_open()
        type_code = kwargs.get("type_code",reserved_info_type(key))
        _put_values(self._info,key,type_code,values)
        return self

    def with_format(self,*keys):
        """Set the ``FORMAT`` keys. If never called, they are collected from
        the genotypes in the order first seen
        """
        self._check_open()
        self._format = tuple(keys)
        return self

    def with_genotype(self,sample,key_or_genotype,*values,**kwargs):
        """Add a genotype field for `sample`, or a whole |VcfGenotype|

        Parameters
        ----------
        sample : str
            Sample name

        key_or_genotype : str or |VcfGenotype|
            ``FORMAT`` key, or a genotype replacing any fields given so far

        values : one or more values
            Values of the field, when `key_or_genotype` is a key

        type_code : |TypeCode|, str, or None, optional
            Keyword only. Defaults to the reserved type of the key, if any
        """
        self._check_open()
        if isinstance(key_or_genotype,VcfGenotype):
            self._genotypes[sample] = VcfGenotypeBuilder().with_fields(key_or_genotype.fields)
            return self
        builder = self._genotypes.setdefault(sample,VcfGenotypeBuilder())
        builder.with_field(key_or_genotype,*values,**kwargs)
        return self

    def build(self):
        """Return the |VcfRecord|, consuming this builder

        Raises
        ------
        ValueError
            If chrom, pos or ref were not set
        """
        self._check_open()
        if self._chrom is None or self._pos is None or self._ref is None:
            raise ValueError("VCF record requires chrom, pos and ref")
        genotypes = OrderedDict((K,V.build()) for K,V in self._genotypes.items())
        format_ = self._format
        if format_ is None:
            keys = OrderedDict()
            for genotype in genotypes.values():
                for key in genotype.fields:
                    keys[key] = True
            format_ = tuple(keys)
        record = VcfRecord(self._chrom,self._pos,self._ref,
                           alt=self._alt,id=self._id,qual=self._qual,filter=self._filter,
                           info=self._info.build(),format=format_,genotypes=genotypes,
                           line_number=self._line_number)
        self._consumed = True
        return record
