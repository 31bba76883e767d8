#!/usr/bin/env python
"""Read and write `VCF`_ files

|VCF_Reader|
    Read the header of a `VCF`_ file, then convert each data line into a
    |VcfRecord| whose attributes are typed by the header's declarations

|VCF_Writer|
    Write a |VcfHeader|, then |VcfRecord| objects, one per line


Examples
--------
Collect depths of heterozygous calls::

    >>> reader = VCF_Reader(open("calls.vcf"))
    >>> reader.header.samples
    ('NA12878', 'NA12891')
    >>> for record in reader:
    >>>     for sample, genotype in record.genotypes.items():
    >>>         if genotype.gt == "0/1":
    >>>             depths = genotype.get_allele_depths_opt()


Keys found in records but not declared in the header produce a |DataWarning|,
issued once per key.
"""
import itertools
import re

from bioattr.readers.common import RecordReader, RecordWriter
from bioattr.records.vcf import VcfHeader, VcfRecord
from bioattr.util.services.exceptions import AttributeValueError, MalformedFileError, DataWarning,\
                                             warn, warn_onceperfamily

DEFAULT_FILEFORMAT = "VCFv4.3"


class VCF_Reader(RecordReader):
    """
    VCF_Reader(*streams, header=None, strict=False, tabix=False, printer=None)

    Read `VCF`_ files into |VcfRecord| objects. Header lines at the start of
    the first stream are parsed into :attr:`header` when the reader is created.


    Parameters
    ----------
    *streams : str or file-like
        One or more filenames or open filehandles of input data.

    header : |VcfHeader| or None, optional
        Header to use instead of the one in the stream. Required for `tabix`_
        input, from which header lines are not read (Default: `None`)

    strict : bool, optional
        Raise |MalformedFileError| on the first malformed line, instead of
        rejecting it with a warning (Default: `False`)

    printer : file-like, optional
        Logger implementing a ``write()`` method. Default: |NullWriter|

    tabix : bool, optional
        `streams` point to `tabix`_-compressed files (Default: `False`)


    Attributes
    ----------
    header : |VcfHeader|
        Header of the file

    counter : int
        Cumulative line number counter over all streams, header included

    rejected : list
        Data lines that did not parse properly

    metadata : dict
        ``fileformat`` from the header, if any

    Raises
    ------
    MalformedFileError
        If a header line cannot be parsed. Header errors are always fatal
    """

    def __init__(self,*streams,**kwargs):
        RecordReader.__init__(self,*streams,**kwargs)
        header_lines = []
        for line in self.stream:
            if line.startswith("#"):
                self.counter += 1
                header_lines.append(line)
            else:
                self.stream = itertools.chain([line],self.stream)
                break

        header = kwargs.get("header",None)
        if header is None:
            try:
                header = VcfHeader.from_lines(header_lines)
            except AttributeValueError as e:
                raise MalformedFileError(self.filename,str(e))

        self.header = header
        self.metadata["fileformat"] = header.fileformat
        self.printer.write("Read VCF header: %s INFO and %s FORMAT declarations, %s samples." % (len(header.info),
                                                                                               len(header.format),
                                                                                               len(header.samples)))

    def _warn_undeclared(self,column,keys,declared):
        for key in keys:
            if key not in declared:
                warn_onceperfamily("%s key '%s' is not declared in the VCF header. First seen at line %s." % (column,key,self.counter),
                                   pattern="%s key '%s' is not declared" % (column,re.escape(key)),
                                   category=DataWarning)

    def _parse(self,line):
        """Parse a `VCF`_ data line into a |VcfRecord|"""
        record = VcfRecord.from_vcf(line,header=self.header,line_number=self.counter)
        self._warn_undeclared("INFO",record.info,self.header.info)
        self._warn_undeclared("FORMAT",record.format,self.header.format)
        return record


class VCF_Writer(RecordWriter):
    """
    VCF_Writer(stream, header=None)

    Write |VcfRecord| objects to `stream`, one per line, after the header.
    Sample columns follow the order of ``header.samples``; samples a record
    has no genotype for are written as ``.``. Genotypes of samples missing
    from the header are dropped with a |DataWarning|.

    Parameters
    ----------
    stream : str or file-like
        Filename or stream open for writing

    header : |VcfHeader| or None, optional
        Header to write. If `None`, a header holding only
        ``##fileformat=VCFv4.3`` is written before the first record, naming
        the samples of that record in the order of its genotypes
    """

    def __init__(self,stream,header=None):
        RecordWriter.__init__(self,stream)
        self.header = None
        if header is not None:
            self._write_header(header)

    def _write_header(self,header):
        self.header = header
        self.stream.write(header.as_vcf())

    def _default_header(self,samples=()):
        return VcfHeader(["##fileformat=%s" % DEFAULT_FILEFORMAT],samples=samples)

    def write(self,record):
        if self.header is None:
            self._write_header(self._default_header(record.genotypes.keys()))
        RecordWriter.write(self,record)

    def format(self,record):
        samples = self.header.samples
        dropped = [X for X in record.genotypes if X not in samples]
        if len(dropped) > 0:
            warn("Dropping genotypes of samples not in VCF header at record %s: %s" % (self.counter,", ".join(dropped)),
                 DataWarning)
        if len(samples) == 0:
            # no FORMAT column in the column header
            record = record.replace(format=(),genotypes=None)
        return record.as_vcf(samples=samples)

    def close(self):
        """Write the header if no record was written, then flush and close `stream`"""
        if self.header is None and not getattr(self.stream,"closed",False):
            self._write_header(self._default_header())
        RecordWriter.close(self)
