#!/usr/bin/env python
"""Welcome to bioattr!

This package reads, validates, and writes the typed optional attributes carried
by records of bioinformatics text formats: tags of `PAF`_ alignments and
`GFA1`_/`GFA2`_ assembly graphs, and ``INFO`` and ``FORMAT`` fields of `VCF`_
variant calls. To this end, this package provides:

  #. A typed-attribute engine that decodes and encodes scalar and array
     values, checks value counts against ``Number=`` declarations, and
     exposes typed getters on records (see |attributes|)

  #. Immutable record types for each format, with builders for deriving
     new records (see |records|)

  #. Readers and writers that stream records from and to files, rejecting
     malformed lines with a warning (see |readers|)


Package overview
----------------
bioattr is divided into the following subpackages:

    ==============    =========================================================
    Package           Contents
    --------------    ---------------------------------------------------------
    |attributes|      Type codes, scalar and array codecs, cardinality, attribute sets, typed getters
    |records|         Record types for PAF, GFA1, GFA2 and VCF lines
    |readers|         Readers and writers for those formats
    |util|            Utilities (e.g. file openers, stream filters, exceptions, warnings)
    |test|            Unit tests
    ==============    =========================================================

"""
__version__ = "0.1.0"

from bioattr.attributes.types import TypeCode
from bioattr.attributes.collection import Attribute, AttributeSet, AttributeSetBuilder

from bioattr.records.paf import PafRecord
from bioattr.records.vcf import VcfHeader, VcfRecord, VcfGenotype

from bioattr.readers.paf import PAF_Reader, PAF_Writer
from bioattr.readers.gfa import GFA1_Reader, GFA2_Reader, GFA1_Writer, GFA2_Writer
from bioattr.readers.vcf import VCF_Reader, VCF_Writer

from bioattr.util.services.exceptions import formatwarning
