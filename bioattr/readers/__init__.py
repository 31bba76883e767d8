#!/usr/bin/env python
"""
Package overview
================

This package contains readers and writers for line-oriented interchange
formats. All readers behave as iterators over records, skip blank lines and
comments, and reject malformed lines with a |FileFormatWarning| (or raise a
|MalformedFileError| when created with ``strict=True``). Input may be
`tabix`_-compressed, which is supported via `Pysam`_.

    ======================================    =======================================
    **Module**                                **Format**
    --------------------------------------    ---------------------------------------
    :py:mod:`bioattr.readers.paf`             `PAF`_ pairwise alignments
    :py:mod:`bioattr.readers.gfa`             `GFA1`_ and `GFA2`_ assembly graphs
    :py:mod:`bioattr.readers.vcf`             `VCF`_ variant calls
    ======================================    =======================================


Helper code can be found in the following modules:

    =================================    ==========================================
    **Module**                           **Contents**
    ---------------------------------    ------------------------------------------
    :mod:`bioattr.readers.common`        Base classes shared by all readers and
                                         writers
    =================================    ==========================================
"""
