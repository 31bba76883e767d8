#!/usr/bin/env python
"""
Package overview
================

This package contains immutable record types for each supported format.
Records compare equal when all of their fields, attributes included, are
equal, and re-serialize to the line they were parsed from.

    ======================================    ===================================================
    **Module**                                **Contents**
    --------------------------------------    ---------------------------------------------------
    :py:mod:`bioattr.records.paf`             |PafRecord|
    :py:mod:`bioattr.records.gfa1`            GFA1 ``H``, ``S``, ``L``, ``C``, ``P`` and ``T`` records
    :py:mod:`bioattr.records.gfa2`            GFA2 ``H``, ``S``, ``F``, ``E``, ``G``, ``O`` and ``U`` records
    :py:mod:`bioattr.records.gfa`             References, positions and alignments shared by GFA records
    :py:mod:`bioattr.records.vcf`             |VcfHeader|, |VcfRecord|, |VcfGenotype| and their builders
    :py:mod:`bioattr.records.common`          |Record| base class and column helpers
    ======================================    ===================================================
"""
