#!/usr/bin/env python
"""
Package overview
================

This package contains the typed-attribute engine shared by all record types:
parsing ``KEY:TYPE:VALUE`` tags and VCF ``KEY=v1,v2`` entries, validating
their types and cardinalities on access, and writing them back to text.

    ===========================================    ==================================================
    **Module**                                     **Contents**
    -------------------------------------------    --------------------------------------------------
    :py:mod:`bioattr.attributes.types`             |TypeCode|, the closed set of type codes
    :py:mod:`bioattr.attributes.codec`             Scalar codec: text to typed value, and back
    :py:mod:`bioattr.attributes.arrays`            Codec for ``B`` arrays
    :py:mod:`bioattr.attributes.cardinality`       ``Number=A|R|G`` resolution, genotype ploidy
    :py:mod:`bioattr.attributes.collection`        |Attribute|, |AttributeSet|, |AttributeSetBuilder|
    :py:mod:`bioattr.attributes.accessors`         Typed getters and reserved-key accessors
    ===========================================    ==================================================
"""
from bioattr.attributes.types import TypeCode
from bioattr.attributes.arrays import ArrayValue
from bioattr.attributes.cardinality import Number, number_a, number_r, number_g, ploidy
from bioattr.attributes.collection import Attribute, AttributeSet, AttributeSetBuilder, TAGS, INFO, FORMAT
from bioattr.attributes.accessors import TagAccessors, InfoAccessors, GenotypeAccessors,\
                                         ReservedKey, reserved_accessors
