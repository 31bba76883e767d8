#!/usr/bin/env python
"""Resolve the expected number of values of a VCF attribute from its
``Number=`` declaration and the record that owns it.

    =============   ==========================================================
    **Number=**     **Expected count**
    -------------   ----------------------------------------------------------
    *n*             exactly *n*
    ``A``           one per alternate allele, :func:`number_a`
    ``R``           one per allele including the reference, :func:`number_r`
    ``G``           one per possible genotype, :func:`number_g`
    ``.``           unconstrained
    =============   ==========================================================

Counts are recomputed from the record on every access and never cached.

:func:`number_g` counts the genotypes of a given ploidy over
``alt_count + 1`` alleles with the multiplicative binomial coefficient.
Products past the signed 32-bit range raise |OverflowRiskError| rather
than wrapping.
"""
import re
import numpy

from bioattr.util.services.exceptions import InvalidGenotypeError, OverflowRiskError

INT32_MAX = int(numpy.iinfo(numpy.int32).max)

_GT_SPLIT = re.compile(r"[|/]")


#===============================================================================
# INDEX: allele and genotype counts
#===============================================================================

def number_a(alt_count):
    """Number of values for ``Number=A``: one per alternate allele"""
    return alt_count

def number_r(alt_count):
    """Number of values for ``Number=R``: one per allele, including the reference"""
    return alt_count + 1

def binomial(n,k):
    """Compute `n` choose `k` by the multiplicative method, checking every
    intermediate product against the signed 32-bit range

    Parameters
    ----------
    n : int
        Non-negative

    k : int
        Non-negative

    Returns
    -------
    int

    Raises
    ------
    OverflowRiskError
        If an intermediate product or the result exceeds ``2**31 - 1``
    """
    if n < 0 or k < 0:
        raise ValueError("binomial coefficient requires non-negative arguments, found n=%s, k=%s" % (n,k))
    if k > n:
        return 0

    result = 1
    i = n - k + 1
    for j in range(1,k+1):
        product = result * i
        if product > INT32_MAX:
            raise OverflowRiskError("%s choose %s exceeds the signed 32-bit range" % (n,k))
        result = product // j
        i += 1

    return result

def number_g(alt_count,ploidy):
    """Number of values for ``Number=G``: one per unordered genotype of
    `ploidy` alleles drawn from ``alt_count + 1`` alleles

    A biallelic site (`alt_count` 1) in a diploid (`ploidy` 2) has 3
    genotypes: 0/0, 0/1, 1/1.

    Parameters
    ----------
    alt_count : int
        Number of alternate alleles at the site

    ploidy : int
        Number of alleles per genotype call, as found by :func:`ploidy`

    Returns
    -------
    int

    Raises
    ------
    OverflowRiskError
        If the count exceeds the signed 32-bit range
    """
    return binomial(alt_count + ploidy,ploidy)

def ploidy(gt):
    """Count the alleles in a ``GT`` genotype string

    Parameters
    ----------
    gt : str
        Genotype, alleles separated by ``|`` (phased) or ``/`` (unphased),
        e.g. ``'0/1'``, ``'1|0|2'``, ``'./.'``

    Returns
    -------
    int

    Raises
    ------
    InvalidGenotypeError
        If `gt` is empty, a bare ``.``, or has an empty allele
    """
    if gt is None or gt.strip() in ("","."):
        raise InvalidGenotypeError("genotype '%s' has no alleles" % gt)
    alleles = _GT_SPLIT.split(gt)
    if "" in alleles:
        raise InvalidGenotypeError("genotype '%s' has an empty allele" % gt)
    return len(alleles)



#===============================================================================
# INDEX: Number= declarations
#===============================================================================

class Number(object):
    """Value of a ``Number=`` declaration

    Parameters
    ----------
    value : int or str
        A non-negative integer, or one of ``'A'``, ``'R'``, ``'G'``, ``'.'``

    Attributes
    ----------
    value : int or str
        Integer count, or the letter naming a derived count
    """

    __slots__ = ("value",)

    A = "A"
    R = "R"
    G = "G"
    UNBOUNDED = "."

    def __init__(self,value):
        if isinstance(value,Number):
            value = value.value
        elif isinstance(value,str) and value not in (self.A,self.R,self.G,self.UNBOUNDED):
            if not value.isdigit():
                raise ValueError("Number must be a non-negative integer, A, R, G, or '.', found '%s'" % value)
            value = int(value)
        elif isinstance(value,bool) or not isinstance(value,(int,str)):
            raise ValueError("Number must be a non-negative integer, A, R, G, or '.', found '%s'" % (value,))
        elif isinstance(value,int) and value < 0:
            raise ValueError("Number must be non-negative, found %s" % value)
        self.value = value

    @staticmethod
    def parse(text):
        """Return a |Number| from the text of a ``Number=`` declaration"""
        return Number(text)

    @property
    def is_fixed(self):
        return isinstance(self.value,int)

    def resolve(self,alt_count=None,ploidy=None):
        """Return the number of values expected for this declaration

        Parameters
        ----------
        alt_count : int or None, optional
            Number of alternate alleles, required for ``A``, ``R`` and ``G``

        ploidy : int or None, optional
            Ploidy of the genotype, required for ``G``

        Returns
        -------
        int or None
            Expected count, or `None` for ``.``

        Raises
        ------
        ValueError
            If a count this declaration depends on is not supplied
        """
        if self.is_fixed:
            return self.value
        elif self.value == self.UNBOUNDED:
            return None
        if alt_count is None:
            raise ValueError("Number=%s requires the number of alternate alleles" % self.value)
        if self.value == self.A:
            return number_a(alt_count)
        elif self.value == self.R:
            return number_r(alt_count)
        if ploidy is None:
            raise ValueError("Number=G requires a genotype ploidy")
        return number_g(alt_count,ploidy)

    def __eq__(self,other):
        if isinstance(other,Number):
            return self.value == other.value
        return self.value == other

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return "Number(%r)" % (self.value,)
