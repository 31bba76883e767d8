#!/usr/bin/env python
"""Function decorators used by the test suite

:py:func:`catch_warnings`
    Run the wrapped function under a temporary warnings filter

:py:func:`skip_if_abstract`
    Skip a test method when it is run from a :py:class:`unittest.TestCase`
    whose name contains `'Abstract'`, so that shared test suites run only in
    their concrete subclasses (see e.g. ``AbstractTestRecordReader``)
"""
import functools
import warnings


def catch_warnings(simple_filter="ignore"):
    """Return a decorator that runs the wrapped function with `simple_filter`
    as the only warnings filter, restoring the previous filters afterwards

    Parameters
    ----------
    simple_filter : str, optional
        Any action accepted by :func:`warnings.simplefilter`, e.g. `'ignore'`,
        `'error'`, or `'always'` (Default: `'ignore'`)

    Returns
    -------
    function
        Decorator

    Examples
    --------
        >>> @catch_warnings("error")
        >>> def test_no_warnings():
        >>>     list(VCF_Reader(open("clean.vcf")))
    """
    def decorator(func):
        @functools.wraps(func)
        def new_func(*args,**kwargs):
            with warnings.catch_warnings():
                warnings.simplefilter(simple_filter)
                result = func(*args,**kwargs)

            return result

        return new_func

    return decorator


def skip_if_abstract(func):
    """Decorate a test method so that it raises :class:`unittest.SkipTest`
    when called on an instance of a class named ``*Abstract*``

    Parameters
    ----------
    func : function
        Test method

    Returns
    -------
    function
    """
    import unittest

    @functools.wraps(func)
    def new_func(*args,**kwargs):
        if "Abstract" in args[0].__class__.__name__:
            raise unittest.SkipTest("Skipping test defined in abstract class %s" % args[0].__class__.__name__)
        return func(*args,**kwargs)

    return new_func
