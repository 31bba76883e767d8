#!/usr/bin/env python
"""Test suite for :py:mod:`bioattr.util.services.decorators`"""
import unittest
import warnings

import pytest

from bioattr.util.services.decorators import catch_warnings, skip_if_abstract


def func_that_warns():
    warnings.warn("Some warning",UserWarning)
    return 5


@pytest.mark.unit
def test_catch_warnings_ignore():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        assert catch_warnings("ignore")(func_that_warns)() == 5
    assert len(caught) == 0

@pytest.mark.unit
def test_catch_warnings_error():
    with pytest.raises(UserWarning):
        catch_warnings("error")(func_that_warns)()

@pytest.mark.unit
def test_catch_warnings_keeps_metadata():
    wrapped = catch_warnings()(func_that_warns)
    assert wrapped.__name__ == "func_that_warns"


class AbstractTestSkipped(unittest.TestCase):

    @skip_if_abstract
    def test_method(self):
        return "ran"


class ConcreteSkipped(AbstractTestSkipped):
    pass


@pytest.mark.unit
def test_skip_if_abstract():
    with pytest.raises(unittest.SkipTest):
        AbstractTestSkipped("test_method").test_method()
    assert ConcreteSkipped("test_method").test_method() == "ran"
