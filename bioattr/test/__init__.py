"""Unit tests. Run with ``pytest -m unit``"""
