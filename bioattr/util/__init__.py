"""Utilities: stream filters and file openers (|io|), exceptions, warnings and decorators (|services|)"""
