"""Typed sets of named bit flags with set operations, iteration and a text format."""

__version__ = "2.9.3"