"""Catalog file reading and writing."""

from .xcstrings_parser import XCStringsParser
from .xcstrings_writer import XCStringsWriter

__all__ = ["XCStringsParser", "XCStringsWriter"]
