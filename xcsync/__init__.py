"""Fill in missing .xcstrings translations with a local language model."""

__version__ = "0.1.0"
