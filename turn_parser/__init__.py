# turn_parser/__init__.py
"""
Turn report sectioning and normalization for TribeNet.

Lines are classified, grouped per unit, and their movement punctuation is
repaired so downstream mapping can split on a single separator.
"""

__version__ = "0.5.0"
