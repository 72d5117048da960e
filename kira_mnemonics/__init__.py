"""
Deterministic validator key-set generation from a single master mnemonic.
"""

__version__ = "0.1.0"
