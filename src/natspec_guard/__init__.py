"""natspec-guard: selector tags and NatSpec comment style for Solidity sources."""

__version__ = "0.1.0"
