"""Syntax tree, name resolution, call graphs and type checking for the Selfie language."""

__version__ = "0.1.0"