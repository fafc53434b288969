"""
Micrawl package initializer.
Defines package version; the CLI lives in :mod:`micrawl.cli`.
"""
__version__ = "0.2.0"

__all__ = ["__version__"]
