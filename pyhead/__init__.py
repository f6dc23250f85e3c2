"""
pyhead: print the first lines or bytes of files.

The package is split into an option model (options), a prefix copier
(copier) and a thin command-line wrapper (cli).
"""

__version__ = "0.1.0"
