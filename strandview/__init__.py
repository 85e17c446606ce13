"""HAIR file I/O, strand and strandlet layout, and camera math for hair rendering."""

__version__ = "0.1.0"