"""IPv4 addressing, router interface configuration, and compiler identification from macros."""

__version__ = "0.1.0"