"""A Linda-style tuple space over synchronous TCP links, with a bounded queue, an ordered event logger and small demonstrations."""

__version__ = "0.1.0"