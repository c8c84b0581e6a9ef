"""Threadline: communities, threads and the people who write them."""

__version__ = "0.1.0"
