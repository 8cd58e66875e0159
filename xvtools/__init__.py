"""Kernel layout helpers, a shell command parser, a heap allocator, a random generator and echo."""

__version__ = "0.1.0"