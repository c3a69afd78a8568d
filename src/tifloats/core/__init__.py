"""
Core engine: packed-decimal primitives, the calculator Float, errors and configuration.

This module is pure computation: no I/O, no shared mutable state.
"""
