"""Entrypoints for COURSECHECK.

Expose the library to the outside world: the ``coursecheck`` command line.
Parse and validate inputs, call the runner, and present results.
"""
