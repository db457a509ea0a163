"""The ``coursecheck`` command-line interface."""
