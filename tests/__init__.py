"""COURSECHECK test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- functional/   : The course-instance lookup scenario, end-to-end through the
                  matcher, the pytest plugin and the built-in runner.
- e2e/          : The ``coursecheck`` command line, through click's CliRunner.
- fixtures/     : Shared pytest fixtures (no tests here).
- fakes.py      : Test doubles for the course-instance service.
"""
