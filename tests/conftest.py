"""Global pytest fixtures for COURSECHECK."""

pytest_plugins = [
    "tests.fixtures.datagen",
    "tests.fixtures.courses",
]
