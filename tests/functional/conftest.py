"""Default marks for tests under `tests/functional/`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

FUNCTIONAL_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected from `tests/functional/` as `functional`."""
    for item in items:
        if FUNCTIONAL_ROOT in item.path.resolve().parents and not item.get_closest_marker(
            "functional"
        ):
            item.add_marker(pytest.mark.functional)
