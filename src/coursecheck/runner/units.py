"""Test unit descriptors and discovery from Python modules."""

from __future__ import annotations

import importlib.util
import inspect
import itertools
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from coursecheck.declarations import get_expectation
from coursecheck.errors import TestModuleImportError
from coursecheck.matching.expectation import ExpectedException

logger = logging.getLogger(__name__)

TEST_PREFIX = "test"  # pragma: no mutate
CLASS_PREFIX = "Test"  # pragma: no mutate
SETUP_HOOKS = ("setup_method", "setUp")
TEARDOWN_HOOKS = ("teardown_method", "tearDown")

_module_counter = itertools.count(1)


@dataclass(frozen=True, slots=True)
class TestUnit:
    """A single collected test.

    Conventions:
      - `name` is ``module::function`` or ``module::Class::method``.
      - `func` is the plain function, or for methods the attribute as found
        on the class (a function, `staticmethod` or `classmethod`) so it binds
        the same way attribute access on an instance would.
      - `owner` is the test class for methods; a fresh instance is created
        for every run so no state is shared between tests.
    """

    __test__ = False

    name: str
    func: Callable[..., object] | staticmethod | classmethod
    owner: type | None = None

    @property
    def expectation(self) -> ExpectedException | None:
        """The expectation declared on the test function, if any."""
        return get_expectation(self.func)

    def prepare(self) -> tuple[Callable[[], object], Callable[[], object] | None]:
        """Arrange the unit for a single invocation.

        For methods, instantiates the owner class and runs its setup hook.

        Returns:
            The zero-argument callable to invoke, and the teardown hook to call
            afterwards (None if there is none).
        """
        if self.owner is None:
            return self.func, None
        instance = self.owner()
        if setup := _find_hook(instance, SETUP_HOOKS):
            setup()
        return self.func.__get__(instance, self.owner), _find_hook(
            instance, TEARDOWN_HOOKS
        )


def _find_hook(instance: object, names: tuple[str, ...]) -> Callable[[], object] | None:
    for name in names:
        if callable(hook := getattr(instance, name, None)):
            return hook
    return None


def _takes_no_arguments(func: Callable[..., object], bound: bool) -> bool:
    params = list(inspect.signature(func).parameters.values())
    if bound:
        params = params[1:]
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in params
    )


def _is_test_function(name: str, obj: object) -> bool:
    return name.startswith(TEST_PREFIX) and inspect.isfunction(obj)


def _is_test_method(name: str, obj: object) -> bool:
    if isinstance(obj, (staticmethod, classmethod)):
        obj = obj.__func__
    return _is_test_function(name, obj)


def _class_members(cls: type) -> dict[str, object]:
    """Return the attributes of `cls` and its bases, base classes first.

    An override keeps the position where the name was first defined.
    """
    members: dict[str, object] = {}
    for klass in reversed(cls.__mro__):
        if klass is not object:
            members.update(vars(klass))
    return members


def display_name(module: ModuleType) -> str:
    """Return the name used for a module in test ids (the file stem if it has one)."""
    if file := getattr(module, "__file__", None):
        return Path(file).stem
    return module.__name__


def collect(module: ModuleType) -> list[TestUnit]:
    """Collect test units from a module in definition order.

    Module-level functions named ``test*`` and methods named ``test*`` on
    classes named ``Test*`` are collected, including inherited methods and
    ``@staticmethod``/``@classmethod`` tests. Tests that require arguments (for
    example pytest fixtures) cannot be run here and are skipped with a warning.

    Args:
        module: The imported test module.

    Returns:
        The collected units.
    """
    units: list[TestUnit] = []
    prefix = display_name(module)
    for name, obj in vars(module).items():
        if _is_test_function(name, obj):
            if getattr(obj, "__module__", None) != module.__name__:
                continue  # imported from elsewhere
            if not _takes_no_arguments(obj, bound=False):
                logger.warning("Skipping %s::%s: it requires arguments", prefix, name)
                continue
            units.append(TestUnit(f"{prefix}::{name}", obj))
        elif (
            inspect.isclass(obj)
            and name.startswith(CLASS_PREFIX)
            and obj.__module__ == module.__name__
            and getattr(obj, "__test__", True)
        ):
            units.extend(_collect_class(prefix, obj))
    logger.debug("Collected %d test(s) from %s", len(units), prefix)
    return units


def _collect_class(prefix: str, cls: type) -> list[TestUnit]:
    units = []
    for name, obj in _class_members(cls).items():
        if not _is_test_method(name, obj):
            continue
        if isinstance(obj, staticmethod):
            takes_no_arguments = _takes_no_arguments(obj.__func__, bound=False)
        else:
            takes_no_arguments = _takes_no_arguments(
                getattr(obj, "__func__", obj), bound=True
            )
        if not takes_no_arguments:
            logger.warning(
                "Skipping %s::%s::%s: it requires arguments",
                prefix,
                cls.__name__,
                name,
            )
            continue
        units.append(TestUnit(f"{prefix}::{cls.__name__}::{name}", obj, owner=cls))
    return units


def load_module(path: str | Path) -> ModuleType:
    """Import a test file by path.

    The module is registered in `sys.modules` only while it executes (so
    dataclasses and pickling inside it work) and removed afterwards.

    Args:
        path: Path to a ``.py`` file.

    Returns:
        The executed module, under a unique private ``__name__``.

    Raises:
        TestModuleImportError: If the file is missing or raises on import
            (including `SystemExit`; only `KeyboardInterrupt` propagates).
    """
    path = Path(path)
    unique_name = f"_coursecheck_{next(_module_counter)}_{path.stem}"
    spec = importlib.util.spec_from_file_location(unique_name, path)
    if spec is None or spec.loader is None:
        raise TestModuleImportError(str(path), ValueError("not a Python source file"))
    module = importlib.util.module_from_spec(spec)
    sys.modules[unique_name] = module
    try:
        spec.loader.exec_module(module)
    except KeyboardInterrupt:
        raise
    except BaseException as e:  # pylint: disable=broad-exception-caught
        raise TestModuleImportError(str(path), e) from e
    finally:
        sys.modules.pop(unique_name, None)
    logger.debug("Loaded test file %s as %s", path, unique_name)
    return module
