# topmark:header:start
#
#   project      : ShapeGen
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ShapeGen test suite.

Sets up global fixtures and verbose logging for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `shapegen.config.model.MutableConfig` (mutable), then
      `freeze()` into a `shapegen.config.model.Config` for **public API** calls.
    - Do **not** mutate a frozen `Config`. If you need to tweak one, call
      `Config.thaw()`, edit the returned `MutableConfig`, then `freeze()` again.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from shapegen.config import logging
from shapegen.config.model import MutableConfig

if TYPE_CHECKING:
    from pathlib import Path

    from shapegen.config.model import Config

F = TypeVar("F", bound=Callable[..., object])

# Type of a decorator that returns the callable it wraps.
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_shapegen_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ShapeGen's runtime log level is not forced via env during tests.

    Avoids DEBUG/TRACE noise when the developer has exported
    SHAPEGEN_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for the whole test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from the packaged defaults and overrides.

    Args:
        **overrides (Any): Attributes set on the mutable builder before freezing
            (e.g. ``root_name="Repo"``, ``type_overrides={"text": "Text"}``).

    Returns:
        Config: An immutable configuration snapshot for use in tests.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


def write_json(path: Path, document: Any) -> Path:
    """Write ``document`` as JSON to ``path`` (parents created) and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


# Sample shared by the end-to-end tests: a record with a scalar list and a
# nested object.
SAMPLE_DOCUMENT: dict[str, Any] = {"id": 1, "tags": ["a", "b"], "owner": {"id": 2, "name": "x"}}

_LOOKUP = " " * 21 + "v .:"

# Declarations printed by `infer` for SAMPLE_DOCUMENT with the default config.
SAMPLE_DECLARATIONS: str = (
    "type Tags = [UNKNOWN]\n"
    "\n"
    "data Owner = Owner {\n"
    "    _id   :: Double\n"
    "  , _name :: BS.ByteString -- x\n"
    "} deriving (Show, Data, Typeable)\n"
    "\n"
    "data Root = Root {\n"
    "    _id    :: Double\n"
    "  , _tags  :: [UNKNOWN]\n"
    "  , _owner :: Owner\n"
    "} deriving (Show, Data, Typeable)\n"
    "\n"
    "instance FromJSON Owner where\n"
    "  parseJSON (Object v) = Owner <$>\n"
    f'{_LOOKUP} "id" <*>\n'
    f'{_LOOKUP} "name"\n'
    "  parseJSON _            = empty\n"
    "\n"
    "instance FromJSON Root where\n"
    "  parseJSON (Object v) = Root <$>\n"
    f'{_LOOKUP} "id" <*>\n'
    f'{_LOOKUP} "tags" <*>\n'
    f'{_LOOKUP} "owner"\n'
    "  parseJSON _            = empty\n"
)
