# topmark:header:start
#
#   project      : ShapeGen
#   file         : cli_types.py
#   file_relpath : src/shapegen/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types and the argument namespace.

`ArgsNamespace` is the mapping passed from Click commands to
`shapegen.config.model.MutableConfig.apply_cli_args`; `EnumChoiceParam`
parses ``--format``-style options straight into Enum members.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, NoReturn, Protocol, TypedDict, TypeVar, cast

import click

if TYPE_CHECKING:
    from collections.abc import Iterable

    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    ParamTypeBase = click.ParamType

E = TypeVar("E", bound=Enum)


class ArgsNamespace(TypedDict, total=False):
    """Parsed CLI options that override configuration values.

    Attributes:
        verbosity_level (int | None): Program-output verbosity.
        apply_changes (bool | None): Whether ``generate`` writes files.
        root_name (str | None): ``--root-name``.
        declare_root (bool | None): False with ``--no-root``.
        scalar_sequences (bool | None): ``--scalar-sequences/--strict-sequences``.
        sample_comments (bool | None): ``--sample-comments/--no-sample-comments``.
        namespace (str | None): ``--namespace``.
        output_dir (str | None): ``--output-dir``.
    """

    verbosity_level: int | None
    apply_changes: bool | None
    root_name: str | None
    declare_root: bool | None
    scalar_sequences: bool | None
    sample_comments: bool | None
    namespace: str | None
    output_dir: str | None


def build_args_namespace(
    *,
    verbosity_level: int | None = None,
    apply_changes: bool | None = None,
    root_name: str | None = None,
    no_root: bool = False,
    scalar_sequences: bool | None = None,
    sample_comments: bool | None = None,
    namespace: str | None = None,
    output_dir: str | None = None,
) -> ArgsNamespace:
    """Build an `ArgsNamespace`; ``no_root`` maps to ``declare_root=False``."""
    return {
        "verbosity_level": verbosity_level,
        "apply_changes": apply_changes,
        "root_name": root_name,
        "declare_root": False if no_root else None,
        "scalar_sequences": scalar_sequences,
        "sample_comments": sample_comments,
        "namespace": namespace,
        "output_dir": output_dir,
    }


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a (case-insensitive) string value to the Enum member."""
        if value is None or isinstance(value, self.enum_cls):
            return value
        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click (``_SHAPEGEN_COMPLETE=bash_source shapegen``)."""
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix: str = (incomplete or "").lower()
        return [RuntimeCompletionItem(c) for c in self.choices if c.lower().startswith(prefix)]

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumChoiceParam({self.enum_cls.__name__})"
