"""Environment snapshot with usage tracking and override resolution."""

from __future__ import annotations

import os
import re
import types
from enum import IntEnum
from typing import Any, Iterator, Mapping, Union, get_args, get_origin

from build_provenance.utils.errors import MissingEnvironmentError, OverrideParseError
from build_provenance.utils.logging import get_logger

logger = get_logger("core.environment")

DEFAULT_OVERRIDE_MARKER = "BUILT_OVERRIDE_"
PACKAGE_NAME_KEY = "CARGO_PKG_NAME"

# Exact text an Optional override uses to mean "no value".
NONE_SENTINEL = "None"

_INT_RE = re.compile(r"[+-]?[0-9]+")


class UsageState(IntEnum):
    """How far a variable has been consumed. Only ever moves up."""

    UNUSED = 0
    QUERIED = 1
    USED = 2


class _Unset:
    """Marker for an override that is not present."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _is_text(value: str) -> bool:
    # Undecodable bytes from the OS environment survive as lone surrogates.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def describe_kind(kind: Any) -> str:
    """Human-readable description of an override type."""
    origin = get_origin(kind)
    if origin in (Union, types.UnionType):
        inner = [a for a in get_args(kind) if a is not type(None)]
        return f"{NONE_SENTINEL!r} or {describe_kind(inner[0])}"
    if origin is list:
        (inner,) = get_args(kind) or (str,)
        return f"comma-separated list of {describe_kind(inner)}"
    if kind is bool:
        return "bool ('true' or 'false')"
    if kind is int:
        return "integer"
    return "text"


def _parse_scalar(text: str, kind: Any) -> Any:
    if kind is str:
        return text
    if kind is bool:
        if text == "true":
            return True
        if text == "false":
            return False
        raise ValueError(text)
    if kind is int:
        if not _INT_RE.fullmatch(text):
            raise ValueError(text)
        return int(text)
    raise TypeError(f"Unsupported override type: {kind!r}")


def _parse(text: str, kind: Any) -> Any:
    origin = get_origin(kind)
    if origin in (Union, types.UnionType):
        args = get_args(kind)
        inner = [a for a in args if a is not type(None)]
        if len(inner) != 1 or len(inner) == len(args):
            raise TypeError(f"Unsupported override type: {kind!r}")
        if text == NONE_SENTINEL:
            return None
        return _parse(text, inner[0])
    if origin is list:
        (inner,) = get_args(kind) or (str,)
        if not text.strip():
            return []
        return [_parse(segment.strip(), inner) for segment in text.split(",")]
    return _parse_scalar(text, kind)


def parse_override(key: str, text: str, kind: Any = str) -> Any:
    """Parse the text of an override variable.

    Args:
        key: Override variable name, used in the error message
        text: Raw value
        kind: `str`, `int`, `bool`, `list[T]` or `Optional[T]`

    Returns:
        The parsed value

    Raises:
        OverrideParseError: If the text does not have the expected shape
        TypeError: If `kind` is not a supported override type
    """
    try:
        return _parse(text, kind)
    except ValueError:
        raise OverrideParseError(key, text, describe_kind(kind)) from None


class EnvironmentSnapshot:
    """An immutable copy of the process environment.

    Values never change after construction. Each key carries a usage
    state that lookups upgrade (`UNUSED -> QUERIED -> USED`) so that
    override variables nobody asked for can be reported.

    Example:
        env = EnvironmentSnapshot.capture()
        version = env.get("CARGO_PKG_VERSION")
        features = env.get_override("FEATURES", list[str])
        for key in env.unused_overrides():
            print(f"warning: {key} was set but not used")
    """

    def __init__(
        self,
        environ: Mapping[str, str],
        override_marker: str = DEFAULT_OVERRIDE_MARKER,
    ) -> None:
        """Create a snapshot from an explicit mapping.

        Args:
            environ: Variable names to values
            override_marker: Prefix of override variables
        """
        self._values: dict[str, str] = dict(environ)
        self._usage: dict[str, UsageState] = {k: UsageState.UNUSED for k in self._values}
        self.override_marker = override_marker

    @classmethod
    def capture(
        cls,
        environ: Mapping[str, str] | None = None,
        override_marker: str = DEFAULT_OVERRIDE_MARKER,
    ) -> "EnvironmentSnapshot":
        """Capture the environment, dropping variables that are not valid text.

        Args:
            environ: Source mapping, defaults to the live process environment
            override_marker: Prefix of override variables
        """
        source = os.environ if environ is None else environ
        values = {k: v for k, v in source.items() if _is_text(k) and _is_text(v)}
        dropped = len(source) - len(values)
        if dropped:
            logger.debug("Dropped %d environment variables that are not valid text", dropped)
        return cls(values, override_marker=override_marker)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def _mark(self, key: str, state: UsageState) -> None:
        if state > self._usage[key]:
            self._usage[key] = state

    def peek(self, key: str) -> str | None:
        """Look up a key without recording usage."""
        return self._values.get(key)

    def get(self, key: str) -> str | None:
        """Look up a key, marking it as queried on a hit."""
        value = self._values.get(key)
        if value is not None:
            self._mark(key, UsageState.QUERIED)
        return value

    def require(self, key: str) -> str:
        """Look up a key that must be present.

        Raises:
            MissingEnvironmentError: If the key is absent
        """
        value = self.get(key)
        if value is None:
            raise MissingEnvironmentError(key)
        return value

    def with_prefix(self, prefix: str) -> dict[str, str]:
        """All variables whose name starts with `prefix`, marked as queried."""
        found = {k: v for k, v in self._values.items() if k.startswith(prefix)}
        for key in found:
            self._mark(key, UsageState.QUERIED)
        return found

    def usage(self, key: str) -> UsageState | None:
        """Usage state of a key, or None if it is absent."""
        return self._usage.get(key)

    @property
    def package_name(self) -> str:
        """Name of the package being built.

        Raises:
            MissingEnvironmentError: If CARGO_PKG_NAME is absent
        """
        return self.require(PACKAGE_NAME_KEY)

    @property
    def override_prefix(self) -> str:
        """Prefix shared by every override variable of this package."""
        return f"{self.override_marker}{self.package_name}_"

    def override_key(self, field: str) -> str:
        """Full variable name of the override for `field`."""
        return f"{self.override_prefix}{field}"

    def get_override(self, field: str, kind: Any = str, default: Any = UNSET) -> Any:
        """Resolve the override for a logical field.

        Args:
            field: Logical field name, e.g. "GIT_DIRTY"
            kind: Expected type, see `parse_override`
            default: Returned when no override is set

        Returns:
            The parsed override, or `default` if the variable is absent

        Raises:
            OverrideParseError: If the override is present but malformed
        """
        key = self.override_key(field)
        text = self._values.get(key)
        if text is None:
            return default
        value = parse_override(key, text, kind)
        self._mark(key, UsageState.USED)
        logger.debug("Using override %s=%r", key, text)
        return value

    def unused_overrides(self) -> list[str]:
        """Override variables of this package that nothing looked at."""
        prefix = self.override_prefix
        return sorted(
            k for k, state in self._usage.items()
            if k.startswith(prefix) and state is UsageState.UNUSED
        )

    def used_overrides(self) -> list[str]:
        """Fields whose override was honored, without the variable prefix."""
        prefix = self.override_prefix
        return sorted(
            k[len(prefix):] for k, state in self._usage.items()
            if k.startswith(prefix) and state is UsageState.USED
        )
