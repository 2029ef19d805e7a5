"""Exceptions raised at the boundaries of querymap.

Parsing, merging and normalizing never fail. Errors only come from the two
external steps: splitting a raw URL and decoding a tree into a record.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DecodeError", "FieldError", "QueryMapError", "URLParseError"]


class QueryMapError(Exception):
    """Base class for all querymap errors."""


class URLParseError(QueryMapError, ValueError):
    """A raw URL string could not be parsed.

    Attributes:
        url:    The offending input.
        reason: Why parsing failed, e.g. "missing protocol scheme".
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f'parse "{url}": {reason}')


@dataclass(frozen=True, slots=True)
class FieldError:
    """One field that could not be decoded."""

    field: str
    cause: str

    def __str__(self) -> str:
        if not self.field:
            return self.cause
        return f"{self.field}: {self.cause}"


class DecodeError(QueryMapError, ValueError):
    """A value tree could not be decoded into the target type.

    All field failures are collected before raising. The message lists one
    ``* <field>: <cause>`` line per failure, sorted::

        2 error(s) decoding:

        * age: Input should be a valid integer
        * name: Field required

    Attributes:
        errors:  Every failure, in reporting order.
        target:  The type that was being decoded into.
        shown:   Number of failures listed in the message (all by default).
    """

    def __init__(
        self, errors: list[FieldError], target: object = None, shown: int | None = None
    ) -> None:
        self.errors = sorted(errors, key=str)
        self.target = target
        self.shown = len(self.errors) if shown is None else min(shown, len(self.errors))
        super().__init__(self._format())

    def _format(self) -> str:
        points = [f"* {error}" for error in self.errors[: self.shown]]
        hidden = len(self.errors) - self.shown
        if hidden:
            points.append(f"* ... and {hidden} more")
        return f"{len(self.errors)} error(s) decoding:\n\n" + "\n".join(points)
