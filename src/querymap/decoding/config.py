"""DecoderConfig: options for decoding a value tree into a typed record.

DecoderConfig is a frozen (immutable) dataclass. The defaults give the
weakly typed, tag-driven behaviour: keys are matched against field aliases
and textual leaves are coerced to the field types where possible.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DecoderConfig:
    """Immutable configuration for StructDecoder.

    Attributes:
        weakly_typed: When True (default), run the weak-coercion pre-pass and
            validate in pydantic lax mode ("1" -> 1, "true" -> True, a single
            value -> one-element list). When False, validate in strict mode.
        by_alias: When True (default), tree keys are matched against field
            aliases, the declared external names. When False, they are
            matched against the Python attribute names instead.
        empty_string_as_zero: When True (default), an empty string decoded
            into an ``int`` or ``float`` field becomes 0. Only applies when
            ``weakly_typed`` is True.
        max_errors: Maximum number of failures listed in a DecodeError
            message. ``None`` (default) lists all of them. The count in the
            message header is always the full count.
    """

    weakly_typed: bool = True
    by_alias: bool = True
    empty_string_as_zero: bool = True
    max_errors: int | None = None

    def __post_init__(self) -> None:
        if self.max_errors is not None and self.max_errors < 1:
            msg = f"max_errors must be >= 1 or None, got {self.max_errors}"
            raise ValueError(msg)
