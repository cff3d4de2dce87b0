"""
Checked numeric and string conversions.

Python numbers are unbounded, so the fixed-width C-style types of a
configuration value are described by :class:`NumericType` descriptors.
:func:`checked_cast` converts a value from a source descriptor to a target
descriptor and raises instead of silently wrapping, truncating or rounding.
"""

import math
import struct
import sys
from dataclasses import dataclass
from typing import Any

from cfgtree.config.errors import (
    CastOverflowError,
    CastUnderflowError,
    ConfigTypeError,
)

KIND_BOOL = "bool"
KIND_INT = "int"
KIND_FLOAT = "float"
KIND_STRING = "string"

FLOAT32_MAX: float = 3.4028234663852886e38
FLOAT64_MAX: float = sys.float_info.max


@dataclass(frozen=True)
class NumericType:
    """Describes a fixed-width target or source type of a checked cast."""

    name: str
    kind: str
    bits: int = 0
    signed: bool = True

    @property
    def min_value(self) -> int | float | None:
        """Smallest finite value representable by this type."""
        if self.kind == KIND_INT:
            return -(2 ** (self.bits - 1)) if self.signed else 0
        if self.kind == KIND_FLOAT:
            return -self.max_value  # type: ignore[operator]
        return None

    @property
    def max_value(self) -> int | float | None:
        """Largest finite value representable by this type."""
        if self.kind == KIND_INT:
            return 2 ** (self.bits - 1) - 1 if self.signed else 2**self.bits - 1
        if self.kind == KIND_FLOAT:
            return FLOAT32_MAX if self.bits == 32 else FLOAT64_MAX
        return None

    @property
    def is_arithmetic(self) -> bool:
        """Whether the type is a boolean, integral or floating point type."""
        return self.kind in (KIND_BOOL, KIND_INT, KIND_FLOAT)

    def __str__(self) -> str:
        return self.name


BOOL = NumericType("bool", KIND_BOOL, 1, False)
INT8 = NumericType("int8", KIND_INT, 8)
INT16 = NumericType("int16", KIND_INT, 16)
INT32 = NumericType("int32", KIND_INT, 32)
INT64 = NumericType("int64", KIND_INT, 64)
UINT8 = NumericType("uint8", KIND_INT, 8, False)
UINT16 = NumericType("uint16", KIND_INT, 16, False)
UINT32 = NumericType("uint32", KIND_INT, 32, False)
UINT64 = NumericType("uint64", KIND_INT, 64, False)
FLOAT32 = NumericType("float32", KIND_FLOAT, 32)
FLOAT64 = NumericType("float64", KIND_FLOAT, 64)
STRING = NumericType("string", KIND_STRING)


def type_name(descriptor: NumericType) -> str:
    """
    Return the human-readable name of a type descriptor.

    :param descriptor: Type descriptor
    :type descriptor: NumericType
    :return: Name used in error messages, e.g. ``int32``
    :rtype: str
    """
    return descriptor.name


def descriptor_of(value: Any) -> NumericType:
    """
    Return the canonical descriptor of a Python value.

    Booleans map to ``bool``, integers to ``int64``, floats to ``float64``
    and strings to ``string``.

    :param value: Value to inspect
    :type value: Any
    :return: Canonical type descriptor
    :rtype: NumericType
    :raises ConfigTypeError: If the value is not a scalar supported by casts
    """
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, int):
        return INT64
    if isinstance(value, float):
        return FLOAT64
    if isinstance(value, str):
        return STRING
    raise ConfigTypeError(
        f"Cannot cast a value of Python type `{type(value).__name__}`!"
    )


def _range_error(
    value: Any, source: NumericType, target: NumericType
) -> ConfigTypeError:
    if value < target.min_value:  # type: ignore[operator]
        return CastUnderflowError(
            f"Cannot convert {value!r} from `{source}` to `{target}`: underflow, "
            f"minimum is {target.min_value!r}!"
        )
    return CastOverflowError(
        f"Cannot convert {value!r} from `{source}` to `{target}`: overflow, "
        f"maximum is {target.max_value!r}!"
    )


def _round_to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _to_string(value: Any, source: NumericType) -> str:
    if source.kind == KIND_BOOL:
        return "true" if value else "false"
    if source.kind == KIND_INT:
        return str(int(value))
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(float(value))


def _int_to_int(value: int, source: NumericType, target: NumericType) -> int:
    if not target.min_value <= value <= target.max_value:  # type: ignore[operator]
        raise _range_error(value, source, target)
    return int(value)


def _int_to_float(value: int, source: NumericType, target: NumericType) -> float:
    try:
        converted = float(value)
        if target.bits == 32:
            converted = _round_to_float32(converted)
    except OverflowError as e:
        raise _range_error(value, source, target) from e

    if int(converted) != value:
        raise ConfigTypeError(
            f"Cannot convert {value!r} from `{source}` to `{target}` without "
            f"loss of precision!"
        )
    return converted


def _float_to_float(value: float, source: NumericType, target: NumericType) -> float:
    # NaN and infinity keep their meaning in every floating point type
    if math.isnan(value) or math.isinf(value):
        return float(value)
    if not target.min_value <= value <= target.max_value:  # type: ignore[operator]
        raise _range_error(value, source, target)
    if target.bits == 32:
        return _round_to_float32(value)
    return float(value)


def _float_to_int(value: float, source: NumericType, target: NumericType) -> int:
    if not math.isfinite(value):
        raise ConfigTypeError(
            f"Cannot convert {value!r} from `{source}` to `{target}`: value is "
            f"not finite!"
        )
    # Comparisons between float and int are exact in Python
    if value < target.min_value or value >= target.max_value + 1:  # type: ignore[operator]
        raise _range_error(value, source, target)
    if not float(value).is_integer():
        raise ConfigTypeError(
            f"Cannot convert {value!r} from `{source}` to `{target}` without "
            f"loss of precision!"
        )
    return int(value)


def checked_cast(
    value: Any, target: NumericType, source: NumericType | None = None
) -> Any:
    """
    Convert a value to the target type, failing instead of losing information.

    Supported conversions are identity, integral to integral (any width and
    signedness), floating to floating, integral to floating (exactly
    representable values only), floating to integral (finite values without
    a fractional part only), boolean to integral (0/1), arithmetic to
    boolean (non-zero is ``True``) and any arithmetic value to its decimal
    string. Strings are never converted to other types.

    :param value: Value to convert
    :type value: Any
    :param target: Target type descriptor
    :type target: NumericType
    :param source: Source type descriptor, defaults to the canonical
        descriptor of ``value``
    :type source: NumericType | None
    :return: The converted value
    :rtype: Any
    :raises CastOverflowError: If the value exceeds the target's maximum
    :raises CastUnderflowError: If the value is below the target's minimum
    :raises ConfigTypeError: If the conversion is unsupported or lossy

    Example:
        >>> checked_cast(127, INT8)
        127
        >>> checked_cast(2.0, INT32)
        2
        >>> checked_cast(128, INT8)
        Traceback (most recent call last):
        ...
        cfgtree.config.errors.CastOverflowError: Cannot convert 128 from `int64` to `int8`: overflow, maximum is 127!
    """
    if source is None:
        source = descriptor_of(value)

    if source.kind == KIND_STRING:
        if target.kind == KIND_STRING:
            return str(value)
        raise ConfigTypeError(
            f"Cannot convert {value!r} from `{source}` to `{target}`: strings "
            f"are not converted to other types!"
        )

    if target.kind == KIND_STRING:
        return _to_string(value, source)

    if target.kind == KIND_BOOL:
        return value != 0

    if source.kind == KIND_BOOL:
        value = 1 if value else 0
        source = UINT8

    if source.kind == KIND_INT:
        if target.kind == KIND_INT:
            return _int_to_int(value, source, target)
        return _int_to_float(value, source, target)

    if target.kind == KIND_FLOAT:
        return _float_to_float(value, source, target)
    return _float_to_int(value, source, target)
