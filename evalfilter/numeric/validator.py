"""Validation and normalization of numeric column values."""

import logging
import re
from dataclasses import dataclass
from decimal import (
    ROUND_HALF_UP,
    Decimal,
    DefaultContext,
    InvalidOperation,
    getcontext,
    localcontext,
)
from enum import Enum
from typing import Any, Mapping

from evalfilter.numeric.constraint import NumericConstraint, SchemaParseError, parse_constraint

logger = logging.getLogger(__name__)

NUMERIC_LITERAL = re.compile(r"^-?\d+(\.\d+)?$")
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.eE+\-]")

# Half away from zero: 0.075 with step 0.05 becomes 0.1, -0.075 becomes -0.1.
STEP_ROUNDING = ROUND_HALF_UP

# Values whose exponent falls outside the default context range are not repaired.
MAX_EXPONENT = DefaultContext.Emax
MIN_EXPONENT = DefaultContext.Emin

SchemaLike = str | Mapping[str, Any] | NumericConstraint | None


class ValidationReason(str, Enum):
    """Why a value was rejected."""

    NOT_A_NUMBER = "not_a_number"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    NOT_AN_INTEGER = "not_an_integer"
    PRECISION_EXCEEDED = "precision_exceeded"
    INVALID_SCHEMA = "invalid_schema"


@dataclass
class ValidationResult:
    """
    Outcome of validating a value against a numeric constraint.

    Attributes:
        ok: Whether the value is acceptable
        reason: First failed rule, if any
        decimal_places: Places allowed by multipleOf (set for PRECISION_EXCEEDED)
        message: Human-readable detail
    """

    ok: bool
    reason: ValidationReason | None = None
    decimal_places: int | None = None
    message: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "ok": self.ok,
            "reason": self.reason.value if self.reason else None,
            "decimal_places": self.decimal_places,
            "message": self.message,
        }


def decimal_places(value: Decimal) -> int:
    """Number of significant digits after the decimal point."""
    exponent = value.normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def exact_precision(*operands: Decimal | None) -> int:
    """Context precision large enough for exact arithmetic on the operands."""
    digits = 0
    for operand in operands:
        if operand is None:
            continue
        _, coefficient, exponent = operand.as_tuple()
        digits += len(coefficient) + abs(exponent)
    return max(getcontext().prec, digits + 2)


def _fail(reason: ValidationReason, message: str, **kwargs: Any) -> ValidationResult:
    return ValidationResult(ok=False, reason=reason, message=message, **kwargs)


def validate(raw: str, schema: SchemaLike = None) -> ValidationResult:
    """
    Check a raw value against a column's numeric constraint.

    Rules run in order and the first failure is reported: numeric literal,
    range, integer (integer columns), step (non-integer columns with
    multipleOf). Nothing is coerced.

    Args:
        raw: Value as typed by the user
        schema: Column schema (JSON text, mapping or parsed constraint)

    Returns:
        ValidationResult
    """
    try:
        constraint = parse_constraint(schema)
    except SchemaParseError as e:
        return _fail(ValidationReason.INVALID_SCHEMA, str(e))

    if not isinstance(raw, str) or not NUMERIC_LITERAL.match(raw):
        return _fail(ValidationReason.NOT_A_NUMBER, f"Not a number: {raw!r}")

    value = Decimal(raw)

    if constraint.minimum is not None and value < constraint.minimum:
        return _fail(
            ValidationReason.BELOW_MINIMUM,
            f"{raw} is less than minimum {constraint.minimum}",
        )
    if constraint.maximum is not None and value > constraint.maximum:
        return _fail(
            ValidationReason.ABOVE_MAXIMUM,
            f"{raw} is greater than maximum {constraint.maximum}",
        )

    step = constraint.multiple_of
    with localcontext() as ctx:
        ctx.prec = exact_precision(value, step)
        if constraint.is_integer:
            if value != value.to_integral_value():
                return _fail(ValidationReason.NOT_AN_INTEGER, f"{raw} is not an integer")
        elif step is not None and value % step != 0:
            places = decimal_places(step)
            return _fail(
                ValidationReason.PRECISION_EXCEEDED,
                f"{raw} is not a multiple of {step} ({places} decimal places allowed)",
                decimal_places=places,
            )

    return ValidationResult(ok=True)


def format_decimal(value: Decimal) -> str:
    """Render a decimal in plain notation without trailing fractional zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def _quantize_to_step(value: Decimal, step: Decimal) -> Decimal:
    multiple = (value / step).quantize(Decimal(1), rounding=STEP_ROUNDING)
    rounded = multiple * step
    places = max(decimal_places(step), decimal_places(rounded))
    return rounded.quantize(Decimal(1).scaleb(-places))


def _normalize(raw: str, constraint: NumericConstraint) -> str:
    cleaned = _NON_NUMERIC_CHARS.sub("", raw)
    if not cleaned:
        return ""
    value = Decimal(cleaned)
    if not value.is_finite():
        return ""
    if not MIN_EXPONENT <= value.adjusted() <= MAX_EXPONENT:
        logger.debug(f"Exponent of {cleaned!r} is out of range")
        return ""

    if constraint.minimum is not None and value < constraint.minimum:
        value = constraint.minimum
    if constraint.maximum is not None and value > constraint.maximum:
        value = constraint.maximum

    step = constraint.multiple_of
    if step is None and constraint.is_integer:
        step = Decimal(1)
    if step is not None:
        with localcontext() as ctx:
            ctx.prec = exact_precision(value, step)
            value = _quantize_to_step(value, step)

    return format_decimal(value)


def normalize(raw: str, schema: SchemaLike = None) -> str:
    """
    Repair a raw value so it satisfies the column's numeric constraint.

    Stray characters are stripped, the value is clamped into
    [minimum, maximum], then rounded to the nearest multiple of multipleOf
    (half away from zero). Never raises.

    Args:
        raw: Value as typed or pasted by the user
        schema: Column schema (JSON text, mapping or parsed constraint)

    Returns:
        Normalized string, or '' when the value cannot be repaired
    """
    try:
        constraint = parse_constraint(schema)
        return _normalize(str(raw), constraint)
    except (SchemaParseError, InvalidOperation, ArithmeticError, ValueError) as e:
        logger.debug(f"Could not normalize {raw!r}: {e}")
        return ""
