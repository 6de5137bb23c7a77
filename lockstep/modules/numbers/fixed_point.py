# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import random
import re
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from numbers import Number
from typing import Any

from pydantic import NonNegativeInt, PositiveInt, model_validator

from lockstep.core.constraint import Config, ConfigurationError, Constraint, ParseFailure
from lockstep.core.module import ModuleRegistry

log = logging.getLogger(__name__)

# A plain numeric literal: no surrounding whitespace, no digit-group underscores
NUMERIC_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Chance of emitting an exact bound instead of an interior draw
BOUNDARY_PROBABILITY = 0.05


class DecimalConfig(Config):
    """
    precision: the number of digits in the unscaled value
    scale: the number of digits to the right of the decimal point
    min, max: inclusive bounds

    Note that -1E-75 has a precision of 1 and a scale of 75, so for the
    sanest results specify both precision and scale.
    """
    precision: PositiveInt | None = None
    scale: NonNegativeInt | None = None
    min: Decimal | None = None
    max: Decimal | None = None

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.min is not None and self.max is not None and self.max < self.min:
            raise ValueError(f"max {self.max} is less than min {self.min}")
        if self.precision is not None and self.scale is not None and self.precision < self.scale:
            raise ValueError(f"precision {self.precision} is less than scale {self.scale}")
        for bound in (self.min, self.max):
            if bound is not None and not bound.is_finite():
                raise ValueError(f"bound {bound} is not finite")
        return self


def to_decimal(value: Any) -> Decimal:
    """Parse a number or numeric string into an exact, finite Decimal."""
    if isinstance(value, bool):
        raise ParseFailure(f"{value!r} is not a number")
    try:
        if isinstance(value, float):
            # repr gives the shortest string that round-trips, not the binary expansion
            d = Decimal(repr(value))
        elif isinstance(value, str):
            if not NUMERIC_LITERAL.fullmatch(value):
                raise ParseFailure(f"{value!r} is not a number")
            d = Decimal(value)
        elif isinstance(value, (Decimal, int)):
            d = Decimal(value)
        elif isinstance(value, Number):
            d = Decimal(str(value))
        else:
            raise ParseFailure(f"{value!r} is not a number")
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ParseFailure(f"{value!r} is not a number") from e

    if not d.is_finite():
        raise ParseFailure(f"{value!r} is not finite")
    return d


def precision_of(d: Decimal) -> int:
    return len(d.as_tuple().digits)


def scale_of(d: Decimal) -> int:
    return -d.as_tuple().exponent


def max_magnitude(precision: int, scale: int | None = None) -> Decimal:
    """The largest value representable with `precision` digits, `scale` of them fractional."""
    scale = scale or 0
    return Context(prec=precision + 1).subtract(Decimal(1).scaleb(precision - scale), Decimal(1).scaleb(-scale))


def _wide_context(*values: Decimal, extra: int = 0) -> Context:
    digits = max((max(precision_of(v), v.adjusted() + 1) + abs(scale_of(v)) for v in values), default=0)
    return Context(prec=max(28, digits + extra + 2), rounding=ROUND_HALF_UP)


@ModuleRegistry.register
class DecimalConstraint(Constraint[Decimal]):
    """
    Specs a fixed-point decimal number.

    A value satisfies this constraint if its precision and scale are not
    greater than the configured precision and scale, and it lies within
    [min, max]. Anything `to_decimal` accepts can be checked. A negative scale
    (e.g. 1E+2) always fails a configured scale.
    """
    config_type = DecimalConfig

    def __init__(self, config: DecimalConfig | None = None, **options):
        super().__init__(config, **options)

        # The bounds must be values of the shape they bound
        for label, bound in (("min", self.config.min), ("max", self.config.max)):
            if bound is not None and not self._valid_shape(bound):
                raise ConfigurationError(
                    f"{label} {bound} does not fit precision={self.config.precision} scale={self.config.scale}"
                )

        self._low, self._high = self._generator_bounds()
        log.debug(f"Generator bounds for {self.describe()}: [{self._low}, {self._high}]")

    def _valid_shape(self, d: Decimal) -> bool:
        precision, scale = self.config.precision, self.config.scale
        if precision is not None and precision < precision_of(d):
            return False
        if scale is not None:
            d_scale = scale_of(d)
            if d_scale < 0 or scale < d_scale:
                return False
        return True

    def __call__(self, value: Any) -> bool:
        try:
            d = to_decimal(value)
        except ParseFailure:
            return False

        if not self._valid_shape(d):
            return False
        if self.config.min is not None and d < self.config.min:
            return False
        if self.config.max is not None and d > self.config.max:
            return False
        return True

    def _generator_bounds(self) -> tuple[Decimal | None, Decimal | None]:
        low, high = self.config.min, self.config.max
        if self.config.precision is not None:
            # Derived from precision and scale together, so the draw is in shape before rounding
            limit = max_magnitude(self.config.precision, self.config.scale)
            if low is None:
                low = limit.copy_negate()
            if high is None:
                high = limit
        return low, high

    def _draw(self, rng: random.Random) -> Decimal:
        low, high = self._low, self._high

        # Open ends get a random span
        if low is None and high is None:
            magnitude = Decimal(1).scaleb(rng.randint(-6, 15))
            low, high = magnitude.copy_negate(), magnitude
        elif low is None:
            low = _wide_context(high, extra=17).subtract(high, Decimal(1).scaleb(rng.randint(0, 15)))
        elif high is None:
            high = _wide_context(low, extra=17).add(low, Decimal(1).scaleb(rng.randint(0, 15)))

        roll = rng.random()
        if roll < BOUNDARY_PROBABILITY:
            return low
        if roll < 2 * BOUNDARY_PROBABILITY:
            return high

        ctx = _wide_context(low, high, extra=17)
        fraction = Decimal(repr(rng.random()))
        return ctx.add(low, ctx.multiply(ctx.subtract(high, low), fraction))

    def generate(self, rng: random.Random) -> Decimal:
        d = self._draw(rng)

        # Scale first, so that precision rounding cannot add fractional digits back
        if self.config.scale is not None:
            d = d.quantize(Decimal(1).scaleb(-self.config.scale), context=_wide_context(d, extra=self.config.scale))
        if self.config.precision is not None:
            d = Context(prec=self.config.precision, rounding=ROUND_HALF_UP).plus(d)

        # Rounding is monotone and the bounds are in shape, so clamping keeps the shape
        if self._low is not None and d < self._low:
            d = self._low
        if self._high is not None and d > self._high:
            d = self._high
        return d


def decimal_in(**options) -> DecimalConstraint:
    """Specs a decimal number. See `DecimalConfig` for the options."""
    return DecimalConstraint(**options)
