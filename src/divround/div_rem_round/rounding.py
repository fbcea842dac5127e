# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Signed div/rem with a selectable rounding policy.

The magnitudes are divided with the unsigned algorithm (truncating toward
zero), then the rounding policy decides whether the magnitude of the
quotient goes up by one. Whatever the policy,
``dividend == quotient * divisor + remainder``.
"""

from nmigen.hdl.ast import Const
import decimal
import enum
import logging

from .algorithm import (check_operands, QuotientRemainder, UnsignedDivMod,
                        unsigned_divmod)
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


class RoundingPolicy(enum.Enum):
    """ Rounding policy for the quotient.

    :attribute UP: round away from zero.
    :attribute DOWN: round toward zero (truncate).
    :attribute CEILING: round toward positive infinity.
    :attribute FLOOR: round toward negative infinity.
    :attribute HALF_UP: round to nearest, ties away from zero.
    :attribute HALF_DOWN: round to nearest, ties toward zero.
    :attribute HALF_EVEN: round to nearest, ties to the even quotient.
    :attribute UNNECESSARY: the division must be exact.
    """

    UP = 0
    DOWN = 1
    CEILING = 2
    FLOOR = 3
    HALF_UP = 4
    HALF_DOWN = 5
    HALF_EVEN = 6
    UNNECESSARY = 7

    def __int__(self):
        """ Convert to int. """
        return self.value

    @classmethod
    def cast(cls, value):
        """ Convert ``value`` to a ``RoundingPolicy``.

        :param value: a ``RoundingPolicy``, or the name of one in any case
            with ``_``, ``-`` or nothing between the words (``"half_even"``,
            ``"HalfEven"``, ``"HALF-EVEN"``).
        :raises InvalidArgument: if value names no policy
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.replace("_", "").replace("-", "").upper()
            for policy in cls:
                if policy.name.replace("_", "") == key:
                    return policy
        raise InvalidArgument(f"unknown rounding policy: {value!r}")

    @classmethod
    def from_decimal(cls, mode):
        """ Get the policy matching a ``decimal.ROUND_*`` constant. """
        for policy, decimal_mode in _DECIMAL_MODES.items():
            if decimal_mode == mode:
                return policy
        raise InvalidArgument(f"no rounding policy matches {mode!r}")

    def to_decimal(self):
        """ Get the matching ``decimal.ROUND_*`` constant. """
        try:
            return _DECIMAL_MODES[self]
        except KeyError:
            raise InvalidArgument(f"{self} has no decimal rounding "
                                  "mode") from None

    def increments(self, abs_quotient, abs_remainder, abs_divisor,
                   opposite_signs):
        """ Check if the truncated quotient's magnitude needs to go up by one.

        :param abs_quotient: magnitude of the truncated quotient
        :param abs_remainder: magnitude of the truncated remainder
        :param abs_divisor: magnitude of the divisor
        :param opposite_signs: True if the exact quotient is negative
        :returns bool:
        """
        return _INCREMENT_RULES[self](abs_quotient, abs_remainder,
                                      abs_divisor, opposite_signs)


def _half_up(q, r, d, opposite_signs):
    # d >> 1 is only ever applied to the non-negative magnitude
    return r >= d >> 1


def _half_down(q, r, d, opposite_signs):
    return r > d >> 1


def _half_even(q, r, d, opposite_signs):
    # (q & 1) != 0 is true if q is odd
    return r > d >> 1 or r == d >> 1 and (q & 1) != 0


_INCREMENT_RULES = {
    RoundingPolicy.UP: lambda q, r, d, opposite_signs: r != 0,
    RoundingPolicy.DOWN: lambda q, r, d, opposite_signs: False,
    RoundingPolicy.CEILING:
        lambda q, r, d, opposite_signs: r != 0 and not opposite_signs,
    RoundingPolicy.FLOOR:
        lambda q, r, d, opposite_signs: r != 0 and opposite_signs,
    RoundingPolicy.HALF_UP: _half_up,
    RoundingPolicy.HALF_DOWN: _half_down,
    RoundingPolicy.HALF_EVEN: _half_even,
    # inexact divisions were already rejected
    RoundingPolicy.UNNECESSARY: lambda q, r, d, opposite_signs: False,
}

if _INCREMENT_RULES.keys() != set(RoundingPolicy):
    raise TypeError("every RoundingPolicy needs an increment rule")

_DECIMAL_MODES = {
    RoundingPolicy.UP: decimal.ROUND_UP,
    RoundingPolicy.DOWN: decimal.ROUND_DOWN,
    RoundingPolicy.CEILING: decimal.ROUND_CEILING,
    RoundingPolicy.FLOOR: decimal.ROUND_FLOOR,
    RoundingPolicy.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingPolicy.HALF_DOWN: decimal.ROUND_HALF_DOWN,
    RoundingPolicy.HALF_EVEN: decimal.ROUND_HALF_EVEN,
}


class DivModResult(QuotientRemainder):
    """ Result of a signed division.

    ``dividend == quotient * divisor + remainder``
    """

    __slots__ = ()


def round_quotient(dividend, divisor, policy, bit_width,
                   abs_quotient, abs_remainder):
    """ Round a truncated unsigned quotient/remainder and restore the signs.

    :param dividend: the signed dividend/numerator
    :param divisor: the signed divisor/denominator
    :param policy: the ``RoundingPolicy``
    :param bit_width: the bit width of the inputs/outputs
    :param abs_quotient: ``abs(dividend) // abs(divisor)``
    :param abs_remainder: ``abs(dividend) % abs(divisor)``
    :returns DivModResult:
    :raises InvalidArgument: if policy is ``UNNECESSARY`` and
        abs_remainder isn't 0, or if the rounded quotient doesn't fit in
        ``bit_width`` signed bits
    """
    if policy is RoundingPolicy.UNNECESSARY and abs_remainder != 0:
        raise InvalidArgument(f"rounding necessary for {dividend} / {divisor}"
                              " with RoundingPolicy.UNNECESSARY")
    abs_divisor = abs(divisor)
    opposite_signs = (dividend < 0) != (divisor < 0)
    if policy.increments(abs_quotient, abs_remainder, abs_divisor,
                         opposite_signs):
        abs_quotient += 1
        abs_remainder -= abs_divisor
        logger.debug("%d / %d: %s moves the quotient magnitude up to %d",
                     dividend, divisor, policy.name, abs_quotient)
    quotient = -abs_quotient if opposite_signs else abs_quotient
    remainder = -abs_remainder if dividend < 0 else abs_remainder
    if Const.normalize(quotient, (bit_width, True)) != quotient:
        raise InvalidArgument(f"quotient {quotient} of {dividend} / {divisor}"
                              f" with {policy} doesn't fit in a {bit_width}"
                              "-bit signed word")
    return DivModResult(quotient, remainder)


class SignedDivMod:
    """ Signed integer division/remainder with a rounding policy.

    Steps through an ``UnsignedDivMod`` of the magnitudes, then rounds once
    the last stage is done.

    :attribute dividend: the dividend/numerator
    :attribute divisor: the divisor/denominator
    :attribute policy: the ``RoundingPolicy``
    :attribute bit_width: the bit width of the inputs/outputs
    :attribute divider: the base UnsignedDivMod
    :attribute quotient: the quotient, None until the last stage
    :attribute remainder: the remainder, None until the last stage
    """

    def __init__(self, dividend, divisor, policy=RoundingPolicy.DOWN,
                 bit_width=32):
        """ Create a SignedDivMod.

        :param dividend: the dividend/numerator
        :param divisor: the divisor/denominator
        :param policy: the ``RoundingPolicy`` or its name
        :param bit_width: the bit width of the inputs/outputs
        """
        check_operands(dividend, divisor, bit_width, signed=True)
        self.dividend = dividend
        self.divisor = divisor
        self.policy = RoundingPolicy.cast(policy)
        self.bit_width = bit_width
        self.quotient = None
        self.remainder = None
        self.divider = UnsignedDivMod(abs(dividend), abs(divisor), bit_width)

    def calculate_stage(self):
        """ Calculate the next stage of the division.

        :returns bool: True if this is the last stage.
        """
        if self.quotient is not None:
            return True
        if not self.divider.calculate_stage():
            return False
        result = round_quotient(self.dividend, self.divisor, self.policy,
                                self.bit_width, self.divider.quotient,
                                self.divider.remainder)
        self.quotient, self.remainder = result
        return True

    def calculate(self):
        """ Calculate the results of the division.

        :returns: self
        """
        while not self.calculate_stage():
            pass
        return self

    def result(self):
        """ Finish the division.

        :returns DivModResult:
        """
        self.calculate()
        return DivModResult(self.quotient, self.remainder)


def divmod_round(dividend, divisor, policy=RoundingPolicy.DOWN, bit_width=32,
                 unsigned_divmod=unsigned_divmod):
    """ Compute the quotient/remainder of two signed integers.

    NOT the same as the // or % operators unless policy is ``FLOOR``

    :param dividend: the dividend/numerator
    :param divisor: the divisor/denominator
    :param policy: the ``RoundingPolicy`` or its name
    :param bit_width: the bit width of the inputs/outputs
    :param unsigned_divmod: the unsigned division used on the magnitudes,
        called as ``unsigned_divmod(dividend, divisor, bit_width)`` and
        returning a ``(quotient, remainder)`` pair
    :returns DivModResult:
    :raises DivisionByZero: if divisor is 0
    :raises InvalidArgument: if an operand doesn't fit in ``bit_width``
        bits, the policy is unknown, the policy is ``UNNECESSARY`` and
        the division is inexact, or the quotient overflows (the most
        negative dividend divided by -1, or a HALF_UP/HALF_EVEN quotient
        pushed past the end of the word)
    """
    check_operands(dividend, divisor, bit_width, signed=True)
    policy = RoundingPolicy.cast(policy)
    abs_quotient, abs_remainder = unsigned_divmod(abs(dividend), abs(divisor),
                                                  bit_width)
    return round_quotient(dividend, divisor, policy, bit_width,
                          abs_quotient, abs_remainder)
