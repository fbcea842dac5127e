# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Algorithms for unsigned div/rem.

code for computing the quotient/remainder of fixed-width unsigned integers
one bit at a time, using only shifts, additions, subtractions and
comparisons. The ``//`` and ``%`` operators are never used.
"""

from nmigen.hdl.ast import Const
import logging

from .errors import DivisionByZero, InvalidArgument

logger = logging.getLogger(__name__)


def check_bit_width(bit_width):
    """ Check that ``bit_width`` is usable as a word width.

    :returns int: bit_width
    """
    if isinstance(bit_width, bool) or not isinstance(bit_width, int):
        raise InvalidArgument(f"bit_width must be an int, not {bit_width!r}")
    if bit_width < 1:
        raise InvalidArgument(f"bit_width must be at least 1, not {bit_width}")
    return bit_width


def check_operands(dividend, divisor, bit_width, signed):
    """ Check the operands of a division.

    The types are checked first, then the divisor is checked for zero, then
    both operands are checked to fit in a ``bit_width``-bit word. A value
    fits iff ``Const.normalize`` leaves it unchanged.

    :raises DivisionByZero: if divisor is 0
    :raises InvalidArgument: if an operand isn't an int, is negative when
        ``signed`` is False, or doesn't fit in the word.
    """
    check_bit_width(bit_width)
    for name, value in ("dividend", dividend), ("divisor", divisor):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} must be an int, not {value!r}")
    if divisor == 0:
        raise DivisionByZero("division by zero")
    for name, value in ("dividend", dividend), ("divisor", divisor):
        if not signed and value < 0:
            raise InvalidArgument(f"{name} must be non-negative, not {value}")
        if Const.normalize(value, (bit_width, signed)) != value:
            kind = "signed" if signed else "unsigned"
            raise InvalidArgument(f"{name} {value} doesn't fit in a "
                                  f"{bit_width}-bit {kind} word")


class QuotientRemainder:
    """ Immutable quotient/remainder pair.

    Unpacks like a tuple: ``quotient, remainder = result``

    :attribute quotient: the quotient
    :attribute remainder: the remainder
    """

    __slots__ = "quotient", "remainder"

    def __init__(self, quotient, remainder):
        object.__setattr__(self, "quotient", quotient)
        object.__setattr__(self, "remainder", remainder)

    def __setattr__(self, name, value):
        raise AttributeError(f"cannot assign to field {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"cannot delete field {name!r}")

    def __reduce__(self):
        return self.__class__, (self.quotient, self.remainder)

    def __iter__(self):
        return iter((self.quotient, self.remainder))

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return (self.quotient, self.remainder) \
            == (other.quotient, other.remainder)

    def __hash__(self):
        return hash((self.__class__, self.quotient, self.remainder))

    def __repr__(self):
        """ Get the representation as a string. """
        return f"{self.__class__.__qualname__}(quotient={self.quotient!r}, " \
            + f"remainder={self.remainder!r})"

    def __str__(self):
        """ Convert to a string. """
        return f"Quotient: {self.quotient}, Remainder: {self.remainder}"


class UnsignedDivModResult(QuotientRemainder):
    """ Result of an unsigned division. Both fields are non-negative. """

    __slots__ = ()

    def __init__(self, quotient, remainder):
        if quotient < 0:
            raise InvalidArgument("quotient must be non-negative")
        if remainder < 0:
            raise InvalidArgument("remainder must be non-negative")
        super().__init__(quotient, remainder)


class UnsignedDivMod:
    """ Unsigned integer division/remainder by delta-doubling long division.

    Each stage consumes one bit of the dividend, least significant first.
    ``delta_quotient`` and ``delta_remainder`` are the quotient and
    remainder of the current place value ``1 << current_shift`` divided by
    ``divisor``. Every set bit adds them into ``quotient``/``remainder``,
    then they are doubled for the next place value. Both remainders are
    pulled back below ``divisor`` after every addition, so no intermediate
    value is ever larger than ``2 * divisor``.

    :attribute dividend: the dividend/numerator
    :attribute divisor: the divisor/denominator
    :attribute bit_width: the bit width of the inputs/outputs
    :attribute bits_left: the dividend bits not consumed yet
    :attribute current_shift: the place value index of ``bits_left & 1``
    :attribute quotient: the quotient of the consumed dividend bits
    :attribute remainder: the remainder of the consumed dividend bits
    :attribute delta_quotient: ``(1 << current_shift) // divisor``
    :attribute delta_remainder: ``(1 << current_shift) % divisor``
    """

    def __init__(self, dividend, divisor, bit_width=32):
        """ Create an UnsignedDivMod.

        :param dividend: the dividend/numerator
        :param divisor: the divisor/denominator
        :param bit_width: the bit width of the inputs/outputs
        """
        check_operands(dividend, divisor, bit_width, signed=False)
        self.dividend = dividend
        self.divisor = divisor
        self.bit_width = bit_width
        self.bits_left = dividend
        self.current_shift = 0
        self.quotient = 0
        self.remainder = 0
        self.delta_quotient = 0
        self.delta_remainder = 1
        self._reduce_delta()

    def _reduce_delta(self):
        if self.delta_remainder >= self.divisor:
            self.delta_quotient += 1
            self.delta_remainder -= self.divisor

    @property
    def done(self):
        """ True once every set bit of the dividend has been consumed. """
        return self.bits_left == 0

    def calculate_stage(self):
        """ Calculate the next stage of the division.

        :returns bool: True if this is the last stage.
        """
        if self.done:
            return True
        if self.bits_left & 1:
            self.quotient += self.delta_quotient
            self.remainder += self.delta_remainder
            if self.remainder >= self.divisor:
                self.quotient += 1
                self.remainder -= self.divisor
        self.bits_left >>= 1
        if self.done:
            return True
        # move on to the next place value
        self.current_shift += 1
        self.delta_quotient <<= 1
        self.delta_remainder <<= 1
        self._reduce_delta()
        return False

    def calculate(self):
        """ Calculate the results of the division.

        :returns: self
        """
        while not self.calculate_stage():
            pass
        logger.debug("%d / %d: quotient %d, remainder %d after %d stages",
                     self.dividend, self.divisor, self.quotient,
                     self.remainder, self.dividend.bit_length())
        return self

    def result(self):
        """ Finish the division.

        :returns UnsignedDivModResult:
        """
        self.calculate()
        return UnsignedDivModResult(self.quotient, self.remainder)


def unsigned_divmod(dividend, divisor, bit_width=32):
    """ Compute the quotient/remainder of two unsigned integers.

    Power-of-two divisors are handled with a shift and a mask, everything
    else goes through ``UnsignedDivMod``. Both give identical results.

    :param dividend: the dividend/numerator
    :param divisor: the divisor/denominator
    :param bit_width: the bit width of the inputs/outputs
    :returns UnsignedDivModResult:
    :raises DivisionByZero: if divisor is 0
    :raises InvalidArgument: if an operand is negative or doesn't fit in
        ``bit_width`` bits
    """
    check_operands(dividend, divisor, bit_width, signed=False)
    if divisor & (divisor - 1) == 0:
        shift = divisor.bit_length() - 1
        logger.debug("%d / %d: power of two, shifting right by %d",
                     dividend, divisor, shift)
        return UnsignedDivModResult(dividend >> shift,
                                    dividend & (divisor - 1))
    return UnsignedDivMod(dividend, divisor, bit_width).result()
