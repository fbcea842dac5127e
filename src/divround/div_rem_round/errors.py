# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Exceptions raised by the div/rem/round algorithms. """


class DivisionByZero(ZeroDivisionError):
    """ The divisor is zero. """


class InvalidArgument(ValueError):
    """ An operand, bit-width or rounding policy is not acceptable.

    Also raised by ``RoundingPolicy.UNNECESSARY`` when the division is
    inexact.
    """
