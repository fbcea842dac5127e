# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Integer division/remainder with selectable rounding. """

__all__ = [
    "DivisionByZero",
    "InvalidArgument",
    "UnsignedDivModResult",
    "UnsignedDivMod",
    "unsigned_divmod",
    "RoundingPolicy",
    "DivModResult",
    "SignedDivMod",
    "divmod_round",
    "DivModConfig",
    "parse_logging_level",
]

from .div_rem_round import (DivisionByZero, InvalidArgument,
                            UnsignedDivModResult, UnsignedDivMod,
                            unsigned_divmod, RoundingPolicy, DivModResult,
                            SignedDivMod, divmod_round, DivModConfig,
                            parse_logging_level)
