# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

from .errors import DivisionByZero, InvalidArgument
from .algorithm import (UnsignedDivModResult, UnsignedDivMod,
                        unsigned_divmod)
from .rounding import (RoundingPolicy, DivModResult, SignedDivMod,
                       divmod_round)
from .config import DivModConfig, parse_logging_level
