# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

""" Configuration for repeated divisions.

Holds the word width, the default rounding policy and the log level so
callers don't have to pass them on every call. ``DivModConfig.from_env``
reads them from ``DIVROUND_BIT_WIDTH``, ``DIVROUND_POLICY`` and
``DIVROUND_LOG_LEVEL``.
"""

import logging
import os

from .algorithm import check_bit_width, unsigned_divmod
from .errors import InvalidArgument
from .rounding import RoundingPolicy, divmod_round

logger = logging.getLogger(__name__)

ENV_BIT_WIDTH = "DIVROUND_BIT_WIDTH"
ENV_POLICY = "DIVROUND_POLICY"
ENV_LOG_LEVEL = "DIVROUND_LOG_LEVEL"


def parse_logging_level(level):
    """Parse the log level from a string.

    The level can be either a non-negative integer or a string representation
    of one of the predefined levels. ints are passed through.

    Raises an exception if the level cannot be parsed.
    """
    if isinstance(level, int) and not isinstance(level, bool):
        if level < 0:
            raise ValueError(f"Log level must be non-negative, not {level}")
        return level
    text = str(level).strip().upper()
    names_mapping = logging.getLevelNamesMapping()
    if text in names_mapping:
        return names_mapping[text]

    # try convert to int
    try:
        value = int(text)
    except ValueError:
        pass
    else:
        if value >= 0:
            return value

    raise ValueError("Log level must be either {critical, error, warning, "
                     "info, debug} or a non-negative integer, "
                     f"not {level!r}")


class DivModConfig:
    """ Configuration for divisions.

    :attribute bit_width: the bit width of the inputs/outputs
    :attribute policy: the default ``RoundingPolicy``
    :attribute log_level: the level for the ``divround`` logger
    """

    def __init__(self, bit_width=32, policy=RoundingPolicy.DOWN,
                 log_level=logging.WARNING):
        """ Create a ``DivModConfig`` instance. """
        self.bit_width = check_bit_width(bit_width)
        self.policy = RoundingPolicy.cast(policy)
        self.log_level = parse_logging_level(log_level)

    @classmethod
    def from_env(cls, environ=None):
        """ Create a ``DivModConfig`` from environment variables.

        Missing variables keep their defaults.

        :param environ: mapping to read instead of ``os.environ``
        """
        if environ is None:
            environ = os.environ
        kwargs = {}
        if ENV_BIT_WIDTH in environ:
            try:
                kwargs["bit_width"] = int(environ[ENV_BIT_WIDTH])
            except ValueError:
                raise InvalidArgument(f"{ENV_BIT_WIDTH} must be an integer, "
                                      f"not {environ[ENV_BIT_WIDTH]!r}") \
                    from None
        if ENV_POLICY in environ:
            kwargs["policy"] = environ[ENV_POLICY]
        if ENV_LOG_LEVEL in environ:
            kwargs["log_level"] = environ[ENV_LOG_LEVEL]
        retval = cls(**kwargs)
        logger.debug("configuration from environment: %r", retval)
        return retval

    def __repr__(self):
        """ Get repr. """
        return f"DivModConfig({self.bit_width}, " \
            + f"{self.policy}, {self.log_level})"

    def __eq__(self, other):
        if not isinstance(other, DivModConfig):
            return NotImplemented
        return (self.bit_width, self.policy, self.log_level) \
            == (other.bit_width, other.policy, other.log_level)

    def __hash__(self):
        return hash((self.bit_width, self.policy, self.log_level))

    @property
    def n_stages(self):
        """ Get the largest number of ``UnsignedDivMod`` stages needed. """
        return self.bit_width

    def apply_logging(self):
        """ Set the level of the ``divround`` logger. """
        logging.getLogger("divround").setLevel(self.log_level)

    def unsigned_divmod(self, dividend, divisor):
        """ Unsigned division with the configured bit width. """
        return unsigned_divmod(dividend, divisor, self.bit_width)

    def divmod_round(self, dividend, divisor, policy=None):
        """ Signed division with the configured bit width.

        :param policy: overrides the configured policy if not None
        """
        if policy is None:
            policy = self.policy
        return divmod_round(dividend, divisor, policy, self.bit_width)
