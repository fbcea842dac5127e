# SPDX-License-Identifier: LGPL-2.1-or-later
# See Notices.txt for copyright information

from .algorithm import UnsignedDivModResult
from .config import DivModConfig, parse_logging_level
from .errors import InvalidArgument
from .rounding import RoundingPolicy, DivModResult
import logging
import unittest


class TestParseLoggingLevel(unittest.TestCase):
    def test_names(self):
        self.assertEqual(parse_logging_level("debug"), logging.DEBUG)
        self.assertEqual(parse_logging_level("INFO"), logging.INFO)
        self.assertEqual(parse_logging_level(" Warning "), logging.WARNING)

    def test_ints(self):
        self.assertEqual(parse_logging_level("15"), 15)
        self.assertEqual(parse_logging_level(0), 0)
        self.assertEqual(parse_logging_level(logging.ERROR), logging.ERROR)

    def test_invalid(self):
        for level in "loud", "-1", -1, "":
            with self.subTest(level=level):
                with self.assertRaises(ValueError):
                    parse_logging_level(level)

    def test_invalid_message(self):
        with self.assertRaisesRegex(
                ValueError,
                r"Log level must be either \{critical, error, warning, info, "
                r"debug\} or a non-negative integer, not 'loud'"):
            parse_logging_level("loud")


class TestDivModConfig(unittest.TestCase):
    def test_defaults(self):
        config = DivModConfig()
        self.assertEqual(config.bit_width, 32)
        self.assertIs(config.policy, RoundingPolicy.DOWN)
        self.assertEqual(config.log_level, logging.WARNING)
        self.assertEqual(config.n_stages, 32)
        self.assertEqual(repr(config),
                         "DivModConfig(32, RoundingPolicy.DOWN, 30)")

    def test_hash(self):
        configs = {DivModConfig(), DivModConfig(),
                   DivModConfig(16, "up", logging.DEBUG)}
        self.assertEqual(len(configs), 2)
        self.assertIn(DivModConfig(16, RoundingPolicy.UP, "debug"), configs)

    def test_invalid(self):
        with self.assertRaises(InvalidArgument):
            DivModConfig(bit_width=0)
        with self.assertRaises(InvalidArgument):
            DivModConfig(policy="sideways")
        with self.assertRaises(ValueError):
            DivModConfig(log_level="loud")

    def test_divmod_round(self):
        config = DivModConfig(bit_width=8, policy="half_even")
        self.assertEqual(config.divmod_round(5, 2), DivModResult(2, 1))
        self.assertEqual(config.divmod_round(7, 2), DivModResult(4, -1))
        self.assertEqual(config.divmod_round(7, 2, RoundingPolicy.DOWN),
                         DivModResult(3, 1))
        with self.assertRaises(InvalidArgument):
            config.divmod_round(128, 2)
        # most negative 8-bit dividend divided by -1 overflows
        with self.assertRaisesRegex(InvalidArgument, "doesn't fit"):
            config.divmod_round(-128, -1)

    def test_unsigned_divmod(self):
        config = DivModConfig(bit_width=8)
        self.assertEqual(config.unsigned_divmod(255, 10),
                         UnsignedDivModResult(25, 5))
        with self.assertRaises(InvalidArgument):
            config.unsigned_divmod(256, 10)

    def test_from_env(self):
        config = DivModConfig.from_env({
            "DIVROUND_BIT_WIDTH": "16",
            "DIVROUND_POLICY": "ceiling",
            "DIVROUND_LOG_LEVEL": "debug",
        })
        self.assertEqual(config, DivModConfig(16, RoundingPolicy.CEILING,
                                              logging.DEBUG))
        self.assertEqual(DivModConfig.from_env({}), DivModConfig())

    def test_from_env_invalid(self):
        with self.assertRaisesRegex(InvalidArgument, "DIVROUND_BIT_WIDTH"):
            DivModConfig.from_env({"DIVROUND_BIT_WIDTH": "wide"})
        with self.assertRaises(InvalidArgument):
            DivModConfig.from_env({"DIVROUND_POLICY": "sideways"})

    def test_apply_logging(self):
        logger = logging.getLogger("divround")
        old_level = logger.level
        try:
            DivModConfig(log_level="debug").apply_logging()
            self.assertEqual(logger.level, logging.DEBUG)
            with self.assertLogs("divround.div_rem_round.rounding",
                                 logging.DEBUG) as cm:
                DivModConfig(policy="up").divmod_round(7, 2)
            self.assertIn("UP moves the quotient magnitude up to 4",
                          "\n".join(cm.output))
        finally:
            logger.setLevel(old_level)


if __name__ == '__main__':
    unittest.main()
