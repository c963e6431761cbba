import math
import unittest

import pytest

from pog.errors import InvalidLevel
from pog.password_tests import (
    PasswordTests,
    Rule,
    default_test_params,
    entropy,
    qualitative_strength,
    repetitions,
    strength_label,
)


# (rule, threshold, bad, good, extra_good)
RULE_CASES = [
    ("length", 6, "fubar", "foobar", "foobar0"),
    ("alpha_min", 2, "f00", "fo0", "foo"),
    ("alpha_max", 2, "foo", "fo0", "f00"),
    ("upper_alpha_min", 2, "Foo", "FOo", "FOO"),
    ("upper_alpha_max", 2, "FOO", "FOo", "Foo"),
    ("lower_alpha_min", 2, "FOo", "Foo", "foo"),
    ("lower_alpha_max", 2, "foo", "Foo", "FOo"),
    ("numeral_min", 2, "fo0", "f00", "000"),
    ("numeral_max", 2, "000", "f00", "fo0"),
    ("non_alpha_min", 2, "fo0", "f0@", "0@@"),
    ("non_alpha_max", 2, "0@@", "f0@", "fo0"),
    ("non_alphanumeric_min", 2, "fo@", "f@@", "@@@"),
    ("non_alphanumeric_max", 2, "@@@", "f@@", "fo@"),
]


@pytest.mark.parametrize("rule, threshold, bad, good, extra_good", RULE_CASES)
def test_rule_thresholds(rule, threshold, bad, good, extra_good):
    params = {rule: threshold}
    assert PasswordTests(bad, params).run() == {rule: False}
    assert PasswordTests(good, params).run() == {rule: True}
    assert PasswordTests(extra_good, params).run() == {rule: True}


def test_every_rule_has_a_case():
    assert {c[0] for c in RULE_CASES} == {r.value for r in Rule}


class TestPasswordTestsRun(unittest.TestCase):
    def test_run(self):
        tests = PasswordTests("FooBar", {"length": 8, "alpha_min": 2})
        self.assertEqual(tests.run(), {"length": False, "alpha_min": True})

    def test_unknown_rule_is_false(self):
        tests = PasswordTests("FooBar", {"length": 4, "vowels_min": 1})
        self.assertEqual(tests.run(), {"length": True, "vowels_min": False})
        self.assertFalse(tests.check("vowels_min"))

    def test_run_is_idempotent(self):
        tests = PasswordTests("Tr0ub4dor&3", default_test_params("high"))
        first = tests.run()
        self.assertEqual(first, tests.run())
        self.assertTrue(all(first.values()))

    def test_empty_params_use_medium_low(self):
        tests = PasswordTests("password")
        self.assertEqual(tests.test_params, default_test_params("medium_low"))
        self.assertEqual(
            tests.run(), {"length": True, "alpha_min": True, "non_alpha_min": False}
        )
        self.assertFalse(tests.passed())
        self.assertTrue(PasswordTests("passw0rd").passed())

    def test_check_single_rule(self):
        tests = PasswordTests("abc123", {"numeral_min": 3})
        self.assertTrue(tests.check(Rule.NUMERAL_MIN))
        self.assertFalse(tests.check("numeral_min", 4))
        self.assertFalse(tests.check("alpha_max"))

    def test_accepts_non_string_password(self):
        self.assertEqual(PasswordTests(12345678, {"length": 8}).run(), {"length": True})


def test_default_test_params_levels():
    assert default_test_params("low") == {"length": 6, "alpha_min": 1}
    assert default_test_params() == {"length": 8, "alpha_min": 1, "non_alpha_min": 1}
    assert default_test_params("medium_high") == {
        "length": 8,
        "upper_alpha_min": 1,
        "lower_alpha_min": 1,
        "non_alpha_min": 1,
    }
    assert default_test_params("high") == {
        "length": 8,
        "upper_alpha_min": 1,
        "lower_alpha_min": 1,
        "numeral_min": 1,
        "non_alphanumeric_min": 1,
    }
    with pytest.raises(InvalidLevel):
        default_test_params("extreme")


def test_default_test_params_returns_copies():
    params = default_test_params("low")
    params["length"] = 1
    assert default_test_params("low")["length"] == 6


def test_repetitions():
    assert repetitions("fobar") == {}
    assert repetitions("foobar") == {"o": 1}
    assert repetitions("fooboo") == {"o": 3, "oo": 1}
    assert repetitions("foofoo") == {"f": 1, "o": 3, "oo": 1, "foo": 1}
    assert repetitions("") == {}
    assert repetitions("a") == {}


def test_repetitions_long_input_does_not_recurse():
    assert repetitions("ab" * 5000)["a"] == 4999


@pytest.mark.parametrize(
    "password, expected",
    [("123456", 0), ("foo", 0), ("", 0), ("fooo", 2), ("foobar", 12), ("1fo0^*bar9", 95)],
)
def test_qualitative_strength(password, expected):
    assert qualitative_strength(password) == expected
    assert PasswordTests.qualitative_strength(password) == expected


def test_qualitative_strength_has_no_ceiling():
    assert qualitative_strength("Aa1!" + "".join(chr(c) for c in range(0x30, 0x7B))) > 125


def test_strength_label():
    assert strength_label(0) == "weak"
    assert strength_label(33) == "weak"
    assert strength_label(34) == "decent"
    assert strength_label(67) == "decent"
    assert strength_label(95) == "strong"


def test_entropy():
    assert entropy("1") > 3.3
    assert entropy("f") > 4.7
    assert entropy("$") > 5.0
    assert entropy("12") > 6.6
    assert entropy("") == 0.0
    assert math.isclose(entropy("foobar"), 6 * math.log2(26))
    assert math.isclose(PasswordTests.entropy("1fo0^*bar9"), 10 * math.log2(69))
