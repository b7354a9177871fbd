'''
Operator registry tests
'''

import math

from pytest import raises, approx

from kalk.operators import (OPERATORS, GROUPS, Binary, Special, Unary,
                            PushConstant, find, lookup, remainder,
                            percent_change, degrees, radians, ceil, floor,
                            divide, power, log, sqrt, exp)


def test_registry_read_only():
    with raises(TypeError):
        OPERATORS['+'] = OPERATORS['-']


def test_every_group_listed():
    assert {entry.group for entry in OPERATORS.values()} <= set(GROUPS)


def test_usage_names_token():
    for token, entry in OPERATORS.items():
        assert token in entry.usage


def test_action_kinds():
    assert isinstance(lookup('+').action, Binary)
    assert isinstance(lookup('sqrt').action, Unary)
    assert isinstance(lookup('pi').action, PushConstant)
    assert lookup('sto').action == Special('store')
    assert {lookup(token).action for token in ('hex', 'bin', 'oct')} == \
        {Special('display_base')}


def test_lookup_exact():
    assert lookup('P') is not None
    assert lookup('p') is None
    assert lookup('SIN') is None
    assert lookup('x') is None


def test_find_case_insensitive():
    assert find('SIN')[0] == 'sin'
    assert find('Sqrt')[0] == 'sqrt'
    assert find('C')[0] == 'c'
    assert find('P') is None
    assert find('nope') is None


def test_ieee_helpers():
    assert divide(1, 0) == math.inf
    assert divide(-1, 0) == -math.inf
    assert divide(1, -0.0) == -math.inf
    assert math.isnan(divide(0, 0))
    assert power(0.0, -1) == math.inf
    assert power(-0.0, -1) == -math.inf
    assert power(-0.0, -2) == math.inf
    assert math.isnan(power(-8, 1 / 3))
    assert math.isnan(remainder(1, 0))
    assert log(0, 10) == -math.inf
    assert math.isnan(log(-1, 10))
    assert log(100, 10) == approx(2.0, abs=1e-15)
    assert math.isnan(sqrt(-1))
    assert exp(1000) == math.inf
    assert floor(math.inf) == math.inf


def test_euclidean_remainder():
    assert remainder(10, 3) == 1.0
    assert remainder(-10, 3) == 2.0
    assert remainder(10, -3) == 1.0
    assert remainder(-10, -3) == 2.0


def test_percent_change():
    assert percent_change(25, 50) == 100.0
    assert percent_change(100, 75) == -25.0


def test_angles():
    assert degrees(math.pi) == approx(180.0)
    assert radians(180) == approx(math.pi)


def test_rounding_stays_float():
    assert ceil(1.1) == 2.0
    assert isinstance(ceil(1.1), float)
