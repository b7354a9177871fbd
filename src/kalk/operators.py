'''
Operator registry: every token the machine knows, what it does, and how to
use it.
'''

from collections import namedtuple
from types import MappingProxyType
import math


# How a token runs. Exactly one of these per registered token.
PushConstant = namedtuple('PushConstant', 'value')
Unary = namedtuple('Unary', 'function')
Binary = namedtuple('Binary', 'function')
Special = namedtuple('Special', 'tag')

Operator = namedtuple('Operator', 'group usage action')


# Python's math raises where IEEE arithmetic hands back inf or NaN. The
# functions below hand back what IEEE arithmetic would.


def _isodd(n):
    return math.isfinite(n) and n.is_integer() and math.fmod(n, 2) != 0


def divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1, b)
    return a / b


def power(a, b):
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _isodd(b) else math.inf
    except ValueError:
        # Zero to a negative power, or a negative base to a fractional one.
        if a == 0:
            return math.copysign(math.inf, a) if _isodd(b) else math.inf
        return math.nan


def remainder(a, b):
    '''
    Euclidean remainder of a by b; never negative.
    '''
    try:
        r = math.fmod(a, b)
    except ValueError:
        return math.nan
    if r < 0:
        r += abs(b)
    return r


def percent_change(a, b):
    return divide(b - a, a) * 100


def _ln(a):
    if a == 0:
        return -math.inf
    if a < 0:
        return math.nan
    return math.log(a)


def log(a, base):
    '''
    Logarithm of a in the given base.
    '''
    return divide(_ln(a), _ln(base))


def _nan_outside_domain(f):
    '''
    Wrap a unary math function to give NaN for arguments outside its domain.
    '''
    def wrapped(a):
        try:
            return f(a)
        except ValueError:
            return math.nan
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


sqrt = _nan_outside_domain(math.sqrt)
sin = _nan_outside_domain(math.sin)
cos = _nan_outside_domain(math.cos)
tan = _nan_outside_domain(math.tan)
acos = _nan_outside_domain(math.acos)
asin = _nan_outside_domain(math.asin)


def exp(a):
    try:
        return math.exp(a)
    except OverflowError:
        return math.inf


def degrees(rad):
    return rad * 180 / math.pi


def radians(deg):
    return deg * math.pi / 180


def ceil(a):
    # math.ceil and math.floor hand back ints; the stack holds floats.
    if not math.isfinite(a):
        return a
    return float(math.ceil(a))


def floor(a):
    if not math.isfinite(a):
        return a
    return float(math.floor(a))


_OPERATORS = {
    # Arithmetic
    '+': Operator('Binary', 'a b + | Addition (a + b)',
                  Binary(lambda a, b: a + b)),
    '-': Operator('Binary', 'a b - | Subtraction (a - b)',
                  Binary(lambda a, b: a - b)),
    '*': Operator('Binary', 'a b * | Multiplication (a * b)',
                  Binary(lambda a, b: a * b)),
    '/': Operator('Binary', 'a b / | Division (a / b)',
                  Binary(divide)),
    # Not the ** operator: that goes complex on a negative base.
    '**': Operator('Binary', 'a b ** | Power (a^b)',
                   Binary(power)),
    '%': Operator('Binary', 'a b % | Euclidean Remainder (a mod b)',
                  Binary(remainder)),
    '%%': Operator('Binary', 'a b %% | Percent Change ((b - a) / a * 100)',
                   Binary(percent_change)),
    'log': Operator('Binary', 'a b log | Logarithm (log_b(a))',
                    Binary(log)),
    'atan2': Operator('Binary',
                      'y x atan2 | Arc tangent of y/x (result in radians)',
                      Binary(math.atan2)),

    # Constants
    'pi': Operator('Constant', 'pi | Push the value of pi',
                   PushConstant(math.pi)),
    'e': Operator('Constant', "e | Push the value of Euler's number (e)",
                  PushConstant(math.e)),

    # Transcendental
    'sqrt': Operator('Unary', 'a sqrt | Square root', Unary(sqrt)),
    'sin': Operator('Unary', 'a sin | Sine (a in radians)', Unary(sin)),
    'cos': Operator('Unary', 'a cos | Cosine (a in radians)',
                    Unary(cos)),
    'tan': Operator('Unary', 'a tan | Tangent (a in radians)',
                    Unary(tan)),
    'acos': Operator('Unary', 'a acos | Arc cosine (result in radians)',
                     Unary(acos)),
    'asin': Operator('Unary', 'a asin | Arc sine (result in radians)',
                     Unary(asin)),
    'atan': Operator('Unary', 'a atan | Arc tangent (result in radians)',
                     Unary(math.atan)),
    'exp': Operator('Unary', 'a exp | e raised to the power of a (e^a)',
                    Unary(exp)),

    # Rounding
    'ceil': Operator('Rounding', 'a ceil | Ceiling (rounds up)',
                     Unary(ceil)),
    'floor': Operator('Rounding', 'a floor | Floor (rounds down)',
                      Unary(floor)),

    # Conversions
    'deg': Operator('Conversions',
                    'a deg | Convert angle from radians to degrees',
                    Unary(degrees)),
    'rad': Operator('Conversions',
                    'a rad | Convert angle from degrees to radians',
                    Unary(radians)),

    # Everything below needs more than the numbers on top of the stack.
    '!': Operator('Combinatorics', 'n ! | Factorial (n!)',
                  Special('factorial')),
    'P': Operator('Combinatorics', 'n k P | Permutations P(n, k)',
                  Special('permutations')),
    'C': Operator('Combinatorics', 'n k C | Combinations C(n, k)',
                  Special('combinations')),

    '<>': Operator('Stack', 'a b <> | Swap the top two items',
                   Special('swap')),
    'c': Operator('Stack', 'c | Clear the stack', Special('clear')),
    'a': Operator('Stack', 'a | Recall last successful answer',
                  Special('answer')),

    'sto': Operator('Memory', 'value "key" sto | Store value to key',
                    Special('store')),
    'rcl': Operator('Memory', '"key" rcl | Recall value from key',
                    Special('recall')),

    'hex': Operator('Display', 'a hex | Display a in hexadecimal (i64 cast)',
                    Special('display_base')),
    'bin': Operator('Display', 'a bin | Display a in binary (i64 cast)',
                    Special('display_base')),
    'oct': Operator('Display', 'a oct | Display a in octal (i64 cast)',
                    Special('display_base')),

    'help': Operator('Meta',
                     '"func_name" help | List all functions or show usage '
                     'for [func_name]',
                     Special('help')),
}

# Read-only view; nothing mutates the registry after import.
OPERATORS = MappingProxyType(_OPERATORS)

# Order the help listing shows groups in.
GROUPS = ('Binary', 'Constant', 'Unary', 'Rounding', 'Conversions',
          'Combinatorics', 'Stack', 'Memory', 'Display', 'Meta')


def lookup(token):
    '''
    Return the registry entry for token, or None.

    Exact match only; case matters.
    '''
    return OPERATORS.get(token)


def find(name):
    '''
    Return (token, entry) for a function name typed by a user, or None.

    The name is lower-cased first, so "SIN" finds sin and "C" finds c; the
    upper-case P and C can't be looked up this way.
    '''
    token = name.lower()
    if token not in OPERATORS:
        return None
    return token, OPERATORS[token]
