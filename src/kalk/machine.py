import math

from .util import (DomainError, KeyNotFound, StackUnderflow,
                   StateUnavailable, TypeMismatch, UnknownToken)
from .stack import isnumber, iskey, parse_key
from .numeric import parse_number
from .operators import Binary, PushConstant, Unary, find, lookup
from . import display


# Bounds of the signed 64-bit integers the base display truncates to.
_I64_MIN = -2 ** 63
_I64_MAX = 2 ** 63 - 1
_U64_MASK = 2 ** 64 - 1

# Base display: token -> (literal prefix, format spec)
BASES = {
    'hex': ('0x', 'X'),
    'oct': ('0o', 'o'),
    'bin': ('0b', 'b'),
}


def _compute(f, *args):
    '''
    Apply f to args, always yielding a float.

    Every registered function answers out-of-domain arguments with inf or
    NaN, as IEEE arithmetic does, rather than raising.
    '''
    return float(f(*args))


def _nearest(n):
    '''
    Round a non-negative, finite n to the nearest integer, halves up.
    '''
    whole = math.floor(n)
    # Not floor(n + 0.5): the addition itself rounds 0.49999999999999994 up.
    return whole + (n - whole >= 0.5)


def _to_i64(n):
    '''
    Truncate n toward zero, saturating at the signed 64-bit limits.

    NaN becomes 0.
    '''
    if math.isnan(n):
        return 0
    if n >= _I64_MAX:
        return _I64_MAX
    if n <= _I64_MIN:
        return _I64_MIN
    return int(n)


class Machine:
    '''
    Arithmetic stack machine (RPN calculator).

    Owns all session state: stack, storage registers and last answer. Takes
    tokens one at a time through process(), or a line's worth at a time
    through run().

    Never leaves the stack half-consumed: every operation checks its operands
    before taking them off the stack, so a raised RPNError means the stack is
    exactly as it was.
    '''

    def __init__(self, output=print):
        '''
        Create empty stack machine.

        :param output: Called with each line of text the machine displays
                       (base conversions, help).
        '''
        self.stack = []
        self.storage = dict()
        self.last_answer = None
        self.output = output

    def run(self, tokens):
        '''
        Process a line's worth of tokens.

        Stops at, and re-raises, the first error; the tokens after it are
        never seen. Only a line that ran to completion updates the last
        answer, and only if it left a number on top.
        '''
        for token in tokens:
            self.process(token)
        if self.stack and isnumber(self.stack[-1]):
            self.last_answer = self.stack[-1]

    def process(self, token):
        '''
        Stack or run a single token.
        '''
        key = parse_key(token)
        if key is not None:
            self._pshstack(key)
            return
        number = parse_number(token)
        if number is not None:
            self._pshstack(number)
            return
        entry = lookup(token)
        if entry is None:
            raise UnknownToken(
                'Unrecognized token or operator: {}'.format(token))
        action = entry.action
        if isinstance(action, PushConstant):
            self._pshstack(action.value)
        elif isinstance(action, Unary):
            self._unary(token, action.function)
        elif isinstance(action, Binary):
            self._binary(token, action.function)
        else:
            type(self).SPECIALS[action.tag](self, token)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop n elements from stack, topmost first.

        Only call once the operands have been checked.
        '''
        return [self.stack.pop() for _ in range(n)]

    def _requiredepth(self, n, message):
        if len(self.stack) < n:
            raise StackUnderflow(message)

    def _numbers(self, n, token):
        '''
        Return the n topmost elements, bottom first, checking that there are
        enough of them and that they are all numbers. Doesn't pop.
        '''
        self._requiredepth(n, '{} requires {} number(s) on the stack'
                              .format(token, n))
        operands = self.stack[-n:]
        for operand in operands:
            if not isnumber(operand):
                raise TypeMismatch('{} requires numbers, but got key "{}"'
                                   .format(token, operand))
        return operands

    def _unary(self, token, f):
        '''
        Replace the number on top with f of it.
        '''
        value, = self._numbers(1, token)
        self.stack[-1] = _compute(f, value)

    def _binary(self, token, f):
        '''
        Replace a and b (b on top) with f(a, b).
        '''
        a, b = self._numbers(2, token)
        result = _compute(f, a, b)
        self._popstack(2)
        self._pshstack(result)

    def factorial(self, token):
        '''
        Replace n with n!, n rounded to the nearest integer.
        '''
        n, = self._numbers(1, token)
        if math.isnan(n) or n < 0:
            raise DomainError(
                "Factorial '!' requires a non-negative number.")
        # 21! can't be held exactly in a float.
        if n > 20:
            raise DomainError(
                "Factorial '!' is too large; max supported value is 20.")
        result = math.prod(range(1, _nearest(n) + 1), start=1.0)
        self.stack[-1] = result

    def _combinatorial(self, token, name, limit):
        '''
        Return n and k (k on top) rounded to integers, validated for name.
        '''
        n, k = self._numbers(2, token)
        if not all(math.isfinite(x) and x >= 0 for x in (n, k)):
            raise DomainError(
                '{}(n, k) requires non-negative inputs.'.format(name))
        n, k = _nearest(n), _nearest(k)
        if k > n:
            raise DomainError(
                '{}(n, k): n must be greater than or equal to k.'
                .format(name))
        limit(n, k)
        return n, k

    def permutations(self, token):
        '''
        Replace n and k with P(n, k) = n! / (n - k)!.
        '''
        def limit(n, k):
            # Keeps every intermediate product exact.
            if n > 20 or k > 20:
                raise DomainError('P(n, k): Inputs too large; max n is 20.')
        n, k = self._combinatorial(token, 'P', limit)
        result = math.prod(range(n - k + 1, n + 1), start=1.0)
        self._popstack(2)
        self._pshstack(result)

    def combinations(self, token):
        '''
        Replace n and k with C(n, k) = n! / (k! (n - k)!).
        '''
        def limit(n, k):
            if n > 170:
                raise DomainError(
                    'C(n, k): n is too large (> 170) for a float result.')
        n, k = self._combinatorial(token, 'C', limit)
        # C(n, k) = C(n, n - k). Dividing as we go keeps the running value
        # small.
        result = 1.0
        for i in range(min(k, n - k)):
            result = result * (n - i) / (i + 1)
        self._popstack(2)
        self._pshstack(result)

    def swap(self, token):
        '''
        Swap the two topmost elements, numbers or keys.
        '''
        self._requiredepth(2, 'Not enough items on the stack to swap')
        self.stack[-2], self.stack[-1] = self.stack[-1], self.stack[-2]

    def clear(self, token):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def answer(self, token):
        '''
        Push the last answer.
        '''
        if self.last_answer is None:
            raise StateUnavailable(
                "No previous answer available ('a' is empty)")
        self._pshstack(self.last_answer)

    def store(self, token):
        '''
        Store value into a register, given value and key (key on top).

        Both are checked before either is popped; a bad value leaves the key
        where it was.
        '''
        message = 'STO requires a string key (e.g., "rate") as the last item'
        self._requiredepth(1, message)
        if not iskey(self.stack[-1]):
            raise TypeMismatch(message)
        message = 'STO requires a number value before the key'
        self._requiredepth(2, message)
        if not isnumber(self.stack[-2]):
            raise TypeMismatch(message)
        key, value = self._popstack(2)
        self.storage[str(key)] = value

    def recall(self, token):
        '''
        Replace the key on top with the value stored under it.
        '''
        message = 'RCL requires a string key (e.g., "rate") as the last item'
        self._requiredepth(1, message)
        key = self.stack[-1]
        if not iskey(key):
            raise TypeMismatch(message)
        try:
            self.stack[-1] = self.storage[str(key)]
        except KeyError:
            raise KeyNotFound(
                'Storage key not found: "{}"'.format(key)) from None

    def display_base(self, token):
        '''
        Show the number on top as an integer in another base.

        Truncates toward zero; negative numbers show as 64-bit two's
        complement. Leaves the stack alone.
        '''
        value, = self._numbers(1, token)
        prefix, spec = BASES[token]
        digits = format(_to_i64(value) & _U64_MASK, spec)
        self.output('{} base: {}{}'.format(token, prefix, digits))

    def help(self, token):
        '''
        Show usage for the function named by the key on top, consuming it, or
        for everything if there's no such key.
        '''
        if self.stack and iskey(self.stack[-1]):
            found = find(self.stack[-1])
            if found is not None:
                self._popstack()
                self.output(display.render_usage(found[0]))
                return
        self.output(display.render_listing())

    # Special operator tags to the handlers that run them.
    SPECIALS = {
        'factorial': factorial,
        'permutations': permutations,
        'combinations': combinations,
        'swap': swap,
        'clear': clear,
        'answer': answer,
        'store': store,
        'recall': recall,
        'display_base': display_base,
        'help': help,
    }
