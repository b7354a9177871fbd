'''
Human-readable rendering of numbers, the stack, and help text.
'''

from collections import defaultdict
import math

from .stack import Key
from .operators import OPERATORS, GROUPS


# Past this, integral floats print in exponent notation rather than as a
# long run of digits that were never exact anyway.
_EXACT_LIMIT = 2 ** 53


def format_number(n):
    '''
    Format n with thousands separators; integral values lose their ".0".
    '''
    if math.isnan(n):
        return 'NaN'
    if math.isinf(n):
        return 'inf' if n > 0 else '-inf'
    if n.is_integer() and abs(n) < _EXACT_LIMIT:
        return '{:,d}'.format(int(n))
    text = repr(n)
    if 'e' in text:
        return text
    integral, _, fractional = text.partition('.')
    if integral in ('0', '-0'):
        return text
    return '{:,d}.{}'.format(int(integral), fractional)


def format_item(item):
    if isinstance(item, Key):
        return '"{}"'.format(item)
    return format_number(item)


def format_stack(stack):
    '''
    Format the whole stack, bottom first, e.g. [1,234.5, "rate"].
    '''
    return '[{}]'.format(', '.join(map(format_item, stack)))


def render_listing():
    '''
    Return the help text for every registered token, grouped.
    '''
    grouped = defaultdict(list)
    for token, entry in OPERATORS.items():
        grouped[entry.group].append((token, entry.usage))
    lines = ['', '--- Available Functions ---']
    for group in GROUPS:
        if group not in grouped:
            continue
        lines.append('')
        lines.append('  {}:'.format(group))
        for token, usage in grouped[group]:
            lines.append('    - {:<5} | {}'.format(token, usage))
    return '\n'.join(lines)


def render_usage(token):
    '''
    Return the help text for a single registered token.
    '''
    entry = OPERATORS[token]
    return '\n'.join(['',
                      "--- Help for '{}' ---".format(token),
                      '  Type: {}'.format(entry.group),
                      '  Usage: {}'.format(entry.usage)])
