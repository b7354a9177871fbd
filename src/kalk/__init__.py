'''
RPN calculator.

Plain old arithmetic, the usual transcendental functions, combinatorics,
a handful of stack operators, and named storage registers. Not intended to be
Turing-complete!

Numbers may be typed with Persian or Arabic-Indic digits and separators as
well as ASCII ones; 1,234.5 and ١٬٢٣٤٫٥ are the same number.

Every failed operation leaves the stack as it found it.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine
from .util import RPNError


__all__ = 'Machine', 'Lexer', 'CLI', 'RPNError'
