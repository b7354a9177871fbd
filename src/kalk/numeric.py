'''
Numeric literal recognition.

Persian and Arabic-Indic digits and separators are accepted alongside ASCII
ones, so that ۱۲۳, ١٬٠٠٠٫٥ and 1,000.5 are all numbers.
'''

import regex


# Persian (Extended Arabic-Indic) and Arabic-Indic digits, then the Arabic
# decimal and thousands separators.
_DIGITS = {
    **{0x06F0 + i: str(i) for i in range(10)},
    **{0x0660 + i: str(i) for i in range(10)},
    0x066B: '.',
    0x066C: ',',
}
# Thousands separators, ASCII or converted, are dropped outright.
TRANSLATION = str.maketrans({**_DIGITS, ord(','): None})

# What float() should accept. Narrower than float() itself: no underscores,
# no surrounding whitespace.
NUMBER = regex.compile(r'''
    [+-]?
    (?:
        # 1, 1., 1.5, .5, with an optional exponent
        (?:
            [0-9]+ (?: \. [0-9]* )?
            |
            \. [0-9]+
        )
        (?: [eE] [+-]? [0-9]+ )?
        |
        inf (?: inity )?
        |
        nan
    )
''', flags=regex.VERBOSE | regex.IGNORECASE | regex.ASCII)


def normalize(token):
    '''
    Return token with non-ASCII digits and separators made ASCII, and
    thousands separators stripped.
    '''
    return token.translate(TRANSLATION)


def parse_number(token):
    '''
    Return token as a float, or None if it isn't a numeric literal.
    '''
    candidate = normalize(token)
    if NUMBER.fullmatch(candidate) is None:
        return None
    return float(candidate)
