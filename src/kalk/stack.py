'''
Stack items.

A stack slot holds either a number (a plain float) or a storage key (a Key,
which is a str). Nothing else ever goes on the stack.
'''


class Key(str):
    '''
    Storage key, as typed between quotes.
    '''

    def __repr__(self):
        return 'Key({})'.format(str.__repr__(self))


def isnumber(item):
    return isinstance(item, float)


def iskey(item):
    return isinstance(item, Key)


QUOTES = '"', "'"


def parse_key(token):
    '''
    Return the Key a quoted token stands for, or None if it isn't quoted.

    Both quotes must match, and a lone quote character is not a key.
    '''
    if len(token) < 2:
        return None
    for quote in QUOTES:
        if token.startswith(quote) and token.endswith(quote):
            return Key(token.strip(quote))
    return None
