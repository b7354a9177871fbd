from functools import reduce
import operator

import regex


class Lexer:
    '''
    Lexer for the calculator's input lines.

    Tokens are whatever lies between runs of whitespace; a # starts a comment
    running to the end of the line. Classifying tokens is the machine's job.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Everything from the first # on, quotes or no quotes.
    COMMENT = r'\#.*'
    TOKEN = r'\S+'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def strip(self, line):
        '''
        Return line without its comment or surrounding whitespace.
        '''
        return regex.sub(type(self).COMMENT, '', line,
                         count=1, flags=type(self).FLAGS).strip()

    def lex(self, line):
        '''
        Take a line and yield all its tokens, comment excluded.
        '''
        for match in regex.finditer(type(self).TOKEN, self.strip(line),
                                    flags=type(self).FLAGS):
            yield match.group(0)
