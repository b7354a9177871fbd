'''
Lexer tests
'''

from kalk.lexer import Lexer


def test_tokens():
    l = Lexer()
    assert list(l.lex('5 3 +')) == ['5', '3', '+']


def test_any_whitespace():
    l = Lexer()
    assert list(l.lex('  1\t2 \n')) == ['1', '2']


def test_comment_stripped():
    l = Lexer()
    assert l.strip('10 5 + # This is a comment about the sum') == '10 5 +'
    assert list(l.lex('10 5 + # sum')) == ['10', '5', '+']


def test_only_comment():
    l = Lexer()
    assert l.strip('# Ignore this line') == ''
    assert list(l.lex('# Ignore this line')) == []


def test_comment_ends_token():
    l = Lexer()
    # No space needed before the comment.
    assert list(l.lex('2 2 *# square')) == ['2', '2', '*']


def test_empty_line():
    l = Lexer()
    assert list(l.lex('')) == []
    assert list(l.lex('   ')) == []


def test_quotes_kept():
    # Quotes mean something to the machine, not to the lexer.
    l = Lexer()
    assert list(l.lex('100 "rate" sto')) == ['100', '"rate"', 'sto']
