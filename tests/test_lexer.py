'''
Lexer tests
'''

import regex

from calcbrain.util import CalcError
from calcbrain.lexer import Lexer

from pytest import raises


def lexemes(line):
    l = Lexer()
    return [l.matchedgroups(m)
            for m in l.lex(line)
            if l.isfeedable(m)]


def test_numbers():
    assert lexemes('12 1_200 .5 3.') == [{'number': '12'},
                                         {'number': '1_200'},
                                         {'number': '.5'},
                                         {'number': '3.'}]


def test_operators():
    assert lexemes('3+4×x²÷√') == [{'number': '3'},
                                   {'operator': '+'},
                                   {'number': '4'},
                                   {'operator': '×'},
                                   {'operator': 'x²'},
                                   {'operator': '÷'},
                                   {'operator': '√'}]


def test_named_operators_and_variables():
    assert lexemes('sin e sinx eta π') == [{'operator': 'sin'},
                                           {'operator': 'e'},
                                           {'variable': 'sinx'},
                                           {'variable': 'eta'},
                                           {'operator': 'π'}]


def test_store():
    assert lexemes('→M >x →') == [{'store': '→M', '__store__': 'M'},
                                  {'store': '>x', '__store__': 'x'},
                                  {'store': '→'}]


def test_reset_and_undo():
    assert lexemes('C Cx < ⌫') == [{'reset': 'C'},
                                   {'variable': 'Cx'},
                                   {'undo': '<'},
                                   {'undo': '⌫'}]


def test_space_not_feedable():
    l = Lexer()
    matches = list(l.lex('1 +'))
    assert [l.isfeedable(m) for m in matches] == [True, False, True]


def test_unlexable():
    l = Lexer()
    with raises(CalcError, match=regex.escape("Couldn't lex %")):
        list(l.lex('1 + %'))


def test_yields_before_error():
    l = Lexer()
    matches = l.lex('1 ?')
    assert next(matches).group(0) == '1'
    assert next(matches).group(0) == ' '
    with raises(CalcError):
        next(matches)


def test_ascii_aliases():
    assert lexemes('6-2*3/4') == [{'number': '6'},
                                  {'operator': '-'},
                                  {'number': '2'},
                                  {'operator': '*'},
                                  {'number': '3'},
                                  {'operator': '/'},
                                  {'number': '4'}]
