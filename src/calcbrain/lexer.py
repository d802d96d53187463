from functools import reduce
import operator

import regex

from .util import CalcError
from .catalog import OperationCatalog


def _operator_pattern(token):
    '''
    Escape token, making sure sin doesn't swallow the start of sinh.
    '''
    pattern = regex.escape(token)
    if token.isascii() and token.isalpha():
        pattern += r'(?!\w)'
    return pattern


class Lexer:
    '''
    Lexer for keypad input typed as text.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Support not just digits, but thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      (?:
                          _\d{1,3}
                      )*
                  )
                  '''
    # Number, as typed on the keypad. No sign; that's ±.
    NUMBER = r'''
              (?:
                  # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  # .2, 0.2, 0.200_200
                  {INTEGRAL}?
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)
    NAME = r'[^\W\d]\w*'
    # →M, >M, or bare → for the memory variable
    STORE = r'(?:→|>)(?<__store__>' + NAME + r')?'

    # Longest first, so x² beats anything shorter sharing its prefix.
    OPERATOR = r'(?:' + r'|'.join(map(_operator_pattern,
                                      sorted(OperationCatalog.tokens(),
                                             key=len,
                                             reverse=True))) + r')'
    RESET = r'C(?!\w)'
    UNDO = r'⌫|<'
    SPACE = r'\s+'

    # Immediate, as in needing no further parsing
    IMMEDIATE = r'(?<operator>' + OPERATOR + r')|' \
                r'(?<reset>' + RESET + r')|' \
                r'(?<undo>' + UNDO + r')|' \
                r'(?<space>' + SPACE + r')'
    # All possible lexemes. Order matters: operators and C shadow variables.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<store>' + STORE + r')|' \
             r'(?<immediate>' + IMMEDIATE + r')|' \
             r'(?<variable>' + NAME + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises CalcError on the first bit it can't make sense of, after
        yielding everything before it.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to the keypad.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the groups a lexeme matched, minus the grouping ones.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value and key != 'immediate'}
