from collections import namedtuple
from types import MappingProxyType
import operator
import math


Constant = namedtuple('Constant', 'value')
UnaryOperation = namedtuple('UnaryOperation', 'function describe')
BinaryOperation = namedtuple('BinaryOperation', 'function describe')
Equals = namedtuple('Equals', '')


def _divide(left, right):
    '''
    Divide like an IEEE double would, rather than raise ZeroDivisionError.
    '''
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _sqrt(only):
    if only < 0:
        return math.nan
    return math.sqrt(only)


def _power(exponent):
    def wrapped(only):
        try:
            return only ** exponent
        except OverflowError:
            return math.copysign(math.inf, only) if exponent % 2 else math.inf
    return wrapped


def _trig(f):
    def wrapped(only):
        try:
            return f(only)
        except ValueError:
            # sin/cos/tan of an infinity
            return math.nan
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _named(name):
    '''
    Describe a unary operation as name(operand).
    '''
    return lambda operand: '{0}({1})'.format(name, operand)


def _infix(glyph):
    '''
    Describe a binary operation as left GLYPH right.
    '''
    return lambda left, right: '{0} {1} {2}'.format(left, glyph, right)


class OperationCatalog:
    '''
    Fixed mapping of calculator tokens to operations.

    Every operation bundles its numeric function with the function that
    formats its description. The mapping is read-only and shared by every
    engine.
    '''

    _ADD = BinaryOperation(operator.__add__, _infix('+'))
    _SUBTRACT = BinaryOperation(operator.__sub__, _infix('-'))
    _MULTIPLY = BinaryOperation(operator.__mul__, _infix('×'))
    _DIVIDE = BinaryOperation(_divide, _infix('÷'))

    OPERATIONS = MappingProxyType({
        # Constants
        'π': Constant(math.pi),
        'e': Constant(math.e),

        # Unary
        '±': UnaryOperation(operator.__neg__, '-{0}'.format),
        'x²': UnaryOperation(_power(2), '({0})²'.format),
        'x³': UnaryOperation(_power(3), '({0})³'.format),
        '√': UnaryOperation(_sqrt, _named('√')),
        'sin': UnaryOperation(_trig(math.sin), _named('sin')),
        'cos': UnaryOperation(_trig(math.cos), _named('cos')),
        'tan': UnaryOperation(_trig(math.tan), _named('tan')),

        # Binary, with ASCII aliases for keyboards lacking the glyphs
        '+': _ADD,
        '−': _SUBTRACT,
        '-': _SUBTRACT,
        '×': _MULTIPLY,
        '*': _MULTIPLY,
        '÷': _DIVIDE,
        '/': _DIVIDE,

        '=': Equals(),
    })

    @classmethod
    def lookup(cls, token):
        '''
        Return the operation for token, or None if it isn't one of ours.
        '''
        return cls.OPERATIONS.get(token)

    @classmethod
    def tokens(cls):
        return tuple(sorted(cls.OPERATIONS))

    def __contains__(self, token):
        return token in type(self).OPERATIONS
