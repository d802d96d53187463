import logging

from .engine import ExpressionEngine
from .util import CalcError


logger = logging.getLogger(__name__)


class Keypad:
    '''
    Calculator keypad and display, minus the screen.

    Buffers typed digits until an operator or variable key commits them to
    the engine, owns the variable bindings, and renders the two display
    lines: the result and the description of the calculation.
    '''

    DIGITS = frozenset('0123456789.')
    MEMORY = 'M'
    DEFAULT_PRECISION = None

    def __init__(self, variables=None, precision=DEFAULT_PRECISION):
        '''
        Create keypad with a fresh engine.

        :param variables: initial variable bindings; copied.
        :param precision: decimal places to round displayed numbers to, or
                          None for no rounding.
        '''
        self.engine = ExpressionEngine()
        self.variables = dict(variables or {})
        self.precision = precision
        self.typing = False
        self.display = '0'
        self.evaluation = self.engine.evaluate(self.variables)

    def press_digit(self, char):
        '''
        Type a digit or decimal point.
        '''
        if char not in type(self).DIGITS:
            raise CalcError('Not a digit {}'.format(repr(char)))
        if self.typing:
            if char != '.' or '.' not in self.display:
                self.display += char
        else:
            self.display = '0.' if char == '.' else char
            self.typing = True

    def undo(self):
        '''
        Forget the last typed digit.
        '''
        if not self.typing:
            return
        if len(self.display) > 1:
            self.display = self.display[:-1]
        else:
            self.display = '0'
            self.typing = False

    def press_operator(self, token):
        '''
        Commit typed digits, if any, then record operator.
        '''
        self._commit()
        self.engine.append_operator(token)
        self._refresh()

    def press_variable(self, name):
        '''
        Commit typed digits, if any, then record a variable reference.
        '''
        self._commit()
        self.engine.append_variable(name)
        self._refresh()

    def store(self, name=MEMORY):
        '''
        Bind variable to the displayed value and re-evaluate.

        Already recorded references to the variable pick up the new value.
        '''
        if not name:
            raise CalcError('Invalid name {}'.format(repr(name)))
        self.variables[name] = float(self.display)
        self.typing = False
        self._refresh()

    def reset(self):
        '''
        Start a new calculation. Variable bindings survive.
        '''
        self.engine = ExpressionEngine()
        self.typing = False
        self.display = '0'
        self._refresh()

    def _commit(self):
        if self.typing:
            self.engine.append_operand(float(self.display))
            self.typing = False

    def _refresh(self):
        self.evaluation = self.engine.evaluate(self.variables)
        logger.debug('Evaluated %d element(s): %r',
                     len(self.engine), self.evaluation)
        if self.evaluation.result is not None:
            self.display = self._format(self.evaluation.result)
        elif not self.evaluation.is_pending:
            self.display = '0'

    def _format(self, number):
        if self.precision is not None:
            number = round(number, self.precision)
        return str(number)

    def render(self):
        '''
        Return the (result, description) display lines.
        '''
        result, is_pending, description = self.evaluation
        if is_pending:
            description += '...'
        elif result is not None and description:
            description += '='
        return self.display, description or '0'
