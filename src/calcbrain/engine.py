from collections import deque, namedtuple
import logging

from .catalog import (OperationCatalog, Constant, UnaryOperation,
                      BinaryOperation, Equals)


logger = logging.getLogger(__name__)

# Log elements
Operand = namedtuple('Operand', 'value')
Variable = namedtuple('Variable', 'name')
Op = namedtuple('Op', 'token')

Evaluation = namedtuple('Evaluation', 'result is_pending description')

# Evaluation-local state. Never stored on the engine.
_Accumulator = namedtuple('_Accumulator', 'value description')
_Pending = namedtuple('_Pending', 'left function describe')


def _resolve(pending, accumulator):
    '''
    Apply pending binary operation to its right operand.
    '''
    return _Accumulator(pending.function(pending.left.value,
                                         accumulator.value),
                        pending.describe(pending.left.description,
                                         accumulator.description))


class ExpressionEngine:
    '''
    Calculator brain.

    Records operands, variable references and operator tokens, in input
    order, and folds them into a result and an infix description on demand.
    Operators apply strictly left to right; there is no precedence.

    Nothing in here raises on bad input. Unknown tokens, operators without
    an operand and unbound variables all degrade quietly.

    There's no way to clear the log. Make a new engine instead.
    '''

    catalog = OperationCatalog()

    def __init__(self):
        '''
        Create engine with an empty log.
        '''
        self.log = deque()

    def __len__(self):
        return len(self.log)

    def append_operand(self, value):
        '''
        Record a number. NaN and infinities are fine.
        '''
        self.log.append(Operand(float(value)))

    def append_variable(self, name):
        '''
        Record a variable reference, resolved on each evaluation.
        '''
        self.log.append(Variable(name))

    def append_operator(self, token):
        '''
        Record an operator token, whether or not the catalog knows it.
        '''
        self.log.append(Op(token))

    def evaluate(self, variables=None):
        '''
        Replay the log against the catalog and variable bindings.

        :param variables: mapping of variable name to value. Unbound names
                          are worth zero.
        :returns: Evaluation(result, is_pending, description), where result
                  is None until there's something to show.
        '''
        if variables is None:
            variables = {}
        accumulator = None
        pending = None
        # Snapshot; appends during the fold don't affect this pass.
        for element in tuple(self.log):
            if isinstance(element, Operand):
                accumulator = _Accumulator(element.value, str(element.value))
            elif isinstance(element, Variable):
                accumulator = _Accumulator(float(variables.get(element.name,
                                                                0.0)),
                                           element.name)
            else:
                accumulator, pending = self._operate(element.token,
                                                     accumulator,
                                                     pending)
        if pending is not None and accumulator is not None:
            # Right operand arrived, just no = or operator after it.
            accumulator = _resolve(pending, accumulator)
            pending = None

        if pending is not None:
            description = pending.describe(pending.left.description, '')
        elif accumulator is not None:
            description = accumulator.description
        else:
            description = ''
        return Evaluation(None if accumulator is None else accumulator.value,
                          pending is not None,
                          description)

    def _operate(self, token, accumulator, pending):
        '''
        Apply one operator token, returning the new accumulator and pending.
        '''
        operation = self.catalog.lookup(token)
        if operation is None:
            logger.debug('Skipping unknown token %r', token)
        elif isinstance(operation, Constant):
            accumulator = _Accumulator(operation.value, token)
        elif isinstance(operation, UnaryOperation):
            if accumulator is None:
                logger.debug('No operand for %r', token)
            else:
                accumulator = _Accumulator(
                    operation.function(accumulator.value),
                    operation.describe(accumulator.description))
        elif isinstance(operation, BinaryOperation):
            if pending is not None and accumulator is not None:
                accumulator = _resolve(pending, accumulator)
                pending = None
            if accumulator is None:
                logger.debug('No left operand for %r', token)
            else:
                pending = _Pending(accumulator,
                                   operation.function,
                                   operation.describe)
                accumulator = None
        elif isinstance(operation, Equals):
            if pending is not None and accumulator is not None:
                accumulator = _resolve(pending, accumulator)
                pending = None
        return accumulator, pending
