'''
Pocket calculator brain.

Records operands, variables and operators as they're keyed in, and replays
them on demand into a running result plus a human readable description of
the calculation: 3.0 + 4.0 × 2.0, strictly left to right, like the cheap
calculator in your drawer.

Variables are looked up on every evaluation rather than when keyed in, so
storing a new value into M changes the answer to everything that used M.
'''

from .catalog import OperationCatalog
from .engine import ExpressionEngine, Evaluation
from .keypad import Keypad
from .lexer import Lexer
from .cli import CLI


__all__ = ('OperationCatalog', 'ExpressionEngine', 'Evaluation', 'Keypad',
           'Lexer', 'CLI')
