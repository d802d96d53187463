from pytest import Item, fixture

from calcbrain.engine import ExpressionEngine
from calcbrain.keypad import Keypad


@fixture
def engine():
    return ExpressionEngine()


@fixture
def keypad():
    return Keypad()


def _press(keypad, *keys):
    '''
    Press keys in order: digit strings are typed, anything else is an
    operator.
    '''
    for key in keys:
        if all(char in Keypad.DIGITS for char in key):
            for char in key:
                keypad.press_digit(char)
        else:
            keypad.press_operator(key)


@fixture
def press():
    return _press


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP -o enable_assertion_pass_hook=true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
