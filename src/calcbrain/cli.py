from os import isatty
from sys import stdin, stdout, exit
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import logging
import sys

from prompt_toolkit import PromptSession

from .util import CalcError, wrap_user_errors
from .engine import Operand, Variable, Op
from .keypad import Keypad
from .lexer import Lexer


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


@wrap_user_errors('Bad binding {0}, expected NAME=VALUE')
def _binding(text):
    name, value = text.split('=', 1)
    if not name:
        raise CalcError('Missing name in {}'.format(repr(text)))
    return name, float(value)


def binding(text):
    '''
    Parse a NAME=VALUE command line variable binding.
    '''
    try:
        return _binding(text)
    except CalcError as e:
        raise ArgumentTypeError(e.args[0])


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '

    def feed(self, keypad, groups):
        '''
        Press the key(s) a lexeme stands for.
        '''
        if 'number' in groups:
            for char in groups['number'].replace('_', ''):
                keypad.press_digit(char)
        elif 'store' in groups:
            keypad.store(groups.get('__store__') or keypad.MEMORY)
        elif 'operator' in groups:
            keypad.press_operator(groups['operator'])
        elif 'reset' in groups:
            keypad.reset()
        elif 'undo' in groups:
            keypad.undo()
        elif 'variable' in groups:
            keypad.press_variable(groups['variable'])

    def element(self, groups):
        '''
        Return what a lexeme becomes: an engine element, or a keypad command.
        '''
        if 'number' in groups:
            return Operand(float(groups['number'].replace('_', '')))
        elif 'store' in groups:
            return 'store ' + (groups.get('__store__') or Keypad.MEMORY)
        elif 'operator' in groups:
            return Op(groups['operator'])
        elif 'variable' in groups:
            return Variable(groups['variable'])
        elif 'reset' in groups:
            return 'reset'
        elif 'undo' in groups:
            return 'undo'

    def dumper(self):
        '''
        Dump all lexeme matches and what they become.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<element>')
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if not lexer.isfeedable(match):
                        continue
                    groups = lexer.matchedgroups(match)
                    print(*groups.keys(),
                          repr(match.group(0)),
                          self.element(groups),
                          sep='\t')
            except CalcError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run the calculator, printing the display after each line.
        '''
        keypad = Keypad(variables=dict(self.args.bindings),
                        precision=self.args.precision)
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        self.feed(keypad, lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                logger.debug('Line %r aborted', line, exc_info=True)
                print(e.args[0], file=sys.stderr)
            print(*keypad.render(), sep='\t')

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          default=Keypad.DEFAULT_PRECISION,
                                          help='round output to N places')
        self.argument_parser.add_argument('-s', '--set',
                                          type=binding,
                                          action='append',
                                          dest='bindings',
                                          default=[],
                                          metavar='NAME=VALUE',
                                          help='bind variable')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(levelname)s: %(message)s')
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
