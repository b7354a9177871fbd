from os import isatty, path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
from traceback import print_exc

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import RPNError
from .stack import parse_key
from .numeric import parse_number
from .operators import lookup
from .machine import Machine
from .lexer import Lexer
from .display import format_stack


BANNER = '''\
Welcome to kalk (RPN Calculator). Type 'exit' to quit.
Type 'help' for a list of all functions or '"func" help' for specific usage.'''


class InteractiveInput:
    '''
    Prompting line source, showing the stack above each prompt.
    '''

    def __init__(self, prompt, machine, history=None):
        self.prompt = prompt
        self.machine = machine
        self.history = history

    def message(self):
        return 'Stack: {}\n{}'.format(format_stack(self.machine.stack),
                                      self.prompt)

    def __iter__(self):
        try:
            session = PromptSession(message=self.message,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=True,
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.kalk_history'

    def classify(self, token):
        '''
        Return what the machine would take token for, without running it.
        '''
        if parse_key(token) is not None:
            return 'key'
        elif parse_number(token) is not None:
            return 'number'
        entry = lookup(token)
        if entry is None:
            return 'unknown'
        return entry.group.lower()

    def dumper(self):
        '''
        Dump every token with its classification and normalized form.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(token)>\t<value>')
        for line in self.args.expressions:
            for token in lexer.lex(line):
                kind = self.classify(token)
                if kind == 'key':
                    value = parse_key(token)
                elif kind == 'number':
                    value = parse_number(token)
                else:
                    value = ''
                print(kind, repr(token), value, sep='\t')

    def executor(self):
        '''
        Run machine (RPN calculator).
        '''
        machine = self.machine
        lexer = Lexer()
        if self._interactive():
            print(BANNER)
        for line in self.args.expressions:
            if lexer.strip(line).lower() == 'exit':
                break
            try:
                machine.run(lexer.lex(line))
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                print('Error:', e.args[0], file=sys.stderr)
                if self.args.verbose:
                    print_exc(file=sys.stderr)
        if not self._interactive():
            print(format_stack(machine.stack))

    def _prompting_input(self):
        '''
        Return prompting input if either:

        - prompt explicitly specified.
        - both stdin/out are a tty

        Otherwise stdin itself.
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    machine=self.machine,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.machine = Machine()
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='show tracebacks for '
                                               'failed lines')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='evaluate these lines and '
                                            'print the stack')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action',
                                          help='classify tokens instead '
                                               'of evaluating them')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
