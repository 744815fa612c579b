"""Session control for the lambda language. Reads source files line by line, parses each logical line into units and
reduces the expressions, either in command line mode or file interpretation mode.

Line syntax on top of the parser's grammar:

```
<comment>      ::= "--" <char>*      ; ignored up to the end of the line
<continuation> ::= "\" <char>*       ; the rest of the line is dropped and the next line joins this one
```
"""

from lambdainterp import config
from lambdainterp.lang.error import GenericException, TooManyStepsError
from lambdainterp.lang.numerical import numberify
from lambdainterp.lang.parser import Parser
from lambdainterp.lang.primitives import default_symbols
from lambdainterp.pure.reduction import STRATEGIES, reduce
from lambdainterp.pure.term import render

COMMENT = "--"
CONTINUATION = "\\"


class Session:
    """Governs a lambda session: one symbol table shared by every line added to it."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, symbols=None, strategy=None, max_steps=None, numbers=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.numbers = numbers    # whether or not numerals are displayed as digits

        if strategy is None:
            strategy = config.get_strategy()
        if strategy not in STRATEGIES:
            raise GenericException("unknown reduction strategy '{}'", strategy, diagnosis=False)
        self.strategy = STRATEGIES[strategy]
        self.max_steps = max_steps if max_steps is not None else config.get_max_steps()

        self.symbols = symbols if symbols is not None else default_symbols()
        self.to_exec = []  # list of (line, line num, term) to reduce
        self.results = []  # displayed results of reduced terms

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but the returned flag will indicate whether the next line continues this one. Returns
        the stripped line and that flag.
        """
        if COMMENT in line:
            line = line[:line.index(COMMENT)]  # get rid of comments

        continues = CONTINUATION in line
        if continues:
            line = line[:line.index(CONTINUATION)]

        line = line.strip()
        if exprs is not None:
            if add_to_prev and exprs:
                prev, prev_num = exprs.pop()
                exprs.append((f"{prev} {line}".strip(), prev_num))
            elif line or continues:
                exprs.append((line, line_num))

        return line, continues

    def add(self, line, line_num):
        """Parses line into the current session. Definitions are installed at once; reduction of expressions is
        delayed until run is called. If any unit of the line fails to parse, none of its expressions are queued.
        """
        if not line:
            return

        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        terms = [unit.term for unit in Parser(line, self.symbols) if not unit.is_definition]
        self.to_exec.extend((line, line_num, term) for term in terms)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Reduces this session's pending expressions and appends their display forms to results. An expression
        without a normal form in the step budget is reported as a warning and skipped.
        """
        to_exec, self.to_exec = self.to_exec, []

        for line, line_num, term in to_exec:
            self.error_handler.register_line(self.path, line, line_num)

            try:
                result = reduce(term, self.strategy, self.max_steps)
            except TooManyStepsError as error:
                self.error_handler.warn("'{}' has no normal form within {} reduction steps",
                                        (line, str(error.steps)), diagnosis=False)
            else:
                self.results.append(self.display(result))

            self.error_handler.remove_line(self.path)

    def display(self, term):
        """Returns the rendered form of term, with numerals as digits if self.numbers."""
        return render(numberify(term) if self.numbers else term)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
