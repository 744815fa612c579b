"""Interactive mode: a read-reduce-print loop over one command-line Session, built on cmd.

Every input line that is not a shell command goes through the same preprocessing as a source file line, so `--`
comments and `\\` continuations work here too. `symbols`, `help` and `exit` are commands; a definition with one of
those names is reached by wrapping it in parentheses, e.g. `(symbols)`.
"""

import cmd


class Shell(cmd.Cmd):
    """Prompts for λ-terms and definitions and prints each normal form."""
    intro = "Lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # shown while a line is being continued
    _tmp_prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""  # continued text not yet handed to the session
        self.line_num = 0

    def default(self, line):
        """Adds one logical line to the session and prints the results it produces."""
        with self.sess.error_handler:  # cmd.Cmd would otherwise stop on the first exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}", self.line_num, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self.line_num)
                self.sess.run()

                while self.sess.results:
                    print(self.sess.pop())

    def do_symbols(self, arg):
        """Lists every defined symbol with its arity."""
        for name in sorted(self.sess.symbols.names()):
            print(f"{name}:{self.sess.symbols.lookup(name).arity}")

    def do_help(self, arg):
        """Prints a usage summary of the language and the shell commands."""
        print("Welcome to the lambda interpreter!\n\n"
              "Type a λ-term to reduce it to normal form, e.g. '(λx.x y)' gives 'y'. Define\n"
              "named functions with 'def', e.g. 'def twice f x = (f (f x))', and recursive\n"
              "ones with 'rec'. Integers stand for Church numerals, so 'add 1 2' is 3. End a\n"
              "line with '\\' to continue it on the next one, and start a comment with '--'.\n\n"
              "Commands: 'symbols' lists definitions, 'exit' quits. These command names take\n"
              "precedence over definitions of the same name; write '(symbols)' to use one.")

    def emptyline(self):
        """Blank input does nothing, instead of repeating the last line."""
        return ""

    def do_EOF(self, arg):
        """Leaves the shell on end of input."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Leaves the shell."""
        return True
