import io
import unittest
from contextlib import redirect_stdout

from lambdainterp.lang.error import ErrorHandler
from lambdainterp.lang.session import Session
from lambdainterp.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, strategy="applicative", max_steps=1000)
        self.shell = Shell(sess)

    def run_lines(self, *lines):
        output = io.StringIO()
        with redirect_stdout(output):
            for line in lines:
                self.shell.onecmd(line)
        return output.getvalue()

    def test_reduce(self):
        self.assertEqual("y\n", self.run_lines("(λx.x y)"))
        self.assertEqual("λx.x\n", self.run_lines("λx.((λy.y) x)"))

    def test_definitions(self):
        self.assertEqual("a\n", self.run_lines("def k x y = x", "k a b"))
        self.assertIn("k", self.shell.sess.symbols)

    def test_continuation(self):
        self.assertEqual("", self.run_lines("def k x y = \\"))
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.assertEqual("a\n", self.run_lines("x", "k a b"))
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)

    def test_errors_are_not_fatal(self):
        self.shell.sess.error_handler.fatal = False
        output = self.run_lines("(x", "def id x = x", "def id x = x", "(id z)")

        self.assertEqual(2, output.count("error: "))
        self.assertTrue(output.endswith("z\n"))

    def test_failed_line_queues_nothing(self):
        output = self.run_lines("stale )", "fresh")

        self.assertEqual(1, output.count("error: "))
        self.assertNotIn("stale\n", output)
        self.assertTrue(output.endswith("\nfresh\n"))
        self.assertEqual([], self.shell.sess.to_exec)

    def test_definition_named_like_command(self):
        output = self.run_lines("def symbols = x", "(symbols)")
        self.assertEqual("x\n", output)

        self.assertIn("id:1\n", self.run_lines("def id x = x", "symbols"))
        self.assertIn("'(symbols)'", self.run_lines("help"))

    def test_warning(self):
        output = self.run_lines("(λx.(x x) λx.(x x))")
        self.assertIn("warning: ", output)

    def test_blank_and_comment_lines(self):
        self.assertEqual("", self.run_lines("", "-- nothing here"))

    def test_symbols(self):
        output = self.run_lines("def id x = x", "symbols")
        self.assertIn("id:1\n", output)
        self.assertIn("add:2\n", output)

    def test_exit(self):
        with redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("exit"))
            self.assertTrue(self.shell.onecmd("EOF"))


if __name__ == '__main__':
    unittest.main()
