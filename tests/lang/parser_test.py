import unittest

from lambdainterp.lang.error import ParseError, RedefinitionError
from lambdainterp.lang.numerical import cnumber
from lambdainterp.lang.parser import SELF_SUFFIX, Parser, parse
from lambdainterp.lang.primitives import ADD, COND, ISZERO, PRED, RECURSIVE, SUCC, TRUE, TYPED_COND, default_symbols
from lambdainterp.pure.term import Abstraction, Application, Name, apply

f, x, y, z = Name("f"), Name("x"), Name("y"), Name("z")


def parse_term(source, symbols=None):
    units = parse(source, symbols)
    assert len(units) == 1 and not units[0].is_definition, units
    return units[0].term


class ParserTestCase(unittest.TestCase):

    def test_pure_terms(self):
        cases = {
            "x": x,
            "λx.x": Abstraction(x, x),
            "λx.λy.(y x)": Abstraction(x, Abstraction(y, Application(y, x))),
            "(f x)": Application(f, x),
            "((f x) y)": apply(f, x, y),
            "(f (x y))": Application(f, Application(x, y)),
            "(λx.x y)": Application(Abstraction(x, x), y),
            "(x)": x,
            "((x))": x,
            "λx.(x)": Abstraction(x, x),
        }
        for source, expected in cases.items():
            self.assertEqual(expected, parse_term(source), source)

    def test_integer_literals(self):
        self.assertEqual(cnumber(0), parse_term("0"))
        self.assertEqual(Application(SUCC, Application(SUCC, cnumber(0))), parse_term("2"))

    def test_conditionals(self):
        self.assertEqual(apply(COND, x, y, TRUE), parse_term("if true then x else y"))
        self.assertEqual(apply(TYPED_COND, x, y, z), parse_term("IF z THEN x ELSE y"))
        self.assertEqual(apply(COND, x, y, Application(ISZERO, z)), parse_term("if iszero z then x else y"))

    def test_multiple_units(self):
        units = parse("def id x = x (id y) z")
        self.assertEqual(3, len(units))
        self.assertTrue(units[0].is_definition)
        self.assertEqual(Application(Abstraction(x, x), y), units[1].term)
        self.assertEqual(z, units[2].term)

        self.assertEqual([], parse(""))
        self.assertEqual([], parse("   "))

    def test_parse_unit_at_end(self):
        parser = Parser("x")
        self.assertEqual(x, parser.parse_unit().term)
        self.assertIsNone(parser.parse_unit())

    def test_parse_errors(self):
        should_raise = ["λ", "λx", "λx.", "(", "(x", "(x y", ")", "x )", "if x then y", "λ.x", "def", "def f x",
                        "def f x =", "def 1 = x", "=", "then"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

    def test_error_position(self):
        with self.assertRaises(ParseError) as context:
            parse("(f x))")
        self.assertEqual(5, context.exception.start)

        with self.assertRaises(ParseError) as context:
            parse("λx.")
        self.assertIn("ends unexpectedly", str(context.exception))


class ImplicitApplicationTestCase(unittest.TestCase):

    def setUp(self):
        self.symbols = default_symbols()
        parse("def id x = x def k x y = x", self.symbols)

    def test_saturated(self):
        K = Abstraction(x, Abstraction(y, x))
        cases = {
            "id y": Application(Abstraction(x, x), y),
            "k y z": apply(K, y, z),
            "k (id y) z": apply(K, Application(Abstraction(x, x), y), z),
            "succ 0": Application(SUCC, cnumber(0)),
        }
        for source, expected in cases.items():
            self.assertEqual(expected, parse_term(source, self.symbols), source)

    def test_unsatisfied_arity(self):
        self.assertEqual(Abstraction(x, x), parse_term("id", self.symbols))
        self.assertEqual(Abstraction(x, x), parse_term("(id)", self.symbols))

        # k gets only one argument, so it stands alone and y is a unit of its own
        units = parse("k y", self.symbols)
        self.assertEqual([Abstraction(x, Abstraction(y, x)), y], [unit.term for unit in units])

    def test_explicit_application_function(self):
        self.assertEqual(Application(Abstraction(x, x), y), parse_term("(id y)", self.symbols))
        self.assertEqual(Application(PRED, z), parse_term("(pred z)", self.symbols))
        self.assertEqual(Application(ISZERO, Application(PRED, z)), parse_term("(iszero (pred z))", self.symbols))

    def test_grouped_saturated_application(self):
        self.assertEqual(apply(ADD, cnumber(1), cnumber(2)), parse_term("(add 1 2)", self.symbols))
        self.assertEqual(Application(Application(ADD, cnumber(1)), cnumber(2)), parse_term("((add 1) 2)", self.symbols))

    def test_symbols_unchanged_by_expressions(self):
        before = self.symbols.names()
        parse("k (id y) z", self.symbols)
        self.assertEqual(before, self.symbols.names())


class DefinitionTestCase(unittest.TestCase):

    def setUp(self):
        self.symbols = default_symbols()

    def test_def(self):
        unit = parse("def twice f x = (f (f x))", self.symbols)[0]
        term = Abstraction(f, Abstraction(x, Application(f, Application(f, x))))

        self.assertEqual(("twice", 2, term), (unit.name, unit.arity, unit.term))
        self.assertEqual(term, self.symbols.lookup("twice").term)
        self.assertEqual(2, self.symbols.lookup("twice").arity)

    def test_def_without_params(self):
        parse("def two = 2", self.symbols)
        self.assertEqual((cnumber(2), 0), self.symbols.lookup("two"))
        self.assertEqual(cnumber(2), parse_term("two", self.symbols))

    def test_definitions_see_earlier_definitions(self):
        parse("def id x = x", self.symbols)
        parse("def idid x = id (id x)", self.symbols)
        I = Abstraction(x, x)
        self.assertEqual(Abstraction(x, Application(I, Application(I, x))), self.symbols.lookup("idid").term)

    def test_rec(self):
        parse("rec loop x = loop x", self.symbols)
        self_ref = Name("loop" + SELF_SUFFIX)
        expected = Application(RECURSIVE, Abstraction(self_ref, Abstraction(x, Application(self_ref, x))))

        self.assertEqual(expected, self.symbols.lookup("loop").term)
        self.assertEqual(1, self.symbols.lookup("loop").arity)
        self.assertNotIn("loop" + SELF_SUFFIX, self.symbols)

    def test_def_is_not_recursive(self):
        parse("def g x = g", self.symbols)
        self.assertEqual(Abstraction(x, Name("g")), self.symbols.lookup("g").term)

    def test_redefinition(self):
        parse("def f x = x", self.symbols)
        should_raise = ["def f x = x", "rec f x = x", "def zero = x", "def add x y = x"]
        for case in should_raise:
            self.assertRaises(RedefinitionError, parse, case, self.symbols)
        self.assertEqual(Abstraction(x, x), self.symbols.lookup("f").term)

    def test_failed_definition_not_installed(self):
        should_raise = ["def g x = (x", "rec h n = h n )"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case, self.symbols)
        self.assertNotIn("g", self.symbols)

        # the definition itself succeeded before the stray ")" failed
        self.assertIn("h", self.symbols)

    def test_logs_definitions(self):
        with self.assertLogs("lambdainterp.lang.parser", level="INFO") as logs:
            parse("def id x = x", self.symbols)
        self.assertEqual(["INFO:lambdainterp.lang.parser:DEF id:1 = λx.x"], logs.output)


if __name__ == '__main__':
    unittest.main()
