import unittest

from lambdainterp.lang.error import RedefinitionError
from lambdainterp.lang.primitives import BUILTINS, default_symbols
from lambdainterp.lang.symbols import Definition, SymbolTable
from lambdainterp.pure.term import Abstraction, Name

x = Name("x")
I = Abstraction(x, x)


class SymbolTableTestCase(unittest.TestCase):

    def test_define_lookup(self):
        table = SymbolTable()
        self.assertIsNone(table.lookup("id"))
        self.assertNotIn("id", table)

        table.define("id", I, 1)
        self.assertEqual(Definition(I, 1), table.lookup("id"))
        self.assertIn("id", table)

    def test_redefinition(self):
        table = SymbolTable({"id": Definition(I, 1)})
        self.assertRaises(RedefinitionError, table.define, "id", x, 0)
        self.assertRaises(RedefinitionError, table.extend().define, "id", x, 0)
        self.assertEqual(Definition(I, 1), table.lookup("id"))

    def test_extend(self):
        outer = SymbolTable({"id": Definition(I, 1)})
        inner = outer.extend()
        inner.define("self", x, 2)

        self.assertEqual(Definition(I, 1), inner.lookup("id"))
        self.assertEqual(Definition(x, 2), inner.lookup("self"))
        self.assertIsNone(outer.lookup("self"))
        self.assertIs(outer, inner.find("id"))
        self.assertIs(inner, inner.find("self"))

        # the outer table keeps growing after the child scope was made
        outer.define("late", x, 0)
        self.assertIn("late", inner)

    def test_names(self):
        outer = SymbolTable({"a": Definition(x, 0), "b": Definition(x, 0)})
        inner = outer.extend()
        inner.define("c", x, 0)
        self.assertEqual(["c", "a", "b"], inner.names())
        self.assertEqual(["a", "b"], outer.names())

    def test_default_symbols(self):
        first, second = default_symbols(), default_symbols()
        self.assertEqual(set(BUILTINS), set(first.names()))

        first.define("id", I, 1)
        self.assertNotIn("id", second)
        self.assertNotIn("id", BUILTINS)

    def test_builtin_arities(self):
        cases = {"zero": 0, "succ": 1, "pred": 1, "iszero": 1, "add": 2, "mult": 2, "equal": 2, "cond": 3,
                 "recursive": 1, "make_obj": 2, "make_error": 1, "typed_cond": 3, "bool_error": 0}
        symbols = default_symbols()
        for name, arity in cases.items():
            self.assertEqual(arity, symbols.lookup(name).arity, name)


if __name__ == '__main__':
    unittest.main()
