import contextlib
import io
import os
import tempfile
import unittest

from mfl.main import main


def run_main(*argv):
    """Runs main with argv and returns (exit code, stdout, stderr)."""
    stdout, stderr = io.StringIO(), io.StringIO()
    code = 0
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
        try:
            main(list(argv))
        except SystemExit as exit_:
            code = exit_.code
    return code, stdout.getvalue(), stderr.getvalue()


class MainTestCase(unittest.TestCase):

    def test_command(self):
        code, out, __ = run_main("-c", "val a := 3; val b := 4.0; a + b; a > 2 and not false;")
        self.assertEqual(0, code)
        self.assertEqual("7\ntrue\n", out)

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.mfl")
            with open(path, "w", encoding="utf-8") as file:
                file.write("val x := 10 - 3 - 2;\nx;\nx mod 2 = 1;\n")

            code, out, __ = run_main(path)
            self.assertEqual(0, code)
            self.assertEqual("5\ntrue\n", out)

            code, out, err = run_main(os.path.join(tmp, "missing.mfl"))
            self.assertEqual(1, code)
            self.assertIn("could not be opened", err)
            self.assertNotIn("syntax error", err)

    def test_syntax_error(self):
        code, out, err = run_main("-c", "1; val x 5;")
        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertIn("syntax error", err)

    def test_runtime_error(self):
        code, out, err = run_main("-c", "1;\nx + 1;\n2;")
        self.assertEqual(1, code)
        self.assertEqual("1\n", out)
        self.assertIn("runtime error", err)
        self.assertIn("line 2", err)

    def test_tree(self):
        code, out, __ = run_main("--tree", "-c", "1 + 2;")
        self.assertEqual(0, code)
        self.assertEqual("Prog(\n  BinOp[ADD](\n    Token(INT(1))\n    Token(INT(2))\n  )\n)\n", out)


if __name__ == '__main__':
    unittest.main()
