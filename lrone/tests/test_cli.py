import contextlib
import io
import os
import tempfile
import unittest

from lrone.lronec import main
from lrone.tests.scenarios import GRAMMARS


def _run(*argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_check(self):
        code, out, err = _run("check", str(GRAMMARS / "ab.g"))
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "[CHECK OK] states=6 rules=3 conflicts=0")
        self.assertEqual(err, "")

    def test_check_debug_dumps_states(self):
        code, out, err = _run("check", "-D", str(GRAMMARS / "ab_eps.g"))
        self.assertEqual(code, 0)
        self.assertIn("conflicts=1", out)
        self.assertIn("[DEBUG] tables built", err)
        self.assertIn("[State 0 items]", err)
        self.assertIn("state 0, on a: shift / reduce", err)

    def test_check_strict(self):
        code, out, err = _run("check", "--strict", str(GRAMMARS / "ab_eps.g"))
        self.assertEqual(code, 2)
        self.assertIn("[CONFLICT]", err)

    def test_bad_rule_file(self):
        code, out, err = _run("check", str(GRAMMARS / "bad.g"))
        self.assertEqual(code, 2)
        self.assertIn("[SYNTAX ERROR]", err)
        self.assertIn("missing '->'", err)

    def test_missing_file(self):
        code, out, err = _run("check", str(GRAMMARS / "nope.g"))
        self.assertEqual(code, 2)
        self.assertIn("[ERROR]", err)

    def test_table(self):
        code, out, err = _run("table", str(GRAMMARS / "ab.g"))
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[0].split(), ["state", "a", "b", "$", "|", "A", "B", "S"])

    def test_run(self):
        self.assertEqual(_run("run", str(GRAMMARS / "ab.g"), "--text", "ab")[:2], (0, "ACCEPT\n"))
        self.assertEqual(_run("run", str(GRAMMARS / "ab.g"), "--text", "ba")[:2], (1, "REJECT\n"))
        self.assertEqual(_run("run", str(GRAMMARS / "ab_eps.g"), "--text", "")[:2], (0, "ACCEPT\n"))

    def test_run_trace(self):
        code, out, err = _run("run", "-D", str(GRAMMARS / "ab.g"), "--text", "ab")
        self.assertEqual(code, 0)
        self.assertEqual(err.count("[TRACE]"), 6)

    def test_run_from_input_file(self):
        fd, path = tempfile.mkstemp(suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write("ab\n")
            code, out, _ = _run("run", str(GRAMMARS / "ab.g"), "--input", path)
        finally:
            os.remove(path)
        self.assertEqual((code, out), (0, "ACCEPT\n"))


if __name__ == '__main__':
    unittest.main()
