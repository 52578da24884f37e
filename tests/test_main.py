import contextlib
import io
import tempfile
import unittest
from pathlib import Path

import main


class MainCliTests(unittest.TestCase):
    def run_main(self, *argv: str):
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main.main(["--log-level", "ERROR", *argv])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_places_words_and_prints_summary(self) -> None:
        code, output, _ = self.run_main("--grid-size", "5", "--words", "cat", "dog", "--seed", "3")
        self.assertEqual(code, 0)
        self.assertIn("--- Placements ---", output)
        self.assertIn("CAT", output)
        self.assertIn("Seed: 3", output)

    def test_words_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "words.txt"
            path.write_text("# fruit\nPEAR\n\nFIG\n", encoding="utf-8")
            self.assertEqual(main.parse_words_file(path), ["PEAR", "FIG"])
            code, output, _ = self.run_main("--grid-size", "4", "--words-file", str(path))
        self.assertEqual(code, 0)
        self.assertIn("PEAR", output)

    def test_bad_word_exits_with_error(self) -> None:
        code, _, errors = self.run_main("--grid-size", "3", "--words", "LONGER")
        self.assertEqual(code, 1)
        self.assertIn("Word too long", errors)

    def test_words_are_required(self) -> None:
        with self.assertRaises(SystemExit):
            self.run_main("--grid-size", "3")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
