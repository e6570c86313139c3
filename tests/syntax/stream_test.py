import os
import tempfile
import unittest

from mfl.lang.error import GenericException, MFLSyntaxError
from mfl.syntax.stream import CharacterClass, CharacterStream


class CharacterStreamTestCase(unittest.TestCase):

    def test_current_class(self):
        cases = {
            "a": CharacterClass.LETTER,
            "Z": CharacterClass.LETTER,
            "7": CharacterClass.DIGIT,
            " ": CharacterClass.WHITE_SPACE,
            "\n": CharacterClass.WHITE_SPACE,
            "\t": CharacterClass.WHITE_SPACE,
            ":": CharacterClass.OTHER,
            ".": CharacterClass.OTHER,
            "": CharacterClass.END,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, CharacterStream(case).current_class, repr(case))

    def test_end_of_input(self):
        stream = CharacterStream("a")
        self.assertEqual("a", stream.current_char)

        for _ in range(3):
            stream.advance()
            self.assertEqual(CharacterStream.END_CHAR, stream.current_char)
            self.assertIs(CharacterClass.END, stream.current_class)

        self.assertEqual(CharacterStream.END_CHAR, CharacterStream(None).current_char)

    def test_line_number(self):
        stream = CharacterStream("a\nb\n\nc")
        self.assertEqual(1, stream.line_number)

        seen = []
        while stream.current_class is not CharacterClass.END:
            seen.append((stream.current_char, stream.line_number))
            stream.advance()

        self.assertEqual([("a", 1), ("\n", 1), ("b", 2), ("\n", 2), ("\n", 3), ("c", 4)], seen)

    def test_skip_next_advance(self):
        stream = CharacterStream("ab")
        stream.skip_next_advance()
        stream.advance()
        self.assertEqual("a", stream.current_char)

        stream.advance()
        self.assertEqual("b", stream.current_char)

    def test_advance_to_non_blank(self):
        stream = CharacterStream("x  \n\t y")
        stream.advance()
        stream.skip_next_advance()  # must be dropped, not applied to the first whitespace advance
        stream.advance_to_non_blank()
        self.assertEqual("y", stream.current_char)
        self.assertEqual(2, stream.line_number)

        stream = CharacterStream("y")
        stream.advance_to_non_blank()
        self.assertEqual("y", stream.current_char)

    def test_peek(self):
        stream = CharacterStream(".5")
        self.assertEqual("5", stream.peek())
        stream.advance()
        self.assertEqual(CharacterStream.END_CHAR, stream.peek())

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.mfl")
            with open(path, "w", encoding="utf-8") as file:
                file.write("val π := 3;")

            stream = CharacterStream.from_file(path)
            self.assertEqual("val π := 3;", stream.source)

            with self.assertRaises(GenericException) as ctx:
                CharacterStream.from_file(os.path.join(tmp, "missing.mfl"))
            self.assertNotIsInstance(ctx.exception, MFLSyntaxError)  # I/O failure, not a grammar error


if __name__ == '__main__':
    unittest.main()
