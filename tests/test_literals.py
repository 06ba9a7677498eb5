import unittest

from rexcompat.transformers.literals import transform_regex_literals


class TestTransformRegexLiterals(unittest.TestCase):

    def test_named_groups_and_lookbehind_rewritten(self):
        code = r"const code = /(?<!`)(?<a>`+)[^`]+\k<a>(?!`)/g;"
        self.assertEqual(transform_regex_literals(code), r"const code = /(`+)[^`]+\1(?!`)/g;")

    def test_flags_and_surroundings_preserved(self):
        code = r"match(/(?<y>\d{4})-(?<m>\d{2})/dgu, text);"
        self.assertEqual(transform_regex_literals(code), r"match(/(\d{4})-(\d{2})/dgu, text);")

    def test_literal_without_named_groups_untouched(self):
        code = r"const email = /(?<=^|\s)([-.\w+]+)@/gu;"
        self.assertEqual(transform_regex_literals(code), code)

    def test_division_is_not_a_literal(self):
        test_cases = [
            "const ratio = a / b / c;",
            "const ratio = a / b /(?<x>y)/ c;",
            "total = (a + b) / 2 / (?<n>x);",
            "const v = arr[0] / arr[1];",
        ]
        for code in test_cases:
            with self.subTest(code=code):
                self.assertEqual(transform_regex_literals(code), code)

    def test_literal_after_keyword(self):
        code = r"return /(?<n>a)\k<n>/u.test(s);"
        self.assertEqual(transform_regex_literals(code), r"return /(a)\1/u.test(s);")

    def test_slash_inside_character_class(self):
        code = r"const path = /[/](?<seg>\w+)/;"
        self.assertEqual(transform_regex_literals(code), r"const path = /[/](\w+)/;")

    def test_comments_untouched(self):
        test_cases = [
            "// groups look like (?<a>x) here\n",
            "/* (?<a>x) */\n",
        ]
        for code in test_cases:
            with self.subTest(code=code):
                self.assertEqual(transform_regex_literals(code), code)

    def test_multiple_literals_processed_independently(self):
        code = r"a = /(?<x>1)\k<x>/; b = /(?<y>2)(?<z>3)\k<z>/;"
        self.assertEqual(transform_regex_literals(code), r"a = /(1)\1/; b = /(2)(3)\2/;")

    def test_plain_source_passes_through(self):
        code = "function add(a, b) {\n  return a + b;\n}\n"
        self.assertEqual(transform_regex_literals(code), code)


if __name__ == "__main__":
    unittest.main()
