import unittest

from rexcompat.transformers.constructors import transform_regexp_constructors


class TestTransformRegExpConstructors(unittest.TestCase):

    def test_named_groups_without_backreference(self):
        code = r'new RegExp("(?<year>\\d{4})-(?<month>\\d{2})")'
        self.assertEqual(transform_regexp_constructors(code), r'new RegExp("(\\d{4})-(\\d{2})")')

    def test_lookbehind_removed(self):
        code = r'const re = new RegExp("(?<=\\s)foo", "g");'
        self.assertEqual(transform_regexp_constructors(code), r'const re = new RegExp("foo", "g");')

    def test_double_escaped_backreference(self):
        code = r"new RegExp('(?<q>a)\\w+\\k<q>')"
        self.assertEqual(transform_regexp_constructors(code), r"new RegExp('(a)\\w+\\1')")

    def test_single_escaped_backreference_at_depth_one(self):
        code = r"new RegExp('(?<a>x)\k<a>')"
        self.assertEqual(transform_regexp_constructors(code, escape_depth=1), r"new RegExp('(x)\1')")

    def test_escaped_paren_inside_lookbehind(self):
        code = r"new RegExp('(?<!\\()x')"
        self.assertEqual(transform_regexp_constructors(code), r"new RegExp('x')")

    def test_quote_and_spacing_preserved(self):
        test_cases = [
            (r"new RegExp(`(?<=x)y`)", r"new RegExp(`y`)"),
            (r"new  RegExp ( '(?<a>x)' , 'u')", r"new  RegExp ( '(x)' , 'u')"),
            (r'RegExp("(?<!a)b")', r'RegExp("b")'),
        ]
        for code, expected in test_cases:
            with self.subTest(code=code):
                self.assertEqual(transform_regexp_constructors(code), expected)

    def test_escaped_quote_does_not_end_argument(self):
        code = r"new RegExp('a\'(?<n>b)')"
        self.assertEqual(transform_regexp_constructors(code), r"new RegExp('a\'(b)')")

    def test_supported_pattern_untouched(self):
        code = r'new RegExp("^(\\d+)(?=px)$", flags)'
        self.assertEqual(transform_regexp_constructors(code), code)

    def test_dynamic_argument_untouched(self):
        code = "new RegExp(source + '(?<=x)')"
        self.assertEqual(transform_regexp_constructors(code), code)

    def test_not_a_regexp_call(self):
        code = r"new MyRegExp('(?<a>x)')"
        self.assertEqual(transform_regexp_constructors(code), code)


if __name__ == "__main__":
    unittest.main()
