#!/usr/bin/env python3
"""
Test suite for core helpers.
"""

import unittest

from core.utils import (
    build_screening_link,
    generate_screening_token,
    is_valid_email,
    mask_email,
    normalize_email,
    parse_json_safely,
)


class TestParseJsonSafely(unittest.TestCase):

    def test_direct_parse(self):
        result = parse_json_safely('{"a": 1}')
        self.assertTrue(result['ok'])
        self.assertEqual(result['json'], {'a': 1})

    def test_code_fence_and_smart_quotes(self):
        raw = '```json\n{“a”: [1, 2,],}\n```'
        result = parse_json_safely(raw)
        self.assertTrue(result['ok'])
        self.assertEqual(result['json'], {'a': [1, 2]})
        self.assertEqual(result['raw'], raw)

    def test_unparseable(self):
        result = parse_json_safely('{broken')
        self.assertFalse(result['ok'])
        self.assertIsNone(result['json'])

    def test_non_string(self):
        self.assertFalse(parse_json_safely(None)['ok'])
        self.assertFalse(parse_json_safely({'a': 1})['ok'])


class TestHelpers(unittest.TestCase):

    def test_mask_email(self):
        self.assertEqual(mask_email("jane@example.com"), "j***@example.com")
        self.assertEqual(mask_email("nope"), "***")
        self.assertEqual(mask_email(None), "***")

    def test_is_valid_email(self):
        self.assertTrue(is_valid_email(" jane@example.com "))
        self.assertFalse(is_valid_email("jane@example"))
        self.assertFalse(is_valid_email("jane doe@example.com"))
        self.assertFalse(is_valid_email(None))

    def test_normalize_email(self):
        self.assertEqual(normalize_email("  Jane@Example.COM "), "jane@example.com")

    def test_screening_token_unique(self):
        self.assertNotEqual(generate_screening_token(), generate_screening_token())

    def test_screening_link(self):
        self.assertEqual(
            build_screening_link("https://talent.example.com/", "abc"),
            "https://talent.example.com/screening/abc",
        )


if __name__ == '__main__':
    unittest.main()
