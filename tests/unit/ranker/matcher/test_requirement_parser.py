#!/usr/bin/env python3
"""
Tests for AND/OR requirement parsing.
"""

import unittest

from ranker.matcher.requirement_parser import (
    clean_requirement_text, is_no_requirement, parse_requirement
)


class TestParseRequirement(unittest.TestCase):

    def test_or_requirement_is_one_group_of_alternatives(self):
        parsed = parse_requirement("Bachelor's in IT or Computer Science")

        self.assertEqual(parsed.mode, 'or')
        self.assertFalse(parsed.requires_all)
        self.assertEqual(len(parsed.groups), 1)
        self.assertEqual(parsed.groups[0].alternatives, ("Bachelor's in IT", "Computer Science"))

    def test_and_requirement_is_one_group_per_item(self):
        parsed = parse_requirement("BS Accountancy and CPA License")

        self.assertEqual(parsed.mode, 'and')
        self.assertTrue(parsed.requires_all)
        self.assertEqual([g.alternatives for g in parsed.groups], [("BS Accountancy",), ("CPA License",)])

    def test_commas_follow_or_connective(self):
        parsed = parse_requirement("BS IT, BS IS, or BS CS")

        self.assertEqual(parsed.mode, 'or')
        self.assertEqual(parsed.groups[0].alternatives, ("BS IT", "BS IS", "BS CS"))

    def test_commas_follow_and_connective(self):
        parsed = parse_requirement("First Aid, CPR, and Driver's License")

        self.assertEqual(parsed.mode, 'and')
        self.assertEqual(parsed.fragments, ["First Aid", "CPR", "Driver's License"])

    def test_connectives_are_case_insensitive(self):
        parsed = parse_requirement("BS Nursing AND RN License")
        self.assertEqual(parsed.fragments, ["BS Nursing", "RN License"])

    def test_no_connective_is_single(self):
        parsed = parse_requirement("Bachelor of Science in Nursing")

        self.assertEqual(parsed.mode, 'single')
        self.assertEqual(parsed.fragments, ["Bachelor of Science in Nursing"])
        self.assertFalse(parsed.fallback)

    def test_single_keeps_commas(self):
        parsed = parse_requirement("Bachelor's in Engineering, major in Civil")
        self.assertEqual(parsed.fragments, ["Bachelor's in Engineering, major in Civil"])

    def test_blank_text_is_empty(self):
        for text in (None, "", "   "):
            parsed = parse_requirement(text)
            self.assertTrue(parsed.is_empty)
            self.assertEqual(parsed.mode, 'empty')

    def test_dangling_connectives_fall_back_to_whole_string(self):
        for text in ("and or", "Nursing and", "or Midwifery"):
            parsed = parse_requirement(text)
            self.assertTrue(parsed.fallback, text)
            self.assertEqual(parsed.fragments, [text])
            self.assertEqual(parsed.mode, 'single')

    def test_contaminated_degree_text_is_cut(self):
        parsed = parse_requirement("BS Nursing Eligibilities: RN License")
        self.assertEqual(parsed.fragments, ["BS Nursing"])

    def test_clean_requirement_text_collapses_whitespace(self):
        self.assertEqual(clean_requirement_text("  BS   IT  "), "BS IT")
        self.assertEqual(clean_requirement_text(None), "")


class TestNoRequirement(unittest.TestCase):

    def test_sentinels(self):
        for text in ("None", "n/a", "Not Required", "No degree required", "no specific skills required", ""):
            self.assertTrue(is_no_requirement(text), text)

    def test_real_requirements(self):
        for text in ("Python", "Career Service Professional", "Bachelor's in IT"):
            self.assertFalse(is_no_requirement(text), text)

    def test_none_value(self):
        self.assertTrue(is_no_requirement(None))


if __name__ == '__main__':
    unittest.main()
