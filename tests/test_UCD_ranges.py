# -*- coding: utf-8 -*-
import unittest

from collections import namedtuple
from pytest import raises

from UCD_ranges import (CodepointRange, parse_codepoint, parse_codepoint_range,
                        parse_codepoint_sequence, parse_optional_codepoint,
                        range_marker, expand_ranges, expand_codepoints)
from UCD_errors import MalformedLine, InvalidRange
from UCD_parser import UcdLine

Rec = namedtuple('Rec', ['target', 'value', 'source'], defaults=(None,))


class TestCodepointTokens(unittest.TestCase):

    """
    Tests for hex codepoint and range tokens.
    """

    def test_single_codepoint(self):
        self.assertEqual(parse_codepoint('0041'), 0x41)
        self.assertEqual(parse_codepoint('10FFFF'), 0x10FFFF)

    def test_inline_range(self):
        """
        Test that an inline XXXX..YYYY token becomes one closed range.
        """
        r = parse_codepoint_range('0041..005A')
        self.assertEqual((r.lo, r.hi), (0x41, 0x5A))
        self.assertEqual(r.span(), 26)
        self.assertEqual(str(r), '0041..005A')

    def test_degenerate_range(self):
        r = parse_codepoint_range('00C5')
        self.assertEqual(r, CodepointRange(0xC5, 0xC5))
        self.assertEqual(str(r), '00C5')

    def test_non_hex(self):
        """
        Test that non-hex tokens are MalformedLine errors.
        """
        with raises(MalformedLine):
            parse_codepoint('00G1')
        with raises(MalformedLine):
            parse_codepoint_range('0041-005A')

    def test_out_of_codespace(self):
        """
        Test that bounds above 10FFFF are InvalidRange errors.
        """
        with raises(InvalidRange):
            parse_codepoint('110000')
        with raises(InvalidRange):
            parse_codepoint_range('10FFF0..110000')

    def test_inverted_range(self):
        with raises(InvalidRange):
            parse_codepoint_range('005A..0041')

    def test_sequences(self):
        self.assertEqual(parse_codepoint_sequence('0073 0073'), (0x73, 0x73))
        self.assertEqual(parse_codepoint_sequence(''), ())
        self.assertIsNone(parse_optional_codepoint(''))
        self.assertEqual(parse_optional_codepoint('00E5'), 0xE5)


class TestRangeMarker(unittest.TestCase):

    def test_first_and_last(self):
        """
        Test recognition of <Label, First> and <Label, Last> names.
        """
        self.assertEqual(range_marker('<CJK Ideograph Extension A, First>'),
                         ('CJK Ideograph Extension A', 'First'))
        self.assertEqual(range_marker('<Private Use, Last>'), ('Private Use', 'Last'))
        self.assertIsNone(range_marker('<control>'))
        self.assertIsNone(range_marker('LATIN CAPITAL LETTER A'))


class TestExpandRanges(unittest.TestCase):

    """
    Tests for normalizing record streams to ranges.
    """

    def test_ints_become_degenerate_ranges(self):
        records = [Rec(0x41, 'a'), Rec(CodepointRange(0x61, 0x7A), 'b')]
        self.assertEqual([r for (r, rec) in expand_ranges(records)],
                         [CodepointRange(0x41, 0x41), CodepointRange(0x61, 0x7A)])

    def test_no_merging(self):
        """
        Test that adjacent ranges of different records stay separate.
        """
        records = [Rec(CodepointRange(0x41, 0x5A), 'a'), Rec(CodepointRange(0x5B, 0x60), 'a')]
        self.assertEqual(len(list(expand_ranges(records, ordered=True))), 2)

    def test_ordered_overlap(self):
        """
        Test that overlapping ranges in an ordered stream are InvalidRange.
        """
        records = [Rec(CodepointRange(0x41, 0x5A), 'a'), Rec(0x50, 'b')]
        with raises(InvalidRange):
            list(expand_ranges(records, ordered=True))

    def test_overlap_location(self):
        """
        Test that an ordered overlap is reported at the offending record.
        """
        source = UcdLine('UnicodeData.txt', 7, '0050;...', None)
        records = [Rec(CodepointRange(0x41, 0x5A), 'a'), Rec(0x50, 'b', source)]
        with raises(InvalidRange) as e:
            list(expand_ranges(records, ordered=True))
        self.assertTrue(str(e.value).startswith('UnicodeData.txt:7: '))

    def test_ordered_decreasing(self):
        records = [Rec(0x61, 'a'), Rec(0x41, 'b')]
        with raises(InvalidRange):
            list(expand_ranges(records, ordered=True))
        self.assertEqual(len(list(expand_ranges(records))), 2)

    def test_expand_codepoints(self):
        """
        Test that range records are expanded to one record per codepoint.
        """
        records = [Rec(0x30, 'd'), Rec(CodepointRange(0x41, 0x43), 'u')]
        self.assertEqual(list(expand_codepoints(records)),
                         [Rec(0x30, 'd'), Rec(0x41, 'u'), Rec(0x42, 'u'), Rec(0x43, 'u')])
