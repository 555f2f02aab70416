# -*- coding: utf-8 -*-
import os
import unittest
import tempfile

from pathlib import Path
from pytest import raises

from UCD_parser import (canonicalize, parse_fields, ucd_lines, ucd_records,
                        parse_missing_specs, full_range_default, UCD_version)
from UCD_errors import MalformedLine, IoFailure

thisfile = Path(__file__).resolve().parent
resources = thisfile / 'resources' / 'ucd'


class TestParseFields(unittest.TestCase):

    """
    Tests for the semicolon field grammar of UCD data lines.
    """

    def test_fields_are_stripped(self):
        """
        Test that fields are split at ';' and stripped of whitespace.
        """
        self.assertEqual(parse_fields('0041..005A    ; Latin ', 2), ['0041..005A', 'Latin'])

    def test_trailing_comment_removed(self):
        """
        Test that a trailing comment does not become part of the last field.
        """
        self.assertEqual(parse_fields('0020 ; White_Space # Zs SPACE', 2), ['0020', 'White_Space'])

    def test_empty_fields_kept(self):
        """
        Test that empty fields count towards the arity.
        """
        fields = parse_fields('0020;SPACE;Zs;0;WS;;;;;N;;;;;', 15)
        self.assertEqual(len(fields), 15)
        self.assertEqual(fields[5], '')

    def test_short_row(self):
        """
        Test that a row with too few fields is a MalformedLine.
        """
        with raises(MalformedLine) as e:
            parse_fields('0041;LATIN CAPITAL LETTER A;Lu', 15)
        self.assertIn('Expecting 15 fields, but found 3', str(e.value))

    def test_long_row(self):
        """
        Test that a row with too many fields is a MalformedLine.
        """
        with raises(MalformedLine):
            parse_fields('0041; Latin; extra', 2)

    def test_arity_range(self):
        """
        Test (min, max) arities, including an unbounded maximum.
        """
        self.assertEqual(len(parse_fields('0041; C; 0061;', (3, 4))), 4)
        self.assertEqual(len(parse_fields('gc ; M ; Mark ; Combining_Mark', (3, None))), 4)
        with raises(MalformedLine) as e:
            parse_fields('0041; C', (3, 4))
        self.assertIn('3 to 4', str(e.value))
        with raises(MalformedLine) as e:
            parse_fields('gc', (3, None))
        self.assertIn('at least 3', str(e.value))


class TestCanonicalize(unittest.TestCase):

    """
    Tests for loose matching of property names and values.
    """

    def test_loose_matching(self):
        """
        Test that case, '-', '_' and whitespace are ignored.
        """
        self.assertEqual(canonicalize('Uppercase_Letter'), 'uppercaseletter')
        self.assertEqual(canonicalize('uppercase-letter'), 'uppercaseletter')
        self.assertEqual(canonicalize(' Upper case Letter '), 'uppercaseletter')

    def test_idempotent(self):
        """
        Test that canonicalizing twice changes nothing.
        """
        for s in ['White_Space', 'LC', 'Script-Extensions', 'age']:
            self.assertEqual(canonicalize(canonicalize(s)), canonicalize(s))


class TestUCDLines(unittest.TestCase):

    """
    Tests for reading UCD files line by line.
    """

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, name, data):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'wb') as fp:
            fp.write(data)
        return path

    def test_comments_and_blank_lines_skipped(self):
        """
        Test that only data lines are yielded, with their line numbers.
        """
        path = self.write('PropList.txt', b'# header\n\n0020 ; White_Space\n   \n002D ; Dash # Pd\n')
        self.assertEqual(list(ucd_lines(path)), [(3, '0020 ; White_Space'), (5, '002D ; Dash # Pd')])

    def test_crlf_line_ends(self):
        """
        Test that CR LF line ends are removed.
        """
        path = self.write('PropList.txt', b'0020 ; White_Space\r\n')
        self.assertEqual(list(ucd_lines(path)), [(1, '0020 ; White_Space')])

    def test_missing_file(self):
        """
        Test that a file that cannot be opened is an IoFailure.
        """
        with raises(IoFailure) as e:
            list(ucd_lines(os.path.join(self.tmpdir.name, 'Scripts.txt')))
        self.assertEqual(e.value.filename, os.path.join(self.tmpdir.name, 'Scripts.txt'))

    def test_invalid_utf8(self):
        """
        Test that undecodable input is a MalformedLine.
        """
        path = self.write('Scripts.txt', b'0041 ; Latin\n\xff\xfe ; Latin\n')
        with raises(MalformedLine):
            list(ucd_lines(path))

    def test_records_are_located(self):
        """
        Test that field errors carry file name, line number and text.
        """
        path = self.write('Scripts.txt', b'# Scripts\n0041..005A ; Latin\n0061\n')
        with raises(MalformedLine) as e:
            list(ucd_records(path, 2))
        self.assertEqual(e.value.line_no, 3)
        self.assertEqual(e.value.line, '0061')
        self.assertTrue(str(e.value).startswith('Scripts.txt:3: '))


class TestMissingSpecs(unittest.TestCase):

    """
    Tests for @missing default value specifications.
    """

    def test_property_value_aliases(self):
        """
        Test the property-qualified @missing lines of PropertyValueAliases.txt.
        """
        specs = parse_missing_specs(str(resources / 'PropertyValueAliases.txt'))
        fields = [f for (r, f) in specs]
        self.assertIn(['General_Category', 'Unassigned'], fields)
        self.assertIn(['Case_Folding', '<code point>'], fields)
        for (r, f) in specs:
            self.assertEqual((r.lo, r.hi), (0, 0x10FFFF))

    def test_full_range_default(self):
        """
        Test the default value of a single-property file.
        """
        self.assertEqual(full_range_default(str(resources / 'Scripts.txt')), 'Unknown')
        self.assertIsNone(full_range_default(str(resources / 'PropList.txt')))


class TestVersion(unittest.TestCase):

    def test_readme_version(self):
        """
        Test that the UCD version is read from ReadMe.txt.
        """
        self.assertEqual(UCD_version(str(resources)), '13.0.0')
