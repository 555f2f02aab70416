#
# UCD_parser.py - parsing Unicode Character Database (UCD) files
#
# The line grammar shared by all UCD data files: semicolon separated
# fields, '#' comments and blank lines.
#
#
# Licensed under Open Software License 3.0.
#
#
import re, os.path, logging
from collections import namedtuple

import UCD_config
from UCD_errors import UCDError, MalformedLine, IoFailure, located
from UCD_ranges import parse_codepoint_range

version_regexp = re.compile(r".*Version\s+([0-9.]*)\s+of the Unicode Standard.*")

def UCD_version(ucd_dir):
    readme = os.path.join(ucd_dir, 'ReadMe.txt')
    if not os.path.exists(readme): return None
    version = None
    for (line_no, t) in ucd_lines(readme, skip_comments=False):
        m = version_regexp.match(t)
        if m:
            version = m.group(1)
            logging.info("Version %s" % version)
            break
    if version is not None and version != UCD_config.UCD_version_string:
        logging.warning("UCD version mismatch %s vs %s" % (version, UCD_config.UCD_version_string))
    return version

trivial_name_char_re = re.compile(r'[-_\s]')
def canonicalize(property_string):
    return trivial_name_char_re.sub('', property_string.lower())

#
#  Processing files of the UCD
#
#  General format for skippable comments, blank lines
UCD_skip = re.compile(r"^#.*$|^\s*$")

#
#  ucd_lines yields (line_no, text) for each data line of a UTF-8
#  encoded UCD file; blank and comment lines are skipped unless
#  skip_comments is False.
#
def ucd_lines(path, skip_comments=True):
    try:
        f = open(path, encoding='utf-8')
    except OSError as e:
        raise IoFailure("Cannot open UCD file: %s" % e.strerror, filename=path)
    logging.debug("Reading %s" % path)
    with f:
        line_no = 0
        while True:
            try:
                t = f.readline()
            except UnicodeDecodeError:
                raise MalformedLine("Invalid UTF-8 data", filename=path, line_no=line_no + 1)
            except OSError as e:
                raise IoFailure("Cannot read UCD file: %s" % e.strerror, filename=path, line_no=line_no + 1)
            if t == '': return
            line_no += 1
            t = t.rstrip('\r\n')
            if skip_comments and UCD_skip.match(t): continue
            yield (line_no, t)

#
#  parse_fields splits one data line into its fields.  A trailing comment
#  is stripped first; fields are then separated at ';' and stripped of
#  leading and trailing whitespace.  The number of fields is checked
#  against the arity the caller expects: an int for an exact count, or a
#  (min, max) pair where max may be None.
#
def parse_fields(data_line, arity):
    comment = data_line.find('#')
    if comment >= 0: data_line = data_line[:comment]
    fields = [f.strip() for f in data_line.split(';')]
    if isinstance(arity, int):
        (lo, hi) = (arity, arity)
    else:
        (lo, hi) = arity
    if len(fields) < lo or (hi is not None and len(fields) > hi):
        if lo == hi: expected = "%i" % lo
        elif hi is None: expected = "at least %i" % lo
        else: expected = "%i to %i" % (lo, hi)
        raise MalformedLine("Expecting %s fields, but found %i" % (expected, len(fields)))
    return fields


UcdLine = namedtuple('UcdLine', ['path', 'line_no', 'text', 'fields'])

#
#  ucd_records yields a UcdLine for every data line of a file, with its
#  fields split according to the given arity.
#
def ucd_records(path, arity):
    for (line_no, t) in ucd_lines(path):
        with located(UcdLine(path, line_no, t, None)):
            fields = parse_fields(t, arity)
        yield UcdLine(path, line_no, t, fields)


#
#  Property Default Value Specifications
#
#  The UCD uses special comment lines ("@missing specifications") to declare default
#  values for properties.   Examples showing the two common formats are:
#  (1)  Blocks.txt                    # @missing: 0000..10FFFF; No_Block
#  (2)  PropertyValueAliases.txt      # @missing: 0000..10FFFF; Case_Folding; <code point>
#  The general format gives a range of codepoints (generally 0000..10FFFF),
#  an optional property name (if the file containing the specification defines
#  many different properties), and the default value.
#
UCD_missing_check = re.compile(r"^#\s*@missing:.*")
UCD_missing_regexp = re.compile(r"^#\s*@missing:\s*([0-9A-F]{4,6}[.][.][0-9A-F]{4,6})\s*;\s*([^#]*)(?:#|$)")

def parse_missing_spec(data_line):
    m = UCD_missing_regexp.match(data_line)
    if not m: raise MalformedLine("UCD missing spec parsing error")
    cp_range = parse_codepoint_range(m.group(1))
    fields = [f.strip() for f in m.group(2).split(';')]
    return (cp_range, fields)

def parse_missing_specs(path):
    specs = []
    for (line_no, t) in ucd_lines(path, skip_comments=False):
        if not UCD_missing_check.match(t): continue
        try:
            specs.append(parse_missing_spec(t))
        except UCDError as e:
            e.locate(path, line_no, t)
            raise
    return specs

#
#  The default value declared for the whole codespace, or None.
#
def full_range_default(path):
    for (cp_range, fields) in parse_missing_specs(path):
        if cp_range.lo == 0 and cp_range.hi == UCD_config.UCD_max_code_point:
            return fields[-1]
    return None
