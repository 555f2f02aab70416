#
# UCD_ranges.py - codepoint ranges as found in the Unicode Character
# Database (UCD): single codepoints, inline "XXXX..YYYY" ranges and the
# <..., First>/<..., Last> row pairs of UnicodeData.txt.
#
#
# Licensed under Open Software License 3.0.
#
#
import re
from collections import namedtuple

import UCD_config
from UCD_errors import MalformedLine, InvalidRange, located


class CodepointRange(namedtuple('CodepointRange', ['lo', 'hi'])):
    """
    A closed interval [lo, hi] of codepoints.  A range with lo == hi
    denotes a single codepoint.
    """
    __slots__ = ()

    def __new__(cls, lo, hi=None):
        if hi is None: hi = lo
        if lo < 0 or hi > UCD_config.UCD_max_code_point:
            raise InvalidRange("Codepoint range %04X..%04X exceeds the Unicode codespace" % (lo, hi))
        if lo > hi:
            raise InvalidRange("Codepoint range %04X..%04X is inverted" % (lo, hi))
        return super(CodepointRange, cls).__new__(cls, lo, hi)

    def span(self):
        return self.hi - self.lo + 1

    def codepoints(self):
        return range(self.lo, self.hi + 1)

    def __str__(self):
        if self.lo == self.hi: return "%04X" % self.lo
        return "%04X..%04X" % (self.lo, self.hi)


#
#  Codepoint tokens: 4 to 6 hex digits, optionally a range "XXXX..YYYY".
#
codepoint_regexp = re.compile(r"^([0-9A-Fa-f]{4,6})$")
codepoint_range_regexp = re.compile(r"^([0-9A-Fa-f]{4,6})[.][.]([0-9A-Fa-f]{4,6})$")

def parse_codepoint(token):
    m = codepoint_regexp.match(token)
    if not m: raise MalformedLine("Expecting a hex codepoint, but got '%s'" % token)
    cp = int(m.group(1), 16)
    if cp > UCD_config.UCD_max_code_point:
        raise InvalidRange("Codepoint %04X exceeds the Unicode codespace" % cp)
    return cp

def parse_codepoint_range(token):
    m = codepoint_range_regexp.match(token)
    if m:
        return CodepointRange(int(m.group(1), 16), int(m.group(2), 16))
    return CodepointRange(parse_codepoint(token))

#  A whitespace separated codepoint sequence, e.g. a decomposition or
#  a full case folding.
def parse_codepoint_sequence(token):
    return tuple([parse_codepoint(x) for x in token.split()])

#  An optional codepoint field: '' maps to None.
def parse_optional_codepoint(token):
    if token == '': return None
    return parse_codepoint(token)


#
#  UnicodeData.txt denotes large ranges by a pair of consecutive rows
#  whose name fields read "<Label, First>" and "<Label, Last>".
#
NameRange_regexp = re.compile(r"^<([^,]*), (First|Last)>$")

def range_marker(name):
    m = NameRange_regexp.match(name)
    if not m: return None
    return (m.group(1), m.group(2))


def as_range(target):
    if isinstance(target, CodepointRange): return target
    return CodepointRange(target)


#
#  expand_ranges normalizes a record stream into (CodepointRange, record)
#  pairs.  When the stream is ordered (UnicodeData.txt), ranges must be
#  strictly increasing and must not overlap.  Adjacent or overlapping
#  ranges of different records are never merged here.
#
def expand_ranges(records, ordered=False):
    last_hi = -1
    for r in records:
        cp_range = as_range(r.target)
        if ordered:
            if cp_range.lo <= last_hi:
                with located(r.source):
                    raise InvalidRange("Codepoint range %s overlaps or precedes the prior range ending at %04X" % (cp_range, last_hi))
            last_hi = cp_range.hi
        yield (cp_range, r)

#
#  expand_codepoints produces one record per codepoint, replacing the
#  record target by each codepoint of its range in turn.
#
def expand_codepoints(records):
    for (cp_range, r) in expand_ranges(records):
        if cp_range.lo == cp_range.hi and not isinstance(r.target, CodepointRange):
            yield r
            continue
        for cp in cp_range.codepoints():
            yield r._replace(target=cp)
