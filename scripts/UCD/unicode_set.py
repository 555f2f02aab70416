#
# unicode_set.py - representing and manipulating sets of Unicode
# characters, based on data from UCD - the Unicode Character Database
#
#
# Licensed under Open Software License 3.0.
#
#
from bisect import bisect_right

import UCD_config

#
# A UCset is kept in minimal range form: a sorted list of (lo, hi) pairs
# that neither overlap nor touch.  All operations return new sets.
#
# For compact tables the same set can be viewed in the Unicode Sparse
# Bitset representation, which is based on
# (a) Dividing the Unicode codepoint space into groups of 2^k codepoints called quads.
# (b) Specifying the quads using a run-length encoding, in which each run
#     is Empty (quads contain no members), Mixed (quads contain some members and
#     some nonmembers) or Full (all codepoints in each quad are members of the set).
# (c) Explicitly listing all the quads of Mixed type.
#

Empty = 0
Full = -1
Mixed = 1

log2_quad_bits = UCD_config.log2_quad_bits
quad_bits = 1 << log2_quad_bits
mod_quad_bit_mask = quad_bits - 1
UnicodeQuadCount = (UCD_config.UCD_max_code_point + 1) >> log2_quad_bits
FullQuadMask = (1 << quad_bits) - 1
run_bytes = 4


class UCset:
    def __init__(self, ranges=None):
        self.ranges = ranges if ranges is not None else []

    def __eq__(self, other):
        return isinstance(other, UCset) and self.ranges == other.ranges

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return "UCset(%s)" % ", ".join(['%04X..%04X' % r for r in self.ranges])

    def __contains__(self, codepoint):
        return uset_member(self, codepoint)

    def __len__(self):
        return uset_popcount(self)

    def __iter__(self):
        for (lo, hi) in self.ranges:
            for cp in range(lo, hi + 1):
                yield cp

    def bytes(self):
        (runs, quads) = uset_quad_runs(self)
        return (len(runs) * run_bytes) + (len(quads) * quad_bits // 8)


#
#  Coalesce a sorted sequence of (lo, hi) pairs into minimal range form.
#
def coalesce_sorted_ranges(range_list):
    coalesced = []
    for (lo, hi) in range_list:
        if coalesced and lo <= coalesced[-1][1] + 1:
            if hi > coalesced[-1][1]: coalesced[-1] = (coalesced[-1][0], hi)
        else:
            coalesced.append((lo, hi))
    return coalesced

#
# Set Constructors
#
def empty_uset():
    return UCset()

def singleton_uset(codepoint):
    return UCset([(codepoint, codepoint)])

def range_uset(lo_codepoint, hi_codepoint):
    return UCset([(lo_codepoint, hi_codepoint)])

def uset_from_ranges(range_list):
    return UCset(coalesce_sorted_ranges(sorted([(r[0], r[1]) for r in range_list])))

def uset_from_codepoints(codepoints):
    return uset_from_ranges([(cp, cp) for cp in codepoints])

#
# Queries
#
def uset_member(s, codepoint):
    i = bisect_right(s.ranges, (codepoint, UCD_config.UCD_max_code_point + 1))
    return i > 0 and s.ranges[i - 1][1] >= codepoint

def uset_popcount(s):
    return sum([hi - lo + 1 for (lo, hi) in s.ranges])

def uset_to_range_list(s):
    return list(s.ranges)

#
# Set Operations
#
def uset_complement(s):
    iset = UCset()
    next_cp = 0
    for (lo, hi) in s.ranges:
        if lo > next_cp: iset.ranges.append((next_cp, lo - 1))
        next_cp = hi + 1
    if next_cp <= UCD_config.UCD_max_code_point:
        iset.ranges.append((next_cp, UCD_config.UCD_max_code_point))
    return iset

def uset_union(s1, s2):
    merged = []
    i1 = i2 = 0
    while i1 < len(s1.ranges) or i2 < len(s2.ranges):
        if i2 == len(s2.ranges) or (i1 < len(s1.ranges) and s1.ranges[i1] <= s2.ranges[i2]):
            merged.append(s1.ranges[i1])
            i1 += 1
        else:
            merged.append(s2.ranges[i2])
            i2 += 1
    return UCset(coalesce_sorted_ranges(merged))

def uset_intersection(s1, s2):
    iset = UCset()
    i1 = i2 = 0
    while i1 < len(s1.ranges) and i2 < len(s2.ranges):
        (lo1, hi1) = s1.ranges[i1]
        (lo2, hi2) = s2.ranges[i2]
        lo = max(lo1, lo2)
        hi = min(hi1, hi2)
        if lo <= hi: iset.ranges.append((lo, hi))
        if hi1 < hi2: i1 += 1
        else: i2 += 1
    return iset

def uset_difference(s1, s2):
    return uset_intersection(s1, uset_complement(s2))

def uset_symmetric_difference(s1, s2):
    return uset_difference(uset_union(s1, s2), uset_intersection(s1, s2))

#
#  Union of a list of sets
#
def union_of_all(uset_list):
    merged = []
    for s in uset_list: merged += s.ranges
    return uset_from_ranges(merged)


#
#  The run/quad view of a set.  Runs are (runtype, quad count) pairs
#  covering all UnicodeQuadCount quads; quads lists the bitmap of every
#  quad in a Mixed run, in order.
#
def uset_quad_runs(s):
    runs = []
    quads = []
    def append_run(runtype, runlength):
        if runlength == 0: return
        if runs and runs[-1][0] == runtype:
            runs[-1] = (runtype, runs[-1][1] + runlength)
        else:
            runs.append((runtype, runlength))
    def append_quad(q):
        if q == 0:
            append_run(Empty, 1)
        elif q & FullQuadMask == FullQuadMask:
            append_run(Full, 1)
        else:
            append_run(Mixed, 1)
            quads.append(q)
    # quad_no is the first quad not yet appended; its members so far are in q
    quad_no = 0
    q = 0
    for (lo, hi) in s.ranges:
        lo_quad_no = lo >> log2_quad_bits
        hi_quad_no = hi >> log2_quad_bits
        lo_offset = lo & mod_quad_bit_mask
        hi_offset = hi & mod_quad_bit_mask
        if lo_quad_no > quad_no:
            append_quad(q)
            append_run(Empty, lo_quad_no - quad_no - 1)
            quad_no = lo_quad_no
            q = 0
        if lo_quad_no == hi_quad_no:
            q |= (FullQuadMask << lo_offset) & (FullQuadMask >> (quad_bits - 1 - hi_offset))
        else:
            append_quad(q | ((FullQuadMask << lo_offset) & FullQuadMask))
            append_run(Full, hi_quad_no - (lo_quad_no + 1))
            quad_no = hi_quad_no
            q = FullQuadMask >> (quad_bits - 1 - hi_offset)
    append_quad(q)
    append_run(Empty, UnicodeQuadCount - (quad_no + 1))
    return (runs, quads)
