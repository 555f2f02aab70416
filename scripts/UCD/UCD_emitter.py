#
# UCD_emitter.py - handing canonical codepoint sets to output backends.
#
# A RangeEmitter receives the aggregated sets through emit_named_ranges
# (one independent set), emit_enumeration (a partition of the codespace
# into named sets) and emit_alias_listing (canonical value names and
# their aliases).  TextEmitter writes them as plain text.
#
#
# Licensed under Open Software License 3.0.
#
#
import sys

from UCD_errors import IoFailure
from unicode_set import uset_to_range_list


#
#  Fill items into lines of at most width characters, separated by
#  separator and indented by indent spaces after the first line.
#
def multiline_fill(items, separator=',', indent=4, width=80):
    text = ""
    line_len = indent
    for i in range(len(items)):
        item = items[i]
        if i < len(items) - 1: item += separator
        if line_len > indent and line_len + 1 + len(item) > width:
            text += "\n" + " " * indent
            line_len = indent
        elif line_len > indent:
            text += " "
            line_len += 1
        text += item
        line_len += len(item)
    return text

def format_ranges(ranges):
    return ['[%04x, %04x]' % (lo, hi) for (lo, hi) in ranges]


class RangeEmitter:
    def emit_named_ranges(self, name, ranges):
        raise NotImplementedError

    def emit_enumeration(self, property_name, sets, partition_invariant=True):
        raise NotImplementedError

    def emit_alias_listing(self, listing):
        raise NotImplementedError

    def emit_codepoint_map(self, name, mapping):
        raise NotImplementedError


class TextEmitter(RangeEmitter):
    def __init__(self, out=None, indent=4):
        self.out = out if out is not None else sys.stdout
        self.indent = indent

    def write(self, text):
        try:
            self.out.write(text)
        except BrokenPipeError:
            raise
        except OSError as e:
            raise IoFailure("Cannot write output: %s" % e.strerror)

    def emit_named_ranges(self, name, ranges):
        ranges = uset_to_range_list(ranges) if hasattr(ranges, 'ranges') else list(ranges)
        self.write("/** Code Point Ranges for %s\n" % name)
        self.write(" " * self.indent + multiline_fill(format_ranges(ranges), ',', self.indent) + "**/\n\n")

    def emit_enumeration(self, property_name, sets, partition_invariant=True):
        names = list(sets.keys())
        self.write("%s: enum {%s}\n" % (property_name, multiline_fill(names, ',', self.indent)))
        if partition_invariant: self.write("/** each codepoint belongs to exactly one value **/\n")
        self.write("\n")
        for name in names:
            self.emit_named_ranges("%s = %s" % (property_name, name), sets[name])

    def emit_alias_listing(self, listing):
        for canonical in listing.keys():
            self.write("%s (aliases: %s)\n" % (canonical, ", ".join(listing[canonical])))

    def emit_codepoint_map(self, name, mapping):
        pairs = []
        for (cp, value) in mapping.items():
            if isinstance(value, int): value = [value]
            pairs.append('{0x%04x, %s}' % (cp, ' '.join(['0x%04x' % v for v in value])))
        self.write("/** Codepoint Map for %s\n" % name)
        self.write(" " * self.indent + multiline_fill(pairs, ',', self.indent) + "**/\n\n")
