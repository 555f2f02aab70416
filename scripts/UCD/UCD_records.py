#
# UCD_records.py - record decoders for the file families of the Unicode
# Character Database (UCD).
#
# Each decoder reads one UCD file lazily and yields one record per data
# line (or per <First>/<Last> line pair in UnicodeData.txt).  Records are
# namedtuples whose first field, target, is a codepoint or CodepointRange,
# and whose last field, source, is the UcdLine the record was decoded from
# (None for records built in code).
#
#
# Licensed under Open Software License 3.0.
#
#
import re, os.path, logging
from collections import namedtuple, OrderedDict

from UCD_errors import MalformedLine, UnpairedRangeMarker, InvalidRange, IoFailure, located
from UCD_parser import ucd_records
from UCD_ranges import (CodepointRange, parse_codepoint, parse_codepoint_range,
                        parse_codepoint_sequence, parse_optional_codepoint, range_marker)


#
#  UCD Property File Format 1: property aliases
#  PropertyAliases.txt
#
#  abbreviation ; long name [; other aliases ...]
#
PropertyAlias = namedtuple('PropertyAlias', ['abbreviation', 'long', 'aliases', 'source'], defaults=(None,))

def parse_PropertyAliases_txt(ucd_dir):
    for l in ucd_records(os.path.join(ucd_dir, 'PropertyAliases.txt'), (2, None)):
        with located(l):
            f = l.fields
            if '' in f: raise MalformedLine("Empty property alias field")
            yield PropertyAlias(f[0], f[1], tuple(f[2:]), l)


#
#  UCD Property File Format 2: property value aliases
#  PropertyValueAliases.txt
#
#  property ; short value ; long value [; other aliases ...]
#
#  The Canonical_Combining_Class property (ccc) carries the numeric class
#  as an extra second field:
#
#  ccc ; numeric class ; short value ; long value [; other aliases ...]
#
PropertyValueAlias = namedtuple('PropertyValueAlias', ['property', 'numeric', 'abbreviation', 'long', 'aliases', 'source'], defaults=(None,))

def parse_PropertyValueAliases_txt(ucd_dir):
    for l in ucd_records(os.path.join(ucd_dir, 'PropertyValueAliases.txt'), (3, None)):
        with located(l):
            f = l.fields
            if f[0] == 'ccc':
                if len(f) < 4: raise MalformedLine("Expecting at least 4 fields for ccc")
                if not f[1].isdigit(): raise MalformedLine("Non-numeric combining class '%s'" % f[1])
                yield PropertyValueAlias(f[0], int(f[1]), f[2], f[3], tuple(f[4:]), l)
            else:
                yield PropertyValueAlias(f[0], None, f[1], f[2], tuple(f[3:]), l)


#
#  UCD Property File Format 3:  codepoint/range -> value maps
#  Scripts.txt, DerivedAge.txt, ScriptExtensions.txt, PropList.txt, ...
#
#  XXXX[..YYYY] ; value
#
Script = namedtuple('Script', ['target', 'script', 'source'], defaults=(None,))
ScriptExtension = namedtuple('ScriptExtension', ['target', 'scripts', 'source'], defaults=(None,))
Age = namedtuple('Age', ['target', 'age', 'source'], defaults=(None,))
Property = namedtuple('Property', ['target', 'property', 'value', 'source'], defaults=(None,))

def parse_codepoint_value_file(path, make_record):
    for l in ucd_records(path, 2):
        with located(l):
            if l.fields[1] == '': raise MalformedLine("Missing property value")
            yield make_record(parse_codepoint_range(l.fields[0]), l.fields[1])._replace(source=l)

def parse_Scripts_txt(ucd_dir):
    return parse_codepoint_value_file(os.path.join(ucd_dir, 'Scripts.txt'), Script)

def parse_DerivedAge_txt(ucd_dir):
    return parse_codepoint_value_file(os.path.join(ucd_dir, 'DerivedAge.txt'), Age)

def parse_ScriptExtensions_txt(ucd_dir):
    def make_record(cp_range, value):
        return ScriptExtension(cp_range, tuple(value.split()))
    return parse_codepoint_value_file(os.path.join(ucd_dir, 'ScriptExtensions.txt'), make_record)

#
#  Binary property files list a property name per range.  Some newer
#  entries of DerivedCoreProperties.txt add a value as a third field.
#
def parse_property_list_file(path):
    for l in ucd_records(path, (2, 3)):
        with located(l):
            f = l.fields
            if f[1] == '': raise MalformedLine("Missing property name")
            value = f[2] if len(f) == 3 else None
            yield Property(parse_codepoint_range(f[0]), f[1], value, l)

def parse_PropList_txt(ucd_dir):
    return parse_property_list_file(os.path.join(ucd_dir, 'PropList.txt'))

def parse_DerivedCoreProperties_txt(ucd_dir):
    return parse_property_list_file(os.path.join(ucd_dir, 'DerivedCoreProperties.txt'))


#
#  CaseFolding.txt:  code ; status ; mapping ;
#  Status C (common) and S (simple) map to a single codepoint, F (full)
#  to a codepoint sequence, T (Turkic) is a special-purpose mapping.
#
CaseFold = namedtuple('CaseFold', ['target', 'status', 'mapping', 'source'], defaults=(None,))
CaseFold_status = ['C', 'F', 'S', 'T']

def parse_CaseFolding_txt(ucd_dir):
    for l in ucd_records(os.path.join(ucd_dir, 'CaseFolding.txt'), (3, 4)):
        with located(l):
            f = l.fields
            if not f[1] in CaseFold_status: raise MalformedLine("Unknown case fold status '%s'" % f[1])
            if len(f) == 4 and f[3] != '': raise MalformedLine("Unexpected trailing field '%s'" % f[3])
            mapping = parse_codepoint_sequence(f[2])
            if len(mapping) == 0: raise MalformedLine("Empty case folding")
            if f[1] != 'F' and len(mapping) != 1:
                raise MalformedLine("Status %s folding must map to one codepoint" % f[1])
            yield CaseFold(parse_codepoint(f[0]), f[1], mapping, l)


#
#  SpecialCasing.txt:  code ; lower ; title ; upper ; (condition_list ;)?
#
SpecialCaseMapping = namedtuple('SpecialCaseMapping', ['target', 'lowercase', 'titlecase', 'uppercase', 'conditions', 'source'], defaults=(None,))

def parse_SpecialCasing_txt(ucd_dir):
    for l in ucd_records(os.path.join(ucd_dir, 'SpecialCasing.txt'), (4, 6)):
        with located(l):
            f = l.fields + [''] * (6 - len(l.fields))
            if f[5] != '': raise MalformedLine("Unexpected trailing field '%s'" % f[5])
            yield SpecialCaseMapping(parse_codepoint(f[0]),
                                     parse_codepoint_sequence(f[1]),
                                     parse_codepoint_sequence(f[2]),
                                     parse_codepoint_sequence(f[3]),
                                     tuple(f[4].split()), l)


#
#  NameAliases.txt:  code ; alias ; type
#
NameAlias = namedtuple('NameAlias', ['target', 'alias', 'label', 'source'], defaults=(None,))
NameAlias_labels = ['correction', 'control', 'alternate', 'figment', 'abbreviation']

def parse_NameAliases_txt(ucd_dir):
    for l in ucd_records(os.path.join(ucd_dir, 'NameAliases.txt'), 3):
        with located(l):
            f = l.fields
            if not f[2] in NameAlias_labels: raise MalformedLine("Unknown name alias type '%s'" % f[2])
            yield NameAlias(parse_codepoint(f[0]), f[1], f[2], l)


#
#  Jamo.txt:  code ; short name  (the short name may be empty)
#
JamoShortName = namedtuple('JamoShortName', ['target', 'name', 'source'], defaults=(None,))

def parse_Jamo_txt(ucd_dir):
    for l in ucd_records(os.path.join(ucd_dir, 'Jamo.txt'), 2):
        with located(l):
            yield JamoShortName(parse_codepoint(l.fields[0]), l.fields[1], l)


#
#  UnicodeData.txt: 15 fields per codepoint, without codepoint ranges.
#  Large ranges are given by two consecutive rows named <Label, First>
#  and <Label, Last>; the pair is decoded as a single record whose target
#  is the CodepointRange and whose name is the label.
#
UnicodeData = namedtuple('UnicodeData', [
    'target', 'name', 'general_category', 'canonical_combining_class',
    'bidi_class', 'decomposition', 'numeric_type_decimal', 'numeric_type_digit',
    'numeric_type_numeric', 'bidi_mirrored', 'unicode1_name', 'iso_comment',
    'simple_uppercase_mapping', 'simple_lowercase_mapping', 'simple_titlecase_mapping', 'source'], defaults=(None,))

UnicodeData_arity = 15

#  Parse a decomposition mapping field in one of two forms:
#  (a) compatibility mappings:  "<" decomp_type:[A-Za-z]* ">" {codepoint}
#  (b) canonical mappings:  {codepoint}
#  An empty field is the empty mapping.
compatibility_regexp = re.compile(r"^<([A-Za-z]*)>\s*([0-9A-F ]*)$")
def parse_decomposition(s):
    m = compatibility_regexp.match(s)
    if m:
        decomp_type = m.group(1)
        mapping = m.group(2)
    else:
        decomp_type = "Canonical"
        mapping = s
    return (decomp_type, parse_codepoint_sequence(mapping))

def decode_UnicodeData_fields(f):
    if f[9] not in ('Y', 'N'): raise MalformedLine("Bidi_Mirrored must be Y or N, but got '%s'" % f[9])
    if not f[3].isdigit(): raise MalformedLine("Non-numeric combining class '%s'" % f[3])
    if f[2] == '': raise MalformedLine("Missing general category")
    return UnicodeData(parse_codepoint(f[0]), f[1], f[2], int(f[3]), f[4],
                       parse_decomposition(f[5]), f[6], f[7], f[8], f[9] == 'Y',
                       f[10], f[11],
                       parse_optional_codepoint(f[12]),
                       parse_optional_codepoint(f[13]),
                       parse_optional_codepoint(f[14]))

def parse_UnicodeData_txt(ucd_dir):
    path = os.path.join(ucd_dir, 'UnicodeData.txt')
    pending_first = None
    last_cp = -1
    for l in ucd_records(path, UnicodeData_arity):
        with located(l):
            row = decode_UnicodeData_fields(l.fields)._replace(source=l)
            if row.target <= last_cp:
                raise InvalidRange("Codepoint %04X out of order after %04X" % (row.target, last_cp))
            last_cp = row.target
            marker = range_marker(row.name)
            if pending_first is not None:
                if marker is None or marker[1] != 'Last':
                    raise UnpairedRangeMarker("Range start %s at %04X is not followed by its Last row" %
                                              (pending_first.name, pending_first.target))
                if marker[0] != range_marker(pending_first.name)[0] or row.general_category != pending_first.general_category:
                    raise UnpairedRangeMarker("Range end %s (%s) does not match range start %s (%s)" %
                                              (row.name, row.general_category, pending_first.name, pending_first.general_category))
                yield pending_first._replace(target=CodepointRange(pending_first.target, row.target), name=marker[0])
                pending_first = None
            elif marker is not None and marker[1] == 'First':
                pending_first = row
            elif marker is not None:
                raise UnpairedRangeMarker("Range end %s at %04X without a prior range start" % (row.name, row.target))
            else:
                yield row
    if pending_first is not None:
        raise UnpairedRangeMarker("Range start %s at %04X is not followed by its Last row" %
                                  (pending_first.name, pending_first.target), filename=path)


#
#  Reformat a decoded row in the UnicodeData.txt syntax; a range record
#  gives its <First> and <Last> lines.
#
def format_UnicodeData(row):
    (decomp_type, decomp) = row.decomposition
    decomp_field = ' '.join(['%04X' % cp for cp in decomp])
    if decomp_type != 'Canonical': decomp_field = ('<%s> ' % decomp_type) + decomp_field
    def optional(cp):
        return '' if cp is None else '%04X' % cp
    fields = [row.general_category, '%i' % row.canonical_combining_class, row.bidi_class,
              decomp_field, row.numeric_type_decimal, row.numeric_type_digit, row.numeric_type_numeric,
              'Y' if row.bidi_mirrored else 'N', row.unicode1_name, row.iso_comment,
              optional(row.simple_uppercase_mapping), optional(row.simple_lowercase_mapping),
              optional(row.simple_titlecase_mapping)]
    if isinstance(row.target, CodepointRange):
        return ['%04X;<%s, %s>;' % (cp, row.name, which) + ';'.join(fields)
                for (cp, which) in [(row.target.lo, 'First'), (row.target.hi, 'Last')]]
    return ['%04X;%s;' % (row.target, row.name) + ';'.join(fields)]


#
#  Decoders by file name.
#
UCD_decoders = OrderedDict([
    ('UnicodeData.txt', parse_UnicodeData_txt),
    ('PropertyAliases.txt', parse_PropertyAliases_txt),
    ('PropertyValueAliases.txt', parse_PropertyValueAliases_txt),
    ('Scripts.txt', parse_Scripts_txt),
    ('ScriptExtensions.txt', parse_ScriptExtensions_txt),
    ('PropList.txt', parse_PropList_txt),
    ('DerivedCoreProperties.txt', parse_DerivedCoreProperties_txt),
    ('DerivedAge.txt', parse_DerivedAge_txt),
    ('CaseFolding.txt', parse_CaseFolding_txt),
    ('SpecialCasing.txt', parse_SpecialCasing_txt),
    ('NameAliases.txt', parse_NameAliases_txt),
    ('Jamo.txt', parse_Jamo_txt),
])

def decode(ucd_dir, filename):
    if not filename in UCD_decoders:
        raise IoFailure("No decoder for UCD file", filename=filename)
    logging.debug("Decoding %s" % filename)
    return UCD_decoders[filename](ucd_dir)
