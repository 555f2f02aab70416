#
# UCD_aggregator.py - aggregating decoded UCD records into sets of
# codepoints, one set per canonical property value.
#
#
# Licensed under Open Software License 3.0.
#
#
import logging
from collections import OrderedDict

from UCD_errors import InvalidRange, located
from UCD_ranges import expand_ranges
from unicode_set import (empty_uset, uset_from_ranges, uset_complement, uset_union,
                         uset_difference, union_of_all, uset_popcount, uset_to_range_list)

#
#  Related general categories, Table 12 of UAX #44 section 5.7.1.
#
Related_Categories = [
    ("Cased_Letter", ["Lu", "Ll", "Lt"]),
    ("Letter", ["Lu", "Ll", "Lt", "Lm", "Lo"]),
    ("Mark", ["Mn", "Mc", "Me"]),
    ("Number", ["Nd", "Nl", "No"]),
    ("Punctuation", ["Pc", "Pd", "Ps", "Pe", "Pi", "Pf", "Po"]),
    ("Symbol", ["Sm", "Sc", "Sk", "So"]),
    ("Separator", ["Zs", "Zl", "Zp"]),
    ("Other", ["Cc", "Cf", "Cs", "Co", "Cn"]),
]

#
#  In Script_Extensions, these Script values only keep the codepoints
#  not listed in ScriptExtensions.txt (UAX #24).
#
Implicit_Scripts = ["Zyyy", "Zinh", "Zzzz"]


#
#  partition_overlap gives (codepoint, name1, name2) for the lowest
#  codepoint that belongs to two of the given sets, or None.
#
def partition_overlap(sets):
    tagged = []
    for name in sets.keys():
        tagged += [(lo, hi, name) for (lo, hi) in uset_to_range_list(sets[name])]
    tagged.sort()
    for i in range(1, len(tagged)):
        (lo, hi, name) = tagged[i]
        (prev_lo, prev_hi, prev_name) = tagged[i - 1]
        if lo <= prev_hi:
            return (lo, prev_name, name)
    return None

#
#  check_partition raises InvalidRange if any codepoint belongs to more
#  than one of the given sets.
#
def check_partition(sets):
    overlap = partition_overlap(sets)
    if overlap is not None:
        raise InvalidRange("Codepoint %04X belongs to both %s and %s" % overlap)


#
#  enumerated_property_sets folds a stream of records into one set per
#  canonical property value.  value(record) gives the raw value of a
#  record, which is resolved through propvals.  Each codepoint may have
#  one value only.  If default_value is given, all codepoints not
#  otherwise assigned form its set, which is always present.  An ordered
#  record stream must have strictly increasing ranges.
#
#  Returns (sets, assigned): the sets as an OrderedDict sorted by value
#  name, and the union of all explicitly assigned codepoints.
#
def enumerated_property_sets(records, propvals, property_name, value, default_value=None, ordered=False):
    range_lists = {}
    record_count = 0
    for (cp_range, r) in expand_ranges(records, ordered):
        with located(r.source):
            canon = propvals.canonical(property_name, value(r))
        range_lists.setdefault(canon, []).append((cp_range.lo, cp_range.hi, r.source))
        record_count += 1
    value_sets = dict([(v, uset_from_ranges(range_lists[v])) for v in range_lists.keys()])
    overlap = partition_overlap(value_sets)
    if overlap is not None:
        # report the later of the records claiming the codepoint
        (cp, name1, name2) = overlap
        sources = [s for name in (name1, name2) for (lo, hi, s) in range_lists[name]
                   if lo <= cp <= hi and s is not None]
        with located(max(sources, key=lambda s: s.line_no) if sources else None):
            raise InvalidRange("Codepoint %04X belongs to both %s and %s" % overlap)
    assigned = union_of_all(list(value_sets.values()))
    if default_value is not None:
        dflt = propvals.canonical(property_name, default_value)
        value_sets[dflt] = uset_union(value_sets.get(dflt, empty_uset()), uset_complement(assigned))
    logging.info("%s: %i records, %i values, %i codepoints assigned" %
                 (propvals.property_name(property_name), record_count, len(value_sets), uset_popcount(assigned)))
    return (OrderedDict(sorted(value_sets.items())), assigned)


#
#  related_category_sets computes the related category unions from the
#  finished general category sets; the given sets are not modified.
#
def related_category_sets(propvals, category_sets):
    related = OrderedDict()
    for (name, components) in Related_Categories:
        canon = propvals.canonical("gc", name)
        component_sets = []
        for c in components:
            cc = propvals.canonical("gc", c)
            if cc in category_sets: component_sets.append(category_sets[cc])
        related[canon] = union_of_all(component_sets)
    return related


class CategoryFilter:
    """
    Include/exclude rules over canonical property values.  Names may be
    given in any alias form.  An empty include list admits every value not
    excluded.
    """
    def __init__(self, propvals, property_name, include=(), exclude=()):
        self.include = set([propvals.canonical(property_name, n.strip()) for n in include])
        self.exclude = set([propvals.canonical(property_name, n.strip()) for n in exclude])

    def __call__(self, name):
        if name in self.exclude: return False
        return len(self.include) == 0 or name in self.include

    def apply(self, sets):
        return OrderedDict([(k, v) for (k, v) in sets.items() if self(k)])


#
#  General_Category from UnicodeData.txt.  Codepoints without a row are
#  Unassigned.  Related categories are added unless an enumeration is
#  requested, where each codepoint must belong to exactly one set.
#
def general_category_sets(rows, propvals, include=(), exclude=(), enum=False):
    category_filter = CategoryFilter(propvals, "gc", include, exclude)
    (sets, assigned) = enumerated_property_sets(rows, propvals, "gc",
                                                lambda r: r.general_category,
                                                default_value="unassigned", ordered=True)
    if not enum:
        sets.update(related_category_sets(propvals, sets))
        sets = OrderedDict(sorted(sets.items()))
    return category_filter.apply(sets)


#
#  Script from Scripts.txt.  The default is taken from the @missing
#  specification of the file if there is one, Unknown otherwise.
#
def script_sets(records, propvals, include=(), exclude=(), default_value=None):
    category_filter = CategoryFilter(propvals, "sc", include, exclude)
    if default_value is None: default_value = "Unknown"
    (sets, assigned) = enumerated_property_sets(records, propvals, "sc",
                                                lambda r: r.script,
                                                default_value=default_value)
    return category_filter.apply(sets)


#
#  Script_Extensions from ScriptExtensions.txt over the Script sets.  A
#  codepoint not listed keeps its Script value as its only extension.
#
def script_extension_sets(script_records, extension_records, propvals, include=(), exclude=()):
    category_filter = CategoryFilter(propvals, "scx", include, exclude)
    (base_sets, assigned) = enumerated_property_sets(script_records, propvals, "sc",
                                                     lambda r: r.script,
                                                     default_value="Unknown")
    range_lists = {}
    explicit = []
    for (cp_range, r) in expand_ranges(extension_records):
        explicit.append((cp_range.lo, cp_range.hi))
        for sc in r.scripts:
            with located(r.source):
                canon = propvals.canonical("scx", sc)
            range_lists.setdefault(canon, []).append((cp_range.lo, cp_range.hi))
    explicitly_defined = uset_from_ranges(explicit)
    implicit = set([propvals.canonical("sc", s) for s in Implicit_Scripts])
    sets = {}
    for name in base_sets.keys():
        if name in implicit:
            sets[name] = uset_difference(base_sets[name], explicitly_defined)
        else:
            sets[name] = base_sets[name]
    for name in range_lists.keys():
        sets[name] = uset_union(sets.get(name, empty_uset()), uset_from_ranges(range_lists[name]))
    return category_filter.apply(OrderedDict(sorted(sets.items())))


#
#  Age from DerivedAge.txt; codepoints not listed are Unassigned.
#
def age_sets(records, propvals, include=(), exclude=()):
    category_filter = CategoryFilter(propvals, "age", include, exclude)
    dflt = propvals.default_value("age")
    if dflt is None: dflt = "Unassigned"
    (sets, assigned) = enumerated_property_sets(records, propvals, "age",
                                                lambda r: r.age,
                                                default_value=dflt)
    return category_filter.apply(sets)


#
#  Binary properties (PropList.txt, DerivedCoreProperties.txt): one set
#  per property, keyed by the long property name.  Records with a value
#  field are not binary and are skipped.
#
def binary_property_sets(records, propvals, include=(), exclude=()):
    include = set([propvals.property_name(n.strip()) for n in include])
    exclude = set([propvals.property_name(n.strip()) for n in exclude])
    range_lists = {}
    for (cp_range, r) in expand_ranges(records):
        if r.value is not None: continue
        with located(r.source):
            prop = propvals.property_name(r.property)
        range_lists.setdefault(prop, []).append((cp_range.lo, cp_range.hi))
    sets = OrderedDict()
    for prop in sorted(range_lists.keys()):
        if prop in exclude: continue
        if len(include) > 0 and not prop in include: continue
        sets[prop] = uset_from_ranges(range_lists[prop])
    return sets
