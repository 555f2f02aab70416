#
# UCD_property_values.py - property and property value aliases of the
# Unicode Character Database (UCD), and their resolution to canonical names.
#
#
# Licensed under Open Software License 3.0.
#
#
import os.path, logging
from collections import OrderedDict
from types import MappingProxyType

import UCD_config
from UCD_errors import UCDError, MalformedLine, UnknownProperty, UnknownPropertyValue, located
from UCD_parser import canonicalize, parse_missing_specs
from UCD_records import parse_PropertyAliases_txt, parse_PropertyValueAliases_txt

#
#  Properties whose value table is the one of another property.
#
shared_value_tables = {"Script_Extensions": "Script"}


class PropertyValues:
    """
    The property and property value alias tables of one UCD version.

    Property names are always matched loosely (see `canonicalize`), and
    may be given as abbreviation, long name or any other alias.  Property
    values resolve to their long name.  Values of the properties listed in
    UCD_config.UCD_case_insensitive_properties are matched loosely; all
    other values must be spelled exactly as in PropertyValueAliases.txt.

    Instances are built once by `from_ucd_dir` (or `from_records`) and are
    not modified afterwards.
    """

    def __init__(self, property_lookup_map, property_aliases, value_lookup_maps, value_aliases, default_values):
        self._property_lookup_map = property_lookup_map
        self._property_aliases = property_aliases
        self._value_lookup_maps = value_lookup_maps
        self._value_aliases = value_aliases
        self._default_values = default_values

    @classmethod
    def from_ucd_dir(cls, ucd_dir):
        pva_path = os.path.join(ucd_dir, 'PropertyValueAliases.txt')
        try:
            propvals = cls.from_records(parse_PropertyAliases_txt(ucd_dir),
                                        parse_PropertyValueAliases_txt(ucd_dir),
                                        parse_missing_specs(pva_path))
        except UCDError as e:
            e.locate(pva_path)
            raise
        logging.info("Loaded %i properties with value aliases for %i of them" %
                     (len(propvals._property_aliases), len(propvals._value_aliases)))
        return propvals

    @classmethod
    def from_records(cls, property_aliases, property_value_aliases, missing_specs=()):
        property_lookup_map = {}
        prop_aliases = OrderedDict()
        for pa in property_aliases:
            for name in (pa.abbreviation, pa.long) + pa.aliases:
                property_lookup_map[canonicalize(name)] = pa.long
            prop_aliases[pa.long] = frozenset([pa.abbreviation] + list(pa.aliases)) - frozenset([pa.long])

        def property_of(name):
            canon = canonicalize(name)
            if not canon in property_lookup_map:
                raise UnknownProperty("Property '%s' is unknown" % name)
            return property_lookup_map[canon]

        value_lookup_maps = {}
        value_aliases = {}
        for pva in property_value_aliases:
            with located(pva.source):
                prop = property_of(pva.property)
            lookup = value_lookup_maps.setdefault(prop, {})
            aliases = value_aliases.setdefault(prop, OrderedDict())
            if pva.long in aliases:
                with located(pva.source):
                    raise MalformedLine("Duplicate value %s for property %s" % (pva.long, prop))
            names = [pva.abbreviation] + list(pva.aliases)
            if pva.numeric is not None: names = ["%i" % pva.numeric] + names
            aliases[pva.long] = frozenset(names) - frozenset([pva.long])
            key = value_key_function(prop)
            for name in [pva.long] + names:
                lookup[key(name)] = pva.long

        for (derived, base) in shared_value_tables.items():
            if base in value_lookup_maps and not derived in value_lookup_maps:
                value_lookup_maps[derived] = value_lookup_maps[base]
                value_aliases[derived] = value_aliases[base]

        default_values = {}
        for (cp_range, fields) in missing_specs:
            if len(fields) != 2: continue
            # partial range defaults do not apply to the property as a whole
            if cp_range.lo != 0 or cp_range.hi != UCD_config.UCD_max_code_point: continue
            default_values[property_of(fields[0])] = fields[1]

        return cls(property_lookup_map, prop_aliases, value_lookup_maps, value_aliases, default_values)

    #
    #  Property names
    #
    def property_name(self, name):
        canon = canonicalize(name)
        if not canon in self._property_lookup_map:
            raise UnknownProperty("Property '%s' is unknown" % name)
        return self._property_lookup_map[canon]

    def property_aliases_of(self, name):
        return self._property_aliases[self.property_name(name)]

    def properties(self):
        return list(self._property_aliases.keys())

    #
    #  Property values
    #
    def _lookup_map(self, property_name):
        prop = self.property_name(property_name)
        if not prop in self._value_lookup_maps:
            raise UnknownPropertyValue("Property %s has no value aliases" % prop)
        return (prop, self._value_lookup_maps[prop])

    def canonical(self, property_name, value):
        (prop, lookup) = self._lookup_map(property_name)
        key = value_key_function(prop)(value)
        if not key in lookup:
            raise UnknownPropertyValue("Unknown value for %s: '%s'" % (prop, value))
        return lookup[key]

    def aliases_of(self, property_name, canonical_name):
        prop = self.property_name(property_name)
        canon = self.canonical(prop, canonical_name)
        return self._value_aliases[prop][canon]

    def values(self, property_name):
        prop = self.property_name(property_name)
        if not prop in self._value_aliases:
            raise UnknownPropertyValue("Property %s has no value aliases" % prop)
        aliases = self._value_aliases[prop]
        return MappingProxyType(OrderedDict([(v, sorted(aliases[v])) for v in sorted(aliases.keys())]))

    def default_value(self, property_name):
        prop = self.property_name(property_name)
        if not prop in self._default_values: return None
        dflt = self._default_values[prop]
        lookup = self._value_lookup_maps.get(prop, {})
        key = value_key_function(prop)(dflt)
        # <code point>, <none>, NaN, ... are not property values
        return lookup.get(key, dflt)


def value_key_function(property_name):
    if property_name in UCD_config.UCD_case_insensitive_properties:
        return canonicalize
    return lambda name: name
