#
# UCD_properties.py - parsing Unicode Character Database (UCD) files
# and emitting the codepoint ranges of property values.
#
#
# Licensed under Open Software License 3.0.
#
#
import sys, os, argparse, logging

import UCD_config
from UCD_errors import UCDError
from UCD_parser import UCD_version, full_range_default
from UCD_records import decode, format_UnicodeData
from UCD_property_values import PropertyValues
from UCD_aggregator import (check_partition, general_category_sets, script_sets,
                            script_extension_sets, age_sets, binary_property_sets)
from UCD_emitter import TextEmitter
from casefold import simple_case_fold_map, simple_case_closure


class UCD_generator():
    def __init__(self, ucd_dir, emitter):
        self.ucd_dir = ucd_dir
        self.emitter = emitter
        self.propvals = None

    def load_property_value_info(self):
        UCD_version(self.ucd_dir)
        self.propvals = PropertyValues.from_ucd_dir(self.ucd_dir)

    def list_values(self, property_name):
        self.emitter.emit_alias_listing(self.propvals.values(property_name))

    def emit_sets(self, property_name, sets, enum=False):
        if enum:
            check_partition(sets)
            self.emitter.emit_enumeration(property_name, sets, partition_invariant=True)
        else:
            for name in sets.keys():
                self.emitter.emit_named_ranges(name, sets[name])
        for name in sets.keys():
            logging.info("%s: %s bytes" % (name, sets[name].bytes()))

    def generate_general_category(self, include=(), exclude=(), enum=False):
        rows = decode(self.ucd_dir, 'UnicodeData.txt')
        sets = general_category_sets(rows, self.propvals, include, exclude, enum)
        self.emit_sets("general_category", sets, enum)

    def generate_script(self, include=(), exclude=(), enum=False):
        records = decode(self.ucd_dir, 'Scripts.txt')
        dflt = full_range_default(os.path.join(self.ucd_dir, 'Scripts.txt'))
        sets = script_sets(records, self.propvals, include, exclude, default_value=dflt)
        self.emit_sets("script", sets, enum)

    def generate_script_extension(self, include=(), exclude=()):
        sets = script_extension_sets(decode(self.ucd_dir, 'Scripts.txt'),
                                     decode(self.ucd_dir, 'ScriptExtensions.txt'),
                                     self.propvals, include, exclude)
        self.emit_sets("script_extension", sets)

    def generate_age(self, include=(), exclude=(), enum=False):
        sets = age_sets(decode(self.ucd_dir, 'DerivedAge.txt'), self.propvals, include, exclude)
        self.emit_sets("age", sets, enum)

    def generate_binary_properties(self, filename, include=(), exclude=()):
        sets = binary_property_sets(decode(self.ucd_dir, filename), self.propvals, include, exclude)
        self.emit_sets(filename, sets)

    def list_binary_properties(self, filename):
        props = set()
        for r in decode(self.ucd_dir, filename):
            if r.value is None: props.add(self.propvals.property_name(r.property))
        listing = dict([(p, sorted(self.propvals.property_aliases_of(p))) for p in props])
        self.emitter.emit_alias_listing(dict(sorted(listing.items())))

    def generate_case_folding_simple(self, all_pairs=False):
        fold_map = simple_case_fold_map(decode(self.ucd_dir, 'CaseFolding.txt'))
        if all_pairs:
            self.emitter.emit_codepoint_map("case_folding_simple", simple_case_closure(fold_map))
        else:
            self.emitter.emit_codepoint_map("case_folding_simple", fold_map)

    def test_unicode_data(self):
        for row in decode(self.ucd_dir, 'UnicodeData.txt'):
            for line in format_UnicodeData(row):
                self.emitter.write(line + "\n")


def name_list(text):
    if text is None: return []
    return [n for n in text.split(',') if n.strip() != '']

def make_argparser():
    ap = argparse.ArgumentParser(prog='ucd-ranges',
                                 description='Extract canonical codepoint ranges from the Unicode Character Database.')
    ap.add_argument('--logfile', help='write a debug log to this file')
    ap.add_argument('-v', '--verbose', action='store_true', help='log progress to stderr')
    sub = ap.add_subparsers(dest='command')

    def add_command(name, help_text, list_option=None, enum=True, filters=True):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('ucd_dir', nargs='?', default=UCD_config.UCD_src_dir,
                       help='directory of the UCD files (default: %(default)s)')
        if filters:
            p.add_argument('--include', type=name_list, default=[], help='comma separated values to emit')
            p.add_argument('--exclude', type=name_list, default=[], help='comma separated values to skip')
        if list_option is not None:
            p.add_argument(list_option, dest='list_values', action='store_true',
                           help='list the available values with their aliases and exit')
        if enum:
            p.add_argument('--enum', action='store_true',
                           help='emit one enumeration in which each codepoint has exactly one value')
        return p

    add_command('general-category', 'General_Category sets from UnicodeData.txt', '--list-categories')
    add_command('script', 'Script sets from Scripts.txt', '--list-scripts')
    add_command('script-extension', 'Script_Extensions sets from ScriptExtensions.txt', '--list-scripts', enum=False)
    add_command('age', 'Age sets from DerivedAge.txt', '--list-ages')
    add_command('prop-list', 'binary property sets from PropList.txt', '--list-properties', enum=False)
    add_command('derived-core-properties', 'binary property sets from DerivedCoreProperties.txt',
                '--list-properties', enum=False)
    p = add_command('case-folding-simple', 'simple case folding map from CaseFolding.txt', enum=False, filters=False)
    p.add_argument('--all-pairs', action='store_true', help='map each codepoint to all of its case variants')
    add_command('test-unicode-data', 'print every decoded UnicodeData.txt row', enum=False, filters=False)
    return ap


def run(args, out):
    ucd = UCD_generator(args.ucd_dir, TextEmitter(out))
    if args.command == 'test-unicode-data':
        ucd.test_unicode_data()
        return
    if args.command == 'case-folding-simple':
        ucd.generate_case_folding_simple(args.all_pairs)
        return
    ucd.load_property_value_info()
    if args.command in ('prop-list', 'derived-core-properties'):
        filename = 'PropList.txt' if args.command == 'prop-list' else 'DerivedCoreProperties.txt'
        if args.list_values: ucd.list_binary_properties(filename)
        else: ucd.generate_binary_properties(filename, args.include, args.exclude)
        return
    property_name = {'general-category': 'gc', 'script': 'sc', 'script-extension': 'scx', 'age': 'age'}[args.command]
    if args.list_values:
        ucd.list_values(property_name)
    elif args.command == 'general-category':
        ucd.generate_general_category(args.include, args.exclude, args.enum)
    elif args.command == 'script':
        ucd.generate_script(args.include, args.exclude, args.enum)
    elif args.command == 'script-extension':
        ucd.generate_script_extension(args.include, args.exclude)
    else:
        ucd.generate_age(args.include, args.exclude, args.enum)


def UCD_main(argv=None):
    ap = make_argparser()
    args = ap.parse_args(argv)
    if args.logfile:
        logging.basicConfig(filename=args.logfile, filemode='w', level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    if args.command is None:
        ap.print_help()
        return 0
    logging.info("root command: " + " ".join(sys.argv if argv is None else argv))
    try:
        run(args, sys.stdout)
        sys.stdout.flush()
    except BrokenPipeError:
        # downstream closed early; silence the flush at interpreter exit
        if sys.stdout is sys.__stdout__:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
        return 0
    except UCDError as e:
        logging.debug("aborted: %r" % e)
        sys.stderr.write("error: %s\n" % e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(UCD_main())
