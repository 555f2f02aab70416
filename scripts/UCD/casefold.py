#
# casefold.py - simple case folding maps derived from CaseFolding.txt
# of the Unicode Character Database (UCD).
#
#
# Licensed under Open Software License 3.0.
#
#
import logging
from collections import OrderedDict

from UCD_errors import MalformedLine, located


#
#  The simple case folding uses the C (common) and S (simple) entries.
#  F (full) and T (Turkic) entries are skipped.
#
def simple_case_fold_map(records):
    fold_map = {}
    for r in records:
        if r.status == 'T':
            logging.debug("Skipping Turkic entry %04X" % r.target)
            continue
        if r.status == 'F': continue
        if r.target in fold_map:
            with located(r.source):
                raise MalformedLine("Duplicate simple case folding for %04X" % r.target)
        fold_map[r.target] = r.mapping[0]
    return OrderedDict(sorted(fold_map.items()))


#
#  The closure of a simple case fold map: each codepoint of an
#  equivalence class is mapped to all other members of its class.
#
def simple_case_closure(fold_map):
    cl_map = {}
    for k in fold_map.keys():
        v = fold_map[k]
        if not v in cl_map: cl_map[v] = [k]
        else: cl_map[v].append(k)
        if not k in cl_map: cl_map[k] = [v]
        else: cl_map[k].append(v)
    newEntries = True
    while newEntries:
        newEntries = False
        for k in cl_map.keys():
            vlist = cl_map[k]
            for v in vlist:
                for w in cl_map[v]:
                    if k != w and not k in cl_map[w]:
                        cl_map[w].append(k)
                        newEntries = True
    return OrderedDict([(k, sorted(set(cl_map[k]) - set([k]))) for k in sorted(cl_map.keys())])
