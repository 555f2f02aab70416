#
# UCD_config.py - configuration for the UCD range generator
#
#
# Licensed under Open Software License 3.0.
#
#
UCD_version_major = 13
UCD_version_minor = 0
UCD_version_point = 0
UCD_version_string = "%i.%i.%i" % (UCD_version_major, UCD_version_minor, UCD_version_point)

UCD_src_dir = "UCD-" + UCD_version_string

UCD_max_code_point = 0x10FFFF

#
# Property values of these properties are matched loosely (case, '-', '_'
# and whitespace ignored).  All other property values match exactly.
#
UCD_case_insensitive_properties = ["General_Category", "Script", "Script_Extensions"]

#
# Compact run/quad table representation: 2^log2_quad_bits codepoints per quad.
#
log2_quad_bits = 5
