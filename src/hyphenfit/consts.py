"""Central module containing constants of the dictionary format and hyphenation defaults"""

from __future__ import annotations

# Dictionary syntax
BOUNDARY_MARKER = "."  # leading/trailing anchor of a pattern
EXCEPTION_SEPARATOR = "/"  # letters/pre=post[,start[,cut]]
REPLACEMENT_SEPARATOR = "="  # separates the pre- and post-hyphen halves
FIELD_SEPARATOR = ","  # separates the optional start and cut fields
COMMENT_MARKER = "%"
TEX_PATTERNS_OPEN = "\\patterns{"
TEX_PATTERNS_CLOSE = "}"

# Directives of libhyphen dictionaries
DIRECTIVE_LEFT_MIN = "LEFTHYPHENMIN"
DIRECTIVE_RIGHT_MIN = "RIGHTHYPHENMIN"
IGNORED_DIRECTIVES = ("COMPOUNDLEFTHYPHENMIN", "COMPOUNDRIGHTHYPHENMIN", "NOHYPHEN", "NEXTLEVEL")

# Hyphenation defaults
DEFAULT_HYPHEN = "-"
DEFAULT_LEFT_MIN = 1  # letters required before the first break of a word
DEFAULT_RIGHT_MIN = 1  # letters required after the last break of a word
DEFAULT_CHARSET = "utf-8"
DEFAULT_ENCODING = "utf-8"  # encoding assumed for bytes input
