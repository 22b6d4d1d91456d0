"""
Invisible and exotic characters used by the fuzzer variants.

Header lists are smaller than field lists: most HTTP stacks refuse to send
raw line breaks or NUL bytes in header values, so those only go into bodies.
"""

# Unicode space, line and paragraph separators
SEPARATORS = [
    " ", "\u00a0", "\u1680", "\u2000", "\u2001", "\u2002", "\u2003",
    "\u2004", "\u2005", "\u2006", "\u2007", "\u2008", "\u2009", "\u200a",
    "\u2028", "\u2029", "\u202f", "\u205f", "\u3000",
]

SEPARATORS_HEADERS = [
    " ", "\u00a0", "\u2000", "\u2007", "\u2009", "\u202f", "\u3000",
]

WHITESPACES = SEPARATORS + ["\t", "\n", "\u000b", "\u000c", "\r", "\u0085"]

CONTROL_CHARS = [
    "\u0000", "\u0001", "\u0007", "\u0008", "\u001b", "\u007f", "\u0085",
    "\u00ad", "\u0600", "\u061c", "\u200b", "\u200c", "\u200d", "\u200e",
    "\u200f", "\u202a", "\u202b", "\u202c", "\u202d", "\u202e", "\u2060",
    "\u2066", "\u2069", "\ufeff", "\ufff9", "\ue000", "\uf8ff",
]

CONTROL_CHARS_HEADERS = [
    "\u00ad", "\u200b", "\u200c", "\u200d", "\u200e", "\u200f", "\u202e",
    "\u2060", "\ufeff",
]

SINGLE_CODE_POINT_EMOJIS = [
    "\U0001f600", "\U0001f47b", "\U0001f525", "\U0001f4a9", "\U0001f680",
    "\u2603", "\u2615", "\u231a", "\u2705", "\u26a1",
]

# Sequences glued with ZERO WIDTH JOINER (U+200D) or built from flag pairs
MULTI_CODE_POINT_EMOJIS = [
    "\U0001f469\u200d\U0001f680",
    "\U0001f468\u200d\U0001f469\u200d\U0001f467\u200d\U0001f466",
    "\U0001f3f3\ufe0f\u200d\U0001f308",
    "\U0001f1f7\U0001f1f4",
    "\U0001f441\ufe0f\u200d\U0001f5e8\ufe0f",
    "\U0001f9d1\u200d\U0001f4bb",
]
