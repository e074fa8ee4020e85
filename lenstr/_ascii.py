"""
ASCII byte tables shared by the query, mutation and segmentation engines.

All tables are immutable module constants. Case logic only ever touches
``A-Z`` / ``a-z``; bytes >= 0x80 pass through unchanged.
"""

ASCII_LOWERCASE = b"abcdefghijklmnopqrstuvwxyz"
ASCII_UPPERCASE = b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ASCII_DIGITS = b"0123456789"
ASCII_LETTERS = ASCII_LOWERCASE + ASCII_UPPERCASE

# space, \t, \n, \v, \f, \r
WHITESPACE = frozenset(b" \t\n\v\f\r")
ALPHA = frozenset(ASCII_LETTERS)
DIGITS = frozenset(ASCII_DIGITS)
ALNUM = ALPHA | DIGITS

TAB = ord("\t")
LF = ord("\n")
CR = ord("\r")
SIGNS = frozenset(b"+-")
ZERO = ord("0")

# \n \v \f FS GS RS NEL \r  (CRLF is handled as a pair by split_lines)
LINE_BOUNDARIES = frozenset(b"\n\v\f\x1c\x1d\x1e\x85\r")

TO_LOWER = bytes.maketrans(ASCII_UPPERCASE, ASCII_LOWERCASE)
TO_UPPER = bytes.maketrans(ASCII_LOWERCASE, ASCII_UPPERCASE)
SWAP_CASE = bytes.maketrans(ASCII_LETTERS, ASCII_UPPERCASE + ASCII_LOWERCASE)
