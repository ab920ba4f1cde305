"""
A module for manipulating the header blocks of FITS files.

A FITS header is an ordered list of 80 column cards, each holding a keyword,
a value and a comment.  `Header` stores the cards as `Item` objects in their
original order, along with a lookup table from each keyword to the positions
at which it occurs.  Keywords such as COMMENT and HISTORY may occur any number
of times.

`HeaderMapping` presents a header as a dictionary: values longer than a single
card, and values with several lines, are spread over several cards with the
same keyword and transparently put back together when they are read.

    >>> header = Header(cards)
    >>> hdr = header.mapping
    >>> hdr['HISTORY'] += 'Flat fielded'
    >>> hdr['TELESCOP']
    'JCMT'
"""

# Module variables

# The keywords whose cards carry free text in the comment field instead of a
# value.  Through the mapping interface the comment text is the value.
COMMENT_KEYWORDS = ('COMMENT', 'HISTORY')

# Values longer than this are split over several cards by HeaderMapping; each
# continued piece is one character shorter, to leave room for the backslash.
MAX_VALUE_LENGTH = 70

GLOBALS = [
    ('COMMENT_KEYWORDS', COMMENT_KEYWORDS),
    ('MAX_VALUE_LENGTH', MAX_VALUE_LENGTH),
]


def set_comment_keywords(*keywords):
    """
    Changes the set of keywords treated as comment cards by `HeaderMapping`.
    """

    global COMMENT_KEYWORDS
    COMMENT_KEYWORDS = tuple(k.upper() for k in keywords)


def set_max_value_length(length):
    global MAX_VALUE_LENGTH
    if length < 2:
        raise ValueError('The maximum value length must be at least 2; got '
                         '%r' % length)
    MAX_VALUE_LENGTH = length


def restore_defaults():
    """Restores every module setting listed in GLOBALS to its default."""

    for name, value in GLOBALS:
        globals()[name] = value
