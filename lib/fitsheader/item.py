import re
import warnings

import numpy as np

from fitsheader.util import (CARD_LENGTH, FitsHeaderWarning, _is_int, _pad,
                             _str_to_num, isscalar)


__all__ = ['Item', 'STRING', 'LOGICAL', 'INT', 'FLOAT', 'COMMENT', 'TYPES']


# Explicit type tags; an Item without one infers its type from its value
STRING = 'STRING'
LOGICAL = 'LOGICAL'
INT = 'INT'
FLOAT = 'FLOAT'
COMMENT = 'COMMENT'
TYPES = (STRING, LOGICAL, INT, FLOAT, COMMENT)

FIX_FP_TABLE2 = str.maketrans('dD', 'eE')


class Item(object):
    """
    A single FITS header card: a keyword, a value, a comment, and optionally
    an explicit type tag overriding the type implied by the value.

    Items are never copied by a `Header`; inserting the same `Item` in several
    places means that a change made to it shows up at every one of them.
    """

    length = CARD_LENGTH

    # String for a FITS standard compliant (FSC) keyword.
    _keywd_FSC_RE = re.compile(r'^[A-Z0-9_-]{0,8}$')

    # A number sub-string, either an integer or a float in fixed or
    # scientific notation.  Non-standard (NFSC) numbers may use a lower case
    # exponent and may contain spaces between the sign, digits and exponent.
    _digits_NFSC = r'(\.\d+|\d+(\.\d*)?) *([deDE] *[+-]? *\d+)?'
    _numr_NFSC = r'[+-]? *' + _digits_NFSC

    # This regex helps delete leading zeros from numbers, otherwise
    # Python might evaluate them as octal values.
    _number_NFSC_RE = re.compile(r'(?P<sign>[+-])? *0*(?P<digt>%s)'
                                 % _digits_NFSC)

    # Checks for a valid value/comment string.  The valu group matches a
    # FITS string, logical or number, and is None for an undefined value.
    # Note that a non-greedy match is done for a string, since a greedy match
    # will find a single-quote after the comment separator resulting in an
    # incorrect match.
    _value_NFSC_RE = re.compile(
        r'(?P<valu_field> *'
            r'(?P<valu>'
                r'\'(?P<strg>([ -~]+?|\'\'|)) *?\'(?=$|/| )|'
                r'(?P<bool>[FT])|'
                r'(?P<numr>' + _numr_NFSC + r')'
            r')? *)'
        r'(?P<comm_field>'
            r'(?P<sepr>/ *)'
            r'(?P<comm>(.|\n)*)'
        r')?$')

    _commentary_keywords = ['', 'COMMENT', 'HISTORY']

    def __init__(self, keyword=None, value=None, comment=None, type=None):
        self._keyword = None
        self._value = None
        self._comment = None
        self._type = None
        self._image = None

        if keyword is not None:
            self.keyword = keyword
        if value is not None:
            self.value = value
        if comment is not None:
            self.comment = comment
        if type is not None:
            self.type = type

        self._modified = True

    def __repr__(self):
        return repr((self.keyword, self.value, self.comment))

    def __str__(self):
        return self.image

    @property
    def keyword(self):
        if self._keyword is None:
            return ''
        return self._keyword

    @keyword.setter
    def keyword(self, keyword):
        """Set the keyword; once set it cannot be modified."""

        if self._keyword is not None:
            raise AttributeError(
                'Once set, the Item keyword may not be modified')
        elif not isinstance(keyword, str):
            raise ValueError('Keyword name %r is not a string.' % keyword)

        if len(keyword) <= 8:
            keyword = keyword.upper()
            if not self._keywd_FSC_RE.match(keyword):
                raise ValueError('Illegal keyword name: %r.' % keyword)
        elif keyword[:9].upper() == 'HIERARCH ':
            # The user explicitly asked for a HIERARCH card
            keyword = keyword[9:].strip().upper()
        else:
            warnings.warn(
                'Keyword name %r is greater than 8 characters; a HIERARCH '
                'card will be created.' % keyword, FitsHeaderWarning)
            keyword = keyword.upper()
        self._keyword = keyword
        self._modified = True

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        if not isscalar(value):
            raise ValueError('Illegal value: %r.' % (value,))
        oldvalue = self._value
        if (value is oldvalue or
                (type(value) is type(oldvalue) and value == oldvalue)):
            return
        self._value = value
        self._modified = True

    @property
    def comment(self):
        return self._comment

    @comment.setter
    def comment(self, comment):
        if comment is not None and not isinstance(comment, str):
            raise ValueError('Illegal comment: %r.' % (comment,))
        if comment != self._comment:
            self._comment = comment
            self._modified = True

    @property
    def type(self):
        """
        The explicit type tag of this card, or None if the type is to be
        inferred from the value.
        """

        return self._type

    @type.setter
    def type(self, type):
        if type is not None:
            type = type.upper()
            if type not in TYPES:
                raise ValueError('Illegal item type: %r; must be one of %s.'
                                 % (type, ', '.join(TYPES)))
        if type != self._type:
            self._type = type
            self._modified = True

    @property
    def kind(self):
        """
        The type the card is written as: the explicit type if there is one,
        otherwise the type implied by the value.
        """

        if self._type is not None:
            return self._type

        value = self._value
        if value is None:
            if self.keyword in self._commentary_keywords:
                return COMMENT
            return None
        # must be before int checking since bool is also int
        elif isinstance(value, (bool, np.bool_)):
            return LOGICAL
        elif _is_int(value):
            return INT
        elif isinstance(value, (float, np.floating)):
            return FLOAT
        return STRING

    @property
    def image(self):
        if self._image is None or self._modified:
            self._image = self._formatimage()
            self._modified = False
        return self._image

    @classmethod
    def fromstring(cls, image):
        """
        Construct an `Item` from a card image.  Images shorter than 80
        columns are padded with blanks.

        The image is kept as it is, so an item that is not modified renders
        back to exactly the image it was read from.
        """

        if not isinstance(image, str):
            raise ValueError('Card image %r is not a string.' % (image,))

        image = _pad(image)
        item = cls()

        if image[:9].upper() == 'HIERARCH ' and '=' in image:
            keyword, valuecomment = image[9:].split('=', 1)
            item._keyword = keyword.strip().upper()
            item._parsevalue(valuecomment)
        else:
            keyword = image[:8].strip().upper()
            item._keyword = keyword
            if keyword == 'END':
                pass
            elif (keyword in cls._commentary_keywords or
                    image[8:9] != '='):
                item._type = COMMENT
                item._comment = image[8:].rstrip()
            else:
                item._parsevalue(image[9:])

        item._image = image
        item._modified = False
        return item

    def _parsevalue(self, valuecomment):
        """
        Extract the value, its type and the comment from the part of a card
        image following the value indicator.
        """

        m = self._value_NFSC_RE.match(valuecomment.rstrip())

        if m is None:
            warnings.warn(
                'Unparsable card (%s); the value is kept as text.'
                % self._keyword, FitsHeaderWarning)
            self._value = valuecomment.strip()
            self._type = STRING
            return

        if m.group('bool') is not None:
            self._value = m.group('bool') == 'T'
            self._type = LOGICAL
        elif m.group('strg') is not None:
            self._value = re.sub("''", "'", m.group('strg'))
            self._type = STRING
        elif m.group('numr') is not None:
            #  Check for numbers with leading 0s.
            numr = self._number_NFSC_RE.match(m.group('numr'))
            digt = numr.group('digt').translate(FIX_FP_TABLE2).replace(' ',
                                                                       '')
            if numr.group('sign') is None:
                sign = ''
            else:
                sign = numr.group('sign')
            self._value = _str_to_num(sign + digt)
            if isinstance(self._value, float):
                self._type = FLOAT
            else:
                self._type = INT

        comment = m.group('comm')
        if comment:
            self._comment = comment.rstrip()

    def _formatkeyword(self):
        if len(self.keyword) <= 8:
            return '%-8s' % self.keyword
        else:
            return 'HIERARCH %s ' % self.keyword

    def _formatvalue(self, kind):
        value = self._value
        if value is None:
            return ''

        if kind == STRING:
            value = str(value)
            # string value should occupy at least 8 columns, unless it is
            # a null string
            if value == '':
                return "''"
            val_str = "'%-8s'" % value.replace("'", "''")
            return '%-20s' % val_str
        elif kind == LOGICAL:
            return '%20s' % ('T' if value else 'F')

        try:
            if kind == INT:
                return '%20d' % int(value)
            return '%20s' % _format_float(float(value))
        except ValueError:
            raise ValueError('Value %r of keyword %s cannot be written as %s.'
                             % (value, self.keyword, kind))

    def _formatimage(self):
        kind = self.kind

        if kind == COMMENT:
            output = '%-8s%s' % (self.keyword, self._comment or '')
            if len(output) > self.length:
                warnings.warn('Comment card is too long and is truncated.',
                              FitsHeaderWarning)
                output = output[:self.length]
            return '%-80s' % output
        elif (self.keyword == 'END' and self._value is None and
                not self._comment):
            return '%-80s' % 'END'

        keywordvalue = ''.join([self._formatkeyword(), '= ',
                                self._formatvalue(kind)])
        if self._comment:
            comment = ' / %s' % self._comment
        else:
            comment = ''
        output = keywordvalue + comment

        if len(output) <= self.length:
            output = '%-80s' % output
        elif len(keywordvalue) <= self.length:
            warnings.warn('Card is too long, comment is truncated.',
                          FitsHeaderWarning)
            output = output[:self.length]
        else:
            warnings.warn('The value of keyword %s is too long for a single '
                          'card; the card image is longer than %d columns.'
                          % (self.keyword, self.length), FitsHeaderWarning)
            output = keywordvalue.rstrip()
        return output


def _format_float(value):
    """Format a floating number to make sure it gets the decimal point."""

    value_str = '%.16G' % value
    if '.' not in value_str and 'E' not in value_str:
        value_str += '.0'

    # Limit the value string to at most 20 characters.
    str_len = len(value_str)

    if str_len > 20:
        idx = value_str.find('E')

        if idx < 0:
            value_str = value_str[:20]
        else:
            value_str = value_str[:20 - (str_len - idx)] + value_str[idx:]

    return value_str
