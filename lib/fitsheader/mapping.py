from collections.abc import MutableMapping

from fitsheader import core
from fitsheader.item import COMMENT, STRING, Item
from fitsheader.util import InvalidValueError, isscalar


__all__ = ['HeaderMapping', 'KeywordIterator']


class HeaderMapping(MutableMapping):
    """
    Presents a `Header` as a dictionary from keywords to values.

    Keywords are case-insensitive; they are translated to upper case.  Values
    are the values of the cards, except for comment cards (the keywords in
    ``fitsheader.core.COMMENT_KEYWORDS``, COMMENT and HISTORY by default),
    whose comment text is the value.  The comments of other cards cannot be
    reached through the mapping.

    A value stored here may be spread over several cards with the same
    keyword:

    - a string with several lines is stored one card per line;
    - a list or tuple is stored one card per element;
    - a line longer than ``fitsheader.core.MAX_VALUE_LENGTH`` characters is
      cut into pieces, each ending with a backslash, one card per piece.

    Reading the keyword joins the cards back together with newlines and drops
    the backslash continuations.  Comment cards get a newline appended, so
    that::

        hdr['HISTORY'] += 'Added multi-line string support'

    adds a new HISTORY card, while ``hdr['TELESCOP'] += ' dome B'`` only
    modifies the existing TELESCOP card.

    Values with more than one card are always stored as strings.  To store a
    single string card holding a value that could be mistaken for a number,
    wrap it in a list: ``hdr['NUMSTR'] = ['123']``.

    A continued piece is quoted on its card, and with the quotes a full
    ``MAX_VALUE_LENGTH`` piece renders wider than 80 columns.  Such cards are
    kept in memory with a warning, but `FileBackend.write` refuses them, and
    they do not survive a ``Header.fromstring(header.stringify())`` round
    trip.  Lower ``MAX_VALUE_LENGTH`` (see `fitsheader.core`) to write long
    values to a file.

    The mapping holds no data of its own; every change is made to the
    underlying header.
    """

    def __init__(self, header):
        self._header = header
        self._cursor = None

    def __repr__(self):
        return '<%s of %r>' % (self.__class__.__name__, self._header)

    @property
    def header(self):
        """The `Header` this mapping is a view of."""

        return self._header

    def __getitem__(self, keyword):
        if not isinstance(keyword, str):
            raise KeyError('Keyword %r not found.' % (keyword,))
        keyword = keyword.upper()
        item = self._header.firstitem(keyword)
        if item is None:
            raise KeyError('Keyword %r not found.' % keyword)

        is_comment = item.kind == COMMENT
        if is_comment:
            values = self._header.comment(keyword)
        else:
            values = self._header.value(keyword)

        if len(values) <= 1:
            out = values[0]
        else:
            out = '\n'.join(_tostring(v) for v in values)
            # Drop the line continuations put in by __setitem__
            out = out.replace('\\\n', '')

        if is_comment:
            out = _tostring(out) + '\n'
        return out

    def __setitem__(self, keyword, value):
        keyword = keyword.upper()
        values = _splitvalue(value)
        forcestring = len(values) > 1 or isinstance(value, (list, tuple))
        is_comment_keyword = keyword in core.COMMENT_KEYWORDS
        if is_comment_keyword:
            values = [_tostring(v) for v in values]

        items = self._header.itembyname(keyword)

        # New items are made before the header is touched, so that a bad
        # keyword leaves it unchanged
        new_items = []
        for _ in range(len(values) - len(items)):
            item = Item(keyword)
            if is_comment_keyword or (items and items[0].kind == COMMENT):
                item.type = COMMENT
            new_items.append(item)

        # Remove extra items, starting from the last one
        if len(items) > len(values):
            indices = self._header.index(keyword)
            for idx in reversed(indices[len(values):]):
                self._header.remove(idx)
            del items[len(values):]

        for item in new_items:
            self._header.insert(self._appendindex(), item)
            items.append(item)

        for item, line in zip(items, values):
            if is_comment_keyword:
                item.type = COMMENT
                item.comment = line
            else:
                item.type = STRING if forcestring else None
                item.value = line

    def __delitem__(self, keyword):
        if keyword not in self:
            raise KeyError('Keyword %r not found.' % (keyword,))
        self.delete(keyword)

    def __contains__(self, keyword):
        if not isinstance(keyword, str):
            return False
        return bool(self._header.index(keyword))

    def __iter__(self):
        return KeywordIterator(self._header)

    def __len__(self):
        return len(set(item.keyword for item in self._header))

    def delete(self, keyword):
        """
        Removes all the cards with the given keyword, and returns them; the
        list is empty if there were none.
        """

        return self._header.removebyname(keyword)

    def clear(self):
        """Removes all the cards of the header."""

        self._header.clear()
        self._cursor = None

    def firstkey(self):
        """
        Starts an enumeration of the keywords of the header, and returns the
        first keyword, or None if the header is empty.  Use `nextkey` for the
        following keywords.

        The mapping has a single enumeration cursor; use ``iter(mapping)`` for
        independent enumerations.  Modifying the header while enumerating it
        invalidates the enumeration, which must then be restarted.
        """

        self._cursor = KeywordIterator(self._header)
        return self.nextkey()

    def nextkey(self):
        """
        Returns the next keyword of the enumeration started by `firstkey`, or
        None when all the keywords have been returned.
        """

        if self._cursor is None:
            return None
        return next(self._cursor, None)

    def _appendindex(self):
        """
        Position at which new cards are added: the end of the header, but
        ahead of a closing END card.
        """

        last = len(self._header) - 1
        if last >= 0 and self._header.keyword(last) == 'END':
            return last
        return last + 1


class KeywordIterator(object):
    """
    Iterates over the distinct keywords of a `Header` in the order of their
    first appearance; the later cards of a keyword with several cards are
    skipped.
    """

    def __init__(self, header):
        self._header = header
        self._index = -1
        self._seen = set()

    def __iter__(self):
        return self

    def __next__(self):
        while True:
            self._index += 1
            keyword = self._header.keyword(self._index)
            if keyword is None:
                raise StopIteration
            if keyword not in self._seen:
                self._seen.add(keyword)
                return keyword


def _tostring(value):
    if value is None:
        return ''
    return str(value)


def _splitvalue(value):
    """
    Breaks a value down into the list of values to store, one per card.
    """

    maxlen = core.MAX_VALUE_LENGTH

    if isinstance(value, (list, tuple)):
        lines = [_tostring(v) for v in value]
        for v in value:
            if not isscalar(v):
                raise InvalidValueError(
                    "Can't put nested values into a FITS header: %r"
                    % (value,))
    elif not isscalar(value):
        raise InvalidValueError(
            "Can't put %s values into a FITS header; only scalars and lists "
            "are supported." % type(value).__name__)
    elif isinstance(value, str) and '\n' in value:
        lines = value.split('\n')
        # Like a line-oriented split, trailing empty lines are dropped
        while lines and not lines[-1]:
            lines.pop()
    elif len(_tostring(value)) > maxlen:
        lines = [_tostring(value)]
    else:
        # The normal case; a single card
        return [value]

    # Cut up really long lines
    values = []
    for line in lines:
        while len(line) > maxlen:
            values.append(line[:maxlen - 1] + '\\')
            line = line[maxlen - 1:]
        values.append(line)
    return values
