from collections import defaultdict

from fitsheader.item import Item
from fitsheader.util import (CARD_LENGTH, InvalidArgumentError,
                             _normalize_index)


__all__ = ['Header']


class Header(object):
    """
    FITS header class.

    A `Header` stores the cards of a FITS header block as an ordered list of
    `Item` objects, in the order they appear on disk, together with a lookup
    table from each keyword to the list of positions at which it occurs.
    Keywords may be repeated (COMMENT and HISTORY cards usually are), in which
    case the cards keep their relative order.

    Cards are looked up either by position or by keyword.  Lookups that find
    nothing return None (or an empty list), never raise.

    A `Header` is not safe to share between threads without external locking:
    every method needs exclusive access to the header for the duration of the
    call.
    """

    def __init__(self, cards=None, items=None):
        """
        Construct a `Header` from a list of card images or from a list of
        `Item` objects.

        Parameters
        ----------
        cards : list of str (optional)
            Card images, each decoded into a new `Item`.

        items : list of `Item` (optional)
            Items to use as they are; they are not copied.
        """

        self._items = []
        self._lookup = {}
        self.configure(cards=cards, items=items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __contains__(self, keyword):
        return _upper(keyword) in self._lookup

    def __str__(self):
        return self.stringify()

    def __repr__(self):
        return '<%s with %d cards>' % (self.__class__.__name__, len(self))

    @property
    def mapping(self):
        """A dictionary view of this header; see `HeaderMapping`."""

        from fitsheader.mapping import HeaderMapping
        return HeaderMapping(self)

    @classmethod
    def fromstring(cls, data):
        """
        Creates a `Header` from a string containing the concatenated 80
        column card images of a header, as stored in a FITS file.  Cards
        following an END card are ignored.

        Parameters
        ----------
        data : str
           String containing the entire header.
        """

        cards = []
        for idx in range(0, len(data), CARD_LENGTH):
            image = data[idx:idx + CARD_LENGTH]
            cards.append(image)
            if image[:8].rstrip() == 'END':
                break
        return cls(cards=cards)

    @classmethod
    def frombackend(cls, backend):
        """
        Creates a `Header` from the card images supplied by a backend (see
        `fitsheader.backend`).  If the backend cannot be read the error is
        raised and no header is created.
        """

        return cls(cards=backend.read())

    def tobackend(self, backend):
        """Writes the card images of this header to a backend."""

        backend.write(self.cards())

    def configure(self, cards=None, items=None):
        """
        Replaces the contents of the header with the given card images, or
        failing that, with the given `Item` objects.  Does nothing if neither
        is supplied.
        """

        if cards is not None:
            # Decode every card before touching the header, so that a bad
            # card leaves the header as it was
            new_items = [Item.fromstring(card) for card in cards]
        elif items is not None:
            new_items = list(items)
            for item in new_items:
                _check_item(item)
        else:
            return

        self._items = new_items
        self._rebuild_lookup()

    def item(self, index):
        """
        Returns the `Item` at the given position, or None if there is no such
        position.  Negative positions count from the end.
        """

        index = _normalize_index(index, len(self._items))
        if index is None:
            return None
        return self._items[index]

    def keyword(self, index):
        """Returns the keyword of the card at the given position, or None."""

        item = self.item(index)
        if item is None:
            return None
        return item.keyword

    def itembyname(self, keyword):
        """
        Returns a list of all the items with the given keyword, in header
        order; the list is empty if the keyword does not exist.
        """

        return [self._items[idx] for idx in self.index(keyword)]

    def firstitem(self, keyword):
        """
        Returns the first item with the given keyword, or None if the keyword
        does not exist.
        """

        indices = self.index(keyword)
        if not indices:
            return None
        return self._items[indices[0]]

    def index(self, keyword):
        """
        Returns the ascending list of positions of the cards with the given
        keyword, or an empty list if it does not exist.
        """

        return list(self._lookup.get(_upper(keyword), []))

    def value(self, keyword):
        """Returns the values of all the cards with the given keyword."""

        return [item.value for item in self.itembyname(keyword)]

    def comment(self, keyword):
        """Returns the comments of all the cards with the given keyword."""

        return [item.comment for item in self.itembyname(keyword)]

    def insert(self, index, item):
        """
        Inserts an `Item` before the given position.  The position may equal
        the length of the header, to append, or be negative to count from the
        end.

        The item is not copied: inserting the same item more than once means
        that future modifications to it will show at each position.
        """

        _check_item(item)
        position = _normalize_index(index, len(self._items), allow_end=True)
        if position is None:
            raise InvalidArgumentError(
                'Insert position %d is out of range for a header of %d cards.'
                % (index, len(self._items)))

        self._items.insert(position, item)
        self._rebuild_lookup()

    def append(self, item):
        """Appends an `Item` to the end of the header."""

        self.insert(len(self._items), item)

    def replace(self, index, item):
        """
        Replaces the card at the given position with `item`, and returns the
        replaced card.
        """

        _check_item(item)
        position = _normalize_index(index, len(self._items))
        if position is None:
            raise InvalidArgumentError(
                'Header index %d is out of range for a header of %d cards.'
                % (index, len(self._items)))

        old = self._items[position]
        self._items[position] = item
        self._rebuild_lookup()
        return old

    def remove(self, index):
        """
        Removes the card at the given position and returns it, or returns None
        if there is no such position.
        """

        position = _normalize_index(index, len(self._items))
        if position is None:
            return None

        item = self._items.pop(position)
        self._rebuild_lookup()
        return item

    def replacebyname(self, keyword, item):
        """
        Replaces every card with the given keyword with `item`, and returns
        the list of replaced cards.

        Note that the same `item` instance ends up at each of the positions,
        so a later change to it shows up at all of them.
        """

        _check_item(item)
        replaced = []
        for idx in self.index(keyword):
            replaced.append(self._items[idx])
            self._items[idx] = item
        self._rebuild_lookup()
        return replaced

    def removebyname(self, keyword):
        """
        Removes every card with the given keyword, and returns the removed
        cards in their original order.
        """

        indices = self.index(keyword)
        removed = [self._items[idx] for idx in indices]
        for idx in reversed(indices):
            del self._items[idx]
        self._rebuild_lookup()
        return removed

    def splice(self, offset=None, length=None, items=None):
        """
        Implements a standard splice operation on the cards of the header.

        Removes ``length`` cards starting at ``offset`` and puts ``items`` (if
        given) in their place.  A negative offset counts from the end of the
        header.  If ``length`` is omitted everything from ``offset`` onwards
        is removed; a negative ``length`` leaves that many cards at the end.
        If both are omitted the header is emptied.

        Returns the list of removed cards; the last removed card is
        ``header.splice(...)[-1]``.
        """

        nitems = len(self._items)
        if offset is None:
            offset = 0
        start = _normalize_index(offset, nitems, allow_end=True)
        if start is None:
            raise InvalidArgumentError(
                'Splice offset %d is out of range for a header of %d cards.'
                % (offset, nitems))

        if length is None:
            stop = nitems
        elif length < 0:
            stop = max(start, nitems + length)
        else:
            stop = min(nitems, start + length)

        if items is None:
            items = []
        else:
            items = list(items)
            for item in items:
                _check_item(item)

        removed = self._items[start:stop]
        self._items[start:stop] = items
        self._rebuild_lookup()
        return removed

    def clear(self):
        """Removes all cards from the header."""

        self._items = []
        self._rebuild_lookup()

    def cards(self):
        """Returns the header as a list of card images."""

        return [str(item) for item in self._items]

    def allitems(self):
        """
        Returns the header as a list of `Item` objects; these are the items
        of the header themselves, not copies.
        """

        return list(self._items)

    def stringify(self):
        """
        Returns the header as a single string: the card images separated by
        newlines, with a trailing newline.
        """

        return '\n'.join(self.cards()) + '\n'

    def _rebuild_lookup(self):
        """
        Rebuilds the keyword lookup table from scratch after the list of
        cards was modified.  This is simpler than shifting the positions of
        all the cards following the modified one.
        """

        lookup = defaultdict(list)
        for idx, item in enumerate(self._items):
            lookup[item.keyword].append(idx)
        self._lookup = dict(lookup)


def _upper(keyword):
    if keyword is None:
        return None
    return keyword.upper()


def _check_item(item):
    if not isinstance(item, Item):
        raise InvalidArgumentError(
            'Header cards must be Item objects; got: %r' % (item,))
