"""
Backends supply the card images of a header from some medium, and write a
replacement list of card images back to it.

A backend's ``read()`` returns the full ordered list of card images,
including the closing END card, and ``write(cards)`` replaces the persisted
header with the given card images.  Failures are reported as `FITSIOError`,
carrying a status code.
"""

import errno
import os
import tempfile

from fitsheader.util import BLOCK_SIZE, CARD_LENGTH, _pad_length


__all__ = ['CardBackend', 'FileBackend', 'FITSIOError', 'END_CARD',
           'BLANK_CARD']


END_CARD = 'END' + ' ' * (CARD_LENGTH - 3)
BLANK_CARD = ' ' * CARD_LENGTH

# Status codes of FITSIOError, for failures not coming from the system
HEADER_NOT_FOUND = -1  # the file does not start with a FITS header
END_NOT_FOUND = -2  # the file ends before the END card of the header


class FITSIOError(IOError):
    """
    Raised when a backend fails to open, read or write its medium.  The
    ``status`` attribute holds the system error number, or one of the
    negative status codes of this module.
    """

    def __init__(self, status, message, filename=None):
        super(FITSIOError, self).__init__(message)
        self.status = status
        self.filename = filename

    def __str__(self):
        if self.filename:
            return 'Error %d on %s: %s' % (self.status, self.filename,
                                           self.args[0])
        return 'Error %d: %s' % (self.status, self.args[0])


class CardBackend(object):
    """Base class of the header backends."""

    def read(self):
        """Returns the list of card images of the header."""

        raise NotImplementedError

    def write(self, cards):
        """Replaces the persisted header with the given card images."""

        raise NotImplementedError


class FileBackend(CardBackend):
    """
    The primary header of a FITS file.

    Parameters
    ----------
    fileobj : file path or binary file object
        The FITS file.  A file object must be opened for reading, and also for
        writing (``'rb+'``) to use `write`; it is not closed by the backend.

    On write the header is padded with blank cards to a whole number of 2880
    byte blocks and the data following the old header is preserved.  When a
    path is given the file is replaced in a single rename, so a failed write
    leaves the old file in place; a file object is rewritten in place, and a
    failed write may leave it partially written.
    """

    def __init__(self, fileobj):
        if isinstance(fileobj, str):
            self.name = fileobj
            self._fileobj = None
        else:
            self.name = getattr(fileobj, 'name', None)
            self._fileobj = fileobj

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__,
                           self.name or self._fileobj)

    def read(self):
        if self._fileobj is not None:
            self._fileobj.seek(0)
            cards, _ = self._readheader(self._fileobj)
            return cards

        with self._open('rb') as fileobj:
            cards, _ = self._readheader(fileobj)
        return cards

    def write(self, cards):
        cards = list(cards)
        for card in cards:
            if len(card) > CARD_LENGTH:
                raise FITSIOError(
                    errno.EINVAL,
                    'Card image longer than %d columns cannot be written: %r'
                    % (CARD_LENGTH, card), self.name)
        if not cards or cards[-1][:8].rstrip() != 'END':
            cards.append(END_CARD)

        data = ''.join(card.ljust(CARD_LENGTH) for card in cards)
        data += BLANK_CARD * (_pad_length(len(data)) // CARD_LENGTH)
        try:
            block = data.encode('ascii')
        except UnicodeEncodeError:
            raise FITSIOError(errno.EINVAL,
                              'Card images must be plain ASCII text.',
                              self.name)

        if self._fileobj is not None:
            self._fileobj.seek(0)
            _, size = self._readheader(self._fileobj, missing_ok=True)
            self._fileobj.seek(size)
            rest = self._fileobj.read()
            try:
                self._fileobj.seek(0)
                self._fileobj.write(block)
                self._fileobj.write(rest)
                self._fileobj.truncate()
                self._fileobj.flush()
            except (IOError, OSError) as exc:
                raise FITSIOError(exc.errno or errno.EIO, str(exc), self.name)
            return

        if os.path.exists(self.name):
            with self._open('rb') as fileobj:
                _, size = self._readheader(fileobj, missing_ok=True)
                fileobj.seek(size)
                rest = fileobj.read()
        else:
            rest = b''

        dirname = os.path.dirname(os.path.abspath(self.name))
        tmpname = None
        try:
            fd, tmpname = tempfile.mkstemp(dir=dirname, suffix='.fits')
            with os.fdopen(fd, 'wb') as tmp:
                tmp.write(block)
                tmp.write(rest)
            os.replace(tmpname, self.name)
        except (IOError, OSError) as exc:
            if tmpname is not None and os.path.exists(tmpname):
                os.remove(tmpname)
            raise FITSIOError(exc.errno or errno.EIO, str(exc), self.name)

    def _open(self, mode):
        try:
            return open(self.name, mode)
        except (IOError, OSError) as exc:
            raise FITSIOError(exc.errno or errno.EIO, exc.strerror or
                              str(exc), self.name)

    def _readheader(self, fileobj, missing_ok=False):
        """
        Reads the card images of the header at the current position of the
        file, up to and including the END card.  Returns the card images and
        the size in bytes of the header blocks.

        With ``missing_ok`` an empty file is taken as having an empty header.
        """

        cards = []
        size = 0
        while True:
            try:
                block = fileobj.read(BLOCK_SIZE)
            except (IOError, OSError) as exc:
                raise FITSIOError(exc.errno or errno.EIO, str(exc), self.name)

            if not block and not cards and missing_ok:
                return [], 0
            if len(block) < BLOCK_SIZE:
                if not cards and not block:
                    raise FITSIOError(HEADER_NOT_FOUND,
                                      'Empty or corrupt FITS file.',
                                      self.name)
                raise FITSIOError(END_NOT_FOUND,
                                  'Header missing END card.', self.name)

            block = block.decode('ascii', 'replace')
            size += BLOCK_SIZE
            if not cards and block[:8] not in ('SIMPLE  ', 'XTENSION'):
                raise FITSIOError(HEADER_NOT_FOUND,
                                  'File does not start with a FITS header.',
                                  self.name)

            for idx in range(0, BLOCK_SIZE, CARD_LENGTH):
                card = block[idx:idx + CARD_LENGTH]
                cards.append(card)
                if card[:8].rstrip() == 'END':
                    return cards, size
