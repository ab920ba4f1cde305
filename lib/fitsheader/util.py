import numpy as np


__all__ = ['FitsHeaderWarning', 'InvalidArgumentError', 'InvalidValueError',
           'BLOCK_SIZE', 'CARD_LENGTH']


BLOCK_SIZE = 2880  # the FITS block size
CARD_LENGTH = 80  # the length of a single card image


class FitsHeaderWarning(UserWarning):
    pass


class InvalidArgumentError(ValueError):
    """
    Raised for malformed arguments to a structural mutation of a `Header`,
    such as a missing `Item` or a position outside of the header.
    """


class InvalidValueError(ValueError):
    """
    Raised when a value that is neither a scalar nor a list of scalars is
    stored through a `HeaderMapping`.
    """


def isscalar(value):
    """Returns True for the value kinds a card can hold (or None)."""

    return value is None or isinstance(value, (str, bool, int, float,
                                               np.bool_, np.integer,
                                               np.floating))


def _is_int(val):
    return isinstance(val, (int, np.integer)) and \
        not isinstance(val, (bool, np.bool_))


def _str_to_num(val):
    """Converts a given string to either an int or a float if necessary."""

    try:
        num = int(val)
    except ValueError:
        # If this fails then an exception should be raised anyways
        num = float(val)
    return num


def _pad(input):
    """Pad blank space to the input string to be multiple of 80."""

    _len = len(input)
    if _len == CARD_LENGTH:
        return input
    elif _len > CARD_LENGTH:
        strlen = _len % CARD_LENGTH
        if strlen == 0:
            return input
        else:
            return input + ' ' * (CARD_LENGTH - strlen)

    # minimum length is 80
    else:
        strlen = _len % CARD_LENGTH
        return input + ' ' * (CARD_LENGTH - strlen)


def _pad_length(stringlen):
    """Bytes needed to pad the input stringlen to the next FITS block."""

    return (BLOCK_SIZE - (stringlen % BLOCK_SIZE)) % BLOCK_SIZE


def _normalize_index(index, length, allow_end=False):
    """
    Resolves a possibly negative index into a sequence of the given length
    the way Python sequences do.  Returns None if the index is out of range;
    ``allow_end`` also accepts ``length`` itself (an append position).
    """

    if index < 0:
        index += length
    upper = length if allow_end else length - 1
    if index < 0 or index > upper:
        return None
    return index
