# This is the configuration file for the fitsheader namespace.

from fitsheader import core
from fitsheader.backend import CardBackend, FileBackend, FITSIOError
from fitsheader.header import Header
from fitsheader.item import (Item, STRING, LOGICAL, INT, FLOAT, COMMENT,
                             TYPES)
from fitsheader.mapping import HeaderMapping, KeywordIterator
from fitsheader.util import (FitsHeaderWarning, InvalidArgumentError,
                             InvalidValueError)

__version__ = '1.0.0'

__doc__ = core.__doc__

__all__ = ['CardBackend', 'FileBackend', 'FITSIOError', 'Header', 'Item',
           'STRING', 'LOGICAL', 'INT', 'FLOAT', 'COMMENT', 'TYPES',
           'HeaderMapping', 'KeywordIterator', 'FitsHeaderWarning',
           'InvalidArgumentError', 'InvalidValueError', 'core']
