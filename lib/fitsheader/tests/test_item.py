import numpy as np
import pytest

from fitsheader.item import (Item, STRING, LOGICAL, INT, FLOAT, COMMENT)
from fitsheader.tests import FitsHeaderTestCase
from fitsheader.util import FitsHeaderWarning, _pad


class TestItemFunctions(FitsHeaderTestCase):
    def test_string_value_card(self):
        item = Item('FOO', 'BAR')
        assert item.image == _pad("FOO     = 'BAR     '")
        assert str(item) == item.image
        assert item.kind == STRING
        assert item.type is None

    def test_keyword_is_upper_cased(self):
        item = Item('naxis', 2)
        assert item.keyword == 'NAXIS'
        assert item.image == _pad('NAXIS   =                    2')

    def test_assign_boolean(self):
        """Python and Numpy boolean values make logical cards."""

        fooimg = _pad('FOO     =                    T')
        barimg = _pad('BAR     =                    F')
        assert Item('FOO', True).image == fooimg
        assert Item('BAR', False).image == barimg
        assert Item('FOO', np.bool_(True)).image == fooimg
        assert Item('BAR', np.bool_(False)).kind == LOGICAL

    def test_numeric_kinds(self):
        assert Item('A', 1).kind == INT
        assert Item('A', np.int32(1)).kind == INT
        assert Item('A', 1.5).kind == FLOAT
        assert Item('A', np.float32(1.5)).kind == FLOAT
        assert Item('BSCALE', 1.0).image == \
            _pad('BSCALE  =                  1.0')

    def test_comment_field(self):
        item = Item('OBJECT', 'M31', 'target')
        assert item.image == _pad("OBJECT  = 'M31     '           / target")

    def test_explicit_string_type(self):
        """An explicit STRING type writes a number as a quoted string."""

        item = Item('NUMSTR', 123, type='string')
        assert item.type == STRING
        assert item.image == _pad("NUMSTR  = '123     '")

        item.type = None
        assert item.image == _pad('NUMSTR  =                  123')

    def test_explicit_type_mismatch(self):
        item = Item('FOO', 'abc', type=INT)
        with pytest.raises(ValueError):
            item.image

    def test_illegal_values(self):
        pytest.raises(ValueError, Item, 'FOO', [1, 2])
        pytest.raises(ValueError, Item, 'FOO', {'a': 1})
        pytest.raises(ValueError, Item, 'FOO', 1, type='COMPLEX')
        pytest.raises(ValueError, Item, 'FOO BAR', 1)
        pytest.raises(ValueError, Item, 'FOO', 1, 2)

    def test_keyword_cannot_be_modified(self):
        item = Item('FOO', 1)
        with pytest.raises(AttributeError):
            item.keyword = 'BAR'

    def test_hierarch_keyword(self):
        with pytest.warns(FitsHeaderWarning):
            item = Item('ESO DET CHIP', 1)
        assert item.keyword == 'ESO DET CHIP'
        assert item.image.startswith('HIERARCH ESO DET CHIP = ')

        # No warning when asked for explicitly
        item = Item('HIERARCH ESO DET CHIP', 1)
        assert item.keyword == 'ESO DET CHIP'

    def test_blank_and_commentary_cards(self):
        assert Item().image == ' ' * 80
        assert Item().kind == COMMENT

        item = Item('HISTORY', comment='Flat fielded')
        assert item.kind == COMMENT
        assert item.image == _pad('HISTORY Flat fielded')

        item = Item('NOTE', comment='text', type='COMMENT')
        assert item.image == _pad('NOTE    text')

    def test_end_card(self):
        assert Item('END').image == _pad('END')

    def test_long_comment_is_truncated(self):
        item = Item('FOO', 'BAR', 'x' * 80)
        with pytest.warns(FitsHeaderWarning):
            image = item.image
        assert len(image) == 80
        assert image.startswith("FOO     = 'BAR     '")

    def test_long_commentary_card_is_truncated(self):
        item = Item('HISTORY', comment='y' * 80)
        with pytest.warns(FitsHeaderWarning):
            image = item.image
        assert image == 'HISTORY ' + 'y' * 72

    def test_long_string_value_is_kept(self):
        value = 'x' * 70
        item = Item('TELESCOP', value, 'dropped')
        with pytest.warns(FitsHeaderWarning):
            image = item.image
        assert image == "TELESCOP= '%s'" % value

    def test_image_is_updated_on_modification(self):
        item = Item('FOO', 1)
        assert item.image == _pad('FOO     =                    1')
        item.value = 2
        item.comment = 'two'
        assert item.image == _pad('FOO     =                    2 / two')


class TestItemParsing(FitsHeaderTestCase):
    def test_parse_float(self):
        item = Item.fromstring(
            'EXPTIME =                 30.5 / exposure time in seconds')
        assert item.keyword == 'EXPTIME'
        assert item.value == 30.5
        assert item.type == FLOAT
        assert item.comment == 'exposure time in seconds'

    def test_parse_integer_with_leading_zeros(self):
        item = Item.fromstring('NAXIS1  =                  007')
        assert item.value == 7
        assert item.type == INT

    def test_parse_d_exponent(self):
        item = Item.fromstring('VAL     =               1.5D+02')
        assert item.value == 150.0
        assert item.type == FLOAT

    def test_parse_logical(self):
        item = Item.fromstring('SIMPLE  =                    F')
        assert item.value is False
        assert item.type == LOGICAL

    def test_parse_string(self):
        item = Item.fromstring("OBSERVER= 'O''Brien '  / who")
        assert item.value == "O'Brien"
        assert item.type == STRING
        assert item.comment == 'who'

        item = Item.fromstring("EMPTY   = ''")
        assert item.value == ''
        assert item.type == STRING

    def test_parse_numeric_looking_string(self):
        item = Item.fromstring("NUMSTR  = '123     '")
        assert item.value == '123'
        assert item.type == STRING

    def test_parse_undefined_value(self):
        item = Item.fromstring('UNDEF   =                      / no value')
        assert item.value is None
        assert item.type is None
        assert item.comment == 'no value'

    def test_parse_commentary(self):
        item = Item.fromstring('HISTORY Created with printf')
        assert item.keyword == 'HISTORY'
        assert item.type == COMMENT
        assert item.comment == 'Created with printf'
        assert item.value is None

        item = Item.fromstring('        blank keyword text')
        assert item.keyword == ''
        assert item.type == COMMENT

    def test_parse_end(self):
        item = Item.fromstring('END')
        assert item.keyword == 'END'
        assert item.value is None
        assert item.type is None

    def test_parse_hierarch(self):
        item = Item.fromstring('HIERARCH ESO DET CHIP = 3 / chip')
        assert item.keyword == 'ESO DET CHIP'
        assert item.value == 3
        assert item.comment == 'chip'

    def test_unparsable_value(self):
        with pytest.warns(FitsHeaderWarning):
            item = Item.fromstring('BAD     = this is not valid')
        assert item.value == 'this is not valid'
        assert item.type == STRING

    def test_unmodified_image_is_kept(self):
        image = _pad('EXPTIME =  3.05E1  /   odd spacing')
        item = Item.fromstring(image)
        assert item.value == 30.5
        assert item.image == image

        item.value = 31.0
        assert item.image == _pad('EXPTIME =                 31.0 / '
                                  'odd spacing')

    def test_short_image_is_padded(self):
        item = Item.fromstring('FOO     = 1')
        assert len(item.image) == 80

    def test_non_string_image(self):
        pytest.raises(ValueError, Item.fromstring, 42)
