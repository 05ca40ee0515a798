import pytest

from x9image.core import Chunk
from x9image.enum import LayoutMode
from x9image.exceptions import (
    NotANumberException,
    TruncatedException,
    UnknownLayoutCodeException,
    LayoutException,
)
from x9image.fields import StringField, NumericField, FillerField, LayoutCodeField
from x9image.properties import Dependency, LayoutDependency
from x9image.streams import Stream


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert field.raw == b' ' * 0x10

    field.unpack(Stream(b'0123456789abcdefXX'))

    assert field.value == b'0123456789abcdef'
    assert field.text == '0123456789abcdef'
    assert field.offset == 0


def test_stringfield_needs_length():
    with pytest.raises(ValueError):
        StringField()

    assert StringField(default=b'TF01').length == 4


def test_numericfield():
    field = NumericField(4)

    assert field.value == 0
    assert field.raw == b'0000'

    field.unpack(Stream(b'0246'))

    assert field.value == 246
    assert field.size == 4
    assert field.raw == b'0246'


@pytest.mark.parametrize('raw', [b'12a4', b' 246', b'-246', b'\xd9\xd9\xd9\xd9'])
def test_numericfield_not_a_number(raw):
    field = NumericField(4)

    with pytest.raises(NotANumberException) as excinfo:
        field.unpack(Stream(raw))

    assert excinfo.value.offset == 0
    assert repr(raw) in str(excinfo.value)


def test_numericfield_offset():
    class Dummy(Chunk):
        tag   = StringField(4)
        count = NumericField(4)

    with pytest.raises(NotANumberException) as excinfo:
        Dummy(b'1201ABCD')

    assert excinfo.value.offset == 4
    assert excinfo.value.chain == ['count']


def test_fillerfield():
    class Dummy(Chunk):
        a      = StringField(2)
        filler = FillerField(3)
        b      = StringField(2)

    stream = Stream(b'ab   cd')
    dummy = Dummy(stream)

    assert dummy.a.value == b'ab'
    assert dummy.b.value == b'cd'
    assert dummy.filler.size == 3
    assert stream.tell() == 7


def test_stringfield_w_dependency():
    class TLV(Chunk):
        length = NumericField(4)
        data   = StringField(Dependency('.length'))
        extra  = StringField(2)

    tlv = TLV(b'0005helloZZ')

    assert tlv.data.value == b'hello'
    assert tlv.data.size == 5
    assert tlv.extra.value == b'ZZ'
    assert tlv.extra.offset == 9


def test_layout_dependency():
    class Dummy(Chunk):
        filler = FillerField(LayoutDependency(fixed=6, variable=2))

    stream = Stream(b'12345678')
    Dummy(stream, layout_mode=LayoutMode.FIXED)
    assert stream.tell() == 6

    stream = Stream(b'12345678')
    Dummy(stream, layout_mode=LayoutMode.VARIABLE)
    assert stream.tell() == 2


def test_layout_dependency_unresolved():
    class Dummy(Chunk):
        filler = FillerField(LayoutDependency(fixed=6, variable=2))

    stream = Stream(b'12345678')
    with pytest.raises(LayoutException):
        Dummy(stream)

    # nothing has been consumed
    assert stream.tell() == 0


def test_layoutcodefield():
    field = LayoutCodeField()

    field.unpack(Stream(b'0256'))
    assert field.mode == LayoutMode.FIXED

    field.unpack(Stream(b'0090'))
    assert field.mode == LayoutMode.VARIABLE

    with pytest.raises(UnknownLayoutCodeException):
        field.unpack(Stream(b'0128'))


def test_truncated_field():
    class Dummy(Chunk):
        a = StringField(4)
        b = StringField(15)

    with pytest.raises(TruncatedException) as excinfo:
        Dummy(b'1201000000')

    assert excinfo.value.chain == ['b']
    assert excinfo.value.offset == 4
