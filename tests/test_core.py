import pytest

from x9image.core import Chunk
from x9image.enum import LayoutMode
from x9image.exceptions import TruncatedException
from x9image.fields import StringField, NumericField, FillerField
from x9image.meta import Meta
from x9image.properties import LayoutDependency


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StringField(4, default=b'1201')
        b = NumericField(0x10)
        c = StringField(2, default=b'XY')

    dummy = Dummy()

    assert dummy.a.size == 4
    assert dummy.a.raw == b'1201'
    assert dummy.a.father == dummy

    assert dummy.b.size == 0x10
    assert dummy.b.raw == b'0' * 0x10

    assert dummy.size == 0x16
    assert len(dummy.raw) == dummy.size
    assert dummy.raw == b'1201' + b'0' * 0x10 + b'XY'


def test_meta():
    class Dummy(Chunk):
        field = StringField(1)

    class Dummy2(Chunk):
        field2 = StringField(1)

    d = Dummy()
    d2 = Dummy2()

    assert isinstance(d._meta, Meta)
    assert d._meta.fields == ['field']
    assert isinstance(d.field, StringField)
    assert d2._meta.fields == ['field2']


def test_fields_are_per_instance():
    class Dummy(Chunk):
        field = StringField(3)

    first = Dummy(b'AAA')
    second = Dummy(b'BBB')

    assert first.field is not second.field
    assert first.field.value == b'AAA'
    assert second.field.value == b'BBB'


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = NumericField(4)

    class Son(Father):
        field_c = StringField(0x08)

    son = Son(b'A' * 16 + b'0042' + b'ABCDEFGH')

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]
    assert son.field_b.value == 42
    assert son.field_c.value == b'ABCDEFGH'


def test_offset_basic():
    '''Test that the offset is handled correctly in basic case'''
    class Dummy(Chunk):
        field1 = StringField(0x2)
        field2 = StringField(0x3)

    dummy = Dummy(b'\x01\x02\x0a\x0b\x0c')

    assert dummy.field1.value == b'\x01\x02'
    assert dummy.field2.value == b'\x0a\x0b\x0c'
    assert dummy.field_layout == {
        'field1': (0, 2),
        'field2': (2, 3),
    }


def test_field_layout_with_layout_dependent_filler():
    '''the filler length comes from the layout mode of the root chunk'''
    class Dummy(Chunk):
        tag    = StringField(4)
        filler = FillerField(LayoutDependency(fixed=6, variable=2))

    dummy = Dummy(b'1204' + b' ' * 6, layout_mode=LayoutMode.FIXED)

    assert dummy.size == 10
    assert dummy.field_layout == {
        'tag': (0, 4),
        'filler': (4, 6),
    }

    dummy = Dummy(b'1204' + b' ' * 2, layout_mode=LayoutMode.VARIABLE)

    assert dummy.size == 6
    assert dummy.field_layout['filler'] == (4, 2)


def test_layout_mode_reaches_nested_chunks():
    class Inner(Chunk):
        filler = FillerField(LayoutDependency(fixed=3, variable=1))

    class Outer(Chunk):
        inner = Inner()
        last  = StringField(1)

    outer = Outer(b'123X', layout_mode=LayoutMode.FIXED)
    assert outer.last.value == b'X'

    outer = Outer(b'1X', layout_mode=LayoutMode.VARIABLE)
    assert outer.last.value == b'X'


def test_error_chain():
    class Inner(Chunk):
        number = StringField(15)

    class Outer(Chunk):
        tag   = StringField(4)
        inner = Inner()

    with pytest.raises(TruncatedException) as excinfo:
        Outer(b'1201000')

    assert excinfo.value.chain == ['number', 'inner']
    assert 'inner.number' in str(excinfo.value)


def test_duplicated_field():
    class Dummy(Chunk):
        field = StringField(1)

    with pytest.raises(AttributeError):
        Dummy.add_to_class('field', StringField(2))
