"""
A Field is "fundamental" datatype from the format point of view, something
directly unpackable from the stream.

The carrier file is made of ASCII fixed width fields, so we need only three
flavours of them: raw strings, decimal numbers and filler to skip.
"""
import logging

from .enum import LayoutMode
from .meta import FieldBase
from .properties import Dependency, ChunkPhase, PropertyDescriptor
from .exceptions import (
    DecodeException,
    NotANumberException,
    UnknownLayoutCodeException,
)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = None

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def value_from_default(self):
        if self.default is not None:
            return self.default

        # the length can be known only when unpacking
        return b'' if isinstance(self.__dict__['length'], Dependency) else b' ' * self.length

    def __str__(self):
        return self.text

    @property
    def text(self):
        '''The value as it is in the file, latin1 never fails'''
        return self.value.decode('latin1')

    def _get_size(self):
        return len(self.value) if self._phase == ChunkPhase.DONE else self.length

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()
        try:
            length = self.length
        except DecodeException as e:
            e.offset = self.offset
            raise

        self.logger.debug('reading %d bytes at offset %d for \'%s\'' % (length, self.offset, self.name))
        self.value = stream.read_exact(length)
        self._phase = ChunkPhase.DONE


class NumericField(StringField):
    """Unsigned decimal number written with ASCII digits, left padded with zeros."""

    def value_from_default(self):
        return self.default or 0

    def __str__(self):
        return str(self.value)

    def _get_size(self):
        return self.length

    def _get_raw(self):
        raw = b'%0*d' % (self.length, self.value)
        if len(raw) != self.length:
            raise ValueError(f'{self.value} does not fit in {self.length} digits')

        return raw

    def unpack(self, stream):
        super().unpack(stream)

        raw = self.value
        # isdigit() on bytes considers only ASCII digits
        if not raw.isdigit():
            raise NotANumberException(
                chain=[],
                message=f'{raw!r} is not a decimal number',
                offset=self.offset,
            )

        self.value = int(raw)


class FillerField(Field):
    """Reserved bytes: they are skipped and never kept in memory."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n, **kw):
        self.length = n
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.length)

    def _get_size(self):
        return self.length

    def _get_raw(self):
        return b' ' * self.length

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()
        try:
            length = self.length
        except DecodeException as e:
            e.offset = self.offset
            raise

        self.logger.debug('skipping %d bytes at offset %d' % (length, self.offset))
        stream.discard_exact(length)
        self._phase = ChunkPhase.DONE


class LayoutCodeField(StringField):
    """The 4 bytes record size code of the file header: it decides the layout
    mode for the whole file so an unknown code stops the decoding."""

    def __init__(self, **kw):
        super().__init__(4, **kw)

    @property
    def mode(self):
        return LayoutMode.from_code(self.value)

    def unpack(self, stream):
        super().unpack(stream)

        if self.mode == LayoutMode.UNKNOWN:
            raise UnknownLayoutCodeException(
                chain=[],
                message=f'record size code {self.value!r} is neither fixed (0256) nor variable (0090)',
                offset=self.offset,
            )
