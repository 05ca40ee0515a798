"""
Core module for the abstraction of a record of the carrier file

"""
from typing import Tuple, List, Dict

from .enum import LayoutMode
from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import DecodeException
from .properties import ChunkPhase


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a record: its main attributes
    are offset and size that identify a Chunk inside the stream.

    A Chunk is decoded with respect to a layout mode (fixed or variable), since
    the same record has different filler lengths in the two conventions; the
    mode is passed to the root chunk and the fields look it up from there.

    A Chunk can contain sub-chunks.
    """

    def __init__(self, stream=None, layout_mode=LayoutMode.UNKNOWN, **kwargs):
        self._layout_mode = layout_mode
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if stream is not None:
            stream = stream if isinstance(stream, Stream) else Stream(stream)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self._meta.fields]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        pass

    @property
    def layout_mode(self) -> LayoutMode:
        return self._layout_mode

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '{}' raw={}".format(field_name, field_raw))
            value += field_raw

        return value

    @property
    def field_layout(self) -> Dict[str, Tuple[int, int]]:
        '''Offset and size of each field, not to be confused with the layout mode'''
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take the
        binary data and transform it in the representation given by the class
        this method is implemented.

        The stream is consumed forward only, each field in declaration order
        reads exactly its size: if something goes wrong the exception gets
        the name of the field appended to its chain and goes up.
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except DecodeException as e:
                e.chain.append(field_name)
                raise

        self._phase = ChunkPhase.DONE

        return self
