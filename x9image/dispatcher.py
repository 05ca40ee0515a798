'''
The dispatcher walks the stream record by record: it reads the tag, picks
the record class and keeps the little context that the later records need
(layout mode, check number and image type) in a ParseContext.

Every image data record becomes an ImageArtifact handed to a sink, usually
WriteOffQueue.submit().
'''
import logging
from collections import Counter
from enum import Enum

from .cashletter import (
    RECORDS,
    FileHeader,
    CheckIndex,
    ImageHeader,
    ImageData,
    CheckTrailer,
    FileTrailer,
)
from .enum import LayoutMode, RecordTag
from .exceptions import (
    DecodeException,
    InvalidNameException,
    LayoutException,
    OutOfOrderException,
    UnknownTagException,
)
from .streams import Stream
from .writer import ImageArtifact

TAG_LENGTH = 4


class Naming(Enum):
    '''How the artifacts are named'''
    CHECK      = 'check'       # <check number>.<image type>
    SEQUENTIAL = 'sequential'  # <counter>.<image type>


class ParseContext(object):
    '''Running state of the decoding of one file, owned by the dispatcher.'''

    def __init__(self):
        self.layout_mode = LayoutMode.UNKNOWN
        self.check_number = None  # set by the check index
        self.image_type = None    # set by the image header
        self.image_count = 0    # images declared by the last check index
        self.record_count = 0   # records declared by the last image header
        self.images = 0         # image data records seen so far
        self.records = Counter()

    def __repr__(self):
        return '<%s(layout=%s, check=%r, image_type=%r, images=%d)>' % (
            self.__class__.__name__,
            self.layout_mode.name,
            self.check_number,
            self.image_type,
            self.images,
        )

    def resolve_layout(self, mode):
        '''The layout is decided once and for all by the first file header.'''
        if self.layout_mode != LayoutMode.UNKNOWN:
            raise LayoutException(chain=[], message=f'layout already resolved as {self.layout_mode.name}')

        self.layout_mode = mode


class Dispatcher(object):
    '''Tag driven state machine: AwaitingTag -> record -> AwaitingTag until
    the stream ends exactly at a tag boundary.'''

    def __init__(self, stream, sink, naming=Naming.CHECK):
        self.logger = logging.getLogger(f'{__name__}.{self.__class__.__name__}')
        self.stream = stream if isinstance(stream, Stream) else Stream(stream)
        self.sink = sink
        self.naming = naming
        self.context = ParseContext()

        self._handlers = {
            RecordTag.FILE_HEADER:   self.on_file_header,
            RecordTag.CHECK_INDEX:   self.on_check_index,
            RecordTag.IMAGE_HEADER:  self.on_image_header,
            RecordTag.IMAGE_DATA:    self.on_image_data,
            RecordTag.CHECK_TRAILER: self.on_check_trailer,
            RecordTag.FILE_TRAILER:  self.on_file_trailer,
            RecordTag.UNKNOWN:       self.on_unknown,
        }

    def read_tag(self):
        '''Returns the next tag, None at the end of the stream.'''
        raw = self.stream.read_tag(TAG_LENGTH)
        if raw is None:
            return None, None

        return RecordTag.from_raw(raw), raw

    def run(self):
        while True:
            offset = self.stream.tell()
            tag, raw = self.read_tag()
            if tag is None:
                break

            self.logger.debug('found tag %s at offset %d' % (raw, offset))

            try:
                self._handlers[tag](raw)
            except DecodeException as e:
                if e.record is None:
                    e.record = self._record_name(tag, raw)
                if e.offset is None:
                    e.offset = offset
                raise

            self.context.records[tag] += 1

        self.logger.debug('end of stream at offset %d: %r' % (self.stream.tell(), self.context))

        return self.context

    def _record_name(self, tag, raw):
        if tag == RecordTag.UNKNOWN:
            return f'Record({raw.decode("latin1")})'

        return RECORDS[tag].describe()

    def decode(self, record_cls):
        return record_cls(self.stream, layout_mode=self.context.layout_mode)

    def on_file_header(self, raw):
        header = self.decode(FileHeader)
        self.context.resolve_layout(header.layout_mode)

        self.logger.info('file %s version %s created %s %s, %s layout, %d checks declared' % (
            header.file_id.text.strip(),
            header.file_version.text,
            header.creation_date.text,
            header.creation_time.text,
            header.layout_mode.name.lower(),
            header.check_count.value,
        ))

    def on_check_index(self, raw):
        index = self.decode(CheckIndex)
        self.context.check_number = index.check_number.text
        self.context.image_count = index.image_count.value

        self.logger.debug('check %s with %d images' % (self.context.check_number, self.context.image_count))

    def on_image_header(self, raw):
        header = self.decode(ImageHeader)
        self.context.image_type = header.image_type.text
        self.context.record_count = header.record_count.value

    def on_image_data(self, raw):
        if self.context.check_number is None or self.context.image_type is None:
            raise OutOfOrderException(chain=[], message='image data before its check index and image header')

        data = self.decode(ImageData)
        self.context.images += 1

        if self.context.layout_mode == LayoutMode.FIXED and data.declared_length.value != data.image.size:
            self.logger.debug('ignoring declared length %d in fixed layout' % data.declared_length.value)

        try:
            artifact = ImageArtifact(self.artifact_name(), data.image.value)
        except ValueError as e:
            raise InvalidNameException(chain=[], message=str(e), offset=data.offset) from e

        self.logger.debug('submitting %r' % artifact)
        self.sink(artifact)

    def on_check_trailer(self, raw):
        self.decode(CheckTrailer)

    def on_file_trailer(self, raw):
        trailer = self.decode(FileTrailer)
        self.logger.debug('file trailer declares %s detail records' % trailer.detail_count.text)

    def on_unknown(self, raw):
        # nothing tells how long this record is, going on would mean
        # reading garbage as tags
        raise UnknownTagException(chain=[], tag=raw)

    def artifact_name(self):
        if self.naming == Naming.SEQUENTIAL:
            return '%06d.%s' % (self.context.images, self.context.image_type)

        return '%s.%s' % (self.context.check_number, self.context.image_type)


def extract(stream, sink, naming=Naming.CHECK):
    '''Decode the whole stream, passing each image artifact to sink.'''
    return Dispatcher(stream, sink, naming=naming).run()
