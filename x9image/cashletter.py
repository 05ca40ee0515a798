'''
# Cash letter carrier file

Batch of bank checks with their scanned images, in the style of ANSI X9.37.
The file is a sequence of records, each one preceded by a 4 bytes ASCII tag

  .------------------------------------.
  | 1200 file header                   |
  | 1201 check index                   |
  | 1202 image header                  |  front
  | 1203 image data                    |
  | 1202 image header                  |  back
  | 1203 image data                    |
  | 1204 check trailer                 |
    ...
  | 1209 file trailer                  |
  '------------------------------------'

All the fields are ASCII. The file header tells the record sizing convention
for the whole file via the record size code: "0256" is the fixed layout,
"0090" the variable one; they differ in the amount of filler at the end of
each record and in how the image length is computed.

The tag is not part of the records below, the dispatcher reads it.
'''
from .core import Chunk
from .enum import RecordTag
from . import fields
from .properties import Dependency, LayoutDependency


# the image data record of the fixed layout always carries 246 bytes,
# whatever is written in its length field
FIXED_IMAGE_LENGTH = 246


class Record(Chunk):
    tag = RecordTag.UNKNOWN

    @classmethod
    def describe(cls):
        return f'{cls.__name__}({cls.tag})'


class FileHeader(Record):
    '''Identifies the file and decides the layout mode.'''
    tag = RecordTag.FILE_HEADER

    file_id       = fields.StringField(15)
    request_id    = fields.StringField(15)
    file_version  = fields.StringField(4)
    creation_date = fields.StringField(8)
    creation_time = fields.StringField(6)
    check_count   = fields.NumericField(6)
    record_size   = fields.LayoutCodeField()
    filler        = fields.FillerField(LayoutDependency(fixed=194, variable=28))

    @property
    def layout_mode(self):
        return self.record_size.mode


class CheckIndex(Record):
    tag = RecordTag.CHECK_INDEX

    bank_number     = fields.StringField(4)
    routing_number  = fields.StringField(9)
    account_number  = fields.StringField(20)
    check_number    = fields.StringField(15)
    amount          = fields.StringField(10)
    sequence_number = fields.StringField(15)
    posted_date     = fields.StringField(8)
    image_count     = fields.NumericField(4)
    filler          = fields.FillerField(LayoutDependency(fixed=167, variable=1))


class ImageHeader(Record):
    '''One for each side of the check.'''
    tag = RecordTag.IMAGE_HEADER

    image_type        = fields.StringField(4)
    side              = fields.StringField(1)
    record_count      = fields.NumericField(4)
    image_data_length = fields.StringField(6)
    filler            = fields.FillerField(LayoutDependency(fixed=231, variable=71))


class ImageData(Record):
    tag = RecordTag.IMAGE_DATA

    declared_length = fields.NumericField(4)
    image           = fields.StringField(LayoutDependency(
        fixed=FIXED_IMAGE_LENGTH,
        variable=Dependency('.declared_length'),
    ))


class CheckTrailer(Record):
    tag = RecordTag.CHECK_TRAILER

    filler = fields.FillerField(LayoutDependency(fixed=252, variable=86))


class FileTrailer(Record):
    tag = RecordTag.FILE_TRAILER

    file_id       = fields.StringField(15)
    request_id    = fields.StringField(15)
    file_version  = fields.StringField(4)
    creation_date = fields.StringField(8)
    creation_time = fields.StringField(6)
    detail_count  = fields.StringField(6)
    filler        = fields.FillerField(LayoutDependency(fixed=198, variable=32))


RECORDS = {record.tag: record for record in (
    FileHeader,
    CheckIndex,
    ImageHeader,
    ImageData,
    CheckTrailer,
    FileTrailer,
)}
