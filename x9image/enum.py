from enum import Enum, auto


class LayoutMode(Enum):
    '''Record sizing convention of the whole file, chosen by the file header'''
    UNKNOWN  = 0
    FIXED    = auto()
    VARIABLE = auto()

    @classmethod
    def from_code(cls, code):
        '''Map the 4 bytes record size code; anything not known is UNKNOWN.'''
        return _LAYOUT_CODES.get(code, cls.UNKNOWN)


_LAYOUT_CODES = {
    b'0256': LayoutMode.FIXED,
    b'0090': LayoutMode.VARIABLE,
}


class RecordTag(Enum):
    '''The 4 bytes ASCII code preceding each record.'''
    UNKNOWN       = None
    FILE_HEADER   = b'1200'
    CHECK_INDEX   = b'1201'
    IMAGE_HEADER  = b'1202'
    IMAGE_DATA    = b'1203'
    CHECK_TRAILER = b'1204'
    FILE_TRAILER  = b'1209'

    @classmethod
    def from_raw(cls, raw):
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self):
        return self.value.decode('ascii') if self.value else '????'
