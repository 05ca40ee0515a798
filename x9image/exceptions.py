class X9Exception(Exception):
    '''Base class to extend in order to throw exception in x9image.

    It takes a single argument that represents the chain of the layer that
    caused the exception.
    '''

    def __init__(self, chain, message=None):
        self.chain = chain
        self.message = message
        super().__init__(message)

    def __str__(self):
        return self.message or ''


class DecodeException(X9Exception):
    '''Something went wrong while reading a record.

    The dispatcher fills "record" and "offset" so that the first error
    reported is enough to locate the bad bytes in the carrier file.'''
    kind = 'Decode'

    def __init__(self, chain, message=None, offset=None, record=None):
        super().__init__(chain, message=message)
        self.offset = offset
        self.record = record

    def __str__(self):
        where = self.record or '<stream>'
        if self.chain:
            where += '.' + '.'.join(reversed(self.chain))
        msg = f'{self.kind} in {where}'
        if self.offset is not None:
            msg += f' at offset {self.offset}'
        if self.message:
            msg += f': {self.message}'

        return msg


class TruncatedException(DecodeException):
    kind = 'Truncated'


class NotANumberException(DecodeException):
    kind = 'NotANumber'


class IOFailureException(DecodeException):
    kind = 'IOFailure'


class UnknownTagException(DecodeException):
    kind = 'UnknownTag'

    def __init__(self, chain, tag, **kwargs):
        self.tag = tag
        super().__init__(chain, message=f'unknown record tag {tag!r}', **kwargs)


class UnknownLayoutCodeException(DecodeException):
    '''This is useful when is not possible to let an unknown record size
    code slip through: every later filler would be wrong.'''
    kind = 'UnknownLayoutCode'


class LayoutException(DecodeException):
    '''The layout mode is not resolved yet or somebody tried to change it.'''
    kind = 'Layout'


class OutOfOrderException(DecodeException):
    '''A record needs something that an earlier record should have set.'''
    kind = 'OutOfOrder'


class InvalidNameException(DecodeException):
    '''The check number or image type cannot be used as a file name.'''
    kind = 'InvalidName'
