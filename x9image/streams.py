import io
import logging
import os

from .exceptions import TruncatedException, IOFailureException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to uniform its
    properties: the carrier file is read in a single forward pass so we only
    need "read exactly n bytes" and "discard exactly n bytes", both failing
    loudly when the data is not there.

    The position is tracked here since the underlying object could be a pipe.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.position = 0
        self._owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__}@{self.position})>'

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        try:
            self.obj = open(self.obj, 'rb')
        except OSError as e:
            raise IOFailureException(chain=[], message=str(e)) from e
        self._owned = True

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)
        self._owned = True

    def init_file(self):
        if isinstance(self.obj, os.PathLike):
            self.obj = os.fspath(self.obj)
            return self.init_str()

        if not hasattr(self.obj, 'read'):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def tell(self):
        return self.position

    def close(self):
        if self._owned:
            self.obj.close()

    def _read(self, n):
        try:
            data = self.obj.read(n)
        except OSError as e:
            raise IOFailureException(chain=[], message=str(e), offset=self.position) from e

        # file objects are allowed to return less than asked, insist
        chunks = [data]
        missing = n - len(data)
        while missing > 0 and data:
            try:
                data = self.obj.read(missing)
            except OSError as e:
                raise IOFailureException(chain=[], message=str(e), offset=self.position) from e
            chunks.append(data)
            missing -= len(data)

        return b''.join(chunks)

    def read_exact(self, n):
        '''Returns exactly n bytes or raises TruncatedException.'''
        offset = self.position
        data = self._read(n)
        self.position += len(data)

        if len(data) != n:
            raise TruncatedException(
                chain=[],
                message=f'wanted {n} bytes, got {len(data)}',
                offset=offset,
            )

        return data

    def discard_exact(self, n):
        '''Skip n bytes; the stream never rewinds so we read and drop them.'''
        self.read_exact(n)

    def read_tag(self, n):
        '''The only place where the end of the stream is legit: it returns None
        if there are no more bytes at all, otherwise like read_exact().'''
        offset = self.position
        data = self._read(n)
        self.position += len(data)

        if len(data) == 0:
            return None

        if len(data) != n:
            raise TruncatedException(
                chain=[],
                message=f'wanted {n} bytes of record tag, got {len(data)}',
                offset=offset,
            )

        return data
