'''
Glue between the dispatcher and the writers: decode a carrier file and write
every image it contains.

The knobs come from the environment, like DEBUG for the scripts

 - X9_OUTPUT_DIR: where to write the images (default the working directory)
 - X9_WRITERS: number of writer threads (default 1)
 - X9_QUEUE_CAPACITY: images allowed to wait for a writer (default 0)
 - X9_NAMING: "check" (<check number>.<image type>) or "sequential"
 - X9_DESCRIBE: if set, log format and size of each image
'''
import logging
import os
import sys

from .dispatcher import extract, Naming
from .enum import RecordTag
from .exceptions import X9Exception, IOFailureException
from .streams import Stream
from .writer import WriterPool


logger = logging.getLogger(__name__)


class Settings(object):

    def __init__(self, output_dir='.', writers=1, capacity=0, naming=Naming.CHECK, describe=False):
        if writers < 1:
            raise ValueError(f'the number of writers must be positive, not {writers}')
        if capacity < 0:
            raise ValueError(f'the queue capacity cannot be negative, not {capacity}')

        self.output_dir = output_dir
        self.writers = writers
        self.capacity = capacity
        self.naming = naming
        self.describe = describe

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.__dict__})>'

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ

        def _int(key, default):
            value = environ.get(key, '')
            try:
                return int(value) if value else default
            except ValueError:
                raise ValueError(f'{key} must be an integer, not {value!r}') from None

        return cls(
            output_dir=environ.get('X9_OUTPUT_DIR') or '.',
            writers=_int('X9_WRITERS', 1),
            capacity=_int('X9_QUEUE_CAPACITY', 0),
            naming=Naming(environ.get('X9_NAMING') or Naming.CHECK.value),
            describe='X9_DESCRIBE' in environ,
        )


def run(stream, settings=None):
    '''Extract all the images of the stream; the submitted images are all
    written (or failed) before returning or raising, even when the decoding
    stops halfway.'''
    settings = settings or Settings()
    logger.debug('extracting from %r with %r' % (stream, settings))

    with WriterPool(
            output_dir=settings.output_dir,
            writers=settings.writers,
            capacity=settings.capacity,
            describe=settings.describe) as pool:
        try:
            context = extract(stream, pool.submit, naming=settings.naming)
        finally:
            pool.join()

        pool.raise_for_errors()

    logger.info('%d images written from %d checks' % (pool.queue.written, context.records[RecordTag.CHECK_INDEX]))

    return context


def usage(progname):
    print(f'usage: {progname} <carrier file path>')
    return 1


def main(argv=None):
    argv = sys.argv if argv is None else argv
    if len(argv) < 2:
        return usage(argv[0])

    path = argv[1]

    try:
        settings = Settings.from_env()
    except ValueError as e:
        logger.error('bad configuration: %s' % e)
        return 1

    try:
        stream = Stream(path)
    except IOFailureException as e:
        logger.error('cannot read \'%s\': %s' % (path, e.message))
        return 1

    with stream:
        try:
            run(stream, settings)
        except X9Exception as e:
            logger.error('error while extracting images from \'%s\': %s' % (path, e))
            return 2

    return 0
