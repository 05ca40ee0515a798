'''
Write-off of the extracted images.

The decoding thread hands each ImageArtifact to a WriteOffQueue; one or more
Writer threads take them and write them into the output directory. The
queue is bounded (with capacity zero it's a rendezvous), so the decoding
blocks when the writers fall behind and the memory stays bounded whatever
the size of the carrier file.

    with WriterPool('/tmp/images', writers=2) as pool:
        try:
            extract(stream, pool.submit)
        finally:
            pool.join()
        pool.raise_for_errors()
'''
import logging
import os
import queue
import tempfile
import threading
from collections import deque

from .exceptions import IOFailureException


class ImageArtifact(object):
    '''An image with the name of the file it has to be written to.

    After submit() the artifact belongs to the writer that releases it.'''

    def __init__(self, name: str, data: bytes):
        if not name or name in ('.', '..') or '\x00' in name \
                or os.sep in name or (os.altsep and os.altsep in name):
            raise ValueError(f'{name!r} is not a valid artifact name')

        self.name = name
        self.data = data

    def __repr__(self):
        size = len(self.data) if self.data is not None else 0
        return f'<{self.__class__.__name__}({self.name}, {size} bytes)>'

    def release(self):
        self.data = None


class WriteOffQueue(object):
    '''Bounded hand-off between the decoding thread and the writers.

    submit() returns when at most "capacity" artifacts are waiting to be taken
    by a writer, so with capacity zero it returns only when a writer has the
    artifact in its hands. join() waits for all the submitted artifacts to be
    written (or failed).'''

    def __init__(self, capacity: int = 0):
        if capacity < 0:
            raise ValueError('the capacity of the queue cannot be negative')

        self.capacity = capacity
        self.errors = []
        self.written = 0
        self._items = deque()
        self._pending = 0
        self._closed = False
        self._cond = threading.Condition()

    def __len__(self):
        with self._cond:
            return len(self._items)

    @property
    def pending(self):
        with self._cond:
            return self._pending

    def submit(self, artifact: ImageArtifact, timeout=None):
        '''Hand the artifact to the writers, raises queue.Full if nobody took
        it within timeout seconds (the artifact is withdrawn in that case).'''
        with self._cond:
            if self._closed:
                raise RuntimeError('submit() on a closed queue')

            self._items.append(artifact)
            self._pending += 1
            self._cond.notify_all()

            if not self._cond.wait_for(lambda: len(self._items) <= self.capacity, timeout):
                self._items.remove(artifact)
                self._pending -= 1
                self._cond.notify_all()
                raise queue.Full(f'{artifact!r} not taken in {timeout} seconds')

    __call__ = submit

    def take(self):
        '''Writer side: the next artifact, None when the queue is closed and empty.'''
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed)
            if not self._items:
                return None

            artifact = self._items.popleft()
            self._cond.notify_all()

            return artifact

    def done(self, artifact, error=None):
        with self._cond:
            self._pending -= 1
            if error is None:
                self.written += 1
            else:
                self.errors.append(error)
            self._cond.notify_all()

    def join(self, timeout=None):
        '''Barrier: True when nothing is in flight anymore.'''
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)

    def close(self):
        with self._cond:
            self._closed = True
            self._cond.notify_all()


class Writer(threading.Thread):
    '''Takes artifacts from the queue and writes each of them atomically:
    the data goes in a temporary file that is renamed once synced, so a file
    with the final name is always complete.'''

    def __init__(self, write_queue, output_dir='.', describe=False, name=None):
        super().__init__(name=name, daemon=True)
        self.logger = logging.getLogger(f'{__name__}.{self.__class__.__name__}')
        self.queue = write_queue
        self.output_dir = output_dir
        self.describe = describe

    def run(self):
        while True:
            artifact = self.queue.take()
            if artifact is None:
                break

            try:
                path = self.write(artifact)
            except Exception as e:
                self.logger.error('writing %s failed: %s' % (artifact.name, e))
                self.queue.done(artifact, error=e)
            else:
                self.logger.debug('written %s' % path)
                self.queue.done(artifact)
            finally:
                artifact.release()

    def write(self, artifact: ImageArtifact) -> str:
        path = os.path.join(self.output_dir, artifact.name)

        if self.describe:
            from .images import describe
            self.logger.info('%s: %s' % (artifact.name, describe(artifact.data) or 'unknown image format'))

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=f'.{artifact.name}.', suffix='.part', dir=self.output_dir)
            with os.fdopen(fd, 'wb') as f:
                f.write(artifact.data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise IOFailureException(chain=[], message=f'cannot write {path}: {e}', record=artifact.name) from e

        return path


class WriterPool(object):
    '''The queue together with the threads draining it.'''

    def __init__(self, output_dir='.', writers=1, capacity=0, describe=False):
        if writers < 1:
            raise ValueError('at least one writer is needed')

        self.queue = WriteOffQueue(capacity)
        self.writers = [
            Writer(self.queue, output_dir=output_dir, describe=describe, name=f'writer-{idx}')
            for idx in range(writers)
        ]

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.close()

    def start(self):
        for writer in self.writers:
            writer.start()

    def submit(self, artifact, timeout=None):
        self.queue.submit(artifact, timeout=timeout)

    def join(self):
        self.queue.join()

    def close(self):
        self.queue.close()
        for writer in self.writers:
            writer.join()

    def raise_for_errors(self):
        if self.queue.errors:
            raise self.queue.errors[0]
