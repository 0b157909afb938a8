import io
import logging

from .exceptions import TruncatedInputException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around binary data to uniform its
    properties: mainly we need to read an exact number of bytes and to know
    when the data is exhausted.

    No path is ever opened here, the caller must pass the bytes.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of data to use as a stream' % self._type.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def read_exact(self, size):
        '''Read exactly size bytes or complain.'''
        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            logger.debug('wanted %d bytes at offset %d, got %d' % (size, offset, len(data)))
            raise TruncatedInputException(
                message=f'expected {size} bytes at offset {offset}, only {len(data)} available')

        return data

    def at_end(self):
        '''True if there are no more bytes to read.'''
        return self.obj.tell() == len(self.obj.getbuffer())
