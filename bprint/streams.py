import io
import logging


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: mainly we need a read() that returns
    short only at the end of the data.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal binary file object'''
        self._type = type(obj)
        self.obj = obj
        self._owned = False
        self.position = 0

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.obj)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self._owned = True

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)
        self._owned = True

    def init_file(self):
        '''Already a binary file object (an open file, sys.stdin.buffer, ...),
        it's up to the caller to close it'''
        if isinstance(self.obj, io.TextIOBase):
            self.obj = self.obj.buffer

    def read(self, size):
        '''Read exactly size bytes unless the data ends before.

        Unbuffered objects (pipes, sockets) can return less than asked,
        so we keep reading until an empty read.'''
        chunks = []
        missing = size
        while missing > 0:
            chunk = self.obj.read(missing)
            if not chunk:
                break
            chunks.append(chunk)
            missing -= len(chunk)

        data = b''.join(chunks)
        self.position += len(data)

        return data

    def close(self):
        if self._owned and not self.obj.closed:
            logger.debug('closing %r', self.obj)
            self.obj.close()
