import io

from bprint.streams import Stream


class ChunkyReader(io.RawIOBase):
    """Returns at most one byte for each read, like a slow pipe."""

    def __init__(self, data):
        self.data = data

    def readable(self):
        return True

    def readinto(self, buffer):
        if not self.data:
            return 0
        buffer[0] = self.data[0]
        self.data = self.data[1:]
        return 1


def test_bytes_stream_read():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.read(2) == b'\x01\x02'
    assert stream.read(2) == b'\x03\x04'
    assert stream.read(2) == b'\x05'
    assert stream.read(2) == b''
    assert stream.position == 5


def test_file_stream_read(tmp_path):
    path_data = tmp_path / 'data.bin'
    path_data.write_bytes(b'\x01\x02\x03')

    with Stream(str(path_data)) as stream:
        assert stream.read(1) == b'\x01'
        assert stream.read(4) == b'\x02\x03'

    assert stream.obj.closed


def test_path_stream_read(tmp_path):
    path_data = tmp_path / 'data.bin'
    path_data.write_bytes(b'\xca\xfe')

    with Stream(path_data) as stream:
        assert stream.read(2) == b'\xca\xfe'


def test_short_reads_are_joined():
    stream = Stream(ChunkyReader(b'\x01\x02\x03\x04'))

    assert stream.read(3) == b'\x01\x02\x03'
    assert stream.read(3) == b'\x04'


def test_caller_file_is_not_closed():
    obj = io.BytesIO(b'\x00')

    with Stream(obj) as stream:
        stream.read(1)

    assert not obj.closed
