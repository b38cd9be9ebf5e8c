import io

import pytest

from bprint.core import Printer, RecordLoop, RecordReader, StreamPosition, print_records
from bprint.enum import ReadState
from bprint.exceptions import EndOfStream, ReadException, TruncatedField
from bprint.layout import compile_layout
from bprint.streams import Stream
from bprint.template import compile_template


class FailingReader(io.RawIOBase):
    """Serves the data and then fails instead of signaling the end."""

    def __init__(self, data):
        self.data = data

    def readable(self):
        return True

    def readinto(self, buffer):
        if not self.data:
            raise OSError('device error')
        n = min(len(buffer), len(self.data))
        buffer[:n] = self.data[:n]
        self.data = self.data[n:]
        return n


def dump(data, layout='C2', template=None, **kwargs):
    layout = compile_layout(layout)
    out = io.StringIO()
    trailing = print_records(Stream(data), layout, compile_template(template, layout), out=out, **kwargs)

    return out.getvalue(), trailing


def test_full_records():
    output, trailing = dump(b'\x01\x02\x03\x04')

    assert output == '01 02\n03 04\n'
    assert trailing is None


def test_partial_record():
    output, trailing = dump(b'\x01\x02\x03\x04\x05')

    assert output == '01 02\n03 04\n05\n'
    assert trailing is not None
    assert trailing.offset == 4
    assert trailing.n_fields == 1
    assert str(trailing) == 'EOF: final data not enough for the last field'


def test_partial_record_inside_field():
    output, trailing = dump(b'\x01\x02\x03\x04\x05', layout='CS', template='%d %d')

    assert output == '1 770\n4\n'
    assert (trailing.n_fields, trailing.n_bytes) == (1, 1)


def test_trailing_bytes_without_fields():
    """When not even the first field is complete nothing is printed."""
    output, trailing = dump(b'\x01\x02\x03', layout='S', show_offset=True)

    assert output == '0000000 201\n'
    assert trailing.n_fields == 0
    assert trailing.n_bytes == 1


def test_empty_stream():
    output, trailing = dump(b'')

    assert output == ''
    assert trailing is None


def test_show_offset():
    output, trailing = dump(b'\x01\x02\x03\x04', show_offset=True)

    assert output == '0000000 01 02\n0000002 03 04\n0000004 \n'
    assert trailing is None


def test_show_offset_partial_record():
    """The final offset line is printed only without trailing data."""
    output, _ = dump(b'\x01\x02\x03', show_offset=True)

    assert output == '0000000 01 02\n0000002 03\n'


def test_show_record_index():
    output, _ = dump(b'\x01\x02\x03\x04\x05', show_record_index=True)

    assert output == '1: 01 02\n2: 03 04\n3: 05\n'


def test_show_offset_and_index():
    output, _ = dump(bytes(range(0x12)), layout='C16', show_offset=True, show_record_index=True)

    assert output.splitlines() == [
        '0000000 1: 00 01 02 03 04 05 06 07 08 09 0a 0b 0c 0d 0e 0f',
        '0000010 2: 10 11',
    ]


def test_mixed_layout_template():
    data = b'\xfe\xff' + b'\x10\x00\x00\x00' + b'\xff\xff\xff\xff' + b'A'
    output, trailing = dump(data, layout='sL2c', template='%d %08x,2# %c')

    assert output == '-2 00000010,ffffffff A\n'
    assert trailing is None


def test_record_reader():
    reader = RecordReader(Stream(b'\x01\x02\x03'), compile_layout('C2'))

    assert reader.read_record() == ([1, 2], None)

    values, error = reader.read_record()
    assert values == [3]
    assert isinstance(error, EndOfStream)

    values, error = reader.read_record()
    assert values == []
    assert isinstance(error, EndOfStream)


def test_record_reader_truncated():
    reader = RecordReader(Stream(b'\x01\x02\x03'), compile_layout('L'))

    values, error = reader.read_record()
    assert values == []
    assert isinstance(error, TruncatedField)


def test_loop_states():
    layout = compile_layout('C2')
    printer = Printer(compile_template(None, layout), out=io.StringIO())
    loop = RecordLoop(Stream(b'\x01\x02\x03'), layout, printer)

    assert loop.state == ReadState.READING
    assert loop.step() == ReadState.READING
    assert loop.position.offset == 2
    assert loop.position.record_count == 1

    assert loop.step() == ReadState.PARTIAL_RECORD
    assert loop.trailing is not None
    assert loop.position.offset == 4
    assert loop.position.record_count == 2

    assert loop.step() == ReadState.END_OF_STREAM
    assert loop.step() == ReadState.END_OF_STREAM
    assert loop.printer.out.getvalue() == '01 02\n03\n'


def test_loop_states_clean_end():
    layout = compile_layout('C2')
    printer = Printer(compile_template(None, layout), out=io.StringIO())
    loop = RecordLoop(Stream(b'\x01\x02'), layout, printer)

    assert loop.step() == ReadState.READING
    assert loop.step() == ReadState.END_OF_STREAM
    assert loop.trailing is None


def test_io_error():
    """A read failure stops the loop without printing the partial record."""
    layout = compile_layout('C2')
    out = io.StringIO()
    printer = Printer(compile_template(None, layout), out=out)
    loop = RecordLoop(Stream(FailingReader(b'\x01\x02\x03')), layout, printer)

    with pytest.raises(ReadException) as excinfo:
        loop.run()

    assert loop.state == ReadState.IO_ERROR
    assert out.getvalue() == '01 02\n'
    assert str(excinfo.value) == 'While reading data: device error'
    assert isinstance(excinfo.value.error, OSError)


def test_printer_format_record():
    layout = compile_layout('C')
    printer = Printer(compile_template('<%d>', layout), show_offset=True, show_record_index=True)

    assert printer.format_record(StreamPosition(offset=0xabc, record_count=7), [3]) == '0000abc 7: <3>'
