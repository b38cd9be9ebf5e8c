"""
Core module: the loop reading records from the stream and printing them.

Before entering the loop the layout and the template are already compiled
and validated, so the only errors left are the ones coming from the data

 1. the stream ends exactly at a record boundary: this is the normal way
    the loop terminates
 2. the stream ends in the middle of a record: the fields decoded so far
    are printed anyway and an InsufficientTrailingData is reported
 3. reading fails for some other reason: the loop stops immediately and a
    ReadException is raised, without printing the partial record

"""
import logging
import sys
from typing import List, Optional, Tuple

from .enum import ReadState
from .exceptions import (
    EndOfStream,
    TruncatedField,
    UnpackException,
    ReadException,
    InsufficientTrailingData,
)
from .layout import FieldLayout
from .template import TemplateSpec


OFFSET_FORMAT = '%07x '
INDEX_FORMAT = '%d: '


class StreamPosition(object):
    '''Where we are in the stream: the offset of the next record and how
    many records have been read so far.'''

    def __init__(self, offset=0, record_count=0):
        self.offset = offset
        self.record_count = record_count

    def __repr__(self):
        return f'<{self.__class__.__name__}(offset=0x{self.offset:x}, records={self.record_count})>'


class Printer(object):
    '''Writes a line for each record, optionally prefixed by its offset and index.'''

    def __init__(self, template: TemplateSpec, out=None, show_offset=False, show_record_index=False):
        self.template = template
        self.out = out if out is not None else sys.stdout
        self.show_offset = show_offset
        self.show_record_index = show_record_index

    def format_record(self, position: StreamPosition, values) -> str:
        prefix = ''
        if self.show_offset:
            prefix += OFFSET_FORMAT % position.offset
        if self.show_record_index:
            prefix += INDEX_FORMAT % position.record_count

        return prefix + self.template.render(values)

    def print_record(self, position: StreamPosition, values) -> None:
        self.out.write(self.format_record(position, values) + '\n')

    def print_offset(self, position: StreamPosition) -> None:
        self.out.write(OFFSET_FORMAT % position.offset + '\n')


class RecordReader(object):
    '''Decodes one record at a time from the stream.'''

    def __init__(self, stream, layout: FieldLayout):
        self.logger = logging.getLogger(__name__)
        self.stream = stream
        self.layout = layout
        self.fields = layout.fields()

    def read_record(self) -> Tuple[List[int], Optional[UnpackException]]:
        '''Returns the values decoded and, if the stream ended before the end
        of the record, the exception that stopped the decoding.

        Any I/O error is raised as a ReadException.'''
        values = []
        for field in self.fields:
            try:
                values.append(field.unpack(self.stream))
            except (EndOfStream, TruncatedField) as e:
                self.logger.debug('stream ended after %d fields: %s', len(values), e)
                return values, e
            except OSError as e:
                self.logger.error('reading %r failed at offset %d after %d fields', field, self.stream.position, len(values))
                raise ReadException(e) from e

        return values, None


class RecordLoop(object):
    '''Read all the records of a stream and print them.

    The state starts as READING and ends as END_OF_STREAM, passing through
    PARTIAL_RECORD if the last record is incomplete, or as IO_ERROR.'''

    def __init__(self, stream, layout: FieldLayout, printer: Printer):
        self.logger = logging.getLogger(__name__)
        self.reader = RecordReader(stream, layout)
        self.layout = layout
        self.printer = printer
        self.position = StreamPosition()
        self.state = ReadState.READING
        self.trailing: Optional[InsufficientTrailingData] = None

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.state.name}, {self.position!r})>'

    def step(self) -> ReadState:
        '''Read and print a single record, returns the new state.

        After a partial record the next step ends the stream without reading.'''
        if self.state == ReadState.END_OF_STREAM:
            return self.state
        if self.state == ReadState.PARTIAL_RECORD:
            self.state = ReadState.END_OF_STREAM
            return self.state

        try:
            values, error = self.reader.read_record()
        except ReadException:
            self.state = ReadState.IO_ERROR
            raise

        if error is None:
            self._emit(values)
            return self.state

        if values:
            self.state = ReadState.PARTIAL_RECORD
            self.trailing = InsufficientTrailingData(self.position.offset, len(values), len(error.data))
            self.logger.debug('partial record at offset 0x%x: %d fields', self.position.offset, len(values))
            self._emit(values)
            return self.state

        if isinstance(error, TruncatedField):
            self.trailing = InsufficientTrailingData(self.position.offset, 0, len(error.data))
            self.logger.debug('%d trailing bytes at offset 0x%x', len(error.data), self.position.offset)
        elif self.printer.show_offset:
            self.printer.print_offset(self.position)

        self.state = ReadState.END_OF_STREAM

        return self.state

    def _emit(self, values):
        # the offset printed is the one of the start of the record
        self.position.record_count += 1
        self.printer.print_record(self.position, values)
        self.position.offset += self.layout.record_size

    def run(self) -> Optional[InsufficientTrailingData]:
        '''Loop until the end of the stream.

        Returns the InsufficientTrailingData condition when the data ended
        in the middle of a record, None otherwise.'''
        while self.step() != ReadState.END_OF_STREAM:
            pass

        self.logger.debug('done: %r', self)

        return self.trailing


def print_records(stream, layout: FieldLayout, template: TemplateSpec, out=None,
                  show_offset=False, show_record_index=False) -> Optional[InsufficientTrailingData]:
    printer = Printer(template, out=out, show_offset=show_offset, show_record_index=show_record_index)
    loop = RecordLoop(stream, layout, printer)

    return loop.run()
