"""
A Field decodes a single integer of a record from the stream.
"""
import logging
import struct

from .enum import Endianess, PrimitiveType
from .exceptions import EndOfStream, TruncatedField


class IntField(object):
    """
    Mimic the behaviour of the struct module unpacking one integer from bytes.

    The field doesn't keep the decoded value: unpack() returns it so that the
    same instance can be used for every record.
    """

    def __init__(self, primitive: PrimitiveType, endianess=Endianess.LITTLE_ENDIAN):
        self.logger = logging.getLogger(__name__)
        self.primitive = primitive
        self.endianess = endianess

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.primitive.name)

    def get_format(self):
        return '%s%s' % (self.endianess.prefix, self.primitive.format)

    @property
    def size(self):
        return struct.calcsize(self.get_format())

    def _unpack_struct(self, raw: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.debug(e)
            raise TruncatedField(self.primitive, raw)

        return unpacked_value

    def unpack(self, stream) -> int:
        '''Read the field from the current position of the stream.

        It raises EndOfStream if no byte at all is available and TruncatedField
        if the stream ends before the end of the field.'''
        raw = stream.read(self.size)
        if not raw:
            raise EndOfStream(self.primitive)

        return self._unpack_struct(raw)
