class BprintException(Exception):
    '''Base class to extend in order to throw exception in bprint.'''
    pass


class ConfigurationError(BprintException):
    '''The layout specifier or the template can't be used; these are always
    detected before reading any data.'''
    pass


class InvalidSpecifier(ConfigurationError):

    def __init__(self, spec, position):
        self.spec = spec
        self.position = position
        self.character = spec[position]
        super().__init__(f"Data specifier '{self.character}' not supported")


class DanglingRepeatCount(ConfigurationError):

    def __init__(self, spec, position):
        self.spec = spec
        self.position = position
        super().__init__('Data specifier error: repeat number without previous data specifier')


class UnsupportedConversion(ConfigurationError):
    '''A "%" in the template is not followed by a conversion we know how to print.'''

    def __init__(self, template, position, character=None):
        self.template = template
        self.position = position
        self.character = character
        if character is None:
            message = f"Print format ends with an incomplete directive at position {position}"
        else:
            message = f"Print format conversion '{character}' not supported"
        super().__init__(message)


class FieldCountMismatch(ConfigurationError):

    def __init__(self, binary, print):
        self.binary = binary
        self.print = print
        super().__init__(f'Binary spec has {binary} fields, print fmt has {print} fields. Not match.')


class UnpackException(BprintException):
    '''Raised when a field can't be decoded from the stream.'''

    def __init__(self, primitive, data=b''):
        self.primitive = primitive
        self.data = data
        super().__init__(f'{len(data)} bytes available for {primitive.name} ({primitive.width} bytes)')


class EndOfStream(UnpackException):
    '''The stream is exhausted exactly at the start of a field.'''
    pass


class TruncatedField(UnpackException):
    '''The stream ended in the middle of a field.'''
    pass


class ReadException(BprintException):
    '''An I/O error different from the end of the stream.'''

    def __init__(self, error):
        self.error = error
        super().__init__(f'While reading data: {error}')


class InsufficientTrailingData(object):
    '''Not an error: returned by the loop when the data ends in the middle of a record.'''

    message = 'EOF: final data not enough for the last field'

    def __init__(self, offset, n_fields, n_bytes):
        self.offset = offset
        self.n_fields = n_fields
        self.n_bytes = n_bytes

    def __repr__(self):
        return f'<{self.__class__.__name__}(offset=0x{self.offset:x}, fields={self.n_fields}, bytes={self.n_bytes})>'

    def __str__(self):
        return self.message


class EmptyLayout(ConfigurationError):

    def __init__(self):
        super().__init__('Data specifier error: no field described')
