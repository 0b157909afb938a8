'''
# Chunk types

A chunk type is a 4-byte code restricted to the ASCII letters A-Z and a-z.
Bit 5 of each byte (the case bit, value 32) carries a property of the chunk:

 1. ancillary bit (first byte): uppercase means critical, the decoder must understand it
 2. private bit (second byte): uppercase means public, i.e. part of the specification
 3. reserved bit (third byte): must be uppercase in files conforming to this version
 4. safe-to-copy bit (fourth byte): lowercase means editors can copy it even when unknown

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from bitstring import Bits

from pngme import fields
from pngme.exceptions import InvalidTypeCodeException


CASE_BIT = 2  # bit 5 counting from the MSB of each byte


class ChunkType(object):
    '''Immutable representation of a chunk type code.'''

    __slots__ = ('_value',)

    def __init__(self, value: bytes):
        value = bytes(value)

        if len(value) != 4 or not value.isalpha():
            raise InvalidTypeCodeException(message=f'{value!r} is not a valid chunk type')

        object.__setattr__(self, '_value', value)

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    @classmethod
    def from_bytes(cls, value) -> "ChunkType":
        try:
            value = bytes(value)
        except (TypeError, ValueError):
            raise InvalidTypeCodeException(message=f'{value!r} is not a valid chunk type')

        return cls(value)

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        try:
            value = text.encode('ascii')
        except (AttributeError, UnicodeEncodeError):
            raise InvalidTypeCodeException(message=f'{text!r} is not a valid chunk type')

        return cls(value)

    def to_bytes(self) -> bytes:
        return self._value

    def __bytes__(self):
        return self._value

    def __str__(self):
        return self._value.decode('ascii')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._value == other._value

    def __hash__(self):
        return hash(self._value)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def _is_lowercase(self, idx: int) -> bool:
        return Bits(self._value)[idx * 8 + CASE_BIT]

    def is_critical(self) -> bool:
        return not self._is_lowercase(0)

    def is_public(self) -> bool:
        return not self._is_lowercase(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._is_lowercase(2)

    def is_safe_to_copy(self) -> bool:
        return self._is_lowercase(3)

    def is_valid(self) -> bool:
        # only the reserved bit is mandated, the other ones are free
        return self.is_reserved_bit_valid()


class ChunkTypeField(fields.Field):
    '''4 bytes field holding a ChunkType, it accepts as value also the
    textual representation.'''

    def __init__(self, **kw):
        if 'default' not in kw:
            kw['default'] = ChunkType(b'IEND')

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value})>'

    def _set_value(self, value) -> None:
        if isinstance(value, str):
            value = ChunkType.from_str(value)
        elif not isinstance(value, ChunkType):
            value = ChunkType.from_bytes(value)

        self._value = value
        self.changed()

    def _get_size(self):
        return 4

    def _get_raw(self) -> bytes:
        return bytes(self.value)

    def unpack(self, stream):
        self.value = ChunkType.from_bytes(stream.read_exact(self.size))
