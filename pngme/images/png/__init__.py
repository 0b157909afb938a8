'''
# Portable Network Graphics

The file is a fixed 8-byte signature followed by a sequence of chunks, each
one self-describing its length, its type and its integrity.

Here we don't care about the image contained, only about the chunks: they
can be parsed, looked up, appended and removed, and the file re-encoded.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

'''
import logging

from pngme.core import Chunk
from pngme import fields
from pngme.common import crc
from pngme.meta import Endianess
from pngme.properties import Dependency
from pngme.exceptions import ChunkNotFoundException
from .chunk_type import ChunkType, ChunkTypeField
from .utils import index_of_chunk, get_chunk_by_type


logger = logging.getLogger(__name__)

PNG_MAGIC = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'
MAX_LENGTH = 2 ** 31 - 1


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_MAGIC, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    Unpacking a chunk whose crc doesn't match raises ChecksumMismatchException,
    so an instance is always consistent with what it contains.

    A default instance is an empty IEND chunk, the terminator of a PNG file.
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)  # big endian
    type   = ChunkTypeField()
    data   = fields.StringField(Dependency('.length'), default=b'')
    crc    = crc.CRCField(['type', 'data'], endianess=Endianess.BIG_ENDIAN)  # network byte order

    @classmethod
    def from_data(cls, chunk_type, data: bytes) -> "PNGChunk":
        '''Build a new chunk, the length and the crc are calculated.'''
        if len(data) > MAX_LENGTH:
            raise ValueError(f'a chunk can contain at most {MAX_LENGTH} bytes, not {len(data)}')

        chunk = cls()
        chunk.type.value = chunk_type
        chunk.data.value = data
        chunk.relayout()

        return chunk

    def __str__(self):
        chunk_type = self.type.value
        flags = [
            'critical' if chunk_type.is_critical() else 'ancillary',
            'public' if chunk_type.is_public() else 'private',
            'safe-to-copy' if chunk_type.is_safe_to_copy() else 'unsafe-to-copy',
        ]
        if not chunk_type.is_valid():
            flags.append('reserved-bit-set')

        return f'{chunk_type} length={self.length.value} crc=0x{self.crc.value:08x} ({", ".join(flags)})'

    def data_as_string(self) -> str:
        '''Each byte of the data becomes the character with the same code point,
        so any payload can be represented and encoded back with latin-1.'''
        return self.data.value.decode('latin-1')

    def as_bytes(self) -> bytes:
        return self.raw


class PNGFile(Chunk):
    '''The signature is checked while unpacking and then the chunks are read
    back-to-back until the data is exhausted.

    More chunks with the same type can coexist: the lookup and the removal
    act on the first one in order.'''
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    @classmethod
    def from_chunks(cls, chunks) -> "PNGFile":
        png = cls()
        for chunk in chunks:
            png.append_chunk(chunk)

        return png

    def append_chunk(self, chunk: PNGChunk):
        logger.debug(f'appending chunk {chunk.type.value}')
        self.chunks.append(chunk)

    def chunk_by_type(self, chunk_type):
        return get_chunk_by_type(self.chunks, chunk_type)

    def remove_chunk(self, chunk_type) -> PNGChunk:
        idx = index_of_chunk(self.chunks, chunk_type)

        if idx is None:
            raise ChunkNotFoundException(message=f'no chunk with type {str(chunk_type)!r}')

        logger.debug(f'removing chunk {chunk_type} at index {idx}')

        return self.chunks.pop(idx)

    def as_bytes(self) -> bytes:
        return self.raw
