import pytest

from pngme.images.png import PNG_MAGIC, PNGChunk


MESSAGE = b'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


def build_chunk_bytes(length, chunk_type, data, crc):
    return length.to_bytes(4, 'big') + chunk_type + data + crc.to_bytes(4, 'big')


@pytest.fixture
def chunk_bytes():
    return build_chunk_bytes(len(MESSAGE), b'RuSt', MESSAGE, MESSAGE_CRC)


@pytest.fixture
def png_chunks():
    return [
        PNGChunk.from_data('FrSt', b'I am the first chunk'),
        PNGChunk.from_data('miDl', b'I am another chunk'),
        PNGChunk.from_data('LASt', b'I am the last chunk'),
    ]


@pytest.fixture
def png_bytes(png_chunks):
    return PNG_MAGIC + b''.join(chunk.as_bytes() for chunk in png_chunks)


@pytest.fixture
def png_path(tmp_path, png_bytes):
    path = tmp_path / 'image.png'
    path.write_bytes(png_bytes)

    return path
