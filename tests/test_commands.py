import pytest

from pngme import commands
from pngme.exceptions import ChunkNotFoundException
from pngme.images.png import PNGFile


def test_encode_decode(png_path):
    chunk = commands.encode(png_path, 'ruSt', 'hidden message')

    assert chunk.data.value == b'hidden message'
    assert commands.decode(png_path, 'ruSt') == 'hidden message'

    png = PNGFile(png_path.read_bytes())
    assert str(png.chunks[-1].type.value) == 'ruSt'


def test_encode_output_file(tmp_path, png_path, png_bytes):
    output_path = tmp_path / 'output.png'

    commands.encode(png_path, 'ruSt', 'hidden message', output_path)

    assert png_path.read_bytes() == png_bytes
    assert commands.decode(output_path, 'ruSt') == 'hidden message'


def test_decode_missing(png_path):
    assert commands.decode(png_path, 'ruSt') is None


def test_remove(png_path, png_bytes):
    commands.encode(png_path, 'ruSt', 'hidden message')

    chunk = commands.remove(png_path, 'ruSt')

    assert chunk.data.value == b'hidden message'
    assert png_path.read_bytes() == png_bytes


def test_remove_missing(png_path):
    with pytest.raises(ChunkNotFoundException):
        commands.remove(png_path, 'ruSt')


def test_print_chunks(png_path):
    lines = commands.print_chunks(png_path)

    assert len(lines) == 3
    assert lines[0].startswith('[00] FrSt length=20')
    assert lines[1].startswith('[01] miDl')


def test_main_print(png_path, capsys):
    assert commands.main(['pngme', 'print', str(png_path)]) == 0

    out = capsys.readouterr().out
    assert 'FrSt' in out
    assert 'LASt' in out


def test_main_encode_decode(png_path, capsys):
    assert commands.main(['pngme', 'encode', str(png_path), 'ruSt', 'hello']) == 0
    assert commands.main(['pngme', 'decode', str(png_path), 'ruSt']) == 0

    assert capsys.readouterr().out == 'hello\n'


def test_main_decode_missing(png_path):
    assert commands.main(['pngme', 'decode', str(png_path), 'ruSt']) == 1


@pytest.mark.parametrize('argv', [
    ['pngme'],
    ['pngme', 'unknown'],
    ['pngme', 'print'],
    ['pngme', 'decode', 'image.png'],
])
def test_main_usage(argv, capsys):
    assert commands.main(argv) == 1
    assert 'usage' in capsys.readouterr().out


def test_main_invalid_type(png_path):
    assert commands.main(['pngme', 'encode', str(png_path), 'Ru1t', 'hello']) == 1


def test_main_not_a_png(tmp_path):
    path = tmp_path / 'not.png'
    path.write_bytes(b'just some text')

    assert commands.main(['pngme', 'print', str(path)]) == 1


def test_main_missing_file(tmp_path):
    assert commands.main(['pngme', 'print', str(tmp_path / 'missing.png')]) == 1


def test_encode_decode_non_ascii(png_path):
    commands.encode(png_path, 'ruSt', 'café ☃')

    assert commands.decode(png_path, 'ruSt') == 'café ☃'
    assert PNGFile(png_path.read_bytes()).chunk_by_type('ruSt').data.value == 'café ☃'.encode('utf-8')


def test_main_decode_non_ascii(png_path, capsys):
    commands.encode(png_path, 'ruSt', 'żółw')

    assert commands.main(['pngme', 'decode', str(png_path), 'ruSt']) == 0
    assert capsys.readouterr().out == 'żółw\n'
