'''
Commands operating on PNG files: hide a message inside a chunk, read it back,
remove it and list the chunks of a file.

This is the only module reading and writing files, the format itself works
with bytes.
'''
import logging
from typing import List, Optional

from .images.png import PNGFile, PNGChunk
from .exceptions import FormatException


logger = logging.getLogger(__name__)


def read_png(path) -> PNGFile:
    logger.debug(f'reading {path}')
    with open(path, 'rb') as f:
        return PNGFile(f.read())


def write_png(path, png: PNGFile):
    logger.debug(f'writing {path}')
    with open(path, 'wb') as f:
        f.write(png.as_bytes())


def encode(path, chunk_type, message: str, output_path=None) -> PNGChunk:
    png = read_png(path)

    chunk = PNGChunk.from_data(chunk_type, message.encode('utf-8'))
    png.append_chunk(chunk)

    write_png(output_path or path, png)
    logger.info(f'encoded {len(chunk.data.value)} bytes in chunk {chunk.type.value}')

    return chunk


def decode(path, chunk_type) -> Optional[str]:
    '''The message is read back as UTF-8, the encoding used by encode().'''
    chunk = read_png(path).chunk_by_type(chunk_type)

    if chunk is None:
        return None

    return chunk.data.value.decode('utf-8', errors='replace')


def remove(path, chunk_type) -> PNGChunk:
    png = read_png(path)

    chunk = png.remove_chunk(chunk_type)

    write_png(path, png)
    logger.info(f'removed chunk {chunk.type.value} from {path}')

    return chunk


def print_chunks(path) -> List[str]:
    png = read_png(path)

    return [f'[{idx:02d}] {chunk}' for idx, chunk in enumerate(png.chunks)]


USAGE = '''usage: {progname} <command> [arguments...]

Commands:
  encode <file> <chunk type> <message> [output file]
  decode <file> <chunk type>
  remove <file> <chunk type>
  print  <file>
'''

# number of arguments (minimum, maximum) for each command
COMMANDS = {
    'encode': (3, 4),
    'decode': (2, 2),
    'remove': (2, 2),
    'print':  (1, 1),
}


def usage(progname):
    print(USAGE.format(progname=progname))
    return 1


def main(argv) -> int:
    '''Dispatch the command line, it returns the exit status.'''
    progname = argv[0] if argv else 'pngme'

    if len(argv) < 2 or argv[1] not in COMMANDS:
        return usage(progname)

    command, args = argv[1], argv[2:]
    n_min, n_max = COMMANDS[command]

    if not n_min <= len(args) <= n_max:
        return usage(progname)

    try:
        if command == 'encode':
            encode(*args)
        elif command == 'decode':
            message = decode(*args)
            if message is None:
                logger.error(f'no chunk with type {args[1]!r} in {args[0]}')
                return 1
            print(message)
        elif command == 'remove':
            remove(*args)
        elif command == 'print':
            for line in print_chunks(*args):
                print(line)
    except (FormatException, ValueError, OSError) as e:
        logger.error(f'{command} failed: {e}')
        return 1

    return 0
