import logging
from typing import Optional


logger = logging.getLogger(__name__)


def index_of_chunk(chunks, chunk_type) -> Optional[int]:
    '''Linear scan of the chunks returning the position of the first one with
    the given type (a ChunkType or its textual representation), None if absent.'''
    name = str(chunk_type)

    for idx, chunk in enumerate(chunks):
        if str(chunk.type.value) == name:
            return idx

    logger.debug(f'no chunk with type {name!r}')

    return None


def get_chunk_by_type(chunks, chunk_type):
    idx = index_of_chunk(chunks, chunk_type)

    return chunks[idx] if idx is not None else None
