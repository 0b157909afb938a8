"""
Core module for the abstraction of a file format

"""
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import FormatException


logger = logging.getLogger(__name__)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: it's an ordered
    composition of fields, declared as class attributes, that are unpacked and
    packed one after the other in the order of declaration.

    A Chunk can contain sub-chunks.

    Passing raw data to the constructor unpacks it, otherwise the fields are
    initialized from their defaults and relayouted.
    """

    def __init__(self, raw=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if raw is not None:
            logger.debug('unpacking \'%s\' from %d bytes' % (self.__class__.__name__, len(raw)))
            self.unpack(Stream(raw))
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented

        return self.raw == other.raw

    __hash__ = None

    # set when a field was assigned by hand after the last relayout
    _dirty = False

    def changed(self):
        self._dirty = True
        super().changed()

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return self

    def _set_value(self, value) -> None:
        if value is not None and value is not self:
            raise ValueError(f'a {self.__class__.__name__} can\'t be assigned a value, set its fields')

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self) -> bytes:
        if self._dirty:
            logger.debug('relayouting modified %s' % self.__class__.__name__)
            self.relayout(offset=self.offset or 0)

        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            logger.debug("field '%s' raw=%r" % (field_name, field_raw[:16]))
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets
        and to update the values depending on other fields in order to pack
        correctly.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            logger.debug('relayouting %s.%s' % (self.__class__.__name__, field_name))
            size += field_instance.relayout(offset=offset + size)

        self._dirty = False

        return size

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read back-to-back; the first one failing aborts the
        unpacking and its exception is raised again with the name of the field
        appended to the chain.
        '''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            offset = stream.tell()

            try:
                field.unpack(stream)
            except FormatException as e:
                e.chain.append(field_name)
                raise

            field.offset = offset

        self._dirty = False
