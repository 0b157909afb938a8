"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct
from typing import Dict

from .meta import FieldBase, Endianess
from .properties import Dependency, PropertyDescriptor
from .exceptions import FormatException, BadPreambleException


logger = logging.getLogger(__name__)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, is_magic=False):
        super().__init__()
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute name"""
        instance_dict = self.__dict__
        return {_k: _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def relayout(self, offset=0):
        self.offset = offset
        self._update_value()

        return self.size

    def _update_value(self):
        '''This is used to update the binary value before packing'''
        pass

    def changed(self):
        '''Tell the enclosing chunks that their encoding needs a relayout.'''
        if self.father is not None:
            self.father.changed()

    def pack(self, stream=None, relayout=True):
        '''Encode the field, writing it into the stream if one is passed.

        The relayout updates the fields that depend on other fields so
        this operation is not idempotent!'''
        if relayout:
            self.relayout()

        raw = self.raw

        if stream is not None:
            stream.write(raw)

        return raw

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def unpack(self, stream):
        raw = stream.read_exact(self.size)
        self.value = struct.unpack(self.get_format(), raw)[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be a Dependency, in that case setting the value writes back
    the new length where the Dependency points."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'\x00' * (self.length or 0)

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        """The StringField has the size as a parameter and we must follow that indication
        unless it's a Dependency, in that case we are going to write back the value where necessary."""
        value = bytes(value)
        length = len(value)
        if 'length' not in self.get_dependencies() and length != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        self._value = value
        self.length = length
        self.changed()

    def _update_value(self):
        if 'length' in self.get_dependencies():
            self.length = len(self._value)

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        if self.is_magic:
            raw = stream.read(self.length)
            if raw != self.default:
                logger.debug('the magic doesn\'t correspond: %r' % raw)
                raise BadPreambleException(message=f'expected magic {self.default!r}, found {raw!r}')
        else:
            raw = stream.read_exact(self.length)

        # the length is already in place, no need to write it back
        self._value = raw


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    The elements are unpacked one after the other until the stream is
    exhausted, an element that can't be completed makes the whole
    unpacking fail.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls

        if 'default' not in kw:
            kw['default'] = []

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default)

    def clear(self):
        self.value.clear()

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def relayout(self, offset=0):
        self.offset = offset
        size = 0
        for element in self.value:
            size += element.relayout(offset=offset + size)

        return size

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self.value = []

        while not stream.at_end():
            element = self.instance_element()
            try:
                element.unpack(stream)
            except FormatException as e:
                e.chain.append(f'[{len(self.value)}]')
                raise
            self.value.append(element)

        logger.debug('unpacked %d elements for \'%s\'' % (len(self.value), self.name))

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, index=-1):
        element = self.value.pop(index)
        element.father = None

        return element
