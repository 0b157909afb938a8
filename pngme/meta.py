'''
Plumbing turning the class attributes of a Chunk into per-instance fields.

A PNGChunk declares `length`, `type`, `data` and `crc` once, as prototypes
on the class; every instance gets its own deep copy, created the first time
the attribute is read and bound to the instance as its father.
'''
import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Class-level slot for a declared field.

    Reading `chunk.crc` returns the CRCField owned by that chunk, assigning
    `chunk.crc = 0x1234` stores the number as the value of that field, while
    assigning a field instance replaces the field itself."""

    def __init__(self, prototype: "Field", field_name: str):
        self.prototype = prototype
        self.prototype.name = field_name

    @property
    def name(self):
        return self.prototype.name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.prototype

        owned = instance.__dict__

        if self.name not in owned:
            logger.debug("binding field '%s' to %s", self.name, owner.__name__ if owner else '?')
            owned[self.name] = self.prototype.create(father=instance)

        return owned[self.name]

    def __set__(self, instance, value):
        if isinstance(value, self.prototype.__class__):
            value.father = instance
            value.name = self.name
            instance.__dict__[self.name] = value
        else:
            self.__get__(instance, type(instance)).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if getattr(cls, name, None) is not None:
            raise AttributeError(f'{cls.__name__} already has an attribute named {name}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        '''A private copy of this prototype, bound to father.'''
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Per-class bookkeeping: the names of the fields in packing order."""

    def __init__(self):
        self.fields = []


class MetaChunk(type):

    def __new__(cls, names, bases, attrs):
        '''Fields are collected in declaration order, since this is the order
        they are laid out in the binary data; everything else is set on the
        class as usual.'''
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {
            '__module__': module,
        }
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super(MetaChunk, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if not isinstance(value, FieldBase):
            setattr(cls, name, value)
            return

        logger.debug("declaring field %s.%s" % (cls.__name__, name))
        cls._meta.fields.append(name)
        value.contribute_to_chunk(cls, name)
