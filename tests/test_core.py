import pytest

from pngme.core import Chunk
from pngme.exceptions import TruncatedInputException
from pngme.fields import StructField, StringField
from pngme.meta import Meta
from pngme.properties import Dependency


def test_meta():
    class Dummy(Chunk):
        field = StructField('i')

    class Dummy2(Chunk):
        field2 = StructField('i')
        field3 = StructField('i')

    assert isinstance(Dummy._meta, Meta)
    assert Dummy._meta.fields == ['field']
    assert Dummy2._meta.fields == ['field2', 'field3']
    assert isinstance(Dummy().field, StructField)


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert dummy.a.size == 4
    assert dummy.a.raw == b'\xad\x0b\x00\x00'
    assert dummy.a.value == 0xbad
    assert dummy.a.offset == 0x00
    assert dummy.a.father == dummy

    assert dummy.b.size == 0x10
    assert dummy.b.raw == b'\x00' * 0x10
    assert dummy.b.offset == 0x04

    assert dummy.c.size == 0x4
    assert dummy.c.raw == b'\xef\xbe\xad\xde'
    assert dummy.c.offset == 0x14

    assert dummy.size == 0x18
    assert len(dummy.raw) == dummy.size
    assert dummy.raw == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )


def test_instances_dont_share_fields():
    class Dummy(Chunk):
        a = StructField('I')

    first, second = Dummy(), Dummy()
    first.a.value = 0xcafe

    assert second.a.value == 0


def test_set_field_through_descriptor():
    class Dummy(Chunk):
        a = StructField('I')

    dummy = Dummy()
    dummy.a = 0x10

    assert dummy.a.value == 0x10


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'), default=b'kebab')

    example = Example()

    assert list(example.data.get_dependencies().keys()) == ['length']
    assert example.sz.father == example
    assert example.sz.value == 5
    assert example.data.value == b'kebab'


def test_sub_chunk():
    class Inner(Chunk):
        a = StructField('H')

    class Outer(Chunk):
        inner = Inner()
        b = StringField(0x03)

    outer = Outer(b'\x01\x02abc')

    assert outer.inner.a.value == 0x0201
    assert outer.b.value == b'abc'
    assert outer.layout == {
        'inner': (0, 2),
        'b': (2, 3),
    }


def test_offset_dependencies():
    class TLV(Chunk):
        type   = StructField('I')
        length = StructField('I')
        data   = StringField(Dependency('.length'))
        extra  = StructField('I')

    tlv = TLV((
        b'\x01\x00\x00\x00'
        b'\x0f\x00\x00\x00'
        b'\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41'
        b'\x0a\x0b\x0c\x0d'
    ))

    assert tlv.type.value == 0x01
    assert tlv.type.offset == 0x00
    assert tlv.length.value == 0x0f
    assert tlv.length.offset == 0x04
    assert tlv.data.value == b'\x41' * 0x0f
    assert tlv.data.offset == 0x04 + 0x04
    assert tlv.extra.value == 0x0d0c0b0a
    assert tlv.extra.offset == 0x04 + 0x04 + 0x0f

    # now try to change the data field's size and verify that
    # the offset for extra is recalculated and the size field
    # also is updated accordingly
    tlv.data.value = b'\x42\x42\x42'
    raw = tlv.pack()

    assert tlv.length.value == 0x03
    assert tlv.data.offset == 0x04 + 0x04
    assert tlv.extra.offset == 0x04 + 0x04 + 0x03
    assert raw == (
        b'\x01\x00\x00\x00'
        b'\x03\x00\x00\x00'
        b'\x42\x42\x42'
        b'\x0a\x0b\x0c\x0d'
    )


def test_truncated_chain():
    class TLV(Chunk):
        length = StructField('I')
        data   = StringField(Dependency('.length'))

    with pytest.raises(TruncatedInputException) as excinfo:
        TLV(b'\x0f\x00\x00\x00AAA')

    assert excinfo.value.chain == ['data']
    assert 'data' in str(excinfo.value)
