"""
# pngme: chunk-level manipulation of PNG files.

A file format is described declaratively: a Chunk is an ordered composition
of fields declared as class attributes, and each field knows how to read
and write its own binary representation.

Two basic main operations are defined for the file format and its sub components:

 1. unpack(): the more straightforward, i.e., reading the binary data
    and build a high-level representation of that. The whole data is
    in memory and each field reads exactly the bytes it needs, failing
    if they are not there.

 2. pack(): encode the high-level representation into binary data.

to these we add one more

 3. relayout(): recalculate offsets and the values that depend on other
    fields (lengths, checksums) so that packing gives a consistent result.
    Packing always implies a relayouting.

The PNG format is declared in pngme.images.png; pngme.commands is the only
place where files are read and written.
"""
