#    This file is part of Sculk.
#
#    Sculk is free software: you can redistribute it and/or
#    modify it under the terms of the GNU General Public License as published
#    by the Free Software Foundation, either version 3 of the License, or (at
#    your option) any later version.
#
#    Sculk is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General
#    Public License for more details.
#
#    You should have received a copy of the GNU General Public License along
#    with Sculk.  If not, see <http://www.gnu.org/licenses/>.

"""
Reading and writing of the Named Binary Tag format.

The reader keeps every tag's type next to its payload, so callers can tell a
missing tag from one of the wrong type, and so a tree that was read can be
written back out byte for byte.
"""

import functools
import gzip
import io
import logging
import struct
import zlib

TAG_END = 0
TAG_BYTE = 1
TAG_SHORT = 2
TAG_INT = 3
TAG_LONG = 4
TAG_FLOAT = 5
TAG_DOUBLE = 6
TAG_BYTE_ARRAY = 7
TAG_STRING = 8
TAG_LIST = 9
TAG_COMPOUND = 10
TAG_INT_ARRAY = 11
TAG_LONG_ARRAY = 12

TAG_NAMES = {
    TAG_END: "TAG_End",
    TAG_BYTE: "TAG_Byte",
    TAG_SHORT: "TAG_Short",
    TAG_INT: "TAG_Int",
    TAG_LONG: "TAG_Long",
    TAG_FLOAT: "TAG_Float",
    TAG_DOUBLE: "TAG_Double",
    TAG_BYTE_ARRAY: "TAG_Byte_Array",
    TAG_STRING: "TAG_String",
    TAG_LIST: "TAG_List",
    TAG_COMPOUND: "TAG_Compound",
    TAG_INT_ARRAY: "TAG_Int_Array",
    TAG_LONG_ARRAY: "TAG_Long_Array",
}


class CorruptionError(Exception):
    pass
class CorruptNBTError(CorruptionError):
    """An exception raised when the NBTFileReader class encounters
    something unexpected in an NBT stream."""
    pass


# decorator that turns the first argument from a string into an open file
# handle
def _file_loader(func):
    @functools.wraps(func)
    def wrapper(fileobj, *args, **kwargs):
        if isinstance(fileobj, str):
            # Is actually a filename
            with open(fileobj, 'rb', 4096) as f:
                return func(f, *args, **kwargs)
        return func(fileobj, *args, **kwargs)
    return wrapper


def detect_compression(buf):
    """Guess how a buffer is compressed from its first bytes. Returns one of
    "gzip", "zlib" or "none"."""
    if buf[:2] == b'\x1f\x8b':
        return "gzip"
    if buf[:1] == b'\x78':
        return "zlib"
    return "none"


def decompress(buf, compression="auto"):
    if compression == "auto":
        compression = detect_compression(buf)
    try:
        if compression == "gzip":
            return gzip.decompress(buf)
        if compression == "zlib":
            return zlib.decompress(buf)
    except (OSError, EOFError, zlib.error) as e:
        raise CorruptNBTError("could not decompress nbt: %s" % (e,))
    return bytes(buf)


def _decode_mutf8(raw):
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass
    # Java writes NUL as C0 80 and supplementary characters as two encoded
    # surrogates
    text = raw.replace(b'\xc0\x80', b'\x00').decode("utf-8", "surrogatepass")
    return text.encode("utf-16-be", "surrogatepass").decode("utf-16-be")


def _encode_mutf8(text):
    if any(ord(c) > 0xFFFF for c in text):
        units = text.encode("utf-16-be")
        text = "".join(chr(int.from_bytes(units[i:i + 2], "big"))
                       for i in range(0, len(units), 2))
    return text.encode("utf-8", "surrogatepass").replace(b'\x00', b'\xc0\x80')


class Tag(object):
    """A single typed value in a tag tree"""
    __slots__ = ['tagid', 'value']

    def __init__(self, tagid, value):
        self.tagid = tagid
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return self.tagid == other.tagid and self.value == other.value

    __hash__ = None

    def __repr__(self):
        return "Tag(%s, %r)" % (TAG_NAMES.get(self.tagid, self.tagid), self.value)


class TagList(list):
    """A list tag. Every item is a bare payload of the element type
    `elemid`. Empty lists are usually written with an element type of
    TAG_End.

    """
    def __init__(self, elemid=TAG_END, items=()):
        list.__init__(self, items)
        self.elemid = elemid

    def __eq__(self, other):
        if isinstance(other, TagList) and self.elemid != other.elemid:
            return False
        return list.__eq__(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return "TagList(%s, %s)" % (TAG_NAMES.get(self.elemid, self.elemid),
                                    list.__repr__(self))

    def _items_of(self, elemid):
        if not self:
            return []
        if self.elemid != elemid:
            return None
        return list(self)

    def as_compounds(self):
        return self._items_of(TAG_COMPOUND)

    def as_strings(self):
        return self._items_of(TAG_STRING)

    def as_lists(self):
        return self._items_of(TAG_LIST)

    def as_int_arrays(self):
        return self._items_of(TAG_INT_ARRAY)

    def as_shorts(self):
        return self._items_of(TAG_SHORT)

    def as_ints(self):
        return self._items_of(TAG_INT)

    def as_longs(self):
        return self._items_of(TAG_LONG)

    def as_floats(self):
        return self._items_of(TAG_FLOAT)

    def as_doubles(self):
        return self._items_of(TAG_DOUBLE)


class Compound(dict):
    """A compound tag: an ordered mapping of names to Tag objects.

    The get_* accessors return the bare payload, or None if the name is
    absent or holds a different tag type. Use has() or get() to tell the two
    cases apart.

    """

    def _typed(self, name, tagid):
        tag = dict.get(self, name)
        if tag is None or tag.tagid != tagid:
            return None
        return tag.value

    def has(self, name):
        return name in self

    def get_byte(self, name):
        return self._typed(name, TAG_BYTE)

    def get_short(self, name):
        return self._typed(name, TAG_SHORT)

    def get_int(self, name):
        return self._typed(name, TAG_INT)

    def get_long(self, name):
        return self._typed(name, TAG_LONG)

    def get_float(self, name):
        return self._typed(name, TAG_FLOAT)

    def get_double(self, name):
        return self._typed(name, TAG_DOUBLE)

    def get_string(self, name):
        return self._typed(name, TAG_STRING)

    def get_byte_array(self, name):
        return self._typed(name, TAG_BYTE_ARRAY)

    def get_int_array(self, name):
        return self._typed(name, TAG_INT_ARRAY)

    def get_long_array(self, name):
        return self._typed(name, TAG_LONG_ARRAY)

    def get_list(self, name):
        return self._typed(name, TAG_LIST)

    def get_compound(self, name):
        return self._typed(name, TAG_COMPOUND)

    # Builders, mostly for tests and for the reverse direction. Each returns
    # the compound so calls can be chained.
    def put(self, name, tagid, value):
        self[name] = Tag(tagid, value)
        return self

    def put_byte(self, name, value):
        return self.put(name, TAG_BYTE, value)

    def put_short(self, name, value):
        return self.put(name, TAG_SHORT, value)

    def put_int(self, name, value):
        return self.put(name, TAG_INT, value)

    def put_long(self, name, value):
        return self.put(name, TAG_LONG, value)

    def put_float(self, name, value):
        return self.put(name, TAG_FLOAT, value)

    def put_double(self, name, value):
        return self.put(name, TAG_DOUBLE, value)

    def put_string(self, name, value):
        return self.put(name, TAG_STRING, value)

    def put_byte_array(self, name, value):
        return self.put(name, TAG_BYTE_ARRAY, bytes(value))

    def put_int_array(self, name, value):
        return self.put(name, TAG_INT_ARRAY, tuple(value))

    def put_long_array(self, name, value):
        return self.put(name, TAG_LONG_ARRAY, tuple(value))

    def put_list(self, name, elemid, items):
        return self.put(name, TAG_LIST, TagList(elemid, items))

    def put_compound(self, name, value):
        return self.put(name, TAG_COMPOUND, value)


class NBTFileReader(object):
    """Low level class that reads the Named Binary Tag format used by Minecraft

    """

    # compile the unpacker's into a classes
    _byte   = struct.Struct(">b")
    _ubyte  = struct.Struct(">B")
    _short  = struct.Struct(">h")
    _ushort = struct.Struct(">H")
    _int    = struct.Struct(">i")
    _long   = struct.Struct(">q")
    _float  = struct.Struct(">f")
    _double = struct.Struct(">d")

    # payload sizes of the fixed width tags, used when skipping
    _fixed_sizes = {
        TAG_BYTE: 1,
        TAG_SHORT: 2,
        TAG_INT: 4,
        TAG_LONG: 8,
        TAG_FLOAT: 4,
        TAG_DOUBLE: 8,
    }

    def __init__(self, fileobj, compression=None):
        """Create a NBT parsing object with the given file-like object.
        `compression` may be "gzip", "zlib" or "auto" to decompress the whole
        stream first; the default reads it as raw tag data."""
        if compression and compression != "none":
            self._file = io.BytesIO(decompress(fileobj.read(), compression))
        else:
            self._file = fileobj

        # mapping of NBT type ids to functions to read them out
        self._read_tagmap = {
            TAG_BYTE: self._read_tag_byte,
            TAG_SHORT: self._read_tag_short,
            TAG_INT: self._read_tag_int,
            TAG_LONG: self._read_tag_long,
            TAG_FLOAT: self._read_tag_float,
            TAG_DOUBLE: self._read_tag_double,
            TAG_BYTE_ARRAY: self._read_tag_byte_array,
            TAG_STRING: self._read_tag_string,
            TAG_LIST: self._read_tag_list,
            TAG_COMPOUND: self._read_tag_compound,
            TAG_INT_ARRAY: self._read_tag_int_array,
            TAG_LONG_ARRAY: self._read_tag_long_array,
        }

    def _read(self, length):
        data = self._file.read(length)
        if len(data) != length:
            raise CorruptNBTError("unexpected end of data (wanted %d bytes, got %d)"
                                  % (length, len(data)))
        return data

    def _read_length(self):
        length = self._int.unpack(self._read(4))[0]
        if length < 0:
            raise CorruptNBTError("negative length %d" % (length,))
        return length

    def _reader_for(self, tagid):
        try:
            return self._read_tagmap[tagid]
        except KeyError:
            raise CorruptNBTError("unknown tag type %d" % (tagid,))

    # These private methods read the payload only of the following types
    def _read_tag_byte(self):
        return self._byte.unpack(self._read(1))[0]

    def _read_tag_short(self):
        return self._short.unpack(self._read(2))[0]

    def _read_tag_int(self):
        return self._int.unpack(self._read(4))[0]

    def _read_tag_long(self):
        return self._long.unpack(self._read(8))[0]

    def _read_tag_float(self):
        return self._float.unpack(self._read(4))[0]

    def _read_tag_double(self):
        return self._double.unpack(self._read(8))[0]

    def _read_tag_byte_array(self):
        length = self._read_length()
        return self._read(length)

    def _read_tag_int_array(self):
        length = self._read_length()
        return struct.unpack(">%di" % length, self._read(length * 4))

    def _read_tag_long_array(self):
        length = self._read_length()
        return struct.unpack(">%dq" % length, self._read(length * 8))

    def _read_tag_string(self):
        length = self._ushort.unpack(self._read(2))[0]
        return _decode_mutf8(self._read(length))

    def _read_tag_list(self):
        tagid = self._ubyte.unpack(self._read(1))[0]
        length = self._read_length()
        if tagid == TAG_END:
            if length:
                raise CorruptNBTError("list of TAG_End with %d items" % (length,))
            return TagList(TAG_END)

        read_method = self._reader_for(tagid)
        return TagList(tagid, [read_method() for _ in range(length)])

    def _read_tag_compound(self):
        # Build an ordered mapping of all the tag names to their tags
        tags = Compound()
        while True:
            tagtype = self._ubyte.unpack(self._read(1))[0]
            if tagtype == TAG_END:
                break

            name = self._read_tag_string()
            tags[name] = Tag(tagtype, self._reader_for(tagtype)())

        return tags

    def _skip_tag(self, tagid):
        if tagid in self._fixed_sizes:
            self._read(self._fixed_sizes[tagid])
        elif tagid == TAG_BYTE_ARRAY:
            self._read(self._read_length())
        elif tagid == TAG_INT_ARRAY:
            self._read(self._read_length() * 4)
        elif tagid == TAG_LONG_ARRAY:
            self._read(self._read_length() * 8)
        elif tagid == TAG_STRING:
            self._read(self._ushort.unpack(self._read(2))[0])
        elif tagid == TAG_LIST:
            elemid = self._ubyte.unpack(self._read(1))[0]
            length = self._read_length()
            if elemid in self._fixed_sizes:
                self._read(self._fixed_sizes[elemid] * length)
            else:
                for _ in range(length):
                    self._skip_tag(elemid)
        elif tagid == TAG_COMPOUND:
            while True:
                tagtype = self._ubyte.unpack(self._read(1))[0]
                if tagtype == TAG_END:
                    break
                self._skip_tag(TAG_STRING)
                self._skip_tag(tagtype)
        else:
            raise CorruptNBTError("unknown tag type %d" % (tagid,))

    def _read_root(self, read_body):
        try:
            first = self._file.read(1)
            if not first or first[0] == TAG_END:
                logging.debug("NBT stream has no root tag")
                return None
            if first[0] != TAG_COMPOUND:
                raise CorruptNBTError("expected a root compound, got %s"
                                      % TAG_NAMES.get(first[0], first[0]))

            # Read the tag name
            name = self._read_tag_string()
            return (name, read_body())
        except (struct.error, ValueError, TypeError, RecursionError) as e:
            raise CorruptNBTError("could not parse nbt: %s" % (e,))

    def read_all(self):
        """Reads the entire stream and returns (name, payload)
        name is the name of the root tag, and payload is a Compound mapping
        names to their tags. Returns None if the stream holds no root tag.

        """
        return self._read_root(self._read_tag_compound)

    def read_header(self, names):
        """Like read_all(), but only the top level tags named in `names` are
        read into the returned compound. Everything else, including every
        nested compound or list not asked for, is skipped over without being
        built.

        """
        names = frozenset(names)

        def read_body():
            tags = Compound()
            while True:
                tagtype = self._ubyte.unpack(self._read(1))[0]
                if tagtype == TAG_END:
                    break
                name = self._read_tag_string()
                if name in names:
                    tags[name] = Tag(tagtype, self._reader_for(tagtype)())
                else:
                    self._skip_tag(tagtype)
            return tags

        return self._read_root(read_body)


class NBTFileWriter(object):
    """Writes tag trees, as built by NBTFileReader, back out to a file-like
    object.

    """

    _byte   = struct.Struct(">b")
    _ubyte  = struct.Struct(">B")
    _short  = struct.Struct(">h")
    _ushort = struct.Struct(">H")
    _int    = struct.Struct(">i")
    _long   = struct.Struct(">q")
    _float  = struct.Struct(">f")
    _double = struct.Struct(">d")

    def __init__(self, fileobj):
        self._file = fileobj

        self._write_tagmap = {
            TAG_BYTE: self._write_tag_byte,
            TAG_SHORT: self._write_tag_short,
            TAG_INT: self._write_tag_int,
            TAG_LONG: self._write_tag_long,
            TAG_FLOAT: self._write_tag_float,
            TAG_DOUBLE: self._write_tag_double,
            TAG_BYTE_ARRAY: self._write_tag_byte_array,
            TAG_STRING: self._write_tag_string,
            TAG_LIST: self._write_tag_list,
            TAG_COMPOUND: self._write_tag_compound,
            TAG_INT_ARRAY: self._write_tag_int_array,
            TAG_LONG_ARRAY: self._write_tag_long_array,
        }

    def _writer_for(self, tagid):
        try:
            return self._write_tagmap[tagid]
        except KeyError:
            raise ValueError("cannot write tag type %r" % (tagid,))

    def _write_tag_byte(self, value):
        self._file.write(self._byte.pack(value))

    def _write_tag_short(self, value):
        self._file.write(self._short.pack(value))

    def _write_tag_int(self, value):
        self._file.write(self._int.pack(value))

    def _write_tag_long(self, value):
        self._file.write(self._long.pack(value))

    def _write_tag_float(self, value):
        self._file.write(self._float.pack(value))

    def _write_tag_double(self, value):
        self._file.write(self._double.pack(value))

    def _write_tag_byte_array(self, value):
        self._file.write(self._int.pack(len(value)))
        self._file.write(bytes(value))

    def _write_tag_int_array(self, value):
        self._file.write(self._int.pack(len(value)))
        self._file.write(struct.pack(">%di" % len(value), *value))

    def _write_tag_long_array(self, value):
        self._file.write(self._int.pack(len(value)))
        self._file.write(struct.pack(">%dq" % len(value), *value))

    def _write_tag_string(self, value):
        data = _encode_mutf8(value)
        self._file.write(self._ushort.pack(len(data)))
        self._file.write(data)

    def _write_tag_list(self, value):
        elemid = getattr(value, 'elemid', TAG_END)
        if value and elemid == TAG_END:
            raise ValueError("non-empty list has no element type")
        self._file.write(self._ubyte.pack(elemid))
        self._file.write(self._int.pack(len(value)))
        if value:
            write_method = self._writer_for(elemid)
            for item in value:
                write_method(item)

    def _write_tag_compound(self, value):
        for name, tag in value.items():
            self._file.write(self._ubyte.pack(tag.tagid))
            self._write_tag_string(name)
            self._writer_for(tag.tagid)(tag.value)
        self._file.write(self._ubyte.pack(TAG_END))

    def write_all(self, name, payload):
        """Writes `payload`, a Compound, as a root compound called `name`"""
        try:
            self._file.write(self._ubyte.pack(TAG_COMPOUND))
            self._write_tag_string(name)
            self._write_tag_compound(payload)
        except struct.error as e:
            raise ValueError("could not write nbt: %s" % (e,))


@_file_loader
def load(fileobj, compression="auto"):
    """Reads in the given file as NBT format, parses it, and returns the
    result as a (name, data) tuple, or None for an empty document.
    """
    return NBTFileReader(fileobj, compression).read_all()


def loads(buf, compression="none"):
    """Parses a bytes object. Same result as load()."""
    return NBTFileReader(io.BytesIO(buf), compression).read_all()


def dumps(payload, name="", compression="none"):
    """Renders a Compound as a complete NBT document"""
    out = io.BytesIO()
    NBTFileWriter(out).write_all(name, payload)
    data = out.getvalue()
    if compression == "gzip":
        return gzip.compress(data)
    if compression == "zlib":
        return zlib.compress(data)
    return data
