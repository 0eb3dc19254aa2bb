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
Field extraction helpers shared by every record.

The policy is the same everywhere:

    absent, required         MissingField(name)
    absent, optional         the field's default (None unless stated)
    present, wrong tag type  InvalidField(name), never the default
    present, right type      the decoded value

Codecs describe the tag shape of one field and convert in both directions.
Field objects tie a codec to a tag name, an attribute name and the
required/default policy, much like a Setting does for config values.
"""

import copy
import uuid

from . import nbt
from .errors import MissingField, InvalidField
from .nbt import Tag, TagList, Compound


def get_required(compound, name, tagid):
    """Returns the payload of the tag `name`, which must exist and be of type
    `tagid`."""
    tag = compound.get(name)
    if tag is None:
        raise MissingField(name)
    if tag.tagid != tagid:
        raise InvalidField(name)
    return tag.value


def get_optional(compound, name, tagid, default=None):
    tag = compound.get(name)
    if tag is None:
        return default
    if tag.tagid != tagid:
        raise InvalidField(name)
    return tag.value


def decode_list(taglist, decoder, name):
    """Runs `decoder` over every compound of a list tag and returns the
    results. The first failure propagates. A list of anything but compounds
    is an InvalidField."""
    if taglist is None:
        return []
    compounds = taglist.as_compounds()
    if compounds is None:
        raise InvalidField(name)
    return [decoder(c) for c in compounds]


class Codec(object):
    """Converts between one tag and a Python value.

    Subclasses set `tagid` and override from_payload/to_payload. Codecs whose
    value can take more than one tag shape override decode/encode instead.

    """
    tagid = None

    def decode(self, tag, name):
        if tag.tagid != self.tagid:
            raise InvalidField(name)
        return self.from_payload(tag.value, name)

    def encode(self, value):
        return Tag(self.tagid, self.to_payload(value))

    def from_payload(self, value, name):
        return value

    def to_payload(self, value):
        return value


class Scalar(Codec):
    def __init__(self, tagid):
        self.tagid = tagid

    def __repr__(self):
        return "Scalar(%s)" % nbt.TAG_NAMES[self.tagid]


class Bool(Codec):
    """A byte tag read as a flag"""
    tagid = nbt.TAG_BYTE

    def from_payload(self, value, name):
        return value != 0

    def to_payload(self, value):
        return 1 if value else 0


class Array(Codec):
    """Int and long arrays, as tuples. With a `length`, any other length is
    an InvalidField."""
    def __init__(self, tagid, length=None):
        self.tagid = tagid
        self.length = length

    def from_payload(self, value, name):
        if self.length is not None and len(value) != self.length:
            raise InvalidField(name)
        return tuple(value)

    def to_payload(self, value):
        return tuple(value)


class ByteArray(Codec):
    tagid = nbt.TAG_BYTE_ARRAY

    def from_payload(self, value, name):
        return bytes(value)

    def to_payload(self, value):
        return bytes(value)


def _signed32(n):
    return n - (1 << 32) if n & 0x80000000 else n


class Uuid(Codec):
    """A UUID stored as four ints, most significant first"""
    tagid = nbt.TAG_INT_ARRAY

    def from_payload(self, value, name):
        if len(value) != 4:
            raise InvalidField(name)
        n = 0
        for part in value:
            n = (n << 32) | (part & 0xFFFFFFFF)
        return uuid.UUID(int=n)

    def to_payload(self, value):
        n = value.int
        return tuple(_signed32((n >> shift) & 0xFFFFFFFF) for shift in (96, 64, 32, 0))


class Raw(Codec):
    """An untouched compound. The record gets its own copy of it."""
    tagid = nbt.TAG_COMPOUND

    def from_payload(self, value, name):
        return copy.deepcopy(value)

    def to_payload(self, value):
        return copy.deepcopy(value)


class Nested(Codec):
    """A compound decoded by a record class (anything with from_compound)"""
    tagid = nbt.TAG_COMPOUND

    def __init__(self, record):
        self.record = record

    def from_payload(self, value, name):
        return self.record.from_compound(value)

    def to_payload(self, value):
        return value.to_compound()


class ListOf(Codec):
    tagid = nbt.TAG_LIST

    def __init__(self, codec, length=None):
        self.codec = codec
        self.length = length

    def from_payload(self, value, name):
        if self.length is not None and len(value) != self.length:
            raise InvalidField(name)
        if self.codec.tagid == nbt.TAG_COMPOUND:
            return decode_list(value, lambda c: self.codec.from_payload(c, name), name)
        if value and value.elemid != self.codec.tagid:
            raise InvalidField(name)
        return [self.codec.from_payload(item, name) for item in value]

    def to_payload(self, value):
        if not value:
            return TagList(nbt.TAG_END)
        return TagList(self.codec.tagid, [self.codec.to_payload(v) for v in value])


class DictOf(Codec):
    """A compound whose every value has the same shape, read into a dict"""
    tagid = nbt.TAG_COMPOUND

    def __init__(self, codec):
        self.codec = codec

    def from_payload(self, value, name):
        return dict((key, self.codec.decode(tag, key)) for key, tag in value.items())

    def to_payload(self, value):
        tree = Compound()
        for key, item in value.items():
            tree[key] = self.codec.encode(item)
        return tree


class Choice(Codec):
    """Wraps another codec, allowing only the listed values"""
    def __init__(self, codec, choices):
        self.codec = codec
        self.tagid = codec.tagid
        self.choices = tuple(choices)

    def from_payload(self, value, name):
        value = self.codec.from_payload(value, name)
        if value not in self.choices:
            raise InvalidField(name)
        return value

    def to_payload(self, value):
        return self.codec.to_payload(value)


BYTE = Scalar(nbt.TAG_BYTE)
SHORT = Scalar(nbt.TAG_SHORT)
INT = Scalar(nbt.TAG_INT)
LONG = Scalar(nbt.TAG_LONG)
FLOAT = Scalar(nbt.TAG_FLOAT)
DOUBLE = Scalar(nbt.TAG_DOUBLE)
STRING = Scalar(nbt.TAG_STRING)
BOOL = Bool()
BYTE_ARRAY = ByteArray()
INT_ARRAY = Array(nbt.TAG_INT_ARRAY)
LONG_ARRAY = Array(nbt.TAG_LONG_ARRAY)
UUID = Uuid()
RAW = Raw()

STRINGS = ListOf(STRING)
UUIDS = ListOf(UUID)
POS3 = Array(nbt.TAG_INT_ARRAY, 3)


def IntArray(length):
    return Array(nbt.TAG_INT_ARRAY, length)


def DoubleList(length):
    return ListOf(DOUBLE, length)


def FloatList(length):
    return ListOf(FLOAT, length)


class Field(object):
    """One named field of a record.

    attr
        the Python attribute name on the record
    name
        the tag name in the compound
    codec
        how to read and write the tag
    required
        absence is a MissingField
    default
        what absence decodes to for an optional field

    """
    __slots__ = ['attr', 'name', 'codec', 'required', 'default']

    def __init__(self, attr, name, codec, required=False, default=None):
        self.attr = attr
        self.name = name
        self.codec = codec
        self.required = required
        self.default = default

    def __repr__(self):
        return "Field(%r, %r)" % (self.attr, self.name)

    def get_default(self):
        if isinstance(self.default, (list, dict)):
            return copy.copy(self.default)
        return self.default

    def extract(self, compound):
        tag = compound.get(self.name)
        if tag is None:
            if self.required:
                raise MissingField(self.name)
            return self.get_default()
        return self.codec.decode(tag, self.name)

    def insert(self, compound, value):
        """The inverse of extract(): absent values and values equal to the
        default are left out."""
        if value is None:
            if self.required:
                raise ValueError("required field %r has no value" % (self.attr,))
            return
        if not self.required and self.default is not None and value == self.default:
            return
        compound[self.name] = self.codec.encode(value)


def custom_name_field():
    return Field('custom_name', 'CustomName', STRING)


def lock_field():
    return Field('lock', 'Lock', STRING)


def loot_table_fields():
    return [Field('loot_table', 'LootTable', STRING),
            Field('loot_table_seed', 'LootTableSeed', LONG)]
