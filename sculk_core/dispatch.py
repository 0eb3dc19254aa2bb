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
Picking a record type from the data itself.

Two shapes show up in the save format:

value shape
    the same tag name holds either a plain string id (a Reference) or a
    compound with the full data inline. See ValueShape and dispatch().

key enum
    a string id selects which record to build from the surrounding
    compound (block entities), or a compound's keys are themselves the ids
    (item data components). See KindTable and ComponentMap.

Ids that aren't in a table are never an error on their own. The data is
kept, untouched, in an Unknown so it can be written back out exactly as it
was read. A known id whose data fails to decode is always an error.
"""

import copy
import logging

from . import nbt
from .errors import MissingField, UnsupportedKind
from .fields import Codec, get_required
from .nbt import Tag, Compound


class Reference(object):
    """The "by id" side of a value shape field"""
    __slots__ = ['id']

    def __init__(self, id):
        self.id = id

    def __eq__(self, other):
        if not isinstance(other, Reference):
            return NotImplemented
        return self.id == other.id

    __hash__ = None

    def __repr__(self):
        return "Reference(%r)" % (self.id,)


class Unknown(object):
    """Data of a kind this library doesn't know about. `tag` is a private
    copy of the original tag."""
    __slots__ = ['tag']

    def __init__(self, tag):
        self.tag = tag

    @property
    def compound(self):
        if self.tag.tagid == nbt.TAG_COMPOUND:
            return self.tag.value
        return None

    def to_compound(self):
        return copy.deepcopy(self.tag.value)

    def __eq__(self, other):
        if not isinstance(other, Unknown):
            return NotImplemented
        return self.tag == other.tag

    __hash__ = None

    def __repr__(self):
        return "Unknown(%r)" % (self.tag,)


class ValueShape(Codec):
    """A field that is either a string id or an inline compound, decoded by
    the record class `inline`. Any other tag type raises MissingField, even
    for an optional field; it is never replaced by the default."""

    def __init__(self, inline):
        self.inline = inline

    def decode(self, tag, name):
        if tag.tagid == nbt.TAG_STRING:
            return Reference(tag.value)
        if tag.tagid == nbt.TAG_COMPOUND:
            return self.inline.from_compound(tag.value)
        raise MissingField(name)

    def encode(self, value):
        if isinstance(value, Reference):
            return Tag(nbt.TAG_STRING, value.id)
        return Tag(nbt.TAG_COMPOUND, value.to_compound())


class ByShape(Codec):
    """Like ValueShape, for fields whose alternatives aren't a string id
    and a compound (an int or a compound, a string or a list, ...).

    `shapes` is a list of (codec, python type) pairs. Decoding picks the
    codec by the tag type found; encoding picks it by the value's type.

    """

    def __init__(self, shapes):
        self.shapes = list(shapes)

    def decode(self, tag, name):
        for codec, _ in self.shapes:
            if codec.tagid == tag.tagid:
                return codec.decode(tag, name)
        raise MissingField(name)

    def encode(self, value):
        for codec, pytype in self.shapes:
            if isinstance(value, pytype):
                return codec.encode(value)
        raise ValueError("no tag shape for %r" % (value,))


def dispatch(tree, key_field, inline):
    """Value shape dispatch on `tree[key_field]`"""
    tag = tree.get(key_field)
    if tag is None:
        raise MissingField(key_field)
    return ValueShape(inline).decode(tag, key_field)


class KindTable(object):
    """A fixed table of kind ids to decoders.

    Decoders are record classes (or anything with a from_compound
    classmethod) for decode(), or codecs for decode_value().

    """

    def __init__(self, name, kinds):
        self.name = name
        self._kinds = dict(kinds)

    def __contains__(self, kind):
        return kind in self._kinds

    def supports(self, kind):
        return kind in self._kinds

    def ids(self):
        return sorted(self._kinds)

    def lookup(self, kind):
        return self._kinds.get(kind)

    def kind_name(self, kind):
        """Name of the variant `kind` decodes to, or "Unknown"."""
        decoder = self._kinds.get(kind)
        if decoder is None:
            return "Unknown"
        return decoder.__name__

    def _unknown(self, kind, tag, strict):
        if strict:
            raise UnsupportedKind(kind)
        logging.debug("Unrecognized %s %r, keeping it as opaque data", self.name, kind)
        return Unknown(copy.deepcopy(tag))

    def decode(self, tree, discriminant, strict=False):
        """Reads the kind id from `tree[discriminant]` and decodes `tree` with
        the matching record class."""
        kind = get_required(tree, discriminant, nbt.TAG_STRING)
        decoder = self._kinds.get(kind)
        if decoder is None:
            return self._unknown(kind, Tag(nbt.TAG_COMPOUND, tree), strict)
        return decoder.from_compound(tree)

    def decode_value(self, kind, tag, strict=False):
        """Decodes a single tag whose kind is given by its key"""
        codec = self._kinds.get(kind)
        if codec is None:
            return self._unknown(kind, tag, strict)
        return codec.decode(tag, kind)

    def encode_value(self, kind, value):
        if isinstance(value, Unknown):
            return copy.deepcopy(value.tag)
        return self._kinds[kind].encode(value)


def dispatch_by_enum(tree, discriminant, table, strict=False):
    return table.decode(tree, discriminant, strict)


class ComponentMap(Codec):
    """A compound of data components. Every key is a component id; the
    result is a dict of id to decoded value (or Unknown), in the original
    order."""
    tagid = nbt.TAG_COMPOUND

    def __init__(self, table):
        self.table = table

    def from_payload(self, value, name):
        return dict((key, self.table.decode_value(key, tag)) for key, tag in value.items())

    def to_payload(self, value):
        tree = Compound()
        for key, item in value.items():
            tree[key] = self.table.encode_value(key, item)
        return tree
