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

import io
import logging

from . import nbt
from . import settings
from .blockentities import BLOCK_ENTITY_KINDS
from .components import components_field
from .dispatch import Unknown
from .errors import NoData, ReaderError
from .fields import Field, INT, STRING, BOOL
from .record import Record, read_root

HEADER_TAGS = ('id', 'keepPacked', 'x', 'y', 'z')


def header_fields():
    return [
        Field('id', 'id', STRING, required=True),
        Field('keep_packed', 'keepPacked', BOOL, default=False),
        Field('x', 'x', INT, required=True),
        Field('y', 'y', INT, required=True),
        Field('z', 'z', INT, required=True),
    ]


class BlockEntityHeader(Record):
    """The tags every block entity has, whatever its kind"""
    fields = header_fields()


class BlockEntity(Record):
    """A block entity: the common header, its data components, and `kind`,
    the kind specific record from blockentities (or an Unknown holding the
    whole compound for ids that aren't in BLOCK_ENTITY_KINDS).

    """
    fields = header_fields() + [components_field()]

    def __init__(self, kind=None, **kwargs):
        Record.__init__(self, **kwargs)
        self.kind = kind

    @property
    def variant(self):
        """Class name of `kind`, "Unknown" for unrecognized ids"""
        return type(self.kind).__name__

    @classmethod
    def from_compound(cls, tree, strict=False):
        values = {}
        for field in cls.fields:
            values[field.attr] = field.extract(tree)
        kind = BLOCK_ENTITY_KINDS.decode(tree, 'id', strict)
        return cls(kind=kind, **values)

    @classmethod
    def from_root(cls, tree, options):
        return cls.from_compound(tree, options['strict'])

    def to_compound(self):
        if isinstance(self.kind, Unknown):
            return self.kind.to_compound()
        tree = Record.to_compound(self)
        if self.kind is not None:
            tree.update(self.kind.to_compound())
        return tree

    def __eq__(self, other):
        result = Record.__eq__(self, other)
        if result is NotImplemented or not result:
            return result
        return self.kind == other.kind

    __hash__ = None

    def __repr__(self):
        return "%s(kind=%r)" % (Record.__repr__(self)[:-1], self.kind)


class LazyBlockEntity(object):
    """A block entity with only its header decoded.

    from_bytes() reads the id, keepPacked flag and position and skips over
    everything else without building it. The (decompressed) document is
    kept, and full() decodes it from scratch each time it is called.

    """

    def __init__(self, header, data, strict=False):
        self.header = header
        self._data = data
        self._strict = strict

    @classmethod
    def from_bytes(cls, buf, **options):
        options = settings.get_validated_options(**options)
        try:
            data = nbt.decompress(bytes(buf), options['compression'])
        except nbt.CorruptionError as e:
            raise ReaderError(e) from e
        tree = cls._read_header(data, HEADER_TAGS)
        return cls(BlockEntityHeader.from_compound(tree), data, options['strict'])

    @staticmethod
    def _read_header(data, names):
        try:
            result = nbt.NBTFileReader(io.BytesIO(data)).read_header(names)
        except nbt.CorruptionError as e:
            raise ReaderError(e) from e
        if result is None:
            raise NoData()
        return result[1]

    @property
    def data(self):
        return self._data

    def kind(self):
        """Name of the record full() would put in `kind`"""
        return BLOCK_ENTITY_KINDS.kind_name(self.header.id)

    def get_components(self):
        """Decodes just the components compound, or returns None"""
        tree = self._read_header(self._data, ('components',))
        return components_field().extract(tree)

    def full(self):
        logging.debug("Fully decoding block entity %s at %d,%d,%d",
                      self.header.id, self.header.x, self.header.y, self.header.z)
        return BlockEntity.from_compound(read_root(self._data, "none"), self._strict)

    def to_owned(self):
        return LazyBlockEntity(BlockEntityHeader.from_compound(self.header.to_compound()),
                               bytes(self._data), self._strict)

    def __repr__(self):
        return "LazyBlockEntity(%r)" % (self.header,)
