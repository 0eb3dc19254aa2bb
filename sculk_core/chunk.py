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
Chunks, as stored in region files since 1.18.

A chunk holds a list of 16x16x16 sections. Each section keeps its blocks
and biomes as a palette plus a packed array of indices into it; see
bitpack.py for the packing. Decoded sections expose the unpacked indices as
numpy arrays in (y, z, x) order, the same order Overviewer's world.py uses.
"""

from . import bitpack
from .blockentity import BlockEntity
from .entity import Entity
from .fields import (Field, Nested, ListOf, DictOf, IntArray, BYTE, SHORT, INT,
                     LONG, STRING, BOOL, BYTE_ARRAY, LONG_ARRAY, STRINGS, RAW)
from .record import Record

# Chunk generation stages, in order. Chunks in the middle of generation
# stop at one of these; anything else is kept as it was read.
STATUSES = (
    "minecraft:empty",
    "minecraft:structure_starts",
    "minecraft:structure_references",
    "minecraft:biomes",
    "minecraft:noise",
    "minecraft:surface",
    "minecraft:carvers",
    "minecraft:features",
    "minecraft:initialize_light",
    "minecraft:light",
    "minecraft:spawn",
    "minecraft:full",
)


def is_known_status(status):
    return status in STATUSES


class PaletteEntry(Record):
    """One block state: a block name and its property values"""
    fields = [
        Field('name', 'Name', STRING, required=True),
        Field('properties', 'Properties', DictOf(STRING)),
    ]


class _PalettedArray(Record):
    """A palette and the packed indices into it. `indices` is unpacked when
    the record is built, so bad data fails the whole decode."""
    min_bits = None
    entry_count = None
    shape = None

    def __init__(self, **kwargs):
        Record.__init__(self, **kwargs)
        indices = bitpack.decode(len(self.palette), self.entry_count, self.data,
                                 self.min_bits, 'data')
        self.indices = indices.reshape(self.shape)

    def entry_at(self, x, y, z):
        """Palette entry at a position local to the section. Positions are
        in blocks for block states and in 4 block cells for biomes."""
        if not self.palette:
            return None
        return self.palette[self.indices[y, z, x]]

    @classmethod
    def from_indices(cls, palette, indices):
        """Builds the record from a palette and one index per entry, in
        (y, z, x) order. `indices` may be flat or shaped like `indices` of
        another record."""
        bits = bitpack.bits_for(len(palette), cls.min_bits)
        data = bitpack.encode(indices, bits) if len(palette) > 1 else None
        return cls(palette=palette, data=data)


class BlockStates(_PalettedArray):
    fields = [
        Field('palette', 'palette', ListOf(Nested(PaletteEntry)), required=True),
        Field('data', 'data', LONG_ARRAY),
    ]
    min_bits = bitpack.BLOCK_STATE_MIN_BITS
    entry_count = bitpack.BLOCK_STATE_ENTRIES
    shape = (16, 16, 16)


class Biomes(_PalettedArray):
    fields = [
        Field('palette', 'palette', STRINGS, required=True),
        Field('data', 'data', LONG_ARRAY),
    ]
    min_bits = bitpack.BIOME_MIN_BITS
    entry_count = bitpack.BIOME_ENTRIES
    shape = (4, 4, 4)


class ChunkSection(Record):
    fields = [
        Field('y', 'Y', BYTE, required=True),
        Field('block_states', 'block_states', Nested(BlockStates)),
        Field('biomes', 'biomes', Nested(Biomes)),
        Field('block_light', 'BlockLight', BYTE_ARRAY),
        Field('sky_light', 'SkyLight', BYTE_ARRAY),
    ]

    def block_at(self, x, y, z):
        """The PaletteEntry at section local x, y, z (0 to 15), or None when
        the section has no block states"""
        if self.block_states is None:
            return None
        return self.block_states.entry_at(x, y, z)

    def biome_at(self, x, y, z):
        """The biome id at section local block x, y, z"""
        if self.biomes is None:
            return None
        return self.biomes.entry_at(x // 4, y // 4, z // 4)


class TileTick(Record):
    """A block or fluid waiting for a scheduled update"""
    fields = [
        Field('i', 'i', STRING, required=True),
        Field('p', 'p', INT, required=True),
        Field('t', 't', INT, required=True),
        Field('x', 'x', INT, required=True),
        Field('y', 'y', INT, required=True),
        Field('z', 'z', INT, required=True),
    ]


class ProcessedChunk(Record):
    fields = [
        Field('x', 'X', INT, required=True),
        Field('z', 'Z', INT, required=True),
    ]


class StructureStart(Record):
    fields = [
        Field('bb', 'BB', IntArray(6)),
        Field('biome', 'biome', STRING),
        Field('children', 'Children', ListOf(RAW)),
        Field('chunk_x', 'ChunkX', INT),
        Field('chunk_z', 'ChunkZ', INT),
        Field('id', 'id', STRING, required=True),
        Field('processed', 'processed', ListOf(Nested(ProcessedChunk))),
        Field('references', 'references', INT),
        Field('valid', 'Valid', BOOL),
    ]


class Structures(Record):
    fields = [
        Field('references', 'References', DictOf(LONG_ARRAY), required=True),
        Field('starts', 'starts', DictOf(Nested(StructureStart)), required=True),
    ]


class Heightmaps(Record):
    fields = [
        Field('motion_blocking', 'MOTION_BLOCKING', LONG_ARRAY, default=()),
        Field('motion_blocking_no_leaves', 'MOTION_BLOCKING_NO_LEAVES', LONG_ARRAY, default=()),
        Field('ocean_floor', 'OCEAN_FLOOR', LONG_ARRAY, default=()),
        Field('ocean_floor_wg', 'OCEAN_FLOOR_WG', LONG_ARRAY, default=()),
        Field('world_surface', 'WORLD_SURFACE', LONG_ARRAY, default=()),
        Field('world_surface_wg', 'WORLD_SURFACE_WG', LONG_ARRAY, default=()),
    ]


class CarvingMasks(Record):
    fields = [
        Field('air', 'AIR', BYTE_ARRAY),
        Field('liquid', 'LIQUID', BYTE_ARRAY),
    ]


class BlendingData(Record):
    fields = [
        Field('min_section', 'min_section', INT, required=True),
        Field('max_section', 'max_section', INT, required=True),
    ]


SHORT_LISTS = ListOf(ListOf(SHORT))


def _chunk_fields():
    return [
        Field('data_version', 'DataVersion', INT, required=True),
        Field('x_pos', 'xPos', INT, required=True),
        Field('z_pos', 'zPos', INT, required=True),
        Field('y_pos', 'yPos', INT, required=True),
        Field('status', 'Status', STRING, required=True),
        Field('sections', 'sections', ListOf(Nested(ChunkSection)), default=[]),
        Field('block_entities', 'block_entities', ListOf(Nested(BlockEntity)), default=[]),
        Field('fluid_ticks', 'fluid_ticks', ListOf(Nested(TileTick)), default=[]),
        Field('block_ticks', 'block_ticks', ListOf(Nested(TileTick)), default=[]),
        Field('post_processing', 'PostProcessing', SHORT_LISTS),
        Field('blending_data', 'blending_data', Nested(BlendingData)),
        Field('structures', 'structures', Nested(Structures), required=True),
    ]


class _ChunkMixin(object):
    @property
    def status_known(self):
        return is_known_status(self.status)

    def get_section(self, y):
        """The section at section height `y`, or None"""
        for section in self.sections:
            if section.y == y:
                return section
        return None


class Chunk(_ChunkMixin, Record):
    """A chunk as read from a region file (after decompression)"""
    fields = _chunk_fields() + [
        Field('last_update', 'LastUpdate', LONG, required=True),
        Field('inhabited_time', 'InhabitedTime', LONG, required=True),
        Field('heightmaps', 'Heightmaps', Nested(Heightmaps), required=True),
        Field('carving_masks', 'CarvingMasks', Nested(CarvingMasks)),
        Field('lights', 'Lights', SHORT_LISTS, default=[]),
        Field('entities', 'Entities', ListOf(Nested(Entity))),
    ]


class MinimalChunk(_ChunkMixin, Record):
    """The parts of a chunk needed to find its blocks, without heightmaps,
    lighting or entities"""
    fields = _chunk_fields()
