import unittest

import numpy

from sculk_core import bitpack
from sculk_core import nbt
from sculk_core.blockentities import Chest
from sculk_core.chunk import (Chunk, MinimalChunk, ChunkSection, BlockStates,
                              Biomes, PaletteEntry, STATUSES)
from sculk_core.dispatch import Unknown
from sculk_core.errors import MissingField, InvalidField
from sculk_core.nbt import Compound


def block(name, **properties):
    entry = Compound().put_string("Name", name)
    if properties:
        props = Compound()
        for key, value in properties.items():
            props.put_string(key, value)
        entry.put_compound("Properties", props)
    return entry


def section_tree():
    indices = [0] * 4096
    indices[1 * 256 + 2 * 16 + 3] = 1
    indices[15 * 256 + 15 * 16 + 15] = 2
    block_states = (Compound()
                    .put_list("palette", nbt.TAG_COMPOUND, [
                        block("minecraft:air"),
                        block("minecraft:stone"),
                        block("minecraft:oak_log", axis="y")])
                    .put_long_array("data", bitpack.encode(indices, 4)))
    biome_indices = [0] * 64
    biome_indices[1] = 1
    biomes = (Compound()
              .put_list("palette", nbt.TAG_STRING, ["minecraft:plains", "minecraft:desert"])
              .put_long_array("data", bitpack.encode(biome_indices, 1)))
    return (Compound().put_byte("Y", -4)
            .put_compound("block_states", block_states)
            .put_compound("biomes", biomes))


def chunk_tree():
    structures = (Compound()
                  .put_compound("References", Compound())
                  .put_compound("starts", Compound()))
    chest = (Compound().put_string("id", "minecraft:chest")
             .put_int("x", 3).put_int("y", -63).put_int("z", 2))
    mystery = (Compound().put_string("id", "othermod:thing")
               .put_int("x", 4).put_int("y", -63).put_int("z", 2))
    return (Compound()
            .put_int("DataVersion", 3953)
            .put_int("xPos", 2).put_int("zPos", -1).put_int("yPos", -4)
            .put_string("Status", "minecraft:full")
            .put_long("LastUpdate", 1000).put_long("InhabitedTime", 50)
            .put_list("sections", nbt.TAG_COMPOUND, [section_tree(),
                                                      Compound().put_byte("Y", 0)])
            .put_list("block_entities", nbt.TAG_COMPOUND, [chest, mystery])
            .put_compound("Heightmaps", Compound().put_long_array("WORLD_SURFACE", [1, 2]))
            .put_compound("structures", structures))


class SectionTest(unittest.TestCase):

    def test_blocks(self):
        section = ChunkSection.from_compound(section_tree())
        self.assertEqual(section.y, -4)
        self.assertEqual(section.block_at(0, 0, 0), PaletteEntry(name="minecraft:air"))
        self.assertEqual(section.block_at(3, 1, 2).name, "minecraft:stone")
        log = section.block_at(15, 15, 15)
        self.assertEqual(log.name, "minecraft:oak_log")
        self.assertEqual(log.properties, {"axis": "y"})
        self.assertEqual(section.block_states.indices.shape, (16, 16, 16))
        self.assertEqual(int(section.block_states.indices.sum()), 3)

    def test_biomes(self):
        section = ChunkSection.from_compound(section_tree())
        self.assertEqual(section.biome_at(0, 0, 0), "minecraft:plains")
        self.assertEqual(section.biome_at(5, 3, 1), "minecraft:desert")
        self.assertEqual(section.biome_at(8, 0, 0), "minecraft:plains")

    def test_single_entry_palette(self):
        tree = Compound().put_byte("Y", 2).put_compound(
            "block_states", Compound().put_list("palette", nbt.TAG_COMPOUND,
                                                [block("minecraft:water")]))
        section = ChunkSection.from_compound(tree)
        self.assertEqual(section.block_at(7, 7, 7).name, "minecraft:water")
        self.assertIsNone(section.biome_at(0, 0, 0))

    def test_empty_section(self):
        section = ChunkSection.from_compound(Compound().put_byte("Y", 0))
        self.assertIsNone(section.block_at(0, 0, 0))
        self.assertIsNone(section.block_light)

    def test_missing_data(self):
        tree = section_tree()
        del tree.get_compound("block_states")["data"]
        with self.assertRaises(InvalidField) as cm:
            ChunkSection.from_compound(tree)
        self.assertEqual(cm.exception.name, "data")

    def test_from_indices(self):
        palette = ["minecraft:plains", "minecraft:forest", "minecraft:river"]
        indices = numpy.arange(64) % 3
        biomes = Biomes.from_indices(palette, indices)
        self.assertEqual(biomes.entry_at(1, 0, 0), "minecraft:forest")
        self.assertEqual(Biomes.from_compound(biomes.to_compound()), biomes)
        self.assertIsNone(BlockStates.from_indices([PaletteEntry(name="minecraft:air")],
                                                   [0] * 4096).data)

    def test_from_shaped_indices(self):
        palette = [PaletteEntry(name="minecraft:air"), PaletteEntry(name="minecraft:stone"),
                   PaletteEntry(name="minecraft:dirt")]
        states = BlockStates.from_indices(palette, numpy.arange(4096) % 3)
        self.assertEqual(states.indices.shape, (16, 16, 16))
        rebuilt = BlockStates.from_indices(palette, states.indices)
        self.assertEqual(rebuilt.data, states.data)
        self.assertEqual(rebuilt.entry_at(2, 0, 0).name, "minecraft:dirt")
        self.assertEqual(rebuilt, states)


class ChunkTest(unittest.TestCase):

    def test_decode(self):
        chunk = Chunk.from_bytes(nbt.dumps(chunk_tree()))
        self.assertEqual((chunk.x_pos, chunk.y_pos, chunk.z_pos), (2, -4, -1))
        self.assertTrue(chunk.status_known)
        self.assertEqual(len(chunk.sections), 2)
        self.assertEqual(chunk.get_section(-4).block_at(3, 1, 2).name, "minecraft:stone")
        self.assertIsNone(chunk.get_section(7))
        self.assertIsInstance(chunk.block_entities[0].kind, Chest)
        self.assertIsInstance(chunk.block_entities[1].kind, Unknown)
        self.assertEqual(chunk.block_ticks, [])
        self.assertEqual(chunk.lights, [])
        self.assertIsNone(chunk.entities)
        self.assertEqual(chunk.structures.starts, {})

    def test_heightmap_defaults(self):
        chunk = Chunk.from_compound(chunk_tree())
        self.assertEqual(chunk.heightmaps.world_surface, (1, 2))
        self.assertEqual(chunk.heightmaps.ocean_floor, ())

    def test_missing_structures(self):
        tree = chunk_tree()
        del tree["structures"]
        with self.assertRaises(MissingField) as cm:
            Chunk.from_compound(tree)
        self.assertEqual(cm.exception.name, "structures")

    def test_unknown_status(self):
        tree = chunk_tree().put_string("Status", "othermod:halfway")
        chunk = MinimalChunk.from_compound(tree)
        self.assertFalse(chunk.status_known)
        self.assertEqual(chunk.status, "othermod:halfway")
        self.assertEqual(STATUSES[-1], "minecraft:full")

    def test_minimal(self):
        tree = chunk_tree()
        del tree["Heightmaps"]
        chunk = MinimalChunk.from_compound(tree)
        self.assertEqual(chunk.data_version, 3953)
        self.assertRaises(MissingField, Chunk.from_compound, tree)

    def test_roundtrip(self):
        chunk = Chunk.from_compound(chunk_tree())
        again = Chunk.from_bytes(chunk.to_bytes(compression="zlib"))
        self.assertEqual(again, chunk)

    def test_post_processing(self):
        lists = [nbt.TagList(nbt.TAG_SHORT, [1, 2]), nbt.TagList(nbt.TAG_END)]
        tree = chunk_tree().put_list("PostProcessing", nbt.TAG_LIST, lists)
        chunk = Chunk.from_compound(tree)
        self.assertEqual(chunk.post_processing, [[1, 2], []])


if __name__ == "__main__":
    unittest.main()
