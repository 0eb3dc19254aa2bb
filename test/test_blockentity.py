import unittest

from sculk_core import nbt
from sculk_core.blockentities import (BLOCK_ENTITY_KINDS, Chest, Skull, Sign,
                                      MobSpawner, CommandBlock, Campfire)
from sculk_core.blockentity import BlockEntity
from sculk_core.components import Profile
from sculk_core.dispatch import Reference, Unknown
from sculk_core.errors import MissingField, InvalidField, UnsupportedKind
from sculk_core.items import Item
from sculk_core.nbt import Compound


def header(id, x=10, y=64, z=-3):
    return (Compound().put_string("id", id).put_byte("keepPacked", 0)
            .put_int("x", x).put_int("y", y).put_int("z", z))


def chest_tree(lock=True):
    items = [Compound().put_byte("Slot", slot).put_string("id", name).put_int("Count", count)
             for slot, name, count in ((0, "minecraft:diamond", 3),
                                       (1, "minecraft:stick", 64),
                                       (2, "minecraft:torch", 1))]
    tree = header("minecraft:chest").put_list("Items", nbt.TAG_COMPOUND, items)
    if lock:
        tree.put_string("Lock", "secret")
    return tree


def sign_text(*messages):
    return (Compound().put_string("color", "black")
            .put_list("messages", nbt.TAG_STRING, list(messages)))


class BlockEntityTest(unittest.TestCase):

    def test_chest(self):
        data = nbt.dumps(chest_tree())
        be = BlockEntity.from_bytes(data)
        self.assertEqual((be.id, be.x, be.y, be.z), ("minecraft:chest", 10, 64, -3))
        self.assertIs(be.keep_packed, False)
        self.assertEqual(be.variant, "Chest")
        self.assertIsInstance(be.kind, Chest)
        self.assertEqual([item.slot for item in be.kind.items], [0, 1, 2])
        self.assertEqual(be.kind.items[1], Item(slot=1, id="minecraft:stick", count=64))
        self.assertEqual(be.kind.lock, "secret")
        self.assertIsNone(be.kind.custom_name)
        self.assertIsNone(be.kind.loot_table)

    def test_chest_without_lock(self):
        be = BlockEntity.from_compound(chest_tree(lock=False))
        self.assertIsNone(be.kind.lock)
        self.assertEqual(len(be.kind.items), 3)

    def test_empty_chest(self):
        be = BlockEntity.from_compound(header("minecraft:trapped_chest"))
        self.assertIsInstance(be.kind, Chest)
        self.assertEqual(be.kind.items, [])

    def test_roundtrip(self):
        be = BlockEntity.from_compound(chest_tree())
        again = BlockEntity.from_bytes(be.to_bytes())
        self.assertEqual(again, be)
        self.assertEqual(again.to_compound().get_string("Lock"), "secret")

    def test_unknown_is_kept_exactly(self):
        tree = (header("othermod:mystery_box")
                .put_compound("stuff", Compound().put_long_array("l", [1, 2]))
                .put_list("empty", nbt.TAG_END, []))
        data = nbt.dumps(tree)
        be = BlockEntity.from_bytes(data)
        self.assertEqual(be.variant, "Unknown")
        self.assertIsInstance(be.kind, Unknown)
        self.assertEqual(be.x, 10)
        self.assertEqual(be.to_bytes(), data)

    def test_strict(self):
        data = nbt.dumps(header("othermod:mystery_box"))
        with self.assertRaises(UnsupportedKind) as cm:
            BlockEntity.from_bytes(data, strict=True)
        self.assertEqual(cm.exception.kind, "othermod:mystery_box")
        be = BlockEntity.from_bytes(nbt.dumps(chest_tree()), strict=True)
        self.assertEqual(be.variant, "Chest")

    def test_missing_position(self):
        tree = header("minecraft:chest")
        del tree["x"]
        with self.assertRaises(MissingField) as cm:
            BlockEntity.from_compound(tree)
        self.assertEqual(cm.exception.name, "x")

    def test_bad_item(self):
        tree = chest_tree()
        tree.get_list("Items")[1].put_string("Count", "many")
        with self.assertRaises(InvalidField) as cm:
            BlockEntity.from_compound(tree)
        self.assertEqual(cm.exception.name, "Count")

    def test_components(self):
        tree = header("minecraft:chest").put_compound(
            "components", Compound().put_string("minecraft:custom_name", "Loot"))
        be = BlockEntity.from_compound(tree)
        self.assertEqual(be.components, {"minecraft:custom_name": "Loot"})

    def test_skull_profile_by_name(self):
        tree = header("minecraft:player_head").put_string("profile", "Notch")
        be = BlockEntity.from_compound(tree)
        self.assertIsInstance(be.kind, Skull)
        self.assertEqual(be.kind.profile, Reference("Notch"))

    def test_skull_profile_inline(self):
        profile = Compound().put_string("name", "jeb_").put_int_array("id", [0, 0, 0, 7])
        tree = header("minecraft:player_wall_head").put_compound("profile", profile)
        be = BlockEntity.from_compound(tree)
        self.assertIsInstance(be.kind.profile, Profile)
        self.assertEqual(be.kind.profile.id.int, 7)
        self.assertIsNone(BlockEntity.from_compound(header("minecraft:skeleton_skull")).kind.profile)

    def test_sign(self):
        tree = (header("minecraft:oak_hanging_sign")
                .put_compound("front_text", sign_text("a", "b", "c", "d"))
                .put_compound("back_text", sign_text("", "", "", "")))
        be = BlockEntity.from_compound(tree)
        self.assertIsInstance(be.kind, Sign)
        self.assertEqual(be.kind.front_text.messages, ["a", "b", "c", "d"])
        self.assertIs(be.kind.is_waxed, False)
        tree.get_compound("back_text").put_string("color", "octarine")
        with self.assertRaises(InvalidField) as cm:
            BlockEntity.from_compound(tree)
        self.assertEqual(cm.exception.name, "color")

    def test_block_entity_type_ids(self):
        tree = (header("minecraft:sign")
                .put_compound("front_text", sign_text("a", "b", "c", "d"))
                .put_compound("back_text", sign_text("", "", "", "")))
        be = BlockEntity.from_compound(tree)
        self.assertEqual(be.variant, "Sign")
        self.assertEqual(be.kind.front_text.messages, ["a", "b", "c", "d"])
        self.assertEqual(BlockEntity.from_compound(header("minecraft:skull")).variant, "Skull")
        self.assertEqual(BlockEntity.from_compound(header("minecraft:banner")).kind.patterns, [])
        self.assertEqual(BlockEntity.from_compound(header("minecraft:bed")).variant, "Bed")
        suspicious = BlockEntity.from_compound(header("minecraft:brushable_block"))
        self.assertEqual(suspicious.variant, "SuspiciousBlock")
        self.assertEqual(BlockEntity.from_bytes(be.to_bytes()), be)

    def test_command_block_defaults(self):
        be = BlockEntity.from_compound(header("minecraft:command_block"))
        self.assertIsInstance(be.kind, CommandBlock)
        self.assertIs(be.kind.track_output, True)
        self.assertIs(be.kind.update_last_execution, True)
        self.assertEqual(be.kind.command, "")

    def test_campfire_arrays(self):
        tree = (header("minecraft:soul_campfire")
                .put_int_array("CookingTimes", [1, 2, 3, 4])
                .put_int_array("CookingTotalTimes", [600, 600, 600, 600]))
        be = BlockEntity.from_compound(tree)
        self.assertIsInstance(be.kind, Campfire)
        self.assertEqual(be.kind.cooking_times, (1, 2, 3, 4))
        tree.put_int_array("CookingTimes", [1, 2, 3])
        self.assertRaises(InvalidField, BlockEntity.from_compound, tree)

    def test_spawner(self):
        tree = header("minecraft:mob_spawner")
        for name, value in (("Delay", 20), ("MaxNearbyEntities", 6), ("MaxSpawnDelay", 800),
                            ("MinSpawnDelay", 200), ("RequiredPlayerRange", 16),
                            ("SpawnCount", 4)):
            tree.put_short(name, value)
        entity = Compound().put_string("id", "minecraft:zombie")
        tree.put_compound("SpawnData", Compound().put_compound("entity", entity))
        be = BlockEntity.from_compound(tree)
        self.assertIsInstance(be.kind, MobSpawner)
        self.assertEqual(be.kind.spawn_range, 4)
        self.assertEqual(be.kind.spawn_data.entity.id, "minecraft:zombie")
        self.assertIsNone(be.kind.spawn_data.entity.pos)
        self.assertIsNone(be.kind.spawn_potentials)
        del tree["Delay"]
        with self.assertRaises(MissingField) as cm:
            BlockEntity.from_compound(tree)
        self.assertEqual(cm.exception.name, "Delay")

    def test_kind_table(self):
        for id in ("minecraft:red_banner", "minecraft:blue_wall_banner",
                   "minecraft:white_bed", "minecraft:lime_shulker_box",
                   "minecraft:cherry_wall_hanging_sign", "minecraft:wither_skeleton_wall_skull",
                   "minecraft:creeper_head", "minecraft:smoker", "minecraft:vault",
                   "minecraft:sign", "minecraft:hanging_sign", "minecraft:banner",
                   "minecraft:skull", "minecraft:bed", "minecraft:brushable_block"):
            self.assertTrue(BLOCK_ENTITY_KINDS.supports(id), id)
        self.assertFalse(BLOCK_ENTITY_KINDS.supports("chest"))
        self.assertFalse(BLOCK_ENTITY_KINDS.supports("minecraft:stone"))


if __name__ == "__main__":
    unittest.main()
