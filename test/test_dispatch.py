import logging
import unittest

from sculk_core import nbt
from sculk_core.components import (COMPONENTS, COMPONENT_KINDS, Enchantments,
                                   Food, InstrumentData, Profile, Tool, Trim,
                                   Unbreakable, WrittenBookContent, components_field)
from sculk_core.dispatch import (Reference, Unknown, ValueShape, KindTable,
                                 dispatch, dispatch_by_enum)
from sculk_core.errors import MissingField, InvalidField, UnsupportedKind
from sculk_core.fields import Field, INT, STRING
from sculk_core.nbt import Compound, Tag
from sculk_core.record import Record


class Sound(Record):
    fields = [
        Field('sound_id', 'sound_id', STRING, required=True),
        Field('range', 'range', INT),
    ]


class Note(Record):
    fields = [
        Field('pitch', 'pitch', INT, required=True),
    ]


class Drum(Record):
    fields = [
        Field('hits', 'hits', INT, default=1),
    ]


class Horn(Record):
    fields = [
        Field('sound', 'sound', ValueShape(Sound)),
    ]


KINDS = KindTable("instrument", {
    "test:note": Note,
    "test:drum": Drum,
})


class ValueShapeTest(unittest.TestCase):

    def test_reference(self):
        tree = Compound().put_string("sound", "minecraft:block.bell.use")
        self.assertEqual(dispatch(tree, "sound", Sound), Reference("minecraft:block.bell.use"))

    def test_inline(self):
        inline = Compound().put_string("sound_id", "custom:ding").put_int("range", 16)
        tree = Compound().put_compound("sound", inline)
        self.assertEqual(dispatch(tree, "sound", Sound), Sound(sound_id="custom:ding", range=16))

    def test_other_shapes(self):
        for tree in (Compound(), Compound().put_int("sound", 3)):
            with self.assertRaises(MissingField) as cm:
                dispatch(tree, "sound", Sound)
            self.assertEqual(cm.exception.name, "sound")

    def test_optional_field_wrong_shape(self):
        self.assertIsNone(Horn.from_compound(Compound()).sound)
        with self.assertRaises(MissingField) as cm:
            Horn.from_compound(Compound().put_long("sound", 1))
        self.assertEqual(cm.exception.name, "sound")

    def test_inline_errors_propagate(self):
        tree = Compound().put_compound("sound", Compound().put_int("range", 1))
        with self.assertRaises(MissingField) as cm:
            dispatch(tree, "sound", Sound)
        self.assertEqual(cm.exception.name, "sound_id")

    def test_encode(self):
        codec = ValueShape(Sound)
        self.assertEqual(codec.encode(Reference("a")), Tag(nbt.TAG_STRING, "a"))
        tag = codec.encode(Sound(sound_id="b"))
        self.assertEqual(tag.tagid, nbt.TAG_COMPOUND)
        self.assertEqual(codec.decode(tag, "sound"), Sound(sound_id="b"))


class KindTableTest(unittest.TestCase):

    def test_known(self):
        tree = Compound().put_string("id", "test:note").put_int("pitch", 12)
        self.assertEqual(dispatch_by_enum(tree, "id", KINDS), Note(pitch=12))

    def test_known_with_default(self):
        tree = Compound().put_string("id", "test:drum")
        self.assertEqual(KINDS.decode(tree, "id").hits, 1)

    def test_known_but_broken(self):
        tree = Compound().put_string("id", "test:note")
        with self.assertRaises(MissingField) as cm:
            KINDS.decode(tree, "id")
        self.assertEqual(cm.exception.name, "pitch")
        tree.put_string("pitch", "high")
        self.assertRaises(InvalidField, KINDS.decode, tree, "id")

    def test_missing_discriminant(self):
        self.assertRaises(MissingField, KINDS.decode, Compound(), "id")
        self.assertRaises(InvalidField, KINDS.decode, Compound().put_int("id", 1), "id")

    def test_unknown(self):
        tree = (Compound().put_string("id", "test:theremin")
                .put_list("notes", nbt.TAG_INT, [1, 2, 3])
                .put_compound("nested", Compound().put_float("f", 0.25)))
        with self.assertLogs(level=logging.DEBUG):
            result = KINDS.decode(tree, "id")
        self.assertIsInstance(result, Unknown)
        self.assertEqual(result.compound, tree)
        self.assertEqual(nbt.dumps(result.to_compound()), nbt.dumps(tree))

    def test_unknown_is_a_copy(self):
        tree = Compound().put_string("id", "test:theremin").put_int("n", 1)
        result = KINDS.decode(tree, "id")
        tree.put_int("n", 2)
        self.assertEqual(result.compound.get_int("n"), 1)

    def test_strict(self):
        tree = Compound().put_string("id", "test:theremin")
        with self.assertRaises(UnsupportedKind) as cm:
            KINDS.decode(tree, "id", strict=True)
        self.assertEqual(cm.exception.kind, "test:theremin")

    def test_queries(self):
        self.assertTrue(KINDS.supports("test:note"))
        self.assertFalse(KINDS.supports("test:theremin"))
        self.assertIn("test:drum", KINDS)
        self.assertEqual(KINDS.ids(), ["test:drum", "test:note"])
        self.assertEqual(KINDS.kind_name("test:drum"), "Drum")
        self.assertEqual(KINDS.kind_name("test:theremin"), "Unknown")


def item_components():
    food = (Compound().put_int("nutrition", 4).put_float("saturation", 2.5))
    enchantments = Compound().put_compound(
        "levels", Compound().put_int("minecraft:sharpness", 5))
    tool = Compound().put_list("rules", nbt.TAG_COMPOUND, [
        Compound().put_string("blocks", "#minecraft:mineable/pickaxe").put_float("speed", 8.0)])
    return (Compound()
            .put_compound("minecraft:food", food)
            .put_compound("minecraft:future_thing", Compound().put_byte("x", 1))
            .put_compound("minecraft:enchantments", enchantments)
            .put_int("minecraft:damage", 12)
            .put_compound("minecraft:tool", tool)
            .put_string("minecraft:instrument", "minecraft:ponder_goat_horn")
            .put_compound("minecraft:unbreakable", Compound()))


class ComponentMapTest(unittest.TestCase):

    def test_decode(self):
        components = COMPONENTS.decode(Tag(nbt.TAG_COMPOUND, item_components()), "components")
        self.assertEqual(list(components.keys()), [
            "minecraft:food", "minecraft:future_thing", "minecraft:enchantments",
            "minecraft:damage", "minecraft:tool", "minecraft:instrument",
            "minecraft:unbreakable"])
        food = components["minecraft:food"]
        self.assertIsInstance(food, Food)
        self.assertEqual(food.nutrition, 4)
        self.assertIs(food.can_always_eat, False)
        self.assertEqual(food.eat_seconds, 1.6)
        self.assertIsInstance(components["minecraft:future_thing"], Unknown)
        enchantments = components["minecraft:enchantments"]
        self.assertEqual(enchantments, Enchantments(levels={"minecraft:sharpness": 5}))
        self.assertIs(enchantments.show_in_tooltip, True)
        self.assertEqual(components["minecraft:damage"], 12)
        tool = components["minecraft:tool"]
        self.assertIsInstance(tool, Tool)
        self.assertEqual(tool.default_mining_speed, 1.0)
        self.assertEqual(tool.damage_per_block, 1)
        self.assertEqual(tool.rules[0].blocks, "#minecraft:mineable/pickaxe")
        self.assertEqual(components["minecraft:instrument"],
                         Reference("minecraft:ponder_goat_horn"))
        self.assertEqual(components["minecraft:unbreakable"], Unbreakable())

    def test_roundtrip_preserves_order_and_unknowns(self):
        tree = item_components()
        components = COMPONENTS.decode(Tag(nbt.TAG_COMPOUND, tree), "components")
        out = COMPONENTS.to_payload(components)
        self.assertEqual(list(out.keys()), list(tree.keys()))
        self.assertEqual(out["minecraft:future_thing"], tree["minecraft:future_thing"])
        self.assertEqual(COMPONENTS.from_payload(out, "components"), components)

    def test_known_component_errors(self):
        tree = Compound().put_compound("minecraft:food", Compound().put_int("nutrition", 1))
        with self.assertRaises(MissingField) as cm:
            COMPONENTS.from_payload(tree, "components")
        self.assertEqual(cm.exception.name, "saturation")
        tree = Compound().put_string("minecraft:damage", "lots")
        self.assertRaises(InvalidField, COMPONENTS.from_payload, tree, "components")

    def test_inline_instrument(self):
        instrument = (Compound().put_string("sound_event", "minecraft:item.goat_horn.sound.0")
                      .put_int("use_duration", 140).put_float("range", 256.0))
        tree = Compound().put_compound("minecraft:instrument", instrument)
        components = COMPONENTS.from_payload(tree, "components")
        self.assertIsInstance(components["minecraft:instrument"], InstrumentData)
        self.assertEqual(components["minecraft:instrument"].sound_event,
                         Reference("minecraft:item.goat_horn.sound.0"))

    def test_profile(self):
        profile = Compound().put_string("name", "Notch").put_int_array("id", [1, 2, 3, 4])
        components = COMPONENTS.from_payload(
            Compound().put_compound("minecraft:profile", profile), "components")
        self.assertIsInstance(components["minecraft:profile"], Profile)
        self.assertEqual(components["minecraft:profile"].name, "Notch")
        self.assertEqual(components["minecraft:profile"].properties, [])

    def test_defaults_and_written_book(self):
        tree = Compound().put_compound("minecraft:trim", Compound()
                                       .put_string("pattern", "minecraft:coast")
                                       .put_string("material", "minecraft:gold"))
        book = (Compound()
                .put_list("pages", nbt.TAG_COMPOUND, [Compound().put_string("raw", "page one")])
                .put_compound("title", Compound().put_string("raw", "Title"))
                .put_string("author", "someone"))
        tree.put_compound("minecraft:written_book_content", book)
        components = COMPONENTS.from_payload(tree, "components")
        self.assertEqual(components["minecraft:trim"],
                         Trim(pattern="minecraft:coast", material="minecraft:gold"))
        self.assertIs(components["minecraft:trim"].show_in_tooltip, True)
        written = components["minecraft:written_book_content"]
        self.assertIsInstance(written, WrittenBookContent)
        self.assertEqual(written.generation, 0)
        self.assertIs(written.resolved, False)
        self.assertEqual(written.pages[0].raw, "page one")

    def test_table(self):
        self.assertTrue(COMPONENT_KINDS.supports("minecraft:food"))
        self.assertFalse(COMPONENT_KINDS.supports("minecraft:future_thing"))

    def test_field(self):
        field = components_field()
        self.assertIsNone(field.extract(Compound()))
        tree = Compound()
        field.insert(tree, {"minecraft:damage": 3})
        self.assertEqual(tree.get_compound("components").get_int("minecraft:damage"), 3)


if __name__ == "__main__":
    unittest.main()
