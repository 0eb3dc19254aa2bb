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
Item data components.

Since 1.20.5 items and some block entities carry a "components" compound
whose keys are component ids ("minecraft:food", "minecraft:trim", ...).
COMPONENTS decodes that compound into a dict of id to value. Ids that aren't
listed in COMPONENT_KINDS come back as dispatch.Unknown and are written back
unchanged.
"""

from .dispatch import ValueShape, ByShape, KindTable, ComponentMap
from .entity import MaybeEntity
from .fields import (Field, Nested, ListOf, DictOf, Choice, BYTE, INT, LONG,
                     FLOAT, DOUBLE, STRING, BOOL, INT_ARRAY, STRINGS, UUID,
                     RAW, POS3)
from .nbt import Compound
from .record import Record
from .util import COLOR_NAMES, RARITIES


class _ItemCodec(Nested):
    """Nested(ItemWithNoSlot). items imports this module, so the class is
    looked up when first needed."""

    def __init__(self):
        pass

    @property
    def record(self):
        from .items import ItemWithNoSlot
        return ItemWithNoSlot

ITEM = _ItemCodec()

ONE_OR_MANY_STRINGS = ByShape([(STRING, str), (STRINGS, list)])


class Modifier(Record):
    fields = [
        Field('type', 'type', STRING, required=True),
        Field('slot', 'slot', Choice(STRING, ("any", "hand", "armor", "mainhand", "offhand",
                                             "head", "chest", "legs", "feet", "body")),
              required=True),
        Field('id', 'id', STRING, required=True),
        Field('amount', 'amount', DOUBLE, required=True),
        Field('operation', 'operation', Choice(STRING, ("add_value", "add_multiplied_base",
                                                       "add_multiplied_total")),
              required=True),
    ]


class AttributeModifiers(Record):
    fields = [
        Field('modifiers', 'modifiers', ListOf(Nested(Modifier)), default=[]),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class BannerPatternData(Record):
    fields = [
        Field('asset_id', 'asset_id', STRING, required=True),
        Field('translation_key', 'translation_key', STRING, required=True),
    ]


class BannerPattern(Record):
    fields = [
        Field('color', 'color', Choice(STRING, COLOR_NAMES), required=True),
        Field('pattern', 'pattern', ValueShape(BannerPatternData), required=True),
    ]


class Bee(Record):
    fields = [
        Field('entity_data', 'entity_data', Nested(MaybeEntity), required=True),
        Field('min_ticks_in_hive', 'min_ticks_in_hive', INT, required=True),
        Field('ticks_in_hive', 'ticks_in_hive', INT, required=True),
    ]


class BucketEntityData(Record):
    fields = [
        Field('no_ai', 'NoAI', BOOL),
        Field('silent', 'Silent', BOOL),
        Field('no_gravity', 'NoGravity', BOOL),
        Field('glowing', 'Glowing', BOOL),
        Field('invulnerable', 'Invulnerable', BOOL),
        Field('health', 'Health', FLOAT),
        Field('age', 'Age', INT),
        Field('variant', 'Variant', INT),
        Field('hunting_cooldown', 'HuntingCooldown', LONG),
        Field('bucket_variant_tag', 'BucketVariantTag', INT),
    ]


class BlockPredicate(Record):
    fields = [
        Field('blocks', 'blocks', ONE_OR_MANY_STRINGS),
        Field('nbt', 'nbt', RAW),
        Field('state', 'state', DictOf(STRING)),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class AdventurePredicates(Record):
    fields = [
        Field('predicates', 'predicates', ListOf(Nested(BlockPredicate)), required=True),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class _AdventureModeCodec(Nested):
    """can_break and can_place_on hold either one predicate or a compound
    with a list of them"""

    def __init__(self):
        pass

    def from_payload(self, value, name):
        if 'predicates' in value:
            return AdventurePredicates.from_compound(value)
        return BlockPredicate.from_compound(value)


class ContainerSlot(Record):
    fields = [
        Field('item', 'item', ITEM, required=True),
        Field('slot', 'slot', INT, required=True),
    ]


class ContainerLoot(Record):
    fields = [
        Field('loot_table', 'loot_table', STRING, required=True),
        Field('seed', 'seed', LONG),
    ]


class DyedColor(Record):
    fields = [
        Field('rgb', 'rgb', INT, required=True),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class Enchantments(Record):
    fields = [
        Field('levels', 'levels', DictOf(INT), required=True),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class FireworkExplosion(Record):
    fields = [
        Field('shape', 'shape', Choice(STRING, ("small_ball", "large_ball", "star",
                                               "creeper", "burst")),
              required=True),
        Field('colors', 'colors', INT_ARRAY, default=()),
        Field('fade_colors', 'fade_colors', INT_ARRAY, default=()),
        Field('has_trail', 'has_trail', BOOL, default=False),
        Field('has_twinkle', 'has_twinkle', BOOL, default=False),
    ]


class Fireworks(Record):
    fields = [
        Field('explosions', 'explosions', ListOf(Nested(FireworkExplosion)), default=[]),
        Field('flight_duration', 'flight_duration', BYTE, default=1),
    ]


class EffectDetails(Record):
    """A status effect instance, as found in food and potions"""
    fields = [
        Field('id', 'id', STRING, required=True),
        Field('amplifier', 'amplifier', BYTE),
        Field('duration', 'duration', INT),
        Field('ambient', 'ambient', BOOL),
        Field('show_particles', 'show_particles', BOOL),
        Field('show_icon', 'show_icon', BOOL),
    ]


class FoodEffect(Record):
    fields = [
        Field('effect', 'effect', Nested(EffectDetails), required=True),
        Field('probability', 'probability', FLOAT, default=1.0),
    ]


class Food(Record):
    fields = [
        Field('nutrition', 'nutrition', INT, required=True),
        Field('saturation', 'saturation', FLOAT, required=True),
        Field('can_always_eat', 'can_always_eat', BOOL, default=False),
        Field('eat_seconds', 'eat_seconds', FLOAT, default=1.6),
        Field('using_converts_to', 'using_converts_to', ITEM),
        Field('effects', 'effects', ListOf(Nested(FoodEffect)), default=[]),
    ]


class SoundEventData(Record):
    fields = [
        Field('sound_id', 'sound_id', STRING, required=True),
        Field('range', 'range', FLOAT),
    ]


class InstrumentData(Record):
    fields = [
        Field('sound_event', 'sound_event', ValueShape(SoundEventData), required=True),
        Field('use_duration', 'use_duration', INT, required=True),
        Field('range', 'range', FLOAT, required=True),
    ]


class JukeboxPlayable(Record):
    fields = [
        Field('song', 'song', STRING, required=True),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class LodestoneTarget(Record):
    fields = [
        Field('pos', 'pos', POS3, required=True),
        Field('dimension', 'dimension', STRING, required=True),
    ]


class LodestoneTracker(Record):
    fields = [
        Field('target', 'target', Nested(LodestoneTarget)),
        Field('tracked', 'tracked', BOOL, default=True),
    ]


class MapDecoration(Record):
    fields = [
        Field('type', 'type', STRING, required=True),
        Field('x', 'x', DOUBLE, required=True),
        Field('z', 'z', DOUBLE, required=True),
        Field('rotation', 'rotation', FLOAT, required=True),
    ]


class PotionData(Record):
    fields = [
        Field('potion', 'potion', STRING),
        Field('custom_color', 'custom_color', INT),
        Field('custom_effects', 'custom_effects', ListOf(Nested(EffectDetails)), default=[]),
    ]


class ProfileProperty(Record):
    fields = [
        Field('name', 'name', STRING, required=True),
        Field('value', 'value', STRING, required=True),
        Field('signature', 'signature', STRING),
    ]


class Profile(Record):
    """A player profile, as used by player heads"""
    fields = [
        Field('name', 'name', STRING),
        Field('id', 'id', UUID),
        Field('properties', 'properties', ListOf(Nested(ProfileProperty)), default=[]),
    ]


class StewEffect(Record):
    fields = [
        Field('id', 'id', STRING, required=True),
        Field('duration', 'duration', INT, default=160),
    ]


class ToolRule(Record):
    fields = [
        Field('blocks', 'blocks', ONE_OR_MANY_STRINGS, required=True),
        Field('speed', 'speed', FLOAT),
        Field('correct_for_drops', 'correct_for_drops', BOOL),
    ]


class Tool(Record):
    fields = [
        Field('default_mining_speed', 'default_mining_speed', FLOAT, default=1.0),
        Field('damage_per_block', 'damage_per_block', INT, default=1),
        Field('rules', 'rules', ListOf(Nested(ToolRule)), required=True),
    ]


class Trim(Record):
    fields = [
        Field('pattern', 'pattern', STRING, required=True),
        Field('material', 'material', STRING, required=True),
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class Unbreakable(Record):
    fields = [
        Field('show_in_tooltip', 'show_in_tooltip', BOOL, default=True),
    ]


class BookText(Record):
    fields = [
        Field('raw', 'raw', STRING, required=True),
        Field('filtered', 'filtered', STRING),
    ]

PAGES = ByShape([(STRING, str), (ListOf(Nested(BookText)), list)])


class WritableBookContent(Record):
    fields = [
        Field('pages', 'pages', PAGES, required=True),
    ]


class WrittenBookContent(Record):
    fields = [
        Field('pages', 'pages', PAGES, required=True),
        Field('title', 'title', Nested(BookText), required=True),
        Field('author', 'author', STRING, required=True),
        Field('generation', 'generation', INT, default=0),
        Field('resolved', 'resolved', BOOL, default=False),
    ]


def _ns(name):
    return "minecraft:" + name


ADVENTURE_PREDICATE = _AdventureModeCodec()
ITEMS = ListOf(ITEM)

COMPONENT_KINDS = KindTable("data component", {
    _ns("attribute_modifiers"): ByShape([(ListOf(Nested(Modifier)), list),
                                         (Nested(AttributeModifiers), AttributeModifiers)]),
    _ns("banner_patterns"): ListOf(Nested(BannerPattern)),
    _ns("base_color"): Choice(STRING, COLOR_NAMES),
    _ns("bees"): ListOf(Nested(Bee)),
    _ns("block_entity_data"): RAW,
    _ns("block_state"): DictOf(STRING),
    _ns("bucket_entity_data"): Nested(BucketEntityData),
    _ns("bundle_contents"): ITEMS,
    _ns("can_break"): ADVENTURE_PREDICATE,
    _ns("can_place_on"): ADVENTURE_PREDICATE,
    _ns("charged_projectiles"): ITEMS,
    _ns("container"): ListOf(Nested(ContainerSlot)),
    _ns("container_loot"): Nested(ContainerLoot),
    _ns("custom_data"): ByShape([(STRING, str), (RAW, Compound)]),
    _ns("custom_model_data"): INT,
    _ns("custom_name"): STRING,
    _ns("damage"): INT,
    _ns("debug_stick_state"): DictOf(STRING),
    _ns("dyed_color"): ByShape([(INT, int), (Nested(DyedColor), DyedColor)]),
    _ns("enchantment_glint_override"): BOOL,
    _ns("enchantments"): Nested(Enchantments),
    _ns("entity_data"): RAW,
    _ns("firework_explosion"): Nested(FireworkExplosion),
    _ns("fireworks"): Nested(Fireworks),
    _ns("food"): Nested(Food),
    _ns("instrument"): ValueShape(InstrumentData),
    _ns("item_name"): STRING,
    _ns("jukebox_playable"): Nested(JukeboxPlayable),
    _ns("lodestone_tracker"): Nested(LodestoneTracker),
    _ns("lore"): STRINGS,
    _ns("map_decorations"): DictOf(Nested(MapDecoration)),
    _ns("map_id"): INT,
    _ns("max_damage"): INT,
    _ns("max_stack_size"): INT,
    _ns("note_block_sound"): STRING,
    _ns("ominous_bottle_amplifier"): INT,
    _ns("pot_decorations"): STRINGS,
    _ns("potion_contents"): ValueShape(PotionData),
    _ns("profile"): ValueShape(Profile),
    _ns("rarity"): Choice(STRING, RARITIES),
    _ns("recipes"): STRINGS,
    _ns("repair_cost"): INT,
    _ns("stored_enchantments"): Nested(Enchantments),
    _ns("suspicious_stew_effects"): ListOf(Nested(StewEffect)),
    _ns("tool"): Nested(Tool),
    _ns("trim"): Nested(Trim),
    _ns("unbreakable"): Nested(Unbreakable),
    _ns("writable_book_content"): Nested(WritableBookContent),
    _ns("written_book_content"): Nested(WrittenBookContent),
})

COMPONENTS = ComponentMap(COMPONENT_KINDS)


def components_field():
    return Field('components', 'components', COMPONENTS)
