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
The kind specific part of every block entity the game writes.

Each class here reads only its own tags; the id, position and components
that every block entity has are handled by blockentity.BlockEntity.
BLOCK_ENTITY_KINDS maps block entity ids to these classes.
"""

from .components import BannerPattern, Bee, Profile
from .dispatch import ValueShape, ByShape, KindTable
from .entity import MaybeEntity
from .fields import (Field, Nested, ListOf, DictOf, Choice, IntArray,
                     DoubleList, BYTE, SHORT, INT, LONG, FLOAT, DOUBLE, STRING,
                     BOOL, INT_ARRAY, STRINGS, UUID, UUIDS, POS3,
                     custom_name_field, lock_field, loot_table_fields)
from .items import ItemWithNoSlot, items_field
from .record import Record
from .util import COLOR_NAMES, WOOD_TYPES


def container_fields():
    """Name, inventory, lock and loot table: chests, barrels, shulker
    boxes, dispensers, ..."""
    return [custom_name_field(), items_field(), lock_field()] + loot_table_fields()


class Banner(Record):
    fields = [
        custom_name_field(),
        Field('patterns', 'patterns', ListOf(Nested(BannerPattern)), default=[]),
    ]


class Barrel(Record):
    fields = container_fields()


class Beacon(Record):
    fields = [
        custom_name_field(),
        lock_field(),
        Field('primary_effect', 'primary_effect', STRING),
        Field('secondary_effect', 'secondary_effect', STRING),
    ]


class Bed(Record):
    pass


class Beehive(Record):
    fields = [
        Field('bees', 'bees', ListOf(Nested(Bee)), default=[]),
        Field('flower_pos', 'flower_pos', POS3),
    ]


class Bell(Record):
    pass


class Furnace(Record):
    """Furnaces, blast furnaces and smokers"""
    fields = [
        Field('burn_time', 'BurnTime', SHORT, required=True),
        Field('cook_time', 'CookTime', SHORT, required=True),
        Field('cook_time_total', 'CookTimeTotal', SHORT, required=True),
        custom_name_field(),
        items_field(),
        lock_field(),
        Field('recipes_used', 'RecipesUsed', DictOf(INT), default={}),
    ]


class BrewingStand(Record):
    fields = [
        Field('brew_time', 'BrewTime', SHORT, required=True),
        custom_name_field(),
        Field('fuel', 'Fuel', BYTE, required=True),
        items_field(),
        lock_field(),
    ]


class VibrationEvent(Record):
    fields = [
        Field('distance', 'distance', FLOAT, required=True),
        Field('game_event', 'game_event', STRING, required=True),
        Field('pos', 'pos', DoubleList(3), required=True),
        Field('projectile_owner', 'projectile_owner', UUID),
        Field('source', 'source', UUID),
    ]


class VibrationSelector(Record):
    fields = [
        Field('event', 'event', Nested(VibrationEvent)),
        Field('tick', 'tick', LONG, required=True),
    ]


class VibrationListener(Record):
    fields = [
        Field('event', 'event', Nested(VibrationEvent)),
        Field('event_delay', 'event_delay', INT, required=True),
        Field('selector', 'selector', Nested(VibrationSelector), required=True),
    ]


class SculkSensor(Record):
    """Sculk sensors and calibrated sculk sensors"""
    fields = [
        Field('last_vibration_frequency', 'last_vibration_frequency', INT, required=True),
        Field('listener', 'listener', Nested(VibrationListener), required=True),
    ]


class SculkShrieker(Record):
    fields = [
        Field('listener', 'listener', Nested(VibrationListener), required=True),
        Field('warning_level', 'warning_level', INT),
    ]


class CatalystCursor(Record):
    fields = [
        Field('charge', 'charge', INT, required=True),
        Field('pos', 'pos', POS3, required=True),
        Field('decay_delay', 'decay_delay', INT, required=True),
        Field('update_delay', 'update_delay', INT, required=True),
        Field('facings', 'facings', STRINGS, default=[]),
    ]


class SculkCatalyst(Record):
    fields = [
        Field('cursors', 'cursors', ListOf(Nested(CatalystCursor)), required=True),
    ]


class Campfire(Record):
    fields = [
        Field('cooking_times', 'CookingTimes', IntArray(4), required=True),
        Field('cooking_total_times', 'CookingTotalTimes', IntArray(4), required=True),
        items_field(),
    ]


class ChiseledBookshelf(Record):
    fields = [
        items_field(),
        Field('last_interacted_slot', 'last_interacted_slot', INT, required=True),
    ]


class Chest(Record):
    """Chests and trapped chests"""
    fields = container_fields()


class Comparator(Record):
    fields = [
        Field('output_signal', 'OutputSignal', INT, required=True),
    ]


class CommandBlock(Record):
    fields = [
        Field('auto', 'auto', BOOL, default=False),
        Field('command', 'Command', STRING, default=""),
        Field('condition_met', 'conditionMet', BOOL, default=False),
        custom_name_field(),
        Field('last_execution', 'LastExecution', LONG),
        Field('last_output', 'LastOutput', STRING),
        Field('powered', 'powered', BOOL, default=False),
        Field('success_count', 'SuccessCount', INT, default=0),
        Field('track_output', 'TrackOutput', BOOL, default=True),
        Field('update_last_execution', 'UpdateLastExecution', BOOL, default=True),
    ]


class Conduit(Record):
    fields = [
        Field('target', 'Target', UUID),
    ]


class Crafter(Record):
    fields = [
        Field('crafting_ticks_remaining', 'crafting_ticks_remaining', INT, required=True),
        Field('triggered', 'triggered', BOOL, default=False),
        Field('disabled_slots', 'disabled_slots', INT_ARRAY, default=()),
    ] + container_fields()


class DaylightDetector(Record):
    pass


class DecoratedPot(Record):
    fields = [
        Field('sherds', 'sherds', STRINGS, required=True),
        Field('item', 'item', Nested(ItemWithNoSlot)),
    ] + loot_table_fields()


class Dispenser(Record):
    """Dispensers and droppers"""
    fields = container_fields()


class EnchantingTable(Record):
    fields = [custom_name_field()]


class EnderChest(Record):
    pass


class ExitPortal(Record):
    fields = [
        Field('x', 'X', INT, required=True),
        Field('y', 'Y', INT, required=True),
        Field('z', 'Z', INT, required=True),
    ]


class EndGateway(Record):
    fields = [
        Field('age', 'Age', LONG, required=True),
        Field('exact_teleport', 'ExactTeleport', BOOL, default=False),
        Field('exit_portal', 'ExitPortal', Nested(ExitPortal)),
    ]


class EndPortal(Record):
    pass


class SignText(Record):
    fields = [
        Field('has_glowing_text', 'has_glowing_text', BOOL, default=False),
        Field('color', 'color', Choice(STRING, COLOR_NAMES), required=True),
        Field('filtered_messages', 'filtered_messages', STRINGS),
        Field('messages', 'messages', STRINGS, required=True),
    ]


class Sign(Record):
    """Signs and hanging signs of every wood type"""
    fields = [
        Field('is_waxed', 'is_waxed', BOOL, default=False),
        Field('front_text', 'front_text', Nested(SignText), required=True),
        Field('back_text', 'back_text', Nested(SignText), required=True),
    ]


class Hopper(Record):
    fields = container_fields() + [
        Field('transfer_cooldown', 'TransferCooldown', INT, default=0),
    ]


class Jigsaw(Record):
    fields = [
        Field('final_state', 'final_state', STRING),
        Field('joint', 'joint', Choice(STRING, ("rollable", "aligned"))),
        Field('name', 'name', STRING),
        Field('pool', 'pool', STRING),
        Field('target', 'target', STRING),
        Field('placement_priority', 'placement_priority', INT),
        Field('selection_priority', 'selection_priority', INT),
    ]


class Jukebox(Record):
    fields = [
        Field('record_item', 'RecordItem', Nested(ItemWithNoSlot)),
        Field('ticks_since_song_started', 'ticks_since_song_started', LONG),
    ]


class Lectern(Record):
    fields = [
        Field('book', 'Book', Nested(ItemWithNoSlot)),
        Field('page', 'Page', INT),
    ]


class SpawnRules(Record):
    fields = [
        Field('block_light_limit', 'block_light_limit', INT, required=True),
        Field('sky_light_limit', 'sky_light_limit', INT, required=True),
    ]


class DropChances(Record):
    fields = [Field(slot, slot, FLOAT) for slot in
              ('feet', 'legs', 'chest', 'head', 'body', 'mainhand', 'offhand')]


class SpawnEquipment(Record):
    fields = [
        Field('loot_table', 'loot_table', STRING, required=True),
        Field('slot_drop_chances', 'slot_drop_chances',
              ByShape([(FLOAT, float), (Nested(DropChances), DropChances)])),
    ]


class SpawnData(Record):
    """What a spawner makes next"""
    fields = [
        Field('entity', 'entity', Nested(MaybeEntity), required=True),
        Field('custom_spawn_rules', 'custom_spawn_rules', Nested(SpawnRules)),
        Field('equipment', 'equipment', Nested(SpawnEquipment)),
    ]


class SpawnPotential(Record):
    fields = [
        Field('weight', 'weight', INT, required=True),
        Field('data', 'data', Nested(SpawnData), required=True),
    ]


class MobSpawner(Record):
    fields = [
        Field('delay', 'Delay', SHORT, required=True),
        Field('max_nearby_entities', 'MaxNearbyEntities', SHORT, required=True),
        Field('max_spawn_delay', 'MaxSpawnDelay', SHORT, required=True),
        Field('min_spawn_delay', 'MinSpawnDelay', SHORT, required=True),
        Field('required_player_range', 'RequiredPlayerRange', SHORT, required=True),
        Field('spawn_count', 'SpawnCount', SHORT, required=True),
        Field('spawn_data', 'SpawnData', Nested(SpawnData), required=True),
        Field('spawn_potentials', 'SpawnPotentials', ListOf(Nested(SpawnPotential))),
        Field('spawn_range', 'SpawnRange', SHORT, default=4),
    ]


class PistonBlockState(Record):
    fields = [
        Field('name', 'Name', STRING, required=True),
        Field('properties', 'Properties', DictOf(STRING)),
    ]


class Piston(Record):
    fields = [
        Field('block_state', 'blockState', Nested(PistonBlockState), required=True),
        Field('extending', 'extending', BOOL, default=False),
        Field('facing', 'facing', Choice(INT, range(6)), required=True),
        Field('progress', 'progress', FLOAT, required=True),
        Field('source', 'source', BOOL, default=False),
    ]


class ShulkerBox(Record):
    fields = container_fields()


class Skull(Record):
    """Mob heads and player heads. `profile` is a player name (a
    Reference) or a full Profile."""
    fields = [
        Field('custom_name', 'custom_name', STRING),
        Field('note_block_sound', 'note_block_sound', STRING),
        Field('profile', 'profile', ValueShape(Profile)),
    ]


STRUCTURE_MIRRORS = ("NONE", "LEFT_RIGHT", "FRONT_BACK")
STRUCTURE_MODES = ("SAVE", "LOAD", "CORNER", "DATA")
STRUCTURE_ROTATIONS = ("NONE", "CLOCKWISE_90", "CLOCKWISE_180", "COUNTERCLOCKWISE_90")


class StructureBlock(Record):
    fields = [
        Field('author', 'author', STRING, required=True),
        Field('ignore_entities', 'ignoreEntities', BOOL, default=False),
        Field('integrity', 'integrity', FLOAT, required=True),
        Field('metadata', 'metadata', STRING, required=True),
        Field('mirror', 'mirror', Choice(STRING, STRUCTURE_MIRRORS), required=True),
        Field('mode', 'mode', Choice(STRING, STRUCTURE_MODES), required=True),
        Field('name', 'name', STRING, required=True),
        Field('pos_x', 'posX', INT, required=True),
        Field('pos_y', 'posY', INT, required=True),
        Field('pos_z', 'posZ', INT, required=True),
        Field('powered', 'powered', BOOL, default=False),
        Field('rotation', 'rotation', Choice(STRING, STRUCTURE_ROTATIONS), required=True),
        Field('seed', 'seed', LONG, required=True),
        Field('show_air', 'showair', BOOL, default=False),
        Field('show_bounding_box', 'showboundingbox', BOOL, default=False),
        Field('size_x', 'sizeX', INT, required=True),
        Field('size_y', 'sizeY', INT, required=True),
        Field('size_z', 'sizeZ', INT, required=True),
    ]


class SuspiciousBlock(Record):
    """Suspicious sand and suspicious gravel"""
    fields = loot_table_fields() + [
        Field('item', 'item', Nested(ItemWithNoSlot)),
    ]


class WeightedLootTable(Record):
    fields = [
        Field('weight', 'weight', INT, required=True),
        Field('data', 'data', STRING, required=True),
    ]


class TrialSpawnerConfig(Record):
    fields = [
        Field('spawn_range', 'spawn_range', INT),
        Field('total_mobs', 'total_mobs', FLOAT),
        Field('simultaneous_mobs', 'simultaneous_mobs', FLOAT),
        Field('total_mobs_added_per_player', 'total_mobs_added_per_player', FLOAT),
        Field('simultaneous_mobs_added_per_player', 'simultaneous_mobs_added_per_player', FLOAT),
        Field('ticks_between_spawn', 'ticks_between_spawn', INT),
        Field('spawn_potentials', 'spawn_potentials', ListOf(Nested(SpawnPotential))),
        Field('loot_tables_to_eject', 'loot_tables_to_eject', ListOf(Nested(WeightedLootTable))),
        Field('items_to_drop_when_ominous', 'items_to_drop_when_ominous', STRING),
    ]


class TrialSpawner(Record):
    fields = [
        Field('required_player_range', 'required_player_range', INT, default=14),
        Field('target_cooldown_length', 'target_cooldown_length', INT, default=36000),
        Field('normal_config', 'normal_config', Nested(TrialSpawnerConfig)),
        Field('ominous_config', 'ominous_config', Nested(TrialSpawnerConfig)),
        Field('registered_players', 'registered_players', UUIDS, default=[]),
        Field('current_mobs', 'current_mobs', UUIDS, default=[]),
        Field('cooldown_ends_at', 'cooldown_ends_at', LONG, default=0),
        Field('next_mob_spawns_at', 'next_mob_spawns_at', LONG, default=0),
        Field('total_mobs_spawned', 'total_mobs_spawned', INT, default=0),
        Field('spawn_data', 'spawn_data', Nested(SpawnData), required=True),
        Field('ejecting_loot_table', 'ejecting_loot_table', STRING),
    ]


class VaultConfig(Record):
    fields = [
        Field('loot_table', 'loot_table', STRING),
        Field('override_loot_table_to_display', 'override_loot_table_to_display', STRING),
        Field('activation_range', 'activation_range', DOUBLE),
        Field('deactivation_range', 'deactivation_range', DOUBLE),
        Field('key_item', 'key_item', Nested(ItemWithNoSlot), required=True),
    ]


class VaultServerData(Record):
    fields = [
        Field('rewarded_players', 'rewarded_players', UUIDS, default=[]),
        Field('state_updating_resumes_at', 'state_updating_resumes_at', LONG, required=True),
        Field('items_to_eject', 'items_to_eject', ListOf(Nested(ItemWithNoSlot)), default=[]),
        Field('total_ejections_needed', 'total_ejections_needed', INT, required=True),
    ]


class VaultSharedData(Record):
    fields = [
        Field('display_item', 'display_item', Nested(ItemWithNoSlot), required=True),
        Field('connected_players', 'connected_players', UUIDS, default=[]),
        Field('connected_particles_range', 'connected_particles_range', DOUBLE, required=True),
    ]


class Vault(Record):
    fields = [
        Field('config', 'config', Nested(VaultConfig), required=True),
        Field('server_data', 'server_data', Nested(VaultServerData), required=True),
        Field('shared_data', 'shared_data', Nested(VaultSharedData), required=True),
    ]


def _ns(name):
    return "minecraft:" + name


def _kinds():
    kinds = {
        _ns("barrel"): Barrel,
        _ns("beacon"): Beacon,
        _ns("beehive"): Beehive,
        _ns("bee_nest"): Beehive,
        _ns("bell"): Bell,
        _ns("blast_furnace"): Furnace,
        _ns("brewing_stand"): BrewingStand,
        _ns("calibrated_sculk_sensor"): SculkSensor,
        _ns("campfire"): Campfire,
        _ns("soul_campfire"): Campfire,
        _ns("chiseled_bookshelf"): ChiseledBookshelf,
        _ns("chest"): Chest,
        _ns("trapped_chest"): Chest,
        _ns("comparator"): Comparator,
        _ns("command_block"): CommandBlock,
        _ns("chain_command_block"): CommandBlock,
        _ns("repeating_command_block"): CommandBlock,
        _ns("conduit"): Conduit,
        _ns("crafter"): Crafter,
        _ns("daylight_detector"): DaylightDetector,
        _ns("decorated_pot"): DecoratedPot,
        _ns("dispenser"): Dispenser,
        _ns("dropper"): Dispenser,
        _ns("enchanting_table"): EnchantingTable,
        _ns("ender_chest"): EnderChest,
        _ns("end_gateway"): EndGateway,
        _ns("end_portal"): EndPortal,
        _ns("furnace"): Furnace,
        _ns("hopper"): Hopper,
        _ns("jigsaw"): Jigsaw,
        _ns("jukebox"): Jukebox,
        _ns("lectern"): Lectern,
        _ns("mob_spawner"): MobSpawner,
        _ns("piston"): Piston,
        _ns("sculk_catalyst"): SculkCatalyst,
        _ns("sculk_sensor"): SculkSensor,
        _ns("sculk_shrieker"): SculkShrieker,
        _ns("shulker_box"): ShulkerBox,
        _ns("smoker"): Furnace,
        _ns("structure_block"): StructureBlock,
        _ns("suspicious_sand"): SuspiciousBlock,
        _ns("suspicious_gravel"): SuspiciousBlock,
        _ns("trial_spawner"): TrialSpawner,
        _ns("vault"): Vault,
    }
    # block entity type ids, as written to chunks
    kinds.update({
        _ns("banner"): Banner,
        _ns("bed"): Bed,
        _ns("brushable_block"): SuspiciousBlock,
        _ns("hanging_sign"): Sign,
        _ns("sign"): Sign,
        _ns("skull"): Skull,
    })
    # per block ids
    for color in COLOR_NAMES:
        kinds[_ns(color + "_banner")] = Banner
        kinds[_ns(color + "_wall_banner")] = Banner
        kinds[_ns(color + "_bed")] = Bed
        kinds[_ns(color + "_shulker_box")] = ShulkerBox
    for wood in WOOD_TYPES:
        for suffix in ("_sign", "_wall_sign", "_hanging_sign", "_wall_hanging_sign"):
            kinds[_ns(wood + suffix)] = Sign
    for mob in ("skeleton", "wither_skeleton", "zombie", "creeper", "dragon", "piglin", "player"):
        head = "skull" if mob in ("skeleton", "wither_skeleton") else "head"
        kinds[_ns("%s_%s" % (mob, head))] = Skull
        kinds[_ns("%s_wall_%s" % (mob, head))] = Skull
    return kinds


BLOCK_ENTITY_KINDS = KindTable("block entity", _kinds())
