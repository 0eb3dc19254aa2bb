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
Player data, as found in playerdata/<uuid>.dat and in level.dat of single
player worlds.
"""

from .components import EffectDetails
from .entity import Entity, entity_fields
from .fields import (Field, Nested, ListOf, IntArray, SHORT, INT, FLOAT,
                     DOUBLE, STRING, BOOL, STRINGS, UUID)
from .items import items_field
from .record import Record

GAME_TYPES = {
    0: "survival",
    1: "creative",
    2: "adventure",
    3: "spectator",
}


def game_type_name(gametype):
    """"survival", "creative", ... or "unknown" for anything else"""
    return GAME_TYPES.get(gametype, "unknown")


class Abilities(Record):
    fields = [
        Field('flying', 'flying', BOOL, default=False),
        Field('fly_speed', 'flySpeed', FLOAT, default=0.05),
        Field('insta_build', 'instabuild', BOOL, default=False),
        Field('invulnerable', 'invulnerable', BOOL, default=False),
        Field('may_build', 'mayBuild', BOOL, default=False),
        Field('may_fly', 'mayfly', BOOL, default=False),
        Field('walk_speed', 'walkSpeed', FLOAT, default=0.1),
    ]


class RecipeBook(Record):
    fields = [
        Field('recipes', 'recipes', STRINGS, default=[]),
        Field('to_be_displayed', 'toBeDisplayed', STRINGS, default=[]),
        Field('is_filtering_craftable', 'isFilteringCraftable', BOOL, default=False),
        Field('is_gui_open', 'isGuiOpen', BOOL, default=False),
        Field('is_furnace_filtering_craftable', 'isFurnaceFilteringCraftable', BOOL, default=False),
        Field('is_furnace_gui_open', 'isFurnaceGuiOpen', BOOL, default=False),
        Field('is_blasting_furnace_filtering_craftable', 'isBlastingFurnaceFilteringCraftable',
              BOOL, default=False),
        Field('is_blasting_furnace_gui_open', 'isBlastingFurnaceGuiOpen', BOOL, default=False),
        Field('is_smoker_filtering_craftable', 'isSmokerFilteringCraftable', BOOL, default=False),
        Field('is_smoker_gui_open', 'isSmokerGuiOpen', BOOL, default=False),
    ]


class WardenSpawnTracker(Record):
    fields = [
        Field('warning_level', 'warning_level', INT, required=True),
        Field('cooldown_ticks', 'cooldown_ticks', INT, required=True),
        Field('ticks_since_last_warning', 'ticks_since_last_warning', INT, required=True),
    ]


class RootVehicle(Record):
    """The entity the player was riding when they logged out"""
    fields = [
        Field('attach', 'Attach', UUID, required=True),
        Field('entity', 'Entity', Nested(Entity), required=True),
    ]


class DeathLocation(Record):
    fields = [
        Field('dimension', 'dimension', STRING, required=True),
        Field('pos', 'pos', IntArray(3), required=True),
    ]


class NetherPosition(Record):
    fields = [
        Field('x', 'x', DOUBLE, required=True),
        Field('y', 'y', DOUBLE, required=True),
        Field('z', 'z', DOUBLE, required=True),
    ]


def living_fields():
    return [
        Field('absorption_amount', 'AbsorptionAmount', FLOAT),
        Field('active_effects', 'active_effects', ListOf(Nested(EffectDetails)), default=[]),
        Field('death_time', 'DeathTime', SHORT, default=0),
        Field('fall_flying', 'FallFlying', BOOL, default=False),
        Field('health', 'Health', FLOAT, required=True),
        Field('hurt_by_timestamp', 'HurtByTimestamp', INT, required=True),
        Field('hurt_time', 'HurtTime', SHORT),
        Field('left_handed', 'LeftHanded', BOOL, default=False),
    ]


class Player(Record):
    """A player. Unlike other entities, players are saved without an `id`."""

    @property
    def game_type(self):
        return game_type_name(self.player_game_type)

    @property
    def position(self):
        return tuple(self.pos)

Player.fields = [f for f in entity_fields(True) if f.name != 'id'] + [
    Field('passengers', 'Passengers', ListOf(Nested(Entity)), default=[]),
] + living_fields() + [
    Field('abilities', 'abilities', Nested(Abilities), required=True),
    Field('data_version', 'DataVersion', INT, required=True),
    Field('dimension', 'Dimension', STRING, required=True),
    items_field('EnderItems', 'ender_items'),
    Field('entered_nether_position', 'enteredNetherPosition', Nested(NetherPosition)),
    Field('food_exhaustion_level', 'foodExhaustionLevel', FLOAT, required=True),
    Field('food_level', 'foodLevel', INT, required=True),
    Field('food_saturation_level', 'foodSaturationLevel', FLOAT, required=True),
    Field('food_tick_timer', 'foodTickTimer', INT, required=True),
    items_field('Inventory', 'inventory'),
    Field('last_death_location', 'LastDeathLocation', Nested(DeathLocation)),
    Field('player_game_type', 'playerGameType', INT, required=True),
    Field('previous_player_game_type', 'previousPlayerGameType', INT),
    Field('recipe_book', 'recipeBook', Nested(RecipeBook), required=True),
    Field('root_vehicle', 'RootVehicle', Nested(RootVehicle)),
    Field('score', 'Score', INT, default=0),
    Field('seen_credits', 'seenCredits', BOOL, default=False),
    Field('selected_item_slot', 'SelectedItemSlot', INT, required=True),
    Field('shoulder_entity_left', 'ShoulderEntityLeft', Nested(Entity)),
    Field('shoulder_entity_right', 'ShoulderEntityRight', Nested(Entity)),
    Field('sleep_timer', 'SleepTimer', SHORT, required=True),
    Field('spawn_dimension', 'SpawnDimension', STRING),
    Field('spawn_forced', 'SpawnForced', BOOL),
    Field('spawn_x', 'SpawnX', INT),
    Field('spawn_y', 'SpawnY', INT),
    Field('spawn_z', 'SpawnZ', INT),
    Field('warden_spawn_tracker', 'warden_spawn_tracker', Nested(WardenSpawnTracker),
          required=True),
    Field('xp_level', 'XpLevel', INT, default=0),
    Field('xp_p', 'XpP', FLOAT, default=0.0),
    Field('xp_seed', 'XpSeed', INT, default=0),
    Field('xp_total', 'XpTotal', INT, default=0),
]
