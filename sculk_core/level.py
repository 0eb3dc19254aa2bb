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
level.dat: world wide settings and state.

Everything lives under a single "Data" compound in the document root.
Level.from_bytes() unwraps it and to_bytes() puts it back.
"""

from . import nbt
from .dispatch import ByShape
from .fields import (Field, Nested, DictOf, IntArray, BYTE, INT, LONG,
                     FLOAT, DOUBLE, STRING, BOOL, INT_ARRAY, STRINGS, UUID,
                     UUIDS, RAW, get_required)
from .nbt import Compound
from .player import Player
from .record import Record

DIFFICULTIES = {
    0: "peaceful",
    1: "easy",
    2: "normal",
    3: "hard",
}


class BossEvent(Record):
    fields = [
        Field('players', 'Players', UUIDS, default=[]),
        Field('color', 'Color', STRING, required=True),
        Field('create_world_fog', 'CreateWorldFog', BOOL, default=False),
        Field('darken_screen', 'DarkenScreen', BOOL, default=False),
        Field('max', 'Max', INT, required=True),
        Field('value', 'Value', INT, required=True),
        Field('name', 'Name', STRING, required=True),
        Field('overlay', 'Overlay', STRING, required=True),
        Field('play_boss_music', 'PlayBossMusic', BOOL, default=False),
        Field('visible', 'Visible', BOOL, default=False),
    ]


class DataPacks(Record):
    fields = [
        Field('disabled', 'Disabled', STRINGS, default=[]),
        Field('enabled', 'Enabled', STRINGS, default=[]),
    ]


class ExitPortalLocation(Record):
    fields = [
        Field('x', 'X', INT, required=True),
        Field('y', 'Y', INT, required=True),
        Field('z', 'Z', INT, required=True),
    ]


class DragonFight(Record):
    """State of the ender dragon fight. Older worlds keep the exit portal as
    an X/Y/Z compound, newer ones as an int array."""
    fields = [
        Field('dragon', 'Dragon', UUID),
        Field('dragon_uuid_least', 'DragonUUIDLeast', LONG),
        Field('dragon_uuid_most', 'DragonUUIDMost', LONG),
        Field('dragon_killed', 'DragonKilled', BOOL, default=False),
        Field('exit_portal_location', 'ExitPortalLocation',
              ByShape([(Nested(ExitPortalLocation), ExitPortalLocation),
                       (IntArray(3), tuple)])),
        Field('gateways', 'Gateways', INT_ARRAY, required=True),
        Field('needs_state_scanning', 'NeedsStateScanning', BOOL),
        Field('previously_killed', 'PreviouslyKilled', BOOL, default=False),
    ]


class WorldGenSettings(Record):
    """`dimensions` is kept as read: its contents depend on the world
    preset and on data packs."""
    fields = [
        Field('bonus_chest', 'bonus_chest', BOOL, default=False),
        Field('seed', 'seed', LONG, required=True),
        Field('generate_features', 'generate_features', BOOL, default=True),
        Field('dimensions', 'dimensions', RAW, required=True),
    ]


class VersionInfo(Record):
    fields = [
        Field('id', 'Id', INT, required=True),
        Field('name', 'Name', STRING, required=True),
        Field('series', 'Series', STRING, required=True),
        Field('snapshot', 'Snapshot', BOOL, default=False),
    ]


class Level(Record):
    fields = [
        Field('allow_commands', 'allowCommands', BOOL, default=False),
        Field('border_center_x', 'BorderCenterX', DOUBLE, default=0.0),
        Field('border_center_z', 'BorderCenterZ', DOUBLE, default=0.0),
        Field('border_damage_per_block', 'BorderDamagePerBlock', DOUBLE, default=0.2),
        Field('border_size', 'BorderSize', DOUBLE, default=60000000.0),
        Field('border_safe_zone', 'BorderSafeZone', DOUBLE, default=5.0),
        Field('border_size_lerp_target', 'BorderSizeLerpTarget', DOUBLE, default=60000000.0),
        Field('border_size_lerp_time', 'BorderSizeLerpTime', LONG, default=0),
        Field('border_warning_blocks', 'BorderWarningBlocks', DOUBLE, default=5.0),
        Field('border_warning_time', 'BorderWarningTime', DOUBLE, default=15.0),
        Field('clear_weather_time', 'clearWeatherTime', INT),
        Field('custom_boss_events', 'CustomBossEvents', DictOf(Nested(BossEvent)), required=True),
        Field('data_packs', 'DataPacks', Nested(DataPacks), required=True),
        Field('data_version', 'DataVersion', INT, required=True),
        Field('day_time', 'DayTime', LONG, required=True),
        Field('difficulty', 'Difficulty', BYTE, default=2),
        Field('difficulty_locked', 'DifficultyLocked', BOOL, default=True),
        Field('dragon_fight', 'DragonFight', Nested(DragonFight), required=True),
        Field('enabled_features', 'enabled_features', STRINGS),
        Field('game_rules', 'GameRules', DictOf(STRING), required=True),
        Field('world_gen_settings', 'WorldGenSettings', Nested(WorldGenSettings), required=True),
        Field('game_type', 'GameType', INT, required=True),
        Field('hardcore', 'hardcore', BOOL, default=False),
        Field('initialized', 'initialized', BOOL, default=False),
        Field('last_played', 'LastPlayed', LONG, required=True),
        Field('level_name', 'LevelName', STRING, required=True),
        Field('map_features', 'MapFeatures', BOOL, default=True),
        Field('player', 'Player', Nested(Player)),
        Field('raining', 'raining', BOOL, default=False),
        Field('rain_time', 'rainTime', INT, required=True),
        Field('random_seed', 'RandomSeed', LONG),
        Field('size_on_disk', 'SizeOnDisk', LONG),
        Field('spawn_angle', 'SpawnAngle', FLOAT),
        Field('spawn_x', 'SpawnX', INT, required=True),
        Field('spawn_y', 'SpawnY', INT, required=True),
        Field('spawn_z', 'SpawnZ', INT, required=True),
        Field('thundering', 'thundering', BOOL, default=False),
        Field('thunder_time', 'thunderTime', INT, required=True),
        Field('time', 'Time', LONG, required=True),
        Field('version', 'version', INT, required=True),
        Field('version_info', 'Version', Nested(VersionInfo), required=True),
        Field('wandering_trader_id', 'WanderingTraderId', UUID),
        Field('wandering_trader_spawn_chance', 'WanderingTraderSpawnChance', INT, required=True),
        Field('wandering_trader_spawn_delay', 'WanderingTraderSpawnDelay', INT, required=True),
        Field('was_modded', 'WasModded', BOOL, default=False),
    ]

    @property
    def difficulty_name(self):
        return DIFFICULTIES.get(self.difficulty, "unknown")

    @classmethod
    def from_root(cls, tree, options):
        return cls.from_compound(get_required(tree, 'Data', nbt.TAG_COMPOUND))

    def to_root(self):
        return Compound().put_compound('Data', self.to_compound())
