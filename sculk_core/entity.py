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

from .fields import (Field, Nested, ListOf, DoubleList, FloatList, SHORT, INT,
                     FLOAT, STRING, BOOL, STRINGS, UUID, custom_name_field)
from .record import Record


def entity_fields(required):
    """The tags every entity has. With required=False every one of them is
    optional, for places that only hold part of an entity."""
    return [
        Field('air', 'Air', SHORT, required=required),
        custom_name_field(),
        Field('custom_name_visible', 'CustomNameVisible', BOOL),
        Field('fall_distance', 'FallDistance', FLOAT, required=required),
        Field('fire', 'Fire', SHORT, required=required),
        Field('glowing', 'Glowing', BOOL, default=False if required else None),
        Field('has_visual_fire', 'HasVisualFire', BOOL, default=False if required else None),
        Field('id', 'id', STRING, required=required),
        Field('invulnerable', 'Invulnerable', BOOL, default=False if required else None),
        Field('motion', 'Motion', DoubleList(3), required=required),
        Field('no_gravity', 'NoGravity', BOOL, default=False if required else None),
        Field('on_ground', 'OnGround', BOOL, default=False if required else None),
        Field('portal_cooldown', 'PortalCooldown', INT, required=required),
        Field('pos', 'Pos', DoubleList(3), required=required),
        Field('rotation', 'Rotation', FloatList(2), required=required),
        Field('silent', 'Silent', BOOL),
        Field('tags', 'Tags', STRINGS),
        Field('ticks_frozen', 'TicksFrozen', INT),
        Field('uuid', 'UUID', UUID, required=required),
    ]


class Entity(Record):
    pass

Entity.fields = entity_fields(True) + [
    Field('passengers', 'Passengers', ListOf(Nested(Entity)), default=[]),
]


class MaybeEntity(Record):
    """An entity where nothing is guaranteed to be there, as found in
    spawner data and bee hives"""
    pass

MaybeEntity.fields = entity_fields(False) + [
    Field('passengers', 'Passengers', ListOf(Nested(Entity))),
]
