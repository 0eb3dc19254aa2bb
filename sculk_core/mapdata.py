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

"""Filled maps, data/map_<n>.dat"""

from .fields import Field, Nested, ListOf, Choice, BYTE, INT, STRING, BOOL, BYTE_ARRAY
from .record import Record
from .util import COLOR_NAMES, color_by_name

# A map is 128x128 pixels, one colour index per byte
MAP_SIZE = 128


class MapPos(Record):
    fields = [
        Field('x', 'X', INT, required=True),
        Field('y', 'Y', INT, required=True),
        Field('z', 'Z', INT, required=True),
    ]


class MapBanner(Record):
    fields = [
        Field('color', 'Color', Choice(STRING, COLOR_NAMES), required=True),
        Field('name', 'Name', STRING),
        Field('pos', 'Pos', Nested(MapPos), required=True),
    ]

    @property
    def rgb(self):
        return color_by_name(self.color)[2]


class MapFrame(Record):
    fields = [
        Field('entity_id', 'EntityId', INT, required=True),
        Field('rotation', 'Rotation', INT, required=True),
        Field('pos', 'Pos', Nested(MapPos), required=True),
    ]


class MapContents(Record):
    fields = [
        Field('scale', 'scale', BYTE, required=True),
        Field('dimension', 'dimension', STRING, required=True),
        Field('tracking_position', 'trackingPosition', BOOL, default=True),
        Field('unlimited_tracking', 'unlimitedTracking', BOOL, default=False),
        Field('locked', 'locked', BOOL, default=False),
        Field('x_center', 'xCenter', INT, required=True),
        Field('z_center', 'zCenter', INT, required=True),
        Field('banners', 'banners', ListOf(Nested(MapBanner)), default=[]),
        Field('frames', 'frames', ListOf(Nested(MapFrame)), default=[]),
        Field('colors', 'colors', BYTE_ARRAY, default=b""),
    ]

    def color_at(self, x, z):
        """Colour index of pixel x, z, or None for a map with no pixels"""
        if len(self.colors) < MAP_SIZE * MAP_SIZE:
            return None
        return self.colors[z * MAP_SIZE + x]


class MapData(Record):
    fields = [
        Field('data_version', 'DataVersion', INT, required=True),
        Field('data', 'data', Nested(MapContents), required=True),
    ]
