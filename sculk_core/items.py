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

from .components import components_field
from .fields import Field, Nested, ListOf, BYTE, INT, STRING
from .record import Record


class Item(Record):
    """A stack of items in an inventory slot. `count` defaults to 1."""
    fields = [
        Field('slot', 'Slot', BYTE, required=True),
        Field('id', 'id', STRING, required=True),
        Field('count', 'Count', INT, default=1),
        components_field(),
    ]


class ItemWithNoSlot(Record):
    """A stack of items that isn't in a numbered slot: a lectern's book, a
    jukebox record, the item inside a decorated pot, ..."""
    fields = [
        Field('id', 'id', STRING, required=True),
        Field('count', 'Count', INT, default=1),
        components_field(),
    ]


def items_field(name='Items', attr='items'):
    """The usual inventory list. Absent means empty."""
    return Field(attr, name, ListOf(Nested(Item)), default=[])
