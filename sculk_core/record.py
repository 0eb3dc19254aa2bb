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

from . import nbt
from . import settings
from .errors import NoData, ReaderError
from .nbt import Compound


def read_root(buf, compression="auto"):
    """Parses a document and returns its root compound. An empty document
    raises NoData; broken framing raises ReaderError."""
    try:
        result = nbt.loads(buf, compression)
    except nbt.CorruptionError as e:
        raise ReaderError(e) from e
    if result is None:
        raise NoData()
    return result[1]


class Record(object):
    """Base class of every decoded record.

    Subclasses list their Field objects in `fields`. from_compound() reads
    them all in order, so a record is either complete or not built at all.
    Tags that no field asks for are ignored.

    Records compare equal when they are of the same class and every field is
    equal.

    """
    fields = []

    def __init__(self, **kwargs):
        for field in self.fields:
            if field.attr in kwargs:
                value = kwargs.pop(field.attr)
            elif field.required:
                raise TypeError("%s needs a value for %r"
                                % (self.__class__.__name__, field.attr))
            else:
                value = field.get_default()
            setattr(self, field.attr, value)
        if kwargs:
            raise TypeError("%s has no field(s) %s"
                            % (self.__class__.__name__, ", ".join(sorted(kwargs))))

    @classmethod
    def from_compound(cls, tree):
        values = {}
        for field in cls.fields:
            values[field.attr] = field.extract(tree)
        return cls(**values)

    def to_compound(self):
        tree = Compound()
        for field in self.fields:
            field.insert(tree, getattr(self, field.attr))
        return tree

    @classmethod
    def from_root(cls, tree, options):
        """Hook for records whose document root isn't the record itself"""
        return cls.from_compound(tree)

    def to_root(self):
        return self.to_compound()

    @classmethod
    def from_bytes(cls, buf, **options):
        """Decodes a whole document. See settings.DECODE_OPTIONS for the
        accepted keyword options."""
        options = settings.get_validated_options(**options)
        return cls.from_root(read_root(buf, options['compression']), options)

    def to_bytes(self, name="", compression="none"):
        return nbt.dumps(self.to_root(), name, compression)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f.attr) == getattr(other, f.attr) for f in self.fields)

    __hash__ = None

    def __repr__(self):
        parts = ["%s=%r" % (f.attr, getattr(self, f.attr)) for f in self.fields
                 if getattr(self, f.attr) is not None]
        return "%s(%s)" % (self.__class__.__name__, ", ".join(parts))
