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
Player statistics, stats/<uuid>.json.

These are plain JSON rather than tags, but they are decoded with the same
rules as everything else: a missing required key is a MissingField, a value
of the wrong type an InvalidField.
"""

import json

from .errors import MissingField, InvalidField, NoData, ReaderError

# attribute name -> key in the "stats" object
CATEGORIES = [
    ('custom', "minecraft:custom"),
    ('mined', "minecraft:mined"),
    ('broken', "minecraft:broken"),
    ('crafted', "minecraft:crafted"),
    ('used', "minecraft:used"),
    ('picked_up', "minecraft:picked_up"),
    ('dropped', "minecraft:dropped"),
    ('killed', "minecraft:killed"),
    ('killed_by', "minecraft:killed_by"),
]


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _read_category(stats, key):
    counts = stats.get(key)
    if counts is None:
        return None
    if not isinstance(counts, dict) or not all(_is_int(v) for v in counts.values()):
        raise InvalidField(key)
    return dict(counts)


class Statistics(object):
    """Per player counters, one optional {id: count} dict per category"""

    def __init__(self, data_version, **categories):
        self.data_version = data_version
        for attr, _ in CATEGORIES:
            setattr(self, attr, categories.pop(attr, None))
        if categories:
            raise TypeError("Statistics has no categories %s" % ", ".join(sorted(categories)))

    @classmethod
    def from_json(cls, root):
        if not isinstance(root, dict):
            raise InvalidField("stats")
        stats = root.get("stats")
        if stats is None:
            raise MissingField("stats")
        if not isinstance(stats, dict):
            raise InvalidField("stats")
        data_version = root.get("DataVersion")
        if data_version is None:
            raise MissingField("DataVersion")
        if not _is_int(data_version):
            raise InvalidField("DataVersion")
        categories = dict((attr, _read_category(stats, key)) for attr, key in CATEGORIES)
        return cls(data_version, **categories)

    @classmethod
    def from_bytes(cls, buf):
        if not buf or not buf.strip():
            raise NoData()
        try:
            root = json.loads(buf)
        except ValueError as e:
            raise ReaderError(e) from e
        return cls.from_json(root)

    def to_json(self):
        stats = {}
        for attr, key in CATEGORIES:
            counts = getattr(self, attr)
            if counts is not None:
                stats[key] = counts
        return {"stats": stats, "DataVersion": self.data_version}

    def to_bytes(self):
        return json.dumps(self.to_json()).encode('utf-8')

    def get(self, category, name, default=0):
        """Count for `name` in `category` ("mined", "killed", ...)"""
        counts = getattr(self, category)
        if counts is None:
            return default
        return counts.get(name, default)

    def __eq__(self, other):
        if not isinstance(other, Statistics):
            return NotImplemented
        return self.to_json() == other.to_json()

    __hash__ = None

    def __repr__(self):
        return "Statistics(data_version=%r)" % (self.data_version,)
