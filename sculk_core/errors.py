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
Exceptions raised while turning a tag tree into records.

Every decode either returns a complete record or raises exactly one of
these. Malformed binary framing is reported by the reader as a
nbt.CorruptionError and reaches callers wrapped in a ReaderError.
"""


class DecodeError(Exception):
    pass


class MissingField(DecodeError):
    """A field that the record requires was not present."""
    def __init__(self, name):
        DecodeError.__init__(self, "missing field %r" % (name,))
        self.name = name


class InvalidField(DecodeError):
    """A field was present, but held the wrong tag type or a value of the
    wrong shape (a fixed length array of the wrong length, a colour name that
    isn't a colour, ...)."""
    def __init__(self, name):
        DecodeError.__init__(self, "invalid field %r" % (name,))
        self.name = name


class NoData(DecodeError):
    """The document has no root tag at all"""
    def __init__(self):
        DecodeError.__init__(self, "no data in document")


class ReaderError(DecodeError):
    def __init__(self, cause):
        DecodeError.__init__(self, "could not read document: %s" % (cause,))
        self.cause = cause


class UnsupportedKind(DecodeError):
    """Raised in strict mode for a kind id that isn't in the kind table"""
    def __init__(self, kind):
        DecodeError.__init__(self, "unsupported kind %r" % (kind,))
        self.kind = kind
