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
Packing and unpacking of the palette index arrays used by chunk sections.

Indices are stored low bit first in 64 bit words. Since 1.16 an index never
straddles two words: whatever bits are left over at the top of a word are
padding.
"""

import math

import numpy

from .errors import InvalidField

BLOCK_STATE_MIN_BITS = 4
BIOME_MIN_BITS = 1

BLOCK_STATE_ENTRIES = 4096
BIOME_ENTRIES = 64


def bits_for(palette_len, min_bits):
    """Number of bits used per index for a palette of the given size"""
    if palette_len <= 1:
        return min_bits
    return max(min_bits, math.ceil(math.log2(palette_len)))


def words_needed(entry_count, bits):
    per_word = 64 // bits
    return (entry_count + per_word - 1) // per_word


def _dtype_for(bits):
    if bits <= 16:
        return numpy.uint16
    return numpy.uint32


def decode(palette_len, entry_count, words, min_bits, name="data"):
    """Unpacks `entry_count` palette indices from `words`, a sequence of
    signed 64 bit ints.

    A single entry palette may omit the words entirely, in which case every
    index is 0. An empty palette with no words is treated the same way.
    Raises InvalidField(name) if there aren't enough words to cover every
    entry.

    """
    if words is None or len(words) == 0:
        if palette_len <= 1:
            return numpy.zeros((entry_count,), dtype=numpy.uint16)
        raise InvalidField(name)
    if palette_len < 1:
        raise InvalidField(name)

    bits = bits_for(palette_len, min_bits)
    per_word = 64 // bits
    if len(words) < words_needed(entry_count, bits):
        raise InvalidField(name)

    b = numpy.asarray(words, dtype=numpy.int64).view(numpy.uint64)
    result = numpy.zeros((entry_count,), dtype=_dtype_for(bits))
    mask = numpy.uint64((1 << bits) - 1)
    for i in range(per_word):
        # every per_word'th index lives at the same offset within its word
        j = (entry_count + per_word - 1 - i) // per_word
        result[i::per_word] = (b[:j] >> numpy.uint64(bits * i)) & mask
    return result


def encode(indices, bits):
    """Packs a sequence of indices, `bits` bits each, into a tuple of signed
    64 bit ints. The final word is zero padded."""
    indices = numpy.asarray(indices, dtype=numpy.uint64).ravel()
    if indices.size and int(indices.max()) >= (1 << bits):
        raise ValueError("index %d does not fit in %d bits" % (int(indices.max()), bits))

    per_word = 64 // bits
    words = numpy.zeros((words_needed(len(indices), bits),), dtype=numpy.uint64)
    for i in range(per_word):
        chunk = indices[i::per_word]
        words[:len(chunk)] |= chunk << numpy.uint64(bits * i)
    return tuple(int(w) for w in words.view(numpy.int64))
