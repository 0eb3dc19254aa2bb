import random
import unittest

import numpy

from sculk_core import bitpack
from sculk_core.errors import InvalidField


class BitpackTest(unittest.TestCase):

    def test_bits_for(self):
        self.assertEqual(bitpack.bits_for(1, 4), 4)
        self.assertEqual(bitpack.bits_for(16, 4), 4)
        self.assertEqual(bitpack.bits_for(17, 4), 5)
        self.assertEqual(bitpack.bits_for(2, 1), 1)
        self.assertEqual(bitpack.bits_for(3, 1), 2)
        self.assertEqual(bitpack.bits_for(4096, 4), 12)

    def test_words_needed(self):
        # 5 bits: 12 indices per word, the top 4 bits of each word unused
        self.assertEqual(bitpack.words_needed(4096, 5), 342)
        self.assertEqual(bitpack.words_needed(4096, 4), 256)
        self.assertEqual(bitpack.words_needed(64, 1), 1)

    def test_no_index_spans_words(self):
        # 12 five bit indices fill 60 bits, the 13th starts the next word
        indices = [31] * 13
        words = bitpack.encode(indices, 5)
        self.assertEqual(len(words), 2)
        self.assertEqual(words[0], (1 << 60) - 1)
        self.assertEqual(words[1], 31)

    def test_low_bits_first(self):
        words = bitpack.encode([1, 2, 3], 4)
        self.assertEqual(words, (0x321,))
        result = bitpack.decode(16, 3, [0x321], 4)
        self.assertEqual(list(result), [1, 2, 3])

    def test_signed_words(self):
        # all 64 bits used, so the word is negative as a signed long
        indices = [1] * 64
        words = bitpack.encode(indices, 1)
        self.assertEqual(words, (-1,))
        self.assertEqual(list(bitpack.decode(2, 64, words, 1)), indices)

    def test_inverse(self):
        rng = random.Random(1234)
        for palette_len in (1, 2, 5, 16, 17, 100, 300, 4096):
            for entry_count, min_bits in ((bitpack.BLOCK_STATE_ENTRIES, bitpack.BLOCK_STATE_MIN_BITS),
                                          (bitpack.BIOME_ENTRIES, bitpack.BIOME_MIN_BITS)):
                indices = [rng.randrange(palette_len) for _ in range(entry_count)]
                bits = bitpack.bits_for(palette_len, min_bits)
                words = bitpack.encode(indices, bits)
                result = bitpack.decode(palette_len, entry_count, words, min_bits)
                self.assertEqual(result.tolist(), indices)

    def test_single_entry_palette(self):
        for n in (1, 64, 4096):
            result = bitpack.decode(1, n, [], bitpack.BLOCK_STATE_MIN_BITS)
            self.assertEqual(len(result), n)
            self.assertFalse(result.any())
        result = bitpack.decode(1, 64, None, bitpack.BIOME_MIN_BITS)
        self.assertTrue(numpy.array_equal(result, numpy.zeros(64)))

    def test_empty_palette(self):
        self.assertFalse(bitpack.decode(0, 4096, None, 4).any())
        with self.assertRaises(InvalidField):
            bitpack.decode(0, 64, [1], 1)

    def test_missing_words(self):
        with self.assertRaises(InvalidField) as cm:
            bitpack.decode(2, 64, [], 1, name="data")
        self.assertEqual(cm.exception.name, "data")

    def test_short_words(self):
        words = bitpack.encode([0] * 4096, 4)
        with self.assertRaises(InvalidField):
            bitpack.decode(16, 4096, words[:-1], 4)

    def test_index_too_wide(self):
        self.assertRaises(ValueError, bitpack.encode, [16], 4)


if __name__ == "__main__":
    unittest.main()
