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
Misc utility routines and game constants used by multiple files that don't
belong anywhere else
"""

from subprocess import PIPE, Popen

# The version of Minecraft whose save format this library reads
MC_VERSION = "1.21"

# The sixteen dye colours: (id, name, rgb)
DYE_COLORS = [
    (0, "white", 0xF9FFFE),
    (1, "orange", 0xF9801D),
    (2, "magenta", 0xC74EBD),
    (3, "light_blue", 0x3AB3DA),
    (4, "yellow", 0xFED83D),
    (5, "lime", 0x80C71F),
    (6, "pink", 0xF38BAA),
    (7, "gray", 0x474F52),
    (8, "light_gray", 0x9D9D97),
    (9, "cyan", 0x169C9C),
    (10, "purple", 0x8932B8),
    (11, "blue", 0x3C44AA),
    (12, "brown", 0x835432),
    (13, "green", 0x5E7C16),
    (14, "red", 0xB02E26),
    (15, "black", 0x1D1D21),
]

COLOR_NAMES = tuple(name for _, name, _ in DYE_COLORS)

RARITIES = ("common", "uncommon", "rare", "epic")

WOOD_TYPES = ("oak", "spruce", "birch", "jungle", "acacia", "dark_oak",
              "mangrove", "cherry", "bamboo", "crimson", "warped")


def color_by_name(name):
    """Returns (id, name, rgb) for a dye colour name, or None"""
    for color in DYE_COLORS:
        if color[1] == name:
            return color
    return None


def color_by_id(colorid):
    if 0 <= colorid < len(DYE_COLORS):
        return DYE_COLORS[colorid]
    return None


def findGitVersion():
    try:
        p = Popen('git describe --tags --match "v*.*.*"', stdout=PIPE, stderr=PIPE, shell=True)
        p.stderr.close()
        line = p.stdout.readlines()[0].decode('utf-8')
        if line.startswith('v'):
            line = line[1:]
        # turn 0.1.0-50-somehash into 0.1.50
        # and 0.1.0 into 0.1.0
        line = line.strip().replace('-', '.').split('.')
        if len(line) == 5:
            del line[4]
            del line[2]
        else:
            assert len(line) == 3
        return '.'.join(line)
    except Exception:
        from .version import VERSION
        return VERSION
