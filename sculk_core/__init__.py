"""
Typed access to Minecraft save data.

Each top level document has its own module, with a record class whose
from_bytes() decodes it:

    chunk.Chunk, chunk.MinimalChunk     region file chunks
    blockentity.BlockEntity             a single block entity
    blockentity.LazyBlockEntity         the same, header only until asked
    player.Player                       playerdata/<uuid>.dat
    level.Level                         level.dat
    mapdata.MapData                     data/map_<n>.dat
    statistics.Statistics               stats/<uuid>.json

Errors are in errors.py, the tag reader and writer in nbt.py.
"""

from .version import VERSION
