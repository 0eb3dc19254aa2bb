#!/usr/bin/env python3
import unittest

# For convenience
import sys
import os
import logging

sys.path.insert(0, os.getcwd())
sys.path.insert(0, os.path.join(os.getcwd(), os.pardir))

# Import unit test cases or suites here
from test_nbt import NBTTest
from test_bitpack import BitpackTest
from test_fields import GetterTest, RecordTest
from test_dispatch import ValueShapeTest, KindTableTest, ComponentMapTest
from test_blockentity import BlockEntityTest
from test_lazy import LazyBlockEntityTest
from test_chunk import SectionTest, ChunkTest
from test_player import PlayerTest
from test_level import LevelTest
from test_map import MapTest
from test_statistics import StatisticsTest
from test_settings import SettingsTest
from test_logger import LoggerTest
from test_playerInspect import TestPlayerInspect

# DISABLE THIS BLOCK TO GET LOG OUTPUT FROM THE DECODERS FOR DEBUGGING
if 0:
    root = logging.getLogger()

    class NullHandler(logging.Handler):
        def handle(self, record):
            pass

        def emit(self, record):
            pass

        def createLock(self):
            self.lock = None
    root.addHandler(NullHandler())
else:
    from sculk_core import logger
    logger.configure(logging.DEBUG, True)


if __name__ == "__main__":
    unittest.main()
