#!/usr/bin/env python3
"""
Very basic player.dat inspection script
"""

import os
import sys
import argparse
import logging
from pathlib import Path

# incantation to be able to import sculk_core
if not hasattr(sys, "frozen"):
    sys.path.insert(0, os.path.abspath(os.path.join(os.path.split(__file__)[0], '..')))


from sculk_core import logger
from sculk_core.errors import DecodeError
from sculk_core.player import Player


def print_player(player, sub_entry=False):
    indent = ""
    if sub_entry:
        indent = "\t"
    print("%sPosition:\t%i, %i, %i\t(dim: %s)"
          % (indent, player.pos[0], player.pos[1], player.pos[2], player.dimension))
    if player.spawn_x is not None:
        print("%sSpawn:\t\t%i, %i, %i"
              % (indent, player.spawn_x, player.spawn_y, player.spawn_z))
    print("%sHealth:\t%i\tLevel:\t\t%i\t\tGameType:\t%s"
          % (indent, player.health, player.xp_level, player.game_type))
    print("%sFood:\t%i\tTotal XP:\t%i"
          % (indent, player.food_level, player.xp_total))
    print("%sInventory: %d items" % (indent, len(player.inventory)))
    if not sub_entry:
        for item in player.inventory:
            print("  %-3d %s" % (item.count, item.id))


def find_all_player_files(dir_path):
    for player_file in dir_path.iterdir():
        player = player_file.stem
        yield player_file, player


def find_player_file(dir_path, selected_player):
    for player_file, player in find_all_player_files(dir_path):
        if selected_player == player:
            return player_file, player
    raise FileNotFoundError()


def load_and_output_player(player_file_path, player, sub_entry=False):
    with player_file_path.open('rb') as f:
        data = f.read()
    try:
        player_data = Player.from_bytes(data)
    except DecodeError as e:
        logging.error("Could not read %s: %s", player_file_path, e)
        return False
    print("")
    print(player)
    print_player(player_data, sub_entry=sub_entry)
    return True


def dir_or_file(path):
    p = Path(path)
    if not p.is_file() and not p.is_dir():
        raise argparse.ArgumentTypeError("Not a valid file or directory path")
    return p


def main(path, selected_player=None):
    print("Inspecting %s" % path)

    if not path.is_dir():
        load_and_output_player(path, path.stem)
        return

    if selected_player is None:
        for player_file, player in find_all_player_files(path):
            load_and_output_player(player_file, player)
        return

    try:
        player_file, player = find_player_file(path, selected_player)
        load_and_output_player(player_file, player, sub_entry=True)
    except FileNotFoundError:
        print("No %s.dat in %s" % (selected_player, path))
        sys.exit(1)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('path', metavar='<Player.dat or directory>', type=dir_or_file)
    parser.add_argument('selected_player', nargs='?', default=None)
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="log every decoding step")

    args = parser.parse_args()
    logger.configure(logging.DEBUG if args.verbose else logging.INFO)
    main(args.path, selected_player=args.selected_player)
