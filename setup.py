#!/usr/bin/env python3

import sys


# quick version check
if sys.version_info[0] == 2 or (sys.version_info[0] == 3 and sys.version_info[1] < 7):
    print("Sorry, Sculk requires at least Python 3.7 to run.")
    sys.exit(1)


import os

from setuptools import setup

from sculk_core import util


# make sure our current working directory is the same directory
# setup.py is in
curdir = os.path.split(sys.argv[0])[0]
if curdir:
    os.chdir(curdir)

setup_kwargs = dict({
    'name': 'Sculk',
    'version': util.findGitVersion(),
    'description': 'Reads Minecraft %s save data into typed records.' % util.MC_VERSION,
    'license': 'GPLv3',
    'python_requires': '>=3.7',
    'install_requires': ['numpy'],
})

#
# script, package, and data
#

setup_kwargs['packages'] = ['sculk_core']
setup_kwargs['scripts'] = ['contrib/playerInspect.py']

setup(**setup_kwargs)
