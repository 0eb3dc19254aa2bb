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

# Options accepted by the from_bytes() entry points, and how they are
# validated.

# Settings objects have this signature:
# Setting(required, validator, default)

# required
#   a boolean indicating that this value is required. A required setting will
#   always exist in a validated config, either as given or as its default.

# validator
#   a callable that takes the provided value and returns a cleaned/normalized
#   value to replace it with. It should raise a ValidationException if there is
#   a problem parsing or validating the value given.

# default
#   This is used in the event that the caller does not provide a value. The
#   default is passed through the validator just the same.

import logging


class ValidationException(Exception):
    pass


class Setting(object):
    __slots__ = ['required', 'validator', 'default']
    def __init__(self, required, validator, default):
        self.required = required
        self.validator = validator
        self.default = default


COMPRESSIONS = ("auto", "gzip", "zlib", "none")


def validateBool(b):
    return bool(b)


def validateCompression(c):
    c = str(c).lower()
    if c not in COMPRESSIONS:
        raise ValidationException("%r is not a valid compression. Use one of %s"
                                  % (c, ", ".join(COMPRESSIONS)))
    return c


def make_configDictValidator(config):
    """Returns a validator for a "configdict": a dict of option names to
    values. `config` maps each valid name to its Setting. The returned
    validator runs every Setting's validator, fills in defaults and returns a
    new dict. Names not in `config` raise ValidationException.

    """
    def configDictValidator(d):
        newdict = {}

        # Go through the keys the caller gave us and make sure they're all valid.
        for key in d:
            if key not in config:
                # Try to find a probable match
                match = _get_closest_match(key, config)
                if match:
                    raise ValidationException(
                            "'%s' is not a decode option. Did you mean '%s'?"
                            % (key, match))
                else:
                    raise ValidationException("'%s' is not a decode option" % key)

        for configkey, configsetting in config.items():
            if configkey in d:
                newdict[configkey] = configsetting.validator(d[configkey])
            elif configsetting.default is not None:
                newdict[configkey] = configsetting.validator(configsetting.default)
            elif configsetting.required:
                raise ValidationException("Required option '%s' was not "
                                          "specified" % configkey)

        return newdict
    # Keep the config on the function so it can be read back later
    configDictValidator.config = config
    return configDictValidator


def _levenshtein(s1, s2):
    previous = list(range(len(s1) + 1))
    for j, c2 in enumerate(s2, 1):
        current = [j]
        for i, c1 in enumerate(s1, 1):
            current.append(min(current[i - 1] + 1,
                               previous[i] + 1,
                               previous[i - 1] + (c1 != c2)))
        previous = current
    return previous[-1]


def _get_closest_match(s, keys):
    """Returns a probable match for the given key `s` out of the possible keys in
    `keys`. Returns None if no matches are very close.

    """
    # it's probably not a typo if the distance is >3
    threshold = 3

    minmatch = None
    mindist = threshold + 1

    for key in keys:
        d = _levenshtein(s, key)
        if d < mindist:
            minmatch = key
            mindist = d

    if mindist <= threshold:
        return minmatch
    return None


DECODE_OPTIONS = {
    # raise UnsupportedKind for block entity ids that aren't in the kind
    # table, instead of keeping them as Unknown
    'strict': Setting(True, validateBool, False),
    # what the bytes handed to from_bytes() are wrapped in
    'compression': Setting(True, validateCompression, "auto"),
}

_validate_options = make_configDictValidator(DECODE_OPTIONS)


def get_validated_options(**options):
    validated = _validate_options(options)
    logging.debug("Decode options: %r", validated)
    return validated
