"""Doris library module for handling of Doris configuration settings

Example:
--------

    >>> from doris.lib import config
    >>> config.doris.get("strict_layout", section="parser", default=False).bool
    False

Description:
------------

This module is used to read Doris configuration settings. We first try to read configuration settings from the current
working directory, then from the user's ~/.doris directory and finally from Doris' config directory (see
`_CONFIG_DIRECTORIES`). The main configuration file is called doris.conf. Personal changes to the config can be done
in a file called doris_local.conf.

The configuration is split into sections, and each section consists of `key=value`-pairs:

- `parser`     - How DORIS RINEX files are read (`strict_layout`, `encoding`).
- `writer`     - How DORIS RINEX files are written (`version`).
- `difference` - How differenced datasets are labelled (`comment`).

All entries are read with a default value in the code, so that Doris works without any configuration files.

"""

# Standard library imports
import pathlib

# Midgard imports
from midgard.config.config import Configuration, ConfigurationEntry


# Base directory of the Doris installation
DORIS_DIR = pathlib.Path(__file__).resolve().parent.parent.parent

# Prioritized list of possible names of Doris config files
_CONFIG_FILENAMES = ("doris_local.conf", "doris.conf")

# Prioritized list of possible locations for all Doris config files
_CONFIG_DIRECTORIES = (pathlib.Path.cwd(), pathlib.Path.home() / ".doris", DORIS_DIR / "config")


def config_paths():
    """Yield all files that contain the Doris configuration, least important first"""
    for file_name in _CONFIG_FILENAMES[::-1]:
        for file_dir in _CONFIG_DIRECTORIES:
            file_path = file_dir / file_name
            if file_path.exists():
                yield file_path
                break


def read_doris_config():
    """Read Doris-configuration"""
    doris.clear()
    for file_path in config_paths():
        doris.update_from_file(file_path, interpolate=False)


def setting(section, key, default):
    """Look up a configuration entry, falling back to a default value

    Args:
        section (String):  Name of configuration section.
        key (String):      Name of key inside the section.
        default:           Value used when the section or the key is not configured.

    Returns:
        ConfigurationEntry:  Entry that can be converted with `.str`, `.int`, `.bool` and so on.
    """
    if section not in doris.section_names:
        return ConfigurationEntry(key, default)
    return doris.get(key, section=section, default=default)


# Add configuration as module variable
doris = Configuration("doris")
read_doris_config()
