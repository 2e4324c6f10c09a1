# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Configuration loading for the console Battleship game.

Defaults live in DEFAULT_CONFIG; a YAML file can override any subset of
them and is merged on top.
"""

import copy
import logging
import re
from typing import Dict, List, Optional

import yaml

from battleship.board import ShipClass
from battleship.placement import DEFAULT_MAX_ATTEMPTS, ShipSpec


DEFAULT_CONFIG: Dict = {
    'game': {
        'ships': {
            4: [{'length': 2, 'count': 1}, {'length': 3, 'count': 1}],
            5: [{'length': 2, 'count': 2}, {'length': 3, 'count': 1}],
            6: [{'length': 2, 'count': 2}, {'length': 3, 'count': 2}],
        },
        'max_placement_attempts': DEFAULT_MAX_ATTEMPTS,
        'quit_token': 'exit',
    },
    'display': {
        'glyphs': {
            'water': '~',
            'miss': '❌',
            'small': '🔵',
            'large': '🟠',
        },
        'clear_screen': True,
    },
    'logging': {
        'level': 'WARNING',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}

GLYPH_KEYS = ('water', 'miss', 'small', 'large')

# Inputs the client handles before the quit token is checked
CONSOLE_COMMANDS = ('help', 'status')
COORDINATE_PATTERN = re.compile(r'[a-z][0-9]+')


class ConfigError(ValueError):
    """Raised when a configuration file is malformed."""


def _merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict) and key != 'ships':
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_config(config: Dict) -> None:
    """Check the parts of the config the game depends on."""
    for section in ('game', 'display', 'logging'):
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"{section} must be a mapping")
    if not isinstance(config['display'].get('glyphs'), dict):
        raise ConfigError("display.glyphs must be a mapping")

    ships = config['game']['ships']
    if not isinstance(ships, dict) or not ships:
        raise ConfigError("game.ships must map board sizes to ship lists")

    for size, specs in ships.items():
        if not isinstance(size, int) or not (2 <= size <= 26):
            raise ConfigError(f"Board size {size!r} must be an integer between 2 and 26")
        if not specs:
            raise ConfigError(f"Board size {size} has no ships")
        for spec in specs:
            if not isinstance(spec, dict):
                raise ConfigError(f"Ship entry {spec!r} must be a mapping with length and count")
            if spec.get('length') not in [c.length for c in ShipClass]:
                raise ConfigError(f"Ship length {spec.get('length')!r} must be 2 or 3")
            count = spec.get('count')
            if not isinstance(count, int) or count < 1:
                raise ConfigError(f"Ship count {count!r} must be a positive integer")

    attempts = config['game']['max_placement_attempts']
    if not isinstance(attempts, int) or attempts < 0:
        raise ConfigError(f"max_placement_attempts {attempts!r} must be a non-negative integer")

    quit_token = config['game']['quit_token']
    if not isinstance(quit_token, str) or not quit_token.strip():
        raise ConfigError(f"quit_token {quit_token!r} must be a non-empty string")
    token = quit_token.strip().lower()
    if token in CONSOLE_COMMANDS or COORDINATE_PATTERN.fullmatch(token):
        raise ConfigError(f"quit_token {quit_token!r} clashes with a command or coordinate")

    glyphs = config['display']['glyphs']
    missing = [key for key in GLYPH_KEYS if not glyphs.get(key)]
    if missing:
        raise ConfigError(f"Missing glyphs: {', '.join(missing)}")

    if not isinstance(logging.getLevelName(str(config['logging']['level']).upper()), int):
        raise ConfigError(f"Unknown logging level {config['logging']['level']!r}")


def load_config(config_path: Optional[str] = None) -> Dict:
    """Load configuration from a YAML file merged over the defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path:
        with open(config_path, 'r') as f:
            overrides = yaml.safe_load(f) or {}
        if not isinstance(overrides, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        config = _merge(config, overrides)
    validate_config(config)
    return config


def ship_table(config: Dict) -> Dict[int, List[ShipSpec]]:
    """Build the per-size ship table from a config."""
    return {
        int(size): [ShipSpec(length=spec['length'], count=spec['count']) for spec in specs]
        for size, specs in config['game']['ships'].items()
    }


def setup_logging(config: Dict, verbose: bool = False) -> None:
    """Configure root logging from the config's logging section."""
    level = logging.DEBUG if verbose else getattr(logging, str(config['logging']['level']).upper())
    logging.basicConfig(level=level, format=config['logging']['format'])
