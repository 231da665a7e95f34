"""
Tournament settings stored as YAML.
"""
import copy
import logging
import os
from typing import Dict, Optional

import yaml

from .derived import DEFAULT_DERIVED_KICKOFF_HOUR, DEFAULT_DERIVED_NAME, DEFAULT_DERIVED_SLUG
from .presets import (
    CHAMPIONS_KICKOFF_HOUR,
    CHAMPIONS_LEGS_PER_TIE,
    CHAMPIONS_NAME,
    CHAMPIONS_SECOND_LEG_HOUR,
    CHAMPIONS_SLUG,
)
from .scheduling import DEFAULT_ROUND_SPACING_DAYS, DEFAULT_TIMEZONE
from .standings import DEFAULT_QUALIFIERS_PER_LEAGUE

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = 'settings.yaml'


def get_default_settings() -> Dict:
    """Return default settings."""
    return {
        'timezone': DEFAULT_TIMEZONE,
        'round_spacing_days': DEFAULT_ROUND_SPACING_DAYS,
        'qualifiers_per_league': DEFAULT_QUALIFIERS_PER_LEAGUE,
        'champions': {
            'name': CHAMPIONS_NAME,
            'slug': CHAMPIONS_SLUG,
            'kickoff_hour': CHAMPIONS_KICKOFF_HOUR,
            'legs_per_tie': CHAMPIONS_LEGS_PER_TIE,
            'leg_kickoff_hours': [CHAMPIONS_KICKOFF_HOUR, CHAMPIONS_SECOND_LEG_HOUR],
        },
        'conference': {
            'name': DEFAULT_DERIVED_NAME,
            'slug': DEFAULT_DERIVED_SLUG,
            'kickoff_hour': DEFAULT_DERIVED_KICKOFF_HOUR,
            'legs_per_tie': 1,
            'start_offset_days': 1,
        },
    }


def merge_settings(defaults: Dict, data: Optional[Dict]) -> Dict:
    """Overlay data on defaults, merging nested sections key by key."""
    merged = copy.deepcopy(defaults)
    for key, value in (data or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: str) -> Dict:
    """Load settings from a YAML file, merging with defaults."""
    defaults = get_default_settings()
    if not os.path.exists(path):
        return defaults
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if not data:
        return defaults
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping, got %s", path, type(data).__name__)
        return defaults
    return merge_settings(defaults, data)


def save_settings(path: str, settings: Dict):
    """Save settings to a YAML file."""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(settings, f, default_flow_style=False, allow_unicode=True)


def champions_options(settings: Dict) -> Dict:
    """Keyword options for build_champions_tournament."""
    section = settings.get('champions', {})
    return {
        'name': section.get('name', CHAMPIONS_NAME),
        'slug': section.get('slug', CHAMPIONS_SLUG),
        'kickoff_hour': section.get('kickoff_hour'),
        'timezone': settings.get('timezone', DEFAULT_TIMEZONE),
        'round_spacing_days': settings.get('round_spacing_days', DEFAULT_ROUND_SPACING_DAYS),
        'legs_per_tie': section.get('legs_per_tie', CHAMPIONS_LEGS_PER_TIE),
        'leg_kickoff_hours': section.get('leg_kickoff_hours'),
    }


def conference_options(settings: Dict) -> Dict:
    """Keyword options for build_conference_tournament (start date excluded)."""
    section = settings.get('conference', {})
    return {
        'name': section.get('name', DEFAULT_DERIVED_NAME),
        'slug': section.get('slug', DEFAULT_DERIVED_SLUG),
        'kickoff_hour': section.get('kickoff_hour', DEFAULT_DERIVED_KICKOFF_HOUR),
        'timezone': settings.get('timezone', DEFAULT_TIMEZONE),
        'round_spacing_days': settings.get('round_spacing_days', DEFAULT_ROUND_SPACING_DAYS),
        'legs_per_tie': section.get('legs_per_tie', 1),
        'leg_kickoff_hours': section.get('leg_kickoff_hours'),
    }
