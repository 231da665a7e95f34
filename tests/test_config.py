"""
Unit tests for YAML tournament settings.
"""
import pytest
import sys
import os

import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout.config import (
    champions_options,
    conference_options,
    get_default_settings,
    load_settings,
    merge_settings,
    save_settings,
)


class TestLoadSettings:
    """Tests for loading settings with defaults."""

    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_settings(str(tmp_path / 'settings.yaml')) == get_default_settings()

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('')
        assert load_settings(str(path)) == get_default_settings()

    def test_non_mapping_ignored(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('- just\n- a list\n')
        assert load_settings(str(path)) == get_default_settings()

    def test_nested_sections_merged(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(yaml.dump({'timezone': 'Europe/London', 'conference': {'kickoff_hour': 14}}))
        settings = load_settings(str(path))
        assert settings['timezone'] == 'Europe/London'
        assert settings['conference']['kickoff_hour'] == 14
        assert settings['conference']['slug'] == 'conference-league'
        assert settings['champions']['legs_per_tie'] == 2

    def test_save_and_load(self, tmp_path):
        path = str(tmp_path / 'settings.yaml')
        settings = get_default_settings()
        settings['round_spacing_days'] = 7
        save_settings(path, settings)
        assert load_settings(path) == settings


class TestOptions:
    """Tests for turning settings into builder options."""

    def test_merge_does_not_touch_defaults(self):
        defaults = get_default_settings()
        merge_settings(defaults, {'champions': {'name': 'Other'}})
        assert defaults['champions']['name'] == 'Champions League'

    def test_champions_options(self):
        options = champions_options(get_default_settings())
        assert options == {
            'name': 'Champions League',
            'slug': 'champions-league',
            'kickoff_hour': 11,
            'timezone': 'Europe/Istanbul',
            'round_spacing_days': 2,
            'legs_per_tie': 2,
            'leg_kickoff_hours': [11, 20],
        }

    def test_conference_options(self):
        settings = merge_settings(get_default_settings(), {'round_spacing_days': 3})
        options = conference_options(settings)
        assert options['kickoff_hour'] == 12
        assert options['legs_per_tie'] == 1
        assert options['round_spacing_days'] == 3
        assert 'start_offset_days' not in options
