"""
Flask web application for the knockout bracket engine.

Leagues, round-one results and generated brackets are kept as YAML files in
the data directory; the engine itself never touches them.
"""
import os
import re
from datetime import datetime, timedelta

import pytz
import yaml
from filelock import FileLock
from flask import Flask, jsonify, request

from knockout import (
    BracketError,
    KnockoutResult,
    TournamentBracket,
    build_champions_tournament,
    build_conference_tournament,
    select_league_qualifiers,
    summarize_bracket,
)
from knockout.config import (
    SETTINGS_FILENAME,
    champions_options,
    conference_options,
    load_settings,
    merge_settings,
    save_settings,
)
from knockout.scheduling import parse_start_date

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('KNOCKOUT_DATA_DIR', os.path.join(BASE_DIR, 'data'))

LEAGUES_FILENAME = 'leagues.yaml'
RESULTS_FILENAME = 'results.yaml'
BRACKETS_DIRNAME = 'brackets'
SLUG_PATTERN = re.compile(r'^[a-z0-9][a-z0-9-]*$')
CHAMPIONS_OVERRIDES = ('name', 'slug', 'kickoff_hour', 'timezone', 'round_spacing_days',
                       'legs_per_tie', 'leg_kickoff_hours')
CONFERENCE_OVERRIDES = CHAMPIONS_OVERRIDES
INTEGER_OVERRIDES = ('kickoff_hour', 'round_spacing_days', 'legs_per_tie')
SETTINGS_SECTIONS = ('champions', 'conference')


def _file_path(filename: str) -> str:
    """Return full path to a file in the data directory."""
    return os.path.join(DATA_DIR, filename)


def _data_lock() -> FileLock:
    os.makedirs(DATA_DIR, exist_ok=True)
    return FileLock(_file_path('.lock'), timeout=10)


def _load_yaml(path: str, default):
    if not os.path.exists(path):
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        app.logger.warning(f'Failed to parse {path}: {e}')
        return default
    return data if data else default


def load_leagues() -> list:
    """Load stored leagues with their standings."""
    data = _load_yaml(_file_path(LEAGUES_FILENAME), {})
    return data.get('leagues', []) if isinstance(data, dict) else []


def load_results() -> list:
    """Load stored round-one results."""
    data = _load_yaml(_file_path(RESULTS_FILENAME), {})
    rows = data.get('results', []) if isinstance(data, dict) else []
    return [KnockoutResult.from_dict(row) for row in rows]


def load_settings_file() -> dict:
    return load_settings(_file_path(SETTINGS_FILENAME))


def bracket_path(slug: str) -> str:
    return os.path.join(DATA_DIR, BRACKETS_DIRNAME, f'{slug}.yaml')


def load_bracket(slug: str):
    """Load a saved bracket, or None if it has not been generated."""
    if not SLUG_PATTERN.match(slug):
        return None
    data = _load_yaml(bracket_path(slug), None)
    if not data:
        return None
    return TournamentBracket.from_dict(data)


def save_bracket(bracket: TournamentBracket):
    """Save a generated bracket to YAML."""
    path = bracket_path(bracket.slug)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with _data_lock():
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(bracket.to_dict(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def _overrides(payload: dict, allowed) -> dict:
    """Pick builder options from a JSON payload, coercing numbers and names.

    Raises ValueError or TypeError on a value that cannot be coerced.
    """
    options = {}
    for key in allowed:
        value = payload.get(key)
        if value is None:
            continue
        if key in INTEGER_OVERRIDES:
            value = int(value)
        elif key == 'leg_kickoff_hours':
            if not isinstance(value, list):
                raise TypeError('leg_kickoff_hours must be a list')
            value = [None if hour is None else int(hour) for hour in value]
        else:
            value = str(value)
        options[key] = value
    return options


def _invalid_options(error):
    return jsonify({'success': False, 'error': f'Invalid options: {error}'}), 400


@app.errorhandler(BracketError)
def handle_bracket_error(error):
    return jsonify({'success': False, 'error': str(error)}), 400


@app.route('/api/leagues', methods=['GET'])
def api_leagues():
    """Get stored leagues."""
    return jsonify({'success': True, 'leagues': load_leagues()})


@app.route('/api/participants', methods=['GET'])
def api_participants():
    """Get the qualifiers of every completed league."""
    settings = load_settings_file()
    participants = select_league_qualifiers(load_leagues(), settings.get('qualifiers_per_league', 2))
    return jsonify({'success': True, 'participants': [p.to_dict() for p in participants]})


@app.route('/api/settings', methods=['GET'])
def api_get_settings():
    """Get tournament settings merged over defaults."""
    return jsonify({'success': True, 'settings': load_settings_file()})


@app.route('/api/settings', methods=['POST'])
def api_update_settings():
    """Merge posted values into the stored settings."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _invalid_options('expected a JSON object')
    for section in SETTINGS_SECTIONS:
        if section in payload and not isinstance(payload[section], dict):
            return _invalid_options(f'{section} must be an object')

    with _data_lock():
        settings = merge_settings(load_settings_file(), payload)
        save_settings(_file_path(SETTINGS_FILENAME), settings)
    app.logger.info(f'Updated settings: {", ".join(sorted(payload))}')
    return jsonify({'success': True, 'settings': settings})


@app.route('/api/brackets/champions', methods=['POST'])
def api_build_champions():
    """Build and save the champions bracket from stored leagues."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return _invalid_options('expected a JSON object')
    settings = load_settings_file()

    try:
        start_date = parse_start_date(payload.get('start_date'))
    except ValueError:
        return jsonify({'success': False, 'error': 'Invalid start_date.'}), 400

    participants = select_league_qualifiers(load_leagues(), settings.get('qualifiers_per_league', 2))
    options = champions_options(settings)
    if 'kickoff_hour' in payload and 'leg_kickoff_hours' not in payload:
        # Leg hours follow the requested kickoff hour
        options['leg_kickoff_hours'] = None
    try:
        options.update(_overrides(payload, CHAMPIONS_OVERRIDES))
    except (ValueError, TypeError) as e:
        return _invalid_options(e)
    if not SLUG_PATTERN.match(str(options['slug'])):
        return jsonify({'success': False, 'error': 'Slug must use lowercase letters, numbers, hyphens.'}), 400

    bracket = build_champions_tournament(participants, start_date=start_date, **options)
    save_bracket(bracket)
    app.logger.info(f'Generated {bracket.slug}: {len(bracket.participants)} teams, '
                    f'{bracket.total_rounds} rounds')
    return jsonify({'success': True, 'bracket': bracket.to_dict()})


@app.route('/api/brackets/conference', methods=['POST'])
def api_build_conference():
    """Build and save the conference bracket from the champions round-one losers."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return _invalid_options('expected a JSON object')
    settings = load_settings_file()

    champions_slug = champions_options(settings)['slug']
    champions = load_bracket(str(payload.get('source_slug') or champions_slug))
    if champions is None:
        return jsonify({'success': False, 'error': 'Champions bracket has not been generated.'}), 404

    try:
        options = conference_options(settings)
        options.update(_overrides(payload, CONFERENCE_OVERRIDES))
        if 'results' in payload:
            results = [KnockoutResult.from_dict(row) for row in payload['results'] or []]
        else:
            results = load_results()
    except (ValueError, TypeError, AttributeError) as e:
        return _invalid_options(e)

    try:
        start_date = parse_start_date(payload.get('start_date'))
    except ValueError:
        return jsonify({'success': False, 'error': 'Invalid start_date.'}), 400
    if start_date is None:
        offset = settings.get('conference', {}).get('start_offset_days', 1)
        start_date = datetime.now(pytz.utc) + timedelta(days=offset)

    if not SLUG_PATTERN.match(str(options['slug'])):
        return jsonify({'success': False, 'error': 'Slug must use lowercase letters, numbers, hyphens.'}), 400

    bracket = build_conference_tournament(champions, results, start_date=start_date, **options)
    save_bracket(bracket)
    app.logger.info(f'Generated {bracket.slug} from {champions.slug}: {len(bracket.participants)} teams')
    return jsonify({'success': True, 'bracket': bracket.to_dict()})


@app.route('/api/brackets/<slug>', methods=['GET'])
def api_get_bracket(slug):
    """Get a saved bracket."""
    bracket = load_bracket(slug)
    if bracket is None:
        return jsonify({'success': False, 'error': f'Bracket {slug} not found.'}), 404
    return jsonify({'success': True, 'bracket': bracket.to_dict()})


@app.route('/api/brackets/<slug>/summary', methods=['GET'])
def api_bracket_summary(slug):
    """Get bracket statistics for display."""
    bracket = load_bracket(slug)
    if bracket is None:
        return jsonify({'success': False, 'error': f'Bracket {slug} not found.'}), 404
    return jsonify({'success': True, 'summary': summarize_bracket(bracket)})


@app.route('/api/brackets/<slug>/matches/<match_id>', methods=['GET'])
def api_get_match(slug, match_id):
    """Get one match of a saved bracket."""
    bracket = load_bracket(slug)
    if bracket is None:
        return jsonify({'success': False, 'error': f'Bracket {slug} not found.'}), 404
    match = bracket.find_match(match_id)
    if match is None:
        return jsonify({'success': False, 'error': f'Match {match_id} not found.'}), 404
    return jsonify({'success': True, 'match': match.to_dict()})


if __name__ == '__main__':
    app.run(debug=True)
