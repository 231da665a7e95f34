"""
Print the knockout brackets for a set of leagues.

Usage:
    python src/generate_bracket.py data/leagues.yaml
    python src/generate_bracket.py data/leagues.yaml --start-date 2025-01-01 --results data/results.yaml
    python src/generate_bracket.py data/leagues.yaml --yaml
"""
import argparse
import sys
from datetime import timedelta

import yaml

from knockout import (
    BracketError,
    KnockoutResult,
    build_champions_tournament,
    build_conference_tournament,
    select_league_qualifiers,
)
from knockout.config import champions_options, conference_options, get_default_settings, load_settings
from knockout.scheduling import parse_start_date


def load_leagues(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or {}
    return data.get('leagues', []) if isinstance(data, dict) else data


def load_results(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or {}
    rows = data.get('results', []) if isinstance(data, dict) else data
    return [KnockoutResult.from_dict(row) for row in rows]


def _side(match, home):
    participant = match.home_participant if home else match.away_participant
    source = match.home_source if home else match.away_source
    if participant is not None:
        return f"({participant.seed}) {participant.team_name}"
    if source is not None:
        return f"Winner {source.match_id}"
    return "BYE"


def format_bracket(bracket):
    """Render a bracket as plain text, one round per block."""
    lines = [f"== {bracket.name} ({bracket.slug}) =="]
    for tournament_round in bracket.rounds:
        lines.append("")
        lines.append(f"# {tournament_round.name}")
        for match in tournament_round.matches:
            kickoff = match.scheduled_at.strftime('%Y-%m-%d %H:%M')
            if match.is_bye:
                lines.append(f"{match.id}: {_side(match, True)} vs {_side(match, False)} "
                             f"(bye, seed {match.auto_advance_seed} advances)")
                continue
            lines.append(f"{match.id} {kickoff}: {_side(match, True)} vs {_side(match, False)}")
            if len(match.legs) > 1:
                for leg in match.legs:
                    home = leg.home_participant.team_name if leg.home_participant else '?'
                    away = leg.away_participant.team_name if leg.away_participant else '?'
                    lines.append(f"    leg {leg.leg} {leg.scheduled_at.strftime('%Y-%m-%d %H:%M')}: {home} vs {away}")
    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(description='Generate knockout brackets from league standings.')
    parser.add_argument('leagues', help='YAML file with completed leagues and their standings')
    parser.add_argument('--settings', help='Tournament settings YAML (defaults apply when omitted)')
    parser.add_argument('--start-date', help='Round one date (YYYY-MM-DD) or ISO instant')
    parser.add_argument('--results', help='YAML file with champions round-one results')
    parser.add_argument('--yaml', action='store_true', help='Dump brackets as YAML instead of text')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    settings = load_settings(args.settings) if args.settings else get_default_settings()
    try:
        start_date = parse_start_date(args.start_date)
    except ValueError:
        print(f"Error: invalid start date {args.start_date!r}", file=sys.stderr)
        return 1

    try:
        participants = select_league_qualifiers(load_leagues(args.leagues),
                                                settings.get('qualifiers_per_league', 2))
        brackets = [build_champions_tournament(participants, start_date=start_date,
                                               **champions_options(settings))]
        if args.results:
            conference_start = None
            if start_date is not None:
                offset = settings.get('conference', {}).get('start_offset_days', 1)
                conference_start = start_date + timedelta(days=offset)
            brackets.append(build_conference_tournament(brackets[0], load_results(args.results),
                                                        start_date=conference_start,
                                                        **conference_options(settings)))
    except BracketError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.yaml:
        print(yaml.dump([b.to_dict() for b in brackets], default_flow_style=False,
                        allow_unicode=True, sort_keys=False))
    else:
        print("\n\n".join(format_bracket(b) for b in brackets))
    return 0


if __name__ == '__main__':
    sys.exit(main())
