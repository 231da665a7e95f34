"""
Tests for the generate_bracket command line script.
"""
import pytest
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from generate_bracket import format_bracket, main
from knockout.bracket import build_bracket
from conftest import ISTANBUL


@pytest.fixture
def leagues_file(tmp_path, leagues):
    path = tmp_path / 'leagues.yaml'
    path.write_text(yaml.dump({'leagues': leagues}))
    return str(path)


class TestFormatBracket:
    """Tests for plain text output."""

    def test_byes_and_winners(self, six_participants, start_date):
        bracket = build_bracket(six_participants, name='Cup', slug='cup', kickoff_hour=15,
                                timezone=ISTANBUL, start_date=start_date)
        text = format_bracket(bracket)
        assert '== Cup (cup) ==' in text
        assert '# Quarter Final' in text
        assert 'cup-R1-M1: (1) Team A1 vs BYE (bye, seed 1 advances)' in text
        assert 'cup-R1-M2 2025-01-01 15:00: (4) Team B1 vs (5) Team B2' in text
        assert 'cup-R2-M1 2025-01-03 15:00: (1) Team A1 vs Winner cup-R1-M2' in text

    def test_legs_listed(self, four_participants, start_date):
        bracket = build_bracket(four_participants, name='Cup', slug='cup', kickoff_hour=10,
                                timezone=ISTANBUL, start_date=start_date, legs_per_tie=2,
                                leg_kickoff_hours=[10, 20])
        text = format_bracket(bracket)
        assert 'leg 1 2025-01-01 10:00: Team B2 vs Team A1' in text
        assert 'leg 2 2025-01-01 20:00: Team A1 vs Team B2' in text


class TestMain:
    """Tests for the command line entry point."""

    def test_text_output(self, leagues_file, capsys):
        assert main([leagues_file, '--start-date', '2025-01-01']) == 0
        out = capsys.readouterr().out
        assert '== Champions League (champions-league) ==' in out
        assert '# Semi Final' in out

    def test_yaml_output_with_conference(self, leagues_file, tmp_path, capsys):
        results_file = tmp_path / 'results.yaml'
        results_file.write_text(yaml.dump({'results': [
            {'matchId': 'champions-league-R1-M1', 'winnerTeamId': 't-tigers', 'loserTeamId': 't-hawks'},
            {'matchId': 'champions-league-R1-M2', 'winnerTeamId': 't-eagles', 'loserTeamId': 't-lions'},
        ]}))
        assert main([leagues_file, '--start-date', '2025-01-01', '--results', str(results_file), '--yaml']) == 0
        brackets = yaml.safe_load(capsys.readouterr().out)
        assert [b['slug'] for b in brackets] == ['champions-league', 'conference-league']
        assert brackets[1]['rounds'][0]['matches'][0]['scheduled_at'] == '2025-01-02T12:00:00+03:00'

    def test_settings_file(self, leagues_file, tmp_path, capsys):
        settings_file = tmp_path / 'settings.yaml'
        settings_file.write_text(yaml.dump({'champions': {'name': 'Elite Cup', 'slug': 'elite'}}))
        assert main([leagues_file, '--settings', str(settings_file)]) == 0
        assert '== Elite Cup (elite) ==' in capsys.readouterr().out

    def test_bracket_error_exit_code(self, tmp_path, capsys):
        empty = tmp_path / 'empty.yaml'
        empty.write_text(yaml.dump({'leagues': []}))
        assert main([str(empty)]) == 1
        assert 'At least two participants' in capsys.readouterr().err

    def test_invalid_start_date(self, leagues_file, capsys):
        assert main([leagues_file, '--start-date', 'tomorrow']) == 1
        assert 'invalid start date' in capsys.readouterr().err
