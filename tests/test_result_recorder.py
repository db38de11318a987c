import pytest

from conftest import make_teams
from swissdraw.models import Fixture
from swissdraw.tournament import ResultRecorder


@pytest.fixture
def fixtures():
    a, b, c, d = make_teams(4)
    return [
        Fixture(home=a, away=b, matchday=1),
        Fixture(home=c, away=d, matchday=1),
    ]


def test_record_score_replaces_fixture(fixtures):
    original = fixtures[0]
    assert ResultRecorder().record_score(fixtures, "t01-t02-1", 2, 1)

    recorded = fixtures[0]
    assert recorded is not original
    assert recorded.played
    assert (recorded.home_score, recorded.away_score) == (2, 1)
    assert not original.played


def test_numeric_strings_are_accepted(fixtures):
    assert ResultRecorder().record_score(fixtures, "t03-t04-1", " 3 ", "0")
    assert (fixtures[1].home_score, fixtures[1].away_score) == (3, 0)


@pytest.mark.parametrize("bad", [21, -1, "abc", "", 1.5, True, None])
def test_invalid_scores_are_rejected(fixtures, bad):
    assert not ResultRecorder().record_score(fixtures, "t01-t02-1", bad, 0)
    assert not fixtures[0].played


def test_unknown_fixture_is_rejected(fixtures):
    before = list(fixtures)
    assert not ResultRecorder().record_score(fixtures, "t01-t03-1", 1, 0)
    assert fixtures == before


def test_recording_again_overwrites(fixtures):
    recorder = ResultRecorder()
    recorder.record_score(fixtures, "t01-t02-1", 2, 1)
    assert recorder.record_score(fixtures, "t01-t02-1", 0, 0)
    assert fixtures[0].is_draw


def test_reset_score(fixtures):
    recorder = ResultRecorder()
    assert not recorder.reset_score(fixtures, "t01-t02-1")

    recorder.record_score(fixtures, "t01-t02-1", 4, 4)
    assert recorder.reset_score(fixtures, "t01-t02-1")
    assert not fixtures[0].played
    assert fixtures[0].home_score is None and fixtures[0].away_score is None

    assert not recorder.reset_score(fixtures, "missing")


def test_record_scores_batch(fixtures):
    recorder = ResultRecorder()
    assert recorder.record_scores(fixtures, [("t01-t02-1", 1, 0), ("t03-t04-1", 2, 2)])
    assert all(fixture.played for fixture in fixtures)


def test_record_scores_rejects_duplicates_in_batch(fixtures):
    recorder = ResultRecorder()
    ok = recorder.record_scores(fixtures, [("t01-t02-1", 1, 0), ("t01-t02-1", 0, 3)])
    assert not ok
    assert (fixtures[0].home_score, fixtures[0].away_score) == (1, 0)


def test_record_scores_reports_a_bad_entry(fixtures):
    recorder = ResultRecorder()
    ok = recorder.record_scores(fixtures, [("t01-t02-1", 99, 0), ("t03-t04-1", 1, 1)])
    assert not ok
    assert not fixtures[0].played
    assert fixtures[1].played
