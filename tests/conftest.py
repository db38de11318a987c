import pytest

from swissdraw.models import Team, TournamentRules


def make_teams(count, countries=None, pots=None, coefficient=10.0):
    """Build ``count`` teams with ids t01, t02, ...

    Countries default to one per team and pots to four equal blocks.
    """
    pot_size = max(1, -(-count // 4))
    teams = []
    for index in range(count):
        number = index + 1
        teams.append(
            Team(
                id=f"t{number:02d}",
                name=f"Team {number:02d}",
                country=countries[index] if countries else f"C{number:02d}",
                coefficient=coefficient,
                pot=pots[index] if pots else min(4, index // pot_size + 1),
            )
        )
    return teams


@pytest.fixture
def sixteen_teams():
    return make_teams(16)


@pytest.fixture
def default_rules():
    return TournamentRules()
