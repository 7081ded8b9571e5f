import json

import pytest

from tagpairing.constants import STORAGE_KEY
from tagpairing.controllers.tournament import MatchEngine
from tagpairing.exceptions import CorruptPersistedState, FileSaveException
from tagpairing.models import Match, Team, Tournament, TournamentConfig
from tagpairing.storage import (
    InMemoryStore,
    JsonFileStore,
    decode_snapshot,
    tournament_from_snapshot,
)


def _build_tournament():
    crew = Team(1, "Straw Hats", "Luffy", "Zoro")
    solo = Team(2, "Lone Captain", "Law", is_solo=True)
    tournament = Tournament(
        config=TournamentConfig(name="Grand Line Cup", bye_points=4),
        teams=[crew, solo],
        current_round=1,
        is_active=True,
        next_team_id=3,
    )
    match = MatchEngine().create_match(crew, solo, 1)
    tournament.matches.append(match)
    return tournament


def test_snapshot_round_trip_keeps_every_field():
    tournament = _build_tournament()

    store = InMemoryStore()
    assert store.save(tournament.to_dict())
    reloaded = tournament_from_snapshot(store.load())

    assert len(reloaded.teams) == 2
    assert len(reloaded.matches) == 1
    assert reloaded.to_dict() == tournament.to_dict()
    assert reloaded.matches[0].games[1].winner == "team1"
    assert reloaded.teams[1].is_solo
    assert not reloaded.matches[0].is_complete


def test_stores_sharing_blobs_see_each_other():
    blobs = {}
    InMemoryStore(blobs=blobs).save(_build_tournament().to_dict())

    assert InMemoryStore(blobs=blobs).load()["config"]["name"] == "Grand Line Cup"
    assert InMemoryStore(key="other", blobs=blobs).load() is None


def test_memory_store_treats_corrupt_text_as_absent():
    store = InMemoryStore(blobs={STORAGE_KEY: "{not json"})
    assert store.load() is None


def test_memory_store_clear():
    store = InMemoryStore()
    store.save({"config": {}})
    store.clear()
    assert store.load() is None


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "tournament.json"
    store = JsonFileStore(path)
    tournament = _build_tournament()

    store.save(tournament.to_dict())

    assert json.loads(path.read_text(encoding="utf-8"))["next_team_id"] == 3
    assert tournament_from_snapshot(store.load()).to_dict() == tournament.to_dict()
    assert not path.with_suffix(".json.tmp").exists()


def test_json_store_missing_or_corrupt_file_loads_nothing(tmp_path):
    path = tmp_path / "tournament.json"
    store = JsonFileStore(path)
    assert store.load() is None

    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert store.load() is None


def test_json_store_save_failure_raises(tmp_path):
    store = JsonFileStore(tmp_path / "missing" / "tournament.json")
    with pytest.raises(FileSaveException):
        store.save({"config": {}})


def test_json_store_clear(tmp_path):
    path = tmp_path / "tournament.json"
    store = JsonFileStore(path)
    store.save({"config": {}})

    store.clear()
    store.clear()

    assert not path.exists()


def test_decode_rejects_non_objects():
    with pytest.raises(CorruptPersistedState):
        decode_snapshot("42")
    with pytest.raises(CorruptPersistedState):
        decode_snapshot("")


@pytest.mark.parametrize(
    "snapshot",
    [
        {"teams": [{"name": "No id"}]},
        {"config": {"format": "knockout"}},
        {"matches": [{"id": "match_1", "round": 1, "team1": {"id": 1, "name": "A", "player1_name": "a"}}]},
        {"teams": "not a list of teams"},
    ],
)
def test_malformed_snapshot_is_corrupt(snapshot):
    with pytest.raises(CorruptPersistedState):
        tournament_from_snapshot(snapshot)


def test_bye_match_serializes_without_second_team():
    bye = MatchEngine().create_bye(Team(1, "Straw Hats", "Luffy", "Zoro"), 2, 3)

    data = bye.to_dict()
    restored = Match.from_dict(data)

    assert data["team2"] is None
    assert restored.is_bye and restored.team2 is None
    assert restored.team1_points == 3
