import json
import logging

from block_blast.game import HighScoreTracker, JsonHighScoreStore, MemoryHighScoreStore


def test_missing_file_loads_zero(tmp_path):
    assert JsonHighScoreStore(tmp_path / "best.json").load() == 0


def test_saved_value_is_read_back(tmp_path):
    path = tmp_path / "nested" / "best.json"
    JsonHighScoreStore(path).save(340)
    assert json.loads(path.read_text()) == {"high_score": 340}
    assert JsonHighScoreStore(path).load() == 340


def test_corrupted_file_loads_zero_with_warning(tmp_path, caplog):
    path = tmp_path / "best.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="block_blast.game.highscore"):
        assert JsonHighScoreStore(path).load() == 0
    assert "unreadable" in caplog.text


def test_invalid_values_load_zero(tmp_path):
    path = tmp_path / "best.json"
    for payload in ({"high_score": -4}, {"high_score": "12"}, {"high_score": True}, [1, 2], {}):
        path.write_text(json.dumps(payload))
        assert JsonHighScoreStore(path).load() == 0


def test_tracker_writes_only_improvements():
    store = MemoryHighScoreStore(100)
    tracker = HighScoreTracker(store)
    assert tracker.value == 100
    assert not tracker.offer(90)
    assert not tracker.offer(100)
    assert tracker.offer(150)
    assert tracker.value == store.value == 150
    assert store.saves == 1


def test_tracker_with_json_store(tmp_path):
    path = tmp_path / "best.json"
    HighScoreTracker(JsonHighScoreStore(path)).offer(70)
    assert HighScoreTracker(JsonHighScoreStore(path)).value == 70
