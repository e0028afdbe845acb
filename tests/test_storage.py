import json

from dodge.storage import MemoryHighScoreStore, JsonHighScoreStore


def test_memory_store_round_trip():
    store = MemoryHighScoreStore(5)
    assert store.get() == 5
    store.set(42)
    assert store.get() == 42
    assert store.writes == 1


def test_missing_file_reads_as_zero(tmp_path):
    assert JsonHighScoreStore(str(tmp_path / "none.json")).get() == 0


def test_json_store_persists_between_instances(tmp_path):
    path = tmp_path / "scores" / "best.json"
    JsonHighScoreStore(str(path)).set(3210)
    assert json.loads(path.read_text()) == {"high_score": 3210}
    assert JsonHighScoreStore(str(path)).get() == 3210


def test_corrupt_file_reads_as_zero_with_warning(tmp_path, capsys):
    path = tmp_path / "best.json"
    path.write_text("not json {")
    assert JsonHighScoreStore(str(path)).get() == 0
    assert "WARNING" in capsys.readouterr().out


def test_engine_reads_json_store_once(tmp_path):
    from dodge.engine import GameEngine

    path = tmp_path / "best.json"
    JsonHighScoreStore(str(path)).set(777)
    engine = GameEngine(store=JsonHighScoreStore(str(path)))
    assert engine.get_state().high_score == 777
