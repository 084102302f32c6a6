import json

from threebody.stats import JsonStatsStore, StatsAggregate, StatsStore, format_stats_text


def test_record_reset_updates_longest_and_count():
    store = StatsStore(StatsAggregate(total_simulations=3, longest_runtime_seconds=10.0))
    agg = store.record_reset(4.0)
    assert agg.total_simulations == 4
    assert agg.longest_runtime_seconds == 10.0
    agg = store.record_reset(12.5)
    assert agg.total_simulations == 5
    assert agg.longest_runtime_seconds == 12.5


def test_checkpoint_does_not_count_a_simulation():
    store = StatsStore()
    agg = store.checkpoint(7.0)
    assert agg.total_simulations == 0
    assert agg.longest_runtime_seconds == 7.0


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "stats.json"
    store = JsonStatsStore(str(path))
    assert store.load() == StatsAggregate()
    store.record_reset(21.5)
    assert json.loads(path.read_text()) == {"simCount": 1, "maxSimTime": 21.5}

    reloaded = JsonStatsStore(str(path)).load()
    assert reloaded == StatsAggregate(total_simulations=1, longest_runtime_seconds=21.5)


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "stats.json"
    path.write_text("{not json")
    assert JsonStatsStore(str(path)).load() == StatsAggregate()


def test_json_store_write_failure_is_not_fatal(tmp_path):
    # A directory where the file should be makes open() fail
    path = tmp_path / "stats.json"
    path.mkdir()
    store = JsonStatsStore(str(path))
    agg = store.record_reset(3.0)
    assert agg.total_simulations == 1
    assert store.save() is False


def test_format_stats_text():
    agg = StatsAggregate(total_simulations=7, longest_runtime_seconds=42.9)
    assert format_stats_text(5.7, agg) == (
        "Current Runtime: 5s\nLongest Runtime: 42s\nTotal Simulations: 7"
    )


def test_format_stats_shows_record_in_progress():
    agg = StatsAggregate(total_simulations=1, longest_runtime_seconds=10.0)
    assert "Longest Runtime: 15s" in format_stats_text(15.2, agg)
