import json

from swoop_config import SwoopConfig, SwoopConfigManager


def test_missing_file_gives_defaults(config_dir):
    manager = SwoopConfigManager(config_dir)

    config = manager.load()

    assert config_dir.is_dir()
    assert config == SwoopConfig()
    assert config.stats == {"total_runs": 0, "total_reclaimed_bytes": 0}


def test_recorded_runs_persist(config_dir):
    manager = SwoopConfigManager(config_dir)
    config = manager.load()
    config.show_empty = True
    config.record_run(2048)
    config.record_run(1024)
    manager.save(config)

    loaded = SwoopConfigManager(config_dir).load()

    assert loaded.show_empty is True
    assert loaded.follow_symlinks is False
    assert loaded.stats == {"total_runs": 2, "total_reclaimed_bytes": 3072}
    assert loaded.last_run is not None


def test_corrupted_file_falls_back_to_defaults(config_dir):
    manager = SwoopConfigManager(config_dir)
    manager.config_file.write_text("{not json")

    assert manager.load() == SwoopConfig()


def test_partial_file_fills_in_defaults(config_dir):
    manager = SwoopConfigManager(config_dir)
    manager.config_file.write_text(json.dumps({"follow_symlinks": True, "stats": {"total_runs": 4}}))

    config = manager.load()

    assert config.follow_symlinks is True
    assert config.show_empty is False
    assert config.stats == {"total_runs": 4, "total_reclaimed_bytes": 0}


def test_malformed_stats_are_replaced_with_defaults(config_dir):
    manager = SwoopConfigManager(config_dir)
    manager.config_file.write_text(json.dumps({"show_empty": True, "stats": "x"}))

    config = manager.load()

    assert config.show_empty is True
    assert config.stats == {"total_runs": 0, "total_reclaimed_bytes": 0}
