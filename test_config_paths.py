import json
import tempfile
from pathlib import Path

import config_paths


def _load_with(cfg_dir: Path):
    orig_dir = config_paths.CONFIG_DIR
    orig_json = config_paths.CONFIG_JSON
    try:
        config_paths.CONFIG_DIR = str(cfg_dir)
        config_paths.CONFIG_JSON = str(cfg_dir / "config.json")
        return config_paths.load_config()
    finally:
        config_paths.CONFIG_DIR = orig_dir
        config_paths.CONFIG_JSON = orig_json


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "gridsort"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        cfg = _load_with(cfg_dir)
        assert cfg["ARROWS"] == {"ascending": "▴", "descending": "▾"}
        assert cfg["COLUMN_OVERRIDES"] == {}
        assert cfg["LOG_LEVEL"] == "WARNING"


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "gridsort"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        (cfg_dir / "config.json").write_text(
            json.dumps(
                {
                    "arrows": {"ascending": "^", "descending": 5},
                    "column_overrides": {
                        "Price": "sortNumber_nonJS",
                        "When": "date_month_first",
                        "Bad": "no_such_comparator",
                    },
                    "log_level": "debug",
                }
            ),
            encoding="utf-8",
        )
        cfg = _load_with(cfg_dir)
        assert cfg["ARROWS"] == {"ascending": "^", "descending": "▾"}
        assert cfg["COLUMN_OVERRIDES"] == {
            "Price": "number_comma_decimal",
            "When": "date_month_first",
        }
        assert cfg["LOG_LEVEL"] == "DEBUG"


def test_load_config_ignores_malformed_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "gridsort"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        (cfg_dir / "config.json").write_text("{not json", encoding="utf-8")
        cfg = _load_with(cfg_dir)
        assert cfg["COLUMN_OVERRIDES"] == {}
        assert cfg["LOG_LEVEL"] == "WARNING"


def test_ensure_config_dirs_creates_directory():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "nested" / "gridsort"
        orig_dir = config_paths.CONFIG_DIR
        try:
            config_paths.CONFIG_DIR = str(cfg_dir)
            config_paths.ensure_config_dirs()
        finally:
            config_paths.CONFIG_DIR = orig_dir
        assert cfg_dir.is_dir()
