import json

from updatenotifier.config import settings as settings_module
from updatenotifier.config.settings import AppSettings
from updatenotifier.core.models import MAX_INTERVAL_HOURS


def test_defaults(tmp_path):
    settings = AppSettings(data_dir=str(tmp_path))

    assert settings.interval_hours == 24
    assert settings.offline_poll_seconds == 60
    assert settings.installer_command == ["gui-updater"]
    assert settings.wizard_process == "piwiz"
    assert settings.exclude_architecture == "auto"


def test_load_missing_file_returns_defaults(tmp_path):
    settings = AppSettings.load(str(tmp_path / "missing.json"))

    assert settings.interval_hours == 24


def test_save_and_load(tmp_path):
    path = tmp_path / "conf" / "settings.json"
    AppSettings(data_dir=str(tmp_path), interval_hours=6,
                installer_command=["pi-updater"]).save(str(path))

    loaded = AppSettings.load(str(path))

    assert loaded.interval_hours == 6
    assert loaded.installer_command == ["pi-updater"]


def test_save_defaults_to_data_dir(tmp_path):
    settings = AppSettings(data_dir=str(tmp_path / "cfg"))

    settings.save()

    data = json.loads((tmp_path / "cfg" / "settings.json").read_text(encoding="utf-8"))
    assert data["interval_hours"] == 24


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"interval_hours": 12, "colour": "blue"}), encoding="utf-8")

    assert AppSettings.load(str(path)).interval_hours == 12


def test_corrupt_file_returns_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert AppSettings.load(str(path)).interval_hours == 24


def test_invalid_interval_falls_back(tmp_path):
    assert AppSettings(data_dir=str(tmp_path), interval_hours=-4).interval_hours == 24
    assert AppSettings(data_dir=str(tmp_path), interval_hours="6").interval_hours == 24
    assert AppSettings(data_dir=str(tmp_path), interval_hours=0).interval_hours == 0
    assert (AppSettings(data_dir=str(tmp_path), interval_hours=100_000).interval_hours
            == MAX_INTERVAL_HOURS)


def test_exclude_architecture_resolution(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_module, "detect_excluded_architecture", lambda: "amd64")

    assert AppSettings(data_dir=str(tmp_path)).resolved_exclude_architecture() == "amd64"
    assert AppSettings(data_dir=str(tmp_path),
                       exclude_architecture="").resolved_exclude_architecture() is None
    assert AppSettings(data_dir=str(tmp_path),
                       exclude_architecture="i386").resolved_exclude_architecture() == "i386"


def test_ensure_dirs_creates_log_dir(tmp_path):
    AppSettings(data_dir=str(tmp_path / "data")).ensure_dirs()

    assert (tmp_path / "data" / "logs").is_dir()
