from broadside.game.infra.app_data import PROJECT_ROOT, resolve_app_data_root, resolve_logs_dir


def test_app_data_root_defaults_under_project_root(monkeypatch) -> None:
    monkeypatch.delenv("BROADSIDE_APP_DATA_DIR", raising=False)
    assert resolve_app_data_root() == PROJECT_ROOT / "appdata"


def test_app_data_root_relative_and_absolute(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BROADSIDE_APP_DATA_DIR", "custom")
    assert resolve_app_data_root() == PROJECT_ROOT / "custom"
    monkeypatch.setenv("BROADSIDE_APP_DATA_DIR", str(tmp_path))
    assert resolve_app_data_root() == tmp_path


def test_logs_dir_override(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BROADSIDE_APP_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("BROADSIDE_LOG_DIR", raising=False)
    assert resolve_logs_dir() == tmp_path / "logs"
    monkeypatch.setenv("BROADSIDE_LOG_DIR", "runlogs")
    assert resolve_logs_dir() == tmp_path / "runlogs"
    monkeypatch.setenv("BROADSIDE_LOG_DIR", str(tmp_path / "abs"))
    assert resolve_logs_dir() == tmp_path / "abs"
