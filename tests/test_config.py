from roommates.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ROOMMATES_TOP_K", raising=False)
    monkeypatch.delenv("ROOMMATES_LOG_LEVEL", raising=False)
    settings = Settings.from_env()
    assert settings == Settings(top_k=10, log_level="WARNING")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ROOMMATES_TOP_K", "3")
    monkeypatch.setenv("ROOMMATES_LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.top_k == 3
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("ROOMMATES_TOP_K", "many")
    monkeypatch.setenv("ROOMMATES_LOG_LEVEL", "LOUD")
    settings = Settings.from_env()
    assert settings.top_k == 10
    assert settings.log_level == "WARNING"


def test_non_positive_top_k_falls_back(monkeypatch):
    monkeypatch.setenv("ROOMMATES_TOP_K", "0")
    assert Settings.from_env().top_k == 10


def test_env_file(tmp_path, monkeypatch):
    # set then delete so teardown removes whatever the .env file loads
    monkeypatch.setenv("ROOMMATES_TOP_K", "unused")
    monkeypatch.delenv("ROOMMATES_TOP_K")
    env_file = tmp_path / ".env"
    env_file.write_text("ROOMMATES_TOP_K=4\n")
    assert Settings.from_env(str(env_file)).top_k == 4
