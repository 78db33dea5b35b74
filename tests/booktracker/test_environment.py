import os

from booktracker.environment import candidate_files, load_environment


def test_candidate_order(tmp_path, monkeypatch):
    explicit = tmp_path / "explicit.env"
    monkeypatch.setenv("BOOKTRACKER_ENV_FILE", str(explicit))
    monkeypatch.setenv("BOOKTRACKER_ENV", "staging")

    paths = candidate_files(tmp_path)

    assert paths == [
        explicit.resolve(),
        (tmp_path / ".env").resolve(),
        (tmp_path / ".env.staging").resolve(),
        (tmp_path / ".env.local").resolve(),
    ]


def test_earlier_files_and_real_environment_win(tmp_path, monkeypatch):
    monkeypatch.delenv("BOOKTRACKER_ENV_FILE", raising=False)
    monkeypatch.delenv("BOOKTRACKER_ENV", raising=False)
    monkeypatch.delenv("BOOKTRACKER_TEST_FROM_FILE", raising=False)
    monkeypatch.setenv("BOOKTRACKER_TEST_PRESET", "process")
    (tmp_path / ".env").write_text(
        "BOOKTRACKER_TEST_FROM_FILE=dotenv\nBOOKTRACKER_TEST_PRESET=dotenv\n", encoding="utf-8"
    )
    (tmp_path / ".env.local").write_text("BOOKTRACKER_TEST_FROM_FILE=local\n", encoding="utf-8")

    try:
        loaded = load_environment(force=True, base_dir=tmp_path)

        assert loaded == ((tmp_path / ".env").resolve(), (tmp_path / ".env.local").resolve())
        assert os.environ["BOOKTRACKER_TEST_FROM_FILE"] == "dotenv"
        assert os.environ["BOOKTRACKER_TEST_PRESET"] == "process"
    finally:
        os.environ.pop("BOOKTRACKER_TEST_FROM_FILE", None)
