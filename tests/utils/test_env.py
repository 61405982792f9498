import os
from pathlib import Path
from unittest.mock import patch

from utils.env import find_project_root, load_project_dotenv

# --- Test find_project_root --- #


def test_find_project_root_found_in_start(tmp_path: Path):
    """Test finding pyproject.toml in the starting directory."""
    start_dir = tmp_path / "subdir"
    start_dir.mkdir()
    (start_dir / "pyproject.toml").touch()

    assert find_project_root(start=start_dir) == start_dir


def test_find_project_root_found_multiple_levels_up(tmp_path: Path):
    """Test finding pyproject.toml multiple levels up."""
    project_root = tmp_path / "level1"
    project_root.mkdir()
    (project_root / "pyproject.toml").touch()

    start_dir = project_root / "a" / "b" / "c"
    start_dir.mkdir(parents=True)

    assert find_project_root(start=start_dir) == project_root


# --- Test load_project_dotenv --- #


@patch("utils.env.load_dotenv")
def test_load_dotenv_called_when_file_exists(mock_load_dotenv, tmp_path: Path, monkeypatch):
    """load_project_dotenv loads the project .env without overriding."""
    monkeypatch.delenv("RETAIL_ENV_FILE", raising=False)
    (tmp_path / "pyproject.toml").touch()
    env_file = tmp_path / ".env"
    env_file.touch()
    mock_load_dotenv.return_value = True

    assert load_project_dotenv(start=tmp_path) is True
    mock_load_dotenv.assert_called_once_with(dotenv_path=env_file, override=False)


@patch("utils.env.load_dotenv")
def test_load_dotenv_skipped_when_missing(mock_load_dotenv, tmp_path: Path, monkeypatch):
    """No .env file means nothing is loaded."""
    monkeypatch.delenv("RETAIL_ENV_FILE", raising=False)
    (tmp_path / "pyproject.toml").touch()

    assert load_project_dotenv(start=tmp_path) is False
    mock_load_dotenv.assert_not_called()


def test_explicit_env_file_and_no_override(tmp_path: Path, monkeypatch):
    """RETAIL_ENV_FILE selects the file; existing variables win over the file."""
    env_file = tmp_path / "custom.env"
    env_file.write_text("RETAIL_EXISTING=dotenv_value\nRETAIL_NEW=new_value\n")
    monkeypatch.setenv("RETAIL_ENV_FILE", str(env_file))
    monkeypatch.setenv("RETAIL_EXISTING", "original_value")
    # Registered so monkeypatch removes the loaded value on teardown
    monkeypatch.setenv("RETAIL_NEW", "placeholder")
    monkeypatch.delenv("RETAIL_NEW")

    assert load_project_dotenv() is True
    assert os.environ.get("RETAIL_EXISTING") == "original_value"
    assert os.environ.get("RETAIL_NEW") == "new_value"
