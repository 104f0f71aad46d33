import json

import pytest
from pydantic import ValidationError

from voicingtrainer import storage
from voicingtrainer.models import Puzzle, Settings
from voicingtrainer.trainer import fallback_puzzle


@pytest.fixture(autouse=True)
def data_home(tmp_path, monkeypatch):
	monkeypatch.setenv(storage.ENV_HOME, str(tmp_path))
	return tmp_path


def test_load_settings_defaults_when_missing():
	s = storage.load_settings()
	assert s == Settings()
	assert s.voicing_types == ["Triad"]
	assert s.roots == ["C"]


def test_save_then_load_settings(data_home):
	s = Settings(voicing_types=["Drop 2", "Open Triad"], roots=["Eb", "F#"], seed=9)
	storage.save_settings(s)
	assert (data_home / "data.json").exists()
	assert storage.load_settings() == s


def test_corrupt_or_invalid_file_gives_defaults(data_home):
	(data_home / "data.json").write_text("{not json")
	assert storage.load_settings() == Settings()
	(data_home / "data.json").write_text(json.dumps({"settings": {"roots": ["H"]}}))
	assert storage.load_settings() == Settings()
	(data_home / "data.json").write_text(json.dumps(["settings"]))
	assert storage.load_settings() == Settings()


def test_saved_root_outside_options_loads_defaults(data_home):
	(data_home / "data.json").write_text(json.dumps({"settings": {"roots": ["E#"], "voicing_types": ["Drop 3"]}}))
	assert storage.load_settings() == Settings()


def test_settings_validation():
	with pytest.raises(ValidationError):
		Settings(roots=["C", "Q#"])
	for odd in (["c#"], ["Fx"], ["E#"], ["Cb"]):
		with pytest.raises(ValidationError):
			Settings(roots=odd)
	with pytest.raises(ValidationError):
		Settings(voicing_types=[])
	with pytest.raises(ValidationError):
		Settings(voicing_types=["Drop 4"])


def test_puzzle_is_immutable():
	p = fallback_puzzle()
	assert isinstance(p, Puzzle)
	with pytest.raises(ValidationError):
		p.window_start = 3
