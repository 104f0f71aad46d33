import json
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from voicingtrainer import storage
from voicingtrainer.app_streamlit import ROOTS_KEY, TYPES_KEY

APP = str(Path(__file__).resolve().parent.parent / "voicingtrainer" / "app_streamlit.py")


@pytest.fixture(autouse=True)
def data_home(tmp_path, monkeypatch):
	monkeypatch.setenv(storage.ENV_HOME, str(tmp_path))
	return tmp_path


def _app():
	at = AppTest.from_file(APP, default_timeout=60)
	at.run()
	return at


def test_app_starts_with_defaults_when_saved_root_is_not_an_option(data_home):
	(data_home / "data.json").write_text(json.dumps({"settings": {"roots": ["E#"]}}))
	at = _app()
	assert not at.exception
	assert at.multiselect(key=ROOTS_KEY).value == ["C"]


def test_clearing_a_filter_restores_the_session_value():
	at = _app()
	at.multiselect(key=ROOTS_KEY).set_value([]).run()
	assert not at.exception
	assert at.multiselect(key=ROOTS_KEY).value == ["C"]
	assert at.session_state["session"].roots == ["C"]
	at.multiselect(key=TYPES_KEY).set_value([]).run()
	assert at.multiselect(key=TYPES_KEY).value == ["Triad"]


def test_filter_change_reaches_session_and_settings_file():
	at = _app()
	at.multiselect(key=ROOTS_KEY).set_value(["D", "Gb"]).run()
	assert not at.exception
	assert at.session_state["session"].roots == ["D", "Gb"]
	assert storage.load_settings().roots == ["D", "Gb"]
