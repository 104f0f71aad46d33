from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from .models import Settings

# Override the data directory, e.g. for tests or a portable install
ENV_HOME = "VOICINGTRAINER_HOME"


def _data_path() -> Path:
	override = os.environ.get(ENV_HOME)
	dir_ = Path(override) if override else Path.home() / ".voicingtrainer"
	dir_.mkdir(parents=True, exist_ok=True)
	return dir_ / "data.json"


def _load_raw() -> Dict[str, Any]:
	p = _data_path()
	if not p.exists():
		return {}
	try:
		data = json.loads(p.read_text())
	except (OSError, json.JSONDecodeError):
		return {}
	return data if isinstance(data, dict) else {}


def _save_raw(data: Dict[str, Any]) -> None:
	p = _data_path()
	p.write_text(json.dumps(data, indent=2))


def load_settings() -> Settings:
	"""Saved training setup; defaults when nothing usable is on disk."""
	obj = _load_raw().get("settings", {})
	if not isinstance(obj, dict):
		return Settings()
	try:
		return Settings.model_validate(obj)
	except ValidationError:
		return Settings()


def save_settings(s: Settings) -> None:
	raw = _load_raw()
	raw["settings"] = s.model_dump()
	_save_raw(raw)
