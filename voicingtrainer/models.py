from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .theory import NOTE_NAMES, ChordQuality


VoicingType = Literal["Triad", "Open Triad", "Drop 2", "Drop 3"]
Feedback = Literal["correct", "wrong"]

# Notes a finished voicing of each type sounds, one per string
NOTE_COUNTS = {
	"Triad": 3,
	"Open Triad": 3,
	"Drop 2": 4,
	"Drop 3": 4,
}

# 0-based string index -> fret, owned by the presentation layer
Selection = Dict[int, int]


class FretPosition(BaseModel):
	model_config = ConfigDict(frozen=True)

	string: int = Field(ge=1, le=6)
	fret: int = Field(ge=0, le=16)


class Realization(BaseModel):
	"""One fingering of a chord: frets on `strings` (ascending), found in the window at `window_start`."""

	model_config = ConfigDict(frozen=True)

	strings: List[int]
	frets: List[int]
	window_start: int


class Puzzle(BaseModel):
	model_config = ConfigDict(frozen=True)

	root: str
	quality: ChordQuality
	voicing_type: VoicingType
	strings: List[int]
	fixed: FretPosition
	fixed_note_name: str
	chord_notes: List[str]
	window_start: int
	solution: Optional[Realization] = None

	@property
	def required_notes(self) -> int:
		return NOTE_COUNTS[self.voicing_type]


class Verdict(BaseModel):
	harmony_correct: bool
	structure_correct: bool
	correct: bool


class Settings(BaseModel):
	voicing_types: List[VoicingType] = Field(default=["Triad"], min_length=1)
	roots: List[str] = Field(default=["C"], min_length=1)
	seed: Optional[int] = None
	log_level: str = Field(default="INFO")

	@field_validator("roots")
	@classmethod
	def _check_roots(cls, v: List[str]) -> List[str]:
		bad = [n for n in v if n not in NOTE_NAMES]
		if bad:
			raise ValueError(f"not root options: {bad}")
		return v


class GroupStats(BaseModel):
	seen: int = 0
	correct: int = 0


class Stats(BaseModel):
	by_voicing: Dict[str, GroupStats] = Field(default_factory=dict)
	by_quality: Dict[str, GroupStats] = Field(default_factory=dict)


class AnswerRecord(BaseModel):
	root: str
	quality: ChordQuality
	voicing_type: VoicingType
	correct: bool
