from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from . import instrument
from .models import AnswerRecord, Feedback, Puzzle, Selection, Settings, Stats, VoicingType
from .theory import NOTE_NAMES
from .trainer import generate_puzzle, score_answer

logger = logging.getLogger(__name__)


class TrainingSession:
	"""In-memory state of one practice session: current puzzle, the learner's picks and the score."""

	def __init__(self, settings: Optional[Settings] = None, rng: Optional[np.random.Generator] = None) -> None:
		self.settings = settings or Settings()
		self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)
		self.voicing_types: List[VoicingType] = list(self.settings.voicing_types)
		self.roots: List[str] = list(self.settings.roots)
		self.stats = Stats()
		self.history: List[AnswerRecord] = []
		self.score = 0
		self.attempts = 0
		self.selection: Selection = {}
		self.feedback: Optional[Feedback] = None
		self.puzzle: Puzzle = generate_puzzle(self.voicing_types, self.roots, self.rng)
		self.window_start = self.puzzle.window_start

	@property
	def fixed_index(self) -> int:
		return instrument.string_index(self.puzzle.fixed.string)

	@property
	def required_notes(self) -> int:
		return self.puzzle.required_notes

	@property
	def can_check(self) -> bool:
		return self.feedback is None and len(self.selection) + 1 == self.required_notes

	@property
	def accuracy(self) -> float:
		return self.score / self.attempts if self.attempts else 0.0

	def next_puzzle(self) -> Puzzle:
		self.puzzle = generate_puzzle(self.voicing_types, self.roots, self.rng)
		self.selection = {}
		self.feedback = None
		self.window_start = self.puzzle.window_start
		return self.puzzle

	def toggle_note(self, string_idx: int, fret: int) -> None:
		if self.feedback is not None or string_idx == self.fixed_index:
			return
		if instrument.string_number(string_idx) not in self.puzzle.strings:
			return
		if self.selection.get(string_idx) == fret:
			del self.selection[string_idx]
		else:
			self.selection[string_idx] = fret

	def check(self) -> AnswerRecord:
		record = score_answer(self.puzzle, self.selection, self.stats)
		self.attempts += 1
		if record.correct:
			self.score += 1
		self.history.append(record)
		self.feedback = "correct" if record.correct else "wrong"
		logger.info("%s %s %s: %s", self.puzzle.root, self.puzzle.quality, self.puzzle.voicing_type, self.feedback)
		return record

	def retry(self) -> None:
		self.selection = {}
		self.feedback = None

	def shift_window(self, delta: int) -> int:
		self.window_start = instrument.shift_window(self.window_start, delta)
		return self.window_start

	# An empty pick keeps the current filter; the returned list is what is in force.
	def set_voicing_types(self, types: List[VoicingType]) -> List[VoicingType]:
		if types:
			self.voicing_types = list(types)
		return list(self.voicing_types)

	def set_roots(self, roots: List[str]) -> List[str]:
		if roots:
			self.roots = list(roots)
		return list(self.roots)

	def select_all_roots(self) -> None:
		self.roots = list(NOTE_NAMES)

	def clear_roots(self) -> None:
		self.roots = ["C"]

	def current_settings(self) -> Settings:
		return self.settings.model_copy(update={"voicing_types": list(self.voicing_types), "roots": list(self.roots)})
