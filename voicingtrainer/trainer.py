from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, TypeVar

import numpy as np

from .instrument import STRING_TUNING, clamp_window_start, pitch_class_at, string_index
from .models import AnswerRecord, FretPosition, GroupStats, Puzzle, Realization, Selection, Stats, Verdict, VoicingType
from .theory import NOTE_NAMES, chord_notes, chord_pitch_classes, pitch_class_of
from .voicings import QUALITY_POOLS, VOICING_STRING_SETS, find_voicings

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 200
DEFAULT_ROOT = "C"

T = TypeVar("T")


def _pick(rng: np.random.Generator, items: Sequence[T]) -> T:
	return items[int(rng.integers(len(items)))]


def _note_for_pitch(notes: List[str], pitch: int) -> Optional[str]:
	for n in notes:
		if pitch_class_of(n) == pitch:
			return n
	return None


def choose_realization(
	realizations: List[Realization], pitches: List[int], rng: np.random.Generator
) -> Optional[Realization]:
	"""Pick a degree for the top-string note first, then a fingering with that degree.

	Degrees that happen to have more fingerings are not favoured.
	"""
	groups: Dict[int, List[Realization]] = defaultdict(list)
	for r in realizations:
		top = pitch_class_at(string_index(r.strings[0]), r.frets[0])
		if top in pitches:
			groups[pitches.index(top)].append(r)
	if not groups:
		return None
	degree = _pick(rng, sorted(groups))
	return _pick(rng, groups[degree])


def fallback_puzzle(root: str = DEFAULT_ROOT) -> Puzzle:
	"""Major triad on strings 1-3 with the root given on string 1.

	For C this is string 1, fret 8 with the window opening at fret 7.
	"""
	notes = chord_notes(root, "Maj")
	fret = (pitch_class_of(root) - STRING_TUNING[0]) % 12
	window = clamp_window_start(fret - 1)
	solution = next(
		(
			r
			for r in find_voicings(chord_pitch_classes(notes), [1, 2, 3], "Triad")
			if r.frets[0] == fret and r.window_start == window
		),
		None,
	)
	return Puzzle(
		root=root,
		quality="Maj",
		voicing_type="Triad",
		strings=[1, 2, 3],
		fixed=FretPosition(string=1, fret=fret),
		fixed_note_name=notes[0],
		chord_notes=notes,
		window_start=window,
		solution=solution,
	)


def generate_puzzle(
	allowed_types: Sequence[VoicingType],
	allowed_roots: Sequence[str],
	rng: Optional[np.random.Generator] = None,
) -> Puzzle:
	"""Random chord/voicing/string-set with one note given. Never fails."""
	if rng is None:
		rng = np.random.default_rng()
	types = list(allowed_types) or ["Triad"]
	roots = list(allowed_roots) or list(NOTE_NAMES)
	for attempt in range(1, MAX_ATTEMPTS + 1):
		root = _pick(rng, roots)
		voicing_type = _pick(rng, types)
		quality = _pick(rng, QUALITY_POOLS[voicing_type])
		strings = _pick(rng, VOICING_STRING_SETS[voicing_type])
		notes = chord_notes(root, quality)
		pitches = chord_pitch_classes(notes)
		choice = choose_realization(find_voicings(pitches, strings, voicing_type), pitches, rng)
		if choice is None:
			logger.debug("attempt %d: no %s voicing of %s %s on %s", attempt, voicing_type, root, quality, strings)
			continue
		fixed = FretPosition(string=choice.strings[0], fret=choice.frets[0])
		fixed_pitch = pitch_class_at(string_index(fixed.string), fixed.fret)
		return Puzzle(
			root=root,
			quality=quality,
			voicing_type=voicing_type,
			strings=list(strings),
			fixed=fixed,
			fixed_note_name=_note_for_pitch(notes, fixed_pitch) or notes[0],
			chord_notes=notes,
			window_start=choice.window_start,
			solution=choice,
		)
	logger.warning("no puzzle found in %d attempts, using fallback", MAX_ATTEMPTS)
	return fallback_puzzle(roots[0])


def _evaluate(chord: List[str], fixed: FretPosition, selections: Selection, required_count: int) -> Verdict:
	target = set(chord_pitch_classes(chord))
	fixed_idx = string_index(fixed.string)
	selected = {pitch_class_at(fixed_idx, fixed.fret)}
	selected.update(pitch_class_at(idx, fret) for idx, fret in selections.items())
	harmony = len(selected) == len(target) and selected <= target
	structure = len(set(selections) | {fixed_idx}) == required_count
	return Verdict(harmony_correct=harmony, structure_correct=structure, correct=harmony and structure)


def verify(chord: List[str], fixed: FretPosition, selections: Selection, required_count: int) -> bool:
	"""True when fixed + selected notes are exactly the chord's pitch classes on `required_count` strings."""
	return _evaluate(chord, fixed, selections, required_count).correct


def check_answer(puzzle: Puzzle, selections: Selection) -> Verdict:
	return _evaluate(puzzle.chord_notes, puzzle.fixed, selections, puzzle.required_notes)


def reveal_note_name(chord: List[str], string_idx: int, fret: int) -> Optional[str]:
	return _note_for_pitch(chord, pitch_class_at(string_idx, fret))


def _bump(groups: Dict[str, GroupStats], key: str, correct: bool) -> None:
	st = groups.setdefault(key, GroupStats())
	st.seen += 1
	if correct:
		st.correct += 1


def score_answer(puzzle: Puzzle, selections: Selection, stats: Stats) -> AnswerRecord:
	verdict = check_answer(puzzle, selections)
	_bump(stats.by_voicing, puzzle.voicing_type, verdict.correct)
	_bump(stats.by_quality, puzzle.quality, verdict.correct)
	return AnswerRecord(
		root=puzzle.root,
		quality=puzzle.quality,
		voicing_type=puzzle.voicing_type,
		correct=verdict.correct,
	)
