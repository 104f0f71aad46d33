from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Sequence, Tuple

from .instrument import MAX_WINDOW_START, pitch_class_at, string_index, window_frets
from .models import Realization, VoicingType
from .theory import SEVENTH_QUALITIES, TRIAD_QUALITIES, ChordQuality

logger = logging.getLogger(__name__)

VOICING_TYPES: List[VoicingType] = ["Triad", "Open Triad", "Drop 2", "Drop 3"]

# Candidate string templates, 1 = high E
VOICING_STRING_SETS: Dict[str, List[List[int]]] = {
	"Triad": [[1, 2, 3], [2, 3, 4], [3, 4, 5], [4, 5, 6]],
	"Open Triad": [[1, 2, 3, 4], [2, 3, 4, 5], [3, 4, 5, 6]],
	"Drop 2": [[1, 2, 3, 4], [2, 3, 4, 5], [3, 4, 5, 6]],
	"Drop 3": [[1, 2, 3, 4, 5], [2, 3, 4, 5, 6]],
}

# Max fret span across a fingering
STRETCH_LIMITS = {
	"Triad": 3,
	"Open Triad": 5,
	"Drop 2": 3,
	"Drop 3": 4,
}

QUALITY_POOLS: Dict[str, List[ChordQuality]] = {
	"Triad": TRIAD_QUALITIES,
	"Open Triad": TRIAD_QUALITIES,
	"Drop 2": SEVENTH_QUALITIES,
	"Drop 3": SEVENTH_QUALITIES,
}


def _is_consecutive(strings: Sequence[int]) -> bool:
	return all(b - a == 1 for a, b in zip(strings, strings[1:]))


def string_subsets(strings: List[int], voicing_type: VoicingType) -> List[Tuple[int, ...]]:
	"""String groups (ascending) a voicing of this type may occupy within a template."""
	if voicing_type == "Open Triad":
		top, rest = strings[0], strings[1:]
		combos = [tuple(sorted((top,) + pair)) for pair in itertools.combinations(rest, 2)]
		# three adjacent strings would just be a close triad
		return [c for c in combos if not _is_consecutive(c)]
	if voicing_type == "Drop 3":
		combos = [tuple(sorted(c)) for c in itertools.combinations(strings, 4)]
		return [c for c in combos if c[1] - c[0] == 2 and _is_consecutive(c[1:])]
	return [tuple(sorted(strings))]


def is_valid_stretch(frets: Sequence[int], voicing_type: VoicingType) -> bool:
	return max(frets) - min(frets) <= STRETCH_LIMITS[voicing_type]


def _realizations_in_window(
	targets: set, subset: Tuple[int, ...], start: int, voicing_type: VoicingType
) -> List[Realization]:
	options = [
		[f for f in window_frets(start) if pitch_class_at(string_index(s), f) in targets]
		for s in subset
	]
	if any(not opts for opts in options):
		return []
	found = []
	for frets in itertools.product(*options):
		if not is_valid_stretch(frets, voicing_type):
			continue
		pitches = {pitch_class_at(string_index(s), f) for s, f in zip(subset, frets)}
		if pitches == targets:
			found.append(Realization(strings=list(subset), frets=list(frets), window_start=start))
	return found


def find_voicings(pitches: Sequence[int], strings: List[int], voicing_type: VoicingType) -> List[Realization]:
	"""Every fingering of `pitches` on the template `strings` that fits some 5-fret window.

	Windows start at frets 0 through 11. The same fingering can be reported for
	several overlapping windows; each report carries its own window start.
	"""
	targets = set(pitches)
	# one string per chord tone, each tone exactly once
	subsets = [s for s in string_subsets(strings, voicing_type) if len(s) == len(targets)]
	found: List[Realization] = []
	for start in range(MAX_WINDOW_START + 1):
		for subset in subsets:
			found.extend(_realizations_in_window(targets, subset, start, voicing_type))
	logger.debug("%d %s voicings for %s on strings %s", len(found), voicing_type, sorted(targets), strings)
	return found
