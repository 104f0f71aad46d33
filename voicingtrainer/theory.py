from __future__ import annotations

from typing import Dict, List, Literal, Tuple

ChordQuality = Literal["Maj", "min", "aug", "dim", "Maj7", "m7", "7", "m7b5", "dim7"]

LETTERS = ["C", "D", "E", "F", "G", "A", "B"]

LETTER_PITCHES = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

ACCIDENTAL_VALUES = {
	"#": 1,
	"b": -1,
	"x": 2,
}

# 17 root options, enharmonic pairs listed separately
NOTE_NAMES = [
	"C", "C#", "Db", "D", "D#", "Eb", "E", "F", "F#", "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B",
]

# (semitones above root, letter steps above root)
CHORD_SPELLS: Dict[str, List[Tuple[int, int]]] = {
	"Maj": [(0, 0), (4, 2), (7, 4)],
	"min": [(0, 0), (3, 2), (7, 4)],
	"aug": [(0, 0), (4, 2), (8, 4)],
	"dim": [(0, 0), (3, 2), (6, 4)],
	"Maj7": [(0, 0), (4, 2), (7, 4), (11, 6)],
	"m7": [(0, 0), (3, 2), (7, 4), (10, 6)],
	"7": [(0, 0), (4, 2), (7, 4), (10, 6)],
	"m7b5": [(0, 0), (3, 2), (6, 4), (10, 6)],
	"dim7": [(0, 0), (3, 2), (6, 4), (9, 6)],
}

TRIAD_QUALITIES: List[ChordQuality] = ["Maj", "min", "aug", "dim"]
SEVENTH_QUALITIES: List[ChordQuality] = ["Maj7", "m7", "7", "m7b5", "dim7"]


class MalformedNote(ValueError):
	"""Raised when a note name cannot be parsed into a pitch class."""


def pitch_class_of(note: str) -> int:
	"""Pitch class (C=0) of a spelled note such as "Eb", "F##" or "Gx"."""
	if not note:
		raise MalformedNote("empty note name")
	letter = note[0].upper()
	if letter not in LETTER_PITCHES:
		raise MalformedNote(f"unknown note letter in {note!r}")
	pitch = LETTER_PITCHES[letter]
	for ch in note[1:]:
		if ch not in ACCIDENTAL_VALUES:
			raise MalformedNote(f"unknown accidental {ch!r} in {note!r}")
		pitch += ACCIDENTAL_VALUES[ch]
	return (pitch + 120) % 12


def spell_note(root: str, degree_offset: int, semitones: int) -> str:
	"""Spell the note `semitones` above `root` on the letter `degree_offset` steps above it.

	The letter is fixed by the degree, so a third is always written on the
	letter a third above the root; the accidental absorbs the difference.
	"""
	root_pitch = pitch_class_of(root)
	root_letter = root[0].upper()
	target_letter = LETTERS[(LETTERS.index(root_letter) + degree_offset) % 7]
	natural = LETTER_PITCHES[target_letter]
	target = (root_pitch + semitones) % 12
	diff = (target - natural + 12) % 12
	if diff > 6:
		diff -= 12
	if diff > 0:
		return target_letter + "#" * diff
	if diff < 0:
		return target_letter + "b" * -diff
	return target_letter


def chord_notes(root: str, quality: ChordQuality) -> List[str]:
	"""Spelled chord tones in degree order: root, third, fifth, (seventh)."""
	return [spell_note(root, degree, semitones) for semitones, degree in CHORD_SPELLS[quality]]


def chord_pitch_classes(notes: List[str]) -> List[int]:
	return [pitch_class_of(n) for n in notes]


def chord_symbol(root: str, quality: ChordQuality) -> str:
	return f"{root} {quality}"
