import pytest

from voicingtrainer.theory import (
	CHORD_SPELLS,
	LETTERS,
	NOTE_NAMES,
	MalformedNote,
	chord_notes,
	chord_pitch_classes,
	chord_symbol,
	pitch_class_of,
	spell_note,
)


def test_pitch_class_of_naturals_and_accidentals():
	assert pitch_class_of("C") == 0
	assert pitch_class_of("C#") == 1
	assert pitch_class_of("Db") == 1
	assert pitch_class_of("B") == 11
	assert pitch_class_of("Cb") == 11
	assert pitch_class_of("E##") == 6
	assert pitch_class_of("Fx") == 7
	assert pitch_class_of("Dbb") == 0
	assert pitch_class_of("c#") == 1


def test_pitch_class_of_rejects_malformed():
	for bad in ["", "H", "1", "C?"]:
		with pytest.raises(MalformedNote):
			pitch_class_of(bad)


def test_malformed_note_is_value_error():
	with pytest.raises(ValueError):
		pitch_class_of("Z")


def test_spell_note_rejects_bad_root_as_malformed():
	with pytest.raises(MalformedNote):
		spell_note("H", 2, 4)
	with pytest.raises(MalformedNote):
		spell_note("", 0, 0)


def test_chord_notes_examples():
	assert chord_notes("C", "Maj") == ["C", "E", "G"]
	assert chord_pitch_classes(chord_notes("C", "Maj")) == [0, 4, 7]
	assert chord_notes("C", "m7") == ["C", "Eb", "G", "Bb"]
	assert chord_notes("B", "dim7") == ["B", "D", "F", "Ab"]
	assert chord_notes("F#", "7") == ["F#", "A#", "C#", "E"]


def test_double_accidentals_are_spelled():
	assert chord_notes("A#", "aug") == ["A#", "C##", "E##"]
	assert chord_notes("Gb", "dim") == ["Gb", "Bbb", "Dbb"]
	assert chord_notes("Db", "dim7")[-1] == "Cbb"


def test_spell_note_keeps_pitch_and_letter_for_all_roots():
	for root in NOTE_NAMES:
		for specs in CHORD_SPELLS.values():
			for semitones, degree in specs:
				name = spell_note(root, degree, semitones)
				assert pitch_class_of(name) == (pitch_class_of(root) + semitones) % 12
				assert name[0] == LETTERS[(LETTERS.index(root[0]) + degree) % 7]
				accidentals = name[1:]
				assert len(accidentals) <= 2
				assert len(set(accidentals)) <= 1


def test_chord_tones_are_distinct():
	for root in NOTE_NAMES:
		for quality, specs in CHORD_SPELLS.items():
			pcs = chord_pitch_classes(chord_notes(root, quality))
			assert len(pcs) == len(specs)
			assert len(set(pcs)) == len(pcs)


def test_chord_symbol():
	assert chord_symbol("Eb", "m7b5") == "Eb m7b5"
