from __future__ import annotations

from typing import List

# Open-string pitch classes, string 1 (high E) first
STRING_TUNING = [4, 11, 7, 2, 9, 4]
STRING_COUNT = len(STRING_TUNING)

WINDOW_SIZE = 5
MIN_WINDOW_START = 0
MAX_WINDOW_START = 11


def pitch_class_at(string_index: int, fret: int) -> int:
	"""Pitch class sounded at `fret` on the 0-based `string_index`."""
	return (STRING_TUNING[string_index] + fret) % 12


def string_index(number: int) -> int:
	return number - 1


def string_number(index: int) -> int:
	return index + 1


def window_frets(start: int) -> List[int]:
	return list(range(start, start + WINDOW_SIZE))


def clamp_window_start(start: int) -> int:
	return max(MIN_WINDOW_START, min(MAX_WINDOW_START, start))


def shift_window(start: int, delta: int) -> int:
	return clamp_window_start(start + delta)
