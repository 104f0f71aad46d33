import streamlit as st
import pandas as pd
import altair as alt
from typing import Any, Dict, List

from voicingtrainer.instrument import STRING_COUNT, string_number, window_frets
from voicingtrainer.logging_config import setup_logging
from voicingtrainer.models import GroupStats
from voicingtrainer.session import TrainingSession
from voicingtrainer.storage import load_settings, save_settings
from voicingtrainer.theory import NOTE_NAMES, chord_symbol
from voicingtrainer.trainer import reveal_note_name
from voicingtrainer.voicings import VOICING_TYPES


st.set_page_config(page_title="Voicing Trainer", page_icon=None, layout="centered")


def get_state() -> Any:
	if "session" not in st.session_state:
		settings = load_settings()
		setup_logging(settings.log_level)
		st.session_state.session = TrainingSession(settings)
	return st.session_state


TYPES_KEY = "voicing_types_filter"
ROOTS_KEY = "roots_filter"


# Widget callbacks run before the rerun, so they may write the widget's own state.
def _on_types_change() -> None:
	session: TrainingSession = st.session_state.session
	st.session_state[TYPES_KEY] = session.set_voicing_types(st.session_state[TYPES_KEY])


def _on_roots_change() -> None:
	session: TrainingSession = st.session_state.session
	st.session_state[ROOTS_KEY] = session.set_roots(st.session_state[ROOTS_KEY])


def _on_select_all() -> None:
	session: TrainingSession = st.session_state.session
	session.select_all_roots()
	st.session_state[ROOTS_KEY] = list(session.roots)


def _on_clear() -> None:
	session: TrainingSession = st.session_state.session
	session.clear_roots()
	st.session_state[ROOTS_KEY] = list(session.roots)


def sidebar_controls(session: TrainingSession) -> None:
	if TYPES_KEY not in st.session_state:
		st.session_state[TYPES_KEY] = list(session.voicing_types)
	if ROOTS_KEY not in st.session_state:
		st.session_state[ROOTS_KEY] = list(session.roots)

	st.sidebar.header("Setup Training")
	st.sidebar.multiselect("Voicing types", options=VOICING_TYPES, key=TYPES_KEY, on_change=_on_types_change)
	st.sidebar.multiselect(
		f"Roots ({len(NOTE_NAMES)} options)", options=NOTE_NAMES, key=ROOTS_KEY, on_change=_on_roots_change
	)
	cols = st.sidebar.columns(2)
	cols[0].button("Select all", use_container_width=True, on_click=_on_select_all)
	cols[1].button("Clear", use_container_width=True, on_click=_on_clear)

	new_s = session.current_settings()
	if new_s != session.settings:
		save_settings(new_s)
		session.settings = new_s


def _cell_label(session: TrainingSession, string_idx: int, fret: int) -> str:
	puzzle = session.puzzle
	if string_idx == session.fixed_index and fret == puzzle.fixed.fret:
		return puzzle.fixed_note_name
	if session.selection.get(string_idx) == fret:
		if session.feedback is not None:
			return reveal_note_name(puzzle.chord_notes, string_idx, fret) or "x"
		return "●"
	return "·"


def fretboard(session: TrainingSession) -> None:
	frets = window_frets(session.window_start)
	header = st.columns(len(frets) + 1)
	header[0].caption("str")
	for col, fret in zip(header[1:], frets):
		col.caption(str(fret))
	for string_idx in range(STRING_COUNT):
		active = string_number(string_idx) in session.puzzle.strings
		row = st.columns(len(frets) + 1)
		row[0].write(str(string_number(string_idx)))
		for col, fret in zip(row[1:], frets):
			label = _cell_label(session, string_idx, fret)
			disabled = not active or session.feedback is not None or string_idx == session.fixed_index
			if col.button(label, key=f"cell-{string_idx}-{fret}", disabled=disabled, use_container_width=True):
				session.toggle_note(string_idx, fret)
				st.rerun()


def results(by_quality: Dict[str, GroupStats]) -> None:
	rows: List[Dict[str, Any]] = []
	for name, st_q in by_quality.items():
		acc = (st_q.correct / st_q.seen) if st_q.seen else 0.0
		rows.append({"quality": name, "seen": st_q.seen, "correct": st_q.correct, "accuracy": round(acc, 3)})
	df = pd.DataFrame(rows)
	st.subheader("Results by quality")
	st.dataframe(df, hide_index=True)
	chart = alt.Chart(df).mark_bar().encode(
		x=alt.X("quality:N", sort=None),
		y=alt.Y("accuracy:Q", scale=alt.Scale(domain=[0, 1])),
		tooltip=["quality", "seen", "correct", "accuracy"],
	).properties(width=400, height=250)
	st.altair_chart(chart, use_container_width=True)


def main() -> None:
	state = get_state()
	session: TrainingSession = state.session
	sidebar_controls(session)

	st.title("Voicing Trainer")
	st.write(f"Score: {session.score} / {session.attempts} ({round(session.accuracy * 100)}%)")

	puzzle = session.puzzle
	left, right = st.columns(2)
	left.metric("Target chord", chord_symbol(puzzle.root, puzzle.quality))
	right.metric("Voicing", puzzle.voicing_type, f"{session.required_notes} notes", delta_color="off")

	nav = st.columns([1, 1, 4])
	if nav[0].button("◀", key="shift-left"):
		session.shift_window(-1)
		st.rerun()
	if nav[1].button("▶", key="shift-right"):
		session.shift_window(1)
		st.rerun()

	fretboard(session)

	if session.feedback is None:
		if st.button("Verify Voicing", disabled=not session.can_check, use_container_width=True):
			session.check()
			st.rerun()
	else:
		if session.feedback == "correct":
			st.success("Perfect Match!")
		else:
			st.error("Incorrect Notes")
		cols = st.columns(2)
		if session.feedback == "wrong" and cols[0].button("Retry", use_container_width=True):
			session.retry()
			st.rerun()
		if cols[1].button("Next Challenge", use_container_width=True):
			session.next_puzzle()
			st.rerun()

	if session.stats.by_quality:
		st.markdown("---")
		results(session.stats.by_quality)


if __name__ == "__main__":
	main()
