import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.editor import SubtitleEditor
from models.subtitle import SubtitleEntry
from runtime_config import RuntimeConfig, get_config, set_config


@pytest.fixture(autouse=True)
def default_config():
    original = get_config()
    set_config(RuntimeConfig())
    yield
    set_config(original)


@pytest.fixture
def editor(qapp):
    return SubtitleEditor(
        [
            SubtitleEntry(3.0, 4.0, "Second."),
            SubtitleEntry(1.0, 2.0, "First."),
        ],
        media_duration=10.0,
    )


def test_entries_sorted_on_load(editor):
    assert [e.text for e in editor.entries] == ["First.", "Second."]
    assert editor.count() == 2
    assert not editor.is_modified


def test_update_entry_swaps_and_clamps(editor):
    assert editor.update_entry(0, SubtitleEntry(2.5, -1.0, "First."))
    assert (editor.entries[0].start_time, editor.entries[0].end_time) == (0.0, 2.5)

    editor.update_entry(1, SubtitleEntry(9.0, 12.0, "Second."))
    assert editor.entries[1].end_time == 10.0


def test_update_entry_out_of_range(editor):
    assert not editor.update_entry(5, SubtitleEntry(0.0, 1.0, "x"))
    assert not editor.can_undo()


def test_commit_resorts_and_keeps_selection(editor):
    editor.select_entry(0)
    editor.update_entry(0, SubtitleEntry(5.0, 6.0, "First."), overwrite=True)
    # Order is kept stable while the gesture is in progress
    assert editor.entries[0].text == "First."

    assert editor.commit()
    assert [e.text for e in editor.entries] == ["Second.", "First."]
    assert editor.selected_index == 1
    assert editor.history.cursor == 1
    assert not editor.commit()


def test_update_time_text(editor, qtbot):
    with qtbot.waitSignal(editor.history_changed) as blocker:
        assert editor.update_time_text(0, "end_time", "00:00:02,750")
    assert blocker.args == [True, False]
    assert editor.entries[0].end_time == 2.75


def test_invalid_time_text_leaves_entries_unchanged(editor):
    before = editor.entries
    assert not editor.update_time_text(0, "start_time", "1:00")
    assert not editor.update_time_text(0, "start_time", "00:00:01.000")
    assert editor.entries == before
    assert not editor.can_undo()


def test_unchanged_time_text_is_not_an_edit(editor):
    assert not editor.update_time_text(0, "start_time", "00:00:01,000")
    assert not editor.can_undo()


def test_unknown_time_field(editor):
    with pytest.raises(ValueError):
        editor.update_time_text(0, "text", "00:00:01,000")


def test_update_text(editor):
    assert editor.update_text(1, "Changed.")
    assert editor.entries[1].text == "Changed."
    assert not editor.update_text(1, "Changed.")


def test_split_entry(editor):
    editor.select_entry(1)
    assert editor.split_entry(0, 1.5)
    assert editor.count() == 3
    assert editor.selected_index == 2
    assert editor.entries[0].end_time == 1.5
    assert editor.entries[1].start_time == 1.5


def test_split_out_of_bounds_is_noop(editor):
    assert not editor.split_entry(0, 2.0)
    assert not editor.split_entry(0, 7.0)
    assert not editor.split_entry(9, 1.5)
    assert editor.count() == 2
    assert not editor.can_undo()


def test_selection_navigation(editor, qtbot):
    with qtbot.waitSignal(editor.selection_changed) as blocker:
        editor.select_next()
    assert blocker.args == [0]

    editor.select_next()
    assert editor.selected_index == 1
    editor.select_next()
    assert editor.selected_index == 1

    editor.select_previous()
    assert editor.selected_index == 0
    editor.select_previous()
    assert editor.selected_index == 0

    editor.select_entry(7)
    assert editor.selected_index is None


def test_undo_redo(editor):
    editor.update_text(0, "Edited.")
    assert editor.undo()
    assert editor.entries[0].text == "First."
    assert editor.redo()
    assert editor.entries[0].text == "Edited."
    assert not editor.redo()


def test_undo_split_clears_stale_selection(editor):
    editor.split_entry(1, 3.5)
    editor.select_entry(2)
    editor.undo()
    assert editor.selected_index is None


def test_modified_tracking(editor):
    editor.update_text(0, "Edited.")
    assert editor.is_modified
    editor.mark_saved()
    assert not editor.is_modified
    editor.undo()
    assert editor.is_modified


def test_display_lines_and_export(editor):
    assert editor.display_lines(1.5) == ["First."]
    assert editor.display_lines(2.5) == []
    assert editor.to_srt() == (
        "1\n00:00:01,000 --> 00:00:02,000\nFirst.\n\n"
        "2\n00:00:03,000 --> 00:00:10,000\nSecond."
    )


def test_reset_clears_history(editor, qtbot):
    editor.update_text(0, "Edited.")
    with qtbot.waitSignal(editor.subtitles_changed):
        editor.reset([SubtitleEntry(0.0, 1.0, "New.")])
    assert editor.count() == 1
    assert not editor.can_undo()
    assert editor.media_duration == 10.0


def test_undo_during_drag_keeps_order(qapp):
    editor = SubtitleEditor(
        [SubtitleEntry(0.0, 1.0, "a"), SubtitleEntry(2.0, 3.0, "b")],
        media_duration=10.0,
    )
    editor.update_entry(0, SubtitleEntry(5.0, 6.0, "a"), overwrite=True)

    assert editor.undo()
    assert [e.text for e in editor.entries] == ["a", "b"]
    assert editor.entries[0].start_time == 0.0

    assert editor.redo()
    starts = [e.start_time for e in editor.entries]
    assert starts == sorted(starts) == [2.0, 5.0]
    assert not editor.redo()


def test_plain_edit_during_drag_is_one_sorted_step(editor):
    editor.update_entry(0, SubtitleEntry(5.0, 6.0, "First."), overwrite=True)
    editor.update_text(1, "Second!")

    assert not editor.history.is_pending
    assert [e.text for e in editor.entries] == ["Second!", "First."]
    assert editor.history.cursor == 1


def test_split_during_drag_is_sorted(editor):
    editor.update_entry(0, SubtitleEntry(5.0, 7.0, "First."), overwrite=True)
    assert editor.split_entry(0, 6.0)

    starts = [e.start_time for e in editor.entries]
    assert starts == sorted(starts)
    assert editor.history.cursor == 1
