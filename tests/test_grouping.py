import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.grouping import GroupingEngine, group_entries, ends_sentence
from models.subtitle import SubtitleEntry
from runtime_config import RuntimeConfig, get_config, set_config


@pytest.fixture
def engine():
    return GroupingEngine(gap_threshold=0.5, terminal_punctuation=".?!", max_group_size=3)


@pytest.fixture
def restore_config():
    original = get_config()
    yield
    set_config(original)


def make(start, end, text):
    return SubtitleEntry(start_time=start, end_time=end, text=text)


def test_triplet(engine):
    entries = [make(0.0, 1.0, "a"), make(1.2, 2.0, "b"), make(2.1, 3.0, "c")]
    groups = engine.group(entries)
    assert len(groups) == 1
    assert groups[0].lines == ["a", "b", "c"]
    assert groups[0].start_time == 0.0
    assert groups[0].end_time == 3.0


def test_sentence_end_breaks_group(engine):
    entries = [make(0.0, 1.0, "a"), make(1.2, 2.0, "b."), make(2.1, 3.0, "c")]
    groups = engine.group(entries)
    assert [g.lines for g in groups] == [["a", "b."], ["c"]]
    assert [g.first_index for g in groups] == [0, 2]


def test_gap_at_threshold_breaks_group(engine):
    entries = [make(0.0, 1.0, "a"), make(1.5, 2.0, "b")]
    assert [g.size for g in engine.group(entries)] == [1, 1]


def test_trailing_whitespace_ignored_for_punctuation(engine):
    entries = [make(0.0, 1.0, "Done?  "), make(1.1, 2.0, "next")]
    assert [g.size for g in engine.group(entries)] == [1, 1]


def test_four_close_entries(engine):
    entries = [make(i, i + 0.9, f"w{i}") for i in range(4)]
    groups = engine.group(entries)
    assert [g.size for g in groups] == [3, 1]
    assert groups[1].first_index == 3


def test_every_entry_in_exactly_one_group(engine):
    entries = [
        make(0.0, 1.0, "one"), make(1.1, 2.0, "two."), make(2.1, 3.0, "three"),
        make(5.0, 6.0, "four"), make(6.2, 7.0, "five"), make(7.1, 8.0, "six"),
        make(8.1, 9.0, "seven"),
    ]
    groups = engine.group(entries)
    covered = [g.first_index + k for g in groups for k in range(g.size)]
    assert covered == list(range(len(entries)))


def test_active_group_inclusive(engine):
    entries = [make(0.0, 1.0, "a"), make(1.2, 2.0, "b"), make(5.0, 6.0, "c")]
    assert engine.active_lines(entries, 0.0) == ["a", "b"]
    assert engine.active_lines(entries, 2.0) == ["a", "b"]
    # Inside the gap between two grouped entries the group is still shown
    assert engine.active_lines(entries, 1.1) == ["a", "b"]
    assert engine.active_lines(entries, 3.0) == []
    assert engine.active_group(entries, 6.0).lines == ["c"]


def test_export_groups_stretch_last(engine):
    entries = [make(0.0, 1.0, "a."), make(2.0, 3.0, "b.")]
    groups = engine.export_groups(entries, duration=12.0)
    assert groups[0].end_time == 1.0
    assert groups[-1].end_time == 12.0
    # Display groups are not affected
    assert engine.group(entries)[-1].end_time == 3.0


def test_engine_reads_runtime_config(restore_config):
    set_config(RuntimeConfig(group_max_size=2))
    entries = [make(0.0, 1.0, "a"), make(1.2, 2.0, "b"), make(2.1, 3.0, "c")]
    assert [g.size for g in GroupingEngine().group(entries)] == [2, 1]


def test_group_entries_wrapper():
    entries = [make(0.0, 1.0, "a"), make(1.2, 2.0, "b")]
    assert [g.size for g in group_entries(entries, 0.1, ".", 3)] == [1, 1]
    assert [g.size for g in group_entries(entries, 0.5, ".", 3)] == [2]


def test_ends_sentence():
    assert ends_sentence("Hello!", ".?!")
    assert not ends_sentence("Hello,", ".?!")
    assert not ends_sentence("   ", ".?!")
