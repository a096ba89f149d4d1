import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.splitter import split_entry, split_text_proportionally
from models.subtitle import SubtitleEntry


def test_split_two_words_in_the_middle():
    entry = SubtitleEntry(0.0, 2.0, "hello world", confidence=0.8)
    first, second = split_entry(entry, 1.0)

    assert (first.start_time, first.end_time, first.text) == (0.0, 1.0, "hello")
    assert (second.start_time, second.end_time, second.text) == (1.0, 2.0, "world")
    assert first.confidence == 0.8
    assert second.confidence == 0.8


def test_split_proportional_to_time():
    entry = SubtitleEntry(0.0, 10.0, "one two three four")
    first, second = split_text_proportionally(entry, 7.5)
    assert first == "one two three"
    assert second == "four"


def test_split_at_boundary_is_rejected():
    entry = SubtitleEntry(1.0, 3.0, "hello world")
    assert split_entry(entry, 1.0) is None
    assert split_entry(entry, 3.0) is None
    assert split_entry(entry, 0.5) is None
    assert split_entry(entry, 3.5) is None


def test_single_word_keeps_full_text_on_both_halves():
    entry = SubtitleEntry(0.0, 1.0, "hello")
    first, second = split_entry(entry, 0.5)
    assert first.text == second.text == "hello"
    assert first.end_time == second.start_time == 0.5


def test_split_near_end_falls_back_to_full_text():
    entry = SubtitleEntry(0.0, 2.0, "hello world")
    # Character under the split is past the last word boundary
    first, second = split_entry(entry, 1.99)
    assert first.text == second.text == "hello world"


def test_empty_text():
    entry = SubtitleEntry(0.0, 2.0, "")
    first, second = split_entry(entry, 1.0)
    assert first.text == second.text == ""
    assert first.end_time == 1.0


def test_original_entry_untouched():
    entry = SubtitleEntry(0.0, 2.0, "hello world")
    split_entry(entry, 1.0)
    assert entry == SubtitleEntry(0.0, 2.0, "hello world")
