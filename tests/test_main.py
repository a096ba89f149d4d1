import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from main import parse_args


def test_defaults():
    args = parse_args([])
    assert args.media is None
    assert args.srt is None
    assert args.log_level == "INFO"


def test_media_and_srt():
    args = parse_args(["movie.mp4", "--srt", "movie_subtitles.srt", "--log-level", "DEBUG"])
    assert args.media == "movie.mp4"
    assert args.srt == "movie_subtitles.srt"
    assert args.log_level == "DEBUG"
