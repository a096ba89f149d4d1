import os
import sys
import unittest
import tempfile
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.grouping import GroupingEngine
from exceptions import SrtFileError
from exporters.srt_exporter import SrtExporter, default_output_name
from models.subtitle import SubtitleEntry


class TestSrtExporter(unittest.TestCase):
    """Test saving and loading SRT files"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.exporter = SrtExporter(GroupingEngine(0.5, ".?!", 3))
        self.entries = [
            SubtitleEntry(1.0, 2.0, "Hello."),
            SubtitleEntry(3.0, 4.5, "Goodbye."),
        ]

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_default_output_name(self):
        self.assertEqual(default_output_name("/x/movie.mp4"), "movie_subtitles.srt")
        self.assertEqual(default_output_name("clip"), "clip_subtitles.srt")

    def test_save_creates_parent_directory(self):
        target = self.root / "out" / "nested" / "movie_subtitles.srt"
        written = self.exporter.save(self.entries, target)

        self.assertEqual(written, target)
        self.assertTrue(target.exists())
        self.assertEqual(
            target.read_text(encoding="utf-8"),
            "1\n00:00:01,000 --> 00:00:02,000\nHello.\n\n"
            "2\n00:00:03,000 --> 00:00:04,500\nGoodbye.",
        )

    def test_save_stretches_last_block(self):
        target = self.root / "stretched.srt"
        self.exporter.save(self.entries, target, duration=12.0)
        self.assertIn("00:00:03,000 --> 00:00:12,000", target.read_text(encoding="utf-8"))

    def test_save_then_load(self):
        target = self.root / "roundtrip.srt"
        self.exporter.save(self.entries, target)
        self.assertEqual(self.exporter.load(target), self.entries)

    def test_load_with_bom_and_crlf(self):
        target = self.root / "windows.srt"
        target.write_bytes(
            "\ufeff1\r\n00:00:00,500 --> 00:00:01,250\r\nBonjour\r\n".encode("utf-8")
        )
        entries = self.exporter.load(target)
        self.assertEqual(entries, [SubtitleEntry(0.5, 1.25, "Bonjour")])

    def test_load_missing_file(self):
        with self.assertRaises(SrtFileError):
            self.exporter.load(self.root / "missing.srt")

    def test_load_undecodable_file(self):
        target = self.root / "binary.srt"
        target.write_bytes(b"\xff\xfe\xfa\x00\x81")
        with self.assertRaises(SrtFileError):
            self.exporter.load(target)

    def test_save_into_file_path_parent_fails(self):
        blocker = self.root / "not_a_dir"
        blocker.write_text("x")
        with self.assertRaises(SrtFileError):
            self.exporter.save(self.entries, blocker / "out.srt")


if __name__ == '__main__':
    unittest.main()
