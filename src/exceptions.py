"""Custom exceptions for SubtitleTimingEditor."""


class SubtitleEditorError(Exception):
    """Base class for exceptions in this application."""
    pass


class AudioDecodeError(SubtitleEditorError):
    """Raised when a media file cannot be decoded into audio samples."""
    pass


class InvalidTimecodeError(SubtitleEditorError, ValueError):
    """Raised when a time string is not in strict HH:MM:SS,mmm form."""
    pass


class SrtFileError(SubtitleEditorError):
    """Raised when an SRT file cannot be read or written."""
    pass
