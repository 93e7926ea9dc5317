"""Upload videos, cut seconds from their start and end with ffmpeg, download the results."""

__version__ = "0.1.0"
