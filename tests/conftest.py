"""Shared test fixtures for ffmpeg-pipe."""

import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Trimmed output of `ffmpeg -hide_banner -formats` (ffmpeg 6.1)
FORMATS_LISTING = """\
File formats:
 D. = Demuxing supported
 .E = Muxing supported
 --
 D  3dostr          3DO STR
  E 3g2             3GP2 (3GPP2 file format)
 DE aac             raw ADTS AAC (Advanced Audio Coding)
 D  aiff            Audio IFF
 DE matroska,webm   Matroska / WebM
 D  mov,mp4,m4a,3gp,3g2,mj2 QuickTime / MOV
 DE mp3             MP3 (MPEG audio layer 3)
  E null            raw null video
 DE ogg             Ogg
 DE wav             WAV / WAVE (Waveform Audio)
"""

FORMATS_EXPECTED = [
    "3dostr",
    "aac",
    "aiff",
    "matroska",
    "webm",
    "mov",
    "mp4",
    "m4a",
    "3gp",
    "3g2",
    "mj2",
    "mp3",
    "ogg",
    "wav",
]

# Trimmed output of `ffmpeg -hide_banner -codecs` (ffmpeg 6.1)
CODECS_LISTING = """\
Codecs:
 D..... = Decoding supported
 .E.... = Encoding supported
 ..V... = Video codec
 ..A... = Audio codec
 ..S... = Subtitle codec
 ..D... = Data codec
 ..T... = Attachment codec
 ...I.. = Intra frame-only codec
 ....L. = Lossy compression
 .....S = Lossless compression
 -------
 D.VI.S 012v                 Uncompressed 4:2:2 10-bit
 DEV.LS h264                 H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10
 DEA.L. aac                  AAC (Advanced Audio Coding) (decoders: aac aac_fixed )
 DEA..S flac                 FLAC (Free Lossless Audio Codec)
 D.A.L. mp1                  MP1 (MPEG audio layer 1) (decoders: mp1 mp1float )
 DEA.L. mp3                  MP3 (MPEG audio layer 3) (encoders: libmp3lame )
 ..A.L. opus_only_enc        Hypothetical encoder-only codec
 DEA.L. vorbis               Vorbis (decoders: vorbis libvorbis )
 DEA..S pcm_s16le            PCM signed 16-bit little-endian
 DES... ass                  ASS (Advanced SSA) subtitle
"""

CODECS_EXPECTED = ["aac", "flac", "mp1", "mp3", "vorbis", "pcm_s16le"]


@pytest.fixture
def formats_listing() -> str:
    """Return sample `ffmpeg -formats` output."""
    return FORMATS_LISTING


@pytest.fixture
def codecs_listing() -> str:
    """Return sample `ffmpeg -codecs` output."""
    return CODECS_LISTING


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory writing executable shell scripts that stand in for ffmpeg.

    The script body receives ffmpeg's arguments as "$@".
    """
    if sys.platform == "win32":
        pytest.skip("shell script stand-ins require a POSIX shell")

    counter = 0

    def make(body: str) -> Path:
        nonlocal counter
        counter += 1
        script = tmp_path / f"ffmpeg-{counter}"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP)
        return script

    return make


@pytest.fixture
def formats_expected() -> list[str]:
    """Return the formats parsed from the sample listing, in order."""
    return list(FORMATS_EXPECTED)


@pytest.fixture
def codecs_expected() -> list[str]:
    """Return the audio codecs parsed from the sample listing, in order."""
    return list(CODECS_EXPECTED)
