"""Tests for the WAV writer."""
from __future__ import annotations

from unittest.mock import patch

import numpy as np
import pytest
import soundfile as sf

from gemini_tts_mcp.tts import storage
from gemini_tts_mcp.tts.storage import pcm_to_array, write_wav


def test_wav_bytes_header(tmp_path, pcm):
    path = write_wav(tmp_path / "tone.wav", pcm)

    data = path.read_bytes()
    assert data[:4] == b"RIFF"
    assert data[8:12] == b"WAVE"
    assert len(data) >= 44 + len(pcm)


def test_wav_format_is_mono_16bit_24k(tmp_path, pcm):
    path = write_wav(tmp_path / "tone.wav", pcm)

    info = sf.info(str(path))
    assert info.samplerate == 24000
    assert info.channels == 1
    assert info.subtype == "PCM_16"
    assert info.frames == len(pcm) // 2


def test_samples_preserved(tmp_path, pcm):
    path = write_wav(tmp_path / "tone.wav", pcm)

    samples, sr = sf.read(str(path), dtype="int16")
    assert sr == 24000
    np.testing.assert_array_equal(samples, np.frombuffer(pcm, dtype="<i2"))


def test_returns_absolute_path(tmp_path, pcm, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_wav("relative.wav", pcm)
    assert path.is_absolute()
    assert path == (tmp_path / "relative.wav").resolve()


def test_overwrite_existing_file_warns(tmp_path, pcm):
    target = tmp_path / "same.wav"
    write_wav(target, pcm)

    with patch.object(storage, "warn") as mock_warn:
        write_wav(target, pcm[:200])

    mock_warn.assert_called_once()
    assert mock_warn.call_args.args[1] == "overwriting_existing_file"
    assert sf.info(str(target)).frames == 100


def test_failed_write_leaves_no_file(tmp_path, pcm):
    target = tmp_path / "broken.wav"

    with patch.object(storage.sf, "write", side_effect=OSError("disk full")):
        with pytest.raises(OSError, match="disk full"):
            write_wav(target, pcm)

    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_missing_directory_raises(tmp_path, pcm):
    with pytest.raises(Exception):
        write_wav(tmp_path / "no" / "such" / "dir.wav", pcm)


class TestPcmToArray:
    """Tests for pcm_to_array()."""

    def test_little_endian_int16(self):
        samples = pcm_to_array(b"\x01\x00\xff\xff")
        assert samples.dtype == np.int16
        assert samples.tolist() == [1, -1]

    def test_partial_frame_dropped(self):
        assert pcm_to_array(b"\x01\x00\x02").tolist() == [1]

    def test_stereo_shape(self):
        samples = pcm_to_array(b"\x01\x00\x02\x00\x03\x00\x04\x00", channels=2)
        assert samples.shape == (2, 2)

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            pcm_to_array(b"\x00\x00\x00", sample_width=3)
