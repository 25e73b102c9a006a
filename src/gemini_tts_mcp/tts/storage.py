"""
WAV File Writer.

The TTS model returns headerless PCM: signed 16-bit little-endian, mono,
24 kHz. write_wav() wraps it in a WAV container with soundfile.

Writes are atomic: audio goes to a hidden temp file in the target
directory which is then renamed over the final path. A crash mid-write
leaves at most a stray ``.*.tmp`` file, never a truncated WAV under the
returned name.

Example:
    path = write_wav("/tmp/out/Breaking_News.wav", pcm_bytes)
"""
from __future__ import annotations

import uuid
from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf

from gemini_tts_mcp.core.config import Defaults
from gemini_tts_mcp.core.logging import get_logger, verbose, warn
from gemini_tts_mcp.utils.timeit import timeit

_LOG = get_logger("gemini-tts-mcp.storage")

_SUBTYPES = {2: "PCM_16", 4: "PCM_32"}
# (wire format, native dtype soundfile accepts)
_DTYPES = {2: ("<i2", np.int16), 4: ("<i4", np.int32)}


def pcm_to_array(pcm: bytes, channels: int = Defaults.CHANNELS, sample_width: int = Defaults.SAMPLE_WIDTH) -> np.ndarray:
    """
    View raw little-endian PCM as a numpy array.

    A trailing partial frame (odd byte count for 16-bit audio) is dropped.

    Returns:
        1-D array for mono, (frames, channels) for multi-channel audio.
    """
    if sample_width not in _DTYPES:
        raise ValueError(f"unsupported sample width: {sample_width} bytes")

    frame_bytes = sample_width * channels
    usable = len(pcm) - (len(pcm) % frame_bytes)
    wire_dtype, native_dtype = _DTYPES[sample_width]
    samples = np.frombuffer(pcm[:usable], dtype=wire_dtype).astype(native_dtype, copy=False)
    if channels > 1:
        samples = samples.reshape(-1, channels)
    return samples


def write_wav(
    path: Union[str, Path],
    pcm: bytes,
    sample_rate: int = Defaults.SAMPLE_RATE,
    channels: int = Defaults.CHANNELS,
    sample_width: int = Defaults.SAMPLE_WIDTH,
) -> Path:
    """
    Write raw PCM bytes as a WAV file.

    Args:
        path: Destination file; its directory must exist.
        pcm: Raw PCM audio.
        sample_rate: Frames per second (24000 for Gemini TTS).
        channels: Interleaved channel count.
        sample_width: Bytes per sample.

    Returns:
        Absolute path of the written file.

    Raises:
        OSError / soundfile.LibsndfileError: If the file cannot be written.
            No partial file is left under ``path``.
    """
    target = Path(path).resolve()
    samples = pcm_to_array(pcm, channels, sample_width)

    if target.exists():
        # derived names are not unique; same-name outputs replace each other
        warn(_LOG, "overwriting_existing_file", path=str(target))

    tmp = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}.tmp")
    try:
        with timeit("wav_write") as t:
            sf.write(str(tmp), samples, sample_rate, format="WAV", subtype=_SUBTYPES[sample_width])
            tmp.replace(target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    verbose(_LOG, "wav_written", path=str(target), bytes=len(pcm), sr=sample_rate, seconds=t.seconds)
    return target
