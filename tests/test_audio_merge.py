import io
import wave

import numpy as np
import pytest


def _samples(start: int, count: int) -> np.ndarray:
    return np.arange(start, start + count, dtype="<i2")


def _wav_bytes(pcm: bytes, sample_rate: int = 8000, channels: int = 1, sampwidth: int = 2) -> bytes:
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sampwidth)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buf.getvalue()


def _audio(pcm: bytes, validate: bool = True, **kwargs):
    from pcmwav.core.audio.handle import PCMAudio

    audio = PCMAudio(io.BytesIO(_wav_bytes(pcm, **kwargs)))
    if validate:
        audio.validate()
    return audio


class _ForwardOnlySink:
    """Sink without seek/tell, so any attempt to seek the output fails."""

    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


def _stereo(out: bytes) -> np.ndarray:
    return np.frombuffer(out[44:], dtype="<i2").reshape(-1, 2)


def test_merge_equal_length_interleaves_left_then_right():
    from pcmwav.core.audio.combiner import merge

    left = _samples(1, 50)
    right = _samples(1000, 50)
    out = _ForwardOnlySink()

    frames = merge(_audio(left.tobytes()), _audio(right.tobytes()), out)

    stereo = _stereo(out.getvalue())
    assert frames == 50
    assert stereo.shape == (50, 2)
    np.testing.assert_array_equal(stereo[:, 0], left)
    np.testing.assert_array_equal(stereo[:, 1], right)


def test_merge_output_is_readable_stereo_wav():
    from pcmwav.core.audio.combiner import merge

    out = io.BytesIO()
    merge(_audio(_samples(0, 40).tobytes()), _audio(_samples(500, 40).tobytes()), out)

    out.seek(0)
    with wave.open(out, "rb") as wf:
        assert wf.getnchannels() == 2
        assert wf.getsampwidth() == 2
        assert wf.getframerate() == 8000
        assert wf.getnframes() == 40


def test_merge_pads_shorter_left_stream_with_zeros():
    from pcmwav.core.audio.combiner import merge

    # Two mono 8kHz 16-bit streams of 100 and 150 samples.
    left = _samples(1, 100)
    right = _samples(2000, 150)
    out = io.BytesIO()

    frames = merge(_audio(left.tobytes()), _audio(right.tobytes()), out)

    data = out.getvalue()
    stereo = _stereo(data)
    assert frames == 150
    assert stereo.shape == (150, 2)
    np.testing.assert_array_equal(stereo[:100, 0], left)
    np.testing.assert_array_equal(stereo[100:, 0], np.zeros(50, dtype="<i2"))
    np.testing.assert_array_equal(stereo[:, 1], right)

    from pcmwav.core.audio.header import decode_header

    h = decode_header(io.BytesIO(data))
    assert h.num_channels == 2
    assert h.sample_rate == 8000
    assert h.bits_per_sample == 16
    assert h.subchunk2_size == (100 + 150) * 2
    assert h.chunk_size == 36 + h.subchunk2_size
    assert h.block_align == 4
    assert h.byte_rate == 8000 * 4


def test_merge_pads_shorter_right_stream_with_zeros():
    from pcmwav.core.audio.combiner import merge

    left = _samples(1, 30)
    right = _samples(100, 10)
    out = io.BytesIO()

    merge(_audio(left.tobytes()), _audio(right.tobytes()), out)

    stereo = _stereo(out.getvalue())
    assert stereo.shape == (30, 2)
    np.testing.assert_array_equal(stereo[:10, 1], right)
    assert not stereo[10:, 1].any()


def test_merge_partial_trailing_sample_becomes_silence():
    from pcmwav.core.audio.combiner import merge
    from pcmwav.core.audio.handle import PCMAudio
    from pcmwav.core.audio.header import build_header, encode_header

    def _raw(payload: bytes) -> PCMAudio:
        h = build_header(num_channels=1, sample_rate=8000, bits_per_sample=16, data_size=len(payload))
        audio = PCMAudio(io.BytesIO(encode_header(h) + payload))
        audio.validate()
        return audio

    # Three whole samples plus one dangling byte on the left.
    left = _samples(1, 3).tobytes() + b"\x7f"
    right = _samples(10, 5)
    out = io.BytesIO()

    frames = merge(_raw(left), _raw(right.tobytes()), out)

    stereo = _stereo(out.getvalue())
    assert frames == 5
    np.testing.assert_array_equal(stereo[:, 0], np.array([1, 2, 3, 0, 0], dtype="<i2"))
    np.testing.assert_array_equal(stereo[:, 1], right)


def test_merge_empty_streams_writes_only_header():
    from pcmwav.core.audio.combiner import merge

    out = io.BytesIO()
    frames = merge(_audio(b""), _audio(b""), out)

    assert frames == 0
    assert len(out.getvalue()) == 44


def test_merge_rewinds_inputs_before_reading():
    from pcmwav.core.audio.combiner import merge

    left = _audio(_samples(1, 20).tobytes())
    right = _audio(_samples(50, 20).tobytes())
    left.source.seek(0, io.SEEK_END)
    right.source.seek(10)

    out = io.BytesIO()
    merge(left, right, out)
    first = io.BytesIO()
    merge(left, right, first)

    assert out.getvalue() == first.getvalue()
    np.testing.assert_array_equal(_stereo(out.getvalue())[:, 0], _samples(1, 20))


def test_merge_requires_validated_handles():
    from pcmwav.core.audio.combiner import merge
    from pcmwav.core.audio.errors import NotValidatedError

    out = io.BytesIO()
    with pytest.raises(NotValidatedError):
        merge(_audio(b"\x00\x00", validate=False), _audio(b"\x00\x00"), out)
    assert out.getvalue() == b""


def test_merge_rejects_mismatched_rate_and_depth():
    from pcmwav.core.audio.combiner import merge
    from pcmwav.core.audio.errors import BitDepthMismatchError, SampleRateMismatchError

    with pytest.raises(SampleRateMismatchError):
        merge(_audio(b"\x00\x00"), _audio(b"\x00\x00", sample_rate=16000), io.BytesIO())

    with pytest.raises(BitDepthMismatchError):
        merge(_audio(b"\x00\x00"), _audio(b"\x00\x00", sampwidth=1), io.BytesIO())


def test_merge_accepts_stereo_input_by_default():
    from pcmwav.core.audio.combiner import merge

    out = io.BytesIO()
    frames = merge(_audio(b"\x01\x00\x02\x00", channels=2), _audio(b"\x03\x00"), out)

    # Stereo input is read sample by sample; the output still declares two channels.
    assert frames == 2
    assert out.getvalue()[44:] == b"\x01\x00\x03\x00\x02\x00\x00\x00"


def test_merge_require_mono(monkeypatch):
    from pcmwav.config import settings
    from pcmwav.core.audio.combiner import merge
    from pcmwav.core.audio.errors import NotMonoError

    stereo = _audio(b"\x01\x00\x02\x00", channels=2)
    mono = _audio(b"\x03\x00")

    with pytest.raises(NotMonoError):
        merge(stereo, mono, io.BytesIO(), require_mono=True)

    monkeypatch.setattr(settings, "merge_require_mono", True)
    with pytest.raises(NotMonoError):
        merge(mono, stereo, io.BytesIO())

    assert merge(mono, stereo, io.BytesIO(), require_mono=False) == 2


def test_merge_cancelled_midway():
    from pcmwav.core.audio.combiner import merge
    from pcmwav.core.audio.errors import CombineCancelledError
    from pcmwav.core.cancel_token import CancelToken

    token = CancelToken()

    class _CancellingSink(_ForwardOnlySink):
        def write(self, data):
            if len(self.chunks) == 10:
                token.cancel()
            return super().write(data)

    out = _CancellingSink()
    with pytest.raises(CombineCancelledError):
        merge(_audio(_samples(0, 100).tobytes()), _audio(_samples(0, 100).tobytes()), out, cancel_token=token)

    assert token.is_cancelled
    assert 0 < len(out.getvalue()) < 44 + 100 * 4


def test_merge_propagates_sink_errors():
    from pcmwav.core.audio.combiner import merge

    class _FullDisk:
        def write(self, data):
            raise OSError("no space left on device")

    with pytest.raises(OSError):
        merge(_audio(b"\x00\x00"), _audio(b"\x00\x00"), _FullDisk())
