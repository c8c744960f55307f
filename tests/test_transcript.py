"""
Transcript codec tests: write mode, read mode, positional extraction.
"""
import pytest

from kzgcommit.encoding import POINT_SIZE, compress_g1
from kzgcommit.errors import PointDecodeError, ScalarDecodeError, TranscriptUnderflow
from kzgcommit.field import FR, CURVE_ORDER, G1, ec_mul
from kzgcommit.transcript import TranscriptReader, TranscriptWriter, extract_commitments


POINTS = [ec_mul(G1, 3), ec_mul(G1, 5), G1, ec_mul(G1, 2 ** 100)]


def _write_points(points):
    writer = TranscriptWriter()
    for point in points:
        writer.write_point(point)
    return writer.finalize()


class TestTranscriptWriter:
    def test_finalize_concatenates_encodings(self):
        proof = _write_points(POINTS[:2])
        assert proof == compress_g1(POINTS[0]) + compress_g1(POINTS[1])

    def test_challenges_are_not_written(self):
        writer = TranscriptWriter()
        writer.write_point(G1)
        writer.squeeze_challenge()
        assert len(writer.finalize()) == POINT_SIZE

    def test_challenge_depends_on_points(self):
        a = TranscriptWriter()
        a.write_point(POINTS[0])
        b = TranscriptWriter()
        b.write_point(POINTS[1])
        assert a.squeeze_challenge() != b.squeeze_challenge()

    def test_common_point_affects_challenge_only(self):
        a = TranscriptWriter()
        a.common_point(G1)
        b = TranscriptWriter()
        assert a.squeeze_challenge() != b.squeeze_challenge()
        assert a.finalize() == b.finalize() == b""

    def test_consecutive_challenges_differ(self):
        writer = TranscriptWriter()
        assert writer.squeeze_challenge() != writer.squeeze_challenge()

    def test_challenge_in_field(self):
        challenge = TranscriptWriter().squeeze_challenge()
        assert 0 <= int(challenge) < CURVE_ORDER

    def test_deterministic(self):
        def run():
            writer = TranscriptWriter()
            writer.write_point(POINTS[0])
            first = writer.squeeze_challenge()
            writer.write_scalar(first * FR(2))
            return first, writer.squeeze_challenge(), writer.finalize()

        assert run() == run()


class TestTranscriptReader:
    def test_roundtrip_preserves_order(self):
        proof = _write_points(POINTS)
        reader = TranscriptReader(proof)
        assert [reader.read_point() for _ in POINTS] == POINTS
        assert reader.remaining == 0

    def test_reading_one_too_many_underflows(self):
        proof = _write_points(POINTS)
        with pytest.raises(TranscriptUnderflow) as excinfo:
            extract_commitments(proof, len(POINTS) + 1)
        assert excinfo.value.needed == POINT_SIZE
        assert excinfo.value.remaining == 0
        assert excinfo.value.offset == len(POINTS) * POINT_SIZE

    def test_truncated_chunk_underflows(self):
        proof = _write_points(POINTS[:1])[:-1]
        with pytest.raises(TranscriptUnderflow):
            TranscriptReader(proof).read_point()

    def test_identity_roundtrip(self):
        proof = _write_points([None, G1])
        assert extract_commitments(proof, 2) == [None, G1]

    def test_replayed_challenges_match(self):
        writer = TranscriptWriter()
        writer.common_scalar(FR(42))
        writer.write_point(POINTS[0])
        writer.write_point(POINTS[1])
        x = writer.squeeze_challenge()
        writer.write_scalar(FR(9))
        v = writer.squeeze_challenge()

        reader = TranscriptReader(writer.finalize())
        reader.common_scalar(FR(42))
        reader.read_point()
        reader.read_point()
        assert reader.squeeze_challenge() == x
        assert reader.read_scalar() == FR(9)
        assert reader.squeeze_challenge() == v

    def test_tampered_point_changes_challenge(self):
        writer = TranscriptWriter()
        writer.write_point(POINTS[0])
        x = writer.squeeze_challenge()

        reader = TranscriptReader(compress_g1(POINTS[1]))
        reader.read_point()
        assert reader.squeeze_challenge() != x

    def test_corrupted_point(self):
        proof = bytearray(_write_points(POINTS[:1]))
        proof[-1] |= 0x40  # identity flag on a non-zero x
        with pytest.raises(PointDecodeError):
            TranscriptReader(bytes(proof)).read_point()

    def test_non_canonical_scalar(self):
        reader = TranscriptReader(CURVE_ORDER.to_bytes(32, "little"))
        with pytest.raises(ScalarDecodeError):
            reader.read_scalar()


class TestExtractCommitments:
    def test_extract_prefix(self):
        proof = _write_points(POINTS)
        assert extract_commitments(proof, 2) == POINTS[:2]

    def test_extract_zero(self):
        assert extract_commitments(b"", 0) == []

    def test_negative_count(self):
        with pytest.raises(ValueError):
            extract_commitments(b"", -1)

    def test_accepts_bytearray(self):
        proof = bytearray(_write_points(POINTS[:1]))
        assert extract_commitments(proof, 1) == POINTS[:1]
