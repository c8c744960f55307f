"""
Blake2b Fiat-Shamir 트랜스크립트 (쓰기/읽기)
=============================================

증명자는 커밋먼트를 쓰면서 해시 상태에 흡수하고, 해시 상태를 짜내어(squeeze)
챌린지를 만든다. 검증자(또는 추출기)는 같은 바이트열을 같은 순서로 읽으면서
독립적인 해시 상태를 유지하므로 같은 챌린지를 다시 얻는다.

**해시 상태**:
  BLAKE2b-512, personalization = b"Halo2-Transcript"

**흡수 규칙 (도메인 분리 접두 바이트)**:
  - 챌린지: 0x00
  - 점:     0x01 ‖ x ‖ y          (kzgcommit.encoding.point_coordinates)
  - 스칼라: 0x02 ‖ 32바이트 LE

**챌린지**:
  0x00을 흡수한 뒤, 상태의 복사본에서 64바이트 다이제스트를 얻어
  리틀엔디안 정수 mod r 로 줄인다. 얻은 챌린지는 다시 스칼라로 흡수된다
  (체이닝: 다음 챌린지가 이전 챌린지에 의존).

**증명 바이트열**:
  write_point / write_scalar 로 기록한 정규 인코딩을 쓴 순서대로 이어 붙인 것.
  챌린지는 바이트열에 기록되지 않는다 (읽는 쪽에서 다시 유도한다).

**순서 보장**:
  읽는 순서 = 쓴 순서. 따라서 "첫 번째 advice 열의 커밋먼트는 트랜스크립트의
  첫 번째 점" 과 같이 위치로 특정 열의 커밋먼트를 찾을 수 있다.

사용 예시:
    >>> writer = TranscriptWriter()
    >>> writer.write_point(commitment)
    >>> x = writer.squeeze_challenge()
    >>> proof = writer.finalize()
    >>> extract_commitments(proof, 1)  # [commitment]
"""

import hashlib

from kzgcommit.encoding import (
    POINT_SIZE, SCALAR_SIZE,
    compress_g1, decompress_g1, point_coordinates,
    scalar_to_bytes, scalar_from_bytes,
)
from kzgcommit.errors import TranscriptUnderflow
from kzgcommit.field import FR, CURVE_ORDER

TRANSCRIPT_PERSONALIZATION = b"Halo2-Transcript"

PREFIX_CHALLENGE = b"\x00"
PREFIX_POINT = b"\x01"
PREFIX_SCALAR = b"\x02"


class _Blake2bTranscript:
    """쓰기/읽기 트랜스크립트가 공유하는 해시 상태."""

    def __init__(self, personalization=TRANSCRIPT_PERSONALIZATION):
        self._state = hashlib.blake2b(digest_size=64, person=personalization)

    def common_point(self, point):
        """점을 기록하지 않고 해시 상태에만 흡수한다."""
        self._state.update(PREFIX_POINT)
        self._state.update(point_coordinates(point))

    def common_scalar(self, scalar):
        """스칼라를 기록하지 않고 해시 상태에만 흡수한다."""
        self._state.update(PREFIX_SCALAR)
        self._state.update(scalar_to_bytes(scalar))

    def squeeze_challenge(self):
        """현재 상태에서 챌린지 FR을 유도하고 다시 흡수한다."""
        self._state.update(PREFIX_CHALLENGE)
        digest = self._state.copy().digest()
        challenge = FR(int.from_bytes(digest, "little") % CURVE_ORDER)
        self.common_scalar(challenge)
        return challenge


class TranscriptWriter(_Blake2bTranscript):
    """쓰기 모드 트랜스크립트. finalize()가 증명 바이트열을 돌려준다."""

    def __init__(self, personalization=TRANSCRIPT_PERSONALIZATION):
        super().__init__(personalization)
        self._buffer = bytearray()

    def write_point(self, point):
        self.common_point(point)
        self._buffer.extend(compress_g1(point))

    def write_scalar(self, scalar):
        self.common_scalar(scalar)
        self._buffer.extend(scalar_to_bytes(scalar))

    def finalize(self):
        return bytes(self._buffer)


class TranscriptReader(_Blake2bTranscript):
    """읽기 모드 트랜스크립트.

    증명 바이트열에서 고정 크기 청크를 쓴 순서대로 읽고, 읽은 값을
    독립적인 해시 상태에 흡수한다. 증명은 신뢰할 수 없는 입력으로 다룬다.

    Raises (read_*):
        TranscriptUnderflow: 남은 바이트가 청크보다 적을 때
        PointDecodeError / ScalarDecodeError: 청크가 정규 인코딩이 아닐 때
    """

    def __init__(self, proof, personalization=TRANSCRIPT_PERSONALIZATION):
        super().__init__(personalization)
        self._proof = bytes(proof)
        self._offset = 0

    @property
    def remaining(self):
        """아직 읽지 않은 바이트 수."""
        return len(self._proof) - self._offset

    def _read_chunk(self, size):
        if self.remaining < size:
            raise TranscriptUnderflow(size, self.remaining, self._offset)
        chunk = self._proof[self._offset:self._offset + size]
        self._offset += size
        return chunk

    def read_point(self):
        point = decompress_g1(self._read_chunk(POINT_SIZE))
        self.common_point(point)
        return point

    def read_scalar(self):
        scalar = scalar_from_bytes(self._read_chunk(SCALAR_SIZE))
        self.common_scalar(scalar)
        return scalar


def extract_commitments(proof, count):
    """증명 앞부분의 커밋먼트 count개를 쓴 순서대로 추출한다.

    나머지 증명(평가값, 열기 증명)은 검증하지 않는다.

    Args:
        proof: 증명 바이트열
        count: 읽을 점의 개수 N

    Returns:
        list: G1 점 N개

    Raises:
        TranscriptUnderflow: 점 N개를 읽을 바이트가 없을 때
        PointDecodeError: 청크가 유효한 점이 아닐 때
    """
    if count < 0:
        raise ValueError(f"읽을 점의 개수는 0 이상이어야 합니다: {count}")
    transcript = TranscriptReader(proof)
    return [transcript.read_point() for _ in range(count)]
