"""
정규(canonical) 점·스칼라 바이트 인코딩
========================================

증명 바이트열의 형식을 정한다. 추출이 동작하려면 쓰기 쪽과 읽기 쪽의
인코딩 규약(점 크기, 압축 여부, 바이트 순서)이 비트 단위로 같아야 한다.

**G1 압축 인코딩 (32바이트)**:
  - x 좌표를 리틀엔디안 32바이트로 기록
  - 마지막 바이트 bit 7 (0x80): y의 홀짝 (1 = 홀수)
  - 마지막 바이트 bit 6 (0x40): 무한원점 플래그 (나머지 비트는 모두 0)
  p < 2^254 이므로 상위 2비트는 항상 비어 있다.

**스칼라 인코딩 (32바이트)**:
  FR 원소를 리틀엔디안으로 기록. 읽을 때 값이 r 이상이면 거부한다.

**좌표 인코딩 (흡수용, 64바이트)**:
  x ‖ y 각각 리틀엔디안 32바이트. 무한원점은 64바이트 0.
"""

from kzgcommit.errors import PointDecodeError, ScalarDecodeError
from kzgcommit.field import FQ, FR, CURVE_B, CURVE_ORDER, FIELD_MODULUS, fq_sqrt, is_on_curve_g1

POINT_SIZE = 32
SCALAR_SIZE = 32

_SIGN_FLAG = 0x80
_IDENTITY_FLAG = 0x40
_FLAG_MASK = _SIGN_FLAG | _IDENTITY_FLAG


def compress_g1(point):
    """G1 점 → 32바이트 압축 인코딩."""
    if point is None:
        encoded = bytearray(POINT_SIZE)
        encoded[-1] = _IDENTITY_FLAG
        return bytes(encoded)
    x, y = point
    encoded = bytearray(int(x).to_bytes(POINT_SIZE, "little"))
    if int(y) & 1:
        encoded[-1] |= _SIGN_FLAG
    return bytes(encoded)


def decompress_g1(data):
    """32바이트 압축 인코딩 → G1 점.

    Raises:
        PointDecodeError: 길이, 플래그, x 범위, 곡선 위 여부 중 하나라도 틀릴 때
    """
    if len(data) != POINT_SIZE:
        raise PointDecodeError(f"점 인코딩은 {POINT_SIZE}바이트여야 합니다: {len(data)}")

    flags = data[-1] & _FLAG_MASK
    raw = bytearray(data)
    raw[-1] &= 0xFF ^ _FLAG_MASK
    x_int = int.from_bytes(raw, "little")

    if flags & _IDENTITY_FLAG:
        if flags != _IDENTITY_FLAG or x_int != 0:
            raise PointDecodeError("잘못된 무한원점 인코딩")
        return None

    if x_int >= FIELD_MODULUS:
        raise PointDecodeError(f"x 좌표가 필드 위수 이상입니다: {x_int:#x}")

    x = FQ(x_int)
    y = fq_sqrt(x ** 3 + CURVE_B)
    if y is None:
        raise PointDecodeError(f"x={x_int:#x} 에 해당하는 곡선 위의 점이 없습니다")
    if (int(y) & 1) != bool(flags & _SIGN_FLAG):
        y = -y

    point = (x, y)
    if not is_on_curve_g1(point):
        raise PointDecodeError("곡선 위의 점이 아닙니다")
    return point


def point_coordinates(point):
    """트랜스크립트 흡수용 x ‖ y (각 32바이트 리틀엔디안)."""
    if point is None:
        return bytes(2 * POINT_SIZE)
    x, y = point
    return int(x).to_bytes(POINT_SIZE, "little") + int(y).to_bytes(POINT_SIZE, "little")


def scalar_to_bytes(scalar):
    """FR → 32바이트 리틀엔디안."""
    return (int(scalar) % CURVE_ORDER).to_bytes(SCALAR_SIZE, "little")


def scalar_from_bytes(data):
    """32바이트 리틀엔디안 → FR.

    Raises:
        ScalarDecodeError: 길이가 틀리거나 값이 r 이상일 때
    """
    if len(data) != SCALAR_SIZE:
        raise ScalarDecodeError(f"스칼라 인코딩은 {SCALAR_SIZE}바이트여야 합니다: {len(data)}")
    value = int.from_bytes(data, "little")
    if value >= CURVE_ORDER:
        raise ScalarDecodeError(f"정규 스칼라가 아닙니다: {value:#x}")
    return FR(value)
