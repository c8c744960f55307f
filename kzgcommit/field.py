"""
KZG 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
=====================================================

커밋먼트 계층 전체에서 사용하는 대수적 프리미티브를 py_ecc에서 가져와 노출한다.
곡선 연산 자체는 다시 구현하지 않는다.

**스칼라 필드 FR**:
  bn128(BN254) 타원곡선의 스칼라 필드. 증인(witness) 값, 평가값, 챌린지가
  모두 이 필드의 원소이다.
  - 위수(order) r ≈ 2^254
  - r - 1 = 2^28 × m (m은 홀수) → 최대 2^28차 단위근 지원

**베이스 필드 FQ**:
  G1 점의 좌표 (x, y)가 속한 필드. 점 인코딩/디코딩에서만 직접 다룬다.

**G1 점 표현**:
  py_ecc의 아핀(affine) 표현 (FQ, FQ) 튜플. 무한원점은 None.

사용 예시:
    >>> from kzgcommit.field import FR, G1, ec_mul
    >>> ec_mul(G1, FR(5)) == bn128.multiply(G1, 5)
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ


class FR(FQ):
    """BN254 스칼라 필드 원소 (mod r). 산술 연산은 py_ecc FQ가 제공한다."""
    field_modulus = bn128.curve_order


# 스칼라 필드 위수 r
CURVE_ORDER = bn128.curve_order

# 베이스 필드 위수 p
FIELD_MODULUS = bn128.field_modulus

# G1 곡선 방정식 y² = x³ + b 의 b
CURVE_B = bn128.b


# ─────────────────────────────────────────────────────────────────────
# 곡선 연산 (py_ecc 래퍼)
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1

G2 = bn128.G2

# G1의 항등원 (무한원점)
Z1 = None


def to_fr(value):
    """정수 또는 FR 값을 FR 원소로 정규화한다."""
    if isinstance(value, FR):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"스칼라 필드 원소가 아닙니다: {value!r}")
    return FR(value % CURVE_ORDER)


def ec_mul(point, scalar):
    """scalar · point. 스칼라가 r의 배수이거나 point가 None이면 None."""
    if isinstance(scalar, FR):
        scalar = int(scalar)
    scalar %= CURVE_ORDER
    if point is None or scalar == 0:
        return None
    return bn128.multiply(point, scalar)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_pairing(g2_point, g1_point):
    """e(g1_point, g2_point) ∈ GT. 인자 순서는 py_ecc를 따라 G2가 먼저이다."""
    return bn128.pairing(g2_point, g1_point)


def is_on_curve_g1(point):
    """G1 점이 곡선 위에 있는지 확인한다. 무한원점은 항상 True.

    bn128의 G1은 여인수(cofactor)가 1이므로 곡선 위의 모든 점이 부분군 원소이다.
    """
    if point is None:
        return True
    return bn128.is_on_curve(point, CURVE_B)


# ─────────────────────────────────────────────────────────────────────
# 2-adic 단위근
# ─────────────────────────────────────────────────────────────────────

# r - 1 = 2^28 × m 이므로 지원 가능한 최대 도메인 지수
MAX_DOMAIN_EXPONENT = 28


def get_root_of_unity(n):
    """크기 n 부분군의 생성원 ω = 5^((r-1)/n).

    Raises:
        ValueError: n이 2^28 이하의 2의 거듭제곱이 아닐 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << MAX_DOMAIN_EXPONENT):
        raise ValueError(f"n은 2^{MAX_DOMAIN_EXPONENT} 이하여야 합니다: {n}")
    if n == 1:
        return FR(1)
    return FR(5) ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """도메인 [1, ω, ω², ..., ω^(n-1)]을 반환한다."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots


def fq_sqrt(value):
    """베이스 필드 제곱근. 제곱잉여가 아니면 None.

    p ≡ 3 (mod 4) 이므로 √a = a^((p+1)/4).
    """
    if not isinstance(value, FQ):
        value = FQ(value)
    candidate = value ** ((FIELD_MODULUS + 1) // 4)
    if candidate * candidate != value:
        return None
    return candidate
