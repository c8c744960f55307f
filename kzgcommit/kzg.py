"""
KZG 커밋먼트 엔진
==================

**직접 커밋먼트 (Lagrange 형태)**:
  C = MSM(key.basis, evaluations) [+ blind · H]
    = Σ e_i · [L_i(τ)]₁ [+ blind · H]

  blind가 0이면 하이딩 항은 생략된다 (수학적으로 항등원을 더하는 것과 같다).
  같은 키·평가값·blind에 대해 결과는 항상 같다. 이 함수 안에는 랜덤성이 없다.
  증명에서 추출한 커밋먼트와 비교할 때 기준값(ground truth)으로 쓴다.

**계수 형태 커밋먼트와 열기 증명**:
  C = Σ c_i · [τ^i]₁ = [p(τ)]₁
  p(z) = y 의 열기 증명: π = [q(τ)]₁, q(x) = (p(x) - y) / (x - z)
  검증: e(C - y·G1, G2) == e(π, τ·G2 - z·G2)

사용 예시:
    >>> key = params.commitment_key()
    >>> C = commit_lagrange(key, domain.lagrange_from_vec([1, 0, 1]))
"""

from kzgcommit.errors import LengthMismatch
from kzgcommit.field import FR, G1, Z1, to_fr, ec_mul, ec_add, ec_neg, ec_pairing
from kzgcommit.polynomial import divide_by_linear


def msm(bases, scalars):
    """다중 스칼라 곱셈: Σ scalars[i] · bases[i].

    0인 스칼라는 건너뛴다. 빈 입력이면 무한원점(None).

    Raises:
        LengthMismatch: 길이가 다를 때
    """
    if len(bases) != len(scalars):
        raise LengthMismatch(len(bases), len(scalars), "스칼라")
    result = Z1
    for base, scalar in zip(bases, scalars):
        scalar = to_fr(scalar)
        if scalar == FR(0):
            continue
        result = ec_add(result, ec_mul(base, scalar))
    return result


def commit_lagrange(key, evaluations, blind=None):
    """Lagrange 평가값을 커밋한다.

    Args:
        key: CommitmentKey
        evaluations: 길이 len(key)의 FR 리스트
        blind: 하이딩 계수 (기본값 FR(0), 하이딩 없음)

    Returns:
        G1 점: 커밋먼트

    Raises:
        LengthMismatch: len(evaluations) != len(key.basis())
    """
    basis = key.basis()
    if len(evaluations) != len(basis):
        raise LengthMismatch(len(basis), len(evaluations))
    commitment = msm(basis, evaluations)

    blind = FR(0) if blind is None else to_fr(blind)
    if blind != FR(0):
        commitment = ec_add(commitment, ec_mul(key.h, blind))
    return commitment


def commit(poly, params):
    """계수 형태 다항식을 커밋한다: C = Σ cᵢ · [τⁱ]₁.

    Raises:
        ValueError: 다항식 차수가 params.max_degree를 초과할 때
    """
    if poly.degree > params.max_degree:
        raise ValueError(
            f"다항식 차수 {poly.degree}가 최대 차수 {params.max_degree}를 초과합니다"
        )
    return msm(params.g1_powers[:len(poly.coeffs)], poly.coeffs)


def create_witness(poly, point, params):
    """p(point)에 대한 열기 증명 π = commit(q)를 만든다.

    Returns:
        tuple: (π, y), y = p(point)
    """
    quotient, y = divide_by_linear(poly, point)
    return commit(quotient, params), y


def verify_opening(commitment, proof, point, evaluation, params):
    """KZG 열기 증명을 검증한다.

    e(C - y·G1, G2) == e(π, [τ - z]₂)

    Returns:
        bool: 검증 성공 여부
    """
    point = to_fr(point)
    evaluation = to_fr(evaluation)

    z_g2 = ec_mul(params.g2, point)
    tau_minus_z_g2 = params.s_g2 if z_g2 is None else ec_add(params.s_g2, ec_neg(z_g2))
    c_minus_y = ec_add(commitment, ec_neg(ec_mul(G1, evaluation)))

    lhs = ec_pairing(params.g2, c_minus_y)
    rhs = ec_pairing(tau_minus_z_g2, proof)
    return lhs == rhs
