"""
KZG 공개 파라미터 (Structured Reference String) 및 커밋먼트 키
================================================================

신뢰 설정(trusted setup)으로 도메인 크기 n = 2^k 에 대한 공개 파라미터를 만든다.

  ParamsKZG = {
      g1_powers:   [G1, τ·G1, τ²·G1, ..., τ^(n-1)·G1]      (계수 형태 기저)
      g_lagrange:  [L_0(τ)·G1, L_1(τ)·G1, ..., L_{n-1}(τ)·G1] (Lagrange 기저)
      g2, s_g2:    G2, τ·G2                                  (열기 검증용)
      h:           하이딩 항에 쓰는 독립 생성자 H
  }

**Lagrange 기저**:
  L_i(τ) = (ω^i / n) · (τ^n - 1) / (τ - ω^i)
  설정 중에는 τ를 알고 있으므로 스칼라를 직접 계산한 뒤 G1에 곱한다.
  τ 없이 g1_powers만 받은 경우에는 그룹 원소 IFFT로 복원한다
  (lagrange_basis_from_powers).

**커밋먼트 키 불변식**:
  같은 세션·같은 도메인에서 키를 다시 만들면 안 된다. 다시 만든 키로 계산한
  커밋먼트는 원래 키로 만든 증명 안의 커밋먼트와 일치하지 않는다.
  ParamsKZG.commitment_key()는 항상 같은 객체를 돌려준다.

**보안**:
  τ ("toxic waste")는 설정 직후 버려진다. 랜덤성은 호출자가 넘긴
  제공자(rng)에서만 가져오며, 기본값은 secrets.SystemRandom() 이다.

사용 예시:
    >>> params = ParamsKZG.setup(5, rng=random.Random(42))
    >>> key = params.commitment_key()
    >>> len(key.basis(32))  # 32
"""

import functools
import hashlib
import logging
import secrets

from kzgcommit.errors import LengthMismatch
from kzgcommit.field import (
    FQ, FR, CURVE_B, CURVE_ORDER, FIELD_MODULUS, G1, G2,
    ec_add, ec_mul, ec_neg, fq_sqrt, get_root_of_unity,
)
from kzgcommit.polynomial import ifft

logger = logging.getLogger(__name__)

# H 유도용 도메인 분리 레이블
HIDING_GENERATOR_LABEL = b"kzgcommit/hiding-generator/v1"

# G1 벡터용 (add, sub, scale)
G1_OPS = (
    ec_add,
    lambda a, b: ec_add(a, ec_neg(b)),
    ec_mul,
)


class CommitmentKey:
    """직접 커밋먼트 경로에서 쓰는 Lagrange 기저 (G1로 제한된 SRS).

    속성:
        lagranges: [L_i(τ)]₁ 튜플 (길이 = 도메인 크기)
        h: 하이딩 생성자 H
    """

    def __init__(self, lagranges, h):
        self.lagranges = tuple(lagranges)
        self.h = h

    def __len__(self):
        return len(self.lagranges)

    def __repr__(self):
        return f"CommitmentKey(size={len(self.lagranges)})"

    def basis(self, domain_size=None):
        """도메인 크기에 맞는 Lagrange 기저를 반환한다.

        Raises:
            LengthMismatch: domain_size가 키 크기와 다를 때
        """
        if domain_size is not None and domain_size != len(self.lagranges):
            raise LengthMismatch(len(self.lagranges), domain_size, "도메인 크기")
        return self.lagranges


class ParamsKZG:
    """도메인 크기 2^k 에 대한 KZG 공개 파라미터."""

    def __init__(self, k, g1_powers, g_lagrange, g2, s_g2, h=None):
        n = 1 << k
        if len(g1_powers) != n:
            raise LengthMismatch(n, len(g1_powers), "g1_powers")
        if len(g_lagrange) != n:
            raise LengthMismatch(n, len(g_lagrange), "g_lagrange")
        self.k = k
        self.n = n
        self.g1_powers = tuple(g1_powers)
        self.g_lagrange = tuple(g_lagrange)
        self.g2 = g2
        self.s_g2 = s_g2
        self.h = hiding_generator() if h is None else h
        self._commitment_key = None

    @property
    def max_degree(self):
        """커밋할 수 있는 최대 다항식 차수."""
        return self.n - 1

    def __repr__(self):
        return f"ParamsKZG(k={self.k}, n={self.n})"

    @classmethod
    def setup(cls, k, rng=None):
        """신뢰 설정을 수행한다.

        Args:
            k: 도메인 지수 (n = 2^k)
            rng: randrange(a, b)를 제공하는 랜덤성 제공자.
                 None이면 secrets.SystemRandom(). 서로 다른 설정에서 같은
                 상태의 rng를 재사용하면 같은 τ가 나온다.

        Returns:
            ParamsKZG
        """
        if rng is None:
            rng = secrets.SystemRandom()
        n = 1 << k
        omega = get_root_of_unity(n)

        # τ^n = 1 이면 τ가 도메인 위의 점이라 Lagrange 분모가 0이 된다
        while True:
            tau = FR(rng.randrange(1, CURVE_ORDER))
            tau_n = tau ** n
            if tau_n != FR(1):
                break

        g1_powers = []
        tau_power = FR(1)
        for _ in range(n):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        # L_i(τ) = ω^i · (τ^n - 1) / (n · (τ - ω^i))
        g_lagrange = []
        common = (tau_n - FR(1)) / FR(n)
        omega_i = FR(1)
        for _ in range(n):
            g_lagrange.append(ec_mul(G1, common * omega_i / (tau - omega_i)))
            omega_i = omega_i * omega

        s_g2 = ec_mul(G2, tau)

        logger.debug("KZG 설정 완료: k=%d, n=%d", k, n)
        return cls(k, g1_powers, g_lagrange, G2, s_g2)

    @classmethod
    def from_powers(cls, k, g1_powers, g2, s_g2):
        """τ 없이 계수 형태 기저만으로 파라미터를 구성한다."""
        omega = get_root_of_unity(1 << k)
        g_lagrange = lagrange_basis_from_powers(g1_powers, omega)
        return cls(k, g1_powers, g_lagrange, g2, s_g2)

    def commitment_key(self):
        """이 파라미터의 커밋먼트 키. 파라미터 수명 동안 같은 객체이다."""
        if self._commitment_key is None:
            self._commitment_key = CommitmentKey(self.g_lagrange, self.h)
        return self._commitment_key


def lagrange_basis_from_powers(g1_powers, omega):
    """[τ^j]₁ 로부터 [L_i(τ)]₁ 를 복원한다.

    L_i(X) = (1/n) Σ_j ω^(-ij) X^j 이므로 그룹 원소 벡터에 대한 IFFT와 같다.
    """
    return ifft(list(g1_powers), omega, ops=G1_OPS)


@functools.lru_cache(maxsize=None)
def hiding_generator(label=HIDING_GENERATOR_LABEL):
    """G1과 이산로그 관계를 아무도 모르는 독립 생성자 H.

    try-and-increment: blake2b(label ‖ counter)를 x 좌표 후보로 쓰고
    x³ + 3 이 제곱잉여가 될 때까지 counter를 올린다. y는 짝수 쪽을 택한다.
    """
    counter = 0
    while True:
        digest = hashlib.blake2b(
            label + counter.to_bytes(4, "little"), digest_size=64
        ).digest()
        x = FQ(int.from_bytes(digest, "little") % FIELD_MODULUS)
        y = fq_sqrt(x ** 3 + CURVE_B)
        if y is not None:
            if int(y) % 2 == 1:
                y = -y
            return (x, y)
        counter += 1
