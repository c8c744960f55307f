"""
평가 도메인 (Evaluation Domain)
================================

증인(witness) 열을 크기 n = 2^k 도메인 위의 Lagrange 형태 다항식으로 매핑한다.

**Lagrange 형태**:
  길이 n의 스칼라 열 [e₀, e₁, ..., e_{n-1}]을 계수가 아니라
  도메인 H = {1, ω, ω², ..., ω^(n-1)} 위의 평가값으로 해석한다.
    p(ω^i) = e_i

  이 표현에서 KZG 커밋먼트는 Lagrange 기저 [L_i(τ)]₁ 에 대한 MSM이다:
    C = Σ e_i · [L_i(τ)]₁ = [p(τ)]₁

**패딩 규칙**:
  길이 m ≤ n 인 증인은 인덱스 m..n-1을 FR(0)으로 채운다.
  m > n 이면 DomainOverflow. 절대 자르지 않는다.

사용 예시 (증인 [1, 0, 1], k = 5):
    >>> domain = EvaluationDomain(5)
    >>> evals = domain.lagrange_from_vec([1, 0, 1])
    >>> len(evals)  # 32
"""

from kzgcommit.errors import DomainOverflow
from kzgcommit.field import (
    FR, MAX_DOMAIN_EXPONENT, to_fr, get_root_of_unity, get_roots_of_unity,
)
from kzgcommit.polynomial import fft, ifft


class EvaluationDomain:
    """크기 n = 2^k 의 곱셈 부분군 H 위의 평가 도메인.

    생성 후 읽기 전용이므로 여러 스레드에서 공유해도 된다.

    속성:
        k: 도메인 지수
        n: 도메인 크기 2^k
        omega: n차 원시 단위근
        roots: [1, ω, ..., ω^(n-1)]
    """

    def __init__(self, k):
        if not isinstance(k, int) or k < 0 or k > MAX_DOMAIN_EXPONENT:
            raise ValueError(
                f"도메인 지수 k는 0 이상 {MAX_DOMAIN_EXPONENT} 이하여야 합니다: {k!r}"
            )
        self.k = k
        self.n = 1 << k
        self.omega = get_root_of_unity(self.n)
        self.roots = tuple(get_roots_of_unity(self.n))

    def __repr__(self):
        return f"EvaluationDomain(k={self.k}, n={self.n})"

    def empty_lagrange(self):
        """모든 평가값이 0인 Lagrange 벡터."""
        return [FR(0)] * self.n

    def lagrange_from_vec(self, witness):
        """증인 벡터를 길이 n의 Lagrange 평가값 벡터로 매핑한다.

        Args:
            witness: FR 원소 (또는 정수) 시퀀스, 길이 m ≤ n

        Returns:
            list[FR]: i < m 이면 witness[i], 그 외 FR(0)

        Raises:
            DomainOverflow: m > n
        """
        witness = list(witness)
        if len(witness) > self.n:
            raise DomainOverflow(len(witness), self.n)
        evals = self.empty_lagrange()
        evals[:len(witness)] = [to_fr(v) for v in witness]
        return evals

    def lagrange_to_coeff(self, evals):
        """Lagrange 평가값 → 계수 (IFFT)."""
        self._check_length(evals)
        return ifft(evals, self.omega)

    def coeff_to_lagrange(self, coeffs):
        """계수 → Lagrange 평가값 (FFT). 계수가 n개보다 적으면 0으로 채운다."""
        if len(coeffs) > self.n:
            raise DomainOverflow(len(coeffs), self.n)
        padded = list(coeffs) + [FR(0)] * (self.n - len(coeffs))
        return fft(padded, self.omega)

    def lagrange_basis_eval(self, i, point):
        """i번째 Lagrange 기저 L_i(point)를 평가한다.

        L_i(x) = (ω^i / n) · (x^n - 1) / (x - ω^i)

        point가 도메인 위의 점이면 크로네커 델타를 반환한다.
        """
        point = to_fr(point)
        omega_i = self.roots[i]
        denominator = point - omega_i
        if denominator == FR(0):
            return FR(1)
        zh = point ** self.n - FR(1)
        if zh == FR(0):
            return FR(0)
        return omega_i * zh / (FR(self.n) * denominator)

    def _check_length(self, evals):
        if len(evals) > self.n:
            raise DomainOverflow(len(evals), self.n)
        if len(evals) < self.n:
            raise ValueError(f"평가값은 정확히 {self.n}개여야 합니다: {len(evals)}")
