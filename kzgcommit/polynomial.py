"""
다항식(Polynomial) 및 FFT
==========================

KZG 열기 증명(opening proof)과 Lagrange ↔ 계수 변환에 필요한 다항식 연산.

**두 가지 표현**:
  - 계수 표현: p(x) = c₀ + c₁·x + ... (Polynomial 클래스)
  - 평가 표현(Lagrange 형태): [p(1), p(ω), ..., p(ω^(n-1))]
    증인 열은 이 형태로 커밋된다 (kzgcommit.domain 참고).

**FFT / IFFT**:
  재귀 Cooley-Tukey radix-2. 입력 길이는 2의 거듭제곱이어야 한다.

**몫 다항식**:
  열기 증명에 필요한 나눗셈은 항상 일차식 (X - z) 로 나누는 것이므로
  조립제법(synthetic division)만 제공한다. 나머지는 p(z) 이다.

사용 예시:
    >>> p = Polynomial([1, 2, 3])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # FR(17)
    >>> q, y = divide_by_linear(p, FR(2))  # p(x) = (x - 2)·q(x) + 17
"""

from functools import reduce
from itertools import zip_longest

from kzgcommit.field import FR, to_fr


class Polynomial:
    """FR 계수 다항식 p(x) = Σ coeffs[i]·x^i.

    최고차항의 0 계수는 잘라내며, 영 다항식은 coeffs == [FR(0)] 이다.
    """

    def __init__(self, coeffs=()):
        coeffs = [to_fr(c) for c in coeffs]
        while coeffs and coeffs[-1] == FR(0):
            coeffs.pop()
        self.coeffs = coeffs or [FR(0)]

    @property
    def degree(self):
        """차수. 영 다항식은 0."""
        return len(self.coeffs) - 1

    def evaluate(self, point):
        """Horner: p(point)."""
        point = to_fr(point)
        return reduce(lambda acc, c: acc * point + c, reversed(self.coeffs), FR(0))

    def _zip(self, other):
        return zip_longest(self.coeffs, other.coeffs, fillvalue=FR(0))

    def __add__(self, other):
        return Polynomial([a + b for a, b in self._zip(other)])

    def __sub__(self, other):
        return Polynomial([a - b for a, b in self._zip(other)])

    def __mul__(self, other):
        if not isinstance(other, Polynomial):
            scalar = to_fr(other)
            return Polynomial([c * scalar for c in self.coeffs])
        product = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            for j, b in enumerate(other.coeffs):
                product[i + j] += a * b
        return Polynomial(product)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    def __repr__(self):
        return f"Polynomial({[int(c) for c in self.coeffs]})"

    @classmethod
    def from_evaluations(cls, evals, omega):
        """도메인 {ω^i} 위의 평가값을 보간한 다항식 (IFFT)."""
        return cls(ifft(evals, omega))


def divide_by_linear(poly, point):
    """p(X) = (X - z)·q(X) + p(z) 를 조립제법으로 계산한다.

    Args:
        poly: 나눌 다항식 p
        point: z

    Returns:
        tuple: (q Polynomial, p(z))
    """
    point = to_fr(point)
    carry = FR(0)
    quotient = []
    for coeff in reversed(poly.coeffs):
        carry = carry * point + coeff
        quotient.append(carry)
    remainder = quotient.pop()
    return Polynomial(reversed(quotient)), remainder


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT
# ─────────────────────────────────────────────────────────────────────

def fft(values, omega, *, ops=None):
    """Cooley-Tukey radix-2 FFT: 계수 → 평가값.

    ops에 (add, sub, scale) 세 함수를 넘기면 같은 버터플라이로 그룹 원소
    벡터도 변환할 수 있다 (kzgcommit.srs.lagrange_basis_from_powers 참고).
    기본값은 FR 산술이다.

    Args:
        values: 길이가 2의 거듭제곱인 리스트
        omega: len(values)차 원시 단위근

    Returns:
        list: [p(1), p(ω), ..., p(ω^(n-1))]
    """
    n = len(values)
    if n == 0 or n & (n - 1) != 0:
        raise ValueError(f"FFT 입력 길이는 2의 거듭제곱이어야 합니다: {n}")
    if ops is None:
        ops = FR_OPS
        values = [v if isinstance(v, FR) else FR(v) for v in values]
    return _fft(list(values), omega, ops)


def _fft(values, omega, ops):
    n = len(values)
    if n == 1:
        return values

    add, sub, scale = ops
    omega_sq = omega * omega
    even_vals = _fft(values[0::2], omega_sq, ops)
    odd_vals = _fft(values[1::2], omega_sq, ops)

    half = n // 2
    result = [None] * n
    omega_k = FR(1)
    for k in range(half):
        t = scale(odd_vals[k], omega_k)
        result[k] = add(even_vals[k], t)
        result[k + half] = sub(even_vals[k], t)
        omega_k = omega_k * omega
    return result


def ifft(evals, omega, *, ops=None):
    """역 FFT: 평가값 → 계수. ω^{-1}로 FFT 후 1/n을 곱한다."""
    n = len(evals)
    coeffs = fft(evals, FR(1) / omega, ops=ops)
    scale = (ops or FR_OPS)[2]
    n_inv = FR(1) / FR(n)
    return [scale(c, n_inv) for c in coeffs]


# FR 벡터용 (add, sub, scale)
FR_OPS = (
    lambda a, b: a + b,
    lambda a, b: a - b,
    lambda a, s: a * s,
)
