"""
Round 2: 평가 챌린지 x 와 평가값 a_j(x)
========================================

Lagrange 평가값을 IFFT로 계수 형태로 바꾼 뒤 x에서 평가하여 기록한다.
"""

from kzgcommit.polynomial import Polynomial


def execute(state):
    state.x = state.transcript.squeeze_challenge()

    for evals in state.advice_evals:
        poly = Polynomial(state.domain.lagrange_to_coeff(evals))
        y = poly.evaluate(state.x)
        state.transcript.write_scalar(y)
        state.advice_polys.append(poly)
        state.advice_x_evals.append(y)
