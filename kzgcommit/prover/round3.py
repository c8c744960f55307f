"""
Round 3: 일괄 KZG 열기 증명
============================

v 챌린지로 열 다항식을 결합하여 열기 증명 하나로 모든 평가값을 증명한다.

  p(x) = Σ v^j · a_j(x)
  W = [(p(X) - p(x)) / (X - x)]₁

검증자는 같은 v로 커밋먼트와 평가값을 결합하여 페어링 한 번으로 확인한다.
"""

from kzgcommit.field import FR
from kzgcommit.kzg import create_witness
from kzgcommit.polynomial import Polynomial


def execute(state):
    state.v = state.transcript.squeeze_challenge()

    combined = Polynomial([FR(0)])
    v_power = FR(1)
    for poly in state.advice_polys:
        combined = combined + poly * v_power
        v_power = v_power * state.v

    state.opening, _ = create_witness(combined, state.x, state.params)
    state.transcript.write_point(state.opening)
