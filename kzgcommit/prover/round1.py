"""
Round 1: advice 열 커밋먼트
============================

  1. 트랜스크립트에 검증키 표현을 흡수 (기록하지 않음)
  2. 회로마다 synthesize() → 열별 증인 값
  3. 열을 Lagrange 평가값으로 매핑 (도메인 패딩 규칙: 나머지 행은 0)
  4. zk 모드면 마지막 블라인딩 행을 랜덤 값으로 채움
  5. commit_lagrange(key, evals, blind=0) → write_point

블라인딩 행을 채우지 않으면 (zk=False) 여기서 기록한 커밋먼트는
직접 경로의 commit_lagrange(key, domain.lagrange_from_vec(witness))와 같다.
"""

from kzgcommit.errors import SynthesisError
from kzgcommit.field import FR, CURVE_ORDER
from kzgcommit.kzg import commit_lagrange


def execute(state):
    vk = state.vk
    domain = state.domain
    state.transcript.common_scalar(vk.transcript_repr)

    for index, circuit in enumerate(state.circuits):
        columns = circuit.synthesize()
        if len(columns) != vk.num_advice_columns:
            raise SynthesisError(
                f"회로 {index}의 advice 열 {len(columns)}개 ≠ 검증키 {vk.num_advice_columns}개"
            )

        for column in columns:
            if len(column) > vk.usable_rows:
                raise SynthesisError(
                    f"회로 {index}: {len(column)}행 > 사용 가능한 {vk.usable_rows}행"
                )
            evals = domain.lagrange_from_vec(column)
            for row in range(vk.usable_rows, domain.n):
                evals[row] = FR(state.rng.randrange(CURVE_ORDER))

            commitment = commit_lagrange(state.key, evals)
            state.transcript.write_point(commitment)

            state.advice_evals.append(evals)
            state.advice_commitments.append(commitment)
