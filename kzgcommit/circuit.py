"""
Advice 열 회로 (증명 파이프라인 입력)
======================================

증명 파이프라인이 받는 회로 설명. 이 계층은 게이트 제약을 정의하지 않고,
어떤 advice 열이 몇 개 있고 각 행에 어떤 증인 값이 배치되는지만 다룬다.

**열 배치 규칙**:
  advice 열 j 의 i번째 행 = columns[j][i]
  배치되지 않은 행은 FR(0) (평가 도메인의 패딩 규칙과 같다).

**증인 없는 회로**:
  키 생성은 회로 구조만 필요하므로 without_witnesses()가 값이 None인
  회로를 돌려준다. 값이 None인 회로로 증명을 만들면 SynthesisError.

예시 (비트 벡터 [1, 0, 1]):
  | 행 | advice_0 |
  |----|----------|
  | 0  | 1        |
  | 1  | 0        |
  | 2  | 1        |
  | 3.. | 0 (패딩) |
"""

import copy

from kzgcommit.errors import SynthesisError
from kzgcommit.field import to_fr


class ConstraintSystem:
    """configure()의 결과: 열 구성 정보.

    속성:
        num_advice_columns: advice 열 개수
        equality: 열별 equality 활성화 여부 리스트
    """

    def __init__(self):
        self.num_advice_columns = 0
        self.equality = []

    def advice_column(self):
        """advice 열을 하나 할당하고 인덱스를 돌려준다."""
        self.num_advice_columns += 1
        self.equality.append(False)
        return self.num_advice_columns - 1

    def enable_equality(self, column):
        self.equality[column] = True


class AdviceCircuit:
    """여러 advice 열로 이루어진 회로.

    Args:
        columns: 열별 값 시퀀스. 원소는 FR, 정수, 또는 None(미지값).
    """

    def __init__(self, columns):
        self.columns = [list(column) for column in columns]

    @property
    def num_rows(self):
        """배치되는 행 수 (가장 긴 열 기준)."""
        return max((len(column) for column in self.columns), default=0)

    def without_witnesses(self):
        circuit = copy.copy(self)
        circuit.columns = [[None] * len(column) for column in self.columns]
        return circuit

    def configure(self):
        meta = ConstraintSystem()
        for _ in self.columns:
            meta.enable_equality(meta.advice_column())
        return meta

    def synthesize(self):
        """열별 증인 값을 FR 리스트로 돌려준다.

        Raises:
            SynthesisError: 미지값(None)이나 스칼라가 아닌 값이 있을 때
        """
        assigned = []
        for j, column in enumerate(self.columns):
            values = []
            for i, value in enumerate(column):
                if value is None:
                    raise SynthesisError(f"advice 열 {j}, 행 {i}의 값이 할당되지 않았습니다")
                try:
                    values.append(to_fr(value))
                except TypeError as exc:
                    raise SynthesisError(f"advice 열 {j}, 행 {i}: {exc}") from exc
            assigned.append(values)
        return assigned


class BitvectorCommitmentCircuit(AdviceCircuit):
    """advice 열 하나에 비트 벡터(또는 임의의 스칼라 열)를 배치하는 회로.

    예시:
        >>> circuit = BitvectorCommitmentCircuit([1, 0, 1])
        >>> circuit.synthesize()  # [[FR(1), FR(0), FR(1)]]
    """

    def __init__(self, bitvector):
        super().__init__([bitvector])

    @property
    def bitvector(self):
        return self.columns[0]
