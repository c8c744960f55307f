"""
증명 생성기: 3-라운드 오케스트레이터
======================================

advice 열만 있는 회로에 대해 커밋먼트 + 일괄 KZG 열기 증명을 만든다.
(게이트·순열 제약은 없다.)

  ┌─────────────────────────────────────────────────────┐
  │  Round 1: advice 열 커밋                             │
  │  Prover → Verifier: [a_0]₁, [a_1]₁, ...             │
  │  (회로 순서 → 열 순서로 기록)                         │
  ├─────────────────────────────────────────────────────┤
  │  Round 2: 평가값                                     │
  │  Verifier → Prover: x  (Fiat-Shamir)                │
  │  Prover → Verifier: a_0(x), a_1(x), ...             │
  ├─────────────────────────────────────────────────────┤
  │  Round 3: 일괄 열기 증명                             │
  │  Verifier → Prover: v  (Fiat-Shamir)                │
  │  Prover → Verifier: [W]₁  (Σ v^j a_j 를 x에서 열기)  │
  └─────────────────────────────────────────────────────┘

증명 바이트열의 첫 번째 점은 첫 번째 회로의 첫 번째 advice 열 커밋먼트이다.

사용 예시:
    >>> transcript = TranscriptWriter()
    >>> create_proof(params, pk, [circuit], transcript, rng=random.Random(7))
    >>> proof = transcript.finalize()
"""

import logging
import secrets

from kzgcommit.errors import ProofCreationError
from kzgcommit.prover import round1, round2, round3

logger = logging.getLogger(__name__)


class ProverState:
    """라운드 간 공유되는 증명자 상태.

    속성 (입력):
        params, pk, circuits, transcript, rng

    속성 (라운드 간 생성):
        advice_evals: 열별 Lagrange 평가값 (Round 1)
        advice_polys: 열별 계수 형태 다항식 (Round 2)
        advice_commitments: 열별 커밋먼트 (Round 1)
        x: 평가 챌린지 (Round 2)
        advice_x_evals: 열별 a_j(x) (Round 2)
        v: 일괄 결합 챌린지 (Round 3)
        opening: 일괄 열기 증명 [W]₁ (Round 3)
    """

    def __init__(self, params, pk, circuits, transcript, rng):
        self.params = params
        self.pk = pk
        self.vk = pk.vk
        self.domain = pk.domain
        self.key = params.commitment_key()
        self.circuits = list(circuits)
        self.transcript = transcript
        self.rng = rng

        self.advice_evals = []
        self.advice_polys = []
        self.advice_commitments = []
        self.x = None
        self.advice_x_evals = []
        self.v = None
        self.opening = None


def create_proof(params, pk, circuits, transcript, rng=None):
    """증명을 만들어 transcript에 기록한다.

    Args:
        params: ParamsKZG
        pk: ProvingKey
        circuits: 회로 리스트 (모두 같은 구조)
        transcript: TranscriptWriter
        rng: 블라인딩 행에 쓰는 랜덤성 제공자 (zk 모드에서만 사용)

    Returns:
        ProverState: 라운드 결과 (증명 바이트열은 transcript.finalize())

    Raises:
        ProofCreationError: 파라미터/키 불일치 또는 빈 회로 리스트
        SynthesisError: 증인 배치 실패
    """
    if pk.vk.k != params.k:
        raise ProofCreationError(f"증명키 k={pk.vk.k} 와 파라미터 k={params.k} 가 다릅니다")
    if not circuits:
        raise ProofCreationError("증명할 회로가 없습니다")
    if rng is None:
        rng = secrets.SystemRandom()

    state = ProverState(params, pk, circuits, transcript, rng)

    round1.execute(state)
    round2.execute(state)
    round3.execute(state)

    logger.debug(
        "증명 생성 완료: 회로 %d개, 커밋먼트 %d개",
        len(state.circuits), len(state.advice_commitments),
    )
    return state
