"""
증명 검증기
============

트랜스크립트를 다시 읽어 챌린지 x, v를 복원하고 일괄 열기 증명을 페어링으로 확인한다.

  C = Σ v^j · [a_j]₁
  y = Σ v^j · a_j(x)
  e(C - y·G1, G2) == e(W, [τ - x]₂)

바이트열이 잘렸거나 점/스칼라가 잘못 인코딩되었으면 TranscriptError가 전파된다.
검증식이 성립하지 않거나 남는 바이트가 있으면 False.
"""

import logging

from kzgcommit.field import FR, ec_add, ec_mul
from kzgcommit.kzg import verify_opening
from kzgcommit.transcript import TranscriptReader

logger = logging.getLogger(__name__)


def verify_proof(params, vk, proof, num_circuits=1):
    """증명을 검증한다.

    Args:
        params: ParamsKZG
        vk: VerifyingKey
        proof: 증명 바이트열
        num_circuits: 증명에 포함된 회로 수

    Returns:
        bool: 검증 성공 여부
    """
    transcript = TranscriptReader(proof)
    transcript.common_scalar(vk.transcript_repr)

    count = num_circuits * vk.num_advice_columns
    commitments = [transcript.read_point() for _ in range(count)]

    x = transcript.squeeze_challenge()
    evaluations = [transcript.read_scalar() for _ in range(count)]

    v = transcript.squeeze_challenge()
    opening = transcript.read_point()

    if transcript.remaining != 0:
        logger.info("증명 뒤에 %d바이트가 남았습니다", transcript.remaining)
        return False

    combined_commitment = None
    combined_eval = FR(0)
    v_power = FR(1)
    for commitment, evaluation in zip(commitments, evaluations):
        combined_commitment = ec_add(combined_commitment, ec_mul(commitment, v_power))
        combined_eval = combined_eval + evaluation * v_power
        v_power = v_power * v

    ok = verify_opening(combined_commitment, opening, x, combined_eval, params)
    if not ok:
        logger.info("열기 증명 페어링 검사 실패")
    return ok
