"""
증명 파이프라인 (블랙박스 인터페이스)
======================================

일관성 검증기가 소비하는 좁은 인터페이스 {generate_keys, create_proof}.
검증기는 파이프라인 내부 구조에 의존하지 않으며, 파이프라인 내부 실패
(KeygenError, SynthesisError, ProofCreationError)는 그대로 호출자에게 전달된다.

사용 예시:
    >>> pipeline = ProvingPipeline(ParamsKZG.setup(5))
    >>> vk, pk = pipeline.generate_keys(circuit)
    >>> proof = pipeline.create_proof(pk, circuit)
    >>> pipeline.verify(vk, proof)  # True
"""

import logging

from kzgcommit.keygen import keygen_pk, keygen_vk
from kzgcommit.prover import create_proof
from kzgcommit.transcript import TranscriptWriter
from kzgcommit.verifier import verify_proof

logger = logging.getLogger(__name__)


class ProvingPipeline:
    """파라미터 하나에 묶인 증명 파이프라인.

    Args:
        params: ParamsKZG (파이프라인 안에서 쓰는 커밋먼트 키의 출처)
        zk: True면 advice 열 마지막 행에 랜덤 블라인딩을 넣는다.
            이 경우 추출한 커밋먼트는 blind=0 직접 커밋먼트와 일치하지 않는다.
    """

    def __init__(self, params, zk=False):
        self.params = params
        self.zk = zk

    @property
    def k(self):
        return self.params.k

    def generate_keys(self, circuit):
        """(검증키, 증명키)를 만든다. 증인 값은 필요 없다."""
        shape = circuit.without_witnesses()
        vk = keygen_vk(self.params, shape, zk=self.zk)
        pk = keygen_pk(self.params, vk, shape)
        return vk, pk

    def create_proof(self, pk, circuit, rng=None):
        """회로 하나에 대한 증명 바이트열을 만든다. 블로킹 호출이다."""
        transcript = TranscriptWriter()
        create_proof(self.params, pk, [circuit], transcript, rng=rng)
        proof = transcript.finalize()
        logger.debug("증명 %d바이트 생성 (k=%d, zk=%s)", len(proof), self.k, self.zk)
        return proof

    def verify(self, vk, proof):
        return verify_proof(self.params, vk, proof)
