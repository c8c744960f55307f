"""
일관성 검증기 (Consistency Validator)
======================================

같은 증인에 대해 두 경로의 커밋먼트가 같은 곡선 점인지 확인한다.

  증인 ─▶ [증명 파이프라인] ─▶ 증명 바이트열 ─▶ [트랜스크립트 추출] ─▶ 커밋먼트 A
  증인 ─▶ [평가 도메인] ─▶ Lagrange 평가값 ─▶ [KZG 엔진, blind=0] ─▶ 커밋먼트 B

  A == B 가 아니면 MismatchError(direct=B, extracted=A, column).

불일치 원인:
  - 직접 경로의 키와 파이프라인의 파라미터가 서로 다른 설정에서 나옴
  - 열 순서 버그 (다른 위치의 커밋먼트를 추출)
  - 블라인딩 불일치 (파이프라인이 zk 모드로 행을 랜덤화)

동시성:
  검증 한 번은 동기적이며 키·도메인을 변경하지 않는다. 여러 증인의 검증은
  서로 독립이므로 validate_batch가 스레드 풀에서 병렬로 실행한다.

사용 예시 (증인 [1, 0, 1], k = 5):
    >>> params = ParamsKZG.setup(5)
    >>> result = validate([1, 0, 1], 5, params.commitment_key(), ProvingPipeline(params))
    >>> result.commitment  # 두 경로가 합의한 점
"""

import logging
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from kzgcommit.circuit import BitvectorCommitmentCircuit
from kzgcommit.domain import EvaluationDomain
from kzgcommit.errors import LengthMismatch, MismatchError
from kzgcommit.field import FR
from kzgcommit.kzg import commit_lagrange
from kzgcommit.transcript import extract_commitments

logger = logging.getLogger(__name__)


ValidationResult = namedtuple("ValidationResult", ["commitment", "proof"])


def direct_commitment(witness, domain_k, key):
    """직접 경로: 도메인 매핑 후 blind=0 으로 커밋한다."""
    domain = EvaluationDomain(domain_k)
    evals = domain.lagrange_from_vec(witness)
    return commit_lagrange(key, evals, blind=FR(0))


def validate(witness, domain_k, key, pipeline, column=0, circuit=None, rng=None):
    """두 커밋먼트 경로를 실행하고 비교한다.

    Args:
        witness: 검증할 열의 증인 값
        domain_k: 도메인 지수 k (크기 2^k)
        key: 직접 경로의 CommitmentKey
        pipeline: generate_keys / create_proof / k 를 제공하는 증명 파이프라인
        column: 증명 안에서 대상 열의 커밋먼트 위치
        circuit: 파이프라인에 넘길 회로.
                 None이면 BitvectorCommitmentCircuit(witness) (열 하나).
        rng: 파이프라인 증명 생성에 넘기는 랜덤성 제공자

    Returns:
        ValidationResult(commitment, proof)

    Raises:
        DomainOverflow: 증인이 2^k 보다 길 때
        LengthMismatch: 키 크기나 파이프라인 도메인이 2^k 와 다를 때
        TranscriptError: 증명에서 커밋먼트를 읽을 수 없을 때
        MismatchError: 두 커밋먼트가 다를 때
        PipelineError: 파이프라인 내부 실패 (그대로 전달)
    """
    witness = list(witness)
    direct = direct_commitment(witness, domain_k, key)

    if pipeline.k != domain_k:
        raise LengthMismatch(1 << domain_k, 1 << pipeline.k, "파이프라인 도메인 크기")

    if circuit is None:
        circuit = BitvectorCommitmentCircuit(witness)
    _, pk = pipeline.generate_keys(circuit)
    proof = pipeline.create_proof(pk, circuit, rng=rng)

    extracted = extract_commitments(proof, column + 1)[column]

    if extracted != direct:
        logger.warning("열 %d 커밋먼트 불일치 (k=%d)", column, domain_k)
        raise MismatchError(direct, extracted, column)

    logger.debug("열 %d 커밋먼트 일치 (k=%d, 증인 길이 %d)", column, domain_k, len(witness))
    return ValidationResult(direct, proof)


def validate_batch(witnesses, domain_k, key, pipeline, max_workers=None):
    """여러 증인을 독립적으로 검증한다.

    결과는 입력 순서대로 돌려준다. 실패한 검증이 있으면 입력 순서상 첫 번째
    실패의 예외가 전파된다.
    """
    witnesses = list(witnesses)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(
            lambda witness: validate(witness, domain_k, key, pipeline),
            witnesses,
        ))
