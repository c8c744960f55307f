"""
커밋먼트 교차 검증 데모: 비트 벡터 [1, 0, 1], k = 5
=====================================================

실행:
    python -m kzgcommit.example

흐름:
    1. 신뢰 설정 (k = 5, 도메인 크기 32)
    2. 증명 생성 → 증명 바이트열
    3. 증명에서 advice 열 커밋먼트 추출 (위치 0)
    4. Lagrange 평가값에서 직접 커밋먼트 계산
    5. 두 커밋먼트 비교
    6. 독립된 두 번째 설정으로 만든 증명과 비교 (불일치해야 함)
    7. 여러 증인 일괄 검증 (KZGCOMMIT_MAX_WORKERS 스레드)

KZGCOMMIT_ZK=1 이면 [2]에서 블라인딩 행 때문에 두 경로가 어긋나고,
KZGCOMMIT_COLUMN 이 열 개수 이상이면 다른 위치의 점을 읽는다.
두 경우 모두 불일치로 보고하고 데모를 계속한다.
"""

from kzgcommit.config import configure_logging, load_settings
from kzgcommit.domain import EvaluationDomain
from kzgcommit.encoding import compress_g1
from kzgcommit.errors import MismatchError, TranscriptError
from kzgcommit.pipeline import ProvingPipeline
from kzgcommit.srs import ParamsKZG
from kzgcommit.validator import validate, validate_batch


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    k = settings.k
    bitvector = [1, 0, 1]

    print("=" * 60)
    print("  KZG 커밋먼트 교차 검증 데모")
    print(f"  증인: {bitvector}, k = {k}")
    print("=" * 60)

    print("\n[1] 신뢰 설정...")
    params = ParamsKZG.setup(k)
    key = params.commitment_key()
    print(f"    도메인 크기: {params.n}")

    domain = EvaluationDomain(k)
    evals = domain.lagrange_from_vec(bitvector)
    print(f"    Lagrange 평가값: {[int(e) for e in evals]}")

    print("\n[2] 증명 생성 + 커밋먼트 추출 + 직접 계산...")
    pipeline = ProvingPipeline(params, zk=settings.zk)
    try:
        result = validate(bitvector, k, key, pipeline, column=settings.column)
    except (MismatchError, TranscriptError) as exc:
        print(f"    두 경로 불일치 (zk={settings.zk}, column={settings.column}): {exc}")
        if not settings.zk and settings.column == 0:
            raise
        print("    zk 블라인딩 또는 열 위치 설정에 따른 예상된 결과입니다")
    else:
        print(f"    증명 크기: {len(result.proof)} 바이트")
        print(f"    커밋먼트: {compress_g1(result.commitment).hex()}")
        print("    두 경로 일치 ✓")

    print("\n[3] 독립된 설정으로 만든 증명과 비교...")
    other = ProvingPipeline(ParamsKZG.setup(k), zk=settings.zk)
    try:
        validate(bitvector, k, key, other)
    except MismatchError as exc:
        print(f"    불일치 감지 ✓ (direct={compress_g1(exc.direct).hex()[:16]}..., "
              f"extracted={compress_g1(exc.extracted).hex()[:16]}...)")
        detected = True
    else:
        print("    불일치를 감지하지 못했습니다 ✗")
        detected = False

    print(f"\n[4] 일괄 검증 (max_workers={settings.max_workers})...")
    batch = [bitvector, [0, 1, 1], [1, 1, 1, 1]]
    results = validate_batch(
        batch, k, key, ProvingPipeline(params), max_workers=settings.max_workers
    )
    for witness, item in zip(batch, results):
        print(f"    {witness}: {compress_g1(item.commitment).hex()[:16]}... ✓")

    print("\n" + "=" * 60)
    return detected


if __name__ == "__main__":
    main()
