"""
커밋먼트 계층의 오류 타입
==========================

모든 오류는 즉시 호출자에게 전달되며 자동 재시도하지 않는다.
같은 입력으로 다시 실행해도 결과가 바뀌지 않기 때문이다.

  CommitmentError
  ├── DomainOverflow        증인 길이 > 2^k
  ├── LengthMismatch        커밋먼트 키 길이 ≠ 평가값 길이
  ├── TranscriptError
  │   ├── TranscriptUnderflow   증명 바이트가 부족함
  │   ├── PointDecodeError      유효한 곡선 점으로 디코딩되지 않음
  │   └── ScalarDecodeError     정규(canonical) 스칼라가 아님
  └── MismatchError         두 커밋먼트 경로가 불일치 (두 값을 모두 보존)

  PipelineError             증명 파이프라인 내부 실패 (재해석하지 않고 전달)
  ├── KeygenError
  ├── SynthesisError
  └── ProofCreationError
"""


class CommitmentError(Exception):
    """커밋먼트 계층 오류의 기반 클래스."""


class DomainOverflow(CommitmentError, ValueError):
    """증인 벡터가 평가 도메인보다 길다."""

    def __init__(self, length, domain_size):
        self.length = length
        self.domain_size = domain_size
        super().__init__(
            f"증인 길이 {length}가 도메인 크기 {domain_size}를 초과합니다"
        )


class LengthMismatch(CommitmentError, ValueError):
    """커밋먼트 키와 평가값 벡터의 길이가 다르다 (설정 오류)."""

    def __init__(self, expected, actual, what="평가값"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} 길이 {actual} ≠ 기대 길이 {expected}")


class TranscriptError(CommitmentError):
    """증명 바이트열(트랜스크립트)이 잘못되었다. 증명은 신뢰할 수 없는 입력이다."""


class TranscriptUnderflow(TranscriptError):
    """읽으려는 청크보다 남은 바이트가 적다."""

    def __init__(self, needed, remaining, offset):
        self.needed = needed
        self.remaining = remaining
        self.offset = offset
        super().__init__(
            f"오프셋 {offset}에서 {needed}바이트가 필요하지만 {remaining}바이트만 남았습니다"
        )


class PointDecodeError(TranscriptError):
    """청크가 유효한 G1 점으로 디코딩되지 않는다."""


class ScalarDecodeError(TranscriptError):
    """청크가 정규 스칼라 필드 원소가 아니다."""


class MismatchError(CommitmentError):
    """직접 계산한 커밋먼트와 증명에서 추출한 커밋먼트가 다르다.

    키 유도 불일치, 열(column) 순서 버그, 블라인딩 불일치 중 하나를 뜻한다.
    진단을 위해 두 점을 모두 보존한다.
    """

    def __init__(self, direct, extracted, column=0):
        self.direct = direct
        self.extracted = extracted
        self.column = column
        super().__init__(
            f"열 {column}의 커밋먼트 불일치: "
            f"direct={_describe(direct)}, extracted={_describe(extracted)}"
        )


class PipelineError(Exception):
    """증명 파이프라인 내부 실패."""


class KeygenError(PipelineError):
    """검증키/증명키 생성 실패."""


class SynthesisError(PipelineError):
    """회로 합성(증인 배치) 실패."""


class ProofCreationError(PipelineError):
    """증명 생성 실패."""


def _describe(point):
    if point is None:
        return "infinity"
    return f"({int(point[0]):#x}, {int(point[1]):#x})"
