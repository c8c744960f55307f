"""
키 생성 (Verifying / Proving Key)
==================================

회로 구조(열 개수, 블라인딩 행 수)와 공개 파라미터로부터 검증키와 증명키를 만든다.

**검증키의 트랜스크립트 표현 (transcript_repr)**:
  검증키 내용을 BLAKE2b(personalization = b"Halo2-Verify-Key")로 해싱하여
  FR로 줄인 값. 증명자와 검증자는 트랜스크립트 시작 시 이 값을 흡수한다.
  바이트열에는 기록되지 않으므로 커밋먼트 추출 위치에 영향을 주지 않는다.

**영지식(zk) 모드와 블라인딩 행**:
  zk=True 이면 각 advice 열의 마지막 BLINDING_FACTORS + 1 개 행을 증명자가
  랜덤 값으로 채운다. 이 행들은 증인 배치에 쓸 수 없다 (usable_rows).
  이 경우 증명 안의 커밋먼트는 blind=0 으로 직접 계산한 커밋먼트와 달라진다.
  zk=False 이면 모든 n개 행을 쓸 수 있고 두 경로가 일치한다.

사용 예시:
    >>> vk = keygen_vk(params, circuit)
    >>> pk = keygen_pk(params, vk, circuit)
"""

import hashlib
import logging

from kzgcommit.domain import EvaluationDomain
from kzgcommit.errors import KeygenError
from kzgcommit.field import FR, CURVE_ORDER

logger = logging.getLogger(__name__)

VERIFY_KEY_PERSONALIZATION = b"Halo2-Verify-Key"

# zk 모드에서 열마다 랜덤 값으로 채우는 행 수
BLINDING_FACTORS = 5


class VerifyingKey:
    """검증키.

    속성:
        k, n: 도메인 지수와 크기
        num_advice_columns: 회로당 advice 열 개수
        blinding_factors: 블라인딩 행 수 (zk가 아니면 0)
        transcript_repr: 트랜스크립트에 흡수되는 검증키 다이제스트 (FR)
    """

    def __init__(self, k, num_advice_columns, blinding_factors, equality):
        self.k = k
        self.n = 1 << k
        self.num_advice_columns = num_advice_columns
        self.blinding_factors = blinding_factors
        self.equality = tuple(equality)
        self.transcript_repr = self._digest()

    @property
    def zk(self):
        return self.blinding_factors > 0

    @property
    def usable_rows(self):
        """증인을 배치할 수 있는 행 수."""
        if not self.zk:
            return self.n
        return self.n - (self.blinding_factors + 1)

    def _digest(self):
        hasher = hashlib.blake2b(digest_size=64, person=VERIFY_KEY_PERSONALIZATION)
        hasher.update(self.k.to_bytes(4, "little"))
        hasher.update(self.num_advice_columns.to_bytes(4, "little"))
        hasher.update(self.blinding_factors.to_bytes(4, "little"))
        hasher.update(bytes(int(flag) for flag in self.equality))
        return FR(int.from_bytes(hasher.digest(), "little") % CURVE_ORDER)

    def __repr__(self):
        return (
            f"VerifyingKey(k={self.k}, advice={self.num_advice_columns}, "
            f"blinding={self.blinding_factors})"
        )


class ProvingKey:
    """증명키: 검증키 + 증명자가 쓰는 평가 도메인."""

    def __init__(self, vk, domain):
        self.vk = vk
        self.domain = domain


def keygen_vk(params, circuit, zk=False):
    """회로 구조로부터 검증키를 만든다.

    Raises:
        KeygenError: advice 열이 없거나, 증인 행 수가 usable_rows를 넘을 때
    """
    meta = circuit.configure()
    if meta.num_advice_columns == 0:
        raise KeygenError("회로에 advice 열이 없습니다")

    vk = VerifyingKey(
        params.k,
        meta.num_advice_columns,
        BLINDING_FACTORS if zk else 0,
        meta.equality,
    )
    if vk.usable_rows <= 0:
        raise KeygenError(f"k={params.k} 도메인에는 블라인딩 행을 둘 공간이 없습니다")
    if circuit.num_rows > vk.usable_rows:
        raise KeygenError(
            f"회로가 {circuit.num_rows}행을 쓰지만 사용 가능한 행은 {vk.usable_rows}개입니다"
        )
    logger.debug("검증키 생성: %r", vk)
    return vk


def keygen_pk(params, vk, circuit):
    """검증키로부터 증명키를 만든다.

    Raises:
        KeygenError: 검증키와 파라미터의 도메인 크기가 다를 때
    """
    if vk.k != params.k:
        raise KeygenError(f"검증키 k={vk.k} 와 파라미터 k={params.k} 가 다릅니다")
    if circuit.configure().num_advice_columns != vk.num_advice_columns:
        raise KeygenError("회로의 advice 열 개수가 검증키와 다릅니다")
    return ProvingKey(vk, EvaluationDomain(params.k))
