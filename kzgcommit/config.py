"""
환경 변수 기반 설정
====================

  KZGCOMMIT_K            도메인 지수 k (기본 5)
  KZGCOMMIT_COLUMN       추출할 커밋먼트 위치 (기본 0)
  KZGCOMMIT_ZK           파이프라인 zk 모드 (기본 false)
  KZGCOMMIT_MAX_WORKERS  일괄 검증 스레드 수 (기본: 실행기 기본값)
  KZGCOMMIT_LOG_LEVEL    로그 레벨 (기본 WARNING)

라이브러리 모듈은 로거만 만들고 핸들러를 설치하지 않는다.
configure_logging()은 호스트 프로그램(데모 포함)이 호출한다.
"""

import logging
import os
from collections import namedtuple

from kzgcommit.field import MAX_DOMAIN_EXPONENT

ENV_PREFIX = "KZGCOMMIT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


_SettingsFields = namedtuple(
    "_SettingsFields", ["k", "column", "zk", "max_workers", "log_level"]
)


class Settings(_SettingsFields):
    """불변 설정 값. 생성 시 범위를 검사한다."""

    __slots__ = ()

    def __new__(cls, k=5, column=0, zk=False, max_workers=None, log_level="WARNING"):
        self = super().__new__(cls, k, column, zk, max_workers, log_level)
        if not 0 <= self.k <= MAX_DOMAIN_EXPONENT:
            raise ValueError(f"k는 0 이상 {MAX_DOMAIN_EXPONENT} 이하여야 합니다: {self.k}")
        if self.column < 0:
            raise ValueError(f"column은 0 이상이어야 합니다: {self.column}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers는 1 이상이어야 합니다: {self.max_workers}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"알 수 없는 로그 레벨입니다: {self.log_level}")
        return self


def _get(environ, name):
    return environ.get(ENV_PREFIX + name)


def _parse_int(environ, name, default):
    raw = _get(environ, name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name}는 정수여야 합니다: {raw!r}") from None


def _parse_bool(environ, name, default):
    raw = _get(environ, name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name}는 참/거짓 값이어야 합니다: {raw!r}")


def load_settings(environ=None):
    """환경 변수에서 Settings를 읽는다. 잘못된 값은 ValueError."""
    if environ is None:
        environ = os.environ
    defaults = Settings()
    return Settings(
        k=_parse_int(environ, "K", defaults.k),
        column=_parse_int(environ, "COLUMN", defaults.column),
        zk=_parse_bool(environ, "ZK", defaults.zk),
        max_workers=_parse_int(environ, "MAX_WORKERS", defaults.max_workers),
        log_level=(_get(environ, "LOG_LEVEL") or defaults.log_level).upper(),
    )


def configure_logging(level="WARNING"):
    """kzgcommit 로거에 스트림 핸들러를 붙인다."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("kzgcommit").setLevel(level)
