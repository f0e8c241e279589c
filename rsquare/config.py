"""
rsquare 설정
============

인코딩/커밋 파이프라인의 기본값. 모든 필드는 환경 변수로 덮어쓸 수 있다.

  RSQUARE_SCALE=2              # 확장 배율 (2의 거듭제곱)
  RSQUARE_CURVE=bn128          # bn128 | bls12_381
  RSQUARE_HASH=sha256          # sha256 | sha3_256 | blake2b
  RSQUARE_SRS_SEED=            # 비우면 secrets로 τ 생성
  RSQUARE_MAX_WORKERS=0        # 0이면 순차 실행
  RSQUARE_LOG_LEVEL=INFO

사용 예시:
    >>> cfg = load_config()
    >>> cfg.curve_obj().name     # "bn128"
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

from rsquare.field import CURVES, get_curve
from rsquare.merkle import HASHERS, get_hasher
from rsquare.utils import is_power_of_two

ENV_PREFIX = "RSQUARE_"


@dataclass(frozen=True)
class RSquareConfig:
    scale: int = 2
    curve: str = "bn128"
    hash: str = "sha256"
    srs_seed: Optional[str] = None
    max_workers: int = 0
    log_level: str = "INFO"

    def __post_init__(self):
        if not is_power_of_two(self.scale):
            raise ValueError(f"scale은 2의 거듭제곱이어야 합니다: {self.scale}")
        if self.curve not in CURVES:
            raise ValueError(f"지원하지 않는 곡선입니다: {self.curve}")
        if self.hash not in HASHERS:
            raise ValueError(f"지원하지 않는 해시입니다: {self.hash}")
        if self.max_workers < 0:
            raise ValueError(f"max_workers는 0 이상이어야 합니다: {self.max_workers}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"알 수 없는 로그 레벨입니다: {self.log_level}")

    def curve_obj(self):
        return get_curve(self.curve)

    def hasher(self):
        return get_hasher(self.hash)

    def to_dict(self):
        return asdict(self)


def _int_env(env, key, default):
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw, 0)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{key}는 정수여야 합니다: {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> RSquareConfig:
    """환경 변수(기본값: os.environ)에서 설정을 읽는다.

    Raises:
        ValueError: 값이 올바르지 않을 때
    """
    env = os.environ if env is None else env
    defaults = RSquareConfig()
    seed = env.get(ENV_PREFIX + "SRS_SEED") or None
    return RSquareConfig(
        scale=_int_env(env, "SCALE", defaults.scale),
        curve=env.get(ENV_PREFIX + "CURVE", defaults.curve).strip().lower(),
        hash=env.get(ENV_PREFIX + "HASH", defaults.hash).strip().lower(),
        srs_seed=seed,
        max_workers=_int_env(env, "MAX_WORKERS", defaults.max_workers),
        log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).strip().upper(),
    )
