"""
KZG Structured Reference String (SRS)
=====================================

KZG 다항식 커밋먼트에 필요한 공개 파라미터를 생성한다.

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      G2 powers: [G2, τ·G2]
  }

Prover는 격자 한 변 길이 d = n_rows·scale 까지의 SRS를 한 번 만들고,
모든 행/열 커밋에서 읽기 전용으로 공유한다.

**보안**:
  τ를 아는 사람은 커밋먼트를 위조할 수 있다. 실제 시스템에서는 MPC로 τ를 만든다.
  seed를 주면 결정론적으로 생성한다 (테스트/재현용).

사용 예시:
    >>> srs = SRS.generate(max_degree=16, seed=42)
    >>> len(srs.g1_powers)  # 17 (0차부터 16차까지)
"""

import hashlib
import logging
import secrets

from rsquare.errors import CommitmentSetupFailure
from rsquare.field import BN128

logger = logging.getLogger(__name__)


class SRS:
    """Structured Reference String: KZG 커밋먼트용 공개 파라미터.

    속성:
        g1_powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
        g2_powers: [G2, τ·G2]
        max_degree: 지원하는 최대 다항식 차수 d
        curve: 파라미터가 속한 곡선
    """

    def __init__(self, g1_powers, g2_powers, max_degree, curve=BN128):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers
        self.max_degree = max_degree
        self.curve = curve

    def __repr__(self):
        return f"SRS(curve={self.curve.name}, max_degree={self.max_degree})"

    @classmethod
    def generate(cls, max_degree, seed=None, curve=BN128):
        """SRS를 생성한다.

        Args:
            max_degree: 지원할 최대 다항식 차수 (격자 한 변 길이)
            seed: 결정론적 생성을 위한 시드. None이면 secrets로 τ를 뽑는다.
            curve: 곡선 (BN128, BLS12_381)

        Returns:
            SRS: 생성된 구조화 참조 문자열

        Raises:
            CommitmentSetupFailure: max_degree가 음수/정수가 아니거나 τ가 0일 때
        """
        if not isinstance(max_degree, int) or max_degree < 0:
            raise CommitmentSetupFailure(
                f"SRS 최대 차수가 올바르지 않습니다: {max_degree}",
                data={"max_degree": max_degree},
            )

        order = curve.scalar_field.field_modulus
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % order
        else:
            tau_int = secrets.randbelow(order - 1) + 1
        if tau_int == 0:
            raise CommitmentSetupFailure("τ = 0 인 시드는 사용할 수 없습니다", data={"seed": seed})
        tau = curve.scalar_field(tau_int)

        g1_powers = []
        tau_power = curve.scalar_field(1)
        for _ in range(max_degree + 1):
            g1_powers.append(curve.mul(curve.G1, tau_power))
            tau_power = tau_power * tau

        g2_powers = [curve.G2, curve.mul(curve.G2, tau)]

        logger.info("generated %s SRS up to degree %d", curve.name, max_degree)
        return cls(g1_powers, g2_powers, max_degree, curve)

    def trim(self, max_degree):
        """차수 max_degree까지의 SRS 조각을 반환한다.

        Raises:
            CommitmentSetupFailure: 요청 차수가 생성된 차수를 넘을 때
        """
        if max_degree > self.max_degree:
            raise CommitmentSetupFailure(
                f"SRS는 차수 {self.max_degree}까지만 지원합니다 (요청: {max_degree})",
                data={"requested": max_degree, "available": self.max_degree},
            )
        return SRS(self.g1_powers[:max_degree + 1], self.g2_powers, max_degree, self.curve)
