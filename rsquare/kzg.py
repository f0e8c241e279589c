"""
KZG 다항식 커밋먼트
===================

Kate-Zaverucha-Goldberg (KZG) 커밋먼트: 다항식 p(x)의 간결한 "지문"을
타원곡선 점 하나로 만든다.

  C = Σᵢ cᵢ · [τⁱ]₁ = p(τ) · G1

  - 바인딩(binding): 한 번 커밋하면 다른 다항식으로 바꿀 수 없음
  - 이 코어의 커밋은 하이딩(hiding)이 아니다. 공개 데이터에 대한 바인딩이
    목적이므로 블라인딩 난수를 쓰지 않는다.

열기 증명(opening proof) 생성과 검증은 이 코어에 포함되지 않는다.

사용 예시:
    >>> C = commit(poly, srs)
    >>> commitment_to_bytes(C, srs.curve)  # 64 바이트 (bn128)
"""

from rsquare.errors import CommitmentFailure
from rsquare.field import BN128


def commit(poly, srs):
    """다항식을 KZG 커밋한다.

    SRS의 G1 powers [G1, τG1, τ²G1, ...]에 다항식 계수를 곱하여
    선형결합한다. τ를 모르는 상태에서 p(τ)·G1을 계산하는 것이다.

    Args:
        poly: 커밋할 다항식 (Polynomial)
        srs: Structured Reference String (SRS)

    Returns:
        G1 점: 커밋먼트 C (영 다항식이면 무한원점 None)

    Raises:
        CommitmentFailure: 다항식 차수가 SRS 최대 차수를 초과하거나
                           계수의 체가 곡선의 스칼라 필드와 다를 때
    """
    curve = srs.curve
    if poly.degree > srs.max_degree:
        raise CommitmentFailure(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다",
            data={"degree": poly.degree, "max_degree": srs.max_degree},
        )
    if poly.field is not curve.scalar_field:
        raise CommitmentFailure(
            f"{poly.field.__name__} 다항식은 {curve.name} 곡선에 커밋할 수 없습니다",
            data={"field": poly.field.__name__, "curve": curve.name},
        )

    result = None  # 무한원점 (항등원)
    for i, coeff in enumerate(poly.coeffs):
        if coeff == 0:
            continue
        result = curve.add(result, curve.mul(srs.g1_powers[i], coeff))

    return result


def commitment_to_bytes(commitment, curve=BN128):
    """커밋먼트의 정규 바이트 인코딩 (해시 리프 입력)."""
    return curve.g1_to_bytes(commitment)
