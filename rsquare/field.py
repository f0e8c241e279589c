"""
rsquare 기반 모듈: 스칼라 유한체(Finite Field) 및 타원곡선
==========================================================

이 모듈은 인코딩/커밋 파이프라인 전체에서 사용되는 대수적 도구를 정의한다.
파이프라인은 하나의 구체적인 체나 곡선에 묶이지 않는다. Line/Square는
체 원소의 산술(+, -, *, /, zero, one)만 사용하고, Prover는 `Curve` 객체를
통해서만 곡선 연산을 수행한다.

**스칼라 유한체**:
  - FR: bn128 곡선의 스칼라 필드
      p - 1 = 2^28 × m (m은 홀수) → 최대 2^28차 단위근, 생성자 g = 5
  - BLSFR: BLS12-381 곡선의 스칼라 필드
      p - 1 = 2^32 × m (m은 홀수) → 최대 2^32차 단위근, 생성자 g = 7

**타원곡선 (Curve)**:
  KZG 커밋먼트를 위한 G1/G2 그룹 연산과 커밋먼트의 정규(canonical) 바이트 인코딩.
  - BN128: py_ecc.bn128
  - BLS12_381: py_ecc.bls12_381

**단위근(Roots of Unity)**:
  n차 원시 단위근 ω_n = g^((p-1)/n).
  ω_{n·s}^s = ω_n 이므로 작은 도메인은 큰 도메인의 stride 부분집합이다.
  이 성질 덕분에 확장(extension)이 원래 share를 그대로 보존한다(systematic).

사용 예시:
    >>> from rsquare.field import FR, BN128
    >>> a = FR(3)
    >>> b = FR(7)
    >>> c = a * b              # FR(21)
    >>> P = BN128.mul(BN128.G1, 5)  # 5·G1
"""

from py_ecc import bn128, bls12_381
from py_ecc.fields import bn128_FQ, bls12_381_FQ

from rsquare.errors import DomainUnavailable, InvalidDimension
from rsquare.utils import is_power_of_two


# ─────────────────────────────────────────────────────────────────────
# 스칼라 유한체
# ─────────────────────────────────────────────────────────────────────

class ScalarField:
    """스칼라 필드 원소의 공통 기능 (mixin).

    py_ecc의 FQ가 제공하는 +, -, *, /, ** 연산 위에
    단위근 도메인 구성과 바이트 직렬화에 필요한 상수를 더한다.

    서브클래스 속성:
        field_modulus: 소수 위수 p
        two_adicity: p - 1을 나누는 2의 최대 지수
        multiplicative_generator: FR*의 생성자
    """

    two_adicity = 0
    multiplicative_generator = 1

    @classmethod
    def byte_length(cls):
        """정규 인코딩의 바이트 길이."""
        return (cls.field_modulus.bit_length() + 7) // 8

    def to_bytes(self):
        """big-endian 고정 길이 바이트열로 직렬화한다."""
        return int(self).to_bytes(self.byte_length(), "big")

    @classmethod
    def from_bytes(cls, data):
        """big-endian 바이트열에서 원소를 복원한다.

        Raises:
            ValueError: 길이가 맞지 않거나 값이 위수 이상일 때
        """
        if len(data) != cls.byte_length():
            raise ValueError(f"{cls.byte_length()} 바이트가 필요합니다: {len(data)}")
        val = int.from_bytes(data, "big")
        if val >= cls.field_modulus:
            raise ValueError("값이 필드 위수 이상입니다")
        return cls(val)


class FR(ScalarField, bn128_FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order
    two_adicity = 28
    multiplicative_generator = 5


class BLSFR(ScalarField, bls12_381_FQ):
    """BLS12-381 스칼라 필드 위의 유한체 원소."""
    field_modulus = bls12_381.curve_order
    two_adicity = 32
    multiplicative_generator = 7


# 곡선 위수 (bn128 스칼라 필드 크기)
CURVE_ORDER = bn128.curve_order


# ─────────────────────────────────────────────────────────────────────
# 타원곡선
# ─────────────────────────────────────────────────────────────────────

class Curve:
    """페어링 친화 곡선과 그 스칼라 필드의 묶음.

    속성:
        name: 곡선 이름 ("bn128", "bls12_381")
        scalar_field: 스칼라 필드 클래스 (FR, BLSFR)
        G1, G2: 그룹 생성자
        coordinate_size: 기저체 좌표 하나의 바이트 길이
    """

    def __init__(self, name, backend, scalar_field):
        self.name = name
        self.backend = backend
        self.scalar_field = scalar_field
        self.G1 = backend.G1
        self.G2 = backend.G2
        self.coordinate_size = (backend.field_modulus.bit_length() + 7) // 8

    def __repr__(self):
        return f"Curve({self.name})"

    def mul(self, point, scalar):
        """타원곡선 스칼라 곱셈: scalar · point.

        Args:
            point: G1 또는 G2 위의 점
            scalar: 정수 또는 스칼라 필드 원소
        """
        if isinstance(scalar, ScalarField):
            scalar = int(scalar)
        return self.backend.multiply(point, scalar % self.scalar_field.field_modulus)

    def add(self, p1, p2):
        """타원곡선 점 덧셈: p1 + p2. None은 무한원점(항등원)이다."""
        return self.backend.add(p1, p2)

    def neg(self, point):
        """타원곡선 점의 역원: -point."""
        return self.backend.neg(point)

    def g1_to_bytes(self, point):
        """G1 점의 정규 바이트 인코딩 (압축하지 않은 x || y, big-endian).

        무한원점(None)은 2·coordinate_size 길이의 0 바이트열이다.
        """
        size = self.coordinate_size
        if point is None:
            return bytes(2 * size)
        x, y = point
        return int(x).to_bytes(size, "big") + int(y).to_bytes(size, "big")


BN128 = Curve("bn128", bn128, FR)
BLS12_381 = Curve("bls12_381", bls12_381, BLSFR)

CURVES = {
    BN128.name: BN128,
    BLS12_381.name: BLS12_381,
}


def get_curve(name):
    """이름으로 곡선을 찾는다.

    Raises:
        ValueError: 알 수 없는 곡선 이름
    """
    try:
        return CURVES[name]
    except KeyError:
        raise ValueError(f"지원하지 않는 곡선입니다: {name}") from None


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def get_root_of_unity(n, field=FR):
    """n차 원시 단위근(primitive n-th root of unity) ω를 반환한다.

    ω = g^((p-1)/n) 이면 ω^n = g^(p-1) = 1 (페르마 소정리)이고,
    g가 FR*의 생성자이므로 ω^k ≠ 1 (0 < k < n)이다.

    Args:
        n: 단위근의 차수 (2의 거듭제곱, ≤ 2^two_adicity)
        field: 스칼라 필드 클래스

    Returns:
        field 원소: n차 원시 단위근

    Raises:
        InvalidDimension: n이 2의 거듭제곱이 아닐 때
        DomainUnavailable: 체에 위수 n인 부분군이 없을 때

    예시:
        >>> omega = get_root_of_unity(4)
        >>> omega ** 4 == FR(1)  # True
        >>> omega ** 2 != FR(1)  # True (원시 단위근)
    """
    if not is_power_of_two(n):
        raise InvalidDimension(f"n은 2의 거듭제곱이어야 합니다: {n}", data={"n": n})
    if n > (1 << field.two_adicity):
        raise DomainUnavailable(
            f"체에 위수 {n}인 단위근 부분군이 없습니다 (최대 2^{field.two_adicity})",
            data={"n": n, "two_adicity": field.two_adicity},
        )
    if n == 1:
        return field(1)

    g = field(field.multiplicative_generator)
    exponent = (field.field_modulus - 1) // n
    return g ** exponent


def get_roots_of_unity(n, field=FR):
    """n개의 단위근 리스트 [1, ω, ω², ..., ω^(n-1)]을 반환한다."""
    omega = get_root_of_unity(n, field)
    roots = []
    current = field(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
