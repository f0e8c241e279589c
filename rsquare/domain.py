"""
Radix-2 평가 도메인 (Evaluation Domain)
========================================

스칼라 필드의 위수 n 곱셈 부분군 H = {1, ω, ω², ..., ω^(n-1)}.

  - interpolate: H 위의 평가값 n개 → 차수 < n 다항식 (IFFT)
  - evaluate: 차수 < n 다항식 → H 위의 평가값 n개 (FFT)

Square는 축마다 두 개의 도메인을 가진다:
  - small domain: 위수 n_rows (원래 share 개수)
  - large domain: 위수 n_rows·scale (확장된 길이)

ω_large^scale = ω_small 이므로 small domain의 i번째 원소는
large domain의 (i·scale)번째 원소와 같다.

사용 예시:
    >>> small = EvaluationDomain(2)
    >>> large = EvaluationDomain(4)
    >>> poly = small.interpolate([FR(1), FR(2)])
    >>> large.evaluate(poly)[0::2]  # [FR(1), FR(2)]
"""

from rsquare.errors import InvalidDimension
from rsquare.field import FR, get_root_of_unity
from rsquare.polynomial import Polynomial, fft, ifft
from rsquare.utils import log2_exact, pad_to_length


class EvaluationDomain:
    """위수 size인 radix-2 곱셈 부분군.

    속성:
        size: 도메인 크기 (2의 거듭제곱)
        field: 스칼라 필드 클래스
        group_gen: 생성자 ω (size차 원시 단위근)
        log_size_of_group: log2(size)
    """

    def __init__(self, size, field=FR):
        # get_root_of_unity가 InvalidDimension / DomainUnavailable을 발생시킨다
        self.group_gen = get_root_of_unity(size, field)
        self.size = size
        self.field = field
        self.log_size_of_group = log2_exact(size)

    def __repr__(self):
        return f"EvaluationDomain(size={self.size}, field={self.field.__name__})"

    def __eq__(self, other):
        if not isinstance(other, EvaluationDomain):
            return NotImplemented
        return self.size == other.size and self.field is other.field

    def __len__(self):
        return self.size

    def element(self, i):
        """ω^i"""
        return self.group_gen ** i

    def elements(self):
        """[1, ω, ..., ω^(size-1)]"""
        result = []
        current = self.field(1)
        for _ in range(self.size):
            result.append(current)
            current = current * self.group_gen
        return result

    def interpolate(self, evals):
        """평가값을 보간하는 차수 < size 다항식을 반환한다.

        Raises:
            InvalidDimension: 평가값 개수가 도메인 크기와 다를 때
        """
        if len(evals) != self.size:
            raise InvalidDimension(
                f"평가값 {len(evals)}개는 도메인 크기 {self.size}와 맞지 않습니다",
                data={"evals": len(evals), "domain": self.size},
            )
        return Polynomial(ifft(list(evals), self.group_gen), field=self.field)

    def evaluate(self, poly):
        """다항식을 도메인의 모든 원소에서 평가한다.

        Raises:
            InvalidDimension: 다항식 차수가 size 이상일 때
        """
        if len(poly.coeffs) > self.size:
            raise InvalidDimension(
                f"차수 {poly.degree} 다항식은 크기 {self.size} 도메인에서 평가할 수 없습니다",
                data={"degree": poly.degree, "domain": self.size},
            )
        coeffs = pad_to_length(poly.coeffs, self.size, self.field(0))
        return fft(coeffs, self.group_gen)
