"""
계수 표현 다항식과 radix-2 NTT
===============================

Line 확장과 KZG 커밋이 공유하는 다항식 도구.

  Polynomial: [c₀, c₁, ..., c_d] ↔ c₀ + c₁·x + ... + c_d·x^d
  fft / ifft: 계수 ↔ 단위근 부분군 위의 평가값

NTT는 비트 역순(bit-reversal) 재배치 후 제자리(in-place)에서
버터플라이 층을 log2(n)번 쌓는 반복형 Cooley-Tukey 구현이다.
결과 원소의 체는 전달된 단위근 ω의 타입을 따른다 (FR, BLSFR).

  >>> omega = get_root_of_unity(4)
  >>> evals = fft([FR(1), FR(2), FR(0), FR(0)], omega)   # 1 + 2x 를 {1, ω, ω², ω³}에서
  >>> ifft(evals, omega)                                 # [1, 2, 0, 0]
"""

from rsquare.field import FR, ScalarField
from rsquare.utils import log2_exact


def _field_of(values, default=FR):
    return next((type(v) for v in values if isinstance(v, ScalarField)), default)


class Polynomial:
    """스칼라 필드 계수 리스트로 표현한 다항식.

    최고차 계수가 0이 아니도록 항상 정규화한다. 영 다항식은 [0]이다.
    Square.row_poly / col_poly가 이 형태를 돌려주고 kzg.commit이 소비한다.
    """

    def __init__(self, coeffs=None, field=None):
        coeffs = list(coeffs or [])
        self.field = field or _field_of(coeffs)
        lifted = [c if isinstance(c, self.field) else self.field(c) for c in coeffs]
        while lifted and lifted[-1] == 0:
            lifted.pop()
        self.coeffs = lifted or [self.field(0)]

    @property
    def degree(self):
        # 영 다항식도 0으로 본다
        return len(self.coeffs) - 1

    def evaluate(self, point):
        """Horner 규칙으로 p(point)를 계산한다."""
        x = point if isinstance(point, self.field) else self.field(point)
        acc = self.field(0)
        for c in self.coeffs[::-1]:
            acc = acc * x + c
        return acc

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        terms = []
        for power, c in enumerate(self.coeffs):
            if c == 0:
                continue
            suffix = "" if power == 0 else "*x" if power == 1 else f"*x^{power}"
            terms.append(f"{int(c)}{suffix}")
        return f"Poly({' + '.join(terms) or '0'})"


# ─────────────────────────────────────────────────────────────────────
# NTT
# ─────────────────────────────────────────────────────────────────────

def _bit_reverse(values):
    n = len(values)
    bits = log2_exact(n)
    out = list(values)
    for i in range(n):
        j = int(format(i, f"0{bits}b")[::-1], 2) if bits else 0
        if i < j:
            out[i], out[j] = out[j], out[i]
    return out


def fft(coeffs, omega):
    """계수 n개를 {1, ω, ..., ω^(n-1)} 위의 평가값 n개로 바꾼다.

    Args:
        coeffs: 길이가 2의 거듭제곱인 계수 리스트 (int 허용)
        omega: n차 원시 단위근

    Returns:
        list: [p(ω^0), p(ω^1), ..., p(ω^(n-1))]
    """
    field = type(omega)
    a = _bit_reverse([c if isinstance(c, field) else field(c) for c in coeffs])
    n = len(a)

    span = 1
    while span < n:
        # 이 층의 기본 단위근은 2·span차
        w_step = omega ** (n // (2 * span))
        for start in range(0, n, 2 * span):
            w = field(1)
            for k in range(start, start + span):
                t = w * a[k + span]
                a[k], a[k + span] = a[k] + t, a[k] - t
                w = w * w_step
        span *= 2
    return a


def ifft(evals, omega):
    """fft의 역변환: ω⁻¹로 변환한 뒤 1/n을 곱한다."""
    field = type(omega)
    n_inv = field(1) / field(len(evals))
    return [c * n_inv for c in fft(evals, field(1) / omega)]
