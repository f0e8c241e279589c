"""
Reed-Solomon Line
=================

하나의 행 또는 열을 이루는 체 원소 시퀀스.

새로 만든 Line은 원래 share를 stride `scale` 위치(0, scale, 2·scale, ...)에
두고 나머지는 0으로 채운다. `extend`가 이 자리표시(placeholder) 배치를
확장된 부호어(codeword)로 덮어쓴다.

  shares = [a, b], scale = 2
  new      → [a, 0, b, 0]
  extend   → [p(1), p(ω), p(ω²), p(ω³)]   (p(1) = a, p(ω²) = b)

`compressed_vals()`는 어느 상태에서든 stride 부분열(실제 값)을 돌려준다.
"""

from rsquare.errors import DomainUnavailable, InvalidDimension
from rsquare.field import FR, ScalarField
from rsquare.utils import is_power_of_two


class Line:
    """길이 n_shares·scale의 체 원소 시퀀스.

    속성:
        scale: 원래 share에서 현재 Line으로의 확장 배율
        field: 스칼라 필드 클래스
    """

    def __init__(self, shares, scale, field=None):
        """share를 stride scale로 배치한 Line을 만든다.

        Args:
            shares: 원래 share (체 원소 또는 int), 개수는 2의 거듭제곱
            scale: 확장 배율 (2의 거듭제곱)
            field: 스칼라 필드 클래스. None이면 첫 share의 타입, 아니면 FR

        Raises:
            InvalidDimension: share 개수나 scale이 2의 거듭제곱이 아닐 때
            DomainUnavailable: 체에 위수 len(shares)·scale인 단위근 부분군이 없을 때
        """
        shares = list(shares)
        if not is_power_of_two(len(shares)):
            raise InvalidDimension(
                "Number of shares in a Reed-Solomon line must be a power of 2",
                data={"n_shares": len(shares)},
            )
        if not is_power_of_two(scale):
            raise InvalidDimension(
                "Scale factor of a Reed-Solomon line must be a power of 2",
                data={"scale": scale},
            )
        if field is None:
            field = type(shares[0]) if isinstance(shares[0], ScalarField) else FR

        length = len(shares) * scale
        # 자리표시를 할당하기 전에 도메인 크기를 확인한다
        if length > 1 << field.two_adicity:
            raise DomainUnavailable(
                f"체에 위수 {length}인 단위근 부분군이 없습니다 (최대 2^{field.two_adicity})",
                data={"length": length, "two_adicity": field.two_adicity},
            )

        self.field = field
        self.scale = scale
        self.vals = [field(0)] * length
        for idx, share in enumerate(shares):
            self.vals[idx * scale] = share if isinstance(share, field) else field(share)

    @classmethod
    def zeros(cls, n_shares, scale, field=FR):
        """모든 원소가 0인 자리표시 Line."""
        return cls([field(0)] * n_shares, scale, field=field)

    def __len__(self):
        return len(self.vals)

    def __iter__(self):
        return iter(self.vals)

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self.scale == other.scale and self.vals == other.vals

    def __repr__(self):
        return f"Line(scale={self.scale}, vals={[int(v) for v in self.vals]})"

    @property
    def values(self):
        """현재 원소의 복사본."""
        return list(self.vals)

    def copy(self):
        line = Line.__new__(Line)
        line.field = self.field
        line.scale = self.scale
        line.vals = list(self.vals)
        return line

    def _check_index(self, idx):
        if not 0 <= idx < len(self.vals):
            raise IndexError(f"Line index {idx} out of range for length {len(self.vals)}")

    def get_element_at(self, idx):
        self._check_index(idx)
        return self.vals[idx]

    def set_element_at(self, idx, val):
        self._check_index(idx)
        self.vals[idx] = val if isinstance(val, self.field) else self.field(val)

    def compressed_vals(self):
        """stride scale 부분열. 길이는 len(self) / scale."""
        return self.vals[::self.scale]

    def extend(self, small_domain, large_domain):
        """compressed_vals()를 small_domain 위의 평가값으로 보고 large_domain으로 확장한다.

        1. small_domain에서 보간 → 차수 < |small_domain| 다항식 p
        2. large_domain의 모든 원소에서 p를 평가
        3. Line의 내용을 |large_domain|개의 결과로 교체

        Raises:
            InvalidDimension: compressed_vals 개수가 small_domain 크기와 다르거나
                              large_domain이 small_domain보다 작을 때
        """
        if large_domain.size < small_domain.size:
            raise InvalidDimension(
                "Large domain must not be smaller than the small domain",
                data={"small": small_domain.size, "large": large_domain.size},
            )
        poly = small_domain.interpolate(self.compressed_vals())
        self.vals = large_domain.evaluate(poly)
