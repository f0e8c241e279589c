"""
Reed-Solomon Square: 2차원 확장
=================================

n_rows × n_rows 데이터 share 격자를 (n_rows·scale) × (n_rows·scale)
부호화 격자로 확장한다. 격자는 행 우선(row-major)으로 Line 리스트에 저장되고
열은 별도 저장소가 없다.

**배치**:
  행 rid는 rid % scale == 0 일 때 "실제(real)" 행이며 data_rows[rid / scale]이다.
  나머지 행은 0으로 채운 자리표시 Line이다.

**3-패스 확장 알고리즘**:

  ┌─────────────────────────────────────────────────────┐
  │  Pass 1: 실제 행(rid·scale)을 small → large로 확장   │
  ├─────────────────────────────────────────────────────┤
  │  (barrier) 모든 열이 n_rows개의 실제 값을 가진다     │
  ├─────────────────────────────────────────────────────┤
  │  Pass 2: 모든 열(length개)을 small → large로 확장    │
  │          임시 Line으로 모은 뒤 격자에 다시 흩뿌린다  │
  ├─────────────────────────────────────────────────────┤
  │  Pass 3: 나머지 행(rid % scale != 0)을 확장          │
  └─────────────────────────────────────────────────────┘

  결과 격자의 모든 행과 열은 차수 < n_rows 다항식의 평가값이다.
  이것이 데이터 가용성 샘플링의 근거가 되는 2D 부호의 성질이다.

각 패스 안의 행/열은 서로 독립이므로 concurrent.futures Executor로
분산할 수 있다. 패스의 모든 결과를 모은 뒤에만 격자에 쓴다.

사용 예시:
    >>> square = Square.from_shares([[0, 1], [2, 3]], scale=2)
    >>> square.extend()
    >>> square.val_at(2, 2)  # FR(3)
"""

import logging

from rsquare.domain import EvaluationDomain
from rsquare.errors import InvalidDimension
from rsquare.line import Line
from rsquare.utils import is_power_of_two, parallel_map

logger = logging.getLogger(__name__)


class Square:
    """Reed-Solomon 부호화 정사각 격자.

    속성:
        n_rows: 원래 share 격자의 한 변 길이
        scale: 원래 격자 → 부호화 격자 확장 배율
        length: 부호화 격자의 한 변 길이 (= n_rows·scale)
        small_domain: 원래 share를 보간하는 도메인 (위수 n_rows)
        large_domain: 보간 다항식을 평가하는 도메인 (위수 length)
        extended: extend()가 완료되었는지 여부
    """

    def __init__(self, data_rows, scale):
        """실제 행을 stride scale로 끼워 넣은 격자를 만든다.

        Args:
            data_rows: Line 리스트. 각 Line은 이미 길이 len(data_rows)·scale이어야 한다.
            scale: 확장 배율 (2의 거듭제곱)

        Raises:
            InvalidDimension: 행 개수/scale이 2의 거듭제곱이 아니거나 행 길이가 맞지 않을 때
            DomainUnavailable: 체에 위수 length인 부분군이 없을 때
        """
        n_rows = len(data_rows)
        if not is_power_of_two(n_rows):
            raise InvalidDimension("Number of rows must be a power of 2", data={"n_rows": n_rows})
        if not is_power_of_two(scale):
            raise InvalidDimension("Scale factor must be a power of 2", data={"scale": scale})

        length = n_rows * scale
        for idx, row in enumerate(data_rows):
            if len(row) != length:
                raise InvalidDimension(
                    "Data rows do not form a square",
                    data={"row": idx, "row_length": len(row), "length": length},
                )

        field = data_rows[0].field
        self.n_rows = n_rows
        self.scale = scale
        self.length = length
        self.field = field
        self.large_domain = EvaluationDomain(length, field)
        self.small_domain = EvaluationDomain(n_rows, field)
        self.extended = False

        self.rows = []
        for idx in range(length):
            if idx % scale == 0:
                self.rows.append(data_rows[idx // scale].copy())
            else:
                self.rows.append(Line.zeros(n_rows, scale, field))

    @classmethod
    def from_shares(cls, shares, scale, field=None):
        """n × n share 격자에서 바로 Square를 만든다."""
        return cls([Line(row, scale, field=field) for row in shares], scale)

    def __str__(self):
        return "\n".join(str([int(v) for v in row]) for row in self.rows)

    def __repr__(self):
        return (
            f"Square(n_rows={self.n_rows}, scale={self.scale}, "
            f"length={self.length}, extended={self.extended})"
        )

    # ─── 읽기 ───

    def _check_row(self, rid):
        if not 0 <= rid < self.length:
            raise IndexError(f"Square row {rid} out of range for length {self.length}")

    def val_at(self, rid, cid):
        self._check_row(rid)
        return self.rows[rid].get_element_at(cid)

    def row(self, rid):
        self._check_row(rid)
        return self.rows[rid].values

    def col(self, cid):
        return [row.get_element_at(cid) for row in self.rows]

    def _real_col(self, cid):
        """실제 행(rid·scale)에서만 뽑은 열 값 n_rows개."""
        return [self.rows[rid * self.scale].get_element_at(cid) for rid in range(self.n_rows)]

    def row_poly(self, rid):
        """행 rid의 small domain 값을 보간한 차수 < n_rows 다항식."""
        self._check_row(rid)
        return self.small_domain.interpolate(self.rows[rid].compressed_vals())

    def col_poly(self, cid):
        """열 cid의 실제 행 값을 보간한 차수 < n_rows 다항식."""
        return self.small_domain.interpolate(self._real_col(cid))

    # ─── 쓰기 ───

    def _set_row(self, rid, line):
        for cid in range(self.length):
            self.rows[rid].set_element_at(cid, line.get_element_at(cid))

    def _set_col(self, cid, line):
        for rid in range(self.length):
            self.rows[rid].set_element_at(cid, line.get_element_at(rid))

    # ─── 확장 ───

    def _extended_row(self, rid):
        line = self.rows[rid].copy()
        line.extend(self.small_domain, self.large_domain)
        return line

    def _extended_col(self, cid):
        # 열은 직접 접근할 수 없으므로 임시 Line으로 모은 뒤 확장한다
        line = Line(self._real_col(cid), self.scale, field=self.field)
        line.extend(self.small_domain, self.large_domain)
        return line

    def extend(self, executor=None):
        """3-패스 알고리즘으로 격자 전체를 부호화한다.

        Args:
            executor: concurrent.futures.Executor (선택). 주어지면 각 패스의
                      행/열 확장을 분산한다.

        두 번째 호출은 아무것도 하지 않는다 (확장 후 격자는 불변).
        """
        if self.extended:
            logger.debug("square already extended; skipping")
            return

        real_rids = [rid * self.scale for rid in range(self.n_rows)]
        logger.debug("pass 1: extending %d real rows", len(real_rids))
        for rid, line in zip(real_rids, parallel_map(executor, self._extended_row, real_rids)):
            self._set_row(rid, line)

        # 각 열이 이제 확장에 충분한 값을 가진다
        logger.debug("pass 2: extending %d columns", self.length)
        cids = list(range(self.length))
        for cid, line in zip(cids, parallel_map(executor, self._extended_col, cids)):
            self._set_col(cid, line)

        filler_rids = [rid for rid in range(self.length) if rid % self.scale != 0]
        logger.debug("pass 3: extending %d filler rows", len(filler_rids))
        for rid, line in zip(filler_rids, parallel_map(executor, self._extended_row, filler_rids)):
            self._set_row(rid, line)

        self.extended = True
        logger.debug("extended %dx%d square to %dx%d", self.n_rows, self.n_rows, self.length, self.length)
