"""
Reed-Solomon Square Prover: 커밋/머클 집계 오케스트레이터
===========================================================

원래 share 격자에서 부호화 격자와 그 행/열 커밋먼트를 만들고,
커밋먼트 해시를 머클 트리로 접어 하나의 루트를 돌려준다.

  ┌─────────────────────────────────────────────────────┐
  │  생성: Line → Square → extend() → SRS setup         │
  ├─────────────────────────────────────────────────────┤
  │  commit_to_row(rid) / commit_to_col(cid)            │
  │     KZG(row_poly(rid)), KZG(col_poly(cid))          │
  ├─────────────────────────────────────────────────────┤
  │  row_root(): Merkle(hash(C_row_0), ..., C_row_{L-1})│
  │  col_root(): Merkle(hash(C_col_0), ..., C_col_{L-1})│
  ├─────────────────────────────────────────────────────┤
  │  root(): Merkle([row_root, col_root])               │
  └─────────────────────────────────────────────────────┘

생성이 끝난 Prover는 불변 값으로 취급한다. 모든 조회는 읽기 전용이므로
잠금 없이 여러 스레드에서 동시에 호출할 수 있다. 행/열 커밋먼트는 처음
요청될 때 한 번 계산해 보관한다 (첫 호출이 겹치면 같은 값을 두 번 계산한다).
새 블록을 부호화할 때는 기존 Prover를 수정하지 않고 새 Prover를 만든다.

열기 증명(opening proof) 생성과 검증은 구현되어 있지 않다. prove()는
ProofGenerationUnavailable을 발생시키는 명시적인 확장 지점이다.

사용 예시:
    >>> prover = Prover([[0, 1], [2, 3]], scale=2, seed=42)
    >>> prover.root().hex()
"""

import logging

from rsquare.errors import CommitmentFailure, CommitmentSetupFailure, ProofGenerationUnavailable
from rsquare.field import BN128, get_curve
from rsquare.kzg import commit, commitment_to_bytes
from rsquare.line import Line
from rsquare.merkle import MerkleTree, Sha256, get_hasher
from rsquare.square import Square
from rsquare.srs import SRS
from rsquare.utils import parallel_map

logger = logging.getLogger(__name__)


class Prover:
    """부호화 격자와 KZG 공개 파라미터를 소유하는 Prover.

    속성:
        shares: 원래 n × n share 격자 (체 원소)
        scale: 확장 배율
        square: 확장이 끝난 Square
        max_degree: 격자 한 변 길이 (= n·scale), SRS 차수 상한
        srs: max_degree까지 잘라낸 SRS
        curve: 커밋에 쓰는 곡선
        hasher: 머클 트리 Hasher
    """

    def __init__(self, shares, scale, srs=None, seed=None, curve=BN128, hasher=None, executor=None):
        """격자를 확장하고 커밋 파라미터를 준비한다.

        Args:
            shares: n × n share 격자 (n은 2의 거듭제곱)
            scale: 확장 배율 (2의 거듭제곱)
            srs: 미리 만든 SRS (선택). 없으면 seed로 생성한다.
            seed: SRS 생성 시드 (선택). 없으면 secrets로 τ를 뽑는다.
            curve: 곡선 (BN128, BLS12_381)
            hasher: 머클 Hasher (기본값: Sha256)
            executor: concurrent.futures.Executor (선택). 확장 패스와 커밋을 분산한다.
                      수명은 호출자가 관리한다.

        Raises:
            InvalidDimension, DomainUnavailable: 격자 구성 실패
            CommitmentSetupFailure: SRS 생성/검증 실패
        """
        field = curve.scalar_field
        lines = [Line(row, scale, field=field) for row in shares]
        square = Square(lines, scale)
        square.extend(executor)

        self.shares = [list(line.compressed_vals()) for line in lines]
        self.scale = scale
        self.square = square
        self.max_degree = square.length
        self.curve = curve
        self.hasher = hasher or Sha256()
        self.executor = executor
        self._row_coms = None
        self._col_coms = None

        if srs is None:
            srs = SRS.generate(self.max_degree, seed=seed, curve=curve)
        elif srs.curve is not curve:
            raise CommitmentSetupFailure(
                f"SRS 곡선 {srs.curve.name}이 Prover 곡선 {curve.name}과 다릅니다",
                data={"srs_curve": srs.curve.name, "curve": curve.name},
            )
        self.srs = srs.trim(self.max_degree)

        logger.info(
            "prover ready: %dx%d shares, scale %d, side %d, curve %s",
            square.n_rows, square.n_rows, scale, square.length, curve.name,
        )

    @classmethod
    def from_config(cls, shares, config, executor=None):
        """RSquareConfig로 Prover를 만든다 (scale, 곡선, 해시, 시드)."""
        return cls(
            shares,
            config.scale,
            seed=config.srs_seed,
            curve=get_curve(config.curve),
            hasher=get_hasher(config.hash),
            executor=executor,
        )

    # ─── 커밋 ───

    def _commit_to_poly(self, poly):
        try:
            return commit(poly, self.srs)
        except CommitmentFailure:
            raise
        except (TypeError, ValueError) as exc:
            raise CommitmentFailure(f"KZG commitment failed: {exc}") from exc

    def commit_to_row(self, rid):
        """row_poly(rid)에 대한 (하이딩이 아닌) KZG 커밋먼트."""
        return self._commit_to_poly(self.square.row_poly(rid))

    def commit_to_col(self, cid):
        """col_poly(cid)에 대한 (하이딩이 아닌) KZG 커밋먼트."""
        return self._commit_to_poly(self.square.col_poly(cid))

    def row_commitments(self):
        """모든 행의 커밋먼트 (처음 호출할 때 한 번 계산한다)."""
        if self._row_coms is None:
            self._row_coms = parallel_map(self.executor, self.commit_to_row, range(self.square.length))
        return list(self._row_coms)

    def col_commitments(self):
        """모든 열의 커밋먼트 (처음 호출할 때 한 번 계산한다)."""
        if self._col_coms is None:
            self._col_coms = parallel_map(self.executor, self.commit_to_col, range(self.square.length))
        return list(self._col_coms)

    def hash_commitment(self, com):
        """커밋먼트의 정규 바이트 인코딩을 해시한다."""
        return self.hasher.hash(commitment_to_bytes(com, self.curve))

    # ─── 머클 집계 ───

    def row_tree(self):
        leaves = [self.hash_commitment(com) for com in self.row_commitments()]
        return MerkleTree.from_leaves(leaves, self.hasher)

    def col_tree(self):
        leaves = [self.hash_commitment(com) for com in self.col_commitments()]
        return MerkleTree.from_leaves(leaves, self.hasher)

    def row_root(self):
        return self.row_tree().root()

    def col_root(self):
        return self.col_tree().root()

    def root(self):
        """[row_root, col_root] 2-리프 트리의 루트. 격자 전체의 단일 증표."""
        return MerkleTree.from_leaves([self.row_root(), self.col_root()], self.hasher).root()

    def prove(self, *args, **kwargs):
        """행/열 열기 증명. 이 코어에는 구현되어 있지 않다.

        Raises:
            ProofGenerationUnavailable: 항상
        """
        raise ProofGenerationUnavailable(
            "Opening-proof generation is not part of the encode/commit core; "
            "supply a separate proving and verification module"
        )
