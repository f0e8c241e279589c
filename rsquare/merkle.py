"""
머클 트리 집계 (Merkle Aggregation)
====================================

행/열 커밋먼트 해시를 하나의 짧은 루트로 접는다.

**Hasher**:
  hash(bytes) → digest 인터페이스. 파이프라인은 특정 해시에 묶이지 않는다.
  - Sha256 (기본값)
  - Sha3_256
  - Blake2b256 (digest 32바이트)

**트리 구성 규칙**:
  - 리프는 이미 해시된 digest이다 (호출자가 리프를 해시한다)
  - 부모 = hash(left || right)
  - 층의 노드 개수가 홀수이면 마지막 노드는 해시 없이 그대로 위 층으로 올라간다
  - 리프가 하나면 그 리프가 루트이다
  - 빈 리프 집합은 MerkleConstructionFailure

  leaves:   L0   L1   L2
  layer 1:  H(L0||L1)  L2
  root:     H(H(L0||L1) || L2)

사용 예시:
    >>> hasher = Sha256()
    >>> tree = MerkleTree.from_leaves([hasher.hash(b"a"), hasher.hash(b"b")], hasher)
    >>> tree.root().hex()
"""

import hashlib
from dataclasses import dataclass

from rsquare.errors import MerkleConstructionFailure


# ─────────────────────────────────────────────────────────────────────
# Hasher
# ─────────────────────────────────────────────────────────────────────

class Hasher:
    """머클 트리용 해시 함수 인터페이스.

    서브클래스는 name, digest_size, hash()를 정의한다.
    """

    name = None
    digest_size = 32

    def hash(self, data):
        raise NotImplementedError

    def concat_and_hash(self, left, right):
        """부모 노드 해시: hash(left || right)."""
        return self.hash(bytes(left) + bytes(right))

    def __repr__(self):
        return f"{type(self).__name__}()"


class Sha256(Hasher):
    name = "sha256"

    def hash(self, data):
        return hashlib.sha256(data).digest()


class Sha3_256(Hasher):
    name = "sha3_256"

    def hash(self, data):
        return hashlib.sha3_256(data).digest()


class Blake2b256(Hasher):
    name = "blake2b"

    def hash(self, data):
        return hashlib.blake2b(data, digest_size=self.digest_size).digest()


HASHERS = {cls.name: cls for cls in (Sha256, Sha3_256, Blake2b256)}


def get_hasher(name):
    """이름으로 Hasher 인스턴스를 만든다.

    Raises:
        ValueError: 알 수 없는 해시 이름
    """
    try:
        return HASHERS[name]()
    except KeyError:
        raise ValueError(f"지원하지 않는 해시입니다: {name}") from None


# ─────────────────────────────────────────────────────────────────────
# Merkle Tree
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProofStep:
    """포함 증명의 한 단계.

    sibling: 형제 노드 해시
    sibling_is_left: 형제가 왼쪽이면 True (현재 노드가 오른쪽)
    """

    sibling: bytes
    sibling_is_left: bool


class MerkleTree:
    """이진 머클 트리.

    속성:
        hasher: 내부 노드에 사용하는 Hasher
        layers: layers[0]은 리프, layers[-1]은 [root]
    """

    def __init__(self, leaves, hasher=None):
        leaves = list(leaves)
        if not leaves:
            raise MerkleConstructionFailure("Cannot build a Merkle tree from an empty leaf set")
        self.hasher = hasher or Sha256()
        for idx, leaf in enumerate(leaves):
            if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != self.hasher.digest_size:
                raise MerkleConstructionFailure(
                    "Merkle leaves must be digests of the hasher's size",
                    data={"index": idx, "digest_size": self.hasher.digest_size},
                )

        self.layers = [[bytes(leaf) for leaf in leaves]]
        while len(self.layers[-1]) > 1:
            layer = self.layers[-1]
            parent = []
            for i in range(0, len(layer), 2):
                if i + 1 < len(layer):
                    parent.append(self.hasher.concat_and_hash(layer[i], layer[i + 1]))
                else:
                    parent.append(layer[i])
            self.layers.append(parent)

    @classmethod
    def from_leaves(cls, leaves, hasher=None):
        return cls(leaves, hasher)

    @property
    def leaves(self):
        return list(self.layers[0])

    @property
    def depth(self):
        """루트까지의 층 수 (리프 하나면 0)."""
        return len(self.layers) - 1

    def root(self):
        return self.layers[-1][0]

    def proof(self, index):
        """리프 index의 포함 증명 (리프 → 루트 순서의 ProofStep 리스트).

        올라가는 층에서 형제가 없으면 (홀수 층의 마지막 노드) 단계를 넣지 않는다.
        """
        if not 0 <= index < len(self.layers[0]):
            raise IndexError(f"leaf index {index} out of range")
        steps = []
        for layer in self.layers[:-1]:
            sibling = index ^ 1
            if sibling < len(layer):
                steps.append(ProofStep(layer[sibling], sibling_is_left=sibling < index))
            index //= 2
        return steps


def verify_proof(root, leaf, proof, hasher=None):
    """포함 증명을 검증한다.

    Args:
        root: 기대하는 머클 루트
        leaf: 리프 digest
        proof: MerkleTree.proof()가 반환한 ProofStep 리스트
        hasher: 트리와 같은 Hasher

    Returns:
        bool: 리프에서 재구성한 루트가 root와 같은지
    """
    hasher = hasher or Sha256()
    node = bytes(leaf)
    for step in proof:
        if step.sibling_is_left:
            node = hasher.concat_and_hash(step.sibling, node)
        else:
            node = hasher.concat_and_hash(node, step.sibling)
    return node == bytes(root)
