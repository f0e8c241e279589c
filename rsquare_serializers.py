"""
rsquare 데이터 직렬화/역직렬화 헬퍼
====================================

TinyDB에 저장하거나 JSON으로 응답할 수 있는 형태로 rsquare 객체를 변환한다.
스칼라 필드 원소, G1 커밋먼트, share 격자, 확장된 Square, 해시 digest.
"""

from rsquare.field import FR, BN128
from rsquare.kzg import commitment_to_bytes


# ─── 체 원소 ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s, field=FR):
    """str(int) 또는 int → field 원소

    Raises:
        ValueError: 정수나 정수 문자열이 아닐 때 (bool, float 포함)
    """
    if isinstance(s, bool) or not isinstance(s, (int, str)):
        raise ValueError(f"정수 또는 정수 문자열이어야 합니다: {s!r}")
    return field(int(s))


def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [serialize_fr(v) for v in lst]


def deserialize_fr_list(data, field=FR):
    """list[str] → list[FR]"""
    return [deserialize_fr(s, field) for s in data]


# ─── 격자 ───

def serialize_grid(grid):
    """list[list[FR]] → list[list[str]]"""
    return [serialize_fr_list(row) for row in grid]


def deserialize_grid(data, field=FR):
    """list[list[str | int]] → list[list[FR]]

    Raises:
        ValueError: 격자가 리스트의 리스트가 아니거나 원소가 정수가 아닐 때
    """
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise ValueError("grid는 리스트의 리스트여야 합니다")
    try:
        return [deserialize_fr_list(row, field) for row in data]
    except (TypeError, ValueError):
        raise ValueError("grid 원소는 정수여야 합니다") from None


def serialize_square(square):
    """확장된 Square → {"n_rows", "scale", "length", "rows"}"""
    return {
        "n_rows": square.n_rows,
        "scale": square.scale,
        "length": square.length,
        "extended": square.extended,
        "rows": [serialize_fr_list(square.row(rid)) for rid in range(square.length)],
    }


# ─── G1 커밋먼트 ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data, curve=BN128):
    """[str, str] or None → G1 point"""
    if data is None:
        return None
    return (curve.backend.FQ(int(data[0])), curve.backend.FQ(int(data[1])))


def commitment_hex(point, curve=BN128):
    """커밋먼트의 정규 바이트 인코딩 → hex"""
    return commitment_to_bytes(point, curve).hex()


def g1_short(point):
    """표시용 짧은 G1 문자열"""
    if point is None:
        return "O (infinity)"
    x = str(int(point[0]))
    return f"({x[:8]}...)"


# ─── digest ───

def serialize_digest(digest):
    """bytes → hex"""
    return digest.hex()


def deserialize_digest(s):
    """hex → bytes"""
    return bytes.fromhex(s)
