"""
rsquare Flask Blueprint: 인코딩/커밋 파이프라인 단계별 엔드포인트
==================================================================

격자 입력 → 확장 → SRS 시드 → 커밋/루트 순서로 파이프라인을 한 단계씩 실행하고
각 단계의 결과를 세션 DB(TinyDB)에 저장한다. 모든 응답은 JSON이다.

  GET  /rsquare/health
  POST /rsquare/grid               {"grid": [[...]], "scale": 4}
  POST /rsquare/grid/load-example
  POST /rsquare/extend
  POST /rsquare/setup/srs          {"seed": "42"}
  POST /rsquare/commit
  POST /rsquare/prove              (501: 구현되지 않음)
  GET  /rsquare/state
  POST /rsquare/clear
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from rsquare.errors import ProofGenerationUnavailable, RSquareError
from rsquare.field import get_curve
from rsquare.merkle import get_hasher
from rsquare.prover import Prover
from rsquare.square import Square

from rsquare_serializers import (
    commitment_hex,
    deserialize_grid,
    g1_short,
    serialize_digest,
    serialize_g1,
    serialize_grid,
    serialize_square,
)

logger = logging.getLogger(__name__)

rsquare_bp = Blueprint("rsquare", __name__, url_prefix="/rsquare")

DATA = Query()

EXAMPLE_GRID = [
    [0, 1, 2, 3],
    [4, 5, 6, 7],
    [8, 9, 10, 11],
    [12, 13, 14, 15],
]
EXAMPLE_SCALE = 4


# ─── DB 헬퍼 ───

def _db():
    return current_app.extensions["rsquare_db"]


def _config():
    return current_app.extensions["rsquare_config"]


def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = _db().search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    _db().upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    _db().remove(DATA.type.test(lambda t: t.startswith(prefix)))


def _error(status, code, message):
    return jsonify({"code": code, "message": message, "data": None}), status


# ─── 오류 처리 ───

@rsquare_bp.errorhandler(RSquareError)
def handle_rsquare_error(exc):
    status = 501 if isinstance(exc, ProofGenerationUnavailable) else 400
    logger.warning("request failed: %s", exc)
    return jsonify(exc.to_dict()), status


# ──────────────────────────────────────────────────────────────
# 상태
# ──────────────────────────────────────────────────────────────

@rsquare_bp.route("/health")
def health():
    return jsonify({"status": "ok", "config": _config().to_dict()})


@rsquare_bp.route("/state")
def state():
    """지금까지 저장된 모든 단계의 결과."""
    return jsonify({
        "input": db_get("rsquare.input"),
        "square": db_get("rsquare.square"),
        "srs": db_get("rsquare.srs"),
        "commitments": db_get("rsquare.commitments"),
    })


@rsquare_bp.route("/clear", methods=["POST"])
def clear():
    """모든 rsquare 데이터를 클리어한다."""
    db_remove_prefix("rsquare.")
    return jsonify({"status": "cleared"})


# ──────────────────────────────────────────────────────────────
# 격자 입력
# ──────────────────────────────────────────────────────────────

def _store_input(grid, scale):
    field = get_curve(_config().curve).scalar_field
    shares = deserialize_grid(grid, field)
    # 차원과 도메인을 미리 검증한다 (확장은 하지 않음)
    Square.from_shares(shares, scale, field=field)

    db_remove_prefix("rsquare.")
    info = {"grid": serialize_grid(shares), "scale": scale, "n_rows": len(shares)}
    db_set("rsquare.input", info)
    return info


@rsquare_bp.route("/grid", methods=["POST"])
def grid_set():
    """n × n share 격자와 scale을 저장한다."""
    body = request.get_json(silent=True) or {}
    if "grid" not in body:
        return _error(400, "bad_request", "grid가 필요합니다")
    scale = body.get("scale", _config().scale)
    if not isinstance(scale, int) or isinstance(scale, bool):
        return _error(400, "bad_request", "scale은 정수여야 합니다")
    try:
        info = _store_input(body["grid"], scale)
    except RSquareError:
        raise
    except ValueError as exc:
        return _error(400, "bad_request", str(exc))
    return jsonify(info)


@rsquare_bp.route("/grid/load-example", methods=["POST"])
def grid_load_example():
    """4 × 4 예제 격자 (scale 4)를 로드한다."""
    return jsonify(_store_input(EXAMPLE_GRID, EXAMPLE_SCALE))


# ──────────────────────────────────────────────────────────────
# 확장
# ──────────────────────────────────────────────────────────────

def _load_input():
    info = db_get("rsquare.input")
    if not info:
        return None, None
    field = get_curve(_config().curve).scalar_field
    return deserialize_grid(info["grid"], field), info["scale"]


@rsquare_bp.route("/extend", methods=["POST"])
def extend():
    """저장된 격자를 3-패스 알고리즘으로 확장한다."""
    shares, scale = _load_input()
    if shares is None:
        return _error(409, "missing_input", "먼저 격자를 입력하세요")

    square = Square.from_shares(shares, scale)
    square.extend(current_app.extensions.get("rsquare_executor"))

    data = serialize_square(square)
    db_set("rsquare.square", data)
    return jsonify(data)


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@rsquare_bp.route("/setup/srs", methods=["POST"])
def setup_srs():
    """SRS 시드를 저장한다. 커밋 단계에서 이 시드로 SRS를 만든다."""
    body = request.get_json(silent=True) or {}
    seed = body.get("seed")
    if seed is None or str(seed).strip() == "":
        return _error(400, "bad_request", "seed가 필요합니다")
    data = {"seed": str(seed), "curve": _config().curve}
    db_set("rsquare.srs", data)
    db_remove_prefix("rsquare.commitments")
    return jsonify(data)


# ──────────────────────────────────────────────────────────────
# 커밋 / 루트
# ──────────────────────────────────────────────────────────────

@rsquare_bp.route("/commit", methods=["POST"])
def commit():
    """행/열 커밋먼트, 리프 해시, 세 개의 루트를 계산한다."""
    shares, scale = _load_input()
    if shares is None:
        return _error(409, "missing_input", "먼저 격자를 입력하세요")

    config = _config()
    srs_info = db_get("rsquare.srs")
    seed = srs_info["seed"] if srs_info else config.srs_seed
    curve = get_curve(config.curve)

    prover = Prover(
        shares,
        scale,
        seed=seed,
        curve=curve,
        hasher=get_hasher(config.hash),
        executor=current_app.extensions.get("rsquare_executor"),
    )

    row_coms = prover.row_commitments()
    col_coms = prover.col_commitments()
    row_tree = prover.row_tree()
    col_tree = prover.col_tree()
    row_leaves = row_tree.leaves
    col_leaves = col_tree.leaves

    data = {
        "curve": curve.name,
        "hash": config.hash,
        "seeded": seed is not None,
        "max_degree": prover.max_degree,
        "rows": [
            {
                "index": i,
                "commitment": serialize_g1(c),
                "short": g1_short(c),
                "bytes": commitment_hex(c, curve),
                "leaf": serialize_digest(row_leaves[i]),
            }
            for i, c in enumerate(row_coms)
        ],
        "cols": [
            {
                "index": i,
                "commitment": serialize_g1(c),
                "short": g1_short(c),
                "bytes": commitment_hex(c, curve),
                "leaf": serialize_digest(col_leaves[i]),
            }
            for i, c in enumerate(col_coms)
        ],
        "row_root": serialize_digest(row_tree.root()),
        "col_root": serialize_digest(col_tree.root()),
        "root": serialize_digest(prover.root()),
    }
    db_set("rsquare.commitments", data)
    return jsonify(data)


@rsquare_bp.route("/prove", methods=["POST"])
def prove():
    """열기 증명 생성은 이 코어에 구현되어 있지 않다."""
    raise ProofGenerationUnavailable(
        "Opening-proof generation is not part of the encode/commit core"
    )
