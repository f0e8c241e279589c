"""
rsquare 인터랙티브 스터디 앱
============================

2D Reed-Solomon 확장과 행/열 KZG 커밋 파이프라인을 단계별로 실행해 보는
Flask 애플리케이션. 세션 상태는 TinyDB MemoryStorage에만 둔다 (영속 저장 없음).

실행:
    $ RSQUARE_SRS_SEED=42 flask --app app run
"""

import atexit
import logging
from concurrent.futures import ThreadPoolExecutor

from flask import Flask, jsonify
from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from rsquare.config import load_config
from rsquare_routes import rsquare_bp


def create_app(config=None):
    """Flask 애플리케이션을 만든다.

    Args:
        config: Flask 설정 dict (선택). "RSQUARE_CONFIG"에 RSquareConfig를 주면
                환경 변수 대신 그 설정을 쓴다.
    """
    app = Flask(__name__)
    app.secret_key = "key"
    if config:
        app.config.update(config)

    rsquare_config = app.config.get("RSQUARE_CONFIG") or load_config()
    logging.basicConfig(level=rsquare_config.log_level)

    app.extensions["rsquare_config"] = rsquare_config
    app.extensions["rsquare_db"] = TinyDB(storage=MemoryStorage).table("rsquare")
    executor = None
    if rsquare_config.max_workers:
        # 앱이 프로세스 수명 동안 소유하고 종료 시 정리한다
        executor = ThreadPoolExecutor(max_workers=rsquare_config.max_workers)
        atexit.register(executor.shutdown)
    app.extensions["rsquare_executor"] = executor

    app.register_blueprint(rsquare_bp)

    @app.route("/")
    def index():
        return jsonify({
            "name": "rsquare",
            "endpoints": sorted(
                rule.rule for rule in app.url_map.iter_rules() if rule.endpoint != "static"
            ),
        })

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
