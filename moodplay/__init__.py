from flask import Flask, jsonify, request, g
import time
import logging
from flask_cors import CORS

from .src.config import Config
from .routes.health import bp as health_bp
from .routes.assessment import bp as assessment_bp
from .routes.recommendations import bp as recommendations_bp
from .routes.catalog import bp as catalog_bp


def create_app():
    app = Flask(__name__)
    app.config.from_object(Config)

    origins = Config.CORS_ORIGINS if hasattr(Config, 'CORS_ORIGINS') else '*'
    CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)

    app.register_blueprint(health_bp)
    app.register_blueprint(assessment_bp, url_prefix="/assessment")
    app.register_blueprint(recommendations_bp, url_prefix="/recommendations")
    app.register_blueprint(catalog_bp, url_prefix="/catalog")

    # Logging simple de todas las peticiones entrantes
    logging.basicConfig(level=logging.DEBUG if getattr(Config, 'DEBUG', True) else logging.INFO)

    @app.before_request
    def _start_timer():
        g._start_time = time.time()

    # anger_level lo fijan las rutas que calculan un puntaje
    @app.after_request
    def _log_request(resp):
        started = getattr(g, '_start_time', None)
        dur_ms = int((time.time() - started) * 1000) if started else -1
        logging.info(
            "%s %s -> %s (%d ms) level=%s ip=%s",
            request.method,
            request.path,
            resp.status_code,
            dur_ms,
            getattr(g, 'anger_level', '-'),
            request.headers.get('X-Forwarded-For', request.remote_addr),
        )
        return resp

    @app.get("/")
    def root():
        return jsonify({"name": "moodplay", "status": "ok"}), 200

    return app
