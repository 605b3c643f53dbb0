import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import config, configure_logging
from errors import TransportError, ValidationError
from scraper.service import ScrapeService, failure_response, success_response, utc_timestamp

logger = logging.getLogger(__name__)


def create_app(service: Optional[ScrapeService] = None) -> Flask:
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})
    app.config["SCRAPE_SERVICE"] = service or ScrapeService()

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            "message": "Amazon Scraper API",
            "endpoints": {
                "status": "/api/status",
                "scrape": "/api/scrape?keyword=your_keyword",
            },
        })

    @app.route('/api/status', methods=['GET'])
    def status():
        return jsonify({
            "success": True,
            "message": "Amazon Scraper API is running",
            "timestamp": utc_timestamp(),
        })

    @app.route('/api/scrape', methods=['GET'])
    def scrape():
        keyword = request.args.get('keyword')
        scrape_service = app.config["SCRAPE_SERVICE"]
        try:
            result = scrape_service.run(keyword)
        except ValidationError as e:
            return jsonify(failure_response(str(e))), 400
        except TransportError as e:
            logger.error(f"Error in /api/scrape: {e}")
            return jsonify(failure_response(f"Could not fetch Amazon results: {e}")), 502
        except Exception as e:  # noqa: BLE001
            logger.exception("Unexpected error in /api/scrape")
            return jsonify(failure_response(str(e) or "Internal server error")), 500
        return jsonify(success_response(keyword.strip(), result))

    return app


if __name__ == "__main__":
    configure_logging()
    app = create_app()
    logger.info(f"Server running on http://localhost:{config.PORT}")
    logger.info(f"Scrape endpoint: http://localhost:{config.PORT}/api/scrape?keyword=your_keyword")
    app.run(host="0.0.0.0", port=config.PORT)
