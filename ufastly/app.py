"""
Servicio de contenido con headers de caché para Fastly y purga al publicar.
"""
import time
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from flask import Flask, Response, g, request, jsonify

from ufastly.config import FastlyConfig, config as env_config
from ufastly.content import Content, ContentRepository
from ufastly.events import content_published, request_prepared
from ufastly.integration import FastlyCache
from ufastly.purge import FastlyClient

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Dict[str, Any]] = None,
    fastly_config: Optional[FastlyConfig] = None,
    purge_client: Optional[FastlyClient] = None,
    repository: Optional[ContentRepository] = None,
) -> Flask:
    """Factory para crear la aplicación Flask"""
    app = Flask(__name__)

    # Configuración 12-Factor desde ENV
    app.config.update({
        'PORT': env_config.app.port,
        'HOST': env_config.app.host,
        'DEBUG': env_config.app.debug,
        'VERSION': env_config.app.version,
    })

    if config:
        app.config.update(config)

    repo = repository if repository is not None else ContentRepository()
    app.extensions['content_repository'] = repo
    FastlyCache(app, fastly_config=fastly_config or env_config.fastly, client=purge_client)

    @app.before_request
    def start_timer():
        request.start_time = time.time()

    @app.after_request
    def prepare_response(response: Response) -> Response:
        """Emite request_prepared y loguea la respuesta con sus headers de caché"""
        duration = time.time() - getattr(request, 'start_time', time.time())

        request_prepared.send(app, content=g.get('content'), response=response)

        response.headers['X-Response-Time'] = f"{duration:.4f}"

        logger.info(
            "RESPONSE",
            extra={
                'method': request.method,
                'path': request.path,
                'status': response.status_code,
                'duration_ms': duration * 1000,
                'cache_control': response.headers.get('Cache-Control', 'none'),
            }
        )

        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'version': app.config['VERSION']
        })

    @app.route('/content/<path:slug>', methods=['GET'])
    def show_content(slug: str):
        """Sirve contenido publicado; lo marca como contenido resuelto del request"""
        content = repo.get(slug)
        if content is None or not content.published:
            return jsonify({'error': 'Not Found', 'path': request.path}), 404

        g.content = content
        return jsonify({
            'slug': content.slug,
            'title': content.title,
            'body': content.body,
        })

    @app.route('/api/content', methods=['GET'])
    def list_content():
        return jsonify({'items': [item.to_dict() for item in repo.all()]})

    @app.route('/api/content', methods=['POST'])
    def save_content():
        """Crea o reemplaza un item de contenido"""
        payload = request.get_json(silent=True) or {}
        slug = payload.get('slug')
        if not slug:
            return jsonify({'error': 'Bad Request', 'detail': 'slug is required'}), 400

        content = repo.add(Content(
            slug=slug,
            title=payload.get('title', ''),
            body=payload.get('body', ''),
            published=bool(payload.get('published', False)),
            properties=payload.get('properties') or {},
        ))
        return jsonify(content.to_dict()), 201

    @app.route('/api/content/<path:slug>/publish', methods=['POST'])
    def publish_content(slug: str):
        """Publica el contenido y emite content_published"""
        content = repo.publish(slug)
        if content is None:
            return jsonify({'error': 'Not Found', 'path': request.path}), 404

        logger.info(f"PUBLISH slug={slug}")
        content_published.send(app, content=content)

        return jsonify({
            'status': 'published',
            'slug': slug,
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 200

    @app.route('/api/content/<path:slug>/unpublish', methods=['POST'])
    def unpublish_content(slug: str):
        content = repo.unpublish(slug)
        if content is None:
            return jsonify({'error': 'Not Found', 'path': request.path}), 404
        return jsonify({'status': 'unpublished', 'slug': slug}), 200

    @app.errorhandler(404)
    def not_found(error):
        """Handler para 404"""
        return jsonify({
            'error': 'Not Found',
            'path': request.path
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handler para 500"""
        logger.error(f"Internal error: {error}")
        return jsonify({
            'error': 'Internal Server Error'
        }), 500

    return app


def main():
    """Punto de entrada principal"""
    env_config.validate()
    logging.getLogger().setLevel(env_config.app.log_level.upper())

    app = create_app()
    port = app.config['PORT']
    host = app.config['HOST']

    logger.info(f"Starting content server on {host}:{port}")
    app.run(host=host, port=port, debug=app.config['DEBUG'])


if __name__ == '__main__':
    main()
