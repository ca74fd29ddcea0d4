"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
from flask import Flask
from app.config import Config
from api.routes import register_routes
from cache.redis_client import get_redis_client, init_redis
from providers import available_provider_types

logger = logging.getLogger(__name__)


class Bootstrap:
    @staticmethod
    def initialize_redis() -> None:
        """Inicializa Redis (opcional - sem Redis os caches ficam em memória)"""
        init_redis()

    @staticmethod
    def create_app() -> Flask:
        """Cria e configura aplicação Flask"""
        app = Flask(__name__)

        Bootstrap.initialize_redis()
        register_routes(app)

        if get_redis_client():
            logger.info("[[ Redis Conectado ]]")
        elif Config.REDIS_HOST and Config.REDIS_HOST.strip():
            logger.warning("[[ Redis Não Conectado ]] - usando cache em memória")
        else:
            logger.warning("[[ Redis Não Conectado ]] - REDIS_HOST não configurado")

        logger.info(f"Servidor iniciado na porta {Config.PORT}")
        logger.info(f"Providers disponíveis: {sorted(available_provider_types().keys())}")
        logger.info(f"Providers ativos: {Config.PROVIDERS} | Validação: {Config.VALIDATION_MODE}")

        return app
