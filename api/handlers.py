"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import logging
from datetime import datetime
from typing import Optional

from flask import jsonify, request

from api.services.stream_service import StreamService
from app.config import Config
from providers import available_provider_types

logger = logging.getLogger(__name__)

_stream_service: Optional[StreamService] = None


def get_stream_service() -> StreamService:
    global _stream_service
    if _stream_service is None:
        _stream_service = StreamService()
    return _stream_service


def set_stream_service(service: Optional[StreamService]) -> None:
    global _stream_service
    _stream_service = service


def index_handler():
    endpoints = {
        '/stream/<type>/<id>.json': {
            'method': 'GET',
            'description': 'Streams agregados com trackers saudáveis anexados',
            'query_params': {
                'mode': 'modo de validação (off, basic, aggressive)',
                'limit': 'máximo de trackers saudáveis (0 = sem limite)',
                'max_trackers': 'trackers anexados por magnet (0 = todos)',
                'providers': 'lista separada por vírgula',
                'sort': 'campos de ordenação separados por vírgula',
                'order': 'asc ou desc',
            }
        },
        '/trackers/health': {
            'method': 'GET',
            'description': 'Estatísticas do cache de saúde dos trackers',
        },
        '/trackers/validate': {
            'method': 'GET',
            'description': 'Valida a lista atual de trackers',
            'query_params': {
                'mode': 'modo de validação (off, basic, aggressive)',
                'limit': 'máximo de trackers saudáveis (0 = sem limite)',
            }
        },
        '/boosts/recent': {
            'method': 'GET',
            'description': 'Eventos recentes de otimização',
        },
    }

    return jsonify({
        'time': datetime.now().strftime('%A, %d-%b-%y %H:%M:%S UTC'),
        'build': 'DFStreams v1.0.0',
        'endpoints': endpoints,
        'configured_providers': Config.PROVIDERS,
        'available_providers': sorted(available_provider_types().keys()),
        'validation_mode': Config.VALIDATION_MODE,
    })


def stream_handler(media_type: str, media_id: str):
    log_prefix = f"[{media_type}/{media_id}]"
    try:
        args = request.args.to_dict()
        streams = get_stream_service().get_streams(media_type, media_id, args)
        logger.info(f"{log_prefix} {len(streams)} streams")
        return jsonify({'streams': streams})
    except ValueError as e:
        error_msg = str(e).split('\n')[0][:100]
        logger.warning(f"{log_prefix} Validation error: {error_msg}")
        return jsonify({'error': str(e), 'streams': []}), 400
    except Exception as e:
        error_type = type(e).__name__
        error_msg = str(e).split('\n')[0][:100] if str(e) else str(e)
        logger.error(f"{log_prefix} Unexpected error: {error_type} - {error_msg}", exc_info=True)
        return jsonify({'error': 'Internal server error', 'streams': []}), 500


def trackers_health_handler():
    return jsonify(get_stream_service().health_stats())


def trackers_validate_handler():
    try:
        return jsonify(get_stream_service().validate_trackers(request.args.to_dict()))
    except ValueError as e:
        logger.warning(f"[Trackers] Validation error: {str(e)[:100]}")
        return jsonify({'error': str(e), 'trackers': []}), 400
    except Exception as e:
        logger.error(f"[Trackers] Unexpected error: {type(e).__name__} - {str(e)[:100]}", exc_info=True)
        return jsonify({'error': 'Internal server error', 'trackers': []}), 500


def boosts_recent_handler():
    items = get_stream_service().recent_boosts()
    return jsonify({'items': items, 'count': len(items)})
