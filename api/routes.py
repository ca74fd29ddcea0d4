"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from flask import Flask
from api.handlers import (
    boosts_recent_handler,
    index_handler,
    stream_handler,
    trackers_health_handler,
    trackers_validate_handler,
)


def register_routes(app: Flask):
    app.add_url_rule('/', 'index', index_handler, methods=['GET'])
    app.add_url_rule('/stream/<media_type>/<media_id>.json', 'stream', stream_handler, methods=['GET'])
    app.add_url_rule('/trackers/health', 'trackers_health', trackers_health_handler, methods=['GET'])
    app.add_url_rule('/trackers/validate', 'trackers_validate', trackers_validate_handler, methods=['GET'])
    app.add_url_rule('/boosts/recent', 'boosts_recent', boosts_recent_handler, methods=['GET'])
