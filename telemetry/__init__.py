"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from telemetry.boosts import BoostsFeed, get_boosts_feed

__all__ = ['BoostsFeed', 'get_boosts_feed']
