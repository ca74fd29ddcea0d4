"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from core.aggregator import AggregateOptions, StreamAggregator
from core.enrichers.swarm_enricher import SwarmEnricher, SwarmOptions
from core.processors.stream_processor import SortConfig

__all__ = [
    'AggregateOptions',
    'StreamAggregator',
    'SwarmEnricher',
    'SwarmOptions',
    'SortConfig',
]
