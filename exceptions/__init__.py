"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from exceptions.magnet_exceptions import (
    MagnetError,
    InvalidMagnetLinkError,
    InvalidInfoHashError
)
from exceptions.tracker_exceptions import (
    TrackerError,
    TrackerConnectionError,
    TrackerDNSError,
    TrackerHTTPError,
    TrackerTimeoutError,
    TrackerRateLimitedError,
    InvalidTrackerError
)
from exceptions.provider_exceptions import (
    ProviderError,
    ProviderUnavailableError,
    ProviderTimeoutError,
    MalformedCandidateError
)
from exceptions.scrape_exceptions import (
    ScrapeError,
    ScrapeUnreachableError,
    ScrapeMalformedError
)

__all__ = [
    'MagnetError',
    'InvalidMagnetLinkError',
    'InvalidInfoHashError',
    'TrackerError',
    'TrackerConnectionError',
    'TrackerDNSError',
    'TrackerHTTPError',
    'TrackerTimeoutError',
    'TrackerRateLimitedError',
    'InvalidTrackerError',
    'ProviderError',
    'ProviderUnavailableError',
    'ProviderTimeoutError',
    'MalformedCandidateError',
    'ScrapeError',
    'ScrapeUnreachableError',
    'ScrapeMalformedError',
]
