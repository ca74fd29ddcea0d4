"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from typing import Dict, Any
from dataclasses import dataclass, asdict


# Resultado da checagem de saúde de um tracker
@dataclass(frozen=True)
class HealthRecord:
    url: str
    ok: bool
    checked_at: float
    last_error: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HealthRecord':
        return cls(
            url=str(data.get('url', '')),
            ok=bool(data.get('ok', False)),
            checked_at=float(data.get('checked_at', 0.0)),
            last_error=str(data.get('last_error') or ''),
        )
