"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

from typing import Optional, List
from dataclasses import dataclass, field


# Metadados técnicos extraídos do nome do release
@dataclass
class ReleaseInfo:
    name: str = ''
    resolution: Optional[str] = None
    source: Optional[str] = None
    codec: Optional[str] = None
    hdr: Optional[str] = None
    audio: Optional[str] = None
    group: Optional[str] = None
    size_str: Optional[str] = None
    size_bytes: Optional[int] = None
    languages: List[str] = field(default_factory=list)

    def detail_count(self) -> int:
        """Quantidade de campos técnicos reconhecidos"""
        fields = (self.source, self.codec, self.hdr, self.audio, self.resolution, self.group)
        return sum(1 for value in fields if value)
