"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import re

# Regexes de release (ordem importa: a primeira ocorrência no texto vence)
REGEX_RESOLUTION = re.compile(r'(2160p|1080p|720p|480p)', re.IGNORECASE)
REGEX_SOURCE = re.compile(
    r'(?<![A-Za-z0-9])(WEB[-_. ]?DL|WEB[-_. ]?Rip|Blu[-_. ]?Ray|BDRip|BRRip|HDRip|DVDRip|HDTV|'
    r'(?:HD)?CAM|TELESYNC|(?:HD)?TS)(?![A-Za-z0-9])',
    re.IGNORECASE
)
REGEX_CODEC = re.compile(
    r'(?<![A-Za-z0-9])(HEVC|x265|H\.?265|x264|H\.?264|AV1|VP9|XviD|DivX|MPEG-?4)(?![A-Za-z0-9])',
    re.IGNORECASE
)
REGEX_HDR10_PLUS = re.compile(r'HDR10(?:\+|Plus)', re.IGNORECASE)
REGEX_DOLBY_VISION = re.compile(r'Dolby[ \-.]?Vision|\bDV\b|\bDoVi\b', re.IGNORECASE)
REGEX_HDR10 = re.compile(r'HDR10(?![+\w])', re.IGNORECASE)
REGEX_HDR = re.compile(r'\bHDR\b', re.IGNORECASE)
REGEX_AUDIO = re.compile(
    r'(?<![A-Za-z0-9])(Atmos|DDP(?:\.?[257]\.[01])?|E-?AC-?3|AC3|DTS(?:-HD)?(?: MA)?|TrueHD|AAC|Opus)(?![A-Za-z])',
    re.IGNORECASE
)
REGEX_GROUP_DASH = re.compile(r'-(\w+)(?:\.[a-z0-9]{2,4})?$', re.IGNORECASE)
REGEX_GROUP_BRACKET = re.compile(r'\[(\w+)\]$')
REGEX_SIZE = re.compile(r'(\d+(?:[.,]\d+)?)\s*(TB|TiB|GB|GiB|MB|MiB|KB|KiB)\b', re.IGNORECASE)

SIZE_MULTIPLIERS = {
    'TB': 1024 ** 4,
    'GB': 1024 ** 3,
    'MB': 1024 ** 2,
    'KB': 1024,
}

# Tokens de idioma -> nome de exibição (na ordem de exibição)
LANGUAGE_PATTERNS = [
    ('Multi', re.compile(r'\b(?:multi|multi[-_. ]lang|multi[-_. ]audio)\b', re.IGNORECASE)),
    ('Dual', re.compile(r'\bdual\b', re.IGNORECASE)),
    ('English', re.compile(r'\b(?:eng|english)\b', re.IGNORECASE)),
    ('Spanish', re.compile(r'\b(?:spa|spanish|español|latino|castellano)\b', re.IGNORECASE)),
    ('French', re.compile(r'\b(?:fre|fra|french|francais|français|vff|truefrench)\b', re.IGNORECASE)),
    ('Italian', re.compile(r'\b(?:ita|italian|italiano)\b', re.IGNORECASE)),
    ('German', re.compile(r'\b(?:ger|deu|german|deutsch)\b', re.IGNORECASE)),
    ('Russian', re.compile(r'\b(?:rus|russian|русский)\b', re.IGNORECASE)),
    ('Portuguese', re.compile(r'\b(?:por|portuguese|português|portugues|dublado|pt[-_ ]?br)\b', re.IGNORECASE)),
    ('Polish', re.compile(r'\b(?:pol|polish|polski)\b', re.IGNORECASE)),
    ('Turkish', re.compile(r'\b(?:tur|turkish|türkçe)\b', re.IGNORECASE)),
    ('Arabic', re.compile(r'\b(?:ara|arabic)\b', re.IGNORECASE)),
    ('Hindi', re.compile(r'\b(?:hin|hindi)\b', re.IGNORECASE)),
    ('Japanese', re.compile(r'\b(?:jpn|japanese)\b|日本語', re.IGNORECASE)),
    ('Korean', re.compile(r'\b(?:kor|korean)\b|한국어', re.IGNORECASE)),
    ('Chinese', re.compile(r'\b(?:chi|zho|chinese)\b|中文|國語', re.IGNORECASE)),
]

# Separadores de release viram espaço antes da busca de idiomas
REGEX_RELEASE_SEPARATORS = re.compile(r'[._]+')
REGEX_SOURCE_SEPARATORS = re.compile(r'[-_. ]')
