"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import base64
import binascii
from urllib.parse import urlparse, parse_qs
from typing import Dict, List

from exceptions.magnet_exceptions import InvalidMagnetLinkError, InvalidInfoHashError


# Parser para links magnet
class MagnetParser:
    @staticmethod
    # Parse de URI magnet - retorna Dict com info_hash, display_name, trackers, params
    def parse(uri: str) -> Dict:
        parsed = urlparse(uri)
        if parsed.scheme != 'magnet':
            raise InvalidMagnetLinkError(uri, f"esquema inválido: {parsed.scheme}")

        # &amp; aparece em magnets copiados de HTML
        query = parse_qs(parsed.query.replace('&amp;', '&'))

        xt = query.get('xt', [])
        if not xt:
            raise InvalidMagnetLinkError(uri, "parâmetro xt não encontrado")

        xt_value = xt[0]
        if not xt_value.lower().startswith('urn:btih:'):
            raise InvalidMagnetLinkError(uri, "formato de xt inválido")

        info_hash_bytes = MagnetParser.decode_info_hash(xt_value[9:])

        display_name = query['dn'][0] if 'dn' in query else ''
        trackers: List[str] = [tr.strip() for tr in query.get('tr', []) if tr.strip()]

        params = {}
        for key, values in query.items():
            if key not in ['xt', 'dn', 'tr']:
                params[key] = values[0] if values else ''

        return {
            'info_hash': info_hash_bytes.hex(),
            'display_name': display_name,
            'trackers': trackers,
            'params': params
        }

    @staticmethod
    # Decodifica info_hash (hex de 40 ou base32 de 32) para os 20 bytes brutos
    def decode_info_hash(encoded: str) -> bytes:
        encoded = (encoded or '').strip()
        if len(encoded) == 40:
            try:
                return bytes.fromhex(encoded)
            except ValueError:
                raise InvalidInfoHashError(encoded, "hex inválido")
        elif len(encoded) == 32:
            try:
                return base64.b32decode(encoded.upper())
            except (binascii.Error, ValueError):
                raise InvalidInfoHashError(encoded, "base32 inválido")
        raise InvalidInfoHashError(encoded, f"tamanho inválido: {len(encoded)}")

    @staticmethod
    # Retorna info_hash em hex minúsculo ou string vazia
    def to_hex(encoded: str) -> str:
        try:
            return MagnetParser.decode_info_hash(encoded).hex()
        except InvalidInfoHashError:
            return ''
