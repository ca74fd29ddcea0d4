"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""


# Exceção base para erros de magnet
class MagnetError(ValueError):
    tag = "magnet_error"


# Link magnet inválido (esquema, xt ausente, query ilegível)
class InvalidMagnetLinkError(MagnetError):
    tag = "invalid_magnet"

    def __init__(self, magnet_link: str, reason: str = ""):
        self.magnet_link = magnet_link
        self.reason = reason
        preview = magnet_link[:80] + "..." if len(magnet_link) > 80 else magnet_link
        message = f"Link magnet inválido: {preview}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


# Info hash que não é hex de 40 nem base32 de 32 caracteres
class InvalidInfoHashError(MagnetError):
    tag = "invalid_info_hash"

    def __init__(self, info_hash: str, reason: str = ""):
        self.info_hash = info_hash
        self.reason = reason
        message = f"Info hash inválido: {info_hash}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)
