"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""


# Exceção base para erros de provider
class ProviderError(Exception):
    tag = "provider_error"


# Provider fora do ar (probe falhou ou resposta inválida)
class ProviderUnavailableError(ProviderError):
    tag = "provider_unavailable"

    def __init__(self, provider: str, reason: str = ""):
        self.provider = provider
        self.reason = reason
        message = f"Provider indisponível: {provider}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


# Provider não respondeu dentro do orçamento de tempo
class ProviderTimeoutError(ProviderError):
    tag = "provider_timeout"

    def __init__(self, provider: str, timeout: float):
        self.provider = provider
        self.timeout = timeout
        super().__init__(f"Timeout ao buscar streams em {provider} ({timeout}s)")


# Candidato sem magnet nem info_hash
class MalformedCandidateError(ProviderError):
    tag = "malformed_candidate"

    def __init__(self, provider: str, reason: str = ""):
        self.provider = provider
        self.reason = reason
        message = f"Candidato inválido de {provider}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)
