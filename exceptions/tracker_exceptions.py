"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""


# Exceção base para erros de tracker
class TrackerError(Exception):
    tag = "tracker_error"


# Erro de conexão com tracker
class TrackerConnectionError(TrackerError):
    tag = "connection_failure"

    def __init__(self, tracker_url: str, reason: str = ""):
        self.tracker_url = tracker_url
        self.reason = reason
        message = f"Erro ao conectar ao tracker: {tracker_url}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


# Host do tracker não resolve no DNS
class TrackerDNSError(TrackerConnectionError):
    tag = "dns_failure"


# Origem HTTP(S) do tracker não respondeu com 2xx/3xx
class TrackerHTTPError(TrackerConnectionError):
    tag = "http_failure"


# Timeout ao conectar ao tracker
class TrackerTimeoutError(TrackerError):
    tag = "udp_timeout"

    def __init__(self, tracker_url: str, operation: str = ""):
        self.tracker_url = tracker_url
        self.operation = operation
        message = f"Timeout ao conectar ao tracker: {tracker_url}"
        if operation:
            message += f" (operação: {operation})"
        super().__init__(message)


# Sem token UDP disponível na janela atual
class TrackerRateLimitedError(TrackerError):
    tag = "rate_limited"

    def __init__(self, tracker_url: str):
        self.tracker_url = tracker_url
        super().__init__(f"Limite de checagens UDP atingido: {tracker_url}")


# Tracker inválido
class InvalidTrackerError(TrackerError):
    tag = "no-host"

    def __init__(self, tracker_url: str, reason: str = ""):
        self.tracker_url = tracker_url
        self.reason = reason
        message = f"Tracker inválido: {tracker_url}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)
