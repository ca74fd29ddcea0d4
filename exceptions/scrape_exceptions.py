"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""


# Exceção base para erros de scrape (BEP48)
class ScrapeError(Exception):
    tag = "scrape_error"

    def __init__(self, scrape_url: str, reason: str = ""):
        self.scrape_url = scrape_url
        self.reason = reason
        message = f"{self.__class__.__name__}: {scrape_url}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


# Tracker não respondeu (rede, timeout, status != 200)
class ScrapeUnreachableError(ScrapeError):
    tag = "scrape_unreachable"


# Resposta bencode inválida ou sem o info_hash pedido
class ScrapeMalformedError(ScrapeError):
    tag = "scrape_malformed"
