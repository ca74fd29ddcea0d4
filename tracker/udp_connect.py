"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

import asyncio
import logging
import os
import random
import socket
import struct
from typing import Optional

from exceptions.tracker_exceptions import (
    TrackerConnectionError,
    TrackerDNSError,
    TrackerTimeoutError,
)

logger = logging.getLogger(__name__)

PROTOCOL_ID = 0x41727101980
ACTION_CONNECT = 0

_random = random.Random(int.from_bytes(os.urandom(8), "big"))


def generate_transaction_id() -> int:
    return _random.randint(0, 0xFFFFFFFF)


def build_connect_request(transaction_id: int) -> bytes:
    return struct.pack(">QLL", PROTOCOL_ID, ACTION_CONNECT, transaction_id)


# Retorna connection_id se a resposta ecoa action=0 e o transaction_id; None caso contrário
def parse_connect_response(data: bytes, transaction_id: int) -> Optional[int]:
    if len(data) < 16:
        return None
    action, resp_tid, connection_id = struct.unpack(">LLQ", data[:16])
    if action != ACTION_CONNECT or resp_tid != transaction_id:
        return None
    return connection_id


# Protocolo asyncio do handshake CONNECT (BEP-0015); o future é resolvido uma única vez
class _ConnectProtocol(asyncio.DatagramProtocol):
    def __init__(self, tracker_url: str, transaction_id: int, future: asyncio.Future):
        self.tracker_url = tracker_url
        self.transaction_id = transaction_id
        self.future = future

    def connection_made(self, transport):
        transport.sendto(build_connect_request(self.transaction_id))

    def datagram_received(self, data, addr):
        if self.future.done():
            return
        connection_id = parse_connect_response(data, self.transaction_id)
        if connection_id is not None:
            self.future.set_result(connection_id)

    def error_received(self, exc):
        if not self.future.done():
            self.future.set_exception(TrackerConnectionError(self.tracker_url, str(exc)))

    def connection_lost(self, exc):
        if not self.future.done():
            self.future.set_exception(TrackerConnectionError(self.tracker_url, "socket fechado"))


async def udp_connect(tracker_url: str, host: str, port: int, timeout: float) -> int:
    """Executa o handshake CONNECT e retorna o connection_id.

    Levanta TrackerDNSError, TrackerTimeoutError ou TrackerConnectionError.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    transaction_id = generate_transaction_id()

    try:
        transport, _ = await asyncio.wait_for(
            loop.create_datagram_endpoint(
                lambda: _ConnectProtocol(tracker_url, transaction_id, future),
                remote_addr=(host, port),
            ),
            timeout,
        )
    except socket.gaierror as e:
        raise TrackerDNSError(tracker_url, str(e))
    except asyncio.TimeoutError:
        raise TrackerTimeoutError(tracker_url, "resolve")
    except OSError as e:
        raise TrackerConnectionError(tracker_url, str(e))

    try:
        return await asyncio.wait_for(future, timeout)
    except asyncio.TimeoutError:
        raise TrackerTimeoutError(tracker_url, "connect")
    finally:
        transport.close()
