import asyncio

import pytest

from cache.health_cache import HealthCache
from cache.stores import MemoryStore
from exceptions.tracker_exceptions import TrackerTimeoutError
from tracker.rate_limiter import UdpTokenBucket
from tracker.udp_connect import build_connect_request, parse_connect_response, udp_connect
from tracker.validator import TrackerValidator, ValidationMode

UDP_OK = "udp://ok.example:6969/announce"
UDP_DNS_FAIL = "udp://gone.example:6969/announce"
HTTP_OK = "http://web.example:80/announce"
HTTP_DOWN = "https://down.example/announce"


class Probes:
    """Resolvedor e probes falsos com contagem de chamadas."""

    def __init__(self, dead_hosts=(), http_down=(), udp_fail=()):
        self.dead_hosts = set(dead_hosts)
        self.http_down = set(http_down)
        self.udp_fail = set(udp_fail)
        self.resolve_calls = []
        self.http_calls = []
        self.udp_calls = []

    async def resolve(self, host):
        self.resolve_calls.append(host)
        return host not in self.dead_hosts

    async def http(self, origin, timeout):
        self.http_calls.append((origin, timeout))
        return origin not in self.http_down

    async def udp(self, url, host, port, timeout):
        self.udp_calls.append(url)
        if url in self.udp_fail:
            raise TrackerTimeoutError(url, "connect")
        return 42


def make_validator(probes, bucket=None, sleeps=None):
    async def fake_sleep(delay):
        if sleeps is not None:
            sleeps.append(delay)

    return TrackerValidator(
        cache=HealthCache(store=MemoryStore()),
        rate_limiter=bucket or UdpTokenBucket(capacity=20, window=60),
        resolver=probes.resolve,
        http_probe=probes.http,
        udp_probe=probes.udp,
        sleep=fake_sleep,
    )


@pytest.mark.asyncio
async def test_off_mode_returns_input_unchanged():
    probes = Probes()
    validator = make_validator(probes)
    urls = [HTTP_DOWN, UDP_OK, UDP_OK, "ws://x.example/announce"]

    result = await validator.filter_by_health(urls, "off", 0)

    assert result == urls
    assert probes.resolve_calls == []


@pytest.mark.asyncio
async def test_basic_mode_dns_and_http_checks():
    probes = Probes(dead_hosts={"gone.example"}, http_down={"https://down.example"})
    validator = make_validator(probes)

    result = await validator.filter_by_health([UDP_OK, UDP_DNS_FAIL, HTTP_OK, HTTP_DOWN], "basic", 0)

    assert set(result) == {UDP_OK, HTTP_OK}
    assert probes.udp_calls == []
    assert validator.cache.get(UDP_DNS_FAIL).last_error == "dns"
    assert validator.cache.get(HTTP_DOWN).last_error == "http"


@pytest.mark.asyncio
async def test_missing_host_is_tagged():
    validator = make_validator(Probes())

    record = await validator.check("udp:///announce", "basic")

    assert record.ok is False
    assert record.last_error == "no-host"


@pytest.mark.asyncio
async def test_retries_with_exponential_backoff():
    attempts = []

    async def flaky_resolver(host):
        attempts.append(host)
        return len(attempts) >= 3

    sleeps = []
    probes = Probes()
    validator = make_validator(probes, sleeps=sleeps)
    validator._resolve = flaky_resolver

    record = await validator.check(UDP_OK, "basic")

    assert record.ok is True
    assert len(attempts) == 3
    assert sleeps == pytest.approx([0.3, 0.6])


@pytest.mark.asyncio
async def test_failure_after_three_attempts_is_cached():
    probes = Probes(dead_hosts={"gone.example"})
    validator = make_validator(probes)

    first = await validator.check(UDP_DNS_FAIL, "basic")
    second = await validator.check(UDP_DNS_FAIL, "basic")

    assert first.ok is False
    assert second == first
    assert len(probes.resolve_calls) == 3


@pytest.mark.asyncio
async def test_aggressive_mode_uses_udp_handshake_and_http_second_chance():
    probes = Probes(udp_fail={UDP_DNS_FAIL}, http_down={"https://down.example"})
    validator = make_validator(probes)

    result = await validator.filter_by_health([UDP_OK, UDP_DNS_FAIL, HTTP_DOWN], "aggressive", 0)

    assert result == [UDP_OK]
    assert UDP_OK in probes.udp_calls
    assert validator.cache.get(UDP_DNS_FAIL).last_error == "udp"
    # Segunda chance HTTP com timeout maior
    assert ("https://down.example", 4.0) in probes.http_calls


@pytest.mark.asyncio
async def test_udp_rate_limit_fails_fast_without_caching(clock):
    probes = Probes()
    bucket = UdpTokenBucket(capacity=1, window=60, clock=clock)
    validator = make_validator(probes, bucket=bucket)
    other = "udp://other.example:6969/announce"

    first = await validator.check(UDP_OK, "aggressive")
    second = await validator.check(other, "aggressive")

    assert first.ok is True
    assert second.ok is False
    assert second.last_error == "rate_limited"
    assert probes.udp_calls == [UDP_OK]
    assert validator.cache.get(other) is None


@pytest.mark.asyncio
async def test_limit_stops_workers_early():
    probes = Probes()
    validator = make_validator(probes)
    urls = [f"udp://host{i}.example:80/announce" for i in range(40)]

    result = await validator.filter_by_health(urls, "basic", 3)

    assert len(result) == 3
    assert set(result) <= set(urls)
    # No máximo um lote de workers passa do limite
    assert len(probes.resolve_calls) < len(urls)


@pytest.mark.asyncio
async def test_progress_callback_and_callback_errors_are_ignored():
    validator = make_validator(Probes(dead_hosts={"gone.example"}))
    events = []

    def on_progress(event):
        events.append(event)
        raise RuntimeError("consumer bug")

    result = await validator.filter_by_health([UDP_OK, UDP_DNS_FAIL], "basic", 0, on_progress=on_progress)

    assert result == [UDP_OK]
    assert [e.processed for e in events] == [1, 2]
    assert events[-1].healthy == 1
    assert events[-1].total == 2


@pytest.mark.asyncio
async def test_iter_health_ends_with_done_event():
    validator = make_validator(Probes(dead_hosts={"gone.example"}))

    events = [event async for event in validator.iter_health([UDP_OK, UDP_DNS_FAIL, HTTP_OK], "basic")]

    final = events[-1]
    assert final.done is True
    assert final.total == 3
    assert set(final.results) == {UDP_OK, HTTP_OK}
    assert all(not event.done for event in events[:-1])


@pytest.mark.asyncio
async def test_concurrent_checks_of_same_url_share_one_probe():
    gate = asyncio.Event()
    calls = []

    async def slow_resolver(host):
        calls.append(host)
        await gate.wait()
        return True

    validator = make_validator(Probes())
    validator._resolve = slow_resolver

    first = asyncio.ensure_future(validator.check(UDP_OK, "basic"))
    second = asyncio.ensure_future(validator.check(UDP_OK, "basic"))
    await asyncio.sleep(0)
    gate.set()
    records = await asyncio.gather(first, second)

    assert records[0] == records[1]
    assert calls == ["ok.example"]


def test_connect_packet_layout():
    packet = build_connect_request(0x01020304)

    assert len(packet) == 16
    assert packet[:8] == bytes.fromhex("0000041727101980")
    assert packet[8:12] == b"\x00\x00\x00\x00"
    assert packet[12:] == b"\x01\x02\x03\x04"


def test_connect_response_must_echo_action_and_transaction():
    good = b"\x00\x00\x00\x00" + (7).to_bytes(4, "big") + (99).to_bytes(8, "big")

    assert parse_connect_response(good, 7) == 99
    assert parse_connect_response(good, 8) is None
    assert parse_connect_response(b"\x00\x00\x00\x01" + good[4:], 7) is None
    assert parse_connect_response(good[:10], 7) is None


class _TrackerServer(asyncio.DatagramProtocol):
    def __init__(self, reply=True):
        self.reply = reply
        self.transport = None

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        if not self.reply or len(data) < 16:
            return
        transaction_id = data[12:16]
        self.transport.sendto(b"\x00\x00\x00\x00" + transaction_id + (1234).to_bytes(8, "big"), addr)


async def _start_server(reply=True):
    loop = asyncio.get_running_loop()
    transport, _ = await loop.create_datagram_endpoint(
        lambda: _TrackerServer(reply), local_addr=("127.0.0.1", 0)
    )
    return transport, transport.get_extra_info("sockname")[1]


@pytest.mark.asyncio
async def test_udp_connect_handshake_against_local_tracker():
    transport, port = await _start_server()
    try:
        connection_id = await udp_connect(f"udp://127.0.0.1:{port}/announce", "127.0.0.1", port, 1.0)
    finally:
        transport.close()

    assert connection_id == 1234


@pytest.mark.asyncio
async def test_udp_connect_times_out_on_silent_tracker():
    transport, port = await _start_server(reply=False)
    try:
        with pytest.raises(TrackerTimeoutError):
            await udp_connect(f"udp://127.0.0.1:{port}/announce", "127.0.0.1", port, 0.2)
    finally:
        transport.close()


class CountingProbes(Probes):
    """Mede quantas resoluções DNS rodam ao mesmo tempo."""

    def __init__(self):
        super().__init__()
        self.active = 0
        self.peak = 0

    async def resolve(self, host):
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        return True


@pytest.mark.asyncio
@pytest.mark.parametrize("count, expected_peak", [(30, 8), (3, 3)])
async def test_worker_pool_is_bounded(count, expected_peak):
    probes = CountingProbes()
    validator = make_validator(probes)
    urls = [f"udp://t{index}.example:6969/announce" for index in range(count)]

    result = await validator.filter_by_health(urls, "basic", 0)

    assert len(result) == count
    assert probes.peak == expected_peak
