import asyncio
import time
from enum import Enum

from codec import decode, encode
from utils.timestamp import format_timestamp, now_nanos

# 2020-01-01T00:00:00Z
MIN_SANE_NANOS = 1_577_836_800 * 1_000_000_000


class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"


class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name,
                "status": self.status.value,
                "msg": self.msg}


class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}


class HealthChecker:
    def __init__(self, ttl=1.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._start_time = time.time()

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def check(self):
        now = time.time()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = []
        for name, (check_fn, is_critical) in self._checks.items():
            try:
                result = await asyncio.wait_for(check_fn(), timeout=5)
            except asyncio.TimeoutError:
                result = CheckResult(name, Status.FAIL, "timeout")
            except Exception as exc:
                result = CheckResult(name, Status.FAIL, str(exc))
            results.append((result, is_critical))

        status = Status.OK
        for result, is_critical in results:
            if result.status == Status.FAIL and is_critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache


# Checks
async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)


def create_entropy_check(random_source=None):
    """Issue and decode a probe identifier through the given random source."""
    kwargs = {"random_source": random_source} if random_source else {}

    async def check():
        probe = encode(0, **kwargs)
        if decode(probe) != 0:
            return CheckResult("entropy", Status.FAIL, "probe mismatch")
        return CheckResult("entropy", Status.OK)
    return check


def create_clock_check(clock=now_nanos):
    last = [None]

    async def check():
        now = clock()
        if now < MIN_SANE_NANOS:
            return CheckResult("clock", Status.FAIL, f"pre-2020 {now}")
        if last[0] is not None and now < last[0]:
            last[0] = now
            return CheckResult("clock", Status.DEGRADED, "regressed")
        last[0] = now
        return CheckResult("clock", Status.OK)
    return check
