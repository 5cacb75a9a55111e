"""Unit tests for the country UUIDv8 codec."""

import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from codec import (
    MAX_COUNTRY_CODE,
    as_bytes,
    decode,
    encode,
    is_country_id,
    timestamp_ns,
    timestamp_of,
    variant_of,
    version_of,
)
from core.errors import IdError, RandomnessError, VersionMismatchError

COUNTRIES = {
    "Russia": 643,
    "USA": 840,
    "Germany": 276,
    "Ukraine": 804,
    "Japan": 392,
    "Brazil": 76,
    "China": 156,
    "India": 356,
    "France": 250,
    "Canada": 124,
    "Australia": 36,
    "Mexico": 484,
    "Spain": 724,
    "Italy": 380,
    "UnitedKingdom": 826,
}


class TestEncode:
    """Tests for identifier generation."""

    @pytest.mark.parametrize("code", list(COUNTRIES.values()), ids=list(COUNTRIES))
    def test_version_is_8(self, code):
        """Top nibble of byte 6 is 1000b."""
        raw = encode(code).bytes
        assert (raw[6] & 0xF0) >> 4 == 8

    @pytest.mark.parametrize("code", list(COUNTRIES.values()), ids=list(COUNTRIES))
    def test_variant_is_rfc4122(self, code):
        """Top two bits of byte 8 are 10b."""
        raw = encode(code).bytes
        assert (raw[8] & 0xC0) >> 6 == 2

    def test_not_nil(self):
        """Generated identifier is never the nil UUID."""
        assert encode(643) != uuid.UUID(int=0)

    def test_stdlib_reports_version_8(self):
        """uuid.UUID sees the RFC 4122 variant and version 8."""
        identifier = encode(840)
        assert identifier.version == 8
        assert identifier.variant == uuid.RFC_4122

    def test_exact_layout(self, fixed_clock, zero_random):
        """Fields land on their byte positions."""
        identifier = encode(840, clock=fixed_clock, random_source=zero_random)
        assert identifier == uuid.UUID("01234567-89ab-8def-8003-480000000000")

    def test_random_tail_preserved(self, fixed_clock):
        """Bytes 11-15 come from the random source."""
        identifier = encode(0, clock=fixed_clock, random_source=lambda n: b"\xff" * n)
        raw = identifier.bytes
        assert raw[11:] == b"\xff" * 5
        assert raw[8] == 0x80
        assert raw[9:11] == b"\x00\x00"

    def test_max_country_code(self, fixed_clock, zero_random):
        """Largest 22-bit code fills bytes 8-10 below the variant."""
        raw = encode(MAX_COUNTRY_CODE, clock=fixed_clock, random_source=zero_random).bytes
        assert raw[8:11] == b"\xbf\xff\xff"

    def test_country_code_masked(self):
        """Codes wider than 22 bits are masked."""
        assert decode(encode((1 << 22) + 5)) == 5

    def test_unique_sequential(self):
        """1000 identifiers for one country are distinct."""
        ids = {encode(643) for _ in range(1000)}
        assert len(ids) == 1000

    def test_unique_concurrent(self):
        """10,000 identifiers across 100 threads are distinct."""
        def batch(code):
            return [encode(code) for _ in range(100)]

        with ThreadPoolExecutor(max_workers=100) as pool:
            results = list(pool.map(batch, [i % 250 for i in range(100)]))

        ids = {identifier for chunk in results for identifier in chunk}
        assert len(ids) == 10_000


class TestRandomnessFailure:
    """Tests for entropy source failures."""

    def test_source_raises(self):
        """OSError from the source surfaces as RandomnessError."""
        def broken(n):
            raise OSError("no entropy")

        with pytest.raises(RandomnessError) as info:
            encode(840, random_source=broken)
        assert isinstance(info.value.cause, OSError)
        assert isinstance(info.value, IdError)

    def test_source_not_implemented(self):
        """NotImplementedError (no source on platform) surfaces as RandomnessError."""
        def missing(n):
            raise NotImplementedError

        with pytest.raises(RandomnessError):
            encode(840, random_source=missing)

    def test_short_read(self):
        """Fewer than 16 bytes is a failure, not a partial identifier."""
        with pytest.raises(RandomnessError) as info:
            encode(840, random_source=lambda n: b"\x00" * 8)
        assert info.value.context == {"expected": 16, "got": 8}

    def test_no_bytes(self):
        """Non-bytes result is a failure."""
        with pytest.raises(RandomnessError):
            encode(840, random_source=lambda n: None)


class TestDecode:
    """Tests for country extraction."""

    @pytest.mark.parametrize("code", list(COUNTRIES.values()) + [0], ids=list(COUNTRIES) + ["Unknown"])
    def test_round_trip(self, code):
        """decode(encode(c)) == c."""
        assert decode(encode(code)) == code

    @pytest.mark.parametrize("code", [0, 1, 0xFF, 0x100, 0xFFFF, 0x10000, MAX_COUNTRY_CODE])
    def test_round_trip_bit_boundaries(self, code):
        """Round-trip holds at byte boundaries of the 22-bit field."""
        assert decode(encode(code)) == code

    def test_usa_example(self):
        """840 round-trips with version and variant set."""
        result = encode(840)
        assert decode(result) == 840
        raw = result.bytes
        assert (raw[6] & 0xF0) >> 4 == 8
        assert (raw[8] & 0xC0) >> 6 == 2

    def test_rejects_uuid4(self):
        """Random v4 UUIDs fail with VersionMismatchError."""
        with pytest.raises(VersionMismatchError) as info:
            decode(uuid.uuid4())
        assert info.value.version == 4
        assert info.value.context["version"] == 4

    def test_variant_not_checked(self):
        """Only the version nibble is validated."""
        raw = bytearray(16)
        raw[6] = 0x80
        raw[8] = 0xC0 | 0x01
        raw[9] = 0x02
        raw[10] = 0x03
        assert decode(bytes(raw)) == 0x010203

    def test_accepts_raw_bytes(self):
        """A 16-byte buffer decodes like the UUID."""
        identifier = encode(392)
        assert decode(identifier.bytes) == 392

    def test_rejects_wrong_length(self):
        """Buffers other than 16 bytes are rejected."""
        with pytest.raises(ValueError):
            decode(b"\x80" * 15)

    def test_rejects_unsupported_type(self):
        """Strings are not identifiers."""
        with pytest.raises(ValueError):
            as_bytes(str(encode(392)))


class TestTimestamp:
    """Tests for creation time extraction."""

    def test_within_call_window(self):
        """Extracted time falls between clocks read around the call."""
        before_ns = time.time_ns()
        before = datetime.now(timezone.utc)
        time.sleep(0.001)
        identifier = encode(643)
        time.sleep(0.001)
        after = datetime.now(timezone.utc)
        after_ns = time.time_ns()

        assert before_ns <= timestamp_ns(identifier) <= after_ns
        assert before <= timestamp_of(identifier) <= after

    def test_progression(self):
        """Later identifier carries a later timestamp."""
        first = encode(643)
        time.sleep(0.01)
        second = encode(643)
        assert timestamp_of(first) < timestamp_of(second)
        assert timestamp_ns(first) < timestamp_ns(second)

    def test_version_overlays_timestamp_bits(self, fixed_clock, zero_random):
        """Stored value is the clock with bits 12-15 forced to 1000b."""
        identifier = encode(840, clock=fixed_clock, random_source=zero_random)
        assert timestamp_ns(identifier) == 0x0123456789AB8DEF

    def test_known_instant(self):
        """Bytes 0-7 decode to an aware UTC datetime."""
        raw = (1_700_000_000_123_456_789).to_bytes(8, "big") + bytes(8)
        assert timestamp_of(raw) == datetime(2023, 11, 14, 22, 13, 20, 123456, tzinfo=timezone.utc)

    def test_total_over_foreign_uuids(self):
        """Works on any UUID without version checks."""
        value = uuid.uuid4()
        assert timestamp_ns(value) == int.from_bytes(value.bytes[:8], "big")


class TestHelpers:
    """Tests for version/variant helpers."""

    def test_version_and_variant(self):
        """Helpers read the fixed fields."""
        identifier = encode(0)
        assert version_of(identifier) == 8
        assert variant_of(identifier) == 2

    def test_is_country_id(self):
        """Predicate branches without exceptions."""
        assert is_country_id(encode(840))
        assert not is_country_id(uuid.uuid4())
