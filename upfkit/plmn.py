"""PLMN identity encoding as three BCD-packed octets."""

from __future__ import annotations

from dataclasses import dataclass

PLMN_ID_LEN = 3


def _digit1(value: int) -> int:
    return (value // 100) % 10


def _digit2(value: int) -> int:
    return (value // 10) % 10


def _digit3(value: int) -> int:
    return value % 10


@dataclass(frozen=True)
class PlmnId:
    """A PLMN identity holding MCC and MNC digits in three octets."""

    octets: bytes

    def __post_init__(self) -> None:
        octets = bytes(self.octets)
        if len(octets) != PLMN_ID_LEN:
            raise ValueError(f"PLMN id must be {PLMN_ID_LEN} octets, got {len(octets)}")
        object.__setattr__(self, "octets", octets)

    @classmethod
    def from_mcc_mnc(cls, mcc: int, mnc: int, mnc_len: int) -> PlmnId:
        """Encode an MCC and an MNC of two or three digits."""
        first = ((_digit2(mcc) << 4) + _digit1(mcc)) & 0xFF
        high = 0xF0 if mnc_len == 2 else _digit1(mnc) << 4
        second = (high + _digit3(mcc)) & 0xFF
        third = ((_digit3(mnc) << 4) + _digit2(mnc)) & 0xFF
        return cls(bytes((first, second, third)))

    def mcc(self) -> int:
        """Return the mobile country code."""
        o = self.octets
        return (o[0] & 0x0F) * 100 + (o[0] >> 4) * 10 + (o[1] & 0x0F)

    def mnc(self) -> int:
        """Return the mobile network code."""
        o = self.octets
        hundreds = 0 if (o[1] >> 4) == 0xF else (o[1] >> 4) * 100
        return hundreds + (o[2] & 0x0F) * 10 + (o[2] >> 4)

    def mnc_len(self) -> int:
        """Return 2 when the second octet is exactly 0xF0, otherwise 3."""
        return 3 if self.octets[1] ^ 0xF0 else 2

    def __bytes__(self) -> bytes:
        return self.octets