"""Wire formats of IPv4, UDP and GTPv1 headers."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from enum import IntEnum

from upfkit.log import UtltError

__all__ = [
    "GtpMessageType",
    "IPv4Header",
    "UDPHeader",
    "Gtpv1Header",
    "Gtpv1OptHeader",
    "GTPV1_HEADER_LEN",
    "GTPV1_OPT_HEADER_LEN",
]

GTPV1_HEADER_LEN = 8
GTPV1_OPT_HEADER_LEN = 4


class GtpMessageType(IntEnum):
    ECHO_REQUEST = 1
    ECHO_RESPONSE = 2
    ERROR_INDICATION = 26
    END_MARK = 254
    T_PDU = 255


def _pack(fmt: struct.Struct, *values: int) -> bytes:
    try:
        return fmt.pack(*values)
    except struct.error as exc:
        raise UtltError(f"header field out of range: {exc}") from exc


def _unpack(fmt: struct.Struct, data: bytes, name: str) -> tuple:
    if len(data) < fmt.size:
        raise UtltError(f"{name} needs {fmt.size} bytes, got {len(data)}")
    return fmt.unpack_from(data)


_IPV4 = struct.Struct("!BBHHHBBHII")
_UDP = struct.Struct("!HHHH")
_GTPV1 = struct.Struct("!BBHI")
_GTPV1_OPT = struct.Struct("!HBB")


@dataclass
class IPv4Header:
    """IPv4 header without options; addresses are 32-bit integers."""

    version: int = 4
    ihl: int = 5
    tos: int = 0
    total_len: int = 0
    id: int = 0
    frag_off: int = 0
    ttl: int = 0
    proto: int = 0
    check: int = 0
    saddr: int = 0
    daddr: int = 0

    SIZE = _IPV4.size

    def pack(self) -> bytes:
        if not (0 <= self.version <= 0xF and 0 <= self.ihl <= 0xF):
            raise UtltError("version and ihl must fit in four bits")
        return _pack(_IPV4, (self.version << 4) | self.ihl, self.tos, self.total_len,
                     self.id, self.frag_off, self.ttl, self.proto, self.check,
                     self.saddr, self.daddr)

    @classmethod
    def unpack(cls, data: bytes) -> IPv4Header:
        first, *rest = _unpack(_IPV4, data, "IPv4 header")
        return cls(first >> 4, first & 0xF, *rest)


@dataclass
class UDPHeader:
    source: int = 0
    dest: int = 0
    length: int = 0
    check: int = 0

    SIZE = _UDP.size

    def pack(self) -> bytes:
        return _pack(_UDP, *astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> UDPHeader:
        return cls(*_unpack(_UDP, data, "UDP header"))


@dataclass
class Gtpv1Header:
    flags: int = 0
    msg_type: int = 0
    length: int = 0
    teid: int = 0

    SIZE = GTPV1_HEADER_LEN

    def pack(self) -> bytes:
        return _pack(_GTPV1, *astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> Gtpv1Header:
        return cls(*_unpack(_GTPV1, data, "GTPv1 header"))


@dataclass
class Gtpv1OptHeader:
    seq_num: int = 0
    n_pdn_num: int = 0
    next_ext_hdr_type: int = 0

    SIZE = GTPV1_OPT_HEADER_LEN

    def pack(self) -> bytes:
        return _pack(_GTPV1_OPT, *astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> Gtpv1OptHeader:
        return cls(*_unpack(_GTPV1_OPT, data, "GTPv1 optional header"))