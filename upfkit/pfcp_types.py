"""PFCP information element values and their wire encodings."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Union

from upfkit.log import UtltError

__all__ = [
    "Cause",
    "ApplyAction",
    "DestinationInterface",
    "SourceInterface",
    "OuterHeaderRemovalDescription",
    "PdnType",
    "NodeIdType",
    "FSeid",
    "FTeid",
    "UeIpAddr",
    "NodeId",
    "ReportType",
    "PFCP_VERSION",
    "PGWC_PRECEDENCE_BASE",
    "PFCP_UE_IP_ADDR_SOURCE",
    "PFCP_UE_IP_ADDR_DESTINATION",
    "PFCP_UE_IP_ADDR_HDR_LEN",
    "PFCP_UE_IP_ADDR_IPV4_LEN",
    "PFCP_UE_IP_ADDR_IPV6_LEN",
    "PFCP_UE_IP_ADDR_IPV4V6_LEN",
    "PFCP_F_TEID_HDR_LEN",
    "PFCP_F_TEID_IPV4_LEN",
    "PFCP_F_TEID_IPV6_LEN",
    "PFCP_F_TEID_IPV4V6_LEN",
    "PFCP_F_SEID_HDR_LEN",
    "PFCP_F_SEID_IPV4_LEN",
    "PFCP_F_SEID_IPV6_LEN",
    "PFCP_F_SEID_IPV4V6_LEN",
]

IPV4_LEN = 4
IPV6_LEN = 16
IPV4V6_LEN = 20

PFCP_VERSION = 1
PGWC_PRECEDENCE_BASE = 31

PFCP_UE_IP_ADDR_SOURCE = 0
PFCP_UE_IP_ADDR_DESTINATION = 1

PFCP_UE_IP_ADDR_HDR_LEN = 1
PFCP_UE_IP_ADDR_IPV4_LEN = IPV4_LEN + PFCP_UE_IP_ADDR_HDR_LEN
PFCP_UE_IP_ADDR_IPV6_LEN = IPV6_LEN + PFCP_UE_IP_ADDR_HDR_LEN
PFCP_UE_IP_ADDR_IPV4V6_LEN = IPV4V6_LEN + PFCP_UE_IP_ADDR_HDR_LEN

PFCP_F_TEID_HDR_LEN = 5
PFCP_F_TEID_IPV4_LEN = IPV4_LEN + PFCP_F_TEID_HDR_LEN
PFCP_F_TEID_IPV6_LEN = IPV6_LEN + PFCP_F_TEID_HDR_LEN
PFCP_F_TEID_IPV4V6_LEN = IPV4V6_LEN + PFCP_F_TEID_HDR_LEN

PFCP_F_SEID_HDR_LEN = 9
PFCP_F_SEID_IPV4_LEN = IPV4_LEN + PFCP_F_SEID_HDR_LEN
PFCP_F_SEID_IPV6_LEN = IPV6_LEN + PFCP_F_SEID_HDR_LEN
PFCP_F_SEID_IPV4V6_LEN = IPV4V6_LEN + PFCP_F_SEID_HDR_LEN


class Cause(IntEnum):
    REQUEST_ACCEPTED = 1
    REQUEST_REJECTED = 64
    SESSION_CONTEXT_NOT_FOUND = 65
    MANDATORY_IE_MISSING = 66
    CONDITIONAL_IE_MISSING = 67
    INVALID_LENGTH = 68
    MANDATORY_IE_INCORRECT = 69
    INVALID_FORWARDING_POLICY = 70
    INVALID_F_TEID_ALLOCATION_OPTION = 71
    NO_ESTABLISHED_PFCP_ASSOCIATION = 72
    RULE_CREATION_MODIFICATION_FAILURE = 73
    PFCP_ENTITY_IN_CONGESTION = 74
    NO_RESOURCES_AVAILABLE = 75
    SERVICE_NOT_SUPPORTED = 76
    SYSTEM_FAILURE = 77


class ApplyAction(IntFlag):
    DROP = 1
    FORW = 2
    BUFF = 4
    NOCP = 8
    DUPL = 16


class DestinationInterface(IntEnum):
    ACCESS = 0
    CORE = 1
    SGILAN = 2
    CPF = 3
    LIF = 4


class SourceInterface(IntEnum):
    ACCESS = 0
    CORE = 1
    SGILAN = 2
    CP_F = 3


class OuterHeaderRemovalDescription(IntEnum):
    GTPU_IP4 = 0
    GTPU_IP6 = 1
    UDP_IP4 = 2
    UDP_IP6 = 3
    NULL = 0xFF


class PdnType(IntEnum):
    IPV4 = 1
    IPV6 = 2
    IPV4V6 = 3
    NONIP = 4


class NodeIdType(IntEnum):
    IPV4 = 0
    IPV6 = 1
    FQDN = 2


AddressV4 = Union[str, ipaddress.IPv4Address, None]
AddressV6 = Union[str, ipaddress.IPv6Address, None]


def _as_ipv4(value: AddressV4) -> ipaddress.IPv4Address | None:
    if value is None:
        return None
    try:
        return ipaddress.IPv4Address(value)
    except ValueError as exc:
        raise UtltError(f"invalid IPv4 address: {value!r}") from exc


def _as_ipv6(value: AddressV6) -> ipaddress.IPv6Address | None:
    if value is None:
        return None
    try:
        return ipaddress.IPv6Address(value)
    except ValueError as exc:
        raise UtltError(f"invalid IPv6 address: {value!r}") from exc


def _take(data: bytes, offset: int, count: int, what: str) -> tuple[bytes, int]:
    end = offset + count
    if len(data) < end:
        raise UtltError(f"{what} truncated: need {end} bytes, got {len(data)}")
    return bytes(data[offset:end]), end


def _pack(fmt: str, *values: int) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise UtltError(f"field out of range: {exc}") from exc


def _addresses(ipv4: ipaddress.IPv4Address | None,
               ipv6: ipaddress.IPv6Address | None) -> bytes:
    return (ipv4.packed if ipv4 else b"") + (ipv6.packed if ipv6 else b"")


@dataclass(frozen=True)
class FSeid:
    """Fully qualified session endpoint identifier."""

    seid: int
    ipv4: AddressV4 = None
    ipv6: AddressV6 = None

    _V6 = 0x01
    _V4 = 0x02

    def __post_init__(self) -> None:
        object.__setattr__(self, "ipv4", _as_ipv4(self.ipv4))
        object.__setattr__(self, "ipv6", _as_ipv6(self.ipv6))

    def pack(self) -> bytes:
        if self.ipv4 is None and self.ipv6 is None:
            raise UtltError("F-SEID needs an IPv4 or IPv6 address")
        flags = (self._V4 if self.ipv4 else 0) | (self._V6 if self.ipv6 else 0)
        return _pack("!BQ", flags, self.seid) + _addresses(self.ipv4, self.ipv6)

    @classmethod
    def unpack(cls, data: bytes) -> FSeid:
        head, offset = _take(data, 0, PFCP_F_SEID_HDR_LEN, "F-SEID")
        flags, seid = struct.unpack("!BQ", head)
        ipv4 = ipv6 = None
        if flags & cls._V4:
            raw, offset = _take(data, offset, IPV4_LEN, "F-SEID")
            ipv4 = ipaddress.IPv4Address(raw)
        if flags & cls._V6:
            raw, offset = _take(data, offset, IPV6_LEN, "F-SEID")
            ipv6 = ipaddress.IPv6Address(raw)
        return cls(seid, ipv4, ipv6)


@dataclass(frozen=True)
class FTeid:
    """Fully qualified tunnel endpoint identifier.

    With ``choose`` set the UP function picks the TEID; ``choose_v4`` and
    ``choose_v6`` say which address kinds to allocate and no address is sent.
    """

    teid: int = 0
    ipv4: AddressV4 = None
    ipv6: AddressV6 = None
    choose: bool = False
    choose_id: int | None = None
    choose_v4: bool = False
    choose_v6: bool = False

    _V4 = 0x01
    _V6 = 0x02
    _CH = 0x04
    _CHID = 0x08

    def __post_init__(self) -> None:
        object.__setattr__(self, "ipv4", _as_ipv4(self.ipv4))
        object.__setattr__(self, "ipv6", _as_ipv6(self.ipv6))

    def pack(self) -> bytes:
        if self.choose:
            if self.ipv4 is not None or self.ipv6 is not None:
                raise UtltError("F-TEID with CH set carries no address")
            flags = self._CH
            flags |= self._V4 if self.choose_v4 else 0
            flags |= self._V6 if self.choose_v6 else 0
            body = b""
            if self.choose_id is not None:
                flags |= self._CHID
                body = _pack("!B", self.choose_id)
            return _pack("!BI", flags, self.teid) + body
        if self.choose_id is not None or self.choose_v4 or self.choose_v6:
            raise UtltError("F-TEID choose fields need CH set")
        if self.ipv4 is None and self.ipv6 is None:
            raise UtltError("F-TEID needs an IPv4 or IPv6 address")
        flags = (self._V4 if self.ipv4 else 0) | (self._V6 if self.ipv6 else 0)
        return _pack("!BI", flags, self.teid) + _addresses(self.ipv4, self.ipv6)

    @classmethod
    def unpack(cls, data: bytes) -> FTeid:
        head, offset = _take(data, 0, PFCP_F_TEID_HDR_LEN, "F-TEID")
        flags, teid = struct.unpack("!BI", head)
        v4, v6 = bool(flags & cls._V4), bool(flags & cls._V6)
        if flags & cls._CH:
            choose_id = None
            if flags & cls._CHID:
                raw, offset = _take(data, offset, 1, "F-TEID")
                choose_id = raw[0]
            return cls(teid, choose=True, choose_id=choose_id,
                       choose_v4=v4, choose_v6=v6)
        ipv4 = ipv6 = None
        if v4:
            raw, offset = _take(data, offset, IPV4_LEN, "F-TEID")
            ipv4 = ipaddress.IPv4Address(raw)
        if v6:
            raw, offset = _take(data, offset, IPV6_LEN, "F-TEID")
            ipv6 = ipaddress.IPv6Address(raw)
        return cls(teid, ipv4, ipv6)


@dataclass(frozen=True)
class UeIpAddr:
    """UE IP address, as source or destination, with optional prefix delegation bits."""

    ipv4: AddressV4 = None
    ipv6: AddressV6 = None
    destination: bool = False
    prefix_delegation_bits: int | None = None

    _V6 = 0x01
    _V4 = 0x02
    _SD = 0x04
    _IPV6D = 0x08

    def __post_init__(self) -> None:
        object.__setattr__(self, "ipv4", _as_ipv4(self.ipv4))
        object.__setattr__(self, "ipv6", _as_ipv6(self.ipv6))
        if self.prefix_delegation_bits is not None and self.ipv6 is None:
            raise UtltError("IPv6 prefix delegation bits need an IPv6 address")

    def pack(self) -> bytes:
        flags = (self._V4 if self.ipv4 else 0) | (self._V6 if self.ipv6 else 0)
        flags |= self._SD if self.destination else 0
        tail = b""
        if self.prefix_delegation_bits is not None:
            flags |= self._IPV6D
            tail = _pack("!B", self.prefix_delegation_bits)
        return _pack("!B", flags) + _addresses(self.ipv4, self.ipv6) + tail

    @classmethod
    def unpack(cls, data: bytes) -> UeIpAddr:
        head, offset = _take(data, 0, PFCP_UE_IP_ADDR_HDR_LEN, "UE IP address")
        flags = head[0]
        ipv4 = ipv6 = None
        bits = None
        if flags & cls._V4:
            raw, offset = _take(data, offset, IPV4_LEN, "UE IP address")
            ipv4 = ipaddress.IPv4Address(raw)
        if flags & cls._V6:
            raw, offset = _take(data, offset, IPV6_LEN, "UE IP address")
            ipv6 = ipaddress.IPv6Address(raw)
        if flags & cls._IPV6D:
            raw, offset = _take(data, offset, 1, "UE IP address")
            bits = raw[0]
        return cls(ipv4, ipv6, bool(flags & cls._SD), bits)


def _encode_fqdn(name: str) -> bytes:
    out = bytearray()
    for label in name.rstrip(".").split("."):
        try:
            raw = label.encode("ascii")
        except UnicodeEncodeError as exc:
            raise UtltError(f"FQDN label is not ASCII: {label!r}") from exc
        if not 0 < len(raw) <= 63:
            raise UtltError(f"invalid FQDN label: {label!r}")
        out.append(len(raw))
        out += raw
    return bytes(out)


def _decode_fqdn(data: bytes) -> str:
    labels = []
    offset = 0
    while offset < len(data):
        size = data[offset]
        if size == 0:
            break
        raw, offset = _take(data, offset + 1, size, "Node ID FQDN")
        labels.append(raw.decode("ascii", errors="replace"))
    if not labels:
        raise UtltError("Node ID FQDN is empty")
    return ".".join(labels)


@dataclass(frozen=True)
class NodeId:
    """A node identity: an IPv4 address, an IPv6 address or an FQDN."""

    value: Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, str):
            try:
                value = ipaddress.ip_address(value)
            except ValueError:
                if not value:
                    raise UtltError("Node ID is empty") from None
        elif not isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
            raise UtltError(f"invalid Node ID: {value!r}")
        object.__setattr__(self, "value", value)

    @property
    def type(self) -> NodeIdType:
        if isinstance(self.value, ipaddress.IPv4Address):
            return NodeIdType.IPV4
        if isinstance(self.value, ipaddress.IPv6Address):
            return NodeIdType.IPV6
        return NodeIdType.FQDN

    def pack(self) -> bytes:
        kind = self.type
        if kind == NodeIdType.FQDN:
            body = _encode_fqdn(self.value)
        else:
            body = self.value.packed
        return bytes((kind & 0x0F,)) + body

    @classmethod
    def unpack(cls, data: bytes) -> NodeId:
        head, offset = _take(data, 0, 1, "Node ID")
        kind = head[0] & 0x0F
        if kind == NodeIdType.IPV4:
            raw, _ = _take(data, offset, IPV4_LEN, "Node ID")
            return cls(ipaddress.IPv4Address(raw))
        if kind == NodeIdType.IPV6:
            raw, _ = _take(data, offset, IPV6_LEN, "Node ID")
            return cls(ipaddress.IPv6Address(raw))
        if kind == NodeIdType.FQDN:
            return cls(_decode_fqdn(bytes(data[offset:])))
        raise UtltError(f"unknown Node ID type: {kind}")


@dataclass(frozen=True)
class ReportType:
    """Kinds of report carried by a session report request."""

    dldr: bool = False
    usar: bool = False
    erir: bool = False
    upir: bool = False

    def pack(self) -> bytes:
        return bytes(((self.dldr << 0) | (self.usar << 1)
                      | (self.erir << 2) | (self.upir << 3),))

    @classmethod
    def unpack(cls, data: bytes) -> ReportType:
        head, _ = _take(data, 0, 1, "Report Type")
        flags = head[0]
        return cls(bool(flags & 0x01), bool(flags & 0x02),
                   bool(flags & 0x04), bool(flags & 0x08))