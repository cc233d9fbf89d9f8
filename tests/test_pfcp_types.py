import ipaddress

import pytest

from upfkit.log import UtltError
from upfkit.pfcp_types import (
    PFCP_F_SEID_IPV4_LEN,
    PFCP_F_SEID_IPV4V6_LEN,
    PFCP_F_SEID_IPV6_LEN,
    PFCP_F_TEID_HDR_LEN,
    PFCP_F_TEID_IPV4_LEN,
    PFCP_F_TEID_IPV4V6_LEN,
    PFCP_UE_IP_ADDR_IPV4_LEN,
    PFCP_UE_IP_ADDR_IPV4V6_LEN,
    FSeid,
    FTeid,
    NodeId,
    NodeIdType,
    ReportType,
    UeIpAddr,
)


def test_fseid_ipv4_wire_bytes():
    packed = FSeid(seid=1, ipv4="10.0.0.1").pack()
    assert packed == b"\x02" + (1).to_bytes(8, "big") + bytes([10, 0, 0, 1])


@pytest.mark.parametrize("ipv4, ipv6, length", [
    ("192.0.2.1", None, PFCP_F_SEID_IPV4_LEN),
    (None, "2001:db8::1", PFCP_F_SEID_IPV6_LEN),
    ("192.0.2.1", "2001:db8::1", PFCP_F_SEID_IPV4V6_LEN),
])
def test_fseid_round_trip(ipv4, ipv6, length):
    fseid = FSeid(seid=0x1122334455667788, ipv4=ipv4, ipv6=ipv6)
    packed = fseid.pack()
    assert len(packed) == length
    assert FSeid.unpack(packed) == fseid


def test_fseid_requires_address():
    with pytest.raises(UtltError):
        FSeid(seid=5).pack()


def test_fseid_truncated():
    packed = FSeid(seid=5, ipv6="2001:db8::5").pack()
    with pytest.raises(UtltError):
        FSeid.unpack(packed[:-1])


def test_fseid_bad_address():
    with pytest.raises(UtltError):
        FSeid(seid=1, ipv4="not-an-address")


def test_fteid_round_trip_dual_stack():
    fteid = FTeid(teid=0xDEADBEEF, ipv4="198.51.100.7", ipv6="2001:db8::7")
    packed = fteid.pack()
    assert len(packed) == PFCP_F_TEID_IPV4V6_LEN
    assert FTeid.unpack(packed) == fteid


def test_fteid_ipv4_length():
    packed = FTeid(teid=7, ipv4="198.51.100.7").pack()
    assert len(packed) == PFCP_F_TEID_IPV4_LEN
    assert FTeid.unpack(packed).ipv4 == ipaddress.IPv4Address("198.51.100.7")


def test_fteid_choose_round_trip():
    fteid = FTeid(teid=0, choose=True, choose_id=9, choose_v4=True)
    packed = fteid.pack()
    assert len(packed) == PFCP_F_TEID_HDR_LEN + 1
    back = FTeid.unpack(packed)
    assert back == fteid
    assert back.ipv4 is None and back.choose_id == 9


def test_fteid_choose_with_address_rejected():
    with pytest.raises(UtltError):
        FTeid(teid=1, ipv4="198.51.100.7", choose=True).pack()


def test_fteid_needs_address_without_choose():
    with pytest.raises(UtltError):
        FTeid(teid=1).pack()


def test_ue_ip_addr_round_trip():
    ue = UeIpAddr(ipv4="203.0.113.9", ipv6="2001:db8::9", destination=True,
                  prefix_delegation_bits=8)
    packed = ue.pack()
    assert len(packed) == PFCP_UE_IP_ADDR_IPV4V6_LEN + 1
    assert UeIpAddr.unpack(packed) == ue


def test_ue_ip_addr_source_ipv4():
    packed = UeIpAddr(ipv4="203.0.113.9").pack()
    assert len(packed) == PFCP_UE_IP_ADDR_IPV4_LEN
    back = UeIpAddr.unpack(packed)
    assert back.destination is False
    assert back.ipv4 == ipaddress.IPv4Address("203.0.113.9")
    assert back.ipv6 is None


def test_ue_ip_addr_prefix_bits_need_ipv6():
    with pytest.raises(UtltError):
        UeIpAddr(ipv4="203.0.113.9", prefix_delegation_bits=4)


def test_node_id_ipv4_wire_bytes():
    assert NodeId("10.0.0.1").pack() == b"\x00\x0a\x00\x00\x01"


@pytest.mark.parametrize("value, kind", [
    ("192.0.2.10", NodeIdType.IPV4),
    ("2001:db8::10", NodeIdType.IPV6),
    ("upf.example.com", NodeIdType.FQDN),
])
def test_node_id_round_trip(value, kind):
    node = NodeId(value)
    assert node.type == kind
    back = NodeId.unpack(node.pack())
    assert back == node
    assert back.type == kind


def test_node_id_unknown_type():
    with pytest.raises(UtltError):
        NodeId.unpack(bytes([0x05, 1, 2, 3, 4]))


def test_node_id_truncated():
    packed = NodeId("2001:db8::10").pack()
    with pytest.raises(UtltError):
        NodeId.unpack(packed[:5])


def test_node_id_empty_rejected():
    with pytest.raises(UtltError):
        NodeId("")


def test_report_type_dldr_wire_byte():
    assert ReportType(dldr=True).pack() == b"\x01"


@pytest.mark.parametrize("flags", [
    dict(),
    dict(usar=True),
    dict(erir=True, upir=True),
    dict(dldr=True, usar=True, erir=True, upir=True),
])
def test_report_type_round_trip(flags):
    report = ReportType(**flags)
    packed = report.pack()
    assert len(packed) == 1
    assert ReportType.unpack(packed) == report


def test_report_type_empty_data():
    with pytest.raises(UtltError):
        ReportType.unpack(b"")