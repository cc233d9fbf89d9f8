import pytest

from upfkit.plmn import PlmnId


def test_two_digit_mnc_wire_bytes():
    plmn = PlmnId.from_mcc_mnc(208, 93, 2)
    assert bytes(plmn) == b"\x02\xf8\x39"


def test_two_digit_mnc_round_trip():
    plmn = PlmnId.from_mcc_mnc(208, 93, 2)
    assert plmn.mcc() == 208
    assert plmn.mnc() == 93


def test_three_digit_mnc_round_trip():
    plmn = PlmnId.from_mcc_mnc(310, 260, 3)
    assert plmn.mcc() == 310
    assert plmn.mnc() == 260
    assert plmn.mnc_len() == 3


def test_mnc_len_two_when_second_octet_is_filler_only():
    plmn = PlmnId.from_mcc_mnc(460, 1, 2)
    assert plmn.octets[1] == 0xF0
    assert plmn.mnc_len() == 2
    assert plmn.mcc() == 460
    assert plmn.mnc() == 1


@pytest.mark.parametrize("mcc", [1, 99, 310, 466, 999])
@pytest.mark.parametrize("mnc", [0, 7, 92, 150, 999])
def test_round_trip_many(mcc, mnc):
    plmn = PlmnId.from_mcc_mnc(mcc, mnc, 3)
    assert plmn.mcc() == mcc
    assert plmn.mnc() == mnc


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        PlmnId(b"\x01\x02")


def test_equality_by_octets():
    assert PlmnId.from_mcc_mnc(208, 93, 2) == PlmnId(bytes(PlmnId.from_mcc_mnc(208, 93, 2)))