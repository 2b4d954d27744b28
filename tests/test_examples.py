import io

import pytest

from coursetools.examples import (
    BirthdayInfo,
    BirthdayService,
    RequestType,
    VirtioBlockRequest,
    analyze_numbers,
    greeting,
)


def test_greeting():
    assert greeting("Bob") == "Hello Bob, it is very nice to meet you!"


def test_analyze_numbers_smaller(capsys):
    result = analyze_numbers(1, 2)
    assert result == "x (1) is smallest!"
    assert capsys.readouterr().out == "x (1) is smallest!\n"


def test_analyze_numbers_not_smaller(capsys):
    result = analyze_numbers(3, 3)
    assert result == "y (3) is probably larger than x (3)"
    assert capsys.readouterr().out.strip() == result


class _Provider:
    def __init__(self, name, years):
        self._name = name
        self._years = years

    def name(self):
        return self._name

    def years(self):
        return self._years


def test_all_wishes_agree():
    service = BirthdayService()
    direct = service.wish_happy_birthday("Bob", 42)
    assert direct == "Happy Birthday Bob, congratulations with the 42 years!"
    assert service.wish_with_info(BirthdayInfo(name="Bob", years=42)) == direct
    assert service.wish_with_provider(_Provider("Bob", 42)) == direct
    assert service.wish_from_file(io.StringIO("Bob\n42\n")) == direct


def test_wish_from_file_missing_years():
    with pytest.raises(ValueError):
        BirthdayService().wish_from_file(io.StringIO("Bob\n"))


def test_wish_from_file_bad_years():
    with pytest.raises(ValueError):
        BirthdayService().wish_from_file(io.StringIO("Bob\nmany\n"))


def test_virtio_request_bytes():
    request = VirtioBlockRequest(request_type=RequestType.FLUSH, sector=42)
    assert request.as_bytes() == bytes([4, 0, 0, 0, 0, 0, 0, 0, 42, 0, 0, 0, 0, 0, 0, 0])


def test_virtio_default_request_is_zero():
    assert VirtioBlockRequest().as_bytes() == bytes(16)


def test_virtio_out_of_range_sector():
    with pytest.raises(ValueError):
        VirtioBlockRequest(sector=-1).as_bytes()