import pytest

from panpcs.panhome import (
    CookieInvalidError,
    PanHome,
    PanHomeMatchError,
    UnknownLocationError,
    parse_sign_info,
)

SIGN1 = "37dbe07ade9359c1aa70807e847f768c13360ad2"
SIGN3 = "e8c7d729eea7b54551aa594f942decbe"
EXPECTED_SIGN = "8RxCbsVeSzn2UjxJAAiV9QQs/WetOj2FJUGwjsMG6SgxFMWlLS/U1Q=="
BODY = ('var x = {"sign1":"' + SIGN1 + '","sign2":"function(){}",\n"sign3":"'
        + SIGN3 + '","timestamp":1571140066,"other":1}').encode()


class FakeFetch:
    def __init__(self, location="", body=BODY):
        self.calls = []
        self.location = location
        self.body = body

    def __call__(self, url, headers):
        self.calls.append((url, dict(headers)))
        return self.location, self.body


def test_parse_sign_info():
    assert parse_sign_info("", BODY) == (SIGN1, SIGN3, "1571140066")


@pytest.mark.parametrize("location", ["/", "https://passport.baidu.com/v2/?login"])
def test_parse_sign_info_cookie_invalid(location):
    with pytest.raises(CookieInvalidError):
        parse_sign_info(location, BODY)


def test_parse_sign_info_unknown_location():
    with pytest.raises(UnknownLocationError):
        parse_sign_info("https://elsewhere.example.com/", BODY)


def test_parse_sign_info_no_match():
    with pytest.raises(PanHomeMatchError):
        parse_sign_info("", b"<html></html>")


def test_signature():
    fetch = FakeFetch()
    res = PanHome(fetch=fetch).signature()
    assert res.sign == EXPECTED_SIGN
    assert res.timestamp == "1571140066"
    assert fetch.calls[0][0] == "https://pan.baidu.com/disk/home"
    assert fetch.calls[0][1]["User-Agent"] == "Mozilla/5.0"


def test_cache_signature_reuses_and_renews():
    fetch = FakeFetch()
    home = PanHome(fetch=fetch)
    first = home.cache_signature()
    second = home.cache_signature()
    assert first == second
    assert len(fetch.calls) == 1
    home.set_sign_expires()
    third = home.cache_signature()
    assert len(fetch.calls) == 2
    assert third.sign == EXPECTED_SIGN


def test_set_sign_expires_before_any_signature_is_harmless():
    fetch = FakeFetch()
    home = PanHome(fetch=fetch)
    home.set_sign_expires()
    assert home.cache_signature().timestamp == "1571140066"
    assert len(fetch.calls) == 1


def test_signature_error_propagates():
    home = PanHome(fetch=FakeFetch(location="/"))
    with pytest.raises(CookieInvalidError):
        home.cache_signature()