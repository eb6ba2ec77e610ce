import pytest

from pagekit.sanitize import Indicator, check, sanitize, scope


def test_scope_escapes_every_value():
    data = {"name": "<b>Ana</b>", "quote": "it's \"fine\"", "amp": "a & b", "n": 3}

    assert scope(data) == {
        "name": "&lt;b&gt;Ana&lt;/b&gt;",
        "quote": "it&#39;s &#34;fine&#34;",
        "amp": "a &amp; b",
        "n": "3",
    }


def test_sanitize_strips_tags_and_keeps_quotes_and_letters():
    assert sanitize("<script>alert(1)</script>José 'O\"Neil'") == "alert(1)José 'O\"Neil'"
    assert sanitize("日本語<br/>\x00") == "日本語"
    assert sanitize(None) == ""


def test_sanitize_removes_entity_encoded_markup():
    assert sanitize("&lt;script&gt;alert(1)&lt;/script&gt;ok") == "alert(1)ok"
    assert sanitize("&amp;lt;b&amp;gt;bold") == "bold"
    assert sanitize("5 &gt; 3 and 2 < 4") == "5 > 3 and 2 < 4"


@pytest.mark.parametrize(
    ("value", "indicator", "expected"),
    [
        ("+34600111222", Indicator.PHONE, True),
        ("600111222", "phone", True),
        ("12345", Indicator.PHONE, False),
        ("600-111-222", Indicator.PHONE, False),
        ("user@example.com", Indicator.EMAIL, True),
        ("first.last+tag@mail.example.org", Indicator.EMAIL, True),
        ("user@@example.com", Indicator.EMAIL, False),
        ("user@localhost", Indicator.EMAIL, False),
        (".user@example.com", Indicator.EMAIL, False),
        ("Str0ng!Pass", Indicator.PASSWORD_STRONG, True),
        ("weakpass", Indicator.PASSWORD_STRONG, False),
        ("N0Special1", Indicator.PASSWORD_STRONG, False),
        ("192.168.1.10", Indicator.IP, True),
        ("2001:db8::1", Indicator.IP, True),
        ("999.1.1.1", Indicator.IP, False),
        ("Main Street 12, Apt. 3", Indicator.ADDRESS, True),
        ("Main Street #12", Indicator.ADDRESS, False),
        ("anything", "zipcode", False),
        (None, Indicator.EMAIL, False),
    ],
)
def test_check(value, indicator, expected):
    assert check(value, indicator) is expected
