"""Unit tests for three-state request options."""

from laakhay.social.core import UNSET, is_unset, resolve_option


def test_omitted_option_takes_default():
    assert resolve_option(UNSET, "author_id") == "author_id"


def test_omitted_option_without_default_stays_unset():
    assert resolve_option(UNSET) is UNSET


def test_explicit_none_suppresses_default():
    assert resolve_option(None, "author_id") is UNSET


def test_explicit_value_wins():
    assert resolve_option("lang", "author_id") == "lang"
    assert resolve_option(False, True) is False


def test_unset_is_falsy():
    assert not UNSET
    assert is_unset(UNSET)
    assert not is_unset(None)
