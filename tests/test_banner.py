from __future__ import annotations

from friday.cache_backend import MemoryCacheBackend
from friday.core.constants import BANNER_DISMISSED_KEY
from friday.geo.banner import RestrictionBanner


def _banner(geo, cache=None, opened=None):
    opened = opened if opened is not None else []
    return RestrictionBanner(geo, lambda: opened.append(True), cache=cache or MemoryCacheBackend())


def test_hidden_while_loading(geo_state):
    assert not _banner(geo_state(is_recognized_region=False)).visible


def test_hidden_in_recognized_region(geo_state):
    assert not _banner(geo_state(is_loading=False, country="United States")).visible


def test_visible_for_international_visitor(geo_state):
    geo = geo_state(is_loading=False, is_recognized_region=False, country="Canada")
    banner = _banner(geo)
    assert banner.visible
    assert "Canada" in banner.message


def test_dismissal_is_remembered(geo_state):
    geo = geo_state(is_loading=False, is_recognized_region=False, country="Canada")
    cache = MemoryCacheBackend()

    _banner(geo, cache).dismiss()

    assert cache.get(BANNER_DISMISSED_KEY) == "true"
    assert not _banner(geo, cache).visible


def test_open_modal_calls_handler(geo_state):
    opened = []
    _banner(geo_state(is_loading=False, is_recognized_region=False), opened=opened).open_modal()
    assert opened == [True]


class DownCache(MemoryCacheBackend):
    def get(self, key):
        raise ConnectionError("redis down")

    def set(self, key, value, ttl_seconds=None):
        raise ConnectionError("redis down")


def test_unreachable_cache_does_not_break_banner(geo_state):
    geo = geo_state(is_loading=False, is_recognized_region=False, country="Canada")
    banner = _banner(geo, DownCache())

    assert banner.visible
    banner.dismiss()
    assert banner.dismissed
    assert not banner.visible
