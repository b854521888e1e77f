"""Tests for display name decoding and safe name composition"""

import pytest

from app_export.utils.naming import (
    compose_name,
    decode_unicode_escapes,
    file_name_part,
    is_cjk_ideograph,
)


class TestDecodeUnicodeEscapes:

    def test_decodes_escaped_ideographs(self):
        assert decode_unicode_escapes("\\u4e2d\\u6587") == "中文"

    def test_keeps_surrounding_text(self):
        assert decode_unicode_escapes("app-\\u4e2dx") == "app-中x"

    def test_malformed_sequences_pass_through(self):
        assert decode_unicode_escapes("bad\\u12") == "bad\\u12"
        assert decode_unicode_escapes("\\uzzzz-ok") == "\\uzzzz-ok"

    def test_trims_whitespace(self):
        assert decode_unicode_escapes("  my app \n") == "my app"

    def test_empty(self):
        assert decode_unicode_escapes("") == ""
        assert decode_unicode_escapes(None) == ""


class TestComposeName:

    def test_ascii_safe_characters_are_kept(self):
        assert compose_name("web-server_v1.2") == "web-server_v1.2"

    def test_unsafe_characters_become_underscore(self):
        assert compose_name("my app/v1!") == "my_app_v1_"

    def test_cjk_transliterated_to_pinyin(self):
        assert compose_name("中文") == "zhongwen"

    def test_escaped_cjk_transliterated(self):
        assert compose_name("\\u4e2d\\u6587-app") == "zhongwen-app"

    def test_non_cjk_unicode_replaced(self):
        assert compose_name("café") == "caf_"

    @pytest.mark.parametrize("text", [
        "中文 应用",
        "  spaced  name ",
        "\\u4e2d\\u6587\\u5e94\\u7528",
        "weird\\u12chars!",
        "already-safe.name_1",
    ])
    def test_idempotent(self, text):
        once = compose_name(text)
        assert compose_name(once) == once

    def test_deterministic(self):
        assert compose_name("好雨 app") == compose_name("好雨 app")


def test_is_cjk_ideograph():
    assert is_cjk_ideograph("中")
    assert not is_cjk_ideograph("a")
    assert not is_cjk_ideograph("é")


def test_file_name_part_keeps_text_but_drops_separators():
    assert file_name_part("\\u4e2d\\u6587 app") == "中文 app"
    assert file_name_part(" team/shop\\v2 ") == "team_shop_v2"
