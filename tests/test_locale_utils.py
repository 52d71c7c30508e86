"""Tests for locale_utils.py: tag checks, environment identifiers and agent locales.

Python 3.13+.
"""

from unittest.mock import patch

import pytest
from hypothesis import given

from maplabels.locale_utils import (
    get_agent_locales,
    locale_tag_error,
    posix_locale_tag,
    strip_posix_suffixes,
)
from tests.strategies import locale_tags


class TestPosixLocaleTag:
    """Test conversion of environment identifiers via Babel."""

    def test_posix_to_bcp47(self) -> None:
        """Underscores become hyphens."""
        assert posix_locale_tag("pt_BR") == "pt-BR"

    def test_script_and_territory(self) -> None:
        """Script precedes territory in the tag."""
        assert posix_locale_tag("zh_Hant_TW") == "zh-Hant-TW"

    def test_suffixes_dropped(self) -> None:
        """Encoding and modifier are not part of the tag."""
        assert posix_locale_tag("sr_RS.UTF-8@latin") == "sr-RS"

    def test_case_canonicalized(self) -> None:
        """Babel canonicalizes subtag case."""
        assert posix_locale_tag("EN_us") == "en-US"

    @given(tag=locale_tags())
    def test_bcp47_unchanged(self, tag: str) -> None:
        """PROPERTY: canonical BCP-47 tags pass through unchanged."""
        assert posix_locale_tag(tag) == tag

    def test_unparseable(self) -> None:
        """Identifiers Babel rejects yield None."""
        assert posix_locale_tag("12") is None


class TestStripPosixSuffixes:
    """Test removal of encoding and modifier suffixes."""

    def test_encoding_and_modifier(self) -> None:
        """Both suffixes are removed."""
        assert strip_posix_suffixes("sr_RS.UTF-8@latin") == "sr_RS"

    def test_plain(self) -> None:
        """Identifiers without suffixes are unchanged."""
        assert strip_posix_suffixes("de_DE") == "de_DE"


class TestLocaleTagError:
    """Test the shape check for override tags."""

    @given(tag=locale_tags())
    def test_well_formed_tags_accepted(self, tag: str) -> None:
        """PROPERTY: well-formed tags have no error."""
        assert locale_tag_error(tag) is None

    @pytest.mark.parametrize("tag", ["zh-min-nan", "be-x-old", "zh-yue", "zh_pinyin", "123"])
    def test_field_keys_beyond_locale_grammar_accepted(self, tag: str) -> None:
        """Tags used in name:<tag> keys are accepted even where Babel rejects them."""
        assert locale_tag_error(tag) is None

    @pytest.mark.parametrize("tag", ["", "en US", "fr-", "de--CH", "ja;ko", "ñ"])
    def test_malformed_tags_rejected(self, tag: str) -> None:
        """Empty tags, empty subtags and stray characters report a reason."""
        assert locale_tag_error(tag)


class TestGetAgentLocales:
    """Test detection of the agent's preferred locales."""

    def test_language_priority_list(self, clean_locale_env: pytest.MonkeyPatch) -> None:
        """LANGUAGE is a colon-separated list in priority order."""
        clean_locale_env.setenv("LANGUAGE", "fr_CA:fr:en")
        assert get_agent_locales() == ("fr-CA", "fr", "en")

    def test_language_skips_pseudo_locales(self, clean_locale_env: pytest.MonkeyPatch) -> None:
        """C and POSIX entries are ignored."""
        clean_locale_env.setenv("LANGUAGE", "C:de_DE.UTF-8")
        assert get_agent_locales() == ("de-DE",)

    def test_language_skips_unparseable_entries(
        self, clean_locale_env: pytest.MonkeyPatch
    ) -> None:
        """Entries Babel cannot parse are ignored."""
        clean_locale_env.setenv("LANGUAGE", "12:nl_BE")
        assert get_agent_locales() == ("nl-BE",)

    def test_lc_all_before_lang(self, clean_locale_env: pytest.MonkeyPatch) -> None:
        """LC_ALL takes precedence over LANG."""
        clean_locale_env.setenv("LC_ALL", "ja_JP.UTF-8")
        clean_locale_env.setenv("LANG", "en_US.UTF-8")
        assert get_agent_locales() == ("ja-JP",)

    def test_lang_c_falls_through(self, clean_locale_env: pytest.MonkeyPatch) -> None:
        """LANG=C is skipped in favor of the OS locale."""
        clean_locale_env.setenv("LANG", "C")
        with patch("maplabels.locale_utils.locale_module.getlocale", return_value=("ko_KR", "UTF-8")):
            assert get_agent_locales() == ("ko-KR",)

    def test_default_when_nothing_configured(
        self, clean_locale_env: pytest.MonkeyPatch
    ) -> None:
        """Falls back to English when no locale is configured."""
        with patch("maplabels.locale_utils.locale_module.getlocale", return_value=(None, None)):
            assert get_agent_locales() == ("en",)

    def test_getlocale_value_error(self, clean_locale_env: pytest.MonkeyPatch) -> None:
        """An unparseable OS locale is treated as unset."""
        with patch(
            "maplabels.locale_utils.locale_module.getlocale", side_effect=ValueError("bad")
        ):
            assert get_agent_locales() == ("en",)
