"""
Tests for app/prompts.py - prompt templates and response parsing.
"""
import pytest

from app.errors import ConfigurationError, UpstreamFormatError
from app.prompts import SimpleVariant, SuggestionsVariant, TranslationVariant, find_json_object, get_variant


class TestFindJsonObject:

    def test_object_wrapped_in_prose(self):
        text = 'Tentu! Ini jawabannya: {"translation": "x"} Semoga membantu.'
        assert find_json_object(text) == '{"translation": "x"}'

    def test_nested_object(self):
        text = '```json\n{"a": {"b": [1, {"c": 2}]}}\n```'
        assert find_json_object(text) == '{"a": {"b": [1, {"c": 2}]}}'

    def test_braces_inside_strings(self):
        text = '{"text": "pakai } dan { di sini", "reason": "kutip \\" juga"} ekor'
        assert find_json_object(text) == '{"text": "pakai } dan { di sini", "reason": "kutip \\" juga"}'

    def test_no_object(self):
        assert find_json_object("tidak ada json di sini") is None

    def test_unbalanced(self):
        assert find_json_object('{"translation": "x"') is None

    def test_stray_closing_brace_before_object(self):
        assert find_json_object('} lalu {"x": 1}') == '{"x": 1}'


class TestSimpleVariant:

    def test_prompt_embeds_text(self):
        prompt = SimpleVariant().build_prompt("Terserah kamu deh...")
        assert '"Terserah kamu deh..."' in prompt
        assert prompt.endswith("tanpa penjelasan tambahan.")

    def test_text_with_braces_is_kept_literally(self):
        prompt = SimpleVariant().build_prompt("{text} {0}")
        assert '"{text} {0}"' in prompt

    def test_parse_trims(self):
        assert SimpleVariant().parse("  Saya merasa kesal...\n") == {
            "translation": "Saya merasa kesal...",
            "success": True,
        }

    def test_parse_empty(self):
        with pytest.raises(UpstreamFormatError):
            SimpleVariant().parse(" \n ")


class TestSuggestionsVariant:

    def test_prompt_documents_shape(self):
        prompt = SuggestionsVariant().build_prompt("Gak apa-apa kok")
        assert '"Gak apa-apa kok"' in prompt
        assert '{"text": "saran balasan 1", "reason": "alasan saran 1"}' in prompt

    def test_parse_returns_object_unchanged(self):
        raw = '{"translation": "t", "suggestions": [{"text": "a", "reason": "b"}], "extra": 1}'
        assert SuggestionsVariant().parse(raw) == {
            "translation": "t",
            "suggestions": [{"text": "a", "reason": "b"}],
            "extra": 1,
        }

    def test_parse_without_json(self):
        with pytest.raises(UpstreamFormatError) as exc:
            SuggestionsVariant().parse("Maaf, tidak bisa.")
        assert "No JSON object" in exc.value.details

    def test_parse_invalid_json(self):
        with pytest.raises(UpstreamFormatError):
            SuggestionsVariant().parse("{translation: 'x'}")


class TestGetVariant:

    def test_known_names(self):
        assert isinstance(get_variant("simple"), SimpleVariant)
        assert isinstance(get_variant("suggestions"), SuggestionsVariant)

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            get_variant("haiku")

    def test_base_variant_is_abstract(self):
        with pytest.raises(TypeError):
            TranslationVariant()

    def test_variants_do_not_share_generation_config(self):
        assert get_variant("simple").generation_config is not get_variant("suggestions").generation_config
        assert "generation_config" not in vars(TranslationVariant)
