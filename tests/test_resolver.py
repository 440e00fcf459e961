"""Tests for static/dynamic classification of scanned calls."""

from __future__ import annotations

import pytest

from speakinline.enums import SkipReason
from speakinline.resolver import (
    DynamicCall,
    StaticCall,
    get_key,
    multilingual,
    parse_param_names,
    resolve_call,
    split_key,
)
from speakinline.syntax.scanner import ScannedCall, scan_calls

LANGS = ("it-IT", "en-US")


def _call(source: str) -> ScannedCall:
    return next(scan_calls(source, "t"))


def _resolve(source: str) -> StaticCall | DynamicCall:
    return resolve_call(_call(source), LANGS)


class TestStaticCalls:
    """Calls whose arguments are all literal."""

    def test_plain_key(self) -> None:
        """A quoted key resolves without default, params or locale."""
        resolution = _resolve("t('home.title')")
        assert isinstance(resolution, StaticCall)
        assert resolution.key == "home.title"
        assert resolution.default_value is None
        assert resolution.params is None
        assert resolution.lang is None

    def test_key_with_default(self) -> None:
        """The default follows the first key/value separator."""
        resolution = _resolve("t('app.title@@Qwik Speak')")
        assert isinstance(resolution, StaticCall)
        assert resolution.key == "app.title"
        assert resolution.default_value == "Qwik Speak"

    def test_default_keeps_later_separators(self) -> None:
        """Only the first separator splits key from default."""
        resolution = _resolve("t('a@@b@@c')")
        assert isinstance(resolution, StaticCall)
        assert (resolution.key, resolution.default_value) == ("a", "b@@c")

    def test_template_key(self) -> None:
        """A template literal without substitutions is a literal key."""
        resolution = _resolve("t(`home.title`)")
        assert isinstance(resolution, StaticCall)
        assert resolution.key == "home.title"

    def test_params_object(self) -> None:
        """Parameter names and value expressions are parsed in order."""
        resolution = _resolve("t('greet', { name: user.name, count: 2 })")
        assert isinstance(resolution, StaticCall)
        assert resolution.params == (("name", "user.name"), ("count", "2"))

    def test_undefined_params_are_absent(self) -> None:
        """undefined in parameter position means no parameters."""
        resolution = _resolve("t('a', undefined, undefined, 'it-IT')")
        assert isinstance(resolution, StaticCall)
        assert resolution.params is None

    def test_locale_override(self) -> None:
        """A supported literal locale in position 3 restricts the call."""
        resolution = _resolve("t('a', undefined, null, 'it-IT')")
        assert isinstance(resolution, StaticCall)
        assert resolution.lang == "it-IT"

    def test_unsupported_locale_ignored(self) -> None:
        """A literal locale that is not supported is treated as absent."""
        resolution = _resolve("t('a', undefined, undefined, 'fr-FR')")
        assert isinstance(resolution, StaticCall)
        assert resolution.lang is None

    def test_deterministic(self) -> None:
        """Resolving the same call twice yields equal outcomes."""
        call = _call("t('a@@x', { n: 1 })")
        assert resolve_call(call, LANGS) == resolve_call(call, LANGS)

    def test_escaped_quote_in_default(self) -> None:
        """Escapes in the default are decoded to the runtime string."""
        resolution = _resolve(r"t('app.msg@@It\'s fine')")
        assert isinstance(resolution, StaticCall)
        assert resolution.key == "app.msg"
        assert resolution.default_value == "It's fine"

    def test_unicode_escape_in_key(self) -> None:
        """A unicode escape in the key resolves to the character it denotes."""
        resolution = _resolve(r"t('app.say\u0048i')")
        assert isinstance(resolution, StaticCall)
        assert resolution.key == "app.sayHi"

    def test_escaped_placeholder_is_literal(self) -> None:
        """An escaped placeholder in a template is text, not a substitution."""
        resolution = _resolve(r"t(`app.price@@Cost: \${amount}`)")
        assert isinstance(resolution, StaticCall)
        assert resolution.default_value == "Cost: ${amount}"


class TestDynamicCalls:
    """Calls left as runtime calls."""

    @pytest.mark.parametrize(
        ("source", "reason"),
        [
            ("t()", SkipReason.MISSING_KEY),
            ("t(key)", SkipReason.DYNAMIC_KEY),
            ("t(props.key)", SkipReason.DYNAMIC_KEY),
            ("t(getKey())", SkipReason.DYNAMIC_KEY),
            ("t('a.' + b)", SkipReason.DYNAMIC_KEY),
            ("t(`home.${page}`)", SkipReason.INTERPOLATED_KEY),
            ("t('home.${page}')", SkipReason.INTERPOLATED_KEY),
            (r"t(`home.\\${page}`)", SkipReason.INTERPOLATED_KEY),
            ("t('home..title')", SkipReason.INVALID_KEY),
            ("t('@@only default')", SkipReason.INVALID_KEY),
            ("t('a', params)", SkipReason.DYNAMIC_PARAMS),
            ("t('a', getParams())", SkipReason.DYNAMIC_PARAMS),
            ("t('a', { ...rest })", SkipReason.DYNAMIC_PARAMS),
            ("t('a', {})", SkipReason.DYNAMIC_PARAMS),
            ("t('a', undefined, ctx)", SkipReason.DYNAMIC_ARGUMENT),
            ("t('a', undefined, undefined, lang)", SkipReason.DYNAMIC_ARGUMENT),
            ("t('a', undefined, undefined, getLang())", SkipReason.DYNAMIC_ARGUMENT),
        ],
    )
    def test_reason(self, source: str, reason: SkipReason) -> None:
        """Each dynamic shape reports the argument that made it dynamic."""
        resolution = _resolve(source)
        assert isinstance(resolution, DynamicCall)
        assert resolution.reason is reason
        assert resolution.call.text == source

    def test_identifier_key_never_static(self) -> None:
        """An identifier first argument is dynamic whatever follows."""
        resolution = _resolve("t(key, { a: 1 }, undefined, 'it-IT')")
        assert isinstance(resolution, DynamicCall)
        assert resolution.reason is SkipReason.DYNAMIC_KEY


class TestHelpers:
    """Key splitting, locale override and property parsing."""

    def test_split_key_custom_separator(self) -> None:
        """A custom key/value separator is honored."""
        assert split_key("a.b::Default", "::") == ("a.b", "Default")

    def test_get_key(self) -> None:
        """get_key strips quotes and the default."""
        assert get_key("'app.title@@Qwik'", "@@") == "app.title"

    def test_multilingual(self) -> None:
        """Only supported string literals select a locale."""
        assert multilingual("'en-US'", LANGS) == "en-US"
        assert multilingual("'de-DE'", LANGS) is None
        assert multilingual("lang", LANGS) is None
        assert multilingual(None, LANGS) is None

    def test_parse_param_names_quoted_and_shorthand(self) -> None:
        """Quoted names and shorthand properties are accepted."""
        assert parse_param_names("{ 'first-name': a, count }") == (
            ("first-name", "a"),
            ("count", "count"),
        )

    def test_parse_param_names_with_nested_values(self) -> None:
        """Values containing commas and colons stay whole."""
        assert parse_param_names("{ a: fn(1, 2), b: { c: 'x:y' } }") == (
            ("a", "fn(1, 2)"),
            ("b", "{ c: 'x:y' }"),
        )

    def test_parse_param_names_rejects_computed_keys(self) -> None:
        """Computed property names cannot be resolved statically."""
        assert parse_param_names("{ [key]: 1 }") is None
