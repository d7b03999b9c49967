"""Tests for the SDK version codec."""

import pytest
import semantic_version

from dotnet_resolver.errors import VersionParseError
from dotnet_resolver.versioning.sdk_version import (
    ceiling_to_hundred,
    compose_patch_upper_bound,
    decompose,
    format_version,
    next_band_boundary,
    parse_version,
    prerelease_label,
)


class TestParseVersion:
    """Parsing and formatting of SDK version strings."""

    def test_parses_stable_version(self):
        v = parse_version("8.0.304")
        assert (v.major, v.minor, v.patch) == (8, 0, 304)
        assert v.prerelease == ()

    def test_parses_prerelease(self):
        v = parse_version("8.0.100-rc.2.23502.2")
        assert prerelease_label(v) == "rc.2.23502.2"

    def test_strips_whitespace(self):
        assert parse_version(" 6.0.100 ") == semantic_version.Version("6.0.100")

    @pytest.mark.parametrize("text", ["", "8", "8.0", "latest", "8.0.x", "8.0.100-"])
    def test_rejects_invalid(self, text):
        with pytest.raises(VersionParseError) as exc:
            parse_version(text)
        assert exc.value.text == text

    def test_rejects_non_string(self):
        with pytest.raises(VersionParseError):
            parse_version(None)

    def test_format_roundtrip(self):
        text = "3.0.100-preview9-014004"
        assert format_version(parse_version(text)) == text

    def test_stable_label_is_empty(self):
        assert prerelease_label(parse_version("7.0.410")) == ""


class TestDecompose:
    """Feature band / patch number split of the third component."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("8.0.100", (8, 0, 1, 0)),
            ("8.0.304", (8, 0, 3, 4)),
            ("6.0.428", (6, 0, 4, 28)),
            ("3.1.426", (3, 1, 4, 26)),
            ("2.1.1", (2, 1, 0, 1)),
            ("1.0.0", (1, 0, 0, 0)),
        ],
    )
    def test_decompose(self, text, expected):
        parts = decompose(parse_version(text))
        assert tuple(parts) == expected
        assert parts.feature_band == expected[2]
        assert parts.patch_number == expected[3]


class TestBandArithmetic:
    """Rounding helpers used for the patch roll-forward upper bound."""

    @pytest.mark.parametrize("patch,expected", [(0, 0), (1, 100), (100, 100), (199, 200), (200, 200), (201, 300)])
    def test_ceiling_to_hundred_keeps_exact_multiples(self, patch, expected):
        assert ceiling_to_hundred(patch) == expected

    @pytest.mark.parametrize("patch,expected", [(0, 100), (1, 100), (100, 200), (199, 200), (200, 300), (201, 300)])
    def test_next_band_boundary_always_advances(self, patch, expected):
        assert next_band_boundary(patch) == expected

    def test_upper_bound_within_band(self):
        assert str(compose_patch_upper_bound(parse_version("8.0.105"))) == "8.0.200"

    def test_upper_bound_for_round_hundred_advances_to_next_band(self):
        assert str(compose_patch_upper_bound(parse_version("8.0.200"))) == "8.0.300"

    def test_upper_bound_drops_prerelease(self):
        bound = compose_patch_upper_bound(parse_version("8.0.100-rc.1.23455.8"))
        assert str(bound) == "8.0.200"
        assert bound.prerelease == ()

    def test_upper_bound_excludes_next_band_only(self):
        minimum = parse_version("7.0.302")
        bound = compose_patch_upper_bound(minimum)
        assert minimum < parse_version("7.0.399") < bound
        assert bound == parse_version("7.0.400")
