"""
Tests for image helpers

Tests for archiscape/utils/images.py and archiscape/models/vocabulary.py
"""

import base64

import pytest

from archiscape.models.vocabulary import (
    CHOICE_GROUPS,
    VOCABULARY,
    InteriorStyle,
    LandscapeStyle,
    TimeOfDay,
    choices,
    label,
    localized,
)
from archiscape.utils.images import (
    decode_image,
    download_filename,
    sniff_mime_type,
    split_data_url,
    strip_data_url_prefix,
    to_data_url,
)


class TestDataUrls:
    """Data URL parsing and building."""

    @pytest.mark.parametrize("mime", ["image/png", "image/jpeg", "image/jpg", "image/webp"])
    def test_strip_prefix(self, mime):
        assert strip_data_url_prefix(f"data:{mime};base64,QUJD") == "QUJD"

    def test_bare_base64_defaults_to_jpeg(self):
        assert split_data_url("QUJD") == ("image/jpeg", "QUJD")

    def test_decode(self, png_bytes, png_data_url):
        assert decode_image(png_data_url) == (png_bytes, "image/png")

    def test_decode_line_wrapped_base64(self, png_bytes):
        encoded = base64.encodebytes(png_bytes).decode("ascii")
        assert "\n" in encoded

        assert decode_image(f"data:image/png;base64,{encoded}") == (png_bytes, "image/png")
        assert decode_image(" QUJD\r\n") == (b"ABC", "image/jpeg")

    def test_decode_invalid(self):
        with pytest.raises(ValueError):
            decode_image("data:image/png;base64,@@not-base64@@")

    def test_to_data_url(self):
        assert to_data_url(b"ABC") == "data:image/png;base64,QUJD"
        assert to_data_url(b"ABC", "image/webp") == "data:image/webp;base64,QUJD"

    def test_sniff(self, png_bytes, jpeg_bytes):
        assert sniff_mime_type(png_bytes) == "image/png"
        assert sniff_mime_type(jpeg_bytes) == "image/jpeg"
        assert sniff_mime_type(b"not an image") is None

    def test_download_filename(self):
        assert download_filename(1700000000.123) == "archiscape-render-1700000000123.png"


class TestVocabulary:
    """Label lookup table."""

    def test_every_member_has_one_entry(self):
        for enum_cls in CHOICE_GROUPS.values():
            assert set(VOCABULARY[enum_cls]) == {member.value for member in enum_cls}

    def test_shared_values_do_not_collide(self):
        assert LandscapeStyle.MODERN.value == InteriorStyle.MODERN.value
        assert label(InteriorStyle.CREAM) == "Cream Style"
        assert label(LandscapeStyle.MODERN) == "Modern Minimalist"

    def test_label_and_localized(self):
        assert label(TimeOfDay.BLUE_HOUR) == "Blue Hour/Twilight"
        assert localized(TimeOfDay.BLUE_HOUR) == "蓝调时刻"

    def test_choices(self):
        options = choices(TimeOfDay)

        assert len(options) == len(TimeOfDay)
        assert options[0] == {"id": "sunny_noon", "label": "Sunny Noon", "localized": "阳光午后"}
