"""
Tests for the packaged-asset widgets in generators.static_assets.
"""

import asyncio
import base64

import pytest

from core.errors import GeneratorInternalError
from generators import agenerate, generate
from generators import static_assets
from generators.static_assets import PERIODIC_TABLE_SVG, svg_data_uri


class TestPeriodicTable:
    """Tests for the "periodicTable" widget."""

    def test_periodic_table_when_rendered_then_figure_with_inline_image(self, descriptor):
        html = generate("periodicTable", descriptor("periodicTable"))

        assert html.startswith('<figure><img src="data:image/svg+xml;base64,')
        assert 'alt="Periodic table of the elements" width="700" height="450"/>' in html
        assert html.endswith("<figcaption>Figure 1</figcaption></figure>")

    def test_periodic_table_when_rendered_then_payload_is_packaged_svg(self, descriptor):
        html = generate("periodicTable", descriptor("periodicTable"))

        encoded = html.split("base64,")[1].split('"')[0]

        assert base64.b64decode(encoded) == PERIODIC_TABLE_SVG.read_bytes()

    def test_periodic_table_when_caption_null_then_no_figcaption(self, descriptor):
        props = descriptor("periodicTable")
        props["caption"] = None

        html = generate("periodicTable", props)

        assert "<figcaption>" not in html
        assert html.endswith("/></figure>")

    def test_periodic_table_when_alt_has_quotes_then_escaped(self, descriptor):
        props = descriptor("periodicTable")
        props["alt"] = 'The "long" form'

        assert 'alt="The &quot;long&quot; form"' in generate("periodicTable", props)

    def test_periodic_table_when_awaited_then_same_markup(self, descriptor):
        props = descriptor("periodicTable")

        assert asyncio.run(agenerate("periodicTable", props)) == generate("periodicTable", props)

    def test_periodic_table_when_asset_missing_then_internal_error(self, descriptor, monkeypatch, tmp_path):
        monkeypatch.setattr(static_assets, "PERIODIC_TABLE_SVG", tmp_path / "missing.svg")

        with pytest.raises(GeneratorInternalError):
            generate("periodicTable", descriptor("periodicTable"))


class TestSvgDataUri:
    """Tests for svg_data_uri()."""

    def test_svg_data_uri_when_bytes_then_base64_prefixed(self):
        assert svg_data_uri(b"<svg/>") == "data:image/svg+xml;base64,PHN2Zy8+"
