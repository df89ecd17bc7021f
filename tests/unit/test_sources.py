"""Unit tests for template sources and the component factory."""

import asyncio

import httpx
import pytest

from prompt_builder.core.config import Settings
from prompt_builder.core.factory import ComponentFactory
from prompt_builder.interfaces.source import TemplateAcquisitionError
from prompt_builder.strategies.sources import HttpTemplateSource, LocalFileTemplateSource

DEMO_YAML = """\
prompt_name: Demo
templates:
  - template:
      phase: Intro
      form:
        - item: {name: x, input: text, default: hi}
      prompt: "Hello {{x}}!"
"""


# =============================================================================
# HTTP Source Tests
# =============================================================================


class TestHttpTemplateSource:
    """Test suite for HttpTemplateSource."""

    @staticmethod
    def _source(handler) -> HttpTemplateSource:
        return HttpTemplateSource(timeout=1.0, transport=httpx.MockTransport(handler))

    def test_loads_yaml(self):
        source = self._source(lambda request: httpx.Response(200, text=DEMO_YAML))

        document = asyncio.run(source.aload_document("https://example.com/demo.yaml"))

        assert document["prompt_name"] == "Demo"
        assert document["templates"][0]["template"]["prompt"] == "Hello {{x}}!"

    def test_loads_json(self):
        source = self._source(
            lambda request: httpx.Response(200, json={"prompt_name": "J", "templates": []})
        )

        document = asyncio.run(source.aload_document("https://example.com/demo.json"))

        assert document == {"prompt_name": "J", "templates": []}

    def test_http_error_status(self):
        source = self._source(lambda request: httpx.Response(404, text="missing"))

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document("https://example.com/nope.yaml"))

        assert exc_info.value.reason == "HTTP 404"
        assert exc_info.value.location == "https://example.com/nope.yaml"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TemplateAcquisitionError):
            asyncio.run(self._source(handler).aload_document("https://example.com/x.yaml"))

    def test_invalid_yaml(self):
        source = self._source(lambda request: httpx.Response(200, text="a: [unclosed"))

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document("https://example.com/bad.yaml"))

        assert exc_info.value.reason == "invalid YAML"

    def test_malformed_url(self):
        source = self._source(lambda request: httpx.Response(200, text=DEMO_YAML))

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document("https://example.com/\x00x.yaml"))

        assert exc_info.value.location == "https://example.com/\x00x.yaml"

    def test_supports_location(self):
        source = HttpTemplateSource()

        assert source.supports_location("https://example.com/a.yaml")
        assert source.supports_location("http://example.com/a.yaml")
        assert not source.supports_location("templates/a.yaml")


# =============================================================================
# Local Source Tests
# =============================================================================


class TestLocalFileTemplateSource:
    """Test suite for LocalFileTemplateSource."""

    def test_relative_path_resolved_against_base_dir(self, tmp_path):
        (tmp_path / "demo.yaml").write_text(DEMO_YAML, encoding="utf-8")
        source = LocalFileTemplateSource(base_dir=tmp_path)

        document = asyncio.run(source.aload_document("demo.yaml"))

        assert document["prompt_name"] == "Demo"

    def test_file_url(self, tmp_path):
        path = tmp_path / "demo.yaml"
        path.write_text(DEMO_YAML, encoding="utf-8")

        document = asyncio.run(LocalFileTemplateSource().aload_document(f"file://{path}"))

        assert document["templates"][0]["template"]["phase"] == "Intro"

    def test_missing_file(self, tmp_path):
        source = LocalFileTemplateSource(base_dir=tmp_path)

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document("absent.yaml"))

        assert exc_info.value.reason == "file not found"

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "bad.yaml").write_text("a: [unclosed", encoding="utf-8")

        with pytest.raises(TemplateAcquisitionError):
            asyncio.run(LocalFileTemplateSource(base_dir=tmp_path).aload_document("bad.yaml"))

    def test_empty_file_decodes_to_none(self, tmp_path):
        """Test that an empty file is not an acquisition error."""
        (tmp_path / "empty.yaml").write_text("", encoding="utf-8")

        assert asyncio.run(LocalFileTemplateSource(base_dir=tmp_path).aload_document("empty.yaml")) is None

    def test_supports_location(self, tmp_path):
        source = LocalFileTemplateSource()

        assert source.supports_location("templates/demo.yaml")
        assert source.supports_location(str(tmp_path / "demo.yaml"))
        assert source.supports_location("file:///tmp/demo.yaml")
        assert not source.supports_location("https://example.com/demo.yaml")

    @pytest.mark.parametrize("location", ["a" * 300 + ".yaml", "bad\x00name.yaml", "~no-such-user-xyz/a.yaml"])
    def test_invalid_path(self, tmp_path, location):
        """Test that unusable paths fail like a missing file."""
        with pytest.raises(TemplateAcquisitionError):
            asyncio.run(LocalFileTemplateSource(base_dir=tmp_path).aload_document(location))


# =============================================================================
# Confinement Tests
# =============================================================================


class TestConfinedLocalSource:
    """Test suite for LocalFileTemplateSource restricted to its base directory."""

    @pytest.fixture
    def layout(self, tmp_path):
        base = tmp_path / "templates"
        base.mkdir()
        (base / "demo.yaml").write_text(DEMO_YAML, encoding="utf-8")
        (base / "nested").mkdir()
        (base / "nested" / "inner.yaml").write_text(DEMO_YAML, encoding="utf-8")
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.yaml").write_text("password: hunter2\n", encoding="utf-8")
        return base, outside

    @pytest.fixture
    def source(self, layout):
        base, _ = layout
        return LocalFileTemplateSource(base_dir=base, confine_to_base_dir=True)

    def test_reads_inside_base_dir(self, source):
        assert asyncio.run(source.aload_document("demo.yaml"))["prompt_name"] == "Demo"
        assert asyncio.run(source.aload_document("nested/../nested/inner.yaml"))["prompt_name"] == "Demo"

    def test_rejects_parent_traversal(self, source):
        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document("../outside/secret.yaml"))

        assert exc_info.value.reason == "outside template directory"

    def test_rejects_absolute_path(self, source, layout):
        _, outside = layout

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document(str(outside / "secret.yaml")))

        assert exc_info.value.reason == "outside template directory"

    def test_rejects_file_url(self, source, layout):
        _, outside = layout

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document(f"file://{outside / 'secret.yaml'}"))

        assert exc_info.value.reason == "outside template directory"

    def test_rejects_symlink_out_of_base_dir(self, source, layout):
        base, outside = layout
        try:
            (base / "link.yaml").symlink_to(outside / "secret.yaml")
        except OSError:
            pytest.skip("symlinks not supported")

        with pytest.raises(TemplateAcquisitionError):
            asyncio.run(source.aload_document("link.yaml"))

    def test_unconfined_by_default(self, layout):
        base, outside = layout

        document = asyncio.run(
            LocalFileTemplateSource(base_dir=base).aload_document(str(outside / "secret.yaml"))
        )

        assert document == {"password": "hunter2"}


# =============================================================================
# Factory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory source selection."""

    @pytest.fixture
    def factory(self, tmp_path):
        return ComponentFactory(Settings(template_dir=tmp_path, http_timeout=3.0))

    def test_auto_picks_http_for_urls(self, factory):
        assert isinstance(factory.get_source(location="https://example.com/a.yaml"), HttpTemplateSource)

    def test_auto_picks_local_for_paths(self, factory):
        assert isinstance(factory.get_source(location="a.yaml"), LocalFileTemplateSource)

    def test_explicit_type(self, factory):
        assert isinstance(factory.get_source("local"), LocalFileTemplateSource)

    def test_sources_are_cached(self, factory):
        assert factory.get_source("http") is factory.get_source(location="http://x/y.yaml")

    def test_auto_without_location(self, factory):
        with pytest.raises(ValueError):
            factory.get_source()

    def test_unknown_type(self, factory):
        with pytest.raises(ValueError, match="Unknown template source type"):
            factory.get_source("ftp")

    def test_local_source_is_confined(self, tmp_path):
        (tmp_path / "templates").mkdir()
        (tmp_path / "escape.yaml").write_text(DEMO_YAML, encoding="utf-8")
        factory = ComponentFactory(Settings(template_dir=tmp_path / "templates"))
        source = factory.get_source(location="../escape.yaml")

        with pytest.raises(TemplateAcquisitionError) as exc_info:
            asyncio.run(source.aload_document("../escape.yaml"))

        assert exc_info.value.reason == "outside template directory"

    def test_confinement_can_be_lifted(self, tmp_path):
        (tmp_path / "templates").mkdir()
        (tmp_path / "escape.yaml").write_text(DEMO_YAML, encoding="utf-8")
        factory = ComponentFactory(
            Settings(template_dir=tmp_path / "templates", allow_outside_template_dir=True)
        )

        document = asyncio.run(factory.get_source("local").aload_document("../escape.yaml"))

        assert document["prompt_name"] == "Demo"
