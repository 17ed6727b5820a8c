"""Tests for CLI renderers."""

import pytest

from ledgerview.cli.renderers import DashboardRenderer, PlainTableRenderer, Renderer, get_renderer


def test_base_renderer_is_abstract():
    with pytest.raises(TypeError):
        Renderer()


def test_renderer_without_analytics_is_abstract():
    class PageOnly(Renderer):
        def render_page(self, page):
            pass

    with pytest.raises(TypeError):
        PageOnly()


def test_get_renderer_by_style():
    assert isinstance(get_renderer("plain"), PlainTableRenderer)
    assert isinstance(get_renderer("dashboard"), DashboardRenderer)
