"""Shared fixtures."""

import pytest

from webcompare.browser.static import StaticHtmlRenderer


SAMPLE_HTML = """
<!DOCTYPE html>
<html>
<head><title>Watched Page</title></head>
<body>
    <h1 id="title">Hello</h1>
    <img id="logo" src="/new.png" alt="Logo">
    <div id="empty"></div>
    <ul id="list"><li>One</li><li class="second">Two</li></ul>
    <p id="mixed">Some <b>bold</b> text</p>
</body>
</html>
"""


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def static_renderer(sample_html):
    return StaticHtmlRenderer({"https://example.test/": sample_html})
