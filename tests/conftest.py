"""Shared fixtures: sample listing pages and a fake HTTP session."""
from unittest.mock import MagicMock

import pytest
import requests

WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 32

COMPASS_IMAGES = [
    "https://www.compass.com/m/0/a1b2/origin.webp",
    "https://www.compass.com/m/0/c3d4/origin.webp",
    "https://www.compass.com/m/0/e5f6/origin.webp",
]

COMPASS_PAGE = f"""<html>
<head><title>123 Main St, Brooklyn, NY 11201 | MLS #RLS-10234 | Compass</title></head>
<body>
<div data-tn="listing-page-summary-price" class="price">$1,250,000</div>
<img src="{COMPASS_IMAGES[0]}">
<img src="{COMPASS_IMAGES[1]}">
<img src="{COMPASS_IMAGES[0]}">
<script>{{"photos": ["{COMPASS_IMAGES[2]}", "{COMPASS_IMAGES[1]}"]}}</script>
<img src="https://www.compass.com/m/0/a1b2/thumb.webp">
<span>Description</span>
<div class="textIntent-body">
  Sunny &amp; bright<br>two bedroom
  with a garden.
</div>
</body>
</html>
"""

ZILLOW_IMAGES = [
    "https://photos.zillowstatic.com/fp/0a1b2c3d-cc_ft_1536.webp",
    "https://photos.zillowstatic.com/fp/4e5f6a7b-cc_ft_1536.jpg",
]

ZILLOW_PAGE = f"""<html>
<head><title>456 Oak Ave, Seattle, WA 98101 | MLS #2212345 | Zillow</title></head>
<body>
<span data-testid="price">$875,000</span>
<picture><source srcset="{ZILLOW_IMAGES[0]} 1536w"><img src="{ZILLOW_IMAGES[1]}"></picture>
<img src="https://photos.zillowstatic.com/fp/4e5f6a7b-p_e.jpg">
<div class="summary" data-testid="description"><p>Lovely   craftsman home.</p></div>
</body>
</html>
"""


def make_response(content=b"", text=None, status=200, headers=None):
    """Build a real Response the way the requests adapter fills one in."""
    resp = requests.models.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Client Error"
    resp._content = text.encode("utf-8") if text is not None else content
    resp.headers.update(headers or {})
    resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
    return resp


def make_session(responses):
    """Build a session whose ``get`` serves ``responses`` keyed by URL.

    A value may be a response or an exception instance to raise.
    """
    session = MagicMock(spec=requests.Session)

    def _get(url, **kwargs):
        result = responses.get(url)
        if result is None:
            return make_response(status=404)
        if isinstance(result, Exception):
            raise result
        return result

    session.get.side_effect = _get
    return session


def image_urls_requested(session):
    return [call.args[0] for call in session.get.call_args_list]


@pytest.fixture
def compass_file(tmp_path):
    path = tmp_path / "saved" / "compass_listing.html"
    path.parent.mkdir()
    path.write_text(COMPASS_PAGE, encoding="utf-8")
    return path


@pytest.fixture
def compass_session():
    return make_session({url: make_response(content=WEBP_BYTES) for url in COMPASS_IMAGES})
