import io

import pytest
import requests
from PIL import Image

from asciimage import source
from asciimage.errors import InputError
from asciimage.source import decode, is_url, load_source, supported_formats


def encode(image, fmt, **params):
    buf = io.BytesIO()
    image.save(buf, fmt, **params)
    return buf.getvalue()


def gif_bytes():
    frames = [Image.new("RGB", (6, 4), colour) for colour in [(255, 0, 0), (0, 255, 0), (0, 0, 255)]]
    return encode(frames[0], "GIF", save_all=True, append_images=frames[1:], duration=[50, 120, 200], loop=0)


def test_registry_lists_formats():
    assert {"PNG", "JPEG", "GIF", "WEBP", "BMP", "TIFF"} <= set(supported_formats())


def test_decode_png_is_still():
    result = decode(encode(Image.new("RGB", (5, 3), (1, 2, 3)), "PNG"), "dot")
    assert not result.animated
    assert len(result.frames) == 1
    assert result.frames[0].pixels.size == (5, 3)
    assert tuple(result.frames[0].pixels.pixels[0, 0]) == (1, 2, 3, 255)


def test_decode_gif_frames_and_delays():
    result = decode(gif_bytes(), "anim")
    assert result.animated
    assert [f.delay for f in result.frames] == [50, 120, 200]
    assert all(f.pixels.size == (6, 4) for f in result.frames)


def test_unknown_bytes_rejected():
    with pytest.raises(InputError):
        decode(b"definitely not an image")


def test_empty_bytes_rejected():
    with pytest.raises(InputError):
        decode(b"")


def test_unregistered_format_rejected():
    with pytest.raises(InputError, match="unsupported format"):
        decode(encode(Image.new("RGB", (2, 2)), "PPM"))


def test_load_local_file(tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (4, 4)).save(path)
    result = load_source(str(path))
    assert result.name == "photo"


def test_missing_file(tmp_path):
    with pytest.raises(InputError):
        load_source(str(tmp_path / "nope.png"))


def test_is_url():
    assert is_url("https://example.com/cat.png")
    assert not is_url("cat.png")
    assert not is_url("-")


class FakeResponse:
    def __init__(self, content, status=200):
        self.content = content
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


def test_load_url(monkeypatch):
    data = encode(Image.new("RGB", (3, 3)), "PNG")
    monkeypatch.setattr(source.requests, "get", lambda url, timeout: FakeResponse(data))
    result = load_source("https://example.com/images/cat.png")
    assert result.name == "cat"
    assert result.frames[0].pixels.size == (3, 3)


def test_load_url_http_error(monkeypatch):
    monkeypatch.setattr(source.requests, "get", lambda url, timeout: FakeResponse(b"", status=404))
    with pytest.raises(InputError, match="Can't fetch"):
        load_source("https://example.com/missing.png")


def test_load_url_connection_error(monkeypatch):
    def fail(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(source.requests, "get", fail)
    with pytest.raises(InputError):
        load_source("http://example.com/a.png")


class FakeStdin:
    def __init__(self, data, tty=False):
        self.buffer = io.BytesIO(data)
        self.tty = tty

    def isatty(self):
        return self.tty


def test_piped_stdin(monkeypatch):
    monkeypatch.setattr(source.sys, "stdin", FakeStdin(gif_bytes()))
    result = load_source("-")
    assert result.animated
    assert result.name == "piped-img"


def test_stdin_without_pipe(monkeypatch):
    monkeypatch.setattr(source.sys, "stdin", FakeStdin(b"", tty=True))
    with pytest.raises(InputError, match="piped"):
        load_source("-")
