import io
import os

import pytest
import requests
from PIL import Image

from termview import sources
from termview.color import Color
from termview.exceptions import SourceError, URLNotFoundError
from termview.sources import (
    STDIN,
    is_url,
    iter_dir,
    load_frames,
    open_image,
    read_stdin,
)

from . import BLUE, GREEN, RED

terminal = os.terminal_size((80, 25))


def png_bytes(size=(4, 4), color=RED):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, "PNG")
    return buffer.getvalue()


def make_gif(path, colors=(RED, GREEN, BLUE), duration=(50, 120, 200)):
    frames = [Image.new("RGB", (4, 4), color) for color in colors]
    frames[0].save(
        path,
        save_all=True,
        append_images=frames[1:],
        duration=list(duration),
        loop=0,
        disposal=1,
    )


class TestIsURL:
    @pytest.mark.parametrize(
        "source", ["http://example.com/a.png", "https://example.com/a.gif?x=1"]
    )
    def test_url(self, source):
        assert is_url(source)

    @pytest.mark.parametrize(
        "source", ["a.png", "/tmp/a.png", "ftp://example.com/a.png", "http://", "-"]
    )
    def test_not_url(self, source):
        assert not is_url(source)


class TestStdin:
    def test_read(self):
        assert read_stdin(io.BytesIO(b"data")) == b"data"

    def test_empty(self):
        with pytest.raises(SourceError, match="No data"):
            read_stdin(io.BytesIO())

    def test_open(self):
        with open_image(STDIN, stdin=io.BytesIO(png_bytes((3, 2)))) as image:
            assert image.size == (3, 2)

    def test_not_an_image(self):
        with pytest.raises(SourceError, match="standard input"):
            open_image(STDIN, stdin=io.BytesIO(b"not an image"))


class TestFile:
    def test_open(self, tmp_path):
        path = tmp_path / "image.png"
        path.write_bytes(png_bytes((5, 6)))
        with open_image(str(path)) as image:
            assert image.size == (5, 6)

    def test_missing(self, tmp_path):
        with pytest.raises(SourceError, match="No such file"):
            open_image(str(tmp_path / "missing.png"))

    def test_directory(self, tmp_path):
        with pytest.raises(SourceError):
            open_image(str(tmp_path))

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "text.png"
        path.write_text("hello")
        with pytest.raises(SourceError, match="identifiable"):
            open_image(str(path))

    def test_type(self):
        with pytest.raises(TypeError, match="'source'"):
            open_image(b"image.png")


class Response:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content
        self.ok = status_code < 400


class TestURL:
    url = "https://example.com/image.png"

    def test_open(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, **kw: Response(content=png_bytes((7, 1)))
        )
        with open_image(self.url) as image:
            assert image.size == (7, 1)

    def test_not_found(self, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda url, **kw: Response(404))
        with pytest.raises(URLNotFoundError):
            open_image(self.url)
        assert issubclass(URLNotFoundError, FileNotFoundError)

    def test_server_error(self, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda url, **kw: Response(500))
        with pytest.raises(SourceError, match="500"):
            open_image(self.url)

    def test_connection_error(self, monkeypatch):
        def get(url, **kwargs):
            raise requests.exceptions.ConnectionError("no route")

        monkeypatch.setattr(requests, "get", get)
        with pytest.raises(SourceError, match="Unable to get"):
            open_image(self.url)

    def test_not_an_image(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, **kw: Response(content=b"<html></html>")
        )
        with pytest.raises(SourceError, match="identifiable"):
            open_image(self.url)


class TestLoadFrames:
    def test_still(self):
        image = Image.new("RGB", (4, 6), RED)
        frames = load_frames(image, terminal_size=terminal)
        assert len(frames) == 1
        assert frames[0].duration is None
        assert frames[0].grid.size == (4, 6)
        assert frames[0].grid[0, 0] == Color(*RED)

    def test_resized(self):
        frames = load_frames(Image.new("RGB", (100, 50)), 10, terminal_size=terminal)
        assert frames[0].grid.size == (10, 5)

    def test_mirror(self):
        image = Image.new("RGB", (2, 1), RED)
        image.putpixel((1, 0), BLUE)
        frames = load_frames(image, terminal_size=terminal, mirror=True)
        assert frames[0].grid[0, 0] == Color(*BLUE)

    def test_transparency_kept(self):
        image = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
        assert load_frames(image, terminal_size=terminal)[0].grid[0, 0].transparent

    def test_animated(self, tmp_path):
        path = tmp_path / "anim.gif"
        make_gif(path)
        with Image.open(path) as image:
            frames = load_frames(image, terminal_size=terminal)
        assert len(frames) == 3
        assert [frame.grid[0, 0].rgb for frame in frames] == [RED, GREEN, BLUE]
        assert frames[0].duration == pytest.approx(0.05)
        assert frames[1].duration == pytest.approx(0.12)
        assert frames[2].duration == pytest.approx(0.2)

    def test_static(self, tmp_path):
        path = tmp_path / "anim.gif"
        make_gif(path)
        with Image.open(path) as image:
            frames = load_frames(image, terminal_size=terminal, static=True)
        assert len(frames) == 1
        assert frames[0].grid[0, 0].rgb == RED
        assert frames[0].duration is None

    def test_truncated(self, tmp_path):
        path = tmp_path / "image.png"
        path.write_bytes(png_bytes((64, 64))[:60])
        with Image.open(path) as image:
            with pytest.raises(SourceError, match="decode"):
                load_frames(image, terminal_size=terminal)


class TestIterDir:
    @pytest.fixture
    def tree(self, tmp_path):
        (tmp_path / "b.png").write_bytes(png_bytes())
        (tmp_path / "a.png").write_bytes(png_bytes())
        (tmp_path / "notes.txt").write_text("not an image")
        (tmp_path / ".hidden.png").write_bytes(png_bytes())
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "c.png").write_bytes(png_bytes())
        hidden = tmp_path / ".cache"
        hidden.mkdir()
        (hidden / "d.png").write_bytes(png_bytes())
        return tmp_path

    def names(self, paths, root):
        return [os.path.relpath(path, root) for path in paths]

    def test_flat(self, tree):
        assert self.names(iter_dir(str(tree)), tree) == ["a.png", "b.png"]

    def test_hidden(self, tree):
        names = self.names(iter_dir(str(tree), show_hidden=True), tree)
        assert names == [".hidden.png", "a.png", "b.png"]

    def test_recursive(self, tree):
        names = self.names(iter_dir(str(tree), recursive=True), tree)
        assert names == ["a.png", "b.png", os.path.join("sub", "c.png")]

    def test_recursive_hidden(self, tree):
        names = self.names(
            iter_dir(str(tree), recursive=True, show_hidden=True), tree
        )
        assert names == [
            ".hidden.png",
            "a.png",
            "b.png",
            os.path.join(".cache", "d.png"),
            os.path.join("sub", "c.png"),
        ]

    def test_empty(self, tmp_path):
        assert list(iter_dir(str(tmp_path))) == []

    def test_missing(self, tmp_path):
        assert list(iter_dir(str(tmp_path / "missing"))) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="No symlinks")
    def test_cyclic_symlink(self, tree):
        os.symlink(str(tree), str(tree / "sub" / "loop"))
        names = self.names(iter_dir(str(tree), recursive=True), tree)
        assert names == ["a.png", "b.png", os.path.join("sub", "c.png")]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="No symlinks")
    def test_symlink_elsewhere(self, tree, tmp_path_factory):
        other = tmp_path_factory.mktemp("other")
        (other / "e.png").write_bytes(png_bytes())
        os.symlink(str(other), str(tree / "link"))
        names = self.names(iter_dir(str(tree), recursive=True), tree)
        assert os.path.join("link", "e.png") in names


def test_module_logger():
    assert sources._logger.name == "termview.sources"
