import os
import threading

import pytest


class CountingRenderer:
    """Renderer double: wraps the body in <p>, counts calls, can block."""

    def __init__(self, gate: threading.Event | None = None) -> None:
        self.calls: list[str] = []
        self.gate = gate
        self.started = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, text: str) -> str:
        with self._lock:
            self.calls.append(text)
        self.started.set()
        if self.gate is not None:
            assert self.gate.wait(timeout=5), "renderer gate never opened"
        return f"<p>{text}</p>"

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.calls)


@pytest.fixture
def renderer():
    return CountingRenderer()


@pytest.fixture
def write_doc(tmp_path):
    """Write a document and pin its mtime to a known nanosecond stamp."""

    def _write(name: str, content: str, mtime_ns: int = 1_700_000_000_000_000_000):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        os.utime(path, ns=(mtime_ns, mtime_ns))
        return path

    return _write


@pytest.fixture
def posts_dir(tmp_path):
    """A posts directory with an index and one page."""
    posts = tmp_path / "posts"
    posts.mkdir()
    (posts / "index.md").write_text("Home\nWelcome to the **index**.\n", encoding="utf-8")
    (posts / "p1.md").write_text("First Post\n# Heading\n\nSome *text*.\n", encoding="utf-8")
    return posts


@pytest.fixture
def renderer_factory():
    """Build CountingRenderer instances, optionally gated on an Event."""
    return CountingRenderer


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep the real home directory, cwd and MDSERVER_* variables out of config lookups.

    Returns the (empty) working directory the test runs in.
    """
    from mdserver.config import hierarchy

    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "home" / "config.yaml")
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)
    return workdir
