import pytest
import responses

from jswitch.downloader import Downloader, simple_progress
from jswitch.errors import NetworkError

URL = "https://example.com/jdk.zip"
MB = 1024 * 1024


@pytest.fixture
def http():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_creates_download_dir(tmp_path):
    target = tmp_path / "a" / "downloads"
    downloader = Downloader(target)
    assert target.is_dir()
    assert downloader.download_dir == target


def test_download_writes_body_and_reports_progress(http, tmp_path):
    body = bytes(range(256)) * 600
    http.add(responses.GET, URL, body=body, headers={"Content-Length": str(len(body))})
    calls = []
    path = Downloader(tmp_path).download_file(URL, "jdk.zip", lambda cur, tot: calls.append((cur, tot)))
    assert path == tmp_path / "jdk.zip"
    assert path.read_bytes() == body
    assert calls[-1] == (len(body), len(body))
    assert all(tot == len(body) for _, tot in calls)
    assert [cur for cur, _ in calls] == sorted(cur for cur, _ in calls)


def test_download_without_callback(http, tmp_path):
    body = b"abc" * 10
    http.add(responses.GET, URL, body=body, headers={"Content-Length": str(len(body))})
    path = Downloader(tmp_path).download_file(URL, "x.zip")
    assert path.read_bytes() == body


def test_existing_file_is_reused(http, tmp_path, capsys):
    existing = tmp_path / "jdk.zip"
    existing.write_bytes(b"cached")
    path = Downloader(tmp_path).download_file(URL, "jdk.zip")
    assert path == existing
    assert path.read_bytes() == b"cached"
    assert len(http.calls) == 0
    assert "Using existing file..." in capsys.readouterr().out


def test_network_failure(http, tmp_path):
    with pytest.raises(NetworkError):
        Downloader(tmp_path).download_file(URL, "jdk.zip")
    assert not (tmp_path / "jdk.zip").exists()


def test_simple_progress_partial(capsys):
    simple_progress(MB, 2 * MB)
    assert capsys.readouterr().out == "\r  Progress:  50% (   1/   2 MB)"


def test_simple_progress_complete_ends_line(capsys):
    simple_progress(2 * MB, 2 * MB)
    assert capsys.readouterr().out == "\r  Progress: 100% (   2/   2 MB)\n"