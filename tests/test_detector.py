import subprocess
from pathlib import Path
from unittest import mock

from jswitch.detector import (
    detect_all,
    get_jdk_info,
    is_valid_jdk,
    java_executable,
    parse_version_output,
    scan_directory,
    search_paths,
)

OUTPUT1 = """java version "1.8.0_291"
Java(TM) SE Runtime Environment (build 1.8.0_291-b10)
Java HotSpot(TM) 64-Bit Server VM (build 25.291-b10, mixed mode)"""

OUTPUT2 = """openjdk version "17.0.2" 2022-01-18
OpenJDK Runtime Environment Temurin-17.0.2+8 (build 17.0.2+8)
OpenJDK 64-Bit Server VM Temurin-17.0.2+8 (build 17.0.2+8, mixed mode)"""


def make_fake_jdk(path: Path) -> Path:
    java = java_executable(path)
    java.parent.mkdir(parents=True, exist_ok=True)
    java.write_text("", encoding="utf-8")
    (path / "lib").mkdir(parents=True, exist_ok=True)
    return path


def fake_run(args, **kwargs):
    return subprocess.CompletedProcess(args, 0, stdout=b"", stderr=OUTPUT2.encode())


def test_parse_version_output_old_format():
    version, _, full = parse_version_output(OUTPUT1)
    assert version == "8"
    assert full == "1.8.0_291"


def test_parse_version_output_new_format():
    version, vendor, full = parse_version_output(OUTPUT2)
    assert version == "17"
    assert full == "17.0.2"
    assert vendor == "OpenJDK"


def test_parse_version_output_empty():
    assert parse_version_output("") == ("unknown", None, None)


def test_parse_version_output_oracle_vendor():
    text = 'java version "21.0.1"\nJava(TM) SE Runtime by Oracle'
    version, vendor, _ = parse_version_output(text)
    assert version == "21"
    assert vendor == "Oracle"


def test_is_valid_jdk(tmp_path):
    jdk = make_fake_jdk(tmp_path / "jdk")
    assert is_valid_jdk(jdk)


def test_is_valid_jdk_requires_lib(tmp_path):
    jdk = make_fake_jdk(tmp_path / "jdk")
    (jdk / "lib").rmdir()
    assert not is_valid_jdk(jdk)


def test_is_valid_jdk_requires_directory(tmp_path):
    assert not is_valid_jdk(tmp_path / "missing")


def test_java_executable_is_under_bin(tmp_path):
    exe = java_executable(tmp_path)
    assert exe.parent == tmp_path / "bin"
    assert exe.name.startswith("java")


def test_get_jdk_info_parses_output(tmp_path):
    jdk = make_fake_jdk(tmp_path / "jdk")
    with mock.patch("jswitch.detector.subprocess.run", side_effect=fake_run):
        info = get_jdk_info(jdk)
    assert info.path == jdk
    assert info.version == "17"
    assert info.java_version == "17.0.2"


def test_get_jdk_info_without_executable(tmp_path):
    assert get_jdk_info(tmp_path) is None


def test_get_jdk_info_when_launch_fails(tmp_path):
    jdk = make_fake_jdk(tmp_path / "jdk")
    with mock.patch("jswitch.detector.subprocess.run", side_effect=OSError("boom")):
        assert get_jdk_info(jdk) is None


def test_scan_directory_depth_limit(tmp_path):
    shallow = make_fake_jdk(tmp_path / "a" / "jdk")
    at_limit = make_fake_jdk(tmp_path / "a" / "b" / "c" / "d" / "jdk")
    too_deep = make_fake_jdk(tmp_path / "x" / "b" / "c" / "d" / "e" / "jdk")
    with mock.patch("jswitch.detector.subprocess.run", side_effect=fake_run):
        found = {info.path for info in scan_directory(tmp_path)}
    assert shallow in found
    assert at_limit in found
    assert too_deep not in found


def test_scan_directory_missing(tmp_path):
    assert scan_directory(tmp_path / "nowhere") == []


def test_search_paths_are_absolute():
    assert all(path.is_absolute() for path in search_paths())


def test_detect_all_includes_java_home_once(tmp_path, monkeypatch):
    jdk = make_fake_jdk(tmp_path / "home-jdk")
    monkeypatch.setenv("JAVA_HOME", str(jdk))

    def run(args, **kwargs):
        if Path(args[0]).is_relative_to(tmp_path):
            return fake_run(args)
        raise OSError("not a test JDK")

    with mock.patch("jswitch.detector.subprocess.run", side_effect=run):
        found = detect_all()
    paths = [info.path for info in found]
    assert paths.count(jdk) == 1
    assert paths == sorted(paths)
    assert len(paths) == len(set(paths))