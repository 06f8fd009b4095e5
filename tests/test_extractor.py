import io
import tarfile
import zipfile
from pathlib import Path

import pytest

from jswitch.detector import java_executable
from jswitch.errors import ExtractionError
from jswitch.extractor import extract, extract_tar_gz, extract_zip, find_jdk_root

JAVA_NAME = java_executable(Path("x")).name


def make_zip(path, entries):
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


def make_tar_gz(path, entries):
    with tarfile.open(path, "w:gz") as archive:
        for name, data in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            archive.addfile(info, io.BytesIO(data))
    return path


def jdk_entries(root="jdk-17"):
    return {f"{root}/bin/{JAVA_NAME}": b"launcher", f"{root}/lib/modules": b"mods"}


def test_extract_zip_finds_root(tmp_path):
    archive = make_zip(tmp_path / "jdk.zip", jdk_entries())
    target = tmp_path / "out"
    root = extract(archive, target)
    assert root == target / "jdk-17"
    assert (root / "bin" / JAVA_NAME).read_bytes() == b"launcher"
    assert (root / "lib" / "modules").read_bytes() == b"mods"


def test_extract_tar_gz_finds_root(tmp_path):
    archive = make_tar_gz(tmp_path / "jdk-17-temurin.tar.gz", jdk_entries("jdk-17.0.9+9"))
    target = tmp_path / "out"
    root = extract(archive, target)
    assert root == target / "jdk-17.0.9+9"
    assert (root / "lib" / "modules").read_bytes() == b"mods"


def test_extract_tar_gz_direct(tmp_path):
    archive = make_tar_gz(tmp_path / "a.tgz", jdk_entries("j"))
    assert extract_tar_gz(archive, tmp_path / "o") == tmp_path / "o" / "j"


def test_extract_zip_direct_skips_unsafe_entries(tmp_path):
    entries = jdk_entries()
    entries["../escape.txt"] = b"bad"
    archive = make_zip(tmp_path / "jdk.zip", entries)
    target = tmp_path / "deep" / "out"
    root = extract_zip(archive, target)
    assert root == target / "jdk-17"
    assert not (tmp_path / "deep" / "escape.txt").exists()


def test_unsupported_format(tmp_path):
    archive = tmp_path / "jdk.rar"
    archive.write_bytes(b"data")
    with pytest.raises(ExtractionError, match="Unsupported format: rar"):
        extract(archive, tmp_path / "out")


def test_unknown_file_type(tmp_path):
    archive = tmp_path / "jdk"
    archive.write_bytes(b"data")
    with pytest.raises(ExtractionError, match="Unknown file type"):
        extract(archive, tmp_path / "out")


def test_corrupt_zip(tmp_path):
    archive = tmp_path / "jdk.zip"
    archive.write_bytes(b"not a zip file")
    with pytest.raises(ExtractionError):
        extract(archive, tmp_path / "out")


def test_corrupt_tar(tmp_path):
    archive = tmp_path / "jdk.tar.gz"
    archive.write_bytes(b"not a tarball at all")
    with pytest.raises(ExtractionError):
        extract(archive, tmp_path / "out")


def test_archive_without_java(tmp_path):
    archive = make_zip(tmp_path / "jdk.zip", {"docs/readme.txt": b"hi"})
    with pytest.raises(ExtractionError, match="JDK root directory not found"):
        extract(archive, tmp_path / "out")


def test_find_jdk_root_depth_limit(tmp_path):
    shallow = tmp_path / "a" / "b" / "c"
    (shallow / "bin").mkdir(parents=True)
    (shallow / "bin" / JAVA_NAME).write_bytes(b"")
    assert find_jdk_root(tmp_path) == shallow

    other = tmp_path / "other"
    deep = other / "a" / "b" / "c" / "d"
    (deep / "bin").mkdir(parents=True)
    (deep / "bin" / JAVA_NAME).write_bytes(b"")
    with pytest.raises(ExtractionError):
        find_jdk_root(other)


def test_find_jdk_root_base_itself(tmp_path):
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / JAVA_NAME).write_bytes(b"")
    assert find_jdk_root(tmp_path) == tmp_path