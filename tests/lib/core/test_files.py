import os
import stat

from wrangler_profiles.lib.core.files import copy_private, ensure_private_dir, write_private_bytes


def _mode(path):
    return stat.S_IMODE(path.stat().st_mode)


def test_write_private_bytes_creates_parents(tmp_path):
    path = tmp_path / "a" / "b" / "secret.toml"

    write_private_bytes(path, b"data")

    assert path.read_bytes() == b"data"
    assert _mode(path) == 0o600


def test_write_private_bytes_tightens_existing_file(tmp_path):
    path = tmp_path / "secret.toml"
    path.write_bytes(b"old contents that are longer")
    os.chmod(path, 0o644)

    write_private_bytes(path, b"new")

    assert path.read_bytes() == b"new"
    assert _mode(path) == 0o600


def test_copy_private(tmp_path):
    src = tmp_path / "src.toml"
    src.write_bytes(b"\x00binary\xffpayload")
    dst = tmp_path / "dst" / "default.toml"

    copy_private(src, dst)

    assert dst.read_bytes() == src.read_bytes()
    assert _mode(dst) == 0o600


def test_ensure_private_dir(tmp_path):
    path = tmp_path / "profiles"
    ensure_private_dir(path)
    ensure_private_dir(path)
    assert path.is_dir()
    assert _mode(path) == 0o700
