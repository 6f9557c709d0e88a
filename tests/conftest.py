import base64
import re

import pytest
from PIL import Image

COMMAND_RE = re.compile(rb"\x1b_G([^;]*);([A-Za-z0-9+/=]*)\x1b\\")


def parse_commands(output: bytes) -> list[tuple[str, bytes]]:
    """Split terminal output into (control data, decoded payload) pairs."""
    return [(control.decode("ascii"), base64.standard_b64decode(data)) for control, data in COMMAND_RE.findall(output)]


def control_keys(control: str) -> dict[str, str]:
    return dict(pair.split("=", 1) for pair in control.split(","))


@pytest.fixture
def image_path(tmp_path):
    """A 100x40 opaque red PNG."""
    path = tmp_path / "red.png"
    Image.new("RGB", (100, 40), (255, 0, 0)).save(path)
    return path


@pytest.fixture(autouse=True)
def temp_dir(tmp_path, monkeypatch):
    """Keep transfer files inside the test's own tmp_path."""
    import tempfile

    transfer_dir = tmp_path / "transfer"
    transfer_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(transfer_dir))
    return transfer_dir
