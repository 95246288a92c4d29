"""
Shared fixtures for the chefcampaign tests.
"""

import base64
from io import BytesIO

import pytest
from PIL import Image

from chefcampaign.core import config as config_module
from chefcampaign.core.credentials import ENV_VAR_MAP


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Keep tests away from the real user configuration and credentials.
    """
    monkeypatch.setenv("CHEFCAMPAIGN_CONFIG", str(tmp_path / "config.json"))
    for env_var in ENV_VAR_MAP.values():
        monkeypatch.delenv(env_var, raising=False)
    config_module.get_config(reload=True)
    yield
    config_module._config_cache = {}


@pytest.fixture
def png_bytes():
    """
    A tiny encoded PNG image.
    """
    buffer = BytesIO()
    Image.new("RGB", (4, 4), (200, 80, 40)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_data_url(png_bytes):
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def chef_data():
    """
    The Mama's Kitchen brief from the example scenario.
    """
    return {
        "brandName": "Mama's Kitchen",
        "cuisineType": "Italian",
        "starDish": "Truffle Pasta",
        "city": "Amsterdam",
        "menuHighlights": "Fresh pasta"
    }
