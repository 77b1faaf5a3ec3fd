"""
Tests for the name -> SMILES lookup client. The HTTP layer is stubbed out.
"""

import pytest
import sys
import os
import urllib.error

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from moltext_web import name_lookup
from moltext_web.errors import NameResolutionError
from moltext_web.name_lookup import name_to_smiles

URL = "http://opsin.test/convert"


class TestNameToSmiles:
    """Response handling."""

    def test_success(self, monkeypatch):
        calls = []

        def fake_http_json(url, payload, timeout=10.0):
            calls.append((url, payload, timeout))
            return {"success": True, "smiles": "CCO"}

        monkeypatch.setattr(name_lookup, "http_json", fake_http_json)
        assert name_to_smiles("ethanol", URL, timeout=3.0) == "CCO"
        assert calls == [(URL, {"name": "ethanol"}, 3.0)]

    @pytest.mark.parametrize("payload", [
        {"success": False, "smiles": "CCO"},
        {"success": True},
        {"success": True, "smiles": ""},
        ["not", "a", "dict"],
    ])
    def test_reported_failure(self, monkeypatch, payload):
        monkeypatch.setattr(name_lookup, "http_json", lambda *a, **k: payload)
        with pytest.raises(NameResolutionError) as exc:
            name_to_smiles("unobtainium", URL)
        assert str(exc.value) == "Name-to-SMILES conversion failed"
        assert exc.value.status is None

    def test_http_error(self, monkeypatch):
        def fail(*args, **kwargs):
            raise urllib.error.HTTPError(URL, 500, "boom", None, None)

        monkeypatch.setattr(name_lookup, "http_json", fail)
        with pytest.raises(NameResolutionError) as exc:
            name_to_smiles("water", URL)
        assert str(exc.value) == "Name-to-SMILES conversion failed (HTTP 500)"
        assert exc.value.status == 500

    def test_network_error(self, monkeypatch):
        def fail(*args, **kwargs):
            raise urllib.error.URLError("connection refused")

        monkeypatch.setattr(name_lookup, "http_json", fail)
        with pytest.raises(NameResolutionError) as exc:
            name_to_smiles("water", URL)
        assert str(exc.value) == "Name-to-SMILES conversion error"

    def test_bad_json(self, monkeypatch):
        def fail(*args, **kwargs):
            raise ValueError("Expecting value")

        monkeypatch.setattr(name_lookup, "http_json", fail)
        with pytest.raises(NameResolutionError):
            name_to_smiles("water", URL)
