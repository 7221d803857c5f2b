# =============================================================================
# tests/test_feature_flags.py - Feature Flag Tests
# =============================================================================

import asyncio

import pytest

from snippets.core.config import parse_feature_flags
from snippets.core.exceptions import FeatureDisabledError
from snippets.core.feature_flags import FeatureGate, FeatureManager, ensure_enabled, require_feature


# =============================================================================
# FeatureManager
# =============================================================================

class TestFeatureManager:

    def test_configured_flags(self):
        manager = FeatureManager({"FeatureB": True, "FeatureC": False})

        assert manager.is_enabled("FeatureB")
        assert not manager.is_enabled("FeatureC")

    def test_unknown_flag_disabled(self):
        manager = FeatureManager()
        assert not manager.is_enabled("Nope")
        assert not manager.has("Nope")

    def test_set_registers_and_toggles(self):
        manager = FeatureManager()
        manager.set("FeatureX", True)

        assert manager.has("FeatureX")
        assert manager.is_enabled("FeatureX")

        manager.set("FeatureX", False)
        assert not manager.is_enabled("FeatureX")

    def test_snapshot_is_a_copy(self):
        manager = FeatureManager({"A": True})
        snapshot = manager.snapshot()
        snapshot["A"] = False

        assert manager.is_enabled("A")

    def test_enabled_features(self):
        manager = FeatureManager({"A": True, "B": False, "C": True})
        assert manager.enabled_features() == ["A", "C"]

    def test_ensure_enabled_raises(self):
        with pytest.raises(FeatureDisabledError) as exc_info:
            ensure_enabled("Off", FeatureManager({"Off": False}))

        assert exc_info.value.status_code == 404
        assert exc_info.value.feature == "Off"


class TestGates:

    def test_require_feature_dependency(self, feature_manager):
        feature_manager.set("Gate", False)
        dependency = require_feature("Gate")

        with pytest.raises(FeatureDisabledError):
            asyncio.run(dependency())

        feature_manager.set("Gate", True)
        assert asyncio.run(dependency()) is None

    def test_feature_gate_class(self, feature_manager):
        feature_manager.set("Gate", False)

        with pytest.raises(FeatureDisabledError):
            asyncio.run(FeatureGate("Gate")())


class TestParseFeatureFlags:

    def test_pairs(self):
        assert parse_feature_flags("FeatureB=true, FeatureC=off") == {
            "FeatureB": True,
            "FeatureC": False,
        }

    def test_blank(self):
        assert parse_feature_flags("") == {}
        assert parse_feature_flags(" , ") == {}

    @pytest.mark.parametrize("raw", ["FeatureB", "=true", "FeatureB=maybe"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_feature_flags(raw)


# =============================================================================
# Endpoints
# =============================================================================

class TestFeatureEndpoints:

    def test_feature_a_always_available(self, client):
        response = client.get("/feature-a")

        assert response.status_code == 200
        assert response.json() == "Hello from Feature A"

    @pytest.mark.parametrize(
        "path, enabled",
        [("/feature-b", True), ("/feature-c", False), ("/feature-d", True)],
    )
    def test_configured_state(self, client, path, enabled):
        response = client.get(path)
        assert response.status_code == (200 if enabled else 404)

    @pytest.mark.parametrize(
        "path, flag",
        [("/feature-b", "FeatureB"), ("/feature-c", "FeatureC"), ("/feature-d", "FeatureD")],
    )
    def test_runtime_toggle(self, client, feature_manager, path, flag):
        feature_manager.set(flag, False)
        disabled = client.get(path)
        assert disabled.status_code == 404
        assert disabled.json()["error"] == "feature_disabled"

        feature_manager.set(flag, True)
        enabled = client.get(path)
        assert enabled.status_code == 200
        assert enabled.json() == f"Hello from Feature {flag[-1]}"

    def test_list_features(self, client):
        response = client.get("/features")

        assert response.status_code == 200
        assert response.json()["features"] == {
            "FeatureB": True,
            "FeatureC": False,
            "FeatureD": True,
        }
