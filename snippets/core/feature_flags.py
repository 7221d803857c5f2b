"""
Feature Flags - Named on/off switches for gating endpoints.

Flags are loaded from settings (FEATURE_FLAGS) when the manager is first
created and may be toggled at runtime with FeatureManager.set().
A flag that was never configured is disabled.

Two ways to gate a route with a dependency are provided:
- require_feature(name): builds a dependency function
- FeatureGate(name): a reusable dependency class
Handlers can also check ``get_feature_manager().is_enabled(name)`` inline.
"""
import threading
from typing import Dict, Iterable, Optional

from snippets.core.exceptions import FeatureDisabledError
from snippets.core.logging_config import get_logger

logger = get_logger(__name__)


class FeatureManager:
    """
    Thread-safe registry of feature flags.

    Example:
        >>> manager = FeatureManager({"FeatureB": True})
        >>> manager.is_enabled("FeatureB")
        True
        >>> manager.is_enabled("Unknown")
        False
    """

    def __init__(self, flags: Optional[Dict[str, bool]] = None):
        self._flags: Dict[str, bool] = dict(flags or {})
        self._lock = threading.RLock()

        logger.info(
            f"FeatureManager initialized with {len(self._flags)} flags",
            extra={"flags": self.snapshot()},
        )

    def is_enabled(self, name: str) -> bool:
        """Return whether ``name`` is enabled. Unknown flags are disabled."""
        with self._lock:
            return self._flags.get(name, False)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._flags

    def set(self, name: str, enabled: bool) -> None:
        """Enable or disable ``name``, registering it if needed."""
        with self._lock:
            previous = self._flags.get(name)
            self._flags[name] = bool(enabled)
        if previous != bool(enabled):
            logger.info(f"Feature flag changed: {name}={bool(enabled)}")

    def reset(self, flags: Optional[Dict[str, bool]] = None) -> None:
        """Replace every flag with ``flags``."""
        with self._lock:
            self._flags = dict(flags or {})

    def snapshot(self) -> Dict[str, bool]:
        """Copy of the current flag states."""
        with self._lock:
            return dict(self._flags)

    def enabled_features(self) -> Iterable[str]:
        return [name for name, enabled in self.snapshot().items() if enabled]


# Global feature manager instance
_feature_manager: Optional[FeatureManager] = None


def get_feature_manager() -> FeatureManager:
    """Get or create the global feature manager."""
    global _feature_manager
    if _feature_manager is None:
        from snippets.core.config import get_settings
        _feature_manager = FeatureManager(get_settings().feature_flags)
    return _feature_manager


def ensure_enabled(name: str, manager: Optional[FeatureManager] = None) -> None:
    """Raise FeatureDisabledError unless ``name`` is enabled."""
    manager = manager or get_feature_manager()
    if not manager.is_enabled(name):
        logger.debug(f"Feature disabled, rejecting request: {name}")
        raise FeatureDisabledError(name)


def require_feature(name: str):
    """
    Build a route dependency that rejects requests while ``name`` is disabled.

    Usage:
        @router.get("/feature-c", dependencies=[Depends(require_feature("FeatureC"))])
    """
    async def _dependency() -> None:
        ensure_enabled(name)

    _dependency.__name__ = f"require_{name}"
    return _dependency


class FeatureGate:
    """
    Reusable dependency class gating a route on a single flag.

    Usage:
        @router.get("/feature-d", dependencies=[Depends(FeatureGate("FeatureD"))])
    """

    def __init__(self, name: str):
        self.name = name

    async def __call__(self) -> None:
        ensure_enabled(self.name)

    def __repr__(self) -> str:
        return f"FeatureGate({self.name!r})"
