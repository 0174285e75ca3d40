"""SuccessionEngine - wires every service to one store and configuration."""

from typing import Any

from .config.loader import load_config
from .services.analytics import AnalyticsService
from .services.critical_roles import CriticalRoleService
from .services.development_plans import DevelopmentPlanService
from .services.succession_plans import SuccessionPlanService
from .services.talent_pools import TalentPoolService
from .storage.object_store import ObjectStore


class SuccessionEngine:
    """Entry point bundling the registry, tracker, pool manager, compiler and aggregator."""

    def __init__(self, store: ObjectStore, config: dict[str, Any] | None = None):
        self.store = store
        self.config = config or {}

        self.roles = CriticalRoleService(store, self.config)
        self.development_plans = DevelopmentPlanService(store, self.config)
        self.talent_pools = TalentPoolService(store, self.config)
        self.succession_plans = SuccessionPlanService(store, self.config)
        self.analytics = AnalyticsService(store, self.config)

    @classmethod
    def from_config(cls, config: dict[str, Any] | None = None) -> "SuccessionEngine":
        """Build an engine backed by the configured object store directory."""
        config = config if config is not None else load_config()
        storage = config.get("storage", {})
        store = ObjectStore(
            storage.get("object_store_dir", "data/store"),
            lock_timeout=float(storage.get("lock_timeout", 30.0)),
        )
        return cls(store, config)
