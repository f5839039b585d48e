"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..domain.ports.claim_store import ClaimStore
from ..domain.services.analysis_scheduler import AnalysisScheduler
from ..domain.services.claim_lifecycle import ClaimLifecycle
from ..domain.services.duplicate_grouper import DuplicateGrouper
from ..domain.services.notification_fanout import NotificationFanout
from ..domain.services.similarity_matcher import SimilarityMatcher
from ..domain.services.user_profiles import UserProfileService
from .config import EngineConfig
from .storage.key_value_store import KeyValueClaimStore

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        store: Optional[ClaimStore] = None,
    ):
        """Initialize service container.

        Args:
            config: Engine configuration; read from the environment when omitted
            store: Claim store; an in-memory key-value store when omitted
        """
        self._config = config or EngineConfig.from_env()
        self._store = store or KeyValueClaimStore()
        self._services: Dict[str, Any] = {}
        self._setup_services()

    def _setup_services(self):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        matcher = SimilarityMatcher(threshold=self._config.similarity_threshold)
        grouper = DuplicateGrouper(matcher)
        fanout = NotificationFanout(self._store)
        lifecycle = ClaimLifecycle(self._store, fanout, grouper)
        scheduler = AnalysisScheduler(lifecycle, fanout, delay=self._config.analysis_delay)

        self._services = {
            'claim_store': self._store,
            'notification_fanout': fanout,
            'claim_lifecycle': lifecycle,
            'analysis_scheduler': scheduler,
            'user_profile_service': UserProfileService(self._store),
        }

        logger.info("✅ Service container setup completed")

    @property
    def config(self) -> EngineConfig:
        """Engine configuration in use."""
        return self._config

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_claim_store(self) -> ClaimStore:
        """Get claim store."""
        return self.get('claim_store')

    def get_notification_fanout(self) -> NotificationFanout:
        """Get notification fan-out service."""
        return self.get('notification_fanout')

    def get_claim_lifecycle(self) -> ClaimLifecycle:
        """Get claim lifecycle service."""
        return self.get('claim_lifecycle')

    def get_analysis_scheduler(self) -> AnalysisScheduler:
        """Get analysis scheduler."""
        return self.get('analysis_scheduler')

    def get_user_profile_service(self) -> UserProfileService:
        """Get user profile service."""
        return self.get('user_profile_service')


@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_claim_store() -> ClaimStore:
    """FastAPI dependency for the claim store."""
    return get_service_container().get_claim_store()


def get_notification_fanout() -> NotificationFanout:
    """FastAPI dependency for the notification fan-out service."""
    return get_service_container().get_notification_fanout()


def get_claim_lifecycle() -> ClaimLifecycle:
    """FastAPI dependency for the claim lifecycle service."""
    return get_service_container().get_claim_lifecycle()


def get_analysis_scheduler() -> AnalysisScheduler:
    """FastAPI dependency for the analysis scheduler."""
    return get_service_container().get_analysis_scheduler()


def get_user_profile_service() -> UserProfileService:
    """FastAPI dependency for the user profile service."""
    return get_service_container().get_user_profile_service()
