"""
Service state for one application instance.

Owns exactly one of each core component:
    directory -> UserDirectory
    metrics   -> RequestMetrics (reads the directory for user counts)
    catalog   -> QuoteCatalog
    auth      -> HashAuthenticator (reads its key through a SecretProvider)

Lifecycle:
    - Built by `ServiceState.create()` when the app is created.
    - Closed by `close()` on app shutdown: the directory is cleared and the
      secret provider releases its resources.
    - Handlers receive the state through the app factory's closures, never
      through module globals.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from lambda_gateway.auth.authenticator import HashAuthenticator
from lambda_gateway.auth.secret_provider import SecretProvider, get_secret_provider
from lambda_gateway.config import Settings, get_settings
from lambda_gateway.directory.directory import UserDirectory
from lambda_gateway.directory.ids import get_id_strategy
from lambda_gateway.metrics.metrics import RequestMetrics
from lambda_gateway.quotes.catalog import QuoteCatalog

log = logging.getLogger(__name__)


@dataclass
class ServiceState:
    settings: Settings
    directory: UserDirectory
    metrics: RequestMetrics
    catalog: QuoteCatalog
    secret_provider: SecretProvider
    auth: HashAuthenticator

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        secret_provider: Optional[SecretProvider] = None,
        catalog: Optional[QuoteCatalog] = None,
    ) -> "ServiceState":
        """
        Wire fresh components from settings.

        Args:
            settings (Optional[Settings]): Defaults to the current environment.
            secret_provider (Optional[SecretProvider]): Overrides the configured backend.
            catalog (Optional[QuoteCatalog]): Overrides the default quote catalog.
        """
        settings = settings or get_settings()
        directory = UserDirectory(id_strategy=get_id_strategy(settings.ID_STRATEGY, prefix=settings.ID_PREFIX))
        provider = secret_provider or get_secret_provider(settings=settings)
        auth = HashAuthenticator(
            provider=provider,
            secret_id=settings.SECRET_ID,
            missing_secret_policy=settings.MISSING_SECRET_POLICY,
        )
        log.info("Service state created: %r", settings)
        return cls(
            settings=settings,
            directory=directory,
            metrics=RequestMetrics(directory),
            catalog=catalog or QuoteCatalog(),
            secret_provider=provider,
            auth=auth,
        )

    def close(self) -> None:
        log.info(
            "Service state closing: %d requests handled, %d users dropped",
            self.metrics.total_requests,
            self.directory.count(),
        )
        self.directory.clear()
        self.secret_provider.close()
