import time
from abc import ABC, abstractmethod
from typing import Any

from crop_claims.core.exceptions import AppError
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseService(ABC):
    """Base class for application services.

    Subclasses implement ``run`` and optionally ``validate``; callers go
    through ``execute``, which validates first and guarantees that anything
    escaping the service is an ``AppError``.
    """

    def __init__(self):
        self.logger = LOGGER

    @property
    def name(self) -> str:
        return self.__class__.__name__

    async def execute(self, *args, **kwargs) -> Any:
        """Validate the input, then run the service.

        Returns:
            Result of ``run``

        Raises:
            AppError: Domain errors pass through; anything else is wrapped
        """
        started = time.perf_counter()
        try:
            self.validate(*args, **kwargs)
            result = await self.run(*args, **kwargs)

        except AppError as e:
            self.logger.info(
                f"{self.name} stopped: {e}",
                extra={"service": self.name, "error_type": type(e).__name__},
            )
            raise

        except Exception as e:
            self.logger.error(
                f"{self.name} failed unexpectedly: {e}",
                exc_info=True,
                extra={"service": self.name},
            )
            raise AppError(f"{self.name} failed: {e}", original_error=e)

        self.logger.debug(
            f"{self.name} completed",
            extra={"service": self.name, "elapsed_ms": round((time.perf_counter() - started) * 1000, 1)},
        )
        return result

    def validate(self, *args, **kwargs):
        """Check the input before ``run``; the default accepts everything.

        Raises:
            ValidationError: If input is invalid
        """

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Core service logic."""
