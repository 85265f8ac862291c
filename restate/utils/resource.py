"""
Request/response state holder for remote calls.
Keeps the last result, loading flag and error message of an async fetch
function and lets callers re-run it with new parameters.
"""

from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteResource(Generic[T]):
    """
    Wraps an async fetch function with data/loading/error state.

    The function is called with keyword parameters; `refetch` replaces the
    stored parameters and calls it again.
    """

    def __init__(
        self,
        fn: Callable[..., Awaitable[T]],
        params: Optional[Dict[str, Any]] = None,
        skip: bool = False
    ):
        self.fn = fn
        self.params: Dict[str, Any] = dict(params or {})
        self.skip = skip
        self.data: Optional[T] = None
        self.loading: bool = not skip
        self.error: Optional[str] = None

    async def fetch(self, **params: Any) -> Optional[T]:
        """
        Call the wrapped function and record the outcome.

        Args:
            params: Keyword arguments for the function

        Returns:
            The fetched data, or the previous data if the call failed
        """
        self.loading = True
        self.error = None
        try:
            self.data = await self.fn(**params)
        except Exception as e:
            self.error = str(e) or type(e).__name__
            logger.error(f"Remote fetch {getattr(self.fn, '__name__', self.fn)} failed: {self.error}")
        finally:
            self.loading = False
        return self.data

    async def load(self) -> Optional[T]:
        """Initial fetch with the constructor parameters, unless skipped."""
        if self.skip:
            return self.data
        return await self.fetch(**self.params)

    async def refetch(self, new_params: Optional[Dict[str, Any]] = None) -> Optional[T]:
        self.params = dict(new_params or {})
        return await self.fetch(**self.params)
