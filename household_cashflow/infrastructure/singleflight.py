"""Request coalescing: one in-flight computation per key, shared by concurrent callers"""

import asyncio
from typing import Awaitable, Callable, Dict, Hashable, Tuple, TypeVar

T = TypeVar("T")


class SingleFlight:
    """
    Coalesce concurrent calls that share a key.

    The first caller for a key runs the computation; callers arriving while it
    is running await the same future instead of starting their own. The entry
    is removed as soon as the computation finishes (successfully or not), so
    the next call after completion runs again.
    """

    def __init__(self) -> None:
        self._in_flight: Dict[Hashable, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._in_flight)

    def is_in_flight(self, key: Hashable) -> bool:
        return key in self._in_flight

    async def do(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> Tuple[T, bool]:
        """
        Run ``fn`` once per concurrent burst of ``key``.

        Returns:
            (result, shared) where ``shared`` is True when the result came from
            another caller's computation.
        """
        existing = self._in_flight.get(key)
        if existing is not None:
            return await asyncio.shield(existing), True

        future = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            result = await fn()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unawaited failure is not reported twice
            future.exception()
            raise
        else:
            future.set_result(result)
            return result, False
        finally:
            self._in_flight.pop(key, None)
