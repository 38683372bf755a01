import concurrent.futures
import threading
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from eth_typing import HexStr

from .abi import Function

T = TypeVar("T")

DEFAULT_MAX_WORKERS = 8

_executor_lock = threading.Lock()
_default_executor: Optional[concurrent.futures.ThreadPoolExecutor] = None


def default_executor() -> concurrent.futures.ThreadPoolExecutor:
    """Returns the shared pool used by ``send_async`` when no executor is given."""
    global _default_executor
    with _executor_lock:
        if _default_executor is None:
            _default_executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=DEFAULT_MAX_WORKERS, thread_name_prefix="remote-call"
            )
        return _default_executor


class RemoteCall(Generic[T]):
    """A deferred remote computation.

    Nothing is sent until ``send`` or ``send_async`` is invoked. Every
    invocation is an independent execution.
    """

    def __init__(self, fn: Callable[[], T]):
        self._fn = fn

    def send(self) -> T:
        """Executes the call on the current thread and returns its result."""
        return self._fn()

    def send_async(self, executor: Optional[concurrent.futures.Executor] = None) -> "concurrent.futures.Future[T]":
        """Submits the call and returns a future resolving to its result or error."""
        if executor is None:
            executor = default_executor()
        return executor.submit(self._fn)


class RemoteFunctionCall(RemoteCall[T]):
    """A RemoteCall that invokes a single contract function."""

    def __init__(self, function: Function, fn: Callable[[], T]):
        super().__init__(fn)
        self.function = function

    def encode_function_call(self) -> HexStr:
        return self.function.encode()

    def decode_function_response(self, response: bytes) -> Tuple[Any, ...]:
        return self.function.decode_output(response)
