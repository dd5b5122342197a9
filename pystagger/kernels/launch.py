"""pystagger.kernels.launch
Execution context and the ``@kernel`` decorator.

Kernels are written once as plain Python loops over ``numba.prange``. The
decorator keeps the Python body and compiles parallel and serial numba
variants on first use; the context passed to each launch picks one.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numba

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    """
    Where and how a kernel runs.

    parallel : bool
        Compile with ``parallel=True`` so ``prange`` loops are split across threads.
    jit : bool
        If False the kernel body runs as plain Python (step-through debugging).
    """
    parallel: bool = True
    jit: bool = True

    @property
    def variant(self) -> str:
        if not self.jit:
            return "python"
        return "parallel" if self.parallel else "serial"

    def launch(self, kern: "Kernel", *args):
        logger.debug(f"launch {kern.name} [{self.variant}]")
        return kern.variant(self.variant)(*args)


class Kernel:
    def __init__(self, func, fastmath: bool = False):
        self.py_func = func
        self.name = func.__name__
        self._fastmath = fastmath
        self._compiled = {}

    def variant(self, which: str):
        if which == "python":
            return self.py_func
        fn = self._compiled.get(which)
        if fn is None:
            parallel = which == "parallel"
            # on-disk cache for the parallel build only; both builds share one cache key
            fn = numba.njit(cache=parallel, fastmath=self._fastmath, parallel=parallel)(self.py_func)
            self._compiled[which] = fn
        return fn

    def __repr__(self):
        return f"<Kernel {self.name}>"


def kernel(func=None, *, fastmath: bool = False):
    """Decorator: ``@kernel`` or ``@kernel(fastmath=True)``."""
    if func is None:
        return lambda f: Kernel(f, fastmath=fastmath)
    return Kernel(func, fastmath=fastmath)
