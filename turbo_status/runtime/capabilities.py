"""Capability registry: active modules and in-process feature flags, computed once at startup.

Nothing here touches the network. The reporter consumes the precomputed
registry rather than introspecting the interpreter per request.
"""

import sys
import sysconfig
from dataclasses import dataclass
from importlib.machinery import EXTENSION_SUFFIXES
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple

# Modules whose presence means an interactive debugger is attached
DEBUGGER_MODULES = ("debugpy", "pydevd")


@dataclass(frozen=True)
class CapabilityRegistry:
    """Snapshot of local runtime capabilities."""

    modules: FrozenSet[str]
    bytecode_cache: bool = False
    object_cache: bool = False
    debugger: bool = False

    def sorted_modules(self) -> Tuple[str, ...]:
        return tuple(sorted(self.modules))


def _is_extension(module: object) -> bool:
    path = getattr(module, "__file__", None)
    return isinstance(path, str) and path.endswith(tuple(EXTENSION_SUFFIXES))


def active_modules(
    builtin_names: Optional[Iterable[str]] = None,
    loaded: Optional[Mapping[str, object]] = None,
) -> FrozenSet[str]:
    """Built-in module names plus top-level names of loaded C extension modules, private names excluded."""
    builtin_names = sys.builtin_module_names if builtin_names is None else builtin_names
    loaded = dict(sys.modules) if loaded is None else loaded
    names = set(builtin_names)
    for name, module in loaded.items():
        if module is not None and _is_extension(module):
            names.add(name.split(".", 1)[0])
    return frozenset(n for n in names if n and not n.startswith("_"))


def bytecode_cache_enabled() -> bool:
    """True when compiled bytecode is written to and read from __pycache__."""
    return not sys.dont_write_bytecode


def object_cache_enabled() -> bool:
    """True when CPython's small-object allocator (pymalloc) was compiled in; False otherwise or when unknown."""
    return bool(sysconfig.get_config_var("WITH_PYMALLOC"))


def debugger_active(loaded: Optional[Mapping[str, object]] = None) -> bool:
    loaded = sys.modules if loaded is None else loaded
    if sys.gettrace() is not None:
        return True
    return any(name in loaded for name in DEBUGGER_MODULES)


def build_registry() -> CapabilityRegistry:
    """Query the interpreter once and freeze the result."""
    return CapabilityRegistry(
        modules=active_modules(),
        bytecode_cache=bytecode_cache_enabled(),
        object_cache=object_cache_enabled(),
        debugger=debugger_active(),
    )
