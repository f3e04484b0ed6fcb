"""ContextVar-based engine configuration for Pincel.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Highlighter captures the active config when it is created, so changing
the context afterwards never alters an engine already in use.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Implicit: engines pick up the active config
    from pincel import Highlighter
    from pincel.config import EngineConfig, engine_config_context

    with engine_config_context(EngineConfig(tab_width=8)):
        h = Highlighter()  # h.tab_width == 8

    # Explicit
    h = Highlighter(config=EngineConfig(tab_width=2, strict=True))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from pincel.errors import ConfigError


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine configuration.

    Attributes:
        tab_width: Display columns a tab occupies. Atom coordinates, line
            projection and windowing all agree on this value.
        strict: Raise InvariantError on internal tokenizer inconsistencies
            instead of skipping the offending atom. Meant for development
            and test runs; a host editor should keep it off.

    """

    tab_width: int = 4
    strict: bool = False

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            msg = f"tab_width must be at least 1, got {self.tab_width}"
            raise ConfigError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "EngineConfig":
        """Create EngineConfig from dictionary.

        Useful when settings come from an editor's own configuration file.
        Only includes keys that are valid EngineConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                EngineConfig attribute names.

        Returns:
            New EngineConfig instance with values from dict.

        Example:
            >>> config = EngineConfig.from_dict({"tab_width": 8, "theme": "dark"})
            >>> config.tab_width
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: EngineConfig = EngineConfig()

_engine_config: ContextVar[EngineConfig] = ContextVar(
    "engine_config",
    default=_DEFAULT_CONFIG,
)


def get_engine_config() -> EngineConfig:
    """Get current engine configuration (context-local).

    Returns:
        The active EngineConfig for this thread/context.

    """
    return _engine_config.get()


def set_engine_config(config: EngineConfig) -> None:
    """Set engine configuration for current context.

    Args:
        config: EngineConfig instance to use for this context.

    """
    _engine_config.set(config)


def reset_engine_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _engine_config.set(_DEFAULT_CONFIG)


@contextmanager
def engine_config_context(config: EngineConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: EngineConfig to use within the context.

    Yields:
        None

    Example:
        >>> with engine_config_context(EngineConfig(strict=True)):
        ...     h = Highlighter()
        >>> # Previous config restored here

    """
    previous = _engine_config.get()
    _engine_config.set(config)
    try:
        yield
    finally:
        _engine_config.set(previous)


__all__ = [
    "EngineConfig",
    "get_engine_config",
    "set_engine_config",
    "reset_engine_config",
    "engine_config_context",
]
