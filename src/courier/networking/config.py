"""Configuration models for the HttpClient interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_USER_AGENT = "chrome"

USER_AGENTS: Mapping[str, str] = MappingProxyType(
    {
        "moz": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.36"
        ),
        "chrome": (
            "Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/54.0.2840.99 Safari/537.36"
        ),
        "safari": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_11_6) "
            "AppleWebKit/602.1.50 (KHTML, like Gecko) Version/10.0 "
            "Safari/602.1.50"
        ),
    }
)


def resolve_user_agent(preset: str | None) -> str | None:
    """Return the user-agent string for a preset key, or None if unknown."""
    if preset is None:
        return None
    return USER_AGENTS.get(preset)


def _empty_extras() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HttpClient behavior.

    ``base_url`` and ``api_key`` are fixed for the lifetime of a client. Keys
    supplied through :meth:`from_context` that are not recognized are kept in
    ``extras`` so host applications can read them back with :meth:`get`.
    """

    base_url: str
    api_key: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str | None = DEFAULT_USER_AGENT
    extras: Mapping[str, Any] = field(default_factory=_empty_extras)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        # Freeze copied extras to avoid post-init mutation side effects.
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @classmethod
    def from_context(
        cls, base_url: str, context: Mapping[str, Any] | None = None
    ) -> HttpClientConfig:
        """Build a config from a loose context mapping.

        Recognized keys are ``api_key``, ``timeout`` and ``user_agent``;
        anything else is preserved in ``extras``.
        """
        context = dict(context or {})
        timeout = context.pop("timeout", None)
        return cls(
            base_url=base_url,
            api_key=context.pop("api_key", None),
            timeout_seconds=(
                DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout
            ),
            user_agent=context.pop("user_agent", DEFAULT_USER_AGENT),
            extras=context,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a context value by dotted path, e.g. ``"auth.scope"``."""
        values: dict[str, Any] = dict(self.extras)
        values.update(
            api_key=self.api_key,
            timeout=self.timeout_seconds,
            user_agent=self.user_agent,
        )
        if key in values:
            return values[key]

        current: Any = values
        for part in key.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current
