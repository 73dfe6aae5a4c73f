"""UniqueIdFilter: scoped unique identifiers from directory GUIDs.

Reads a GUID from the source attribute, normalizes it to 32 lowercase hex
digits, optionally hashes it, appends the scope taken from the scope
attribute and adds the result to the target attribute. Nothing else in the
attribute set is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from genuniqueid.decoder import ENCODINGS, decoder_for
from genuniqueid.errors import ConfigurationError, StateError
from genuniqueid.privacy import SaltProvider, privacy_hash, resolve_source_entity

logger = logging.getLogger("genuniqueid.filter")

MAX_IDENTIFIER_LENGTH = 64

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class FilterConfig:
    """Resolved filter configuration. Immutable once built."""

    source_attribute: str = "objectGUID"
    target_attribute: str = "eduPersonUniqueId"
    scope_attribute: str = "eduPersonPrincipalName"
    encoding: str = "microsoft"
    privacy: bool = False

    def as_dict(self) -> dict[str, Any]:
        """Configuration keys as the host spells them."""
        return {
            "sourceAttribute": self.source_attribute,
            "targetAttribute": self.target_attribute,
            "scopeAttribute": self.scope_attribute,
            "encoding": self.encoding,
            "privacy": self.privacy,
        }


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ConfigurationError(f"privacy must be a boolean, got {value!r}")
    return bool(value)


def resolve_filter_config(config: Mapping[str, Any]) -> FilterConfig:
    """Build a FilterConfig from the host's configuration mapping.

    The encoding is validated before ``sourceAttribute`` is looked at, so an
    unknown encoding is fatal even when a source attribute is given.
    """
    encoding = str(config.get("encoding", "microsoft")).lower()
    if encoding not in ENCODINGS:
        raise ConfigurationError(f'attribute encoding "{encoding}" is not known.')
    default_source, _ = ENCODINGS[encoding]

    return FilterConfig(
        source_attribute=str(config.get("sourceAttribute", default_source)),
        target_attribute=str(config.get("targetAttribute", "eduPersonUniqueId")),
        scope_attribute=str(config.get("scopeAttribute", "eduPersonPrincipalName")),
        encoding=encoding,
        privacy=_as_bool(config.get("privacy", False)),
    )


def effective_scope(value: str) -> str:
    """Everything after the first ``@``, or the value itself."""
    if "@" in value:
        return value.split("@", 1)[1]
    return value


class UniqueIdFilter:
    """Adds scoped unique identifiers to a request's attributes."""

    def __init__(
        self,
        config: Mapping[str, Any] | FilterConfig | None = None,
        salt_provider: SaltProvider | None = None,
    ):
        if not isinstance(config, FilterConfig):
            config = resolve_filter_config(config or {})
        if config.privacy and (salt_provider is None or not salt_provider()):
            raise ConfigurationError("privacy is enabled but no secret salt is configured")
        self.config = config
        self._salt_provider = salt_provider
        self._decoder = decoder_for(config.encoding)

    @classmethod
    def from_config(
        cls,
        config: FilterConfig,
        salt_provider: SaltProvider | None = None,
    ) -> UniqueIdFilter:
        """Build a filter from an already resolved FilterConfig."""
        return cls(config, salt_provider)

    def process(self, state: dict[str, Any]) -> dict[str, Any]:
        """Augment ``state["Attributes"]`` in place and return ``state``.

        Only the target attribute is written. A DecodeError aborts the run;
        identifiers appended before it stay in place.
        """
        attributes = state.get("Attributes")
        if not isinstance(attributes, dict):
            raise StateError("request state has no Attributes mapping")

        cfg = self.config
        if cfg.scope_attribute not in attributes:
            return state
        if cfg.source_attribute not in attributes:
            return state
        scopes = list(attributes[cfg.scope_attribute])
        sources = list(attributes[cfg.source_attribute])
        target = attributes.setdefault(cfg.target_attribute, [])

        for scope_value in scopes:
            scope = effective_scope(scope_value)

            for raw in sources:
                uid = self._decoder.decode(raw, cfg.source_attribute)
                if not uid:
                    logger.warning("cowardly refusing to generate an empty unique id")
                    continue

                if cfg.privacy:
                    uid = privacy_hash(
                        uid,
                        resolve_source_entity(state),
                        self._salt_provider(),
                    )

                value = f"{uid[:MAX_IDENTIFIER_LENGTH]}@{scope}"
                if value in target:
                    continue
                target.append(value)

        return state
