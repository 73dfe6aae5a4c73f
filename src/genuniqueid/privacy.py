"""Privacy-preserving identifiers.

With privacy enabled the directory GUID is replaced by a salted SHA-256
digest. The digest is stable for a given (subject, authentication source)
pair and does not reveal the GUID.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Mapping
from typing import Any

from genuniqueid.errors import StateConsistencyError

SaltProvider = Callable[[], str]

PROXY_IDP_KEY = "saml:sp:IdP"


def privacy_hash(guid: str, source: str, salt: str) -> str:
    """Hex SHA-256 of ``guid|salt|source``."""
    data = f"{guid}|{salt}|{source}".encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def resolve_source_entity(state: Mapping[str, Any]) -> str:
    """Entity id the identifier is bound to.

    When proxying, the upstream IdP recorded under ``saml:sp:IdP`` wins
    over our own authentication source.
    """
    upstream = state.get(PROXY_IDP_KEY)
    if upstream is not None:
        return str(upstream)
    source = state.get("Source")
    if isinstance(source, Mapping) and source.get("entityid"):
        return str(source["entityid"])
    raise StateConsistencyError(
        "privacy is enabled but the request has no source entity id"
    )
