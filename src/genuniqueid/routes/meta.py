"""Meta endpoints: health, version, resolved filter configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from genuniqueid.deps import get_filter
from genuniqueid.filter import UniqueIdFilter

GATEWAY_VERSION = "0.1.0"

router = APIRouter(prefix="/api/v1", tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "genuniqueid"}


@router.get("/version")
def version():
    return {"gateway": GATEWAY_VERSION}


@router.get("/filter")
def filter_config(uid_filter: UniqueIdFilter = Depends(get_filter)):
    return uid_filter.config.as_dict()
