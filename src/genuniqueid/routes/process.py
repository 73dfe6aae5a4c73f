"""Process endpoint: run the filter over one subject's state.

The state comes back with the target attribute filled in. Decode and
state errors surface through the app's exception handlers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from genuniqueid.deps import get_filter
from genuniqueid.filter import UniqueIdFilter
from genuniqueid.models import RequestState

router = APIRouter(prefix="/api/v1", tags=["process"])


@router.post("/process")
def process(
    state: RequestState,
    uid_filter: UniqueIdFilter = Depends(get_filter),
):
    return uid_filter.process(state.to_state())
