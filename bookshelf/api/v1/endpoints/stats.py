from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext, get_request_context
from bookshelf.core.database import get_db
from bookshelf.schemas.response import APIResponse, Messages
from bookshelf.schemas.stats import ReadingStats
from bookshelf.services.statistics import statistics_aggregator

router = APIRouter()


@router.get("/", response_model=APIResponse[ReadingStats])
def read_stats(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Reading statistics of the caller, recomputed on every request.
    """
    return APIResponse(
        message=Messages.STATS_RETRIEVED,
        data=statistics_aggregator.get_stats(db, ctx),
    )
