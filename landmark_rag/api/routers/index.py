"""
Index management API endpoints.

Routes: GET /index/list, POST /index/build

Dependencies: landmark_rag.application.services.index_builder, landmark_rag.boundary.vdb
System role: Index status and build HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from landmark_rag.api.deps import (
    get_index_builder,
    get_settings_dependency,
    get_vector_store_dependency,
)
from landmark_rag.api.routers.router_utils import to_http_exception
from landmark_rag.application.services import IndexBuilder
from landmark_rag.boundary.vdb import VectorStore
from landmark_rag.configs import Settings
from landmark_rag.core.exceptions import LandmarkRagException
from landmark_rag.models.index import IndexBuildResponse, IndexStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


@router.get("/list", response_model=IndexStatsResponse)
async def index_stats(
    vector_store: VectorStore = Depends(get_vector_store_dependency),
) -> IndexStatsResponse:
    """
    Report how many chunks are indexed.

    Raises:
        HTTPException(502): Store unreachable
    """
    try:
        count = await vector_store.count()
    except LandmarkRagException as e:
        logger.error(f"{__name__}:index_stats - {type(e).__name__}: {e}")
        raise to_http_exception(e, "get index stats")
    return IndexStatsResponse(total_vector_count=count, has_vectors=count > 0)


@router.post("/build", response_model=IndexBuildResponse)
async def build_index(
    index_builder: IndexBuilder = Depends(get_index_builder),
    settings: Settings = Depends(get_settings_dependency),
) -> IndexBuildResponse:
    """
    Index the configured landmark titles.

    Raises:
        HTTPException(502): Source, embedding or store failure
        HTTPException(500): Configuration error (e.g. dimension mismatch)
    """
    logger.info(f"{__name__}:build_index - START titles={len(settings.landmark_titles)}")
    try:
        result = await index_builder.build_index(settings.landmark_titles)
    except LandmarkRagException as e:
        logger.error(f"{__name__}:build_index - {type(e).__name__}: {e}")
        raise to_http_exception(e, "build index")

    return IndexBuildResponse(
        message="Index built successfully",
        documents_indexed=result.documents,
        chunks_indexed=result.chunks,
    )
