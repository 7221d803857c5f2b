"""
Feature Routes - Endpoints gated by feature flags.

Each endpoint shows one way to gate a route:
- /feature-a: not gated
- /feature-b: checked inline in the handler
- /feature-c: dependency built by require_feature()
- /feature-d: FeatureGate dependency class

A disabled feature answers 404, as if the route did not exist.
"""
from fastapi import APIRouter, Depends

from snippets.core.feature_flags import (
    FeatureGate,
    FeatureManager,
    ensure_enabled,
    get_feature_manager,
    require_feature,
)
from snippets.models.common import ErrorResponse, FeatureListResponse

router = APIRouter(tags=["Features"])

_not_found = {404: {"model": ErrorResponse}}


@router.get("/feature-a", response_model=str)
async def feature_a() -> str:
    return "Hello from Feature A"


@router.get("/feature-b", response_model=str, responses=_not_found)
async def feature_b(manager: FeatureManager = Depends(get_feature_manager)) -> str:
    ensure_enabled("FeatureB", manager)
    return "Hello from Feature B"


@router.get(
    "/feature-c",
    response_model=str,
    responses=_not_found,
    dependencies=[Depends(require_feature("FeatureC"))],
)
async def feature_c() -> str:
    return "Hello from Feature C"


@router.get(
    "/feature-d",
    response_model=str,
    responses=_not_found,
    dependencies=[Depends(FeatureGate("FeatureD"))],
)
async def feature_d() -> str:
    return "Hello from Feature D"


@router.get(
    "/features",
    response_model=FeatureListResponse,
    summary="Current feature flag states",
)
async def list_features(
    manager: FeatureManager = Depends(get_feature_manager),
) -> FeatureListResponse:
    return FeatureListResponse(features=manager.snapshot())
