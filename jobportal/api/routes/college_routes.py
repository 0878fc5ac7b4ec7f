"""
College Routes

GET /colleges/search - Autocomplete search (short queries return popular colleges)
GET /colleges/popular - Most used colleges
GET /colleges/region/{region} - Colleges in a city or state
POST /colleges/add - Add a college or bump its usage count
POST /colleges/bulk-add - Seed many colleges at once
GET /colleges/stats - Directory statistics
PUT /colleges/{college_id}/verify - Mark a college as verified (admin only)
"""

from fastapi import APIRouter, HTTPException, Depends, Query, Response
from typing import Optional

from jobportal.core.auth import get_current_admin
from jobportal.core.logging import get_logger
from jobportal.services.mongo_service import get_college_service
from jobportal.schemas.schemas import (
    CollegeCreate, CollegeBulkAdd, CollegeResponse, CollegeListResponse,
    CollegeAddResponse, CollegeBulkAddResponse, CollegeStatsResponse
)

logger = get_logger(__name__)

router = APIRouter(prefix="/colleges", tags=["Colleges"])


@router.get("/search", response_model=CollegeListResponse)
async def search_colleges(
    q: Optional[str] = Query(None, description="Part of the college name or alias"),
    limit: int = Query(10, ge=1, le=50)
):
    colleges = get_college_service().search(q, limit=limit)
    return CollegeListResponse(colleges=colleges, count=len(colleges))


@router.get("/popular", response_model=CollegeListResponse)
async def popular_colleges(limit: int = Query(15, ge=1, le=50)):
    colleges = get_college_service().popular(limit=limit)
    return CollegeListResponse(colleges=colleges, count=len(colleges))


@router.get("/region/{region}", response_model=CollegeListResponse)
async def colleges_by_region(region: str, limit: int = Query(20, ge=1, le=100)):
    colleges = get_college_service().by_region(region, limit=limit)
    return CollegeListResponse(colleges=colleges, count=len(colleges))


@router.post("/add", response_model=CollegeAddResponse, status_code=201)
async def add_college(data: CollegeCreate, response: Response):
    """
    Add a college typed into the autocomplete.

    Returns 201 for a new college, 200 when it already existed
    (its usage count is incremented instead).
    """
    college, is_new = get_college_service().find_or_create(
        data.name,
        added_by=data.added_by,
        category=data.category.value if data.category else None,
        location=data.location.model_dump() if data.location else None
    )
    if not is_new:
        response.status_code = 200
    else:
        logger.info(f"New college added: {college['name']}")

    return CollegeAddResponse(
        message="New college added successfully" if is_new else "College already exists, usage count updated",
        college=college,
        is_new=is_new
    )


@router.post("/bulk-add", response_model=CollegeBulkAddResponse)
async def bulk_add_colleges(data: CollegeBulkAdd):
    results = get_college_service().bulk_add(data.colleges)
    return CollegeBulkAddResponse(message="Bulk operation completed", **results)


@router.get("/stats", response_model=CollegeStatsResponse)
async def college_stats():
    return get_college_service().stats()


@router.put("/{college_id}/verify", response_model=CollegeResponse)
async def verify_college(college_id: str, admin: dict = Depends(get_current_admin)):
    college = get_college_service().set_verified(college_id, True)
    if not college:
        raise HTTPException(status_code=404, detail="College not found")
    logger.info(f"College {college_id} verified by {admin['username']}")
    return college
