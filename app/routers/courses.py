"""Course router - API endpoints for courses."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from app.database import get_database
from app.models.course import Course, CourseCreate
from app.routers.auth import get_current_user_id
from app.services.course_service import CourseService


router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("", response_model=Course, status_code=status.HTTP_201_CREATED)
async def create_course(
    course: CourseCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Add a course with its tees.

    - Requires authentication
    - Returns 400 if a course with the same name and location exists
    """
    service = CourseService(db)
    try:
        return await service.create_course(user_id=user_id, course_create=course)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[Course])
async def list_courses(
    search: Optional[str] = Query(None, description="Match course name or city"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List courses sorted by name.

    - Requires authentication
    - Returns at most 50 courses
    """
    service = CourseService(db)
    return await service.list_courses(search=search)


@router.get("/{course_id}", response_model=Course)
async def get_course(
    course_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get a single course."""
    service = CourseService(db)
    try:
        return await service.get_course(course_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
