"""
Habit Routes - Habits, instances, suggestions and analytics
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from mycore.core.dependencies import get_notification_service, get_store
from mycore.core.exceptions import NotAuthenticatedError, InvalidDataError, DatabaseError
from mycore.models.habit import InstanceStatusRequest, SuggestionRequest, ToggleInstanceRequest
from mycore.services.habits.completion import toggle_instance
from mycore.services.store import HabitStore

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("")
async def get_habits(store: HabitStore = Depends(get_store)):
    """Get all habits with streaks recomputed from history"""
    try:
        return {"status": "success", "habits": store.get_habits()}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/stats")
async def get_habit_stats(store: HabitStore = Depends(get_store)):
    """Per-habit streak and strength score"""
    try:
        return {"status": "success", "stats": store.get_habit_stats()}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/suggestions")
async def get_suggestions(request: SuggestionRequest, store: HabitStore = Depends(get_store)):
    """Suggested template habits for the given interests"""
    return {"status": "success", "habits": store.get_suggestions(request.interests)}


@router.get("/instances")
async def get_instances(dates: List[str] = Query(..., description="Dates in YYYY-MM-DD format"),
                        store: HabitStore = Depends(get_store)):
    """Get (creating if missing) the instances for a list of dates"""
    try:
        return {"status": "success", "instances": store.get_week_instances(dates)}
    except InvalidDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/week")
async def get_week(anchor: Optional[str] = None, store: HabitStore = Depends(get_store)):
    """Instances for the 7 days around anchor (default today), grouped by date"""
    try:
        return {"status": "success", **store.get_week_overview(anchor)}
    except InvalidDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/summary")
async def get_daily_summary(date: Optional[str] = None, store: HabitStore = Depends(get_store)):
    """Completion summary for a date (default today)"""
    try:
        return {"status": "success", **store.get_daily_summary(date)}
    except InvalidDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/instances/{instance_id}")
async def update_instance(instance_id: str, request: InstanceStatusRequest,
                          store: HabitStore = Depends(get_store)):
    """Set an instance's completion state"""
    try:
        instance = store.update_instance_status(instance_id, request.completed, request.value)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "instance": instance}


@router.post("/instances/{instance_id}/toggle")
async def toggle(instance_id: str, request: Optional[ToggleInstanceRequest] = None,
                 store: HabitStore = Depends(get_store),
                 notifications=Depends(get_notification_service)):
    """Flip an instance's completion state, sending congratulations if earned"""
    value = request.value if request else None
    try:
        instance = toggle_instance(store, instance_id, value, notifications)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "instance": instance}
