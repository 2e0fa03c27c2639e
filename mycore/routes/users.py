"""
User Routes - Profile, onboarding, settings and reset
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from mycore.core.dependencies import get_auth_service, get_store
from mycore.core.exceptions import (
    NotAuthenticatedError,
    OnboardingError,
    DatabaseError
)
from mycore.models.user import InitUserRequest, OnboardingRequest, UserSettings
from mycore.services.store import HabitStore

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def get_user(store: HabitStore = Depends(get_store)):
    """Get the signed-in user's profile (null if none)"""
    try:
        return {"status": "success", "user": store.get_user()}
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/init")
async def init_user(request: InitUserRequest, store: HabitStore = Depends(get_store)):
    """Get or create the profile for the signed-in identity"""
    try:
        return {"status": "success", "user": store.init_user(request.email, request.name)}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/onboarding")
async def complete_onboarding(request: OnboardingRequest, store: HabitStore = Depends(get_store)):
    """Finish onboarding: interests, chosen habits and permissions"""
    try:
        user_id = store.session.require_user_id()
        user = store.complete_onboarding(user_id, request.interests, request.habits, request.permissions)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except OnboardingError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if user is None:
        raise HTTPException(status_code=404, detail="Profile not found, call /users/init first")
    return {"status": "success", "user": user}


@router.put("/me/settings")
async def update_settings(request: UserSettings, store: HabitStore = Depends(get_store)):
    """Update the location / notification / screen-time toggles"""
    try:
        user = store.update_user_settings(request)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "user": user}


@router.post("/reset")
async def reset(purge: Optional[bool] = None, auth=Depends(get_auth_service),
                store: HabitStore = Depends(get_store)):
    """Log out and clear the session; wipes stored data per the reset policy"""
    try:
        wiped = store.reset(purge=purge)
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    auth.logout()
    return {"status": "success", "data_wiped": wiped}
