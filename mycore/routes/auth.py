"""
Auth Routes - Login, signup and session endpoints

The API serves one logical session per process: a login binds the shared
store for every caller. Run one instance per user; do not expose it as a
multi-user service.
"""
from fastapi import APIRouter, Depends, HTTPException

from mycore.core.dependencies import get_auth_service, get_store
from mycore.core.exceptions import AuthenticationError, NotConfiguredError
from mycore.models.user import CredentialsRequest
from mycore.services.store import HabitStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/session")
async def check_session(auth=Depends(get_auth_service), store: HabitStore = Depends(get_store)):
    """Return the current identity, binding it to the process-wide session"""
    try:
        identity = auth.check_session()
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    if identity is None:
        return {"status": "success", "authenticated": False, "identity": None}
    store.bind_identity(identity)
    return {"status": "success", "authenticated": True, "identity": identity}


@router.post("/login")
async def login(request: CredentialsRequest, auth=Depends(get_auth_service),
                store: HabitStore = Depends(get_store)):
    """Log in with email and password; every caller now acts as this user"""
    try:
        identity = auth.login(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))

    store.bind_identity(identity)
    return {"status": "success", "identity": identity}


@router.post("/signup")
async def signup(request: CredentialsRequest, auth=Depends(get_auth_service),
                 store: HabitStore = Depends(get_store)):
    """Create an account and log in, binding the process-wide session"""
    try:
        identity = auth.signup(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))

    store.bind_identity(identity)
    return {"status": "success", "identity": identity}


@router.post("/google")
async def login_with_google(auth=Depends(get_auth_service)):
    """Start the Google OAuth flow"""
    try:
        return {"status": "success", **auth.login_with_google()}
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/logout")
async def logout(auth=Depends(get_auth_service), store: HabitStore = Depends(get_store)):
    """Sign out and invalidate the process-wide session"""
    auth.logout()
    store.logout()
    return {"status": "success"}
