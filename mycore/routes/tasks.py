"""
Task Routes - Tasks and projects
"""
from fastapi import APIRouter, Depends, HTTPException

from mycore.core.dependencies import get_store
from mycore.core.exceptions import NotAuthenticatedError, InvalidDataError, DatabaseError
from mycore.models.task import Project, Task, TaskUpdate
from mycore.services.store import HabitStore

router = APIRouter(tags=["tasks"])


@router.get("/tasks")
async def get_tasks(store: HabitStore = Depends(get_store)):
    try:
        return {"status": "success", "tasks": store.get_tasks()}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/tasks")
async def add_task(request: Task, store: HabitStore = Depends(get_store)):
    """Add a task; its project's progress is recomputed"""
    try:
        return {"status": "success", "task": store.add_task(request)}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/tasks/{task_id}")
async def update_task(task_id: str, request: TaskUpdate, store: HabitStore = Depends(get_store)):
    """Apply a partial update; missing tasks are ignored"""
    try:
        task = store.update_task(task_id, request.model_dump(exclude_unset=True))
    except InvalidDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "task": task}


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, store: HabitStore = Depends(get_store)):
    try:
        deleted = store.delete_task(task_id)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "deleted": deleted}


@router.get("/projects")
async def get_projects(store: HabitStore = Depends(get_store)):
    try:
        return {"status": "success", "projects": store.get_projects()}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/projects")
async def add_project(request: Project, store: HabitStore = Depends(get_store)):
    try:
        return {"status": "success", "project": store.add_project(request)}
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
