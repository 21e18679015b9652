import logging
from typing import Any

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import TaskError
from .models import Task, parse_create, parse_patch
from .store import TaskStore
from .utils import Settings, get_settings, parse_id

logger = logging.getLogger(__name__)


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def create_app(store: TaskStore | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the API around a single store. A seeded store is created when none is given."""
    settings = settings or get_settings()

    app = FastAPI(title="Tiny Tasks API")
    app.state.store = store if store is not None else TaskStore.with_seed_tasks()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaskError)
    async def handle_task_error(request: Request, exc: TaskError) -> JSONResponse:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            message = "Invalid JSON body"
        else:
            message = "Invalid request"
        logger.info("%s %s -> 400 %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/tasks", status_code=200)
    def list_tasks(store: TaskStore = Depends(get_store)) -> list[Task]:
        return store.list_all()

    @app.get("/tasks/{task_id}", status_code=200)
    def get_task(task_id: str, store: TaskStore = Depends(get_store)) -> Task:
        return store.get(parse_id(task_id))

    @app.post("/tasks", status_code=201)
    def create_task(payload: Any = Body(default=None), store: TaskStore = Depends(get_store)) -> Task:
        data = parse_create(payload if payload is not None else {})
        return store.create(data)

    @app.patch("/tasks/{task_id}", status_code=200)
    def update_task(
        task_id: str,
        payload: Any = Body(default=None),
        store: TaskStore = Depends(get_store),
    ) -> Task:
        tid = parse_id(task_id)
        store.get(tid)
        return store.update(tid, parse_patch(payload if payload is not None else {}))

    @app.delete("/tasks/{task_id}", status_code=200)
    def delete_task(task_id: str, store: TaskStore = Depends(get_store)) -> Task:
        return store.delete(parse_id(task_id))

    return app


app = create_app()
