from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from kanban_board.domain.outcomes import Rejected
from kanban_board.domain.task_models import Stage, Task, TaskCreate
from kanban_board.services.board_service import BoardService

router = APIRouter(tags=["board"])


def get_service(request: Request) -> BoardService:
    # create_app() puts one service per app on app.state
    return request.app.state.board


class MovePayload(BaseModel):
    direction: Literal[-1, 1]


class DropPayload(BaseModel):
    stage: Stage


class DragPayload(BaseModel):
    id: int


class CommandResult(BaseModel):
    changed: bool
    message: Optional[str] = None
    task: Optional[Task] = None


def _result(outcome) -> CommandResult:
    return CommandResult(changed=outcome.changed, message=outcome.message, task=outcome.task)



@router.get("/api/board")
async def get_board(svc: BoardService = Depends(get_service)):
    return svc.board_state()


@router.get("/partials/board", response_class=HTMLResponse)
async def board_fragment(svc: BoardService = Depends(get_service)):
    return svc.render()


@router.post("/api/tasks", response_model=CommandResult)
async def add_task(payload: TaskCreate, svc: BoardService = Depends(get_service)):
    outcome = await svc.add_task(payload.title, payload.desc)
    if isinstance(outcome, Rejected):
        raise HTTPException(status_code=422, detail=outcome.message)
    return _result(outcome)


@router.post("/api/tasks/{task_id}/move", response_model=CommandResult)
async def move_task(task_id: int, payload: MovePayload, svc: BoardService = Depends(get_service)):
    return _result(await svc.move_task(task_id, payload.direction))


@router.post("/api/tasks/{task_id}/drop", response_model=CommandResult)
async def drop_task(task_id: int, payload: DropPayload, svc: BoardService = Depends(get_service)):
    return _result(await svc.drop_task(task_id, payload.stage))


@router.delete("/api/tasks/{task_id}", response_model=CommandResult)
async def delete_task(task_id: int, svc: BoardService = Depends(get_service)):
    return _result(await svc.delete_task(task_id))


@router.delete("/api/tasks", response_model=CommandResult)
async def clear_all(confirm: bool = False, svc: BoardService = Depends(get_service)):
    if not confirm:
        raise HTTPException(status_code=400, detail="Clearing the board needs confirm=true")
    return _result(await svc.clear_all())


@router.post("/api/drag", status_code=204)
async def begin_drag(payload: DragPayload, svc: BoardService = Depends(get_service)):
    await svc.begin_drag(payload.id)


@router.post("/api/drag/drop", response_model=CommandResult)
async def drop_dragged(payload: DropPayload, svc: BoardService = Depends(get_service)):
    return _result(await svc.drop_dragged(payload.stage))


@router.delete("/api/drag", status_code=204)
async def end_drag(svc: BoardService = Depends(get_service)):
    await svc.end_drag()
