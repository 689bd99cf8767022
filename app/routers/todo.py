# app/routers/todo.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from app.db.session import get_session
from app.schemas.todo import TodoCreate, TodoRead, TodoUpdate
from app.services import todo_service

log = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["Todos"])


@router.get("", response_model=list[TodoRead])
def list_todos(db: Session = Depends(get_session)):
    try:
        todos = todo_service.list_todos(db)
    except Exception:
        log.exception("todo 목록 조회 실패")
        raise HTTPException(status_code=500, detail="Failed to fetch todos")
    return [TodoRead.model_validate(t) for t in todos]


@router.post("", response_model=TodoRead, status_code=status.HTTP_201_CREATED)
def create_todo(
    payload: Optional[TodoCreate] = None,
    db: Session = Depends(get_session),
):
    payload = payload or TodoCreate()
    if not todo_service.clean_title(payload.title):
        raise HTTPException(status_code=400, detail="Title is required")

    try:
        todo = todo_service.create_todo(db, payload.title, payload.description)
    except Exception:
        log.exception("todo 생성 실패")
        raise HTTPException(status_code=500, detail="Failed to create todo")
    return TodoRead.model_validate(todo)


@router.patch("", response_model=TodoRead)
def update_todo(
    payload: Optional[TodoUpdate] = None,
    db: Session = Depends(get_session),
):
    payload = payload or TodoUpdate()
    if not payload.id:
        raise HTTPException(status_code=400, detail="Todo ID is required")

    patch = payload.to_patch()
    # 저장된 title은 항상 비어 있지 않아야 함 (생성과 같은 규칙)
    if patch.has("title") and not todo_service.clean_title(patch.title):
        raise HTTPException(status_code=400, detail="Title is required")
    if patch.has("completed") and patch.completed is None:
        raise HTTPException(status_code=400, detail="Completed must be a boolean")

    try:
        todo = todo_service.update_todo(db, payload.id, patch)
    except Exception:
        # not found 포함, 저장소 오류는 모두 500으로 뭉갠다
        log.exception("todo 수정 실패: id=%s", payload.id)
        raise HTTPException(status_code=500, detail="Failed to update todo")
    return TodoRead.model_validate(todo)


@router.delete("")
def delete_todo(
    id: Optional[str] = Query(default=None),
    db: Session = Depends(get_session),
):
    if not id:
        raise HTTPException(status_code=400, detail="Todo ID is required")

    try:
        todo_service.delete_todo(db, id)
    except Exception:
        log.exception("todo 삭제 실패: id=%s", id)
        raise HTTPException(status_code=500, detail="Failed to delete todo")
    return {"message": "Todo deleted successfully"}
