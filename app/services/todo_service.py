# app/services/todo_service.py
from typing import List, Optional

from sqlmodel import Session, select

from app.models.todo import Todo, utcnow
from app.schemas.todo import TodoPatch


class TodoNotFound(LookupError):
    def __init__(self, todo_id: str):
        super().__init__(f"todo not found: {todo_id}")
        self.todo_id = todo_id


def clean_title(title: Optional[str]) -> str:
    return (title or "").strip()


def clean_description(description: Optional[str]) -> Optional[str]:
    """공백뿐이거나 비어 있으면 None으로 저장한다."""
    return (description or "").strip() or None


def list_todos(db: Session) -> List[Todo]:
    stmt = select(Todo).order_by(Todo.created_at.desc())
    return list(db.exec(stmt).all())


def create_todo(db: Session, title: str, description: Optional[str] = None) -> Todo:
    now = utcnow()
    todo = Todo(
        title=clean_title(title),
        description=clean_description(description),
        completed=False,
        created_at=now,
        updated_at=now,
    )
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


def _get_or_raise(db: Session, todo_id: str) -> Todo:
    todo = db.get(Todo, todo_id)
    if todo is None:
        raise TodoNotFound(todo_id)
    return todo


def update_todo(db: Session, todo_id: str, patch: TodoPatch) -> Todo:
    todo = _get_or_raise(db, todo_id)

    # 보낸 필드만 반영
    if patch.has("completed"):
        todo.completed = patch.completed
    if patch.has("title"):
        todo.title = clean_title(patch.title)
    if patch.has("description"):
        todo.description = clean_description(patch.description)
    todo.updated_at = utcnow()

    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


def delete_todo(db: Session, todo_id: str) -> None:
    todo = _get_or_raise(db, todo_id)
    db.delete(todo)
    db.commit()
