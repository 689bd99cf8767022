# app/schemas/todo.py
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictBool, field_serializer
from pydantic.alias_generators import to_camel


# ── 생성 요청 ─────────────────────────────────────────────
class TodoCreate(BaseModel):
    # 누락 여부는 라우터에서 400으로 처리하므로 기본값 None
    title: Optional[str] = None
    description: Optional[str] = None


# ── 부분 수정 값 ───────────────────────────────────────────
class TodoPatch(BaseModel):
    """
    수정할 필드만 담는 값.
    보내지 않은 필드와 null로 보낸 필드는 model_fields_set으로 구분한다.
    """
    completed: Optional[StrictBool] = None
    title: Optional[str] = None
    description: Optional[str] = None

    def has(self, field: str) -> bool:
        return field in self.model_fields_set


# ── 수정 요청 ─────────────────────────────────────────────
class TodoUpdate(TodoPatch):
    id: Optional[str] = None

    def to_patch(self) -> TodoPatch:
        return TodoPatch(**self.model_dump(exclude={"id"}, exclude_unset=True))


# ── 조회 응답 ─────────────────────────────────────────────
class TodoRead(BaseModel):
    id: str
    title: str
    description: Optional[str]
    completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("created_at", "updated_at")
    def _iso_utc(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
