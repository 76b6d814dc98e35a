"""Pydantic models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from practice_scheduler.domain.models import Caller, Role
from practice_scheduler.services.commands import CommandResult


class CallerPayload(BaseModel):
    """Caller identity supplied by the authentication layer."""

    id: str = ""
    role: str | None = None

    def to_caller(self) -> Caller:
        return Caller(id=self.id, role=Role.parse(self.role))


class CommandRequest(BaseModel):
    """Body of a console command request."""

    command: str = ""
    user: CallerPayload | None = None


class CommandResponse(BaseModel):
    """Console command outcome."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    is_error: bool = Field(default=False, alias="isError")
    link: str | None = None

    @classmethod
    def from_result(cls, result: CommandResult) -> "CommandResponse":
        return cls(
            success=result.success,
            message=result.message,
            is_error=result.is_error,
            link=result.link,
        )
