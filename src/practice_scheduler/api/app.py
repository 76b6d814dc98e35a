"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from practice_scheduler.api.models import CommandRequest, CommandResponse
from practice_scheduler.api.records import router as records_router
from practice_scheduler.app_logging import configure_logging
from practice_scheduler.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(records_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/command")
    async def run_command(body: CommandRequest, request: Request) -> CommandResponse:
        """Run one console command on behalf of the supplied user."""
        if not body.command or body.user is None or not body.user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Command and user auth are required.",
            )
        state_container: AppContainer = request.app.state.container
        caller = body.user.to_caller()
        result = await state_container.command_dispatcher.process_command(
            body.command, caller
        )
        if result.is_error:
            logger.info(
                "Command failed",
                extra={"caller_id": caller.id, "result_message": result.message},
            )
        return CommandResponse.from_result(result)

    return app
