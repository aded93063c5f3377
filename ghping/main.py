"""
ghping web app.

Receives GitHub and CI webhooks and pings engineers on Slack.

Run with:
    uvicorn ghping.main:app --port 3000
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional
import httpx
from fastapi import FastAPI, Request, BackgroundTasks
from fastapi.responses import JSONResponse
from ghping import __version__
from ghping.directory import EngineerDirectory, load_engineers
from ghping.routing import RoutingEngine, NotificationSink, dispatch
from ghping.settings import Settings, load_settings
from ghping.slack import SlackNotifier, SlackError

logger = logging.getLogger(__name__)


def build_notifier(settings: Settings) -> SlackNotifier:
    return SlackNotifier(
        token=settings.slack_bot_token,
        shared_channel=settings.shared_channel,
        operator_channel=settings.operator_channel,
    )


def build_engine(settings: Settings, notifier: Optional[SlackNotifier] = None) -> RoutingEngine:
    """Load the engineer roster and build the routing engine. Raises ConfigError."""
    directory = EngineerDirectory(load_engineers(settings.engineers_file))
    return RoutingEngine(
        directory,
        resolve_chat_user=notifier.resolve_chat_user if notifier else None,
    )


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[RoutingEngine] = None,
    sink: Optional[NotificationSink] = None
) -> FastAPI:
    """
    Create the ghping FastAPI app.

    Anything not passed in is built at startup from the environment; a
    missing or invalid engineer roster stops the app from starting.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings = settings or load_settings()
        logging.basicConfig(
            level=app_settings.log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        app_sink = sink
        if app_sink is None:
            app_sink = build_notifier(app_settings)
            try:
                await app_sink.refresh_users()
            except (SlackError, ValueError, httpx.HTTPError) as e:
                logger.warning(f"Could not load Slack users at startup: {e}")

        app.state.sink = app_sink
        app.state.engine = engine or build_engine(
            app_settings,
            app_sink if isinstance(app_sink, SlackNotifier) else None,
        )
        logger.info(f"ghping ready with {len(app.state.engine.directory)} engineers")

        yield

    app = FastAPI(title="ghping", version=__version__, lifespan=lifespan)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "ghping"}

    async def github_webhook(request: Request, background_tasks: BackgroundTasks):
        """Handle GitHub and CI webhook events."""
        logger.info("New GitHub event!")
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Webhook body is not valid JSON: {e}")
            return JSONResponse(content={"error": "invalid JSON body"}, status_code=400)

        try:
            result = request.app.state.engine.process(payload)
        except Exception as e:
            logger.error(f"GitHub webhook error: {e}", exc_info=True)
            return JSONResponse(content={"status": "ignored"}, status_code=200)

        if not result.intents and not result.unresolved_handles:
            return JSONResponse(content={"status": "ignored"}, status_code=200)

        background_tasks.add_task(dispatch, result, request.app.state.sink)
        return JSONResponse(content={"status": "ok", "notifications": len(result.intents)})

    app.add_api_route("/ghping", github_webhook, methods=["POST"])
    app.add_api_route("/webhooks/github", github_webhook, methods=["POST"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3000)
