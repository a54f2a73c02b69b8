import asyncio
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from api.auth import verify_api_key
from api.model.monitor_config_payload import MonitorConfigPayload
from di.di import DI
from util import log
from util.config import config
from util.errors import ServiceError


def get_di(request: Request) -> DI:
    return request.app.state.di


def _failure(message: str, e: Exception) -> HTTPException:
    log.e(message, e)
    status_code = e.http_status if isinstance(e, ServiceError) else 500
    return HTTPException(status_code = status_code, detail = {"reason": str(e)})


def create_app(di: DI | None = None, start_polling: bool = True) -> FastAPI:

    # noinspection PyUnusedLocal
    @asynccontextmanager
    async def lifespan(owner: FastAPI):
        root: DI = owner.state.di
        log.i(f"Lifecycle: Starting up [{os.getpid()}]")
        root.event_stream.bind_loop(asyncio.get_running_loop())
        unsubscribe = root.event_bus.subscribe(root.event_stream.on_event)
        if start_polling:
            root.poll_scheduler.start()
        yield  # this holds the app alive until the server is shut down
        log.i(f"Lifecycle: Shutting down [{os.getpid()}]...")
        if start_polling:
            root.poll_scheduler.stop()
        unsubscribe()
        root.usage_aggregator.close()

    app = FastAPI(
        docs_url = None,
        redoc_url = None,
        title = "Z.ai Usage Monitor",
        description = "Local API feeding the usage monitor's window and tray.",
        debug = config.log_level in ["local", "trace", "debug"],
        lifespan = lifespan,
    )
    app.state.di = di or DI()

    # noinspection PyTypeChecker
    app.add_middleware(
        CORSMiddleware,
        allow_origins = ["*"],
        allow_credentials = False,
        allow_methods = ["*"],
        allow_headers = ["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "version": config.version}

    @app.get("/usage")
    def get_usage_data(root: DI = Depends(get_di), _ = Depends(verify_api_key)) -> dict:
        try:
            usage_data = root.usage_controller.get_usage_data()
            return usage_data.model_dump(mode = "json", by_alias = True)
        except Exception as e:
            raise _failure("Failed to fetch usage data", e)

    @app.get("/usage/latest")
    def get_latest_usage_data(root: DI = Depends(get_di), _ = Depends(verify_api_key)) -> dict:
        try:
            usage_data = root.usage_controller.get_latest_usage_data()
            return usage_data.model_dump(mode = "json", by_alias = True)
        except Exception as e:
            raise _failure("Failed to get the latest usage data", e)

    @app.get("/usage/summary")
    def get_usage_summary(root: DI = Depends(get_di), _ = Depends(verify_api_key)) -> dict:
        try:
            return root.usage_controller.get_usage_summary().model_dump(mode = "json")
        except Exception as e:
            raise _failure("Failed to summarize usage data", e)

    @app.post("/usage/refresh")
    def refresh_usage(root: DI = Depends(get_di), _ = Depends(verify_api_key)) -> dict:
        root.usage_controller.refresh_now()
        return {"status": "OK"}

    @app.get("/config")
    def get_config(root: DI = Depends(get_di), _ = Depends(verify_api_key)) -> dict:
        return root.usage_controller.get_config().model_dump()

    @app.put("/config")
    def save_config(
        payload: MonitorConfigPayload,
        root: DI = Depends(get_di),
        _ = Depends(verify_api_key),
    ) -> dict:
        try:
            root.usage_controller.save_config(payload)
            return {"status": "OK"}
        except Exception as e:
            raise _failure("Failed to save config", e)

    @app.post("/config/test")
    def test_connection(
        payload: MonitorConfigPayload,
        root: DI = Depends(get_di),
        _ = Depends(verify_api_key),
    ) -> dict:
        try:
            usage_data = root.usage_controller.test_connection(payload)
            return usage_data.model_dump(mode = "json", by_alias = True)
        except Exception as e:
            raise _failure("Connection test failed", e)

    @app.get("/tray")
    def get_tray(root: DI = Depends(get_di), _ = Depends(verify_api_key)) -> dict:
        display = root.usage_controller.get_tray_display()
        return {
            "display": display.model_dump() if display else None,
            "menu": [item.model_dump() for item in root.usage_controller.get_tray_menu()],
        }

    @app.websocket("/events")
    async def events(websocket: WebSocket):
        root: DI = websocket.app.state.di
        await root.event_stream.connect(websocket)
        try:
            while True:
                await websocket.receive_text()  # clients only listen; this just notices the disconnect
        except WebSocketDisconnect:
            await root.event_stream.disconnect(websocket)

    return app


app = create_app()

# The main runner
if __name__ == "__main__":
    if "--dev" in sys.argv:  # when running locally...
        os.environ["LOG_LEVEL"] = "debug"
        config.log_level = "debug"
        reload = True
        print("INFO:     Launching in dev mode...")
    else:
        reload = False
        print("INFO:     Launching the usage monitor API...")
    uvicorn_log_level = {"local": "debug", "warn": "warning"}.get(config.log_level, config.log_level)

    if (version_file := Path("./.version")).exists():
        version_name = version_file.read_text().strip()
        if version_name:
            os.environ["VERSION"] = version_name
            config.version = version_name
            print("INFO:     Version file found", f"v{config.version}")

    uvicorn.run(
        "main:app",
        host = config.api_host,
        port = config.api_port,
        log_level = uvicorn_log_level,
        reload = reload,
    )
