"""FastAPI dependencies: capture runtime owned by the app."""

from fastapi import HTTPException, Request

from hevy_tcx.services.runtime import CaptureRuntime


def get_runtime(request: Request) -> CaptureRuntime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Capture runtime not started")
    return runtime
