from __future__ import annotations

from typing import Dict, List
import time

from dotenv import find_dotenv, load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from agents.orchestrator_agent import InvalidRequestType, OrchestratorAgent
from tools.credentials import CredentialProvider, EnvCredentialProvider
from tools.llm_client import LLMClient
from utils.config import load_config
from utils.logging import get_logger, setup_logging
from utils.telemetry import Telemetry

load_dotenv(find_dotenv(), override=False)

__version__ = "0.2.0"

logger = get_logger("server")

app = FastAPI(title="Interview AI Service", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

setup_logging(load_config().log_level)
app.state.start_time = time.time()
app.state.telemetry = Telemetry()


class HealthResp(BaseModel):
    status: str
    uptime_seconds: float
    counters: Dict[str, int]
    timings: Dict[str, Dict[str, float]]


class VersionResp(BaseModel):
    version: str
    api: str
    request_types: List[str]


def get_credentials() -> CredentialProvider:
    return EnvCredentialProvider()


def get_llm_client(credentials: CredentialProvider = Depends(get_credentials)) -> LLMClient:
    return LLMClient(credentials=credentials)


def get_orchestrator(request: Request, llm: LLMClient = Depends(get_llm_client)) -> OrchestratorAgent:
    return OrchestratorAgent(llm=llm, telemetry=request.app.state.telemetry)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(problems)


@app.get("/health", response_model=HealthResp)
async def health() -> HealthResp:
    return HealthResp(
        status="ok",
        uptime_seconds=round(time.time() - app.state.start_time, 3),
        counters=dict(app.state.telemetry.counters),
        timings=app.state.telemetry.summary(),
    )


@app.get("/version", response_model=VersionResp)
async def version(orch: OrchestratorAgent = Depends(get_orchestrator)) -> VersionResp:
    return VersionResp(version=__version__, api="v1", request_types=orch.request_types)


@app.post("/api/interview-ai")
async def interview_ai(request: Request, orch: OrchestratorAgent = Depends(get_orchestrator)) -> JSONResponse:
    try:
        payload = await request.json()
    except ValueError:
        return error_response(400, "Request body must be a JSON object")

    try:
        result = await orch.dispatch(payload)
    except InvalidRequestType as e:
        return error_response(400, str(e))
    except ValidationError as e:
        return error_response(400, _validation_message(e))
    except Exception as e:
        logger.exception(f"Request failed: {e}")
        return error_response(500, str(e) or "An unexpected error occurred")
    return JSONResponse(content=result)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
