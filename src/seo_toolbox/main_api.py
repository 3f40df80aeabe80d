from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from .config import get_settings
from .log import setup_logging, get_logger
from .errors import ConfigurationError, InputError
from .pipeline.run import pipeline
from .schemas.requests import AnalysisRequest, AnalysisResult, ToolInfo, ToolList
from .tools import get_tool, list_tools

setup_logging()
logger = get_logger("api")

app = FastAPI(title="SEO Toolbox")

@app.exception_handler(InputError)
async def input_error_handler(request: Request, exc: InputError):
    return JSONResponse(status_code=400, content={"error": str(exc)})

@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/api/tools", response_model=ToolList)
def tools():
    return ToolList(tools=[
        ToolInfo(name=t.name, description=t.description, subject_kind=t.subject_kind)
        for t in list_tools()
    ])

# Sync handler: FastAPI runs it in the threadpool, so the blocking vendor call
# does not stall the event loop.
@app.post("/api/{tool_name}", response_model=AnalysisResult)
def analyze(tool_name: str, body: AnalysisRequest):
    try:
        tool = get_tool(tool_name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    settings = get_settings()
    vendor = body.vendor or settings.DEFAULT_VENDOR
    credential = settings.credential_for(vendor)

    return pipeline.run(
        tool,
        body.subject,
        vendor=vendor,
        credential=credential,
        params=body.params,
        timeout=settings.VENDOR_TIMEOUT_SECONDS,
    )
