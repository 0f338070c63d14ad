from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, File, HTTPException, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse

from skin_analyzer.config import load_settings
from skin_analyzer.errors import NoImageSelectedError, SubmissionInProgressError, UnsupportedImageError
from skin_analyzer.gemini_client import GeminiSkinAnalyzer
from skin_analyzer.logger import setup_logger
from skin_analyzer.presentation import render_state
from skin_analyzer.previews import PREVIEW_PREFIX, PreviewRegistry
from skin_analyzer.session import SkinAnalysisSession
from skin_analyzer.store import SessionStore
from skin_analyzer.uploads import store_image

# settings come from .env / environment (mainly for the Gemini API key)
settings = load_settings()
setup_logger("skin_analyzer", settings.log_level)
logger = setup_logger("main", settings.log_level)

STATIC_DIR = Path(__file__).parent / "static"
SESSION_COOKIE = "session_id"

# one Gemini client for the whole process, one session per browser
_analyzer = GeminiSkinAnalyzer(api_key=settings.api_key, model_name=settings.model_name)
previews = PreviewRegistry()
sessions = SessionStore(max_sessions=settings.max_sessions, idle_ttl=settings.session_ttl)
logger.info("Gemini model: %s (API key %s)", settings.model_name, "set" if settings.api_key else "missing")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # nothing outlives the process: drop every session and its stored upload
    sessions.close_all()


app = FastAPI(title="AI Skin Analyzer", lifespan=lifespan)

# CORS setup so a separately hosted frontend can call this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_analyzer() -> GeminiSkinAnalyzer:
    return _analyzer


def get_upload_dir() -> Path:
    return settings.upload_dir


async def get_session(
    request: Request,
    response: Response,
    analyzer: GeminiSkinAnalyzer = Depends(get_analyzer),
) -> SkinAnalysisSession:
    # cookie -> session; unknown or missing cookie starts a fresh one
    session = sessions.get(request.cookies.get(SESSION_COOKIE))
    if session is None:
        session_id, session = sessions.create(lambda: SkinAnalysisSession(analyzer=analyzer, previews=previews))
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return session


# API endpoints

# health check endpoint (for uptime monitoring or just to see if the server is alive)
@app.get("/health")
def health():
    return {"ok": True}


# the single page that drives the session endpoints below
@app.get("/", response_class=HTMLResponse)
def index():
    index_path = STATIC_DIR / "index.html"
    if index_path.exists():
        return FileResponse(str(index_path))
    return HTMLResponse("<h1>AI Skin Analyzer</h1><p>Visit /docs for API documentation</p>")


@app.get("/session")
async def get_state(session: SkinAnalysisSession = Depends(get_session)):
    return render_state(session)


# step 1: pick a photo. replaces whatever was selected before
@app.post("/select")
async def select_image(
    file: UploadFile = File(...),
    session: SkinAnalysisSession = Depends(get_session),
    upload_dir: Path = Depends(get_upload_dir),
):
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="The uploaded file is empty.")
    try:
        asset = await store_image(data, file.filename or "", file.content_type, upload_dir)
    except UnsupportedImageError as e:
        raise HTTPException(status_code=415, detail=str(e))

    session.select_file(asset)
    return render_state(session)


# step 2: send the selected photo to Gemini and wait for the plan
# a failed analysis is still a 200, the error is part of the state
@app.post("/analyze")
async def analyze(session: SkinAnalysisSession = Depends(get_session)):
    try:
        await session.submit()
    except NoImageSelectedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return render_state(session)


@app.post("/reset")
async def reset(session: SkinAnalysisSession = Depends(get_session)):
    session.reset()
    return render_state(session)


@app.get(PREVIEW_PREFIX + "{token}")
def preview(token: str):
    asset = previews.resolve(token)
    if asset is None or not asset.path.exists():
        raise HTTPException(status_code=404, detail="Preview not found.")
    return FileResponse(str(asset.path), media_type=asset.media_type)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
