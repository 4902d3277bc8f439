import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_api.config import get_settings
from resume_api.dependencies import close_completion_client
from resume_api.routers import resume

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Resume parser starting on port %s", settings.port)
    yield
    await close_completion_client()


app = FastAPI(
    title="Resume Parse API",
    description="Extracts text from uploaded resumes and structures it with an LLM.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(resume.router, prefix="/api", tags=["Resume Parsing"])


@app.get("/")
async def root():
    return {"message": "Resume Parser API is running. POST a resume to /api/parse"}


def run() -> None:
    import uvicorn

    uvicorn.run("resume_api.main:app", host="0.0.0.0", port=settings.port)


# Local development runner
if __name__ == "__main__":
    run()
