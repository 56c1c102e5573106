import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from addy.errors import AddyError
from api import state
from api.config import CORS_ALLOW_ORIGINS, PORT
from api.routers import github, nft, ops, tasks

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state.cache_sweeper = state.build_cache_sweeper()
    state.cache_sweeper.start()
    yield
    await state.cache_sweeper.stop()
    state.cache_sweeper = None


app = FastAPI(title="Addy Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AddyError)
async def addy_error_handler(request: Request, exc: AddyError) -> JSONResponse:
    logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


app.include_router(ops.router)
app.include_router(tasks.router)
app.include_router(github.router)
app.include_router(nft.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
