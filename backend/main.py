import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from backend import config
from backend.database import Base, engine
import backend.models
from backend.routes import auth, dashboard, functions, history, meals, profile

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="NutriSnap API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

origins_env = config.FRONT_ORIGINS
allow_origins = (
    [o.strip() for o in origins_env.split(",")] if origins_env and origins_env != "*" else ["*"]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(meals.router)
app.include_router(dashboard.router)
app.include_router(history.router)
app.include_router(functions.router)
app.add_exception_handler(RequestValidationError, functions.validation_error_handler)


@app.get("/")
def health():
    return {"status": "ok"}
