import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from infragraph import __version__
from infragraph.api.routes import router
from infragraph.config import API_TITLE, CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=API_TITLE,
    version=__version__,
)

# Middleware first
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
