# server/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api import auth, records, grid, users
from config import CORS_ORIGINS, DEFAULT_PASSWORD, configure_logging
from core.permissions import EntryValidationError
from core.storage import SqlKeyValueStore, seed_data
from database import SessionLocal, init_db


configure_logging()
init_db()

with SessionLocal() as db:
    seed_data(SqlKeyValueStore(db), auth.get_password_hash(DEFAULT_PASSWORD))

app = FastAPI(title="AquaLIMS")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EntryValidationError)
def entry_validation_error(request: Request, exc: EntryValidationError):
    return JSONResponse(
        status_code=400,
        content={"status": "error", "message": str(exc)}
    )


app.include_router(auth.router)
app.include_router(records.router)
app.include_router(grid.router)
app.include_router(users.router)
