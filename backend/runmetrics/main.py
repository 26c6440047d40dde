from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from runmetrics.api.load import router as load_router
from runmetrics.api.records import router as records_router
from runmetrics.api.runs import router as runs_router
from runmetrics.core.logging import setup_logging


setup_logging()

app = FastAPI(title="runmetrics")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(runs_router)
app.include_router(records_router)
app.include_router(load_router)


@app.get("/")
def root():
    return {"message": "Run metrics engine is running"}
