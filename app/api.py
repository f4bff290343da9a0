# app/api.py
"""FastAPI service around a single in-memory retrieval engine."""
import logging
import os
import threading
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from irengine.config import config_from_env, make_config
from irengine.engine import Engine
from irengine.errors import (
    EmptyVectorNormalization, InvalidConfiguration,
    QueryBeforeBuild, RebuildUnavailable,
)
from irengine.serialize import EngineDump

from .schemas import (
    AddDocumentsRequest, AddDocumentsResponse,
    BuildResponse, HealthResponse,
    QueryRequest, QueryResponse, ResetRequest, SearchResultOut,
)

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


app = FastAPI(title="IR Engine API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

engine = Engine(config_from_env())
# held for a whole request, so /reset never swaps the engine under another handler
_engine_lock = threading.RLock()


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, InvalidConfiguration):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, EmptyVectorNormalization):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))

@app.get("/")
def root():
    return {"ok": True}

@app.get("/healthz", response_model=HealthResponse)
def healthz() -> HealthResponse:
    with _engine_lock:
        return HealthResponse(status="ok", documents=len(engine), built=engine.is_built)

@app.post("/documents", response_model=AddDocumentsResponse)
def add_documents(request: AddDocumentsRequest) -> AddDocumentsResponse:
    with _engine_lock:
        for doc in request.documents:
            engine.add_document(doc.id, doc.body)
        return AddDocumentsResponse(added=len(request.documents), total=len(engine))

@app.post("/build", response_model=BuildResponse)
def build() -> BuildResponse:
    with _engine_lock:
        try:
            engine.build()
        except (EmptyVectorNormalization, RebuildUnavailable) as e:
            raise _http_error(e)
        return BuildResponse(documents=len(engine), vocabulary=len(engine.vocabulary))

@app.post("/query", response_model=QueryResponse)
def query(request: QueryRequest) -> QueryResponse:
    with _engine_lock:
        try:
            results = engine.query(request.text, top_k=request.top_k)
        except QueryBeforeBuild as e:
            raise _http_error(e)
    return QueryResponse(results=[SearchResultOut(id=r.id, score=r.score) for r in results])

@app.get("/model")
def get_model(include_tf: bool = False):
    with _engine_lock:
        try:
            return engine.serialize(include_tf=include_tf)
        except QueryBeforeBuild as e:
            raise _http_error(e)

@app.post("/model", response_model=HealthResponse)
def put_model(dump: EngineDump) -> HealthResponse:
    with _engine_lock:
        engine.load(dump)
        logger.info("loaded model with %d documents", len(engine))
        return HealthResponse(status="ok", documents=len(engine), built=engine.is_built)

@app.post("/reset")
def reset(request: Optional[ResetRequest] = None):
    global engine
    with _engine_lock:
        if request is None or (request.stop_words is None and request.char_filter is None):
            engine.reset()
            return {"ok": True}
        options = request.model_dump(exclude_none=True)
        try:
            config = make_config(**options)
        except InvalidConfiguration as e:
            raise _http_error(e)
        engine = Engine(config)
        return {"ok": True, "stop_words": config.stop_words}
