# app/schemas.py
from typing import List, Optional
from pydantic import BaseModel, Field

class DocumentIn(BaseModel):
    id: str
    body: str = ""

class AddDocumentsRequest(BaseModel):
    documents: List[DocumentIn] = Field(..., description="Documents to append to the corpus")

class AddDocumentsResponse(BaseModel):
    added: int
    total: int

class BuildResponse(BaseModel):
    documents: int
    vocabulary: int

class QueryRequest(BaseModel):
    text: str
    top_k: Optional[int] = Field(None, ge=0, description="Keep only the best k results")

class SearchResultOut(BaseModel):
    id: str
    score: float

class QueryResponse(BaseModel):
    results: List[SearchResultOut]

class HealthResponse(BaseModel):
    status: str
    documents: int
    built: bool

class ResetRequest(BaseModel):
    # leave both unset to keep the current configuration
    stop_words: Optional[str] = None
    char_filter: Optional[str] = None
