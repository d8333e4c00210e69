"""
api/main.py
-----------
Gift Recommender — REST API Layer
---------------------------------
Thin HTTP adapter over agent_core.dispatcher.handle_query. Resources are
loaded once per process; every request trains its own models.
"""

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
import traceback

from agent_core.config import RecommenderConfig, get_config
from agent_core.dispatcher import handle_query
from recommender.recommend import ProductRecommender, default_recommender

API_KEY_HEADER = "MY-API-KEY"

# ─────────────────────────────────────────────────────────────────────────────
# ⚙️ 1. Dependencies
# ─────────────────────────────────────────────────────────────────────────────

def get_engine() -> ProductRecommender:
    return default_recommender()

def require_api_key(
    api_key: Optional[str] = Header(None, alias=API_KEY_HEADER),
    config: RecommenderConfig = Depends(get_config),
) -> None:
    """The header must match the configured key; with no key configured every request is refused."""
    if config.api_key is None:
        raise HTTPException(status_code=401, detail="API Key is not configured on the server.")
    if api_key is None:
        raise HTTPException(status_code=401, detail="API Key was not provided.")
    if api_key != config.api_key:
        raise HTTPException(status_code=401, detail="Invalid API Key.")

# ─────────────────────────────────────────────────────────────────────────────
# 🧠 2. App Instance
# ─────────────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Gift Recommender",
    version="1.0.0",
    description="Sentence → categories → products.",
)

# ─────────────────────────────────────────────────────────────────────────────
# 📥 3. Request / Response Schemas
# ─────────────────────────────────────────────────────────────────────────────

class RecommendRequest(BaseModel):
    sentence: str = Field(..., description="Free-text gift request")
    top_k: Optional[int] = Field(None, ge=0, description="Items per category")

class RecommendResponse(BaseModel):
    items: List[Dict[str, Any]]
    status: str = "ok"

# ─────────────────────────────────────────────────────────────────────────────
# 🔍 4. Main Endpoint: /recommend
# ─────────────────────────────────────────────────────────────────────────────

@app.post("/recommend", response_model=RecommendResponse, dependencies=[Depends(require_api_key)])
def recommend_endpoint(req: RecommendRequest, engine: ProductRecommender = Depends(get_engine)):
    try:
        result = handle_query(text=req.sentence, engine=engine, top_k=req.top_k)
    except Exception as e:
        print("⚠️ Internal Error:", traceback.format_exc())
        raise HTTPException(status_code=500, detail=f"Internal Server Error: {str(e)}")

    if result["type"] == "error":
        raise HTTPException(status_code=400, detail=result["error"])
    return RecommendResponse(items=result["items"])

# ─────────────────────────────────────────────────────────────────────────────
# 🩺 5. Health
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/health")
def health_check(engine: ProductRecommender = Depends(get_engine)):
    return {
        "status": "healthy",
        "words": len(engine.vocabulary),
        "products": len(engine.dataset),
        "categories": len(engine.dataset.categories()),
    }
