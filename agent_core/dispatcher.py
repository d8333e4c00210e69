"""
agent_core/dispatcher.py
------------------------
Request-level wrapper around the recommender: validates the input, logs the
query and the response, and turns malformed sentences into an error payload.
"""

import time

from agent_core.errors import MalformedSentence
from agent_core.logger import log_event, log_perf
from recommender.recommend import ProductRecommender, default_recommender


def handle_query(text=None, engine: ProductRecommender | None = None, top_k: int | None = None):
    """
    High-level interface for API and CLI.
    Returns {"type": "recommend", "items": [...]} or {"type": "error", "error": ...}.
    Logs go to the engine's configured directory when an engine is given.
    """
    log_dir = engine.config.log_dir if engine is not None else None
    log_event("query_received", {"text": text}, log_dir=log_dir)
    start = time.time()

    if not text or not text.strip():
        response = {"type": "error", "error": "No input provided."}
    else:
        engine = engine or default_recommender()
        try:
            items = engine.recommend(text, top_k=top_k)
            response = {"type": "recommend", "items": items}
        except MalformedSentence as e:
            response = {"type": "error", "error": str(e)}

    log_dir = engine.config.log_dir if engine is not None else None
    log_perf("dispatcher", response["type"], round(time.time() - start, 4), log_dir=log_dir)
    log_event("response_generated", {"type": response["type"], "items": len(response.get("items", []))}, log_dir=log_dir)
    return response
