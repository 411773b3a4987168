"""
trussdraw FastAPI backend

Thin HTTP wrapper around the vectorization pipeline for drawing front-ends.
Every request is vectorized from scratch; the service keeps no state.

Endpoints:
    GET  /api/health         Liveness probe
    POST /api/vectorize      Strokes + options → truss graph + validation
    POST /api/export/svg     Strokes + options → SVG drawing of the truss
    POST /api/export/json    Strokes + options → export JSON ({id, from, to} edges)
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from trussdraw.config import load_config
from trussdraw.export.json_export import graph_to_export_dict
from trussdraw.export.svg_export import graph_to_svg
from trussdraw.models import VectorizeRequest
from trussdraw.pipeline import vectorize
from trussdraw.tracer import get_tracer
from trussdraw.validate.rules import run_validation

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(title="trussdraw", version="1.0.0")

# CORS: allow local dev front-ends
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

CONFIG = load_config()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _vectorize_request(request: VectorizeRequest):
    """Run the pipeline for one request; bad options become a 400."""
    strokes = [stroke.as_tuples() for stroke in request.strokes]
    try:
        return vectorize(
            strokes,
            snap_radius=request.snap_radius,
            simplify_epsilon=request.simplify_epsilon,
            config=CONFIG.vectorize,
        )
    except ValueError as exc:
        get_tracer().event(f"Rejected request: {exc}", level="WARN")
        raise HTTPException(status_code=400, detail=str(exc))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/vectorize")
async def vectorize_strokes(request: VectorizeRequest):
    """Vectorize strokes and return the graph with its validation report."""
    graph = _vectorize_request(request)
    report = run_validation(graph, CONFIG.validation)
    return {
        "graph": graph.model_dump(mode="json"),
        "validation": report.model_dump(mode="json"),
    }


@app.post("/api/export/svg")
async def export_svg(request: VectorizeRequest):
    """Vectorize strokes and return the truss as an SVG document."""
    graph = _vectorize_request(request)
    dwg = graph_to_svg(graph, request.width, request.height, CONFIG.svg)
    return Response(content=dwg.tostring(), media_type="image/svg+xml")


@app.post("/api/export/json")
async def export_json(request: VectorizeRequest):
    """Vectorize strokes and return the export JSON."""
    graph = _vectorize_request(request)
    return graph_to_export_dict(graph, CONFIG.json_export.precision)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
