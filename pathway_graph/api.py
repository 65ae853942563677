from __future__ import annotations
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .errors import PathwayFetchError, StaleBuildError
from .pipeline import GraphSession

# One session per process: the frequency index accumulates across requests
SESSION = GraphSession()

app = FastAPI(title="Pathway Graph API", version="0.1.0")

default_origins = {
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}
extra = os.getenv("FRONTEND_ORIGIN")
if extra:
    default_origins.add(extra)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(default_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/pathway/{pathway_id}/graph")
async def pathway_graph(pathway_id: str):
    try:
        graph = await SESSION.build(pathway_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StaleBuildError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PathwayFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return graph.as_dict()


@app.get("/api/frequency")
def frequency():
    return {
        "pathways": sorted(SESSION.store.loaded_pathways),
        "rows": SESSION.store.as_table(),
    }


@app.post("/api/frequency/reset")
def frequency_reset():
    SESSION.reset()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pathway_graph.api:app", host="0.0.0.0", port=8000, reload=True)
