"""FastAPI backend serving chart data."""

from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from family_charts.config import settings
from family_charts.dataset import load_dataset
from family_charts.exceptions import DatasetError, PersonNotFoundError
from family_charts.graph import FamilyCharts
from family_charts.metrics import REGISTRY

app = FastAPI(title="Family Charts API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

MAX_GENERATIONS = settings.charts.max_generations


class MatrixRequest(BaseModel):
    person_ids: Optional[List[str]] = None
    max_people: int = Field(
        default=settings.charts.matrix_max_people,
        ge=1,
        le=settings.charts.matrix_people_limit,
    )


def get_charts() -> FamilyCharts:
    """Load the full dataset for this request."""
    dataset = load_dataset(settings.data.dataset_path)
    return FamilyCharts(dataset.persons, dataset.relationships)


def generations_query(default: int):
    return Query(default, ge=1, le=MAX_GENERATIONS)


@app.exception_handler(PersonNotFoundError)
async def person_not_found(request: Request, exc: PersonNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DatasetError)
async def dataset_unavailable(request: Request, exc: DatasetError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    return Response(generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


@app.get("/api/charts/ancestor")
def ancestor_chart(
    person_id: str,
    generations: int = generations_query(settings.charts.ancestor_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.ancestor_chart(person_id, generations).to_dict()


@app.get("/api/charts/descendant")
def descendant_chart(
    person_id: str,
    generations: int = generations_query(settings.charts.descendant_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.descendant_chart(person_id, generations).to_dict()


@app.get("/api/charts/hourglass")
def hourglass_chart(
    person_id: str,
    ancestor_generations: int = generations_query(settings.charts.hourglass_generations),
    descendant_generations: int = generations_query(settings.charts.hourglass_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.hourglass_chart(person_id, ancestor_generations, descendant_generations).to_dict()


@app.get("/api/charts/tree")
def tree_chart(
    person_id: str,
    ancestor_generations: int = generations_query(settings.charts.hourglass_generations),
    descendant_generations: int = generations_query(settings.charts.hourglass_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.tree_chart(person_id, ancestor_generations, descendant_generations).to_dict()


@app.get("/api/charts/fan")
def fan_chart(
    person_id: str,
    generations: int = generations_query(settings.charts.fan_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.fan_chart(person_id, generations).to_dict()


@app.get("/api/charts/bowtie")
def bowtie_chart(
    person_id: str,
    generations: int = generations_query(settings.charts.bowtie_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.bowtie_chart(person_id, generations).to_dict()


@app.get("/api/charts/compact")
def compact_tree(
    person_id: str,
    generations: int = generations_query(settings.charts.compact_generations),
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.compact_tree(person_id, generations).to_dict()


@app.get("/api/charts/timeline")
def timeline(
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    sort_by: Literal["birth", "death", "name"] = "birth",
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.timeline(start_year, end_year, sort_by).to_dict()


@app.post("/api/charts/matrix")
def relationship_matrix(req: MatrixRequest, charts: FamilyCharts = Depends(get_charts)):
    return charts.relationship_matrix(req.person_ids, req.max_people).to_dict()


@app.get("/api/charts/statistics")
def statistics(
    include_deceased: bool = True,
    charts: FamilyCharts = Depends(get_charts),
):
    return charts.statistics(include_deceased).to_dict()
