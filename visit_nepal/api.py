"""FastAPI application exposing the Visit Nepal flows."""

from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, Optional, TypeVar

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import field_validator

from .config import configure_logging, get_cors_origins
from .districts import BUDGET_RANGES, DISTRICTS_BY_REGION, NEPAL_DISTRICTS, normalize_district
from .flows import (
    GREETING,
    FlowError,
    ai_itinerary_tool,
    explore_district,
    generate_district_image,
    generate_virtual_postcard,
    get_district_details,
    suggest_hidden_gems,
    tour_guide_chat,
)
from .models import (
    ChatRequest,
    ChatResponse,
    DistrictDetailsResponse,
    DistrictImageResponse,
    DistrictOverview,
    DistrictRequest,
    HiddenGemsRequest,
    HiddenGemsResponse,
    ItineraryRequest,
    ItineraryResponse,
    PostcardRequest,
    PostcardResponse,
    Schema,
)
from .utils import blank_to_none


T = TypeVar("T")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="Visit Nepal", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HiddenGemsPayload(Schema):
    user_preferences: Optional[str] = None

    @field_validator("user_preferences", mode="before")
    @classmethod
    def _blank(cls, value):
        if isinstance(value, str):
            return blank_to_none(value)
        return value


def _district(name: str) -> str:
    try:
        return normalize_district(name)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _run(flow: Callable[..., T], request: Any) -> T:
    try:
        return flow(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FlowError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/districts")
def list_districts() -> Dict[str, Any]:
    return {"districts": NEPAL_DISTRICTS, "regions": DISTRICTS_BY_REGION}


@app.get("/budget-ranges")
def list_budget_ranges() -> Dict[str, str]:
    return BUDGET_RANGES


@app.post("/itinerary", response_model=ItineraryResponse, response_model_exclude_none=True)
def create_itinerary(payload: ItineraryRequest) -> ItineraryResponse:
    return _run(ai_itinerary_tool, payload)


@app.get("/districts/{name}", response_model=DistrictOverview, response_model_exclude_none=True)
def district_overview(name: str) -> DistrictOverview:
    return _run(explore_district, DistrictRequest(district_name=_district(name)))


@app.get("/districts/{name}/details", response_model=DistrictDetailsResponse)
def district_details(name: str) -> DistrictDetailsResponse:
    return _run(get_district_details, DistrictRequest(district_name=_district(name)))


@app.get("/districts/{name}/image", response_model=DistrictImageResponse)
def district_image(name: str) -> DistrictImageResponse:
    return _run(generate_district_image, DistrictRequest(district_name=_district(name)))


@app.post("/districts/{name}/hidden-gems", response_model=HiddenGemsResponse)
def district_hidden_gems(name: str, payload: Optional[HiddenGemsPayload] = None) -> HiddenGemsResponse:
    request = HiddenGemsRequest(
        district_name=_district(name),
        user_preferences=payload.user_preferences if payload else None,
    )
    return _run(suggest_hidden_gems, request)


@app.get("/chat/greeting", response_model=ChatResponse)
def chat_greeting() -> ChatResponse:
    return ChatResponse(response=GREETING)


@app.post("/chat", response_model=ChatResponse)
def chat(payload: ChatRequest) -> ChatResponse:
    return _run(tour_guide_chat, payload)


@app.post("/postcards", response_model=PostcardResponse)
def create_postcard(payload: PostcardRequest) -> PostcardResponse:
    return _run(generate_virtual_postcard, payload)
