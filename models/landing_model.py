from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class LatLng(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class SelectedPlace(BaseModel):
    """Place picked on the map or via search; both fields always set together."""
    coordinates: LatLng
    address: str


class Suggestion(BaseModel):
    place_id: str = ""
    description: str = Field(..., min_length=1)


class MapViewport(BaseModel):
    center: LatLng
    zoom: int


class LeadDraft(BaseModel):
    place: str = ""
    email: str = ""
    categories: Dict[str, bool]


class Lead(BaseModel):
    """Validated lead handed to intake."""
    place: str
    email: str
    categories: List[str]


class FieldErrors(BaseModel):
    place: Optional[str] = None
    email: Optional[str] = None
    categories: Optional[str] = None


class ScrollDirective(BaseModel):
    target: str  # CSS anchor or "top"
    behavior: str = "smooth"


class PlacePickerState(BaseModel):
    map_available: bool
    viewport: MapViewport
    query: str
    suggestions: List[Suggestion]
    selected_place: Optional[SelectedPlace] = None
    info_window_open: bool


class LeadFormState(BaseModel):
    draft: LeadDraft
    errors: FieldErrors
    can_submit: bool
    dialog_open: bool


class LandingSessionState(BaseModel):
    session_id: str
    picker: PlacePickerState
    form: LeadFormState
    scroll: Optional[ScrollDirective] = None


# ---- request bodies ----

class SearchRequest(BaseModel):
    query: str = ""


class FieldUpdateRequest(BaseModel):
    value: str = ""


class CategoriesUpdateRequest(BaseModel):
    value: bool
