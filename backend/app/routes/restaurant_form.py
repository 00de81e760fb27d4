"""
Restaurants API — HTML Form Route Handlers
===========================================

What:  Server-rendered form for browsing restaurants by page and borough.
How:   GET renders the form; POST validates the form body, lists one page
       through RestaurantService, and renders the result with Jinja2.

Unlike the JSON endpoints, errors here are rendered as an HTML page with
the same status code the JSON API would use (400 / 500).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.dependencies import get_restaurant_service, parse_list_query
from app.exceptions import DatabaseError, ValidationError
from app.services.restaurant_service import RestaurantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Restaurant Form"])


def _get_templates(request: Request) -> Jinja2Templates:
    tpl = getattr(request.app.state, "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates are not configured")


@router.get("/restaurantForm", response_class=HTMLResponse, summary="Restaurant search form")
async def restaurant_form(request: Request):
    return _get_templates(request).TemplateResponse(request, "form.html", {})


@router.post(
    "/restaurantForm",
    response_class=HTMLResponse,
    summary="Render one page of restaurants from the form input",
)
async def submit_restaurant_form(
    request: Request,
    page: Optional[str] = Form(default=None),
    per_page: Optional[str] = Form(default=None, alias="perPage"),
    borough: Optional[str] = Form(default=None),
    service: RestaurantService = Depends(get_restaurant_service),
):
    templates = _get_templates(request)

    try:
        query = parse_list_query(page, per_page, borough)
    except ValidationError as exc:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": "Validation error", "errors": exc.errors},
            status_code=400,
        )

    try:
        restaurants = await service.list_restaurants(query)
    except DatabaseError as exc:
        logger.error("Error getting restaurants for form: %s", exc.message)
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": "Database error", "reason": exc.message},
            status_code=500,
        )

    return templates.TemplateResponse(
        request,
        "output.html",
        {
            "page": query.page,
            "per_page": query.per_page,
            "borough": query.borough,
            "restaurants": [r.model_dump(by_alias=True, exclude_unset=True) for r in restaurants],
        },
    )
