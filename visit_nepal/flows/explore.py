"""District overview: details first, then a best-effort image."""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

from ..districts import region_for_district
from ..models import DistrictOverview, DistrictRequest
from .base import FlowError
from .district_details import get_district_details
from .district_image import generate_district_image


logger = logging.getLogger(__name__)


def explore_district(request: Union[DistrictRequest, Dict[str, Any]]) -> DistrictOverview:
    """Fetch details for a district and try to illustrate it.

    Detail failures propagate; an image failure only leaves ``image_url`` unset.
    """

    req = request if isinstance(request, DistrictRequest) else DistrictRequest.model_validate(request)
    details = get_district_details(req)
    image_url = None
    try:
        image_url = generate_district_image(req).image_url
    except FlowError as exc:
        logger.warning("Showing %s without an image: %s", req.district_name, exc)
    return DistrictOverview(
        details=details,
        region=region_for_district(req.district_name),
        image_url=image_url,
    )
