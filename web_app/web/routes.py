"""Redirect route implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from shortener.common.headers import get_client_address, get_click_source

router = APIRouter()


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL.

    Unknown codes answer 404 and expired ones 410; both are raised by the
    service and rendered by the app's error handler.
    """
    service = request.app.state.service
    headers = dict(request.headers)

    original_url = await service.get_original_url(
        short_code,
        source=get_click_source(headers),
        client_address=get_client_address(
            headers,
            peer_host=request.client.host if request.client else None,
        ),
    )

    # 302 keeps every visit coming back through the service so clicks are counted
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
