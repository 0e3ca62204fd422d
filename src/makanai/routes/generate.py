"""The single proxy route: POST /generate."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from makanai.proxy.dispatch import ProviderDispatcher

router = APIRouter(tags=["generate"])


@router.post("/generate")
async def generate(request: Request) -> JSONResponse:
    dispatcher: ProviderDispatcher = request.app.state.dispatcher
    result = await dispatcher.dispatch(await request.body())
    return JSONResponse(status_code=result.status_code, content=result.body)
