from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from currency_converter.models.screen import Command, ScreenStateOut, ShareOut
from currency_converter.services.screen import ConverterScreen

"""Screen router: read the converter screen and post user commands to it.

Endpoints:
    - GET /screen            -> current screen state
    - POST /screen/commands  -> dispatch one command, wait for any fetch it
                                started, return the resulting state
    - GET /screen/share      -> share title + text for the current conversion
"""

router = APIRouter(prefix="/screen", tags=["screen"])


def get_screen(request: Request) -> ConverterScreen:
    return request.app.state.screen


@router.get("", response_model=ScreenStateOut, summary="Current screen state")
async def read_screen(screen: ConverterScreen = Depends(get_screen)):
    screen.pump()
    return screen.state()


@router.post("/commands", response_model=ScreenStateOut, summary="Dispatch a screen command")
async def post_command(payload: Command, screen: ConverterScreen = Depends(get_screen)):
    screen.dispatch(payload)
    await screen.settle()
    return screen.state()


@router.get("/share", response_model=ShareOut, summary="Share text for the displayed conversion")
async def share(screen: ConverterScreen = Depends(get_screen)):
    return screen.share()
