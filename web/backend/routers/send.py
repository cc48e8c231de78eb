"""Song dispatch endpoint."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from songlink.domain.accounts import Account
from songlink.domain.dispatch import DispatchController
from songlink.domain.exceptions import (
    ProviderUnconfiguredError,
    SpectatorNotConnectedError,
    TrackNotFoundError,
    ValidationError,
)

from ..deps import get_current_account, get_dispatcher
from ..schemas import SendRequest, SendResponse, TrackResponse

router = APIRouter()


@router.post("/send", response_model=SendResponse)
async def send_song(
    request: SendRequest,
    account: Account = Depends(get_current_account),
    dispatcher: DispatchController = Depends(get_dispatcher),
):
    """Resolve a song and push it to the caller's spectator page."""
    try:
        track = await dispatcher.dispatch(account, request.song_query, request.service)
    except (SpectatorNotConnectedError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TrackNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProviderUnconfiguredError as e:
        logger.error(f"Send failed for {account.username}: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    return SendResponse(track=TrackResponse(**track.to_dict()))
