from pydantic import BaseModel, ConfigDict, Field, StrictInt
from typing import Optional


class RegisterRequest(BaseModel):
    email: str
    password: str
    username: str


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterResponse(BaseModel):
    token: str
    username: str
    spectator_url: str = Field(alias="spectatorUrl")

    model_config = ConfigDict(populate_by_name=True)


class LoginResponse(BaseModel):
    token: str
    username: str
    default_timestamp: int = Field(alias="defaultTimestamp")
    spectator_url: str = Field(alias="spectatorUrl")

    model_config = ConfigDict(populate_by_name=True)


class ProfileResponse(BaseModel):
    id: int
    email: str
    username: str
    default_timestamp: int
    spectator_url: str = Field(alias="spectatorUrl")

    model_config = ConfigDict(populate_by_name=True)


class SettingsRequest(BaseModel):
    default_timestamp: Optional[StrictInt] = Field(default=None, alias="defaultTimestamp")

    model_config = ConfigDict(populate_by_name=True)


class SuccessResponse(BaseModel):
    success: bool = True


class StatusResponse(BaseModel):
    connected: bool
    username: str


class SendRequest(BaseModel):
    song_query: str = Field(alias="songQuery")
    service: Optional[str] = None  # Falls back to the spectator's stored choice

    model_config = ConfigDict(populate_by_name=True)


class TrackResponse(BaseModel):
    id: str
    name: str
    artist: str


class SendResponse(BaseModel):
    success: bool = True
    track: TrackResponse


class SpectatorServiceRequest(BaseModel):
    service: str


class SpectatorInfoResponse(BaseModel):
    exists: bool = True
    service: Optional[str] = None
