"""
Spectator connections and song dispatch.
"""

from .controller import DispatchController
from .models import PlayCommand
from .registry import ConnectionRegistry, is_channel_open

__all__ = ["ConnectionRegistry", "DispatchController", "PlayCommand", "is_channel_open"]
