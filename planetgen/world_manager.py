"""Holds the current world and handles creating, saving and loading it."""

from __future__ import annotations

import logging
import os
import random
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Callable, Optional, Union

from planetgen.generation import generate_world
from planetgen.saving import SaveFormatError, deserialize_world, serialize_world
from planetgen.world import World

ProgressCallback = Callable[[float, str], None]
PathLike = Union[str, "os.PathLike[str]"]

_log = logging.getLogger(__name__)
_EXECUTOR = ThreadPoolExecutor(thread_name_prefix="world-generation")


class LoadError(Exception):
    """Raised when a saved world cannot be loaded."""

    class Kind(Enum):
        MISSING_SAVE = "missing_save"
        INVALID_SAVE = "invalid_save"

    def __init__(self, kind: LoadError.Kind, error: Exception) -> None:
        self.kind = kind
        self.error = error
        if kind is LoadError.Kind.MISSING_SAVE:
            message = "No save found at given path"
        else:
            message = f"Loaded file is not a valid save - {error}"
        super().__init__(message)


class SaveError(Exception):
    """Raised when the current world cannot be saved."""

    class Kind(Enum):
        MISSING_WORLD = "missing_world"
        SERIALIZATION_ERROR = "serialization_error"
        FAILED_TO_WRITE = "failed_to_write"

    _MESSAGES = {
        Kind.MISSING_WORLD: "No world to save found.",
        Kind.SERIALIZATION_ERROR: "Failed to serialize world.",
        Kind.FAILED_TO_WRITE: "Failed to write save file.",
    }

    def __init__(self, kind: SaveError.Kind, error: Optional[Exception] = None) -> None:
        self.kind = kind
        self.error = error
        super().__init__(self._MESSAGES[kind])


class WorldManager:
    """Owns the world currently in play."""

    NEW_WORLD_HEIGHT = 200
    NEW_WORLD_WIDTH = 400

    def __init__(
        self,
        world: Optional[World] = None,
        *,
        new_world_width: int = NEW_WORLD_WIDTH,
        new_world_height: int = NEW_WORLD_HEIGHT,
    ) -> None:
        self.world = world
        self.new_world_width = new_world_width
        self.new_world_height = new_world_height

    def save_world(self, path: PathLike) -> None:
        """Write the current world to ``path``.

        Raises SaveError if there is no world, it cannot be encoded or written.
        """
        if self.world is None:
            _log.warning("No world to save")
            raise SaveError(SaveError.Kind.MISSING_WORLD)
        try:
            data = serialize_world(self.world)
        except SaveFormatError as err:
            raise SaveError(SaveError.Kind.SERIALIZATION_ERROR, err) from err
        try:
            with open(path, "wb") as file:
                file.write(data)
        except OSError as err:
            raise SaveError(SaveError.Kind.FAILED_TO_WRITE, err) from err

    def load_world(self, path: PathLike) -> None:
        """Replace the current world with the one saved at ``path``.

        Raises LoadError if the file cannot be read or is not a valid save.
        """
        try:
            with open(path, "rb") as file:
                data = file.read()
        except OSError as err:
            raise LoadError(LoadError.Kind.MISSING_SAVE, err) from err
        try:
            self.world = deserialize_world(data)
        except SaveFormatError as err:
            raise LoadError(LoadError.Kind.INVALID_SAVE, err) from err

    def new_world_async(
        self,
        seed: Optional[int] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> "Future[World]":
        """Generate a new world in the background.

        The future yields the world, or raises WorldGenError. A random seed is
        used when ``seed`` is None. The world does not replace the current one.
        """
        width = self.new_world_width
        height = self.new_world_height

        def report(fraction: float, text: str) -> None:
            if progress is not None:
                progress(fraction, text)

        def build() -> World:
            world_seed = random.getrandbits(32) if seed is None else seed
            world = World(width, height, world_seed)
            report(0.0, "Generating new world...")
            try:
                generate_world(world, progress)
            finally:
                report(1.0, "Done generating world!")
            return world

        return _EXECUTOR.submit(build)