import uuid
import posixpath
from typing import Callable


class FilePathGenerator:
    """
    Generates unique relative directories for attachment files.

    Uses a git-like fan-out of a random UUID: ab/cd/ef/rest
    so that no directory grows too large.
    """

    def __init__(self, uuid_provider: Callable[[], str] = lambda: uuid.uuid4().hex):
        self.uuid_provider = uuid_provider

    def generate(self) -> str:
        value = self.uuid_provider()
        return posixpath.join(value[:2], value[2:4], value[4:6], value[6:])
