"""Remote object naming."""

from collections.abc import Callable
from datetime import datetime

from blob_uploader.exceptions import NameResolutionExhaustedError
from blob_uploader.interfaces.object_store import ExistsProbe

from .models import utc_now

FIRST_SUFFIX = 2
SUFFIX_LIMIT = 100
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def split_path(path: str) -> tuple[str, str, str]:
    """
    Splits an object path into directory, base name and extension.

    The directory keeps its trailing slash and the extension keeps its dot,
    so ``directory + base + extension == path``. A name without a dot has an
    empty extension.
    """
    directory, slash, file_name = path.rpartition("/")
    base, dot, ext = file_name.rpartition(".")
    if not dot:
        return directory + slash, file_name, ""
    return directory + slash, base, dot + ext


def with_suffix(path: str, suffix: str) -> str:
    """Inserts ``suffix`` between the base name and the extension."""
    directory, base, extension = split_path(path)
    return f"{directory}{base}{suffix}{extension}"


class PathResolver:
    """Derives collision-free object paths under a year/month prefix."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def desired_path(self, file_name: str) -> str:
        """Returns ``{year}/{month:02}/{file_name}`` for the current date."""
        now = self._clock()
        return f"{now.year}/{now.month:02d}/{file_name}"

    async def resolve(self, probe: ExistsProbe, desired_path: str) -> str:
        """
        Returns the first free path among the desired one and its suffixed variants.

        Suffixes run ``_02`` through ``_99``; only the last path segment is
        changed.

        Raises:
            NameResolutionExhaustedError: If every candidate is taken.
            ContainerAccessError: If the probe fails.
        """
        if not await probe.exists(desired_path):
            return desired_path

        for counter in range(FIRST_SUFFIX, SUFFIX_LIMIT):
            candidate = with_suffix(desired_path, f"_{counter:02d}")
            if not await probe.exists(candidate):
                return candidate

        raise NameResolutionExhaustedError(desired_path, SUFFIX_LIMIT - FIRST_SUFFIX + 1)

    def thumbnail_path(self, primary_path: str, width: int) -> str:
        """Names a thumbnail next to its primary object, e.g. ``a_20240501093000_320.png``."""
        return with_suffix(
            primary_path, f"_{self._clock().strftime(TIMESTAMP_FORMAT)}_{width}"
        )
