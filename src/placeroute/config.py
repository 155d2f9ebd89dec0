"""Router configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RouterConfig(BaseModel):
    """Settings shared by :class:`~placeroute.routing.Router` and the builder.

    Parameters
    ----------
    append_slash:
        When ``True``, templates registered through the builder always end
        with ``/``; otherwise a trailing slash is stripped (except for ``/``).
    max_path_length:
        Paths longer than this never match.  ``None`` disables the cap.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    append_slash: bool = False
    max_path_length: int | None = Field(default=2048, gt=0)
