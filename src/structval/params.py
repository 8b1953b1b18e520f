"""Conversion parameters."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_ENV_PREFIX = "STRUCTVAL_"
DEFAULT_MAX_DEPTH_CONTAINERS = 32


@dataclass(frozen=True)
class Params:
    """Limits applied when the codec builds containers.

    Attributes:
        max_depth_containers: Maximum depth of Array, Dictionary and Set
            values. A container of depth d holds at most 2**d entries.

    """

    max_depth_containers: int = DEFAULT_MAX_DEPTH_CONTAINERS

    def __post_init__(self) -> None:
        depth = self.max_depth_containers
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
            msg = f"max_depth_containers must be a non-negative int, got {depth!r}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Params:
        """Build parameters from ``STRUCTVAL_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set to something other than an int.

        """
        env = os.environ if environ is None else environ
        raw = env.get(f"{_ENV_PREFIX}MAX_DEPTH_CONTAINERS")
        if raw is None:
            return cls()
        try:
            depth = int(raw)
        except ValueError:
            msg = f"{_ENV_PREFIX}MAX_DEPTH_CONTAINERS must be an int, got {raw!r}"
            raise ValueError(msg) from None
        return cls(max_depth_containers=depth)
