from __future__ import annotations

from typing import Callable, Literal


BlockSelector = int | str
_EARLIEST: Literal["earliest"] = "earliest"
_LATEST: Literal["latest"] = "latest"


def resolve_block_bounds(
    *,
    from_block: BlockSelector,
    to_block: BlockSelector,
    latest_block: Callable[[], int],
) -> tuple[int, int]:
    """
    Resolve from_block / to_block into concrete block numbers.

    - int or digit string  -> used as-is,
    - from_block "earliest" / "" -> 0 (genesis),
    - to_block "latest" / ""     -> latest_block() (chain head, queried lazily).
    """
    if isinstance(from_block, int):
        fb = from_block
    else:
        fb_str = from_block.strip().lower()
        if fb_str in ("", _EARLIEST):
            fb = 0
        elif fb_str.isdigit():
            fb = int(fb_str)
        else:
            raise ValueError(f"Unsupported from_block value: {from_block!r}")

    if isinstance(to_block, int):
        tb = to_block
    else:
        tb_str = to_block.strip().lower()
        if tb_str in ("", _LATEST):
            tb = latest_block()
        elif tb_str.isdigit():
            tb = int(tb_str)
        else:
            raise ValueError(f"Unsupported to_block value: {to_block!r}")

    # Range checks are BlockRange.validate()'s job
    return fb, tb
