# -*- coding: utf-8 -*-
import typing as t

from rich.console import RenderableType

from orchestrator.blocks import calendar_block, todo_block

# View block registry mapping block names (as written in a note's code fence)
# to the functions that render them
VIEW_REGISTRY: dict[str, t.Callable[..., RenderableType]] = {
    "canvas-todo": todo_block,
    "canvas-calendar": calendar_block,
}


def list_view_blocks() -> list[dict[str, str]]:
    """Describe every registered view block."""
    return [
        {
            "name": name,
            "description": (render.__doc__ or "").strip().split("\n")[0],
        }
        for name, render in VIEW_REGISTRY.items()
    ]


def render_block(name: str, *args: t.Any, **kwargs: t.Any) -> RenderableType:
    """Render the block registered as ``name``.

    :raises KeyError: If no block has that name.
    """
    render = VIEW_REGISTRY.get(name)
    if render is None:
        raise KeyError(
            f"View block not found: {name}. "
            f"Available blocks: {list(VIEW_REGISTRY.keys())}"
        )
    return render(*args, **kwargs)
