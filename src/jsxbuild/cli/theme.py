# /jsxbuild/cli/theme.py
# Colour themes for the build output (calm for normal runs, plain for dumb terminals).

from rich.theme import Theme


def get_theme(mode: str) -> Theme:
    """
    Returns a Rich Theme object for the given output mode.
    """
    if mode == "plain":
        return Theme({
            "info": "none",
            "success": "none",
            "warning": "none",
            "error": "none",
            "step": "none",
            "code": "none",
        })
    return Theme({
        "info": "bright_blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "step": "cyan",
        "code": "grey82",
    })
