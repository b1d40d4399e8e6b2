"""utility module helping the cafetools output organization

This module centralizes the logic that determines where exported tables,
plots, and rewritten files should be stored. It enforces a consistent
directory layout such as:

    cafetools_outputs/<workflow>/<filename>

unless the user provides an explicit absolute or directory-containing path.

"""

from pathlib import Path

DEFAULT_OUTROOT = Path("cafetools_outputs")

def resolve_output_path(user_value: str, workflow: str) -> Path:
    """
    Put outputs under cafetools_outputs/<workflow> by default,
    unless the user explicitly gave a directory.
    """
    p = Path(user_value)

    # If user gave an absolute path or a relative path with dirs,
    # respect it exactly.
    if p.is_absolute() or p.parent != Path("."):
        p.parent.mkdir(parents=True, exist_ok=True)
        return p

    # Otherwise, user gave just a bare filename -> use default tree
    outdir = DEFAULT_OUTROOT / workflow
    outdir.mkdir(parents=True, exist_ok=True)
    return outdir / p.name
